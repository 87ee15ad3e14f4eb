from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Any, Dict, List, Optional

from monthly_reports.services.questions import is_question_key


class DayResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    date: int
    month: Optional[str]
    year: Optional[str]
    namaz: str
    hifz: str
    nazra: str
    tafseer: str
    hadees: str
    literature: str
    darsi_kutab: str
    karkunaan_mulakaat: int
    amoomi_afraad_mulakaat: int
    khatoot_tadaad: int
    ghr_ka_kaam: str


class ReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    user_id: int
    month: str
    year: str
    days: List[DayResponse]
    qa: Dict[str, str] = Field(default_factory=dict)
    is_completed: bool
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("qa", mode="before")
    @classmethod
    def only_question_keys(cls, value):
        if not value:
            return {}
        return {k: v for k, v in value.items() if is_question_key(k)}


class ReportEnvelope(BaseModel):
    success: bool = True
    message: str
    report: ReportResponse


# Requests. Fields are optional on purpose: missing values are reported
# by the route with its own message and envelope.

class AddAnswersRequest(BaseModel):
    month: Optional[str] = None
    year: Optional[str] = None
    answers: Optional[Dict[str, Any]] = None

    @field_validator("year", mode="before")
    @classmethod
    def year_as_str(cls, value):
        # clients send the year as a number or a string
        return None if value is None else str(value)


class QAUpdateRequest(BaseModel):
    qa: Dict[str, Any] = Field(default_factory=dict)


class CompleteRequest(BaseModel):
    month: Optional[str] = None
    year: Optional[str] = None

    @field_validator("year", mode="before")
    @classmethod
    def year_as_str(cls, value):
        # clients send the year as a number or a string
        return None if value is None else str(value)
