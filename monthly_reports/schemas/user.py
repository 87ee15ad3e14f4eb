from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Literal, Optional
from datetime import datetime

Title = Literal["member", "supervisor"]


class _ProfileFields(BaseModel):
    # Wire names follow the frontend: educationalInstitution, phoneNumber, class
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)


class UserCreate(_ProfileFields):
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    title: Title = "member"
    educational_institution: str = Field(..., min_length=1)
    class_name: str = Field(..., min_length=1, alias="class")
    address: str = Field(..., min_length=1)
    phone_number: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.lower()


class UserLogin(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.lower()


class ProfileUpdate(_ProfileFields):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    title: Optional[Title] = None
    educational_institution: Optional[str] = Field(None, min_length=1)
    class_name: Optional[str] = Field(None, min_length=1, alias="class")
    address: Optional[str] = Field(None, min_length=1)
    phone_number: Optional[str] = Field(None, min_length=1)


class UserResponse(_ProfileFields):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    name: str
    email: EmailStr
    title: str
    educational_institution: str
    class_name: str = Field(..., alias="class")
    address: str
    phone_number: str
    created_at: Optional[datetime] = None


class Token(BaseModel):
    token: str
    user: UserResponse
