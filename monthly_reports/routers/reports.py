# monthly_reports/routers/reports.py
import logging
import time
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from monthly_reports.core.auth import get_current_user
from monthly_reports.core.errors import ReportAPIError, StoreError, ValidationError
from monthly_reports.database import get_db
from monthly_reports.models.user import User
from monthly_reports.schemas.report import (
    AddAnswersRequest,
    CompleteRequest,
    QAUpdateRequest,
    ReportEnvelope,
    ReportResponse,
)
from monthly_reports.services.days import build_day_values, patch_day, upsert_day
from monthly_reports.services.questions import clean_appended_answers, clean_replaced_answers
from monthly_reports.services.report_lifecycle import (
    complete_report,
    current_period,
    ensure_report,
    get_report,
    list_reports,
)
from monthly_reports.services.report_pdf import render_report_pdf, render_test_pdf

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reports", tags=["reports"])


def _store_error(message: str = "Server error", envelope: bool = False) -> StoreError:
    logger.exception("Database error")
    return StoreError(message, envelope=envelope)


def _pdf_response(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get("/current", response_model=ReportResponse)
async def get_current_report(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    month, year = current_period()
    try:
        return await ensure_report(db, current_user.id, month, year, scaffold_days=True)
    except SQLAlchemyError:
        raise _store_error()


@router.get("/all", response_model=List[ReportResponse])
@router.get("", response_model=List[ReportResponse], include_in_schema=False)
@router.get("/", response_model=List[ReportResponse])
async def get_all_reports(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        return await list_reports(db, current_user.id)
    except SQLAlchemyError:
        raise _store_error()


@router.put("/daily/{date}", response_model=ReportResponse)
async def update_daily_activities(
    date: int,
    updates: Optional[Dict[str, Any]] = Body(None),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    # Always the current month's report
    month, year = current_period()
    try:
        report = await ensure_report(db, current_user.id, month, year, scaffold_days=True)
        patch_day(report, date, updates or {})
        await db.commit()
    except SQLAlchemyError:
        raise _store_error()

    logger.info("Updated daily report for date %s in %s %s", date, month, year)
    return report


@router.post("/add-answers", response_model=ReportEnvelope)
async def add_answers(
    payload: AddAnswersRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not payload.month or not payload.year or payload.answers is None:
        raise ValidationError("Month, year, and answers are required", envelope=True)

    try:
        report = await ensure_report(db, current_user.id, payload.month, payload.year)
        report.qa = clean_appended_answers(payload.answers)
        await db.commit()
    except SQLAlchemyError:
        raise _store_error("Error saving Q&A responses. Please try again.", envelope=True)

    logger.info("Saved %d Q&A answers for %s %s", len(report.qa), payload.month, payload.year)
    return ReportEnvelope(
        message="Q&A responses saved successfully",
        report=ReportResponse.model_validate(report),
    )


@router.put("/qa", response_model=ReportResponse)
async def update_qa(
    payload: QAUpdateRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    month, year = current_period()
    try:
        report = await ensure_report(db, current_user.id, month, year, scaffold_days=True)
        report.qa = clean_replaced_answers(payload.qa)
        await db.commit()
    except SQLAlchemyError:
        raise _store_error()

    logger.info("Updated Q&A for %s %s", month, year)
    return report


@router.put("/complete", response_model=ReportResponse)
async def mark_complete(
    payload: CompleteRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not payload.month or not payload.year:
        raise ValidationError("Month and year are required")
    try:
        return await complete_report(db, current_user.id, payload.month, payload.year)
    except SQLAlchemyError:
        raise _store_error()


@router.post("/add-day", response_model=ReportEnvelope)
async def add_day(
    payload: Optional[Dict[str, Any]] = Body(None),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    values = build_day_values(payload or {})
    month, year, date = values["month"], values["year"], values["date"]

    try:
        report = await ensure_report(db, current_user.id, month, year)
        _, appended = upsert_day(report, values)
        await db.commit()
    except SQLAlchemyError:
        raise _store_error("Error saving day to report. Please try again.", envelope=True)

    logger.info("%s day %s in %s %s", "Added" if appended else "Updated", date, month, year)
    return ReportEnvelope(
        message=f"Day {date} saved successfully to {month} {year} report",
        report=ReportResponse.model_validate(report),
    )


@router.get("/test-pdf")
async def test_pdf(current_user: User = Depends(get_current_user)):
    try:
        content = render_test_pdf(current_user)
    except Exception:
        logger.exception("Error generating test PDF")
        raise ReportAPIError("Error generating test PDF")
    return _pdf_response(content, "test-report.pdf")


@router.get("/pdf/{month}/{year}")
async def download_pdf(
    month: str,
    year: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        report = await get_report(db, current_user.id, month, year)
    except SQLAlchemyError:
        raise _store_error("Error generating PDF. Please try again.")

    try:
        content = render_report_pdf(report, current_user)
    except Exception:
        logger.exception("Error during PDF content generation for %s %s", month, year)
        raise ReportAPIError("Error generating PDF content")
    filename = f"islamic-report-{month}-{year}-{int(time.time() * 1000)}.pdf"
    return _pdf_response(content, filename)


@router.get("/{month}/{year}", response_model=ReportResponse)
async def get_report_by_period(
    month: str,
    year: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        return await get_report(db, current_user.id, month, year)
    except SQLAlchemyError:
        raise _store_error()
