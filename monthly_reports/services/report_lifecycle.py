"""
Report lifecycle: insert-if-absent, optional month scaffold, legacy backfill.

Every endpoint that touches a report goes through ``ensure_report`` (writes
and the current-month view) or ``find_report`` (plain reads). Creation is a
single ``INSERT ... ON CONFLICT DO NOTHING`` on the (user, month, year) key,
so two requests racing for the same new report end up sharing one row.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from monthly_reports.core.errors import NotFoundError
from monthly_reports.models.report import MonthlyReport
from monthly_reports.models.user import utc_now
from monthly_reports.services.days import MONTH_NAMES, month_scaffold

logger = logging.getLogger(__name__)


def current_period(now: Optional[datetime] = None) -> Tuple[str, str]:
    """(month name, year string) for ``now``, e.g. ("March", "2025")."""
    now = now or datetime.now()
    return MONTH_NAMES[now.month - 1], str(now.year)


def _insert_if_absent(dialect_name: str, user_id: int, month: str, year: str):
    if dialect_name == "postgresql":
        insert = postgresql.insert
    elif dialect_name == "sqlite":
        insert = sqlite.insert
    else:
        raise NotImplementedError(f"Unsupported database dialect: {dialect_name}")

    now = utc_now()
    return (
        insert(MonthlyReport)
        .values(
            user_id=user_id,
            month=month,
            year=year,
            qa={},
            is_completed=False,
            created_at=now,
            updated_at=now,
        )
        .on_conflict_do_nothing(index_elements=["user_id", "month", "year"])
    )


async def find_report(db: AsyncSession, user_id: int, month: str, year: str) -> Optional[MonthlyReport]:
    result = await db.execute(
        select(MonthlyReport)
        .where(MonthlyReport.user_id == user_id)
        .where(MonthlyReport.month == month)
        .where(MonthlyReport.year == year)
    )
    return result.scalar_one_or_none()


def backfill_day_periods(report: MonthlyReport) -> bool:
    """Give days written before month/year existed their report's month/year."""
    changed = False
    for day in report.days:
        if not day.month or not day.year:
            day.month = report.month
            day.year = report.year
            changed = True
    return changed


async def migrate_report(db: AsyncSession, report: MonthlyReport) -> MonthlyReport:
    if backfill_day_periods(report):
        await db.commit()
        logger.info(
            "Migrated existing report for %s %s to include month and year fields",
            report.month, report.year,
        )
    return report


async def ensure_report(
    db: AsyncSession,
    user_id: int,
    month: str,
    year: str,
    scaffold_days: bool = False,
) -> MonthlyReport:
    """
    Return the (user, month, year) report, creating it when absent.

    With ``scaffold_days`` a newly created report gets one blank day per
    calendar day of the month; otherwise it starts with no days. An existing
    report is migrated instead.
    """
    dialect_name = db.get_bind().dialect.name
    result = await db.execute(_insert_if_absent(dialect_name, user_id, month, year))
    created = result.rowcount == 1

    report = await find_report(db, user_id, month, year)
    if report is None:
        # Lost the insert race to a transaction that has since rolled back
        raise NotFoundError("Report not found")

    if not created:
        return await migrate_report(db, report)

    if scaffold_days:
        report.days.extend(month_scaffold(month, year))
    await db.commit()
    logger.info("Created new report for %s %s and added to user's reports list", month, year)
    return report


async def get_report(db: AsyncSession, user_id: int, month: str, year: str) -> MonthlyReport:
    report = await find_report(db, user_id, month, year)
    if report is None:
        raise NotFoundError("Report not found")
    return await migrate_report(db, report)


async def list_reports(db: AsyncSession, user_id: int) -> List[MonthlyReport]:
    """All of a user's reports, newest first."""
    result = await db.execute(
        select(MonthlyReport)
        .where(MonthlyReport.user_id == user_id)
        .order_by(MonthlyReport.created_at.desc(), MonthlyReport.id.desc())
    )
    reports = list(result.scalars().all())

    migrated = [r for r in reports if backfill_day_periods(r)]
    if migrated:
        await db.commit()
        logger.info("Migrated %d existing reports to include month and year fields", len(migrated))
    return reports


async def complete_report(db: AsyncSession, user_id: int, month: str, year: str) -> MonthlyReport:
    """Flip the one-way completion flag. Never creates a report."""
    report = await find_report(db, user_id, month, year)
    if report is None:
        raise NotFoundError("Report not found")

    backfill_day_periods(report)
    report.is_completed = True
    report.completed_at = datetime.now(timezone.utc)
    await db.commit()
    logger.info("Report %s %s marked completed", month, year)
    return report
