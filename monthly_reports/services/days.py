from calendar import monthrange
from typing import Any, Dict, List, Mapping

from monthly_reports.core.errors import NotFoundError, ValidationError
from monthly_reports.models.report import MonthlyReport, ReportDay
from monthly_reports.models.user import utc_now

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

FLAG_FIELDS = (
    "namaz", "hifz", "nazra", "tafseer", "hadees", "literature", "darsi_kutab", "ghr_ka_kaam",
)
COUNTER_FIELDS = ("karkunaan_mulakaat", "amoomi_afraad_mulakaat", "khatoot_tadaad")
COUNTER_MAX = 2**31 - 1  # INTEGER column range
ACTIVITY_FIELDS = FLAG_FIELDS + COUNTER_FIELDS

# Wire (camelCase) name → column name
_FIELD_ALIASES = {
    "darsiKutab": "darsi_kutab",
    "ghrKaKaam": "ghr_ka_kaam",
    "karkunaanMulakaat": "karkunaan_mulakaat",
    "amoomiAfraadMulakaat": "amoomi_afraad_mulakaat",
    "khatootTadaad": "khatoot_tadaad",
}


def activity_field_name(key: str) -> str | None:
    """Column name for a payload key, or None when the key is not an activity field."""
    key = _FIELD_ALIASES.get(key, key)
    return key if key in ACTIVITY_FIELDS else None


def days_in_month(month: str, year: str) -> int:
    """Number of days in ``month`` (English name) of ``year``, leap years included."""
    try:
        month_index = MONTH_NAMES.index(month) + 1
        return monthrange(int(year), month_index)[1]
    except ValueError:
        raise ValidationError(f"Unknown month/year: {month} {year}")


def coerce_count(value: Any) -> int:
    """Integer value of a counter; unparseable, negative or out-of-range input becomes 0."""
    if isinstance(value, bool):
        return 0
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        try:
            number = int(float(value))
        except (TypeError, ValueError, OverflowError):
            return 0
    if number < 0 or number > COUNTER_MAX:
        return 0
    return number


def coerce_flag(field: str, value: Any, envelope: bool = False) -> str:
    if value is None or value == "":
        return "no"
    if value not in ("yes", "no"):
        raise ValidationError(f"{field} must be 'yes' or 'no'", envelope=envelope)
    return value


def blank_day(date: int, month: str, year: str) -> ReportDay:
    values = {field: "no" for field in FLAG_FIELDS}
    values.update({field: 0 for field in COUNTER_FIELDS})
    return ReportDay(date=date, month=month, year=year, **values)


def month_scaffold(month: str, year: str) -> List[ReportDay]:
    return [blank_day(d, month, year) for d in range(1, days_in_month(month, year) + 1)]


def build_day_values(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Normalize a full day payload (``POST /add-day``).

    ``date``, ``month`` and ``year`` are required. Flags default to "no";
    counters are coerced with ``coerce_count``.
    """
    date, month, year = payload.get("date"), payload.get("month"), payload.get("year")
    if date in (None, "") or not month or year in (None, ""):
        raise ValidationError("Date, month, and year are required", envelope=True)
    try:
        date = int(date)
    except (TypeError, ValueError):
        raise ValidationError("Date must be a number between 1 and 31", envelope=True)
    if not 1 <= date <= 31:
        raise ValidationError("Date must be a number between 1 and 31", envelope=True)

    values: Dict[str, Any] = {"date": date, "month": str(month), "year": str(year)}
    for key, value in payload.items():
        field = activity_field_name(key)
        if field in FLAG_FIELDS:
            values[field] = coerce_flag(field, value, envelope=True)
        elif field in COUNTER_FIELDS:
            values[field] = coerce_count(value)
    for field in FLAG_FIELDS:
        values.setdefault(field, "no")
    for field in COUNTER_FIELDS:
        values.setdefault(field, 0)
    return values


def upsert_day(report: MonthlyReport, values: Mapping[str, Any]) -> tuple[ReportDay, bool]:
    """
    Replace the day matching (date, month, year) or append a new one.

    Returns the day and whether it was newly appended. Existing order is
    never changed.
    """
    for day in report.days:
        if day.date == values["date"] and day.month == values["month"] and day.year == values["year"]:
            for field, value in values.items():
                setattr(day, field, value)
            report.updated_at = utc_now()
            return day, False

    day = ReportDay(**values)
    report.days.append(day)
    report.updated_at = utc_now()
    return day, True


def patch_day(report: MonthlyReport, date: int, updates: Mapping[str, Any]) -> ReportDay:
    """Overwrite only the recognized activity fields present in ``updates``."""
    day = next((d for d in report.days if d.date == date), None)
    if day is None:
        raise NotFoundError("Day not found")

    for key, value in updates.items():
        field = activity_field_name(key)
        if field in FLAG_FIELDS:
            setattr(day, field, coerce_flag(field, value))
        elif field in COUNTER_FIELDS:
            setattr(day, field, coerce_count(value))
    report.updated_at = utc_now()
    return day
