from datetime import datetime, timezone

import pytest

from monthly_reports.core.errors import NotFoundError, ValidationError
from monthly_reports.models.report import MonthlyReport
from monthly_reports.services.days import (
    activity_field_name,
    blank_day,
    build_day_values,
    coerce_count,
    coerce_flag,
    days_in_month,
    month_scaffold,
    patch_day,
    upsert_day,
)


@pytest.mark.parametrize(
    "value, expected",
    [(5, 5), ("7", 7), (" 3 ", 3), ("2.0", 2), (-4, 0), ("abc", 0), (None, 0), ("", 0), (True, 0),
     (2**31 - 1, 2**31 - 1), (2**31, 0), ("99999999999999999999", 0), ("1e400", 0)],
)
def test_coerce_count(value, expected):
    assert coerce_count(value) == expected


def test_coerce_flag():
    assert coerce_flag("namaz", "yes") == "yes"
    assert coerce_flag("namaz", None) == "no"
    assert coerce_flag("namaz", "") == "no"
    with pytest.raises(ValidationError) as exc:
        coerce_flag("hifz", "Yes")
    assert exc.value.status_code == 400
    assert exc.value.to_dict() == {"message": "hifz must be 'yes' or 'no'"}


def test_activity_field_name():
    assert activity_field_name("darsiKutab") == "darsi_kutab"
    assert activity_field_name("darsi_kutab") == "darsi_kutab"
    assert activity_field_name("namaz") == "namaz"
    assert activity_field_name("date") is None
    assert activity_field_name("_id") is None


def test_days_in_month():
    assert days_in_month("February", "2024") == 29
    assert days_in_month("February", "1900") == 28
    assert days_in_month("April", "2025") == 30
    with pytest.raises(ValidationError):
        days_in_month("Muharram", "2025")
    with pytest.raises(ValidationError):
        days_in_month("March", "next year")


def test_month_scaffold_is_blank():
    days = month_scaffold("June", "2025")

    assert [d.date for d in days] == list(range(1, 31))
    assert all(d.namaz == "no" and d.khatoot_tadaad == 0 for d in days)
    assert {(d.month, d.year) for d in days} == {("June", "2025")}


def test_build_day_values_fills_defaults():
    values = build_day_values({"date": "12", "month": "May", "year": 2025, "hadees": "yes", "khatootTadaad": "2"})

    assert values["date"] == 12
    assert values["year"] == "2025"
    assert values["hadees"] == "yes"
    assert values["literature"] == "no"
    assert values["khatoot_tadaad"] == 2
    assert values["karkunaan_mulakaat"] == 0
    assert "khatootTadaad" not in values


@pytest.mark.parametrize("payload", [{}, {"date": 1, "month": "May"}, {"month": "May", "year": "2025"}])
def test_build_day_values_requires_key_fields(payload):
    with pytest.raises(ValidationError) as exc:
        build_day_values(payload)
    assert exc.value.to_dict() == {"success": False, "message": "Date, month, and year are required"}


@pytest.mark.parametrize("date", [0, 32, "tenth"])
def test_build_day_values_rejects_bad_date(date):
    with pytest.raises(ValidationError):
        build_day_values({"date": date, "month": "May", "year": "2025"})


def test_upsert_day_appends_then_replaces():
    report = MonthlyReport(month="May", year="2025")
    report.days = []

    first, appended = upsert_day(report, build_day_values({"date": 4, "month": "May", "year": "2025", "namaz": "yes"}))
    assert appended is True

    second, appended = upsert_day(report, build_day_values({"date": 4, "month": "May", "year": "2025", "hifz": "yes"}))
    assert appended is False
    assert second is first
    assert len(report.days) == 1
    assert first.namaz == "no"
    assert first.hifz == "yes"


def test_upsert_day_matches_on_full_key():
    report = MonthlyReport(month="May", year="2025")
    report.days = [blank_day(4, "April", "2025")]

    _, appended = upsert_day(report, build_day_values({"date": 4, "month": "May", "year": "2025"}))

    assert appended is True
    assert len(report.days) == 2


def test_patch_day_updates_only_given_fields():
    report = MonthlyReport(month="May", year="2025")
    report.days = month_scaffold("May", "2025")

    day = patch_day(report, 10, {"tafseer": "yes", "amoomiAfraadMulakaat": "x", "karkunaan_mulakaat": 3, "date": 1})

    assert day.date == 10
    assert day.tafseer == "yes"
    assert day.amoomi_afraad_mulakaat == 0
    assert day.karkunaan_mulakaat == 3
    assert day.namaz == "no"


def test_patch_day_missing_date():
    report = MonthlyReport(month="February", year="2025")
    report.days = month_scaffold("February", "2025")

    with pytest.raises(NotFoundError) as exc:
        patch_day(report, 30, {"namaz": "yes"})
    assert exc.value.status_code == 404


def test_day_writes_touch_report_updated_at():
    stale = datetime(2020, 1, 1, tzinfo=timezone.utc)
    report = MonthlyReport(month="May", year="2025", updated_at=stale)
    report.days = month_scaffold("May", "2025")

    patch_day(report, 2, {"hifz": "yes"})
    assert report.updated_at > stale

    report.updated_at = stale
    upsert_day(report, build_day_values({"date": 2, "month": "May", "year": "2025"}))
    assert report.updated_at > stale

    report.updated_at = stale
    upsert_day(report, build_day_values({"date": 9, "month": "June", "year": "2025"}))
    assert report.updated_at > stale
