import re
from io import BytesIO
from types import SimpleNamespace

import pytest

from monthly_reports.services.days import blank_day, month_scaffold
from monthly_reports.services.report_pdf import (
    PAGE_BREAK_Y,
    TABLE_HEADERS,
    _PdfWriter,
    day_row,
    render_report_pdf,
    render_test_pdf,
)


@pytest.fixture
def pdf_user():
    return SimpleNamespace(
        name="Ayesha Khan",
        class_name="BS Part II",
        educational_institution="Government College",
        address=None,
        phone_number="03001234567",
    )


def _report(days=None, qa=None):
    return SimpleNamespace(month="March", year="2024", days=days or [], qa=qa or {})


def test_day_row_matches_headers():
    day = blank_day(7, "March", "2024")
    day.namaz = "yes"
    day.khatoot_tadaad = 3

    row = day_row(day)

    assert len(row) == len(TABLE_HEADERS)
    assert row[:3] == ["7", "Y", "N"]
    assert row[10] == "3"


def test_render_report_pdf(pdf_user):
    content = render_report_pdf(_report(days=month_scaffold("March", "2024")), pdf_user)

    assert content.startswith(b"%PDF")
    assert content.rstrip().endswith(b"%%EOF")


def test_every_question_is_printed(pdf_user):
    content = render_report_pdf(_report(qa={"q1": "Fajr, overslept"}), pdf_user, compress=False)

    for number in range(1, 29):
        assert b"(Q%d: " % number in content
    assert b"(A: Fajr, overslept)" in content
    assert content.count(b"No answer provided") == 27


def test_missing_user_fields_print_na(pdf_user):
    content = render_report_pdf(_report(), pdf_user, compress=False)

    assert b"(Address: N/A)" in content
    assert b"(Name: Ayesha Khan)" in content
    assert b"(March 2024)" in content


def test_writer_breaks_page_past_limit():
    pdf = _PdfWriter(BytesIO())
    pdf.y = PAGE_BREAK_Y
    pdf.ensure_room()
    assert pdf.pages == 1

    pdf.y = PAGE_BREAK_Y + 1
    pdf.ensure_room()
    assert pdf.pages == 2
    assert pdf.y < PAGE_BREAK_Y


def test_long_answers_wrap_onto_new_pages(pdf_user):
    answer = "Attended the weekly study circle and visited two neighbours. " * 20
    qa = {key: answer for key in (f"q{i}" for i in range(1, 29))}

    content = render_report_pdf(_report(days=month_scaffold("March", "2024"), qa=qa), pdf_user, compress=False)

    assert b"No answer provided" not in content
    page_counts = [int(n) for n in re.findall(rb"/Count (\d+)", content)]
    assert max(page_counts) > 1


def test_render_test_pdf(pdf_user):
    content = render_test_pdf(pdf_user, compress=False)

    assert content.startswith(b"%PDF")
    assert b"(Generated for user: Ayesha Khan)" in content
