"""
PDF export of a monthly report.

Layout is drawn straight onto a reportlab canvas with a top-down cursor:
title, user information, the daily activities table (a new page starts once
the cursor passes ``PAGE_BREAK_Y``), then all 28 questions with their
answers, then a footer line.
"""
import logging
from datetime import datetime
from io import BytesIO
from typing import Iterable, List

from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from monthly_reports.config import settings
from monthly_reports.services.questions import question_answer_pairs

logger = logging.getLogger(__name__)

MARGIN = 50
PAGE_BREAK_Y = 700  # measured from the top of the page
CONTENT_WIDTH = 500
COLUMN_WIDTH = 40
ROW_HEIGHT = 15

TABLE_HEADERS = (
    "Date", "Namaz", "Hifz", "Nazra", "Tafseer", "Hadees", "Literature",
    "Books", "Workers", "General", "Letters", "Housework",
)


def _yes_no(value) -> str:
    return "Y" if value == "yes" else "N"


def day_row(day) -> List[str]:
    return [
        str(day.date),
        _yes_no(day.namaz),
        _yes_no(day.hifz),
        _yes_no(day.nazra),
        _yes_no(day.tafseer),
        _yes_no(day.hadees),
        _yes_no(day.literature),
        _yes_no(day.darsi_kutab),
        str(day.karkunaan_mulakaat or 0),
        str(day.amoomi_afraad_mulakaat or 0),
        str(day.khatoot_tadaad or 0),
        _yes_no(day.ghr_ka_kaam),
    ]


class _PdfWriter:
    """Thin cursor over a canvas; ``y`` counts down from the top edge."""

    def __init__(self, buffer: BytesIO, compress: bool = True):
        self.width, self.height = A4
        self.canvas = canvas.Canvas(buffer, pagesize=A4, pageCompression=1 if compress else 0)
        self.y = MARGIN
        self.pages = 1

    def new_page(self):
        self.canvas.showPage()
        self.pages += 1
        self.y = MARGIN

    def ensure_room(self):
        if self.y > PAGE_BREAK_Y:
            self.new_page()

    def text(self, value: str, size: float, bold: bool = False, x: float = MARGIN,
             align: str = "left", gap: float = 0.4):
        font = "Helvetica-Bold" if bold else "Helvetica"
        self.canvas.setFont(font, size)
        baseline = self.height - self.y - size
        if align == "center":
            self.canvas.drawCentredString(self.width / 2, baseline, value)
        else:
            self.canvas.drawString(x, baseline, value)
        self.y += size * (1 + gap)

    def paragraph(self, value: str, size: float, bold: bool = False):
        font = "Helvetica-Bold" if bold else "Helvetica"
        for line in simpleSplit(value, font, size, CONTENT_WIDTH) or [""]:
            self.ensure_room()
            self.text(line, size, bold=bold)

    def row(self, cells: Iterable[str], size: float = 8, bold: bool = False):
        self.canvas.setFont("Helvetica-Bold" if bold else "Helvetica", size)
        baseline = self.height - self.y - size
        for index, cell in enumerate(cells):
            self.canvas.drawString(MARGIN + index * COLUMN_WIDTH, baseline, cell)
        self.y += ROW_HEIGHT

    def rule(self):
        line_y = self.height - self.y
        self.canvas.line(MARGIN, line_y, MARGIN + CONTENT_WIDTH, line_y)

    def space(self, amount: float):
        self.y += amount

    def finish(self):
        self.canvas.save()


def render_report_pdf(report, user, compress: bool = True) -> bytes:
    """Render ``report`` (with its days) for ``user`` and return the PDF bytes."""
    buffer = BytesIO()
    pdf = _PdfWriter(buffer, compress=compress)

    # Header
    pdf.text(settings.REPORT_TITLE, 24, bold=True, align="center")
    pdf.text(f"{report.month} {report.year}", 18, align="center")
    pdf.space(24)

    # User information
    pdf.text("User Information", 14, bold=True)
    for label, value in (
        ("Name", user.name),
        ("Class", user.class_name),
        ("Institution", user.educational_institution),
        ("Address", user.address),
        ("Phone", user.phone_number),
    ):
        pdf.text(f"{label}: {value or 'N/A'}", 12)
    pdf.space(24)

    # Daily activities table
    pdf.text("Daily Activities Report", 14, bold=True)
    pdf.space(6)
    pdf.row(TABLE_HEADERS, bold=True)
    pdf.space(5)
    for day in report.days:
        pdf.ensure_room()
        pdf.row(day_row(day))
    pdf.space(24)

    # Questions & answers, all 28 every time
    pdf.ensure_room()
    pdf.text("Monthly Questions & Answers", 16, bold=True, align="center")
    pdf.space(6)
    pdf.rule()
    pdf.space(12)
    for number, question, answer in question_answer_pairs(report.qa):
        pdf.paragraph(f"Q{number}: {question}", 12, bold=True)
        pdf.space(3)
        pdf.paragraph(f"A: {answer}", 11)
        pdf.space(12)
        pdf.ensure_room()

    pdf.text(f"Report generated on: {datetime.now().strftime('%d/%m/%Y')}", 10, align="center")
    pdf.finish()

    logger.info(
        "Rendered PDF for %s %s: %d days, %d pages",
        report.month, report.year, len(report.days), pdf.pages,
    )
    return buffer.getvalue()


def render_test_pdf(user, compress: bool = True) -> bytes:
    """One-page diagnostic document; touches no report data."""
    buffer = BytesIO()
    pdf = _PdfWriter(buffer, compress=compress)
    pdf.text("Test PDF Report", 20, align="center")
    pdf.space(12)
    pdf.text("This is a test PDF to verify PDF generation is working.", 12)
    pdf.space(12)
    pdf.text(f"Generated for user: {user.name}", 12)
    pdf.space(12)
    pdf.text(f"Generated at: {datetime.now().strftime('%d/%m/%Y, %H:%M:%S')}", 12)
    pdf.finish()
    return buffer.getvalue()
