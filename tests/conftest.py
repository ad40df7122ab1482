import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

HEBREW_PAGE_TEXT = (
    "ועדה רפואית מחוזית סניף ראשי רמת גן\n"
    "שם המבוטח: ישראל ישראלי ת.ז 123456789\n"
    "אבחנה: תסמונת פוסט טראומטית אחוז נכות 20%"
)


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def committee_pdf_bytes() -> bytes:
    """Generate a digital PDF whose text layer is long enough for the native stage."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    lines = [
        "Medical Committee Protocol - General Disability",
        "Branch: Ramat Gan main branch",
        "Insured name: Israel Israeli, ID 123456789",
        "Diagnosis: post traumatic stress disorder, 20 percent",
        "Committee date: 01/02/2024",
    ]
    for offset, line in enumerate(lines):
        c.drawString(72, 720 - offset * 20, line)
    c.save()
    return buf.getvalue()
