import io

import docx
import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

INVENTORY_TEXT = (
    "Državni arhiv u Varaždinu. Fond HR-DAVŽ-69, Gradsko poglavarstvo, "
    "1900-1945. Serija 1: Zapisnici sjednica, 19 knjiga, kut. br. 2."
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
def sample_docx_bytes() -> bytes:
    """Generate a DOCX with one paragraph and a one-row table."""
    document = docx.Document()
    document.add_paragraph("Fond HR-DAVŽ-69")
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Serija 1"
    table.rows[0].cells[1].text = "19 knjiga"
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


@pytest.fixture()
def inventory_text_bytes() -> bytes:
    return INVENTORY_TEXT.encode("utf-8")
