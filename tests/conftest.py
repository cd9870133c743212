import io

import pytest
from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

FINE_PAGE_ONE = [
    "CITY OF SPRINGFIELD - PARKING ENFORCEMENT",
    "Penalty Charge Notice",
    "Reference Number: PCN-2024-0042",
    "Date of contravention: 2024-03-15",
    "Amount due: 65.00 EUR",
]
FINE_PAGE_TWO = [
    "Location: 12 Main Street",
    "Reason: Parked in a loading bay",
    "Vehicle registration: AB 123 CD",
]


def _pdf(pages: list[list[str]], **canvas_kwargs: object) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter, **canvas_kwargs)
    for lines in pages:
        y = 720
        for line in lines:
            c.drawString(72, y, line)
            y -= 18
        c.showPage()
    c.save()
    return buf.getvalue()


def _image(size: tuple[int, int], fmt: str, mode: str = "RGB") -> bytes:
    color: tuple[int, ...] = (200, 30, 30, 128) if mode == "RGBA" else (200, 30, 30)
    img = Image.new(mode, size, color)
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    return _pdf([["Hello PDF World"]])


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    return _pdf([["Page one content"], ["Page two content"]])


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def encrypted_pdf_bytes() -> bytes:
    """Generate a PDF protected by a user password."""
    return _pdf([["Top secret fine"]], encrypt="secret")


@pytest.fixture()
def fine_pdf_bytes() -> bytes:
    """Generate a two-page parking fine notice."""
    return _pdf([FINE_PAGE_ONE, FINE_PAGE_TWO])


@pytest.fixture()
def large_png_bytes() -> bytes:
    return _image((3000, 1500), "PNG")


@pytest.fixture()
def tall_jpeg_bytes() -> bytes:
    return _image((900, 2400), "JPEG")


@pytest.fixture()
def small_jpeg_bytes() -> bytes:
    return _image((400, 300), "JPEG")


@pytest.fixture()
def transparent_png_bytes() -> bytes:
    return _image((640, 480), "PNG", mode="RGBA")
