from typing import ClassVar

import pymupdf

from fine_appeal.pdf.base import ENCRYPTED_MESSAGE, BasePdfExtractor
from fine_appeal.pdf.exceptions import PdfExtractionError


class PyMuPdfAdapter(BasePdfExtractor):
    """Reads page text with PyMuPDF."""

    engine: ClassVar[str] = "pymupdf"

    def _read_pages(self, pdf_bytes: bytes, max_pages: int) -> list[str]:
        with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
            if doc.needs_pass:
                raise PdfExtractionError(ENCRYPTED_MESSAGE)
            count = min(doc.page_count, max_pages)
            return [doc[index].get_text() for index in range(count)]
