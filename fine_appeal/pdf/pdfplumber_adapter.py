import io
from typing import ClassVar

import pdfplumber
from pdfminer.pdfdocument import PDFEncryptionError, PDFPasswordIncorrect
from pdfplumber.utils.exceptions import PdfminerException

from fine_appeal.pdf.base import ENCRYPTED_MESSAGE, BasePdfExtractor
from fine_appeal.pdf.exceptions import PdfExtractionError

_ENCRYPTION_ERRORS = (PDFPasswordIncorrect, PDFEncryptionError)


def _is_encryption_error(exc: BaseException) -> bool:
    """pdfplumber wraps pdfminer errors; look through the wrapper."""
    candidates = [exc, exc.__cause__, *exc.args]
    return any(isinstance(candidate, _ENCRYPTION_ERRORS) for candidate in candidates)


class PdfPlumberAdapter(BasePdfExtractor):
    """Reads page text with pdfplumber."""

    engine: ClassVar[str] = "pdfplumber"

    def _read_pages(self, pdf_bytes: bytes, max_pages: int) -> list[str]:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                return [page.extract_text() or "" for page in pdf.pages[:max_pages]]
        except (PdfminerException, *_ENCRYPTION_ERRORS) as exc:
            if _is_encryption_error(exc):
                raise PdfExtractionError(ENCRYPTED_MESSAGE) from exc
            raise
