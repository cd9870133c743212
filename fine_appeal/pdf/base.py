from abc import ABC, abstractmethod
from typing import ClassVar

from fine_appeal.logging.logger import Log
from fine_appeal.pdf.exceptions import PdfExtractionError

DEFAULT_MAX_PAGES = 20
ENCRYPTED_MESSAGE = "PDF is encrypted and cannot be read"


class BasePdfExtractor(ABC):
    """Shared text assembly for PDF extraction engines.

    Engines only read raw page text. Joining, the page limit and error
    wrapping live here so every engine fails the same way.
    """

    engine: ClassVar[str] = "pdf"

    def __init__(self, max_pages: int = DEFAULT_MAX_PAGES) -> None:
        if max_pages <= 0:
            raise ValueError("max_pages must be positive")
        self._max_pages = max_pages

    def extract(self, pdf_bytes: bytes) -> str:
        """Extract plain text from the leading pages of a PDF.

        Returns:
            Non-blank page texts joined by newlines. Empty for scanned or
            blank documents; callers decide whether that is fatal.

        Raises:
            PdfExtractionError: if the document is encrypted or unreadable.
        """
        try:
            pages = self._read_pages(pdf_bytes, self._max_pages)
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"{self.engine} extraction failed: {exc}") from exc

        text = "\n".join(page.strip() for page in pages if page.strip())
        Log.debug(f"{self.engine}: read {len(pages)} page(s), {len(text)} chars")
        return text

    @abstractmethod
    def _read_pages(self, pdf_bytes: bytes, max_pages: int) -> list[str]:
        """Return the raw text of at most ``max_pages`` leading pages."""
