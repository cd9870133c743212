from typing import ClassVar

from fine_appeal.config.settings import Settings
from fine_appeal.pdf.base import BasePdfExtractor
from fine_appeal.pdf.pdfplumber_adapter import PdfPlumberAdapter
from fine_appeal.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Selects the PDF engine named in settings."""

    ENGINES: ClassVar[dict[str, type[BasePdfExtractor]]] = {
        adapter.engine: adapter for adapter in (PdfPlumberAdapter, PyMuPdfAdapter)
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        """Build the configured engine, capped at ``settings.pdf_max_pages``.

        Raises:
            ValueError: if the engine name is not registered.
        """
        engine = settings.pdf_engine.strip().lower()
        adapter_cls = cls.ENGINES.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {sorted(cls.ENGINES)}"
            )
        return adapter_cls(max_pages=settings.pdf_max_pages)
