from dataclasses import dataclass

from fine_appeal.appeal.models import AppealDocument
from fine_appeal.config.settings import Settings
from fine_appeal.logging.logger import Log
from fine_appeal.rendering.filenames import export_filename
from fine_appeal.rendering.layout import PageLayout
from fine_appeal.rendering.markup import strip_markup
from fine_appeal.rendering.models import LayoutConfig, RenderedPage
from fine_appeal.rendering.pdf_export import PdfExporter


@dataclass(frozen=True)
class ExportArtifact:
    """A finished export ready to be sent to the client."""

    filename: str
    media_type: str
    content: bytes


class MarkupRenderer:
    """Lays out appeal text with inline emphasis and exports it."""

    def __init__(
        self,
        config: LayoutConfig | None = None,
        *,
        title: str = "Appeal Letter",
        generator: str = "No Más Multas",
    ) -> None:
        self._config = config or LayoutConfig()
        self._title = title
        self._generator = generator
        self._layout = PageLayout(self._config, title=title, generator=generator)
        self._exporter = PdfExporter(self._config)

    @classmethod
    def from_settings(cls, settings: Settings) -> "MarkupRenderer":
        return cls(title=settings.export_title, generator=settings.export_generator_name)

    def layout(self, document: AppealDocument) -> list[RenderedPage]:
        return self._layout.layout(document)

    def render_pdf(self, document: AppealDocument) -> ExportArtifact:
        pages = self.layout(document)
        content = self._exporter.export(pages, title=self._title, author=self._generator)
        Log.info(f"Rendered appeal PDF: {len(pages)} pages, {len(content)} bytes")
        return ExportArtifact(
            filename=export_filename(document.reference_number, "pdf"),
            media_type="application/pdf",
            content=content,
        )

    def render_text(self, document: AppealDocument) -> ExportArtifact:
        content = strip_markup(document.text) + "\n"
        return ExportArtifact(
            filename=export_filename(document.reference_number, "txt"),
            media_type="text/plain; charset=utf-8",
            content=content.encode("utf-8"),
        )
