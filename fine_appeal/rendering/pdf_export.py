import io

from reportlab.pdfgen import canvas

from fine_appeal.rendering.models import LayoutConfig, RenderedPage


class PdfExporter:
    """Draws laid-out pages onto a PDF canvas."""

    def __init__(self, config: LayoutConfig | None = None) -> None:
        self._config = config or LayoutConfig()

    def export(
        self,
        pages: list[RenderedPage],
        *,
        title: str = "",
        author: str = "",
    ) -> bytes:
        cfg = self._config
        buf = io.BytesIO()
        pdf = canvas.Canvas(buf, pagesize=(cfg.page_width, cfg.page_height))
        if title:
            pdf.setTitle(title)
        if author:
            pdf.setAuthor(author)

        for page in pages:
            self._draw_page(pdf, page)
            pdf.showPage()
        pdf.save()
        return buf.getvalue()

    def _draw_page(self, pdf: canvas.Canvas, page: RenderedPage) -> None:
        cfg = self._config
        height = cfg.page_height

        for line in page.lines:
            for segment in line.segments:
                pdf.setFont(cfg.font_for(segment.bold, segment.italic), line.font_size)
                pdf.drawString(segment.x, height - line.y, segment.text)

        if page.divider_y is not None:
            pdf.setLineWidth(0.5)
            pdf.line(
                cfg.margin_left,
                height - page.divider_y,
                cfg.page_width - cfg.margin_right,
                height - page.divider_y,
            )

        pdf.setFont(cfg.font_regular, cfg.footer_font_size)
        for text, y in zip(page.footer_lines, cfg.footer_baselines()):
            pdf.drawCentredString(cfg.page_width / 2, height - y, text)
