"""Two-pass pagination of appeal text.

The first pass flows styled, word-wrapped lines onto pages, opening a new page
whenever the next line would run past the body area. The second pass stamps
every page footer, which needs the final page count.
"""

import re
from typing import ClassVar

from reportlab.pdfbase.pdfmetrics import stringWidth

from fine_appeal.appeal.models import AppealDocument, AppealType
from fine_appeal.rendering.markup import StyledSegment, parse_text
from fine_appeal.rendering.models import (
    LayoutConfig,
    LineRole,
    PlacedSegment,
    RenderedLine,
    RenderedPage,
)

_TOKEN_RE = re.compile(r"\S+|\s+")
_ELLIPSIS = "..."

_Piece = tuple[str, bool, bool]


class PageLayout:
    """Lays an AppealDocument out onto fixed-size pages."""

    SUBJECTS: ClassVar[dict[AppealType, str]] = {
        AppealType.PROCEDURAL: "Appeal against traffic fine on procedural grounds",
        AppealType.FACTUAL: "Appeal against traffic fine on factual grounds",
        AppealType.LEGAL: "Appeal against traffic fine on legal grounds",
        AppealType.COMPREHENSIVE: "Appeal against traffic fine",
    }

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

    @property
    def config(self) -> LayoutConfig:
        return self._config

    def layout(self, document: AppealDocument) -> list[RenderedPage]:
        pages = self._flow(document)
        self._stamp_footers(pages, document)
        return pages

    def footer_reference_line(self, document: AppealDocument) -> str:
        return (
            f"Reference: {document.reference_number or '-'} | "
            f"Date: {document.date or '-'}"
        )

    # ------------------------------------------------------------------
    # Pass 1: flow
    # ------------------------------------------------------------------

    def _flow(self, document: AppealDocument) -> list[RenderedPage]:
        cfg = self._config
        pages = [self._start_first_page(document)]

        for segments in parse_text(document.text):
            page = pages[-1]
            if not "".join(segment.text for segment in segments).strip():
                if page.body_lines():
                    page.cursor += cfg.line_height
                continue
            for placed in self._wrap(segments):
                page = pages[-1]
                if page.cursor + cfg.line_height > cfg.body_bottom:
                    page = self._start_continuation_page(len(pages) + 1)
                    pages.append(page)
                page.lines.append(
                    RenderedLine(
                        y=page.cursor + cfg.font_size,
                        segments=placed,
                        font_size=cfg.font_size,
                    )
                )
                page.cursor += cfg.line_height

        return pages

    def _start_first_page(self, document: AppealDocument) -> RenderedPage:
        cfg = self._config
        page = RenderedPage(number=1)
        cursor = cfg.margin_top

        title = self._fit(self._title, cfg.font_bold, cfg.title_font_size)
        page.lines.append(
            RenderedLine(
                y=cursor + cfg.title_font_size,
                segments=(
                    PlacedSegment(
                        text=title,
                        x=cfg.margin_left,
                        width=stringWidth(title, cfg.font_bold, cfg.title_font_size),
                        bold=True,
                    ),
                ),
                font_size=cfg.title_font_size,
                role=LineRole.TITLE,
            )
        )
        cursor += cfg.title_font_size * 1.8

        for label, value in self._meta_fields(document):
            page.lines.append(
                RenderedLine(
                    y=cursor + cfg.meta_font_size,
                    segments=self._meta_segments(label, value),
                    font_size=cfg.meta_font_size,
                    role=LineRole.META,
                )
            )
            cursor += cfg.meta_line_height

        page.divider_y = cursor + 4.0
        page.cursor = cursor + 16.0
        return page

    def _start_continuation_page(self, number: int) -> RenderedPage:
        cfg = self._config
        header = self._fit(self._title, cfg.font_italic, cfg.header_font_size)
        page = RenderedPage(number=number)
        page.lines.append(
            RenderedLine(
                y=cfg.margin_top + cfg.header_font_size,
                segments=(
                    PlacedSegment(
                        text=header,
                        x=cfg.margin_left,
                        width=stringWidth(header, cfg.font_italic, cfg.header_font_size),
                        italic=True,
                    ),
                ),
                font_size=cfg.header_font_size,
                role=LineRole.HEADER,
            )
        )
        page.cursor = cfg.margin_top + cfg.header_font_size + 12.0
        return page

    def _meta_fields(self, document: AppealDocument) -> list[tuple[str, str]]:
        fields = [
            ("Reference", document.reference_number or "-"),
            ("Date", document.date or "-"),
        ]
        fine = document.fine
        if fine is not None:
            for label, value in (
                ("Amount", fine.amount),
                ("Location", fine.location),
                ("Reason", fine.reason),
                ("Vehicle", fine.vehicle),
            ):
                if value:
                    fields.append((label, value))
        fields.append(("Subject", self.SUBJECTS[document.appeal_type]))
        return fields

    def _meta_segments(self, label: str, value: str) -> tuple[PlacedSegment, ...]:
        cfg = self._config
        label_text = f"{label}: "
        label_width = stringWidth(label_text, cfg.font_bold, cfg.meta_font_size)
        value_text = self._fit(
            " ".join(value.split()),
            cfg.font_regular,
            cfg.meta_font_size,
            cfg.usable_width - label_width,
        )
        return (
            PlacedSegment(text=label_text, x=cfg.margin_left, width=label_width, bold=True),
            PlacedSegment(
                text=value_text,
                x=cfg.margin_left + label_width,
                width=stringWidth(value_text, cfg.font_regular, cfg.meta_font_size),
            ),
        )

    # ------------------------------------------------------------------
    # Word wrapping
    # ------------------------------------------------------------------

    def _wrap(self, segments: list[StyledSegment]) -> list[tuple[PlacedSegment, ...]]:
        usable = self._config.usable_width
        lines: list[tuple[PlacedSegment, ...]] = []
        current: list[_Piece] = []
        width = 0.0

        for piece in self._tokenize(segments):
            text, bold, italic = piece
            piece_width = self._width(text, bold, italic)
            if text.isspace():
                if not current and lines:
                    continue
                current.append(piece)
                width += piece_width
                continue
            if current and width + piece_width > usable:
                lines.append(self._place(current))
                current, width = [], 0.0
            if piece_width > usable:
                chunks = self._break_word(piece)
                for chunk in chunks[:-1]:
                    lines.append(self._place([chunk]))
                piece = chunks[-1]
                piece_width = self._width(*piece)
            current.append(piece)
            width += piece_width

        if current:
            lines.append(self._place(current))
        return [line for line in lines if line]

    @staticmethod
    def _tokenize(segments: list[StyledSegment]) -> list[_Piece]:
        return [
            (token, segment.bold, segment.italic)
            for segment in segments
            for token in _TOKEN_RE.findall(segment.text.replace("\t", "    "))
        ]

    def _break_word(self, piece: _Piece) -> list[_Piece]:
        text, bold, italic = piece
        usable = self._config.usable_width
        chunks: list[_Piece] = []
        buf = ""
        for ch in text:
            if buf and self._width(buf + ch, bold, italic) > usable:
                chunks.append((buf, bold, italic))
                buf = ""
            buf += ch
        chunks.append((buf, bold, italic))
        return chunks

    def _place(self, pieces: list[_Piece]) -> tuple[PlacedSegment, ...]:
        while pieces and pieces[-1][0].isspace():
            pieces = pieces[:-1]
        merged: list[_Piece] = []
        for text, bold, italic in pieces:
            if merged and merged[-1][1:] == (bold, italic):
                merged[-1] = (merged[-1][0] + text, bold, italic)
            else:
                merged.append((text, bold, italic))

        placed: list[PlacedSegment] = []
        x = self._config.margin_left
        for text, bold, italic in merged:
            segment_width = self._width(text, bold, italic)
            placed.append(
                PlacedSegment(text=text, x=x, width=segment_width, bold=bold, italic=italic)
            )
            x += segment_width
        return tuple(placed)

    def _width(self, text: str, bold: bool, italic: bool) -> float:
        cfg = self._config
        return stringWidth(text, cfg.font_for(bold, italic), cfg.font_size)

    def _fit(
        self,
        text: str,
        font: str,
        size: float,
        max_width: float | None = None,
    ) -> str:
        limit = self._config.usable_width if max_width is None else max_width
        if stringWidth(text, font, size) <= limit:
            return text
        while text and stringWidth(text + _ELLIPSIS, font, size) > limit:
            text = text[:-1]
        return text.rstrip() + _ELLIPSIS

    # ------------------------------------------------------------------
    # Pass 2: footers
    # ------------------------------------------------------------------

    def _stamp_footers(self, pages: list[RenderedPage], document: AppealDocument) -> None:
        total = len(pages)
        reference_line = self.footer_reference_line(document)
        for page in pages:
            page.footer_lines = (
                reference_line,
                f"{self._generator} - page {page.number} of {total}",
            )
