from dataclasses import dataclass, field
from enum import Enum

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm


class LineRole(str, Enum):
    TITLE = "title"
    META = "meta"
    HEADER = "header"
    BODY = "body"


@dataclass(frozen=True)
class LayoutConfig:
    """Page geometry and typography, in PDF points, measured from the top-left."""

    page_width: float = A4[0]
    page_height: float = A4[1]
    margin_left: float = 20 * mm
    margin_right: float = 20 * mm
    margin_top: float = 20 * mm
    margin_bottom: float = 15 * mm
    footer_height: float = 30.0

    font_regular: str = "Helvetica"
    font_bold: str = "Helvetica-Bold"
    font_italic: str = "Helvetica-Oblique"

    font_size: float = 11.0
    line_height: float = 15.0
    title_font_size: float = 16.0
    meta_font_size: float = 10.0
    meta_line_height: float = 14.0
    header_font_size: float = 9.0
    footer_font_size: float = 8.0

    @property
    def usable_width(self) -> float:
        return self.page_width - self.margin_left - self.margin_right

    @property
    def body_bottom(self) -> float:
        return self.page_height - self.margin_bottom - self.footer_height

    def footer_baselines(self) -> tuple[float, float]:
        return (self.body_bottom + 12.0, self.body_bottom + 24.0)

    def font_for(self, bold: bool, italic: bool) -> str:
        if bold:
            return self.font_bold
        if italic:
            return self.font_italic
        return self.font_regular


@dataclass(frozen=True)
class PlacedSegment:
    """A styled run positioned on the page."""

    text: str
    x: float
    width: float
    bold: bool = False
    italic: bool = False


@dataclass(frozen=True)
class RenderedLine:
    """One visual line: its baseline and the segments laid along it."""

    y: float
    segments: tuple[PlacedSegment, ...]
    font_size: float
    role: LineRole = LineRole.BODY

    @property
    def text(self) -> str:
        return "".join(segment.text for segment in self.segments)


@dataclass
class RenderedPage:
    """A laid-out page. Footer text is stamped once the page count is known."""

    number: int
    lines: list[RenderedLine] = field(default_factory=list)
    cursor: float = 0.0
    divider_y: float | None = None
    footer_lines: tuple[str, ...] = ()

    def body_lines(self) -> list[RenderedLine]:
        return [line for line in self.lines if line.role is LineRole.BODY]
