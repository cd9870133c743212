"""Inline emphasis markup: ``**bold**`` and ``_italic_``.

Each line is scanned left to right by a three-state machine (normal, bold,
italic). Styles do not nest: inside a bold run an underscore is literal text,
and inside an italic run a double asterisk is literal text. A delimiter only
opens a run when its matching closer appears later on the same line, so a
stray ``**`` or ``_`` is kept as written. Underscores inside words
(``snake_case``) never open or close an italic run.

Bold and italic runs may both appear on one line, one after the other; a
line is not limited to whichever marker type is seen first.
"""

from dataclasses import dataclass
from enum import Enum

BOLD_DELIMITER = "**"
ITALIC_DELIMITER = "_"


@dataclass(frozen=True)
class StyledSegment:
    """A run of text sharing one style."""

    text: str
    bold: bool = False
    italic: bool = False


class _State(Enum):
    NORMAL = "normal"
    IN_BOLD = "bold"
    IN_ITALIC = "italic"


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == ITALIC_DELIMITER


def _find_bold_close(line: str, start: int) -> int:
    close = line.find(BOLD_DELIMITER, start + len(BOLD_DELIMITER))
    if close == start + len(BOLD_DELIMITER):
        return -1
    return close


def _find_italic_close(line: str, start: int) -> int:
    if start > 0 and _is_word_char(line[start - 1]):
        return -1
    body_start = start + 1
    if body_start >= len(line) or line[body_start].isspace() or line[body_start] == ITALIC_DELIMITER:
        return -1
    pos = line.find(ITALIC_DELIMITER, body_start + 1)
    while pos != -1:
        before = line[pos - 1]
        after_ok = pos + 1 == len(line) or not _is_word_char(line[pos + 1])
        if not before.isspace() and before != ITALIC_DELIMITER and after_ok:
            return pos
        pos = line.find(ITALIC_DELIMITER, pos + 1)
    return -1


def parse_line(line: str) -> list[StyledSegment]:
    """Split one line into styled segments, dropping honored delimiters."""
    segments: list[StyledSegment] = []
    buf: list[str] = []
    state = _State.NORMAL
    closer = -1
    i = 0

    def flush() -> None:
        if buf:
            segments.append(
                StyledSegment(
                    text="".join(buf),
                    bold=state is _State.IN_BOLD,
                    italic=state is _State.IN_ITALIC,
                )
            )
            buf.clear()

    while i < len(line):
        if state is _State.NORMAL:
            if line.startswith(BOLD_DELIMITER, i):
                close = _find_bold_close(line, i)
                if close != -1:
                    flush()
                    state, closer = _State.IN_BOLD, close
                    i += len(BOLD_DELIMITER)
                    continue
            elif line[i] == ITALIC_DELIMITER:
                close = _find_italic_close(line, i)
                if close != -1:
                    flush()
                    state, closer = _State.IN_ITALIC, close
                    i += len(ITALIC_DELIMITER)
                    continue
        elif i == closer:
            flush()
            delimiter = BOLD_DELIMITER if state is _State.IN_BOLD else ITALIC_DELIMITER
            state, closer = _State.NORMAL, -1
            i += len(delimiter)
            continue
        buf.append(line[i])
        i += 1

    flush()
    return segments


def parse_text(text: str) -> list[list[StyledSegment]]:
    """Parse every line of a text block. Blank lines yield empty lists."""
    return [parse_line(line) for line in text.splitlines()]


def strip_markup(text: str) -> str:
    """Return text with honored emphasis delimiters removed."""
    return "\n".join(
        "".join(segment.text for segment in segments) for segments in parse_text(text)
    )
