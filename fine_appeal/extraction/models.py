from dataclasses import dataclass


@dataclass(frozen=True)
class TextContent:
    """Plain text pulled out of a document."""

    text: str


@dataclass(frozen=True)
class ImageContent:
    """Transcoded image payload ready to be attached to an inference call."""

    data: bytes
    mime_type: str
    width: int = 0
    height: int = 0


ExtractedContent = TextContent | ImageContent
