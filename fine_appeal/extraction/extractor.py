from fine_appeal.exceptions import ExtractionError
from fine_appeal.extraction.image_transcoder import ImageTranscoder
from fine_appeal.extraction.models import ExtractedContent, TextContent
from fine_appeal.logging.logger import Log
from fine_appeal.pdf.base import BasePdfExtractor
from fine_appeal.upload.models import UploadedFile
from fine_appeal.upload.validator import (
    JPEG_MIME_TYPE,
    PDF_MIME_TYPE,
    PNG_MIME_TYPE,
    normalize_mime_type,
)


class ContentExtractor:
    """Turns a validated upload into text or a transcoded image."""

    def __init__(
        self,
        pdf_extractor: BasePdfExtractor,
        image_transcoder: ImageTranscoder,
    ) -> None:
        self._pdf_extractor = pdf_extractor
        self._image_transcoder = image_transcoder

    def extract(self, file: UploadedFile) -> ExtractedContent:
        """Dispatch on MIME type to exactly one extraction path.

        Raises:
            ExtractionError: if the file yields no usable content.
        """
        mime_type = normalize_mime_type(file.mime_type)
        if mime_type == PDF_MIME_TYPE:
            return self._extract_document(file)
        if mime_type in (JPEG_MIME_TYPE, PNG_MIME_TYPE):
            content = self._image_transcoder.transcode(file.content)
            Log.info(
                f"Transcoded image to {content.width}x{content.height} "
                f"({len(content.data)} bytes)"
            )
            return content
        raise ExtractionError(f"No extraction path for type '{file.mime_type}'")

    def _extract_document(self, file: UploadedFile) -> TextContent:
        text = self._pdf_extractor.extract(file.content)
        if not text.strip():
            raise ExtractionError("Document contains no extractable text")
        Log.info(f"Extracted {len(text)} chars from document")
        return TextContent(text=text)
