from fine_appeal.exceptions import ExtractionError


class PdfExtractionError(ExtractionError):
    """Raised when a PDF cannot be opened or its text cannot be read."""
