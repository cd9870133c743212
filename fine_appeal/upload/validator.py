"""Upload type/size checks that run before any extraction work."""

from typing import ClassVar

from fine_appeal.exceptions import ValidationError
from fine_appeal.upload.models import FileValidationResult, UploadedFile

PDF_MIME_TYPE = "application/pdf"
JPEG_MIME_TYPE = "image/jpeg"
PNG_MIME_TYPE = "image/png"

DEFAULT_MAX_SIZE_BYTES = 10 * 1024 * 1024


def normalize_mime_type(mime_type: str) -> str:
    """Lowercase a declared MIME type and drop parameters such as charset."""
    base = mime_type.split(";", 1)[0].strip().lower()
    if base == "image/jpg":
        return JPEG_MIME_TYPE
    return base


class FileValidator:
    """Rejects uploads whose declared type or size is not acceptable."""

    ACCEPTED_MIME_TYPES: ClassVar[frozenset[str]] = frozenset(
        {PDF_MIME_TYPE, JPEG_MIME_TYPE, PNG_MIME_TYPE}
    )

    def __init__(self, max_size_bytes: int = DEFAULT_MAX_SIZE_BYTES) -> None:
        if max_size_bytes <= 0:
            raise ValueError("max_size_bytes must be positive")
        self._max_size_bytes = max_size_bytes

    @property
    def max_size_bytes(self) -> int:
        return self._max_size_bytes

    def validate(self, file: UploadedFile) -> FileValidationResult:
        declared = file.size_bytes if file.size_bytes is not None else 0
        reason = (
            self._type_problem(file.mime_type)
            or self._empty_problem(file)
            or self._size_problem(max(declared, file.actual_size))
        )
        return FileValidationResult.invalid(reason) if reason else FileValidationResult.ok()

    def validate_declared(self, mime_type: str, size_bytes: int | None) -> FileValidationResult:
        """Check what is known before the body is read: type and declared size."""
        reason = self._type_problem(mime_type) or self._size_problem(size_bytes or 0)
        return FileValidationResult.invalid(reason) if reason else FileValidationResult.ok()

    def check(self, file: UploadedFile) -> None:
        """Validate the upload and raise on the first problem.

        Raises:
            ValidationError: if the upload is not acceptable.
        """
        self._raise_if_invalid(self.validate(file))

    def check_declared(self, mime_type: str, size_bytes: int | None) -> None:
        """Reject an upload from its headers alone.

        Raises:
            ValidationError: if the declared type or size is not acceptable.
        """
        self._raise_if_invalid(self.validate_declared(mime_type, size_bytes))

    @staticmethod
    def _raise_if_invalid(result: FileValidationResult) -> None:
        if not result.valid:
            raise ValidationError(result.reason)

    def _type_problem(self, mime_type: str | None) -> str:
        if normalize_mime_type(mime_type or "") in self.ACCEPTED_MIME_TYPES:
            return ""
        return (
            f"Unsupported file type '{mime_type or ''}'. "
            "Please upload a PDF, JPG, or PNG file."
        )

    @staticmethod
    def _empty_problem(file: UploadedFile) -> str:
        if file.actual_size == 0 or file.size_bytes == 0:
            return "Uploaded file is empty"
        return ""

    def _size_problem(self, size_bytes: int) -> str:
        if size_bytes <= self._max_size_bytes:
            return ""
        limit_mb = self._max_size_bytes / (1024 * 1024)
        return f"File is too large. Maximum size is {limit_mb:g}MB."
