from dataclasses import dataclass


@dataclass(frozen=True)
class UploadedFile:
    """An uploaded file as received from the client. Never persisted."""

    content: bytes
    mime_type: str
    size_bytes: int | None = None
    filename: str = ""

    @property
    def actual_size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class FileValidationResult:
    """Outcome of validating an upload: either valid or carrying a reason."""

    valid: bool
    reason: str = ""

    @classmethod
    def ok(cls) -> "FileValidationResult":
        return cls(valid=True)

    @classmethod
    def invalid(cls, reason: str) -> "FileValidationResult":
        return cls(valid=False, reason=reason)
