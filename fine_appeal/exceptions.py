class AppealPipelineError(Exception):
    """Base exception for every failure surfaced by the appeal pipeline."""


class ConfigurationError(AppealPipelineError):
    """Raised when service credentials or bundled resources are missing."""


class ValidationError(AppealPipelineError):
    """Raised when an input has the wrong shape, type, or size."""


class ExtractionError(AppealPipelineError):
    """Raised when no usable content can be derived from an uploaded file."""


class InferenceError(AppealPipelineError):
    """Raised when the inference service call fails or returns nothing."""


class InferenceTimeoutError(InferenceError):
    """Raised when a pipeline invocation exceeds its wall-clock budget."""


class ParseError(AppealPipelineError):
    """Raised when inference output does not match the expected shape."""
