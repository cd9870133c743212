"""Maps pipeline failures to HTTP responses."""

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from fine_appeal.exceptions import (
    AppealPipelineError,
    ConfigurationError,
    ExtractionError,
    InferenceError,
    InferenceTimeoutError,
    ParseError,
    ValidationError,
)
from fine_appeal.logging.logger import Log

# Most specific first: InferenceTimeoutError is an InferenceError.
_STATUS_BY_ERROR: tuple[tuple[type[AppealPipelineError], int], ...] = (
    (ConfigurationError, 503),
    (ValidationError, 400),
    (ExtractionError, 422),
    (InferenceTimeoutError, 504),
    (InferenceError, 502),
    (ParseError, 500),
)


def status_for(exc: AppealPipelineError) -> int:
    for error_cls, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_cls):
            return status_code
    return 500


async def pipeline_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, AppealPipelineError):
        return await unexpected_error_handler(request, exc)
    status_code = status_for(exc)
    if status_code >= 500:
        Log.error(f"{request.url.path} failed ({type(exc).__name__}): {exc}")
    else:
        Log.warning(f"{request.url.path} rejected ({type(exc).__name__}): {exc}")
    return JSONResponse(status_code=status_code, content={"error": str(exc)})


async def request_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    details = exc.errors() if isinstance(exc, RequestValidationError) else []
    Log.warning(f"{request.url.path} rejected: invalid request body")
    return JSONResponse(
        status_code=400,
        content={
            "error": "Missing required information",
            "details": jsonable_encoder(details),
        },
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    Log.error(f"{request.url.path} crashed: {exc!r}")
    return JSONResponse(
        status_code=500,
        content={"error": "An error occurred while processing the request"},
    )
