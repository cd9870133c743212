from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from fine_appeal.api.error_handlers import (
    pipeline_error_handler,
    request_validation_handler,
    unexpected_error_handler,
)
from fine_appeal.api.routes import health_router, router
from fine_appeal.appeal.composer import AppealComposer, build_composer
from fine_appeal.config.settings import Settings
from fine_appeal.exceptions import AppealPipelineError, ConfigurationError
from fine_appeal.logging.logger import Log
from fine_appeal.rendering.renderer import MarkupRenderer
from fine_appeal.upload.validator import FileValidator


def create_app(
    settings: Settings | None = None,
    composer: AppealComposer | None = None,
) -> FastAPI:
    """Build the HTTP application around one process-wide composer.

    A missing inference configuration does not stop the app from starting:
    the pipeline endpoints answer 503 until it is fixed, while export and
    health keep working.
    """
    settings = settings or Settings()
    app = FastAPI(title="Fine Appeal API", version="0.1.0")
    app.state.settings = settings
    app.state.configuration_error = ""
    if composer is None:
        try:
            composer = build_composer(settings)
        except ConfigurationError as exc:
            Log.error(f"Appeal pipeline unavailable: {exc}")
            app.state.configuration_error = str(exc)
    app.state.composer = composer
    app.state.renderer = MarkupRenderer.from_settings(settings)
    app.state.validator = FileValidator(max_size_bytes=settings.max_upload_size_bytes)

    app.add_exception_handler(AppealPipelineError, pipeline_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    app.include_router(health_router)
    app.include_router(router)
    return app
