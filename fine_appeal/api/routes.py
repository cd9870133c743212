import asyncio
from collections.abc import Callable
from typing import Any, TypeVar

from fastapi import APIRouter, File, Request, UploadFile
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from fine_appeal.api.schemas import ExportRequest, GenerateAppealRequest
from fine_appeal.appeal.composer import AppealComposer
from fine_appeal.config.settings import Settings
from fine_appeal.exceptions import ConfigurationError, InferenceTimeoutError, ValidationError
from fine_appeal.rendering.renderer import ExportArtifact, MarkupRenderer
from fine_appeal.upload.models import UploadedFile
from fine_appeal.upload.validator import FileValidator

T = TypeVar("T")

health_router = APIRouter(tags=["health"])
router = APIRouter(prefix="/api", tags=["appeals"])


@health_router.get("/health")
def health_check() -> dict[str, str]:
    return {"status": "ok"}


def _composer(request: Request) -> AppealComposer:
    composer: AppealComposer | None = request.app.state.composer
    if composer is None:
        reason = getattr(request.app.state, "configuration_error", "") or "Missing API key"
        raise ConfigurationError(f"Server configuration error: {reason}")
    return composer


async def _run_pipeline(settings: Settings, func: Callable[..., T], *args: Any) -> T:
    """Run one blocking pipeline stage off the event loop under a wall-clock limit."""
    timeout = settings.pipeline_timeout_seconds
    try:
        return await asyncio.wait_for(run_in_threadpool(func, *args), timeout=timeout)
    except asyncio.TimeoutError as exc:
        raise InferenceTimeoutError(f"Processing timed out after {timeout} seconds") from exc


def _download(artifact: ExportArtifact) -> Response:
    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={"Content-Disposition": f'attachment; filename="{artifact.filename}"'},
    )


@router.post("/analyze")
async def analyze_fine(
    request: Request,
    file: UploadFile | None = File(default=None),
) -> dict[str, dict[str, str]]:
    composer = _composer(request)
    if file is None:
        raise ValidationError("No file provided")
    validator: FileValidator = request.app.state.validator
    validator.check_declared(file.content_type or "", file.size)
    data = await file.read()
    upload = UploadedFile(
        content=data,
        mime_type=file.content_type or "",
        size_bytes=file.size,
        filename=file.filename or "",
    )
    record = await _run_pipeline(request.app.state.settings, composer.analyze_fine, upload)
    return {"fineInfo": record.to_dict()}


@router.post("/generate-appeal")
async def generate_appeal(request: Request, body: GenerateAppealRequest) -> dict[str, str]:
    composer = _composer(request)
    document = await _run_pipeline(
        request.app.state.settings,
        composer.generate_appeal,
        body.fine_info.to_record(),
        body.appeal_options.to_options(),
    )
    return {"appealText": document.text}


@router.post("/export/pdf")
async def export_pdf(request: Request, body: ExportRequest) -> Response:
    renderer: MarkupRenderer = request.app.state.renderer
    artifact = await run_in_threadpool(renderer.render_pdf, body.to_document())
    return _download(artifact)


@router.post("/export/txt")
async def export_txt(request: Request, body: ExportRequest) -> Response:
    renderer: MarkupRenderer = request.app.state.renderer
    return _download(renderer.render_text(body.to_document()))
