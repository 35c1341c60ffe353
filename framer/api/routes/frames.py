from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from fastapi.responses import Response
from pydantic import ValidationError

from framer.canvas.pipeline import frame_image, run_frame_job
from framer.config import settings
from framer.errors import DimensionMismatch, FramerError
from framer.schemas import FrameFileRequest, FrameRequest, FrameResponse
from framer.security.path_guard import ensure_safe_input_path, ensure_safe_output_path
from framer.storage.local import decode_rgba, encode_png, load_rgba

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/frames", tags=["frames"])

_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp", ".bmp", ".gif", ".tif", ".tiff"}


def _load_guarded_image(path: str) -> np.ndarray:
    # imag: backgrounds from HTTP clients must stay inside the data roots.
    return load_rgba(ensure_safe_input_path(path))


def _http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, DimensionMismatch):
        logger.error("frame composition failed: %s", exc)
        return HTTPException(status_code=500, detail="frame composition failed")
    if isinstance(exc, FileNotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    return HTTPException(status_code=400, detail=str(exc))


@router.post("", response_model=FrameResponse)
def create_frame(payload: FrameFileRequest) -> FrameResponse:
    try:
        input_path = ensure_safe_input_path(payload.input_path)
        output_path = ensure_safe_output_path(payload.output_path)
        options = payload.to_options(_load_guarded_image)
        result = run_frame_job(input_path, output_path, options)
    except (FramerError, ValueError, FileNotFoundError) as exc:
        raise _http_error(exc) from exc

    rect = result.geometry.placed_rect
    return FrameResponse(
        output_path=output_path,
        canvas_width=result.geometry.canvas_width,
        canvas_height=result.geometry.canvas_height,
        placed_x=rect.x,
        placed_y=rect.y,
        used_shadow=result.used_shadow,
        elapsed_ms=result.elapsed_ms,
    )


@router.post(
    "/upload",
    response_class=Response,
    responses={200: {"content": {"image/png": {}}}},
)
def create_frame_upload(
    image: UploadFile = File(...),
    scale: float = Form(default=settings.default_scale),
    background: str = Form(default=settings.default_background),
    ratio: str | None = Form(default=None),
    roundness: float = Form(default=0.0),
    offset: str = Form(default="0,0"),
    shadow_offset: str | None = Form(default=None),
    shadow_color: str = Form(default=settings.default_shadow_color),
    shadow_radius: float = Form(default=settings.default_shadow_radius),
    shadow_opacity: float = Form(default=settings.default_shadow_opacity),
) -> Response:
    ext = Path(image.filename or "").suffix.lower()
    if ext not in _IMAGE_EXTENSIONS:
        raise HTTPException(status_code=400, detail=f"Unsupported image extension: {ext or '(none)'}")

    try:
        request = FrameRequest(
            scale=scale,
            background=background,
            ratio=ratio,
            roundness=roundness,
            offset=offset,
            shadow_offset=shadow_offset,
            shadow_color=shadow_color,
            shadow_radius=shadow_radius,
            shadow_opacity=shadow_opacity,
        )
    except ValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail=exc.errors(include_url=False, include_context=False),
        ) from exc

    try:
        data = image.file.read(settings.max_upload_bytes + 1)
    finally:
        try:
            image.file.close()
        except Exception:
            pass
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="Uploaded image is too large")

    try:
        source = decode_rgba(data)
        options = request.to_options(_load_guarded_image)
        result = frame_image(source, options)
    except (FramerError, ValueError, FileNotFoundError) as exc:
        raise _http_error(exc) from exc

    logger.info(
        "framed upload %s: %dx%d in %.1f ms",
        image.filename,
        result.geometry.canvas_width,
        result.geometry.canvas_height,
        result.elapsed_ms,
    )
    return Response(
        content=encode_png(result.image),
        media_type="image/png",
        headers={
            "X-Canvas-Width": str(result.geometry.canvas_width),
            "X-Canvas-Height": str(result.geometry.canvas_height),
        },
    )
