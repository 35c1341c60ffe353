from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from framer.canvas.background import synthesize_background
from framer.canvas.compositor import composite
from framer.canvas.geometry import resolve_geometry
from framer.canvas.mask import make_rounded_mask
from framer.canvas.shadow import synthesize_shadow
from framer.canvas.types import FrameOptions, FrameResult
from framer.errors import DimensionMismatch
from framer.storage.local import load_rgba, save_rgba

logger = logging.getLogger(__name__)


def _silhouette(mask: np.ndarray, source: np.ndarray) -> np.ndarray:
    # Transparent source pixels cast no shadow.
    alpha = source[..., 3].astype(np.float32) / 255.0
    return np.round(mask.astype(np.float32) * alpha).astype(np.uint8)


def frame_image(
    source: np.ndarray,
    options: FrameOptions,
    *,
    workers: int | None = None,
) -> FrameResult:
    if source.ndim != 3 or source.shape[2] != 4 or source.dtype != np.uint8:
        raise DimensionMismatch(
            f"source must be uint8 RGBA (h, w, 4), got {source.dtype} {source.shape}"
        )
    started = time.perf_counter()
    src_h, src_w = source.shape[:2]

    geometry = resolve_geometry(
        (src_w, src_h),
        options.scale_percent,
        options.ratio,
        options.offset,
    )
    rect = geometry.placed_rect
    logger.debug(
        "geometry: source=%dx%d canvas=%dx%d placed=(%d, %d)",
        src_w,
        src_h,
        geometry.canvas_width,
        geometry.canvas_height,
        rect.x,
        rect.y,
    )

    with ThreadPoolExecutor(max_workers=2) as pool:
        background_future = pool.submit(
            synthesize_background,
            options.background,
            geometry.canvas_width,
            geometry.canvas_height,
        )
        mask_future = pool.submit(make_rounded_mask, rect.width, rect.height, options.roundness)
        background = background_future.result()
        mask = mask_future.result()
    logger.debug("background: %s", type(options.background).__name__)

    shadow = None
    if options.shadow is not None:
        logger.debug(
            "shadow: offset=%s radius=%.2f opacity=%.2f",
            options.shadow.offset,
            options.shadow.blur_radius,
            options.shadow.opacity,
        )
        shadow = synthesize_shadow(
            options.shadow,
            _silhouette(mask, source),
            rect,
            geometry.canvas_size,
            workers=workers,
        )

    image = composite(background, shadow, source, mask, rect)
    elapsed_ms = (time.perf_counter() - started) * 1000.0
    logger.debug("framed in %.1f ms", elapsed_ms)

    return FrameResult(
        image=image,
        geometry=geometry,
        used_shadow=shadow is not None,
        elapsed_ms=elapsed_ms,
    )


def run_frame_job(
    input_path: str,
    output_path: str,
    options: FrameOptions,
    *,
    workers: int | None = None,
) -> FrameResult:
    source = load_rgba(input_path)
    result = frame_image(source, options, workers=workers)
    save_rgba(output_path, result.image)
    logger.info(
        "framed %s -> %s (%dx%d)",
        input_path,
        output_path,
        result.geometry.canvas_width,
        result.geometry.canvas_height,
    )
    return result
