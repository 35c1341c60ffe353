from __future__ import annotations

import math

from framer.canvas.types import AspectRatio, Geometry, Rect
from framer.errors import InvalidGeometry


def _canvas_size(
    width: int,
    height: int,
    factor: float,
    target_ratio: AspectRatio | None,
) -> tuple[int, int]:
    if target_ratio is None:
        return int(round(width * factor)), int(round(height * factor))

    ratio = target_ratio.as_float()
    if ratio > width / height:
        canvas_h = int(round(height * factor))
        canvas_w = int(round(canvas_h * ratio))
    else:
        canvas_w = int(round(width * factor))
        canvas_h = int(round(canvas_w / ratio))
    return canvas_w, canvas_h


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def resolve_geometry(
    source_dims: tuple[int, int],
    scale_percent: float = 110.0,
    target_ratio: AspectRatio | None = None,
    offset: tuple[int, int] = (0, 0),
) -> Geometry:
    """Size the canvas around a source image and place the source inside it.

    The source keeps its pixel size; the canvas grows (or shrinks) by
    ``scale_percent / 100`` and is then padded out to ``target_ratio``.
    ``offset`` is (right, up) in pixels from the centered position.
    """
    width, height = source_dims
    if width <= 0 or height <= 0:
        raise InvalidGeometry(f"source dimensions must be positive: {width}x{height}")
    if not math.isfinite(scale_percent) or scale_percent <= 0:
        raise InvalidGeometry(f"scale_percent must be positive: {scale_percent}")
    if target_ratio is not None and (target_ratio.width <= 0 or target_ratio.height <= 0):
        raise InvalidGeometry(
            f"target ratio must be positive: {target_ratio.width}:{target_ratio.height}"
        )

    canvas_w, canvas_h = _canvas_size(width, height, scale_percent / 100.0, target_ratio)
    if canvas_w <= 0 or canvas_h <= 0:
        raise InvalidGeometry(f"canvas rounds to zero area: {canvas_w}x{canvas_h}")

    dx, dy = offset
    x = (canvas_w - width) // 2 + int(dx)
    # Offset y points up; raster rows grow downwards.
    y = (canvas_h - height) // 2 - int(dy)

    # Keep at least one source pixel on the canvas.
    x = _clamp(x, 1 - width, canvas_w - 1)
    y = _clamp(y, 1 - height, canvas_h - 1)

    return Geometry(
        canvas_width=canvas_w,
        canvas_height=canvas_h,
        placed_rect=Rect(x=x, y=y, width=width, height=height),
    )


def visible_region(
    rect: Rect,
    canvas_width: int,
    canvas_height: int,
) -> tuple[tuple[slice, slice], tuple[slice, slice]] | None:
    """Return (canvas_slices, rect_slices) for the on-canvas part of ``rect``."""
    x1 = max(0, rect.x)
    y1 = max(0, rect.y)
    x2 = min(canvas_width, rect.right)
    y2 = min(canvas_height, rect.bottom)
    if x2 <= x1 or y2 <= y1:
        return None
    canvas_slices = (slice(y1, y2), slice(x1, x2))
    rect_slices = (slice(y1 - rect.y, y2 - rect.y), slice(x1 - rect.x, x2 - rect.x))
    return canvas_slices, rect_slices
