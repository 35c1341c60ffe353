from __future__ import annotations

import numpy as np
from PIL import Image

from framer.canvas.types import (
    BackgroundSpec,
    Color,
    GradientBackground,
    GradientSpec,
    ImageFillBackground,
    SolidBackground,
)
from framer.config import settings
from framer.errors import InvalidBackground

_RESAMPLE_FILTERS = {
    "lanczos": Image.Resampling.LANCZOS,
    "bicubic": Image.Resampling.BICUBIC,
    "bilinear": Image.Resampling.BILINEAR,
    "nearest": Image.Resampling.NEAREST,
}


def resample_filter(name: str | None = None) -> Image.Resampling:
    key = (name or settings.resample_filter).lower().strip()
    try:
        return _RESAMPLE_FILTERS[key]
    except KeyError:
        raise ValueError(f"unknown resample filter: {key}") from None


def _solid(color: Color, width: int, height: int) -> np.ndarray:
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[:, :] = color.as_tuple()
    return canvas


def _gradient_rows(gradient: GradientSpec, height: int) -> np.ndarray:
    stops = np.array([c.as_tuple() for c in gradient.stops], dtype=np.float64)
    segments = len(stops) - 1

    if height == 1:
        t = np.zeros(1, dtype=np.float64)
    else:
        t = np.arange(height, dtype=np.float64) / (height - 1)

    pos = t * segments
    index = np.minimum(np.floor(pos).astype(np.int64), segments - 1)
    local = (pos - index)[:, None]

    rows = stops[index] * (1.0 - local) + stops[index + 1] * local
    return np.clip(np.round(rows), 0, 255).astype(np.uint8)


def _gradient(gradient: GradientSpec, width: int, height: int) -> np.ndarray:
    rows = _gradient_rows(gradient, height)
    return np.ascontiguousarray(np.broadcast_to(rows[:, None, :], (height, width, 4)))


def cover_fit(pixels: np.ndarray, width: int, height: int) -> np.ndarray:
    """Scale ``pixels`` to cover width x height, cropping the centered overflow."""
    if pixels.ndim != 3 or pixels.shape[2] != 4:
        raise InvalidBackground(f"fill image must be RGBA (h, w, 4), got shape {pixels.shape}")
    src_h, src_w = pixels.shape[:2]
    if src_w == 0 or src_h == 0:
        raise InvalidBackground("fill image is empty")

    pil = Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8))
    s = max(width / src_w, height / src_h)
    cover_w = max(width, int(round(src_w * s)))
    cover_h = max(height, int(round(src_h * s)))
    cover = pil.resize((cover_w, cover_h), resample_filter())

    left = (cover_w - width) // 2
    top = (cover_h - height) // 2
    cropped = cover.crop((left, top, left + width, top + height))
    return np.array(cropped, dtype=np.uint8)


def synthesize_background(spec: BackgroundSpec, width: int, height: int) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise InvalidBackground(f"background dimensions must be positive: {width}x{height}")

    match spec:
        case SolidBackground(color=color):
            return _solid(color, width, height)
        case GradientBackground(gradient=gradient):
            return _gradient(gradient, width, height)
        case ImageFillBackground(pixels=pixels):
            return cover_fit(pixels, width, height)
        case _:
            raise InvalidBackground(f"unsupported background spec: {type(spec).__name__}")
