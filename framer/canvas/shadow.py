from __future__ import annotations

import math

import numpy as np

from framer.canvas.blur import gaussian_blur
from framer.canvas.geometry import visible_region
from framer.canvas.types import Rect, ShadowSpec
from framer.errors import InvalidShadow


def _validate(spec: ShadowSpec) -> None:
    if not math.isfinite(spec.opacity) or not 0.0 <= spec.opacity <= 1.0:
        raise InvalidShadow(f"shadow opacity must be within 0..1: {spec.opacity}")
    if not math.isfinite(spec.blur_radius) or spec.blur_radius < 0.0:
        raise InvalidShadow(f"shadow blur radius must be non-negative: {spec.blur_radius}")


def synthesize_shadow(
    spec: ShadowSpec,
    mask: np.ndarray,
    placed_rect: Rect,
    canvas_dims: tuple[int, int],
    *,
    workers: int | None = None,
) -> np.ndarray:
    """Render a canvas-sized RGBA drop shadow for the masked source shape.

    The silhouette is painted at ``placed_rect`` moved by ``spec.offset``
    (raster coordinates), scaled by ``spec.opacity``, blurred with a Gaussian
    of sigma ``spec.blur_radius`` and tinted with ``spec.color``.
    """
    _validate(spec)
    if mask.shape != (placed_rect.height, placed_rect.width):
        raise InvalidShadow(
            "mask shape mismatch: "
            f"mask={mask.shape}, rect={(placed_rect.height, placed_rect.width)}"
        )
    canvas_w, canvas_h = canvas_dims
    if canvas_w <= 0 or canvas_h <= 0:
        raise InvalidShadow(f"canvas dimensions must be positive: {canvas_w}x{canvas_h}")

    # Pad so silhouette parts just off the canvas still bleed back in.
    pad = spec.kernel_half_width
    alpha = np.zeros((canvas_h + 2 * pad, canvas_w + 2 * pad), dtype=np.float32)

    dx, dy = spec.offset
    target = placed_rect.translated(int(dx) + pad, int(dy) + pad)
    region = visible_region(target, alpha.shape[1], alpha.shape[0])
    if region is not None:
        dst, src = region
        alpha[dst] = mask[src].astype(np.float32) / 255.0 * spec.opacity

    blurred = gaussian_blur(alpha, spec.blur_radius, workers=workers)
    blurred = blurred[pad : pad + canvas_h, pad : pad + canvas_w]

    a8 = np.clip(np.round(blurred * spec.color.a), 0, 255).astype(np.uint8)

    layer = np.zeros((canvas_h, canvas_w, 4), dtype=np.uint8)
    tinted = a8 > 0
    layer[tinted, 0] = spec.color.r
    layer[tinted, 1] = spec.color.g
    layer[tinted, 2] = spec.color.b
    layer[..., 3] = a8
    return layer
