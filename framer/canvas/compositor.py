from __future__ import annotations

import numpy as np

from framer.canvas.blend import alpha_over_array
from framer.canvas.geometry import visible_region
from framer.canvas.types import Rect
from framer.errors import DimensionMismatch


def _check_inputs(
    background: np.ndarray,
    shadow: np.ndarray | None,
    source: np.ndarray,
    mask: np.ndarray,
    placed_rect: Rect,
) -> None:
    if background.ndim != 3 or background.shape[2] != 4:
        raise DimensionMismatch(f"background must be RGBA (h, w, 4), got {background.shape}")
    if shadow is not None and shadow.shape != background.shape:
        raise DimensionMismatch(
            f"shadow shape mismatch: shadow={shadow.shape}, background={background.shape}"
        )
    rect_hw = (placed_rect.height, placed_rect.width)
    if source.shape != (*rect_hw, 4):
        raise DimensionMismatch(f"source shape mismatch: source={source.shape}, rect={rect_hw}")
    if mask.shape != rect_hw:
        raise DimensionMismatch(f"mask shape mismatch: mask={mask.shape}, rect={rect_hw}")


def apply_mask(source: np.ndarray, mask: np.ndarray) -> np.ndarray:
    """Multiply the source alpha channel by mask coverage (0..255)."""
    masked = source.copy()
    alpha = source[..., 3].astype(np.float64) * (mask.astype(np.float64) / 255.0)
    masked[..., 3] = np.clip(np.round(alpha), 0, 255).astype(np.uint8)
    return masked


def composite(
    background: np.ndarray,
    shadow: np.ndarray | None,
    source: np.ndarray,
    mask: np.ndarray,
    placed_rect: Rect,
) -> np.ndarray:
    """Stack background, shadow and the masked source into a new canvas."""
    _check_inputs(background, shadow, source, mask, placed_rect)

    canvas = background.copy()
    if shadow is not None:
        canvas = alpha_over_array(shadow, canvas)

    canvas_h, canvas_w = canvas.shape[:2]
    region = visible_region(placed_rect, canvas_w, canvas_h)
    if region is None:
        return canvas

    dst, src = region
    masked = apply_mask(source[src], mask[src])
    canvas[dst] = alpha_over_array(masked, canvas[dst])
    return canvas
