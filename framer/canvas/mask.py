from __future__ import annotations

import math

import numpy as np

from framer.errors import InvalidRadius


def corner_radius_px(width: int, height: int, radius_percent: float) -> float:
    return radius_percent / 100.0 * min(width, height) / 2.0


def make_rounded_mask(width: int, height: int, radius_percent: float) -> np.ndarray:
    """Return a uint8 coverage mask (h, w) for a rounded rectangle.

    Coverage falls off linearly over one pixel across each corner arc,
    measured from the pixel center to the corner circle. Straight edges and
    the interior are fully covered.
    """
    if width <= 0 or height <= 0:
        raise InvalidRadius(f"mask dimensions must be positive: {width}x{height}")
    if not math.isfinite(radius_percent) or not 0.0 <= radius_percent <= 100.0:
        raise InvalidRadius(f"radius_percent must be within 0..100: {radius_percent}")

    mask = np.full((height, width), 255, dtype=np.uint8)
    r = min(corner_radius_px(width, height, radius_percent), min(width, height) / 2.0)
    if r <= 0.0:
        return mask

    px = np.arange(width, dtype=np.float64)[None, :] + 0.5
    py = np.arange(height, dtype=np.float64)[:, None] + 0.5

    in_corner_x = (px <= r) | (px >= width - r)
    in_corner_y = (py <= r) | (py >= height - r)
    in_corner = in_corner_x & in_corner_y

    # Nearest corner-circle center for every pixel center.
    cx = np.clip(px, r, width - r)
    cy = np.clip(py, r, height - r)
    dist = np.hypot(px - cx, py - cy)

    coverage = np.clip(r + 0.5 - dist, 0.0, 1.0)
    values = np.round(coverage * 255.0).astype(np.uint8)
    mask[in_corner] = values[in_corner]
    return mask
