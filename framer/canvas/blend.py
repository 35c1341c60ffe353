"""Straight-alpha "over" blending.

Both forms below implement the same law, channel by channel, in the
image's own (gamma-encoded) space:

    a_out = a_s + a_d * (1 - a_s)
    c_out = (c_s * a_s + c_d * a_d * (1 - a_s)) / a_out

Over an opaque destination this is ``a_s * fg + (1 - a_s) * bg``. A fully
transparent source leaves the destination untouched.
"""

from __future__ import annotations

import numpy as np

from framer.canvas.types import Color


def alpha_over(src: Color, dst: Color) -> Color:
    sa = src.a / 255.0
    if sa == 0.0:
        return dst
    da = dst.a / 255.0
    out_a = sa + da * (1.0 - sa)
    if out_a == 0.0:
        return Color(0, 0, 0, 0)

    def channel(cs: int, cd: int) -> int:
        value = (cs * sa + cd * da * (1.0 - sa)) / out_a
        return int(min(255.0, max(0.0, round(value))))

    return Color(
        channel(src.r, dst.r),
        channel(src.g, dst.g),
        channel(src.b, dst.b),
        int(min(255.0, max(0.0, round(out_a * 255.0)))),
    )


def alpha_over_array(src: np.ndarray, dst: np.ndarray) -> np.ndarray:
    """Vectorized :func:`alpha_over` for uint8 RGBA arrays of equal shape."""
    if src.shape != dst.shape or src.shape[-1] != 4:
        raise ValueError(f"alpha_over_array shape mismatch: src={src.shape}, dst={dst.shape}")

    s = src.astype(np.float64)
    d = dst.astype(np.float64)
    sa = s[..., 3:4] / 255.0
    da = d[..., 3:4] / 255.0
    out_a = sa + da * (1.0 - sa)

    safe_a = np.where(out_a > 0.0, out_a, 1.0)
    rgb = (s[..., :3] * sa + d[..., :3] * da * (1.0 - sa)) / safe_a
    rgb = np.where(out_a > 0.0, rgb, 0.0)

    out = np.empty(src.shape, dtype=np.uint8)
    out[..., :3] = np.clip(np.round(rgb), 0, 255)
    out[..., 3:4] = np.clip(np.round(out_a * 255.0), 0, 255)

    untouched = src[..., 3] == 0
    out[untouched] = dst[untouched]
    return out
