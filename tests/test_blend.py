from __future__ import annotations

import numpy as np
import pytest

from framer.canvas.blend import alpha_over, alpha_over_array
from framer.canvas.types import Color


@pytest.mark.parametrize(
    "src,dst,expected",
    [
        (Color(255, 0, 0, 128), Color(0, 0, 255, 255), Color(128, 0, 127, 255)),
        (Color(10, 20, 30, 255), Color(200, 200, 200, 255), Color(10, 20, 30, 255)),
        (Color(10, 20, 30, 0), Color(200, 100, 50, 77), Color(200, 100, 50, 77)),
        (Color(0, 0, 0, 0), Color(0, 0, 0, 0), Color(0, 0, 0, 0)),
        (Color(255, 255, 255, 128), Color(0, 0, 0, 0), Color(255, 255, 255, 128)),
    ],
)
def test_alpha_over_cases(src, dst, expected):
    assert alpha_over(src, dst) == expected


def test_array_form_matches_scalar_form():
    rng = np.random.default_rng(3)
    src = rng.integers(0, 256, size=(16, 16, 4), dtype=np.uint8)
    dst = rng.integers(0, 256, size=(16, 16, 4), dtype=np.uint8)
    src[0, :, 3] = 0
    src[1, :, 3] = 255
    dst[2, :, 3] = 0

    out = alpha_over_array(src, dst)
    for y in range(16):
        for x in range(16):
            expected = alpha_over(Color(*map(int, src[y, x])), Color(*map(int, dst[y, x])))
            assert tuple(int(v) for v in out[y, x]) == expected.as_tuple()


def test_transparent_source_keeps_destination_exactly():
    dst = np.arange(2 * 3 * 4, dtype=np.uint8).reshape(2, 3, 4)
    src = np.full_like(dst, 200)
    src[..., 3] = 0
    assert np.array_equal(alpha_over_array(src, dst), dst)


def test_opaque_destination_stays_opaque():
    src = np.full((4, 4, 4), 90, dtype=np.uint8)
    dst = np.full((4, 4, 4), 255, dtype=np.uint8)
    assert (alpha_over_array(src, dst)[..., 3] == 255).all()


def test_shape_mismatch():
    with pytest.raises(ValueError):
        alpha_over_array(np.zeros((2, 2, 4), np.uint8), np.zeros((2, 3, 4), np.uint8))
