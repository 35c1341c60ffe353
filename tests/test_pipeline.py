from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from framer.canvas.pipeline import frame_image, run_frame_job
from framer.canvas.types import (
    AspectRatio,
    Color,
    FrameOptions,
    GradientBackground,
    GradientSpec,
    ShadowSpec,
    SolidBackground,
)
from framer.errors import DimensionMismatch, InputFileNotFound, InvalidGeometry, InvalidRadius

from conftest import BLACK, RED, WHITE, solid_rgba

WHITE_BG = SolidBackground(Color(255, 255, 255))


def test_scale_100_is_source_only(red_source):
    result = frame_image(red_source, FrameOptions(scale_percent=100.0, background=WHITE_BG))
    assert result.image.shape == (100, 100, 4)
    assert (result.image == RED).all()
    assert result.used_shadow is False


def test_scale_200_centers_source_on_background(red_source):
    result = frame_image(red_source, FrameOptions(scale_percent=200.0, background=WHITE_BG))
    image = result.image
    assert image.shape == (200, 200, 4)
    assert (image[50:150, 50:150] == RED).all()

    border = np.ones((200, 200), dtype=bool)
    border[50:150, 50:150] = False
    assert (image[border] == WHITE).all()


def test_shadow_only_around_source(red_source):
    options = FrameOptions(
        scale_percent=200.0,
        background=WHITE_BG,
        shadow=ShadowSpec(offset=(10, 10), blur_radius=0.0),
    )
    result = frame_image(red_source, options)
    image = result.image
    assert result.used_shadow is True
    assert (image[50:150, 50:150] == RED).all()
    assert tuple(image[155, 155]) == BLACK
    assert tuple(image[155, 55]) == WHITE
    assert tuple(image[10, 10]) == WHITE


def test_transparent_pixels_cast_no_shadow():
    source = solid_rgba(20, 20, (0, 0, 0, 0))
    options = FrameOptions(
        scale_percent=200.0,
        background=WHITE_BG,
        shadow=ShadowSpec(offset=(5, 5), blur_radius=2.0),
    )
    result = frame_image(source, options)
    assert (result.image == WHITE).all()


def test_ratio_and_gradient():
    source = solid_rgba(40, 40, RED)
    options = FrameOptions(
        scale_percent=100.0,
        ratio=AspectRatio(2, 1),
        background=GradientBackground(GradientSpec((Color(255, 255, 255), Color(0, 0, 0)))),
    )
    result = frame_image(source, options)
    assert result.geometry.canvas_size == (80, 40)
    assert tuple(result.image[0, 0]) == WHITE
    assert tuple(result.image[39, 0]) == BLACK
    assert (result.image[:, 20:60] == RED).all()


def test_roundness_exposes_background_in_corners(red_source):
    options = FrameOptions(scale_percent=100.0, roundness=100.0, background=WHITE_BG)
    image = frame_image(red_source, options).image
    assert tuple(image[0, 0]) == WHITE
    assert tuple(image[50, 50]) == RED


def test_worker_count_does_not_change_output(red_source):
    options = FrameOptions(
        scale_percent=150.0,
        roundness=30.0,
        shadow=ShadowSpec(offset=(8, 12), blur_radius=6.0, opacity=0.7),
    )
    one = frame_image(red_source, options, workers=1).image
    many = frame_image(red_source, options, workers=6).image
    assert np.array_equal(one, many)


def test_rejects_non_rgba_source():
    with pytest.raises(DimensionMismatch):
        frame_image(np.zeros((10, 10, 3), dtype=np.uint8), FrameOptions())
    with pytest.raises(DimensionMismatch):
        frame_image(np.zeros((10, 10, 4), dtype=np.float32), FrameOptions())


def test_errors_propagate(red_source):
    with pytest.raises(InvalidGeometry):
        frame_image(red_source, FrameOptions(scale_percent=0.0))
    with pytest.raises(InvalidRadius):
        frame_image(red_source, FrameOptions(roundness=101.0))


def test_run_frame_job_writes_output(red_png, tmp_path):
    output = tmp_path / "out" / "framed.png"
    result = run_frame_job(str(red_png), str(output), FrameOptions(scale_percent=200.0, background=WHITE_BG))

    assert output.is_file()
    with Image.open(output) as img:
        assert img.size == (200, 200)
        assert img.mode == "RGBA"
        assert img.getpixel((100, 100)) == RED
        assert img.getpixel((5, 5)) == WHITE
    assert result.geometry.placed_rect.x == 50


def test_run_frame_job_missing_input(tmp_path):
    with pytest.raises(InputFileNotFound):
        run_frame_job(str(tmp_path / "missing.png"), str(tmp_path / "out.png"), FrameOptions())
