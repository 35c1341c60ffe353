from __future__ import annotations

import math
import re
from typing import Callable

import numpy as np
from pydantic import BaseModel, Field, field_validator

from framer.canvas.types import (
    AspectRatio,
    BackgroundSpec,
    FrameOptions,
    GradientBackground,
    ImageFillBackground,
    ShadowSpec,
    SolidBackground,
)
from framer.colors import parse_color, parse_gradient
from framer.config import settings
from framer.errors import InvalidParameter

_RATIO_PATTERN = re.compile(r"^\s*(\d+)\s*:\s*(\d+)\s*$")
_BACKGROUND_KINDS = {"colr", "grad", "imag"}

ImageLoader = Callable[[str], np.ndarray]


def parse_ratio(value: str) -> AspectRatio:
    match = _RATIO_PATTERN.match(value)
    if match is None:
        raise InvalidParameter(f"ratio must look like W:H, got {value!r}")
    width, height = int(match.group(1)), int(match.group(2))
    if width <= 0 or height <= 0:
        raise InvalidParameter(f"ratio components must be positive: {value!r}")
    return AspectRatio(width=width, height=height)


def parse_point(value: str) -> tuple[int, int]:
    parts = value.split(",")
    if len(parts) != 2:
        raise InvalidParameter(f"point must look like x,y, got {value!r}")
    try:
        x, y = (float(p.strip()) for p in parts)
    except ValueError as exc:
        raise InvalidParameter(f"point must look like x,y, got {value!r}") from exc
    if not (math.isfinite(x) and math.isfinite(y)):
        raise InvalidParameter(f"point coordinates must be finite, got {value!r}")
    return int(round(x)), int(round(y))


def split_background(value: str) -> tuple[str, str]:
    kind, sep, payload = value.partition(":")
    kind = kind.strip().lower()
    if not sep or kind not in _BACKGROUND_KINDS or not payload.strip():
        raise InvalidParameter(
            f"background must be colr:<color>, grad:<c1-c2...> or imag:<path>, got {value!r}"
        )
    return kind, payload.strip()


class FrameRequest(BaseModel):
    scale: float = Field(default=settings.default_scale, gt=0)
    background: str = settings.default_background
    ratio: str | None = None
    roundness: float = Field(default=0.0, ge=0.0, le=100.0)
    offset: str = "0,0"
    shadow_offset: str | None = None
    shadow_color: str = settings.default_shadow_color
    shadow_radius: float = Field(default=settings.default_shadow_radius, ge=0.0)
    shadow_opacity: float = Field(default=settings.default_shadow_opacity, ge=0.0, le=1.0)

    @field_validator("background")
    @classmethod
    def _check_background(cls, value: str) -> str:
        kind, payload = split_background(value)
        if kind == "colr":
            parse_color(payload)
        elif kind == "grad":
            parse_gradient(payload)
        return value

    @field_validator("ratio")
    @classmethod
    def _check_ratio(cls, value: str | None) -> str | None:
        if value is not None and value.strip():
            parse_ratio(value)
            return value
        return None

    @field_validator("offset")
    @classmethod
    def _check_offset(cls, value: str) -> str:
        parse_point(value)
        return value

    @field_validator("shadow_offset")
    @classmethod
    def _check_shadow_offset(cls, value: str | None) -> str | None:
        if value is not None and value.strip():
            parse_point(value)
            return value
        return None

    @field_validator("shadow_color")
    @classmethod
    def _check_shadow_color(cls, value: str) -> str:
        parse_color(value)
        return value

    def background_spec(self, load_image: ImageLoader) -> BackgroundSpec:
        kind, payload = split_background(self.background)
        if kind == "colr":
            return SolidBackground(parse_color(payload))
        if kind == "grad":
            return GradientBackground(parse_gradient(payload))
        return ImageFillBackground(load_image(payload))

    def shadow_spec(self) -> ShadowSpec | None:
        # A shadow is only drawn when an offset is given.
        if self.shadow_offset is None:
            return None
        return ShadowSpec(
            offset=parse_point(self.shadow_offset),
            color=parse_color(self.shadow_color),
            blur_radius=self.shadow_radius,
            opacity=self.shadow_opacity,
        )

    def to_options(self, load_image: ImageLoader) -> FrameOptions:
        return FrameOptions(
            scale_percent=self.scale,
            roundness=self.roundness,
            offset=parse_point(self.offset),
            ratio=parse_ratio(self.ratio) if self.ratio else None,
            background=self.background_spec(load_image),
            shadow=self.shadow_spec(),
        )


class FrameFileRequest(FrameRequest):
    input_path: str
    output_path: str


class FrameResponse(BaseModel):
    output_path: str
    canvas_width: int
    canvas_height: int
    placed_x: int
    placed_y: int
    used_shadow: bool
    elapsed_ms: float
