from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TypeAlias

import numpy as np

from framer.errors import InvalidBackground, InvalidParameter


@dataclass(slots=True, frozen=True)
class Color:
    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise InvalidParameter(f"color channel {name}={value} outside 0..255")

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)


@dataclass(slots=True, frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def translated(self, dx: int, dy: int) -> Rect:
        return Rect(x=self.x + dx, y=self.y + dy, width=self.width, height=self.height)


@dataclass(slots=True, frozen=True)
class Geometry:
    canvas_width: int
    canvas_height: int
    placed_rect: Rect

    @property
    def canvas_size(self) -> tuple[int, int]:
        return self.canvas_width, self.canvas_height


@dataclass(slots=True, frozen=True)
class AspectRatio:
    width: int
    height: int

    def as_float(self) -> float:
        return self.width / self.height


@dataclass(slots=True, frozen=True)
class GradientSpec:
    stops: tuple[Color, ...]

    def __post_init__(self) -> None:
        if len(self.stops) < 2:
            raise InvalidBackground(f"gradient needs at least two stops, got {len(self.stops)}")


@dataclass(slots=True, frozen=True)
class SolidBackground:
    color: Color


@dataclass(slots=True, frozen=True)
class GradientBackground:
    gradient: GradientSpec


@dataclass(slots=True, frozen=True, eq=False)
class ImageFillBackground:
    """Decoded RGBA pixels, shape (h, w, 4), stretched to cover the canvas."""

    pixels: np.ndarray


BackgroundSpec: TypeAlias = SolidBackground | GradientBackground | ImageFillBackground


@dataclass(slots=True, frozen=True)
class ShadowSpec:
    offset: tuple[int, int] = (25, 25)
    color: Color = Color(0, 0, 0)
    blur_radius: float = 25.0
    opacity: float = 1.0

    @property
    def kernel_half_width(self) -> int:
        if not math.isfinite(self.blur_radius) or self.blur_radius <= 0:
            return 0
        return int(math.ceil(3.0 * self.blur_radius))


@dataclass(slots=True)
class FrameOptions:
    scale_percent: float = 110.0
    roundness: float = 0.0
    offset: tuple[int, int] = (0, 0)
    ratio: AspectRatio | None = None
    background: BackgroundSpec = field(default_factory=lambda: SolidBackground(Color(0, 0, 0)))
    shadow: ShadowSpec | None = None


@dataclass(slots=True)
class FrameResult:
    image: np.ndarray
    geometry: Geometry
    used_shadow: bool
    elapsed_ms: float
