from __future__ import annotations

from PIL import ImageColor

from framer.canvas.types import Color, GradientSpec
from framer.errors import InvalidParameter

TRANSPARENT = Color(0, 0, 0, 0)


def parse_color(value: str) -> Color:
    """Resolve a color name or hex string (``#rgb``, ``#rrggbb``, ``#rrggbbaa``)."""
    name = value.strip().lower()
    if not name:
        raise InvalidParameter("color must not be empty")
    if name == "transparent":
        return TRANSPARENT
    try:
        r, g, b, a = ImageColor.getcolor(name, "RGBA")
    except ValueError as exc:
        raise InvalidParameter(f"unknown color: {value!r}") from exc
    return Color(r, g, b, a)


def parse_gradient(value: str) -> GradientSpec:
    parts = [p for p in value.split("-") if p.strip()]
    if len(parts) < 2:
        raise InvalidParameter(f"gradient needs at least two colors: {value!r}")
    return GradientSpec(stops=tuple(parse_color(p) for p in parts))
