"""
Value-type drawing styles.

Colors, pens and brushes are immutable; a variant (darker color, other
opacity) is a new object, so drawing never mutates a shared style.
"""

from dataclasses import dataclass, replace
from typing import Tuple

from ..config import (
    DEFAULT_BRUSH_COLOR,
    DEFAULT_PEN_COLOR,
    DEFAULT_MARKER_WIDTH,
    DEFAULT_LINE_WIDTH,
)


@dataclass(frozen=True)
class Color:
    """RGBA color with 0-255 integer channels."""
    red: int = 0
    green: int = 0
    blue: int = 0
    alpha: int = 255

    def __post_init__(self):
        for name in ('red', 'green', 'blue', 'alpha'):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"{name} must be in [0, 255], got {value}")

    def halved(self) -> "Color":
        """Same color at half intensity, alpha unchanged."""
        return Color(self.red // 2, self.green // 2, self.blue // 2, self.alpha)

    def with_alpha(self, alpha: int) -> "Color":
        return replace(self, alpha=alpha)

    def to_mpl(self) -> Tuple[float, float, float, float]:
        """RGBA tuple in [0, 1] as matplotlib expects."""
        return (self.red / 255.0, self.green / 255.0, self.blue / 255.0, self.alpha / 255.0)


@dataclass(frozen=True)
class Pen:
    """Line style: color and width in points."""
    color: Color = Color(*DEFAULT_PEN_COLOR)
    width: float = DEFAULT_LINE_WIDTH


@dataclass(frozen=True)
class Brush:
    """Fill style."""
    color: Color = Color(*DEFAULT_BRUSH_COLOR)

    @property
    def opacity(self) -> int:
        return self.color.alpha

    def with_opacity(self, opacity: int) -> "Brush":
        return Brush(self.color.with_alpha(opacity))

    def halved(self) -> "Brush":
        return Brush(self.color.halved())


def default_marker_pen() -> Pen:
    return Pen(Color(*DEFAULT_PEN_COLOR), DEFAULT_MARKER_WIDTH)


def default_line_pen() -> Pen:
    return Pen(Color(*DEFAULT_PEN_COLOR), DEFAULT_LINE_WIDTH)
