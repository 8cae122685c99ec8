"""
Linear RGB color interpolation for the heatmap.

Responsibilities
- Decode hex colors into RGB channel triples and encode them back.
- Interpolate channel-wise between two colors.
- Map a numeric value to a color over a Domain in two-stop (min→max) or three-stop
  (min→mid→max) mode.

Notes
- Interpolation runs in plain sRGB space, channel by channel; no perceptual color spaces.
- Channels round half-up, so ``t = 0.5`` between 0 and 255 yields 128.
- Missing values (None, NaN, non-numbers) map to MISSING_COLOR. An interpolated color can
  equal it too (white → black at t = 0.2), so heatmap cells also carry ``Rect.no_data``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, NamedTuple

from scenekit.core.constants import MISSING_COLOR
from scenekit.core.options import HeatmapOptions, normalize_hex

from .ranges import Domain

__all__ = [
    "RGB",
    "MISSING_COLOR",
    "hex_to_rgb",
    "rgb_to_hex",
    "interpolate_rgb",
    "ColorScale",
]


class RGB(NamedTuple):
    """8-bit sRGB channel triple."""

    r: int
    g: int
    b: int

    def hex(self) -> str:
        return rgb_to_hex(self)

    def css(self) -> str:
        return f"rgb({self.r},{self.g},{self.b})"


def hex_to_rgb(color: str) -> RGB:
    """
    Decode a ``#RRGGBB`` (or ``#RGB``) color.

    Raises:
        ColorFormatError: If the string is not a hex color.

    Examples:
        >>> hex_to_rgb("#FF8000")
        RGB(r=255, g=128, b=0)
    """
    h = normalize_hex(color)
    return RGB(int(h[1:3], 16), int(h[3:5], 16), int(h[5:7], 16))


def rgb_to_hex(rgb: RGB | tuple[int, int, int]) -> str:
    """Encode a channel triple as upper-case ``#RRGGBB``."""
    r, g, b = (max(0, min(255, int(c))) for c in rgb)
    return f"#{r:02X}{g:02X}{b:02X}"


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def interpolate_rgb(c1: RGB, c2: RGB, t: float) -> RGB:
    """
    Blend two colors channel-wise.

    Args:
        c1 (RGB): Color at ``t = 0``.
        c2 (RGB): Color at ``t = 1``.
        t (float): Blend factor, clamped to [0, 1].

    Examples:
        >>> interpolate_rgb(RGB(0, 0, 0), RGB(255, 255, 255), 0.5)
        RGB(r=128, g=128, b=128)
    """
    t = max(0.0, min(1.0, t))
    return RGB(*(_round_half_up(a + (b - a) * t) for a, b in zip(c1, c2)))


def _fraction(value: float, lo: float, hi: float) -> float:
    if hi - lo <= 0:
        return 1.0 if value >= hi else 0.0
    return max(0.0, min(1.0, (value - lo) / (hi - lo)))


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)


@dataclass(frozen=True)
class ColorScale:
    """
    Value → color mapping over a numeric domain.

    Attributes:
        domain (Domain): Value range mapped onto the color stops.
        min_color (str): Color at ``domain.min``.
        max_color (str): Color at ``domain.max``.
        mid_color (str | None): Color at the domain midpoint; None selects two-stop mode.

    Examples:
        >>> scale = ColorScale(Domain(0, 10), "#FFFFFF", "#FF0000")
        >>> scale.color_for(0), scale.color_for(10), scale.color_for(None)
        ('#FFFFFF', '#FF0000', '#CCCCCC')
    """

    domain: Domain
    min_color: str
    max_color: str
    mid_color: str | None = None

    @classmethod
    def from_options(cls, domain: Domain, options: HeatmapOptions) -> ColorScale:
        return cls(
            domain=domain,
            min_color=options.min_color,
            max_color=options.max_color,
            mid_color=options.mid_color if options.use_mid_color else None,
        )

    def rgb_for(self, value: float) -> RGB:
        lo, hi = self.domain.min, self.domain.max
        c_min, c_max = hex_to_rgb(self.min_color), hex_to_rgb(self.max_color)
        if self.mid_color is None:
            return interpolate_rgb(c_min, c_max, _fraction(value, lo, hi))

        mid = self.domain.mid
        c_mid = hex_to_rgb(self.mid_color)
        if value < mid:
            return interpolate_rgb(c_min, c_mid, _fraction(value, lo, mid))
        return interpolate_rgb(c_mid, c_max, _fraction(value, mid, hi))

    def color_for(self, value: Any) -> str:
        """Hex color for a value; MISSING_COLOR when the value is missing."""
        if not _is_number(value):
            return MISSING_COLOR
        return self.rgb_for(float(value)).hex()
