from __future__ import annotations

import pytest

from scenekit.core.errors import ColorFormatError
from scenekit.core.options import HeatmapOptions
from scenekit.engine.color import MISSING_COLOR, RGB, ColorScale, hex_to_rgb, interpolate_rgb, rgb_to_hex
from scenekit.engine.ranges import Domain


def test_hex_roundtrip_and_shorthand() -> None:
    assert hex_to_rgb("#4285F4") == RGB(66, 133, 244)
    assert hex_to_rgb("#fff") == RGB(255, 255, 255)
    assert rgb_to_hex(RGB(66, 133, 244)) == "#4285F4"
    assert RGB(1, 2, 3).css() == "rgb(1,2,3)"


def test_hex_to_rgb_rejects_garbage() -> None:
    with pytest.raises(ColorFormatError):
        hex_to_rgb("#GGGGGG")


def test_interpolate_rgb_endpoints_and_rounding() -> None:
    black, white = RGB(0, 0, 0), RGB(255, 255, 255)
    assert interpolate_rgb(black, white, 0.0) == black
    assert interpolate_rgb(black, white, 1.0) == white
    assert interpolate_rgb(black, white, 0.5) == RGB(128, 128, 128)
    assert interpolate_rgb(black, white, 2.0) == white
    assert interpolate_rgb(black, white, -1.0) == black


def test_two_stop_scale_boundaries() -> None:
    scale = ColorScale(Domain(10.0, 20.0), "#000000", "#FFFFFF")
    assert scale.color_for(10) == "#000000"
    assert scale.color_for(20) == "#FFFFFF"
    assert scale.color_for(15) == "#808080"
    assert scale.color_for(99) == "#FFFFFF"


def test_three_stop_scale_switches_at_midpoint() -> None:
    scale = ColorScale(Domain(0.0, 10.0), "#FFFFFF", "#FF0000", mid_color="#FFFF00")
    assert scale.color_for(0) == "#FFFFFF"
    assert scale.color_for(2.5) == "#FFFF80"
    assert scale.color_for(5) == "#FFFF00"
    assert scale.color_for(7.5) == "#FF8000"
    assert scale.color_for(10) == "#FF0000"


def test_zero_span_scale_yields_an_endpoint() -> None:
    scale = ColorScale(Domain(5.0, 5.0), "#000000", "#FFFFFF")
    assert scale.color_for(5) == "#FFFFFF"
    assert scale.color_for(4) == "#000000"


@pytest.mark.parametrize("missing", [None, float("nan"), "12", True])
def test_missing_values_get_the_missing_color(missing) -> None:
    scale = ColorScale(Domain(0.0, 1.0), "#FFFFFF", "#FF0000")
    assert scale.color_for(missing) == MISSING_COLOR


def test_from_options_honors_use_mid_color() -> None:
    d = Domain(0.0, 1.0)
    assert ColorScale.from_options(d, HeatmapOptions()).mid_color is None
    assert ColorScale.from_options(d, HeatmapOptions(use_mid_color=True)).mid_color == "#FFFF00"


def test_interpolation_can_hit_the_missing_color() -> None:
    scale = ColorScale(Domain(0.0, 1.0), "#FFFFFF", "#000000")
    assert scale.color_for(0.2) == MISSING_COLOR
