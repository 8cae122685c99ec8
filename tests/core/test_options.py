from __future__ import annotations

import pytest
from pydantic import ValidationError

from scenekit.core.errors import ColorFormatError, OptionsError
from scenekit.core.grammar import ChartKind
from scenekit.core.options import (
    GaugeOptions,
    HeatmapOptions,
    RadarOptions,
    normalize_hex,
    parse_options,
)


def test_defaults_match_option_panels() -> None:
    g = GaugeOptions()
    assert (g.gauge_min, g.gauge_max, g.gauge_thickness) == (0.0, 100.0, 20.0)
    assert g.gauge_color_fill == "#4285F4"
    assert g.value_format_string == 1

    r = RadarOptions()
    assert r.levels == 5
    assert r.max_value is None
    assert r.fill_opacity == pytest.approx(0.7)

    h = HeatmapOptions()
    assert (h.min_color, h.mid_color, h.max_color) == ("#FFFFFF", "#FFFF00", "#FF0000")
    assert h.use_mid_color is False


def test_numeric_options_are_clamped_not_rejected() -> None:
    g = GaugeOptions.model_validate({"gauge_thickness": 500, "value_label_size": 1})
    assert g.gauge_thickness == 50.0
    assert g.value_label_size == 10.0

    r = RadarOptions.model_validate({"levels": 40, "fill_opacity": 0, "value_decimal_places": -3})
    assert r.levels == 10
    assert r.fill_opacity == pytest.approx(0.1)
    assert r.value_decimal_places == 0


def test_numeric_strings_are_accepted() -> None:
    r = RadarOptions.model_validate({"levels": "3", "stroke_width": "2.5"})
    assert r.levels == 3
    assert r.stroke_width == 2.5


def test_none_restores_default_except_nullable_max_value() -> None:
    g = GaugeOptions.model_validate({"gauge_max": None, "title_text": None})
    assert g.gauge_max == 100.0
    assert g.title_text == "KPI Progress"

    r = RadarOptions.model_validate({"max_value": None})
    assert r.max_value is None
    assert RadarOptions.model_validate({"max_value": ""}).max_value is None
    assert RadarOptions.model_validate({"max_value": float("nan")}).max_value is None
    assert RadarOptions.model_validate({"max_value": "50"}).max_value == 50.0


def test_color_options_accept_lists_and_shorthand() -> None:
    h = HeatmapOptions.model_validate({"min_color": ["#0f0", "#000000"], "max_color": "ff8800"})
    assert h.min_color == "#00FF00"
    assert h.max_color == "#FF8800"


@pytest.mark.parametrize("bad", ["red", "#12345", "", [], 42])
def test_normalize_hex_rejects_non_hex(bad) -> None:
    with pytest.raises(ColorFormatError):
        normalize_hex(bad)


def test_unknown_keys_are_ignored() -> None:
    g = GaugeOptions.model_validate({"panel_state": {"open": True}})
    assert g == GaugeOptions()


def test_options_are_frozen() -> None:
    g = GaugeOptions()
    with pytest.raises(ValidationError):
        g.gauge_min = 5  # type: ignore[misc]


def test_parse_options_dispatches_by_kind() -> None:
    assert isinstance(parse_options("gauge", {}), GaugeOptions)
    assert isinstance(parse_options(ChartKind.RADAR, None), RadarOptions)
    assert isinstance(parse_options("heatmap"), HeatmapOptions)


def test_parse_options_wraps_color_errors() -> None:
    with pytest.raises(ColorFormatError, match="max_color"):
        parse_options("heatmap", {"max_color": "not-a-color"})


def test_parse_options_wraps_type_errors() -> None:
    with pytest.raises(OptionsError) as info:
        parse_options("gauge", {"gauge_thickness": "thick"})
    assert not isinstance(info.value, ColorFormatError)
