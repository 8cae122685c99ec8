from __future__ import annotations

import math

import polars as pl
import pytest

from scenekit.core.options import GaugeOptions
from scenekit.engine.coerce import (
    coerce_expr,
    coerce_values,
    format_fixed,
    label_text,
    measure_frame,
    single_value,
    unwrap_cell,
)
from scenekit.engine.ranges import UNIT_DOMAIN, Domain, clamp, gauge_domain, heatmap_domain, radar_max


def test_unwrap_cell_accepts_wrapped_and_bare() -> None:
    assert unwrap_cell({"value": 3}) == 3
    assert unwrap_cell(3) == 3
    assert unwrap_cell({"rendered": "x"}) is None


def test_coerce_values_nulls_every_anomaly() -> None:
    cells = [
        {"value": "1.5"},
        {"value": " 2 "},
        {"value": "abc"},
        {"value": None},
        None,
        {"value": float("nan")},
        {"value": "inf"},
        7,
    ]
    assert coerce_values(cells).to_list() == [1.5, 2.0, None, None, None, None, None, 7.0]


def test_single_value_defaults_to_zero() -> None:
    assert single_value({"m": {"value": "42.5"}}, "m") == 42.5
    assert single_value({"m": {"value": "n/a"}}, "m") == 0.0
    assert single_value({}, "m") == 0.0


def test_label_text_and_format_fixed() -> None:
    assert label_text({"value": 2024.0}) == "2024"
    assert label_text({"value": 1.5}) == "1.5"
    assert label_text(None) == ""
    assert format_fixed(75, 1) == "75.0"
    assert format_fixed(2.345, 0) == "2"
    assert format_fixed(float("nan"), 2) == ""


@pytest.mark.parametrize(
    ("value", "decimals", "expected"),
    [
        (2.5, 0, "3"),
        (0.5, 0, "1"),
        (1.25, 1, "1.3"),
        (-2.5, 0, "-3"),
        # 1.005 is stored just below the tie
        (1.005, 2, "1.00"),
        (1e22, 2, "10000000000000000000000.00"),
    ],
)
def test_format_fixed_rounds_ties_up(value: float, decimals: int, expected: str) -> None:
    assert format_fixed(value, decimals) == expected


def test_format_fixed_rejects_non_finite_and_bools() -> None:
    assert format_fixed(float("inf"), 1) == ""
    assert format_fixed(True, 1) == ""  # type: ignore[arg-type]


def test_measure_frame_keeps_raw_text_per_field() -> None:
    rows = [
        {"a": {"value": 1}, "b": {"value": "x"}},
        {"a": {"value": float("nan")}, "b": {"value": " 2.5"}},
        {"a": None},
    ]
    frame = measure_frame(rows, ["a", "b", "a"])
    assert frame.columns == ["a", "b"]
    assert frame.schema["a"] == pl.Utf8
    assert frame.get_column("a").to_list() == ["1", None, None]
    parsed = frame.select(coerce_expr("b")).get_column("b").to_list()
    assert parsed == [None, 2.5, None]


def test_gauge_domain_and_clamp() -> None:
    d = gauge_domain(GaugeOptions())
    assert d == Domain(0.0, 100.0)
    assert clamp(150, d) == 100.0
    assert clamp(-5, d) == 0.0
    assert clamp(42, d) == 42


def test_inverted_gauge_domain_collapses() -> None:
    d = gauge_domain(GaugeOptions(gauge_min=10, gauge_max=5))
    assert d == Domain(10.0, 10.0)
    assert d.fraction(10.0) == 0.0


def test_domain_rejects_inverted_bounds() -> None:
    with pytest.raises(ValueError):
        Domain(1.0, 0.0)


def test_radar_max_auto_and_fixed() -> None:
    assert radar_max([10, 20, 5, 15]) == pytest.approx(22.0)
    assert radar_max([0, 0, 0]) == 1.0
    assert radar_max([-3, -1]) == 1.0
    assert radar_max([10], fixed=50.0) == 50.0
    assert radar_max([10], fixed=0.0) == 1.0
    assert radar_max([10], fixed=math.nan) == pytest.approx(11.0)


def test_heatmap_domain_guards() -> None:
    assert heatmap_domain([1.0, None, 4.0]) == Domain(1.0, 4.0)
    assert heatmap_domain([]) == UNIT_DOMAIN
    assert heatmap_domain([None, None]) == UNIT_DOMAIN
    assert heatmap_domain([3.0, 3.0, 3.0]) == UNIT_DOMAIN
    assert heatmap_domain(pl.Series("v", [2.0, None, -1.0])) == Domain(-1.0, 2.0)
