from __future__ import annotations

import math

import pytest

from scenekit.core.grammar import TextAnchor, TextBaseline
from scenekit.core.schema import DataPoint
from scenekit.engine import render_scene
from scenekit.engine.polar import (
    layout_radar,
    ring_radii,
    scale_radius,
    slot_angle,
    text_anchor,
    text_baseline,
)

W, H = 400.0, 400.0
R = min(W, H) / 2 * 0.7
CX, CY = W / 2, 30 + 50 + R


def _radar_query(values: list, labels: list[dict] | None = None) -> dict:
    measures = labels or [{"name": f"m{i}"} for i in range(len(values))]
    row = {"item": {"value": "Widget"}}
    for m, v in zip(measures, values):
        row[m["name"]] = {"value": v}
    return {"fields": {"dimensions": ["item"], "measures": measures}, "rows": [row]}


def test_slot_zero_is_at_the_top_and_slots_go_clockwise() -> None:
    assert slot_angle(0, 5) == -math.pi / 2
    assert slot_angle(1, 4) == pytest.approx(0.0)
    assert slot_angle(2, 4) == pytest.approx(math.pi / 2)


def test_scale_radius_bounds() -> None:
    assert scale_radius(0, 22.0, R) == 0.0
    assert scale_radius(22.0, 22.0, R) == pytest.approx(R)
    assert scale_radius(44.0, 22.0, R) == pytest.approx(2 * R)


def test_ring_radii_evenly_spaced() -> None:
    assert ring_radii(100.0, 4) == [25.0, 50.0, 75.0, 100.0]


@pytest.mark.parametrize(
    ("angle", "anchor", "baseline"),
    [
        (-math.pi / 2, TextAnchor.MIDDLE, TextBaseline.AUTO),
        (0.0, TextAnchor.START, TextBaseline.MIDDLE),
        (math.pi / 2, TextAnchor.MIDDLE, TextBaseline.HANGING),
        (math.pi, TextAnchor.END, TextBaseline.MIDDLE),
        (math.pi / 4, TextAnchor.START, TextBaseline.HANGING),
    ],
)
def test_text_anchoring_follows_direction(angle, anchor, baseline) -> None:
    assert text_anchor(angle) is anchor
    assert text_baseline(angle) is baseline


def test_layout_has_one_vertex_per_point_in_order() -> None:
    points = [DataPoint(axis_label=f"a{i}", value=float(i + 1)) for i in range(6)]
    layout = layout_radar(points, 10.0, 100.0, 0.0, 0.0, levels=3)
    assert len(layout.vertices) == 6
    for i, (x, y) in enumerate(layout.vertices):
        assert math.hypot(x, y) == pytest.approx((i + 1) / 10.0 * 100.0)
        assert math.atan2(y, x) == pytest.approx(math.atan2(math.sin(layout.angles[i]), math.cos(layout.angles[i])))
    assert layout.ring_radii == pytest.approx((100 / 3, 200 / 3, 100.0))
    assert layout.tick_values() == pytest.approx([10 / 3, 20 / 3, 10.0])


def test_radar_auto_max_and_vertex_radii() -> None:
    values = [10, 20, 5, 15]
    scene = render_scene("radar", _radar_query(values), None, width=W, height=H)
    assert scene.ok
    (polygon,) = scene.of_kind("polygon")
    assert len(polygon.points) == 4
    for v, (x, y) in zip(values, polygon.points):
        assert math.hypot(x - CX, y - CY) == pytest.approx(R * v / 22.0)
    # first vertex straight above the center
    assert polygon.points[0][0] == pytest.approx(CX)
    assert polygon.points[0][1] < CY


def test_radar_paint_order() -> None:
    scene = render_scene("radar", _radar_query([1, 2, 3]), {"levels": 4}, width=W, height=H)
    kinds = [p.kind for p in scene.primitives]
    # 4 rings, then per axis: spoke + label + 4 ticks, then polygon, 3 dots, title
    expected = ["circle"] * 4 + (["line", "text"] + ["text"] * 4) * 3 + ["polygon"] + ["circle"] * 3 + ["text"]
    assert kinds == expected

    rings = scene.primitives[:4]
    assert [c.r for c in rings] == pytest.approx([R / 4 * k for k in range(1, 5)])
    assert all(c.fill is None and c.stroke_width == 0.5 for c in rings)

    dots = scene.primitives[-4:-1]
    assert all(d.r == 4 and d.fill == "#1A73E8" and d.stroke == "#FFFFFF" for d in dots)
    assert scene.primitives[-1].content == "Performance Overview: Widget"


def test_radar_labels_and_ticks() -> None:
    labels = [
        {"name": "spd", "label": "Speed", "label_short": "Spd"},
        {"name": "pwr", "label": "Power"},
        {"name": "rng"},
    ]
    scene = render_scene(
        "radar",
        _radar_query([1, 2, 3], labels),
        {"max_value": 10, "levels": 2, "value_decimal_places": 0, "title_display": False},
        width=W,
        height=H,
    )
    texts = scene.of_kind("text")
    axis_labels = [t.content for t in texts if t.size == 12.0]
    assert axis_labels == ["Spd", "Power", "rng"]
    ticks = [t.content for t in texts if t.size == 10.0]
    assert ticks == ["5", "10"] * 3

    top_label = texts[0]
    assert (top_label.anchor, top_label.baseline) == ("middle", "auto")
    assert top_label.x == pytest.approx(CX)
    assert top_label.y == pytest.approx(CY - (R + 20))


def test_radar_value_labels_can_be_hidden() -> None:
    scene = render_scene(
        "radar", _radar_query([1, 2]), {"show_value_labels": False, "title_display": False}, width=W, height=H
    )
    assert len(scene.of_kind("text")) == 2


def test_radar_missing_values_read_as_zero() -> None:
    scene = render_scene("radar", _radar_query(["x", None, 4]), None, width=W, height=H)
    (polygon,) = scene.of_kind("polygon")
    assert polygon.points[0] == pytest.approx((CX, CY))
    assert polygon.points[1] == pytest.approx((CX, CY))


def test_radar_requires_single_row() -> None:
    q = _radar_query([1, 2])
    q["rows"] = []
    scene = render_scene("radar", q, None, width=W, height=H)
    assert scene.error == "No data returned for this query."
