from __future__ import annotations

from pathlib import Path

import altair as alt

from scenekit.core.scene import Scene
from scenekit.engine import render_scene
from scenekit.viz import save_html, scene_to_chart


def _mark_types(chart: alt.LayerChart) -> list[str]:
    spec = chart.to_dict()
    out = []
    for layer in spec["layer"]:
        mark = layer["mark"]
        out.append(mark if isinstance(mark, str) else mark["type"])
    return out


def _gauge() -> Scene:
    return render_scene(
        "gauge",
        {
            "fields": {"dimensions": ["k"], "measures": ["v"]},
            "rows": [{"k": {"value": "x"}, "v": {"value": 40}}],
        },
        None,
        width=400,
        height=300,
    )


def test_gauge_layers_follow_paint_order() -> None:
    marks = _mark_types(scene_to_chart(_gauge()))
    # both arcs share a layer; the needle polygon is a closed line
    assert marks[:2] == ["arc", "line"]
    assert set(marks[2:]) == {"text"}


def test_radar_layers_cover_every_primitive_kind() -> None:
    scene = render_scene(
        "radar",
        {
            "fields": {"dimensions": ["item"], "measures": ["a", "b", "c"]},
            "rows": [{"item": {"value": "X"}, "a": {"value": 1}, "b": {"value": 2}, "c": {"value": 3}}],
        },
        None,
        width=400,
        height=400,
    )
    chart = scene_to_chart(scene)
    marks = _mark_types(chart)
    assert marks[0] == "circle"
    assert {"circle", "rule", "text", "line"} <= set(marks)
    assert marks[-1] == "text"

    rings = chart.to_dict()["layer"][0]["mark"]
    assert rings["filled"] is False


def test_heatmap_starts_with_rect_layer() -> None:
    scene = render_scene(
        "heatmap",
        {
            "fields": {"dimensions": ["x", "y"], "measures": ["v"]},
            "rows": [{"x": {"value": "A"}, "y": {"value": "P"}, "v": {"value": 1}}],
        },
        {"show_cell_values": False},
        width=300,
        height=300,
    )
    assert _mark_types(scene_to_chart(scene)) == ["rect", "text", "text"]


def test_failed_scene_renders_message_only() -> None:
    chart = scene_to_chart(Scene.failed("gauge", 300, 200, "No data returned for this query."))
    spec = chart.to_dict()
    assert _mark_types(chart) == ["text"]
    assert (spec["width"], spec["height"]) == (300, 200)


def test_save_html_writes_standalone_page(tmp_path: Path) -> None:
    out = save_html(scene_to_chart(_gauge()), tmp_path / "preview" / "gauge.html")
    assert out.exists()
    assert "vega" in out.read_text(encoding="utf-8").lower()
