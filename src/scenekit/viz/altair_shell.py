"""
Altair rendering shell: map a Scene onto a layered Vega-Lite chart.

Responsibilities
- Translate each primitive kind into an Altair layer on a shared pixel coordinate system
  (x: 0..width left → right, y: 0..height top → bottom).
- Keep paint order: layers are emitted in the order their primitives first appear, and
  consecutive primitives of the same kind and style share one layer.
- Render a failed Scene as a single centered text layer carrying its message.

Mapping
- rect    → mark_rect (x/x2/y/y2)
- text    → mark_text (align/baseline/bold per layer, angle from rotation)
- circle  → mark_circle (size is the area, π·r²); outline-only circles use filled=False
- line    → mark_rule (x/y/x2/y2)
- polygon → mark_line through the vertices, closed by repeating the first vertex
- arc     → mark_arc (theta/theta2 clockwise from 12 o'clock, radius/radius2)

Notes
- All scales are identity-like (explicit domains, ``scale=None`` for style channels) so
  Vega-Lite does not re-map colors or sizes.
- Arc paths are drawn from their geometric parameters, not from their SVG segments.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from itertools import groupby
from pathlib import Path
from typing import Any

import altair as alt

from scenekit.core.scene import ArcPath, Circle, Line, Polygon, Rect, Scene, Text

__all__ = [
    "scene_to_chart",
    "save_html",
]

_ALIGN = {"start": "left", "middle": "center", "end": "right"}
_BASELINE = {"auto": "alphabetic", "middle": "middle", "hanging": "top"}


def _x(scene: Scene, field: str = "x") -> alt.X:
    return alt.X(f"{field}:Q", scale=alt.Scale(domain=[0, scene.width]), axis=None)


def _y(scene: Scene, field: str = "y") -> alt.Y:
    return alt.Y(f"{field}:Q", scale=alt.Scale(domain=[0, scene.height], reverse=True), axis=None)


def _data(values: list[dict[str, Any]]) -> alt.Data:
    return alt.Data(values=values)


def _style_key(p: Any) -> tuple:
    if isinstance(p, Text):
        return ("text", p.anchor, p.baseline, p.bold)
    if isinstance(p, Circle):
        return ("circle", p.fill is None)
    if isinstance(p, Polygon):
        # one layer per polygon
        return ("polygon", id(p))
    return (p.kind,)


def _runs(scene: Scene) -> Iterator[tuple[tuple, list[Any]]]:
    for key, group in groupby(scene.primitives, key=_style_key):
        yield key, list(group)


def _rect_layer(scene: Scene, rects: list[Rect]) -> alt.Chart:
    values = [
        {
            "x": r.x,
            "x2": r.x + r.w,
            "y": r.y,
            "y2": r.y + r.h,
            "color": r.color,
            "stroke": r.stroke or r.color,
            "stroke_width": r.stroke_width,
        }
        for r in rects
    ]
    return (
        alt.Chart(_data(values))
        .mark_rect()
        .encode(
            x=_x(scene),
            x2="x2:Q",
            y=_y(scene),
            y2="y2:Q",
            color=alt.Color("color:N", scale=None),
            stroke=alt.Stroke("stroke:N", scale=None),
            strokeWidth=alt.StrokeWidth("stroke_width:Q", scale=None),
        )
    )


def _text_layer(scene: Scene, texts: list[Text]) -> alt.Chart:
    first = texts[0]
    values = [
        {
            "x": t.x,
            "y": t.y,
            "content": t.content,
            "color": t.color,
            "size": t.size,
            "rotation": t.rotation,
        }
        for t in texts
    ]
    return (
        alt.Chart(_data(values))
        .mark_text(
            align=_ALIGN[first.anchor],
            baseline=_BASELINE[first.baseline],
            fontWeight="bold" if first.bold else "normal",
        )
        .encode(
            x=_x(scene),
            y=_y(scene),
            text="content:N",
            color=alt.Color("color:N", scale=None),
            size=alt.Size("size:Q", scale=None),
            angle=alt.Angle("rotation:Q", scale=None),
        )
    )


def _circle_layer(scene: Scene, circles: list[Circle]) -> alt.Chart:
    outline = circles[0].fill is None
    values = [
        {
            "x": c.cx,
            "y": c.cy,
            "area": math.pi * c.r**2,
            "color": (c.stroke if outline else c.fill) or "#000000",
            "stroke": c.stroke or c.fill or "#000000",
            "stroke_width": c.stroke_width,
        }
        for c in circles
    ]
    return (
        alt.Chart(_data(values))
        .mark_circle(filled=not outline, opacity=1)
        .encode(
            x=_x(scene),
            y=_y(scene),
            size=alt.Size("area:Q", scale=None),
            color=alt.Color("color:N", scale=None),
            stroke=alt.Stroke("stroke:N", scale=None),
            strokeWidth=alt.StrokeWidth("stroke_width:Q", scale=None),
        )
    )


def _line_layer(scene: Scene, lines: list[Line]) -> alt.Chart:
    values = [
        {
            "x": ln.x1,
            "y": ln.y1,
            "x2": ln.x2,
            "y2": ln.y2,
            "stroke": ln.stroke or "#000000",
            "stroke_width": ln.stroke_width,
        }
        for ln in lines
    ]
    return (
        alt.Chart(_data(values))
        .mark_rule()
        .encode(
            x=_x(scene),
            y=_y(scene),
            x2="x2:Q",
            y2="y2:Q",
            color=alt.Color("stroke:N", scale=None),
            strokeWidth=alt.StrokeWidth("stroke_width:Q", scale=None),
        )
    )


def _polygon_layer(scene: Scene, polygon: Polygon) -> alt.Chart:
    pts = list(polygon.points)
    closed = pts + pts[:1]
    values = [{"x": x, "y": y, "order": i} for i, (x, y) in enumerate(closed)]
    color = polygon.stroke or polygon.fill or "#000000"
    return (
        alt.Chart(_data(values))
        .mark_line(color=color, strokeWidth=max(polygon.stroke_width, 1.0))
        .encode(x=_x(scene), y=_y(scene), order="order:Q")
    )


def _arc_layer(scene: Scene, arcs: list[ArcPath]) -> alt.Chart:
    values = [
        {
            "x": a.cx,
            "y": a.cy,
            # Vega-Lite measures theta clockwise from 12 o'clock.
            "theta": a.start_angle + math.pi / 2,
            "theta2": a.end_angle + math.pi / 2,
            "outer": a.outer_radius,
            "inner": a.inner_radius,
            "color": a.fill or "#000000",
        }
        for a in arcs
    ]
    return (
        alt.Chart(_data(values))
        .mark_arc()
        .encode(
            x=_x(scene),
            y=_y(scene),
            theta=alt.Theta("theta:Q", scale=None),
            theta2="theta2:Q",
            radius=alt.Radius("outer:Q", scale=None),
            radius2="inner:Q",
            color=alt.Color("color:N", scale=None),
        )
    )


def _message_layer(scene: Scene, message: str) -> alt.Chart:
    return (
        alt.Chart(_data([{"x": scene.width / 2, "y": scene.height / 2, "content": message}]))
        .mark_text(align="center", baseline="middle", color="#000000")
        .encode(x=_x(scene), y=_y(scene), text="content:N")
    )


def scene_to_chart(scene: Scene) -> alt.LayerChart:
    """
    Build a layered Altair chart that paints the scene.

    Args:
        scene (Scene): Scene to paint.

    Returns:
        alt.LayerChart: One layer per run of same-styled primitives, in paint order; a single
        text layer for failed or empty scenes.
    """
    layers: list[alt.Chart] = []
    if scene.ok:
        for key, group in _runs(scene):
            kind = key[0]
            if kind == "rect":
                layers.append(_rect_layer(scene, group))
            elif kind == "text":
                layers.append(_text_layer(scene, group))
            elif kind == "circle":
                layers.append(_circle_layer(scene, group))
            elif kind == "line":
                layers.append(_line_layer(scene, group))
            elif kind == "polygon":
                layers.append(_polygon_layer(scene, group[0]))
            elif kind == "arc":
                layers.append(_arc_layer(scene, group))
    if not layers:
        layers.append(_message_layer(scene, scene.error or ""))

    return (
        alt.layer(*layers)
        .properties(width=scene.width, height=scene.height)
        .configure_view(strokeOpacity=0)
    )


def save_html(chart: alt.TopLevelMixin, path: str | Path) -> Path:
    """Write a chart as a standalone HTML page and return the path."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    chart.save(str(out), format="html")
    return out
