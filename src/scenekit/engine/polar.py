"""
Polar layout for the single-item radar chart.

Responsibilities
- Assign each measure an angular slot (slot 0 at the top, clockwise on screen).
- Scale values to radii against a radial domain maximum.
- Build grid rings, axis spokes, axis and tick labels, the value polygon, and data dots as
  absolute-coordinate scene primitives.

Geometry
- slot_angle(i, n) = i * 2π / n − π/2
- scale_radius(v, m, r) = v / m * r (values above m overshoot r; negatives cross the center)
- rings at r / levels * k for k = 1..levels

Paint order
1) grid rings  2) per axis: spoke, axis label, tick labels  3) polygon  4) dots  5) title

Notes
- Text anchoring follows the label direction: |cos θ| < 1e-3 → middle, cos > 0 → start,
  else end; |sin θ| < 1e-3 → middle, sin > 0 → hanging, else auto.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from scenekit.core.constants import (
    ANGLE_EPSILON,
    DOT_STROKE_COLOR,
    RADAR_AXIS_LABEL_OFFSET,
    RADAR_AXIS_STROKE_WIDTH,
    RADAR_DOT_RADIUS,
    RADAR_DOT_STROKE_WIDTH,
    RADAR_RADIUS_RATIO,
    RADAR_RING_STROKE_WIDTH,
    RADAR_TITLE_GAP,
    TITLE_FONT_SIZE,
    TITLE_Y,
)
from scenekit.core.grammar import ChartKind, TextAnchor, TextBaseline
from scenekit.core.options import RadarOptions
from scenekit.core.scene import Circle, Line, Polygon, Scene, Text
from scenekit.core.schema import DataPoint
from scenekit.core.typing import Point

from .coerce import format_fixed, label_text, single_value
from .ranges import radar_max
from .validate import ChartData

__all__ = [
    "slot_angle",
    "scale_radius",
    "ring_radii",
    "text_anchor",
    "text_baseline",
    "RadarLayout",
    "radar_points",
    "layout_radar",
    "build_radar_scene",
]

logger = logging.getLogger(__name__)


def slot_angle(i: int, n: int) -> float:
    """
    Angle of slot ``i`` of ``n`` in radians.

    Examples:
        >>> round(slot_angle(0, 4), 6), round(slot_angle(1, 4), 6)
        (-1.570796, 0.0)
    """
    return i * 2 * math.pi / n - math.pi / 2


def scale_radius(value: float, domain_max: float, radius: float) -> float:
    """Radial distance of a value given the domain maximum and chart radius."""
    return value / domain_max * radius


def ring_radii(radius: float, levels: int) -> list[float]:
    """Grid ring radii, innermost first."""
    return [radius / levels * k for k in range(1, levels + 1)]


def text_anchor(angle: float) -> TextAnchor:
    c = math.cos(angle)
    if abs(c) < ANGLE_EPSILON:
        return TextAnchor.MIDDLE
    return TextAnchor.START if c > 0 else TextAnchor.END


def text_baseline(angle: float) -> TextBaseline:
    s = math.sin(angle)
    if abs(s) < ANGLE_EPSILON:
        return TextBaseline.MIDDLE
    return TextBaseline.HANGING if s > 0 else TextBaseline.AUTO


def _polar(cx: float, cy: float, r: float, angle: float) -> Point:
    return (cx + r * math.cos(angle), cy + r * math.sin(angle))


@dataclass(frozen=True)
class RadarLayout:
    """
    Computed radar geometry.

    Attributes:
        cx (float): Center x.
        cy (float): Center y.
        radius (float): Outer grid radius.
        domain_max (float): Radial domain maximum.
        angles (tuple[float, ...]): Slot angles in measure order.
        vertices (tuple[Point, ...]): Polygon vertices in measure order.
        ring_radii (tuple[float, ...]): Grid ring radii, innermost first.
    """

    cx: float
    cy: float
    radius: float
    domain_max: float
    angles: tuple[float, ...]
    vertices: tuple[Point, ...]
    ring_radii: tuple[float, ...]

    def tick_values(self) -> list[float]:
        """Values drawn as tick labels, one per ring."""
        levels = len(self.ring_radii)
        return [self.domain_max / levels * k for k in range(1, levels + 1)]


def radar_points(data: ChartData) -> list[DataPoint]:
    """One DataPoint per measure of the single row, in measure order."""
    row = data.row
    return [DataPoint(axis_label=m.display_label, value=single_value(row, m.name)) for m in data.measures]


def layout_radar(
    points: Sequence[DataPoint],
    domain_max: float,
    radius: float,
    cx: float,
    cy: float,
    levels: int = 5,
) -> RadarLayout:
    """
    Lay out radar slots, vertices, and rings around (cx, cy).

    Args:
        points (Sequence[DataPoint]): Axis values in measure order (N >= 1).
        domain_max (float): Non-zero radial domain maximum.
        radius (float): Outer grid radius in px.
        cx (float): Center x.
        cy (float): Center y.
        levels (int): Grid ring count.

    Returns:
        RadarLayout: Geometry with exactly ``len(points)`` vertices.
    """
    n = len(points)
    angles = tuple(slot_angle(i, n) for i in range(n))
    vertices = tuple(
        _polar(cx, cy, scale_radius(p.value, domain_max, radius), a) for p, a in zip(points, angles)
    )
    return RadarLayout(
        cx=cx,
        cy=cy,
        radius=radius,
        domain_max=domain_max,
        angles=angles,
        vertices=vertices,
        ring_radii=tuple(ring_radii(radius, levels)),
    )


def build_radar_scene(data: ChartData, options: RadarOptions, width: float, height: float) -> Scene:
    """
    Build the radar scene for a validated single-row query.

    Args:
        data (ChartData): Validated radar query.
        options (RadarOptions): Resolved options.
        width (float): Surface width in px.
        height (float): Surface height in px.

    Returns:
        Scene: Paint-ordered radar primitives.
    """
    points = radar_points(data)
    domain_max = radar_max((p.value for p in points), options.max_value)
    radius = min(width, height) / 2 * RADAR_RADIUS_RATIO
    cx = width / 2
    cy = TITLE_Y + RADAR_TITLE_GAP + radius
    layout = layout_radar(points, domain_max, radius, cx, cy, options.levels)
    logger.debug("radar layout: n=%d max=%s radius=%s", len(points), domain_max, radius)

    prims: list = [
        Circle(cx=cx, cy=cy, r=r, fill=None, stroke=options.grid_color, stroke_width=RADAR_RING_STROKE_WIDTH)
        for r in layout.ring_radii
    ]

    ticks = layout.tick_values()
    for point, angle in zip(points, layout.angles):
        x2, y2 = _polar(cx, cy, radius, angle)
        prims.append(
            Line(x1=cx, y1=cy, x2=x2, y2=y2, stroke=options.grid_color, stroke_width=RADAR_AXIS_STROKE_WIDTH)
        )
        anchor, baseline = text_anchor(angle), text_baseline(angle)
        lx, ly = _polar(cx, cy, radius + RADAR_AXIS_LABEL_OFFSET, angle)
        prims.append(
            Text(
                x=lx,
                y=ly,
                content=point.axis_label,
                anchor=anchor,
                baseline=baseline,
                size=options.axis_label_font_size,
                color=options.axis_label_color,
            )
        )
        if options.show_value_labels:
            for tick in ticks:
                tx, ty = _polar(cx, cy, scale_radius(tick, domain_max, radius), angle)
                prims.append(
                    Text(
                        x=tx,
                        y=ty,
                        content=format_fixed(tick, options.value_decimal_places),
                        anchor=anchor,
                        baseline=baseline,
                        size=options.value_label_font_size,
                        color=options.value_label_color,
                    )
                )

    prims.append(
        Polygon(
            points=layout.vertices,
            fill=options.radar_fill_color,
            fill_opacity=options.fill_opacity,
            stroke=options.radar_stroke_color,
            stroke_width=options.stroke_width,
        )
    )
    prims.extend(
        Circle(
            cx=x,
            cy=y,
            r=RADAR_DOT_RADIUS,
            fill=options.radar_stroke_color,
            stroke=DOT_STROKE_COLOR,
            stroke_width=RADAR_DOT_STROKE_WIDTH,
        )
        for x, y in layout.vertices
    )

    if options.title_display:
        item = label_text(data.row.get(data.dimensions[0].name))
        prims.append(
            Text(x=cx, y=TITLE_Y, content=f"{options.chart_title}: {item}", size=TITLE_FONT_SIZE, bold=True)
        )

    return Scene(chart=ChartKind.RADAR, width=width, height=height, primitives=tuple(prims))
