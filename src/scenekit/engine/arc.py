"""
Arc geometry for the semicircular single-value gauge.

The gauge sweeps the upper half circle: the domain minimum sits at −π (left), the maximum at
0 (right), and screen y grows downward so intermediate angles lie above the center.

Responsibilities
- Map a clamped value to its angle on the semicircle.
- Build annulus sectors as SVG-style path segments (outer arc, edge, inner arc, close).
- Build the pointer triangle and the label primitives.

Paint order
1) background sector (−π → 0)  2) fill sector (−π → angle)  3) pointer
4) value label  5) min/max labels  6) title
"""

from __future__ import annotations

import logging
import math

from scenekit.core.constants import (
    GAUGE_MIN_MAX_LABEL_OFFSET,
    GAUGE_POINTER_HALF_WIDTH,
    GAUGE_POINTER_INSET,
    GAUGE_RADIUS_RATIO,
    GAUGE_TITLE_GAP,
    GAUGE_VALUE_LABEL_OFFSET_RATIO,
    TITLE_FONT_SIZE,
    TITLE_Y,
)
from scenekit.core.grammar import ChartKind
from scenekit.core.options import GaugeOptions
from scenekit.core.scene import ArcPath, PathSegment, Polygon, Scene, Text

from .coerce import format_fixed, single_value
from .ranges import Domain, clamp, gauge_domain
from .validate import ChartData

__all__ = [
    "value_to_angle",
    "normalize_angle",
    "arc_path",
    "pointer",
    "build_gauge_scene",
]

logger = logging.getLogger(__name__)

_TAU = 2 * math.pi


def value_to_angle(value: float, domain: Domain) -> float:
    """
    Angle of a value on the gauge semicircle.

    Examples:
        >>> d = Domain(0, 100)
        >>> value_to_angle(0, d) == -math.pi, value_to_angle(100, d)
        (True, 0.0)
    """
    return domain.fraction(value) * math.pi - math.pi


def normalize_angle(angle: float) -> float:
    """Map an angle into [0, 2π)."""
    a = angle % _TAU
    # float modulo can land exactly on 2π for tiny negative inputs
    return 0.0 if a >= _TAU else a


def arc_path(
    start: float,
    end: float,
    inner_radius: float,
    outer_radius: float,
    cx: float,
    cy: float,
    fill: str | None = None,
) -> ArcPath:
    """
    Annulus sector swept clockwise from ``start`` to ``end``.

    Args:
        start (float): Start angle in radians.
        end (float): End angle in radians.
        inner_radius (float): Inner radius in px.
        outer_radius (float): Outer radius in px.
        cx (float): Center x.
        cy (float): Center y.
        fill (str | None): Fill color.

    Returns:
        ArcPath: Sector with both its geometric parameters and path segments.

    Notes:
        Angles are normalized to [0, 2π) before the sweep is measured, so a zero-length
        sweep (start == end) yields a degenerate path.
    """
    s, e = normalize_angle(start), normalize_angle(end)
    sweep = e - s
    if sweep < 0:
        sweep += _TAU
    large_arc = 1.0 if sweep > math.pi else 0.0

    segments = (
        PathSegment(command="M", args=(cx + outer_radius * math.cos(s), cy + outer_radius * math.sin(s))),
        PathSegment(
            command="A",
            args=(
                outer_radius,
                outer_radius,
                0.0,
                large_arc,
                1.0,
                cx + outer_radius * math.cos(e),
                cy + outer_radius * math.sin(e),
            ),
        ),
        PathSegment(command="L", args=(cx + inner_radius * math.cos(e), cy + inner_radius * math.sin(e))),
        PathSegment(
            command="A",
            args=(
                inner_radius,
                inner_radius,
                0.0,
                large_arc,
                0.0,
                cx + inner_radius * math.cos(s),
                cy + inner_radius * math.sin(s),
            ),
        ),
        PathSegment(command="Z"),
    )
    return ArcPath(
        cx=cx,
        cy=cy,
        inner_radius=inner_radius,
        outer_radius=outer_radius,
        start_angle=start,
        end_angle=end,
        segments=segments,
        fill=fill,
    )


def pointer(
    angle: float,
    length: float,
    cx: float,
    cy: float,
    half_width: float = GAUGE_POINTER_HALF_WIDTH,
    fill: str | None = None,
) -> Polygon:
    """
    Needle triangle from the center toward ``angle``.

    Returns:
        Polygon: Vertices (base1, tip, base2); the base points sit ``half_width`` from the
        center, perpendicular to the needle.
    """
    tip = (cx + length * math.cos(angle), cy + length * math.sin(angle))
    direction = math.atan2(tip[1] - cy, tip[0] - cx)
    base1 = (
        cx + half_width * math.cos(direction - math.pi / 2),
        cy + half_width * math.sin(direction - math.pi / 2),
    )
    base2 = (
        cx + half_width * math.cos(direction + math.pi / 2),
        cy + half_width * math.sin(direction + math.pi / 2),
    )
    return Polygon(points=(base1, tip, base2), fill=fill)


def build_gauge_scene(data: ChartData, options: GaugeOptions, width: float, height: float) -> Scene:
    """
    Build the gauge scene for a validated single-row, single-measure query.

    Args:
        data (ChartData): Validated gauge query.
        options (GaugeOptions): Resolved options.
        width (float): Surface width in px.
        height (float): Surface height in px.

    Returns:
        Scene: Paint-ordered gauge primitives.
    """
    domain = gauge_domain(options)
    value = clamp(single_value(data.row, data.measures[0].name), domain)

    radius = min(width, height) / 2 * GAUGE_RADIUS_RATIO
    thickness = options.gauge_thickness
    cx = width / 2
    cy = TITLE_Y + GAUGE_TITLE_GAP + radius
    inner = radius - thickness
    angle = value_to_angle(value, domain)
    logger.debug("gauge value=%s angle=%s radius=%s", value, angle, radius)

    prims: list = [
        arc_path(-math.pi, 0.0, inner, radius, cx, cy, fill=options.gauge_color_background),
        arc_path(-math.pi, angle, inner, radius, cx, cy, fill=options.gauge_color_fill),
        pointer(angle, radius - thickness - GAUGE_POINTER_INSET, cx, cy, fill=options.pointer_color),
        Text(
            x=cx,
            y=cy + radius * GAUGE_VALUE_LABEL_OFFSET_RATIO,
            content=format_fixed(value, options.value_format_string),
            size=options.value_label_size,
            color=options.value_label_color,
            bold=True,
        ),
    ]

    if options.show_min_max_labels:
        label_y = cy + GAUGE_MIN_MAX_LABEL_OFFSET + options.min_max_label_size / 2
        for x, bound in ((cx - radius, domain.min), (cx + radius, domain.max)):
            prims.append(
                Text(
                    x=x,
                    y=label_y,
                    content=format_fixed(bound, options.value_format_string),
                    size=options.min_max_label_size,
                    color=options.min_max_label_color,
                )
            )

    if options.title_display:
        prims.append(Text(x=cx, y=TITLE_Y, content=options.title_text, size=TITLE_FONT_SIZE, bold=True))

    return Scene(chart=ChartKind.GAUGE, width=width, height=height, primitives=tuple(prims))
