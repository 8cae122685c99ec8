"""
Scene description: the ordered, fully-computed primitives a painter draws.

Every primitive carries absolute surface coordinates (pixels, y grows downward, angles in
radians measured clockwise from +x) and resolved colors. Painters map primitives to drawing
calls and must preserve their order: later entries paint on top.

Responsibilities
- Define frozen pydantic models for Circle, Line, Polygon, ArcPath, Text, and Rect.
- Define Scene, the single output of a render pass (primitives or an error message).

Notes:
    - Primitives are discriminated by ``kind`` so a serialized scene validates back into the
      same concrete classes (see scenekit.core.serde).
    - A Scene with ``error`` set never carries primitives.

Examples:
    >>> from scenekit.core.scene import Circle, Scene
    >>> from scenekit.core.grammar import ChartKind
    >>> s = Scene(chart=ChartKind.RADAR, width=200, height=100, primitives=(Circle(cx=1, cy=2, r=3),))
    >>> s.ok, s.primitives[0].kind
    (True, 'circle')
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .grammar import ChartKind, TextAnchor, TextBaseline
from .typing import Point

__all__ = [
    "Circle",
    "Line",
    "Polygon",
    "PathSegment",
    "ArcPath",
    "Text",
    "Rect",
    "Primitive",
    "Scene",
]


class _Primitive(BaseModel):
    model_config = ConfigDict(frozen=True, use_enum_values=True, validate_default=True)


class Circle(_Primitive):
    """Circle centered at (cx, cy); ``fill=None`` draws the outline only."""

    kind: Literal["circle"] = "circle"
    cx: float
    cy: float
    r: float
    fill: str | None = None
    stroke: str | None = None
    stroke_width: float = 1.0


class Line(_Primitive):
    """Straight segment from (x1, y1) to (x2, y2)."""

    kind: Literal["line"] = "line"
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str | None = None
    stroke_width: float = 1.0


class Polygon(_Primitive):
    """Polygon through ``points`` in order; the painter closes the path."""

    kind: Literal["polygon"] = "polygon"
    points: tuple[Point, ...]
    fill: str | None = None
    fill_opacity: float = 1.0
    stroke: str | None = None
    stroke_width: float = 0.0

    def svg_points(self) -> str:
        """Points in SVG ``points`` attribute syntax ("x1,y1 x2,y2 ...")."""
        return " ".join(f"{x},{y}" for x, y in self.points)


class PathSegment(_Primitive):
    """
    One path command with its numeric arguments.

    Attributes:
        command (str): SVG path command letter (``M``, ``L``, ``A``, ``Z``).
        args (tuple[float, ...]): Arguments in SVG order (``A`` takes rx, ry, rotation,
            large-arc flag, sweep flag, x, y).
    """

    command: Literal["M", "L", "A", "Z"]
    args: tuple[float, ...] = ()

    def svg(self) -> str:
        if not self.args:
            return self.command
        return self.command + " " + " ".join(_fmt(a) for a in self.args)


class ArcPath(_Primitive):
    """
    Annulus sector between two angles and two radii.

    The geometric parameters are kept next to the path segments so painters without path
    support (e.g., Vega-Lite arc marks) can draw the same shape.
    """

    kind: Literal["arc"] = "arc"
    cx: float
    cy: float
    inner_radius: float
    outer_radius: float
    start_angle: float
    end_angle: float
    segments: tuple[PathSegment, ...]
    fill: str | None = None

    @property
    def d(self) -> str:
        """SVG path data for the sector."""
        return " ".join(seg.svg() for seg in self.segments)


class Text(_Primitive):
    """
    Text anchored at (x, y).

    Attributes:
        anchor (TextAnchor): Horizontal anchor (SVG text-anchor).
        baseline (TextBaseline): Vertical baseline (SVG dominant-baseline).
        rotation (float): Clockwise rotation in degrees around (x, y).
    """

    kind: Literal["text"] = "text"
    x: float
    y: float
    content: str
    anchor: TextAnchor = TextAnchor.MIDDLE
    baseline: TextBaseline = TextBaseline.AUTO
    size: float = 12.0
    color: str = "#000000"
    bold: bool = False
    rotation: float = 0.0


class Rect(_Primitive):
    """
    Axis-aligned rectangle with top-left corner (x, y).

    ``no_data`` is True for heatmap cells without a valid value. Their ``color`` is
    MISSING_COLOR, which an interpolated color can also equal.
    """

    kind: Literal["rect"] = "rect"
    x: float
    y: float
    w: float
    h: float
    color: str
    stroke: str | None = None
    stroke_width: float = 0.0
    no_data: bool = False


Primitive = Annotated[
    Union[Circle, Line, Polygon, ArcPath, Text, Rect],
    Field(discriminator="kind"),
]


class Scene(BaseModel):
    """
    Output of one render pass.

    Attributes:
        chart (ChartKind): Chart type that produced the scene.
        width (float): Surface width in px.
        height (float): Surface height in px.
        primitives (tuple[Primitive, ...]): Paint-ordered primitives.
        error (str | None): User-facing validation message; set only for failed passes.

    Raises:
        pydantic.ValidationError: If both ``error`` and ``primitives`` are set.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=True, validate_default=True)

    chart: ChartKind
    width: float
    height: float
    primitives: tuple[Primitive, ...] = ()
    error: str | None = None

    @model_validator(mode="after")
    def _error_is_terminal(self) -> Scene:
        if self.error is not None and self.primitives:
            raise ValueError("a failed scene carries no primitives")
        return self

    @classmethod
    def failed(cls, chart: ChartKind, width: float, height: float, message: str) -> Scene:
        return cls(chart=chart, width=width, height=height, error=message)

    @property
    def ok(self) -> bool:
        return self.error is None

    def of_kind(self, kind: str) -> list[Primitive]:
        """Primitives whose ``kind`` equals the given discriminator, in paint order."""
        return [p for p in self.primitives if p.kind == kind]


def _fmt(x: float) -> str:
    # Flags are integral; keep them as 0/1 in path data.
    if float(x).is_integer():
        return str(int(x))
    return repr(float(x))
