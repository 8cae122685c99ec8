"""
Grid layout for the categorical heatmap.

Responsibilities
- Collect distinct X and Y categories in first-occurrence order.
- Index parsed cell values by (x, y) category pair; unparseable values are "no data".
- Size square cells to the available width and center the grid in the surface.
- Emit cell rectangles, optional cell value labels, and axis labels.

Layout
- margins: top 50, right 20, bottom 80, left 100
- cell = max(0, width − left − right) / |X|; grid height = cell * |Y| (may overflow)
- origin: (left + (availW − chartW) / 2, top + (availH − chartH) / 2)

Notes
- Categories are compared by their display text; a missing dimension cell is its own
  category and displays as an empty string.
- Duplicate (x, y) pairs: the last row with a valid value wins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import polars as pl

from scenekit.core.constants import (
    AXIS_TEXT_COLOR,
    CELL_STROKE_COLOR,
    HEATMAP_MARGIN_BOTTOM,
    HEATMAP_MARGIN_LEFT,
    HEATMAP_MARGIN_RIGHT,
    HEATMAP_MARGIN_TOP,
    HEATMAP_ROTATE_DEGREES,
    HEATMAP_ROTATE_MAX_CELL,
    HEATMAP_ROTATE_MIN_CATEGORIES,
    HEATMAP_X_LABEL_GAP,
    HEATMAP_Y_LABEL_GAP,
)
from scenekit.core.grammar import ChartKind, TextAnchor
from scenekit.core.options import HeatmapOptions
from scenekit.core.scene import Rect, Scene, Text

from .coerce import coerce_expr, format_fixed, label_text, measure_frame, unwrap_cell
from .color import ColorScale
from .ranges import Domain, heatmap_domain
from .validate import ChartData

__all__ = [
    "HeatmapGrid",
    "collect_grid",
    "GridLayout",
    "layout_grid",
    "build_heatmap_scene",
]

logger = logging.getLogger(__name__)

Category = str | None


def _category(cell: Any) -> Category:
    v = unwrap_cell(cell)
    return None if v is None else label_text(v)


@dataclass(frozen=True)
class HeatmapGrid:
    """
    Categories and cell values of a heatmap query.

    Attributes:
        x_categories (tuple[Category, ...]): Distinct X values, first-occurrence order.
        y_categories (tuple[Category, ...]): Distinct Y values, first-occurrence order.
        cells (dict[tuple[Category, Category], float]): Valid values keyed by (x, y).
        domain (Domain): Color domain over the valid values.
    """

    x_categories: tuple[Category, ...]
    y_categories: tuple[Category, ...]
    cells: dict[tuple[Category, Category], float]
    domain: Domain

    def value_at(self, x: Category, y: Category) -> float | None:
        return self.cells.get((x, y))


def collect_grid(data: ChartData) -> HeatmapGrid:
    """
    Build the category axes and cell map for a validated heatmap query.

    Examples:
        >>> from scenekit.core.schema import FieldSpec
        >>> rows = ({"x": {"value": "B"}, "y": {"value": "P"}, "m": {"value": 1}},
        ...         {"x": {"value": "A"}, "y": {"value": "P"}, "m": {"value": "n/a"}})
        >>> data = ChartData(ChartKind.HEATMAP, (FieldSpec(name="x"), FieldSpec(name="y")),
        ...                  (FieldSpec(name="m"),), rows)
        >>> grid = collect_grid(data)
        >>> grid.x_categories, grid.value_at("A", "P")
        (('B', 'A'), None)
    """
    x_name, y_name = data.dimensions[0].name, data.dimensions[1].name
    m_name = data.measures[0].name
    values = measure_frame(data.rows, [m_name]).select(coerce_expr(m_name)).get_column(m_name)
    frame = pl.DataFrame(
        {
            "x": pl.Series("x", [_category(r.get(x_name)) for r in data.rows], dtype=pl.Utf8),
            "y": pl.Series("y", [_category(r.get(y_name)) for r in data.rows], dtype=pl.Utf8),
            "value": values.alias("value"),
        }
    )

    x_categories = tuple(frame.get_column("x").unique(maintain_order=True).to_list())
    y_categories = tuple(frame.get_column("y").unique(maintain_order=True).to_list())

    valid = frame.filter(pl.col("value").is_not_null())
    latest = valid.group_by(["x", "y"], maintain_order=True).agg(pl.col("value").last())
    cells = {(x, y): float(v) for x, y, v in latest.iter_rows()}
    if valid.height != latest.height:
        logger.debug("heatmap: %d duplicate cell(s) overwritten", valid.height - latest.height)

    return HeatmapGrid(
        x_categories=x_categories,
        y_categories=y_categories,
        cells=cells,
        domain=heatmap_domain(valid.get_column("value")),
    )


@dataclass(frozen=True)
class GridLayout:
    """
    Pixel geometry of the heatmap grid.

    Attributes:
        cell (float): Side length of a square cell.
        origin_x (float): Left edge of the grid.
        origin_y (float): Top edge of the grid.
        chart_width (float): ``cell * nx``.
        chart_height (float): ``cell * ny``.
        nx (int): Number of X categories.
        ny (int): Number of Y categories.
    """

    cell: float
    origin_x: float
    origin_y: float
    chart_width: float
    chart_height: float
    nx: int
    ny: int

    @property
    def rotate_x_labels(self) -> bool:
        return self.nx > HEATMAP_ROTATE_MIN_CATEGORIES and self.cell < HEATMAP_ROTATE_MAX_CELL

    def cell_origin(self, xi: int, yi: int) -> tuple[float, float]:
        return (self.origin_x + xi * self.cell, self.origin_y + yi * self.cell)


def layout_grid(nx: int, ny: int, width: float, height: float) -> GridLayout:
    """
    Size and center an ``nx`` by ``ny`` grid of square cells.

    Args:
        nx (int): Number of X categories (>= 1).
        ny (int): Number of Y categories (>= 1).
        width (float): Surface width in px.
        height (float): Surface height in px.

    Returns:
        GridLayout: Cell size and grid origin.
    """
    avail_w = max(0.0, width - HEATMAP_MARGIN_LEFT - HEATMAP_MARGIN_RIGHT)
    avail_h = height - HEATMAP_MARGIN_TOP - HEATMAP_MARGIN_BOTTOM
    cell = avail_w / nx
    chart_w, chart_h = cell * nx, cell * ny
    if chart_h > avail_h:
        logger.debug("heatmap grid height %s overflows available height %s", chart_h, avail_h)
    return GridLayout(
        cell=cell,
        origin_x=HEATMAP_MARGIN_LEFT + (avail_w - chart_w) / 2,
        origin_y=HEATMAP_MARGIN_TOP + (avail_h - chart_h) / 2,
        chart_width=chart_w,
        chart_height=chart_h,
        nx=nx,
        ny=ny,
    )


def build_heatmap_scene(data: ChartData, options: HeatmapOptions, width: float, height: float) -> Scene:
    """
    Build the heatmap scene for a validated query.

    Args:
        data (ChartData): Validated heatmap query.
        options (HeatmapOptions): Resolved options.
        width (float): Surface width in px.
        height (float): Surface height in px.

    Returns:
        Scene: Cells in row-major (Y outer, X inner) order, then Y labels, then X labels.
    """
    grid = collect_grid(data)
    layout = layout_grid(len(grid.x_categories), len(grid.y_categories), width, height)
    scale = ColorScale.from_options(grid.domain, options)
    cell = layout.cell

    prims: list = []
    for yi, y in enumerate(grid.y_categories):
        for xi, x in enumerate(grid.x_categories):
            value = grid.value_at(x, y)
            left, top = layout.cell_origin(xi, yi)
            prims.append(
                Rect(
                    x=left,
                    y=top,
                    w=cell,
                    h=cell,
                    color=scale.color_for(value),
                    stroke=CELL_STROKE_COLOR,
                    stroke_width=1.0,
                    no_data=value is None,
                )
            )
            if options.show_cell_values and value is not None:
                prims.append(
                    Text(
                        x=left + cell / 2,
                        y=top + cell / 2 + options.cell_value_size / 3,
                        content=format_fixed(value, options.value_decimal_places),
                        size=options.cell_value_size,
                        color=options.cell_value_color,
                    )
                )

    if options.show_y_axis_labels:
        for yi, y in enumerate(grid.y_categories):
            prims.append(
                Text(
                    x=HEATMAP_MARGIN_LEFT - HEATMAP_Y_LABEL_GAP,
                    y=layout.origin_y + yi * cell + cell / 2 + options.y_axis_label_size / 3,
                    content=y or "",
                    anchor=TextAnchor.END,
                    size=options.y_axis_label_size,
                    color=AXIS_TEXT_COLOR,
                )
            )

    if options.show_x_axis_labels:
        rotate = layout.rotate_x_labels
        label_y = layout.origin_y + layout.chart_height + HEATMAP_X_LABEL_GAP
        for xi, x in enumerate(grid.x_categories):
            prims.append(
                Text(
                    x=layout.origin_x + xi * cell + cell / 2,
                    y=label_y,
                    content=x or "",
                    anchor=TextAnchor.START if rotate else TextAnchor.MIDDLE,
                    size=options.x_axis_label_size,
                    color=AXIS_TEXT_COLOR,
                    rotation=HEATMAP_ROTATE_DEGREES if rotate else 0.0,
                )
            )

    return Scene(chart=ChartKind.HEATMAP, width=width, height=height, primitives=tuple(prims))
