"""
scenekit.engine: geometry and scale engine for gauge, radar, and heatmap charts.

## Responsibilities
- Validate query cardinality per chart kind (validate).
- Coerce measure cells to numbers and format labels (coerce).
- Resolve numeric domains (ranges) and map values to colors (color).
- Lay out arcs (arc), polar slots (polar), and categorical grids (grid).
- Tie the steps together per chart kind (renderers).

## Public API
- render_scene(kind, query, options, width=..., height=...) -> Scene
- GaugeRenderer / RadarRenderer / HeatmapRenderer with initialize(surface) and render(...)

## Import DAG discipline
- Depends on stdlib, polars, and scenekit.core only; no file IO.

## Examples
```python
from scenekit.engine import render_scene
scene = render_scene(
    "gauge",
    {"fields": {"dimensions": ["kpi"], "measures": ["pct"]},
     "rows": [{"kpi": {"value": "NPS"}, "pct": {"value": 75}}]},
    {"gauge_max": 100},
    width=400,
    height=300,
)
scene.ok  # True
```
"""

from __future__ import annotations

from .renderers import (
    RENDERERS,
    ChartRenderer,
    GaugeRenderer,
    HeatmapRenderer,
    RadarRenderer,
    Surface,
    render_scene,
    renderer_for,
)
from .validate import ChartData, validate_query

__all__ = [
    "Surface",
    "ChartRenderer",
    "GaugeRenderer",
    "RadarRenderer",
    "HeatmapRenderer",
    "RENDERERS",
    "renderer_for",
    "render_scene",
    "ChartData",
    "validate_query",
]
