"""
scenekit.viz: read-only rendering shells over computed scenes.

## Responsibilities
- Map Scene primitives onto Altair (Vega-Lite) layers for previews and HTML export.
- Never recompute geometry: every coordinate, radius, angle, and color comes from the Scene.

## Public API
- scene_to_chart(scene) -> alt.LayerChart
- save_html(chart, path) -> Path

## Import DAG discipline
- Depends on: scenekit.core (Scene models), altair (and stdlib).
- Must not import scenekit.engine or scenekit.io.

## Examples
```python
from scenekit.engine import render_scene  # doctest: +SKIP
from scenekit.viz import scene_to_chart, save_html
chart = scene_to_chart(scene)  # doctest: +SKIP
save_html(chart, "out/gauge.html")  # doctest: +SKIP
```
"""

from __future__ import annotations

from .altair_shell import save_html, scene_to_chart

__all__ = [
    "scene_to_chart",
    "save_html",
]
