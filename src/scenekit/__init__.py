"""
scenekit: geometry and scale engine for gauge, radar, and heatmap charts.

Turns a tabular query result plus a chart option bag into a Scene: an ordered list of
fully-computed drawing primitives (circles, lines, polygons, arc paths, text, rectangles)
that any painter can draw without further math.

Packages
- scenekit.core: grammar, schemas, options, scene models, hashing/serde (zero IO).
- scenekit.engine: validation, coercion, domains, colors, and the three layouts.
- scenekit.io: settings, input readers, and the atomic scene writer.
- scenekit.viz: Altair rendering shell over scenes.

CLI entrypoint (configured in pyproject.toml):
    scenekit = scenekit.cli:main
"""

from __future__ import annotations

__version__ = "0.1.0"
