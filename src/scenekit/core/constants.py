"""
Layout and color constants shared by the engine.

Defines the fixed pixel offsets, ratios, and neutral colors the chart layouts are built
around. This module is zero-IO and uses only the Python standard library.

Notes:
    - Option defaults live in scenekit.core.options; these values are not user-configurable.
    - Changing a constant shifts every scene produced for that chart type.
"""

from __future__ import annotations

__all__ = [
    "MISSING_COLOR",
    "AXIS_TEXT_COLOR",
    "CELL_STROKE_COLOR",
    "DOT_STROKE_COLOR",
    "TITLE_Y",
    "TITLE_FONT_SIZE",
    "GAUGE_RADIUS_RATIO",
    "GAUGE_TITLE_GAP",
    "GAUGE_POINTER_INSET",
    "GAUGE_POINTER_HALF_WIDTH",
    "GAUGE_VALUE_LABEL_OFFSET_RATIO",
    "GAUGE_MIN_MAX_LABEL_OFFSET",
    "RADAR_RADIUS_RATIO",
    "RADAR_TITLE_GAP",
    "RADAR_AXIS_LABEL_OFFSET",
    "RADAR_DOT_RADIUS",
    "RADAR_DOT_STROKE_WIDTH",
    "RADAR_RING_STROKE_WIDTH",
    "RADAR_AXIS_STROKE_WIDTH",
    "RADAR_AUTO_MAX_PADDING",
    "ANGLE_EPSILON",
    "HEATMAP_MARGIN_TOP",
    "HEATMAP_MARGIN_RIGHT",
    "HEATMAP_MARGIN_BOTTOM",
    "HEATMAP_MARGIN_LEFT",
    "HEATMAP_Y_LABEL_GAP",
    "HEATMAP_X_LABEL_GAP",
    "HEATMAP_ROTATE_MIN_CATEGORIES",
    "HEATMAP_ROTATE_MAX_CELL",
    "HEATMAP_ROTATE_DEGREES",
]

# Fill used for heatmap cells with no matching row and for non-numeric color inputs.
MISSING_COLOR: str = "#CCCCCC"
AXIS_TEXT_COLOR: str = "#333333"
CELL_STROKE_COLOR: str = "#FFFFFF"
DOT_STROKE_COLOR: str = "#FFFFFF"

# Titles (gauge, radar) sit on this baseline.
TITLE_Y: float = 30.0
TITLE_FONT_SIZE: float = 16.0

# Gauge
GAUGE_RADIUS_RATIO: float = 0.65
GAUGE_TITLE_GAP: float = 25.0
GAUGE_POINTER_INSET: float = 5.0
GAUGE_POINTER_HALF_WIDTH: float = 4.0
GAUGE_VALUE_LABEL_OFFSET_RATIO: float = 0.4
GAUGE_MIN_MAX_LABEL_OFFSET: float = 10.0

# Radar
RADAR_RADIUS_RATIO: float = 0.7
RADAR_TITLE_GAP: float = 50.0
RADAR_AXIS_LABEL_OFFSET: float = 20.0
RADAR_DOT_RADIUS: float = 4.0
RADAR_DOT_STROKE_WIDTH: float = 1.5
RADAR_RING_STROKE_WIDTH: float = 0.5
RADAR_AXIS_STROKE_WIDTH: float = 1.0
RADAR_AUTO_MAX_PADDING: float = 1.1

# |cos| / |sin| below this is treated as zero when picking label anchors.
ANGLE_EPSILON: float = 1e-3

# Heatmap
HEATMAP_MARGIN_TOP: float = 50.0
HEATMAP_MARGIN_RIGHT: float = 20.0
HEATMAP_MARGIN_BOTTOM: float = 80.0
HEATMAP_MARGIN_LEFT: float = 100.0
HEATMAP_Y_LABEL_GAP: float = 10.0
HEATMAP_X_LABEL_GAP: float = 10.0
HEATMAP_ROTATE_MIN_CATEGORIES: int = 5
HEATMAP_ROTATE_MAX_CELL: float = 80.0
HEATMAP_ROTATE_DEGREES: float = 45.0
