"""
Canonical scenekit grammar and helpers.

Chart kinds, validation failure kinds, primitive kinds, and text anchoring tokens. Every
value here is written verbatim into scene JSON and accepted by the CLI.

Responsibilities
- Hold each enum-like string of a scene or an error in exactly one Enum.
- Parse loose user tokens (``"Radar "``) into those enums.

Naming
- Wire values of ChartKind, ValidationErrorKind and PrimitiveKind are lower_snake.
- TextAnchor and TextBaseline carry the SVG ``text-anchor`` / ``dominant-baseline``
  keywords, so painters pass them through untouched.

Examples
--------
>>> from scenekit.core.grammar import chart_kind_from_value, ChartKind
>>> chart_kind_from_value("Radar") == ChartKind.RADAR
True
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import Enum
from typing import Final

__all__ = [
    "ChartKind",
    "ValidationErrorKind",
    "PrimitiveKind",
    "TextAnchor",
    "TextBaseline",
    "is_lower_snake",
    "chart_kind_from_value",
    "ensure_all_enum_values_lower_snake",
]


class ChartKind(Enum):
    """
    Chart types the engine can lay out.

    Serialized values appear in:
      - Scene.chart
      - CLI ``--kind`` flag
    """

    GAUGE = "gauge"
    RADAR = "radar"
    HEATMAP = "heatmap"


class ValidationErrorKind(Enum):
    """
    Cardinality failures detected before any geometry is computed.

    Notes:
      Raised inside ChartValidationError; see scenekit.engine.validate for the check order
      per chart kind.
    """

    MISSING_DIMENSION = "missing_dimension"
    MISSING_MEASURE = "missing_measure"
    EMPTY_RESULT = "empty_result"
    TOO_MANY_ROWS = "too_many_rows"
    WRONG_MEASURE_COUNT = "wrong_measure_count"


class PrimitiveKind(Enum):
    """Discriminator values for scene primitives."""

    CIRCLE = "circle"
    LINE = "line"
    POLYGON = "polygon"
    ARC = "arc"
    TEXT = "text"
    RECT = "rect"


class TextAnchor(Enum):
    """Horizontal text anchor (SVG ``text-anchor``)."""

    START = "start"
    MIDDLE = "middle"
    END = "end"


class TextBaseline(Enum):
    """Vertical text baseline (SVG ``dominant-baseline``)."""

    AUTO = "auto"
    MIDDLE = "middle"
    HANGING = "hanging"


_SNAKE: Final[re.Pattern[str]] = re.compile(r"[a-z0-9]+(_[a-z0-9]+)*")


def is_lower_snake(value: str) -> bool:
    """
    True for tokens like ``"too_many_rows"``; False for ``"TooManyRows"`` or ``""``.

    Examples:
      >>> is_lower_snake("wrong_measure_count"), is_lower_snake("Gauge")
      (True, False)
    """
    return _SNAKE.fullmatch(value or "") is not None


def chart_kind_from_value(s: str | ChartKind) -> ChartKind:
    """
    Resolve a chart kind token, ignoring case and surrounding whitespace.

    Raises:
      ValueError: For anything other than gauge, radar, or heatmap.
    """
    if isinstance(s, ChartKind):
        return s
    token = (s or "").strip().lower()
    try:
        return ChartKind(token)
    except ValueError:
        names = ", ".join(k.value for k in ChartKind)
        raise ValueError(f"unknown chart kind {s!r} (expected one of: {names})") from None


def ensure_all_enum_values_lower_snake(enums: Iterable[type[Enum]]) -> None:
    """
    Guard the wire naming rule over a set of enums.

    Raises:
      AssertionError: Listing every member whose value breaks the rule.
    """
    bad = [f"{E.__name__}.{m.name}={m.value!r}" for E in enums for m in E if not is_lower_snake(m.value)]
    if bad:
        raise AssertionError(f"enum values must be lower_snake: {', '.join(bad)}")
