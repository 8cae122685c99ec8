"""
Lightweight typing aliases used across core schemas and the engine.

Provides minimal aliases to improve readability and static checks. This module contains no
runtime logic and is zero-IO.

Notes:
    - A Row maps a field name to a wrapped cell (``{"value": primitive}``) or a bare primitive.
    - Keep the surface small and stable to avoid churn in dependents.

Examples:
    >>> from scenekit.core.typing import Row, Point
    >>> row: Row = {"region": {"value": "EMEA"}, "revenue": {"value": 12.5}}
    >>> p: Point = (1.0, 2.0)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

__all__ = [
    "Row",
    "Point",
    "JsonDict",
]

Row = Mapping[str, Any]
Point = tuple[float, float]
JsonDict = dict[str, Any]
