"""
Core exception types raised by query validation and option parsing.

Provides typed exceptions for core-domain failures:
- ChartValidationError for row/dimension/measure cardinality violations.
- OptionsError for chart option mappings that cannot be parsed.
- ColorFormatError for color options that are not hex strings.

Notes:
    - This module uses only the Python standard library and has no side effects.
    - ChartValidationError carries a ValidationErrorKind and a user-facing message; the
      message is shown verbatim by rendering shells and nothing else is drawn.
    - Numeric coercion anomalies and degenerate domains are never raised; the engine
      substitutes zero / "no data" / widened domains instead.

Examples:
    Catch a cardinality failure.

    >>> from scenekit.core.errors import ChartValidationError
    >>> from scenekit.core.grammar import ValidationErrorKind
    >>> try:
    ...     raise ChartValidationError(ValidationErrorKind.EMPTY_RESULT, "No data returned for this query.")
    ... except ChartValidationError as e:
    ...     kind = e.kind
    >>> kind.value
    'empty_result'
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .grammar import ValidationErrorKind

__all__ = [
    "ChartValidationError",
    "OptionsError",
    "ColorFormatError",
]


class ChartValidationError(ValueError):
    """Query result does not have the shape a chart type requires."""

    def __init__(self, kind: ValidationErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __reduce__(self):
        return (type(self), (self.kind, self.message))


class OptionsError(ValueError):
    """Chart option mapping failed to parse into a typed options model."""


class ColorFormatError(OptionsError):
    """Color option is not a 3- or 6-digit hex string."""
