"""
Query cardinality validation per chart kind.

Purpose
- Check dimension/measure/row counts before any geometry is computed.
- Produce a typed ChartData bundle on success, or raise ChartValidationError with the
  user-facing message a host shows instead of the chart.

Checks performed (in order)
- radar:   dims == 0 → missing_dimension; measures == 0 → missing_measure;
           rows == 0 → empty_result; rows > 1 → too_many_rows.
- gauge:   dims == 0 → missing_dimension; measures == 0 → missing_measure;
           rows == 0 → empty_result; rows > 1 → too_many_rows;
           measures != 1 → wrong_measure_count.
- heatmap: dims < 2 → missing_dimension; measures == 0 → missing_measure;
           measures > 1 → wrong_measure_count; rows == 0 → empty_result.

Notes
- The first failing check wins; there is no partial result.
- Field roles are positional: radar/gauge read the first dimension (item name) and every
  measure (radar) or the single measure (gauge); heatmap reads dimensions[0] as X and
  dimensions[1] as Y.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final

from scenekit.core.errors import ChartValidationError
from scenekit.core.grammar import ChartKind, ValidationErrorKind, chart_kind_from_value
from scenekit.core.schema import FieldSpec, QueryResult
from scenekit.core.typing import Row

__all__ = [
    "ChartData",
    "check_cardinality",
    "validate_query",
]

logger = logging.getLogger(__name__)

_NO_DATA: Final[str] = "No data returned for this query."

_MESSAGES: Final[dict[tuple[ChartKind, ValidationErrorKind], str]] = {
    (ChartKind.RADAR, ValidationErrorKind.MISSING_DIMENSION): (
        "This visualization requires at least one dimension (for the item name)."
    ),
    (ChartKind.RADAR, ValidationErrorKind.MISSING_MEASURE): (
        "This visualization requires at least one measure (for performance metrics)."
    ),
    (ChartKind.RADAR, ValidationErrorKind.EMPTY_RESULT): _NO_DATA,
    (ChartKind.RADAR, ValidationErrorKind.TOO_MANY_ROWS): (
        "This Radar Gauge visualization is designed for a single item. Please ensure your "
        "query returns only one row of data (e.g., by filtering to a single dimension value)."
    ),
    (ChartKind.GAUGE, ValidationErrorKind.MISSING_DIMENSION): (
        "This visualization requires at least one dimension."
    ),
    (ChartKind.GAUGE, ValidationErrorKind.MISSING_MEASURE): (
        "This visualization requires at least one measure."
    ),
    (ChartKind.GAUGE, ValidationErrorKind.EMPTY_RESULT): _NO_DATA,
    (ChartKind.GAUGE, ValidationErrorKind.TOO_MANY_ROWS): (
        "This Single-Value Gauge visualization is designed for a single value. Please ensure "
        "your query returns only one row of data (e.g., by filtering to a single dimension "
        "value)."
    ),
    (ChartKind.GAUGE, ValidationErrorKind.WRONG_MEASURE_COUNT): (
        "This chart accepts exactly one measure."
    ),
    (ChartKind.HEATMAP, ValidationErrorKind.MISSING_DIMENSION): (
        "This visualization requires at least two dimensions (one for X-axis, one for Y-axis)."
    ),
    (ChartKind.HEATMAP, ValidationErrorKind.MISSING_MEASURE): (
        "This visualization requires exactly one measure (for cell values)."
    ),
    (ChartKind.HEATMAP, ValidationErrorKind.WRONG_MEASURE_COUNT): (
        "This visualization requires exactly one measure (for cell values)."
    ),
    (ChartKind.HEATMAP, ValidationErrorKind.EMPTY_RESULT): _NO_DATA,
}


@dataclass(frozen=True)
class ChartData:
    """
    Validated query bundle handed to the layout engines.

    Attributes:
        kind (ChartKind): Chart kind the query was validated for.
        dimensions (tuple[FieldSpec, ...]): Dimension fields in positional order.
        measures (tuple[FieldSpec, ...]): Measure fields in positional order.
        rows (tuple[Row, ...]): Rows in query order.
    """

    kind: ChartKind
    dimensions: tuple[FieldSpec, ...]
    measures: tuple[FieldSpec, ...]
    rows: tuple[Row, ...]

    @property
    def row(self) -> Row:
        """The single row of a radar/gauge query."""
        return self.rows[0]


def _fail(kind: ChartKind, reason: ValidationErrorKind) -> ChartValidationError:
    return ChartValidationError(reason, _MESSAGES[(kind, reason)])


def check_cardinality(kind: ChartKind | str, n_dimensions: int, n_measures: int, n_rows: int) -> None:
    """
    Check dimension, measure, and row counts for a chart kind.

    Args:
        kind (ChartKind | str): Chart kind.
        n_dimensions (int): Number of dimension fields.
        n_measures (int): Number of measure fields.
        n_rows (int): Number of rows.

    Raises:
        ChartValidationError: On the first failing check (see module docstring for order).

    Examples:
        >>> check_cardinality("heatmap", 2, 1, 10)
        >>> try:
        ...     check_cardinality("gauge", 1, 2, 1)
        ... except ChartValidationError as e:
        ...     e.kind.value
        'wrong_measure_count'
    """
    k = chart_kind_from_value(kind)
    if k is ChartKind.HEATMAP:
        if n_dimensions < 2:
            raise _fail(k, ValidationErrorKind.MISSING_DIMENSION)
        if n_measures == 0:
            raise _fail(k, ValidationErrorKind.MISSING_MEASURE)
        if n_measures > 1:
            raise _fail(k, ValidationErrorKind.WRONG_MEASURE_COUNT)
        if n_rows == 0:
            raise _fail(k, ValidationErrorKind.EMPTY_RESULT)
        return

    if n_dimensions == 0:
        raise _fail(k, ValidationErrorKind.MISSING_DIMENSION)
    if n_measures == 0:
        raise _fail(k, ValidationErrorKind.MISSING_MEASURE)
    if n_rows == 0:
        raise _fail(k, ValidationErrorKind.EMPTY_RESULT)
    if n_rows > 1:
        raise _fail(k, ValidationErrorKind.TOO_MANY_ROWS)
    if k is ChartKind.GAUGE and n_measures != 1:
        raise _fail(k, ValidationErrorKind.WRONG_MEASURE_COUNT)


def validate_query(kind: ChartKind | str, query: QueryResult | Mapping[str, Any]) -> ChartData:
    """
    Validate a query result for a chart kind.

    Args:
        kind (ChartKind | str): Chart kind.
        query (QueryResult | Mapping[str, Any]): Query result model or its mapping form.

    Returns:
        ChartData: Typed bundle of field roles and rows.

    Raises:
        ChartValidationError: If the query's shape does not fit the chart kind.
        pydantic.ValidationError: If a mapping is not a QueryResult document at all.
    """
    k = chart_kind_from_value(kind)
    q = query if isinstance(query, QueryResult) else QueryResult.model_validate(query)
    dims, measures, rows = q.fields.dimensions, q.fields.measures, tuple(q.rows)
    try:
        check_cardinality(k, len(dims), len(measures), len(rows))
    except ChartValidationError as exc:
        logger.info(
            "%s query rejected (%s): dims=%d measures=%d rows=%d",
            k.value,
            exc.kind.value,
            len(dims),
            len(measures),
            len(rows),
        )
        raise
    return ChartData(kind=k, dimensions=dims, measures=measures, rows=rows)
