"""
Numeric coercion of measure cells, and fixed-decimal formatting.

Purpose
- Unwrap host cells (``{"value": primitive}`` or bare primitives).
- Parse measure cells to Float64 with Polars; anything unparseable becomes null.
- Provide the two coercion policies the charts need:
  - single-value contexts (gauge, radar axes): null → 0.0
  - heatmap cells: null stays null ("no data"), never zero.

Notes
- Cells are first rendered to text so mixed-type columns (ints, floats, numeric strings,
  junk) build a single Utf8 column; Polars' non-strict cast then does the parsing.
- NaN and ±inf parse results are treated as unparseable.
- Coercion anomalies are logged at DEBUG and never raised.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping, Sequence
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any

import polars as pl

from scenekit.core.schema import FieldSpec
from scenekit.core.typing import Row

__all__ = [
    "unwrap_cell",
    "label_text",
    "measure_frame",
    "coerce_expr",
    "coerce_values",
    "single_value",
    "format_fixed",
]

logger = logging.getLogger(__name__)


def unwrap_cell(cell: Any) -> Any:
    """Return the primitive inside a wrapped cell; bare primitives pass through."""
    if isinstance(cell, Mapping):
        return cell.get("value")
    return cell


def _cell_text(cell: Any) -> str | None:
    v = unwrap_cell(cell)
    if v is None:
        return None
    if isinstance(v, float) and math.isnan(v):
        return None
    return str(v)


def label_text(cell: Any) -> str:
    """
    Display text for a dimension cell.

    Integral floats drop their trailing ``.0``; missing cells render as an empty string.

    Examples:
        >>> label_text({"value": 2024.0}), label_text({"value": "EMEA"}), label_text(None)
        ('2024', 'EMEA', '')
    """
    v = unwrap_cell(cell)
    if v is None:
        return ""
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    return str(v)


def measure_frame(rows: Iterable[Row], fields: Sequence[str | FieldSpec]) -> pl.DataFrame:
    """
    Frame of raw cell text, one Utf8 column per field, in row order.

    Missing cells and NaN become null; everything else is ``str(value)``, ready for
    ``coerce_expr``.

    Examples:
        >>> rows = [{"m": {"value": 3}}, {"m": {"value": "x"}}, {}]
        >>> measure_frame(rows, ["m"]).get_column("m").to_list()
        ['3', 'x', None]
    """
    rows = list(rows)
    names = [f if isinstance(f, str) else f.name for f in fields]
    return pl.DataFrame(
        [pl.Series(n, [_cell_text(r.get(n)) for r in rows], dtype=pl.Utf8) for n in dict.fromkeys(names)]
    )


def coerce_expr(name: str) -> pl.Expr:
    """
    Expression parsing a Utf8 column to finite Float64 values (null otherwise).

    Args:
        name (str): Column name.

    Returns:
        pl.Expr: Float64 expression aliased to ``name``.
    """
    parsed = pl.col(name).str.strip_chars().cast(pl.Float64, strict=False)
    return (
        pl.when(parsed.is_finite())
        .then(parsed)
        .otherwise(pl.lit(None, dtype=pl.Float64))
        .alias(name)
    )


def coerce_values(cells: Iterable[Any], name: str = "value") -> pl.Series:
    """
    Parse an iterable of cells into a Float64 Series with nulls for anomalies.

    Examples:
        >>> coerce_values([{"value": "1.5"}, {"value": "n/a"}, 3, None]).to_list()
        [1.5, None, 3.0, None]
    """
    raw = pl.Series(name, [_cell_text(c) for c in cells], dtype=pl.Utf8)
    out = pl.DataFrame({name: raw}).select(coerce_expr(name)).get_column(name)
    anomalies = out.null_count() - raw.null_count()
    if anomalies:
        logger.debug("column %r: %d unparseable value(s) treated as missing", name, anomalies)
    return out


def single_value(row: Row, name: str) -> float:
    """
    Parse one measure cell for a single-value context (gauge, radar axis).

    Returns:
        float: Parsed value, or 0.0 when the cell is missing or unparseable.

    Examples:
        >>> single_value({"m": {"value": "42"}}, "m"), single_value({}, "m")
        (42.0, 0.0)
    """
    value = coerce_values([row.get(name)], name=name)[0]
    if value is None:
        logger.debug("measure %r missing or unparseable; using 0", name)
        return 0.0
    return float(value)


def format_fixed(value: float | None, decimals: int) -> str:
    """
    Format a number with a fixed number of decimals; non-numbers format as "".

    Ties round half-up (away from zero) on the exact binary value, so ``2.5`` gives ``"3"``
    while ``1.005`` (stored just below) gives ``"1.00"``.

    Examples:
        >>> format_fixed(3.14159, 2), format_fixed(2.5, 0), format_fixed(None, 1)
        ('3.14', '3', '')
    """
    if value is None or isinstance(value, bool) or not isinstance(value, (int, float)):
        return ""
    if not math.isfinite(value):
        return ""
    places = max(0, int(decimals))
    quantum = Decimal(1).scaleb(-places)
    # wide enough for any finite double at up to 20 decimals
    ctx = Context(prec=350)
    return f"{Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP, context=ctx):f}"
