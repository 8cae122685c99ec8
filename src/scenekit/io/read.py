"""
Read query results and option bags from disk.

Overview
- read_query(): QueryResult from a JSON document, or from a flat CSV/Parquet table read with
  Polars and wrapped into host-shaped cells (``{"value": v}``).
- read_options(): Plain option mapping from a TOML or JSON file.

Field roles for flat tables
- Explicit ``dimensions``/``measures`` arguments win, in the given order.
- Otherwise numeric columns are measures and every other column is a dimension, in file
  column order.

Import DAG discipline
- Depends on stdlib, polars, pydantic (via scenekit.core.schema), and scenekit.io.errors.

Notes
- Input cells are passed through unchanged; numeric coercion happens in the engine.
"""

from __future__ import annotations

import json
import logging
import os
import tomllib
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import polars as pl
from pydantic import ValidationError

from scenekit.core.schema import QueryResult

from .errors import IoReadError

__all__ = [
    "read_query",
    "read_table",
    "frame_to_query",
    "read_options",
]

logger = logging.getLogger(__name__)

_TABLE_SUFFIXES = (".csv", ".parquet")


def _require_file(path: str | os.PathLike[str]) -> Path:
    p = Path(path)
    if not p.is_file():
        raise IoReadError(f"input file not found: {p}")
    return p


def _split_names(names: str | Sequence[str] | None) -> list[str] | None:
    if names is None:
        return None
    if isinstance(names, str):
        return [n.strip() for n in names.split(",") if n.strip()]
    return list(names)


def read_table(path: str | os.PathLike[str]) -> pl.DataFrame:
    """
    Read a flat CSV or Parquet table with Polars.

    Raises:
        IoReadError: If the file is missing, has an unsupported extension, or cannot be parsed.
    """
    p = _require_file(path)
    suffix = p.suffix.lower()
    try:
        if suffix == ".csv":
            return pl.read_csv(p)
        if suffix == ".parquet":
            return pl.read_parquet(p)
    except (pl.exceptions.PolarsError, OSError) as exc:
        raise IoReadError(f"failed to read {p}: {exc}") from exc
    raise IoReadError(f"unsupported table format {suffix!r} (expected one of {_TABLE_SUFFIXES})")


def frame_to_query(
    df: pl.DataFrame,
    dimensions: str | Sequence[str] | None = None,
    measures: str | Sequence[str] | None = None,
) -> QueryResult:
    """
    Wrap a flat frame into a QueryResult.

    Args:
        df (pl.DataFrame): Flat table, one column per field.
        dimensions (str | Sequence[str] | None): Dimension columns (comma-separated or list).
        measures (str | Sequence[str] | None): Measure columns (comma-separated or list).

    Returns:
        QueryResult: Rows in frame order with every cell wrapped as ``{"value": v}``.

    Raises:
        IoReadError: If a named column is absent from the frame.

    Examples:
        >>> q = frame_to_query(pl.DataFrame({"team": ["A"], "score": [3]}))
        >>> [f.name for f in q.fields.dimensions], q.rows[0]["score"]
        (['team'], {'value': 3})
    """
    dims = _split_names(dimensions)
    meas = _split_names(measures)
    if dims is None and meas is None:
        meas = [c for c, dt in df.schema.items() if dt.is_numeric()]
        dims = [c for c in df.columns if c not in meas]
    elif dims is None:
        dims = [c for c in df.columns if c not in meas]  # type: ignore[operator]
    elif meas is None:
        meas = [c for c in df.columns if c not in dims]

    missing = [c for c in [*dims, *meas] if c not in df.columns]
    if missing:
        raise IoReadError(f"columns not found in table: {missing} (available: {df.columns})")

    names = [*dict.fromkeys([*dims, *meas])]
    rows = [{k: {"value": v} for k, v in rec.items()} for rec in df.select(names).iter_rows(named=True)]
    logger.debug("table wrapped: dims=%s measures=%s rows=%d", dims, meas, len(rows))
    return QueryResult.model_validate(
        {"fields": {"dimensions": dims, "measures": meas}, "rows": rows}
    )


def _read_json(p: Path) -> Any:
    try:
        with p.open("r", encoding="utf-8") as fh:
            return json.load(fh)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise IoReadError(f"invalid JSON in {p}: {exc}") from exc


def read_query(
    path: str | os.PathLike[str],
    dimensions: str | Sequence[str] | None = None,
    measures: str | Sequence[str] | None = None,
) -> QueryResult:
    """
    Read a query result from JSON, CSV, or Parquet.

    Args:
        path: Input file. ``.json`` holds a QueryResult document (``fields`` + ``rows``);
            ``.csv``/``.parquet`` hold a flat table.
        dimensions: Field roles for flat tables; for JSON they replace the document's roles.
        measures: See ``dimensions``.

    Returns:
        QueryResult

    Raises:
        IoReadError: If the file is missing, unsupported, or not a valid query result.
    """
    p = _require_file(path)
    if p.suffix.lower() in _TABLE_SUFFIXES:
        return frame_to_query(read_table(p), dimensions, measures)
    if p.suffix.lower() != ".json":
        raise IoReadError(f"unsupported query format {p.suffix!r} (expected .json, .csv, .parquet)")

    doc = _read_json(p)
    if not isinstance(doc, dict):
        raise IoReadError(f"query document must be a JSON object (got {type(doc).__name__})")
    fields = dict(doc.get("fields") or {})
    dims, meas = _split_names(dimensions), _split_names(measures)
    if dims is not None:
        fields["dimensions"] = dims
    if meas is not None:
        fields["measures"] = meas
    try:
        return QueryResult.model_validate({**doc, "fields": fields})
    except ValidationError as exc:
        raise IoReadError(f"{p} is not a valid query result: {exc}") from exc


def read_options(path: str | os.PathLike[str]) -> dict[str, Any]:
    """
    Read an option bag from TOML or JSON.

    Returns:
        dict[str, Any]: Top-level mapping (an ``[options]`` table is unwrapped if present).

    Raises:
        IoReadError: If the file is missing, unsupported, or not a mapping.
    """
    p = _require_file(path)
    suffix = p.suffix.lower()
    if suffix == ".toml":
        try:
            with p.open("rb") as fh:
                doc: Any = tomllib.load(fh)
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            raise IoReadError(f"invalid TOML in {p}: {exc}") from exc
    elif suffix == ".json":
        doc = _read_json(p)
    else:
        raise IoReadError(f"unsupported options format {suffix!r} (expected .toml or .json)")

    if not isinstance(doc, dict):
        raise IoReadError(f"options must be a mapping (got {type(doc).__name__})")
    if isinstance(doc.get("options"), dict):
        return dict(doc["options"])
    return doc
