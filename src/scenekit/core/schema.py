"""
Pydantic v2 models for engine inputs: query fields, query results, and data points.

Responsibilities
- Describe the query result handed to the engine by a host (field roles plus rows).
- Provide the DataPoint model produced for radar axes.

Style
- Zero-IO (stdlib + pydantic only).
- Google-style docstrings with sections such as Attributes, Raises, Examples, and Notes.

References
- errors: src/scenekit/core/errors.py
- validation: src/scenekit/engine/validate.py
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = [
    "FieldSpec",
    "QueryFields",
    "QueryResult",
    "DataPoint",
]


class FieldSpec(BaseModel):
    """
    A dimension or measure column of a query result.

    Attributes:
        name (str): Identifier used as the key in every row.
        label (str | None): Long display label.
        label_short (str | None): Short display label (preferred for radar axes).

    Examples:
        >>> from scenekit.core.schema import FieldSpec
        >>> FieldSpec(name="orders.count", label="Orders Count").display_label
        'Orders Count'
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str
    label: str | None = None
    label_short: str | None = None

    @property
    def display_label(self) -> str:
        return self.label_short or self.label or self.name


class QueryFields(BaseModel):
    """
    Field roles of a query result, in positional order.

    Attributes:
        dimensions (tuple[FieldSpec, ...]): Dimension-like fields.
        measures (tuple[FieldSpec, ...]): Measure-like fields.

    Notes:
        Bare strings are accepted and promoted to FieldSpec(name=...).
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    dimensions: tuple[FieldSpec, ...] = ()
    measures: tuple[FieldSpec, ...] = ()

    @field_validator("dimensions", "measures", mode="before")
    @classmethod
    def _promote_names(cls, v: Any) -> Any:
        if v is None:
            return ()
        if isinstance(v, (list, tuple)):
            return tuple({"name": item} if isinstance(item, str) else item for item in v)
        return v


class QueryResult(BaseModel):
    """
    Tabular query result as handed over by a host.

    Attributes:
        fields (QueryFields): Dimension and measure descriptors.
        rows (list[dict[str, Any]]): Ordered rows; each maps a field name to a wrapped cell
            ``{"value": primitive}`` (bare primitives are tolerated).

    Examples:
        >>> from scenekit.core.schema import QueryResult
        >>> q = QueryResult.model_validate({
        ...     "fields": {"dimensions": ["team"], "measures": ["score"]},
        ...     "rows": [{"team": {"value": "A"}, "score": {"value": 3}}],
        ... })
        >>> len(q.rows), q.fields.measures[0].name
        (1, 'score')
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    fields: QueryFields = Field(default_factory=QueryFields)
    rows: list[dict[str, Any]] = Field(default_factory=list)


class DataPoint(BaseModel):
    """
    One category/measure pair on a radar axis.

    Attributes:
        axis_label (str): Display label of the measure.
        value (float): Parsed measure value (0.0 when missing or unparseable).
    """

    model_config = ConfigDict(frozen=True)

    axis_label: str
    value: float
