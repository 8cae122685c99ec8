"""
Numeric domain resolution for gauge, radar, and heatmap scaling.

Purpose
- Pick the [min, max] domain each chart scales values into: fixed from options, or
  auto-computed from data with padding.
- Guard every zero-span domain so no later division produces NaN or infinity.

Rules
- gauge:   fixed [gauge_min, gauge_max]; an inverted range collapses to [gauge_min, gauge_min].
           Observed values are clamped into the domain before angle mapping.
- radar:   fixed max_value when set (0 is replaced by 1); otherwise max(0, *values) * 1.1,
           and 0 is replaced by 1.
- heatmap: min/max over valid cell values; no valid values or min == max → [0, 1].

Notes
- Guards are silent (DEBUG log only); none of these functions raise on degenerate input.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass

import polars as pl

from scenekit.core.constants import RADAR_AUTO_MAX_PADDING
from scenekit.core.options import GaugeOptions

__all__ = [
    "Domain",
    "UNIT_DOMAIN",
    "gauge_domain",
    "clamp",
    "radar_max",
    "heatmap_domain",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Domain:
    """
    Numeric range used to scale a value into an angle, radius, or color.

    Attributes:
        min (float): Lower bound.
        max (float): Upper bound (``max >= min``).

    Raises:
        ValueError: If ``max < min``.
    """

    min: float
    max: float

    def __post_init__(self) -> None:
        if self.max < self.min:
            raise ValueError(f"domain max {self.max} is below min {self.min}")

    @property
    def span(self) -> float:
        return self.max - self.min

    @property
    def mid(self) -> float:
        return (self.min + self.max) / 2

    def fraction(self, value: float) -> float:
        """Position of ``value`` in the domain (0 at min, 1 at max); 0 for a zero span."""
        if self.span <= 0:
            return 0.0
        return (value - self.min) / self.span


UNIT_DOMAIN = Domain(0.0, 1.0)


def gauge_domain(options: GaugeOptions) -> Domain:
    """
    Fixed gauge domain from options.

    Examples:
        >>> gauge_domain(GaugeOptions(gauge_min=10, gauge_max=5))
        Domain(min=10.0, max=10.0)
    """
    lo, hi = float(options.gauge_min), float(options.gauge_max)
    if hi < lo:
        logger.debug("gauge_max %s below gauge_min %s; collapsing domain", hi, lo)
        hi = lo
    return Domain(lo, hi)


def clamp(value: float, domain: Domain) -> float:
    """Clamp a value into the domain (silently)."""
    clamped = max(domain.min, min(domain.max, value))
    if clamped != value:
        logger.debug("value %s clamped to %s", value, clamped)
    return clamped


def radar_max(values: Iterable[float], fixed: float | None = None) -> float:
    """
    Radial domain maximum for a radar chart.

    Args:
        values (Iterable[float]): Parsed axis values.
        fixed (float | None): Fixed maximum from options; None or NaN auto-scales.

    Returns:
        float: Positive-or-negative non-zero maximum used as the scale divisor.

    Examples:
        >>> round(radar_max([10, 20, 5, 15]), 6)
        22.0
        >>> radar_max([0, 0]), radar_max([3], fixed=8.0)
        (1.0, 8.0)
    """
    if fixed is not None and not math.isnan(fixed):
        if fixed == 0:
            logger.debug("fixed radar max is 0; using 1")
            return 1.0
        return float(fixed)
    top = max([0.0, *(float(v) for v in values)])
    top *= RADAR_AUTO_MAX_PADDING
    if top == 0:
        logger.debug("radar values are all <= 0; using max 1")
        return 1.0
    return top


def heatmap_domain(values: pl.Series | Iterable[float | None]) -> Domain:
    """
    Color domain over valid heatmap cell values.

    Args:
        values (pl.Series | Iterable[float | None]): Parsed values; nulls are ignored.

    Returns:
        Domain: [min, max] of the valid values, or [0, 1] when empty or uniform.

    Examples:
        >>> heatmap_domain([1.0, None, 3.0])
        Domain(min=1.0, max=3.0)
        >>> heatmap_domain([5.0, 5.0])
        Domain(min=0.0, max=1.0)
    """
    s = values if isinstance(values, pl.Series) else pl.Series("v", list(values), dtype=pl.Float64)
    s = s.drop_nulls()
    if s.len() == 0:
        logger.debug("heatmap has no valid values; using unit domain")
        return UNIT_DOMAIN
    lo, hi = float(s.min()), float(s.max())  # type: ignore[arg-type]
    if lo == hi:
        logger.debug("heatmap values are uniform (%s); using unit domain", lo)
        return UNIT_DOMAIN
    return Domain(lo, hi)
