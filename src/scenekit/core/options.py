"""
Typed chart option records (gauge, radar, heatmap).

Hosts hand the engine a loose option bag; these pydantic models turn it into an explicit,
frozen record once at the boundary. Every option has the default shown in the host's option
panel and, where numeric, the same [min, max] range the panel enforces.

Responsibilities
- Declare every recognized option with its default.
- Clamp numeric options into their documented range instead of rejecting them.
- Accept color options either as a hex string or as a list (first entry wins) and normalize
  them to upper-case ``#RRGGBB``.
- Treat ``None`` as "use the default", except for the nullable radar ``max_value``.

Notes:
    - Unknown keys are ignored (hosts often send extra panel state).
    - parse_options wraps pydantic.ValidationError into OptionsError so callers deal with a
      single domain error type.

Examples:
    >>> from scenekit.core.options import GaugeOptions
    >>> opts = GaugeOptions.model_validate({"gauge_thickness": 500, "gauge_color_fill": ["#0f0"]})
    >>> opts.gauge_thickness, opts.gauge_color_fill
    (50.0, '#00FF00')
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Mapping
from typing import Annotated, Any, ClassVar, Final

from pydantic import BaseModel, BeforeValidator, ConfigDict, ValidationError, model_validator

from .errors import ColorFormatError, OptionsError
from .grammar import ChartKind, chart_kind_from_value

__all__ = [
    "GaugeOptions",
    "RadarOptions",
    "HeatmapOptions",
    "ChartOptions",
    "normalize_hex",
    "parse_options",
]

_HEX_RE: Final[re.Pattern[str]] = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

# Option values are never allowed outside these bounds, whatever the host sends.
_VALUE_BOUND: Final[float] = 1_000_000_000.0


def normalize_hex(value: Any) -> str:
    """
    Normalize a color option to upper-case ``#RRGGBB``.

    Args:
        value (Any): Hex string (with or without ``#``, 3 or 6 digits) or a non-empty
            list/tuple whose first entry is such a string.

    Returns:
        str: Canonical ``#RRGGBB``.

    Raises:
        ColorFormatError: If the value is not a recognizable hex color.

    Examples:
        >>> normalize_hex("#abc")
        '#AABBCC'
        >>> normalize_hex(["4285f4", "#000000"])
        '#4285F4'
    """
    if isinstance(value, (list, tuple)):
        if not value:
            raise ColorFormatError("color list is empty")
        value = value[0]
    if not isinstance(value, str):
        raise ColorFormatError(f"color must be a hex string (got {value!r})")
    m = _HEX_RE.match(value.strip())
    if m is None:
        raise ColorFormatError(f"color must be #RGB or #RRGGBB (got {value!r})")
    digits = m.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return "#" + digits.upper()


def _clamped(lo: float, hi: float) -> Callable[[Any], float]:
    def _validate(v: Any) -> float:
        x = float(v)
        if math.isnan(x):
            raise ValueError("value must be a number, got NaN")
        return min(hi, max(lo, x))

    return _validate


def _clamped_int(lo: int, hi: int) -> Callable[[Any], int]:
    def _validate(v: Any) -> int:
        x = float(v)
        if math.isnan(x):
            raise ValueError("value must be a number, got NaN")
        return int(min(hi, max(lo, round(x))))

    return _validate


def _optional_number(v: Any) -> float | None:
    if v is None:
        return None
    if isinstance(v, str) and not v.strip():
        return None
    x = float(v)
    if math.isnan(x):
        return None
    return x


Color = Annotated[str, BeforeValidator(normalize_hex)]
Bounded = Annotated[float, BeforeValidator(_clamped(-_VALUE_BOUND, _VALUE_BOUND))]


class _Options(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    # Fields that keep an explicit None instead of falling back to their default.
    _nullable: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        return {k: v for k, v in data.items() if v is not None or k in cls._nullable}


class GaugeOptions(_Options):
    """
    Options of the semicircular single-value gauge.

    Attributes:
        gauge_min (float): Domain minimum (default 0).
        gauge_max (float): Domain maximum (default 100).
        gauge_thickness (float): Annulus width in px, clamped to [5, 50] (default 20).
        gauge_color_background (str): Background arc color.
        gauge_color_fill (str): Value arc color.
        pointer_color (str): Needle color.
        value_label_color (str): Center value label color.
        min_max_label_color (str): Color of the min/max labels.
        title_text (str): Chart title.
        title_display (bool): Whether to draw the title.
        value_label_size (float): Value label font size, [10, 72].
        value_format_string (int): Decimal places for all value labels, [0, 10].
        show_min_max_labels (bool): Whether to draw min/max labels.
        min_max_label_size (float): Min/max label font size, [8, 30].
    """

    gauge_min: Bounded = 0.0
    gauge_max: Bounded = 100.0
    gauge_thickness: Annotated[float, BeforeValidator(_clamped(5, 50))] = 20.0

    gauge_color_background: Color = "#E0E0E0"
    gauge_color_fill: Color = "#4285F4"
    pointer_color: Color = "#EA4335"
    value_label_color: Color = "#333333"
    min_max_label_color: Color = "#666666"

    title_text: str = "KPI Progress"
    title_display: bool = True
    value_label_size: Annotated[float, BeforeValidator(_clamped(10, 72))] = 36.0
    value_format_string: Annotated[int, BeforeValidator(_clamped_int(0, 10))] = 1
    show_min_max_labels: bool = True
    min_max_label_size: Annotated[float, BeforeValidator(_clamped(8, 30))] = 14.0


class RadarOptions(_Options):
    """
    Options of the single-item radar chart.

    Attributes:
        chart_title (str): Title prefix; the item name is appended.
        title_display (bool): Whether to draw the title.
        levels (int): Grid ring count, [2, 10].
        max_value (float | None): Fixed domain maximum; None (or NaN/blank) auto-scales.
        radar_fill_color / radar_stroke_color / grid_color / axis_label_color /
            value_label_color (str): Colors.
        axis_label_font_size (float): [8, 24].
        show_value_labels (bool): Draw per-axis tick labels.
        value_label_font_size (float): [8, 20].
        value_decimal_places (int): [0, 5].
        fill_opacity (float): [0.1, 1.0].
        stroke_width (float): [1, 5].
    """

    _nullable: ClassVar[frozenset[str]] = frozenset({"max_value"})

    chart_title: str = "Performance Overview"
    title_display: bool = True
    levels: Annotated[int, BeforeValidator(_clamped_int(2, 10))] = 5
    max_value: Annotated[float | None, BeforeValidator(_optional_number)] = None

    radar_fill_color: Color = "#4285F4"
    radar_stroke_color: Color = "#1A73E8"
    grid_color: Color = "#CDCDCD"
    axis_label_color: Color = "#333333"
    value_label_color: Color = "#000000"

    axis_label_font_size: Annotated[float, BeforeValidator(_clamped(8, 24))] = 12.0
    show_value_labels: bool = True
    value_label_font_size: Annotated[float, BeforeValidator(_clamped(8, 20))] = 10.0
    value_decimal_places: Annotated[int, BeforeValidator(_clamped_int(0, 5))] = 1
    fill_opacity: Annotated[float, BeforeValidator(_clamped(0.1, 1.0))] = 0.7
    stroke_width: Annotated[float, BeforeValidator(_clamped(1, 5))] = 2.0


class HeatmapOptions(_Options):
    """
    Options of the categorical heatmap.

    Attributes:
        min_color / mid_color / max_color (str): Color stops.
        use_mid_color (bool): Three-stop interpolation through mid_color.
        show_x_axis_labels / show_y_axis_labels (bool): Axis label toggles.
        x_axis_label_size / y_axis_label_size (float): [8, 24].
        show_cell_values (bool): Draw the value inside each populated cell.
        cell_value_size (float): [8, 20].
        cell_value_color (str): Cell value label color.
        value_decimal_places (int): [0, 10].
    """

    min_color: Color = "#FFFFFF"
    mid_color: Color = "#FFFF00"
    max_color: Color = "#FF0000"
    use_mid_color: bool = False

    show_x_axis_labels: bool = True
    show_y_axis_labels: bool = True
    x_axis_label_size: Annotated[float, BeforeValidator(_clamped(8, 24))] = 12.0
    y_axis_label_size: Annotated[float, BeforeValidator(_clamped(8, 24))] = 12.0

    show_cell_values: bool = True
    cell_value_size: Annotated[float, BeforeValidator(_clamped(8, 20))] = 10.0
    cell_value_color: Color = "#000000"
    value_decimal_places: Annotated[int, BeforeValidator(_clamped_int(0, 10))] = 1


ChartOptions = GaugeOptions | RadarOptions | HeatmapOptions

_OPTIONS_BY_KIND: Final[dict[ChartKind, type[_Options]]] = {
    ChartKind.GAUGE: GaugeOptions,
    ChartKind.RADAR: RadarOptions,
    ChartKind.HEATMAP: HeatmapOptions,
}


def parse_options(kind: ChartKind | str, mapping: Mapping[str, Any] | None = None) -> ChartOptions:
    """
    Build the typed options record for a chart kind from a loose mapping.

    Args:
        kind (ChartKind | str): Chart kind.
        mapping (Mapping[str, Any] | None): Option bag; None yields all defaults.

    Returns:
        ChartOptions: Frozen options model.

    Raises:
        OptionsError: If an option has an unusable type (e.g., a non-numeric size).
        ColorFormatError: If a color option is not a hex color.
    """
    model = _OPTIONS_BY_KIND[chart_kind_from_value(kind)]
    try:
        return model.model_validate(dict(mapping or {}))  # type: ignore[return-value]
    except ValidationError as exc:
        for err in exc.errors():
            cause = (err.get("ctx") or {}).get("error")
            if isinstance(cause, ColorFormatError):
                raise ColorFormatError(f"{'.'.join(map(str, err['loc']))}: {cause}") from exc
        raise OptionsError(str(exc)) from exc
