import pytest

from scenekit.core.grammar import (
    ChartKind,
    PrimitiveKind,
    ValidationErrorKind,
    chart_kind_from_value,
    ensure_all_enum_values_lower_snake,
)
from scenekit.core.scene import ArcPath, Circle, Line, Polygon, Rect, Text


def test_all_enum_values_are_lower_snake() -> None:
    ensure_all_enum_values_lower_snake([ChartKind, ValidationErrorKind, PrimitiveKind])


def test_chart_kind_from_value_is_case_insensitive() -> None:
    assert chart_kind_from_value(" Heatmap ") is ChartKind.HEATMAP
    assert chart_kind_from_value(ChartKind.GAUGE) is ChartKind.GAUGE


def test_chart_kind_from_value_rejects_unknown() -> None:
    with pytest.raises(ValueError):
        chart_kind_from_value("pie")


def test_primitive_kinds_match_scene_discriminators() -> None:
    discriminators = {
        cls.model_fields["kind"].default for cls in (Circle, Line, Polygon, ArcPath, Text, Rect)
    }
    assert discriminators == {k.value for k in PrimitiveKind}
