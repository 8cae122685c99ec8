from scenekit.core.schema import FieldSpec, QueryResult


def test_bare_field_names_are_promoted() -> None:
    q = QueryResult.model_validate(
        {"fields": {"dimensions": ["region", {"name": "year", "label": "Year"}], "measures": ["sales"]}}
    )
    assert [f.name for f in q.fields.dimensions] == ["region", "year"]
    assert q.fields.dimensions[1].label == "Year"
    assert q.rows == []


def test_display_label_prefers_short_then_long_then_name() -> None:
    assert FieldSpec(name="m", label="Long", label_short="S").display_label == "S"
    assert FieldSpec(name="m", label="Long").display_label == "Long"
    assert FieldSpec(name="m").display_label == "m"
    assert FieldSpec(name="m", label_short="").display_label == "m"


def test_missing_fields_default_to_empty_roles() -> None:
    q = QueryResult.model_validate({"rows": [{"a": {"value": 1}}], "fields": {"measures": None}})
    assert q.fields.dimensions == ()
    assert q.fields.measures == ()
    assert len(q.rows) == 1
