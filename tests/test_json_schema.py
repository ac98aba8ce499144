"""
Unit tests for structural schema rendering.
"""

from schema_compat.constants import JSON_SCHEMA_7_URI, SchemaTarget
from schema_compat.models import (
    AnyNode,
    ArrayNode,
    BooleanNode,
    DateNode,
    EnumNode,
    IntersectionNode,
    LiteralNode,
    NeverNode,
    NullNode,
    NumberNode,
    ObjectNode,
    RecordNode,
    StringNode,
    TupleNode,
    UnionNode,
    url,
)
from schema_compat.utils.json_schema import render_json_schema


def render(node, target=SchemaTarget.JSON_SCHEMA_7):
    return render_json_schema(node, target, include_schema_uri=False)


def test_schema_uri_added_for_json_schema_7():
    """Test that jsonSchema7 output declares its dialect by default."""
    schema = render_json_schema(StringNode())
    assert schema["$schema"] == JSON_SCHEMA_7_URI
    assert list(schema)[0] == "$schema"


def test_schema_uri_omitted_for_open_api_3():
    """Test that openApi3 output never carries $schema."""
    assert "$schema" not in render_json_schema(StringNode(), SchemaTarget.OPEN_API_3)


def test_schema_uri_follows_settings(monkeypatch):
    """Test that the $schema keyword can be disabled through the environment."""
    # Given
    monkeypatch.setenv("SCHEMA_COMPAT_INCLUDE_SCHEMA_URI", "false")

    # When
    schema = render_json_schema(StringNode())

    # Then
    assert "$schema" not in schema


def test_target_accepts_plain_string():
    """Test that dialect names are accepted as plain strings."""
    assert render_json_schema(StringNode(), "openApi3") == {"type": "string"}


def test_render_object():
    """Test properties, required keys and property order."""
    # Given
    schema = ObjectNode(properties={
        "zeta": StringNode(description="Last letter"),
        "alpha": NumberNode().optional(),
    })

    # When
    rendered = render(schema)

    # Then
    assert rendered == {
        "type": "object",
        "properties": {
            "zeta": {"type": "string", "description": "Last letter"},
            "alpha": {"type": "number"},
        },
        "required": ["zeta"],
    }
    assert list(rendered["properties"]) == ["zeta", "alpha"]


def test_render_object_without_required_keys():
    """Test that an empty required list is omitted."""
    rendered = render(ObjectNode(properties={"a": StringNode().optional()}))
    assert "required" not in rendered


def test_render_closed_object():
    """Test that closed objects forbid additional properties."""
    rendered = render(ObjectNode(properties={"a": StringNode()}).strict())
    assert rendered["additionalProperties"] is False


def test_render_array_bounds():
    """Test array length keywords."""
    assert render(ArrayNode(items=StringNode(), min_items=1, max_items=3)) == {
        "type": "array",
        "items": {"type": "string"},
        "minItems": 1,
        "maxItems": 3,
    }


def test_render_array_exact_length():
    """Test that exact length sets both bounds."""
    rendered = render(ArrayNode(items=StringNode(), exact_length=2))
    assert rendered["minItems"] == 2
    assert rendered["maxItems"] == 2


def test_render_string_keywords():
    """Test string length, pattern and format keywords."""
    # When
    rendered = render(StringNode(min_length=1, max_length=5, pattern="^a"))

    # Then
    assert rendered == {"type": "string", "minLength": 1, "maxLength": 5, "pattern": "^a"}
    assert render(url())["format"] == "uri"


def test_render_number_json_schema_7():
    """Test numeric exclusive bounds in jsonSchema7."""
    assert render(NumberNode(gt=0, lte=10, multiple_of=2)) == {
        "type": "number",
        "exclusiveMinimum": 0,
        "maximum": 10,
        "multipleOf": 2,
    }


def test_render_number_open_api_3():
    """Test boolean exclusivity flags in openApi3."""
    assert render(NumberNode(gt=0, lt=10), SchemaTarget.OPEN_API_3) == {
        "type": "number",
        "minimum": 0,
        "exclusiveMinimum": True,
        "maximum": 10,
        "exclusiveMaximum": True,
    }


def test_render_integer():
    """Test that integer numbers render as integer."""
    assert render(NumberNode(integer=True)) == {"type": "integer"}


def test_render_date():
    """Test that dates render as date-time strings without bounds."""
    rendered = render(DateNode(min_date="2023-01-01T00:00:00Z"))
    assert rendered == {"type": "string", "format": "date-time"}


def test_render_union_and_intersection():
    """Test combinators."""
    union = render(UnionNode(options=(StringNode(), NumberNode())))
    intersection = render(IntersectionNode(left=StringNode(), right=StringNode(min_length=1)))

    assert union == {"anyOf": [{"type": "string"}, {"type": "number"}]}
    assert intersection == {"allOf": [{"type": "string"}, {"type": "string", "minLength": 1}]}


def test_render_literal_per_dialect():
    """Test that literals are const in jsonSchema7 and a single enum in openApi3."""
    assert render(LiteralNode(value="a")) == {"type": "string", "const": "a"}
    assert render(LiteralNode(value=1), SchemaTarget.OPEN_API_3) == {"type": "integer", "enum": [1]}


def test_render_null_per_dialect():
    """Test null rendering."""
    assert render(NullNode()) == {"type": "null"}
    assert render(NullNode(), SchemaTarget.OPEN_API_3) == {"nullable": True}


def test_render_tuple_per_dialect():
    """Test positional items in jsonSchema7 and anyOf items in openApi3."""
    # Given
    schema = TupleNode(items=(StringNode(), NumberNode()))

    # When
    json_schema_7 = render(schema)
    open_api_3 = render(schema, SchemaTarget.OPEN_API_3)

    # Then
    assert json_schema_7["items"] == [{"type": "string"}, {"type": "number"}]
    assert open_api_3["items"] == {"anyOf": [{"type": "string"}, {"type": "number"}]}
    assert json_schema_7["minItems"] == json_schema_7["maxItems"] == 2


def test_render_other_kinds():
    """Test boolean, enum, any, never and record."""
    assert render(BooleanNode()) == {"type": "boolean"}
    assert render(EnumNode(values=("a", "b"))) == {"type": "string", "enum": ["a", "b"]}
    assert render(AnyNode()) == {}
    assert render(NeverNode()) == {"not": {}}
    assert render(RecordNode(values=NumberNode())) == {
        "type": "object",
        "additionalProperties": {"type": "number"},
    }


def test_refinements_are_not_rendered():
    """Test that runtime-only checks leave no trace in the rendered schema."""
    schema = StringNode().refine(lambda value: value != "", message="Required")
    assert render(schema) == {"type": "string"}
