"""
Unit tests for compat layer selection.
"""

import logging

import pytest

from schema_compat.apply import apply_compat_layer
from schema_compat.models import ArrayNode, ModelInfo, ObjectNode, ProcessedSchema, StringNode
from schema_compat.profiles import (
    AnthropicSchemaCompatLayer,
    GoogleSchemaCompatLayer,
    OpenAISchemaCompatLayer,
)


@pytest.fixture
def claude_model():
    return ModelInfo(model_id="claude-3-5-sonnet", provider="anthropic.messages")


@pytest.fixture
def schema():
    return ObjectNode(properties={"name": StringNode(min_length=2)})


def _layers(model):
    return [
        OpenAISchemaCompatLayer(model),
        GoogleSchemaCompatLayer(model),
        AnthropicSchemaCompatLayer(model),
    ]


def test_first_applicable_layer_is_used(claude_model, schema, caplog):
    """Test that the first layer whose should_apply is true processes the schema."""
    # When
    with caplog.at_level(logging.INFO, logger="schema_compat"):
        result = apply_compat_layer(schema, _layers(claude_model))

    # Then
    assert isinstance(result, ProcessedSchema)
    assert result.json_schema["properties"]["name"] == {
        "type": "string",
        "description": '{"minLength":2}',
    }
    assert result.validate({"name": "a"}).success is False
    assert "Applying AnthropicSchemaCompatLayer" in caplog.text


def test_layer_order_decides_priority():
    """Test that earlier layers win when several apply."""
    # Given
    model = ModelInfo(model_id="gemini-claude-hybrid", provider="google.vertex")
    schema = ArrayNode(items=StringNode(), min_items=1)

    # When
    anthropic_first = apply_compat_layer(
        schema,
        [AnthropicSchemaCompatLayer(model), GoogleSchemaCompatLayer(model)],
        mode="json_schema"
    )
    google_first = apply_compat_layer(
        schema,
        [GoogleSchemaCompatLayer(model), AnthropicSchemaCompatLayer(model)],
        mode="json_schema"
    )

    # Then
    assert anthropic_first["description"] == '{"minLength":1}'
    assert "minItems" not in anthropic_first
    assert google_first["minItems"] == 1
    assert "description" not in google_first


def test_no_applicable_layer_renders_unchanged(schema):
    """Test the fallback when no layer applies."""
    # Given
    model = ModelInfo(model_id="llama-3", provider="meta")

    # When
    result = apply_compat_layer(schema, _layers(model))

    # Then
    assert result.json_schema["properties"]["name"] == {"type": "string", "minLength": 2}
    assert result.validate({"name": "ab"}).success is True
    assert result.validate({"name": "a"}).success is False


def test_empty_layer_list(schema):
    """Test that an empty candidate list falls back to the default dialect."""
    rendered = apply_compat_layer(schema, [], mode="json_schema")
    assert rendered["$schema"] == "http://json-schema.org/draft-07/schema#"


def test_fallback_uses_configured_target(schema, monkeypatch):
    """Test that the fallback dialect comes from settings."""
    # Given
    monkeypatch.setenv("SCHEMA_COMPAT_DEFAULT_SCHEMA_TARGET", "openApi3")

    # When
    rendered = apply_compat_layer(schema, [], mode="json_schema")

    # Then
    assert "$schema" not in rendered


def test_json_schema_mode_returns_dict(claude_model):
    """Test that json_schema mode returns the rendered schema only."""
    # When
    rendered = apply_compat_layer(ArrayNode(items=StringNode(), min_items=1), _layers(claude_model), mode="json_schema")

    # Then
    assert isinstance(rendered, dict)
    assert rendered["description"] == '{"minLength":1}'


def test_unknown_mode_raises(claude_model, schema):
    """Test that an unknown mode is rejected."""
    with pytest.raises(ValueError, match="Unknown mode: openapi"):
        apply_compat_layer(schema, _layers(claude_model), mode="openapi")
