"""
Pytest fixtures and configuration for unit tests.
"""

from datetime import datetime

import pytest

from schema_compat.classifier import is_array, is_object, is_optional, is_string, is_union
from schema_compat.compat_layer import SchemaCompatLayer
from schema_compat.config import get_settings
from schema_compat.constants import SchemaTarget
from schema_compat.models import (
    ArrayNode,
    DateNode,
    ModelInfo,
    NumberNode,
    ObjectNode,
    SchemaNode,
    StringNode,
)


class MockSchemaCompatLayer(SchemaCompatLayer):
    """Layer routing to the default handlers and marking processed strings."""

    def should_apply(self) -> bool:
        return True

    def get_schema_target(self):
        return SchemaTarget.JSON_SCHEMA_7

    def process_schema_node(self, node: SchemaNode) -> SchemaNode:
        if is_object(node):
            return self.default_object_handler(node)
        elif is_array(node):
            # Handle every array check by converting it to a description
            return self.default_array_handler(node, ["min", "max", "length"])
        elif is_optional(node):
            return self.default_optional_handler(node)
        elif is_union(node):
            return self.default_union_handler(node)
        elif is_string(node):
            # Marker confirming the node went through the dispatcher
            return StringNode(description=f"{node.description or 'string'}:processed")
        else:
            return node


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Reset cached settings between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mock_model():
    """Model identity used in diagnostics."""
    return ModelInfo(model_id="test-model", provider="test")


@pytest.fixture
def compatibility(mock_model):
    """MockSchemaCompatLayer bound to the mock model."""
    return MockSchemaCompatLayer(mock_model)


@pytest.fixture
def sample_object_schema():
    """Object with a described string and a plain number."""
    return ObjectNode(
        properties={
            "name": StringNode(description="The name"),
            "age": NumberNode(),
        }
    )


@pytest.fixture
def sample_array_schema():
    """Array of strings with length bounds."""
    return ArrayNode(items=StringNode(), min_items=2, max_items=10)


@pytest.fixture
def sample_date_schema():
    """Date limited to the year 2023."""
    return DateNode(
        min_date=datetime(2023, 1, 1),
        max_date=datetime(2023, 12, 31)
    )
