"""
Compat layer for Anthropic Claude models.
"""

from typing import Optional

from schema_compat.classifier import NodeKind, classify
from schema_compat.compat_layer import SchemaCompatLayer
from schema_compat.constants import Check, SchemaTarget, SchemaType
from schema_compat.models import SchemaNode

_OPTIONAL_TYPES = (
    SchemaType.OBJECT,
    SchemaType.ARRAY,
    SchemaType.UNION,
    SchemaType.STRING,
    SchemaType.NUMBER,
    SchemaType.DATE,
    SchemaType.NEVER,
    SchemaType.TUPLE,
)

_LENGTH_CHECKS = (Check.MIN, Check.MAX)

_UNSUPPORTED_TYPES = (SchemaType.NEVER, SchemaType.TUPLE)


class AnthropicSchemaCompatLayer(SchemaCompatLayer):
    """Layer for Claude models: only length bounds are degraded."""

    def get_schema_target(self) -> Optional[SchemaTarget]:
        return SchemaTarget.JSON_SCHEMA_7

    def should_apply(self) -> bool:
        return "claude" in self.get_model().model_id

    def process_schema_node(self, node: SchemaNode) -> SchemaNode:
        kind = classify(node)
        if kind == NodeKind.OPTIONAL:
            return self.default_optional_handler(node, _OPTIONAL_TYPES)
        if kind == NodeKind.OBJECT:
            return self.default_object_handler(node)
        if kind == NodeKind.ARRAY:
            return self.default_array_handler(node, _LENGTH_CHECKS)
        if kind == NodeKind.UNION:
            return self.default_union_handler(node)
        if kind == NodeKind.STRING:
            return self.default_string_handler(node, _LENGTH_CHECKS)
        if kind in (NodeKind.NUMBER, NodeKind.DATE):
            return node
        return self.default_unsupported_type_handler(node, _UNSUPPORTED_TYPES)
