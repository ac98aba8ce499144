"""
Compat layer for Google Gemini models.

Gemini keeps array bounds but drops string, number and date keywords it
does not understand, so those are degraded into descriptions.
"""

from typing import Optional

from schema_compat.classifier import NodeKind, classify
from schema_compat.compat_layer import SchemaCompatLayer
from schema_compat.constants import SchemaTarget, SchemaType, SUPPORTED_SCHEMA_TYPES
from schema_compat.models import SchemaNode

_OPTIONAL_TYPES = SUPPORTED_SCHEMA_TYPES + (SchemaType.NEVER, SchemaType.TUPLE)


class GoogleSchemaCompatLayer(SchemaCompatLayer):
    """Layer for Gemini models."""

    def get_schema_target(self) -> Optional[SchemaTarget]:
        return SchemaTarget.JSON_SCHEMA_7

    def should_apply(self) -> bool:
        model = self.get_model()
        return "google" in model.provider or "gemini" in model.model_id

    def process_schema_node(self, node: SchemaNode) -> SchemaNode:
        kind = classify(node)
        if kind == NodeKind.OPTIONAL:
            return self.default_optional_handler(node, _OPTIONAL_TYPES)
        if kind == NodeKind.OBJECT:
            return self.default_object_handler(node)
        if kind == NodeKind.ARRAY:
            # Array bounds are supported natively
            return self.default_array_handler(node, [])
        if kind == NodeKind.UNION:
            return self.default_union_handler(node)
        if kind == NodeKind.STRING:
            return self.default_string_handler(node)
        if kind == NodeKind.NUMBER:
            return self.default_number_handler(node)
        if kind == NodeKind.DATE:
            return self.default_date_handler(node)
        return self.default_unsupported_type_handler(node)
