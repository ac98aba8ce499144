"""
Compat layers for OpenAI models.

Chat models without structured outputs ignore string formats and patterns
and reject arrays with length keywords, so those are moved into
descriptions. Reasoning models are stricter and get every constraint
degraded.
"""

import re
from typing import Optional

from schema_compat.classifier import NodeKind, classify
from schema_compat.compat_layer import SchemaCompatLayer
from schema_compat.constants import (
    ALL_SCHEMA_TYPES,
    Check,
    SchemaTarget,
    SchemaType,
)
from schema_compat.models import SchemaNode

_REASONING_MODEL_PATTERN = re.compile(r"^o\d")

_OPTIONAL_TYPES = (
    SchemaType.OBJECT,
    SchemaType.ARRAY,
    SchemaType.UNION,
    SchemaType.STRING,
    SchemaType.NUMBER,
    SchemaType.NEVER,
    SchemaType.TUPLE,
)

_STRING_CHECKS = (Check.REGEX, Check.EMAIL, Check.URL, Check.UUID)

_UNSUPPORTED_TYPES = (SchemaType.NEVER, SchemaType.NULL, SchemaType.TUPLE)


def is_reasoning_model(model_id: str) -> bool:
    """Whether a model id names an o-series reasoning model."""
    return bool(_REASONING_MODEL_PATTERN.match(model_id.split("/")[-1]))


class OpenAISchemaCompatLayer(SchemaCompatLayer):
    """Layer for OpenAI chat models called without structured outputs."""

    def get_schema_target(self) -> Optional[SchemaTarget]:
        return SchemaTarget.JSON_SCHEMA_7

    def should_apply(self) -> bool:
        model = self.get_model()
        if model.supports_structured_outputs or is_reasoning_model(model.model_id):
            return False
        return "openai" in model.provider or model.model_id.startswith("gpt-")

    def process_schema_node(self, node: SchemaNode) -> SchemaNode:
        kind = classify(node)
        if kind == NodeKind.OPTIONAL:
            return self.default_optional_handler(node, _OPTIONAL_TYPES)
        if kind == NodeKind.OBJECT:
            return self.default_object_handler(node)
        if kind == NodeKind.UNION:
            return self.default_union_handler(node)
        if kind == NodeKind.ARRAY:
            return self.default_array_handler(node)
        if kind == NodeKind.STRING:
            return self.default_string_handler(node, _STRING_CHECKS)
        if kind in (NodeKind.NUMBER, NodeKind.DATE):
            return node
        return self.default_unsupported_type_handler(node, _UNSUPPORTED_TYPES)


class OpenAIReasoningSchemaCompatLayer(SchemaCompatLayer):
    """Layer for o-series reasoning models: every value constraint is degraded."""

    def get_schema_target(self) -> Optional[SchemaTarget]:
        return SchemaTarget.OPEN_API_3

    def should_apply(self) -> bool:
        return is_reasoning_model(self.get_model().model_id)

    def process_schema_node(self, node: SchemaNode) -> SchemaNode:
        kind = classify(node)
        if kind == NodeKind.OPTIONAL:
            return self.default_optional_handler(node, ALL_SCHEMA_TYPES)
        if kind == NodeKind.OBJECT:
            return self.default_object_handler(node)
        if kind == NodeKind.ARRAY:
            return self.default_array_handler(node)
        if kind == NodeKind.UNION:
            return self.default_union_handler(node)
        if kind == NodeKind.STRING:
            return self.default_string_handler(node)
        if kind == NodeKind.NUMBER:
            return self.default_number_handler(node)
        if kind == NodeKind.DATE:
            return self.default_date_handler(node)
        return self.default_unsupported_type_handler(node)
