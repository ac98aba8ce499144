"""
Rendering of schema nodes into structural schema dialects.

Refinements are runtime-only and never rendered. Date bounds have no
structural keyword in either dialect, so dates render as plain date-time
strings.
"""

import logging
from typing import Any, Dict, Optional

from schema_compat.config import get_settings
from schema_compat.constants import JSON_SCHEMA_7_URI, SchemaTarget, StringFormat
from schema_compat.models.nodes import (
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
    OptionalNode,
    RecordNode,
    SchemaNode,
    StringNode,
    TupleNode,
    UnionNode,
)

logger = logging.getLogger(__name__)

# JSON Schema format names differ from ours for URLs only
_FORMAT_NAMES = {
    StringFormat.EMAIL: "email",
    StringFormat.URL: "uri",
    StringFormat.UUID: "uuid",
    StringFormat.DATE_TIME: "date-time",
}


def _json_type(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    return None


def _render_object(node: ObjectNode, target: SchemaTarget) -> Dict[str, Any]:
    schema: Dict[str, Any] = {
        "type": "object",
        "properties": {
            key: _render(child, target) for key, child in node.properties.items()
        },
    }
    required = node.required_keys
    if required:
        schema["required"] = required
    if node.closed:
        schema["additionalProperties"] = False
    return schema


def _render_array(node: ArrayNode, target: SchemaTarget) -> Dict[str, Any]:
    schema: Dict[str, Any] = {"type": "array", "items": _render(node.items, target)}
    if node.exact_length is not None:
        schema["minItems"] = node.exact_length
        schema["maxItems"] = node.exact_length
    if node.min_items is not None:
        schema["minItems"] = max(node.min_items, schema.get("minItems", node.min_items))
    if node.max_items is not None:
        schema["maxItems"] = min(node.max_items, schema.get("maxItems", node.max_items))
    return schema


def _render_string(node: StringNode) -> Dict[str, Any]:
    schema: Dict[str, Any] = {"type": "string"}
    if node.min_length is not None:
        schema["minLength"] = node.min_length
    if node.max_length is not None:
        schema["maxLength"] = node.max_length
    if node.format is not None:
        schema["format"] = _FORMAT_NAMES[node.format]
    if node.pattern is not None:
        schema["pattern"] = node.pattern
    return schema


def _render_number(node: NumberNode, target: SchemaTarget) -> Dict[str, Any]:
    schema: Dict[str, Any] = {"type": "integer" if node.integer else "number"}
    if target == SchemaTarget.OPEN_API_3:
        # OpenAPI 3.0 uses boolean exclusivity flags next to minimum/maximum
        if node.gt is not None:
            schema["minimum"] = node.gt
            schema["exclusiveMinimum"] = True
        elif node.gte is not None:
            schema["minimum"] = node.gte
        if node.lt is not None:
            schema["maximum"] = node.lt
            schema["exclusiveMaximum"] = True
        elif node.lte is not None:
            schema["maximum"] = node.lte
    else:
        if node.gte is not None:
            schema["minimum"] = node.gte
        if node.gt is not None:
            schema["exclusiveMinimum"] = node.gt
        if node.lte is not None:
            schema["maximum"] = node.lte
        if node.lt is not None:
            schema["exclusiveMaximum"] = node.lt
    if node.multiple_of is not None:
        schema["multipleOf"] = node.multiple_of
    return schema


def _render_literal(node: LiteralNode, target: SchemaTarget) -> Dict[str, Any]:
    schema: Dict[str, Any] = {}
    json_type = _json_type(node.value)
    if json_type:
        schema["type"] = json_type
    if target == SchemaTarget.OPEN_API_3:
        schema["enum"] = [node.value]
    else:
        schema["const"] = node.value
    return schema


def _render_tuple(node: TupleNode, target: SchemaTarget) -> Dict[str, Any]:
    items = [_render(item, target) for item in node.items]
    schema: Dict[str, Any] = {
        "type": "array",
        "minItems": len(items),
        "maxItems": len(items),
    }
    if target == SchemaTarget.OPEN_API_3:
        schema["items"] = {"anyOf": items} if items else {}
    else:
        schema["items"] = items
    return schema


def _render(node: SchemaNode, target: SchemaTarget) -> Dict[str, Any]:
    if isinstance(node, ObjectNode):
        schema = _render_object(node, target)
    elif isinstance(node, ArrayNode):
        schema = _render_array(node, target)
    elif isinstance(node, UnionNode):
        schema = {"anyOf": [_render(option, target) for option in node.options]}
    elif isinstance(node, OptionalNode):
        # Optionality is carried by the parent's "required" list
        schema = _render(node.inner, target)
    elif isinstance(node, StringNode):
        schema = _render_string(node)
    elif isinstance(node, NumberNode):
        schema = _render_number(node, target)
    elif isinstance(node, DateNode):
        schema = {"type": "string", "format": "date-time"}
    elif isinstance(node, BooleanNode):
        schema = {"type": "boolean"}
    elif isinstance(node, LiteralNode):
        schema = _render_literal(node, target)
    elif isinstance(node, EnumNode):
        schema = {"type": "string", "enum": list(node.values)}
    elif isinstance(node, NullNode):
        schema = {"nullable": True} if target == SchemaTarget.OPEN_API_3 else {"type": "null"}
    elif isinstance(node, NeverNode):
        schema = {"not": {}}
    elif isinstance(node, AnyNode):
        schema = {}
    elif isinstance(node, TupleNode):
        schema = _render_tuple(node, target)
    elif isinstance(node, RecordNode):
        schema = {"type": "object", "additionalProperties": _render(node.values, target)}
    elif isinstance(node, IntersectionNode):
        schema = {"allOf": [_render(node.left, target), _render(node.right, target)]}
    else:
        raise TypeError(f"Cannot render {type(node).__name__}")

    if node.description is not None:
        schema = {**schema, "description": node.description}
    return schema


def render_json_schema(
    node: SchemaNode,
    target: SchemaTarget = SchemaTarget.JSON_SCHEMA_7,
    include_schema_uri: Optional[bool] = None
) -> Dict[str, Any]:
    """
    Render a schema node into a structural schema dialect.

    Args:
        node: Root node to render
        target: Dialect to render into
        include_schema_uri: Emit "$schema" at the root of jsonSchema7 output
            (defaults to the configured setting)

    Returns:
        Dict[str, Any]: A new schema tree; the node is not modified
    """
    target = SchemaTarget(target)
    if include_schema_uri is None:
        include_schema_uri = get_settings().include_schema_uri

    schema = _render(node, target)
    if target == SchemaTarget.JSON_SCHEMA_7 and include_schema_uri:
        schema = {"$schema": JSON_SCHEMA_7_URI, **schema}

    logger.debug(f"Rendered {node.type_name.value} schema as {target.value}")
    return schema
