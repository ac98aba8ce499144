"""
Node classification predicates.

Classification is isinstance-based, so subclasses of a node type (for
example a branded string node) classify as their base kind.
"""

from enum import Enum

from schema_compat.models.nodes import (
    ArrayNode,
    DateNode,
    NumberNode,
    ObjectNode,
    OptionalNode,
    SchemaNode,
    StringNode,
    UnionNode,
)


class NodeKind(str, Enum):
    """Dispatch categories handled by compat layers."""
    OBJECT = "object"
    ARRAY = "array"
    UNION = "union"
    OPTIONAL = "optional"
    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    OTHER = "other"


def is_object(node: SchemaNode) -> bool:
    return isinstance(node, ObjectNode)


def is_array(node: SchemaNode) -> bool:
    return isinstance(node, ArrayNode)


def is_union(node: SchemaNode) -> bool:
    return isinstance(node, UnionNode)


def is_optional(node: SchemaNode) -> bool:
    return isinstance(node, OptionalNode)


def is_string(node: SchemaNode) -> bool:
    return isinstance(node, StringNode)


def is_number(node: SchemaNode) -> bool:
    return isinstance(node, NumberNode)


def is_date(node: SchemaNode) -> bool:
    return isinstance(node, DateNode)


_PREDICATES = (
    (NodeKind.OBJECT, is_object),
    (NodeKind.ARRAY, is_array),
    (NodeKind.UNION, is_union),
    (NodeKind.OPTIONAL, is_optional),
    (NodeKind.STRING, is_string),
    (NodeKind.NUMBER, is_number),
    (NodeKind.DATE, is_date),
)


def classify(node: SchemaNode) -> NodeKind:
    """Return the dispatch category of a node; unknown nodes are OTHER."""
    for kind, predicate in _PREDICATES:
        if predicate(node):
            return kind
    return NodeKind.OTHER
