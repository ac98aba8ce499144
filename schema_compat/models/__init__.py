# Pydantic models for the schema compatibility layer

from .model_info import ModelInfo
from .nodes import (
    Refinement,
    SchemaNode,
    ObjectNode,
    ArrayNode,
    UnionNode,
    OptionalNode,
    StringNode,
    NumberNode,
    DateNode,
    BooleanNode,
    LiteralNode,
    EnumNode,
    NullNode,
    NeverNode,
    AnyNode,
    TupleNode,
    RecordNode,
    IntersectionNode,
    email,
    url,
    uuid,
)
from .results import (
    ValidationIssue,
    ValidationResult,
    ProcessedSchema,
)

__all__ = [
    # Model identity
    "ModelInfo",
    # Schema nodes
    "Refinement",
    "SchemaNode",
    "ObjectNode",
    "ArrayNode",
    "UnionNode",
    "OptionalNode",
    "StringNode",
    "NumberNode",
    "DateNode",
    "BooleanNode",
    "LiteralNode",
    "EnumNode",
    "NullNode",
    "NeverNode",
    "AnyNode",
    "TupleNode",
    "RecordNode",
    "IntersectionNode",
    # Node builders
    "email",
    "url",
    "uuid",
    # Results
    "ValidationIssue",
    "ValidationResult",
    "ProcessedSchema",
]
