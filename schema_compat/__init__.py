"""
Provider-aware schema compatibility layer.

Translates validation schemas into the structural schema a model's
tool-calling interface accepts, while validating model output against the
original schema.
"""

from .apply import apply_compat_layer
from .classifier import (
    NodeKind,
    classify,
    is_array,
    is_date,
    is_number,
    is_object,
    is_optional,
    is_string,
    is_union,
)
from .compat_layer import SchemaCompatLayer
from .constants import (
    ALL_ARRAY_CHECKS,
    ALL_NUMBER_CHECKS,
    ALL_SCHEMA_TYPES,
    ALL_STRING_CHECKS,
    SUPPORTED_SCHEMA_TYPES,
    UNSUPPORTED_SCHEMA_TYPES,
    Check,
    SchemaTarget,
    SchemaType,
    StringFormat,
)
from .exceptions import (
    SchemaCompatError,
    SchemaConstructionError,
    UnsupportedSchemaTypeError,
)
from .utils.descriptions import merge_parameter_description
from .utils.json_schema import render_json_schema
from .utils.logging import setup_logging
from .utils.validation import build_validator, safe_validate

__all__ = [
    "apply_compat_layer",
    "NodeKind",
    "classify",
    "is_array",
    "is_date",
    "is_number",
    "is_object",
    "is_optional",
    "is_string",
    "is_union",
    "SchemaCompatLayer",
    "ALL_ARRAY_CHECKS",
    "ALL_NUMBER_CHECKS",
    "ALL_SCHEMA_TYPES",
    "ALL_STRING_CHECKS",
    "SUPPORTED_SCHEMA_TYPES",
    "UNSUPPORTED_SCHEMA_TYPES",
    "Check",
    "SchemaTarget",
    "SchemaType",
    "StringFormat",
    "SchemaCompatError",
    "SchemaConstructionError",
    "UnsupportedSchemaTypeError",
    "merge_parameter_description",
    "render_json_schema",
    "setup_logging",
    "build_validator",
    "safe_validate",
]
