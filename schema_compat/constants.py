"""
Shared constants for the schema compatibility layer.

This module contains the check names, schema type groupings and
dialect identifiers used by every compat layer and handler.
"""

from enum import Enum


class SchemaType(str, Enum):
    """Concrete schema node type names."""
    OBJECT = "object"
    ARRAY = "array"
    UNION = "union"
    OPTIONAL = "optional"
    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"
    LITERAL = "literal"
    ENUM = "enum"
    NULL = "null"
    NEVER = "never"
    ANY = "any"
    TUPLE = "tuple"
    RECORD = "record"
    INTERSECTION = "intersection"


class SchemaTarget(str, Enum):
    """Structural schema dialects a layer can render into."""
    JSON_SCHEMA_7 = "jsonSchema7"
    OPEN_API_3 = "openApi3"


class StringFormat(str, Enum):
    """Well-known string formats."""
    EMAIL = "email"
    URL = "url"
    UUID = "uuid"
    DATE_TIME = "date-time"


class Check(str, Enum):
    """Constraint names a handler can be asked to degrade into descriptions."""
    MIN = "min"
    MAX = "max"
    LENGTH = "length"
    MULTIPLE_OF = "multipleOf"
    REGEX = "regex"
    EMAIL = "email"
    URL = "url"
    UUID = "uuid"


ALL_STRING_CHECKS = (
    Check.REGEX,
    Check.EMAIL,
    Check.URL,
    Check.UUID,
    Check.MIN,
    Check.MAX,
)

ALL_NUMBER_CHECKS = (
    Check.MIN,
    Check.MAX,
    Check.MULTIPLE_OF,
)

ALL_ARRAY_CHECKS = (
    Check.MIN,
    Check.MAX,
    Check.LENGTH,
)

# Types every dialect can express
SUPPORTED_SCHEMA_TYPES = (
    SchemaType.OBJECT,
    SchemaType.ARRAY,
    SchemaType.UNION,
    SchemaType.STRING,
    SchemaType.NUMBER,
    SchemaType.DATE,
    SchemaType.BOOLEAN,
    SchemaType.LITERAL,
    SchemaType.ENUM,
    SchemaType.ANY,
    SchemaType.RECORD,
    SchemaType.OPTIONAL,
)

# Recognized types with no faithful structural representation for tool calling
UNSUPPORTED_SCHEMA_TYPES = (
    SchemaType.INTERSECTION,
    SchemaType.NEVER,
    SchemaType.NULL,
    SchemaType.TUPLE,
)

ALL_SCHEMA_TYPES = SUPPORTED_SCHEMA_TYPES + UNSUPPORTED_SCHEMA_TYPES

JSON_SCHEMA_7_URI = "http://json-schema.org/draft-07/schema#"
