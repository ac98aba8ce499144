"""Custom exceptions for the schema compatibility layer."""


class SchemaCompatError(Exception):
    """Base exception for schema compatibility errors."""
    pass


class SchemaConstructionError(SchemaCompatError, ValueError):
    """Raised when a schema node violates a structural invariant."""
    pass


class UnsupportedSchemaTypeError(SchemaCompatError):
    """Raised when the active model cannot represent a schema type."""

    def __init__(self, model_id: str, type_name: str):
        self.model_id = model_id
        self.type_name = type_name
        super().__init__(f"{model_id} does not support schema type: {type_name}")
