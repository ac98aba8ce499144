"""
Result models produced by schema processing and validation.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Union

from pydantic import BaseModel, Field


class ValidationIssue(BaseModel):
    """A single validation error."""
    path: List[Union[str, int]] = Field(
        default_factory=list,
        description="Location of the offending value"
    )
    message: str = Field(description="Human-readable error message")
    type: str = Field(default="value_error", description="Machine-readable error type")


class ValidationResult(BaseModel):
    """
    Outcome of validating a value.
    Failures are ordinary results so callers can inspect them (e.g. to re-prompt a model).
    """
    success: bool = Field(description="Whether the value satisfied the schema")
    value: Any = Field(
        default=None,
        description="Decoded value (only meaningful if success=True)"
    )
    errors: List[ValidationIssue] = Field(
        default_factory=list,
        description="Validation errors (only present if success=False)"
    )


@dataclass(frozen=True)
class ProcessedSchema:
    """
    Rendered structural schema together with a full-fidelity validator.

    Attributes:
        json_schema: Schema in the target dialect, reflecting degraded constraints
        validate: Validator bound to the original, untransformed schema
    """
    json_schema: Dict[str, Any]
    validate: Callable[[Any], ValidationResult]
