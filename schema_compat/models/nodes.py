"""
Schema node models.

Schema nodes are immutable pydantic models describing one validation rule
plus any nested children. Handlers never mutate a node: they build a new one
with ``model_copy`` or return the same reference when nothing changes.
"""

import re
from datetime import datetime
from typing import Any, Callable, ClassVar, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schema_compat.constants import SchemaType, StringFormat
from schema_compat.exceptions import SchemaConstructionError

Number = Union[int, float]


class Refinement(BaseModel):
    """A runtime-only check enforced by validation but never rendered."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Short identifier used in error types")
    message: str = Field(description="Error message reported when the check fails")
    check: Callable[[Any], bool] = Field(description="Predicate returning True for valid values")


class SchemaNode(BaseModel):
    """Base class for every schema node."""
    model_config = ConfigDict(frozen=True)

    type_name: ClassVar[SchemaType]

    description: Optional[str] = Field(
        default=None,
        description="Free-text description shown to the model"
    )
    refinements: Tuple[Refinement, ...] = Field(
        default=(),
        description="Runtime-only checks applied after type validation"
    )

    def describe(self, description: Optional[str]) -> "SchemaNode":
        """Return a copy of this node with a new description."""
        return self.model_copy(update={"description": description})

    def optional(self) -> "OptionalNode":
        """Wrap this node so that an absent value is accepted."""
        return OptionalNode(inner=self)

    def refine(
        self,
        check: Callable[[Any], bool],
        message: str = "Invalid input",
        name: str = "custom"
    ) -> "SchemaNode":
        """Return a copy of this node with an extra runtime check."""
        refinement = Refinement(name=name, message=message, check=check)
        return self.model_copy(update={"refinements": self.refinements + (refinement,)})

    def safe_parse(self, value: Any):
        """Validate a value against this node without raising."""
        from schema_compat.utils.validation import safe_validate
        return safe_validate(self, value)


class ObjectNode(SchemaNode):
    """Mapping of property names to child nodes."""
    type_name: ClassVar[SchemaType] = SchemaType.OBJECT

    properties: Dict[str, SchemaNode] = Field(
        default_factory=dict,
        description="Ordered property name to node mapping"
    )
    closed: bool = Field(
        default=False,
        description="Reject properties not listed in the mapping"
    )

    @property
    def required_keys(self) -> List[str]:
        """Property names whose node is not optional, in declaration order."""
        return [
            key for key, node in self.properties.items()
            if not isinstance(node, OptionalNode)
        ]

    def strict(self) -> "ObjectNode":
        return self.model_copy(update={"closed": True})

    def passthrough(self) -> "ObjectNode":
        return self.model_copy(update={"closed": False})


class ArrayNode(SchemaNode):
    """Homogeneous list of items."""
    type_name: ClassVar[SchemaType] = SchemaType.ARRAY

    items: SchemaNode = Field(description="Element node")
    min_items: Optional[int] = Field(default=None, ge=0)
    max_items: Optional[int] = Field(default=None, ge=0)
    exact_length: Optional[int] = Field(default=None, ge=0)

    def min(self, count: int) -> "ArrayNode":
        return self.model_copy(update={"min_items": count})

    def max(self, count: int) -> "ArrayNode":
        return self.model_copy(update={"max_items": count})

    def length(self, count: int) -> "ArrayNode":
        return self.model_copy(update={"exact_length": count})


class UnionNode(SchemaNode):
    """Ordered alternatives; a value matches the first option that accepts it."""
    type_name: ClassVar[SchemaType] = SchemaType.UNION

    options: Tuple[SchemaNode, ...] = Field(description="Alternatives in priority order")

    def __init__(self, **data: Any):
        # Checked before pydantic runs so the error is not wrapped in a ValidationError
        options = data.get("options")
        if isinstance(options, (list, tuple)) and len(options) < 2:
            raise SchemaConstructionError("Union must have at least 2 options")
        super().__init__(**data)

    @field_validator("options")
    @classmethod
    def check_arity(cls, options: Tuple[SchemaNode, ...]) -> Tuple[SchemaNode, ...]:
        if len(options) < 2:
            raise SchemaConstructionError("Union must have at least 2 options")
        return options


class OptionalNode(SchemaNode):
    """Wrapper accepting an absent value or the inner node."""
    type_name: ClassVar[SchemaType] = SchemaType.OPTIONAL

    inner: SchemaNode = Field(description="Wrapped node")


class StringNode(SchemaNode):
    """Text value with optional length, format and pattern constraints."""
    type_name: ClassVar[SchemaType] = SchemaType.STRING

    min_length: Optional[int] = Field(default=None, ge=0)
    max_length: Optional[int] = Field(default=None, ge=0)
    format: Optional[StringFormat] = Field(default=None, description="Well-known format")
    pattern: Optional[str] = Field(default=None, description="Regular expression the value must contain a match for")

    @field_validator("pattern")
    @classmethod
    def check_pattern(cls, pattern: Optional[str]) -> Optional[str]:
        if pattern is not None:
            try:
                re.compile(pattern)
            except re.error as e:
                raise SchemaConstructionError(f"Invalid regex pattern {pattern!r}: {e}") from e
        return pattern


class NumberNode(SchemaNode):
    """Numeric value with bound, step, integer and finiteness constraints."""
    type_name: ClassVar[SchemaType] = SchemaType.NUMBER

    gte: Optional[Number] = None
    gt: Optional[Number] = None
    lte: Optional[Number] = None
    lt: Optional[Number] = None
    multiple_of: Optional[Number] = Field(default=None, gt=0)
    integer: bool = Field(default=False, description="Only whole numbers are valid")
    finite: bool = Field(default=False, description="Reject infinities and NaN")


class DateNode(SchemaNode):
    """Point in time with optional inclusive bounds."""
    type_name: ClassVar[SchemaType] = SchemaType.DATE

    min_date: Optional[datetime] = None
    max_date: Optional[datetime] = None


class BooleanNode(SchemaNode):
    type_name: ClassVar[SchemaType] = SchemaType.BOOLEAN


class LiteralNode(SchemaNode):
    type_name: ClassVar[SchemaType] = SchemaType.LITERAL

    value: Union[str, int, float, bool, None]


class EnumNode(SchemaNode):
    type_name: ClassVar[SchemaType] = SchemaType.ENUM

    values: Tuple[str, ...] = Field(min_length=1)


class NullNode(SchemaNode):
    type_name: ClassVar[SchemaType] = SchemaType.NULL


class NeverNode(SchemaNode):
    """Matches nothing."""
    type_name: ClassVar[SchemaType] = SchemaType.NEVER


class AnyNode(SchemaNode):
    type_name: ClassVar[SchemaType] = SchemaType.ANY


class TupleNode(SchemaNode):
    """Fixed-length list with a node per position."""
    type_name: ClassVar[SchemaType] = SchemaType.TUPLE

    items: Tuple[SchemaNode, ...]


class RecordNode(SchemaNode):
    """Mapping of arbitrary string keys to values of one node."""
    type_name: ClassVar[SchemaType] = SchemaType.RECORD

    values: SchemaNode


class IntersectionNode(SchemaNode):
    """Value must satisfy both nodes."""
    type_name: ClassVar[SchemaType] = SchemaType.INTERSECTION

    left: SchemaNode
    right: SchemaNode


def email(description: Optional[str] = None) -> StringNode:
    """Build a string node constrained to email addresses."""
    return StringNode(format=StringFormat.EMAIL, description=description)


def url(description: Optional[str] = None) -> StringNode:
    """Build a string node constrained to URLs."""
    return StringNode(format=StringFormat.URL, description=description)


def uuid(description: Optional[str] = None) -> StringNode:
    """Build a string node constrained to UUIDs."""
    return StringNode(format=StringFormat.UUID, description=description)
