"""
Validation of values against schema nodes.

A schema node is compiled into a Python type annotation carrying pydantic
constraints, then validated through a ``TypeAdapter``. The resulting
validators never raise: failures come back as ``ValidationResult`` objects.
"""

import logging
import re
import uuid as uuid_lib
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Literal, Optional, Tuple, Union, get_origin

from pydantic import (
    AfterValidator,
    AnyUrl,
    BeforeValidator,
    ConfigDict,
    Field,
    Strict,
    StrictBool,
    StringConstraints,
    TypeAdapter,
    ValidationError,
    validate_email,
    with_config,
)
from pydantic_core import PydanticCustomError
from typing_extensions import Annotated, NotRequired, TypedDict

from schema_compat.constants import StringFormat
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
    Refinement,
    SchemaNode,
    StringNode,
    TupleNode,
    UnionNode,
)
from schema_compat.models.results import ValidationIssue, ValidationResult

logger = logging.getLogger(__name__)

_DATETIME_ADAPTER = TypeAdapter(datetime)
_TIMESTAMP_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})?\Z"
)
_URL_ADAPTER = TypeAdapter(AnyUrl)


def parse_datetime(value: Any) -> datetime:
    """
    Parse a timestamp into a timezone-aware datetime.

    Strings must be ISO-8601 timestamps with a time component (RFC 3339
    layout); epoch numbers and date-only strings are rejected. Naive values
    are interpreted as UTC so they can be compared with aware bounds.

    Raises:
        ValueError: If the value is not a datetime or ISO-8601 timestamp
    """
    if isinstance(value, datetime):
        return as_utc(value)
    if not isinstance(value, str) or not _TIMESTAMP_PATTERN.match(value):
        raise ValueError(f"Invalid datetime: {value!r}")
    try:
        parsed = _DATETIME_ADAPTER.validate_python(value)
    except ValidationError as e:
        raise ValueError(f"Invalid datetime: {value!r}") from e
    return as_utc(parsed)


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def check_date_bounds(
    value: datetime,
    min_date: Optional[datetime],
    max_date: Optional[datetime]
) -> datetime:
    """Raise ValueError if value falls outside the inclusive bounds."""
    moment = as_utc(value)
    if min_date is not None and moment < as_utc(min_date):
        raise ValueError(f"Date must be on or after {as_utc(min_date).isoformat()}")
    if max_date is not None and moment > as_utc(max_date):
        raise ValueError(f"Date must be on or before {as_utc(max_date).isoformat()}")
    return value


def _reject_bool(value: Any) -> Any:
    if isinstance(value, bool):
        raise PydanticCustomError("number_type", "Input should be a valid number")
    return value


def _integral(value: Any) -> Any:
    value = _reject_bool(value)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _check_email(value: str) -> str:
    validate_email(value)
    return value


def _check_url(value: str) -> str:
    try:
        _URL_ADAPTER.validate_python(value)
    except ValidationError as e:
        raise ValueError(f"Invalid url: {value!r}") from e
    return value


def _check_uuid(value: str) -> str:
    try:
        uuid_lib.UUID(value)
    except ValueError as e:
        raise ValueError(f"Invalid uuid: {value!r}") from e
    return value


def _check_date_time(value: str) -> str:
    parse_datetime(value)
    return value


_FORMAT_CHECKS: Dict[StringFormat, Callable[[str], str]] = {
    StringFormat.EMAIL: _check_email,
    StringFormat.URL: _check_url,
    StringFormat.UUID: _check_uuid,
    StringFormat.DATE_TIME: _check_date_time,
}


def _pattern_check(pattern: str) -> Callable[[str], str]:
    compiled = re.compile(pattern)

    def check(value: str) -> str:
        if not compiled.search(value):
            raise PydanticCustomError(
                "string_pattern_mismatch",
                "String should match pattern '{pattern}'",
                {"pattern": pattern}
            )
        return value

    return check


def _exact_length_check(length: int) -> Callable[[list], list]:
    def check(value: list) -> list:
        if len(value) != length:
            raise PydanticCustomError(
                "array_exact_length",
                "Array must contain exactly {length} element(s)",
                {"length": length}
            )
        return value

    return check


def _refinement_validator(refinement: Refinement) -> AfterValidator:
    def check(value: Any) -> Any:
        try:
            passed = refinement.check(value)
        except Exception as e:
            logger.debug(f"Refinement '{refinement.name}' raised {type(e).__name__}: {e}")
            passed = False
        if not passed:
            raise PydanticCustomError(refinement.name, refinement.message)
        return value

    return AfterValidator(check)


def _never(value: Any) -> Any:
    raise PydanticCustomError("never", "No value is accepted")


def _string_type(node: StringNode) -> Any:
    annotated = Annotated[
        str,
        StringConstraints(strict=True, min_length=node.min_length, max_length=node.max_length)
    ]
    if node.format is not None:
        annotated = Annotated[annotated, AfterValidator(_FORMAT_CHECKS[node.format])]
    if node.pattern is not None:
        annotated = Annotated[annotated, AfterValidator(_pattern_check(node.pattern))]
    return annotated


def _number_type(node: NumberNode) -> Any:
    constraints: Dict[str, Any] = {
        "ge": node.gte,
        "gt": node.gt,
        "le": node.lte,
        "lt": node.lt,
        "multiple_of": node.multiple_of,
    }
    # Before validators run outermost, ahead of the strict type check
    if node.integer:
        return Annotated[int, Strict(), Field(**constraints), BeforeValidator(_integral)]
    if node.finite:
        constraints["allow_inf_nan"] = False
    return Annotated[float, Strict(), Field(**constraints), BeforeValidator(_reject_bool)]


def _timestamp(value: Any) -> Any:
    parse_datetime(value)
    return value


def _date_type(node: DateNode) -> Any:
    def check(value: datetime) -> datetime:
        return check_date_bounds(value, node.min_date, node.max_date)

    # Before validators run outermost, ahead of pydantic's lax datetime parsing
    return Annotated[datetime, AfterValidator(check), BeforeValidator(_timestamp)]


def _object_type(node: ObjectNode) -> Any:
    fields: Dict[str, Any] = {}
    for key, child in node.properties.items():
        if isinstance(child, OptionalNode):
            # Absence is expressed by omitting the key, so null stays invalid
            fields[key] = NotRequired[_refined(build_type(child.inner), child)]
        else:
            fields[key] = build_type(child)

    typed_dict = TypedDict("ObjectSchema", fields)
    extra = "forbid" if node.closed else "ignore"
    return with_config(ConfigDict(extra=extra))(typed_dict)


def _array_type(node: ArrayNode) -> Any:
    annotated = Annotated[
        List[build_type(node.items)],
        Strict(),
        Field(min_length=node.min_items, max_length=node.max_items)
    ]
    if node.exact_length is not None:
        annotated = Annotated[annotated, AfterValidator(_exact_length_check(node.exact_length))]
    return annotated


def _union_type(node: UnionNode) -> Any:
    union = Union[tuple(build_type(option) for option in node.options)]
    if get_origin(union) is Union:
        return Annotated[union, Field(union_mode="left_to_right")]
    # All options compiled to the same type
    return union


def _intersection_type(node: IntersectionNode) -> Any:
    left = TypeAdapter(build_type(node.left))
    right = TypeAdapter(build_type(node.right))

    def check(value: Any) -> Any:
        left_value = left.validate_python(value)
        right_value = right.validate_python(value)
        if isinstance(left_value, dict) and isinstance(right_value, dict):
            return {**left_value, **right_value}
        return right_value

    return Annotated[Any, AfterValidator(check)]


def build_type(node: SchemaNode) -> Any:
    """
    Compile a schema node into a type annotation understood by pydantic.

    Args:
        node: Schema node to compile

    Returns:
        Any: Type annotation enforcing every constraint of the node,
        including its runtime-only refinements
    """
    if isinstance(node, ObjectNode):
        compiled = _object_type(node)
    elif isinstance(node, ArrayNode):
        compiled = _array_type(node)
    elif isinstance(node, UnionNode):
        compiled = _union_type(node)
    elif isinstance(node, OptionalNode):
        compiled = Optional[build_type(node.inner)]
    elif isinstance(node, StringNode):
        compiled = _string_type(node)
    elif isinstance(node, NumberNode):
        compiled = _number_type(node)
    elif isinstance(node, DateNode):
        compiled = _date_type(node)
    elif isinstance(node, BooleanNode):
        compiled = StrictBool
    elif isinstance(node, LiteralNode):
        compiled = Literal[node.value]
    elif isinstance(node, EnumNode):
        compiled = Literal[node.values]
    elif isinstance(node, NullNode):
        compiled = None
    elif isinstance(node, NeverNode):
        compiled = Annotated[Any, BeforeValidator(_never)]
    elif isinstance(node, AnyNode):
        compiled = Any
    elif isinstance(node, TupleNode):
        compiled = Tuple[tuple(build_type(item) for item in node.items)] if node.items else Tuple[()]
    elif isinstance(node, RecordNode):
        compiled = Dict[str, build_type(node.values)]
    elif isinstance(node, IntersectionNode):
        compiled = _intersection_type(node)
    else:
        raise TypeError(f"Cannot build a validator for {type(node).__name__}")

    return _refined(compiled, node)


def _refined(compiled: Any, node: SchemaNode) -> Any:
    for refinement in node.refinements:
        compiled = Annotated[compiled, _refinement_validator(refinement)]
    return compiled


def _to_issues(error: ValidationError) -> List[ValidationIssue]:
    return [
        ValidationIssue(
            path=list(detail["loc"]),
            message=detail["msg"],
            type=detail["type"]
        )
        for detail in error.errors()
    ]


def build_validator(node: SchemaNode) -> Callable[[Any], ValidationResult]:
    """
    Build a never-raising validator bound to a schema node.

    Args:
        node: Schema node whose full constraints are enforced

    Returns:
        Callable[[Any], ValidationResult]: Validator returning success with the
        decoded value, or failure with structured error details
    """
    adapter = TypeAdapter(build_type(node))

    def validate(value: Any) -> ValidationResult:
        try:
            decoded = adapter.validate_python(value)
        except ValidationError as e:
            issues = _to_issues(e)
            logger.debug(f"Validation failed with {len(issues)} error(s): {issues[0].message if issues else ''}")
            return ValidationResult(success=False, errors=issues)
        return ValidationResult(success=True, value=decoded)

    return validate


def safe_validate(node: SchemaNode, value: Any) -> ValidationResult:
    """Validate a value against a node once, without raising."""
    return build_validator(node)(value)
