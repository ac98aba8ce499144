"""
Abstract schema compatibility layer.

A compat layer decides, for one target model, how each schema node is
presented to the model. Constraints the target cannot express natively are
folded into descriptions, while the validator returned by
``process_to_ai_schema`` keeps enforcing the original schema.

Concrete layers implement ``process_schema_node`` and route each node kind
to one of the default handlers below, overriding only where their target's
capabilities differ.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Iterable, Mapping, Optional

from schema_compat.config import get_settings
from schema_compat.constants import (
    ALL_ARRAY_CHECKS,
    ALL_NUMBER_CHECKS,
    ALL_SCHEMA_TYPES,
    ALL_STRING_CHECKS,
    UNSUPPORTED_SCHEMA_TYPES,
    Check,
    SchemaTarget,
    SchemaType,
    StringFormat,
)
from schema_compat.exceptions import (
    SchemaCompatError,
    SchemaConstructionError,
    UnsupportedSchemaTypeError,
)
from schema_compat.models import (
    ArrayNode,
    DateNode,
    ModelInfo,
    NumberNode,
    ObjectNode,
    OptionalNode,
    ProcessedSchema,
    Refinement,
    SchemaNode,
    StringNode,
    UnionNode,
)
from schema_compat.utils.descriptions import merge_parameter_description
from schema_compat.utils.json_schema import render_json_schema
from schema_compat.utils.validation import as_utc, build_validator, check_date_bounds, parse_datetime

logger = logging.getLogger(__name__)

_STRING_FORMAT_CHECKS = {
    StringFormat.EMAIL: (Check.EMAIL, "emailFormat"),
    StringFormat.URL: (Check.URL, "urlFormat"),
    StringFormat.UUID: (Check.UUID, "uuidFormat"),
}


def _date_range_refinement(min_date: Optional[datetime], max_date: Optional[datetime]) -> Refinement:
    def within_range(value: Any) -> bool:
        try:
            check_date_bounds(parse_datetime(value), min_date, max_date)
        except ValueError:
            return False
        return True

    bounds = []
    if min_date is not None:
        bounds.append(f"on or after {as_utc(min_date).isoformat()}")
    if max_date is not None:
        bounds.append(f"on or before {as_utc(max_date).isoformat()}")

    return Refinement(
        name="date_range",
        message=f"Date must be {' and '.join(bounds)}",
        check=within_range
    )


class SchemaCompatLayer(ABC):
    """Abstract base for per-model schema compatibility strategies."""

    def __init__(self, model: ModelInfo):
        """
        Initialize the layer for a target model.

        Args:
            model: Identity of the model schemas are prepared for
        """
        self.model = model

    def get_model(self) -> ModelInfo:
        """Get the model this layer prepares schemas for."""
        return self.model

    @abstractmethod
    def should_apply(self) -> bool:
        """Whether this layer's policy should run for its model."""
        pass

    @abstractmethod
    def get_schema_target(self) -> Optional[SchemaTarget]:
        """Dialect to render into; None means the configured default."""
        pass

    @abstractmethod
    def process_schema_node(self, node: SchemaNode) -> SchemaNode:
        """
        Rewrite a single node for the target model.

        Implementations classify the node and route it to a default handler
        or a custom one. Handlers call back into this method for children.
        """
        pass

    def merge_parameter_description(
        self,
        description: Optional[str],
        constraints: Mapping[str, Any]
    ) -> Optional[str]:
        """Fold constraints into a description (see ``merge_parameter_description``)."""
        return merge_parameter_description(description, constraints)

    def default_object_handler(self, node: ObjectNode) -> ObjectNode:
        """
        Process every property of an object through the dispatcher.

        Property order, the closed flag and the object's description are preserved.
        """
        properties = {
            key: self.process_schema_node(child)
            for key, child in node.properties.items()
        }
        if all(properties[key] is child for key, child in node.properties.items()):
            return node
        return node.model_copy(update={"properties": properties})

    def default_unsupported_type_handler(
        self,
        node: SchemaNode,
        throw_on_types: Iterable[str] = UNSUPPORTED_SCHEMA_TYPES
    ) -> SchemaNode:
        """
        Fail for schema types the target cannot represent, pass others through.

        Args:
            node: Node to check
            throw_on_types: Schema types that raise; an empty collection makes
                this handler a pure pass-through

        Raises:
            UnsupportedSchemaTypeError: If the node's type is in throw_on_types
        """
        fail_types = {SchemaType(type_name) for type_name in throw_on_types}
        type_name = getattr(node, "type_name", None)
        if type_name in fail_types:
            raise UnsupportedSchemaTypeError(self.model.model_id, type_name.value)
        return node

    def default_array_handler(
        self,
        node: ArrayNode,
        handle_checks: Iterable[str] = ALL_ARRAY_CHECKS
    ) -> ArrayNode:
        """
        Process the element node and degrade the selected length constraints.

        Args:
            node: Array node
            handle_checks: Checks to move into the description ("min", "max",
                "length"); any other present constraint stays native

        Returns:
            ArrayNode: Rewritten node
        """
        checks = {Check(check) for check in handle_checks}
        items = self.process_schema_node(node.items)

        constraints: Dict[str, Any] = {}
        update: Dict[str, Any] = {"items": items}
        if Check.MIN in checks and node.min_items is not None:
            constraints["minLength"] = node.min_items
            update["min_items"] = None
        if Check.MAX in checks and node.max_items is not None:
            constraints["maxLength"] = node.max_items
            update["max_items"] = None
        if Check.LENGTH in checks and node.exact_length is not None:
            constraints["exactLength"] = node.exact_length
            update["exact_length"] = None

        if not constraints and items is node.items:
            return node

        if constraints:
            logger.debug(f"Degrading {node.type_name.value} constraints {list(constraints)} for {self.model.model_id}")
        update["description"] = self.merge_parameter_description(node.description, constraints)
        return node.model_copy(update=update)

    def default_union_handler(self, node: UnionNode) -> UnionNode:
        """
        Process every option of a union, keeping order and description.

        Raises:
            SchemaConstructionError: If the union has fewer than 2 options
        """
        if len(node.options) < 2:
            raise SchemaConstructionError("Union must have at least 2 options")

        options = tuple(self.process_schema_node(option) for option in node.options)
        if all(new is old for new, old in zip(options, node.options)):
            return node
        return node.model_copy(update={"options": options})

    def default_string_handler(
        self,
        node: StringNode,
        handle_checks: Iterable[str] = ALL_STRING_CHECKS
    ) -> StringNode:
        """
        Degrade the selected string constraints into the description.

        Args:
            node: String node
            handle_checks: Checks to degrade ("regex", "email", "url", "uuid",
                "min", "max"); the date-time format is never degraded

        Returns:
            StringNode: Rewritten node, or the same node if nothing was degraded
        """
        checks = {Check(check) for check in handle_checks}

        constraints: Dict[str, Any] = {}
        update: Dict[str, Any] = {}
        if Check.REGEX in checks and node.pattern is not None:
            constraints["regex"] = {"pattern": node.pattern}
            update["pattern"] = None
        if node.format in _STRING_FORMAT_CHECKS:
            check, hint = _STRING_FORMAT_CHECKS[node.format]
            if check in checks:
                constraints[hint] = True
                update["format"] = None
        if Check.MIN in checks and node.min_length is not None:
            constraints["minLength"] = node.min_length
            update["min_length"] = None
        if Check.MAX in checks and node.max_length is not None:
            constraints["maxLength"] = node.max_length
            update["max_length"] = None

        if not constraints:
            return node

        logger.debug(f"Degrading {node.type_name.value} constraints {list(constraints)} for {self.model.model_id}")
        update["description"] = self.merge_parameter_description(node.description, constraints)
        return node.model_copy(update=update)

    def default_number_handler(
        self,
        node: NumberNode,
        handle_checks: Iterable[str] = ALL_NUMBER_CHECKS
    ) -> NumberNode:
        """
        Degrade the selected numeric bounds into the description.

        Integer and finiteness constraints are always kept native: they
        describe representability, not a bound.

        Args:
            node: Number node
            handle_checks: Checks to degrade ("min", "max", "multipleOf")

        Returns:
            NumberNode: Rewritten node, or the same node if nothing was degraded
        """
        checks = {Check(check) for check in handle_checks}

        constraints: Dict[str, Any] = {}
        update: Dict[str, Any] = {}
        if Check.MIN in checks:
            if node.gt is not None:
                constraints["gt"] = node.gt
                update["gt"] = None
            if node.gte is not None:
                constraints["gte"] = node.gte
                update["gte"] = None
        if Check.MAX in checks:
            if node.lt is not None:
                constraints["lt"] = node.lt
                update["lt"] = None
            if node.lte is not None:
                constraints["lte"] = node.lte
                update["lte"] = None
        if Check.MULTIPLE_OF in checks and node.multiple_of is not None:
            constraints["multipleOf"] = node.multiple_of
            update["multiple_of"] = None

        if not constraints:
            return node

        logger.debug(f"Degrading {node.type_name.value} constraints {list(constraints)} for {self.model.model_id}")
        update["description"] = self.merge_parameter_description(node.description, constraints)
        return node.model_copy(update=update)

    def default_date_handler(self, node: DateNode) -> StringNode:
        """
        Present a date as a date-time string.

        The bounds are written into the description and kept as a runtime-only
        refinement on the returned string node: neither dialect has a
        date-range keyword. Refinements of the date node itself expect
        datetime values and are not carried over.
        """
        constraints: Dict[str, Any] = {}
        if node.min_date is not None:
            constraints["minDate"] = as_utc(node.min_date).isoformat()
        if node.max_date is not None:
            constraints["maxDate"] = as_utc(node.max_date).isoformat()
        constraints["dateFormat"] = StringFormat.DATE_TIME.value
        logger.debug(f"Converting date to date-time string for {self.model.model_id}")

        refinements = ()
        if node.min_date is not None or node.max_date is not None:
            refinements = (_date_range_refinement(node.min_date, node.max_date),)

        return StringNode(
            format=StringFormat.DATE_TIME,
            description=self.merge_parameter_description(node.description, constraints),
            refinements=refinements
        )

    def default_optional_handler(
        self,
        node: OptionalNode,
        handle_types: Iterable[str] = ALL_SCHEMA_TYPES
    ) -> OptionalNode:
        """
        Process the inner node of an optional when its type is handled.

        Args:
            node: Optional node
            handle_types: Inner schema types this layer can rewrite

        Returns:
            OptionalNode: A new optional around the rewritten inner node, or the
            original node untouched when the inner type is not handled
        """
        types = {SchemaType(type_name) for type_name in handle_types}
        if getattr(node.inner, "type_name", None) not in types:
            return node

        inner = self.process_schema_node(node.inner)
        if inner is node.inner:
            return node
        return node.model_copy(update={"inner": inner})

    def _resolve_target(self) -> SchemaTarget:
        target = self.get_schema_target()
        if target is None:
            return get_settings().schema_target
        return SchemaTarget(target)

    def _process_and_render(self, node: SchemaNode) -> Dict[str, Any]:
        target = self._resolve_target()
        logger.info(
            f"Processing {node.type_name.value} schema for {self.model.model_id} "
            f"with {type(self).__name__} (target: {target.value})"
        )
        try:
            processed = self.process_schema_node(node)
        except SchemaCompatError as e:
            logger.error(f"Schema processing failed for {self.model.model_id}: {e}")
            raise
        return render_json_schema(processed, target)

    def process_to_ai_schema(self, node: SchemaNode) -> ProcessedSchema:
        """
        Convert a schema into the model-facing structural schema plus a validator.

        Args:
            node: Root of the original schema

        Returns:
            ProcessedSchema: Rendered schema reflecting the degrade policy, and a
            never-raising validator enforcing the original schema in full
        """
        json_schema = self._process_and_render(node)
        return ProcessedSchema(json_schema=json_schema, validate=build_validator(node))

    def process_to_json_schema(self, node: SchemaNode) -> Dict[str, Any]:
        """Convert a schema into the model-facing structural schema only."""
        return self._process_and_render(node)
