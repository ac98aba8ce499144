"""
Selection of the compat layer that applies to a schema.
"""

import logging
from typing import Any, Dict, Literal, Optional, Sequence, Union, overload

from schema_compat.compat_layer import SchemaCompatLayer
from schema_compat.config import get_settings
from schema_compat.models import ProcessedSchema, SchemaNode
from schema_compat.utils.json_schema import render_json_schema
from schema_compat.utils.validation import build_validator

logger = logging.getLogger(__name__)

Mode = Literal["ai_sdk", "json_schema"]


@overload
def apply_compat_layer(
    schema: SchemaNode,
    compat_layers: Sequence[SchemaCompatLayer],
    mode: Literal["ai_sdk"] = "ai_sdk"
) -> ProcessedSchema: ...


@overload
def apply_compat_layer(
    schema: SchemaNode,
    compat_layers: Sequence[SchemaCompatLayer],
    mode: Literal["json_schema"]
) -> Dict[str, Any]: ...


def apply_compat_layer(
    schema: SchemaNode,
    compat_layers: Sequence[SchemaCompatLayer],
    mode: Mode = "ai_sdk"
) -> Union[ProcessedSchema, Dict[str, Any]]:
    """
    Process a schema with the first compat layer that applies.

    Args:
        schema: Original schema
        compat_layers: Candidate layers, in priority order
        mode: "ai_sdk" for schema plus validator, "json_schema" for the rendered schema only

    Returns:
        Union[ProcessedSchema, Dict[str, Any]]: Output of the selected layer, or
        the unmodified schema rendered in the default target when no layer applies
    """
    if mode not in ("ai_sdk", "json_schema"):
        raise ValueError(f"Unknown mode: {mode}")

    layer: Optional[SchemaCompatLayer] = next(
        (candidate for candidate in compat_layers if candidate.should_apply()),
        None
    )

    if layer is not None:
        logger.info(f"Applying {type(layer).__name__} for {layer.get_model().model_id}")
        if mode == "json_schema":
            return layer.process_to_json_schema(schema)
        return layer.process_to_ai_schema(schema)

    logger.info("No compat layer applies, rendering schema unchanged")
    json_schema = render_json_schema(schema, get_settings().schema_target)
    if mode == "json_schema":
        return json_schema
    return ProcessedSchema(json_schema=json_schema, validate=build_validator(schema))
