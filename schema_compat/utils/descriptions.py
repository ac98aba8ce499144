"""
Folding of degraded constraints into description text.
"""

import json
from typing import Any, Mapping, Optional


def merge_parameter_description(
    description: Optional[str],
    constraints: Mapping[str, Any]
) -> Optional[str]:
    """
    Append constraints to a description as a compact JSON suffix.

    The constraints are serialized in insertion order, so callers control the
    key order of the hint shown to the model.

    Args:
        description: Existing description, if any
        constraints: Constraint name to value mapping

    Returns:
        Optional[str]: The description unchanged when there are no constraints,
        otherwise the description (if any) and the serialized constraints
        separated by a newline
    """
    if not constraints:
        return description

    serialized = json.dumps(dict(constraints), separators=(",", ":"), default=str)
    if description:
        return f"{description}\n{serialized}"
    return serialized
