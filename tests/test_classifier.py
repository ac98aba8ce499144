"""
Unit tests for node classification and description merging.
"""

import pytest

from schema_compat.classifier import NodeKind, classify, is_number, is_string
from schema_compat.models import (
    ArrayNode,
    BooleanNode,
    DateNode,
    NeverNode,
    NumberNode,
    ObjectNode,
    StringNode,
    UnionNode,
    email,
)
from schema_compat.utils.descriptions import merge_parameter_description


class UserIdNode(StringNode):
    """Branded string node."""
    brand: str = "UserId"


@pytest.mark.parametrize(
    "node, kind",
    [
        (ObjectNode(), NodeKind.OBJECT),
        (ArrayNode(items=StringNode()), NodeKind.ARRAY),
        (UnionNode(options=(StringNode(), NumberNode())), NodeKind.UNION),
        (StringNode().optional(), NodeKind.OPTIONAL),
        (StringNode(), NodeKind.STRING),
        (NumberNode(), NodeKind.NUMBER),
        (DateNode(), NodeKind.DATE),
        (BooleanNode(), NodeKind.OTHER),
        (NeverNode(), NodeKind.OTHER),
    ],
)
def test_classify(node, kind):
    """Test the dispatch category of every kind."""
    assert classify(node) == kind


def test_subclasses_classify_as_base_kind():
    """Test that branded and format-typed strings are still strings."""
    assert classify(UserIdNode()) == NodeKind.STRING
    assert is_string(email())
    assert not is_number(email())


def test_merge_without_constraints_keeps_description():
    """Test that an empty constraint mapping is a no-op."""
    assert merge_parameter_description("Some text", {}) == "Some text"
    assert merge_parameter_description(None, {}) is None


def test_merge_keeps_insertion_order():
    """Test that keys are serialized in the order they were added."""
    result = merge_parameter_description(None, {"maxLength": 10, "minLength": 5})
    assert result == '{"maxLength":10,"minLength":5}'


def test_merge_nested_values():
    """Test that nested constraint values are serialized compactly."""
    result = merge_parameter_description("Code", {"regex": {"pattern": "^[A-Z]+$"}})
    assert result == 'Code\n{"regex":{"pattern":"^[A-Z]+$"}}'


def test_merge_empty_description():
    """Test that an empty description is treated as missing."""
    assert merge_parameter_description("", {"email": True}) == '{"email":true}'
