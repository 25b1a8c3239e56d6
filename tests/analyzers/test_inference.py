"""Tests for type and default-value inference."""

from __future__ import annotations

import pytest

from sveltedoc.analyzers.inference import extract_value, infer_type
from sveltedoc.syntax.script import (
    ArrayExpression,
    CallExpression,
    Identifier,
    Literal,
    ObjectExpression,
    Opaque,
)


@pytest.mark.parametrize(
    ("node", "expected_type", "expected_value"),
    [
        (Literal(kind="string", value="hi"), "string", "hi"),
        (Literal(kind="number", value="0"), "number", "0"),
        (Literal(kind="bigint", value="10"), "number", "10"),
        (Literal(kind="boolean", value="false"), "boolean", "false"),
        (Literal(kind="null", value="null"), "object", "null"),
        (Literal(kind="regex", value="/a+/g"), "object", "/a+/g"),
        (ArrayExpression(elements=(Identifier(name="x"),)), "array", "[]"),
        (ObjectExpression(), "object", "{}"),
        (Identifier(name="undefined"), "any", None),
        (CallExpression(callee=Identifier(name="writable")), "any", None),
        (Opaque(kind="template_string"), "any", None),
        (None, "any", None),
    ],
)
def test_inference(node, expected_type, expected_value) -> None:
    assert infer_type(node) == expected_type
    assert extract_value(node) == expected_value
