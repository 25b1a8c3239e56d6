"""Coarse type and default-value inference for initializer expressions."""

from __future__ import annotations

from typing import Optional

from ..syntax.script import ArrayExpression, Literal, Node, ObjectExpression

# typeof semantics: null and regular expressions report "object"
_LITERAL_TYPES = {
    "string": "string",
    "number": "number",
    "bigint": "number",
    "boolean": "boolean",
    "null": "object",
    "regex": "object",
}


def infer_type(node: Optional[Node]) -> str:
    """Return ``string``, ``number``, ``boolean``, ``array``, ``object`` or ``any``."""
    if isinstance(node, Literal):
        return _LITERAL_TYPES.get(node.kind, "any")
    if isinstance(node, ArrayExpression):
        return "array"
    if isinstance(node, ObjectExpression):
        return "object"
    return "any"


def extract_value(node: Optional[Node]) -> Optional[str]:
    """Return the literal text of ``node`` or None for non-literal expressions."""
    if isinstance(node, Literal):
        return node.value
    if isinstance(node, ArrayExpression):
        return "[]"
    if isinstance(node, ObjectExpression):
        return "{}"
    return None


__all__ = ["extract_value", "infer_type"]
