"""Script block syntax tree built from tree-sitter parses.

tree-sitter produces a concrete syntax tree with one node type per grammar
rule. The analyzers only care about a handful of shapes, so the tree is
folded into a closed set of variants here. Every node that is not modelled
explicitly becomes an :class:`Opaque` node that keeps its children, which
keeps exhaustive walks (see :func:`iter_nodes`) total.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from tree_sitter_language_pack import get_parser

_GRAMMARS = {
    "js": "javascript",
    "javascript": "javascript",
    "ts": "typescript",
    "typescript": "typescript",
}

_parsers: Dict[str, Any] = {}


@dataclass(frozen=True)
class Comment:
    """A source comment with its delimiters removed."""

    kind: str  # "Block" or "Line"
    value: str
    start_row: int = 0
    end_row: int = 0


@dataclass(frozen=True)
class Identifier:
    name: str

    def children(self) -> Tuple["Node", ...]:
        return ()


@dataclass(frozen=True)
class Literal:
    """Primitive literal; ``value`` holds the JavaScript ``String(value)`` text."""

    kind: str  # string, number, bigint, boolean, null, regex
    value: str

    def children(self) -> Tuple["Node", ...]:
        return ()


@dataclass(frozen=True)
class ArrayExpression:
    elements: Tuple["Node", ...] = ()

    def children(self) -> Tuple["Node", ...]:
        return self.elements


@dataclass(frozen=True)
class ObjectExpression:
    members: Tuple["Node", ...] = ()

    def children(self) -> Tuple["Node", ...]:
        return self.members


@dataclass(frozen=True)
class CallExpression:
    callee: "Node"
    arguments: Tuple["Node", ...] = ()

    def children(self) -> Tuple["Node", ...]:
        return (self.callee, *self.arguments)


@dataclass(frozen=True)
class VariableDeclarator:
    """One binding of a declaration; ``name`` is None for destructuring patterns."""

    name: Optional[str]
    init: Optional["Node"] = None
    target: Optional["Node"] = None

    def children(self) -> Tuple["Node", ...]:
        nodes: List[Node] = []
        if self.target is not None:
            nodes.append(self.target)
        if self.init is not None:
            nodes.append(self.init)
        return tuple(nodes)


@dataclass(frozen=True)
class VariableDeclaration:
    kind: str  # let, const or var
    declarators: Tuple[VariableDeclarator, ...] = ()
    leading_comments: Tuple[Comment, ...] = ()

    def children(self) -> Tuple["Node", ...]:
        return self.declarators


@dataclass(frozen=True)
class ExportDeclaration:
    """``export <declaration>``; ``declaration`` is None for re-export lists."""

    declaration: Optional["Node"] = None
    leading_comments: Tuple[Comment, ...] = ()
    others: Tuple["Node", ...] = ()

    def children(self) -> Tuple["Node", ...]:
        if self.declaration is None:
            return self.others
        return (self.declaration, *self.others)


@dataclass(frozen=True)
class Opaque:
    """Any syntax the analyzers do not inspect directly."""

    kind: str
    nodes: Tuple["Node", ...] = ()
    leading_comments: Tuple[Comment, ...] = ()

    def children(self) -> Tuple["Node", ...]:
        return self.nodes


@dataclass(frozen=True)
class Program:
    body: Tuple["Node", ...] = ()
    comments: Tuple[Comment, ...] = ()

    def children(self) -> Tuple["Node", ...]:
        return self.body


Node = Union[
    Identifier,
    Literal,
    ArrayExpression,
    ObjectExpression,
    CallExpression,
    VariableDeclarator,
    VariableDeclaration,
    ExportDeclaration,
    Opaque,
    Program,
]


def iter_nodes(root: Node) -> Iterator[Node]:
    """Yield ``root`` and every descendant in depth-first pre-order."""
    stack: List[Node] = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children()))


def parse_script(source: str, lang: str | None = None) -> Program:
    """Parse script text into a :class:`Program`.

    ``lang`` follows the ``lang`` attribute of the script tag; anything other
    than a TypeScript marker is parsed as JavaScript. Syntax errors never
    raise: tree-sitter recovers and the damaged region becomes opaque nodes.
    """
    grammar = _GRAMMARS.get((lang or "js").lower(), "javascript")
    source_bytes = source.encode("utf-8")
    tree = _get_parser(grammar).parse(source_bytes)
    return _Converter().program(tree.root_node)


def _get_parser(grammar: str) -> Any:
    parser = _parsers.get(grammar)
    if parser is None:
        parser = get_parser(grammar)
        _parsers[grammar] = parser
    return parser


_DECLARATION_TYPES = {"lexical_declaration", "variable_declaration"}

_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}


class _Converter:
    """Folds tree-sitter nodes into the variants above."""

    def program(self, root: Any) -> Program:
        comments = tuple(self._collect_comments(root))
        body: List[Node] = []
        pending: List[Comment] = []
        previous_end_row: Optional[int] = None
        for child in root.named_children:
            if child.type == "comment":
                comment = self._comment(child)
                # a comment trailing the previous statement on its last line belongs to it
                if previous_end_row is not None and comment.start_row == previous_end_row:
                    continue
                pending.append(comment)
                continue
            body.append(self.statement(child, tuple(pending)))
            pending = []
            previous_end_row = child.end_point[0]
        return Program(body=tuple(body), comments=comments)

    def statement(self, node: Any, leading: Tuple[Comment, ...] = ()) -> Node:
        if node.type == "export_statement":
            declaration_node = node.child_by_field_name("declaration")
            declaration = self.convert(declaration_node) if declaration_node is not None else None
            others = tuple(
                self.convert(child)
                for child in node.named_children
                if child.type != "comment"
                and (declaration_node is None or not _same(child, declaration_node))
            )
            return ExportDeclaration(declaration=declaration, leading_comments=leading, others=others)
        if node.type in _DECLARATION_TYPES:
            return self._declaration(node, leading)
        converted = self.convert(node)
        if isinstance(converted, Opaque):
            return Opaque(kind=converted.kind, nodes=converted.nodes, leading_comments=leading)
        return converted

    def convert(self, node: Any) -> Node:
        kind = node.type
        if kind == "identifier":
            return Identifier(name=_text(node))
        if kind == "parenthesized_expression":
            inner = [child for child in node.named_children if child.type != "comment"]
            if len(inner) == 1:
                return self.convert(inner[0])
        if kind in _DECLARATION_TYPES:
            return self._declaration(node, ())
        if kind == "string":
            return Literal(kind="string", value=_string_value(node))
        if kind == "number":
            raw = _text(node)
            if raw.endswith("n"):
                return Literal(kind="bigint", value=raw[:-1].replace("_", ""))
            return Literal(kind="number", value=_number_value(raw))
        if kind in ("true", "false"):
            return Literal(kind="boolean", value=kind)
        if kind == "null":
            return Literal(kind="null", value="null")
        if kind == "regex":
            return Literal(kind="regex", value=_text(node))
        if kind == "array":
            return ArrayExpression(elements=self._named(node))
        if kind == "object":
            return ObjectExpression(members=self._named(node))
        if kind == "call_expression":
            function = node.child_by_field_name("function")
            arguments = node.child_by_field_name("arguments")
            if function is not None:
                args: Tuple[Node, ...] = ()
                if arguments is not None and arguments.type == "arguments":
                    args = self._named(arguments)
                elif arguments is not None:
                    # tagged template: tag`text`
                    args = (self.convert(arguments),)
                return CallExpression(callee=self.convert(function), arguments=args)
        return Opaque(kind=kind, nodes=self._named(node))

    def _declaration(self, node: Any, leading: Tuple[Comment, ...]) -> VariableDeclaration:
        keyword = node.child(0)
        declarators: List[VariableDeclarator] = []
        for child in node.named_children:
            if child.type != "variable_declarator":
                continue
            name_node = child.child_by_field_name("name")
            value_node = child.child_by_field_name("value")
            name = _text(name_node) if name_node is not None and name_node.type == "identifier" else None
            target = None
            if name_node is not None and name is None:
                target = self.convert(name_node)
            declarators.append(
                VariableDeclarator(
                    name=name,
                    init=self.convert(value_node) if value_node is not None else None,
                    target=target,
                )
            )
        return VariableDeclaration(
            kind=_text(keyword) if keyword is not None else "let",
            declarators=tuple(declarators),
            leading_comments=leading,
        )

    def _named(self, node: Any) -> Tuple[Node, ...]:
        return tuple(self.convert(child) for child in node.named_children if child.type != "comment")

    def _collect_comments(self, root: Any) -> Iterator[Comment]:
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "comment":
                yield self._comment(node)
                continue
            stack.extend(reversed(node.children))

    @staticmethod
    def _comment(node: Any) -> Comment:
        text = _text(node)
        if text.startswith("/*"):
            value = text[2:-2] if text.endswith("*/") and len(text) >= 4 else text[2:]
            kind = "Block"
        else:
            value = text[2:] if text.startswith("//") else text
            kind = "Line"
        return Comment(
            kind=kind,
            value=value,
            start_row=node.start_point[0],
            end_row=node.end_point[0],
        )


def _same(left: Any, right: Any) -> bool:
    return (left.type, left.start_byte, left.end_byte) == (right.type, right.start_byte, right.end_byte)


def _text(node: Any) -> str:
    raw = node.text
    return raw.decode("utf-8", errors="replace") if raw is not None else ""


def _string_value(node: Any) -> str:
    parts: List[str] = []
    for child in node.named_children:
        text = _text(child)
        if child.type == "escape_sequence":
            parts.append(_unescape(text))
        else:
            parts.append(text)
    return "".join(parts)


def _unescape(sequence: str) -> str:
    body = sequence[1:]
    if not body:
        return ""
    if body[0] in _ESCAPES and len(body) == 1:
        return _ESCAPES[body[0]]
    if body[0] == "u" or body[0] == "x":
        digits = body[1:].strip("{}")
        try:
            return chr(int(digits, 16))
        except ValueError:
            return sequence
    if body[0] in "\r\n":
        # line continuation
        return ""
    return body


def _number_value(raw: str) -> str:
    text = raw.replace("_", "")
    lowered = text.lower()
    try:
        if lowered.startswith(("0x", "0o", "0b")):
            return str(int(lowered, 0))
        if len(lowered) > 1 and lowered.startswith("0") and lowered.isdigit():
            # legacy octal literal
            return str(int(lowered, 8)) if set(lowered) <= set("01234567") else str(int(lowered))
        value = float(text)
    except ValueError:
        return raw
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


__all__ = [
    "ArrayExpression",
    "CallExpression",
    "Comment",
    "ExportDeclaration",
    "Identifier",
    "Literal",
    "Node",
    "ObjectExpression",
    "Opaque",
    "Program",
    "VariableDeclaration",
    "VariableDeclarator",
    "iter_nodes",
    "parse_script",
]
