"""Markup tree for Svelte component templates.

The parser is deliberately forgiving: unterminated tags, stray closing tags
and unbalanced braces are absorbed into the nearest sensible node instead of
raising, so every input yields a tree.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

_VOID_ELEMENTS = {
    "area",
    "base",
    "br",
    "col",
    "embed",
    "hr",
    "img",
    "input",
    "link",
    "meta",
    "param",
    "source",
    "track",
    "wbr",
}

_RAW_TEXT_ELEMENTS = {"script", "style"}

_DIRECTIVE_PREFIXES = {
    "bind",
    "class",
    "style",
    "use",
    "transition",
    "in",
    "out",
    "animate",
    "let",
}

_TAG_NAME = re.compile(r"[A-Za-z][\w:.\-]*")
_ATTRIBUTE_NAME = re.compile(r"[^\s=/>\"'{}]+")
_UNQUOTED_VALUE = re.compile(r"[^\s>\"'=<`]+")


@dataclass(frozen=True)
class Attribute:
    """Plain attribute; ``value`` is static text, ``expression`` a ``{...}`` body."""

    name: str
    value: Optional[str] = None
    expression: Optional[str] = None


@dataclass(frozen=True)
class EventHandler:
    """``on:<event>|<modifiers>={expression}``."""

    event: str
    modifiers: Tuple[str, ...] = ()
    expression: Optional[str] = None


@dataclass(frozen=True)
class Directive:
    """``bind:``, ``class:``, ``use:`` and similar prefixed attributes."""

    prefix: str
    name: str
    expression: Optional[str] = None


@dataclass(frozen=True)
class Spread:
    expression: str


AttributeNode = Union[Attribute, EventHandler, Directive, Spread]


@dataclass(frozen=True)
class Text:
    data: str

    def children(self) -> Tuple["MarkupNode", ...]:
        return ()


@dataclass(frozen=True)
class MarkupComment:
    data: str

    def children(self) -> Tuple["MarkupNode", ...]:
        return ()


@dataclass(frozen=True)
class MustacheTag:
    """``{expression}`` including block markers such as ``{#if}`` or ``{/each}``."""

    expression: str

    def children(self) -> Tuple["MarkupNode", ...]:
        return ()


@dataclass(frozen=True)
class Element:
    """Regular HTML element."""

    tag: str
    attributes: Tuple[AttributeNode, ...] = ()
    nodes: Tuple["MarkupNode", ...] = ()

    def children(self) -> Tuple["MarkupNode", ...]:
        return self.nodes


@dataclass(frozen=True)
class InlineComponent:
    """Capitalised or dotted tag, i.e. a child component."""

    tag: str
    attributes: Tuple[AttributeNode, ...] = ()
    nodes: Tuple["MarkupNode", ...] = ()

    def children(self) -> Tuple["MarkupNode", ...]:
        return self.nodes


@dataclass(frozen=True)
class SpecialElement:
    """``svelte:window``, ``svelte:head`` and the other ``svelte:`` tags."""

    tag: str
    attributes: Tuple[AttributeNode, ...] = ()
    nodes: Tuple["MarkupNode", ...] = ()

    def children(self) -> Tuple["MarkupNode", ...]:
        return self.nodes


@dataclass(frozen=True)
class Slot:
    attributes: Tuple[AttributeNode, ...] = ()
    nodes: Tuple["MarkupNode", ...] = ()

    @property
    def name(self) -> Optional[str]:
        for attribute in self.attributes:
            if isinstance(attribute, Attribute) and attribute.name == "name":
                return attribute.value or None
        return None

    def children(self) -> Tuple["MarkupNode", ...]:
        return self.nodes


@dataclass(frozen=True)
class RawElement:
    """``<script>`` or ``<style>``; the body is kept verbatim."""

    tag: str
    attributes: Tuple[AttributeNode, ...] = ()
    content: str = ""
    offset: int = 0

    def attribute(self, name: str) -> Optional[Attribute]:
        for attribute in self.attributes:
            if isinstance(attribute, Attribute) and attribute.name == name:
                return attribute
        return None

    def children(self) -> Tuple["MarkupNode", ...]:
        return ()


@dataclass(frozen=True)
class Fragment:
    nodes: Tuple["MarkupNode", ...] = ()

    def children(self) -> Tuple["MarkupNode", ...]:
        return self.nodes


MarkupNode = Union[
    Fragment,
    Element,
    InlineComponent,
    SpecialElement,
    Slot,
    RawElement,
    Text,
    MustacheTag,
    MarkupComment,
]


def walk(root: MarkupNode) -> Iterator[MarkupNode]:
    """Yield ``root`` and all descendants depth-first, in document order."""
    stack: List[MarkupNode] = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children()))


def parse_markup(source: str) -> Fragment:
    """Parse a whole component file into a :class:`Fragment`."""
    return _MarkupParser(source).parse()


class _MarkupParser:
    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0
        self._close_start = 0

    def parse(self) -> Fragment:
        nodes: List[MarkupNode] = []
        while self.pos < len(self.source):
            closed, children = self._children()
            nodes.extend(children)
            if closed is None:
                break
            # stray closing tag at the top level is dropped
        return Fragment(nodes=tuple(nodes))

    # ------------------------------------------------------------------
    # Content

    def _children(self) -> Tuple[Optional[str], List[MarkupNode]]:
        """Parse nodes until a closing tag; return its name (None at EOF)."""
        nodes: List[MarkupNode] = []
        source = self.source
        while self.pos < len(source):
            if source.startswith("<!--", self.pos):
                end = source.find("-->", self.pos + 4)
                stop = len(source) if end == -1 else end
                nodes.append(MarkupComment(data=source[self.pos + 4 : stop]))
                self.pos = len(source) if end == -1 else end + 3
                continue
            if source.startswith("</", self.pos):
                self._close_start = self.pos
                end = source.find(">", self.pos + 2)
                name = source[self.pos + 2 : len(source) if end == -1 else end].strip()
                self.pos = len(source) if end == -1 else end + 1
                return name, nodes
            if source[self.pos] == "<" and _TAG_NAME.match(source, self.pos + 1):
                nodes.append(self._tag())
                continue
            if source[self.pos] == "{":
                body, self.pos = _read_braced(source, self.pos)
                nodes.append(MustacheTag(expression=body.strip()))
                continue
            nodes.append(self._text())
        return None, nodes

    def _text(self) -> Text:
        source = self.source
        start = self.pos
        self.pos += 1
        while self.pos < len(source):
            char = source[self.pos]
            if char == "{":
                break
            if char == "<" and (
                source.startswith("</", self.pos)
                or source.startswith("<!--", self.pos)
                or _TAG_NAME.match(source, self.pos + 1)
            ):
                break
            self.pos += 1
        return Text(data=source[start : self.pos])

    def _tag(self) -> MarkupNode:
        source = self.source
        match = _TAG_NAME.match(source, self.pos + 1)
        assert match is not None
        tag = match.group(0)
        self.pos = match.end()
        attributes, self_closing = self._attributes()
        lowered = tag.lower()

        if lowered in _RAW_TEXT_ELEMENTS and not self_closing:
            closing = re.compile(rf"</{lowered}\s*>", re.IGNORECASE)
            found = closing.search(source, self.pos)
            start = self.pos
            if found is None:
                content, self.pos = source[start:], len(source)
            else:
                content, self.pos = source[start : found.start()], found.end()
            return RawElement(tag=lowered, attributes=attributes, content=content, offset=start)

        children: List[MarkupNode] = []
        if not self_closing and lowered not in _VOID_ELEMENTS:
            closed, children = self._children()
            if closed is not None and closed != tag:
                # mismatched closing tag: let an enclosing element claim it
                self.pos = self._close_start

        if tag == "slot":
            return Slot(attributes=attributes, nodes=tuple(children))
        if lowered.startswith("svelte:"):
            return SpecialElement(tag=tag, attributes=attributes, nodes=tuple(children))
        if tag[0].isupper() or "." in tag:
            return InlineComponent(tag=tag, attributes=attributes, nodes=tuple(children))
        return Element(tag=tag, attributes=attributes, nodes=tuple(children))

    # ------------------------------------------------------------------
    # Attributes

    def _attributes(self) -> Tuple[Tuple[AttributeNode, ...], bool]:
        source = self.source
        attributes: List[AttributeNode] = []
        while self.pos < len(source):
            self._skip_whitespace()
            if self.pos >= len(source):
                break
            if source.startswith("/>", self.pos):
                self.pos += 2
                return tuple(attributes), True
            char = source[self.pos]
            if char == ">":
                self.pos += 1
                return tuple(attributes), False
            if char == "{":
                body, self.pos = _read_braced(source, self.pos)
                body = body.strip()
                if body.startswith("..."):
                    attributes.append(Spread(expression=body[3:].strip()))
                elif body:
                    attributes.append(Attribute(name=body, expression=body))
                continue
            match = _ATTRIBUTE_NAME.match(source, self.pos)
            if match is None:
                # unexpected character such as a stray quote
                self.pos += 1
                continue
            name = match.group(0)
            self.pos = match.end()
            value, expression, has_value = self._attribute_value()
            attributes.append(_classify(name, value, expression, has_value))
        return tuple(attributes), False

    def _attribute_value(self) -> Tuple[Optional[str], Optional[str], bool]:
        source = self.source
        probe = self.pos
        while probe < len(source) and source[probe].isspace():
            probe += 1
        if probe >= len(source) or source[probe] != "=":
            return None, None, False
        self.pos = probe + 1
        self._skip_whitespace()
        if self.pos >= len(source):
            return "", None, True
        char = source[self.pos]
        if char in ("'", '"'):
            end = source.find(char, self.pos + 1)
            stop = len(source) if end == -1 else end
            text = source[self.pos + 1 : stop]
            self.pos = len(source) if end == -1 else end + 1
            stripped = text.strip()
            if stripped.startswith("{") and stripped.endswith("}"):
                body, consumed = _read_braced(stripped, 0)
                if consumed == len(stripped):
                    return None, body.strip(), True
            return text, None, True
        if char == "{":
            body, self.pos = _read_braced(source, self.pos)
            return None, body.strip(), True
        match = _UNQUOTED_VALUE.match(source, self.pos)
        if match is None:
            return "", None, True
        self.pos = match.end()
        return match.group(0), None, True

    def _skip_whitespace(self) -> None:
        source = self.source
        while self.pos < len(source) and source[self.pos].isspace():
            self.pos += 1


def _classify(
    name: str, value: Optional[str], expression: Optional[str], has_value: bool
) -> AttributeNode:
    prefix, sep, rest = name.partition(":")
    if sep and prefix == "on":
        event, *modifiers = rest.split("|")
        return EventHandler(event=event, modifiers=tuple(modifiers), expression=expression)
    if sep and prefix in _DIRECTIVE_PREFIXES:
        return Directive(prefix=prefix, name=rest, expression=expression)
    if not has_value:
        return Attribute(name=name, value="")
    return Attribute(name=name, value=value, expression=expression)


def _read_braced(source: str, start: int) -> Tuple[str, int]:
    """Read a ``{...}`` region starting at ``start``; return (body, end offset).

    Nested braces, quoted strings and template literals are honoured. An
    unterminated region runs to the end of input.
    """
    depth = 0
    index = start
    length = len(source)
    while index < length:
        char = source[index]
        if char in ("'", '"', "`"):
            index = _skip_string(source, index)
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return source[start + 1 : index], index + 1
        index += 1
    return source[start + 1 :], length


def _skip_string(source: str, start: int) -> int:
    quote = source[start]
    index = start + 1
    length = len(source)
    while index < length:
        char = source[index]
        if char == "\\":
            index += 2
            continue
        if char == quote:
            return index + 1
        if quote != "`" and char == "\n":
            # unterminated string literal; resume on the next line
            return index
        index += 1
    return length


__all__ = [
    "Attribute",
    "AttributeNode",
    "Directive",
    "Element",
    "EventHandler",
    "Fragment",
    "InlineComponent",
    "MarkupComment",
    "MarkupNode",
    "MustacheTag",
    "RawElement",
    "Slot",
    "SpecialElement",
    "Spread",
    "Text",
    "parse_markup",
    "walk",
]
