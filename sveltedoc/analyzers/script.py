"""Script block analysis: exported props and dispatched events."""

from __future__ import annotations

from typing import Iterable, List, Set

from ..logging import get_logger
from ..models import EventDoc, PropDoc
from ..syntax import ComponentSyntax
from ..syntax.script import (
    CallExpression,
    ExportDeclaration,
    Identifier,
    Literal,
    Node,
    Program,
    VariableDeclaration,
    iter_nodes,
)
from .base import Analyzer, DocCollector
from .comments import extract_description
from .inference import extract_value, infer_type

DEFAULT_DISPATCHER_FACTORY = "createEventDispatcher"

logger = get_logger("analyzers.script")


class ScriptAnalyzer(Analyzer):
    """Collects props from ``export let`` bindings and events from dispatch calls."""

    def __init__(self, dispatcher_factory: str = DEFAULT_DISPATCHER_FACTORY) -> None:
        self.dispatcher_factory = dispatcher_factory

    def supports(self, component: ComponentSyntax) -> bool:
        return component.instance is not None

    def analyze(self, component: ComponentSyntax, collector: DocCollector) -> None:
        if component.instance is None:
            return
        program = component.instance
        dispatchers: List[str] = []

        for node in program.body:
            if isinstance(node, ExportDeclaration):
                for prop in self._props(node):
                    collector.add_prop(prop)
            elif isinstance(node, VariableDeclaration):
                for declarator in node.declarators:
                    if declarator.name and self._is_dispatcher_factory_call(declarator.init):
                        dispatchers.append(declarator.name)

        if dispatchers:
            logger.debug("Scanning for calls to %s", ", ".join(dispatchers))
            for event in find_dispatches(program, set(dispatchers)):
                collector.add_event(event)

    def _props(self, node: ExportDeclaration) -> Iterable[PropDoc]:
        declaration = node.declaration
        if not isinstance(declaration, VariableDeclaration):
            return
        description = extract_description(node.leading_comments)
        for declarator in declaration.declarators:
            if not declarator.name:
                continue
            yield PropDoc(
                name=declarator.name,
                type=infer_type(declarator.init),
                default_value=extract_value(declarator.init),
                required=declarator.init is None,
                description=description,
            )

    def _is_dispatcher_factory_call(self, node: Node | None) -> bool:
        return (
            isinstance(node, CallExpression)
            and isinstance(node.callee, Identifier)
            and node.callee.name == self.dispatcher_factory
        )


def find_dispatches(program: Program, dispatchers: Set[str]) -> Iterable[EventDoc]:
    """Yield one event per call to a dispatch binding, in depth-first order.

    The first argument must be a literal with a truthy value; its ``String()``
    text names the event. The second argument, when present, determines
    ``detail``.
    """
    for node in iter_nodes(program):
        if not isinstance(node, CallExpression):
            continue
        callee = node.callee
        if not isinstance(callee, Identifier) or callee.name not in dispatchers:
            continue
        if not node.arguments:
            continue
        first = node.arguments[0]
        if not isinstance(first, Literal) or not _is_truthy(first):
            continue
        detail = infer_type(node.arguments[1]) if len(node.arguments) > 1 else "void"
        yield EventDoc(name=first.value, detail=detail)


def _is_truthy(literal: Literal) -> bool:
    if literal.kind == "null":
        return False
    if literal.kind == "boolean":
        return literal.value == "true"
    if literal.kind in ("number", "bigint"):
        return literal.value not in ("0", "NaN")
    return bool(literal.value)


__all__ = ["DEFAULT_DISPATCHER_FACTORY", "ScriptAnalyzer", "find_dispatches"]
