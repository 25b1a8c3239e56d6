"""Markup analysis: slots and inline event handlers."""

from __future__ import annotations

from ..models import EventDoc, SlotDoc
from ..syntax import ComponentSyntax
from ..syntax.markup import Attribute, Element, EventHandler, Slot, walk
from .base import Analyzer, DocCollector


class MarkupAnalyzer(Analyzer):
    """Walks the whole markup tree for ``<slot>`` elements and ``on:`` handlers."""

    def supports(self, component: ComponentSyntax) -> bool:
        return bool(component.markup.nodes)

    def analyze(self, component: ComponentSyntax, collector: DocCollector) -> None:
        for node in walk(component.markup):
            if isinstance(node, Slot):
                collector.add_slot(
                    SlotDoc(
                        name=node.name or "default",
                        props=tuple(
                            attribute.name
                            for attribute in node.attributes
                            if isinstance(attribute, Attribute)
                        ),
                    )
                )
            elif isinstance(node, Element):
                for attribute in node.attributes:
                    if isinstance(attribute, EventHandler) and attribute.event:
                        collector.add_event(
                            EventDoc(
                                name=attribute.event,
                                detail=_handler_detail(attribute),
                            )
                        )


def _handler_detail(handler: EventHandler) -> str:
    # Placeholder rule: any bound expression is "any", forwarding is "void".
    return "any" if handler.expression else "void"


__all__ = ["MarkupAnalyzer"]
