"""Introspection engine: component source in, ComponentDoc out."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from .analyzers import DEFAULT_DISPATCHER_FACTORY, Analyzer, DocCollector, default_analyzers
from .analyzers.comments import extract_description
from .logging import get_logger
from .models import ComponentDoc
from .syntax import ComponentSyntax, parse_component_source

_PATH_SEPARATORS = re.compile(r"[\\/]")


class ComponentIntrospector:
    """Runs the analyzers over one component and assembles its documentation.

    Analyzers run in the order given (script before markup by default), which
    decides which site wins when two of them report the same event name.
    """

    def __init__(
        self,
        analyzers: Optional[Iterable[Analyzer]] = None,
        *,
        dispatcher_factory: str = DEFAULT_DISPATCHER_FACTORY,
    ) -> None:
        self.analyzers: List[Analyzer] = (
            list(analyzers) if analyzers is not None else default_analyzers(dispatcher_factory)
        )
        self.logger = get_logger("introspection")

    def parse_component(self, source: str, filename: str) -> ComponentDoc:
        """Analyze ``source``; ``filename`` is only used to name the component."""
        syntax = parse_component_source(source)
        return self.analyze(syntax, component_name(filename))

    def analyze(self, syntax: ComponentSyntax, name: str) -> ComponentDoc:
        collector = DocCollector()
        for analyzer in self.analyzers:
            if analyzer.supports(syntax):
                analyzer.analyze(syntax, collector)
        doc = collector.build(name, _module_description(syntax))
        self.logger.debug(
            "Analyzed %s: %d props, %d events, %d slots",
            name,
            len(doc.props),
            len(doc.events),
            len(doc.slots),
        )
        return doc


def component_name(filename: str) -> str:
    """Return the file's base name without its extension."""
    base = _PATH_SEPARATORS.split(filename)[-1]
    stem, dot, _ = base.rpartition(".")
    return stem if dot and stem else base


def parse_component(source: str, filename: str) -> ComponentDoc:
    """Convenience wrapper using the default analyzers."""
    return ComponentIntrospector().parse_component(source, filename)


def _module_description(syntax: ComponentSyntax) -> str:
    if syntax.module is None:
        return ""
    return extract_description(syntax.module.comments)


__all__ = ["ComponentIntrospector", "component_name", "parse_component"]
