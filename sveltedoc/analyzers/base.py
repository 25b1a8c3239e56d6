"""Base classes for component analyzers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Set

from ..models import ComponentDoc, EventDoc, PropDoc, SlotDoc
from ..syntax import ComponentSyntax


class DocCollector:
    """Ordered accumulator shared by the analyzers of one component.

    Events are keyed by name and the first write wins; props and slots keep
    every entry in the order they were added.
    """

    def __init__(self) -> None:
        self._props: List[PropDoc] = []
        self._events: List[EventDoc] = []
        self._event_names: Set[str] = set()
        self._slots: List[SlotDoc] = []

    def add_prop(self, prop: PropDoc) -> None:
        self._props.append(prop)

    def add_event(self, event: EventDoc) -> bool:
        """Record ``event`` unless its name was already seen; return True if kept."""
        if event.name in self._event_names:
            return False
        self._event_names.add(event.name)
        self._events.append(event)
        return True

    def add_slot(self, slot: SlotDoc) -> None:
        self._slots.append(slot)

    def build(self, name: str, description: str = "") -> ComponentDoc:
        return ComponentDoc(
            name=name,
            description=description,
            props=tuple(self._props),
            events=tuple(self._events),
            slots=tuple(self._slots),
        )


class Analyzer(ABC):
    """Contract for analyzers that contribute to a component's documentation."""

    @abstractmethod
    def supports(self, component: ComponentSyntax) -> bool:
        """Return True when this analyzer has something to inspect."""

    @abstractmethod
    def analyze(self, component: ComponentSyntax, collector: DocCollector) -> None:
        """Add props, events or slots found in ``component`` to ``collector``."""
