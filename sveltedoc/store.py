"""Display-side state: the loaded components and the one being viewed."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from .models import ComponentDoc


@dataclass(frozen=True)
class DocStoreState:
    components: Tuple[ComponentDoc, ...] = ()
    active_component: Optional[str] = None


Subscriber = Callable[[DocStoreState], None]


@dataclass
class DocStore:
    """Small observable key/value store owned by the display layer.

    Subscribers are called with the new state after every change and once
    immediately on subscription.
    """

    _state: DocStoreState = field(default_factory=DocStoreState)
    _subscribers: List[Subscriber] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def snapshot(self) -> DocStoreState:
        with self._lock:
            return self._state

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register ``subscriber``; return a callable that unregisters it."""
        with self._lock:
            self._subscribers.append(subscriber)
            state = self._state
        subscriber(state)

        def unsubscribe() -> None:
            with self._lock:
                if subscriber in self._subscribers:
                    self._subscribers.remove(subscriber)

        return unsubscribe

    def set_docs(self, docs: Sequence[ComponentDoc]) -> None:
        self._update(lambda state: DocStoreState(tuple(docs), state.active_component))

    def set_active_component(self, name: Optional[str]) -> None:
        self._update(lambda state: DocStoreState(state.components, name))

    def clear(self) -> None:
        self._update(lambda _: DocStoreState())

    def get(self, name: str) -> Optional[ComponentDoc]:
        for doc in self.snapshot().components:
            if doc.name == name:
                return doc
        return None

    def active(self) -> Optional[ComponentDoc]:
        state = self.snapshot()
        return self.get(state.active_component) if state.active_component else None

    def _update(self, change: Callable[[DocStoreState], DocStoreState]) -> None:
        with self._lock:
            self._state = change(self._state)
            state = self._state
            subscribers = list(self._subscribers)
        for subscriber in subscribers:
            subscriber(state)


__all__ = ["DocStore", "DocStoreState"]
