"""Tests for the display-side documentation store."""

from __future__ import annotations

from sveltedoc.models import ComponentDoc
from sveltedoc.store import DocStore, DocStoreState


def test_subscribers_receive_current_and_future_state() -> None:
    store = DocStore()
    seen = []

    unsubscribe = store.subscribe(seen.append)
    store.set_docs([ComponentDoc(name="Button"), ComponentDoc(name="Card")])
    store.set_active_component("Card")
    unsubscribe()
    store.clear()

    assert seen[0] == DocStoreState()
    assert [doc.name for doc in seen[1].components] == ["Button", "Card"]
    assert seen[2].active_component == "Card"
    assert len(seen) == 3
    assert store.snapshot() == DocStoreState()


def test_get_and_active_lookup() -> None:
    store = DocStore()
    store.set_docs([ComponentDoc(name="Button")])

    assert store.get("Button") == ComponentDoc(name="Button")
    assert store.get("Missing") is None
    assert store.active() is None

    store.set_active_component("Button")
    assert store.active() == ComponentDoc(name="Button")
