"""Tests for the introspection engine."""

from __future__ import annotations

import pytest

from sveltedoc.analyzers import MarkupAnalyzer, ScriptAnalyzer
from sveltedoc.introspection import ComponentIntrospector, component_name, parse_component
from sveltedoc.markdown import parse_markdown, render_markdown
from sveltedoc.models import ComponentDoc, EventDoc, PropDoc, SlotDoc

SCENARIO = """
<script>
  export let count = 0;
</script>

<div on:click={() => count++}>
  <slot a="1" b="2"></slot>
</div>
"""

CLASH = """
<script>
  import { createEventDispatcher } from 'svelte';
  const dispatch = createEventDispatcher();
  dispatch('click', 42);
</script>

<button on:click={handle}>Go</button>
"""


def test_concrete_scenario_model_and_round_trip() -> None:
    doc = parse_component(SCENARIO, "src/lib/Counter.svelte")

    assert doc == ComponentDoc(
        name="Counter",
        props=(PropDoc(name="count", type="number", default_value="0", required=False),),
        events=(EventDoc(name="click", detail="any"),),
        slots=(SlotDoc(name="default", props=("a", "b")),),
    )

    markdown = render_markdown(doc)
    assert markdown == (
        "# Counter\n"
        "\n"
        "## Props\n"
        "| Name | Type | Default | Required | Description |\n"
        "|------|------|---------|----------|-------------|\n"
        "| count | number | 0 | No | - |\n"
        "\n"
        "## Events\n"
        "| Name | Detail | Description |\n"
        "|------|--------|-------------|\n"
        "| click | any | - |\n"
        "\n"
        "## Slots\n"
        "| Name | Props | Description |\n"
        "|------|-------|-------------|\n"
        "| default | a, b | - |\n"
        "\n"
    )
    assert parse_markdown(markdown) == doc


def test_full_component(counter_source: str) -> None:
    doc = parse_component(counter_source, "Counter.svelte")

    assert doc.name == "Counter"
    assert doc.description == "A clickable counter."
    assert doc.props == (
        PropDoc(name="count", type="number", default_value="0", required=False, description="The current count"),
        PropDoc(name="label", type="any", default_value=None, required=True),
    )
    assert doc.events == (
        EventDoc(name="change", detail="object"),
        EventDoc(name="click", detail="any"),
    )
    assert doc.slots == (SlotDoc(name="default", props=("a", "b")),)


def test_script_events_win_over_markup_by_default() -> None:
    doc = parse_component(CLASH, "Clash.svelte")
    assert doc.events == (EventDoc(name="click", detail="number"),)


def test_analyzer_order_decides_event_clashes() -> None:
    introspector = ComponentIntrospector([MarkupAnalyzer(), ScriptAnalyzer()])
    doc = introspector.parse_component(CLASH, "Clash.svelte")
    assert doc.events == (EventDoc(name="click", detail="any"),)


def test_component_without_script_or_markup() -> None:
    assert parse_component("", "Empty.svelte") == ComponentDoc(name="Empty")


def test_description_comes_from_module_script_only() -> None:
    source = (
        '<script context="module">\n'
        "  /** Shared helpers. */\n"
        "  // not documentation\n"
        "  /** Second line. */\n"
        "  export const preload = true;\n"
        "</script>\n"
        "<script>\n"
        "  /** Instance comment */\n"
        "  export let open = false;\n"
        "</script>\n"
    )
    doc = parse_component(source, "Modal.svelte")

    assert doc.description == "Shared helpers.\nSecond line."
    assert doc.props == (
        PropDoc(name="open", type="boolean", default_value="false", description="Instance comment"),
    )


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("Button.svelte", "Button"),
        ("src/lib/ui/Card.svelte", "Card"),
        ("C:\\app\\Nav.svelte", "Nav"),
        ("Badge", "Badge"),
        ("icons/Arrow.left.svelte", "Arrow.left"),
    ],
)
def test_component_name(filename: str, expected: str) -> None:
    assert component_name(filename) == expected


def test_named_slot_lists_every_attribute() -> None:
    doc = parse_component('<slot name="header" title={t}></slot>', "Card.svelte")

    assert doc.slots == (SlotDoc(name="header", props=("name", "title")),)


def test_multiline_prop_comment_survives_markdown() -> None:
    source = (
        "<script>\n"
        "  /**\n"
        "   * The label\n"
        "   * shown on the button\n"
        "   */\n"
        "  export let label;\n"
        "</script>\n"
    )

    doc = parse_component(source, "Button.svelte")
    decoded = parse_markdown(render_markdown(doc))

    assert doc.props[0].description == "The label\nshown on the button"
    assert decoded.props == (
        PropDoc(name="label", required=True, description="The label shown on the button"),
    )
