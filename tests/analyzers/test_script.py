"""Tests for the script analyzer."""

from __future__ import annotations

from sveltedoc.analyzers import DocCollector, ScriptAnalyzer
from sveltedoc.models import EventDoc, PropDoc
from sveltedoc.syntax import parse_component_source


def _analyze(script: str, analyzer: ScriptAnalyzer | None = None):
    syntax = parse_component_source(f"<script>\n{script}\n</script>\n")
    collector = DocCollector()
    (analyzer or ScriptAnalyzer()).analyze(syntax, collector)
    return collector.build("Example")


def test_exported_bindings_become_props_in_declaration_order() -> None:
    doc = _analyze(
        "/** Visible label */\n"
        "export let label;\n"
        "export let size = 'md', items = [], options = {};\n"
        "let internal = 1;\n"
        "export let total = a + b;\n"
        "export const VERSION = 2;\n"
    )

    assert doc.props == (
        PropDoc(name="label", type="any", default_value=None, required=True, description="Visible label"),
        PropDoc(name="size", type="string", default_value="md", required=False),
        PropDoc(name="items", type="array", default_value="[]", required=False),
        PropDoc(name="options", type="object", default_value="{}", required=False),
        PropDoc(name="total", type="any", default_value=None, required=False),
        PropDoc(name="VERSION", type="number", default_value="2", required=False),
    )


def test_repeated_prop_names_are_kept() -> None:
    doc = _analyze("export let a = 1;\nexport let a = 2;\n")
    assert [prop.default_value for prop in doc.props] == ["1", "2"]


def test_dispatch_calls_anywhere_in_the_script_become_events() -> None:
    doc = _analyze(
        "import { createEventDispatcher } from 'svelte';\n"
        "function save() {\n"
        "  dispatch('save', { id: 1 });\n"
        "}\n"
        "const dispatch = createEventDispatcher();\n"
        "const handlers = { close: () => dispatch('close') };\n"
        "$: if (ready) dispatch('ready', true);\n"
        "dispatch('save', 'ignored');\n"
        "dispatch(eventName);\n"
    )

    assert doc.events == (
        EventDoc(name="save", detail="object"),
        EventDoc(name="close", detail="void"),
        EventDoc(name="ready", detail="boolean"),
    )


def test_non_string_literal_event_names() -> None:
    doc = _analyze(
        "const dispatch = createEventDispatcher();\n"
        "dispatch(1, detail);\n"
        "dispatch(true);\n"
        "dispatch(0);\n"
        "dispatch(false);\n"
        "dispatch(null);\n"
        "dispatch('');\n"
    )

    assert doc.events == (
        EventDoc(name="1", detail="any"),
        EventDoc(name="true", detail="void"),
    )


def test_dispatch_binding_name_is_taken_from_the_declaration() -> None:
    doc = _analyze(
        "const emit = createEventDispatcher();\n"
        "emit('open', 3);\n"
        "dispatch('ignored');\n"
    )
    assert doc.events == (EventDoc(name="open", detail="number"),)


def test_no_dispatcher_means_no_script_events() -> None:
    doc = _analyze("function dispatch() {}\ndispatch('x');\n")
    assert doc.events == ()


def test_custom_dispatcher_factory() -> None:
    doc = _analyze(
        "const fire = makeEmitter();\nfire('done');\n",
        ScriptAnalyzer(dispatcher_factory="makeEmitter"),
    )
    assert doc.events == (EventDoc(name="done", detail="void"),)


def test_typescript_dispatcher_with_type_arguments() -> None:
    syntax = parse_component_source(
        '<script lang="ts">\n'
        "const dispatch = createEventDispatcher<{ pick: string }>();\n"
        "export let value: string = 'a';\n"
        "dispatch('pick', value);\n"
        "</script>\n"
    )
    collector = DocCollector()
    ScriptAnalyzer().analyze(syntax, collector)
    doc = collector.build("Picker")

    assert doc.props == (PropDoc(name="value", type="string", default_value="a"),)
    assert doc.events == (EventDoc(name="pick", detail="any"),)


def test_analyzer_requires_an_instance_script() -> None:
    syntax = parse_component_source('<script context="module">export let x = 1;</script><p></p>')
    assert ScriptAnalyzer().supports(syntax) is False
