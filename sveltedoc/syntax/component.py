"""Split a component file into its script programs and markup tree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .markup import Fragment, RawElement, parse_markup
from .script import Program, parse_script


@dataclass(frozen=True)
class ComponentSyntax:
    """Markup tree plus the instance and module (``context="module"``) scripts."""

    markup: Fragment
    instance: Optional[Program] = None
    module: Optional[Program] = None


def parse_component_source(source: str) -> ComponentSyntax:
    """Parse component text; the first instance and module scripts win."""
    markup = parse_markup(source)
    instance: Optional[Program] = None
    module: Optional[Program] = None
    for node in markup.nodes:
        if not isinstance(node, RawElement) or node.tag != "script":
            continue
        if _is_module_script(node):
            if module is None:
                module = parse_script(node.content, _script_lang(node))
        elif instance is None:
            instance = parse_script(node.content, _script_lang(node))
    return ComponentSyntax(markup=markup, instance=instance, module=module)


def _is_module_script(node: RawElement) -> bool:
    context = node.attribute("context")
    if context is not None and (context.value or "").strip() == "module":
        return True
    return node.attribute("module") is not None


def _script_lang(node: RawElement) -> str:
    lang_attribute = node.attribute("lang") or node.attribute("type")
    lang = (lang_attribute.value or "js") if lang_attribute is not None else "js"
    # type="text/typescript"
    return lang.rsplit("/", 1)[-1]


__all__ = ["ComponentSyntax", "parse_component_source"]
