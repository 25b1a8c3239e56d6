"""Extract Markdown documentation from Svelte components."""

from .introspection import ComponentIntrospector, component_name, parse_component
from .markdown import parse_markdown, render_markdown
from .models import ComponentDoc, EventDoc, PropDoc, SlotDoc

__version__ = "0.1.0"

__all__ = [
    "ComponentDoc",
    "ComponentIntrospector",
    "EventDoc",
    "PropDoc",
    "SlotDoc",
    "component_name",
    "parse_component",
    "parse_markdown",
    "render_markdown",
]
