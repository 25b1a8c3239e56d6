"""Syntax trees for component scripts and markup."""

from .component import ComponentSyntax, parse_component_source
from .markup import parse_markup
from .script import parse_script

__all__ = [
    "ComponentSyntax",
    "parse_component_source",
    "parse_markup",
    "parse_script",
]
