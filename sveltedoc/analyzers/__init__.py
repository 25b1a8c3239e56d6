"""Component analyzers and the accumulator they share."""

from __future__ import annotations

from typing import List

from .base import Analyzer, DocCollector
from .comments import extract_description
from .inference import extract_value, infer_type
from .markup import MarkupAnalyzer
from .script import DEFAULT_DISPATCHER_FACTORY, ScriptAnalyzer


def default_analyzers(dispatcher_factory: str = DEFAULT_DISPATCHER_FACTORY) -> List[Analyzer]:
    """Return the built-in analyzers in canonical order: script before markup."""
    return [ScriptAnalyzer(dispatcher_factory), MarkupAnalyzer()]


__all__ = [
    "Analyzer",
    "DEFAULT_DISPATCHER_FACTORY",
    "DocCollector",
    "MarkupAnalyzer",
    "ScriptAnalyzer",
    "default_analyzers",
    "extract_description",
    "extract_value",
    "infer_type",
]
