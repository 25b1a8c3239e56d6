"""Rewrite generated documentation through a language model."""

from __future__ import annotations

from pathlib import Path
from typing import List

from .config import DEFAULT_ENHANCE_PROMPT
from .llm.runner import LLMRunner
from .logging import get_logger
from .markdown import parse_markdown
from .models import ComponentDoc

USER_PROMPT_PREFIX = "Here's the component documentation to enhance:\n\n"


class DocEnhancer:
    """Sends each Markdown document to the model and stores the reply in place."""

    def __init__(self, runner: LLMRunner, prompt: str = DEFAULT_ENHANCE_PROMPT) -> None:
        self.runner = runner
        self.prompt = prompt
        self.logger = get_logger("enhance")

    def enhance_text(self, markdown: str) -> str:
        return self.runner.run(f"{USER_PROMPT_PREFIX}{markdown}", system=self.prompt)

    def enhance_directory(self, docs_path: str | Path) -> List[ComponentDoc]:
        """Enhance every ``*.md`` file in ``docs_path``; return the decoded results.

        Runner failures propagate; files already rewritten stay rewritten.
        """
        docs_dir = Path(docs_path).expanduser()
        if not docs_dir.is_dir():
            raise FileNotFoundError(f"Documentation directory not found: {docs_path}")

        components: List[ComponentDoc] = []
        for path in sorted(docs_dir.glob("*.md")):
            self.logger.info("Enhancing %s", path.name)
            content = path.read_text(encoding="utf-8")
            enhanced = self.enhance_text(content)
            path.write_text(enhanced, encoding="utf-8")
            components.append(parse_markdown(enhanced))
        return components


__all__ = ["DocEnhancer"]
