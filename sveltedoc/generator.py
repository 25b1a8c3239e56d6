"""Generate Markdown documentation for every component of a project."""

from __future__ import annotations

from pathlib import Path
from typing import List

from .introspection import ComponentIntrospector
from .logging import get_logger
from .markdown import render_markdown
from .models import ComponentDoc
from .scanner import ComponentScanner


class DocGenerator:
    """Analyzes component files and writes one ``<name>.md`` per component."""

    def __init__(
        self,
        introspector: ComponentIntrospector | None = None,
        scanner: ComponentScanner | None = None,
    ) -> None:
        self.introspector = introspector or ComponentIntrospector()
        self.scanner = scanner or ComponentScanner()
        self.logger = get_logger("generator")

    def generate_docs(self, project_path: str | Path, output_path: str | Path) -> List[ComponentDoc]:
        """Document ``project_path`` (a directory or a single component file).

        Files that cannot be read are logged and skipped; the returned list
        holds the documentation of every component that was written.
        """
        output_dir = Path(output_path).expanduser()
        output_dir.mkdir(parents=True, exist_ok=True)

        files = self.scanner.find(project_path)
        self.logger.info("Found %d component(s) under %s", len(files), project_path)

        docs: List[ComponentDoc] = []
        for file in files:
            try:
                source = file.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                self.logger.error("Error processing %s: %s", file, exc)
                continue

            doc = self.introspector.parse_component(source, str(file))
            target = output_dir / f"{doc.name}.md"
            try:
                target.write_text(render_markdown(doc), encoding="utf-8")
            except OSError as exc:
                self.logger.error("Error writing %s: %s", target, exc)
                continue
            self.logger.debug("Wrote %s", target)
            docs.append(doc)
        return docs


__all__ = ["DocGenerator"]
