"""Doc comment extraction."""

from __future__ import annotations

from typing import Iterable, List

from ..syntax.script import Comment


def is_doc_comment(comment: Comment) -> bool:
    return comment.kind == "Block" and comment.value.startswith("*")


def extract_description(comments: Iterable[Comment]) -> str:
    """Join the text of every ``/** ... */`` comment, in source order.

    Other comments are ignored; the result is empty when none qualify.
    """
    return "\n".join(_clean(comment.value) for comment in comments if is_doc_comment(comment))


def _clean(value: str) -> str:
    lines: List[str] = []
    for line in value[1:].splitlines():
        stripped = line.strip()
        while stripped.startswith("*"):
            stripped = stripped[1:]
        lines.append(stripped.rstrip("*").strip())
    return "\n".join(lines).strip()


__all__ = ["extract_description", "is_doc_comment"]
