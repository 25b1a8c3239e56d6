"""Tests for LLM-backed documentation enhancement."""

from __future__ import annotations

import pytest

from sveltedoc.enhance import USER_PROMPT_PREFIX, DocEnhancer
from sveltedoc.llm.runner import LLMRunner

ENHANCED = "# Button\n\nA friendlier button.\n"


def test_enhance_directory_rewrites_files(tmp_path) -> None:
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "Button.md").write_text("# Button\n", encoding="utf-8")
    (docs / "notes.txt").write_text("untouched", encoding="utf-8")
    requests = []

    def fake_runner(request):
        requests.append(request)
        return ENHANCED

    enhancer = DocEnhancer(LLMRunner(runner=fake_runner), "Improve the docs.")
    components = enhancer.enhance_directory(docs)

    assert [doc.name for doc in components] == ["Button"]
    assert components[0].description == "A friendlier button."
    assert (docs / "Button.md").read_text(encoding="utf-8") == ENHANCED
    assert (docs / "notes.txt").read_text(encoding="utf-8") == "untouched"
    assert requests[0].system == "Improve the docs."
    assert requests[0].prompt == f"{USER_PROMPT_PREFIX}# Button\n"


def test_enhance_directory_missing(tmp_path) -> None:
    enhancer = DocEnhancer(LLMRunner(runner=lambda request: ""))
    with pytest.raises(FileNotFoundError):
        enhancer.enhance_directory(tmp_path / "missing")


def test_runner_failure_propagates(tmp_path) -> None:
    (tmp_path / "A.md").write_text("# A\n", encoding="utf-8")

    def failing_runner(request):
        raise RuntimeError("quota exceeded")

    with pytest.raises(RuntimeError, match="quota exceeded"):
        DocEnhancer(LLMRunner(runner=failing_runner)).enhance_directory(tmp_path)
    assert (tmp_path / "A.md").read_text(encoding="utf-8") == "# A\n"
