from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from tests._fixtures.project_builder import ProjectBuilder

COUNTER_SOURCE = textwrap.dedent(
    """
    <script context="module">
      /** A clickable counter. */
    </script>

    <script>
      import { createEventDispatcher } from 'svelte';

      /** The current count */
      export let count = 0;
      export let label;

      const dispatch = createEventDispatcher();

      function increment() {
        count += 1;
        dispatch('change', { count });
      }
    </script>

    <button on:click={increment}>
      {label}: {count}
      <slot a={count} b />
    </button>
    """
).lstrip("\n")


@pytest.fixture
def project_builder(tmp_path: Path) -> ProjectBuilder:
    """Provide a reusable project builder rooted at the pytest tmp_path."""
    return ProjectBuilder(tmp_path)


@pytest.fixture
def counter_source() -> str:
    return COUNTER_SOURCE


@pytest.fixture(autouse=True)
def _no_llm_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "SVELTEDOC_LLM_MODEL",
        "SVELTEDOC_LLM_BASE_URL",
        "SVELTEDOC_LLM_API_KEY",
        "OPENAI_MODEL",
        "OPENAI_BASE_URL",
        "OPENAI_API_KEY",
    ):
        monkeypatch.delenv(key, raising=False)
