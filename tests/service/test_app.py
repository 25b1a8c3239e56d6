"""Tests for the FastAPI service mode."""

from __future__ import annotations

from pathlib import Path

import pytest

try:
    from fastapi.testclient import TestClient
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    pytest.skip("fastapi not installed", allow_module_level=True)

from sveltedoc.enhance import DocEnhancer
from sveltedoc.llm.runner import LLMRunner
from sveltedoc.service import create_app
from sveltedoc.store import DocStore

ENHANCED = "# Counter\n\nCounts clicks.\n"


def _stub_enhancer(docs_path: Path, prompt: str | None) -> DocEnhancer:
    return DocEnhancer(LLMRunner(runner=lambda request: ENHANCED), prompt or "Improve.")


@pytest.fixture
def store() -> DocStore:
    return DocStore()


@pytest.fixture
def client(store: DocStore) -> TestClient:
    return TestClient(create_app(enhancer_factory=_stub_enhancer, store=store))


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_parse_endpoint(client: TestClient) -> None:
    response = client.post("/parse", json={"content": "# Badge\n\nSmall label.\n"})
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Badge"
    assert data["description"] == "Small label."
    assert data["props"] == []


def test_generate_endpoint_updates_store(
    client: TestClient, store: DocStore, project_builder, counter_source, tmp_path: Path
) -> None:
    project_builder.write({"Counter.svelte": counter_source})
    output = tmp_path / "out"

    response = client.post(
        "/generate",
        json={"project_path": str(project_builder.path()), "output_path": str(output)},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert [component["name"] for component in data["components"]] == ["Counter"]
    assert (output / "Counter.md").exists()
    assert [doc.name for doc in store.snapshot().components] == ["Counter"]

    listing = client.get("/components").json()
    assert listing["active_component"] is None
    assert listing["components"][0]["events"][0]["name"] == "change"


def test_generate_missing_project_returns_404(client: TestClient, tmp_path: Path) -> None:
    response = client.post(
        "/generate",
        json={"project_path": str(tmp_path / "missing"), "output_path": str(tmp_path / "out")},
    )
    assert response.status_code == 404
    assert response.json()["success"] is False


def test_set_active_component(client: TestClient, store: DocStore, project_builder, tmp_path) -> None:
    project_builder.write({"Card.svelte": "<div><slot /></div>"})
    client.post(
        "/generate",
        json={"project_path": str(project_builder.path()), "output_path": str(tmp_path / "out")},
    )

    response = client.post("/components/active", json={"name": "Card"})
    assert response.status_code == 200
    assert response.json()["active_component"] == "Card"
    assert store.active().name == "Card"

    missing = client.post("/components/active", json={"name": "Nope"})
    assert missing.status_code == 404


def test_enhance_endpoint(client: TestClient, tmp_path: Path) -> None:
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "Counter.md").write_text("# Counter\n", encoding="utf-8")

    response = client.post("/enhance", json={"docs_path": str(docs)})

    assert response.status_code == 200
    data = response.json()
    assert data["components"][0]["description"] == "Counts clicks."
    assert (docs / "Counter.md").read_text(encoding="utf-8") == ENHANCED
