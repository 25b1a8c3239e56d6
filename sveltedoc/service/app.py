"""FastAPI application entrypoint for sveltedoc service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TypeVar

try:  # pragma: no cover - optional dependency
    from fastapi import FastAPI
    from fastapi.responses import JSONResponse
    from pydantic import BaseModel

    _FASTAPI_AVAILABLE = True
except ModuleNotFoundError:  # pragma: no cover - service mode optional
    FastAPI = None  # type: ignore[assignment]
    JSONResponse = None  # type: ignore[assignment]
    BaseModel = object  # type: ignore[assignment]
    _FASTAPI_AVAILABLE = False

from ..config import load_config
from ..enhance import DocEnhancer
from ..generator import DocGenerator
from ..introspection import ComponentIntrospector
from ..llm.runner import LLMRunner
from ..logging import get_logger
from ..markdown import parse_markdown
from ..models import ComponentDoc
from ..scanner import ComponentScanner
from ..store import DocStore

_T = TypeVar("_T")

logger = get_logger("service")


class GenerateRequest(BaseModel):
    project_path: str
    output_path: Optional[str] = None


class EnhanceRequest(BaseModel):
    docs_path: str
    prompt: Optional[str] = None


class ParseRequest(BaseModel):
    content: str


class ActiveRequest(BaseModel):
    name: Optional[str] = None


class ComponentsResponse(BaseModel):
    success: bool = True
    message: str = ""
    components: List[Dict[str, Any]] = []


class StoreResponse(BaseModel):
    components: List[Dict[str, Any]] = []
    active_component: Optional[str] = None


class HealthResponse(BaseModel):
    status: str


def _default_generator(project_path: Path) -> DocGenerator:
    config = load_config(project_path if project_path.is_dir() else project_path.parent)
    return DocGenerator(
        ComponentIntrospector(dispatcher_factory=config.dispatcher_factory),
        ComponentScanner(config.exclude_paths),
    )


def _default_enhancer(docs_path: Path, prompt: Optional[str]) -> DocEnhancer:
    config = load_config(Path.cwd())
    runner = LLMRunner.from_config(config.llm)
    return DocEnhancer(runner, prompt or config.llm.prompt)


def create_app(
    generator_factory: Callable[[Path], DocGenerator] = _default_generator,
    enhancer_factory: Callable[[Path, Optional[str]], DocEnhancer] = _default_enhancer,
    store: DocStore | None = None,
) -> FastAPI:
    """Create the FastAPI application exposing sveltedoc operations."""

    if not _FASTAPI_AVAILABLE:  # pragma: no cover - validated via unit tests
        raise RuntimeError(
            "FastAPI is required for service mode. Install it with `pip install sveltedoc[service]`."
        )

    app = FastAPI(title="sveltedoc", version="1.0.0")
    doc_store = store or DocStore()
    app.state.doc_store = doc_store

    def _as_payload(docs: List[ComponentDoc]) -> List[Dict[str, Any]]:
        return [doc.to_dict() for doc in docs]

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/generate", response_model=ComponentsResponse)
    async def generate(payload: GenerateRequest) -> ComponentsResponse:
        project_path = Path(payload.project_path).expanduser()

        def _run() -> List[ComponentDoc]:
            generator = generator_factory(project_path)
            if payload.output_path:
                output_path = Path(payload.output_path)
            else:
                config = load_config(project_path if project_path.is_dir() else project_path.parent)
                output_path = config.output_dir
            return generator.generate_docs(project_path, output_path)

        docs = await _in_executor(_run)
        doc_store.set_docs(docs)
        logger.info("Generated documentation for %d component(s)", len(docs))
        return ComponentsResponse(
            message="Documentation generated successfully", components=_as_payload(docs)
        )

    @app.post("/enhance", response_model=ComponentsResponse)
    async def enhance(payload: EnhanceRequest) -> ComponentsResponse:
        docs_path = Path(payload.docs_path).expanduser()

        def _run() -> List[ComponentDoc]:
            return enhancer_factory(docs_path, payload.prompt).enhance_directory(docs_path)

        docs = await _in_executor(_run)
        doc_store.set_docs(docs)
        return ComponentsResponse(
            message="Documentation enhanced successfully", components=_as_payload(docs)
        )

    @app.post("/parse")
    async def parse(payload: ParseRequest) -> Dict[str, Any]:
        return parse_markdown(payload.content).to_dict()

    @app.get("/components", response_model=StoreResponse)
    async def components() -> StoreResponse:
        state = doc_store.snapshot()
        return StoreResponse(
            components=_as_payload(list(state.components)),
            active_component=state.active_component,
        )

    @app.post("/components/active", response_model=StoreResponse)
    async def set_active(payload: ActiveRequest) -> StoreResponse:
        if payload.name is not None and doc_store.get(payload.name) is None:
            raise FileNotFoundError(f"Unknown component: {payload.name}")
        doc_store.set_active_component(payload.name)
        state = doc_store.snapshot()
        return StoreResponse(
            components=_as_payload(list(state.components)),
            active_component=state.active_component,
        )

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(
        _: Any, exc: FileNotFoundError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=404, content={"success": False, "error": str(exc)})

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(
        _: Any, exc: RuntimeError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=400, content={"success": False, "error": str(exc)})

    return app


async def _in_executor(func: Callable[[], _T]) -> _T:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, func)


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    if not _FASTAPI_AVAILABLE:
        raise RuntimeError(
            "FastAPI is required for service mode. Install it with `pip install sveltedoc[service]`."
        )

    try:
        import uvicorn
    except ModuleNotFoundError as exc:  # pragma: no cover - optional dependency
        raise RuntimeError(
            "uvicorn is required to run the service. Install it with `pip install uvicorn`."
        ) from exc

    app = create_app()
    uvicorn.run(app, host=host, port=port)
