"""Configuration loading for sveltedoc (.sveltedoc.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .analyzers import DEFAULT_DISPATCHER_FACTORY

CONFIG_FILENAME = ".sveltedoc.yml"
DEFAULT_OUTPUT_DIR = "docs/components"

DEFAULT_ENHANCE_PROMPT = (
    "You are a technical writer improving Svelte component documentation. "
    "Keep the Markdown structure exactly as given: the '# <name>' heading, the "
    "'## Props', '## Events' and '## Slots' sections and their tables. Fill in "
    "missing descriptions and clarify existing ones without inventing props, "
    "events or slots."
)

_ENV_MODEL_KEYS = ("SVELTEDOC_LLM_MODEL", "OPENAI_MODEL")
_ENV_BASE_URL_KEYS = ("SVELTEDOC_LLM_BASE_URL", "OPENAI_BASE_URL")
_ENV_API_KEY_KEYS = ("SVELTEDOC_LLM_API_KEY", "OPENAI_API_KEY")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class LLMConfig:
    """Settings for the documentation enhancement model."""

    model: Optional[str] = None
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    request_timeout: Optional[float] = None
    prompt: str = DEFAULT_ENHANCE_PROMPT


@dataclass
class SvelteDocConfig:
    """Represents the settings defined in .sveltedoc.yml."""

    root: Path
    output_dir: Path
    dispatcher_factory: str = DEFAULT_DISPATCHER_FACTORY
    exclude_paths: List[str] = field(default_factory=list)
    llm: LLMConfig = field(default_factory=LLMConfig)


def load_config(config_path: Path) -> SvelteDocConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return SvelteDocConfig(root=root, output_dir=root / DEFAULT_OUTPUT_DIR, llm=_llm_config({}))

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    output_dir_str = _as_str(data.get("output_dir")) or DEFAULT_OUTPUT_DIR
    output_dir = Path(output_dir_str).expanduser()
    if not output_dir.is_absolute():
        output_dir = root / output_dir

    return SvelteDocConfig(
        root=root,
        output_dir=output_dir,
        dispatcher_factory=_as_str(data.get("dispatcher_factory")) or DEFAULT_DISPATCHER_FACTORY,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
        llm=_llm_config(_as_dict(data.get("llm"))),
    )


def _llm_config(llm_data: Dict[str, Any]) -> LLMConfig:
    return LLMConfig(
        model=_as_str(llm_data.get("model")) or _first_env_value(_ENV_MODEL_KEYS),
        base_url=_as_str(llm_data.get("base_url")) or _first_env_value(_ENV_BASE_URL_KEYS),
        api_key=_as_str(llm_data.get("api_key")) or _first_env_value(_ENV_API_KEY_KEYS),
        temperature=_as_float(llm_data.get("temperature")),
        max_tokens=_as_int(llm_data.get("max_tokens")),
        request_timeout=_as_float(llm_data.get("request_timeout")),
        prompt=_as_str(llm_data.get("prompt")) or DEFAULT_ENHANCE_PROMPT,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _first_env_value(keys: Sequence[str]) -> Optional[str]:
    for key in keys:
        value = os.getenv(key)
        if value:
            return value
    return None


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "LLMConfig",
    "SvelteDocConfig",
    "load_config",
]
