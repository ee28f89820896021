from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from .errors import ConfigError, ValidationError

DEFAULT_CONNECTIONS_PATH = "~/.bip-report/connections.json"
DEFAULT_PAGE_SIZE = 10


@dataclass
class StorageConfig:
    connections_path: Path = field(
        default_factory=lambda: Path(DEFAULT_CONNECTIONS_PATH).expanduser()
    )


@dataclass
class PaginationConfig:
    page_size: int = DEFAULT_PAGE_SIZE


@dataclass
class ObservabilityConfig:
    log_level: str = "info"


@dataclass
class AppConfig:
    storage: StorageConfig = field(default_factory=StorageConfig)
    pagination: PaginationConfig = field(default_factory=PaginationConfig)
    observability: ObservabilityConfig = field(default_factory=ObservabilityConfig)


def _resolve_env(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1]
            if key not in env:
                raise ConfigError(f"Environment variable {key} is required but not set")
            return env[key]
        return value
    if isinstance(value, list):
        return [_resolve_env(v, env) for v in value]
    if isinstance(value, dict):
        return {k: _resolve_env(v, env) for k, v in value.items()}
    return value


def _section(raw: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = raw.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Config section {name} must be a mapping")
    return section


def _positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        try:
            value = int(value)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"{field_name} must be an integer") from exc
    if value <= 0:
        raise ConfigError(f"{field_name} must be greater than 0")
    return value


def load_config(path: str | Path, env: Mapping[str, str] | None = None) -> AppConfig:
    env = os.environ if env is None else env
    try:
        raw = yaml.safe_load(Path(path).read_text()) or {}
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a mapping")
    resolved = _resolve_env(raw, env)

    storage_raw = _section(resolved, "storage")
    pagination_raw = _section(resolved, "pagination")
    observability_raw = _section(resolved, "observability")

    connections_path = storage_raw.get("connections_path") or DEFAULT_CONNECTIONS_PATH
    storage = StorageConfig(connections_path=Path(str(connections_path)).expanduser())

    pagination = PaginationConfig(
        page_size=_positive_int(
            pagination_raw.get("page_size", DEFAULT_PAGE_SIZE), "page_size"
        ),
    )

    observability = ObservabilityConfig(
        log_level=str(observability_raw.get("log_level", "info")),
    )

    return AppConfig(
        storage=storage,
        pagination=pagination,
        observability=observability,
    )


def resolve_secret(value: str, env: Mapping[str, str] | None = None) -> str:
    """Return ``value``, or the environment variable it names as ``${VAR}``."""
    env = os.environ if env is None else env
    try:
        return _resolve_env(value, env)
    except ConfigError as exc:
        raise ValidationError(str(exc)) from exc
