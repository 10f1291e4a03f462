from __future__ import annotations

import json
import os
import tomllib
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from confluence_scanner.config.models import AppConfig, default_config
from confluence_scanner.core.errors import ConfigError

CONFIG_ENV_PREFIX = "CONFLUENCE_"
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "API_KEY")


def load_config(path: str | Path | None = None, env_prefix: str = CONFIG_ENV_PREFIX) -> AppConfig:
    config = default_config()
    if path:
        payload = _read_file(Path(path))
        try:
            config = AppConfig.model_validate(payload)
        except ValidationError as exc:
            raise ConfigError(f"Invalid config file {path}: {exc}") from exc
    return _apply_env_overrides(config, env_prefix=env_prefix)


def _read_file(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    elif suffix in {".toml", ".tml"}:
        with path.open("rb") as fh:
            payload = tomllib.load(fh)
    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as fh:
            payload = json.load(fh)
    else:
        raise ConfigError(f"Unsupported config format: {path.suffix}")
    return payload or {}


def update_section(config: AppConfig, section: str, updates: Mapping[str, Any]) -> AppConfig:
    """Return ``config`` with ``updates`` merged into one section, re-validated."""
    if not updates:
        return config
    current = getattr(config, section)
    try:
        replaced = type(current).model_validate({**current.model_dump(), **updates})
    except ValidationError as exc:
        raise ConfigError(f"Invalid {section} settings: {exc}") from exc
    return config.model_copy(update={section: replaced})


def _apply_env_overrides(config: AppConfig, env_prefix: str) -> AppConfig:
    ai_updates: dict[str, Any] = {}
    for field_name, env_name in (
        ("provider", "PROVIDER"),
        ("model", "MODEL"),
        ("api_url", "API_URL"),
    ):
        value = os.getenv(f"{env_prefix}{env_name}")
        if value:
            ai_updates[field_name] = value

    timeout = _get_env_float(f"{env_prefix}TIMEOUT")
    if timeout is not None:
        ai_updates["timeout_seconds"] = timeout

    api_key = _first_env(f"{env_prefix}API_KEY", *API_KEY_ENV_VARS)
    if api_key:
        ai_updates["api_key"] = api_key

    scanner_updates: dict[str, Any] = {}
    pairs = os.getenv(f"{env_prefix}PAIRS")
    if pairs:
        scanner_updates["default_pairs"] = [p for p in pairs.split(",") if p.strip()]

    config = update_section(config, "ai", ai_updates)
    return update_section(config, "scanner", scanner_updates)


def _first_env(*keys: str) -> str | None:
    for key in keys:
        value = os.getenv(key)
        if value:
            return value
    return None


def _get_env_float(key: str) -> float | None:
    raw = os.getenv(key)
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError:
        return None
