from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import yaml

from lumos.paths import default_config_path, default_store_dir

BACKENDS = ("registry", "file")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    pass


def default_backend() -> str:
    return "registry" if sys.platform == "win32" else "file"


def load(path: str | Path | None = None) -> dict[str, Any]:
    if path is None:
        p = default_config_path()
        if not p.exists():
            return normalize({})
    else:
        p = Path(path)

    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"{p}: {e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Top-level config must be a mapping")
    validate(normalize(data))
    return data


def normalize(cfg: dict[str, Any]) -> dict[str, Any]:
    """Fill defaults in place and return ``cfg``."""

    for section in ("store", "night", "logging"):
        if cfg.get(section) is None:
            cfg[section] = {}
        if not isinstance(cfg[section], dict):
            raise ConfigError(f"{section} must be a mapping")

    store = cfg["store"]
    store["backend"] = str(store.get("backend") or default_backend()).strip().lower()
    path = store.get("path")
    store["path"] = Path(str(path).strip()).expanduser() if path else default_store_dir()

    cfg["night"].setdefault("settle_seconds", 0.2)

    level = cfg["logging"].get("level") or "WARNING"
    cfg["logging"]["level"] = str(level).strip().upper()
    return cfg


def validate(cfg: dict[str, Any]) -> None:
    backend = cfg["store"]["backend"]
    if backend not in BACKENDS:
        raise ConfigError(f"store.backend must be one of {', '.join(BACKENDS)}: {backend}")

    try:
        settle = float(cfg["night"]["settle_seconds"])
    except (TypeError, ValueError) as e:
        raise ConfigError("night.settle_seconds must be a number") from e
    if settle < 0:
        raise ConfigError("night.settle_seconds must be >= 0")

    if cfg["logging"]["level"] not in LOG_LEVELS:
        raise ConfigError(f"logging.level must be one of {', '.join(LOG_LEVELS)}")
