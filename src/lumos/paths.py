from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "lumos"


def _xdg(var: str, *fallback: str) -> Path:
    base = os.environ.get(var)
    if base:
        return Path(base)
    return Path.home().joinpath(*fallback)


def default_config_path() -> Path:
    """Return ``$XDG_CONFIG_HOME/lumos/config.yaml``, else ``~/.config/...``."""

    return _xdg("XDG_CONFIG_HOME", ".config") / APP_NAME / "config.yaml"


def default_store_dir() -> Path:
    """Return the blob directory used by the file store backend.

    Uses XDG_STATE_HOME when available, else ~/.local/state.
    """

    return _xdg("XDG_STATE_HOME", ".local", "state") / APP_NAME / "blobs"
