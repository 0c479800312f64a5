from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from lumos.config import ConfigError, default_backend
from lumos.errors import NotSupportedError

log = logging.getLogger(__name__)

STATE_KEY = "state"
SETTINGS_KEY = "settings"

_CLOUDSTORE = r"Software\Microsoft\Windows\CurrentVersion\CloudStore\Store\DefaultAccount\Current"


def _cloudstore_key(name: str) -> str:
    # ...\Current\default$<name>\<name>
    return "\\".join([_CLOUDSTORE, f"default${name}", name])


REGISTRY_KEYS = {
    STATE_KEY: _cloudstore_key("windows.data.bluelightreduction.bluelightreductionstate"),
    SETTINGS_KEY: _cloudstore_key("windows.data.bluelightreduction.settings"),
}
REGISTRY_VALUE = "Data"


class BlobStore(Protocol):
    """Whole-blob get/set over the two logical keys.

    read() raises FileNotFoundError or PermissionError.
    write() raises PermissionError or OSError.
    """

    def read(self, key: str) -> bytes: ...

    def write(self, key: str, data: bytes) -> None: ...


@dataclass
class MemoryBlobStore:
    """In-process store for callers that hold the blobs themselves, e.g. tests."""

    blobs: dict[str, bytes] = field(default_factory=dict)

    def read(self, key: str) -> bytes:
        try:
            return self.blobs[key]
        except KeyError:
            raise FileNotFoundError(key) from None

    def write(self, key: str, data: bytes) -> None:
        self.blobs[key] = bytes(data)


@dataclass(frozen=True)
class FileBlobStore:
    """One ``<key>.bin`` file per blob, replaced atomically on write."""

    root: Path

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.bin"

    def read(self, key: str) -> bytes:
        p = self._path(key)
        data = p.read_bytes()
        log.debug("read %d bytes from %s", len(data), p)
        return data

    def write(self, key: str, data: bytes) -> None:
        p = self._path(key)
        p.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=f".{key}.", dir=p.parent)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp, p)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
        log.debug("wrote %d bytes to %s", len(data), p)


def _winreg() -> Any:
    try:
        import winreg  # type: ignore
    except ImportError as e:
        raise NotSupportedError("the registry store requires Windows") from e
    return winreg


@dataclass(frozen=True)
class RegistryBlobStore:
    """The binary ``Data`` value of the CloudStore keys under HKEY_CURRENT_USER."""

    keys: dict[str, str] = field(default_factory=lambda: dict(REGISTRY_KEYS))

    def read(self, key: str) -> bytes:
        winreg = _winreg()
        path = self.keys[key]
        with winreg.OpenKey(winreg.HKEY_CURRENT_USER, path, 0, winreg.KEY_READ) as hkey:
            value, _kind = winreg.QueryValueEx(hkey, REGISTRY_VALUE)
        log.debug("read %d bytes from HKCU\\%s", len(value), path)
        return bytes(value)

    def write(self, key: str, data: bytes) -> None:
        winreg = _winreg()
        path = self.keys[key]
        with winreg.OpenKey(winreg.HKEY_CURRENT_USER, path, 0, winreg.KEY_WRITE) as hkey:
            winreg.SetValueEx(hkey, REGISTRY_VALUE, 0, winreg.REG_BINARY, bytes(data))
        log.debug("wrote %d bytes to HKCU\\%s", len(data), path)


def store_from_config(cfg: dict[str, Any]) -> BlobStore:
    store_cfg = cfg.get("store", {})
    backend = str(store_cfg.get("backend") or default_backend())
    if backend == "registry":
        return RegistryBlobStore()
    if backend == "file":
        return FileBlobStore(Path(store_cfg["path"]))
    raise ConfigError(f"unknown store backend: {backend}")
