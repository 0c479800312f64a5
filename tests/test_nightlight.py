from __future__ import annotations

import pytest
from blobs import make_disabled, make_enabled, make_settings

from lumos import settings, state
from lumos.errors import InvalidDataError, NotSupportedError
from lumos.nightlight import NightLight
from lumos.store import SETTINGS_KEY, STATE_KEY, MemoryBlobStore


def _night(state_blob: bytes | None = None, settings_blob: bytes | None = None):
    store = MemoryBlobStore()
    if state_blob is not None:
        store.blobs[STATE_KEY] = state_blob
    if settings_blob is not None:
        store.blobs[SETTINGS_KEY] = settings_blob
    return NightLight(store), store


class _DeniedStore:
    def __init__(self) -> None:
        self.writes = 0

    def read(self, key: str) -> bytes:
        raise PermissionError(key)

    def write(self, key: str, data: bytes) -> None:
        self.writes += 1


class _ReadOnlyStore(MemoryBlobStore):
    def write(self, key: str, data: bytes) -> None:
        raise PermissionError("read only")


def test_missing_store_is_not_supported() -> None:
    nl, _ = _night()
    assert nl.supported() is False
    with pytest.raises(NotSupportedError):
        nl.enabled()


def test_access_denied_is_not_supported() -> None:
    store = _DeniedStore()
    nl = NightLight(store)
    with pytest.raises(NotSupportedError):
        nl.enable()
    with pytest.raises(NotSupportedError):
        nl.get_strength()
    assert store.writes == 0


def test_enabled() -> None:
    nl, _ = _night(make_enabled())
    assert nl.supported() is True
    assert nl.enabled() is True


def test_enable_writes_enabled_shape() -> None:
    nl, store = _night(make_disabled())
    nl.enable()
    assert len(store.blobs[STATE_KEY]) == 43
    assert nl.enabled() is True


def test_enable_is_idempotent() -> None:
    nl, store = _night(make_enabled())
    nl.enable()
    assert store.blobs[STATE_KEY] == make_enabled()


def test_disable_is_idempotent() -> None:
    nl, store = _night(make_disabled())
    nl.disable()
    assert store.blobs[STATE_KEY] == make_disabled()


def test_disable() -> None:
    nl, store = _night(make_enabled())
    nl.disable()
    assert store.blobs[STATE_KEY][18] == 0x13
    assert nl.enabled() is False


def test_toggle_always_writes() -> None:
    nl, store = _night(make_disabled())
    nl.toggle()
    nl.toggle()
    data = store.blobs[STATE_KEY]
    assert len(data) == 41
    assert data[10] == 7


def test_every_call_rereads_store() -> None:
    nl, store = _night(make_disabled())
    assert nl.enabled() is False
    # Another process flips the feature behind our back.
    store.blobs[STATE_KEY] = make_enabled()
    assert nl.enabled() is True
    nl.disable()
    assert nl.enabled() is False


def test_invalid_state_is_not_written() -> None:
    bad = bytearray(make_disabled())
    bad[18] = 0x15
    nl, store = _night(bytes(bad))
    with pytest.raises(InvalidDataError):
        nl.toggle()
    assert store.blobs[STATE_KEY] == bytes(bad)


def test_write_errors_propagate() -> None:
    store = _ReadOnlyStore({STATE_KEY: make_disabled()})
    with pytest.raises(PermissionError):
        NightLight(store).enable()


def test_get_strength() -> None:
    blob = settings.with_strength(settings.decode(make_settings()), 25)
    nl, _ = _night(make_enabled(), settings.encode(blob))
    assert nl.get_strength() == pytest.approx(25, abs=0.1)


def test_get_strength_clamps_out_of_domain_temperature() -> None:
    # 1152 K is warmer than the 1200 K floor.
    nl, _ = _night(make_enabled(), make_settings(lo=128, hi=18))
    assert nl.get_strength() == 100


def test_set_strength_leaves_state_alone() -> None:
    nl, store = _night(make_disabled(), make_settings())
    nl.set_strength(150)
    assert settings.kelvin_of(settings.decode(store.blobs[SETTINGS_KEY])) == 1200
    assert store.blobs[STATE_KEY] == make_disabled()
    assert state.is_enabled(state.decode(store.blobs[STATE_KEY])) is False


def test_set_strength_rejects_short_settings() -> None:
    nl, store = _night(make_enabled(), b"\x00" * 10)
    with pytest.raises(InvalidDataError):
        nl.set_strength(50)
    assert store.blobs[SETTINGS_KEY] == b"\x00" * 10


def test_dump() -> None:
    nl, _ = _night(make_enabled(), make_settings())
    assert nl.dump() == {STATE_KEY: make_enabled(), SETTINGS_KEY: make_settings()}
