from __future__ import annotations

import pytest
from blobs import make_disabled, make_enabled, make_settings


@pytest.fixture
def disabled_blob() -> bytes:
    return make_disabled()


@pytest.fixture
def enabled_blob() -> bytes:
    return make_enabled()


@pytest.fixture
def settings_blob() -> bytes:
    return make_settings()
