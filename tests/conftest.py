from __future__ import annotations

import pytest

from restrictstore import StoreConfig, set_store_config


@pytest.fixture(autouse=True)
def default_store_config():
    """Isolate every test from STORE_* environment variables."""
    set_store_config(StoreConfig())
    yield
    set_store_config(None)
