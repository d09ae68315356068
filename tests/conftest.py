# tests/conftest.py
from __future__ import annotations

import pytest

from tfutil.core.guard.policy import BYPASS_ENV_VAR
from tfutil.core.runtime.state import MemoryStateStore
from tfutil.host.config import ResourceBlock
from tfutil.host.session import ProviderSession
from tfutil.providers.util.provider import UtilProvider


@pytest.fixture(autouse=True)
def _clean_bypass_env(monkeypatch):
    # The developer's shell must not leak a bypass into the tests.
    monkeypatch.delenv(BYPASS_ENV_VAR, raising=False)


@pytest.fixture()
def store():
    return MemoryStateStore()


@pytest.fixture()
def make_session(store):
    def _make(provider_config=None, environ=None):
        session = ProviderSession(UtilProvider("test", environ=environ), store)
        diagnostics = session.configure(provider_config)
        assert not diagnostics.has_error(), list(diagnostics)
        return session

    return _make


GUARD = "util_indestructible.guard"


@pytest.fixture()
def guard():
    """Desired-state builder for a util_indestructible named "guard"."""

    def _guard(**attributes):
        return {GUARD: ResourceBlock(type="util_indestructible", attributes=attributes)}

    return _guard
