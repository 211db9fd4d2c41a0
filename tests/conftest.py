"""Shared test fixtures for dgraph-admin.

Provides endpoint configurations, a quiet global output manager, and an
isolated environment with no ``DGRAPH_ADMIN_*`` variables leaking in from
the developer's shell.
"""

from __future__ import annotations

import pytest

from dgraph_admin.models import AuthHeader, EndpointConfig, RequestConfig
from dgraph_admin.output import OutputManager, reset_output, set_output


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove configuration env vars so defaults are deterministic."""
    for name in ("DGRAPH_ADMIN_URL", "DGRAPH_ADMIN_AUTH", "DGRAPH_ADMIN_TIMEOUT", "NO_COLOR"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The manager caches references to sys.stdout/sys.stderr at creation time;
    once CliRunner restores the real streams those references go stale.
    """
    yield
    reset_output()


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a colourless, quiet output manager."""
    output = OutputManager(no_color=True, quiet=True)
    set_output(output)
    return output


@pytest.fixture
def config() -> EndpointConfig:
    """Default local endpoint, no auth."""
    return EndpointConfig(base_url="http://localhost:8080", request=RequestConfig(timeout=5))


@pytest.fixture
def auth_config() -> EndpointConfig:
    """Local endpoint with a self-hosted token header."""
    return EndpointConfig(
        base_url="http://localhost:8080",
        auth_header=AuthHeader(name="X-Dgraph-AuthToken", value="abc"),
        request=RequestConfig(timeout=5),
    )
