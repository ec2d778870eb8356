"""Pytest fixtures shared across the suite.

All tests are network-isolated - socket connections are blocked by default.
"""

from __future__ import annotations

import socket
from pathlib import Path

import pytest

from phira_client.cache import CacheRegistry, ObjectStore
from phira_client.client import Client
from phira_client.infrastructure import Transport
from tests.fakes import FakeHttpBackend, InMemorySettingsStore
from tests.support.errors import NetworkIsolationError

API_URL = "https://api.phira.test"
CA_BUNDLE_PEM = "-----BEGIN CERTIFICATE-----\nMIIBfake\n-----END CERTIFICATE-----\n"

# =============================================================================
# Network Isolation - Block all socket connections in tests
# =============================================================================


def _blocked_socket_connect(self: socket.socket, *args: object, **kwargs: object) -> None:
    """Raise an error if any test tries to make a real network connection."""
    raise NetworkIsolationError(str(args))


@pytest.fixture(autouse=True)
def block_network_access(monkeypatch: pytest.MonkeyPatch) -> None:
    """Block all network access in tests.

    Tests that need HTTP should route requests through FakeHttpBackend.
    """
    monkeypatch.setattr(socket.socket, "connect", _blocked_socket_connect)


@pytest.fixture
def backend() -> FakeHttpBackend:
    return FakeHttpBackend()


@pytest.fixture
def settings() -> InMemorySettingsStore:
    return InMemorySettingsStore()


@pytest.fixture
def ca_bundle(tmp_path: Path) -> str:
    path = tmp_path / "phira-ca.pem"
    path.write_text(CA_BUNDLE_PEM, encoding="utf-8")
    return str(path)


@pytest.fixture
def transport(
    backend: FakeHttpBackend, settings: InMemorySettingsStore, ca_bundle: str
) -> Transport:
    return Transport(
        api_url=API_URL,
        settings=settings,
        ca_bundle_path=ca_bundle,
        session_factory=backend.session_factory,
    )


@pytest.fixture
def registry() -> CacheRegistry:
    return CacheRegistry()


@pytest.fixture
def store(transport: Transport, registry: CacheRegistry) -> ObjectStore:
    return ObjectStore(transport=transport, registry=registry)


@pytest.fixture
def client(
    transport: Transport, settings: InMemorySettingsStore, registry: CacheRegistry
) -> Client:
    return Client(transport=transport, settings=settings, registry=registry)
