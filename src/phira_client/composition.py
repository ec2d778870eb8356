"""Composition root for wiring the client and CLI dependencies."""

from __future__ import annotations

from pathlib import Path

import requests

from .cache import CacheRegistry
from .cli import create_app
from .client import Client
from .config import ClientConfig
from .infrastructure import JsonSettingsStore, LocalFileSystem, SessionFactory, Transport
from .protocols import FileSystem, SettingsStore


def build_client(
    config: ClientConfig,
    *,
    fs: FileSystem | None = None,
    settings: SettingsStore | None = None,
    session_factory: SessionFactory | None = None,
    registry: CacheRegistry | None = None,
) -> Client:
    """Build a `Client` from configuration.

    Args:
        config: Client configuration (API URL, CA bundle, settings path).
        fs: Filesystem for the settings store. Defaults to the local disk.
        settings: Settings store. Defaults to a JSON file at `config.settings_path`.
        session_factory: Factory for the underlying requests sessions.
        registry: Object cache registry. Defaults to the process-wide registry.
    """
    if settings is None:
        settings = JsonSettingsStore(
            path=Path(config.settings_path),
            fs=fs or LocalFileSystem(),
        )
    transport = Transport(
        api_url=config.api_url,
        settings=settings,
        ca_bundle_path=config.ca_bundle_path,
        user_agent=config.effective_user_agent,
        session_factory=session_factory or requests.Session,
    )
    return Client(transport=transport, settings=settings, registry=registry)


app = create_app(build_client)
