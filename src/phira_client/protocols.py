"""Protocol definitions for dependency injection.

These protocols define the abstract interfaces that client components depend on,
enabling isolated unit testing with in-memory implementations.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class SettingsStore(Protocol):
    """Persisted user settings: current locale and the login token pair."""

    def language(self) -> str | None:
        """Return the configured locale, or None when unset."""
        ...

    def tokens(self) -> tuple[str, str] | None:
        """Return the stored (access token, refresh token) pair, if any."""
        ...

    def save_tokens(self, token: str, refresh_token: str) -> None:
        """Persist a new token pair, replacing any previous one."""
        ...


@runtime_checkable
class FileSystem(Protocol):
    """Abstract filesystem for reading/writing client state."""

    def read_json(self, path: Path) -> dict[str, object]:
        """Read JSON file."""
        ...

    def write_json(self, data: Mapping[str, object], path: Path) -> None:
        """Write JSON file."""
        ...

    def read_text(self, path: Path) -> str:
        """Read text file."""
        ...

    def exists(self, path: Path) -> bool:
        """Check if path exists."""
        ...
