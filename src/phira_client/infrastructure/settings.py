"""JSON-file backed settings store.

The file holds the user's locale and the last login token pair:

    {"language": "en-US", "tokens": ["<access>", "<refresh>"]}
"""

from __future__ import annotations

from pathlib import Path
from typing import override

from pydantic import BaseModel, ConfigDict

from ..exceptions import SettingsFileError
from ..observability import get_logger
from ..protocols import FileSystem, SettingsStore
from .io.validation import IncomingDataError, validate_as

logger = get_logger("phira_client.infrastructure.settings")


class StoredSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    language: str | None = None
    tokens: tuple[str, str] | None = None


class JsonSettingsStore(SettingsStore):
    """Settings store persisted as a JSON document on a `FileSystem`."""

    def __init__(self, *, path: Path, fs: FileSystem) -> None:
        self._path = path
        self._fs = fs
        self._settings = self._load()

    def _load(self) -> StoredSettings:
        if not self._fs.exists(self._path):
            return StoredSettings()
        try:
            payload = self._fs.read_json(self._path)
            return validate_as(StoredSettings, payload)
        except (IncomingDataError, RuntimeError) as exc:
            raise SettingsFileError(str(self._path)) from exc

    @property
    def path(self) -> Path:
        return self._path

    @override
    def language(self) -> str | None:
        return self._settings.language

    @override
    def tokens(self) -> tuple[str, str] | None:
        return self._settings.tokens

    @override
    def save_tokens(self, token: str, refresh_token: str) -> None:
        self._settings = self._settings.model_copy(update={"tokens": (token, refresh_token)})
        self._fs.write_json(self._settings.model_dump(mode="json"), self._path)
        logger.info("Saved login tokens to %s", self._path)

    def set_language(self, language: str | None) -> None:
        self._settings = self._settings.model_copy(update={"language": language})
        self._fs.write_json(self._settings.model_dump(mode="json"), self._path)
