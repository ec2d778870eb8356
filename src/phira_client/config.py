"""Centralised, injectable configuration for the Phira API client."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Self

from dotenv import load_dotenv

from . import __version__
from .config_file import ClientConfigFile
from .exceptions import PhiraClientError

DEFAULT_API_URL = "https://api.phira.cn:2925"
DEFAULT_SETTINGS_PATH = "data/settings.json"


class ApiUrlError(PhiraClientError, ValueError):
    """Raised when the configured API URL is not an HTTP(S) URL."""

    def __init__(self, value: str) -> None:
        super().__init__(f"PHIRA_API_URL must start with http:// or https:// (got {value!r}).")


def _default_user_agent() -> str:
    return f"phira-api-client/{__version__}"


@dataclass(frozen=True)
class ClientConfig:
    """Immutable configuration for the client.

    Load from environment with `ClientConfig.from_env()` or construct directly for testing.
    """

    api_url: str = DEFAULT_API_URL
    # Only trusted root for https; required when api_url is https.
    ca_bundle_path: str = ""
    settings_path: str = DEFAULT_SETTINGS_PATH
    user_agent: str = ""

    def __post_init__(self) -> None:
        _validate_api_url(self.api_url)

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> Self:
        """Load configuration from environment variables.

        Args:
            dotenv_path: Optional path to .env file. If None, uses default .env discovery.

        Returns:
            ClientConfig instance populated from environment.
        """
        load_dotenv(dotenv_path)

        return cls(
            api_url=os.getenv("PHIRA_API_URL", DEFAULT_API_URL).strip().rstrip("/")
            or DEFAULT_API_URL,
            ca_bundle_path=os.getenv("PHIRA_CA_BUNDLE", "").strip(),
            settings_path=os.getenv("PHIRA_SETTINGS_PATH", DEFAULT_SETTINGS_PATH).strip()
            or DEFAULT_SETTINGS_PATH,
            user_agent=os.getenv("PHIRA_USER_AGENT", "").strip(),
        )

    @property
    def effective_user_agent(self) -> str:
        return self.user_agent or _default_user_agent()

    def with_overrides(
        self,
        *,
        api_url: str | None = None,
        settings_path: str | None = None,
    ) -> Self:
        """Return a new config with specified overrides (for CLI options)."""
        return replace(
            self,
            api_url=self.api_url if api_url is None else api_url.strip().rstrip("/"),
            settings_path=self.settings_path if settings_path is None else settings_path.strip(),
        )

    def with_file_overrides(self, file_config: ClientConfigFile) -> Self:
        """Return a new config with config-file values overriding env/default values."""
        return replace(
            self,
            api_url=self.api_url if file_config.api_url is None else file_config.api_url,
            ca_bundle_path=self.ca_bundle_path
            if file_config.ca_bundle_path is None
            else file_config.ca_bundle_path,
            settings_path=self.settings_path
            if file_config.settings_path is None
            else file_config.settings_path,
            user_agent=self.user_agent
            if file_config.user_agent is None
            else file_config.user_agent,
        )


def _validate_api_url(value: str) -> None:
    if not value.startswith(("http://", "https://")):
        raise ApiUrlError(value)
