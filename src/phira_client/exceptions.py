"""Custom exceptions for the Phira API client.

Every failure a caller is expected to handle derives from `PhiraClientError`.
`CacheRegistryError` is the exception: it signals a programming defect and is
kept outside the hierarchy so broad handlers never hide it.
"""

from __future__ import annotations


class PhiraClientError(Exception):
    """Base exception for all client errors."""

    pass


class TransportError(PhiraClientError):
    """Raised when a request cannot be built or delivered.

    Covers connection, TLS and header-construction failures. Never retried.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)

    @classmethod
    def for_invalid_header(cls, header: str) -> TransportError:
        return cls(f"invalid value for header {header}")

    @classmethod
    def for_missing_ca_bundle(cls, api_url: str) -> TransportError:
        return cls(f"no CA bundle configured for {api_url}; set PHIRA_CA_BUNDLE")

    @classmethod
    def for_unreadable_ca_bundle(cls, path: str) -> TransportError:
        return cls(f"CA bundle not found: {path}")


class RequestFailedError(PhiraClientError):
    """Raised when the server answers with a non-success status."""

    def __init__(self, detail: str, status_code: int) -> None:
        self.detail = detail
        self.status_code = status_code
        super().__init__(f"request failed: {detail}")


class NotFoundError(PhiraClientError):
    """Raised when a by-id fetch reports the entity as absent."""

    def __init__(self, resource: str, object_id: int) -> None:
        self.resource = resource
        self.object_id = object_id
        super().__init__(f"entry not found: /{resource}/{object_id}")


class DeserializationError(PhiraClientError):
    """Raised when a response body does not match the expected shape."""

    def __init__(self, path: str, expected: str) -> None:
        self.path = path
        self.expected = expected
        super().__init__(f"unexpected response from {path}: expected {expected}")


class SettingsFileError(PhiraClientError):
    """Raised when the persisted settings file cannot be understood."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Settings file is not valid: {path}")


class ConfigFileError(PhiraClientError):
    """Base exception for client config file errors."""

    pass


class ConfigFileNotFoundError(ConfigFileError):
    """Raised when a config file path does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Config file not found: {path}")


class ConfigFileParseError(ConfigFileError):
    """Raised when a config file cannot be parsed as TOML."""

    def __init__(self, path: str, details: str) -> None:
        super().__init__(f"Config file could not be parsed: {path} ({details})")


class ConfigFileValidationError(ConfigFileError):
    """Raised when a config file fails schema validation."""

    def __init__(self, path: str, details: str) -> None:
        super().__init__(f"Config file is invalid: {path} ({details})")


class CacheRegistryError(RuntimeError):
    """Raised when the type registry hands back a cache built for another type.

    This cannot happen through the public API; seeing it means the registry
    storage was tampered with.
    """

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(f"Object cache registry corrupted: expected {expected}, found {actual}")
