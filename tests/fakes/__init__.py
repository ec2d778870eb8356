"""Exports for test fakes."""

from .filesystem import InMemoryFileSystem
from .http import FakeHttpBackend, FakeSession, json_response, text_response
from .settings import InMemorySettingsStore

__all__ = [
    "FakeHttpBackend",
    "FakeSession",
    "InMemoryFileSystem",
    "InMemorySettingsStore",
    "json_response",
    "text_response",
]
