"""Concrete infrastructure implementations and shared helpers."""

from .filesystem import LocalFileSystem
from .pipeline import decode, error_detail, execute, is_null_body, is_success, receive
from .settings import JsonSettingsStore, StoredSettings
from .transport import PreparedCall, SessionFactory, Transport

__all__ = [
    "JsonSettingsStore",
    "LocalFileSystem",
    "PreparedCall",
    "SessionFactory",
    "StoredSettings",
    "Transport",
    "decode",
    "error_detail",
    "execute",
    "is_null_body",
    "is_success",
    "receive",
]
