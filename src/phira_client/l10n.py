"""Locales understood by the Phira API.

The first entry is the fallback `Accept-Language` when no locale is configured.
"""

from __future__ import annotations

SUPPORTED_LOCALES: tuple[str, ...] = (
    "zh-CN",
    "zh-TW",
    "en-US",
    "ja-JP",
    "ko-KR",
    "ru-RU",
    "vi-VN",
    "id-ID",
    "pt-BR",
    "de-DE",
)

DEFAULT_LOCALE = SUPPORTED_LOCALES[0]


def resolve_locale(language: str | None) -> str:
    """Return `language` when set, otherwise the default locale."""
    if language is None:
        return DEFAULT_LOCALE
    text = language.strip()
    return text or DEFAULT_LOCALE
