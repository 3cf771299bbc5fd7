"""
cli/i18n/__init__.py - Internationalization (i18n) Module

Translates dashboard and CLI text. English (en) is the default language,
Korean (ko) is selected with ``--lang ko``.

Architecture:
    - Messages live in cli/i18n/messages, one module per namespace (nav, ui, cli)
    - The active language is held in a ContextVar, set once at start-up
    - Placeholders use str.format syntax; unknown placeholders are left intact

Usage:
    from cli.i18n import t, set_lang

    t("nav.no_item_selected")              # "No item selected"
    t("ui.items_count", count=5)           # "5 items"
    t("cli.unknown_resource", resource="x")

    set_lang("ko")
    t("ui.loading")                        # "불러오는 중..."
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Any

SUPPORTED_LANGS = ("ko", "en")
DEFAULT_LANG = "en"

_current_lang: ContextVar[str] = ContextVar("lang", default=DEFAULT_LANG)


class _KeepMissing(dict):
    """format_map mapping that renders unknown placeholders unchanged."""

    def __missing__(self, name: str) -> str:
        return "{" + name + "}"


def _resolve_lang(lang: str | None) -> str:
    if lang is None:
        lang = _current_lang.get()
    return lang if lang in SUPPORTED_LANGS else DEFAULT_LANG


def get_lang() -> str:
    """Get the active language."""
    return _current_lang.get()


def set_lang(lang: str) -> None:
    """Set the active language. Unsupported codes select the default."""
    _current_lang.set(_resolve_lang(lang))


def t(message_id: str, lang: str | None = None, **params: Any) -> str:
    """Translate a ``namespace.name`` message id.

    Args:
        message_id: Registered message id (e.g., "nav.readonly_blocked")
        lang: Optional language override
        **params: Values for the message's placeholders

    Returns:
        The translated text, or message_id itself when it is not registered.
        A message missing the requested language falls back to English.
    """
    from cli.i18n.messages import MESSAGES

    translations = MESSAGES.get(message_id)
    if translations is None:
        return message_id

    text = translations.get(_resolve_lang(lang)) or translations.get(DEFAULT_LANG, message_id)
    if not params:
        return text
    try:
        return text.format_map(_KeepMissing(params))
    except (ValueError, IndexError):
        # Malformed template: show it unformatted
        return text


__all__ = [
    "t",
    "get_lang",
    "set_lang",
    "SUPPORTED_LANGS",
    "DEFAULT_LANG",
]
