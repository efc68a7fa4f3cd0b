"""
Locale service

Request-scoped locale state plus the locale configuration the translation
engine reads: default locale, allowed locales and the locales that
already have content.  The current locale lives in a ContextVar that the
language middleware sets per request.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token

from translatable.config import Settings, settings as default_settings
from translatable.exceptions import InvalidLocaleError
from translatable.i18n.locale import language_display_name, validate_locale

logger = logging.getLogger(__name__)

current_locale_var: ContextVar[str | None] = ContextVar("current_locale", default=None)

ContentLocalesProvider = Callable[[], dict[str, str]]


class LocaleService:
    """Locale state and configuration consumed by the translation engine."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or default_settings
        self._content_locales_provider: ContentLocalesProvider | None = None

    # ── Capability ────────────────────────────────────────────────────────────

    def is_enabled(self) -> bool:
        """Return True when translation support is switched on and usable."""
        return bool(self.settings.translations_enabled and self.settings.default_locale)

    # ── Default / current locale ──────────────────────────────────────────────

    def default_locale(self) -> str:
        return self.settings.default_locale

    def current_locale(self) -> str:
        return current_locale_var.get() or self.default_locale()

    def set_current_locale(self, locale: str) -> Token:
        if not self.validate_locale(locale):
            raise InvalidLocaleError(locale)
        return current_locale_var.set(locale)

    def reset_current_locale(self, token: Token) -> None:
        current_locale_var.reset(token)

    @contextmanager
    def using_locale(self, locale: str) -> Iterator[str]:
        """Temporarily switch the current locale."""
        token = self.set_current_locale(locale)
        try:
            yield locale
        finally:
            self.reset_current_locale(token)

    # ── Locale lists ──────────────────────────────────────────────────────────

    def allowed_locales(self) -> list[str] | None:
        """Globally allowed locales, or None when no restriction is configured."""
        allowed = self.settings.allowed_locales
        return list(allowed) if allowed is not None else None

    def set_content_locales_provider(self, provider: ContentLocalesProvider | None) -> None:
        self._content_locales_provider = provider

    def existing_content_locales(self) -> dict[str, str]:
        """Locales that already have content, mapped to their display names.

        Without a provider only the default locale is known to have content.
        """
        if self._content_locales_provider is not None:
            return dict(self._content_locales_provider())
        default = self.default_locale()
        return {default: self.language_display_name(default, native=False) or default}

    # ── Validation / names ────────────────────────────────────────────────────

    def validate_locale(self, locale: object) -> bool:
        return validate_locale(locale)

    def language_display_name(self, code: str, native: bool = True) -> str | None:
        return language_display_name(code, native)
