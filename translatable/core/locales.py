"""
Target locale resolution

Which locales get their own columns, first match wins:

1. locales configured on the schema class (``__translatable_locales__``)
2. locales configured for the engine (``settings.translatable_locales``)
3. the globally allowed locales of the locale service
4. the locales that already have content

The default locale is removed from the result: its values live in the
base columns.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from translatable.core.schema import SchemaRegistry
from translatable.i18n.context import LocaleService

logger = logging.getLogger(__name__)


def normalize_locales(locales: Iterable[str] | None, locale_service: LocaleService) -> list[str] | None:
    """Drop invalid and duplicate locales; None when nothing valid remains."""
    if locales is None or isinstance(locales, str):
        return None
    result: list[str] = []
    for locale in locales:
        if not locale_service.validate_locale(locale):
            logger.warning("Ignoring invalid translation locale %r", locale)
            continue
        if locale not in result:
            result.append(locale)
    return result or None


class TargetLocaleResolver:
    def __init__(
        self,
        registry: SchemaRegistry,
        locale_service: LocaleService,
        configured: Iterable[str] | None = None,
    ) -> None:
        self.registry = registry
        self.locale_service = locale_service
        self.configured = normalize_locales(configured, locale_service)

    def configure(self, locales: Iterable[str] | None) -> None:
        """Explicitly set the engine-wide locales (None to fall back to the locale service)."""
        self.configured = normalize_locales(locales, self.locale_service)

    def candidates(self, schema: type | None = None) -> list[str]:
        """All locales to translate into, default locale included when configured."""
        if schema is not None:
            explicit = self.registry.explicit_config(schema, "translatable_locales")
            if isinstance(explicit, (list, tuple)):
                return normalize_locales(explicit, self.locale_service) or []
        if self.configured is not None:
            return list(self.configured)
        allowed = self.locale_service.allowed_locales()
        if allowed is not None:
            return normalize_locales(allowed, self.locale_service) or []
        return list(self.locale_service.existing_content_locales().keys())

    def resolve(self, schema: type | None = None) -> list[str]:
        """Locales that need derived columns: the candidates minus the default locale."""
        default = self.locale_service.default_locale()
        return [locale for locale in self.candidates(schema) if locale != default]
