"""
Translatable engine

Wires the vertical-translation components together and connects them to
the SQLAlchemy models of the application:

    registry        SQLAlchemy declarative classes as translatable schemas
    cache           memoized materializations, registries and arguments
    locale_resolver target locales per schema
    field_resolver  translatable fields per schema
    collector       the schema materializer
    permissions     per-locale edit authorization

Models opt in with the ``@translatable`` class decorator (or
``engine.extend``).  Extending a model materializes its derived columns,
appends them to the mapped table and installs the write guard as
``before_insert`` / ``before_update`` mapper events.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from sqlalchemy import event

from translatable.config import Settings, settings as default_settings
from translatable.core.cache import CollectorCache, schema_key
from translatable.core.codec import localized_field
from translatable.core.collector import SchemaMaterializer
from translatable.core.locales import TargetLocaleResolver
from translatable.core.schema import SQLAlchemySchemaRegistry
from translatable.core.selection import FieldSelectionResolver
from translatable.i18n.context import LocaleService
from translatable.services.identity_service import IdentityService, identity_service
from translatable.services.permission_service import TranslationPermissionGate
from translatable.services.translation_service import TranslatableObject
from translatable.utils.shortcodes import ShortcodeParser, get_active_parser

logger = logging.getLogger(__name__)


class TranslatableEngine:
    def __init__(
        self,
        settings: Settings | None = None,
        *,
        locale_service: LocaleService | None = None,
        identity: IdentityService | None = None,
        registry: Any = None,
        cache: CollectorCache | None = None,
        shortcode_parser: ShortcodeParser | None = None,
    ) -> None:
        self.settings = settings or default_settings
        self.separator = self.settings.column_separator
        self.locale_service = locale_service or LocaleService(self.settings)
        self.identity = identity or identity_service
        self.registry = registry if registry is not None else SQLAlchemySchemaRegistry()
        self.cache = cache or CollectorCache()
        self.shortcodes = shortcode_parser or get_active_parser()

        self.locale_resolver = TargetLocaleResolver(
            self.registry, self.locale_service, configured=self.settings.translatable_locales
        )
        self.field_resolver = FieldSelectionResolver(
            self.registry, self.cache, self.settings.default_field_types, self.separator
        )
        self.collector = SchemaMaterializer(
            self.registry,
            self.cache,
            self.locale_resolver,
            self.field_resolver,
            self.locale_service,
            self.separator,
        )
        self.permissions = TranslationPermissionGate(self.locale_service, self.identity, self.settings)

        self._extended: list[type] = []
        self._extended_fields: dict[type, tuple[str, ...]] = {}
        self._guarded: set[type] = set()

    # ── Configuration ─────────────────────────────────────────────────────────

    def configure_locales(self, locales: Iterable[str] | None) -> None:
        """Set the locales to translate into; applies to schemas materialized afterwards."""
        self.locale_resolver.configure(locales)

    def configure_default_field_types(self, types: Iterable[str] | None) -> None:
        self.field_resolver.configure_default_field_types(types)

    def reset(self) -> None:
        """Clear the collector cache, registries, arguments and locks.

        Extended models keep their registration and are materialized again,
        with the fields they were extended with, on the next lookup.
        """
        self.cache.reset()
        logger.debug("Translatable engine caches reset")

    # ── Materialization ───────────────────────────────────────────────────────

    def materialize(self, schema: type, fields: Iterable[str] | None = None) -> dict[str, str]:
        return self.collector.materialize(schema, tuple(fields) if fields else None)

    def collect(self, schema: type) -> dict[str, str]:
        return self.collector.collect(schema)

    def extend(self, schema: type, *fields: str) -> type:
        """Make a mapped class translatable.

        ``fields`` restricts the translation to the named fields; without
        them every field of a default translatable type is translated.
        """
        self.registry.register(schema)
        shape = self.materialize(schema, fields)
        if shape:
            self.registry.apply_columns(schema, shape)
        self._install_write_guard(schema)
        if schema not in self._extended:
            self._extended.append(schema)
        self._extended_fields[schema] = tuple(fields)
        logger.info("Registered translatable model %s (%d translation columns)", schema.__name__, len(shape))
        return schema

    def translatable(self, *fields: Any) -> Callable[[type], type] | type:
        """Class decorator form of ``extend``.

        Usable bare (``@translatable``) or with field names
        (``@translatable("title", "body")``).
        """
        if len(fields) == 1 and isinstance(fields[0], type):
            return self.extend(fields[0])

        def decorator(schema: type) -> type:
            return self.extend(schema, *fields)

        return decorator

    def registered_schemas(self) -> list[type]:
        return list(self._extended)

    def is_translatable(self, schema: type) -> bool:
        return any(ancestor in self._extended for ancestor in self.registry.ancestry(schema))

    # ── Field lookup ──────────────────────────────────────────────────────────

    def target_locales(self, schema: type | None = None) -> list[str]:
        """Locales with derived columns (default locale excluded)."""
        return self.locale_resolver.resolve(schema)

    def candidates(self, schema: type | None = None) -> list[str]:
        """Locales to present for editing (default locale included when configured)."""
        return self.locale_resolver.candidates(schema)

    def localized_field(self, field: str, locale: str | None = None) -> str:
        """Column key of *field* in *locale* (the current locale when omitted)."""
        if locale is None:
            locale = self.locale_service.current_locale()
        return localized_field(field, locale, self.locale_service.default_locale(), self.separator)

    def localized_class_fields(self, schema: type) -> list[str]:
        """Translated base fields of *schema* and its ancestors, root first."""
        fields: list[str] = []
        for ancestor in self.registry.ancestry(schema):
            self._ensure_materialized(ancestor)
            localized = self.cache.localized_fields(ancestor)
            if not localized:
                continue
            for field in localized:
                if field not in fields:
                    fields.append(field)
        return fields

    def collected_fields(self, schema: type) -> dict[str, str]:
        """Derived columns of *schema* and its ancestors."""
        collected: dict[str, str] = {}
        for ancestor in self.registry.ancestry(schema):
            self._ensure_materialized(ancestor)
            collected.update(self.cache.get(ancestor) or {})
        return collected

    def _ensure_materialized(self, schema: type) -> None:
        if schema in self._extended and not self.cache.has(schema):
            self.materialize(schema, self._extended_fields.get(schema))

    # ── Records ───────────────────────────────────────────────────────────────

    def wrap(self, obj: Any) -> TranslatableObject:
        return TranslatableObject(obj, self)

    def can_translate(self, actor: Any, locale: str) -> bool:
        return self.permissions.can_translate(actor, locale)

    # ── Write guard ───────────────────────────────────────────────────────────

    def _install_write_guard(self, schema: type) -> None:
        if any(ancestor in self._guarded for ancestor in self.registry.ancestry(schema)):
            return
        event.listen(schema, "before_insert", self._before_write, propagate=True)
        event.listen(schema, "before_update", self._before_write, propagate=True)
        self._guarded.add(schema)
        logger.debug("Write guard installed on %s", schema_key(schema))

    def _before_write(self, mapper, connection, target) -> None:
        self.wrap(target).check_write_permissions()


# ── Global singleton ──────────────────────────────────────────────────────────
default_engine = TranslatableEngine()


def get_engine() -> TranslatableEngine:
    return default_engine


def translatable(*fields: Any) -> Callable[[type], type] | type:
    """Register a model with the application's translatable engine."""
    return get_engine().translatable(*fields)
