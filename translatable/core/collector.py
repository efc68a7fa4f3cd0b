"""
Schema materializer (collector)

Computes the derived translation columns of a schema class: one column
per translatable field and non-default target locale.  Results are
memoized per class.  Reading the base columns goes back through the host
schema registry, which may ask for the class's storage shape again
before the first computation returns; an in-progress marker turns that
nested call into "no extra columns" instead of endless recursion.
"""

from __future__ import annotations

import logging
import sys

from translatable.core.cache import CollectorCache, schema_key
from translatable.core.codec import localized_field
from translatable.core.locales import TargetLocaleResolver
from translatable.core.schema import SchemaRegistry
from translatable.core.selection import FieldSelectionResolver
from translatable.exceptions import SchemaConfigurationError
from translatable.i18n.context import LocaleService

logger = logging.getLogger(__name__)


def _is_test_environment() -> bool:
    """Detect if running in a test environment."""
    return "pytest" in sys.modules


class SchemaMaterializer:
    def __init__(
        self,
        registry: SchemaRegistry,
        cache: CollectorCache,
        locale_resolver: TargetLocaleResolver,
        field_resolver: FieldSelectionResolver,
        locale_service: LocaleService,
        separator: str,
    ) -> None:
        self.registry = registry
        self.cache = cache
        self.locale_resolver = locale_resolver
        self.field_resolver = field_resolver
        self.locale_service = locale_service
        self.separator = separator
        self._capability_reported = False

    def materialize(self, schema: type, fields: list[str] | tuple[str, ...] | None = None) -> dict[str, str]:
        """Return the derived columns of *schema*, recording explicit *fields* first.

        Called by the host whenever it computes the persisted shape of the
        class; safe to call repeatedly and from within its own trigger.
        """
        if not self.locale_service.is_enabled():
            # remain silent during a test
            if not _is_test_environment() and not self._capability_reported:
                logger.warning("Translation support is not installed but required; %s gets no translations", schema_key(schema))
                self._capability_reported = True
            return {}

        if fields:
            self.cache.set_arguments(schema, fields)

        return self.collect(schema)

    def collect(self, schema: type) -> dict[str, str]:
        cached = self.cache.get(schema)
        if cached is not None:
            return dict(cached)

        if self.cache.is_locked(schema):
            logger.debug("Re-entrant materialization of %s, contributing no columns", schema_key(schema))
            return {}

        with self.cache.locked(schema):
            try:
                base_fields = self.registry.declared_fields(schema)
                fields_to_translate = self.field_resolver.resolve(schema, base_fields)
                locales = self.locale_resolver.resolve(schema)
            except SchemaConfigurationError as exc:
                logger.warning("Cannot materialize translations for %s: %s", schema_key(schema), exc.message)
                return {}

            default = self.locale_service.default_locale()
            additional: dict[str, str] = {}
            localized: dict[str, list[str]] = {}
            for field in fields_to_translate:
                localized[field] = []
                for locale in locales:
                    key = localized_field(field, locale, default, self.separator)
                    localized[field].append(key)
                    additional[key] = base_fields[field]

            self.cache.register_localized_fields(schema, localized)
            self.cache.store(schema, additional)

        logger.debug(
            "Materialized %d translation columns for %s (%d fields x %d locales)",
            len(additional),
            schema_key(schema),
            len(fields_to_translate),
            len(locales),
        )
        return dict(additional)
