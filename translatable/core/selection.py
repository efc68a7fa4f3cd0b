"""
Translatable field selection

A schema translates either the fields it names explicitly (through the
decorator arguments or ``__translatable_fields__``) or, by default, every
field whose type is one of the default translatable types.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from translatable.core.cache import CollectorCache
from translatable.core.codec import DEFAULT_SEPARATOR
from translatable.core.schema import SchemaRegistry
from translatable.core.storage import strip_type_parameters

logger = logging.getLogger(__name__)


class FieldSelectionResolver:
    def __init__(
        self,
        registry: SchemaRegistry,
        cache: CollectorCache,
        default_field_types: Iterable[str],
        separator: str = DEFAULT_SEPARATOR,
    ) -> None:
        self.registry = registry
        self.cache = cache
        self.default_field_types = list(default_field_types)
        self.separator = separator

    def configure_default_field_types(self, types: Iterable[str] | None) -> None:
        if isinstance(types, (list, tuple)):
            self.default_field_types = list(types)

    def arguments(self, schema: type) -> list[str] | None:
        """Explicit field list of a schema, if any."""
        arguments = self.cache.arguments(schema)
        if arguments:
            return arguments
        static = self.registry.explicit_config(schema, "translatable_fields")
        if isinstance(static, (list, tuple)) and static:
            return list(static)
        return None

    def resolve(self, schema: type, base_fields: dict[str, str]) -> list[str]:
        arguments = self.arguments(schema)
        if arguments:
            # unknown names are dropped silently
            selected = [field for field in arguments if field in base_fields]
        else:
            selected = [
                field
                for field, tag in base_fields.items()
                if strip_type_parameters(tag) in self.default_field_types
            ]
        return [field for field in selected if not self._is_reserved(field)]

    def _is_reserved(self, field: str) -> bool:
        if self.separator in field:
            logger.debug("Skipping field %r: contains the column separator %r", field, self.separator)
            return True
        return False
