"""
Collector cache

Process-wide state of the translation engine, kept in one service object
so it can be injected and reset between tests:

- ``collected``          schema → {derived column key: type tag}
- ``localized_fields``   schema → {base field: [derived column keys]}
- ``arguments``          schema → explicit list of translatable fields
- in-progress markers    schemas whose materialization is on the call stack

Schemas are keyed by their fully-qualified class name.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)


def schema_key(schema: type | str) -> str:
    """Return the cache key of a schema class ("module.QualName")."""
    if isinstance(schema, str):
        return schema
    return f"{schema.__module__}.{schema.__qualname__}"


class CollectorCache:
    """Memoized materialization results plus the re-entrancy lock set."""

    def __init__(self) -> None:
        self._collected: dict[str, dict[str, str]] = {}
        self._localized_fields: dict[str, dict[str, list[str]]] = {}
        self._arguments: dict[str, list[str]] = {}
        self._in_progress: set[str] = set()

    # ── Collected columns ─────────────────────────────────────────────────────

    def get(self, schema: type | str) -> dict[str, str] | None:
        return self._collected.get(schema_key(schema))

    def has(self, schema: type | str) -> bool:
        return schema_key(schema) in self._collected

    def store(self, schema: type | str, fields: dict[str, str]) -> None:
        self._collected[schema_key(schema)] = fields

    # ── Re-entrancy lock ──────────────────────────────────────────────────────

    def is_locked(self, schema: type | str) -> bool:
        return schema_key(schema) in self._in_progress

    @contextmanager
    def locked(self, schema: type | str) -> Iterator[None]:
        """Mark *schema* as being materialized for the duration of the block."""
        key = schema_key(schema)
        self._in_progress.add(key)
        try:
            yield
        finally:
            self._in_progress.discard(key)

    # ── Localized field registry ──────────────────────────────────────────────

    def register_localized_fields(self, schema: type | str, fields: dict[str, list[str]]) -> None:
        self._localized_fields[schema_key(schema)] = {field: list(keys) for field, keys in fields.items()}

    def localized_fields(self, schema: type | str) -> dict[str, list[str]] | None:
        return self._localized_fields.get(schema_key(schema))

    # ── Translation arguments ─────────────────────────────────────────────────

    def set_arguments(self, schema: type | str, fields: list[str] | tuple[str, ...]) -> None:
        self._arguments[schema_key(schema)] = list(fields)

    def arguments(self, schema: type | str) -> list[str] | None:
        return self._arguments.get(schema_key(schema))

    # ── Invalidation ──────────────────────────────────────────────────────────

    def invalidate(self, schema: type | str) -> None:
        """Forget the materialization of one schema (arguments are kept)."""
        key = schema_key(schema)
        self._collected.pop(key, None)
        self._localized_fields.pop(key, None)
        logger.debug("Collector cache invalidated for %s", key)

    def reset(self) -> None:
        """Clear every cache, lock and argument list."""
        self._collected.clear()
        self._localized_fields.clear()
        self._arguments.clear()
        self._in_progress.clear()
