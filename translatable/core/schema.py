"""
Schema registry: SQLAlchemy declarative models as translatable schemas

The translation engine needs three things from the host ORM: the base
columns a class declares, the ancestry of mapped classes, and optional
static configuration.  It hands back the derived columns, which this
registry appends to the declarative class so they become part of the
persisted table.

Reading the declared columns goes through ``__mapper__.local_table`` and
never configures mappers, so a class can be materialized while other
mapped classes of the application are still being defined.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from sqlalchemy import Column

from translatable.core.storage import column_type_for, type_tag_for
from translatable.exceptions import SchemaConfigurationError

logger = logging.getLogger(__name__)


class SchemaRegistry(Protocol):
    """Interface the translation engine consumes from the host ORM."""

    def declared_fields(self, schema: type) -> dict[str, str]: ...

    def ancestry(self, schema: type) -> list[type]: ...

    def explicit_config(self, schema: type, key: str) -> Any: ...


def _mapper_of(schema: type):
    mapper = schema.__dict__.get("__mapper__") if isinstance(schema, type) else None
    if mapper is None:
        raise SchemaConfigurationError(
            f"{getattr(schema, '__name__', schema)!r} is not a mapped class",
            schema=getattr(schema, "__qualname__", str(schema)),
        )
    return mapper


class SQLAlchemySchemaRegistry:
    """SchemaRegistry backed by SQLAlchemy declarative mappings."""

    def __init__(self) -> None:
        self._registered: list[type] = []

    # ── Registration ──────────────────────────────────────────────────────────

    def register(self, schema: type) -> None:
        _mapper_of(schema)
        if schema not in self._registered:
            self._registered.append(schema)

    def registered(self) -> list[type]:
        return list(self._registered)

    def is_registered(self, schema: type) -> bool:
        return schema in self._registered

    # ── Introspection ─────────────────────────────────────────────────────────

    def declared_fields(self, schema: type) -> dict[str, str]:
        """Map the columns of the class's own table to type tags.

        Single-table subclasses share their parent's table and declare
        no columns of their own.
        """
        mapper = _mapper_of(schema)
        table = mapper.local_table
        if mapper.inherits is not None and mapper.inherits.local_table is table:
            return {}
        return {column.key: type_tag_for(column.type) for column in table.columns}

    def ancestry(self, schema: type) -> list[type]:
        """Mapped classes in the MRO of *schema*, root first."""
        return [cls for cls in reversed(schema.__mro__) if cls.__dict__.get("__mapper__") is not None]

    def explicit_config(self, schema: type, key: str) -> Any:
        """Static configuration declared as ``__<key>__`` on the class or a parent."""
        return getattr(schema, f"__{key}__", None)

    # ── Storage shape ─────────────────────────────────────────────────────────

    def apply_columns(self, schema: type, fields: dict[str, str]) -> list[str]:
        """Append one nullable column per derived key to the mapped class.

        Returns the keys that were added; existing columns are left alone.
        """
        table = schema.__table__
        added: list[str] = []
        for key, tag in fields.items():
            if key in table.columns:
                continue
            # Declarative classes append the column to the table and the mapper
            setattr(schema, key, Column(key, column_type_for(tag), nullable=True))
            added.append(key)
        if added:
            logger.debug("Added %d translation columns to %s: %s", len(added), table.name, ", ".join(added))
        return added
