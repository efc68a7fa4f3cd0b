"""
Translation Service: localized field access for a single record

``TranslatableObject`` wraps a record of a translatable schema and adds
the vertical-translation behaviour without touching the record's class:

    is_localized_field        is the base field translated at all
    localized_field_name      column key of a field in the current locale
    get_localized_value / T   read with optional default-locale fallback
    can_translate             may the actor edit a locale
    check_write_permissions   reject changed translations the actor may not edit

The write check runs from the SQLAlchemy ``before_insert`` /
``before_update`` mapper events installed by the engine; raising aborts
the whole flush.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import inspect as sa_inspect

from translatable.core.cache import schema_key
from translatable.exceptions import NotLocalizedFieldError, PermissionFailureError

if TYPE_CHECKING:
    from translatable.core.engine import TranslatableEngine

logger = logging.getLogger(__name__)


def is_empty(value: Any) -> bool:
    """A stored value counts as absent when it is None or blank text."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def is_changed(owner: Any, key: str) -> bool:
    """Return True when the attribute *key* of *owner* has unsaved changes.

    Uses SQLAlchemy's attribute history for mapped records and an
    ``is_changed(key)`` method for anything else.
    """
    state = sa_inspect(owner, raiseerr=False)
    if state is not None and hasattr(state, "attrs"):
        if key not in state.mapper.attrs:
            return False
        return state.attrs[key].history.has_changes()
    checker = getattr(owner, "is_changed", None)
    if callable(checker):
        return bool(checker(key))
    return False


class TranslatableObject:
    """Vertical-translation accessors for one record."""

    def __init__(self, owner: Any, engine: TranslatableEngine | None = None) -> None:
        if engine is None:
            # Deferred import avoids circular dependency at module load time
            from translatable.core.engine import get_engine

            engine = get_engine()
        self.owner = owner
        self.engine = engine

    @property
    def schema(self) -> type:
        return type(self.owner)

    # ── Field lookup ──────────────────────────────────────────────────────────

    def localized_fields(self) -> list[str]:
        """Base fields translated for this record's class, ancestors included."""
        return self.engine.localized_class_fields(self.schema)

    def is_localized_field(self, field: str) -> bool:
        return field in self.localized_fields()

    def localized_field_name(self, field: str) -> str:
        """Column key of *field* in the current locale."""
        if not self.is_localized_field(field):
            raise NotLocalizedFieldError(field, schema=schema_key(self.schema))
        return self.engine.localized_field(field)

    # ── Values ────────────────────────────────────────────────────────────────

    def get_localized_value(self, field: str, strict: bool = True, parse_shortcodes: bool = False) -> Any:
        """Return the value of *field* in the current locale.

        Args:
            field:            Base field name, e.g. "title".
            strict:           When False, an empty localized value falls back
                              to the default-locale value of the base field.
            parse_shortcodes: Expand shortcodes in the returned value.
        """
        key = self.localized_field_name(field)
        value = getattr(self.owner, key, None)
        if not strict and is_empty(value):
            value = getattr(self.owner, field, None)

        if parse_shortcodes and not is_empty(value):
            return self.engine.shortcodes.parse(str(value))
        return value

    def T(self, field: str, strict: bool = True, parse_shortcodes: bool = False) -> Any:
        """Template accessor, same as get_localized_value."""
        return self.get_localized_value(field, strict, parse_shortcodes)

    # ── Permissions ───────────────────────────────────────────────────────────

    def can_translate(self, actor: Any, locale: str) -> bool:
        return self.engine.can_translate(actor, locale)

    def check_write_permissions(self) -> None:
        """Raise PermissionFailureError if a changed locale is not editable by the actor."""
        fields = self.localized_fields()
        if not fields:
            return

        locales = self.engine.target_locales(self.schema)
        for field in fields:
            for locale in locales:
                key = self.engine.localized_field(field, locale)
                if is_changed(self.owner, key) and not self.can_translate(None, locale):
                    logger.warning(
                        "Rejected write of %s.%s: locale %s not permitted",
                        self.schema.__name__,
                        key,
                        locale,
                    )
                    raise PermissionFailureError(locale)
