"""
Storage kinds

Schemas declare columns with SQLAlchemy types; the translation engine
reasons about them through string type tags ("Varchar(255)", "Text",
"HTMLText") that can be compared against the configured default
translatable types.  This module converts column types to tags, parses
tags back into a closed set of storage kinds, and rebuilds a column type
for every derived translation column.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Enum,
    Float,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.types import TypeDecorator, TypeEngine

_TAG_PATTERN = re.compile(r"^\s*([A-Za-z_][A-Za-z0-9_]*)\s*(?:\((.*)\))?\s*$")


# ── Rich-text column types ────────────────────────────────────────────────────


class HTMLText(TypeDecorator):
    """Long rich-text (HTML) content stored as TEXT."""

    impl = Text
    cache_ok = True


class HTMLVarchar(TypeDecorator):
    """Short rich-text (HTML) content stored as VARCHAR."""

    impl = String
    cache_ok = True


# ── Storage kinds ─────────────────────────────────────────────────────────────


class Widget(str, enum.Enum):
    """Editable widget implied by a storage kind."""

    TEXT = "text"
    TEXTAREA = "textarea"
    HTML_EDITOR = "htmleditor"


class StorageKind(str, enum.Enum):
    VARCHAR = "Varchar"
    HTML_VARCHAR = "HTMLVarchar"
    TEXT = "Text"
    HTML_TEXT = "HTMLText"
    INT = "Int"
    BOOLEAN = "Boolean"
    DECIMAL = "Decimal"
    FLOAT = "Float"
    DATE = "Date"
    DATETIME = "Datetime"
    ENUM = "Enum"
    OTHER = "Other"

    @classmethod
    def from_name(cls, name: str) -> StorageKind:
        lowered = name.lower()
        for kind in cls:
            if kind.value.lower() == lowered:
                return kind
        return cls.OTHER

    @property
    def widget(self) -> Widget:
        """Widget used to edit a value of this kind; rich editor for anything unrecognized."""
        if self in (StorageKind.VARCHAR, StorageKind.HTML_VARCHAR):
            return Widget.TEXT
        if self is StorageKind.TEXT:
            return Widget.TEXTAREA
        return Widget.HTML_EDITOR


@dataclass(frozen=True)
class TypeTag:
    """A parsed type tag such as ``Varchar(255)``."""

    name: str
    params: tuple[str, ...] = ()

    @property
    def kind(self) -> StorageKind:
        return StorageKind.from_name(self.name)

    def __str__(self) -> str:
        if self.params:
            return f"{self.name}({','.join(self.params)})"
        return self.name


def strip_type_parameters(tag: str) -> str:
    """Remove a parenthesised parameter suffix ("Varchar(255)" → "Varchar")."""
    position = tag.find("(")
    return tag if position == -1 else tag[:position]


def parse_type_tag(tag: str) -> TypeTag:
    match = _TAG_PATTERN.match(tag or "")
    if match is None:
        return TypeTag(name=strip_type_parameters(tag or "").strip())
    name, raw = match.groups()
    params = tuple(p.strip() for p in raw.split(",") if p.strip()) if raw else ()
    return TypeTag(name=name, params=params)


def type_tag_for(column_type: TypeEngine) -> str:
    """Describe a SQLAlchemy column type as a type tag."""
    # Order matters: Enum is a String subclass and TypeDecorators wrap others
    if isinstance(column_type, HTMLText):
        return StorageKind.HTML_TEXT.value
    if isinstance(column_type, HTMLVarchar):
        length = column_type.impl.length
        return f"{StorageKind.HTML_VARCHAR.value}({length})" if length else StorageKind.HTML_VARCHAR.value
    if isinstance(column_type, Enum):
        return StorageKind.ENUM.value
    if isinstance(column_type, Text):
        return StorageKind.TEXT.value
    if isinstance(column_type, String):
        length = column_type.length
        return f"{StorageKind.VARCHAR.value}({length})" if length else StorageKind.VARCHAR.value
    if isinstance(column_type, Boolean):
        return StorageKind.BOOLEAN.value
    if isinstance(column_type, Integer):
        return StorageKind.INT.value
    if isinstance(column_type, Float):
        return StorageKind.FLOAT.value
    if isinstance(column_type, Numeric):
        if column_type.precision is not None and column_type.scale is not None:
            return f"{StorageKind.DECIMAL.value}({column_type.precision},{column_type.scale})"
        return StorageKind.DECIMAL.value
    if isinstance(column_type, DateTime):
        return StorageKind.DATETIME.value
    if isinstance(column_type, Date):
        return StorageKind.DATE.value
    return type(column_type).__name__


def column_type_for(tag: str) -> TypeEngine:
    """Build the SQLAlchemy type of a derived column from its base type tag."""
    parsed = parse_type_tag(tag)
    kind = parsed.kind
    length = int(parsed.params[0]) if parsed.params and parsed.params[0].isdigit() else None

    if kind is StorageKind.VARCHAR:
        return String(length)
    if kind is StorageKind.HTML_VARCHAR:
        return HTMLVarchar(length)
    if kind is StorageKind.TEXT:
        return Text()
    if kind is StorageKind.HTML_TEXT:
        return HTMLText()
    if kind is StorageKind.INT:
        return Integer()
    if kind is StorageKind.BOOLEAN:
        return Boolean()
    if kind is StorageKind.FLOAT:
        return Float()
    if kind is StorageKind.DECIMAL:
        if len(parsed.params) == 2:
            return Numeric(int(parsed.params[0]), int(parsed.params[1]))
        return Numeric()
    if kind is StorageKind.DATE:
        return Date()
    if kind is StorageKind.DATETIME:
        return DateTime()
    # Enum choices and unknown types are stored as free text
    return Text()
