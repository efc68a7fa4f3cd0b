"""
Tests for type tags and storage kinds
"""

import pytest
from sqlalchemy import Boolean, Date, DateTime, Enum, Float, Integer, Numeric, String, Text

from translatable.core.storage import (
    HTMLText,
    HTMLVarchar,
    StorageKind,
    Widget,
    column_type_for,
    parse_type_tag,
    strip_type_parameters,
    type_tag_for,
)


class TestTypeTags:
    def test_strip_parameters(self):
        assert strip_type_parameters("Varchar(255)") == "Varchar"
        assert strip_type_parameters("Decimal(9,2)") == "Decimal"
        assert strip_type_parameters("HTMLText") == "HTMLText"

    def test_parse_with_parameters(self):
        tag = parse_type_tag("Varchar(255)")
        assert tag.name == "Varchar"
        assert tag.params == ("255",)
        assert tag.kind is StorageKind.VARCHAR
        assert str(tag) == "Varchar(255)"

    def test_parse_multiple_parameters(self):
        tag = parse_type_tag("Decimal(9, 2)")
        assert tag.params == ("9", "2")
        assert tag.kind is StorageKind.DECIMAL

    def test_kind_is_case_insensitive(self):
        assert parse_type_tag("htmltext").kind is StorageKind.HTML_TEXT

    def test_unknown_kind(self):
        assert parse_type_tag("Geometry").kind is StorageKind.OTHER
        assert parse_type_tag("").kind is StorageKind.OTHER


class TestWidgets:
    @pytest.mark.parametrize(
        ("tag", "widget"),
        [
            ("Varchar(255)", Widget.TEXT),
            ("HTMLVarchar(100)", Widget.TEXT),
            ("Text", Widget.TEXTAREA),
            ("HTMLText", Widget.HTML_EDITOR),
            ("Int", Widget.HTML_EDITOR),
            ("Geometry", Widget.HTML_EDITOR),
        ],
    )
    def test_widget_for_kind(self, tag, widget):
        assert parse_type_tag(tag).kind.widget is widget


class TestColumnTypes:
    @pytest.mark.parametrize(
        ("column_type", "tag"),
        [
            (String(255), "Varchar(255)"),
            (String(), "Varchar"),
            (Text(), "Text"),
            (HTMLText(), "HTMLText"),
            (HTMLVarchar(80), "HTMLVarchar(80)"),
            (Integer(), "Int"),
            (Boolean(), "Boolean"),
            (Float(), "Float"),
            (Numeric(9, 2), "Decimal(9,2)"),
            (Date(), "Date"),
            (DateTime(), "Datetime"),
            (Enum("a", "b", name="choice"), "Enum"),
        ],
    )
    def test_type_tag_for(self, column_type, tag):
        assert type_tag_for(column_type) == tag

    def test_column_type_for_varchar_keeps_length(self):
        column_type = column_type_for("Varchar(120)")
        assert isinstance(column_type, String)
        assert column_type.length == 120

    def test_column_type_for_rich_text(self):
        assert isinstance(column_type_for("HTMLText"), HTMLText)
        assert isinstance(column_type_for("HTMLVarchar(50)"), HTMLVarchar)

    def test_column_type_for_decimal(self):
        column_type = column_type_for("Decimal(9,2)")
        assert isinstance(column_type, Numeric)
        assert (column_type.precision, column_type.scale) == (9, 2)

    def test_unknown_type_is_text(self):
        assert isinstance(column_type_for("Geometry"), Text)
        assert isinstance(column_type_for("Enum"), Text)
