"""
Tests for the shortcode parser
"""

import pytest

from translatable.utils.shortcodes import ShortcodeParser, parse_attributes


@pytest.fixture
def parser():
    parser = ShortcodeParser()
    parser.register("b", lambda attributes, content: f"<strong>{content}</strong>")
    parser.register("image", lambda attributes, content: f'<img src="{attributes["src"]}" alt="{attributes.get("alt", "")}">')
    return parser


class TestParseAttributes:
    def test_quoting_styles(self):
        assert parse_attributes(' a="one two" b=\'three\' c=four') == {"a": "one two", "b": "three", "c": "four"}

    def test_empty(self):
        assert parse_attributes("") == {}


class TestShortcodeParser:
    def test_enclosing(self, parser):
        assert parser.parse("Hello [b]world[/b]!") == "Hello <strong>world</strong>!"

    def test_self_closing(self, parser):
        assert parser.parse('[image src="/a.png" alt="A"]') == '<img src="/a.png" alt="A">'

    def test_unregistered_is_untouched(self, parser):
        assert parser.parse("[unknown]text[/unknown]") == "[unknown]text[/unknown]"

    def test_empty_values(self, parser):
        assert parser.parse(None) == ""
        assert parser.parse("") == ""

    def test_register_and_unregister(self, parser):
        assert parser.is_registered("b")
        parser.unregister("b")
        assert not parser.is_registered("b")
        assert parser.parse("[b]x[/b]") == "[b]x[/b]"
