"""
Tests for the column-key codec
"""

import pytest

from translatable.core.codec import DEFAULT_SEPARATOR, basename, is_localized_key, locale_of, localized_field

LOCALES = ["fr_FR", "de_DE", "zh_Hant_TW", "es"]
FIELDS = ["Title", "Description", "meta_title", "x"]


class TestLocalizedField:
    def test_default_locale_is_not_suffixed(self):
        assert localized_field("Title", "en_US", "en_US") == "Title"

    def test_other_locale_is_suffixed(self):
        assert localized_field("Description", "it_IT", "en_US") == "Description__it_IT"

    def test_custom_separator(self):
        assert localized_field("Title", "fr_FR", "en_US", separator="--") == "Title--fr_FR"

    def test_default_separator(self):
        assert DEFAULT_SEPARATOR == "__"


class TestDecoding:
    @pytest.mark.parametrize("field", FIELDS)
    @pytest.mark.parametrize("locale", LOCALES)
    def test_round_trip(self, field, locale):
        key = localized_field(field, locale, "en_US")
        assert basename(key) == field
        assert locale_of(key) == locale

    def test_basename_without_separator(self):
        assert basename("Title") == "Title"

    def test_locale_of_without_separator_returns_key(self):
        assert locale_of("Title") == "Title"

    def test_basename_uses_first_segment(self):
        assert basename("a__b__fr_FR") == "a"
        assert locale_of("a__b__fr_FR") == "fr_FR"

    def test_is_localized_key(self):
        assert is_localized_key("Title__fr_FR") is True
        assert is_localized_key("Title") is False
