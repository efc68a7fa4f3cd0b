"""
Column-key codec

A translated value lives in a sibling column whose name combines the base
field and the locale: ``Title`` + ``fr_FR`` → ``Title__fr_FR``.  Values of
the default locale live in the base column itself, so the default locale
is never suffixed.

The separator is a reserved token: base field names must not contain it,
otherwise ``basename``/``locale_of`` cannot recover the parts.
"""

from __future__ import annotations

DEFAULT_SEPARATOR = "__"


def localized_field(
    field: str,
    locale: str,
    default_locale: str,
    separator: str = DEFAULT_SEPARATOR,
) -> str:
    """Return the column key storing *field* in *locale*.

    ex: ("Description", "it_IT", "en_US") → "Description__it_IT"
        ("Description", "en_US", "en_US") → "Description"
    """
    if locale == default_locale:
        return field
    return f"{field}{separator}{locale}"


def basename(key: str, separator: str = DEFAULT_SEPARATOR) -> str:
    """Return the base field of a column key ("Description__fr_FR" → "Description").

    A key without separator is returned unchanged.
    """
    return key.split(separator)[0]


def locale_of(key: str, separator: str = DEFAULT_SEPARATOR) -> str:
    """Return the locale part of a column key ("Description__fr_FR" → "fr_FR").

    A key without separator is returned unchanged.
    """
    return key.split(separator)[-1]


def is_localized_key(key: str, separator: str = DEFAULT_SEPARATOR) -> bool:
    """Return True when *key* carries a locale suffix."""
    return separator in key
