"""
Language Service

Content languages of the site and a quick language navigation built from
them (one entry per language, linking to the current record in that
language).
"""

from __future__ import annotations

import html
import logging
from collections.abc import Callable
from typing import Any

from translatable.core.engine import TranslatableEngine, get_engine
from translatable.i18n.locale import convert_rfc1766, get_lang_from_locale

logger = logging.getLogger(__name__)

LinkBuilder = Callable[[str], str | None]


def get_content_languages(engine: TranslatableEngine | None = None) -> dict[str, str]:
    """Default locale plus every target locale, mapped to its English name.

    Locales without a known name are left out.
    """
    engine = engine or get_engine()
    locale_service = engine.locale_service
    locales = [locale_service.default_locale()]
    for locale in engine.candidates():
        if locale not in locales:
            locales.append(locale)

    languages: dict[str, str] = {}
    for locale in locales:
        name = locale_service.language_display_name(locale, native=False)
        if name:
            languages[locale] = name
    return languages


def language_navigation(
    link_for: LinkBuilder | None = None,
    engine: TranslatableEngine | None = None,
) -> list[dict[str, Any]] | None:
    """Entries for a language switcher, or None when fewer than two languages exist.

    Args:
        link_for: Returns the link of the current page in a locale
                  (None or "" when there is no translation).
    """
    engine = engine or get_engine()
    locales = get_content_languages(engine)

    # there's no need to show a navigation for less than 2 languages
    if len(locales) < 2:
        return None

    current = engine.locale_service.current_locale()
    navigation = []
    for locale in locales:
        lang = get_lang_from_locale(locale)
        title = html.unescape(engine.locale_service.language_display_name(lang, native=True) or locale)
        navigation.append(
            {
                "locale": locale,
                "rfc1766": convert_rfc1766(locale),
                "language": lang.upper(),
                "title": title[:1].upper() + title[1:],
                "linking_mode": "current" if locale == current else "link",
                "link": (link_for(locale) if link_for else None) or "",
            }
        )
    return navigation
