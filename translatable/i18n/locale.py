"""
Locale helpers

Pure functions for POSIX-style locale identifiers ("fr_FR", "zh_Hant_TW"):
- Locale validation and language/subtag extraction
- Language display names (English and native)
- RFC 1766 conversion for links and ``hreflang`` attributes
- RTL (right-to-left) language detection
- Accept-Language header parsing with quality-value (q=) support
"""

from __future__ import annotations

import re

# ── Constants ─────────────────────────────────────────────────────────────────

# Base language codes whose scripts read right-to-left
RTL_LOCALES: frozenset[str] = frozenset({"ar", "he", "fa", "ur", "yi", "ku"})

# Language code → (English name, native name)
LANGUAGE_NAMES: dict[str, tuple[str, str]] = {
    "ar": ("Arabic", "العربية"),
    "cs": ("Czech", "čeština"),
    "da": ("Danish", "dansk"),
    "de": ("German", "Deutsch"),
    "el": ("Greek", "Ελληνικά"),
    "en": ("English", "English"),
    "es": ("Spanish", "español"),
    "fa": ("Persian", "فارسی"),
    "fi": ("Finnish", "suomi"),
    "fr": ("French", "français"),
    "he": ("Hebrew", "עברית"),
    "hu": ("Hungarian", "magyar"),
    "it": ("Italian", "italiano"),
    "ja": ("Japanese", "日本語"),
    "ko": ("Korean", "한국어"),
    "nb": ("Norwegian Bokmål", "norsk bokmål"),
    "nl": ("Dutch", "Nederlands"),
    "pl": ("Polish", "polski"),
    "pt": ("Portuguese", "português"),
    "ro": ("Romanian", "română"),
    "ru": ("Russian", "русский"),
    "sv": ("Swedish", "svenska"),
    "tr": ("Turkish", "Türkçe"),
    "uk": ("Ukrainian", "українська"),
    "zh": ("Chinese", "中文"),
}

# Common locales → (English name, native name)
COMMON_LOCALES: dict[str, tuple[str, str]] = {
    "ar_SA": ("Arabic (Saudi Arabia)", "العربية (السعودية)"),
    "cs_CZ": ("Czech", "čeština"),
    "da_DK": ("Danish", "dansk"),
    "de_AT": ("German (Austria)", "Deutsch (Österreich)"),
    "de_CH": ("German (Switzerland)", "Deutsch (Schweiz)"),
    "de_DE": ("German", "Deutsch"),
    "el_GR": ("Greek", "Ελληνικά"),
    "en_AU": ("English (Australia)", "English (Australia)"),
    "en_CA": ("English (Canada)", "English (Canada)"),
    "en_GB": ("English (UK)", "English (UK)"),
    "en_US": ("English (US)", "English (US)"),
    "es_ES": ("Spanish", "español"),
    "es_MX": ("Spanish (Mexico)", "español (México)"),
    "fa_IR": ("Persian", "فارسی"),
    "fi_FI": ("Finnish", "suomi"),
    "fr_BE": ("French (Belgium)", "français (Belgique)"),
    "fr_CA": ("French (Canada)", "français (Canada)"),
    "fr_CH": ("French (Switzerland)", "français (Suisse)"),
    "fr_FR": ("French", "français"),
    "he_IL": ("Hebrew", "עברית"),
    "hu_HU": ("Hungarian", "magyar"),
    "it_CH": ("Italian (Switzerland)", "italiano (Svizzera)"),
    "it_IT": ("Italian", "italiano"),
    "ja_JP": ("Japanese", "日本語"),
    "ko_KR": ("Korean", "한국어"),
    "nb_NO": ("Norwegian Bokmål", "norsk bokmål"),
    "nl_BE": ("Dutch (Belgium)", "Nederlands (België)"),
    "nl_NL": ("Dutch", "Nederlands"),
    "pl_PL": ("Polish", "polski"),
    "pt_BR": ("Portuguese (Brazil)", "português (Brasil)"),
    "pt_PT": ("Portuguese (Portugal)", "português (Portugal)"),
    "ro_RO": ("Romanian", "română"),
    "ru_RU": ("Russian", "русский"),
    "sv_SE": ("Swedish", "svenska"),
    "tr_TR": ("Turkish", "Türkçe"),
    "uk_UA": ("Ukrainian", "українська"),
    "zh_CN": ("Chinese (Simplified)", "中文 (简体)"),
    "zh_Hant_TW": ("Chinese (Traditional, Taiwan)", "中文 (繁體, 台灣)"),
    "zh_TW": ("Chinese (Taiwan)", "中文 (台灣)"),
}

# language[_Script][_REGION], e.g. "fr", "fr_FR", "zh_Hant_TW"
_LOCALE_PATTERN = re.compile(r"^[a-z]{2,3}(?:_[A-Z][a-z]{3})?(?:_(?:[A-Z]{2}|[0-9]{3}))?$")


# ── Public helpers ────────────────────────────────────────────────────────────


def validate_locale(locale: object) -> bool:
    """Return True when *locale* is a well-formed locale of a known language.

    Args:
        locale: Candidate locale, e.g. "fr_FR". Non-strings are rejected.

    Returns:
        True if the identifier is well-formed and its language is known.
    """
    if not isinstance(locale, str) or not _LOCALE_PATTERN.match(locale):
        return False
    return locale in COMMON_LOCALES or get_lang_from_locale(locale) in LANGUAGE_NAMES


def get_lang_from_locale(locale: str) -> str:
    """Return the base language code of a locale ("fr_CA" → "fr").

    Accepts both underscore and BCP 47 hyphen separators.
    """
    return re.split(r"[_-]", locale, maxsplit=1)[0].lower()


def get_locale_subtag(locale: str) -> str:
    """Return the last region/script subtag of a locale ("zh_Hant_TW" → "TW").

    A locale without subtags is returned unchanged.
    """
    return re.split(r"[_-]", locale)[-1]


def convert_rfc1766(locale: str) -> str:
    """Convert a POSIX locale to its RFC 1766 form ("en_US" → "en-US")."""
    return locale.replace("_", "-")


def language_display_name(code: str, native: bool = True) -> str | None:
    """Return the display name for a language code or a full locale.

    Args:
        code:   Language code ("fr") or locale ("fr_CA").
        native: Return the name written in the language itself
                ("français") instead of the English name ("French").

    Returns:
        The display name, or None when the code is unknown.
    """
    names = LANGUAGE_NAMES.get(code) or COMMON_LOCALES.get(code)
    if names is None:
        return None
    return names[1] if native else names[0]


def is_rtl_locale(locale: str) -> bool:
    """Return True when the given locale is right-to-left.

    Compares only the base language, so both "ar" and "ar_SA" are
    identified as RTL.
    """
    return get_lang_from_locale(locale) in RTL_LOCALES


def parse_accept_language(header: str, supported: list[str]) -> str | None:
    """Parse an Accept-Language header and return the best matching locale.

    Algorithm:
    1. Split header into tags with optional q-values (default q=1.0).
    2. Sort by q-value descending.
    3. For each tag, try an exact match in `supported` (hyphen and
       underscore forms are equivalent), then a base-language match.
    4. Return the first match or None if nothing matches.

    Args:
        header:    Value of the Accept-Language HTTP header, e.g.
                   "fr-CA,fr;q=0.9,en-US;q=0.8".
        supported: Ordered list of locales the server supports.

    Returns:
        The best matching locale from `supported`, or None.
    """
    if not header:
        return None

    weighted: list[tuple[float, str]] = []
    for part in header.split(","):
        part = part.strip()
        if not part:
            continue
        if ";q=" in part:
            tag, q_str = part.split(";q=", 1)
            try:
                q = float(q_str.strip())
            except ValueError:
                q = 1.0
        else:
            tag = part
            q = 1.0
        weighted.append((q, tag.strip()))

    # Stable sort preserves original order at same q
    weighted.sort(key=lambda x: x[0], reverse=True)

    normalized = [convert_rfc1766(s).lower() for s in supported]

    for _, tag in weighted:
        tag_lower = convert_rfc1766(tag).lower()
        if tag_lower in normalized:
            return supported[normalized.index(tag_lower)]
        # Base language match: "fr-CA" → first supported "fr*" locale
        base = get_lang_from_locale(tag_lower)
        for index, candidate in enumerate(normalized):
            if get_lang_from_locale(candidate) == base:
                return supported[index]

    return None
