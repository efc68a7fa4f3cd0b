"""
i18n (Internationalization) package

Provides locale helpers, language metadata, RTL detection,
Accept-Language header parsing and the request-scoped locale service
used by the vertical translation engine.
"""

from .context import LocaleService, current_locale_var
from .locale import (
    COMMON_LOCALES,
    LANGUAGE_NAMES,
    RTL_LOCALES,
    convert_rfc1766,
    get_lang_from_locale,
    get_locale_subtag,
    is_rtl_locale,
    language_display_name,
    parse_accept_language,
    validate_locale,
)

__all__ = [
    "COMMON_LOCALES",
    "LANGUAGE_NAMES",
    "RTL_LOCALES",
    "LocaleService",
    "convert_rfc1766",
    "current_locale_var",
    "get_lang_from_locale",
    "get_locale_subtag",
    "is_rtl_locale",
    "language_display_name",
    "parse_accept_language",
    "validate_locale",
]
