"""
Language Detection Middleware

Sets the current content locale for the request from:
  1. ``?locale=`` query parameter (exact match against the content locales)
  2. X-Language request header (exact match)
  3. Accept-Language header (quality-weighted, best-match)
  4. the default locale (fallback)

The locale is stored on request.state.locale and in the locale service's
context variable, which the localized-field accessors read.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

from translatable.core.engine import get_engine
from translatable.i18n.locale import parse_accept_language

if TYPE_CHECKING:
    from collections.abc import Callable

    from fastapi import Request
    from starlette.responses import Response


def supported_locales() -> list[str]:
    engine = get_engine()
    default = engine.locale_service.default_locale()
    locales = [default]
    for locale in engine.candidates():
        if locale not in locales:
            locales.append(locale)
    return locales


class LanguageMiddleware(BaseHTTPMiddleware):
    """Detect the request locale and make it the current content locale."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        supported = supported_locales()

        # 1./2. Explicit selection takes priority
        locale = request.query_params.get("locale", "").strip()
        if locale not in supported:
            locale = request.headers.get("X-Language", "").strip()
        if locale not in supported:
            # 3. Accept-Language quality matching
            locale = parse_accept_language(request.headers.get("Accept-Language", ""), supported) or supported[0]

        request.state.locale = locale
        locale_service = get_engine().locale_service
        token = locale_service.set_current_locale(locale)
        try:
            return await call_next(request)
        finally:
            locale_service.reset_current_locale(token)
