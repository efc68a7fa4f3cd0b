"""
Tests for content languages, language navigation and locale detection
"""

import pytest
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient

from translatable.core.engine import get_engine
from translatable.middleware.language import LanguageMiddleware, supported_locales
from translatable.services.language_service import get_content_languages, language_navigation


class TestContentLanguages:
    def test_default_first(self, make_engine):
        engine = make_engine(translatable_locales=["fr_FR", "de_DE"])
        assert get_content_languages(engine) == {"en_US": "English (US)", "fr_FR": "French", "de_DE": "German"}

    def test_unknown_locales_are_left_out(self, make_engine):
        engine = make_engine(translatable_locales=["en_US", "xx_YY"])
        assert get_content_languages(engine) == {"en_US": "English (US)"}

    def test_existing_content_without_configuration(self, make_engine):
        engine = make_engine(translatable_locales=None)
        engine.locale_service.set_content_locales_provider(lambda: {"en_US": "English (US)", "de_DE": "German"})
        assert list(get_content_languages(engine)) == ["en_US", "de_DE"]


class TestLanguageNavigation:
    def test_single_language(self, make_engine):
        engine = make_engine(translatable_locales=None)
        assert language_navigation(engine=engine) is None

    def test_entries(self, make_engine):
        engine = make_engine(translatable_locales=["en_US", "fr_FR", "de_DE"])
        with engine.locale_service.using_locale("de_DE"):
            navigation = language_navigation(lambda locale: f"/{locale}/news", engine=engine)

        assert [entry["linking_mode"] for entry in navigation] == ["link", "link", "current"]
        assert [entry["title"] for entry in navigation] == ["English", "Français", "Deutsch"]
        assert navigation[1]["rfc1766"] == "fr-FR"
        assert navigation[1]["language"] == "FR"
        assert navigation[1]["link"] == "/fr_FR/news"

    def test_missing_links(self, make_engine):
        engine = make_engine(translatable_locales=["en_US", "fr_FR"])
        navigation = language_navigation(lambda locale: None if locale == "fr_FR" else "/", engine=engine)
        assert [entry["link"] for entry in navigation] == ["/", ""]


@pytest.fixture
async def locale_client():
    app = FastAPI()
    app.add_middleware(LanguageMiddleware)

    @app.get("/locale")
    async def current(request: Request):
        return {
            "state": request.state.locale,
            "current": get_engine().locale_service.current_locale(),
        }

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


class TestLanguageMiddleware:
    def test_supported_locales(self):
        assert supported_locales() == ["en_US", "fr_FR", "de_DE"]

    async def test_default(self, locale_client):
        response = await locale_client.get("/locale")
        assert response.json() == {"state": "en_US", "current": "en_US"}

    async def test_query_parameter_wins(self, locale_client):
        response = await locale_client.get(
            "/locale", params={"locale": "de_DE"}, headers={"X-Language": "fr_FR", "Accept-Language": "fr"}
        )
        assert response.json()["current"] == "de_DE"

    async def test_unsupported_query_falls_through(self, locale_client):
        response = await locale_client.get("/locale", params={"locale": "ja_JP"}, headers={"X-Language": "fr_FR"})
        assert response.json()["current"] == "fr_FR"

    async def test_accept_language(self, locale_client):
        response = await locale_client.get("/locale", headers={"Accept-Language": "es-ES, de;q=0.8, fr;q=0.5"})
        assert response.json()["current"] == "de_DE"

    async def test_locale_is_reset_after_request(self, locale_client):
        await locale_client.get("/locale", params={"locale": "fr_FR"})
        assert get_engine().locale_service.current_locale() == "en_US"
