"""
Tests for the i18n and translatable HTTP routes
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from main import app
from translatable.auth import create_access_token
from translatable.database import Base, get_db
from translatable.models import Article, MediaFile, Role, User
from translatable.utils.shortcodes import get_active_parser


@pytest.fixture
async def session_factory():
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield factory
    app.dependency_overrides.pop(get_db, None)
    await test_engine.dispose()


@pytest.fixture
async def article(session_factory):
    async with session_factory() as session:
        article = Article(
            title="Hello",
            slug="hello",
            summary="A greeting",
            body="<p>[b]Hello[/b]</p>",
            rank=1,
            title__fr_FR="Bonjour",
            body__fr_FR="<p>[b]Bonjour[/b]</p>",
        )
        article.media = [
            MediaFile(filename="b.png", title="Second", sort_order=2),
            MediaFile(filename="a.png", title="First", title__fr_FR="Premier", sort_order=1),
        ]
        session.add(article)
        await session.commit()
        return article


@pytest.fixture
async def translator(session_factory):
    async with session_factory() as session:
        role = Role(name="translator", permissions=["TRANSLATE_fr_FR"])
        user = User(username="translator", email="translator@example.com", role=role)
        session.add(user)
        await session.commit()
        return user


def bearer(user):
    return {"Authorization": f"Bearer {create_access_token({'sub': user.email})}"}


@pytest.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


class TestLanguageRoutes:
    async def test_language_navigation(self, client):
        response = await client.get("/api/v1/i18n/languages")
        assert response.status_code == 200
        languages = response.json()
        assert [entry["locale"] for entry in languages] == ["en_US", "fr_FR", "de_DE"]
        english, french, _ = languages
        assert english["linking_mode"] == "current"
        assert french == {
            "locale": "fr_FR",
            "rfc1766": "fr-FR",
            "language": "FR",
            "title": "Français",
            "linking_mode": "link",
            "link": "/api/v1/i18n/languages?locale=fr_FR",
        }

    async def test_locale_query_parameter(self, client):
        response = await client.get("/api/v1/i18n/languages", params={"locale": "de_DE"})
        current = [entry["locale"] for entry in response.json() if entry["linking_mode"] == "current"]
        assert current == ["de_DE"]

    async def test_x_language_header(self, client):
        response = await client.get("/api/v1/i18n/languages", headers={"X-Language": "fr_FR"})
        current = [entry["locale"] for entry in response.json() if entry["linking_mode"] == "current"]
        assert current == ["fr_FR"]

    async def test_accept_language_header(self, client):
        response = await client.get("/api/v1/i18n/languages", headers={"Accept-Language": "fr-CA,fr;q=0.9"})
        current = [entry["locale"] for entry in response.json() if entry["linking_mode"] == "current"]
        assert current == ["fr_FR"]

    async def test_locales_for_anonymous_developer(self, client, session_factory):
        response = await client.get("/api/v1/i18n/locales")
        assert response.status_code == 200
        locales = {entry["locale"]: entry for entry in response.json()}
        assert locales["en_US"]["is_default"] is True
        assert locales["fr_FR"]["native_name"] == "français"
        assert all(entry["can_translate"] for entry in locales.values())

    async def test_locales_for_translator(self, client, translator):
        response = await client.get("/api/v1/i18n/locales", headers=bearer(translator))
        permissions = {entry["locale"]: entry["can_translate"] for entry in response.json()}
        assert permissions == {"en_US": True, "fr_FR": True, "de_DE": False}

    async def test_token_cookie(self, client, translator):
        client.cookies.set("access_token", create_access_token({"sub": translator.email}))
        response = await client.get("/api/v1/i18n/locales")
        permissions = {entry["locale"]: entry["can_translate"] for entry in response.json()}
        assert permissions["de_DE"] is False

    async def test_unknown_user(self, client, session_factory):
        token = create_access_token({"sub": "nobody@example.com"})
        response = await client.get("/api/v1/i18n/locales", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    async def test_invalid_token(self, client, session_factory):
        response = await client.get("/api/v1/i18n/locales", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid token"

    async def test_user_id_header_is_not_trusted(self, client, translator):
        response = await client.get("/api/v1/i18n/locales", headers={"X-User-Id": str(translator.id)})
        permissions = {entry["locale"]: entry["can_translate"] for entry in response.json()}
        assert permissions["de_DE"] is True


class TestTranslatableRoutes:
    async def test_schemas(self, client):
        response = await client.get("/api/v1/translatable/schemas")
        assert response.status_code == 200
        schemas = {entry["schema_name"]: entry for entry in response.json()}
        assert schemas["Article"]["localized_fields"] == ["title", "summary", "body"]
        assert schemas["Article"]["locales"] == ["fr_FR", "de_DE"]
        assert schemas["Article"]["columns"]["title__fr_FR"] == "Varchar(255)"
        assert schemas["Article"]["columns"]["body__de_DE"] == "HTMLText"
        assert schemas["MediaFile"]["localized_fields"] == ["title", "description"]

    async def test_localized_value(self, client, article):
        response = await client.get(f"/api/v1/translatable/articles/{article.id}/values/title", params={"locale": "fr_FR"})
        assert response.status_code == 200
        assert response.json() == {"field": "title", "locale": "fr_FR", "key": "title__fr_FR", "value": "Bonjour"}

    async def test_strict_and_fallback(self, client, article):
        url = f"/api/v1/translatable/articles/{article.id}/values/summary"
        strict = await client.get(url, params={"locale": "fr_FR"})
        assert strict.json()["value"] is None
        fallback = await client.get(url, params={"locale": "fr_FR", "strict": "false"})
        assert fallback.json()["value"] == "A greeting"

    async def test_parse_shortcodes(self, client, article):
        parser = get_active_parser()
        parser.register("b", lambda attributes, content: f"<strong>{content}</strong>")
        try:
            response = await client.get(
                f"/api/v1/translatable/articles/{article.id}/values/body",
                params={"locale": "fr_FR", "parse_shortcodes": "true"},
            )
        finally:
            parser.unregister("b")
        assert response.json()["value"] == "<p><strong>Bonjour</strong></p>"

    async def test_not_localized_field(self, client, article):
        response = await client.get(f"/api/v1/translatable/articles/{article.id}/values/slug")
        assert response.status_code == 404
        assert response.json()["error"]["error_code"] == "RESOURCE_NOT_FOUND"

    async def test_missing_article(self, client, session_factory):
        response = await client.get("/api/v1/translatable/articles/999/form")
        assert response.status_code == 404
        error = response.json()["error"]
        assert error["details"] == {"resource_type": "Article", "resource_id": 999}
        assert error["path"] == "/api/v1/translatable/articles/999/form"

    async def test_form_in_default_locale(self, client, article):
        response = await client.get(f"/api/v1/translatable/articles/{article.id}/form")
        assert response.status_code == 200
        form = response.json()
        assert form["locale"] == "en_US"
        assert [tab["name"] for tab in form["translations"]["children"]] == ["en_US", "fr_FR", "de_DE"]
        assert form["media"]["name"] == "media"
        assert form["media"]["can_upload"] is True
        assert [item["title"] for item in form["media"]["items"]] == ["First", "Second"]

    async def test_form_in_translation(self, client, article, translator):
        response = await client.get(
            f"/api/v1/translatable/articles/{article.id}/form",
            params={"locale": "fr_FR"},
            headers=bearer(translator),
        )
        form = response.json()
        assert form["locale"] == "fr_FR"

        main = form["fields"]["children"][0]["children"][0]
        names = [field["name"] for field in main["children"]]
        assert "title_holder" in names
        assert "title__fr_FR" not in names
        holder = main["children"][names.index("title_holder")]
        assert [child["name"] for child in holder["children"]] == ["title__fr_FR", "title_original"]
        assert holder["children"][0]["value"] == "Bonjour"
        assert holder["children"][1]["title"] == "Original Title"

        assert [tab["name"] for tab in form["translations"]["children"]] == ["en_US", "fr_FR"]

        media = form["media"]
        assert media["name"] == "translate_media"
        assert media["can_upload"] is False
        assert media["buttons"] == ["edit"]
        first_item_fields = media["items"][0]["edit_fields"]
        assert first_item_fields[0]["name"] == "title_holder"
        assert first_item_fields[0]["children"][0]["value"] == "Premier"
