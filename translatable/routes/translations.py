"""
Translation & i18n Routes

Two APIRouter objects exported from this module:

i18n_router  (prefix: /api/v1/i18n)
    GET    /languages                          → language navigation (public)
    GET    /locales                            → content locales + translate permission

translatable_router  (prefix: /api/v1/translatable)
    GET    /schemas                            → registered translatable models
    GET    /articles/{article_id}/form         → edit surface of an article
    GET    /articles/{article_id}/values/{field} → localized value in the current locale

The acting user is authenticated from a bearer token (see
``translatable.auth``); requests without one are anonymous.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from translatable.auth import get_current_actor
from translatable.core.engine import TranslatableEngine, get_engine
from translatable.database import get_db
from translatable.exceptions import ResourceNotFoundError
from translatable.forms.builder import scaffold_fields, translatable_tab_set, update_cms_fields
from translatable.forms.uploads import translatable_upload_field
from translatable.i18n.locale import is_rtl_locale
from translatable.models.article import Article
from translatable.models.user import User
from translatable.services.identity_service import identity_service
from translatable.services.language_service import get_content_languages, language_navigation

i18n_router = APIRouter(tags=["Internationalization"])
translatable_router = APIRouter(tags=["Translatable"])
logger = logging.getLogger(__name__)


# ── Pydantic schemas ───────────────────────────────────────────────────────────


class LanguageNavigationEntry(BaseModel):
    locale: str
    rfc1766: str
    language: str
    title: str
    linking_mode: str
    link: str


class LocaleInfo(BaseModel):
    locale: str
    name: str
    native_name: str | None
    is_default: bool
    is_rtl: bool
    can_translate: bool


class SchemaInfo(BaseModel):
    schema_name: str
    table: str
    localized_fields: list[str]
    locales: list[str]
    columns: dict[str, str]


class LocalizedValue(BaseModel):
    field: str
    locale: str
    key: str
    value: Any = None


# ── Dependencies ───────────────────────────────────────────────────────────────


async def load_article(article_id: int, db: AsyncSession) -> Article:
    result = await db.execute(select(Article).options(selectinload(Article.media)).where(Article.id == article_id))
    article = result.scalars().first()
    if article is None:
        raise ResourceNotFoundError("Article", article_id)
    return article


# ── i18n routes ────────────────────────────────────────────────────────────────


@i18n_router.get("/languages", response_model=list[LanguageNavigationEntry])
async def list_languages(request: Request, engine: TranslatableEngine = Depends(get_engine)):
    """Language navigation for the current page (empty for a single language)."""
    path = request.url.path
    navigation = language_navigation(lambda locale: f"{path}?locale={locale}", engine=engine)
    return navigation or []


@i18n_router.get("/locales", response_model=list[LocaleInfo])
async def list_locales(
    engine: TranslatableEngine = Depends(get_engine),
    actor: User | None = Depends(get_current_actor),
):
    """Content locales and whether the caller may translate into each."""
    default = engine.locale_service.default_locale()
    return [
        LocaleInfo(
            locale=locale,
            name=name,
            native_name=engine.locale_service.language_display_name(locale, native=True),
            is_default=locale == default,
            is_rtl=is_rtl_locale(locale),
            can_translate=engine.can_translate(actor, locale),
        )
        for locale, name in get_content_languages(engine).items()
    ]


# ── Translatable model routes ──────────────────────────────────────────────────


@translatable_router.get("/schemas", response_model=list[SchemaInfo])
async def list_schemas(engine: TranslatableEngine = Depends(get_engine)):
    return [
        SchemaInfo(
            schema_name=schema.__name__,
            table=schema.__tablename__,
            localized_fields=engine.localized_class_fields(schema),
            locales=engine.target_locales(schema),
            columns=engine.collected_fields(schema),
        )
        for schema in engine.registered_schemas()
    ]


@translatable_router.get("/articles/{article_id}/form")
async def article_form(
    article_id: int,
    db: AsyncSession = Depends(get_db),
    engine: TranslatableEngine = Depends(get_engine),
    actor: User | None = Depends(get_current_actor),
) -> dict[str, Any]:
    """Edit surface of an article in the current locale."""
    article = await load_article(article_id, db)

    with identity_service.acting_as(actor):
        fields = update_cms_fields(article, scaffold_fields(article, engine), engine)
        tabs = translatable_tab_set(article, engine=engine)
        media = translatable_upload_field("media", article.media, title="Media", engine=engine)

    return {
        "locale": engine.locale_service.current_locale(),
        "fields": fields.model_dump(),
        "translations": tabs.model_dump(),
        "media": media.model_dump(),
    }


@translatable_router.get("/articles/{article_id}/values/{field}", response_model=LocalizedValue)
async def article_value(
    article_id: int,
    field: str,
    strict: bool = True,
    parse_shortcodes: bool = False,
    db: AsyncSession = Depends(get_db),
    engine: TranslatableEngine = Depends(get_engine),
):
    """Value of a translated article field in the current locale."""
    article = await load_article(article_id, db)
    record = engine.wrap(article)
    if not record.is_localized_field(field):
        raise ResourceNotFoundError("Localized field", field)

    return LocalizedValue(
        field=field,
        locale=engine.locale_service.current_locale(),
        key=record.localized_field_name(field),
        value=record.get_localized_value(field, strict=strict, parse_shortcodes=parse_shortcodes),
    )
