"""
Form Presentation Builder

Builds the edit surface of a translatable record:

- ``localized_form_field``  one editable (or read-only) field per (field, locale)
- ``translatable_tab_set``  one tab per locale the actor may translate
- ``update_cms_fields``     replaces scaffolded localized fields with an
                            "original value" overlay when editing a translation
- ``scaffold_fields``       default field list for a record's own columns
"""

from __future__ import annotations

import html
import logging
from typing import Any

from translatable.core.codec import basename, is_localized_key, locale_of
from translatable.core.engine import TranslatableEngine, get_engine
from translatable.core.storage import StorageKind, Widget, parse_type_tag
from translatable.forms.fields import (
    FieldList,
    FormField,
    HtmlEditorField,
    ReadonlyField,
    Tab,
    TabSet,
    TextareaField,
    TextField,
    name_to_label,
)
from translatable.forms.transformation import TranslatableFormFieldTransformation
from translatable.i18n.locale import get_lang_from_locale, get_locale_subtag

logger = logging.getLogger(__name__)

WIDGET_FIELDS: dict[Widget, type[FormField]] = {
    Widget.TEXT: TextField,
    Widget.TEXTAREA: TextareaField,
    Widget.HTML_EDITOR: HtmlEditorField,
}


def field_label(obj: Any, field: str) -> str:
    """Label of a base field: the model's ``__field_labels__`` entry or the humanized name."""
    labels = getattr(type(obj), "__field_labels__", None) or {}
    return labels.get(field) or name_to_label(field)


def field_labels(obj: Any, engine: TranslatableEngine | None = None) -> dict[str, str]:
    """Labels of every derived column, e.g. {"title__fr_FR": "Title (fr_FR)"}."""
    engine = engine or get_engine()
    labels = {}
    for key in engine.collected_fields(type(obj)):
        labels[key] = f"{field_label(obj, basename(key, engine.separator))} ({locale_of(key, engine.separator)})"
    return labels


def declared_type(obj: Any, field: str, engine: TranslatableEngine) -> str:
    """Type tag of *field* as declared on the record's class or an ancestor."""
    for ancestor in reversed(engine.registry.ancestry(type(obj))):
        declared = engine.registry.declared_fields(ancestor)
        if field in declared:
            return declared[field]
    return ""


def localized_form_field(obj: Any, field: str, locale: str, engine: TranslatableEngine | None = None) -> FormField:
    engine = engine or get_engine()
    base = basename(field, engine.separator)
    key = engine.localized_field(base, locale)
    label = field_label(obj, base)
    value = getattr(obj, key, None)

    if not engine.can_translate(None, locale):
        # if not allowed to translate, return the field as read-only
        return ReadonlyField(name=key, title=label, value=value)

    kind = parse_type_tag(declared_type(obj, base, engine)).kind
    return WIDGET_FIELDS.get(kind.widget, HtmlEditorField)(name=key, title=label, value=value)


def translatable_tab_set(
    obj: Any,
    title: str = "Root",
    show_native_names: bool = True,
    engine: TranslatableEngine | None = None,
) -> TabSet:
    """A tab set with one tab of localized fields for every locale the actor may translate.

    Tabs of locales sharing a language get their region (or script)
    appended to the label, e.g. "French (FR)" and "French (CA)".
    """
    engine = engine or get_engine()
    schema = type(obj)
    tab_set = TabSet(name=title, title=title)

    locales = engine.candidates(schema)
    field_names = engine.localized_class_fields(schema)
    if not field_names:
        logger.warning("No localized fields for %s found", schema.__name__)

    ambiguity: dict[str, str] = {}
    for locale in locales:
        lang = get_lang_from_locale(locale)
        for other in locales:
            if other != locale and get_lang_from_locale(other) == lang:
                ambiguity[other] = get_locale_subtag(other)

    locale_service = engine.locale_service
    for locale in locales:
        if not engine.can_translate(None, locale):
            continue

        lang = locale_service.language_display_name(get_lang_from_locale(locale), show_native_names)
        if not lang:
            lang = locale_service.language_display_name(locale, show_native_names) or locale
        lang_name = html.unescape(lang)
        lang_name = lang_name[:1].upper() + lang_name[1:]
        if locale in ambiguity:
            lang_name += f" ({ambiguity[locale]})"

        tab = Tab(name=locale, title=lang_name)
        for field in field_names:
            tab.push(localized_form_field(obj, field, locale, engine))
        tab_set.push(tab)

    return tab_set


def scaffold_fields(obj: Any, engine: TranslatableEngine | None = None) -> FieldList:
    """Default edit fields: one widget per declared column, in a "Root.Main" tab."""
    engine = engine or get_engine()
    fields = FieldList()
    for ancestor in engine.registry.ancestry(type(obj)):
        for name, tag in engine.registry.declared_fields(ancestor).items():
            if name == "id" or fields.field_by_name(name) is not None:
                continue
            kind = parse_type_tag(tag).kind
            if kind in (StorageKind.VARCHAR, StorageKind.HTML_VARCHAR, StorageKind.TEXT, StorageKind.HTML_TEXT):
                field_cls = WIDGET_FIELDS[kind.widget]
            else:
                field_cls = TextField
            fields.add_field_to_tab("Root.Main", field_cls(name=name, title=field_label(obj, name), value=getattr(obj, name, None)))
    return fields


def update_cms_fields(obj: Any, fields: FieldList, engine: TranslatableEngine | None = None) -> FieldList:
    """Adjust a scaffolded field list for the current locale.

    Derived columns are always removed.  Outside the default locale every
    base field translated into the current locale is replaced by its
    localized field next to a read-only "Original ..." companion.
    """
    engine = engine or get_engine()
    collected = engine.collected_fields(type(obj))
    if not collected:
        return fields

    # remove all localized fields from the list (generated through scaffolding)
    for key in collected:
        fields.remove_by_name(key)

    default = engine.locale_service.default_locale()
    current = engine.locale_service.current_locale()
    if current == default:
        return fields

    transformation = TranslatableFormFieldTransformation(obj, engine)
    for key in collected:
        if not is_localized_key(key, engine.separator) or locale_of(key, engine.separator) != current:
            continue
        base = basename(key, engine.separator)
        field = localized_form_field(obj, base, default, engine)
        fields.replace_field(base, transformation.transform_form_field(field))

    return fields
