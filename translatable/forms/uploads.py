"""
Translatable file collections

Upload controls for ordered collections of files attached to a record.
In the default locale the collection is fully editable; in a translation
it is read-only with respect to membership and order, and the per-file
edit form only exposes the translated metadata.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from translatable.core.engine import TranslatableEngine, get_engine
from translatable.forms.builder import localized_form_field, translatable_tab_set
from translatable.forms.fields import FieldList, UploadField, UploadItem, name_to_label
from translatable.forms.transformation import TranslatableFormFieldTransformation

FILE_EDIT_FIELDS = "upload_editor_fields"
TRANSLATION_BUTTONS_TEMPLATE = "translation_buttons"


def _sorted_by(items: list[Any], sort_field: str) -> list[Any]:
    # items without a sort value go last
    def key(item: Any) -> tuple[bool, Any]:
        value = getattr(item, sort_field, None)
        return (value is None, value)

    return sorted(items, key=key)


def translatable_upload_field(
    name: str,
    collection: Iterable[Any],
    title: str | None = None,
    sort_field: str | None = "sort_order",
    engine: TranslatableEngine | None = None,
) -> UploadField:
    """Create an upload field that can be used in a translation context.

    Attaching, removing and sorting are only allowed in the default locale.
    In a translation only the file metadata may be edited.

    Args:
        name:       Field name.
        collection: The files.
        title:      Field label.
        sort_field: Attribute the files are ordered by, or None for no ordering.
    """
    engine = engine or get_engine()
    locale_service = engine.locale_service
    items = list(collection)
    if sort_field and all(hasattr(item, sort_field) for item in items):
        items = _sorted_by(items, sort_field)

    label = title or name_to_label(name)
    if locale_service.default_locale() == locale_service.current_locale():
        field = UploadField(name=name, title=label, sortable=bool(sort_field), sort_field=sort_field)
    else:
        field = UploadField(
            name=f"translate_{name}",
            title=label,
            can_upload=False,
            can_attach_existing=False,
            sortable=False,
            sort_field=sort_field,
            buttons=["edit"],
            template_file_buttons=TRANSLATION_BUTTONS_TEMPLATE,
        )

    field.file_edit_fields = FILE_EDIT_FIELDS
    field.items = [
        UploadItem(
            id=getattr(item, "id", None),
            filename=getattr(item, "filename", None),
            title=getattr(item, "title", None),
            edit_fields=upload_editor_fields(item, engine).children,
        )
        for item in items
    ]
    return field


def upload_editor_fields(obj: Any, engine: TranslatableEngine | None = None) -> FieldList:
    """Edit fields of one file: its translated fields, with the original-value overlay in a translation."""
    engine = engine or get_engine()
    fields = FieldList()
    translated = engine.localized_class_fields(type(obj))
    if not translated:
        return fields

    default = engine.locale_service.default_locale()
    transformation = None
    if default != engine.locale_service.current_locale():
        transformation = TranslatableFormFieldTransformation(obj, engine)

    for name in translated:
        # create the field in the default locale
        field = localized_form_field(obj, name, default, engine)
        field.title = name_to_label(name)
        if transformation is not None:
            field = transformation.transform_form_field(field)
        fields.push(field)
    return fields


def update_file_cms_fields(obj: Any, fields: FieldList, engine: TranslatableEngine | None = None) -> FieldList:
    """Replace the translated fields of a file with the per-locale tabs."""
    engine = engine or get_engine()
    # remove all the translated fields
    for name in [*engine.localized_class_fields(type(obj)), *engine.collected_fields(type(obj))]:
        fields.remove_by_name(name, data_field_only=True)

    tab_set = translatable_tab_set(obj, engine=engine)
    for tab in tab_set.children:
        fields.add_field_to_tab("Root", tab)
    return fields
