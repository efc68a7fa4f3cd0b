"""
Form field descriptors

Serializable descriptions of the edit surface the admin front end
renders.  Each descriptor carries its widget ``type``; composite fields,
tabs and tab sets nest other descriptors.
"""

from __future__ import annotations

import re
from typing import Any, ClassVar

from pydantic import BaseModel, Field, SerializeAsAny, computed_field


def name_to_label(name: str) -> str:
    """Turn a field name into a human-readable label.

    ex: "title" → "Title", "sort_order" → "Sort order", "MetaTitle" → "Meta Title"
    """
    label = name.split(".")[-1]
    label = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", label).replace("_", " ").strip()
    return label[:1].upper() + label[1:]


class FormField(BaseModel):
    field_type: ClassVar[str] = "field"

    name: str
    title: str | None = None
    value: Any = None
    extra_classes: list[str] = Field(default_factory=list)

    @computed_field
    @property
    def type(self) -> str:
        return self.field_type

    @property
    def readonly(self) -> bool:
        return False

    def add_extra_class(self, css_class: str) -> None:
        if css_class not in self.extra_classes:
            self.extra_classes.append(css_class)

    def perform_readonly_transformation(self) -> FormField:
        """Return a read-only copy of this field."""
        return ReadonlyField(name=self.name, title=self.title, value=self.value, extra_classes=list(self.extra_classes))


class TextField(FormField):
    field_type = "text"


class TextareaField(FormField):
    field_type = "textarea"


class HtmlEditorField(FormField):
    field_type = "htmleditor"


class ReadonlyField(FormField):
    field_type = "readonly"

    @property
    def readonly(self) -> bool:
        return True


class CompositeField(FormField):
    """A field holding child fields."""

    field_type = "composite"

    children: list[SerializeAsAny[FormField]] = Field(default_factory=list)

    def push(self, field: FormField) -> None:
        self.children.append(field)

    def field_by_name(self, name: str) -> FormField | None:
        """Find a field by name anywhere below this one."""
        for child in self.children:
            if child.name == name:
                return child
            if isinstance(child, CompositeField):
                found = child.field_by_name(name)
                if found is not None:
                    return found
        return None

    def insert_before(self, field: FormField, before: str) -> bool:
        """Insert *field* before the child named *before*, searching nested fields too."""
        for index, child in enumerate(self.children):
            if child.name == before:
                self.children.insert(index, field)
                return True
            if isinstance(child, CompositeField) and child.insert_before(field, before):
                return True
        return False

    def remove_by_name(self, name: str, data_field_only: bool = False) -> bool:
        """Remove the field named *name*.

        With ``data_field_only`` containers (tabs, tab sets, composites) of
        that name are kept.
        """
        removed = False
        remaining = []
        for child in self.children:
            is_container = isinstance(child, CompositeField)
            if child.name == name and not (data_field_only and is_container):
                removed = True
                continue
            if is_container and child.remove_by_name(name, data_field_only):
                removed = True
            remaining.append(child)
        self.children = remaining
        return removed

    def replace_field(self, name: str, field: FormField) -> bool:
        for index, child in enumerate(self.children):
            if child.name == name:
                self.children[index] = field
                return True
            if isinstance(child, CompositeField) and child.replace_field(name, field):
                return True
        return False

    def perform_readonly_transformation(self) -> FormField:
        clone = self.model_copy(deep=False)
        clone.children = [child.perform_readonly_transformation() for child in self.children]
        return clone


class Tab(CompositeField):
    field_type = "tab"


class TabSet(CompositeField):
    field_type = "tabset"


class FieldList(CompositeField):
    """Top-level list of form fields."""

    field_type = "fieldlist"

    name: str = "fields"

    def root(self) -> TabSet | None:
        field = self.field_by_name("Root")
        return field if isinstance(field, TabSet) else None

    def add_field_to_tab(self, path: str, field: FormField) -> None:
        """Add *field* to the tab at *path* ("Root" or "Root.Main"), creating it if needed."""
        container: CompositeField = self
        for depth, segment in enumerate(path.split(".")):
            child = next((c for c in container.children if c.name == segment), None)
            if not isinstance(child, CompositeField):
                child = TabSet(name=segment, title=segment) if depth == 0 else Tab(name=segment, title=segment)
                container.push(child)
            container = child
        container.push(field)


class UploadItem(BaseModel):
    id: Any = None
    filename: str | None = None
    title: str | None = None
    edit_fields: list[SerializeAsAny[FormField]] = Field(default_factory=list)


class UploadField(FormField):
    """File collection control."""

    field_type = "upload"

    can_upload: bool = True
    can_attach_existing: bool = True
    sortable: bool = False
    sort_field: str | None = None
    buttons: list[str] = Field(default_factory=lambda: ["edit", "remove", "delete"])
    template_file_buttons: str | None = None
    file_edit_fields: str | None = None
    items: list[UploadItem] = Field(default_factory=list)
