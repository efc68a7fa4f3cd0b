"""
Translation form transformation

Turns a default-locale form field into a composite holding the editable
localized field and a read-only copy of the original value:

    <name>_holder  (originallang_holder)
        <name>__<locale>      editable translation
        <name>_original       "Original <title>", read-only (originallang)
"""

from __future__ import annotations

from typing import Any

from translatable.core.engine import TranslatableEngine, get_engine
from translatable.exceptions import ConfigurationMissingError
from translatable.forms.fields import CompositeField, FormField


class TranslatableFormFieldTransformation:
    def __init__(self, original: Any, engine: TranslatableEngine | None = None) -> None:
        engine = engine or get_engine()
        if not engine.is_translatable(type(original)):
            raise ConfigurationMissingError(f"{type(original).__name__} is not a translatable model")
        self.original = original
        self.engine = engine
        self.record = engine.wrap(original)

    def transform_form_field(self, field: FormField) -> CompositeField:
        non_editable = field.perform_readonly_transformation()

        name = field.name
        if self.record.is_localized_field(name):
            field.name = self.record.localized_field_name(name)
            field.value = self.record.get_localized_value(name)

        return self._base_transform(non_editable, field, name)

    def _base_transform(self, non_editable: FormField, original_field: FormField, name: str) -> CompositeField:
        non_editable.value = getattr(self.original, name, None)
        non_editable.name = f"{name}_original"
        non_editable.add_extra_class("originallang")
        non_editable.title = f"Original {original_field.title}"

        holder = CompositeField(name=f"{name}_holder", children=[non_editable])
        holder.add_extra_class("originallang_holder")
        holder.insert_before(original_field, f"{name}_original")
        return holder
