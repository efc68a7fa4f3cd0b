from .builder import field_labels, localized_form_field, scaffold_fields, translatable_tab_set, update_cms_fields
from .transformation import TranslatableFormFieldTransformation
from .uploads import translatable_upload_field, update_file_cms_fields, upload_editor_fields

__all__ = [
    "TranslatableFormFieldTransformation",
    "field_labels",
    "localized_form_field",
    "scaffold_fields",
    "translatable_tab_set",
    "translatable_upload_field",
    "update_cms_fields",
    "update_file_cms_fields",
    "upload_editor_fields",
]
