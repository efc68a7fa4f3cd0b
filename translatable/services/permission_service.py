"""
TranslationPermissionGate

Decides whether an actor may edit values of a locale.  Consulted by the
write guard before a changed translation is persisted and by the form
builder to choose between editable and read-only fields.

Evaluation order:
  1. Invalid locale → InvalidLocaleError.
  2. Unattended (CLI) execution, or no authenticated actor in
     development → allowed.
  3. Locale outside a configured allowed-locales list → denied.
  4. Default locale → allowed (editing the base record).
  5. TRANSLATE_ALL → allowed.
  6. TRANSLATE_<locale> → allowed, otherwise denied.

Does not consider whether the actor may edit the record at all.
"""

import logging
from typing import Any

from translatable.config import Settings
from translatable.exceptions import InvalidLocaleError
from translatable.i18n.context import LocaleService
from translatable.permissions_config.permissions import TRANSLATE_ALL, translate_permission
from translatable.services.identity_service import IdentityService

logger = logging.getLogger(__name__)


class TranslationPermissionGate:
    def __init__(self, locale_service: LocaleService, identity: IdentityService, settings: Settings) -> None:
        self.locale_service = locale_service
        self.identity = identity
        self.settings = settings

    def can_translate(self, actor: Any, locale: str) -> bool:
        if not self.locale_service.validate_locale(locale):
            raise InvalidLocaleError(locale)

        if actor is None:
            actor = self.identity.current_actor()

        # Always allow on cli and for anonymous users in development
        if self.identity.is_unattended() or (actor is None and self.settings.is_development):
            return True

        allowed = self.locale_service.allowed_locales()
        if allowed is not None and locale not in allowed:
            return False

        # Anyone who can edit the record can edit the default locale
        if locale == self.locale_service.default_locale():
            return True

        if self.identity.has_permission(actor, TRANSLATE_ALL):
            return True

        return self.identity.has_permission(actor, translate_permission(locale))
