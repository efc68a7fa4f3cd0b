"""
Custom Exception Classes for vertical translations

This module defines the exceptions raised by the translation engine and
the HTTP layer built on top of it.  Every exception carries an HTTP
status code, a machine-readable error code and optional details so the
exception handlers can render a consistent error envelope.
"""

import enum
from typing import Any

from fastapi import status


class ErrorCode(str, enum.Enum):
    """Machine-readable error codes exposed in error responses."""

    CONFIGURATION_MISSING = "TRANSLATION_CONFIGURATION_MISSING"
    SCHEMA_MISCONFIGURED = "TRANSLATION_SCHEMA_MISCONFIGURED"
    NOT_LOCALIZED_FIELD = "TRANSLATION_NOT_LOCALIZED_FIELD"
    INVALID_LOCALE = "TRANSLATION_INVALID_LOCALE"
    PERMISSION_DENIED = "TRANSLATION_PERMISSION_DENIED"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class TranslatableError(Exception):
    """Base exception class for all translation-related exceptions"""

    error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigurationMissingError(TranslatableError):
    """Raised when the host translation capability is not available"""

    error_code = ErrorCode.CONFIGURATION_MISSING

    def __init__(self, message: str = "Translation support is not installed but required."):
        super().__init__(message=message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


class SchemaConfigurationError(TranslatableError):
    """Raised when the host schema registry cannot describe a class"""

    error_code = ErrorCode.SCHEMA_MISCONFIGURED

    def __init__(self, message: str, schema: str | None = None):
        details = {"schema": schema} if schema else {}
        super().__init__(message=message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, details=details)


# ============================================================================
# Field & Locale Exceptions
# ============================================================================


class NotLocalizedFieldError(TranslatableError):
    """Raised when a localized accessor is used on a field that is not translatable"""

    error_code = ErrorCode.NOT_LOCALIZED_FIELD

    def __init__(self, field: str, schema: str | None = None):
        details: dict[str, Any] = {"field": field}
        if schema:
            details["schema"] = schema
        super().__init__(
            message=f"Field '{field}' is not a localized field",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
        )


class InvalidLocaleError(TranslatableError, ValueError):
    """Raised when a locale string fails validation"""

    error_code = ErrorCode.INVALID_LOCALE

    def __init__(self, locale: Any):
        super().__init__(
            message=f'Invalid locale "{locale}"',
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"locale": locale},
        )


# ============================================================================
# Authorization Exceptions
# ============================================================================


class PermissionFailureError(TranslatableError):
    """Raised when the acting user may not edit the given locale"""

    error_code = ErrorCode.PERMISSION_DENIED

    def __init__(self, locale: str, message: str | None = None):
        super().__init__(
            message=message or f"You're not allowed to edit the locale '{locale}' for this object",
            status_code=status.HTTP_403_FORBIDDEN,
            details={"locale": locale},
        )
        self.locale = locale


# ============================================================================
# Resource Exceptions
# ============================================================================


class ResourceNotFoundError(TranslatableError):
    """Raised when a requested resource does not exist"""

    error_code = ErrorCode.RESOURCE_NOT_FOUND

    def __init__(self, resource_type: str, resource_id: Any | None = None):
        message = f"{resource_type} not found"
        if resource_id is not None:
            message = f"{resource_type} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )
