"""
Pytest configuration and fixtures for translatable tests
"""

import os
import sys
from types import SimpleNamespace

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

from translatable.config import Settings
from translatable.core.cache import CollectorCache
from translatable.core.engine import TranslatableEngine
from translatable.i18n.context import LocaleService, current_locale_var
from translatable.services.identity_service import current_actor_var, unattended_var

TARGET_LOCALES = ["en_US", "fr_FR", "de_DE"]


class FakeRegistry:
    """In-memory schema registry.

    ``fields`` maps schema classes to their declared {field: type tag};
    ``config`` maps (schema, key) to explicit configuration.  Every call to
    ``declared_fields`` is counted and may run ``on_declared`` first.
    """

    def __init__(self, fields=None, config=None):
        self.fields = fields or {}
        self.config = config or {}
        self.declared_calls = 0
        self.on_declared = None

    def declared_fields(self, schema):
        self.declared_calls += 1
        if self.on_declared is not None:
            self.on_declared(schema)
        return dict(self.fields.get(schema, {}))

    def ancestry(self, schema):
        return [cls for cls in reversed(schema.__mro__) if cls in self.fields]

    def explicit_config(self, schema, key):
        return self.config.get((schema, key))

    def register(self, schema):
        pass

    def apply_columns(self, schema, fields):
        return list(fields)


@pytest.fixture
def make_actor():
    """Factory for actors carrying a plain permission list."""

    def _make(*permissions):
        return SimpleNamespace(permissions=list(permissions))

    return _make


@pytest.fixture(autouse=True)
def reset_request_context():
    """Make sure no locale or actor leaks between tests."""
    locale_token = current_locale_var.set(None)
    actor_token = current_actor_var.set(None)
    unattended_token = unattended_var.set(False)
    yield
    current_locale_var.reset(locale_token)
    current_actor_var.reset(actor_token)
    unattended_var.reset(unattended_token)


@pytest.fixture
def make_settings():
    """Factory for isolated settings (no .env, test environment)."""

    def _make(**overrides):
        values = {
            "environment": "test",
            "default_locale": "en_US",
            "translatable_locales": list(TARGET_LOCALES),
            "allowed_locales": None,
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def test_settings(make_settings):
    return make_settings()


@pytest.fixture
def locale_service(test_settings):
    return LocaleService(test_settings)


@pytest.fixture
def fake_registry():
    return FakeRegistry()


@pytest.fixture
def make_engine(make_settings):
    """Factory for engines with their own cache and settings."""

    def _make(registry=None, **overrides):
        return TranslatableEngine(make_settings(**overrides), registry=registry, cache=CollectorCache())

    return _make
