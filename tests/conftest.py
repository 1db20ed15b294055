"""Shared fixtures: every test starts from default settings and empty registries."""
from __future__ import annotations

import pytest

from valence.core.config import get_settings
from valence.core.logging import LoggerRegistry
from valence.reporting.translator import register_builtin_locale, reset_repository
from valence.validation.capabilities import reset_registry
from valence.validation.status import Status
from valence.validation.validators import Validator

SETTINGS_ENV = (
    "VALENCE_LOG_LEVEL",
    "VALENCE_LOG_JSON",
    "VALENCE_DEFAULT_LOCALE",
    "VALENCE_QUOTE_STRINGS",
    "VALENCE_STRICT_ANY",
    "VALENCE_ALL_EMPTY_STATUS",
    "VALENCE_CHECK_MEMBER_EXISTS",
)


@pytest.fixture(autouse=True)
def clean_state(monkeypatch):
    """Reset settings, locales and container capabilities around each test"""
    for name in SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    reset_repository()
    reset_registry()
    LoggerRegistry.clear()
    yield
    get_settings.cache_clear()
    reset_repository()
    reset_registry()
    LoggerRegistry.clear()


@pytest.fixture
def ru():
    """Russian locale with names for the members used in tests"""
    return register_builtin_locale("ru", extra={
        "tags": [
            {"text": "теги", "emits": ["plural"]},
            {"text": "тегов", "requires": ["genitive"], "emits": ["plural"]},
        ],
        "age": [
            {"text": "возраст", "emits": ["masculine", "singular"]},
            {"text": "возраста", "requires": ["genitive"], "emits": ["masculine", "singular"]},
        ],
        "name": [
            {"text": "имя", "emits": ["neuter", "singular"]},
            {"text": "имени", "requires": ["genitive"], "emits": ["neuter", "singular"]},
        ],
        "user": [
            {"text": "пользователь", "emits": ["masculine", "singular"]},
            {"text": "пользователя", "requires": ["genitive"], "emits": ["masculine", "singular"]},
        ],
    })


class Fixed(Validator):
    """Validator returning a preset status and counting its calls."""

    def __init__(self, status: Status):
        self.status = status
        self.calls = 0

    def check(self, adapter, path=()):
        self.calls += 1
        return self.status


@pytest.fixture
def fixed():
    return Fixed
