"""Failure Reporting

Turns a failed check into one localized sentence. Reporter frames mirror
the aggregation tree; Formatter assembles leaf sentences; PhraseTranslator
picks phrase variants by grammatical category.

Usage:
    from valence.reporting import register_builtin_locale, get_translator

    register_builtin_locale("ru", extra={"age": {"text": "возраст", "emits": ["masculine"]}})
    translator = get_translator("ru_RU.UTF-8")   # falls back to "ru"
"""
from .translator import (
    NO_CATEGORIES,
    Phrase,
    PhraseTranslator,
    PhraseVariant,
    TranslatorRepository,
    get_repository,
    get_translator,
    load_translations,
    locale_candidates,
    parse_translations,
    register_builtin_locale,
    register_translations,
    reset_repository,
)

from .strings import default_strings

from .member_names import MemberNames, MemberNameTraits

from .formatter import (
    Formatter,
    QuotesDecorator,
    identity_decorator,
)

from .reporter import Reporter

__all__ = [
    # Translation
    "NO_CATEGORIES",
    "Phrase",
    "PhraseTranslator",
    "PhraseVariant",
    "TranslatorRepository",
    "get_repository",
    "get_translator",
    "load_translations",
    "locale_candidates",
    "parse_translations",
    "register_builtin_locale",
    "register_translations",
    "reset_repository",
    "default_strings",
    # Formatting
    "MemberNames",
    "MemberNameTraits",
    "Formatter",
    "QuotesDecorator",
    "identity_decorator",
    "Reporter",
]
