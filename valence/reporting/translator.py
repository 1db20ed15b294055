"""Phrase translation with grammatical categories.

Every phrase key maps to one or more variants. A variant may require
categories from the phrase before it ("genitive", "plural", ...) and may
emit categories for the phrase after it. Lookups pick the most specific
variant whose requirements the context satisfies, so agreement is a small
piece of state threaded left to right through a sentence.

Locales register a plain mapping:

    register_translations("ru", {
        "size": {"text": "размер", "emits": ["masculine", "singular"]},
        "must be greater than": [
            {"text": "должен быть больше"},
            {"text": "должна быть больше", "requires": ["feminine"]},
        ],
    })

Missing keys fall back to the default (English) table, then to the key.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from pydantic import BaseModel, TypeAdapter, ValidationError, field_validator

from valence.core.config import get_settings
from valence.core.errors import AppError, Result, invalid_locale, ok, raise_result, unknown_locale
from valence.core.logging import locale_logger
from valence.reporting.locale import BUILTIN_LOCALES
from valence.reporting.strings import default_strings

NO_CATEGORIES: frozenset[str] = frozenset()


class PhraseVariant(BaseModel):
    """One localized form of a phrase."""
    text: str
    requires: frozenset[str] = frozenset()
    emits: frozenset[str] = frozenset()

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("requires", "emits", mode="before")
    @classmethod
    def _single_category(cls, v: Any) -> Any:
        return [v] if isinstance(v, str) else v


@dataclass(frozen=True, slots=True)
class Phrase:
    """Translated text plus the categories it hands to the next phrase."""
    text: str
    categories: frozenset[str] = NO_CATEGORIES


PhraseTable = dict[str, tuple[PhraseVariant, ...]]

_VariantList = TypeAdapter(dict[str, list[PhraseVariant]])


# ============================================================================
# Parsing
# ============================================================================

def _normalize(entry: Any) -> Any:
    if isinstance(entry, (str, PhraseVariant)):
        return [{"text": entry} if isinstance(entry, str) else entry.model_dump()]
    if isinstance(entry, Mapping):
        return [entry]
    if isinstance(entry, (list, tuple)):
        return [{"text": e} if isinstance(e, str) else e for e in entry]
    return entry


def parse_translations(locale: str, mapping: Mapping[str, Any]) -> Result[PhraseTable, AppError]:
    """Parse `phrase -> text | variant | [text | variant, ...]` into a phrase table."""
    if not isinstance(mapping, Mapping):
        return invalid_locale(locale, f"expected a mapping, got {type(mapping).__name__}")
    try:
        parsed = _VariantList.validate_python({str(k): _normalize(v) for k, v in mapping.items()})
    except ValidationError as exc:
        first = exc.errors()[0]
        phrase = str(first["loc"][0]) if first.get("loc") else None
        return invalid_locale(locale, first["msg"], phrase=phrase, cause=exc)
    empty = [key for key, variants in parsed.items() if not variants]
    if empty:
        return invalid_locale(locale, "phrase has no variants", phrase=empty[0])
    return ok({key: tuple(variants) for key, variants in parsed.items()})


# ============================================================================
# Translator
# ============================================================================

class PhraseTranslator:
    """Immutable phrase table for one locale."""
    __slots__ = ("_locale", "_table", "_fallback")

    def __init__(self, locale: str, table: PhraseTable, fallback: PhraseTranslator | None = None):
        self._locale = locale
        self._table = dict(table)
        self._fallback = fallback

    @property
    def locale(self) -> str: return self._locale

    def __contains__(self, key: str) -> bool: return key in self._table

    def __len__(self) -> int: return len(self._table)

    def __call__(self, key: str) -> str: return self.translate(key).text

    def translate(self, key: str, context: frozenset[str] = NO_CATEGORIES) -> Phrase:
        """Most specific variant of `key` whose requirements `context` satisfies."""
        variants = self._table.get(key)
        if variants is None:
            if self._fallback is not None:
                return self._fallback.translate(key, context)
            return Phrase(key)
        best = None
        for variant in variants:
            if variant.requires <= context and (best is None or len(variant.requires) > len(best.requires)):
                best = variant
        best = best or variants[0]
        return Phrase(best.text, best.emits)

    def __repr__(self) -> str: return f"PhraseTranslator({self._locale!r}, phrases={len(self._table)})"


def _default_translator() -> PhraseTranslator:
    return PhraseTranslator("en", {k: (PhraseVariant(text=v),) for k, v in default_strings().items()})


def locale_candidates(locale: str) -> list[str]:
    """`ru_RU.UTF-8` -> ["ru_RU.UTF-8", "ru_RU", "ru"]."""
    candidates = [locale]
    if (base := locale.split(".", 1)[0]) != locale:
        candidates.append(base)
    for sep in ("_", "-"):
        if sep in base:
            candidates.append(base.split(sep, 1)[0])
            break
    return candidates


# ============================================================================
# Repository
# ============================================================================

class TranslatorRepository:
    """Process-wide locale registry. The default translator is built lazily."""

    def __init__(self) -> None:
        self._translators: dict[str, PhraseTranslator] = {}
        self._default: Optional[PhraseTranslator] = None
        self._lock = threading.Lock()

    @property
    def default(self) -> PhraseTranslator:
        if self._default is None:
            with self._lock:
                if self._default is None:
                    self._default = _default_translator()
        return self._default

    def register(self, locale: str, table: PhraseTable) -> PhraseTranslator:
        translator = PhraseTranslator(locale, table, fallback=self.default)
        with self._lock:
            self._translators[locale] = translator
        locale_logger().info("translations_registered", locale=locale, phrases=len(translator))
        return translator

    def find(self, locale: str | None = None) -> PhraseTranslator:
        """Translator for a locale, trying less specific names before the default."""
        locale = locale or get_settings().DEFAULT_LOCALE
        for candidate in locale_candidates(locale):
            if (translator := self._translators.get(candidate)) is not None:
                if candidate != locale:
                    locale_logger().debug("locale_fallback", requested=locale, used=candidate)
                return translator
        if locale != self.default.locale:
            locale_logger().debug("locale_fallback", requested=locale, used="default")
        return self.default

    def locales(self) -> list[str]: return sorted(self._translators)


_global_repository: Optional[TranslatorRepository] = None
_global_repository_lock = threading.Lock()


def get_repository() -> TranslatorRepository:
    global _global_repository

    if _global_repository is None:
        with _global_repository_lock:
            if _global_repository is None:
                _global_repository = TranslatorRepository()

    return _global_repository


def reset_repository() -> None:
    """Forget every registered locale (test helper)."""
    global _global_repository
    with _global_repository_lock:
        _global_repository = None


def register_translations(locale: str, mapping: Mapping[str, Any]) -> PhraseTranslator:
    """Parse and register a locale; raises LocaleError on a malformed mapping."""
    result = parse_translations(locale, mapping)
    raise_result(result)
    return get_repository().register(locale, result.unwrap())


def load_translations(locale: str, path: str | Path) -> PhraseTranslator:
    """Register a locale from a YAML file holding the same mapping register_translations takes."""
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise_result(invalid_locale(locale, f"cannot read {path.name}: {exc}", cause=exc))
    return register_translations(locale, data)


def get_translator(locale: str | None = None) -> PhraseTranslator:
    return get_repository().find(locale)


def register_builtin_locale(name: str, extra: Mapping[str, Any] | None = None) -> PhraseTranslator:
    """Register a locale shipped with the package, optionally extended with extra phrases."""
    if name not in BUILTIN_LOCALES:
        raise_result(unknown_locale(name, sorted(BUILTIN_LOCALES)))
    return register_translations(name, {**BUILTIN_LOCALES[name], **(extra or {})})
