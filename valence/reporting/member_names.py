"""Member name formatting.

A path renders innermost key first, joined by the " of " conjunction:
member("order", "items", 0, size) -> "size of element #0 of items of order".

Custom traits may rename individual keys; returning None or "" hands the key
to the translator, which falls back to the default phrase table.
"""
from __future__ import annotations

from typing import Callable, Optional

from valence.reporting.strings import ELEMENT, MEMBER_NAME_CONJUNCTION
from valence.reporting.translator import NO_CATEGORIES, Phrase, PhraseTranslator
from valence.validation.members import Key, MemberRefKey, NameKey, Path

MemberNameTraits = Callable[[Key], Optional[str]]


class MemberNames:
    """Resolves path keys to localized names."""
    __slots__ = ("_translator", "_traits")

    def __init__(self, translator: PhraseTranslator, traits: MemberNameTraits | None = None):
        self._translator = translator
        self._traits = traits

    @property
    def translator(self) -> PhraseTranslator: return self._translator

    def key(self, key: Key, context: frozenset[str] = NO_CATEGORIES) -> Phrase:
        if self._traits is not None and (custom := self._traits(key)):
            return Phrase(custom)
        if isinstance(key, MemberRefKey):
            return self.path(key.member.keys, context)
        if isinstance(key, NameKey) and key.is_index:
            element = self._translator.translate(ELEMENT, context)
            return Phrase(f"{element.text}{key.name}", element.categories)
        return self._translator.translate(str(key.name), context)

    def path(self, path: Path, context: frozenset[str] = NO_CATEGORIES) -> Phrase:
        """Full name of a path; carries the categories of its head (first) word."""
        words: list[str] = []
        head: frozenset[str] | None = None
        for key in reversed(tuple(path)):
            if words:
                conjunction = self._translator.translate(MEMBER_NAME_CONJUNCTION, context)
                words.append(conjunction.text)
                context = conjunction.categories
            phrase = self.key(key, context)
            words.append(phrase.text)
            context = phrase.categories
            if head is None:
                head = phrase.categories
        return Phrase("".join(words), head or NO_CATEGORIES)

    def __call__(self, path: Path) -> str: return self.path(path).text
