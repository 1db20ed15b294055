"""Sentence assembly for leaf checks.

A leaf sentence is a short sequence of parts joined by spaces:

    member op operand             "age must be greater than or equal to 18"
    prop of member op operand     "size of tags must be less than 3"
    member op other member        "a must be greater than b"
    member op member of sample    "a must be equal to a of sample"
    member flag-phrase            "tags must be empty"
    op operand                    "must be equal to 1" (no member)

Each part is translated with the categories the previous part emitted, so
predicates can agree with their subject.
"""
from __future__ import annotations

from typing import Any, Callable

from valence.core.config import get_settings
from valence.reporting.member_names import MemberNames
from valence.reporting.strings import CONJUNCTION_OF, FALSE, MUST_EXIST, SAMPLE, TRUE
from valence.reporting.translator import NO_CATEGORIES, Phrase, PhraseTranslator
from valence.validation.members import MasterSample, MemberOperand, Path, PropertyKey
from valence.validation.operators import OperatorKind
from valence.validation.presentation import LeafPresentation
from valence.validation.properties import Property

Decorator = Callable[[Any], str]
Part = Callable[[frozenset], Phrase]


# ============================================================================
# Operand Decorators
# ============================================================================

def identity_decorator(value: Any) -> str: return str(value)


class QuotesDecorator:
    """Wrap string operands in quotes: must be equal to "admin". Other values are left bare."""
    __slots__ = ("quote",)

    def __init__(self, quote: str = '"'):
        self.quote = quote

    def __call__(self, value: Any) -> str:
        return f"{self.quote}{value}{self.quote}" if isinstance(value, str) else str(value)


def default_decorator() -> Decorator:
    return QuotesDecorator() if get_settings().QUOTE_STRINGS else identity_decorator


# ============================================================================
# Formatter
# ============================================================================

def _with_property(path: Path, prop: Property) -> Path:
    return tuple(path) if prop.is_value() else tuple(path) + (PropertyKey(prop),)


class Formatter:
    """Turns leaf presentations and tokens into localized text."""
    __slots__ = ("_names", "_decorator")

    def __init__(self, member_names: MemberNames, decorator: Decorator | None = None):
        self._names = member_names
        self._decorator = decorator or default_decorator()

    @property
    def translator(self) -> PhraseTranslator: return self._names.translator

    def token(self, key: str) -> str: return self.translator(key) if key else ""

    def format_value(self, value: Any, context: frozenset[str] = NO_CATEGORIES) -> Phrase:
        """Booleans go through the translator, every other operand through the decorator."""
        if isinstance(value, bool):
            return self.translator.translate(TRUE if value else FALSE, context)
        return Phrase(self._decorator(value))

    def leaf(self, presentation: LeafPresentation) -> str:
        p = presentation
        op = p.operator
        if p.missing or op.kind is OperatorKind.EXISTS:
            subject = tuple(p.path)
            predicate = MUST_EXIST if p.missing else op.phrase(p.operand)
            return self._join(self._subject(subject) + [self._phrase(predicate)])
        if op.kind is OperatorKind.FLAG:
            subject = _with_property(p.path, p.prop) if p.prop.prepend_for_flag else tuple(p.path)
            return self._join(self._subject(subject) + [self._phrase(p.prop.flag_phrase(p.operand))])

        subject = _with_property(p.path, p.prop)
        return self._join(self._subject(subject) + [self._phrase(op.description)] + self._operand(p, subject))

    # ------------------------------------------------------------------

    def _subject(self, path: Path) -> list[Part]:
        if not path:
            return []
        return [lambda context: self._names.path(path, context)]

    def _phrase(self, key: str) -> Part:
        return lambda context: self.translator.translate(key, context)

    def _operand(self, p: LeafPresentation, subject: Path) -> list[Part]:
        if isinstance(p.operand, MemberOperand):
            other = _with_property(p.operand.member.keys, p.prop)
            return [lambda context: self._names.path(other, context)]
        if isinstance(p.operand, MasterSample):
            return self._subject(subject) + [self._phrase(CONJUNCTION_OF), self._phrase(SAMPLE)]
        return [lambda context: self.format_value(p.operand, context)]

    @staticmethod
    def _join(parts: list[Part]) -> str:
        words: list[str] = []
        context: frozenset[str] = NO_CATEGORIES
        for part in parts:
            phrase = part(context)
            context = phrase.categories
            if phrase.text:
                words.append(phrase.text)
        return " ".join(words)
