"""Canonical phrase keys and the default (English) phrase table.

Phrase keys are the English texts themselves, so an untranslated key still
reads correctly. The default table is built once per process on first use
and is read-only afterwards.
"""
from __future__ import annotations

import threading
from types import MappingProxyType
from typing import Mapping, Optional

from valence.validation.aggregation import (
    AND_DESCRIPTOR,
    NOT_DESCRIPTOR,
    OR_DESCRIPTOR,
    AggregationKind,
    ElementModifier,
    element_descriptor,
)
from valence.validation.operators import BUILTIN_OPERATORS
from valence.validation.properties import BUILTIN_PROPERTIES

# ============================================================================
# Special Phrases
# ============================================================================

TRUE = "true"
FALSE = "false"
SAMPLE = "sample"
CONJUNCTION_OF = "of"
MEMBER_NAME_CONJUNCTION = " of "
ELEMENT = "element #"
MUST_EXIST = "must exist"
MUST_NOT_EXIST = "must not exist"

SPECIAL_PHRASES: tuple[str, ...] = (
    TRUE, FALSE, SAMPLE, CONJUNCTION_OF, MEMBER_NAME_CONJUNCTION, ELEMENT, MUST_EXIST, MUST_NOT_EXIST,
)


def _builtin_phrases() -> list[str]:
    phrases = list(SPECIAL_PHRASES)
    phrases += [p.name for p in BUILTIN_PROPERTIES]
    for prop in BUILTIN_PROPERTIES:
        phrases += list(prop.flag_phrases)
    for op in BUILTIN_OPERATORS:
        phrases += [op.description, op.negated_description]
    for descriptor in (AND_DESCRIPTOR, OR_DESCRIPTOR, NOT_DESCRIPTOR):
        phrases += [descriptor.open_token, descriptor.close_token, descriptor.conjunction]
    for kind in (AggregationKind.ANY, AggregationKind.ALL):
        for modifier in ElementModifier:
            descriptor = element_descriptor(kind, modifier)
            phrases += [descriptor.description, descriptor.conjunction]
    return list(dict.fromkeys(p for p in phrases if p))


_default_strings: Optional[Mapping[str, str]] = None
_default_strings_lock = threading.Lock()


def default_strings() -> Mapping[str, str]:
    """Process-wide default phrase table, built on first use."""
    global _default_strings

    if _default_strings is None:
        with _default_strings_lock:
            if _default_strings is None:
                _default_strings = MappingProxyType({phrase: phrase for phrase in _builtin_phrases()})

    return _default_strings
