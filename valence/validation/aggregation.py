"""Aggregation descriptors and the status fold shared by all combinators.

AND/OR fold a fixed list of children; ANY/ALL fold the statuses produced by
applying one child to each container element. Both use Combinator.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from valence.validation.status import Status


class AggregationKind(str, Enum):
    AND = "and"
    OR = "or"
    NOT = "not"
    ANY = "any"
    ALL = "all"


class ElementModifier(str, Enum):
    """Which side of a container ANY/ALL iterate: values, or the keys of a mapping."""
    VALUES = "values"
    KEYS = "keys"


@dataclass(frozen=True, slots=True)
class AggregationDescriptor:
    """Presentation of an aggregation node in reports.

    Tokens are canonical phrase keys; the translator turns them into the
    active locale's text at report time.
    """
    kind: AggregationKind
    open_token: str
    close_token: str
    conjunction: str
    description: str = ""

    @property
    def always_open(self) -> bool:
        """NOT/ANY/ALL show their open token even around a single part."""
        return self.kind in (AggregationKind.NOT, AggregationKind.ANY, AggregationKind.ALL)

    @property
    def element_wise(self) -> bool: return self.kind in (AggregationKind.ANY, AggregationKind.ALL)


AND_DESCRIPTOR = AggregationDescriptor(AggregationKind.AND, "(", ")", " AND ")
OR_DESCRIPTOR = AggregationDescriptor(AggregationKind.OR, "(", ")", " OR ")
NOT_DESCRIPTOR = AggregationDescriptor(AggregationKind.NOT, "NOT ", "", "")

_ELEMENT_DESCRIPTIONS = {
    (AggregationKind.ANY, ElementModifier.VALUES): "at least one element",
    (AggregationKind.ANY, ElementModifier.KEYS): "at least one key",
    (AggregationKind.ALL, ElementModifier.VALUES): "each element",
    (AggregationKind.ALL, ElementModifier.KEYS): "each key",
}


def element_descriptor(kind: AggregationKind, modifier: ElementModifier) -> AggregationDescriptor:
    """Descriptor for ANY/ALL; the description names the element in member paths."""
    conjunction = " OR " if kind is AggregationKind.ANY else " AND "
    return AggregationDescriptor(kind, "", "", conjunction, _ELEMENT_DESCRIPTIONS[(kind, modifier)])


# ============================================================================
# Status Fold
# ============================================================================

@dataclass(frozen=True, slots=True)
class Combinator:
    """Short-circuit fold over child statuses.

    Stops at the first `stop_on` status and returns it. Otherwise returns the
    last non-ignored status, or IGNORE when every child was ignored. The
    fold is lazy: statuses are pulled from the iterable one at a time so
    children after the stopping point are never evaluated.
    """
    stop_on: Status

    def fold(self, statuses: Iterable[Status]) -> Status:
        seen = Status.IGNORE
        for status in statuses:
            if status is self.stop_on:
                return status
            if status is not Status.IGNORE:
                seen = status
        return seen


AND_FOLD = Combinator(stop_on=Status.FAIL)
OR_FOLD = Combinator(stop_on=Status.SUCCESS)
