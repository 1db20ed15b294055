"""What a node hands to the adapter hooks.

Aggregations pass their AggregationDescriptor; leaves and hints pass one of
the records below. Plain adapters ignore them, reporting adapters turn them
into text, prevalidation adapters use them to track the checked member.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from valence.validation.members import Path
from valence.validation.operators import Operator
from valence.validation.properties import Property


@dataclass(frozen=True, slots=True)
class LeafPresentation:
    """One leaf check at a concrete position in the validator tree.

    operand is the resolved operand (lazy operands already evaluated), or the
    MemberOperand / MasterSample itself so reports can name it.
    missing marks a check that failed because its path does not resolve.
    """
    path: Path
    prop: Property
    operator: Operator
    operand: Any
    missing: bool = False


@dataclass(frozen=True, slots=True)
class HintPresentation:
    text: str
