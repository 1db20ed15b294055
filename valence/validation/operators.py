"""Leaf operator catalog.

Operators are plain binary predicates with a report phrase. The engine does
not care what they compute; it only calls them with the extracted value and
the operand and folds the boolean into a Status.
"""
from __future__ import annotations

import operator as _op
from collections.abc import Container
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable


class OperatorKind(str, Enum):
    COMPARE = "compare"
    FLAG = "flag"
    EXISTS = "exists"


@dataclass(frozen=True, slots=True)
class Operator:
    """Binary predicate `fn(value, operand) -> bool` with its report phrase.

    For FLAG and EXISTS the phrase depends on the boolean operand, so
    `negated_description` carries the phrase used when the operand is False.
    """
    name: str
    description: str
    fn: Callable[[Any, Any], bool]
    kind: OperatorKind = OperatorKind.COMPARE
    negated_description: str = ""

    def __call__(self, value: Any, operand: Any) -> bool: return bool(self.fn(value, operand))

    def phrase(self, operand: Any = True) -> str:
        if self.kind is OperatorKind.COMPARE:
            return self.description
        return self.description if operand else self.negated_description

    @property
    def takes_bool(self) -> bool: return self.kind is not OperatorKind.COMPARE

    def __repr__(self) -> str: return f"Operator({self.name!r})"


# ============================================================================
# Comparison
# ============================================================================

eq = Operator("eq", "must be equal to", _op.eq)
ne = Operator("ne", "must be not equal to", _op.ne)
lt = Operator("lt", "must be less than", _op.lt)
lte = Operator("lte", "must be less than or equal to", _op.le)
gt = Operator("gt", "must be greater than", _op.gt)
gte = Operator("gte", "must be greater than or equal to", _op.ge)

# ============================================================================
# Membership
# ============================================================================

contains = Operator("contains", "must contain", lambda a, b: b in a)
in_ = Operator("in", "must be in", lambda a, b: a in b)

# ============================================================================
# Flags and Existence
# ============================================================================

flag = Operator("flag", "must be true", lambda a, b: bool(a) is b, OperatorKind.FLAG, "must be false")
exists = Operator("exists", "must exist", lambda a, b: a is b, OperatorKind.EXISTS, "must not exist")

BUILTIN_OPERATORS: tuple[Operator, ...] = (eq, ne, lt, lte, gt, gte, contains, in_, flag, exists)


def wrap_op(fn: Callable[[Any, Any], bool], description: str, name: str | None = None) -> Operator:
    """Turn any binary predicate into an operator with a custom report phrase."""
    return Operator(name or getattr(fn, "__name__", "custom"), description, fn)


def accepts_operand(op: Operator, operand: Any) -> bool:
    """Composition-time operand check for operators with a fixed operand shape."""
    if op.takes_bool:
        return isinstance(operand, bool)
    if op is in_:
        return isinstance(operand, Container)
    return True


# ============================================================================
# Operands
# ============================================================================

@dataclass(frozen=True, slots=True)
class Lazy:
    """Operand computed at check time instead of composition time."""
    fn: Callable[[], Any]

    def resolve(self) -> Any: return self.fn()


def lazy(fn: Callable[[], Any]) -> Lazy:
    return Lazy(fn)
