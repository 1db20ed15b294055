"""Member paths.

A Member is an ordered, non-empty tuple of keys addressing a location inside
nested data. Keys are immutable and compare by value, so two independently
built members with the same keys address the same location.

    member("user", "tags")          # literal names
    _["items"][0]                   # root builder, integer index
    member("tags")[size]            # property as a path key
    member("items")[_["selected"]]  # dynamic key read from the root at check time
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from valence.core.errors import definition_error, invalid_arguments, raise_result
from valence.validation.aggregation import AggregationKind, ElementModifier, element_descriptor
from valence.validation.operators import gt, gte, lt, lte
from valence.validation.properties import Property


# ============================================================================
# Keys
# ============================================================================

@dataclass(frozen=True, slots=True)
class NameKey:
    """Literal attribute name, mapping key or sequence index."""
    name: str | int

    @property
    def is_index(self) -> bool: return isinstance(self.name, int)


@dataclass(frozen=True, slots=True)
class PropertyKey:
    prop: Property

    @property
    def name(self) -> str: return self.prop.name


@dataclass(frozen=True, slots=True)
class MemberRefKey:
    """Key whose concrete value is read from another member of the root object."""
    member: Member

    @property
    def name(self) -> str: return self.member.name


@dataclass(frozen=True, slots=True)
class AggregationKey:
    """Placeholder for "an element" inside ANY/ALL. Matches any concrete index."""
    kind: AggregationKind
    modifier: ElementModifier = ElementModifier.VALUES

    @property
    def name(self) -> str: return element_descriptor(self.kind, self.modifier).description

    def matches(self, key: Key) -> bool:
        if key == self:
            return True
        return self.modifier is ElementModifier.VALUES and isinstance(key, NameKey)


Key = Union[NameKey, PropertyKey, MemberRefKey, AggregationKey]
Path = tuple  # tuple[Key, ...]; the empty path addresses the root


def to_key(raw: Any) -> Key:
    if isinstance(raw, (NameKey, PropertyKey, MemberRefKey, AggregationKey)):
        return raw
    if isinstance(raw, bool):
        raise_result(invalid_arguments("member key", (raw,), "str, int, property or member"))
    if isinstance(raw, (str, int)):
        return NameKey(raw)
    if isinstance(raw, Property):
        return PropertyKey(raw)
    if isinstance(raw, Member):
        return MemberRefKey(raw)
    raise_result(invalid_arguments("member key", (raw,), "str, int, property or member"))


def path_name(path: Path) -> str:
    """Debug rendering of a path, used in logs and reprs."""
    return ".".join(str(k.name) if not isinstance(k, MemberRefKey) else f"[{k.name}]" for k in path)


# ============================================================================
# Member
# ============================================================================

class Member:
    """Ordered key sequence from a validation root to a target location.

    Comparison operators build leaves (`member("age") >= 18`); calling a member
    wraps a validator so that it applies to the addressed location.
    Equality is object identity; compare paths with same_path().
    """
    __slots__ = ("keys",)

    def __init__(self, keys: tuple[Key, ...]):
        if not keys:
            raise_result(definition_error("member path must not be empty"))
        self.keys = tuple(keys)

    @property
    def name(self) -> str: return path_name(self.keys)

    def __getitem__(self, key: Any) -> Member: return Member(self.keys + (to_key(key),))

    def __call__(self, *args):
        from valence.validation.validators import MemberValidator, validator
        return MemberValidator(self, validator(*args))

    def __ge__(self, other: Any): return self(gte, other)

    def __gt__(self, other: Any): return self(gt, other)

    def __le__(self, other: Any): return self(lte, other)

    def __lt__(self, other: Any): return self(lt, other)

    def same_path(self, other: Member) -> bool: return self.keys == other.keys

    def __len__(self) -> int: return len(self.keys)

    def __repr__(self) -> str: return f"Member({self.name})"


def member(*keys: Any) -> Member:
    """Build a member from literal names, indexes, properties or members."""
    return Member(tuple(to_key(k) for k in keys))


class _RootBuilder:
    """`_["a"]["b"]` shorthand for member("a", "b")."""
    __slots__ = ()

    def __getitem__(self, key: Any) -> Member: return Member((to_key(key),))

    def __repr__(self) -> str: return "_"


_ = _RootBuilder()


def as_member(target: Member | str | int | tuple) -> Member:
    """Accept a Member or the raw keys of one."""
    if isinstance(target, Member):
        return target
    if isinstance(target, tuple):
        return member(*target)
    return member(target)


# ============================================================================
# Operands referring to members
# ============================================================================

@dataclass(frozen=True, slots=True)
class MemberOperand:
    """Operand read from another member of the root object at check time."""
    member: Member


@dataclass(frozen=True, slots=True)
class MasterSample:
    """Operand read from the same location of a sample object."""
    sample: Any


def master_sample(sample: Any) -> MasterSample:
    return MasterSample(sample)
