"""Adapters: the per-call traversal context every validator runs against.

An adapter binds one target value to one traits object. Traits decide what
the hooks around each check do:

    PlainTraits          pass/fail only
    ReportingTraits      drive a Reporter that builds the failure sentence
    PrevalidationTraits  validate one candidate member before an update

Adapters are single-use. Descending into container elements goes through
derive(), which returns a fresh adapter with its own copy of the traits.

Paths handed to an adapter are always full paths from the validation root.
`base` is the part of that path the adapter's target already stands for:
empty for a root adapter, the element path for a derived one, and the
updated member for a prevalidation adapter.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Iterable, Union

from valence.core.config import get_settings
from valence.validation.capabilities import CapabilityRegistry, get_registry
from valence.validation.members import (
    AggregationKey,
    Key,
    Member,
    MemberRefKey,
    NameKey,
    Path,
    PropertyKey,
)
from valence.validation.presentation import LeafPresentation
from valence.validation.status import Status

if TYPE_CHECKING:
    from valence.reporting.reporter import Reporter


class _Missing:
    __slots__ = ()

    def __repr__(self) -> str: return "MISSING"

    def __bool__(self) -> bool: return False


MISSING: Any = _Missing()


class Match(str, Enum):
    """How a path relates to the part of the data an adapter can see."""
    FULL = "full"            # the path is at or below the adapter's base
    ANCESTOR = "ancestor"    # the path addresses a container of the base
    UNRELATED = "unrelated"


# ============================================================================
# Traits
# ============================================================================

@dataclass(slots=True)
class PlainTraits:
    check_member_exists: bool = True

    reporter = None
    strict_any = False

    def before(self, presentation: Any) -> None:
        pass

    def after(self, status: Status, presentation: Any) -> Status: return status

    def absorb(self, other: PlainTraits) -> None:
        pass


@dataclass(slots=True)
class ReportingTraits:
    reporter: Reporter
    check_member_exists: bool = True

    strict_any = False

    def before(self, presentation: Any) -> None: self.reporter.before(presentation)

    def after(self, status: Status, presentation: Any) -> Status:
        self.reporter.after(status, presentation)
        return status

    def absorb(self, other: ReportingTraits) -> None:
        pass


@dataclass(slots=True)
class PrevalidationTraits:
    """Traits for checking a single candidate member.

    member_checked becomes True once a leaf actually evaluated the member.
    """
    member: Member
    reporter: Reporter | None = None
    strict_any: bool = False
    check_member_exists: bool = True
    member_checked: bool = False

    def before(self, presentation: Any) -> None:
        if self.reporter is not None:
            self.reporter.before(presentation)

    def after(self, status: Status, presentation: Any) -> Status:
        if isinstance(presentation, LeafPresentation) and status is not Status.IGNORE:
            self.member_checked = True
        if self.reporter is not None:
            self.reporter.after(status, presentation)
        return status

    def absorb(self, other: PrevalidationTraits) -> None:
        self.member_checked = self.member_checked or other.member_checked


AdapterTraits = Union[PlainTraits, ReportingTraits, PrevalidationTraits]


# ============================================================================
# Adapter
# ============================================================================

class Adapter:
    """Wraps the value under validation plus the active capability set."""
    __slots__ = ("_target", "_traits", "_base", "_concrete", "_root", "_registry")

    def __init__(
        self,
        target: Any,
        traits: AdapterTraits | None = None,
        *,
        base: Path = (),
        concrete: Path | None = None,
        root: Any = MISSING,
        registry: CapabilityRegistry | None = None,
    ):
        self._target = target
        self._traits = traits if traits is not None else PlainTraits(get_settings().CHECK_MEMBER_EXISTS)
        self._base = tuple(base)
        self._concrete = self._base if concrete is None else tuple(concrete)
        self._root = target if root is MISSING and not self._base else root
        self._registry = registry or get_registry()

    @property
    def target(self) -> Any: return self._target

    @property
    def traits(self) -> AdapterTraits: return self._traits

    @property
    def base(self) -> Path: return self._base

    @property
    def reporter(self) -> Reporter | None: return self._traits.reporter

    @property
    def strict_any(self) -> bool: return self._traits.strict_any

    @property
    def check_member_exists(self) -> bool: return self._traits.check_member_exists

    def derive(
        self,
        target: Any,
        base: Path,
        concrete: Path,
        transform: Callable[[AdapterTraits], AdapterTraits] | None = None,
    ) -> Adapter:
        """Adapter for a sub-element, with its own copy of the traits."""
        return Adapter(
            target,
            (transform or replace)(self._traits),
            base=base,
            concrete=concrete,
            root=self._root,
            registry=self._registry,
        )

    def absorb(self, derived: Adapter) -> None:
        """Fold state gathered by a derived adapter back into this one."""
        self._traits.absorb(derived.traits)

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def hint_before(self, presentation: Any) -> None: self._traits.before(presentation)

    def hint_after(self, status: Status, presentation: Any) -> Status:
        return self._traits.after(status, presentation)

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def match(self, path: Path) -> Match:
        for path_key, base_key in zip(path, self._base):
            if not self._keys_match(path_key, base_key):
                return Match.UNRELATED
        return Match.FULL if len(path) >= len(self._base) else Match.ANCESTOR

    def check_path_exists(self, path: Path) -> bool:
        """Probe whether a FULL path resolves, without reading the value at it."""
        relative = path[len(self._base):]
        if not relative:
            return self._target is not MISSING
        parent = self.walk(self._target, relative[:-1])
        return parent is not MISSING and self._key_exists(parent, relative[-1])

    def lookup(self, path: Path) -> Any:
        """Value at a FULL path, or MISSING."""
        return self.walk(self._target, path[len(self._base):])

    def concrete_path(self, path: Path) -> Path:
        """The path with element placeholders replaced by the keys actually taken."""
        return self._concrete + tuple(path[len(self._base):])

    def resolve_member(self, target: Member) -> Any:
        """Value of an absolute member of the root object, or MISSING."""
        if self._root is MISSING:
            return MISSING
        return self.walk(self._root, target.keys)

    def walk(self, current: Any, keys: Iterable[Key]) -> Any:
        """Follow keys from current; MISSING as soon as one does not resolve."""
        for key in keys:
            if not self._key_exists(current, key):
                return MISSING
            if isinstance(key, PropertyKey):
                current = key.prop.get(current)
            elif self._registry.readable(current):
                current = self._registry.get(current, self._key_value(key))
            else:
                return MISSING
        return current

    def _key_exists(self, current: Any, key: Key) -> bool:
        if isinstance(key, PropertyKey):
            return key.prop.applies_to(current)
        name = self._key_value(key)
        return name is not MISSING and self._registry.exists(current, name)

    def iterate(self, container: Any, aggregation: str) -> Iterable[tuple[Any, Any]]:
        return self._registry.items(container, aggregation)

    def _key_value(self, key: Key) -> Any:
        if isinstance(key, NameKey):
            return key.name
        if isinstance(key, MemberRefKey):
            return self.resolve_member(key.member)
        return MISSING

    def _resolve_key(self, key: Key) -> Key | None:
        if isinstance(key, MemberRefKey):
            resolved = self.resolve_member(key.member)
            return None if resolved is MISSING else NameKey(resolved)
        return key

    def _keys_match(self, path_key: Key, base_key: Key) -> bool:
        path_key, base_key = self._resolve_key(path_key), self._resolve_key(base_key)
        if path_key is None or base_key is None:
            return False
        if isinstance(path_key, AggregationKey):
            return path_key.matches(base_key)
        return path_key == base_key

    def __repr__(self) -> str:
        return f"{type(self).__name__}(traits={type(self._traits).__name__}, base={self._base!r})"


class PrevalidationAdapter(Adapter):
    """Adapter validating one candidate member value before an update.

    Checks on other members are ignored. The live object (root) is optional;
    without it member operands and dynamic keys cannot be resolved.
    """
    __slots__ = ()

    def __init__(
        self,
        target_member: Member,
        candidate: Any,
        reporter: Reporter | None = None,
        *,
        root: Any = MISSING,
        strict_any: bool | None = None,
        check_member_exists: bool = True,
        registry: CapabilityRegistry | None = None,
    ):
        if strict_any is None:
            strict_any = get_settings().STRICT_ANY
        traits = PrevalidationTraits(target_member, reporter, strict_any, check_member_exists)
        super().__init__(candidate, traits, base=target_member.keys, root=root, registry=registry)

    @property
    def member(self) -> Member: return self._traits.member

    @property
    def member_checked(self) -> bool: return self._traits.member_checked

    def set_strict_any(self, enable: bool) -> None:
        """ANY over an empty container fails instead of being ignored."""
        self._traits.strict_any = enable

    def set_member_exists_checked_before_validation(self, enable: bool) -> None:
        self._traits.check_member_exists = enable


# ============================================================================
# Factories
# ============================================================================

def make_adapter(value: Any, *, check_member_exists: bool | None = None) -> Adapter:
    if check_member_exists is None:
        check_member_exists = get_settings().CHECK_MEMBER_EXISTS
    return Adapter(value, PlainTraits(check_member_exists))


def make_reporting_adapter(value: Any, reporter: Reporter, *, check_member_exists: bool | None = None) -> Adapter:
    if check_member_exists is None:
        check_member_exists = get_settings().CHECK_MEMBER_EXISTS
    return Adapter(value, ReportingTraits(reporter, check_member_exists))


def make_prevalidation_adapter(
    target_member: Member,
    candidate: Any,
    reporter: Reporter | None = None,
    *,
    root: Any = MISSING,
    strict_any: bool | None = None,
    check_member_exists: bool = True,
) -> PrevalidationAdapter:
    return PrevalidationAdapter(
        target_member,
        candidate,
        reporter,
        root=root,
        strict_any=strict_any,
        check_member_exists=check_member_exists,
    )
