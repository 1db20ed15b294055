"""Compositional Validator Tree

Validators are immutable nodes built once and checked many times against
per-call adapters. Leaves compare one extracted value with an operand;
aggregations combine child statuses:

    AND   stop at the first fail; ignored children do not count
    OR    stop at the first success
    NOT   swap success and fail, ignore passes through
    ANY   at least one container element passes
    ALL   every container element passes

Validators compose with & (AND), | (OR) and ~ (NOT), like any other value:

    rule = (member("age") >= 18) & member("tags")(ANY(eq, "admin"))
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from valence.core.config import get_settings
from valence.core.errors import (
    definition_error,
    incompatible_operand,
    invalid_arguments,
    property_not_applicable,
    raise_result,
)
from valence.validation.adapters import MISSING, Adapter, Match
from valence.validation.aggregation import (
    AND_DESCRIPTOR,
    AND_FOLD,
    NOT_DESCRIPTOR,
    OR_DESCRIPTOR,
    OR_FOLD,
    AggregationDescriptor,
    AggregationKind,
    Combinator,
    ElementModifier,
    element_descriptor,
)
from valence.validation.members import (
    AggregationKey,
    MasterSample,
    Member,
    MemberOperand,
    NameKey,
    Path,
)
from valence.validation.operators import Lazy, Operator, OperatorKind, accepts_operand, exists
from valence.validation.presentation import HintPresentation, LeafPresentation
from valence.validation.properties import Property, value
from valence.validation.status import Status


class Validator(ABC):
    """Base class for validator nodes.

    Validators are immutable and composable via operators:
    - & (AND): both must pass
    - | (OR): at least one must pass
    - ~ (NOT): negates the validator
    """
    __slots__ = ()

    @abstractmethod
    def check(self, adapter: Adapter, path: Path = ()) -> Status:
        """Check the data the adapter wraps at `path`."""

    def __and__(self, other: Validator) -> Validator: return AND(self, other)

    def __or__(self, other: Validator) -> Validator: return OR(self, other)

    def __invert__(self) -> Validator: return NOT(self)

    def hint(self, text: str) -> Hint:
        """Replace the generated explanation of this subtree with a fixed phrase."""
        return Hint(self, text)


# ============================================================================
# Leaves
# ============================================================================

@dataclass(frozen=True, slots=True)
class Operation(Validator):
    """Leaf: `operator(prop(value at path), operand)`."""
    prop: Property
    operator: Operator
    operand: Any

    def check(self, adapter: Adapter, path: Path = ()) -> Status:
        if adapter.match(path) is not Match.FULL:
            return Status.IGNORE
        if self.operator.kind is OperatorKind.EXISTS:
            found = adapter.check_path_exists(path)
            return self._finish(adapter, path, self.operand, lambda: self.operator(found, self.operand))

        found = adapter.lookup(path)
        if found is MISSING:
            if adapter.check_member_exists:
                return Status.IGNORE
            presentation = LeafPresentation(path, self.prop, self.operator, self.operand, missing=True)
            adapter.hint_before(presentation)
            return adapter.hint_after(Status.FAIL, presentation)

        if (operand := self._resolve_operand(adapter, path)) is MISSING:
            return Status.IGNORE
        if not self.prop.applies_to(found):
            raise_result(property_not_applicable(self.prop.name, found))
        shown = self.operand if isinstance(self.operand, (MemberOperand, MasterSample)) else operand
        return self._finish(adapter, path, shown, lambda: self._compare(self.prop.get(found), operand))

    def _finish(self, adapter: Adapter, path: Path, shown: Any, evaluate) -> Status:
        presentation = LeafPresentation(path, self.prop, self.operator, shown)
        adapter.hint_before(presentation)
        return adapter.hint_after(Status.from_bool(evaluate()), presentation)

    def _compare(self, actual: Any, operand: Any) -> bool:
        try:
            return self.operator(actual, operand)
        except TypeError as exc:
            raise_result(incompatible_operand(self.operator.name, actual, operand, cause=exc))

    def _resolve_operand(self, adapter: Adapter, path: Path) -> Any:
        operand = self.operand
        if isinstance(operand, Lazy):
            return operand.resolve()
        if isinstance(operand, MemberOperand):
            return self._operand_property(adapter.resolve_member(operand.member))
        if isinstance(operand, MasterSample):
            return self._operand_property(adapter.walk(operand.sample, adapter.concrete_path(path)))
        return operand

    def _operand_property(self, found: Any) -> Any:
        if found is MISSING:
            return MISSING
        if not self.prop.applies_to(found):
            raise_result(property_not_applicable(self.prop.name, found))
        return self.prop.get(found)


def make_operation(prop: Property, *args: Any) -> Operation:
    """Build a leaf from `(operator, operand)`, checking what can be checked now."""
    if len(args) != 2 or not isinstance(args[0], Operator):
        raise_result(invalid_arguments(f"{prop.name}()", args, "(operator, operand)"))
    op, operand = args
    if isinstance(operand, Member):
        operand = MemberOperand(operand)
    if not isinstance(operand, (Lazy, MemberOperand, MasterSample)) and not accepts_operand(op, operand):
        expected = "a bool" if op.takes_bool else "a container"
        raise_result(definition_error(
            f"operator '{op.name}' requires {expected} operand, got {type(operand).__name__}",
            operator=op.name,
        ))
    return Operation(prop, op, operand)


@dataclass(frozen=True, slots=True)
class MemberValidator(Validator):
    """Apply a validator to the location a member addresses."""
    member: Member
    child: Validator

    def check(self, adapter: Adapter, path: Path = ()) -> Status:
        return self.child.check(adapter, tuple(path) + self.member.keys)


# ============================================================================
# Aggregations
# ============================================================================

@dataclass(frozen=True, slots=True)
class Aggregation(Validator):
    """AND/OR over a fixed list of children (short-circuit)."""
    descriptor: AggregationDescriptor
    combinator: Combinator
    children: tuple[Validator, ...]

    def check(self, adapter: Adapter, path: Path = ()) -> Status:
        adapter.hint_before(self.descriptor)
        status = self.combinator.fold(child.check(adapter, path) for child in self.children)
        return adapter.hint_after(status, self.descriptor)

    def __and__(self, other: Validator) -> Validator:
        if self.descriptor.kind is AggregationKind.AND:
            return AND(*self.children, other)
        return AND(self, other)

    def __or__(self, other: Validator) -> Validator:
        if self.descriptor.kind is AggregationKind.OR:
            return OR(*self.children, other)
        return OR(self, other)


@dataclass(frozen=True, slots=True)
class Negation(Validator):
    child: Validator

    def check(self, adapter: Adapter, path: Path = ()) -> Status:
        adapter.hint_before(NOT_DESCRIPTOR)
        status = self.child.check(adapter, path).invert()
        return adapter.hint_after(status, NOT_DESCRIPTOR)

    def __invert__(self) -> Validator: return self.child


@dataclass(frozen=True, slots=True)
class ElementAggregation(Validator):
    """ANY/ALL: apply the child to each element of the container at path.

    Element paths carry an AggregationKey placeholder so reports read
    "at least one element of tags" instead of naming a concrete index.
    """
    kind: AggregationKind
    modifier: ElementModifier
    child: Validator
    empty_status: Status = Status.SUCCESS

    @property
    def descriptor(self) -> AggregationDescriptor: return element_descriptor(self.kind, self.modifier)

    @property
    def is_any(self) -> bool: return self.kind is AggregationKind.ANY

    def check(self, adapter: Adapter, path: Path = ()) -> Status:
        path = tuple(path)
        match = adapter.match(path)
        if match is Match.UNRELATED:
            return Status.IGNORE
        element_path = path + (AggregationKey(self.kind, self.modifier),)
        if match is Match.ANCESTOR:
            return self._check_single(adapter, element_path)

        container = adapter.lookup(path)
        if container is MISSING:
            if adapter.check_member_exists:
                return Status.IGNORE
            return Operation(value, exists, True).check(adapter, path)

        descriptor = self.descriptor
        adapter.hint_before(descriptor)
        status = self._fold(adapter, path, element_path, container)
        return adapter.hint_after(status, descriptor)

    def _check_single(self, adapter: Adapter, element_path: Path) -> Status:
        """Only one element is visible: the member being prevalidated."""
        if adapter.match(element_path) is Match.UNRELATED:
            return Status.IGNORE
        descriptor = self.descriptor
        adapter.hint_before(descriptor)
        status = self.child.check(adapter, element_path)
        if self.is_any and not adapter.strict_any:
            status = Status.IGNORE
        return adapter.hint_after(status, descriptor)

    def _fold(self, adapter: Adapter, path: Path, element_path: Path, container: Any) -> Status:
        concrete = adapter.concrete_path(path)
        statuses: list[Status] = []
        for key, element in adapter.iterate(container, self.kind.name):
            target = key if self.modifier is ElementModifier.KEYS else element
            element_adapter = adapter.derive(target, element_path, concrete + (NameKey(key),))
            status = self.child.check(element_adapter, element_path)
            adapter.absorb(element_adapter)
            if self.is_any and status is Status.SUCCESS:
                return status
            if not self.is_any and status is Status.FAIL:
                return status
            statuses.append(status)

        if not statuses:
            if not self.is_any:
                return self.empty_status
            if not adapter.strict_any:
                return Status.IGNORE
            # reads "at least one element of tags must exist"
            return Operation(value, exists, True).check(adapter, element_path)
        if self.is_any:
            return Status.FAIL
        return AND_FOLD.fold(statuses)


@dataclass(frozen=True, slots=True)
class Hint(Validator):
    child: Validator
    text: str

    def check(self, adapter: Adapter, path: Path = ()) -> Status:
        presentation = HintPresentation(self.text)
        adapter.hint_before(presentation)
        return adapter.hint_after(self.child.check(adapter, path), presentation)


# ============================================================================
# Constructors
# ============================================================================

def _children(name: str, validators: tuple) -> tuple[Validator, ...]:
    if not validators or not all(isinstance(v, Validator) for v in validators):
        raise_result(invalid_arguments(name, validators, "one or more validators"))
    return tuple(validators)


def validator(*args: Any) -> Validator:
    """Build a validator from any accepted argument shape.

    validator(v)                      -> v
    validator(v1, v2, ...)            -> AND(v1, v2, ...)
    validator(op, operand)            -> leaf on the value itself
    validator(prop, op, operand)      -> leaf on a property of the value
    """
    if args and all(isinstance(a, Validator) for a in args):
        return args[0] if len(args) == 1 else AND(*args)
    if args and isinstance(args[0], Property):
        return make_operation(args[0], *args[1:])
    if args and isinstance(args[0], Operator):
        return make_operation(value, *args)
    raise_result(invalid_arguments(
        "validator", args, "validators, (operator, operand) or (property, operator, operand)"
    ))


def AND(*validators: Validator) -> Aggregation:
    return Aggregation(AND_DESCRIPTOR, AND_FOLD, _children("AND", validators))


def OR(*validators: Validator) -> Aggregation:
    return Aggregation(OR_DESCRIPTOR, OR_FOLD, _children("OR", validators))


def NOT(*args: Any) -> Negation:
    return Negation(validator(*args))


def ANY(*args: Any, keys: bool = False) -> ElementAggregation:
    modifier = ElementModifier.KEYS if keys else ElementModifier.VALUES
    return ElementAggregation(AggregationKind.ANY, modifier, validator(*args))


def ALL(*args: Any, keys: bool = False, empty: Status | str | None = None) -> ElementAggregation:
    """ALL over a container; `empty` is the status for an empty one (default from settings)."""
    modifier = ElementModifier.KEYS if keys else ElementModifier.VALUES
    empty_status = Status(empty if empty is not None else get_settings().ALL_EMPTY_STATUS)
    return ElementAggregation(AggregationKind.ALL, modifier, validator(*args), empty_status)
