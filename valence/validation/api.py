"""Entry points: apply, validate, prevalidate, set_validated.

    apply(rule, {"age": 15})                  -> Status.FAIL
    validate({"age": 15}, rule).message       -> "age must be greater than or equal to 18"
    prevalidate(member("tags"), [], rule)     -> Report for one candidate member
    set_validated(obj, member("age"), 21, rule)  writes only when the check passes
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from valence.core.errors import member_not_writable, raise_result, update_not_applied
from valence.core.logging import engine_logger, reporting_logger
from valence.reporting.formatter import Decorator, Formatter
from valence.reporting.member_names import MemberNames, MemberNameTraits
from valence.reporting.reporter import Reporter
from valence.reporting.translator import PhraseTranslator, get_translator
from valence.validation.adapters import (
    MISSING,
    Adapter,
    PrevalidationAdapter,
    make_adapter,
    make_reporting_adapter,
)
from valence.validation.capabilities import get_registry
from valence.validation.members import Member, MemberRefKey, NameKey, as_member
from valence.validation.status import Status
from valence.validation.validators import Validator


@dataclass(frozen=True, slots=True)
class Report:
    """Outcome of a reporting check.

    message is empty unless the check failed. member_checked is only
    meaningful for prevalidation: whether any rule examined the member.
    """
    status: Status
    message: str = ""
    member_checked: bool = False

    @property
    def failed(self) -> bool: return self.status is Status.FAIL

    def raise_if_failed(self, member: str = "") -> None:
        """Raise ValidationFailed when the report carries a failure."""
        if self.failed:
            raise_result(update_not_applied(member, self.message))

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status.value, "message": self.message, "member_checked": self.member_checked}

    def __bool__(self) -> bool: return not self.failed


def make_reporter(
    *,
    locale: str | None = None,
    translator: PhraseTranslator | None = None,
    member_names: MemberNameTraits | None = None,
    decorator: Decorator | None = None,
) -> Reporter:
    """Reporter for one call. An explicit translator wins over a locale name."""
    names = MemberNames(translator or get_translator(locale), member_names)
    return Reporter(Formatter(names, decorator))


def apply(validator: Validator, target: Any) -> Status:
    """Check a value (wrapped in a plain adapter) or an adapter built by the caller."""
    adapter = target if isinstance(target, Adapter) else make_adapter(target)
    return validator.check(adapter, ())


def validate(
    value: Any,
    validator: Validator,
    *,
    locale: str | None = None,
    translator: PhraseTranslator | None = None,
    member_names: MemberNameTraits | None = None,
    decorator: Decorator | None = None,
    check_member_exists: bool | None = None,
) -> Report:
    """Check a value and explain a failure in the requested locale."""
    reporter = make_reporter(locale=locale, translator=translator, member_names=member_names, decorator=decorator)
    status = apply(validator, make_reporting_adapter(value, reporter, check_member_exists=check_member_exists))
    if status is not Status.FAIL:
        return Report(status)
    reporting_logger().debug("validation_report", status=status.value, message=reporter.result)
    return Report(status, reporter.result)


def prevalidate(
    target_member: Member | str | int | tuple,
    candidate: Any,
    validator: Validator,
    *,
    strict_any: bool | None = None,
    check_member_exists: bool = True,
    root: Any = MISSING,
    locale: str | None = None,
    translator: PhraseTranslator | None = None,
    member_names: MemberNameTraits | None = None,
    decorator: Decorator | None = None,
) -> Report:
    """Check one candidate member value before it is written anywhere.

    Rules on other members are ignored. strict_any defaults to the
    STRICT_ANY setting.
    """
    target_member = as_member(target_member)
    reporter = make_reporter(locale=locale, translator=translator, member_names=member_names, decorator=decorator)
    adapter = PrevalidationAdapter(
        target_member,
        candidate,
        reporter,
        root=root,
        strict_any=strict_any,
        check_member_exists=check_member_exists,
    )
    status = apply(validator, adapter)
    engine_logger().debug(
        "prevalidation_complete",
        member=target_member.name,
        status=status.value,
        member_checked=adapter.member_checked,
    )
    message = reporter.result if status is Status.FAIL else ""
    return Report(status, message, adapter.member_checked)


def set_validated(
    obj: Any,
    target_member: Member | str | int | tuple,
    value: Any,
    validator: Validator,
    **options: Any,
) -> Report:
    """Prevalidate `value` for `target_member` and write it into obj unless it fails."""
    target_member = as_member(target_member)
    report = prevalidate(target_member, value, validator, root=obj, **options)
    if report.failed:
        engine_logger().debug("update_rejected", member=target_member.name, message=report.message)
        return report
    _write(obj, target_member, value)
    engine_logger().debug("update_applied", member=target_member.name, status=report.status.value)
    return report


def _write(obj: Any, target_member: Member, value: Any) -> None:
    registry = get_registry()
    adapter = make_adapter(obj)
    keys = []
    for key in target_member.keys:
        if isinstance(key, MemberRefKey):
            resolved = adapter.resolve_member(key.member)
            key = NameKey(resolved) if resolved is not MISSING else key
        keys.append(key)
    parent = adapter.walk(obj, keys[:-1])
    last = keys[-1]
    if parent is MISSING or not isinstance(last, NameKey):
        raise_result(member_not_writable(last.name, obj if parent is MISSING else parent, origin="set_validated"))
    registry.set(parent, last.name, value)
