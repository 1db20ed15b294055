"""Error Builders

Ergonomic constructors for typed engine errors. Each builder returns
Err[AppError] so it can flow through Result-returning boundaries, or be
raised with raise_result().
"""
from typing import Any

from .types import AppError, ErrorCode, ErrorContext, Err


def _describe(value: Any) -> str:
    return f"{type(value).__name__} {value!r}"


# =============================================================================
# Definition Errors (E21xx)
# =============================================================================

def definition_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E2100_INVALID_DEFINITION,
    origin: str = "",
    cause: Exception | None = None,
    **metadata,
) -> Err[AppError]:
    """Create validator definition error."""
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata={k: v for k, v in metadata.items() if v is not None},
        cause=cause,
    ))


def invalid_arguments(construct: str, args: tuple, expected: str, origin: str = "") -> Err[AppError]:
    got = ", ".join(type(a).__name__ for a in args) or "nothing"
    return definition_error(
        f"{construct} expects {expected}, got ({got})",
        construct=construct,
        expected=expected,
        origin=origin,
    )


def incompatible_operand(
    operator: str, value: Any, operand: Any, cause: Exception | None = None, origin: str = ""
) -> Err[AppError]:
    return definition_error(
        f"Operator '{operator}' cannot compare {_describe(value)} with {_describe(operand)}",
        code=ErrorCode.E2101_INCOMPATIBLE_OPERAND,
        operator=operator,
        origin=origin,
        cause=cause,
    )


def property_not_applicable(prop: str, value: Any, origin: str = "") -> Err[AppError]:
    return definition_error(
        f"Property '{prop}' is not available on {type(value).__name__}",
        code=ErrorCode.E2102_PROPERTY_NOT_APPLICABLE,
        property=prop,
        value_type=type(value).__name__,
        origin=origin,
    )


def not_iterable(aggregation: str, value: Any, origin: str = "") -> Err[AppError]:
    return definition_error(
        f"{aggregation} requires an iterable container, got {type(value).__name__}",
        code=ErrorCode.E2103_NOT_ITERABLE,
        aggregation=aggregation,
        value_type=type(value).__name__,
        origin=origin,
    )


# =============================================================================
# Capability Errors (E22xx)
# =============================================================================

def member_not_writable(
    key: Any, container: Any, cause: Exception | None = None, origin: str = ""
) -> Err[AppError]:
    return Err(AppError(
        code=ErrorCode.E2201_MEMBER_NOT_WRITABLE,
        message=f"Cannot assign key {key!r} on {type(container).__name__}",
        context=ErrorContext(origin=origin),
        metadata={"key": repr(key), "container_type": type(container).__name__},
        cause=cause,
    ))


def member_not_readable(key: Any, container: Any, origin: str = "") -> Err[AppError]:
    return Err(AppError(
        code=ErrorCode.E2202_MEMBER_NOT_READABLE,
        message=f"{type(container).__name__} can report key {key!r} but not read it",
        context=ErrorContext(origin=origin),
        metadata={"key": repr(key), "container_type": type(container).__name__},
    ))


# =============================================================================
# Locale Errors (E23xx)
# =============================================================================

def invalid_locale(
    locale: str, message: str, *, phrase: str | None = None, cause: Exception | None = None, origin: str = ""
) -> Err[AppError]:
    meta = {"locale": locale, "phrase": phrase}
    return Err(AppError(
        code=ErrorCode.E2300_INVALID_LOCALE,
        message=f"Invalid translations for locale '{locale}': {message}",
        context=ErrorContext(origin=origin),
        metadata={k: v for k, v in meta.items() if v is not None},
        cause=cause,
    ))


def unknown_locale(locale: str, available: list[str], origin: str = "") -> Err[AppError]:
    return Err(AppError(
        code=ErrorCode.E2301_UNKNOWN_LOCALE,
        message=f"Locale '{locale}' is not bundled. Available: {', '.join(available) or 'none'}",
        context=ErrorContext(origin=origin),
        metadata={"locale": locale},
    ))


# =============================================================================
# Update Errors (E24xx)
# =============================================================================

def update_not_applied(member: str, report: str, origin: str = "") -> Err[AppError]:
    return Err(AppError(
        code=ErrorCode.E2400_UPDATE_NOT_APPLIED,
        message=f"Update of '{member}' rejected: {report}",
        context=ErrorContext(origin=origin),
        metadata={"member": member, "report": report},
    ))
