"""Engine Error Handling

Validation failures are statuses; the errors here are for misuse.

Usage:
    from valence.core.errors import definition_error, raise_result

    if not children:
        raise_result(definition_error("AND requires at least one validator"))
"""
from .types import (
    Result,
    Ok,
    Err,
    AppError,
    ErrorCode,
    ErrorContext,
    ok,
    err,
)

from .builders import (
    definition_error,
    invalid_arguments,
    incompatible_operand,
    property_not_applicable,
    not_iterable,
    member_not_readable,
    member_not_writable,
    invalid_locale,
    unknown_locale,
    update_not_applied,
)

from .handlers import (
    AppErrorException,
    DefinitionError,
    LocaleError,
    ValidationFailed,
    raise_error,
    raise_result,
)

__all__ = [
    # Core types
    "Result",
    "Ok",
    "Err",
    "AppError",
    "ErrorCode",
    "ErrorContext",
    "ok",
    "err",
    # Builders
    "definition_error",
    "invalid_arguments",
    "incompatible_operand",
    "property_not_applicable",
    "not_iterable",
    "member_not_readable",
    "member_not_writable",
    "invalid_locale",
    "unknown_locale",
    "update_not_applied",
    # Exceptions
    "AppErrorException",
    "DefinitionError",
    "LocaleError",
    "ValidationFailed",
    "raise_error",
    "raise_result",
]
