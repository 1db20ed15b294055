"""Exception Bridge

Code that cannot return a Result raises one of these. Each wraps an
AppError so callers get the same structured payload either way.
"""
from __future__ import annotations

from .types import AppError, ErrorCode


class AppErrorException(Exception):
    """Exception wrapper for AppError."""

    def __init__(self, error: AppError):
        self.error = error
        super().__init__(str(error))

    @property
    def code(self) -> ErrorCode:
        return self.error.code


class DefinitionError(AppErrorException):
    """A validator was composed or applied in a way that can never be checked."""


class LocaleError(AppErrorException):
    """A translation table could not be parsed or found."""


class ValidationFailed(AppErrorException):
    """Raised on request when a report carries a failure."""


_EXCEPTIONS: dict[str, type[AppErrorException]] = {
    "definition": DefinitionError,
    "capability": DefinitionError,
    "locale": LocaleError,
    "update": ValidationFailed,
}


def raise_error(error: AppError) -> None:
    """Raise AppError as the exception type matching its category.

    Usage:
        if not isinstance(flag, bool):
            raise_error(definition_error("flag operand must be bool").error)
    """
    exc = _EXCEPTIONS.get(error.code.category, AppErrorException)(error)
    if error.cause is not None:
        raise exc from error.cause
    raise exc


def raise_result(result) -> None:
    """Raise error if Result is Err, otherwise return."""
    if result.is_err():
        raise_error(result.unwrap_err())
