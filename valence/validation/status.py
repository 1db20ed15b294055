"""Tri-state validation outcome."""
from __future__ import annotations

from enum import Enum


class Status(str, Enum):
    """Outcome of a single check.

    IGNORE means the check did not apply (absent path, lenient empty
    container) and must never be folded into SUCCESS by an aggregation.
    """
    SUCCESS = "success"
    FAIL = "fail"
    IGNORE = "ignore"

    @classmethod
    def from_bool(cls, value: bool) -> Status: return cls.SUCCESS if value else cls.FAIL

    @property
    def failed(self) -> bool: return self is Status.FAIL

    @property
    def succeeded(self) -> bool: return self is Status.SUCCESS

    @property
    def ignored(self) -> bool: return self is Status.IGNORE

    def invert(self) -> Status:
        """Swap SUCCESS and FAIL; IGNORE has nothing to negate."""
        if self is Status.SUCCESS:
            return Status.FAIL
        if self is Status.FAIL:
            return Status.SUCCESS
        return self
