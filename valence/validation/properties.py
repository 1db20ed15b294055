"""Properties: named facets of a value.

A property pairs a getter with a `has` test telling whether a value exposes
the facet. Properties are immutable and shared by every check that uses
them; they can be used as a leaf prefix (`size(gte, 2)`) or as a path key
(`member("tags")[size]`).
"""
from __future__ import annotations

from collections.abc import Sized
from dataclasses import dataclass
from typing import Any, Callable


def _identity(value: Any) -> Any: return value


def _always(value: Any) -> bool: return True


def _is_sized(value: Any) -> bool: return isinstance(value, Sized)


def _is_text(value: Any) -> bool: return isinstance(value, (str, bytes, bytearray))


@dataclass(frozen=True, slots=True)
class Property:
    """Named accessor resolved against the structural capability of a value.

    flag_phrases: phrases reported for `flag` checks as (when true, when false).
    prepend_for_flag: whether flag reports name the property ("empty" does not:
        "tags must be empty", not "empty of tags must be empty").
    """
    name: str
    getter: Callable[[Any], Any]
    has: Callable[[Any], bool] = _always
    flag_phrases: tuple[str, str] = ("must be true", "must be false")
    prepend_for_flag: bool = True

    def get(self, value: Any) -> Any: return self.getter(value)

    def applies_to(self, value: Any) -> bool: return bool(self.has(value))

    def is_value(self) -> bool: return self is value

    def flag_phrase(self, expected: bool) -> str: return self.flag_phrases[0 if expected else 1]

    def __call__(self, *args):
        """Build a leaf on this property: `size(gte, 2)`."""
        from valence.validation.validators import make_operation
        return make_operation(self, *args)

    def __repr__(self) -> str: return f"Property({self.name!r})"


# ============================================================================
# Built-in Properties
# ============================================================================

value = Property("value", _identity)
size = Property("size", len, _is_sized)
length = Property("length", len, _is_text)
empty = Property(
    "empty",
    lambda v: len(v) == 0,
    _is_sized,
    flag_phrases=("must be empty", "must be not empty"),
    prepend_for_flag=False,
)

BUILTIN_PROPERTIES: tuple[Property, ...] = (value, size, length, empty)


def property(
    name: str,
    getter: Callable[[Any], Any] | None = None,
    has: Callable[[Any], bool] | None = None,
    *,
    flag: tuple[str, str] | None = None,
) -> Property:
    """Declare a user property. Defaults to attribute access guarded by hasattr."""
    return Property(
        name,
        getter or (lambda obj: getattr(obj, name)),
        has or (lambda obj: hasattr(obj, name)),
        flag_phrases=flag or ("must be true", "must be false"),
    )
