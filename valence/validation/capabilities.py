"""Container capabilities.

The engine walks member paths over objects, mappings, sequences and ad hoc
third-party containers without them sharing an interface. Each container
type is probed once, on first use, for the access methods it exposes; the
resulting ContainerCapabilities are cached per type and reused by every
check. Types can also be registered explicitly.

Existence probe order:
    1. keyed lookup (mappings: `key in obj`; sequences: index bounds)
    2. `has(key)`
    3. `contains(key)` or `__contains__`
    4. `find(key)` returning something other than None / -1
    5. `is_set(key)` / `isSet(key)`
    6. named attribute (string keys only)
If none applies, the key does not exist.

The getter is chosen to match the existence probe: attributes are read with
getattr, keyed containers with `obj[key]`, `at(key)` or `get(key)`. A type
that can only answer membership (a set, say) gets no getter; its members
exist but have no value to compare.
"""
from __future__ import annotations

import threading
from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

from valence.core.errors import member_not_readable, member_not_writable, not_iterable, raise_result
from valence.core.logging import engine_logger

Exists = Callable[[Any, Any], bool]
Getter = Callable[[Any, Any], Any]
Setter = Callable[[Any, Any, Any], None]
Items = Callable[[Any], Iterable[tuple[Any, Any]]]


@dataclass(frozen=True, slots=True)
class ContainerCapabilities:
    """Access methods resolved for one container type."""
    probe: str
    exists: Exists
    get: Getter | None
    set: Setter | None = None
    items: Items | None = None

    def iterate(self, obj: Any, aggregation: str) -> Iterable[tuple[Any, Any]]:
        if self.items is None:
            raise_result(not_iterable(aggregation, obj))
        return self.items(obj)


# ============================================================================
# Probing
# ============================================================================

def _is_index(obj: Any, key: Any) -> bool:
    return isinstance(key, int) and not isinstance(key, bool) and 0 <= key < len(obj)


def _found(result: Any) -> bool: return result is not None and result != -1


def _has_attr(obj: Any, key: Any) -> bool: return isinstance(key, str) and hasattr(obj, key)


def _probe_exists(tp: type) -> tuple[str, Exists]:
    if issubclass(tp, Mapping):
        return "mapping", lambda obj, key: key in obj
    if issubclass(tp, Sequence):
        return "sequence", _is_index
    if callable(getattr(tp, "has", None)):
        return "has", lambda obj, key: bool(obj.has(key))
    if callable(getattr(tp, "contains", None)):
        return "contains", lambda obj, key: bool(obj.contains(key))
    if hasattr(tp, "__contains__"):
        return "contains", lambda obj, key: key in obj
    if callable(getattr(tp, "find", None)):
        return "find", lambda obj, key: _found(obj.find(key))
    for name in ("is_set", "isSet"):
        if callable(getattr(tp, name, None)):
            return name, lambda obj, key, _m=name: bool(getattr(obj, _m)(key))
    return "attribute", _has_attr


def _get_item(obj: Any, key: Any) -> Any: return obj[key]


def _probe_get(tp: type, probe_name: str) -> Getter | None:
    if probe_name == "attribute":
        return getattr
    if hasattr(tp, "__getitem__"):
        return _get_item
    for name in ("at", "get"):
        if callable(getattr(tp, name, None)):
            return lambda obj, key, _m=name: getattr(obj, _m)(key)
    return None


def _set_attr(obj: Any, key: Any, value: Any) -> None:
    if not isinstance(key, str):
        raise_result(member_not_writable(key, obj))
    try:
        setattr(obj, key, value)
    except AttributeError as exc:
        raise_result(member_not_writable(key, obj, cause=exc))


def _probe_set(tp: type) -> Setter | None:
    if issubclass(tp, (MutableMapping, MutableSequence)) or hasattr(tp, "__setitem__"):
        def set_item(obj, key, value): obj[key] = value
        return set_item
    if callable(getattr(tp, "set", None)):
        return lambda obj, key, value: obj.set(key, value)
    if issubclass(tp, (Mapping, Sequence)):
        return None
    return _set_attr


def _probe_items(tp: type) -> Items | None:
    if issubclass(tp, Mapping) or callable(getattr(tp, "items", None)):
        return lambda obj: obj.items()
    if issubclass(tp, Sequence) or hasattr(tp, "__iter__"):
        return enumerate
    return None


def probe(tp: type) -> ContainerCapabilities:
    """Resolve the capabilities of a type by structural inspection."""
    name, exists_fn = _probe_exists(tp)
    return ContainerCapabilities(
        probe=name,
        exists=exists_fn,
        get=_probe_get(tp, name),
        set=_probe_set(tp),
        items=_probe_items(tp),
    )


# ============================================================================
# Registry
# ============================================================================

class CapabilityRegistry:
    """Per-type capability cache. Thread-safe; probing happens once per type."""

    def __init__(self) -> None:
        self._registered: dict[type, ContainerCapabilities] = {}
        self._cache: dict[type, ContainerCapabilities] = {}
        self._lock = threading.Lock()

    def register(
        self,
        tp: type,
        *,
        exists: Exists,
        get: Getter,
        set: Setter | None = None,
        items: Items | None = None,
    ) -> ContainerCapabilities:
        caps = ContainerCapabilities("registered", exists, get, set, items)
        with self._lock:
            self._registered[tp] = caps
            self._cache.clear()
        engine_logger().info("container_registered", container=tp.__qualname__)
        return caps

    def capabilities(self, obj: Any) -> ContainerCapabilities:
        tp = type(obj)
        if (caps := self._cache.get(tp)) is not None:
            return caps
        with self._lock:
            if (caps := self._cache.get(tp)) is None:
                caps = next((self._registered[b] for b in tp.__mro__ if b in self._registered), None) or probe(tp)
                self._cache[tp] = caps
        engine_logger().debug("capabilities_probed", container=tp.__qualname__, probe=caps.probe)
        return caps

    def exists(self, obj: Any, key: Any) -> bool: return self.capabilities(obj).exists(obj, key)

    def readable(self, obj: Any) -> bool: return self.capabilities(obj).get is not None

    def get(self, obj: Any, key: Any) -> Any:
        if (getter := self.capabilities(obj).get) is None:
            raise_result(member_not_readable(key, obj))
        return getter(obj, key)

    def set(self, obj: Any, key: Any, value: Any) -> None:
        if (setter := self.capabilities(obj).set) is None:
            raise_result(member_not_writable(key, obj))
        setter(obj, key, value)

    def items(self, obj: Any, aggregation: str) -> Iterable[tuple[Any, Any]]:
        return self.capabilities(obj).iterate(obj, aggregation)


_global_registry: Optional[CapabilityRegistry] = None
_global_registry_lock = threading.Lock()


def get_registry() -> CapabilityRegistry:
    """Get the process-wide capability registry, creating it on first use."""
    global _global_registry

    if _global_registry is None:
        with _global_registry_lock:
            if _global_registry is None:
                _global_registry = CapabilityRegistry()

    return _global_registry


def reset_registry() -> None:
    """Drop every registration and cached probe (test helper)."""
    global _global_registry
    with _global_registry_lock:
        _global_registry = None


def register_container(
    tp: type,
    *,
    exists: Exists,
    get: Getter,
    set: Setter | None = None,
    values: Callable[[Any], Iterable[Any]] | None = None,
    keys: Callable[[Any], Iterable[Any]] | None = None,
) -> ContainerCapabilities:
    """Register access methods for a third-party container type.

    `values`/`keys` enable ANY/ALL over the type. When only `values` is given
    elements are indexed by position; with `keys` as well they are paired.
    """
    items: Items | None = None
    if values is not None and keys is not None:
        items = lambda obj: zip(keys(obj), values(obj))
    elif values is not None:
        items = lambda obj: enumerate(values(obj))
    elif keys is not None:
        items = lambda obj: ((k, get(obj, k)) for k in keys(obj))
    return get_registry().register(tp, exists=exists, get=get, set=set, items=items)
