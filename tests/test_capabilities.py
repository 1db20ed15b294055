"""Tests for container capability probing and registration."""
from __future__ import annotations

import pytest

from valence import (
    ANY,
    AppErrorException,
    DefinitionError,
    ErrorCode,
    Status,
    apply,
    eq,
    exists,
    member,
    register_container,
)
from valence.validation.capabilities import get_registry, probe


class Bag:
    """Container with has/at."""

    def __init__(self, **items):
        self._items = items

    def has(self, key):
        return key in self._items

    def at(self, key):
        return self._items[key]


class Finder:
    """Container with find returning -1 for absent keys."""

    def __init__(self, **items):
        self._items = items

    def find(self, key):
        return 0 if key in self._items else -1

    def get(self, key):
        return self._items[key]


class Options:
    """Container exposing only a flag accessor."""

    def __init__(self, **items):
        self._items = items

    def is_set(self, key):
        return key in self._items

    def get(self, key):
        return self._items[key]


class Opaque:
    __slots__ = ()


class Record:
    def __init__(self, **fields):
        for name, v in fields.items():
            setattr(self, name, v)


class Box:
    """Object with plain attributes and an unrelated get()."""

    def __init__(self, a):
        self.a = a

    def get(self, key):
        raise KeyError(key)


class TestProbe:
    @pytest.mark.parametrize("tp,expected", [
        (dict, "mapping"),
        (list, "sequence"),
        (tuple, "sequence"),
        (Bag, "has"),
        (set, "contains"),
        (Finder, "find"),
        (Options, "is_set"),
        (Record, "attribute"),
    ])
    def test_probe_order(self, tp, expected):
        assert probe(tp).probe == expected

    def test_sequence_bounds(self):
        registry = get_registry()
        assert registry.exists([1, 2], 1)
        assert not registry.exists([1, 2], 2)
        assert not registry.exists([1, 2], -1)
        assert not registry.exists([1, 2], "a")

    def test_has_container(self):
        assert apply(member("a")(eq, 1), Bag(a=1)) is Status.SUCCESS
        assert apply(member("b")(eq, 1), Bag(a=1)) is Status.IGNORE

    def test_find_container(self):
        registry = get_registry()
        assert registry.exists(Finder(a=1), "a")
        assert not registry.exists(Finder(a=1), "b")
        assert apply(member("a")(eq, 1), Finder(a=1)) is Status.SUCCESS

    def test_flag_container(self):
        assert apply(member("a")(eq, 2), Options(a=1)) is Status.FAIL

    def test_object_without_any_capability(self):
        assert not get_registry().exists(Opaque(), "x")
        assert apply(member("x")(eq, 1), Opaque()) is Status.IGNORE

    def test_membership_only_container(self):
        assert probe(frozenset).get is None
        assert apply(member("x")(exists, True), frozenset({"x"})) is Status.SUCCESS
        assert apply(member("y")(exists, True), frozenset({"x"})) is Status.FAIL
        assert apply(member("x")(eq, 1), frozenset({"x"})) is Status.IGNORE
        assert apply(member("x", "y")(exists, True), {"x": frozenset({"y"})}) is Status.SUCCESS

    def test_membership_only_container_is_not_readable(self):
        with pytest.raises(AppErrorException) as exc_info:
            get_registry().get(frozenset({"x"}), "x")
        assert exc_info.value.code is ErrorCode.E2202_MEMBER_NOT_READABLE

    def test_attribute_object_with_get_method(self):
        assert probe(Box).probe == "attribute"
        assert apply(member("a")(exists, True), Box(1)) is Status.SUCCESS
        assert apply(member("a")(eq, 1), Box(1)) is Status.SUCCESS
        assert apply(member("b")(eq, 1), Box(1)) is Status.IGNORE

    def test_immutable_containers_have_no_setter(self):
        assert probe(tuple).set is None
        assert probe(dict).set is not None
        assert probe(str).set is None

    def test_probe_is_cached_per_type(self):
        registry = get_registry()
        first = registry.capabilities(Bag())
        assert registry.capabilities(Bag(a=1)) is first


class TestRegistration:
    def test_registered_container(self):
        class Store:
            def __init__(self, rows):
                self.rows = rows

        register_container(
            Store,
            exists=lambda s, k: k in s.rows,
            get=lambda s, k: s.rows[k],
            values=lambda s: list(s.rows.values()),
        )
        store = Store({"a": 1, "b": 2})
        assert get_registry().capabilities(store).probe == "registered"
        assert apply(member("a")(eq, 1), store) is Status.SUCCESS
        assert apply(ANY(eq, 2), store) is Status.SUCCESS

    def test_registration_applies_to_subclasses(self):
        class Base:
            pass

        class Child(Base):
            pass

        register_container(Base, exists=lambda o, k: k == "x", get=lambda o, k: 42)
        assert apply(member("x")(eq, 42), Child()) is Status.SUCCESS

    def test_registration_replaces_cached_probe(self):
        registry = get_registry()
        assert registry.capabilities(Bag()).probe == "has"
        register_container(Bag, exists=lambda o, k: True, get=lambda o, k: 7)
        assert registry.capabilities(Bag()).probe == "registered"

    def test_keys_only_registration(self):
        class Keyed:
            def __init__(self, data):
                self.data = data

        register_container(
            Keyed,
            exists=lambda o, k: k in o.data,
            get=lambda o, k: o.data[k],
            keys=lambda o: list(o.data),
        )
        assert apply(ANY(eq, "b", keys=True), Keyed({"a": 1, "b": 2})) is Status.SUCCESS
        assert apply(ANY(eq, 2), Keyed({"a": 1, "b": 2})) is Status.SUCCESS

    def test_container_without_items_is_not_iterable(self):
        register_container(Opaque, exists=lambda o, k: False, get=lambda o, k: None)
        with pytest.raises(DefinitionError) as exc_info:
            apply(ANY(eq, 1), Opaque())
        assert exc_info.value.code is ErrorCode.E2103_NOT_ITERABLE

    def test_setter_errors(self):
        with pytest.raises(DefinitionError) as exc_info:
            get_registry().set((1, 2), 0, 5)
        assert exc_info.value.code is ErrorCode.E2201_MEMBER_NOT_WRITABLE
