"""Tests for member paths and keys."""
from __future__ import annotations

import pytest

from valence import DefinitionError, _, member, size
from valence.validation.aggregation import AggregationKind, ElementModifier
from valence.validation.members import (
    AggregationKey,
    Member,
    MemberRefKey,
    NameKey,
    PropertyKey,
    as_member,
    path_name,
)


class TestKeys:
    def test_literal_keys(self):
        assert member("user", "tags").keys == (NameKey("user"), NameKey("tags"))
        assert member("items", 0).keys[1].is_index

    def test_property_key(self):
        path = member("tags")[size]
        assert path.keys[-1] == PropertyKey(size)
        assert path.keys[-1].name == "size"

    def test_member_key(self):
        path = member("items")[member("selected")]
        assert isinstance(path.keys[-1], MemberRefKey)
        assert path.keys[-1].name == "selected"

    def test_keys_compare_by_value(self):
        assert NameKey("a") == NameKey("a")
        assert hash(NameKey(1)) == hash(NameKey(1))
        assert NameKey(1) != NameKey("1")

    def test_bool_is_not_an_index(self):
        with pytest.raises(DefinitionError):
            member("items", True)

    def test_unknown_key_type(self):
        with pytest.raises(DefinitionError):
            member(1.5)

    def test_aggregation_key_matches_values_only(self):
        values = AggregationKey(AggregationKind.ANY)
        keys = AggregationKey(AggregationKind.ANY, ElementModifier.KEYS)
        assert values.matches(NameKey(3))
        assert values.matches(values)
        assert not keys.matches(NameKey(3))
        assert values.name == "at least one element"
        assert AggregationKey(AggregationKind.ALL, ElementModifier.KEYS).name == "each key"


class TestMember:
    def test_empty_member(self):
        with pytest.raises(DefinitionError):
            member()

    def test_root_builder(self):
        assert _["user"]["age"].same_path(member("user", "age"))
        assert _["items"][0].same_path(member("items", 0))

    def test_members_are_immutable_paths(self):
        base = member("user")
        extended = base["age"]
        assert len(base) == 1
        assert len(extended) == 2

    def test_name(self):
        assert member("user", "tags").name == "user.tags"
        assert member("tags")[size].name == "tags.size"
        assert path_name(member("items")[member("selected")].keys) == "items.[selected]"

    def test_repr(self):
        assert repr(member("a", 0)) == "Member(a.0)"

    def test_as_member(self):
        m = member("a")
        assert as_member(m) is m
        assert as_member("a").same_path(m)
        assert as_member(("a", "b")).same_path(member("a", "b"))
        assert isinstance(as_member(0), Member)
