"""Tests for validated updates."""
from __future__ import annotations

import pytest

from valence import (
    ALL,
    ANY,
    DefinitionError,
    ErrorCode,
    Status,
    ValidationFailed,
    eq,
    gt,
    member,
    register_container,
    set_validated,
    size,
)

RULE = (member("age") >= 18) & member("tags")(ANY(eq, "admin"))


class User:
    def __init__(self, age=0, tags=None):
        self.age = age
        self.tags = tags or []


class TestSetValidated:
    def test_applies_passing_update(self):
        data = {"age": 20}
        report = set_validated(data, "age", 21, RULE)
        assert report.status is Status.SUCCESS
        assert data["age"] == 21

    def test_rejects_failing_update(self):
        data = {"age": 20}
        report = set_validated(data, member("age"), 15, RULE)
        assert report.failed
        assert report.message == "age must be greater than or equal to 18"
        assert data["age"] == 20

    def test_ignored_update_is_applied(self):
        data = {}
        report = set_validated(data, "nickname", "bob", RULE)
        assert report.status is Status.IGNORE
        assert data == {"nickname": "bob"}

    def test_attribute_update(self):
        user = User(age=30)
        set_validated(user, "age", 40, RULE)
        assert user.age == 40
        set_validated(user, "age", 4, RULE)
        assert user.age == 40

    def test_nested_update(self):
        data = {"user": {"age": 30}}
        rule = member("user", "age") >= 18
        set_validated(data, member("user", "age"), 31, rule)
        assert data["user"]["age"] == 31

    def test_list_element_update(self):
        data = {"scores": [1, 2, 3]}
        rule = member("scores")(ALL(gt, 0))
        assert set_validated(data, member("scores", 1), -5, rule).failed
        assert set_validated(data, member("scores", 1), 5, rule).status is Status.SUCCESS
        assert data["scores"] == [1, 5, 3]

    def test_strict_any_option(self):
        data = {"tags": ["admin"]}
        rule = member("tags")(ANY(eq, "admin"))
        assert set_validated(data, "tags", [], rule, strict_any=True).failed
        assert data["tags"] == ["admin"]
        set_validated(data, "tags", [], rule)
        assert data["tags"] == []

    def test_member_operand_reads_current_object(self):
        data = {"low": 1, "high": 10}
        rule = member("high")(gt, member("low"))
        assert set_validated(data, "high", 0, rule).failed
        assert set_validated(data, "high", 5, rule).status is Status.SUCCESS
        assert data["high"] == 5

    def test_dynamic_key_is_resolved_for_writing(self):
        data = {"items": {"a": 1, "b": 1}, "selected": "b"}
        target = member("items")[member("selected")]
        set_validated(data, target, 7, target >= 3)
        assert data["items"] == {"a": 1, "b": 7}

    def test_registered_setter(self):
        class Store:
            def __init__(self):
                self.rows = {}

        register_container(
            Store,
            exists=lambda s, k: k in s.rows,
            get=lambda s, k: s.rows[k],
            set=lambda s, k, v: s.rows.__setitem__(k, v),
        )
        store = Store()
        set_validated(store, "age", 20, RULE)
        assert store.rows == {"age": 20}


class TestNotWritable:
    def test_tuple_element(self):
        with pytest.raises(DefinitionError) as exc_info:
            set_validated({"t": (1, 2)}, member("t", 0), 5, member("t")(ALL(gt, 0)))
        assert exc_info.value.code is ErrorCode.E2201_MEMBER_NOT_WRITABLE

    def test_property_key(self):
        with pytest.raises(DefinitionError) as exc_info:
            set_validated({"tags": []}, member("tags")[size], 2, RULE)
        assert exc_info.value.code is ErrorCode.E2201_MEMBER_NOT_WRITABLE

    def test_missing_parent(self):
        with pytest.raises(DefinitionError):
            set_validated({}, member("user", "age"), 20, RULE)

    def test_read_only_attribute(self):
        class Frozen:
            __slots__ = ()

        with pytest.raises(DefinitionError) as exc_info:
            set_validated(Frozen(), "age", 20, RULE)
        assert isinstance(exc_info.value.__cause__, AttributeError)


class TestRaiseIfFailed:
    def test_failed_report_raises(self):
        report = set_validated({"age": 20}, "age", 1, RULE)
        with pytest.raises(ValidationFailed) as exc_info:
            report.raise_if_failed("age")
        assert exc_info.value.code is ErrorCode.E2400_UPDATE_NOT_APPLIED
        assert "age must be greater than or equal to 18" in str(exc_info.value)

    def test_passing_report_does_not_raise(self):
        set_validated({"age": 20}, "age", 30, RULE).raise_if_failed("age")
