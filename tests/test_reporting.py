"""Tests for English failure reports."""
from __future__ import annotations

import pytest

from valence import (
    ALL,
    AND,
    ANY,
    NOT,
    OR,
    QuotesDecorator,
    Status,
    contains,
    empty,
    eq,
    exists,
    flag,
    gt,
    gte,
    lt,
    master_sample,
    member,
    size,
    validate,
    validator,
    wrap_op,
)
from valence.reporting import Formatter, MemberNames, Reporter, get_translator
from valence.validation.adapters import make_reporting_adapter
from valence.validation.members import NameKey


def message(rule, data, **kwargs) -> str:
    report = validate(data, rule, **kwargs)
    assert report.status is Status.FAIL
    return report.message


class TestLeafSentences:
    def test_comparison(self):
        assert message(member("age") >= 18, {"age": 15}) == "age must be greater than or equal to 18"

    def test_success_has_no_message(self):
        report = validate({"age": 20}, member("age") >= 18)
        assert report.status is Status.SUCCESS
        assert report.message == ""
        assert report

    def test_ignored_has_no_message(self):
        report = validate({}, member("age") >= 18)
        assert report.status is Status.IGNORE
        assert report.message == ""

    def test_value_without_member(self):
        assert message(validator(eq, 1), 2) == "must be equal to 1"

    def test_property(self):
        assert message(member("tags")(size, lt, 3), {"tags": [1, 2, 3]}) == "size of tags must be less than 3"

    def test_property_in_path(self):
        assert message(member("tags")[size] >= 2, {"tags": []}) == "size of tags must be greater than or equal to 2"

    def test_nested_member(self):
        assert message(member("user", "age") >= 18, {"user": {"age": 3}}) == (
            "age of user must be greater than or equal to 18"
        )

    def test_index(self):
        assert message(member("items", 1)(eq, 2), {"items": [1, 3]}) == "element #1 of items must be equal to 2"

    def test_flag(self):
        assert message(member("active")(flag, True), {"active": False}) == "active must be true"
        assert message(member("active")(flag, False), {"active": True}) == "active must be false"

    def test_empty_flag_does_not_name_the_property(self):
        assert message(member("tags")(empty, flag, True), {"tags": [1]}) == "tags must be empty"
        assert message(member("tags")(empty, flag, False), {"tags": []}) == "tags must be not empty"

    def test_exists(self):
        assert message(member("x")(exists, True), {}) == "x must exist"
        assert message(member("x")(exists, False), {"x": 1}) == "x must not exist"

    def test_missing_member_when_existence_is_required(self):
        assert message(member("x") >= 1, {}, check_member_exists=False) == "x must exist"

    def test_boolean_operand(self):
        assert message(member("a")(eq, True), {"a": False}) == "a must be equal to true"

    def test_member_operand(self):
        assert message(member("a")(gt, member("b")), {"a": 1, "b": 2}) == "a must be greater than b"

    def test_member_operand_with_property(self):
        rule = member("a")(size, eq, member("b"))
        assert message(rule, {"a": [1], "b": [1, 2]}) == "size of a must be equal to size of b"

    def test_master_sample(self):
        rule = member("a")(eq, master_sample({"a": 1}))
        assert message(rule, {"a": 2}) == "a must be equal to a of sample"

    def test_dynamic_key_names_the_key_member(self):
        rule = member("items")[member("selected")] >= 3
        assert message(rule, {"items": {"a": 1}, "selected": "a"}) == (
            "selected of items must be greater than or equal to 3"
        )

    def test_custom_operator(self):
        divisible = wrap_op(lambda v, d: v % d == 0, "must be divisible by")
        assert message(member("n")(divisible, 2), {"n": 3}) == "n must be divisible by 2"

    def test_strings_are_not_quoted_by_default(self):
        assert message(member("name")(eq, "bob"), {"name": "al"}) == "name must be equal to bob"

    def test_quotes_decorator(self):
        rule = member("name")(eq, "bob")
        assert message(rule, {"name": "al"}, decorator=QuotesDecorator()) == 'name must be equal to "bob"'
        assert message(rule, {"name": "al"}, decorator=QuotesDecorator("'")) == "name must be equal to 'bob'"

    def test_quotes_leave_numbers_and_booleans_alone(self):
        rule = member("a")(eq, True) & (member("b") > 1)
        assert message(rule, {"a": False, "b": 5}, decorator=QuotesDecorator()) == "a must be equal to true"
        assert message(member("b") > 1, {"b": 0}, decorator=QuotesDecorator()) == "b must be greater than 1"

    def test_custom_decorator_sees_every_operand(self):
        seen = []

        def bracket(value):
            seen.append(value)
            return f"[{value}]"

        rule = (member("n") > 1.5) & (member("name")(eq, "bob"))
        assert message(rule, {"n": 0, "name": "bob"}, decorator=bracket) == "n must be greater than [1.5]"
        assert message(rule, {"n": 2, "name": "al"}, decorator=bracket) == "name must be equal to [bob]"
        assert seen == [1.5, "bob"]


class TestAggregationSentences:
    def test_and_reports_only_the_failing_child(self):
        rule = (member("a") > 0) & (member("b") > 0)
        assert message(rule, {"a": 1, "b": 0}) == "b must be greater than 0"

    def test_and_stops_at_first_failure(self):
        rule = (member("a") > 0) & (member("b") > 0)
        assert message(rule, {"a": 0, "b": 0}) == "a must be greater than 0"

    def test_or_joins_failures(self):
        rule = (member("a") > 0) | (member("b") > 0)
        assert message(rule, {"a": 0, "b": 0}) == "a must be greater than 0 OR b must be greater than 0"

    def test_nested_aggregation_is_wrapped(self):
        rule = AND(member("c") > 0, OR(member("a") > 0, member("b") > 0))
        assert message(rule, {"a": 0, "b": 0, "c": 1}) == (
            "(a must be greater than 0 OR b must be greater than 0)"
        )

    def test_single_part_is_not_wrapped(self):
        rule = AND(member("c") > 0, OR(member("a") > 0, member("b") > 0))
        assert message(rule, {"a": 0, "c": 1}) == "a must be greater than 0"

    def test_succeeded_or_branch_leaves_no_text(self):
        rule = OR(member("a") > 0, member("b") > 0) & (member("c") > 0)
        assert message(rule, {"a": 0, "b": 1, "c": 0}) == "c must be greater than 0"

    def test_not(self):
        assert message(NOT(member("a")(eq, 1)), {"a": 1}) == "NOT a must be equal to 1"

    def test_not_of_and(self):
        rule = ~((member("a") > 0) & (member("b") > 0))
        assert message(rule, {"a": 1, "b": 1}) == (
            "NOT (a must be greater than 0 AND b must be greater than 0)"
        )

    def test_not_inside_and(self):
        rule = (member("a") > 0) & ~(member("b") > 0)
        assert message(rule, {"a": 1, "b": 1}) == "NOT b must be greater than 0"

    def test_any(self):
        rule = member("tags")(ANY(eq, "admin"))
        assert message(rule, {"tags": ["dev", "ops"]}) == "at least one element of tags must be equal to admin"

    def test_any_over_keys(self):
        rule = member("limits")(ANY(eq, "max", keys=True))
        assert message(rule, {"limits": {"min": 1}}) == "at least one key of limits must be equal to max"

    def test_all(self):
        rule = member("scores")(ALL(gte, 0))
        assert message(rule, {"scores": [1, -1]}) == "each element of scores must be greater than or equal to 0"

    def test_all_with_members(self):
        rule = member("users")(ALL(member("age") >= 18))
        assert message(rule, {"users": [{"age": 20}, {"age": 3}]}) == (
            "age of each element of users must be greater than or equal to 18"
        )

    def test_any_with_several_conditions(self):
        rule = member("users")(ANY((member("age") >= 18) & (member("name")(eq, "bob"))))
        assert message(rule, {"users": [{"age": 20, "name": "al"}, {"age": 20, "name": "cy"}]}) == (
            "name of at least one element of users must be equal to bob"
        )

    def test_hint_replaces_subtree_text(self):
        rule = ((member("a") > 0) & (member("b") > 0)).hint("a and b must be positive")
        assert message(rule, {"a": 0, "b": 0}) == "a and b must be positive"

    def test_hint_inside_aggregation(self):
        rule = (member("c") > 0) & (member("a") > 0).hint("a is required to be positive")
        assert message(rule, {"a": 0, "c": 1}) == "a is required to be positive"

    def test_hint_on_success_is_silent(self):
        rule = (member("a") > 0).hint("never shown")
        assert validate({"a": 1}, rule).message == ""

    def test_report_is_deterministic(self):
        rule = OR(member("a") > 0, member("tags")(ANY(contains, "x")))
        data = {"a": 0, "tags": [["y"], ["z"]]}
        assert message(rule, data) == message(rule, data)


class TestCustomNames:
    def test_member_name_traits(self):
        def names(key):
            return "Age" if isinstance(key, NameKey) and key.name == "age" else None

        assert message(member("age") >= 18, {"age": 1}, member_names=names) == (
            "Age must be greater than or equal to 18"
        )

    def test_traits_fall_back_for_other_keys(self):
        assert message(member("user", "age") >= 18, {"user": {"age": 1}}, member_names=lambda key: "") == (
            "age of user must be greater than or equal to 18"
        )


class TestReporter:
    def test_reporter_through_adapter(self):
        reporter = Reporter(Formatter(MemberNames(get_translator())))
        adapter = make_reporting_adapter({"age": 1}, reporter)
        status = (member("age") >= 18).check(adapter)
        assert status is Status.FAIL
        assert reporter.result == "age must be greater than or equal to 18"
        assert reporter.depth == 0

    @pytest.mark.parametrize("rule", [
        AND(member("a") > 0, member("b") > 0),
        NOT(OR(member("a") > 0, member("b") > 0)),
        member("xs")(ALL(ANY(gt, 0))),
    ])
    def test_frames_are_balanced(self, rule):
        reporter = Reporter(Formatter(MemberNames(get_translator())))
        rule.check(make_reporting_adapter({"a": 1, "b": 0, "xs": [[1], [0]]}, reporter))
        assert reporter.depth == 0
