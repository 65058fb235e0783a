"""Tests for change detection."""

from attrguard.validators.changes import changed_attributes


def test_identical_bag_has_no_changes():
    previous = {"title": "a", "count": 3}
    assert changed_attributes(previous, dict(previous)) == []


def test_changed_values_are_reported():
    assert changed_attributes({"title": "a", "count": 3}, {"title": "b", "count": 3}) == ["title"]


def test_first_time_assignments_are_reported_even_when_falsy():
    assert changed_attributes({}, {"count": 0, "flag": False, "name": None}) == ["count", "flag", "name"]


def test_uses_value_equality_not_identity():
    previous = {"tags": ["a", "b"]}
    assert changed_attributes(previous, {"tags": ["a", "b"]}) == []
    assert changed_attributes(previous, {"tags": ["a"]}) == ["tags"]


def test_order_follows_incoming_bag():
    previous = {"a": 1, "b": 1, "c": 1}
    assert changed_attributes(previous, {"c": 2, "a": 2, "b": 1}) == ["c", "a"]


def test_previous_only_attributes_are_ignored():
    assert changed_attributes({"a": 1, "b": 2}, {"a": 1}) == []
