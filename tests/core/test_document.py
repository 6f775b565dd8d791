"""Tests for document path helpers."""

import pytest

from jirakit.core.domain.document import (
    format_path,
    get_at,
    has_path,
    is_safe_path,
    iter_string_leaves,
    validate_path,
    with_value_at,
)
from jirakit.core.exceptions import InvalidPathError


class TestPaths:
    """Tests for path formatting and validation."""

    def test_format_path(self):
        assert format_path(("fields", "labels", 0)) == "fields.labels.0"

    def test_format_empty_path(self):
        assert format_path(()) == ""

    @pytest.mark.parametrize("path", ["fields.summary", "fields.customfield_10001", "a-b.0"])
    def test_safe_paths(self, path):
        assert is_safe_path(path)

    @pytest.mark.parametrize("path", ["fields.my field", "fields.x;rm", "", "fields.$x"])
    def test_unsafe_paths(self, path):
        assert not is_safe_path(path)

    def test_validate_path_returns_string(self):
        assert validate_path(("fields", "summary")) == "fields.summary"

    def test_validate_path_raises(self):
        with pytest.raises(InvalidPathError) as exc_info:
            validate_path(("fields", "bad key"))
        assert exc_info.value.path == "fields.bad key"


class TestIterStringLeaves:
    """Tests for depth-first string leaf traversal."""

    def test_declaration_order(self):
        document = {
            "fields": {
                "summary": "s",
                "labels": ["a", "b"],
                "priority": {"name": "High"},
                "points": 3,
            }
        }
        leaves = list(iter_string_leaves(document))
        assert leaves == [
            (("fields", "summary"), "s"),
            (("fields", "labels", 0), "a"),
            (("fields", "labels", 1), "b"),
            (("fields", "priority", "name"), "High"),
        ]

    def test_scalar_root(self):
        assert list(iter_string_leaves("x")) == [((), "x")]

    def test_non_string_leaves_skipped(self):
        assert list(iter_string_leaves({"a": 1, "b": None, "c": True})) == []


class TestGetAt:
    """Tests for get_at and has_path."""

    def test_nested(self):
        document = {"fields": {"labels": ["x", "y"]}}
        assert get_at(document, ("fields", "labels", 1)) == "y"

    def test_missing_returns_default(self):
        assert get_at({"fields": {}}, ("fields", "summary"), "none") == "none"

    def test_index_out_of_range(self):
        assert get_at({"a": [1]}, ("a", 5)) is None

    def test_has_path_with_null_value(self):
        document = {"fields": {"summary": None}}
        assert has_path(document, ("fields", "summary"))
        assert not has_path(document, ("fields", "description"))


class TestWithValueAt:
    """Tests for copy-on-write updates."""

    def test_replaces_value(self):
        document = {"fields": {"summary": "old", "other": {"x": 1}}}
        updated = with_value_at(document, ("fields", "summary"), "new")

        assert updated["fields"]["summary"] == "new"
        assert document["fields"]["summary"] == "old"
        # Subtrees off the path are shared
        assert updated["fields"]["other"] is document["fields"]["other"]

    def test_creates_missing_mappings(self):
        updated = with_value_at({}, ("fields", "project"), {"key": "PROJ"})
        assert updated == {"fields": {"project": {"key": "PROJ"}}}

    def test_list_index(self):
        document = {"labels": ["a", "b"]}
        updated = with_value_at(document, ("labels", 1), "c")
        assert updated == {"labels": ["a", "c"]}
        assert document == {"labels": ["a", "b"]}

    def test_list_index_out_of_range(self):
        with pytest.raises(KeyError):
            with_value_at({"labels": []}, ("labels", 0), "x")

    def test_through_scalar(self):
        with pytest.raises(TypeError):
            with_value_at({"fields": "text"}, ("fields", "summary"), "x")

    def test_empty_path_replaces_document(self):
        assert with_value_at({"a": 1}, (), "x") == "x"
