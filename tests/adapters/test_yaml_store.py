"""Tests for the YAML template store."""

import logging

import pytest
import yaml

from jirakit.adapters.templates import YamlTemplateStore
from jirakit.core.domain.fields import FieldTemplate
from jirakit.core.exceptions import TemplateError


@pytest.fixture
def store():
    return YamlTemplateStore()


class TestLoad:
    """Tests for YamlTemplateStore.load."""

    def test_load(self, store, tmp_path):
        path = tmp_path / "t.yml"
        path.write_text("fields:\n  summary: Hello\n  labels: [a, b]\n")
        assert store.load(path) == {"fields": {"summary": "Hello", "labels": ["a", "b"]}}

    def test_missing_file(self, store, tmp_path):
        with pytest.raises(TemplateError) as exc_info:
            store.load(tmp_path / "missing.yml")
        assert "not found" in str(exc_info.value)

    def test_invalid_yaml(self, store, tmp_path):
        path = tmp_path / "t.yml"
        path.write_text("fields: [unclosed\n")
        with pytest.raises(TemplateError):
            store.load(path)

    @pytest.mark.parametrize("text", ["", "- a\n- b\n", "just text\n"])
    def test_top_level_must_be_mapping(self, store, tmp_path, text):
        path = tmp_path / "t.yml"
        path.write_text(text)
        with pytest.raises(TemplateError):
            store.load(path)

    def test_fields_must_be_mapping(self, store, tmp_path):
        path = tmp_path / "t.yml"
        path.write_text("fields:\n  - summary\n")
        with pytest.raises(TemplateError):
            store.load(path)

    def test_dates_stay_strings(self, store, tmp_path):
        path = tmp_path / "t.yml"
        path.write_text("fields:\n  duedate: 2024-01-31\n  customfield_10100: 2024-01-31T09:30:00Z\n")

        fields = store.load(path)["fields"]

        assert fields == {"duedate": "2024-01-31", "customfield_10100": "2024-01-31T09:30:00Z"}

    def test_bare_fields_key_is_empty_mapping(self, store, tmp_path):
        path = tmp_path / "t.yml"
        path.write_text("fields:\n")
        assert store.load(path) == {"fields": {}}


class TestWrite:
    """Tests for writing and extending templates."""

    @pytest.fixture
    def fields(self):
        return [
            FieldTemplate("summary", "{{PROMPT: Enter Summary}}", "Summary [REQUIRED] - Type: string"),
            FieldTemplate("priority", {"name": "{{PROMPT: Enter priority}}"}, "Priority - Type: priority"),
            FieldTemplate("issuetype", {"name": "Story"}, "Issue Type [REQUIRED] - Type: issuetype"),
        ]

    def test_write_new_layout(self, store, tmp_path, fields):
        path = tmp_path / "t.yml"
        store.write_new(path, ["Header line"], fields[:1])

        assert path.read_text() == (
            "# Header line\n"
            "\n"
            "fields:\n"
            "\n"
            "  # Summary [REQUIRED] - Type: string\n"
            "  summary: '{{PROMPT: Enter Summary}}'\n"
        )

    def test_write_new_parses(self, store, tmp_path, fields):
        path = tmp_path / "t.yml"
        store.write_new(path, ["Header"], fields)

        assert store.load(path) == {
            "fields": {
                "summary": "{{PROMPT: Enter Summary}}",
                "priority": {"name": "{{PROMPT: Enter priority}}"},
                "issuetype": {"name": "Story"},
            }
        }

    def test_add_fields_appends(self, store, tmp_path, fields):
        path = tmp_path / "t.yml"
        path.write_text("# keep me\nfields:\n  summary: Done\n")

        store.add_fields(path, fields[1:])

        text = path.read_text()
        assert text.startswith("# keep me\nfields:\n  summary: Done\n")
        assert "  # Priority - Type: priority\n" in text
        assert yaml.safe_load(text)["fields"] == {
            "summary": "Done",
            "priority": {"name": "{{PROMPT: Enter priority}}"},
            "issuetype": {"name": "Story"},
        }

    def test_add_fields_rewrites_when_fields_not_last(self, store, tmp_path, fields, caplog):
        path = tmp_path / "t.yml"
        path.write_text("fields:\n  summary: Done\nupdate:\n  labels: []\n")

        with caplog.at_level(logging.WARNING, logger="YamlTemplateStore"):
            store.add_fields(path, fields[2:])

        assert yaml.safe_load(path.read_text()) == {
            "fields": {"summary": "Done", "issuetype": {"name": "Story"}},
            "update": {"labels": []},
        }
        assert any("rewriting" in record.getMessage() for record in caplog.records)

    def test_add_fields_to_empty_fields(self, store, tmp_path, fields):
        path = tmp_path / "t.yml"
        path.write_text("fields:\n")

        store.add_fields(path, fields[:1])

        assert store.load(path) == {"fields": {"summary": "{{PROMPT: Enter Summary}}"}}
