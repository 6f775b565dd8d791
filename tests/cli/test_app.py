"""Tests for the command line interface."""

import io
import json
import logging

import pytest
from unittest.mock import Mock

from jirakit.adapters.input import StreamLineSource
from jirakit.cli import app
from jirakit.cli.app import create_parser, exit_code_for, resolve_log_level, run
from jirakit.cli.exit_codes import ExitCode
from jirakit.cli.output import Console
from jirakit.application.commands import CommandResult
from jirakit.application.validation import MissingField
from jirakit.core.exceptions import FetchError, PlaceholdersPresentError, TemplateError
from jirakit.core.log_levels import VERBOSE
from jirakit.core.ports.issue_tracker import AuthenticationError, IssueTrackerError, NotFoundError

METADATA = {
    "projects": [
        {
            "issuetypes": [
                {
                    "name": "Story",
                    "fields": {
                        "summary": {"name": "Summary", "required": True, "schema": {"type": "string"}},
                        "issuetype": {"name": "Issue Type", "required": True, "schema": {"type": "issuetype"}},
                        "customfield_10002": {"name": "Story Points", "schema": {"type": "number"}},
                    },
                }
            ]
        }
    ]
}


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch, tmp_path):
    monkeypatch.setattr(app, "setup_logging", Mock())
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def tracker():
    tracker = Mock()
    tracker.name = "Jira"
    tracker.fetch_createmeta.return_value = METADATA
    tracker.create_issue.return_value = "PROJ-42"
    tracker.browse_url.side_effect = lambda key: f"https://jira.example.com/browse/{key}"
    return tracker


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def environ(tmp_path):
    return {"JIRA_CACHE_DIR": str(tmp_path / "cache")}


def invoke(argv, tracker, output, environ, answers=None):
    args = create_parser().parse_args(argv)
    line_source = StreamLineSource(io.StringIO(answers or ""), output=io.StringIO())
    return run(
        args,
        tracker=tracker,
        line_source=line_source,
        console=Console(color=False, stream=output),
        environ=environ,
    )


class TestParser:
    """Tests for argument parsing."""

    def test_generate_template_options(self):
        args = create_parser().parse_args(
            ["generate-template", "PROJ", "Story", "t.yml", "--required-fields",
             "--filter", "Sprint", "--filter", "Story Points", "--update"]
        )
        assert args.required_only
        assert args.update
        assert args.filters == ["Sprint", "Story Points"]

    def test_generate_template_aliases(self):
        args = create_parser().parse_args(
            ["generate-template", "PROJ", "Story", "t.yml", "--required-only", "--add-to-existing"]
        )
        assert args.required_only
        assert args.update

    def test_interactive_flags(self):
        parser = create_parser()
        assert parser.parse_args(["update", "PROJ-1", "t.yml"]).interactive is None
        assert parser.parse_args(["update", "PROJ-1", "t.yml", "--interactive"]).interactive is True
        assert parser.parse_args(["update", "PROJ-1", "t.yml", "--no-interactive"]).interactive is False

    def test_create_defaults(self):
        args = create_parser().parse_args(["create", "PROJ", "Summary", "Description"])
        assert args.issue_type == "Task"
        assert not args.skip_validation

    def test_invalid_log_level(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--log-level", "LOUD", "list-issue-types", "PROJ"])


class TestResolveLogLevel:
    """Tests for log level selection."""

    def parse(self, *argv):
        return create_parser().parse_args([*argv, "list-issue-types", "PROJ"])

    def test_default(self):
        assert resolve_log_level(self.parse()) == logging.INFO

    def test_shortcuts(self):
        assert resolve_log_level(self.parse("--debug")) == logging.DEBUG
        assert resolve_log_level(self.parse("--verbose")) == VERBOSE
        assert resolve_log_level(self.parse("--quiet")) == logging.ERROR

    def test_flag_beats_environment(self):
        assert resolve_log_level(self.parse("--log-level", "verbose"), "ERROR") == VERBOSE

    def test_environment(self):
        assert resolve_log_level(self.parse(), "DEBUG") == logging.DEBUG

    def test_invalid_environment(self):
        with pytest.raises(ValueError):
            resolve_log_level(self.parse(), "LOUD")


class TestExitCodes:
    """Tests for exit_code_for."""

    def test_success(self):
        assert exit_code_for(CommandResult.ok()) == ExitCode.SUCCESS

    def test_validation(self):
        result = CommandResult.fail("missing", data=[MissingField("summary", "Summary")])
        assert exit_code_for(result) == ExitCode.VALIDATION_ERROR

    @pytest.mark.parametrize(
        "error,code",
        [
            (TemplateError("bad"), ExitCode.TEMPLATE_ERROR),
            (PlaceholdersPresentError(["fields.summary"]), ExitCode.TEMPLATE_ERROR),
            (NotFoundError("nope", status_code=404), ExitCode.NOT_FOUND),
            (AuthenticationError("no", status_code=401), ExitCode.AUTH_ERROR),
            (IssueTrackerError("down"), ExitCode.CONNECTION_ERROR),
            (IssueTrackerError("boom", status_code=500), ExitCode.ERROR),
        ],
    )
    def test_exceptions(self, error, code):
        assert exit_code_for(CommandResult.fail(str(error), exception=error)) == code

    def test_fetch_error_uses_cause(self):
        cause = AuthenticationError("no", status_code=401)
        error = FetchError("failed", status_code=401, cause=cause)
        assert exit_code_for(CommandResult.fail("failed", exception=error)) == ExitCode.AUTH_ERROR


class TestRun:
    """Tests for running subcommands end to end."""

    def test_missing_credentials(self, output, environ):
        args = create_parser().parse_args(["list-issue-types", "PROJ"])
        code = run(args, console=Console(color=False, stream=output), environ=environ)

        assert code == ExitCode.CONFIG_ERROR
        assert "JIRA_URL" in output.getvalue()

    def test_create(self, tracker, output, environ):
        code = invoke(["create", "PROJ", "Fix login", "Broken", "--type", "Story"], tracker, output, environ)

        assert code == ExitCode.SUCCESS
        assert "PROJ-42" in output.getvalue()
        assert "https://jira.example.com/browse/PROJ-42" in output.getvalue()

    def test_create_dry_run_prints_payload(self, tracker, output, environ):
        code = invoke(
            ["--dry-run", "create", "PROJ", "Fix login", "Broken", "--type", "Story"],
            tracker, output, environ,
        )

        assert code == ExitCode.SUCCESS
        tracker.create_issue.assert_not_called()
        text = output.getvalue()
        assert "DRY-RUN" in text
        payload = json.loads(text[text.index("{"):])
        assert payload["fields"]["summary"] == "Fix login"

    def test_create_from_template_interactive(self, tracker, output, environ, tmp_path):
        template = tmp_path / "story.yml"
        template.write_text(
            "fields:\n  summary: '{{PROMPT: Summary}}'\n  issuetype:\n    name: Story\n"
            "  customfield_10002: '{{INPUT: Points}}'\n"
        )

        code = invoke(
            ["create-from-template", "PROJ", str(template), "--interactive"],
            tracker, output, environ, answers="hello\n3\n",
        )

        assert code == ExitCode.SUCCESS
        payload = tracker.create_issue.call_args[0][0]
        assert payload["fields"]["summary"] == "hello"
        assert payload["fields"]["customfield_10002"] == 3

    def test_create_from_template_missing_fields(self, tracker, output, environ, tmp_path):
        template = tmp_path / "story.yml"
        template.write_text("fields:\n  issuetype:\n    name: Story\n")

        code = invoke(["create-from-template", "PROJ", str(template)], tracker, output, environ)

        assert code == ExitCode.VALIDATION_ERROR
        assert "summary (Summary)" in output.getvalue()
        tracker.create_issue.assert_not_called()

    def test_create_from_template_no_interactive(self, tracker, output, environ, tmp_path):
        template = tmp_path / "story.yml"
        template.write_text("fields:\n  summary: '{{PROMPT: Summary}}'\n")

        code = invoke(
            ["create-from-template", "PROJ", str(template), "--no-interactive"],
            tracker, output, environ,
        )

        assert code == ExitCode.TEMPLATE_ERROR
        assert "fields.summary" in output.getvalue()

    def test_create_from_template_dry_run_with_date(self, tracker, output, environ, tmp_path):
        template = tmp_path / "story.yml"
        template.write_text("fields:\n  summary: Ship it\n  duedate: 2024-01-31\n")

        code = invoke(
            ["--dry-run", "create-from-template", "PROJ", str(template), "--skip-validation"],
            tracker, output, environ,
        )

        assert code == ExitCode.SUCCESS
        text = output.getvalue()
        payload = json.loads(text[text.index("{"):])
        assert payload["fields"]["duedate"] == "2024-01-31"

    def test_update(self, tracker, output, environ, tmp_path):
        template = tmp_path / "update.yml"
        template.write_text("fields:\n  summary: New title\n")

        code = invoke(["update", "PROJ-7", str(template)], tracker, output, environ)

        assert code == ExitCode.SUCCESS
        tracker.update_issue.assert_called_once_with("PROJ-7", {"fields": {"summary": "New title"}})

    def test_show_required(self, tracker, output, environ):
        code = invoke(["show-required", "PROJ", "Story"], tracker, output, environ)

        assert code == ExitCode.SUCCESS
        text = output.getvalue()
        assert "Summary (summary)" in text
        assert "Story Points" not in text

    def test_list_fields_filter(self, tracker, output, environ):
        code = invoke(["list-fields", "PROJ", "Story", "--filter", "points"], tracker, output, environ)

        assert code == ExitCode.SUCCESS
        assert "Story Points (customfield_10002)" in output.getvalue()
        assert "Summary" not in output.getvalue()

    def test_list_fields_project_without_type(self, tracker, output, environ):
        code = invoke(["list-fields", "PROJ"], tracker, output, environ)
        assert code == ExitCode.ERROR

    def test_list_issue_types_not_found(self, tracker, output, environ):
        tracker.get_issue_types.side_effect = NotFoundError("Project 'NOPE' not found")

        code = invoke(["list-issue-types", "NOPE"], tracker, output, environ)

        assert code == ExitCode.NOT_FOUND
        assert "NOPE" in output.getvalue()

    def test_generate_template(self, tracker, output, environ, tmp_path):
        target = tmp_path / "story.yml"

        code = invoke(["generate-template", "PROJ", "Story", str(target)], tracker, output, environ)

        assert code == ExitCode.SUCCESS
        assert target.exists()

        code = invoke(["generate-template", "PROJ", "Story", str(target)], tracker, output, environ)
        assert code == ExitCode.TEMPLATE_ERROR

    def test_fetch_metadata_refresh(self, tracker, output, environ, tmp_path):
        invoke(["fetch-metadata", "PROJ", "Story"], tracker, output, environ)
        invoke(["fetch-metadata", "PROJ", "Story"], tracker, output, environ)
        assert tracker.fetch_createmeta.call_count == 1

        code = invoke(["fetch-metadata", "PROJ", "Story", "--refresh"], tracker, output, environ)

        assert code == ExitCode.SUCCESS
        assert tracker.fetch_createmeta.call_count == 2
        assert (tmp_path / "cache" / "PROJ-Story.json").exists()

    def test_fetch_failure(self, tracker, output, environ):
        tracker.fetch_createmeta.side_effect = IssueTrackerError("Connection failed")

        code = invoke(["fetch-metadata", "PROJ", "Story"], tracker, output, environ)

        assert code == ExitCode.CONNECTION_ERROR
        assert "Connection failed" in output.getvalue()


class TestMain:
    """Tests for main()."""

    def test_no_command_prints_help(self, capsys):
        assert app.main([]) == ExitCode.SUCCESS
        assert "usage:" in capsys.readouterr().out
