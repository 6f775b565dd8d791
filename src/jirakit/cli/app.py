"""
jirakit - Create and update Jira issues from YAML templates.

Templates may contain interactive placeholders:
    {{PROMPT: text}} and {{INPUT: text}} for single-line input
    {{PROMPT_MULTI: text}} and {{INPUT_MULTI: text}} for multi-line input

Examples:
    jirakit create PROJ "Fix login bug" "Users cannot log in" --type Bug
    jirakit create-from-template PROJ story-template.yml
    jirakit update PROJ-123 update-template.yml
    jirakit list-fields PROJ Story --filter Sprint
    jirakit generate-template PROJ Story template.yml --required-fields
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

from .. import __version__
from ..adapters.cache import FileMetadataStore
from ..adapters.config import EnvironmentConfigProvider
from ..adapters.input import StreamLineSource
from ..adapters.jira import JiraAdapter
from ..adapters.templates import YamlTemplateStore
from ..application.commands import (
    CommandResult,
    CreateFromTemplateCommand,
    CreateIssueCommand,
    FetchMetadataCommand,
    GenerateTemplateCommand,
    ListFieldsCommand,
    ListIssueTypesCommand,
    ShowRequiredCommand,
    UpdateIssueCommand,
)
from ..application.metadata import FieldMetadataCache
from ..application.templates import PlaceholderResolver, TemplateGenerator
from ..core.exceptions import (
    ConfigError,
    FetchError,
    InteractiveModeError,
    InvalidPathError,
    PlaceholdersPresentError,
    TemplateError,
)
from ..core.log_levels import LEVELS, parse_level
from ..core.ports.config_provider import AppConfig
from ..core.ports.issue_tracker import (
    AuthenticationError,
    IssueTrackerError,
    IssueTrackerPort,
    NotFoundError,
    PermissionError,
)
from ..core.ports.line_source import LineSourcePort
from .exit_codes import ExitCode
from .log_setup import setup_logging
from .output import Console


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jirakit",
        description="Create and update Jira issues from YAML templates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=[name for name in LEVELS if name != "WARNING"],
        help="Set log level (default: INFO, or LOG_LEVEL env var)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Shortcut for --log-level DEBUG",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Shortcut for --log-level VERBOSE",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Shortcut for --log-level ERROR (only errors)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Build and validate payloads without sending them to Jira",
    )
    parser.add_argument(
        "--cache-dir",
        type=str,
        help="Metadata cache directory (or set JIRA_CACHE_DIR, default ~/.jira-cache)",
    )
    parser.add_argument(
        "--jira-url",
        type=str,
        help="Jira instance URL (or set JIRA_URL env var)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    # Issue operations
    create = subparsers.add_parser("create", help="Create a minimal ticket with basic fields")
    create.add_argument("project", metavar="PROJECT")
    create.add_argument("summary", metavar="SUMMARY")
    create.add_argument("description", metavar="DESCRIPTION")
    create.add_argument("--type", "-t", dest="issue_type", default="Task", help="Issue type (default: Task)")
    create.add_argument("--skip-validation", action="store_true", help="Skip required-field validation")

    from_template = subparsers.add_parser(
        "create-from-template", help="Create a ticket from a YAML template"
    )
    from_template.add_argument("project", metavar="PROJECT")
    from_template.add_argument("template", metavar="YAML_FILE")
    from_template.add_argument("--skip-validation", action="store_true", help="Skip required-field validation")
    _add_interactive_flags(from_template)

    update = subparsers.add_parser("update", help="Update an existing ticket with a YAML template")
    update.add_argument("issue_key", metavar="TICKET_KEY")
    update.add_argument("template", metavar="YAML_FILE")
    _add_interactive_flags(update)

    # Field discovery
    list_fields = subparsers.add_parser(
        "list-fields",
        help="List fields (global fields, or those of a project/issue type)",
    )
    list_fields.add_argument("project", metavar="PROJECT", nargs="?")
    list_fields.add_argument("issue_type", metavar="ISSUE_TYPE", nargs="?")
    _add_filter_flag(list_fields)

    list_types = subparsers.add_parser("list-issue-types", help="List issue types for a project")
    list_types.add_argument("project", metavar="PROJECT")

    show_required = subparsers.add_parser(
        "show-required", help="Show required fields for a project/issue type"
    )
    show_required.add_argument("project", metavar="PROJECT")
    show_required.add_argument("issue_type", metavar="ISSUE_TYPE")

    # Template management
    generate = subparsers.add_parser(
        "generate-template", help="Generate a YAML template with available fields"
    )
    generate.add_argument("project", metavar="PROJECT")
    generate.add_argument("issue_type", metavar="ISSUE_TYPE")
    generate.add_argument("output", metavar="OUTPUT_FILE")
    generate.add_argument(
        "--required-fields", "--required-only",
        dest="required_only",
        action="store_true",
        help="Only include required fields",
    )
    _add_filter_flag(generate)
    generate.add_argument(
        "--update", "--add-to-existing",
        dest="update",
        action="store_true",
        help="Add missing fields to an existing template",
    )

    # Metadata management
    fetch = subparsers.add_parser(
        "fetch-metadata", help="Fetch and cache field metadata for a project/issue type"
    )
    fetch.add_argument("project", metavar="PROJECT")
    fetch.add_argument("issue_type", metavar="ISSUE_TYPE")
    fetch.add_argument("--refresh", action="store_true", help="Refetch even if cached")

    return parser


def _add_interactive_flags(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--interactive",
        dest="interactive",
        action="store_const",
        const=True,
        default=None,
        help="Prompt for placeholders (default: auto-detect)",
    )
    group.add_argument(
        "--no-interactive",
        dest="interactive",
        action="store_const",
        const=False,
        help="Fail if the template contains placeholders",
    )


def _add_filter_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--filter",
        dest="filters",
        action="append",
        default=[],
        metavar="STRING",
        help="Only fields whose name contains STRING (case-insensitive, repeatable)",
    )


def resolve_log_level(args: argparse.Namespace, configured: Optional[str] = None) -> int:
    """
    Pick the log level: shortcut flags, then --log-level, then LOG_LEVEL.

    Raises:
        ValueError: If the configured level name is unknown
    """
    if args.debug:
        return logging.DEBUG
    if args.verbose:
        return parse_level("VERBOSE")
    if args.quiet:
        return logging.ERROR
    if args.log_level:
        return parse_level(args.log_level)
    return parse_level(configured or "INFO")


def exit_code_for(result: CommandResult) -> ExitCode:
    """Map a failed command result to an exit code."""
    if result.success:
        return ExitCode.SUCCESS

    error = result.exception
    if isinstance(error, FetchError) and error.cause is not None:
        error = error.cause

    if error is None:
        return ExitCode.VALIDATION_ERROR if result.data else ExitCode.ERROR
    if isinstance(error, ConfigError):
        return ExitCode.CONFIG_ERROR
    if isinstance(error, (AuthenticationError, PermissionError)):
        return ExitCode.AUTH_ERROR
    if isinstance(error, NotFoundError):
        return ExitCode.NOT_FOUND
    if isinstance(error, IssueTrackerError):
        return ExitCode.CONNECTION_ERROR if error.status_code is None else ExitCode.ERROR
    if isinstance(
        error,
        (TemplateError, PlaceholdersPresentError, InvalidPathError, InteractiveModeError),
    ):
        return ExitCode.TEMPLATE_ERROR
    return ExitCode.ERROR


@dataclass
class CliContext:
    """Everything a subcommand handler needs."""

    args: argparse.Namespace
    config: AppConfig
    console: Console
    tracker: IssueTrackerPort
    cache: FieldMetadataCache
    templates: YamlTemplateStore
    line_source: LineSourcePort

    @property
    def dry_run(self) -> bool:
        return self.config.dry_run

    def resolver(self) -> PlaceholderResolver:
        return PlaceholderResolver(line_source=self.line_source)


# -----------------------------------------------------------------------------
# Subcommand handlers
# -----------------------------------------------------------------------------


def _report_failure(ctx: CliContext, result: CommandResult) -> int:
    if result.exception is None and result.data:
        ctx.console.missing_fields(result.data)
        ctx.console.detail("Use --skip-validation to submit anyway.")
    else:
        ctx.console.error(result.error or "Command failed")
    return exit_code_for(result)


def _report_created(ctx: CliContext, result: CommandResult) -> int:
    if not result.success:
        return _report_failure(ctx, result)

    if result.dry_run:
        ctx.console.dry_run_banner()
        ctx.console.payload(result.data)
        return ExitCode.SUCCESS

    if result.data:
        ctx.console.issue_link(result.data, ctx.tracker.browse_url(result.data))
    return ExitCode.SUCCESS


def cmd_create(ctx: CliContext) -> int:
    args = ctx.args
    command = CreateIssueCommand(
        ctx.tracker,
        ctx.cache,
        project_key=args.project,
        summary=args.summary,
        description=args.description,
        issue_type=args.issue_type,
        skip_validation=args.skip_validation,
        dry_run=ctx.dry_run,
    )
    return _report_created(ctx, command.execute())


def cmd_create_from_template(ctx: CliContext) -> int:
    args = ctx.args
    command = CreateFromTemplateCommand(
        ctx.tracker,
        ctx.cache,
        ctx.templates,
        ctx.resolver(),
        project_key=args.project,
        template_path=Path(args.template),
        interactive=args.interactive,
        is_tty=ctx.line_source.is_interactive,
        skip_validation=args.skip_validation,
        dry_run=ctx.dry_run,
    )
    return _report_created(ctx, command.execute())


def cmd_update(ctx: CliContext) -> int:
    args = ctx.args
    command = UpdateIssueCommand(
        ctx.tracker,
        ctx.templates,
        ctx.resolver(),
        issue_key=args.issue_key,
        template_path=Path(args.template),
        interactive=args.interactive,
        is_tty=ctx.line_source.is_interactive,
        dry_run=ctx.dry_run,
    )
    result = command.execute()
    if not result.success:
        return _report_failure(ctx, result)

    if result.dry_run:
        ctx.console.dry_run_banner()
        ctx.console.payload(result.data)
    else:
        ctx.console.success(f"Updated {args.issue_key}")
        ctx.console.detail(ctx.tracker.browse_url(args.issue_key))
    return ExitCode.SUCCESS


def cmd_list_fields(ctx: CliContext) -> int:
    args = ctx.args
    result = ListFieldsCommand(
        ctx.tracker,
        ctx.cache,
        project_key=args.project,
        issue_type=args.issue_type,
        filters=args.filters,
    ).execute()
    if not result.success:
        return _report_failure(ctx, result)

    if args.project:
        title = f"Fields for {args.issue_type} in {args.project}"
    else:
        title = "Global Jira fields"
    ctx.console.field_entries(result.data, title)
    return ExitCode.SUCCESS


def cmd_list_issue_types(ctx: CliContext) -> int:
    result = ListIssueTypesCommand(ctx.tracker, project_key=ctx.args.project).execute()
    if not result.success:
        return _report_failure(ctx, result)

    ctx.console.issue_types(result.data, ctx.args.project)
    return ExitCode.SUCCESS


def cmd_show_required(ctx: CliContext) -> int:
    args = ctx.args
    result = ShowRequiredCommand(ctx.cache, args.project, args.issue_type).execute()
    if not result.success:
        return _report_failure(ctx, result)

    ctx.console.required_fields(result.data, args.project, args.issue_type)
    return ExitCode.SUCCESS


def cmd_generate_template(ctx: CliContext) -> int:
    args = ctx.args
    result = GenerateTemplateCommand(
        ctx.cache,
        TemplateGenerator(ctx.templates),
        project_key=args.project,
        issue_type=args.issue_type,
        output_path=Path(args.output),
        required_only=args.required_only,
        filters=args.filters,
        update=args.update,
    ).execute()
    if not result.success:
        return _report_failure(ctx, result)

    ctx.console.generation_result(result.data)
    return ExitCode.SUCCESS


def cmd_fetch_metadata(ctx: CliContext) -> int:
    args = ctx.args
    result = FetchMetadataCommand(
        ctx.cache, args.project, args.issue_type, force_refresh=args.refresh
    ).execute()
    if not result.success:
        return _report_failure(ctx, result)

    ctx.console.success(f"Metadata for {args.project}/{args.issue_type} cached at {result.data}")
    return ExitCode.SUCCESS


HANDLERS: dict[str, Callable[[CliContext], int]] = {
    "create": cmd_create,
    "create-from-template": cmd_create_from_template,
    "update": cmd_update,
    "list-fields": cmd_list_fields,
    "list-issue-types": cmd_list_issue_types,
    "show-required": cmd_show_required,
    "generate-template": cmd_generate_template,
    "fetch-metadata": cmd_fetch_metadata,
}


# -----------------------------------------------------------------------------
# Entry points
# -----------------------------------------------------------------------------


def run(
    args: argparse.Namespace,
    tracker: Optional[IssueTrackerPort] = None,
    line_source: Optional[LineSourcePort] = None,
    console: Optional[Console] = None,
    environ: Optional[dict[str, str]] = None,
) -> int:
    """
    Run a parsed command line.

    Args:
        args: Parsed arguments (see create_parser)
        tracker: Issue tracker to use instead of a JiraAdapter built from config
        line_source: Source of interactive answers (defaults to stdin)
        console: Output console (defaults to stdout)
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Process exit code
    """
    console = console or Console(color=not args.no_color)

    overrides: dict[str, Any] = {
        "jira_url": args.jira_url,
        "cache_dir": args.cache_dir,
        "dry_run": True if args.dry_run else None,
    }
    provider = EnvironmentConfigProvider(cli_overrides=overrides, environ=environ)

    try:
        level = resolve_log_level(args, provider.get("log_level"))
    except ValueError as e:
        console.error(str(e))
        return ExitCode.CONFIG_ERROR
    setup_logging(level, color=not args.no_color)
    logger = logging.getLogger("main")

    try:
        config = provider.load_validated() if tracker is None else provider.load()
    except ConfigError as e:
        for error in e.errors:
            console.error(error)
        return ExitCode.CONFIG_ERROR

    if tracker is None:
        tracker = JiraAdapter(config.tracker, dry_run=config.dry_run)

    ctx = CliContext(
        args=args,
        config=config,
        console=console,
        tracker=tracker,
        cache=FieldMetadataCache(tracker, FileMetadataStore(config.cache_dir)),
        templates=YamlTemplateStore(),
        line_source=line_source or StreamLineSource(sys.stdin),
    )

    logger.debug(f"Running '{args.command}' against {config.tracker.url or tracker.name}")
    return int(HANDLERS[args.command](ctx))


def main(argv: Optional[list[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return ExitCode.SUCCESS

    try:
        return run(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return ExitCode.INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
