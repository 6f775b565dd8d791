"""
Issue Commands - Create and update issues.
"""

import logging
from pathlib import Path
from typing import Any, Optional

from ...core.domain.document import get_at, with_value_at
from ...core.log_levels import verbose
from ...core.ports.issue_tracker import IssueTrackerPort
from ...core.ports.template_store import TemplateStorePort
from ..metadata.cache import FieldMetadataCache
from ..templates.resolver import PlaceholderResolver, decide_interactive
from ..validation import ValidationResult, coerce_payload, validate_required
from .base import Command, CommandResult

DEFAULT_ISSUE_TYPE = "Task"


def validation_message(missing: ValidationResult) -> str:
    return "Missing required fields: " + ", ".join(str(m) for m in missing)


class _SubmitMixin:
    """Shared pre-submission validation for create commands."""

    tracker: IssueTrackerPort
    cache: FieldMetadataCache
    logger: logging.Logger
    skip_validation: bool

    def _validated_payload(
        self,
        project_key: str,
        issue_type: str,
        payload: dict[str, Any],
    ) -> tuple[dict[str, Any], ValidationResult]:
        """Coerce the payload to the field schemas and list missing required fields."""
        if self.skip_validation:
            self.logger.info("Skipping validation as requested.")
            return payload, []

        metadata = self.cache.get_metadata(project_key, issue_type)
        payload = coerce_payload(metadata, payload)
        return payload, validate_required(metadata, payload, logger=self.logger)


class CreateIssueCommand(_SubmitMixin, Command):
    """Create a minimal issue from a summary and description."""

    def __init__(
        self,
        tracker: IssueTrackerPort,
        cache: FieldMetadataCache,
        project_key: str,
        summary: str,
        description: str,
        issue_type: str = DEFAULT_ISSUE_TYPE,
        skip_validation: bool = False,
        dry_run: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(dry_run=dry_run, logger=logger)
        self.tracker = tracker
        self.cache = cache
        self.project_key = project_key
        self.summary = summary
        self.description = description
        self.issue_type = issue_type or DEFAULT_ISSUE_TYPE
        self.skip_validation = skip_validation

    def validate(self) -> Optional[str]:
        if not self.project_key:
            return "Project key is required"
        if not self.summary:
            return "Summary is required"
        return None

    def build_payload(self) -> dict[str, Any]:
        return {
            "fields": {
                "project": {"key": self.project_key},
                "summary": self.summary,
                "description": self.description,
                "issuetype": {"name": self.issue_type},
            }
        }

    def _execute(self) -> CommandResult:
        self.logger.info(f"Creating {self.issue_type} in project {self.project_key}...")
        verbose(self.logger, f"Summary: {self.summary}")
        verbose(self.logger, f"Description: {self.description}")

        payload = self.build_payload()
        self.logger.debug(f"Payload: {payload}")

        payload, missing = self._validated_payload(self.project_key, self.issue_type, payload)
        if missing:
            return CommandResult.fail(validation_message(missing), data=missing)

        if self.dry_run:
            self.logger.info(f"[DRY-RUN] Would create {self.issue_type} in {self.project_key}")
            return CommandResult.ok(payload, dry_run=True)

        return CommandResult.ok(self.tracker.create_issue(payload))


class CreateFromTemplateCommand(_SubmitMixin, Command):
    """
    Create an issue from a template.

    The project is injected into the template, placeholders are resolved
    (or rejected) and the payload is validated before submission.
    """

    def __init__(
        self,
        tracker: IssueTrackerPort,
        cache: FieldMetadataCache,
        templates: TemplateStorePort,
        resolver: PlaceholderResolver,
        project_key: str,
        template_path: Path,
        interactive: Optional[bool] = None,
        is_tty: bool = False,
        skip_validation: bool = False,
        dry_run: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Args:
            interactive: True/False to force prompting on/off, None to auto-detect
            is_tty: Whether a terminal is attached (used by auto-detection)
        """
        super().__init__(dry_run=dry_run, logger=logger)
        self.tracker = tracker
        self.cache = cache
        self.templates = templates
        self.resolver = resolver
        self.project_key = project_key
        self.template_path = Path(template_path)
        self.interactive = interactive
        self.is_tty = is_tty
        self.skip_validation = skip_validation

    def validate(self) -> Optional[str]:
        if not self.project_key:
            return "Project key is required"
        if not str(self.template_path):
            return "Template path is required"
        return None

    def _execute(self) -> CommandResult:
        self.logger.info(
            f"Creating ticket in project {self.project_key} from template {self.template_path}."
        )
        document = self.templates.load(self.template_path)
        self.logger.debug("Read and converted YAML payload from file.")

        payload = with_value_at(document, ("fields", "project"), {"key": self.project_key})
        self.logger.debug("JSON payload created with project key.")

        interactive = decide_interactive(self.interactive, payload, self.is_tty, self.logger)
        payload = self.resolver.resolve(payload, interactive)
        self.logger.debug(f"Final payload: {payload}")

        issue_type = get_at(payload, ("fields", "issuetype", "name")) or DEFAULT_ISSUE_TYPE

        payload, missing = self._validated_payload(self.project_key, issue_type, payload)
        if missing:
            return CommandResult.fail(validation_message(missing), data=missing)

        if self.dry_run:
            self.logger.info(f"[DRY-RUN] Would create {issue_type} in {self.project_key}")
            return CommandResult.ok(payload, dry_run=True)

        return CommandResult.ok(self.tracker.create_issue(payload))


class UpdateIssueCommand(Command):
    """Update an existing issue with the fields of a template."""

    def __init__(
        self,
        tracker: IssueTrackerPort,
        templates: TemplateStorePort,
        resolver: PlaceholderResolver,
        issue_key: str,
        template_path: Path,
        interactive: Optional[bool] = None,
        is_tty: bool = False,
        dry_run: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(dry_run=dry_run, logger=logger)
        self.tracker = tracker
        self.templates = templates
        self.resolver = resolver
        self.issue_key = issue_key
        self.template_path = Path(template_path)
        self.interactive = interactive
        self.is_tty = is_tty

    def validate(self) -> Optional[str]:
        if not self.issue_key:
            return "Issue key is required"
        return None

    def _execute(self) -> CommandResult:
        self.logger.info(f"Updating ticket {self.issue_key} with data from {self.template_path}.")
        payload = self.templates.load(self.template_path)
        self.logger.debug("Read and converted YAML payload from file.")

        interactive = decide_interactive(self.interactive, payload, self.is_tty, self.logger)
        payload = self.resolver.resolve(payload, interactive)

        verbose(self.logger, f"Updating ticket: {self.issue_key}")
        self.logger.debug(f"Final payload: {payload}")

        if self.dry_run:
            self.logger.info(f"[DRY-RUN] Would update {self.issue_key}")
            return CommandResult.ok(payload, dry_run=True)

        self.tracker.update_issue(self.issue_key, payload)
        return CommandResult.ok(self.issue_key)
