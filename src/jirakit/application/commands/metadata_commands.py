"""
Metadata Commands - Field discovery, metadata caching and template generation.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence

from ...core.domain.fields import FieldSchemaEntry, extract_fields, matches_filters
from ...core.log_levels import verbose
from ...core.ports.issue_tracker import IssueTrackerPort
from ..metadata.cache import FieldMetadataCache
from ..templates.generator import TemplateGenerator
from .base import Command, CommandResult


class FetchMetadataCommand(Command):
    """Fetch (or refresh) and cache create metadata."""

    def __init__(
        self,
        cache: FieldMetadataCache,
        project_key: str,
        issue_type: str,
        force_refresh: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(logger=logger)
        self.cache = cache
        self.project_key = project_key
        self.issue_type = issue_type
        self.force_refresh = force_refresh

    def validate(self) -> Optional[str]:
        if not self.project_key or not self.issue_type:
            return "Project key and issue type are required"
        return None

    def _execute(self) -> CommandResult:
        self.logger.info(
            f"Fetching metadata for project {self.project_key}, issue type {self.issue_type}..."
        )
        self.cache.get_metadata(self.project_key, self.issue_type, force_refresh=self.force_refresh)
        return CommandResult.ok(self.cache.cache_location(self.project_key, self.issue_type))


class ShowRequiredCommand(Command):
    """List the required fields of a project/issue type."""

    def __init__(
        self,
        cache: FieldMetadataCache,
        project_key: str,
        issue_type: str,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(logger=logger)
        self.cache = cache
        self.project_key = project_key
        self.issue_type = issue_type

    def validate(self) -> Optional[str]:
        if not self.project_key or not self.issue_type:
            return "Project key and issue type are required"
        return None

    def _execute(self) -> CommandResult:
        metadata = self.cache.get_metadata(self.project_key, self.issue_type)
        return CommandResult.ok(extract_fields(metadata, required_only=True))


class ListFieldsCommand(Command):
    """
    List fields.

    With a project and issue type the fields come from create metadata
    (what can actually be set); without them all global fields are listed.
    """

    def __init__(
        self,
        tracker: IssueTrackerPort,
        cache: FieldMetadataCache,
        project_key: Optional[str] = None,
        issue_type: Optional[str] = None,
        filters: Sequence[str] = (),
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(logger=logger)
        self.tracker = tracker
        self.cache = cache
        self.project_key = project_key
        self.issue_type = issue_type
        self.filters = list(filters)

    def validate(self) -> Optional[str]:
        if self.project_key and not self.issue_type:
            return "When PROJECT is specified, ISSUE_TYPE must also be specified"
        return None

    def _execute(self) -> CommandResult:
        if self.filters:
            self.logger.info(f"Filtering fields by name (case-insensitive): {', '.join(self.filters)}")

        if self.project_key:
            self.logger.info(
                f"Fetching fields for project {self.project_key}, issue type {self.issue_type}..."
            )
            metadata = self.cache.get_metadata(self.project_key, self.issue_type)
            entries = extract_fields(metadata)
        else:
            self.logger.info("Fetching all global Jira fields (for exploration only)...")
            verbose(self.logger, "Note: Use 'list-fields <PROJECT> <ISSUE_TYPE>' for project-specific fields")
            entries = [
                FieldSchemaEntry.from_metadata(str(f.get("id") or f.get("key") or ""), f)
                for f in self.tracker.list_fields()
                if isinstance(f, dict)
            ]

        return CommandResult.ok([e for e in entries if matches_filters(e, self.filters)])


class ListIssueTypesCommand(Command):
    """List the issue types of a project."""

    def __init__(
        self,
        tracker: IssueTrackerPort,
        project_key: str,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(logger=logger)
        self.tracker = tracker
        self.project_key = project_key

    def validate(self) -> Optional[str]:
        if not self.project_key:
            return "Project key is required"
        return None

    def _execute(self) -> CommandResult:
        self.logger.info(f"Fetching issue types for project {self.project_key}...")
        return CommandResult.ok(self.tracker.get_issue_types(self.project_key))


class GenerateTemplateCommand(Command):
    """Generate (or extend) a template for a project/issue type."""

    def __init__(
        self,
        cache: FieldMetadataCache,
        generator: TemplateGenerator,
        project_key: str,
        issue_type: str,
        output_path: Path,
        required_only: bool = False,
        filters: Sequence[str] = (),
        update: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(logger=logger)
        self.cache = cache
        self.generator = generator
        self.project_key = project_key
        self.issue_type = issue_type
        self.output_path = Path(output_path)
        self.required_only = required_only
        self.filters = list(filters)
        self.update = update

    def validate(self) -> Optional[str]:
        if not self.project_key or not self.issue_type:
            return "Project key and issue type are required"
        return None

    def _execute(self) -> CommandResult:
        self.logger.info(
            f"Generating template for project {self.project_key}, issue type {self.issue_type}..."
        )
        if self.filters:
            self.logger.info(f"Filtering fields by name (case-insensitive): {', '.join(self.filters)}")

        metadata = self.cache.get_metadata(self.project_key, self.issue_type)
        result = self.generator.generate(
            metadata,
            self.project_key,
            self.issue_type,
            self.output_path,
            required_only=self.required_only,
            filters=self.filters,
            update=self.update,
        )
        return CommandResult.ok(result)
