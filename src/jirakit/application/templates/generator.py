"""
Template Generator - Build or extend a template from field metadata.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Sequence

from ...core.domain.fields import FieldTemplate, extract_fields, matches_filters
from ...core.exceptions import TemplateError
from ...core.log_levels import verbose
from ...core.ports.template_store import TemplateStorePort
from .synthesizer import FieldDefaultSynthesizer


@dataclass
class GenerationResult:
    """Outcome of a template generation."""

    path: Path
    updated: bool = False
    added: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def fields_added(self) -> int:
        return len(self.added)


class TemplateGenerator:
    """
    Generates templates whose values are interactive placeholders.

    New templates get a header and one commented line per field. With
    update=True an existing template only receives the fields it lacks.
    """

    def __init__(
        self,
        store: TemplateStorePort,
        synthesizer: Optional[FieldDefaultSynthesizer] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.store = store
        self.synthesizer = synthesizer or FieldDefaultSynthesizer()
        self.logger = logger or logging.getLogger("TemplateGenerator")

    def generate(
        self,
        metadata: dict[str, Any],
        project_key: str,
        issue_type: str,
        output_path: Path,
        required_only: bool = False,
        filters: Sequence[str] = (),
        update: bool = False,
    ) -> GenerationResult:
        """
        Write a template for a project and issue type.

        Args:
            metadata: Create metadata for the project/issue type
            project_key: Jira project key
            issue_type: Issue type name
            output_path: Template file to create or update
            required_only: Only include required fields
            filters: Keep fields whose name contains any of these (case-insensitive)
            update: Add missing fields to an existing template

        Returns:
            GenerationResult listing added and skipped field keys

        Raises:
            TemplateError: Output exists without update, nothing matches the
                criteria, or a new template would be empty
        """
        filters = list(filters)
        is_updating = self.store.exists(output_path)
        if is_updating and not update:
            raise TemplateError(
                f"Output file already exists: {output_path}. "
                "Use --update to update it, or choose a different name.",
                path=str(output_path),
            )
        if is_updating:
            self.logger.info(f"Will add missing fields to existing template '{output_path}'")

        if required_only:
            verbose(self.logger, "Including only required fields...")
        else:
            verbose(self.logger, "Including all available fields...")

        entries = [
            entry
            for entry in extract_fields(metadata, required_only=required_only)
            if matches_filters(entry, filters)
        ]
        if not entries:
            raise TemplateError("No fields found matching the criteria.", path=str(output_path))

        existing = self._existing_keys(output_path) if is_updating else set()
        result = GenerationResult(path=output_path, updated=is_updating)

        templates: list[FieldTemplate] = []
        for entry in entries:
            if entry.key in existing:
                self.logger.debug(f"Field '{entry.key}' already exists in template. Skipping.")
                result.skipped.append(entry.key)
                continue

            template = self.synthesizer.synthesize(entry, issue_type)
            if template is None:
                result.skipped.append(entry.key)
                continue

            templates.append(template)
            result.added.append(entry.key)

        if is_updating:
            if templates:
                self.store.add_fields(output_path, templates)
                for template in templates:
                    verbose(self.logger, f"Added field '{template.key}' to template.")
            return result

        if not templates:
            raise TemplateError("No fields were added to the template.", path=str(output_path))

        header = [
            f"YAML template for creating {issue_type} in project {project_key}",
            "Generated by jirakit",
        ]
        self.store.write_new(output_path, header, templates)
        return result

    def _existing_keys(self, path: Path) -> set[str]:
        self.logger.debug(f"Reading existing fields from {path}...")
        document = self.store.load(path)
        fields = document.get("fields") or {}
        if not isinstance(fields, dict):
            raise TemplateError(
                f"Failed to read existing fields from {path}: 'fields' is not a mapping",
                path=str(path),
            )
        self.logger.debug(f"Existing fields: {', '.join(fields)}")
        return set(fields)
