"""
Field Default Synthesizer - Default values and comments for generated templates.

Defaults are interactive placeholders wherever the user has to supply a
value, so a freshly generated template can be used as-is with prompting.
"""

import logging
from typing import Any, Optional

from ...core.domain.fields import FieldSchemaEntry, FieldTemplate
from ...core.domain.placeholder import make_placeholder


class FieldDefaultSynthesizer:
    """
    Maps a Field Schema Entry to a template default and a descriptive comment.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("FieldDefaultSynthesizer")

    def synthesize(self, entry: FieldSchemaEntry, issue_type: str) -> Optional[FieldTemplate]:
        """
        Build the template line for a field.

        Args:
            entry: Field definition from metadata
            issue_type: Issue type the template is generated for

        Returns:
            FieldTemplate, or None when the field is set by the workflow itself (project)
        """
        if entry.schema_type == "project":
            self.logger.debug(f"Skipping '{entry.key}': project is set automatically")
            return None
        return FieldTemplate(
            key=entry.key,
            value=self.default_value(entry, issue_type),
            comment=self.comment(entry),
        )

    def default_value(self, entry: FieldSchemaEntry, issue_type: str) -> Any:
        name = entry.name
        schema_type = entry.schema_type

        if schema_type == "string":
            if entry.is_multiline:
                self.logger.debug(f"Auto-detected multi-line field: {name}")
            return make_placeholder(f"Enter {name}", multiline=entry.is_multiline)

        if schema_type == "number":
            return make_placeholder(f"Enter {name}")

        if schema_type == "array":
            return make_placeholder(f"Enter {name} (comma-separated)")

        if schema_type == "option":
            return {entry.option_key: self._option_placeholder(entry)}

        if schema_type == "user":
            return {"name": make_placeholder(f"Enter username for {name}")}

        if schema_type == "priority":
            return {"name": make_placeholder("Enter priority")}

        if schema_type == "issuetype":
            return {"name": issue_type}

        if schema_type in ("date", "datetime"):
            return make_placeholder(f"Enter {name} (YYYY-MM-DD or ISO format)")

        return make_placeholder(f"Enter {name}")

    def comment(self, entry: FieldSchemaEntry) -> str:
        """e.g. 'Severity [REQUIRED] - Type: option - Allowed: Low, High'."""
        comment = entry.name
        if entry.required:
            comment += " [REQUIRED]"
        comment += f" - Type: {entry.schema_type}"

        labels = entry.allowed_labels
        if labels:
            comment += f" - Allowed: {', '.join(labels)}"
        elif entry.allowed_values:
            comment += f" - {len(entry.allowed_values)} options (check Jira UI for values)"
        return comment

    def _option_placeholder(self, entry: FieldSchemaEntry) -> str:
        labels = entry.allowed_labels
        if labels:
            return make_placeholder(f"Choose {entry.name} [{', '.join(labels)}]")
        if entry.allowed_values:
            return make_placeholder(
                f"Enter {entry.name} ({len(entry.allowed_values)} options - check Jira UI)"
            )
        return make_placeholder(f"Enter {entry.name}")
