"""
Field Schema - Field definitions extracted from Jira create metadata.

Create metadata (GET issue/createmeta?...&expand=projects.issuetypes.fields)
has the shape:

    {"projects": [{"issuetypes": [{"fields": {"<key>": {...}, ...}}]}]}
"""

from dataclasses import dataclass, field
from typing import Any, Optional

MULTILINE_SYSTEM_FIELDS = frozenset({"description", "environment", "comment"})


def allowed_value_label(allowed_value: Any) -> str:
    """Display string of one allowed value: its name, value or id, in that order."""
    if not isinstance(allowed_value, dict):
        return "" if allowed_value is None else str(allowed_value)
    for key in ("name", "value", "id"):
        if allowed_value.get(key) is not None:
            return str(allowed_value[key])
    return ""


@dataclass(frozen=True)
class FieldSchemaEntry:
    """One field definition from tracker metadata."""

    key: str
    name: str
    schema_type: str = "string"
    required: bool = False
    allowed_values: tuple = field(default_factory=tuple)
    custom: str = ""
    system: str = ""
    items: str = ""

    @classmethod
    def from_metadata(cls, key: str, data: dict[str, Any]) -> "FieldSchemaEntry":
        schema = data.get("schema") or {}
        return cls(
            key=key,
            name=data.get("name") or key,
            schema_type=schema.get("type") or "string",
            required=data.get("required") is True,
            allowed_values=tuple(data.get("allowedValues") or ()),
            custom=schema.get("custom") or "",
            system=schema.get("system") or "",
            items=schema.get("items") or "",
        )

    @property
    def is_multiline(self) -> bool:
        """Long-text fields: textarea custom fields and a few system fields."""
        return "textarea" in self.custom or self.system in MULTILINE_SYSTEM_FIELDS

    @property
    def allowed_labels(self) -> list[str]:
        """Non-empty display strings of the allowed values."""
        labels = (allowed_value_label(v) for v in self.allowed_values)
        return [label for label in labels if label and label != "null"]

    @property
    def option_key(self) -> str:
        """'value' for custom select fields, 'name' for everything else."""
        if self.allowed_values:
            first = self.allowed_values[0]
            if isinstance(first, dict) and "value" in first:
                return "value"
        return "name"


def get_issuetype_metadata(metadata: Any) -> Optional[dict[str, Any]]:
    """Return the first project's first issue type block, if any."""
    if not isinstance(metadata, dict):
        return None
    projects = metadata.get("projects") or []
    if not projects or not isinstance(projects[0], dict):
        return None
    issuetypes = projects[0].get("issuetypes") or []
    if not issuetypes or not isinstance(issuetypes[0], dict):
        return None
    return issuetypes[0]


def extract_fields(metadata: Any, required_only: bool = False) -> list[FieldSchemaEntry]:
    """
    List the Field Schema Entries of a create metadata document, in metadata order.

    Args:
        metadata: Raw createmeta document
        required_only: Keep only fields marked required
    """
    issuetype = get_issuetype_metadata(metadata)
    if issuetype is None:
        return []

    entries = [
        FieldSchemaEntry.from_metadata(key, data)
        for key, data in (issuetype.get("fields") or {}).items()
        if isinstance(data, dict)
    ]
    if required_only:
        entries = [entry for entry in entries if entry.required]
    return entries


def matches_filters(entry: FieldSchemaEntry, filters: list[str]) -> bool:
    """Case-insensitive substring match of the display name against any filter."""
    if not filters:
        return True
    name = entry.name.lower()
    return any(f.lower() in name for f in filters)


@dataclass(frozen=True)
class FieldTemplate:
    """One field of a generated template: key, default value and comment."""

    key: str
    value: Any
    comment: str
