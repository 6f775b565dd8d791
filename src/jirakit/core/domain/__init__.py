"""
Domain - Documents, placeholders and field schema entries.
"""

from .document import (
    Path,
    format_path,
    is_safe_path,
    validate_path,
    iter_string_leaves,
    get_at,
    has_path,
    with_value_at,
)
from .placeholder import (
    Placeholder,
    PlaceholderKind,
    has_placeholder_marker,
    is_placeholder,
    make_placeholder,
)
from .fields import (
    FieldSchemaEntry,
    FieldTemplate,
    allowed_value_label,
    extract_fields,
    get_issuetype_metadata,
    matches_filters,
)

__all__ = [
    "Path",
    "format_path",
    "is_safe_path",
    "validate_path",
    "iter_string_leaves",
    "get_at",
    "has_path",
    "with_value_at",
    "Placeholder",
    "PlaceholderKind",
    "is_placeholder",
    "has_placeholder_marker",
    "make_placeholder",
    "FieldSchemaEntry",
    "FieldTemplate",
    "allowed_value_label",
    "extract_fields",
    "get_issuetype_metadata",
    "matches_filters",
]
