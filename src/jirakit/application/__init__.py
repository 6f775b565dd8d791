"""
Application Layer - Use cases, commands, and orchestration.

This layer contains:
- metadata/: Field metadata cache
- templates/: Placeholder resolution and template generation
- validation: Required-field validation
- commands/: One command per workflow
"""

from .metadata import FieldMetadataCache
from .validation import MissingField, ValidationResult, validate_required, coerce_payload
from .templates import (
    PlaceholderResolver,
    decide_interactive,
    FieldDefaultSynthesizer,
    TemplateGenerator,
    GenerationResult,
)
from .commands import (
    Command,
    CommandResult,
    CreateIssueCommand,
    CreateFromTemplateCommand,
    UpdateIssueCommand,
    FetchMetadataCommand,
    ShowRequiredCommand,
    ListFieldsCommand,
    ListIssueTypesCommand,
    GenerateTemplateCommand,
)

__all__ = [
    "FieldMetadataCache",
    "MissingField",
    "ValidationResult",
    "validate_required",
    "coerce_payload",
    "PlaceholderResolver",
    "decide_interactive",
    "FieldDefaultSynthesizer",
    "TemplateGenerator",
    "GenerationResult",
    "Command",
    "CommandResult",
    "CreateIssueCommand",
    "CreateFromTemplateCommand",
    "UpdateIssueCommand",
    "FetchMetadataCommand",
    "ShowRequiredCommand",
    "ListFieldsCommand",
    "ListIssueTypesCommand",
    "GenerateTemplateCommand",
]
