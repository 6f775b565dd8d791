"""
Commands - Individual operations that can be executed.

Commands wrap one CLI workflow each and can be:
- Validated before running
- Executed against injected ports
- Run in dry-run mode (write commands)
"""

from .base import Command, CommandResult
from .issue_commands import (
    CreateIssueCommand,
    CreateFromTemplateCommand,
    UpdateIssueCommand,
)
from .metadata_commands import (
    FetchMetadataCommand,
    ShowRequiredCommand,
    ListFieldsCommand,
    ListIssueTypesCommand,
    GenerateTemplateCommand,
)

__all__ = [
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
