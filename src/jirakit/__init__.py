"""
jirakit - Create, update and introspect Jira issues from YAML templates.

Templates may contain interactive placeholders ({{PROMPT: ...}}) that are
filled in at the terminal, and payloads are checked against the project's
required fields before they are submitted.
"""

__version__ = "1.0.0"
