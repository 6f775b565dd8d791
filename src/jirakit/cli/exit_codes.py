"""
Exit Codes - Process exit statuses of the jirakit CLI.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    ERROR = 1
    CONFIG_ERROR = 2
    VALIDATION_ERROR = 3
    CONNECTION_ERROR = 4
    AUTH_ERROR = 5
    NOT_FOUND = 6
    TEMPLATE_ERROR = 7
    INTERRUPTED = 130
