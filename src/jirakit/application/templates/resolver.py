"""
Placeholder Resolver - Replace template placeholders with user input.

A resolve pass scans the document depth-first, in declaration order, and
either rejects it (non-interactive mode with placeholders present) or
prompts for every placeholder in turn and rebuilds the document with the
answers. The input document is never modified, and no partially resolved
document is ever returned.
"""

import logging
from typing import Any, Optional

from ...core.domain.document import format_path, iter_string_leaves, validate_path, with_value_at
from ...core.domain.placeholder import Placeholder, has_placeholder_marker
from ...core.exceptions import InteractiveModeError, PlaceholdersPresentError
from ...core.log_levels import verbose
from ...core.ports.line_source import LineSourcePort

END_MARKER = "END"


def find_placeholders(document: Any) -> list[Placeholder]:
    """All placeholders of a document, in traversal order."""
    found = []
    for path, value in iter_string_leaves(document):
        placeholder = Placeholder.parse(value, path)
        if placeholder is not None:
            found.append(placeholder)
    return found


def find_marked_paths(document: Any) -> list[str]:
    """Paths of string leaves that contain a placeholder opening, well-formed or not."""
    return [
        format_path(path)
        for path, value in iter_string_leaves(document)
        if has_placeholder_marker(value)
    ]


def has_placeholders(document: Any) -> bool:
    return any(
        Placeholder.parse(value) is not None
        for _, value in iter_string_leaves(document)
    )


def decide_interactive(
    requested: Optional[bool],
    document: Any,
    is_tty: bool,
    logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Decide whether to prompt for placeholders.

    An explicit request (--interactive / --no-interactive) always wins. In
    auto mode (requested is None) prompting is enabled only when the
    template has placeholders and a terminal is attached.

    Raises:
        InteractiveModeError: Auto mode, placeholders present, no terminal
    """
    if requested is not None:
        return requested

    if not has_placeholders(document):
        return False

    if not is_tty:
        raise InteractiveModeError(
            "Template contains interactive placeholders but stdin is not a terminal. "
            "Either run in an interactive terminal or use --no-interactive to skip prompts."
        )

    verbose(
        logger or logging.getLogger("PlaceholderResolver"),
        "Auto-detected interactive placeholders in template. Enabling interactive mode.",
    )
    return True


class PlaceholderResolver:
    """
    Resolves {{PROMPT: ...}} style placeholders by reading from a line source.
    """

    def __init__(
        self,
        line_source: Optional[LineSourcePort] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the resolver.

        Args:
            line_source: Where answers are read from (required for interactive mode)
            logger: Optional logger (defaults to "PlaceholderResolver")
        """
        self.line_source = line_source
        self.logger = logger or logging.getLogger("PlaceholderResolver")

    def resolve(self, document: Any, interactive: bool) -> Any:
        """
        Return a fully concrete copy of document.

        Args:
            document: Parsed template
            interactive: Prompt for placeholders instead of rejecting them

        Returns:
            The resolved document (the input itself if it has no placeholders)

        Raises:
            PlaceholdersPresentError: Placeholders (or malformed ones) found in non-interactive mode
            InvalidPathError: A placeholder path has characters outside [a-zA-Z0-9._-]
        """
        if not interactive:
            # Malformed markers count as unresolved placeholders.
            marked = find_marked_paths(document)
            if not marked:
                return document
            for path in marked:
                self.logger.debug(f"Unresolved placeholder at {path}")
            raise PlaceholdersPresentError(marked)

        placeholders = find_placeholders(document)
        if not placeholders:
            return document

        if self.line_source is None:
            raise InteractiveModeError("Interactive mode requires an input source.")

        # Every path is checked before the first prompt is shown.
        for placeholder in placeholders:
            validate_path(placeholder.path)

        self.logger.info("Processing interactive template...")

        resolved = document
        for placeholder in placeholders:
            answer = self.prompt(placeholder)
            resolved = with_value_at(resolved, placeholder.path, answer)

        self.logger.info("Interactive input complete.")
        return resolved

    def prompt(self, placeholder: Placeholder) -> str:
        """Ask for one placeholder's value."""
        self.logger.info(placeholder.label)
        verbose(self.logger, f"(Field ID: {placeholder.field_name})")

        if placeholder.is_multiline:
            return self._read_multiline()
        return self._read_single_line()

    def _read_single_line(self) -> str:
        self.line_source.write("  > ")
        line = self.line_source.read_line()
        return "" if line is None else line

    def _read_multiline(self) -> str:
        self.line_source.write(
            f"  [Enter multi-line text. Type '{END_MARKER}' on a new line when finished]\n\n"
        )
        lines = []
        while True:
            line = self.line_source.read_line()
            if line is None or line == END_MARKER:
                break
            lines.append(line)
        return "\n".join(lines)
