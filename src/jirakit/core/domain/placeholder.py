"""
Placeholder - Interactive markers embedded in template string values.

Grammar (the whole string must match):

    {{PROMPT: text}}        single-line input
    {{INPUT: text}}         synonym of PROMPT
    {{PROMPT_MULTI: text}}  multi-line input, terminated by a line "END"
    {{INPUT_MULTI: text}}   synonym of PROMPT_MULTI
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .document import Path, format_path


PLACEHOLDER_PATTERN = re.compile(
    r"\{\{(PROMPT_MULTI|INPUT_MULTI|PROMPT|INPUT):\s*(.+)\}\}",
    re.DOTALL,
)

# Start of a placeholder anywhere in a string, well-formed or not.
PLACEHOLDER_MARKER = re.compile(r"\{\{(PROMPT|INPUT)(_MULTI)?:")


class PlaceholderKind(Enum):
    PROMPT = "PROMPT"
    INPUT = "INPUT"
    PROMPT_MULTI = "PROMPT_MULTI"
    INPUT_MULTI = "INPUT_MULTI"

    @property
    def is_multiline(self) -> bool:
        return self in (PlaceholderKind.PROMPT_MULTI, PlaceholderKind.INPUT_MULTI)


@dataclass(frozen=True)
class Placeholder:
    """A placeholder found at a specific path of a document."""

    kind: PlaceholderKind
    label: str
    path: Path = ()

    @property
    def is_multiline(self) -> bool:
        return self.kind.is_multiline

    @property
    def path_string(self) -> str:
        return format_path(self.path)

    @property
    def field_name(self) -> str:
        """The last path component, used as the field id shown to the user."""
        return str(self.path[-1]) if self.path else ""

    @classmethod
    def parse(cls, value: str, path: Path = ()) -> Optional["Placeholder"]:
        """Parse a string value, returning None when it is not a placeholder."""
        match = PLACEHOLDER_PATTERN.fullmatch(value)
        if not match:
            return None
        label = match.group(2).strip()
        if not label:
            return None
        return cls(kind=PlaceholderKind(match.group(1)), label=label, path=path)


def is_placeholder(value: str) -> bool:
    return Placeholder.parse(value) is not None


def has_placeholder_marker(value: str) -> bool:
    """True when value contains a placeholder opening, e.g. "{{PROMPT: }}" or "{{INPUT: x}} tail"."""
    return PLACEHOLDER_MARKER.search(value) is not None


def make_placeholder(label: str, multiline: bool = False) -> str:
    """Render placeholder text, e.g. make_placeholder('Enter Summary') -> '{{PROMPT: Enter Summary}}'."""
    kind = PlaceholderKind.PROMPT_MULTI if multiline else PlaceholderKind.PROMPT
    return f"{{{{{kind.value}: {label}}}}}"
