"""
Template Store Port - Reading and writing issue templates.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from ..domain.fields import FieldTemplate


class TemplateStorePort(ABC):
    """
    Storage for issue templates.

    A template is a document with a top-level "fields" mapping, plus
    human-readable comments where the format supports them.
    """

    @abstractmethod
    def exists(self, path: Path) -> bool:
        ...

    @abstractmethod
    def load(self, path: Path) -> dict[str, Any]:
        """
        Parse a template into a document.

        Raises:
            TemplateError: If the file is missing or not a valid template
        """
        ...

    @abstractmethod
    def write_new(self, path: Path, header: list[str], fields: list[FieldTemplate]) -> None:
        """Create a template with header comment lines and one commented entry per field."""
        ...

    @abstractmethod
    def add_fields(self, path: Path, fields: list[FieldTemplate]) -> None:
        """Add fields under "fields" of an existing template."""
        ...
