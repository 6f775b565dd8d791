"""
Templates - Placeholder resolution and template generation.
"""

from .resolver import (
    PlaceholderResolver,
    decide_interactive,
    find_marked_paths,
    find_placeholders,
    has_placeholders,
)
from .synthesizer import FieldDefaultSynthesizer
from .generator import TemplateGenerator, GenerationResult

__all__ = [
    "PlaceholderResolver",
    "decide_interactive",
    "find_marked_paths",
    "find_placeholders",
    "has_placeholders",
    "FieldDefaultSynthesizer",
    "TemplateGenerator",
    "GenerationResult",
]
