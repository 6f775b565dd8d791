"""
Metadata - Cached access to field metadata.
"""

from .cache import FieldMetadataCache

__all__ = ["FieldMetadataCache"]
