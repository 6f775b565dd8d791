"""
Input Adapters - Sources of interactive answers.
"""

from .terminal import StreamLineSource

__all__ = ["StreamLineSource"]
