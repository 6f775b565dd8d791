"""
Template Adapters - Template file formats.
"""

from .yaml_store import YamlTemplateStore

__all__ = ["YamlTemplateStore"]
