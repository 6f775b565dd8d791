"""
YAML Template Store - Issue templates as YAML files.

Generated templates are written line by line so that every field carries a
comment describing it; PyYAML renders the values.
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from ...core.domain.fields import FieldTemplate
from ...core.exceptions import TemplateError
from ...core.ports.template_store import TemplateStorePort

INDENT = "  "


class TemplateLoader(yaml.SafeLoader):
    """SafeLoader that keeps dates and timestamps as strings."""


TemplateLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:timestamp"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def load_yaml(stream: Any) -> Any:
    return yaml.load(stream, Loader=TemplateLoader)


def render_value_line(key: str, value: Any) -> str:
    """Render 'key: value' in YAML, flow style for nested mappings."""
    return yaml.safe_dump(
        {key: value},
        default_flow_style=None,
        sort_keys=False,
        allow_unicode=True,
        width=float("inf"),
    ).rstrip("\n")


def render_field(template: FieldTemplate) -> list[str]:
    return [
        "",
        f"{INDENT}# {template.comment}",
        f"{INDENT}{render_value_line(template.key, template.value)}",
    ]


class YamlTemplateStore(TemplateStorePort):
    """
    Reads templates with a safe loader and writes commented templates.
    """

    def __init__(self):
        self.logger = logging.getLogger("YamlTemplateStore")

    def exists(self, path: Path) -> bool:
        return Path(path).is_file()

    def load(self, path: Path) -> dict[str, Any]:
        path = Path(path)
        if not path.is_file():
            raise TemplateError(f"YAML file not found at: {path}", path=str(path))

        try:
            with open(path, "r", encoding="utf-8") as yaml_file:
                document = load_yaml(yaml_file)
        except yaml.YAMLError as e:
            raise TemplateError(
                f"The file '{path}' does not contain valid YAML: {e}", path=str(path)
            ) from e
        except OSError as e:
            raise TemplateError(f"Failed to read YAML file: {path}: {e}", path=str(path)) from e

        if not isinstance(document, dict):
            raise TemplateError(
                f"The file '{path}' must contain a mapping at the top level.", path=str(path)
            )

        fields = document.get("fields")
        if "fields" in document and fields is None:
            # A bare "fields:" key is an empty mapping.
            document["fields"] = {}
        elif fields is not None and not isinstance(fields, dict):
            raise TemplateError(f"'fields' in '{path}' must be a mapping.", path=str(path))

        return document

    def write_new(self, path: Path, header: list[str], fields: list[FieldTemplate]) -> None:
        lines = [f"# {line}" for line in header]
        lines += ["", "fields:"]
        for template in fields:
            lines += render_field(template)

        Path(path).write_text("\n".join(lines) + "\n", encoding="utf-8")

    def add_fields(self, path: Path, fields: list[FieldTemplate]) -> None:
        """
        Append fields to an existing template.

        Appending keeps the user's comments, but only works when "fields" is
        the last block of the file; otherwise the whole document is rewritten.
        """
        path = Path(path)
        document = self.load(path)

        expected = dict(document)
        expected_fields = dict(document.get("fields") or {})
        for template in fields:
            expected_fields[template.key] = template.value
        expected["fields"] = expected_fields

        text = path.read_text(encoding="utf-8").rstrip("\n")
        appended = [text]
        for template in fields:
            appended += render_field(template)
        candidate = "\n".join(appended) + "\n"

        try:
            appended_ok = load_yaml(candidate) == expected
        except yaml.YAMLError:
            appended_ok = False

        if appended_ok:
            path.write_text(candidate, encoding="utf-8")
            return

        self.logger.warning(
            f"Could not append to the 'fields' block of {path}; rewriting the file "
            "(existing comments are not preserved)."
        )
        path.write_text(
            yaml.safe_dump(expected, sort_keys=False, allow_unicode=True, width=float("inf")),
            encoding="utf-8",
        )
