"""
Output - Console output formatting.

Provides pretty-printed output with colors and formatting.
"""

import json
import sys
from typing import Any, Optional, TextIO

from ..application.templates.generator import GenerationResult
from ..application.validation import ValidationResult
from ..core.domain.fields import FieldSchemaEntry

# Allowed values listed inline up to this many; beyond it only a count.
MAX_INLINE_ALLOWED = 10


class Colors:
    """ANSI color codes."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"

    BG_YELLOW = "\033[43m"


class Symbols:
    """Unicode symbols for output."""

    CHECK = "✓"
    CROSS = "✗"
    ARROW = "→"
    DOT = "•"
    WARN = "⚠"
    INFO = "ℹ"
    GEAR = "⚙"
    LINK = "🔗"


class Console:
    """Console output helper with colors and formatting."""

    def __init__(self, color: bool = True, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdout
        isatty = getattr(self.stream, "isatty", None)
        self.color = color and bool(isatty and isatty())

    def _c(self, text: str, *codes: str) -> str:
        """Apply color codes to text."""
        if not self.color:
            return text
        return "".join(codes) + text + Colors.RESET

    def print(self, text: str = "") -> None:
        """Print text."""
        print(text, file=self.stream)

    def section(self, text: str) -> None:
        """Print a section header."""
        self.print()
        self.print(self._c(f"{Symbols.ARROW} {text}", Colors.BOLD, Colors.BLUE))

    def success(self, text: str) -> None:
        self.print(self._c(f"  {Symbols.CHECK} {text}", Colors.GREEN))

    def error(self, text: str) -> None:
        self.print(self._c(f"  {Symbols.CROSS} {text}", Colors.RED))

    def warning(self, text: str) -> None:
        self.print(self._c(f"  {Symbols.WARN} {text}", Colors.YELLOW))

    def info(self, text: str) -> None:
        self.print(self._c(f"  {Symbols.INFO} {text}", Colors.CYAN))

    def detail(self, text: str) -> None:
        """Print detail text (dimmed)."""
        self.print(self._c(f"    {text}", Colors.DIM))

    def item(self, text: str, status: Optional[str] = None) -> None:
        """Print a list item."""
        status_str = ""
        if status == "ok":
            status_str = self._c(f" [{Symbols.CHECK}]", Colors.GREEN)
        elif status == "required":
            status_str = self._c(" [REQUIRED]", Colors.YELLOW)
        elif status:
            status_str = self._c(f" [{status}]", Colors.DIM)

        self.print(f"    {Symbols.DOT} {text}{status_str}")

    def table(self, headers: list[str], rows: list[list[str]]) -> None:
        """Print a simple table."""
        widths = [len(h) for h in headers]
        for row in rows:
            for i, cell in enumerate(row):
                if i < len(widths):
                    widths[i] = max(widths[i], len(str(cell)))

        header_line = "  " + "  ".join(
            self._c(h.ljust(widths[i]), Colors.BOLD)
            for i, h in enumerate(headers)
        )
        self.print(header_line)
        self.print("  " + "  ".join("-" * w for w in widths))

        for row in rows:
            row_line = "  " + "  ".join(
                str(cell).ljust(widths[i]) if i < len(widths) else str(cell)
                for i, cell in enumerate(row)
            )
            self.print(row_line)

    def dry_run_banner(self) -> None:
        """Print dry-run mode banner."""
        self.print()
        banner = f"  {Symbols.GEAR} DRY-RUN MODE - No changes will be made"
        if self.color:
            self.print(f"{Colors.BG_YELLOW}{Colors.BOLD}{banner}{Colors.RESET}")
        else:
            self.print(f"*** {banner} ***")
        self.print()

    # -------------------------------------------------------------------------
    # Domain output
    # -------------------------------------------------------------------------

    def payload(self, payload: Any) -> None:
        """Print a request payload as indented JSON."""
        self.print(json.dumps(payload, indent=2, ensure_ascii=False))

    def field_entries(self, entries: list[FieldSchemaEntry], title: str) -> None:
        self.section(title)
        if not entries:
            self.warning("No fields found.")
            return

        for entry in entries:
            self.item(
                f"{entry.name} ({entry.key}) - Type: {entry.schema_type}",
                status="required" if entry.required else None,
            )
            labels = entry.allowed_labels
            if labels and len(labels) <= MAX_INLINE_ALLOWED:
                self.detail(f"Allowed: {', '.join(labels)}")
            elif labels:
                self.detail(f"{len(labels)} allowed values")

        self.print()
        self.info(f"{len(entries)} field(s)")

    def required_fields(self, entries: list[FieldSchemaEntry], project_key: str, issue_type: str) -> None:
        if not entries:
            self.section(f"Required fields for {issue_type} in {project_key}")
            self.success("No required fields beyond the defaults.")
            return
        self.field_entries(entries, f"Required fields for {issue_type} in {project_key}")

    def issue_types(self, issue_types: list[dict[str, Any]], project_key: str) -> None:
        self.section(f"Issue types for project {project_key}")
        if not issue_types:
            self.warning("No issue types found.")
            return

        rows = [
            [
                str(t.get("name", "")),
                str(t.get("id", "")),
                "yes" if t.get("subtask") else "no",
                str(t.get("description") or ""),
            ]
            for t in issue_types
        ]
        self.table(["Name", "ID", "Subtask", "Description"], rows)

    def missing_fields(self, missing: ValidationResult) -> None:
        self.error("Missing required fields:")
        for field in missing:
            self.detail(str(field))

    def generation_result(self, result: GenerationResult) -> None:
        if result.updated:
            self.success(f"Added {result.fields_added} field(s) to {result.path}")
            if result.skipped:
                self.detail(f"Already present: {', '.join(result.skipped)}")
        else:
            self.success(f"Template written to {result.path} ({result.fields_added} field(s))")

    def issue_link(self, issue_key: str, url: str) -> None:
        self.success(f"Created {issue_key}")
        self.print(f"    {Symbols.LINK} {url}")
