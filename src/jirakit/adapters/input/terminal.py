"""
Terminal Line Sources - Interactive input for placeholder prompts.
"""

import sys
from typing import Optional, TextIO

from ...core.ports.line_source import LineSourcePort


class StreamLineSource(LineSourcePort):
    """
    Line source over a pair of text streams.

    Prompts go to the output stream (stderr by default) so that stdout stays
    clean for command output.
    """

    def __init__(self, stream: TextIO, output: Optional[TextIO] = None):
        self.stream = stream
        self.output = output if output is not None else sys.stderr

    @property
    def is_interactive(self) -> bool:
        isatty = getattr(self.stream, "isatty", None)
        return bool(isatty and isatty())

    def read_line(self) -> Optional[str]:
        line = self.stream.readline()
        if line == "":
            return None
        if line.endswith("\r\n"):
            return line[:-2]
        if line.endswith("\n"):
            return line[:-1]
        return line

    def write(self, text: str) -> None:
        self.output.write(text)
        self.output.flush()
