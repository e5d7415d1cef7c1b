"""
console.py - Local display and local operator input on the server terminal
"""

import sys
from typing import Optional, TextIO

from connect4net.errors import MoveSourceError


class Console:
    """Writes game text to the local display and reads operator lines."""

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self._stdin = stdin
        self._stdout = stdout

    @property
    def stdin(self) -> TextIO:
        return self._stdin if self._stdin is not None else sys.stdin

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    def write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def read_line(self, prompt: str = "") -> str:
        """
        Show a prompt and read one line, without the terminator.

        Raises:
            MoveSourceError: If local input is closed
        """
        if prompt:
            self.write(prompt)
        line = self.stdin.readline()
        if not line:
            raise MoveSourceError("local input closed")
        return line.rstrip("\r\n")
