"""Colored terminal messages for the user.

Status and results go through a Console; logging is reserved for
diagnostics.
"""

import os
import sys
from typing import TextIO


class Console:
    """Writes colored status lines.

    Colors are applied only when the target stream is a TTY and
    ``NO_COLOR`` is unset. Without explicit streams, the current
    ``sys.stdout``/``sys.stderr`` are looked up on every write.
    """

    GREEN = "\033[0;32m"
    RED = "\033[0;31m"
    YELLOW = "\033[1;33m"
    RESET = "\033[0m"

    def __init__(
        self,
        out: TextIO | None = None,
        err: TextIO | None = None,
        use_colors: bool = True,
    ) -> None:
        self._out = out
        self._err = err
        self._use_colors = use_colors and "NO_COLOR" not in os.environ

    @property
    def out(self) -> TextIO:
        return self._out or sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err or sys.stderr

    def _paint(self, text: str, color: str, stream: TextIO) -> str:
        if self._use_colors and hasattr(stream, "isatty") and stream.isatty():
            return f"{color}{text}{self.RESET}"
        return text

    def green(self, text: str) -> str:
        """Wrap text in green for inline highlights on stdout."""
        return self._paint(text, self.GREEN, self.out)

    def write(self, text: str = "") -> None:
        print(text, file=self.out)

    def info(self, text: str) -> None:
        print(self._paint(text, self.YELLOW, self.out), file=self.out)

    def success(self, text: str) -> None:
        print(self._paint(text, self.GREEN, self.out), file=self.out)

    def error(self, text: str) -> None:
        print(self._paint(text, self.RED, self.err), file=self.err)
