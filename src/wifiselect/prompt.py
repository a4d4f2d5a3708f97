"""User input providers.

The selector never reads the terminal directly; it asks an InputProvider,
so tests can feed canned answers.
"""

import getpass
from typing import Protocol


class InputProvider(Protocol):
    """Source of interactive answers."""

    def ask(self, prompt: str) -> str:
        """Read one line of visible input."""
        ...

    def ask_secret(self, prompt: str) -> str:
        """Read one line without echoing it."""
        ...


class TerminalInput:
    """InputProvider backed by the controlling terminal."""

    def ask(self, prompt: str) -> str:
        # Closed stdin counts as an empty answer
        try:
            return input(prompt)
        except EOFError:
            return ""

    def ask_secret(self, prompt: str) -> str:
        return getpass.getpass(prompt)
