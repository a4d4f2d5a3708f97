"""Shared fixtures for wifi-select tests."""

import logging

import pytest

from wifiselect.console import Console
from wifiselect.network import MockWifiBackend, ScanRecord


class ScriptedInput:
    """InputProvider that replays canned answers and records prompts."""

    def __init__(self, answers=None, secrets=None):
        self.answers = list(answers or [])
        self.secrets = list(secrets or [])
        self.prompts = []
        self.secret_prompts = []

    def ask(self, prompt):
        self.prompts.append(prompt)
        return self.answers.pop(0) if self.answers else ""

    def ask_secret(self, prompt):
        self.secret_prompts.append(prompt)
        if not self.secrets:
            raise AssertionError(f"unexpected password prompt: {prompt!r}")
        return self.secrets.pop(0)


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path, monkeypatch):
    """Keep the real user config out of every test."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("NO_COLOR", raising=False)


@pytest.fixture
def records():
    return [
        ScanRecord("A", 80, "WPA2"),
        ScanRecord("B", 90, "--"),
        ScanRecord("A", 60, "WPA2"),
    ]


@pytest.fixture
def backend(records):
    return MockWifiBackend(records, passwords={"A": "secret"})


@pytest.fixture
def console():
    return Console(use_colors=False)


@pytest.fixture
def make_input():
    return ScriptedInput


@pytest.fixture(autouse=True)
def restore_root_logger():
    """main() reconfigures the root logger; undo that after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
