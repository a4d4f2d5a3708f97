"""Tests for logging setup and formatters."""

import json
import logging
import logging.handlers

from wifiselect.core.logging import JSONFormatter, SimpleFormatter, setup_logging


def make_record(msg="Connecting to %s", args=("Home",), **extra):
    record = logging.LogRecord("wifiselect.selector", logging.INFO, __file__, 10, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extras():
    data = json.loads(JSONFormatter().format(make_record(ssid="Home")))

    assert data["message"] == "Connecting to Home"
    assert data["level"] == "INFO"
    assert data["logger"] == "wifiselect.selector"
    assert data["ssid"] == "Home"
    assert data["where"].endswith(":10")


def test_simple_formatter_without_colors():
    line = SimpleFormatter(use_colors=False).format(make_record())

    assert "INFO     [selector] Connecting to Home" in line
    assert "\033[" not in line


def test_simple_formatter_with_colors():
    line = SimpleFormatter(use_colors=True).format(make_record())
    assert SimpleFormatter.COLORS[logging.INFO] in line


def test_setup_logging_with_file(tmp_path):
    log_file = tmp_path / "logs" / "wifi-select.log"

    setup_logging(level="debug", log_file=log_file)

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers)
    assert log_file.parent.is_dir()

    for handler in root.handlers:
        handler.close()


def test_setup_logging_unknown_level_falls_back():
    setup_logging(level="chatty")
    assert logging.getLogger().level == logging.WARNING


def test_simple_formatter_leaves_record_for_other_handlers():
    record = make_record()
    SimpleFormatter(use_colors=True).format(record)

    data = json.loads(JSONFormatter().format(record))

    assert "short_name" not in data
    assert data["level"] == "INFO"
