import logging
import json
import re
from io import StringIO

import pytest
from gethub.logging import (
    JsonFormatter,
    configure_logging,
    log_with_data,
    get_logger,
)

ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


def test_format_json_log():
    """Test JSON log formatting"""
    formatter = JsonFormatter()
    record = logging.LogRecord(
        "gethub.test", logging.INFO, "test.py", 10, "Test message", (), None
    )

    output = formatter.format(record)
    data = json.loads(ANSI_ESCAPE.sub("", output))

    assert data["level"] == "INFO"
    assert data["logger"] == "gethub.test"
    assert data["msg"] == "Test message"
    assert data["ts"]
    assert "data" not in data


@pytest.mark.parametrize(
    "level,expected_color",
    [
        (logging.DEBUG, "\033[34m"),  # BLUE
        (logging.INFO, "\033[32m"),  # GREEN
        (logging.WARNING, "\033[33m"),  # YELLOW
        (logging.ERROR, "\033[31m\033[1m"),  # RED+BOLD
        (logging.CRITICAL, "\033[35m\033[1m"),  # MAGENTA+BOLD
    ],
)
def test_format_json_log_colors(level, expected_color):
    """Test log level color coding"""
    formatter = JsonFormatter()
    record = logging.LogRecord("test", level, "test.py", 10, "Test message", (), None)

    output = formatter.format(record)
    assert output.startswith(expected_color)
    assert output.endswith("\033[0m")


def test_log_with_data_json_structure():
    """Test structured logging produces valid JSON with the data payload"""
    logger = logging.getLogger("gethub-test-structure")
    logger.setLevel(logging.INFO)
    logger.propagate = False

    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)

    test_data = {"event": "releases_fetched", "nested": {"count": 3}}
    log_with_data(logger, logging.INFO, "Test message", test_data)

    data = json.loads(ANSI_ESCAPE.sub("", stream.getvalue().strip()))
    assert data["level"] == "INFO"
    assert data["msg"] == "Test message"
    assert data["data"] == test_data


def test_log_with_data_without_data():
    logger = logging.getLogger("gethub-test-plain")
    logger.setLevel(logging.INFO)
    logger.propagate = False

    records = []
    handler = logging.Handler()
    handler.emit = records.append
    logger.addHandler(handler)

    log_with_data(logger, logging.INFO, "Plain message")

    assert len(records) == 1
    assert not hasattr(records[0], "data")


def test_get_logger():
    """Test logger retrieval"""
    assert get_logger("test_module").name == "gethub.test_module"
    assert get_logger("gethub.classify.enrich").name == "gethub.classify.enrich"


def test_configure_logging():
    """Test logging configuration"""
    configure_logging()
    logger = logging.getLogger("gethub")

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)
    assert isinstance(logger.handlers[0].formatter, JsonFormatter)
    assert not logger.propagate

    configure_logging()
    assert len(logger.handlers) == 1


def test_import_keeps_root_handlers():
    """Test root handlers are only cleared by configure_logging"""
    import importlib
    import gethub.logging as gethub_logging

    root = logging.getLogger()
    handler = logging.NullHandler()
    root.addHandler(handler)
    try:
        importlib.reload(gethub_logging)
        assert handler in root.handlers

        gethub_logging.configure_logging()
        assert handler not in root.handlers
    finally:
        root.removeHandler(handler)
