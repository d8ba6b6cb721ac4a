"""Unit tests for structured logging setup."""

import json

import structlog

from mimsy.core.config import Settings
from mimsy.core.logging import LoggingContext, configure_logging, get_logger


def test_json_format_renders_json(capsys):
    settings = Settings(_env_file=None, environment="production", log_format="json")
    configure_logging(settings)

    get_logger("mimsy.test").warning("Something happened", collection="posts")

    line = capsys.readouterr().err.strip().splitlines()[-1]
    entry = json.loads(line)
    assert entry["event"] == "Something happened"
    assert entry["collection"] == "posts"
    assert entry["level"] == "warning"
    assert "timestamp" in entry


def test_log_level_filters_lower_levels(capsys):
    settings = Settings(
        _env_file=None, environment="production", log_format="json", log_level="ERROR"
    )
    configure_logging(settings)

    get_logger().warning("Filtered out")

    assert "Filtered out" not in capsys.readouterr().err


def test_logging_context_binds_and_unbinds():
    with LoggingContext(command="update"):
        assert structlog.contextvars.get_contextvars()["command"] == "update"

    assert "command" not in structlog.contextvars.get_contextvars()
