"""Unit tests for shared logging configuration."""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from space_analyzer.shared.logging import add_thread_name, configure_logging, parse_log_level


def test_configure_logging_calls_structlog_and_basicconfig() -> None:
    with (
        patch("space_analyzer.shared.logging.logging.basicConfig") as basic_config,
        patch("space_analyzer.shared.logging.structlog.configure") as configure,
    ):
        configure_logging(level=logging.DEBUG)

    basic_config.assert_called_once()
    assert basic_config.call_args.kwargs["level"] == logging.DEBUG
    configure.assert_called_once()


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, logging.INFO),
        ("", logging.INFO),
        ("debug", logging.DEBUG),
        (" WARNING ", logging.WARNING),
        ("10", 10),
        (logging.ERROR, logging.ERROR),
        ("verbose", logging.INFO),
    ],
)
def test_parse_log_level(value, expected) -> None:
    assert parse_log_level(value) == expected


def test_add_thread_name_keeps_explicit_value() -> None:
    assert add_thread_name(None, "info", {"event": "x"})["thread"]
    assert add_thread_name(None, "info", {"event": "x", "thread": "sizing_0"})["thread"] == "sizing_0"
