"""Konfiguracja logowania strukturalnego."""

from __future__ import annotations

import logging
import threading
from typing import Any, MutableMapping

import structlog


def add_thread_name(_logger: Any, _method: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """Dopisuje nazwę wątku; zdarzenia pochodzą z pul listowania i liczenia rozmiarów."""

    event_dict.setdefault("thread", threading.current_thread().name)
    return event_dict


def configure_logging(level: int = logging.INFO) -> None:
    """Inicjalizuje logowanie aplikacji.

    Logi trafiają na stderr, więc wynik CLI na stdout pozostaje czysty.
    """

    logging.basicConfig(level=level, format="%(message)s")
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_thread_name,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def parse_log_level(value: str | int | None, default: int = logging.INFO) -> int:
    """Zamienia nazwę lub numer poziomu na wartość modułu ``logging``."""

    if value is None:
        return default
    if isinstance(value, int):
        return value
    text = value.strip()
    if not text:
        return default
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else default
