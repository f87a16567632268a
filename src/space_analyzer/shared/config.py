"""Konfiguracja aplikacji."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

from space_analyzer.core.navigation import default_size_workers
from .logging import parse_log_level

SUPPORTED_LOCALES = ("pl", "en")


def _env_flag(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


def _env_positive_int(value: str | None, default: int) -> int:
    try:
        parsed = int((value or "").strip())
    except ValueError:
        return default
    return parsed if parsed > 0 else default


@dataclass(slots=True)
class AppConfig:
    """Konfiguracja ogólna aplikacji."""

    max_size_workers: int
    listing_workers: int = 2
    locale: str = "pl"
    log_level: int = logging.INFO
    include_all_partitions: bool = False

    @classmethod
    def default(cls) -> "AppConfig":
        """Tworzy domyślną konfigurację."""

        return cls(max_size_workers=default_size_workers())

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AppConfig":
        """Czyta konfigurację ze zmiennych środowiskowych.

        Obsługiwane zmienne:
        - ``SPACEANALYZER_MAX_WORKERS`` - limit równoległych zadań liczenia rozmiarów
        - ``SPACEANALYZER_LOCALE`` - język interfejsu (``pl`` lub ``en``)
        - ``SPACEANALYZER_LOG_LEVEL`` - poziom logowania (nazwa lub liczba)
        - ``SPACEANALYZER_ALL_PARTITIONS`` - pokazuje również partycje wirtualne

        Nieprawidłowe wartości są zastępowane domyślnymi.
        """

        env = os.environ if environ is None else environ
        config = cls.default()
        config.max_size_workers = _env_positive_int(env.get("SPACEANALYZER_MAX_WORKERS"), config.max_size_workers)

        locale = (env.get("SPACEANALYZER_LOCALE") or "").strip().lower()
        if locale in SUPPORTED_LOCALES:
            config.locale = locale

        config.log_level = parse_log_level(env.get("SPACEANALYZER_LOG_LEVEL"), config.log_level)
        config.include_all_partitions = _env_flag(env.get("SPACEANALYZER_ALL_PARTITIONS"))
        return config
