"""Raporty błędów zapisywane na dysk oraz haki przechwytujące awarie.

Raport to plik tekstowy: nagłówek z opisem środowiska w formacie JSON,
a pod nim pełny traceback. Katalog raportów można wskazać zmienną
``SPACEANALYZER_ERROR_DIR``.
"""

from __future__ import annotations

import faulthandler
import json
import os
import platform
import sys
import threading
import traceback
from dataclasses import dataclass
from datetime import datetime, timezone
from importlib import metadata
from pathlib import Path
from typing import IO, Any, Mapping
from uuid import uuid4

import structlog

_ERROR_DIR_ENV = "SPACEANALYZER_ERROR_DIR"
_DISABLE_HOOKS_ENV = "SPACEANALYZER_DISABLE_CRASH_HOOKS"
_ENABLE_HOOKS_ENV = "SPACEANALYZER_ENABLE_CRASH_HOOKS"

_CONFIG_ENV_KEYS = (
    "SPACEANALYZER_MAX_WORKERS",
    "SPACEANALYZER_LOCALE",
    "SPACEANALYZER_LOG_LEVEL",
    "SPACEANALYZER_ALL_PARTITIONS",
)

_REPORT_TITLE = "Space Analyzer Error Report"

_installed = False
_fatal_log: IO[str] | None = None


@dataclass(frozen=True, slots=True)
class ErrorReport:
    path: Path
    created_at: datetime


# ----------------------------------------------------------------------
# Katalog raportów
# ----------------------------------------------------------------------


def get_error_reports_dir() -> Path:
    """Katalog na raporty; tworzony, jeśli nie istnieje.

    Kolejność: zmienna ``SPACEANALYZER_ERROR_DIR``, katalog danych
    użytkownika w Windows (``%LOCALAPPDATA%``), ``~/.space_analyzer``.
    """

    directory = _configured_dir() or _user_data_dir() / "error_reports"
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def _configured_dir() -> Path | None:
    value = (os.getenv(_ERROR_DIR_ENV) or "").strip()
    return Path(value) if value else None


def _user_data_dir() -> Path:
    if os.name == "nt":
        root = os.getenv("LOCALAPPDATA") or os.getenv("APPDATA")
        if root:
            return Path(root) / "SpaceAnalyzer"
    return Path.home() / ".space_analyzer"


# ----------------------------------------------------------------------
# Zapis raportu
# ----------------------------------------------------------------------


def _app_version() -> str:
    try:
        return metadata.version("space-analyzer")
    except metadata.PackageNotFoundError:
        return "unknown"


def _jsonable(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Mapping):
        return {str(key): _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_jsonable(item) for item in value]
    return str(value)


def _config_env() -> dict[str, str]:
    return {key: os.environ[key] for key in _CONFIG_ENV_KEYS if key in os.environ}


def _describe(error: BaseException, where: str, context: Mapping[str, Any], created_at: datetime) -> dict[str, Any]:
    details = {key: _jsonable(value) for key, value in context.items()}
    details.setdefault("config_env", _config_env())
    return {
        "created_at": created_at.isoformat(),
        "where": where,
        "error_type": type(error).__name__,
        "error_message": str(error),
        "context": details,
        "app_version": _app_version(),
        "python": " ".join(sys.version.split()),
        "platform": platform.platform(),
        "executable": sys.executable,
        "cwd": os.getcwd(),
        "thread": threading.current_thread().name,
    }


def write_error_report(
    error: BaseException,
    *,
    where: str,
    context: Mapping[str, Any] | None = None,
) -> ErrorReport:
    """Zapisuje raport dla ``error`` i zwraca jego położenie."""

    created_at = datetime.now(timezone.utc)
    path = get_error_reports_dir() / f"error_{created_at:%Y%m%d_%H%M%S}_{uuid4().hex[:8]}.txt"

    header = json.dumps(_describe(error, where, context or {}, created_at), ensure_ascii=False, indent=2)
    trace = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    underline = "=" * len(_REPORT_TITLE)

    path.write_text(
        f"{_REPORT_TITLE}\n{underline}\n\n{header}\n\nTraceback\n---------\n{trace}",
        encoding="utf-8",
        errors="replace",
    )
    return ErrorReport(path=path, created_at=created_at)


# ----------------------------------------------------------------------
# Haki awaryjne
# ----------------------------------------------------------------------


def _hooks_disabled() -> bool:
    if (os.getenv(_DISABLE_HOOKS_ENV) or "").strip().lower() in {"1", "true", "yes", "on"}:
        return True
    # Pod pytestem haki instalujemy tylko na wyraźne żądanie.
    return bool(os.getenv("PYTEST_CURRENT_TEST")) and (os.getenv(_ENABLE_HOOKS_ENV) or "").strip() != "1"


def _report_unhandled(error: BaseException, where: str, **context: Any) -> None:
    logger = structlog.get_logger(__name__)
    try:
        report = write_error_report(error, where=where, context=context)
    except OSError as exc:
        logger.warning("crash-report-unavailable", where=where, error=str(exc))
        return
    logger.error("crash-report-written", where=where, path=str(report.path))


def _open_fatal_log() -> IO[str]:
    global _fatal_log
    if _fatal_log is None:
        stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        path = get_error_reports_dir() / f"fatal_{stamp}_{uuid4().hex[:8]}.log"
        _fatal_log = open(path, "w", encoding="utf-8", errors="replace")
    return _fatal_log


def install_crash_reporting(*, enable_faulthandler: bool = True) -> None:
    """Przechwytuje nieobsłużone wyjątki (wątek główny i robocze) oraz awarie natywne.

    Wywołanie nigdy nie zgłasza wyjątku i jest idempotentne. Haki można
    wyłączyć zmienną ``SPACEANALYZER_DISABLE_CRASH_HOOKS=1``.
    """

    global _installed
    if _installed or _hooks_disabled():
        return

    previous_sys_hook = sys.excepthook
    previous_thread_hook = threading.excepthook

    def _sys_hook(exc_type, exc, tb):  # type: ignore[no-untyped-def]
        error = exc if isinstance(exc, BaseException) else RuntimeError(str(exc))
        _report_unhandled(error, "sys.excepthook", exc_type=getattr(exc_type, "__name__", str(exc_type)))
        previous_sys_hook(exc_type, exc, tb)

    def _thread_hook(args):  # type: ignore[no-untyped-def]
        # Dotyczy m.in. wątków puli liczącej rozmiary katalogów.
        if args.exc_value is not None:
            _report_unhandled(
                args.exc_value,
                "threading.excepthook",
                thread=getattr(args.thread, "name", None),
                exc_type=getattr(args.exc_type, "__name__", str(args.exc_type)),
            )
        previous_thread_hook(args)

    sys.excepthook = _sys_hook
    threading.excepthook = _thread_hook
    _installed = True

    if enable_faulthandler:
        try:
            faulthandler.enable(file=_open_fatal_log(), all_threads=True)
        except OSError as exc:
            structlog.get_logger(__name__).warning("faulthandler-unavailable", error=str(exc))
