"""Interfejs wiersza poleceń do analizy zajętości katalogu."""

from __future__ import annotations

import os
import sys
from argparse import ArgumentParser, BooleanOptionalAction, Namespace
from typing import TextIO

import structlog

from space_analyzer.core.models import NavigationSnapshot
from space_analyzer.core.sorting import SortKey, SortState, default_ascending, sort_entries
from space_analyzer.shared import SUPPORTED_LOCALES, AppConfig, configure_logging, write_error_report
from space_analyzer.ui.localization import LocalizationManager
from space_analyzer.ui.presentation import format_size, percent_of, status_text, type_label
from space_analyzer.ui.services import NavigatorService


def _build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="space-analyzer",
        description="Narzędzie do analizy zajętości miejsca na dysku.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        help="Katalog do przeanalizowania",
    )
    parser.add_argument(
        "--list-drives",
        action="store_true",
        help="Wyświetla dostępne dyski i kończy działanie",
    )
    parser.add_argument(
        "--sort",
        choices=[key.value for key in SortKey],
        default=SortKey.SIZE.value,
        help="Kolumna sortowania (domyślnie: size)",
    )
    parser.add_argument(
        "--ascending",
        action=BooleanOptionalAction,
        default=None,
        help="Kierunek sortowania; --no-ascending sortuje malejąco (domyślnie rosnąco tylko dla nazwy)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        help="Maksymalna liczba równoległych zadań liczenia rozmiarów",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Maksymalny czas oczekiwania na rozmiary podkatalogów w sekundach",
    )
    parser.add_argument(
        "--locale",
        choices=list(SUPPORTED_LOCALES),
        help="Język komunikatów",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Wyświetla szczegółowe logi",
    )
    return parser


def _config_from_args(args: Namespace) -> AppConfig:
    config = AppConfig.from_env()
    if args.workers is not None and args.workers > 0:
        config.max_size_workers = args.workers
    if args.locale:
        config.locale = args.locale
    return config


def _print_drives(service: NavigatorService, out: TextIO) -> int:
    logger = structlog.get_logger(__name__)
    drives = service.list_drives()
    if not drives:
        logger.warning("no-drives-found")
        return 0
    for drive in drives:
        out.write(
            f"{drive.mount_point:<24} {drive.file_system or '-':<8} "
            f"{format_size(drive.used_space):>10} / {format_size(drive.total_space):>10} "
            f"({drive.usage_percent():.1f}%)\n"
        )
    return 0


def _print_listing(
    snapshot: NavigationSnapshot,
    sort: SortState,
    localization: LocalizationManager,
    out: TextIO,
) -> None:
    total = snapshot.total_size()
    for entry in sort_entries(snapshot.entries, sort):
        if snapshot.is_sizing(entry):
            size = localization.text("size.pending")
        elif entry.path in snapshot.failed:
            size = localization.text("size.failed")
        else:
            size = format_size(entry.size)
        items = f"{entry.item_count:,}" if entry.is_dir else ""
        out.write(
            f"{size:>10} {percent_of(entry.size, total):6.1f}% {items:>10}  "
            f"{type_label(entry.name, entry.is_dir, localization):<8} {entry.name}\n"
        )
    out.write(status_text(snapshot, localization) + "\n")


def _run(args: Namespace, *, service: NavigatorService | None = None, out: TextIO | None = None) -> int:
    logger = structlog.get_logger(__name__)
    out = out or sys.stdout
    config = service.config if service is not None else _config_from_args(args)
    service = service or NavigatorService(config)
    localization = LocalizationManager(locale=config.locale)

    try:
        if args.list_drives:
            return _print_drives(service, out)

        if not args.path:
            logger.error("path-not-provided")
            return 1

        location = os.path.abspath(args.path)
        logger.info("starting-analysis", location=location, workers=config.max_size_workers)
        service.enter(location)
        finished = service.wait_until_idle(args.timeout)
        snapshot = service.snapshot()

        if snapshot.error is not None:
            logger.error("listing-failed", location=location, error=snapshot.error)
            return 1
        if not finished:
            logger.warning("sizing-timeout", pending=len(snapshot.pending))

        key = SortKey(args.sort)
        ascending = default_ascending(key) if args.ascending is None else args.ascending
        _print_listing(snapshot, SortState(key=key, ascending=ascending), localization, out)
        logger.info(
            "analysis-complete",
            entries=len(snapshot.entries),
            total=snapshot.total_size(),
            failed=len(snapshot.failed),
        )
        return 0

    except Exception as exc:  # pragma: no cover - obsługa błędów środowiskowych
        logger.exception("analysis-failed", error=str(exc))
        write_error_report(exc, where="cli", context={"path": args.path})
        return 1
    finally:
        service.close()


def main() -> int:
    parser = _build_parser()
    args = parser.parse_args()
    configure_logging(level=10 if args.verbose else _config_from_args(args).log_level)
    return _run(args)


if __name__ == "__main__":
    sys.exit(main())
