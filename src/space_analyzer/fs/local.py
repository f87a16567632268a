"""Implementacja współpracowników dla lokalnego systemu plików."""

from __future__ import annotations

import os
import stat
from threading import Event
from typing import List

import psutil
from structlog import get_logger

from space_analyzer.core.models import Drive, Entry, FolderSize
from .base import Filesystem, ListingError, SizeCalculationCancelled, SizingError


def _is_link_like(item: os.DirEntry) -> bool:
    if item.is_symlink():
        return True
    is_junction = getattr(item, "is_junction", None)
    return bool(is_junction and is_junction())


class LocalFilesystem(Filesystem):
    """Odczyt dysków, listowanie i liczenie rozmiarów przez ``os.scandir``.

    Dowiązania symboliczne (i junction w Windows) nie są odwiedzane ani
    wyświetlane; pozostałe pliki specjalne są pomijane.
    """

    name = "local"

    def __init__(self, *, include_all_partitions: bool = False) -> None:
        self._include_all_partitions = include_all_partitions
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Dyski
    # ------------------------------------------------------------------

    def list_drives(self) -> List[Drive]:
        drives: List[Drive] = []
        seen: set[str] = set()
        for partition in psutil.disk_partitions(all=self._include_all_partitions):
            if partition.mountpoint in seen:
                continue
            try:
                usage = psutil.disk_usage(partition.mountpoint)
            except OSError as exc:
                self._logger.warning("drive-usage-unavailable", mount_point=partition.mountpoint, error=str(exc))
                continue
            seen.add(partition.mountpoint)
            drives.append(
                Drive(
                    name=partition.device,
                    mount_point=partition.mountpoint,
                    total_space=usage.total,
                    available_space=usage.free,
                    used_space=max(usage.total - usage.free, 0),
                    file_system=partition.fstype,
                )
            )
        return drives

    # ------------------------------------------------------------------
    # Etap 1: szybkie listowanie
    # ------------------------------------------------------------------

    def list_directory_fast(self, path: str) -> List[Entry]:
        try:
            with os.scandir(path) as iterator:
                items = list(iterator)
        except OSError as exc:
            raise ListingError(str(exc)) from exc

        entries: List[Entry] = []
        for item in items:
            if _is_link_like(item):
                continue
            try:
                info = item.stat(follow_symlinks=False)
            except OSError:
                continue
            if stat.S_ISDIR(info.st_mode):
                entries.append(
                    Entry(
                        name=item.name,
                        path=item.path,
                        is_dir=True,
                        size=0,
                        item_count=self._direct_child_count(item.path),
                    )
                )
            elif stat.S_ISREG(info.st_mode):
                entries.append(Entry(name=item.name, path=item.path, is_dir=False, size=info.st_size))

        # Katalogi najpierw, potem alfabetycznie bez rozróżniania wielkości liter.
        entries.sort(key=lambda entry: (not entry.is_dir, entry.name.lower()))
        return entries

    @staticmethod
    def _direct_child_count(path: str) -> int:
        try:
            with os.scandir(path) as iterator:
                return sum(1 for _ in iterator)
        except OSError:
            return 0

    # ------------------------------------------------------------------
    # Etap 2: rekurencyjny rozmiar
    # ------------------------------------------------------------------

    def compute_directory_size(self, path: str, *, cancel_event: Event | None = None) -> FolderSize:
        """Sumuje rozmiary plików i liczbę elementów w poddrzewie.

        Katalog główny musi być czytelny, inaczej zgłaszany jest ``SizingError``.
        Nieczytelne podkatalogi są pomijane.
        """

        total_size = 0
        total_count = 0
        stack: List[str] = [path]

        while stack:
            self._check_cancel(cancel_event)
            current = stack.pop()
            try:
                with os.scandir(current) as iterator:
                    for item in iterator:
                        if _is_link_like(item):
                            # Junction w Windows wygląda przy lstat jak katalog.
                            total_count += 1
                            continue
                        try:
                            info = item.stat(follow_symlinks=False)
                        except OSError:
                            continue
                        total_count += 1
                        if stat.S_ISDIR(info.st_mode):
                            stack.append(item.path)
                        elif stat.S_ISREG(info.st_mode):
                            total_size += info.st_size
            except OSError as exc:
                if current == path:
                    raise SizingError(str(exc)) from exc
                self._logger.debug("sizing-subtree-skipped", path=current, error=str(exc))

        return FolderSize(size=total_size, item_count=total_count)

    @staticmethod
    def _check_cancel(cancel_event: Event | None) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise SizeCalculationCancelled()
