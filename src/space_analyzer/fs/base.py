"""Kontrakty współpracowników systemu plików."""

from __future__ import annotations

from threading import Event
from typing import Iterable, List, Protocol

from space_analyzer.core.models import Drive, Entry, FolderSize


class FilesystemError(RuntimeError):
    """Bazowy wyjątek dla błędów dostępu do systemu plików."""


class ListingError(FilesystemError):
    """Nie udało się odczytać zawartości katalogu."""


class SizingError(FilesystemError):
    """Nie udało się policzyć rozmiaru katalogu."""


class SizeCalculationCancelled(RuntimeError):
    """Sygnalizuje, że liczenie rozmiaru zostało przerwane."""


class DriveEnumerator(Protocol):
    """Zwraca listę dysków dostępnych w systemie."""

    def list_drives(self) -> Iterable[Drive]:
        """Jednorazowe, synchroniczne odczytanie dysków."""


class DirectoryLister(Protocol):
    """Płytkie, nierekurencyjne listowanie katalogu."""

    def list_directory_fast(self, path: str) -> List[Entry]:
        """Zwraca bezpośrednie dzieci katalogu; katalogi mają rozmiar 0."""


class SizeCalculator(Protocol):
    """Rekurencyjne liczenie rozmiaru i liczby elementów katalogu."""

    def compute_directory_size(self, path: str, *, cancel_event: Event | None = None) -> FolderSize:
        """Przechodzi całe poddrzewo ``path``."""


class Filesystem(DriveEnumerator, DirectoryLister, SizeCalculator, Protocol):
    """Komplet operacji wymaganych przez warstwę nawigacji."""
