"""Normalizacja lokalizacji i łańcuch przodków ścieżki."""

from __future__ import annotations

import ntpath
import os
import posixpath
import re
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import List

_WINDOWS_DRIVE = re.compile(r"^[A-Za-z]:")
_UNC_PREFIX = re.compile(r"^[\\/]{2}[^\\/]")


def _is_windows_style(path: str) -> bool:
    # W POSIX ukośnik wsteczny jest zwykłym znakiem nazwy pliku.
    if os.name == "nt":
        return True
    return bool(_WINDOWS_DRIVE.match(path) or (_UNC_PREFIX.match(path) and "\\" in path))


def _pure_path(location: str) -> PurePath:
    if _is_windows_style(location):
        return PureWindowsPath(location)
    return PurePosixPath(location)


def normalize_location(path: str) -> str:
    """Zwraca znormalizowaną postać lokalizacji.

    Styl Windows wybierany jest dla litery dysku, ścieżki UNC albo gdy program
    działa w Windows; w pozostałych przypadkach ścieżka jest traktowana jako POSIX.
    Sam dysk (``C:``) jest rozwijany do jego katalogu głównego (``C:\\``).
    """

    raw = (path or "").strip()
    if not raw:
        return ""
    if _is_windows_style(raw):
        normalized = ntpath.normpath(raw.replace("/", "\\"))
        drive, rest = ntpath.splitdrive(normalized)
        if drive and not rest:
            normalized = drive + "\\"
        return normalized
    return posixpath.normpath(raw)


def is_drive_root(location: str) -> bool:
    """Czy lokalizacja jest katalogiem głównym dysku (``C:\\``, ``/``)."""

    normalized = normalize_location(location)
    if not normalized:
        return False
    pure = _pure_path(normalized)
    return bool(pure.anchor) and str(pure) == pure.anchor


def ancestor_chain(location: str) -> List[str]:
    """Lista lokalizacji od katalogu głównego do wskazanej (włącznie)."""

    normalized = normalize_location(location)
    if not normalized:
        return []
    pure = _pure_path(normalized)
    parents = [str(parent) for parent in reversed(pure.parents) if str(parent) != "."]
    return [*parents, str(pure)]


def parent_location(location: str) -> str | None:
    chain = ancestor_chain(location)
    if len(chain) < 2:
        return None
    return chain[-2]


def location_label(location: str) -> str:
    """Etykieta ostatniego członu lokalizacji (dla katalogu głównego: dysk)."""

    normalized = normalize_location(location)
    if not normalized:
        return ""
    pure = _pure_path(normalized)
    if str(pure) == pure.anchor:
        return pure.drive or pure.anchor
    return pure.name
