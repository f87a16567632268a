"""Czyste funkcje prezentacji: formatowanie, ścieżka nawigacyjna, ikony."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from space_analyzer.core.locations import ancestor_chain, location_label, normalize_location
from space_analyzer.core.models import Drive, NavigationSnapshot
from .localization import LocalizationManager

_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")

_ICONS = {
    "exe": "⚙️", "dll": "🔧", "sys": "🔩",
    "mp4": "🎬", "avi": "🎬", "mkv": "🎬", "mov": "🎬",
    "mp3": "🎵", "wav": "🎵", "flac": "🎵",
    "jpg": "🖼️", "jpeg": "🖼️", "png": "🖼️", "gif": "🖼️",
    "pdf": "📕", "doc": "📝", "docx": "📝",
    "xls": "📊", "xlsx": "📊",
    "zip": "📦", "rar": "📦", "7z": "📦",
    "js": "📜", "ts": "📜", "tsx": "📜", "jsx": "📜", "py": "📜",
    "txt": "📄", "log": "📄", "md": "📄",
}


@dataclass(frozen=True, slots=True)
class Crumb:
    label: str
    path: str


def format_size(size: int) -> str:
    """Rozmiar w jednostkach binarnych; zero jest wyświetlane jako kreska."""

    if size <= 0:
        return "—"
    index = min(int(math.log2(size) // 10), len(_SIZE_UNITS) - 1)
    value = size / (1024 ** index)
    return f"{value:.{1 if index > 0 else 0}f} {_SIZE_UNITS[index]}"


def breadcrumbs(location: str) -> List[Crumb]:
    return [Crumb(label=location_label(path), path=path) for path in ancestor_chain(location)]


def _extension(name: str) -> str:
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[1].lower()


def file_icon(name: str, is_dir: bool) -> str:
    if is_dir:
        return "📁"
    return _ICONS.get(_extension(name), "📄")


def type_label(name: str, is_dir: bool, localization: LocalizationManager | None = None) -> str:
    """Etykieta typu: folder, rozszerzenie wielkimi literami lub ogólny plik."""

    if is_dir:
        return localization.text("type.folder") if localization else "Folder"
    if "." not in name:
        return localization.text("type.file") if localization else "File"
    return name.rsplit(".", 1)[1].upper()


def percent_of(part: int, whole: int) -> float:
    if whole <= 0:
        return 0.0
    return (part / whole) * 100


def active_drive(drives: Iterable[Drive], location: str) -> Drive | None:
    """Dysk, do którego należy lokalizacja (najdłuższy pasujący punkt montowania)."""

    chain = set(ancestor_chain(location))
    matches = [drive for drive in drives if normalize_location(drive.mount_point) in chain]
    if not matches:
        return None
    return max(matches, key=lambda drive: len(normalize_location(drive.mount_point)))


def usage_color(percent: float) -> str:
    if percent > 90:
        return "#f85149"
    if percent > 70:
        return "#d29922"
    return "#58a6ff"


def sort_indicator(snapshot: NavigationSnapshot, key: str) -> str:
    if snapshot.sort.key.value != key:
        return ""
    return " ▲" if snapshot.sort.ascending else " ▼"


def status_parts(snapshot: NavigationSnapshot, localization: LocalizationManager) -> Sequence[str]:
    """Elementy paska stanu dla bieżącego obrazu nawigacji."""

    if snapshot.loading:
        return [localization.text("status.reading")]
    if not snapshot.has_location():
        return [localization.text("status.ready")]

    parts = [
        localization.text("status.items", count=len(snapshot.entries)),
        localization.text("status.total", size=format_size(snapshot.total_size())),
    ]
    if snapshot.still_sizing():
        count = len(snapshot.pending)
        key = "status.calculating.one" if count == 1 else "status.calculating.many"
        parts.append(localization.text(key, count=count))
    parts.append(snapshot.location)
    return parts


def status_text(snapshot: NavigationSnapshot, localization: LocalizationManager) -> str:
    return " · ".join(status_parts(snapshot, localization))
