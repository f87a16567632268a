"""Modele danych używane w rdzeniu aplikacji."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Tuple

from .sorting import SortKey, SortState, sort_entries


@dataclass(frozen=True, slots=True)
class Entry:
    """Pojedynczy element bieżącego katalogu."""

    name: str
    path: str
    is_dir: bool
    size: int = 0
    item_count: int = 0


@dataclass(frozen=True, slots=True)
class FolderSize:
    """Wynik rekurencyjnego liczenia rozmiaru katalogu."""

    size: int
    item_count: int


@dataclass(frozen=True, slots=True)
class Drive:
    """Statyczny opis dysku lub punktu montowania."""

    name: str
    mount_point: str
    total_space: int
    available_space: int
    used_space: int
    file_system: str = ""

    def usage_percent(self) -> float:
        if self.total_space <= 0:
            return 0.0
        return (self.used_space / self.total_space) * 100


class ListingPhase(str, Enum):
    """Etap nawigacji widziany przez warstwę prezentacji."""

    IDLE = "idle"
    LOADING = "loading"
    FAILED = "failed"
    READY = "ready"


@dataclass(frozen=True, slots=True)
class NavigationSnapshot:
    """Niezmienny obraz stanu kontrolera nawigacji."""

    generation: int = 0
    location: str = ""
    target: str = ""
    entries: Tuple[Entry, ...] = ()
    pending: FrozenSet[str] = frozenset()
    failed: FrozenSet[str] = frozenset()
    loading: bool = False
    error: str | None = None
    sort: SortState = field(default_factory=SortState)
    revision: int = 0

    def phase(self) -> ListingPhase:
        if self.loading:
            return ListingPhase.LOADING
        if self.error is not None:
            return ListingPhase.FAILED
        if self.location:
            return ListingPhase.READY
        return ListingPhase.IDLE

    def has_location(self) -> bool:
        return bool(self.location)

    def is_empty(self) -> bool:
        return self.phase() is ListingPhase.READY and not self.entries

    def still_sizing(self) -> bool:
        return bool(self.pending)

    def is_sizing(self, entry: Entry) -> bool:
        return entry.is_dir and entry.path in self.pending

    def sorted_entries(self) -> List[Entry]:
        return sort_entries(self.entries, self.sort)

    def total_size(self) -> int:
        return sum(entry.size for entry in self.entries)

    def max_size(self) -> int:
        return max((entry.size for entry in self.entries), default=0)


__all__ = [
    "Drive",
    "Entry",
    "FolderSize",
    "ListingPhase",
    "NavigationSnapshot",
    "SortKey",
    "SortState",
]
