"""Porządek wyświetlania listy elementów."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Iterable, List

if TYPE_CHECKING:
    from .models import Entry


class SortKey(str, Enum):
    """Kolumny, według których można sortować listę."""

    SIZE = "size"
    NAME = "name"
    TYPE = "type"


@dataclass(frozen=True, slots=True)
class SortState:
    key: SortKey = SortKey.SIZE
    ascending: bool = False


_SORT_KEYS: dict[SortKey, Callable[["Entry"], Any]] = {
    SortKey.SIZE: lambda entry: entry.size,
    SortKey.NAME: lambda entry: entry.name.casefold(),
    SortKey.TYPE: lambda entry: int(entry.is_dir),
}


def default_ascending(key: SortKey) -> bool:
    """Domyślny kierunek: rosnąco tylko dla nazwy."""

    return key is SortKey.NAME


def toggle_sort(state: SortState, key: SortKey | str) -> SortState:
    """Ten sam klucz odwraca kierunek, nowy klucz ustawia kierunek domyślny."""

    key = SortKey(key)
    if state.key is key:
        return SortState(key=key, ascending=not state.ascending)
    return SortState(key=key, ascending=default_ascending(key))


def sort_entries(entries: Iterable["Entry"], state: SortState) -> List["Entry"]:
    """Zwraca nową, posortowaną listę; wejście nie jest modyfikowane.

    Sortowanie jest stabilne w obu kierunkach (``reverse=True`` zachowuje
    kolejność elementów równych).
    """

    return sorted(entries, key=_SORT_KEYS[state.key], reverse=not state.ascending)
