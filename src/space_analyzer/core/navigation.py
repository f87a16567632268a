"""Kontroler nawigacji: listowanie katalogu i strumieniowe rozmiary podkatalogów."""

from __future__ import annotations

import os
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import replace
from functools import partial
from typing import TYPE_CHECKING, Callable, Dict, List, Set

import structlog

from .locations import is_drive_root, normalize_location, parent_location
from .models import Entry, NavigationSnapshot
from .sizing import SizeDispatcher, SizeOutcome
from .sorting import SortKey, SortState, toggle_sort

if TYPE_CHECKING:
    from space_analyzer.fs.base import DirectoryLister, SizeCalculator


Listener = Callable[[], None]


def default_size_workers() -> int:
    return min(32, (os.cpu_count() or 1) + 4)


class NavigationController:
    """Właściciel bieżącej lokalizacji, listy elementów i zadań liczenia rozmiarów.

    Każde wejście do katalogu otwiera nową generację. Wyniki (zarówno
    listowania, jak i liczenia rozmiarów) niosą numer generacji, w której
    zostały zlecone, i są odrzucane, jeśli generacja przestała być bieżąca.
    Zadania z poprzednich generacji nie są przerywane siłą; dostają jedynie
    ustawione zdarzenie anulowania, które kalkulator może (ale nie musi)
    sprawdzać.

    Cały stan chroni jedna blokada, więc ``snapshot()`` nigdy nie zwraca
    rozerwanego obrazu listy i zbioru oczekujących katalogów.
    """

    def __init__(
        self,
        *,
        lister: "DirectoryLister",
        calculator: "SizeCalculator",
        listing_executor: Executor | None = None,
        sizing_executor: Executor | None = None,
        max_size_workers: int | None = None,
        listing_workers: int = 2,
    ) -> None:
        self._lister = lister
        self._owned_executors: List[Executor] = []
        if listing_executor is None:
            listing_executor = ThreadPoolExecutor(max_workers=max(1, listing_workers), thread_name_prefix="listing")
            self._owned_executors.append(listing_executor)
        if sizing_executor is None:
            workers = max_size_workers if max_size_workers is not None else default_size_workers()
            sizing_executor = ThreadPoolExecutor(max_workers=max(1, workers), thread_name_prefix="sizing")
            self._owned_executors.append(sizing_executor)
        self._listing_executor = listing_executor
        self._dispatcher = SizeDispatcher(calculator, sizing_executor)
        self._logger = structlog.get_logger(__name__)

        self._lock = threading.RLock()
        self._changed = threading.Condition(self._lock)
        self._listeners: List[Listener] = []

        self._generation = 0
        self._cancel_event: threading.Event | None = None
        self._location = ""
        self._target = ""
        self._listing: Dict[str, Entry] = {}
        self._pending: Set[str] = set()
        self._failed: Set[str] = set()
        self._loading = False
        self._error: str | None = None
        self._sort = SortState()
        self._revision = 0

    # ------------------------------------------------------------------
    # API publiczne
    # ------------------------------------------------------------------

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def snapshot(self) -> NavigationSnapshot:
        with self._lock:
            return NavigationSnapshot(
                generation=self._generation,
                location=self._location,
                target=self._target,
                entries=tuple(self._listing.values()),
                pending=frozenset(self._pending),
                failed=frozenset(self._failed),
                loading=self._loading,
                error=self._error,
                sort=self._sort,
                revision=self._revision,
            )

    def enter(self, location: str) -> int:
        """Przechodzi do lokalizacji i zwraca numer nowej generacji."""

        target = normalize_location(location)
        if not target:
            raise ValueError("Lokalizacja nie może być pusta")

        with self._lock:
            generation, cancel_event = self._begin_generation()
            self._error = None
            self._loading = True
            self._target = target
            self._clear_listing()
            self._touch()

        self._logger.info("navigation-started", location=target, generation=generation)
        self._notify()

        try:
            future = self._listing_executor.submit(self._lister.list_directory_fast, target)
        except RuntimeError as exc:
            self._on_listing_failed(generation, target, exc)
            return generation
        future.add_done_callback(partial(self._on_listing_done, generation, target, cancel_event))
        return generation

    def go_up(self) -> int | None:
        """Przechodzi do katalogu nadrzędnego lub, z katalogu głównego, czyści widok."""

        with self._lock:
            location = self._location
        if not location or is_drive_root(location):
            self._reset()
            return None
        parent = parent_location(location)
        if parent is not None:
            return self.enter(parent)
        self._reset()
        return None

    def _reset(self) -> None:
        """Unieważnia bieżącą generację i wraca do stanu bez wybranej lokalizacji."""

        with self._lock:
            generation, _ = self._begin_generation()
            self._location = ""
            self._target = ""
            self._error = None
            self._loading = False
            self._clear_listing()
            self._touch()
        self._logger.info("navigation-reset", generation=generation)
        self._notify()

    def change_sort(self, key: SortKey | str) -> SortState:
        """Zmienia wyłącznie porządek wyświetlania; dane elementów pozostają bez zmian."""

        with self._lock:
            self._sort = toggle_sort(self._sort, key)
            self._touch()
            state = self._sort
        self._notify()
        return state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Rejestruje słuchacza zmian stanu; zwraca funkcję wyrejestrowującą."""

        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def wait_until_idle(self, timeout: float | None = None) -> bool:
        """Czeka, aż listowanie i wszystkie rozmiary bieżącej generacji się zakończą."""

        with self._changed:
            return self._changed.wait_for(lambda: not self._loading and not self._pending, timeout)

    def close(self) -> None:
        with self._lock:
            if self._cancel_event is not None:
                self._cancel_event.set()
        for executor in self._owned_executors:
            executor.shutdown(wait=False, cancel_futures=True)
        self._owned_executors.clear()

    def __enter__(self) -> "NavigationController":
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Etap 1: listowanie
    # ------------------------------------------------------------------

    def _on_listing_done(
        self,
        generation: int,
        location: str,
        cancel_event: threading.Event,
        future: Future,
    ) -> None:
        if future.cancelled():
            self._on_listing_failed(generation, location, RuntimeError("Listowanie zostało anulowane"))
            return
        error = future.exception()
        if error is not None:
            self._on_listing_failed(generation, location, error)
            return

        entries = list(future.result())
        with self._lock:
            if generation != self._generation:
                directories: List[str] | None = None
            else:
                self._location = location
                self._target = ""
                self._loading = False
                self._listing = {entry.path: entry for entry in entries}
                directories = [entry.path for entry in self._listing.values() if entry.is_dir]
                self._pending = set(directories)
                self._touch()

        if directories is None:
            self._logger.debug("listing-stale-discarded", location=location, generation=generation)
            return

        self._logger.info(
            "listing-ready",
            location=location,
            generation=generation,
            entries=len(entries),
            directories=len(directories),
        )
        self._notify()

        for path in directories:
            if cancel_event.is_set():
                break
            self._dispatcher.dispatch(path, generation, self._on_size_done, cancel_event=cancel_event)

    def _on_listing_failed(self, generation: int, location: str, error: BaseException) -> None:
        with self._lock:
            current = generation == self._generation
            if current:
                self._error = str(error) or type(error).__name__
                self._loading = False
                self._clear_listing()
                self._touch()

        if not current:
            self._logger.debug("listing-failure-stale", location=location, generation=generation)
            return
        self._logger.warning("listing-failed", location=location, generation=generation, error=str(error))
        self._notify()

    # ------------------------------------------------------------------
    # Etap 2: rozmiary podkatalogów
    # ------------------------------------------------------------------

    def _on_size_done(self, outcome: SizeOutcome) -> None:
        with self._lock:
            current = outcome.generation == self._generation
            try:
                if current and outcome.result is not None:
                    entry = self._listing.get(outcome.path)
                    if entry is not None:
                        self._listing[outcome.path] = replace(
                            entry,
                            size=outcome.result.size,
                            item_count=outcome.result.item_count,
                        )
                elif current and not outcome.cancelled:
                    self._failed.add(outcome.path)
            finally:
                if current:
                    self._pending.discard(outcome.path)
                    self._touch()
            remaining = len(self._pending)

        if not current:
            self._logger.debug("size-stale-discarded", path=outcome.path, generation=outcome.generation)
            return
        self._logger.debug(
            "size-resolved",
            path=outcome.path,
            generation=outcome.generation,
            succeeded=outcome.succeeded,
            remaining=remaining,
        )
        self._notify()

    # ------------------------------------------------------------------
    # Operacje pomocnicze
    # ------------------------------------------------------------------

    def _begin_generation(self) -> tuple[int, threading.Event]:
        if self._cancel_event is not None:
            self._cancel_event.set()
        self._generation += 1
        self._cancel_event = threading.Event()
        return self._generation, self._cancel_event

    def _clear_listing(self) -> None:
        self._listing = {}
        self._pending = set()
        self._failed = set()

    def _touch(self) -> None:
        self._revision += 1
        self._changed.notify_all()

    def _notify(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener()
            except Exception:
                self._logger.exception("navigation-listener-failed")
