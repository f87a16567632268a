"""Równoległe liczenie rozmiarów podkatalogów."""

from __future__ import annotations

from concurrent.futures import Executor, Future
from dataclasses import dataclass
from threading import Event
from typing import TYPE_CHECKING, Callable

import structlog

from .models import FolderSize

if TYPE_CHECKING:
    from space_analyzer.fs.base import SizeCalculator


@dataclass(frozen=True, slots=True)
class SizeOutcome:
    """Wynik pojedynczego zadania liczenia rozmiaru."""

    path: str
    generation: int
    result: FolderSize | None = None
    error: str | None = None
    cancelled: bool = False

    @property
    def succeeded(self) -> bool:
        return self.result is not None


SizeCallback = Callable[[SizeOutcome], None]


class SizeDispatcher:
    """Zleca jedno zadanie liczenia rozmiaru na katalog.

    Zadania nie współdzielą stanu; każde kończy się dokładnie jednym
    wywołaniem callbacku, niezależnie od tego, czy się powiodło.
    """

    def __init__(self, calculator: "SizeCalculator", executor: Executor) -> None:
        self._calculator = calculator
        self._executor = executor
        self._logger = structlog.get_logger(__name__)

    def dispatch(
        self,
        path: str,
        generation: int,
        on_done: SizeCallback,
        *,
        cancel_event: Event | None = None,
    ) -> Future | None:
        try:
            future = self._executor.submit(self.compute_size, path, generation, cancel_event)
        except RuntimeError as exc:
            # Pula została już zamknięta.
            on_done(SizeOutcome(path=path, generation=generation, error=str(exc), cancelled=True))
            return None

        def _complete(done: Future) -> None:
            if done.cancelled():
                on_done(SizeOutcome(path=path, generation=generation, error="cancelled", cancelled=True))
                return
            on_done(done.result())

        future.add_done_callback(_complete)
        return future

    def compute_size(self, path: str, generation: int, cancel_event: Event | None = None) -> SizeOutcome:
        """Wywołuje kalkulator i zamienia wynik lub błąd na ``SizeOutcome``."""

        try:
            result = self._calculator.compute_directory_size(path, cancel_event=cancel_event)
        except Exception as exc:
            cancelled = cancel_event is not None and cancel_event.is_set()
            if not cancelled:
                self._logger.warning("size-computation-failed", path=path, generation=generation, error=str(exc))
            return SizeOutcome(path=path, generation=generation, error=str(exc) or type(exc).__name__, cancelled=cancelled)
        return SizeOutcome(path=path, generation=generation, result=result)
