"""Modele widoków wykorzystywane przez GUI Space Analyzer."""

from __future__ import annotations

from typing import List

from PySide6.QtCore import QObject, Signal

from space_analyzer.core.models import Drive, NavigationSnapshot
from space_analyzer.core.sorting import SortKey
from .services import NavigatorService


class NavigationViewModel(QObject):
    """Warstwa MVVM pośrednicząca między GUI a kontrolerem nawigacji.

    Kontroler powiadamia słuchaczy z wątków roboczych; sygnał ``stateChanged``
    jest dostarczany do slotów okna w wątku GUI jako połączenie kolejkowane.
    """

    stateChanged = Signal()
    drivesChanged = Signal()

    def __init__(self, service: NavigatorService | None = None) -> None:
        super().__init__()
        self._service = service or NavigatorService()
        self._drives: List[Drive] = []
        self._unsubscribe = self._service.subscribe(self._on_controller_changed)

    # ------------------------------------------------------------------
    # API publiczne
    # ------------------------------------------------------------------

    def load_drives(self) -> List[Drive]:
        self._drives = self._service.list_drives()
        self.drivesChanged.emit()
        return list(self._drives)

    def drives(self) -> List[Drive]:
        return list(self._drives)

    def snapshot(self) -> NavigationSnapshot:
        return self._service.snapshot()

    def navigate(self, location: str) -> int:
        return self._service.enter(location)

    def go_up(self) -> int | None:
        return self._service.go_up()

    def sort_by(self, key: SortKey | str) -> None:
        self._service.change_sort(key)

    def shutdown(self) -> None:
        self._unsubscribe()
        self._service.close()

    # ------------------------------------------------------------------
    # Sloty wewnętrzne
    # ------------------------------------------------------------------

    def _on_controller_changed(self) -> None:
        self.stateChanged.emit()
