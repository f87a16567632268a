"""Warstwa usługowa udostępniająca operacje nawigacji dla GUI i CLI."""

from __future__ import annotations

from typing import Callable, List

import structlog

from space_analyzer.core import NavigationController
from space_analyzer.core.models import Drive, NavigationSnapshot
from space_analyzer.core.sorting import SortKey, SortState
from space_analyzer.fs import Filesystem, LocalFilesystem
from space_analyzer.shared import AppConfig


class NavigatorService:
    """Łączy system plików z kontrolerem nawigacji."""

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        filesystem: Filesystem | None = None,
        controller: NavigationController | None = None,
    ) -> None:
        self._config = config or AppConfig.default()
        self._filesystem = filesystem or LocalFilesystem(
            include_all_partitions=self._config.include_all_partitions,
        )
        self._controller = controller or NavigationController(
            lister=self._filesystem,
            calculator=self._filesystem,
            max_size_workers=self._config.max_size_workers,
            listing_workers=self._config.listing_workers,
        )
        self._logger = structlog.get_logger(__name__)

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def controller(self) -> NavigationController:
        return self._controller

    def list_drives(self) -> List[Drive]:
        """Zwraca dyski; błąd jest logowany i nie wpływa na stan nawigacji."""

        try:
            return list(self._filesystem.list_drives())
        except Exception as exc:
            self._logger.error("drive-enumeration-failed", error=str(exc))
            return []

    def enter(self, location: str) -> int:
        return self._controller.enter(location)

    def go_up(self) -> int | None:
        return self._controller.go_up()

    def change_sort(self, key: SortKey | str) -> SortState:
        return self._controller.change_sort(key)

    def snapshot(self) -> NavigationSnapshot:
        return self._controller.snapshot()

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        return self._controller.subscribe(listener)

    def wait_until_idle(self, timeout: float | None = None) -> bool:
        return self._controller.wait_until_idle(timeout)

    def close(self) -> None:
        self._controller.close()


__all__ = ["NavigatorService"]
