"""Test doubles: manually driven executor and an in-memory filesystem.

``ManualExecutor`` never runs anything on its own; tests pick which queued job
completes next, which makes completion order (and therefore races between
generations) deterministic. Done-callbacks run synchronously in the test
thread when a job is completed.
"""

from __future__ import annotations

from concurrent.futures import Executor, Future
from dataclasses import dataclass, field
from threading import Event
from typing import Any, Callable, Dict, List

from space_analyzer.core.models import Drive, Entry, FolderSize
from space_analyzer.fs import ListingError, SizingError


@dataclass
class _Job:
    future: Future
    fn: Callable[..., Any]
    args: tuple
    kwargs: dict


class ManualExecutor(Executor):
    """Executor whose jobs run only when the test says so."""

    def __init__(self) -> None:
        self.jobs: List[_Job] = []
        self.submitted: List[tuple] = []
        self._shutdown = False

    def submit(self, fn, /, *args, **kwargs):  # type: ignore[override]
        if self._shutdown:
            raise RuntimeError("cannot schedule new futures after shutdown")
        future: Future = Future()
        self.jobs.append(_Job(future, fn, args, kwargs))
        self.submitted.append(args)
        return future

    def pending_keys(self) -> List[Any]:
        return [job.args[0] for job in self.jobs]

    def run(self, key: Any) -> Future:
        """Runs the oldest queued job whose first argument equals ``key``."""

        for index, job in enumerate(self.jobs):
            if job.args and job.args[0] == key:
                return self._run_at(index)
        raise AssertionError(f"no queued job for {key!r}; queued: {self.pending_keys()!r}")

    def run_next(self) -> Future:
        return self._run_at(0)

    def run_all(self) -> None:
        while self.jobs:
            self._run_at(0)

    def _run_at(self, index: int) -> Future:
        job = self.jobs.pop(index)
        if not job.future.set_running_or_notify_cancel():
            return job.future
        try:
            result = job.fn(*job.args, **job.kwargs)
        except BaseException as exc:  # noqa: BLE001 - forwarded to the future
            job.future.set_exception(exc)
        else:
            job.future.set_result(result)
        return job.future

    def shutdown(self, wait: bool = True, *, cancel_futures: bool = False) -> None:
        self._shutdown = True
        if cancel_futures:
            for job in self.jobs:
                job.future.cancel()
            self.jobs.clear()


@dataclass
class FakeFilesystem:
    """In-memory drive enumerator, fast lister and size calculator."""

    listings: Dict[str, Any] = field(default_factory=dict)
    sizes: Dict[str, Any] = field(default_factory=dict)
    drives: Any = field(default_factory=list)
    listing_calls: List[str] = field(default_factory=list)
    size_calls: List[str] = field(default_factory=list)
    cancel_events: Dict[str, Event | None] = field(default_factory=dict)

    def list_drives(self) -> List[Drive]:
        if isinstance(self.drives, BaseException):
            raise self.drives
        return list(self.drives)

    def list_directory_fast(self, path: str) -> List[Entry]:
        self.listing_calls.append(path)
        value = self.listings.get(path, ListingError(f"No such file or directory: '{path}'"))
        if isinstance(value, BaseException):
            raise value
        return list(value)

    def compute_directory_size(self, path: str, *, cancel_event: Event | None = None) -> FolderSize:
        self.size_calls.append(path)
        self.cancel_events[path] = cancel_event
        value = self.sizes.get(path, SizingError(f"Permission denied: '{path}'"))
        if isinstance(value, BaseException):
            raise value
        return value


def directory(path: str, name: str | None = None, *, item_count: int = 0) -> Entry:
    return Entry(name=name or path.rstrip("\\/").rsplit("\\", 1)[-1].rsplit("/", 1)[-1], path=path, is_dir=True, item_count=item_count)


def file(path: str, size: int, name: str | None = None) -> Entry:
    return Entry(name=name or path.rsplit("\\", 1)[-1].rsplit("/", 1)[-1], path=path, is_dir=False, size=size)


