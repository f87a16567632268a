from __future__ import annotations

import threading

from space_analyzer.core.models import FolderSize
from space_analyzer.core.sizing import SizeDispatcher, SizeOutcome
from space_analyzer.fs import SizeCalculationCancelled
from fakes import FakeFilesystem, ManualExecutor


def _dispatcher(fs: FakeFilesystem, executor: ManualExecutor) -> tuple[SizeDispatcher, list[SizeOutcome]]:
    outcomes: list[SizeOutcome] = []
    return SizeDispatcher(fs, executor), outcomes


def test_successful_size_is_delivered_once() -> None:
    fs = FakeFilesystem(sizes={"/r/a": FolderSize(size=42, item_count=3)})
    executor = ManualExecutor()
    dispatcher, outcomes = _dispatcher(fs, executor)

    future = dispatcher.dispatch("/r/a", 7, outcomes.append)
    assert future is not None
    assert outcomes == []

    executor.run("/r/a")

    assert outcomes == [SizeOutcome(path="/r/a", generation=7, result=FolderSize(size=42, item_count=3))]
    assert outcomes[0].succeeded


def test_calculator_error_becomes_failed_outcome() -> None:
    fs = FakeFilesystem()
    executor = ManualExecutor()
    dispatcher, outcomes = _dispatcher(fs, executor)

    dispatcher.dispatch("/r/locked", 1, outcomes.append)
    executor.run_all()

    (outcome,) = outcomes
    assert outcome.result is None
    assert outcome.cancelled is False
    assert "Permission denied" in outcome.error
    assert not outcome.succeeded


def test_error_after_cancellation_is_reported_as_cancelled() -> None:
    fs = FakeFilesystem(sizes={"/r/a": SizeCalculationCancelled()})
    executor = ManualExecutor()
    dispatcher, outcomes = _dispatcher(fs, executor)
    event = threading.Event()

    dispatcher.dispatch("/r/a", 3, outcomes.append, cancel_event=event)
    event.set()
    executor.run("/r/a")

    (outcome,) = outcomes
    assert outcome.cancelled is True
    assert outcome.error == "SizeCalculationCancelled"
    assert fs.cancel_events["/r/a"] is event


def test_closed_pool_reports_cancelled_outcome_immediately() -> None:
    fs = FakeFilesystem()
    executor = ManualExecutor()
    executor.shutdown()
    dispatcher, outcomes = _dispatcher(fs, executor)

    assert dispatcher.dispatch("/r/a", 2, outcomes.append) is None

    (outcome,) = outcomes
    assert outcome.path == "/r/a"
    assert outcome.generation == 2
    assert outcome.cancelled is True
    assert fs.size_calls == []


def test_future_cancelled_before_start_still_completes_callback() -> None:
    fs = FakeFilesystem(sizes={"/r/a": FolderSize(size=1, item_count=1)})
    executor = ManualExecutor()
    dispatcher, outcomes = _dispatcher(fs, executor)

    dispatcher.dispatch("/r/a", 5, outcomes.append)
    executor.shutdown(cancel_futures=True)

    (outcome,) = outcomes
    assert outcome.cancelled is True
    assert outcome.result is None
    assert fs.size_calls == []


def test_each_directory_gets_its_own_job() -> None:
    fs = FakeFilesystem(sizes={path: FolderSize(size=1, item_count=1) for path in ("/a", "/b", "/c")})
    executor = ManualExecutor()
    dispatcher, outcomes = _dispatcher(fs, executor)

    for path in ("/a", "/b", "/c"):
        dispatcher.dispatch(path, 1, outcomes.append)

    assert executor.pending_keys() == ["/a", "/b", "/c"]
    executor.run("/c")
    executor.run("/a")
    executor.run("/b")
    assert [outcome.path for outcome in outcomes] == ["/c", "/a", "/b"]
