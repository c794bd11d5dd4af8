from __future__ import annotations

import threading

from server.stats import RequestStats


def test_initial_state(stats: RequestStats) -> None:
    snap = stats.snapshot()
    assert snap["requests"] == 0
    assert snap["uptime"] == 0
    assert snap["last_request"] is None


def test_record_counts_and_stamps(stats: RequestStats, clock) -> None:
    clock.advance(3)
    assert stats.record() == 1
    clock.advance(2)
    assert stats.record() == 2
    assert stats.last_request == clock.now()
    assert stats.last_request >= stats.start_time
    assert stats.snapshot()["last_request"] == "2026-01-01T12:00:05.000Z"


def test_uptime_floors_elapsed_seconds(stats: RequestStats, clock) -> None:
    clock.advance(0.999)
    assert stats.uptime_seconds() == 0
    clock.advance(60.5)
    assert stats.uptime_seconds() == 61


def test_uptime_never_negative(clock) -> None:
    ticks = iter([100.0, 99.0])
    stats = RequestStats(clock=lambda: next(ticks), now=clock.now)
    assert stats.uptime_seconds() == 0


def test_last_request_not_before_start(clock) -> None:
    stamps = iter([clock.wall, clock.wall.replace(hour=11)])
    stats = RequestStats(clock=clock.monotonic, now=lambda: next(stamps))
    stats.record()
    assert stats.last_request == stats.start_time


def test_concurrent_increments_are_not_lost() -> None:
    stats = RequestStats()
    per_thread = 500
    threads = [threading.Thread(target=lambda: [stats.record() for _ in range(per_thread)]) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert stats.requests == 8 * per_thread


def test_snapshot_reports_start_time(stats: RequestStats) -> None:
    assert stats.snapshot()["start_time"] == "2026-01-01T12:00:00.000Z"
