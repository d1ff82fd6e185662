"""Cooperative scheduler tests."""

from __future__ import annotations

import pytest
from validation_report_engine.result_filtering import CooperativeScheduler


def test_tasks_run_in_due_order_when_clock_advances() -> None:
    scheduler = CooperativeScheduler()
    calls: list[str] = []
    scheduler.schedule(200, lambda: calls.append("late"))
    scheduler.schedule(100, lambda: calls.append("early"))
    scheduler.schedule(100, lambda: calls.append("early-second"))

    executed = scheduler.advance(150)

    assert executed == 2
    assert calls == ["early", "early-second"]
    assert scheduler.now_ms == 150
    assert scheduler.pending_count() == 1


def test_cancelled_tasks_never_run() -> None:
    scheduler = CooperativeScheduler()
    calls: list[str] = []
    task = scheduler.schedule(10, lambda: calls.append("cancelled"))
    task.cancel()

    assert scheduler.pending_count() == 0
    assert scheduler.advance(100) == 0
    assert calls == []


def test_run_pending_drains_the_queue() -> None:
    scheduler = CooperativeScheduler()
    calls: list[int] = []
    scheduler.schedule(300, lambda: calls.append(1))
    scheduler.schedule(50, lambda: calls.append(2))

    assert scheduler.run_pending() == 2
    assert calls == [2, 1]
    assert scheduler.now_ms == 300
    assert scheduler.run_pending() == 0


def test_task_scheduled_from_callback_runs_when_due() -> None:
    scheduler = CooperativeScheduler()
    calls: list[str] = []
    scheduler.schedule(10, lambda: scheduler.schedule(10, lambda: calls.append("nested")))

    scheduler.advance(15)
    assert calls == []
    scheduler.advance(5)
    assert calls == ["nested"]


def test_negative_delays_are_rejected() -> None:
    scheduler = CooperativeScheduler()

    with pytest.raises(ValueError):
        scheduler.schedule(-1, lambda: None)
    with pytest.raises(ValueError):
        scheduler.advance(-1)
