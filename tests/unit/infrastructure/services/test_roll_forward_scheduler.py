from __future__ import annotations

import asyncio

import pytest
from apscheduler.events import (
    EVENT_JOB_ERROR,
    EVENT_JOB_MAX_INSTANCES,
    JobExecutionEvent,
    JobSubmissionEvent,
)
from apscheduler.triggers.interval import IntervalTrigger

from src.domain.entities.errors import CycleAbortedError
from src.infrastructure.services.roll_forward_scheduler import (
    JOB_ID,
    RollForwardScheduler,
)


class _StubRollForward:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.calls = 0

    async def execute(self):
        self.calls += 1
        if self.fail:
            raise CycleAbortedError(self.calls, "engine exploded")
        return self.calls


class _SlowRollForward:
    def __init__(self) -> None:
        self.active = 0
        self.max_active = 0
        self.calls = 0

    async def execute(self):
        self.calls += 1
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            await asyncio.sleep(0.1)
        finally:
            self.active -= 1


@pytest.mark.asyncio
async def test_disabled_scheduler_does_not_start() -> None:
    scheduler = RollForwardScheduler(_StubRollForward(), interval_seconds=0)

    assert scheduler.start() is False
    assert scheduler.running is False
    await scheduler.stop()


@pytest.mark.asyncio
async def test_build_scheduler_registers_single_instance_interval_job() -> None:
    scheduler = RollForwardScheduler(_StubRollForward(), interval_seconds=5)

    aps = scheduler.build_scheduler()
    jobs = aps.get_jobs()

    assert [job.id for job in jobs] == [JOB_ID]
    assert isinstance(jobs[0].trigger, IntervalTrigger)
    assert jobs[0].trigger.interval.total_seconds() == 5
    assert jobs[0].max_instances == 1
    assert aps.running is False


@pytest.mark.asyncio
async def test_run_once_reports_outcome() -> None:
    ok = RollForwardScheduler(_StubRollForward(), interval_seconds=1)
    failing = RollForwardScheduler(_StubRollForward(fail=True), interval_seconds=1)

    assert await ok.run_once() is True
    assert await failing.run_once() is False
    assert failing.failed == 1
    assert failing.dispatched == 1
    assert failing.last_run_at is not None


@pytest.mark.asyncio
async def test_scheduler_keeps_running_after_failures() -> None:
    roll_forward = _StubRollForward(fail=True)
    scheduler = RollForwardScheduler(roll_forward, interval_seconds=0.02)

    assert scheduler.start() is True
    assert scheduler.start() is False
    await asyncio.sleep(0.3)
    assert scheduler.running is True
    await scheduler.stop()

    assert roll_forward.calls >= 2
    assert scheduler.failed == roll_forward.calls
    assert scheduler.running is False


@pytest.mark.asyncio
async def test_slow_cycles_never_overlap() -> None:
    roll_forward = _SlowRollForward()
    scheduler = RollForwardScheduler(roll_forward, interval_seconds=0.02)

    scheduler.start()
    await asyncio.sleep(0.35)
    await scheduler.stop()

    assert roll_forward.calls >= 1
    assert roll_forward.max_active == 1


def test_job_events_are_counted() -> None:
    scheduler = RollForwardScheduler(_StubRollForward(), interval_seconds=1)

    scheduler._on_job_event(
        JobSubmissionEvent(EVENT_JOB_MAX_INSTANCES, JOB_ID, "default", [])
    )
    scheduler._on_job_event(
        JobExecutionEvent(
            EVENT_JOB_ERROR, JOB_ID, "default", None, exception=RuntimeError("boom")
        )
    )

    assert scheduler.skipped == 1
    assert scheduler.failed == 1
