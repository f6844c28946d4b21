"""Periodic trigger for roll-forward cycles, backed by APScheduler."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Optional

import structlog
from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_MAX_INSTANCES, JobEvent
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from src.application.use_cases.roll_forward_use_case import RollForwardUseCase
from src.domain.entities.errors import CycleAbortedError

logger = structlog.get_logger(__name__)

JOB_ID = "roll_forward"


class RollForwardScheduler:
    """Runs a roll-forward cycle every ``interval_seconds`` on the event loop.

    The job is registered with ``max_instances=1`` so a slow cycle never
    overlaps the next tick. A failed cycle is logged and the schedule keeps
    going. An interval of zero or less disables the scheduler entirely.
    """

    def __init__(
        self, roll_forward: RollForwardUseCase, interval_seconds: float = 0.0
    ) -> None:
        self._roll_forward = roll_forward
        self.interval_seconds = interval_seconds
        self._scheduler: Optional[AsyncIOScheduler] = None
        self.dispatched = 0
        self.failed = 0
        self.skipped = 0
        self.last_run_at: Optional[datetime] = None

    @property
    def enabled(self) -> bool:
        return self.interval_seconds > 0

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def build_scheduler(self) -> AsyncIOScheduler:
        """Build the APScheduler instance with the roll-forward job registered.

        The returned scheduler is bound to the running event loop and is
        not started yet.
        """
        scheduler = AsyncIOScheduler(
            event_loop=asyncio.get_running_loop(), timezone="UTC"
        )
        scheduler.add_job(
            self.run_once,
            trigger=IntervalTrigger(seconds=self.interval_seconds),
            id=JOB_ID,
            name="Roll-forward cycle",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        scheduler.add_listener(
            self._on_job_event, EVENT_JOB_ERROR | EVENT_JOB_MAX_INSTANCES
        )
        return scheduler

    def start(self) -> bool:
        if not self.enabled:
            logger.info("roll_forward.scheduler.disabled")
            return False
        if self.running:
            return False
        self._scheduler = self.build_scheduler()
        self._scheduler.start()
        logger.info(
            "roll_forward.scheduler.started",
            interval_seconds=self.interval_seconds,
            jobs=len(self._scheduler.get_jobs()),
        )
        return True

    async def stop(self) -> None:
        if self._scheduler is None:
            return
        if self._scheduler.running:
            # Pending cycles are cancelled; their staged changes are discarded.
            self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.info(
            "roll_forward.scheduler.stopped",
            dispatched=self.dispatched,
            failed=self.failed,
            skipped=self.skipped,
        )

    async def run_once(self) -> bool:
        """Run a single cycle and report whether it completed."""
        self.last_run_at = datetime.now(timezone.utc)
        self.dispatched += 1
        try:
            await self._roll_forward.execute()
        except CycleAbortedError as exc:
            self.failed += 1
            logger.warning(
                "roll_forward.scheduler.cycle_failed",
                cycle=exc.cycle,
                error=exc.message,
            )
            return False
        return True

    def _on_job_event(self, event: JobEvent) -> None:
        if event.code == EVENT_JOB_MAX_INSTANCES:
            self.skipped += 1
            logger.info("roll_forward.scheduler.tick_skipped", reason="cycle_running")
            return
        self.failed += 1
        logger.error(
            "roll_forward.scheduler.failed",
            error=str(event.exception),
            exc_info=event.exception,
        )
