"""Scheduled delivery of expiry reminders."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime, time

from .reminders import Reminder, plan

logger = logging.getLogger(__name__)

_REFRESH_JOB_ID = "refresh_reminders"


def log_reminder(reminder: Reminder) -> None:
    logger.info("%s: %s", reminder.title, reminder.message)


class ReminderScheduler:
    """Fires reminder descriptors at their scheduled time.

    Uses APScheduler date triggers for the reminders and a cron trigger to
    rebuild them from the saved history.
    """

    def __init__(
        self,
        config,
        deliver: Callable[[Reminder], None] | None = None,
    ) -> None:
        """Initialize scheduler with an EggLabelConfig.

        Args:
            config: EggLabelConfig instance.
            deliver: Called with each reminder when it fires. Logs by default.

        Raises:
            ImportError: If apscheduler is not installed.
        """
        try:
            from apscheduler.schedulers.asyncio import AsyncIOScheduler
            from apscheduler.triggers.cron import CronTrigger
            from apscheduler.triggers.date import DateTrigger
        except ImportError:
            raise ImportError(
                "apscheduler is required: pip install 'apscheduler>=3.10,<4'"
            )

        self._config = config
        self._deliver = deliver or log_reminder
        self._scheduler = AsyncIOScheduler()
        self._CronTrigger = CronTrigger
        self._DateTrigger = DateTrigger
        self._running = False

    def setup_jobs(self) -> None:
        """Register the periodic reminder refresh job."""
        schedule = self._config.reminders.refresh_schedule
        self._scheduler.add_job(
            self._job_refresh,
            trigger=self._parse_cron(schedule),
            id=_REFRESH_JOB_ID,
            name="Refresh expiry reminders",
            replace_existing=True,
        )
        logger.info("Registered reminder refresh job: %s", schedule)

    def sync(self, reminders: Iterable[Reminder], now: datetime | None = None) -> int:
        """Replace all scheduled reminders with ``reminders``.

        Reminders whose fire time has already passed are skipped.

        Returns:
            Number of reminders scheduled.
        """
        now = now or datetime.now()
        for job in self._scheduler.get_jobs():
            if job.id != _REFRESH_JOB_ID:
                self._scheduler.remove_job(job.id)

        count = 0
        for reminder in reminders:
            if reminder.fire_at <= now:
                logger.debug("Skipping past reminder %s", reminder.identifier)
                continue
            self._scheduler.add_job(
                self._deliver,
                trigger=self._DateTrigger(run_date=reminder.fire_at),
                args=[reminder],
                id=reminder.identifier,
                name=reminder.message,
                replace_existing=True,
            )
            count += 1
        logger.info("Scheduled %d expiry reminders", count)
        return count

    def start(self) -> None:
        """Start the scheduler."""
        self.setup_jobs()
        self._scheduler.start()
        self._running = True
        logger.info("Scheduler started")

    def stop(self) -> None:
        """Stop the scheduler."""
        if self._running:
            self._scheduler.shutdown(wait=False)
            self._running = False
            logger.info("Scheduler stopped")

    @property
    def running(self) -> bool:
        return self._running

    def get_jobs(self) -> list[dict]:
        """Return info about scheduled jobs."""
        jobs = []
        for job in self._scheduler.get_jobs():
            # Jobs added before start() have no next_run_time yet
            next_run = getattr(job, "next_run_time", None)
            jobs.append({
                "id": job.id,
                "name": job.name,
                "next_run": str(next_run) if next_run else None,
            })
        return jobs

    def _parse_cron(self, expr: str):
        """Parse a cron expression into a CronTrigger."""
        parts = expr.split()
        if len(parts) == 5:
            return self._CronTrigger(
                minute=parts[0],
                hour=parts[1],
                day=parts[2],
                month=parts[3],
                day_of_week=parts[4],
            )
        raise ValueError(f"Invalid cron expression: {expr}")

    def refresh(self, now: datetime | None = None) -> int:
        """Reload the saved history and reschedule its reminders."""
        from .db import HistoryDB

        now = now or datetime.now()
        db = HistoryDB(self._config.database.path)
        try:
            store = db.load_store()
        finally:
            db.close()

        reminders = plan(
            store.all(),
            now,
            lookahead_days=self._config.reminders.lookahead_days,
            at=time(self._config.reminders.hour, 0),
        )
        return self.sync(reminders, now)

    async def _job_refresh(self) -> None:
        logger.info("Refreshing expiry reminders...")
        try:
            self.refresh()
        except Exception:
            logger.exception("Reminder refresh failed")
