"""
Background scheduler for polling the inbox file.
Uses APScheduler for periodic tasks.
"""
import atexit
import logging
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

import config

log = logging.getLogger(__name__)


class AutomationScheduler:
    """Manages the background inbox polling job."""

    def __init__(self):
        self.scheduler = BackgroundScheduler()
        self._started = False

    @property
    def running(self) -> bool:
        return self._started

    def start(self, poll_func, enabled: Optional[bool] = None, interval_seconds: Optional[int] = None):
        """Start polling with the given function. Does nothing unless auto-ingest is enabled."""
        if self._started:
            return
        enabled = config.AUTO_INGEST_ENABLED if enabled is None else enabled
        interval_seconds = interval_seconds or config.POLL_INTERVAL_SECONDS

        if not enabled:
            log.info('[Scheduler] Auto-ingest disabled (set AUTO_INGEST=true to enable)')
            return

        self.scheduler.add_job(
            func=poll_func,
            trigger=IntervalTrigger(seconds=interval_seconds),
            id='inbox_poller',
            name='Poll inbox file',
            replace_existing=True
        )
        self.scheduler.start()
        self._started = True
        log.info('[Scheduler] Polling inbox every %ss', interval_seconds)

        # Shut down scheduler when app exits
        atexit.register(self.shutdown)

    def shutdown(self):
        if not self._started:
            return
        self.scheduler.shutdown(wait=False)
        self._started = False
        log.info('[Scheduler] Stopped')

    def get_jobs_status(self) -> list:
        """Next run time per job, for /api/status."""
        return [{'id': job.id, 'next_run': str(getattr(job, 'next_run_time', None) or 'paused')}
                for job in self.scheduler.get_jobs()]


# Singleton instance
automation_scheduler = AutomationScheduler()
