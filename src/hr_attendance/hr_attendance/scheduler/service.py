from __future__ import annotations

import logging
import threading
from datetime import datetime, time, timedelta
from typing import Callable, Optional

import pytz

from ..core.constants import DEFAULT_SWEEP_HOUR, DEFAULT_SWEEP_MINUTE, DEFAULT_TIMEZONE

logger = logging.getLogger(__name__)


class DailyScheduler:
    """Runs one registered task once a day at a fixed local wall-clock time.

    The task runs on a daemon thread, apart from request handling. An error in
    one run is logged and the next day's run is still scheduled.
    """

    def __init__(
        self,
        task: Callable[[], object],
        *,
        hour: int = DEFAULT_SWEEP_HOUR,
        minute: int = DEFAULT_SWEEP_MINUTE,
        tz_name: str = DEFAULT_TIMEZONE,
        name: str = "daily-task",
    ):
        self._task = task
        self._at = time(hour=int(hour), minute=int(minute))
        self._tz = pytz.timezone(tz_name)
        self._name = name
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def next_run_after(self, now: datetime) -> datetime:
        """Next trigger strictly after now, as an aware datetime in the scheduler zone."""
        now = self._tz.localize(now) if now.tzinfo is None else now.astimezone(self._tz)
        candidate = self._tz.localize(datetime.combine(now.date(), self._at))
        if candidate <= now:
            candidate = self._tz.localize(datetime.combine(now.date() + timedelta(days=1), self._at))
        return candidate

    def run_once(self) -> None:
        logger.info("Running scheduled task %s", self._name)
        try:
            self._task()
        except Exception:
            logger.exception("Scheduled task %s failed", self._name)

    def _loop(self) -> None:
        while not self._stop.is_set():
            now = datetime.now(self._tz)
            due = self.next_run_after(now)
            logger.info("Next %s run at %s", self._name, due.isoformat())
            if self._stop.wait(timeout=(due - now).total_seconds()):
                break
            self.run_once()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name=self._name, daemon=True)
        self._thread.start()
        logger.info("Scheduled %s daily at %s %s", self._name, self._at.strftime("%H:%M"), self._tz.zone)

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None
