"""One-shot in-process scheduler for reminders."""

import threading
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from loguru import logger


@dataclass(eq=False)
class ScheduledReminder:
    """A reminder callback waiting for its time to come."""
    name: str
    run_at: datetime
    callback: Callable[[], None]

    def is_due(self, now: Optional[datetime] = None) -> bool:
        """Check whether the run time has been reached."""
        if now is None:
            now = datetime.now(self.run_at.tzinfo)
        return now >= self.run_at


class ReminderScheduler:
    """
    Scheduler that fires one-shot reminder callbacks at a given time.

    Uses a background thread to check for due reminders. Nothing is persisted:
    a reminder whose process exits before its time never fires.
    """

    CHECK_INTERVAL = 0.25  # seconds

    def __init__(self, check_interval: Optional[float] = None):
        self.check_interval = check_interval or self.CHECK_INTERVAL
        self.pending: List[ScheduledReminder] = []
        self._running = False
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        self._workers: List[threading.Thread] = []

    def add_reminder(
        self,
        name: str,
        run_at: datetime,
        callback: Callable[[], None]
    ) -> ScheduledReminder:
        """
        Add a one-shot reminder to the scheduler.

        Args:
            name: Label used in logs and status output
            run_at: When the callback should run
            callback: Zero-argument function to call once the time is reached
        """
        if not isinstance(run_at, datetime):
            raise TypeError(f"run_at must be a datetime, got {type(run_at).__name__}")

        scheduled = ScheduledReminder(name=name, run_at=run_at, callback=callback)
        with self._lock:
            self.pending.append(scheduled)

        logger.debug(f"Scheduled reminder '{name}' for {run_at.isoformat()}")
        return scheduled

    def has_pending(self) -> bool:
        """Return True while any reminder is still waiting to fire."""
        with self._lock:
            return bool(self.pending)

    def start(self) -> None:
        """Start the scheduler background thread."""
        if self._running:
            return

        self._running = True
        self._thread = threading.Thread(target=self._run_loop, daemon=True)
        self._thread.start()
        logger.debug("Scheduler started")

    def stop(self) -> None:
        """Stop the scheduler."""
        self._running = False
        if self._thread:
            self._thread.join(timeout=2.0)
            self._thread = None
        logger.debug("Scheduler stopped")

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until every pending reminder has fired and its callback returned.

        Returns:
            True when idle, False if the timeout ran out first
        """
        deadline = None if timeout is None else time.monotonic() + timeout

        while self.has_pending():
            if deadline is not None and time.monotonic() >= deadline:
                return False
            time.sleep(self.check_interval)

        with self._lock:
            workers = list(self._workers)
        for worker in workers:
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            worker.join(remaining)
            if worker.is_alive():
                return False
        return True

    def _run_loop(self) -> None:
        """Main scheduler loop."""
        while self._running:
            self._fire_due()
            time.sleep(self.check_interval)

    def _fire_due(self) -> None:
        """Start a callback thread for every due reminder and drop it from pending."""
        with self._lock:
            due = [r for r in self.pending if r.is_due()]
            if not due:
                return
            self.pending = [r for r in self.pending if r not in due]
            self._workers = [w for w in self._workers if w.is_alive()]

            for reminder in due:
                logger.debug(f"Firing reminder '{reminder.name}'")
                # Run the callback in its own thread so a slow one does not delay the others
                worker = threading.Thread(
                    target=self._run_callback,
                    args=(reminder,),
                    daemon=True
                )
                self._workers.append(worker)
                worker.start()

    @staticmethod
    def _run_callback(reminder: ScheduledReminder) -> None:
        try:
            reminder.callback()
        except Exception:
            logger.exception(f"Reminder callback '{reminder.name}' failed")

    def get_status(self) -> List[dict]:
        """Get the status of all pending reminders."""
        with self._lock:
            return [
                {
                    "name": reminder.name,
                    "run_at": reminder.run_at.isoformat(),
                    "due": reminder.is_due(),
                }
                for reminder in self.pending
            ]
