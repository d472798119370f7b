"""Due-date reminders for pending tasks."""
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable, List, Optional, Set

from deep_todo.core.constants import DEFAULT_REMINDER_HORIZON_MINUTES, REMINDER_MESSAGE
from deep_todo.models.task import Task

logger = logging.getLogger(__name__)

Notifier = Callable[[str, List[Task]], None]


def _as_aware(moment: datetime) -> datetime:
    """Treat naive datetimes as local time."""
    if moment.tzinfo is None:
        return moment.astimezone()
    return moment


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def describe_horizon(horizon: timedelta) -> str:
    """Human readable horizon, e.g. 'hour' or '30 minutes'."""
    minutes = int(horizon.total_seconds() // 60)
    if minutes == 60:
        return "hour"
    if minutes % 60 == 0:
        return f"{minutes // 60} hours"
    if minutes == 1:
        return "minute"
    return f"{minutes} minutes"


class ReminderCheck:
    """Flags pending tasks that fall due within a fixed horizon.

    A task is reported once while it stays due soon. It leaves the notified
    set when it is completed, removed, or its due date passes, and is
    reported again only if it becomes due soon again afterwards.
    """

    def __init__(self,
                 horizon: timedelta = timedelta(minutes=DEFAULT_REMINDER_HORIZON_MINUTES),
                 notify: Optional[Notifier] = None,
                 clock: Callable[[], datetime] = _utc_now):
        """Initialize the reminder check.

        Args:
            horizon: How far ahead a due date counts as due soon
            notify: Called with the message and the newly due tasks
            clock: Source of the current (timezone aware) time
        """
        self.horizon = horizon
        self.notify = notify
        self._clock = clock
        self._notified: Set[str] = set()

    @property
    def message(self) -> str:
        return REMINDER_MESSAGE.format(window=describe_horizon(self.horizon))

    @property
    def notified_ids(self) -> Set[str]:
        return set(self._notified)

    def due_soon(self, tasks: Iterable[Task], now: Optional[datetime] = None) -> List[Task]:
        """Pending tasks whose due date lies between now and now + horizon."""
        now = now or self._clock()
        deadline = now + self.horizon
        return [
            task for task in tasks
            if task.is_pending and task.due_date is not None
            and now <= _as_aware(task.due_date) <= deadline
        ]

    def scan(self, tasks: Iterable[Task]) -> List[Task]:
        """Check the tasks and notify about ones not reported yet.

        Returns:
            Tasks reported by this scan
        """
        due = self.due_soon(tasks)
        due_ids = {task.id for task in due}
        # Completed, removed and overdue tasks become eligible again
        self._notified &= due_ids

        fresh = [task for task in due if task.id not in self._notified]
        if not fresh:
            return []

        self._notified.update(task.id for task in fresh)
        logger.info(f"{len(fresh)} task(s) due within {describe_horizon(self.horizon)}")
        if self.notify is not None:
            self.notify(self.message, fresh)
        return fresh

    def reset(self) -> None:
        """Forget which tasks were already reported."""
        self._notified.clear()
