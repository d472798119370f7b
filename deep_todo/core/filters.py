"""Status and priority filtering of task lists."""
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Type, Union

from deep_todo.core.constants import FILTER_ALL
from deep_todo.models.task import Task, TaskPriority, TaskStatus

STATUS_CHOICES = [FILTER_ALL] + [s.value for s in TaskStatus]
PRIORITY_CHOICES = [FILTER_ALL] + [p.value for p in TaskPriority]


def _normalize(value: Union[str, Enum, None], enum_cls: Type[Enum]) -> Optional[Enum]:
    """Map a filter value to its enum member, or None for 'all'."""
    if value is None or value == FILTER_ALL:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        raise ValueError(f"Invalid {enum_cls.__name__} filter: {value!r}")


def filter_tasks(tasks: Iterable[Task],
                 status: Union[str, TaskStatus] = FILTER_ALL,
                 priority: Union[str, TaskPriority] = FILTER_ALL) -> List[Task]:
    """Return the tasks matching both filters, in their original order.

    Args:
        tasks: Tasks to filter
        status: 'all' or a task status
        priority: 'all' or a task priority

    Raises:
        ValueError: If a filter value is not 'all' or a known value
    """
    wanted_status = _normalize(status, TaskStatus)
    wanted_priority = _normalize(priority, TaskPriority)
    return [
        task for task in tasks
        if (wanted_status is None or task.status == wanted_status)
        and (wanted_priority is None or task.priority == wanted_priority)
    ]


@dataclass
class TaskFilter:
    """Current filter selection of a view."""
    status: str = FILTER_ALL
    priority: str = FILTER_ALL

    def __post_init__(self):
        # Validate early so a bad value never reaches a render
        status = _normalize(self.status, TaskStatus)
        priority = _normalize(self.priority, TaskPriority)
        self.status = status.value if status else FILTER_ALL
        self.priority = priority.value if priority else FILTER_ALL

    def apply(self, tasks: Iterable[Task]) -> List[Task]:
        return filter_tasks(tasks, self.status, self.priority)

    @property
    def is_default(self) -> bool:
        return self.status == FILTER_ALL and self.priority == FILTER_ALL

    def describe(self) -> str:
        return f"status={self.status}, priority={self.priority}"
