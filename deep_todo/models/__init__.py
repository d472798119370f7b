"""Models for the Deep To-Do client."""

from .config import ClientConfig
from .task import Task, TaskPriority, TaskStats, TaskStatus, UndoSnapshot

__all__ = [
    'ClientConfig',
    'Task',
    'TaskPriority',
    'TaskStats',
    'TaskStatus',
    'UndoSnapshot',
]
