"""Coordinates the task service with the local task state."""
import logging
from datetime import datetime
from typing import List, Optional, Union

from deep_todo.core.filters import TaskFilter
from deep_todo.core.reminders import ReminderCheck
from deep_todo.core.task_store import TaskStore
from deep_todo.core.undo_buffer import UndoBuffer
from deep_todo.models.task import Task, TaskPriority, TaskStats, TaskStatus, UndoSnapshot
from deep_todo.services.exceptions import ServiceError, TaskNotFoundError

logger = logging.getLogger(__name__)


class TaskManager:
    """Runs task operations against the service and reconciles the results.

    Every mutation refreshes the stats snapshot afterwards with a separate
    request, so the stats can briefly lag behind the task list. If that
    request fails the previous snapshot is kept.
    """

    def __init__(self, api,
                 store: Optional[TaskStore] = None,
                 undo_buffer: Optional[UndoBuffer] = None,
                 reminders: Optional[ReminderCheck] = None):
        """Initialize the manager.

        Args:
            api: A TaskApiService (or compatible) bound to the session token
            store: Task store to reconcile into
            undo_buffer: Slot for the last deleted task
            reminders: Reminder check run on every store change
        """
        self.api = api
        self.store = store if store is not None else TaskStore()
        self.undo_buffer = undo_buffer if undo_buffer is not None else UndoBuffer()
        self.reminders = reminders
        self.stats = TaskStats()
        if reminders is not None:
            self.store.subscribe(reminders.scan)

    @property
    def tasks(self) -> List[Task]:
        return self.store.tasks

    def visible_tasks(self, task_filter: Optional[TaskFilter] = None) -> List[Task]:
        """Tasks matching the filter, without touching the store."""
        if task_filter is None:
            return self.store.tasks
        return task_filter.apply(self.store)

    def refresh(self) -> List[Task]:
        """Replace the local task list and stats with the server's."""
        tasks = self.api.list_tasks()
        self.store.replace_all(tasks)
        self.refresh_stats()
        logger.debug(f"Loaded {len(tasks)} task(s)")
        return self.store.tasks

    def refresh_stats(self) -> TaskStats:
        """Replace the stats snapshot."""
        self.stats = self.api.get_stats()
        return self.stats

    def _settle_stats(self) -> None:
        """Refresh stats after a mutation the server already applied.

        A failure here keeps the previous snapshot instead of failing the
        finished operation.
        """
        try:
            self.refresh_stats()
        except ServiceError as e:
            logger.warning(f"Could not refresh stats, keeping the previous snapshot: {e}")

    def _require(self, task_id: str) -> Task:
        task = self.store.get(task_id)
        if task is None:
            raise TaskNotFoundError(f"Task {task_id} is not in the task list")
        return task

    def create_task(self, text: str,
                    due_date: Optional[datetime] = None,
                    category: Optional[str] = None) -> Task:
        """Create a task and append it to the store.

        Raises:
            ValueError: If the text is empty
        """
        text = text.strip() if text else ""
        if not text:
            raise ValueError("Task text cannot be empty")
        category = category.strip() if category else None
        task = self.api.create_task(text, due_date, category or None)
        self.store.add(task)
        self._settle_stats()
        return task

    def update_task(self, task_id: str, **fields) -> Task:
        """Send a partial update and replace the local record with the result."""
        updated = self.api.update_task(task_id, fields)
        self.store.replace(updated)
        self._settle_stats()
        return updated

    def toggle_status(self, task_id: str) -> Task:
        """Flip a task between pending and completed."""
        task = self._require(task_id)
        return self.update_task(task_id, status=task.status.toggled())

    def set_status(self, task_id: str, status: Union[str, TaskStatus]) -> Task:
        return self.update_task(task_id, status=TaskStatus(status))

    def set_priority(self, task_id: str, priority: Union[str, TaskPriority]) -> Task:
        return self.update_task(task_id, priority=TaskPriority(priority))

    def delete_task(self, task_id: str) -> Optional[UndoSnapshot]:
        """Delete a task, removing it locally before the server answers.

        The removed task becomes the undo snapshot. If the server call
        fails the task goes back to its old position, the undo slot gets
        its previous content back and the error is re-raised.

        Returns:
            The undo snapshot, or None if the task was not in the store
        """
        operation = self.store.begin_removal(task_id)
        if operation is None:
            # Nothing to remove locally; still ask the server
            self.api.delete_task(task_id)
            self._settle_stats()
            return None

        previous = self.undo_buffer.capture(operation.task)
        try:
            self.api.delete_task(task_id)
        except ServiceError:
            self.store.rollback(operation.op_id)
            self.undo_buffer.put(previous)
            logger.warning(f"Delete of task {task_id} failed, restored it")
            raise
        self.store.commit(operation.op_id)
        self._settle_stats()
        return self.undo_buffer.peek()

    def undo_delete(self) -> Optional[Task]:
        """Re-create the last deleted task.

        The new task has a new ID and default status and priority. The undo
        slot is only cleared once the task was created.

        Returns:
            The re-created task, or None if there was nothing to undo
        """
        snapshot = self.undo_buffer.peek()
        if snapshot is None:
            return None
        task = self.create_task(snapshot.text, snapshot.due_date, snapshot.category)
        self.undo_buffer.clear()
        return task

    def clear(self) -> None:
        """Drop all local state, e.g. on logout."""
        self.store.clear()
        self.undo_buffer.clear()
        self.stats = TaskStats()
        if self.reminders is not None:
            self.reminders.reset()
