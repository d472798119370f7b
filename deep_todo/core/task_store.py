"""In-memory task store with optimistic removal support."""
import logging
import uuid
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Iterator, List, Optional

from deep_todo.models.task import Task

logger = logging.getLogger(__name__)

ChangeListener = Callable[[List[Task]], None]


@dataclass
class PendingOperation:
    """An optimistic removal that the server has not confirmed yet."""
    op_id: str
    task: Task  # The removed record
    index: int  # Position the record had before removal


class TaskStore:
    """Ordered collection of the tasks currently known to the client.

    Task ids are unique within the store. Removals made ahead of the server
    round trip are kept in a pending-operations log so they can be undone
    when the server call fails. Listeners only hear about a removal once it
    is committed; a rolled back removal never reaches them.
    """

    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        """Initialize the store.

        Args:
            tasks: Optional initial tasks, in order
        """
        self._tasks: List[Task] = []
        self._pending: Dict[str, PendingOperation] = {}
        self._listeners: List[ChangeListener] = []
        if tasks:
            self.replace_all(tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    def __contains__(self, task_id: object) -> bool:
        return self._index_of(task_id) is not None

    @property
    def tasks(self) -> List[Task]:
        """Snapshot of the tasks, in order."""
        return list(self._tasks)

    @property
    def pending_operations(self) -> List[PendingOperation]:
        """Removals waiting for server confirmation."""
        return list(self._pending.values())

    def subscribe(self, listener: ChangeListener) -> None:
        """Register a callback run with the task list after every change."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        snapshot = self.tasks
        for listener in self._listeners:
            listener(snapshot)

    def _index_of(self, task_id: object) -> Optional[int]:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return None

    def get(self, task_id: str) -> Optional[Task]:
        """Get a task by ID."""
        index = self._index_of(task_id)
        return self._tasks[index] if index is not None else None

    def find_by_prefix(self, prefix: str) -> List[Task]:
        """Get all tasks whose ID starts with the given prefix."""
        return [task for task in self._tasks if task.id.startswith(prefix)]

    def add(self, task: Task) -> None:
        """Append a task created on the server.

        A task whose ID is already present replaces the existing entry in
        place, so the latest server response wins.
        """
        index = self._index_of(task.id)
        if index is None:
            self._tasks.append(task)
        else:
            logger.debug(f"Task {task.id} already in store, replacing it")
            self._tasks[index] = task
        self._notify()

    def replace(self, task: Task) -> bool:
        """Replace the task with the same ID by the given record.

        Returns:
            True if a task was replaced, False if the ID is unknown
        """
        index = self._index_of(task.id)
        if index is None:
            logger.debug(f"Ignoring update for unknown task {task.id}")
            return False
        self._tasks[index] = task
        self._notify()
        return True

    def replace_all(self, tasks: Iterable[Task]) -> None:
        """Replace the whole collection, e.g. after a full refresh."""
        by_id: Dict[str, Task] = {}
        for task in tasks:
            if task.id in by_id:
                logger.warning(f"Duplicate task id {task.id} in refresh, keeping the last record")
            by_id[task.id] = task
        self._tasks = list(by_id.values())
        self._pending.clear()
        self._notify()

    def begin_removal(self, task_id: str) -> Optional[PendingOperation]:
        """Remove a task ahead of server confirmation.

        Returns:
            The pending operation, or None if the task is not in the store
        """
        index = self._index_of(task_id)
        if index is None:
            return None
        task = self._tasks.pop(index)
        operation = PendingOperation(op_id=uuid.uuid4().hex, task=task, index=index)
        self._pending[operation.op_id] = operation
        return operation

    def commit(self, op_id: str) -> None:
        """Forget a pending removal once the server confirmed it."""
        if self._pending.pop(op_id, None) is not None:
            self._notify()

    def rollback(self, op_id: str) -> bool:
        """Put a pending removal's task back where it was.

        Returns:
            True if the task was restored
        """
        operation = self._pending.pop(op_id, None)
        if operation is None:
            return False
        if operation.task.id in self:
            # A refresh already brought it back
            return False
        index = min(operation.index, len(self._tasks))
        self._tasks.insert(index, operation.task)
        logger.info(f"Rolled back removal of task {operation.task.id}")
        return True

    def clear(self) -> None:
        """Drop all tasks and pending operations."""
        self._tasks = []
        self._pending.clear()
        self._notify()
