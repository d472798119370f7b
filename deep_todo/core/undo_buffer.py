"""Single-step undo for task deletion."""
from typing import Optional

from deep_todo.models.task import Task, UndoSnapshot


class UndoBuffer:
    """Holds the most recently deleted task, if any.

    Only text, due date and category are kept. Restoring re-creates the task,
    so it gets a new ID and the default status and priority.
    """

    def __init__(self):
        self._snapshot: Optional[UndoSnapshot] = None

    def __bool__(self) -> bool:
        return self._snapshot is not None

    def capture(self, task: Task) -> Optional[UndoSnapshot]:
        """Store a deleted task, overwriting the slot.

        Returns:
            The snapshot that was discarded, if any
        """
        previous = self._snapshot
        self._snapshot = UndoSnapshot.from_task(task)
        return previous

    def peek(self) -> Optional[UndoSnapshot]:
        return self._snapshot

    def put(self, snapshot: Optional[UndoSnapshot]) -> None:
        """Set the slot directly (used to revert a capture)."""
        self._snapshot = snapshot

    def clear(self) -> None:
        self._snapshot = None
