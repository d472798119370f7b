"""Tests for UndoBuffer."""
from datetime import datetime

from deep_todo.core.undo_buffer import UndoBuffer
from deep_todo.models.task import UndoSnapshot


class TestUndoBuffer:
    """Test cases for UndoBuffer."""

    def test_starts_empty(self):
        """Test a new buffer has nothing to undo."""
        buffer = UndoBuffer()
        assert not buffer
        assert buffer.peek() is None

    def test_capture(self, make_task):
        """Test capturing a deleted task."""
        buffer = UndoBuffer()
        due = datetime(2025, 6, 1, 9, 0)

        previous = buffer.capture(make_task(text="Buy milk", due_date=due, category="errands"))

        assert previous is None
        assert buffer
        assert buffer.peek() == UndoSnapshot(text="Buy milk", due_date=due, category="errands")

    def test_capture_overwrites(self, make_task):
        """Test that only the most recent deletion is kept."""
        buffer = UndoBuffer()
        buffer.capture(make_task(text="First"))

        previous = buffer.capture(make_task(text="Second"))

        assert previous.text == "First"
        assert buffer.peek().text == "Second"

    def test_put_reverts_capture(self, make_task):
        """Test putting a previous snapshot back."""
        buffer = UndoBuffer()
        buffer.capture(make_task(text="First"))
        previous = buffer.capture(make_task(text="Second"))

        buffer.put(previous)
        assert buffer.peek().text == "First"

    def test_clear(self, make_task):
        """Test clearing the slot."""
        buffer = UndoBuffer()
        buffer.capture(make_task())
        buffer.clear()
        assert not buffer
