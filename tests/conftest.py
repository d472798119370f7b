import pytest
from click.testing import CliRunner
from datetime import datetime, timedelta, timezone

from deep_todo.models.task import Task, TaskStats, TaskStatus
from deep_todo.services.exceptions import TaskNotFoundError


class FakeTaskApi:
    """In-memory stand-in for TaskApiService.

    Behaves like the real service: assigns ids, returns full records and
    computes fresh stats on every call.
    """

    def __init__(self, tasks=None):
        self.tasks = list(tasks or [])
        self.calls = []
        self.delete_error = None
        self.closed = False
        self._counter = 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        self.closed = True

    def list_tasks(self):
        self.calls.append(("list_tasks",))
        return list(self.tasks)

    def get_stats(self):
        self.calls.append(("get_stats",))
        completed = sum(1 for t in self.tasks if t.status == TaskStatus.COMPLETED)
        return TaskStats(total=len(self.tasks), completed=completed)

    def create_task(self, text, due_date=None, category=None):
        self.calls.append(("create_task", text, due_date, category))
        self._counter += 1
        task = Task(id=f"{self._counter:04d}{'f' * 20}", text=text,
                    due_date=due_date, category=category)
        self.tasks.append(task)
        return task

    def update_task(self, task_id, fields):
        self.calls.append(("update_task", task_id, dict(fields)))
        for i, task in enumerate(self.tasks):
            if task.id == task_id:
                self.tasks[i] = task.model_copy(update=fields)
                return self.tasks[i]
        raise TaskNotFoundError(f"Not found: {task_id}", status_code=404)

    def delete_task(self, task_id):
        self.calls.append(("delete_task", task_id))
        if self.delete_error is not None:
            raise self.delete_error
        self.tasks = [t for t in self.tasks if t.id != task_id]

    def call_names(self):
        return [call[0] for call in self.calls]


@pytest.fixture
def cli_runner():
    """Provides a Click CLI runner for testing commands."""
    return CliRunner()


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
    """Keep session and config files inside a temporary directory."""
    home = tmp_path / "deep-todo-home"
    monkeypatch.setenv("DEEP_TODO_HOME", str(home))
    monkeypatch.delenv("DEEP_TODO_API_URL", raising=False)
    return home


@pytest.fixture
def make_task():
    """Factory for task records."""
    def _make(task_id="64f0a1b2c3d4e5f601234567", text="Buy milk", **fields):
        return Task(id=task_id, text=text, **fields)
    return _make


@pytest.fixture
def make_api():
    """Factory for fake task services holding the given tasks."""
    return FakeTaskApi


@pytest.fixture
def fake_api():
    """Provides an empty fake task service."""
    return FakeTaskApi()


@pytest.fixture
def fixed_now():
    """A fixed, timezone aware 'now'."""
    return datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def soon(fixed_now):
    """A due date half an hour after fixed_now."""
    return fixed_now + timedelta(minutes=30)
