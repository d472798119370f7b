"""CLI Helper Functions for Deep To-Do.

This module provides reusable helper functions for CLI commands to reduce
code duplication and standardize behavior across all commands.

The helpers provide:
- Session and configuration lookup
- Authentication checks and error reporting
- Task ID resolution with short ID support
- Consistent table formatting for output
"""

import os
import sys
from contextlib import contextmanager
from datetime import datetime, timedelta
from pathlib import Path
from typing import Iterator, List, Optional

import click
from rich.console import Console
from rich.progress_bar import ProgressBar
from tabulate import tabulate

from deep_todo.core.constants import (
    API_URL_ENV_VAR,
    DATA_DIR_ENV_VAR,
    DATA_DIR_NAME,
    EMPTY_LIST_MESSAGE,
    SHORT_ID_LENGTH,
)
from deep_todo.core.reminders import ReminderCheck
from deep_todo.core.task_manager import TaskManager
from deep_todo.models.config import ClientConfig
from deep_todo.models.task import Task, TaskPriority, TaskStats, TaskStatus
from deep_todo.services.api_service import TaskApiService
from deep_todo.services.exceptions import AuthError, NotAuthenticatedError, ServiceError
from deep_todo.utils.config_manager import ConfigManager
from deep_todo.utils.session_manager import SessionManager

DUE_DATE_TYPE = click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M"])

STATUS_COLORS = {
    TaskStatus.PENDING: 'yellow',
    TaskStatus.COMPLETED: 'green',
}

PRIORITY_COLORS = {
    TaskPriority.HIGH: 'red',
    TaskPriority.MEDIUM: 'yellow',
    TaskPriority.LOW: 'green',
}


def get_data_dir() -> Path:
    """Get the directory holding the session and configuration files."""
    override = os.environ.get(DATA_DIR_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / DATA_DIR_NAME


def get_session_manager() -> SessionManager:
    return SessionManager(get_data_dir())


def get_config_manager() -> ConfigManager:
    return ConfigManager(get_data_dir())


def get_client_config() -> ClientConfig:
    """Load client configuration, applying the --api-url override.

    Note:
        Exits with error message if the config file is invalid.
    """
    try:
        config = get_config_manager().get_config()
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    override = None
    ctx = click.get_current_context(silent=True)
    if ctx is not None and isinstance(ctx.find_root().obj, dict):
        override = ctx.find_root().obj.get('api_url')
    override = override or os.environ.get(API_URL_ENV_VAR)
    if override:
        config = config.model_copy(update={'api_url': override})
    return config


def is_interactive() -> bool:
    """Whether the user can answer prompts."""
    return sys.stdin.isatty()


def ensure_authenticated(session: SessionManager) -> str:
    """Return the stored token, exit gracefully when logged out."""
    token = session.get_token()
    if not token:
        click.echo("Not logged in. Please run 'deep-todo login' first.", err=True)
        sys.exit(1)
    return token


def report_error(error: Exception) -> None:
    """Print an error the way all commands do."""
    click.echo(f"Error: {error}", err=True)
    if isinstance(error, (AuthError, NotAuthenticatedError)):
        click.echo("Run 'deep-todo login' to authenticate again.", err=True)


@contextmanager
def handle_service_errors() -> Iterator[None]:
    """Turn service and input errors into a message and exit code 1."""
    try:
        yield
    except (ServiceError, ValueError) as e:
        report_error(e)
        sys.exit(1)


def print_reminder(message: str, tasks: List[Task]) -> None:
    """Show a due-soon notification."""
    click.echo(click.style(f"\n⏰ {message}", fg='yellow', bold=True))
    for task in tasks:
        click.echo(f"   - {task.text} (due {format_due(task.due_date)})")


def create_task_manager(token: str, config: ClientConfig,
                        notify: bool = True) -> TaskManager:
    """Build a TaskManager bound to the given credential."""
    api = TaskApiService(token, base_url=config.base_url, timeout=config.timeout)
    reminders = ReminderCheck(
        horizon=timedelta(minutes=config.reminder_horizon_minutes),
        notify=print_reminder if notify else None,
    )
    return TaskManager(api, reminders=reminders)


@contextmanager
def open_task_manager(refresh: bool = True) -> Iterator[TaskManager]:
    """Yield a TaskManager for the logged-in user.

    Args:
        refresh: Load tasks and stats before yielding

    Note:
        Exits with an error message on any service failure.
    """
    token = ensure_authenticated(get_session_manager())
    config = get_client_config()
    with handle_service_errors():
        manager = create_task_manager(token, config)
        try:
            if refresh:
                manager.refresh()
            yield manager
        finally:
            manager.api.close()


def find_task(manager: TaskManager, task_id: str) -> Task:
    """Find a task by full or partial ID.

    Raises:
        LookupError: If no task or more than one task matches
    """
    task = manager.store.get(task_id)
    if task is not None:
        return task

    matching_tasks = manager.store.find_by_prefix(task_id)
    if len(matching_tasks) == 1:
        return matching_tasks[0]
    if len(matching_tasks) > 1:
        listing = ", ".join(f"{t.id} ({t.text})" for t in matching_tasks)
        raise LookupError(f"Multiple tasks found starting with '{task_id}': {listing}")
    raise LookupError(f"No task found with ID: {task_id}")


def resolve_task_id(manager: TaskManager, task_id: str) -> Task:
    """Resolve a task ID with short ID support.

    Note:
        Exits with error if task not found or multiple matches.
    """
    try:
        return find_task(manager, task_id)
    except LookupError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def format_due(due_date: Optional[datetime]) -> str:
    """Format a due date in local time."""
    if due_date is None:
        return ""
    if due_date.tzinfo is not None:
        due_date = due_date.astimezone()
    return due_date.strftime("%Y-%m-%d %H:%M")


def format_status(status: TaskStatus) -> str:
    return click.style(status.value.upper(), fg=STATUS_COLORS.get(status, 'white'))


def format_priority(priority: TaskPriority) -> str:
    return click.style(priority.value.upper(), fg=PRIORITY_COLORS.get(priority, 'white'))


def format_task_table(tasks: List[Task],
                      headers: Optional[List[str]] = None,
                      max_text_length: int = 50) -> str:
    """Format tasks as a table with consistent styling.

    Args:
        tasks: List of tasks to display
        headers: Optional custom headers (defaults to standard headers)
        max_text_length: Maximum task text length before truncation

    Returns:
        Formatted table string
    """
    if headers is None:
        headers = ["ID", "STATUS", "PRIORITY", "TASK", "CATEGORY", "DUE"]

    table_data = []
    for task_item in tasks:
        text = task_item.text.split('\n')[0]
        if len(text) > max_text_length:
            text = text[:max_text_length - 3] + "..."

        table_data.append([
            task_item.id[:SHORT_ID_LENGTH],
            format_status(task_item.status),
            format_priority(task_item.priority),
            text,
            f"#{task_item.category}" if task_item.category else "",
            format_due(task_item.due_date),
        ])

    return tabulate(table_data, headers=headers, tablefmt="simple")


def format_stats(stats: TaskStats) -> str:
    return f"Completed: {stats.completed}/{stats.total}"


def print_stats(stats: TaskStats, console: Optional[Console] = None) -> None:
    """Print the completion line and a progress bar."""
    console = console or Console()
    console.print(format_stats(stats), highlight=False)
    console.print(ProgressBar(total=stats.total or 1, completed=stats.completed, width=40))


def print_task_list(tasks: List[Task], stats: TaskStats) -> None:
    """Print stats followed by the task table or the empty-list message."""
    print_stats(stats)
    if not tasks:
        click.echo(EMPTY_LIST_MESSAGE)
        return
    click.echo(format_task_table(tasks))


# Re-export commonly used functions for convenience
__all__ = [
    'DUE_DATE_TYPE',
    'get_data_dir',
    'get_session_manager',
    'get_config_manager',
    'get_client_config',
    'is_interactive',
    'ensure_authenticated',
    'report_error',
    'handle_service_errors',
    'print_reminder',
    'create_task_manager',
    'open_task_manager',
    'find_task',
    'resolve_task_id',
    'format_due',
    'format_status',
    'format_priority',
    'format_task_table',
    'format_stats',
    'print_stats',
    'print_task_list',
]
