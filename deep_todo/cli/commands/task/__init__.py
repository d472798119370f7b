"""Task command group and sub-commands."""

import click

from .add import add
from .list_tasks import list
from .show import show
from .toggle import toggle
from .priority import priority
from .delete import delete
from .stats import stats

__all__ = [
    'task',
    'add',
    'list',
    'show',
    'toggle',
    'priority',
    'delete',
    'stats',
]


@click.group()
def task():
    """Manage your to-do tasks"""
    pass


# Register all sub-commands
task.add_command(add)
task.add_command(list)
task.add_command(show)
task.add_command(toggle)
task.add_command(priority)
task.add_command(delete)
task.add_command(stats)
