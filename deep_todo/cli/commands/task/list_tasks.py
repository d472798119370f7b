"""List tasks command."""

import click

from deep_todo.cli.helpers import open_task_manager, print_task_list
from ....core.constants import FILTER_ALL
from ....core.filters import PRIORITY_CHOICES, STATUS_CHOICES, TaskFilter


@click.command()
@click.option('--status', type=click.Choice(STATUS_CHOICES), default=FILTER_ALL,
              show_default=True, help='Filter by task status')
@click.option('--priority', type=click.Choice(PRIORITY_CHOICES), default=FILTER_ALL,
              show_default=True, help='Filter by task priority')
def list(status, priority):
    """List tasks, optionally filtered by status and priority"""
    task_filter = TaskFilter(status=status, priority=priority)

    with open_task_manager() as manager:
        visible = manager.visible_tasks(task_filter)
        print_task_list(visible, manager.stats)

        if not task_filter.is_default and visible:
            click.echo(f"\nShowing {len(visible)} of {len(manager.tasks)} task(s) ({task_filter.describe()})")
