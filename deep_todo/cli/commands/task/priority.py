"""Set task priority command."""

import sys

import click
import questionary

from deep_todo.cli.helpers import format_priority, is_interactive, open_task_manager, resolve_task_id
from ....models.task import TaskPriority


@click.command()
@click.argument('task_id')
@click.argument('level', required=False,
                type=click.Choice([p.value for p in TaskPriority]))
def priority(task_id, level):
    """Set the priority of a task (low, medium or high)"""
    with open_task_manager() as manager:
        task_item = resolve_task_id(manager, task_id)

        if not level:
            if not is_interactive():
                click.echo("Error: Missing priority level (low, medium or high).", err=True)
                sys.exit(1)
            level = questionary.select(
                f"Priority for '{task_item.text}':",
                choices=[p.value for p in TaskPriority],
                default=task_item.priority.value,
            ).ask()
            if level is None:
                click.echo("Cancelled")
                return

        updated = manager.set_priority(task_item.id, level)
        click.echo(f"Task '{updated.text}' priority set to {format_priority(updated.priority)}")
