"""Toggle task status command."""

import click

from deep_todo.cli.helpers import format_status, open_task_manager, print_stats, resolve_task_id


@click.command()
@click.argument('task_id')
def toggle(task_id):
    """Mark a task complete, or pending again if it is complete"""
    with open_task_manager() as manager:
        task_item = resolve_task_id(manager, task_id)
        updated = manager.toggle_status(task_item.id)

        click.echo(f"Task '{updated.text}' is now {format_status(updated.status)}")
        print_stats(manager.stats)
