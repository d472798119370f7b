"""Show task command."""

import click
from deep_todo.cli.helpers import (
    format_due,
    format_priority,
    format_status,
    open_task_manager,
    resolve_task_id,
)


@click.command()
@click.argument('task_id')
def show(task_id):
    """Show detailed information about a task"""
    with open_task_manager() as manager:
        task_item = resolve_task_id(manager, task_id)

        click.echo("\n" + "=" * 60)
        click.echo(f"Task Details: {task_item.id}")
        click.echo("=" * 60)

        click.echo(f"\n   Text: {task_item.text}")
        click.echo(f"   Status: {format_status(task_item.status)}")
        click.echo(f"   Priority: {format_priority(task_item.priority)}")
        if task_item.category:
            click.echo(f"   Category: #{task_item.category}")
        if task_item.due_date:
            click.echo(f"   Due: {format_due(task_item.due_date)}")
