"""Add task command."""

import click

from deep_todo.cli.helpers import (
    DUE_DATE_TYPE,
    format_due,
    open_task_manager,
    print_stats,
)


@click.command()
@click.argument('text', nargs=-1, required=True)
@click.option('--due', '-d', 'due_date', type=DUE_DATE_TYPE,
              help='Due date, e.g. 2025-06-01 or "2025-06-01 18:30"')
@click.option('--category', '-c', help='Category label')
def add(text, due_date, category):
    """Add a new task"""
    text = " ".join(text)

    with open_task_manager() as manager:
        created = manager.create_task(text, due_date, category)

        click.echo(f"\n✅ Added task {created.id}")
        click.echo(f"   {created.text}")
        if created.category:
            click.echo(f"   #{created.category}")
        if created.due_date:
            click.echo(f"   Due: {format_due(created.due_date)}")
        print_stats(manager.stats)
