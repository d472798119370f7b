"""Task stats command."""

import click

from deep_todo.cli.helpers import open_task_manager, print_stats


@click.command()
def stats():
    """Show how many tasks are completed"""
    with open_task_manager(refresh=False) as manager:
        print_stats(manager.refresh_stats())
