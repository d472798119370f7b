"""Delete task command."""

import click
from rich.console import Console
from rich.prompt import Confirm

from deep_todo.cli.helpers import is_interactive, open_task_manager, print_stats, resolve_task_id


@click.command()
@click.argument('task_id')
@click.option('--no-undo', is_flag=True, help='Do not offer to undo the deletion')
def delete(task_id, no_undo):
    """Delete a task

    The task disappears from the list right away. If the server rejects
    the deletion it is put back.
    """
    console = Console()

    with open_task_manager() as manager:
        task_item = resolve_task_id(manager, task_id)
        manager.delete_task(task_item.id)
        console.print(f"[green]Task deleted:[/green] {task_item.text}", highlight=False)

        if not no_undo and is_interactive():
            if Confirm.ask("Undo?", default=False):
                restored = manager.undo_delete()
                console.print(f"[green]Restored as new task {restored.id}[/green]")

        print_stats(manager.stats, console)
