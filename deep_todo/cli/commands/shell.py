"""Interactive shell keeping task state between commands."""

import logging
import shlex

import click

from deep_todo.cli.helpers import (
    DUE_DATE_TYPE,
    find_task,
    format_priority,
    format_status,
    get_session_manager,
    open_task_manager,
    print_stats,
    print_task_list,
    report_error,
)
from ...core.filters import TaskFilter
from ...services.exceptions import ServiceError

logger = logging.getLogger(__name__)

SHELL_HELP = """Commands:
  list                              Show tasks matching the current filter
  add TEXT [--due DATE] [--category NAME]
                                    Add a task
  toggle ID                         Mark a task complete or pending
  priority ID LEVEL                 Set priority (low, medium, high)
  delete ID                         Delete a task
  undo                              Restore the last deleted task
  filter status|priority VALUE      Change the filter ('all' clears it)
  filter reset                      Show all tasks again
  stats                             Show completion stats
  refresh                           Reload tasks from the server
  logout                            Forget the token and leave
  help                              Show this help
  quit                              Leave the shell"""


class TaskShell:
    """Line-oriented front end over a single TaskManager."""

    def __init__(self, manager, session):
        self.manager = manager
        self.session = session
        self.task_filter = TaskFilter()
        self._handlers = {
            "list": self.do_list,
            "ls": self.do_list,
            "add": self.do_add,
            "toggle": self.do_toggle,
            "done": self.do_toggle,
            "priority": self.do_priority,
            "delete": self.do_delete,
            "rm": self.do_delete,
            "undo": self.do_undo,
            "filter": self.do_filter,
            "stats": self.do_stats,
            "refresh": self.do_refresh,
            "logout": self.do_logout,
            "help": self.do_help,
            "?": self.do_help,
        }

    def handle(self, line: str) -> bool:
        """Run one command line.

        Returns:
            False when the shell should exit
        """
        try:
            parts = shlex.split(line)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            return True
        if not parts:
            return True

        name, args = parts[0].lower(), parts[1:]
        if name in ("quit", "exit"):
            return False

        handler = self._handlers.get(name)
        if handler is None:
            click.echo(f"Unknown command: {name}. Type 'help' to list commands.")
            return True

        try:
            return handler(args) is not False
        except (ServiceError, ValueError, LookupError) as e:
            report_error(e)
        except click.ClickException as e:
            click.echo(f"Error: {e.format_message()}", err=True)
        return True

    def run(self) -> None:
        click.echo("Deep To-Do shell. Type 'help' for commands, 'quit' to leave.\n")
        self.do_list([])
        while True:
            try:
                line = input("todo> ")
            except EOFError:
                logger.debug("Shell EOF received, exiting.")
                click.echo()
                break
            except KeyboardInterrupt:
                click.echo()
                break
            if not self.handle(line.strip()):
                break

    @staticmethod
    def _one_arg(args, usage):
        if len(args) != 1:
            raise ValueError(f"Usage: {usage}")
        return args[0]

    def do_list(self, args):
        print_task_list(self.manager.visible_tasks(self.task_filter), self.manager.stats)
        if not self.task_filter.is_default:
            click.echo(f"(filter: {self.task_filter.describe()})")

    def do_add(self, args):
        text_parts, due_date, category = [], None, None
        remaining = iter(args)
        for arg in remaining:
            if arg in ("--due", "-d"):
                due_date = DUE_DATE_TYPE.convert(next(remaining, ""), None, None)
            elif arg in ("--category", "-c"):
                category = next(remaining, None)
            else:
                text_parts.append(arg)
        if not text_parts:
            raise ValueError("Usage: add TEXT [--due DATE] [--category NAME]")

        created = self.manager.create_task(" ".join(text_parts), due_date, category)
        click.echo(f"Added task {created.id}: {created.text}")

    def do_toggle(self, args):
        task_item = find_task(self.manager, self._one_arg(args, "toggle ID"))
        updated = self.manager.toggle_status(task_item.id)
        click.echo(f"Task '{updated.text}' is now {format_status(updated.status)}")

    def do_priority(self, args):
        if len(args) != 2:
            raise ValueError("Usage: priority ID LEVEL")
        task_item = find_task(self.manager, args[0])
        updated = self.manager.set_priority(task_item.id, args[1].lower())
        click.echo(f"Task '{updated.text}' priority set to {format_priority(updated.priority)}")

    def do_delete(self, args):
        task_item = find_task(self.manager, self._one_arg(args, "delete ID"))
        self.manager.delete_task(task_item.id)
        click.echo(f"Task deleted: {task_item.text}. Type 'undo' to restore it.")

    def do_undo(self, args):
        restored = self.manager.undo_delete()
        if restored is None:
            click.echo("Nothing to undo.")
            return
        click.echo(f"Restored '{restored.text}' as new task {restored.id}")

    def do_filter(self, args):
        if args == ["reset"]:
            self.task_filter = TaskFilter()
        elif len(args) == 2 and args[0] == "status":
            self.task_filter = TaskFilter(status=args[1], priority=self.task_filter.priority)
        elif len(args) == 2 and args[0] == "priority":
            self.task_filter = TaskFilter(status=self.task_filter.status, priority=args[1])
        else:
            raise ValueError("Usage: filter status|priority VALUE, or filter reset")
        self.do_list([])

    def do_stats(self, args):
        print_stats(self.manager.refresh_stats())

    def do_refresh(self, args):
        self.manager.refresh()
        self.do_list([])

    def do_logout(self, args):
        self.session.clear()
        self.manager.clear()
        click.echo("Logged out.")
        return False

    def do_help(self, args):
        click.echo(SHELL_HELP)


@click.command()
def shell():
    """Open an interactive session that keeps tasks, filters and undo in memory"""
    session = get_session_manager()
    with open_task_manager() as manager:
        TaskShell(manager, session).run()
