"""Main CLI entry point for Deep To-Do."""

import click

from ..core.constants import API_URL_ENV_VAR
from ..utils.logging_setup import setup_logging
from .commands.login import login, logout
from .commands.whoami import whoami
from .commands.config import config
from .commands.task import task
from .commands.shell import shell


@click.group()
@click.option('--api-url', envvar=API_URL_ENV_VAR, help='Task service URL (overrides the configured one)')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, api_url, verbose):
    """Deep To-Do - manage your to-do list from the terminal"""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj['api_url'] = api_url


# Register commands
cli.add_command(login)
cli.add_command(logout)
cli.add_command(whoami)
cli.add_command(config)
cli.add_command(task)
cli.add_command(shell)


if __name__ == '__main__':
    cli()
