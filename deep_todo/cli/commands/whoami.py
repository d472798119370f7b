import click
import sys
from deep_todo.cli.helpers import get_client_config, get_session_manager, report_error
from deep_todo.services.api_service import TaskApiService
from deep_todo.services.exceptions import ServiceError


def check_session(quiet=False, online=False):
    """Check whether a usable session exists.

    Args:
        quiet: If True, only show errors
        online: Also verify the token with the task service

    Returns:
        bool: True if a token is stored (and accepted when online)
    """
    session = get_session_manager()
    config = get_client_config()
    token = session.get_token()

    if not token:
        if not quiet:
            click.echo("✗ Not logged in", err=True)
            click.echo("Run 'deep-todo login' to authenticate")
        return False

    if not quiet:
        click.echo(f"✓ Token stored in {session.session_file}")
        click.echo(f"  API: {config.base_url}")

    if online:
        try:
            with TaskApiService(token, base_url=config.base_url, timeout=config.timeout) as api:
                stats = api.get_stats()
        except ServiceError as e:
            if not quiet:
                report_error(e)
            return False
        if not quiet:
            click.echo(f"✓ Token accepted ({stats.total} task(s) on the server)")

    return True


@click.command()
@click.option('--online', is_flag=True, help='Also verify the token with the task service')
def whoami(online):
    """Show the current session state."""
    if not check_session(online=online):
        sys.exit(1)
