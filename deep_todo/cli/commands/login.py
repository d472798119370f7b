import click
import sys
from deep_todo.cli.helpers import get_client_config, get_session_manager, report_error
from deep_todo.services.api_service import TaskApiService
from deep_todo.services.exceptions import ServiceError


@click.command()
@click.argument('token', required=False)
@click.option('--no-verify', is_flag=True, help='Store the token without checking it against the server')
def login(token, no_verify):
    """Store the bearer token used for all task requests.

    The token is issued by the Deep To-Do web login or signup. When TOKEN is
    omitted you are prompted for it without echo.
    """
    if not token:
        token = click.prompt("Bearer token", hide_input=True)
    token = token.strip()
    if not token:
        click.echo("Error: Token cannot be empty.", err=True)
        sys.exit(1)

    if not no_verify:
        config = get_client_config()
        click.echo(f"Checking token against {config.base_url}...")
        try:
            with TaskApiService(token, base_url=config.base_url, timeout=config.timeout) as api:
                tasks = api.list_tasks()
        except ServiceError as e:
            report_error(e)
            click.echo("Token was not stored. Use --no-verify to store it anyway.", err=True)
            sys.exit(1)
        click.echo(f"✓ Token accepted ({len(tasks)} task(s) found)")

    get_session_manager().set_token(token)
    click.echo("Logged in.")


@click.command()
def logout():
    """Forget the stored bearer token."""
    session = get_session_manager()
    if not session.is_authenticated:
        click.echo("Not logged in.")
        return
    session.clear()
    click.echo("Logged out.")
