"""Configuration management commands for Deep To-Do."""

import json
import sys

import click

from ..helpers import get_config_manager


@click.group()
def config():
    """Manage client configuration"""
    pass


def _update(**changes):
    try:
        return get_config_manager().update_config(**changes)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@config.command()
@click.argument('url')
def set_url(url):
    """Set the task service URL"""
    if not url.startswith(('http://', 'https://')):
        click.echo("Error: URL must start with http:// or https://", err=True)
        sys.exit(1)
    updated = _update(api_url=url)
    click.echo(f"Set API URL: {updated.base_url}")


@config.command()
@click.argument('seconds', type=float)
def set_timeout(seconds):
    """Set the request timeout in seconds"""
    updated = _update(timeout=seconds)
    click.echo(f"Set request timeout to {updated.timeout:g}s")


@config.command()
@click.argument('minutes', type=int)
def set_horizon(minutes):
    """Set how many minutes ahead due tasks trigger a reminder"""
    updated = _update(reminder_horizon_minutes=minutes)
    click.echo(f"Set reminder horizon to {updated.reminder_horizon_minutes} minutes")


@config.command()
def show():
    """Display current client configuration"""
    try:
        current = get_config_manager().get_config()
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo("Client Configuration:")
    click.echo(json.dumps(current.model_dump(), indent=2))


@config.command()
def reset():
    """Reset client configuration to defaults"""
    get_config_manager().reset()
    click.echo("Client configuration reset to defaults")
