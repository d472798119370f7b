"""Allow running the client with ``python -m deep_todo``."""

from .cli.main import cli

if __name__ == '__main__':
    cli()
