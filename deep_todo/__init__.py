"""Deep To-Do - a command line client for the Deep To-Do task service."""

__version__ = "0.1.0"

# Export main CLI for convenience
from .cli.main import cli

__all__ = ['cli']
