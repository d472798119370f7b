"""Utilities for the Deep To-Do client."""

from .config_manager import ConfigManager
from .session_manager import SessionManager

__all__ = [
    'ConfigManager',
    'SessionManager'
]
