"""Command line interface for Deep To-Do."""
