"""Core functionality for the Deep To-Do client."""
