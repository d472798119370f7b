"""Commands of the Deep To-Do command line."""
