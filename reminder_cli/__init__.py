"""A personal task-reminder command-line tool."""

__version__ = "1.0.0"
