"""Single-user task list with durable key-value persistence."""

__version__ = "0.1.0"
