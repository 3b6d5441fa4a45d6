"""Taskhub task service: tasks, subtasks and comments for the team dashboard."""

__version__ = "0.1.0"
