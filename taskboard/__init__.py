"""Taskboard: kanban boards with ordered columns and tasks."""

__version__ = "1.0.0"
