"""
Data models module.

Defines the task record and its status.
"""

from todolist.models.task import (
    Task,
    TaskStatus,
    parse_datetime,
    format_datetime,
)

__all__ = [
    "Task",
    "TaskStatus",
    "parse_datetime",
    "format_datetime",
]
