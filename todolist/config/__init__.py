"""
Configuration module.

Handles environment variables and application settings.
"""

from todolist.config.config import (
    DEBUG,
    TODO_FILE,
    TODO_DATE_FORMAT,
    TODO_DEFAULT_CATEGORY,
    uses_task_file,
    validate_config,
    print_config_summary,
)

__all__ = [
    "DEBUG",
    "TODO_FILE",
    "TODO_DATE_FORMAT",
    "TODO_DEFAULT_CATEGORY",
    "uses_task_file",
    "validate_config",
    "print_config_summary",
]
