"""
Storage module.

Holds the task list in memory, or in a JSON file when one is configured.
"""

from todolist.storage.base import (
    Storage,
    TaskError,
    DuplicateTaskError,
    TaskNotFoundError,
    StorageError,
)
from todolist.storage.memory import MemoryStorage
from todolist.storage.json_file import JsonFileStorage, open_storage

__all__ = [
    "Storage",
    "TaskError",
    "DuplicateTaskError",
    "TaskNotFoundError",
    "StorageError",
    "MemoryStorage",
    "JsonFileStorage",
    "open_storage",
]
