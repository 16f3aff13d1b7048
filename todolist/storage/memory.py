"""
In-memory task store.

The default backend: tasks live in a dict for the lifetime of the process
and are lost when it exits.
"""

from typing import Dict, List, Optional

from todolist.models.task import Task
from todolist.storage.base import DuplicateTaskError, Storage, TaskNotFoundError


class MemoryStorage(Storage):
    """
    Dict-backed store keyed by title.

    Dicts keep insertion order, so all() returns tasks in the order they
    were added. Replacing a task keeps its slot.
    """

    def __init__(self, tasks: Optional[List[Task]] = None):
        self._tasks: Dict[str, Task] = {}
        for task in tasks or []:
            self.add(task)

    @property
    def name(self) -> str:
        return "memory"

    def add(self, task: Task) -> None:
        if task.title in self._tasks:
            raise DuplicateTaskError(task.title)
        self._tasks[task.title] = task

    def replace(self, title: str, task: Task) -> None:
        if title not in self._tasks:
            raise TaskNotFoundError(title)
        if task.title != title:
            raise ValueError(f"Cannot rename task '{title}' to '{task.title}'")
        self._tasks[title] = task

    def remove(self, title: str) -> Task:
        try:
            return self._tasks.pop(title)
        except KeyError:
            raise TaskNotFoundError(title) from None

    def all(self) -> List[Task]:
        return list(self._tasks.values())

    def find(self, title: str) -> Optional[Task]:
        return self._tasks.get(title)

    def count(self) -> int:
        return len(self._tasks)

    def clear(self) -> None:
        """Remove every task."""
        self._tasks.clear()
