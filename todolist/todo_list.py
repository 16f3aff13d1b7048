"""
TODO list operations.

This module holds the operations behind every CLI command:

    add → done → update → delete → list → select

Each operation works on a Storage backend (in-memory by default, a JSON
file when one is configured) and raises a TaskError subclass when the
named task does not exist or already exists.
"""

from dataclasses import replace
from datetime import datetime
from typing import List, Optional

from todolist.models.task import Task, TaskStatus
from todolist.selection import parse_selection
from todolist.storage import MemoryStorage, Storage


# Sort keys accepted by get_all_tasks()
SORT_KEYS = {
    "title": lambda task: task.title.lower(),
    "date": lambda task: task.creation_date,
    "category": lambda task: (task.category.lower(), task.title.lower()),
    "status": lambda task: (task.status is TaskStatus.DONE, task.title.lower()),
}


class TodoList:
    """
    The task list and the operations the CLI exposes on it.

    Usage:
        todo = TodoList()
        todo.add_task(Task.create("Buy milk", "2 litres", "home"))
        todo.mark_as_done("Buy milk")
        for task in todo.filter_tasks('status = done'):
            print(task)
    """

    def __init__(self, storage: Storage = None, verbose: bool = False):
        """
        Initialize the list.

        Args:
            storage: Task store. Defaults to a fresh MemoryStorage.
            verbose: Print progress for each operation.
        """
        self.storage = storage if storage is not None else MemoryStorage()
        self.verbose = verbose

    def _log(self, message: str) -> None:
        if self.verbose:
            print(f"[todo] {message}")

    def add_task(self, task: Task) -> None:
        """
        Add a task.

        Raises:
            DuplicateTaskError: If a task with the same title exists.
        """
        self.storage.add(task)
        self._log(f"Added '{task.title}' to {self.storage.name} ({self.storage.count()} tasks)")

    def get_task(self, title: str) -> Task:
        """
        Look up a task by title.

        Raises:
            TaskNotFoundError: If no task has that title.
        """
        return self.storage.get(title)

    def mark_as_done(self, title: str) -> Task:
        """
        Mark a task as done.

        Raises:
            TaskNotFoundError: If no task has that title.
        """
        task = replace(self.storage.get(title))
        task.mark_done()
        self.storage.replace(title, task)
        self._log(f"Marked '{title}' as done")
        return task

    def update_task(
        self,
        title: str,
        description: Optional[str] = None,
        creation_date: Optional[datetime] = None,
        category: Optional[str] = None,
        status: Optional[TaskStatus] = None,
    ) -> Task:
        """
        Replace the given fields of a task; fields left as None keep their value.

        The title is the task's key and cannot be changed.

        Returns:
            The updated task.

        Raises:
            TaskNotFoundError: If no task has that title.
            ValueError: If the new values fail validation.
        """
        current = self.storage.get(title)
        changes = {
            "description": description,
            "creation_date": creation_date,
            "category": category,
            "status": status,
        }
        changes = {name: value for name, value in changes.items() if value is not None}

        updated = replace(current, **changes)
        self.storage.replace(title, updated)
        self._log(f"Updated '{title}': {', '.join(changes) or 'no changes'}")
        return updated

    def delete_task(self, title: str) -> Task:
        """
        Delete a task.

        Raises:
            TaskNotFoundError: If no task has that title.
        """
        task = self.storage.remove(title)
        self._log(f"Deleted '{title}' ({self.storage.count()} tasks left)")
        return task

    def get_all_tasks(self, sort_by: Optional[str] = None) -> List[Task]:
        """
        Return every task.

        Args:
            sort_by: None for insertion order, or one of "title", "date",
                "category", "status".
        """
        tasks = self.storage.all()
        if sort_by:
            if sort_by not in SORT_KEYS:
                raise ValueError(f"Cannot sort by {sort_by!r}; choose from {', '.join(SORT_KEYS)}")
            tasks.sort(key=SORT_KEYS[sort_by])
        return tasks

    def filter_tasks(self, expression: str) -> List[Task]:
        """
        Return the tasks matching a select expression, in list order.

        Raises:
            SelectionError: If the expression is malformed.
        """
        predicate = parse_selection(expression)
        self._log(f"Selecting with {predicate}")
        return [task for task in self.storage.all() if predicate.matches(task)]

    def __len__(self) -> int:
        return self.storage.count()
