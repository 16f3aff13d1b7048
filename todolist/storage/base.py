"""
Base storage abstraction for the TODO list.

Defines the abstract interface that all task stores must implement,
and the errors they raise. Tasks are keyed by title.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from todolist.models.task import Task


# =============================================================================
# Errors
# =============================================================================

class TaskError(Exception):
    """Base class for errors reported to the user by task operations."""


class DuplicateTaskError(TaskError):
    """A task with the same title is already stored."""

    def __init__(self, title: str):
        self.title = title
        super().__init__(f"Task with title '{title}' already exists")


class TaskNotFoundError(TaskError):
    """No task with the given title is stored."""

    def __init__(self, title: str):
        self.title = title
        super().__init__(f"Task with title '{title}' not found")


class StorageError(TaskError):
    """The backing task file could not be read or written."""


# =============================================================================
# Storage Interface
# =============================================================================

class Storage(ABC):
    """
    Abstract base class for all task stores.

    Implementations keep tasks in insertion order and enforce unique
    titles. Lookups by a title that is not stored raise TaskNotFoundError.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Return the name of this storage backend.

        Used in verbose output.
        """
        pass

    @abstractmethod
    def add(self, task: Task) -> None:
        """
        Store a new task.

        Raises:
            DuplicateTaskError: If a task with the same title exists.
        """
        pass

    @abstractmethod
    def replace(self, title: str, task: Task) -> None:
        """
        Replace the task stored under title, keeping its position.

        Raises:
            TaskNotFoundError: If no task has that title.
        """
        pass

    @abstractmethod
    def remove(self, title: str) -> Task:
        """
        Remove and return the task stored under title.

        Raises:
            TaskNotFoundError: If no task has that title.
        """
        pass

    @abstractmethod
    def all(self) -> List[Task]:
        """Return every task in insertion order."""
        pass

    def find(self, title: str) -> Optional[Task]:
        """Return the task stored under title, or None."""
        for task in self.all():
            if task.title == title:
                return task
        return None

    def get(self, title: str) -> Task:
        """
        Return the task stored under title.

        Raises:
            TaskNotFoundError: If no task has that title.
        """
        task = self.find(title)
        if task is None:
            raise TaskNotFoundError(title)
        return task

    def count(self) -> int:
        """Return number of stored tasks."""
        return len(self.all())

    def __len__(self) -> int:
        return self.count()

    def __str__(self) -> str:
        return f"Storage({self.name})"

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
