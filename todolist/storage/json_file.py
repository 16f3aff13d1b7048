"""
JSON file task store.

Keeps the task list in a JSON object keyed by title so it survives between
invocations. Used only when a task file is configured (--file or TODO_FILE).

File format:
    {
      "Buy milk": {
        "title": "Buy milk",
        "description": "2 litres",
        "creation_date": "2024-05-20T10:00:00",
        "category": "home",
        "status": "on"
      }
    }

Every mutation rewrites the whole file: the JSON is written to a sibling
".tmp" file which is then renamed over the target, so a crash mid-write
leaves the previous file intact.
"""

import json
import os
from pathlib import Path
from typing import Optional, Union

from todolist.models.task import Task
from todolist.storage.base import StorageError
from todolist.storage.memory import MemoryStorage


class JsonFileStorage(MemoryStorage):
    """
    MemoryStorage that loads from and saves to a JSON file.

    A missing file is an empty list; the file is created on the first save.
    A file that exists but cannot be decoded raises StorageError rather
    than being silently replaced.
    """

    def __init__(self, path: Union[str, Path], verbose: bool = False):
        super().__init__()
        self.path = Path(path).expanduser()
        self.verbose = verbose
        self._load()

    @property
    def name(self) -> str:
        return f"json:{self.path}"

    @property
    def tmp_path(self) -> Path:
        return self.path.with_name(self.path.name + ".tmp")

    def _load(self) -> None:
        if not self.path.exists():
            if self.verbose:
                print(f"[storage] {self.path} does not exist yet, starting empty")
            return

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Could not read tasks file {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(f"Tasks file {self.path} must contain a JSON object")

        for key, record in data.items():
            try:
                task = Task.from_dict(record)
            except (TypeError, ValueError) as e:
                raise StorageError(f"Invalid task {key!r} in {self.path}: {e}") from e
            super().add(task)

        if self.verbose:
            print(f"[storage] Loaded {self.count()} tasks from {self.path}")

    def save(self) -> None:
        """Write all tasks to the file atomically."""
        payload = {task.title: task.to_dict() for task in self.all()}
        tmp = self.tmp_path
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self.path)
        except OSError as e:
            raise StorageError(f"Could not write tasks file {self.path}: {e}") from e

        if self.verbose:
            print(f"[storage] Saved {len(payload)} tasks to {self.path}")

    def add(self, task: Task) -> None:
        super().add(task)
        self.save()

    def replace(self, title: str, task: Task) -> None:
        super().replace(title, task)
        self.save()

    def remove(self, title: str) -> Task:
        task = super().remove(title)
        self.save()
        return task

    def clear(self) -> None:
        super().clear()
        self.save()


def open_storage(path: Optional[str] = None, verbose: bool = False) -> MemoryStorage:
    """
    Get the task store for a run.

    Args:
        path: Task file path; empty or None keeps tasks in memory.
        verbose: Print storage progress.

    Returns:
        JsonFileStorage when a path is given, otherwise MemoryStorage.
    """
    if path and path.strip():
        return JsonFileStorage(path, verbose=verbose)
    if verbose:
        print("[storage] Using in-memory task list")
    return MemoryStorage()
