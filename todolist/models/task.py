"""
Core data model for the TODO list.

Defines the Task dataclass and the TaskStatus enum, plus the helpers used
to read and print the dates typed on the command line.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from todolist.config import config as app_config


# Formats accepted in addition to the configured TODO_DATE_FORMAT
FALLBACK_DATE_FORMATS: tuple[str, ...] = ("%Y-%m-%d %H:%M", "%Y-%m-%d")


# =============================================================================
# Dates
# =============================================================================

def date_formats() -> list[str]:
    """Return the accepted date formats, configured format first."""
    formats = [app_config.TODO_DATE_FORMAT]
    for fmt in FALLBACK_DATE_FORMATS:
        if fmt not in formats:
            formats.append(fmt)
    return formats


def parse_datetime(text: str) -> datetime:
    """
    Parse a date typed on the command line.

    Args:
        text: Date string, e.g. "2024-05-20 10:00" or "2024-05-20".

    Returns:
        Naive local datetime.

    Raises:
        ValueError: If no accepted format matches.
    """
    value = text.strip()
    for fmt in date_formats():
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    raise ValueError(f"Invalid date '{text}': expected YYYY-MM-DD HH:MM")


def _local_datetime(text: str) -> datetime:
    """Read an ISO timestamp; one with a UTC offset is converted to naive local time."""
    value = datetime.fromisoformat(text)
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value


def format_datetime(value: datetime) -> str:
    """Render a datetime with the configured date format."""
    return value.strftime(app_config.TODO_DATE_FORMAT)


# =============================================================================
# Status
# =============================================================================

class TaskStatus(Enum):
    """Lifecycle of a task. Values are the labels shown to the user."""

    ACTIVE = "on"
    DONE = "done"

    @classmethod
    def parse(cls, text: str) -> "TaskStatus":
        """
        Parse a status name (case-insensitive).

        Accepts "on", "active", "a" for ACTIVE and "done", "d" for DONE.

        Raises:
            ValueError: If the name is not recognised.
        """
        key = text.strip().lower()
        if key in ("on", "active", "a"):
            return cls.ACTIVE
        if key in ("done", "d"):
            return cls.DONE
        raise ValueError(f"Invalid status: {text}")

    def __str__(self) -> str:
        return self.value


# =============================================================================
# Task
# =============================================================================

@dataclass
class Task:
    """
    A single entry in the TODO list.

    Attributes:
        title: Unique name of the task; used as its key.
        description: Free text describing the task.
        creation_date: When the task was created (naive local time).
        category: Grouping label, e.g. "work" or "home".
        status: ACTIVE until marked done.
    """

    title: str
    description: str = ""
    creation_date: datetime = field(default_factory=datetime.now)
    category: str = "general"
    status: TaskStatus = TaskStatus.ACTIVE

    def __post_init__(self) -> None:
        """Validate fields after initialization."""
        self.validate()

    @classmethod
    def create(
        cls,
        title: str,
        description: str,
        category: str,
        creation_date: Optional[datetime] = None,
    ) -> "Task":
        """Create an active task, stamped with the current time unless a date is given."""
        return cls(
            title=title,
            description=description,
            creation_date=creation_date or datetime.now(),
            category=category,
        )

    def validate(self) -> None:
        """
        Validate that required fields are present and valid.

        Raises:
            ValueError: If validation fails.
        """
        errors = []

        if not self.title or not self.title.strip():
            errors.append("title is required and cannot be empty")

        if not self.category or not self.category.strip():
            errors.append("category is required and cannot be empty")

        if self.description is None:
            errors.append("description cannot be None")

        if not isinstance(self.creation_date, datetime):
            errors.append(f"creation_date must be a datetime, got {type(self.creation_date).__name__}")
        elif self.creation_date.tzinfo is not None:
            errors.append("creation_date must be naive local time")

        if not isinstance(self.status, TaskStatus):
            errors.append(f"status must be a TaskStatus, got {self.status!r}")

        if errors:
            raise ValueError(f"Task validation failed: {'; '.join(errors)}")

    @property
    def is_done(self) -> bool:
        return self.status is TaskStatus.DONE

    def mark_done(self) -> None:
        """Set the task status to DONE."""
        self.status = TaskStatus.DONE

    def to_dict(self) -> dict:
        """
        Convert Task to a plain dictionary for the JSON task file.

        Returns:
            Dictionary with the date as an ISO string and the status label.
        """
        return {
            "title": self.title,
            "description": self.description,
            "creation_date": self.creation_date.isoformat(),
            "category": self.category,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """
        Create a Task from a dictionary produced by to_dict().

        Raises:
            ValueError: If a field is missing or malformed.
        """
        try:
            return cls(
                title=data["title"],
                description=data.get("description", ""),
                creation_date=_local_datetime(data["creation_date"]),
                category=data["category"],
                status=TaskStatus.parse(data.get("status", "on")),
            )
        except KeyError as e:
            raise ValueError(f"Task record is missing field {e}") from e

    def __str__(self) -> str:
        """One-line listing used by `list` and `select`."""
        return (
            f"{self.title}: {self.description} ({self.status}) - "
            f"{self.category} - {format_datetime(self.creation_date)}"
        )
