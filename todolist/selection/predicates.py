"""
Predicate tree for task selection.

The parser builds a tree of these nodes; evaluating the root against a
Task answers whether the task is selected. All nodes are immutable and
evaluation never modifies the task.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Tuple

from todolist.models.task import Task, TaskStatus, date_formats
from todolist.selection.lexer import SelectionError


# Fields a comparison may name
TEXT_FIELDS = ("title", "description", "category")
FIELDS = TEXT_FIELDS + ("status", "date")

# Operators accepted per kind of field ("==" is folded into "=")
TEXT_OPERATORS = ("=", "!=", "like")
STATUS_OPERATORS = ("=", "!=")
DATE_OPERATORS = ("=", "!=", "<", ">", "<=", ">=")


class Predicate:
    """Base class for all selection nodes."""

    def matches(self, task: Task) -> bool:
        raise NotImplementedError


# =============================================================================
# Comparisons
# =============================================================================

@dataclass(frozen=True)
class TextComparison(Predicate):
    """title/description/category compared to a string; `like` is a substring test."""
    field: str
    operator: str
    value: str

    def matches(self, task: Task) -> bool:
        actual = getattr(task, self.field)
        if self.operator == "like":
            return self.value in actual
        if self.operator == "!=":
            return actual != self.value
        return actual == self.value

    def __str__(self) -> str:
        return f'{self.field} {self.operator} "{self.value}"'


@dataclass(frozen=True)
class StatusComparison(Predicate):
    operator: str
    status: TaskStatus

    def matches(self, task: Task) -> bool:
        if self.operator == "!=":
            return task.status is not self.status
        return task.status is self.status

    def __str__(self) -> str:
        return f"status {self.operator} {self.status}"


@dataclass(frozen=True)
class DateComparison(Predicate):
    """
    creation_date compared to a date literal.

    A literal with a time of day ("2024-05-20 10:00") is an instant for
    <, <=, > and >=. A bare day ("2024-05-20") covers the whole day.
    = and != always test the span the literal names, so seconds within
    the minute are equal. The span is [start, end).
    """
    operator: str
    start: datetime
    end: datetime
    text: str = ""

    @property
    def is_day(self) -> bool:
        return self.end - self.start >= timedelta(days=1)

    def matches(self, task: Task) -> bool:
        when = task.creation_date
        if self.operator == "<":
            return when < self.start
        if self.operator == "<=":
            return when < self.end if self.is_day else when <= self.start
        if self.operator == ">":
            return when >= self.end if self.is_day else when > self.start
        if self.operator == ">=":
            return when >= self.start
        inside = self.start <= when < self.end
        return not inside if self.operator == "!=" else inside

    def __str__(self) -> str:
        return f'date {self.operator} "{self.text or self.start.isoformat(sep=" ")}"'


# =============================================================================
# Boolean connectives
# =============================================================================

@dataclass(frozen=True)
class And(Predicate):
    children: Tuple[Predicate, ...]

    def matches(self, task: Task) -> bool:
        return all(child.matches(task) for child in self.children)

    def __str__(self) -> str:
        return "(" + " and ".join(str(c) for c in self.children) + ")"


@dataclass(frozen=True)
class Or(Predicate):
    children: Tuple[Predicate, ...]

    def matches(self, task: Task) -> bool:
        return any(child.matches(task) for child in self.children)

    def __str__(self) -> str:
        return "(" + " or ".join(str(c) for c in self.children) + ")"


@dataclass(frozen=True)
class Not(Predicate):
    child: Predicate

    def matches(self, task: Task) -> bool:
        return not self.child.matches(task)

    def __str__(self) -> str:
        return f"not {self.child}"


# =============================================================================
# Construction
# =============================================================================

def parse_date_span(text: str) -> Tuple[datetime, datetime]:
    """
    Parse a date literal into the [start, end) span it denotes.

    Raises:
        ValueError: If no accepted date format matches.
    """
    value = text.strip()
    for fmt in date_formats():
        try:
            start = datetime.strptime(value, fmt)
        except ValueError:
            continue
        if "%S" in fmt:
            return start, start + timedelta(seconds=1)
        if "%M" in fmt:
            return start, start + timedelta(minutes=1)
        if "%H" in fmt:
            return start, start + timedelta(hours=1)
        return start, start + timedelta(days=1)
    raise ValueError(f"Invalid date '{text}': expected YYYY-MM-DD HH:MM")


def make_comparison(field: str, operator: str, value: str, column: Optional[int] = None) -> Predicate:
    """
    Build the typed comparison node for `field operator value`.

    Args:
        field: Field name (case-insensitive).
        operator: One of = == != < > <= >= like.
        value: Literal text of the value.
        column: Column of the field, for error messages.

    Raises:
        SelectionError: Unknown field, unsupported operator, or a value of
            the wrong type.
    """
    name = field.lower()
    op = "=" if operator == "==" else operator.lower()

    if name not in FIELDS:
        raise SelectionError(f"Unknown predicate: {field}", column)

    if name in TEXT_FIELDS:
        allowed = TEXT_OPERATORS
    elif name == "status":
        allowed = STATUS_OPERATORS
    else:
        allowed = DATE_OPERATORS

    if op not in allowed:
        raise SelectionError(
            f"Operator '{operator}' is not supported for {name} (use {', '.join(allowed)})",
            column,
        )

    if name in TEXT_FIELDS:
        return TextComparison(name, op, value)

    try:
        if name == "status":
            return StatusComparison(op, TaskStatus.parse(value))
        start, end = parse_date_span(value)
    except ValueError as e:
        raise SelectionError(str(e), column) from e
    return DateComparison(op, start, end, value)
