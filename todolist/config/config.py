"""
Configuration module for the TODO list CLI.

Loads environment variables from .env file and exposes them as typed configuration values.
Uses python-dotenv for loading and provides safe defaults where appropriate.
"""

import os
from datetime import datetime
from pathlib import Path
from dotenv import load_dotenv

# Load .env file from project root
# The .env file should be in the root directory (parent of todolist/)
_project_root = Path(__file__).parent.parent.parent
_env_path = _project_root / ".env"
load_dotenv(_env_path)


# =============================================================================
# Output
# =============================================================================

# Enable verbose output for every command
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"


# =============================================================================
# Task Storage
# =============================================================================

# JSON file holding the task list between runs.
# Empty string (default) keeps tasks in memory for the current process only.
TODO_FILE: str = os.getenv("TODO_FILE", "")


# =============================================================================
# Task Defaults
# =============================================================================

# strftime/strptime format for dates typed on the command line and printed back
TODO_DATE_FORMAT: str = os.getenv("TODO_DATE_FORMAT", "%Y-%m-%d %H:%M")

# Category assigned when `add` is called without one
TODO_DEFAULT_CATEGORY: str = os.getenv("TODO_DEFAULT_CATEGORY", "general")


# =============================================================================
# Helper Functions
# =============================================================================

def uses_task_file() -> bool:
    """Check if a task file is configured (otherwise tasks live in memory)."""
    return bool(TODO_FILE.strip())


def validate_config() -> list[str]:
    """
    Validate the current configuration.

    Returns:
        List of problems found (empty if all valid).
    """
    errors = []

    if not all(directive in TODO_DATE_FORMAT for directive in ("%Y", "%m", "%d")):
        errors.append(f"TODO_DATE_FORMAT {TODO_DATE_FORMAT!r} must include %Y, %m and %d")

    # The date format must be able to read back what it writes
    sample = datetime(2000, 1, 2, 3, 4)
    try:
        rendered = sample.strftime(TODO_DATE_FORMAT)
        datetime.strptime(rendered, TODO_DATE_FORMAT)
    except ValueError:
        errors.append(f"TODO_DATE_FORMAT {TODO_DATE_FORMAT!r} cannot parse its own output")

    if not TODO_DEFAULT_CATEGORY.strip():
        errors.append("TODO_DEFAULT_CATEGORY cannot be empty")

    if uses_task_file():
        parent = Path(TODO_FILE).expanduser().parent
        if not parent.is_dir():
            errors.append(f"TODO_FILE directory does not exist: {parent}")

    return errors


def print_config_summary() -> None:
    """Print a summary of current configuration."""
    print(f"  DEBUG: {DEBUG}")
    print(f"  TODO_FILE: {TODO_FILE if uses_task_file() else '(not set, in-memory)'}")
    print(f"  TODO_DATE_FORMAT: {TODO_DATE_FORMAT}")
    print(f"  TODO_DEFAULT_CATEGORY: {TODO_DEFAULT_CATEGORY}")
