#!/usr/bin/env python3
"""
todo - A simple TODO list manager for the command line.

Command-line entry point:
  - add, list, done, update, delete tasks
  - select tasks with a predicate expression
  - run several commands against one list with `shell`

Tasks live in memory for the duration of one invocation unless a task
file is given with --file (or TODO_FILE in the environment).

Usage:
    python main.py add "Buy milk" "2 litres" "2024-05-20 10:00" home
    python main.py list
    python main.py select 'category = "home" and status = on'
    python main.py --file tasks.json done "Buy milk"
    python main.py shell

Examples:
    # Keep a list between runs
    python main.py -f tasks.json add "Write report" "Q2 numbers"
    python main.py -f tasks.json select 'date > 2024-05-01'
"""

import argparse
import shlex
import sys
from typing import Callable, Dict, List, Optional

from todolist.config import config as app_config
from todolist.config import print_config_summary, validate_config
from todolist.models import Task, TaskStatus, parse_datetime
from todolist.selection import SelectionError
from todolist.storage import TaskError, open_storage
from todolist.todo_list import SORT_KEYS, TodoList


SHELL_PROMPT = "todo> "


# =============================================================================
# Argument Types
# =============================================================================

def date_argument(text: str):
    """argparse type for YYYY-MM-DD HH:MM dates."""
    try:
        return parse_datetime(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def status_argument(text: str) -> TaskStatus:
    """argparse type for task statuses (on/active/a, done/d)."""
    try:
        return TaskStatus.parse(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


# =============================================================================
# Parser
# =============================================================================

def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="todo",
        description="A simple TODO list CLI application.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s add "Buy milk" "2 litres" "2024-05-20 10:00" home
  %(prog)s list --sort date
  %(prog)s done "Buy milk"
  %(prog)s update "Buy milk" --category errands
  %(prog)s delete "Buy milk"
  %(prog)s select 'category = "home" and status = on'
  %(prog)s select 'date < 2024-05-20 10:00 or description like "milk"'
  %(prog)s -f tasks.json list        Keep tasks in a JSON file
  %(prog)s shell                     Run several commands on one list

Select fields: title, description, category, status, date
Select operators: = != like (text), = != (status), = != < > <= >= (date)
Unquoted dates must be YYYY-MM-DD [HH:MM]; quote dates in other formats.
        """,
    )

    parser.add_argument(
        "--file", "-f",
        default=None,
        metavar="PATH",
        help="JSON file to load and save tasks (default: TODO_FILE, or in-memory)",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show storage and selection details",
    )

    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Show current configuration and exit",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 1.0.0",
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    add = commands.add_parser("add", help="Add a new task")
    add.add_argument("title", help="Unique task title")
    add.add_argument("description", help="What the task is about")
    add.add_argument(
        "date",
        nargs="?",
        type=date_argument,
        default=None,
        help="Creation date, YYYY-MM-DD HH:MM (default: now)",
    )
    add.add_argument(
        "category",
        nargs="?",
        default=None,
        help="Task category (default: TODO_DEFAULT_CATEGORY)",
    )

    list_cmd = commands.add_parser("list", help="List all tasks")
    list_cmd.add_argument(
        "--sort",
        choices=list(SORT_KEYS),
        default=None,
        help="Sort order (default: order added)",
    )

    done = commands.add_parser("done", help="Mark a task as done")
    done.add_argument("title")

    update = commands.add_parser(
        "update",
        help="Update an existing task",
        description="Update an existing task. Without options, prompts for each field.",
    )
    update.add_argument("title")
    update.add_argument("--description", "-d", default=None, help="New description")
    update.add_argument("--date", type=date_argument, default=None, metavar="DATE",
                        help="New date, YYYY-MM-DD HH:MM")
    update.add_argument("--category", "-c", default=None, help="New category")
    update.add_argument("--status", "-s", type=status_argument, default=None,
                        help="New status (on/done)")

    delete = commands.add_parser("delete", help="Delete a task")
    delete.add_argument("title")

    select = commands.add_parser(
        "select",
        help="Select tasks based on a predicate",
        description="Unquoted dates must be YYYY-MM-DD [HH:MM]; quote dates in other formats.",
    )
    select.add_argument(
        "predicate",
        help='Expression, e.g. category = "work" and status = on',
    )

    help_cmd = commands.add_parser("help", help="Show help for a command")
    help_cmd.add_argument("topic", nargs="?", default=None, metavar="COMMAND")

    commands.add_parser("shell", help="Read commands from stdin against one task list")

    return parser


def command_parsers(parser: argparse.ArgumentParser) -> Dict[str, argparse.ArgumentParser]:
    """Return the sub-parsers keyed by command name."""
    for action in parser._actions:
        if isinstance(action, argparse._SubParsersAction):
            return dict(action.choices)
    return {}


# =============================================================================
# Output
# =============================================================================

def show_config() -> None:
    """Display current configuration."""
    print("=" * 60)
    print("TODO Configuration")
    print("=" * 60)
    print_config_summary()

    errors = validate_config()
    if errors:
        print("\nConfiguration warnings:")
        for error in errors:
            print(f"  ⚠️  {error}")
    else:
        print("\n✓ Configuration valid")
    print("=" * 60)


def print_tasks(tasks: List[Task], empty_message: str) -> None:
    if not tasks:
        print(empty_message)
        return
    for task in tasks:
        print(task)


def print_error(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)


def prompt(message: str) -> str:
    """Print a prompt and read one line; EOF counts as an empty answer."""
    print(message)
    try:
        return input().strip()
    except EOFError:
        return ""


# =============================================================================
# Commands
# =============================================================================

def cmd_add(args, todo: TodoList, parser) -> int:
    category = args.category or app_config.TODO_DEFAULT_CATEGORY
    task = Task.create(args.title, args.description, category, creation_date=args.date)
    todo.add_task(task)
    print(f"Task '{args.title}' added successfully")
    return 0


def cmd_list(args, todo: TodoList, parser) -> int:
    print_tasks(todo.get_all_tasks(sort_by=args.sort), "No tasks found.")
    return 0


def cmd_done(args, todo: TodoList, parser) -> int:
    todo.mark_as_done(args.title)
    print(f"Task '{args.title}' marked as done")
    return 0


def ask_for_changes(task: Task) -> dict:
    """
    Prompt for each editable field of task.

    An empty answer keeps the current value; an unreadable date or status
    is reported and the current value is kept.
    """
    print(f"Updating task: {task.title}")
    changes = {}

    description = prompt("Enter new description (press Enter to keep current):")
    if description:
        changes["description"] = description

    date_text = prompt("Enter new date (YYYY-MM-DD HH:MM) (press Enter to keep current):")
    if date_text:
        try:
            changes["creation_date"] = parse_datetime(date_text)
        except ValueError as e:
            print(f"{e}; keeping current date")

    category = prompt("Enter new category (press Enter to keep current):")
    if category:
        changes["category"] = category

    status_text = prompt("Enter new status (on/done) (press Enter to keep current):")
    if status_text:
        try:
            changes["status"] = TaskStatus.parse(status_text)
        except ValueError as e:
            print(f"{e}; keeping current status")

    return changes


def cmd_update(args, todo: TodoList, parser) -> int:
    changes = {
        "description": args.description,
        "creation_date": args.date,
        "category": args.category,
        "status": args.status,
    }
    if all(value is None for value in changes.values()):
        changes = ask_for_changes(todo.get_task(args.title))

    todo.update_task(args.title, **changes)
    print(f"Task '{args.title}' updated successfully")
    return 0


def cmd_delete(args, todo: TodoList, parser) -> int:
    todo.delete_task(args.title)
    print(f"Task '{args.title}' deleted successfully")
    return 0


def cmd_select(args, todo: TodoList, parser) -> int:
    try:
        tasks = todo.filter_tasks(args.predicate)
    except SelectionError as e:
        print(f"Error filtering tasks: {e}", file=sys.stderr)
        return 1
    print_tasks(tasks, "No tasks match the given predicate.")
    return 0


def cmd_help(args, todo: TodoList, parser) -> int:
    parsers = command_parsers(parser)
    if args.topic is None:
        parser.print_help()
        return 0
    if args.topic not in parsers:
        print_error(f"Unknown command '{args.topic}'. Choose from: {', '.join(parsers)}")
        return 1
    parsers[args.topic].print_help()
    return 0


def cmd_shell(args, todo: TodoList, parser) -> int:
    return run_shell(todo, parser)


COMMANDS: Dict[str, Callable[..., int]] = {
    "add": cmd_add,
    "list": cmd_list,
    "done": cmd_done,
    "update": cmd_update,
    "delete": cmd_delete,
    "select": cmd_select,
    "help": cmd_help,
    "shell": cmd_shell,
}


def run_command(args, todo: TodoList, parser: argparse.ArgumentParser) -> int:
    """
    Run one parsed command against todo.

    Returns:
        Exit code (0 = success, 1 = the command failed).
    """
    handler = COMMANDS[args.command]
    try:
        return handler(args, todo, parser)
    except (TaskError, ValueError) as e:
        print_error(str(e))
        return 1


def run_shell(todo: TodoList, parser: argparse.ArgumentParser) -> int:
    """
    Read commands from stdin and run each against the same list.

    Ends on "exit", "quit" or end of input. Argument errors are reported
    and the session continues. --file and --verbose are rejected on
    shell lines.
    """
    print("TODO shell. Type 'help' for commands, 'exit' to quit.")
    print("Options such as --file and --verbose apply only when the shell is started.")
    while True:
        try:
            line = input(SHELL_PROMPT).strip()
        except EOFError:
            print()
            return 0

        if not line:
            continue
        if line in ("exit", "quit"):
            return 0

        try:
            argv = shlex.split(line)
        except ValueError as e:
            print_error(str(e))
            continue

        try:
            args = parser.parse_args(argv)
        except SystemExit:
            # argparse already printed usage or help
            continue

        if args.file is not None or args.verbose:
            print_error("--file and --verbose only apply when the shell is started")
        elif args.show_config:
            show_config()
        elif args.command is None:
            parser.print_usage()
        elif args.command == "shell":
            print_error("Already in a shell")
        else:
            run_command(args, todo, parser)


# =============================================================================
# Entry Point
# =============================================================================

def main(argv: Optional[list] = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command-line arguments (default: sys.argv[1:]).

    Returns:
        Exit code (0 = success, 1 = error, 2 = usage error).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.show_config:
        show_config()
        return 0

    if args.command is None:
        parser.print_usage(sys.stderr)
        print_error("a command is required (try 'help')")
        return 2

    verbose = args.verbose or app_config.DEBUG
    task_file = args.file if args.file is not None else app_config.TODO_FILE

    try:
        storage = open_storage(task_file, verbose=verbose)
        todo = TodoList(storage, verbose=verbose)
        return run_command(args, todo, parser)

    except TaskError as e:
        print_error(str(e))
        return 1
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130
    except Exception as e:
        print(f"\n❌ Unexpected error: {e}", file=sys.stderr)
        if verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
