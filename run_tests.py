#!/usr/bin/env python3
"""
Test Runner Script for the TODO CLI

Runs pytest over all tests or over named categories.

Usage:
    python run_tests.py                      # Run all tests
    python run_tests.py --category cli       # Run specific category
    python run_tests.py --quick              # Stop on first failure
    python run_tests.py --verbose            # Verbose output
    python run_tests.py --list               # List available categories
"""

import argparse
import subprocess
import sys
from datetime import datetime
from pathlib import Path

# Test categories mapping
TEST_CATEGORIES = {
    "cli": "tests/test_system_cli_behavior.py",
    "config": "tests/test_system_config_validation.py",
    "sanity": "tests/test_system_operational_sanity.py",
    "unit_models": "tests/test_models.py",
    "unit_storage": "tests/test_storage.py",
    "unit_selection": "tests/test_selection.py",
    "unit_todo_list": "tests/test_todo_list.py",
}

CATEGORY_DESCRIPTIONS = {
    "cli": "CLI behavior - commands, output, exit codes, shell session",
    "config": "Configuration validation - env vars, defaults, warnings",
    "sanity": "Operational sanity - no stray files, task file round trips",
    "unit_models": "Unit tests - task model, status and date parsing",
    "unit_storage": "Unit tests - memory and JSON file storage",
    "unit_selection": "Unit tests - select expression lexer, parser, evaluation",
    "unit_todo_list": "Unit tests - add/done/update/delete/list/select operations",
}


def list_categories():
    """Print available test categories."""
    print("\n" + "=" * 60)
    print("AVAILABLE TEST CATEGORIES")
    print("=" * 60)

    print("\n📋 System Tests:")
    for key, desc in CATEGORY_DESCRIPTIONS.items():
        if not key.startswith("unit_"):
            print(f"  {key:15} - {desc}")

    print("\n📋 Unit Tests:")
    for key, desc in CATEGORY_DESCRIPTIONS.items():
        if key.startswith("unit_"):
            print(f"  {key:15} - {desc}")

    print("=" * 60)


def run_tests(categories=None, verbose=False, quick=False):
    """Run tests with specified options."""
    cmd = [sys.executable, "-m", "pytest"]

    paths = [
        TEST_CATEGORIES[cat]
        for cat in categories or []
        if cat in TEST_CATEGORIES and Path(TEST_CATEGORIES[cat]).exists()
    ]
    unknown = [cat for cat in categories or [] if cat not in TEST_CATEGORIES]
    if unknown:
        print(f"Unknown categories ignored: {', '.join(unknown)}")

    cmd.extend(paths or ["tests/"])
    cmd.append("-v" if verbose else "--tb=short")

    if quick:
        cmd.extend(["-x", "--ff"])  # Stop on first failure, failed first

    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    print("\n" + "=" * 60)
    print("TODO CLI TEST RUNNER")
    print("=" * 60)
    print(f"Started:    {timestamp}")
    print(f"Categories: {', '.join(categories) if categories else 'ALL'}")
    print(f"Options:    {'verbose' if verbose else 'standard'}{', quick' if quick else ''}")
    print("=" * 60 + "\n")

    result = subprocess.run(cmd, cwd=Path(__file__).parent)
    return result.returncode


def main():
    parser = argparse.ArgumentParser(
        description="Run TODO CLI tests with formatted output",
    )
    parser.add_argument("--category", "-c", type=str,
                        help="Test category to run (comma-separated for multiple)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show verbose output")
    parser.add_argument("--quick", "-q", action="store_true",
                        help="Quick mode - stop on first failure")
    parser.add_argument("--list", "-l", action="store_true", help="List available test categories")

    args = parser.parse_args()

    if args.list:
        list_categories()
        return 0

    categories = None
    if args.category:
        categories = [c.strip() for c in args.category.split(",")]

    return run_tests(categories=categories, verbose=args.verbose, quick=args.quick)


if __name__ == "__main__":
    sys.exit(main())
