"""
Pytest Configuration and Fixtures

This module provides:
- Timestamped result file generation
- Shared fixtures for all tests
- Test category organization
"""

import pytest
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from tests.test_config import CONFIG, TEST_DATA, TEST_CATEGORIES, get_all_sample_tasks
from todolist.models.task import Task
from todolist.storage import MemoryStorage
from todolist.todo_list import TodoList


# =============================================================================
# TEST RESULT FILE CONFIGURATION
# =============================================================================

RESULTS_DIR = PROJECT_ROOT / "test_results"


def get_result_filename() -> str:
    """Generate timestamped result filename."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"test_results_{timestamp}.txt"


class TestResultCollector:
    """Collects test results for the report written after the run."""

    __test__ = False

    def __init__(self):
        self.results: List[Dict[str, Any]] = []
        self.start_time: datetime = None
        self.end_time: datetime = None

    def add_result(self, nodeid: str, outcome: str, duration: float, message: str = ""):
        filename = nodeid.split("::")[0].split("/")[-1]
        self.results.append({
            "nodeid": nodeid,
            "category": filename.replace("test_", "").replace(".py", ""),
            "outcome": outcome,
            "duration": duration,
            "message": message,
        })

    def by_category(self) -> Dict[str, List[Dict[str, Any]]]:
        grouped: Dict[str, List[Dict[str, Any]]] = {}
        for result in self.results:
            grouped.setdefault(result["category"], []).append(result)
        return grouped

    def get_summary(self) -> Dict[str, int]:
        return {
            "total": len(self.results),
            "passed": sum(1 for r in self.results if r["outcome"] == "passed"),
            "failed": sum(1 for r in self.results if r["outcome"] == "failed"),
            "skipped": sum(1 for r in self.results if r["outcome"] == "skipped"),
        }


_collector = TestResultCollector()


# =============================================================================
# PYTEST HOOKS
# =============================================================================

def pytest_configure(config):
    """Register markers and start collecting."""
    config.addinivalue_line("markers", "cli_behavior: CLI interface tests")
    config.addinivalue_line("markers", "config_validation: Configuration validation tests")
    config.addinivalue_line("markers", "operational_sanity: End-to-end filesystem tests")
    _collector.start_time = datetime.now()


def pytest_runtest_logreport(report):
    """Record the outcome of each test call."""
    if report.when == "call":
        _collector.add_result(
            nodeid=report.nodeid,
            outcome=report.outcome,
            duration=report.duration,
            message=str(report.longrepr) if report.longrepr else "",
        )


def pytest_sessionfinish(session, exitstatus):
    """Write the formatted report once all tests complete."""
    _collector.end_time = datetime.now()
    if not _collector.results:
        return
    RESULTS_DIR.mkdir(exist_ok=True)
    filepath = RESULTS_DIR / get_result_filename()
    filepath.write_text(generate_formatted_report(_collector), encoding="utf-8")

    summary = _collector.get_summary()
    print(f"\n📄 Test results saved to: {filepath}")
    print(
        f"Total: {summary['total']} | Passed: {summary['passed']} | "
        f"Failed: {summary['failed']} | Skipped: {summary['skipped']}"
    )


def generate_formatted_report(collector: TestResultCollector) -> str:
    """Generate the plain-text test report."""
    summary = collector.get_summary()
    lines = [
        "=" * 80,
        "TODO CLI - TEST RESULTS REPORT",
        "=" * 80,
        f"Run Date:     {collector.start_time:%Y-%m-%d %H:%M:%S}",
        f"Total Tests:  {summary['total']}",
        f"Passed:       {summary['passed']} ✓",
        f"Failed:       {summary['failed']} ✗",
        f"Skipped:      {summary['skipped']} ○",
        f"Pass Rate:    {summary['passed'] / max(summary['total'], 1) * 100:.1f}%",
    ]

    for category, results in sorted(collector.by_category().items()):
        info = TEST_CATEGORIES.get(category, {"name": category.replace("_", " ").title()})
        lines.extend(["", "-" * 80, info["name"], "-" * 80])
        for protection in info.get("protects_against", []):
            lines.append(f"  Protects against: {protection}")
        for result in results:
            mark = {"passed": "✓", "failed": "✗"}.get(result["outcome"], "○")
            name = result["nodeid"].split("::")[-1]
            lines.append(f"  {mark} {name:<60} ({result['duration'] * 1000:.0f}ms)")
            if result["outcome"] == "failed":
                for msg_line in result["message"].splitlines()[:3]:
                    lines.append(f"      └─ {msg_line[:70]}")

    lines.extend(["", "=" * 80, "END OF REPORT", "=" * 80])
    return "\n".join(lines)


# =============================================================================
# SHARED FIXTURES
# =============================================================================

@pytest.fixture
def sample_task():
    """A single active task."""
    return Task(**TEST_DATA["sample_tasks"][0])


@pytest.fixture
def sample_tasks():
    """All sample tasks, fresh for each test."""
    return [Task(**data) for data in get_all_sample_tasks()]


@pytest.fixture
def todo(sample_tasks):
    """A TodoList holding the sample tasks, with the configured ones marked done."""
    todo_list = TodoList(MemoryStorage())
    for task in sample_tasks:
        todo_list.add_task(task)
    for title in TEST_DATA["done_titles"]:
        todo_list.mark_as_done(title)
    return todo_list


@pytest.fixture
def task_file(tmp_path):
    """Path for a JSON task file inside a temporary directory."""
    return tmp_path / CONFIG["task_file_name"]
