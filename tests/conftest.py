"""pytest configuration for cloudtail tests."""

import io
import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest
from rich.console import Console

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if SRC.exists():
    sys.path.insert(0, str(SRC))


def pytest_configure(config):
    """Configure pytest environment."""
    # API endpoint configuration
    os.environ.setdefault("CLOUDTAIL_API_BASE_URL", "http://localhost:9000/v2")
    os.environ.setdefault("CLOUDTAIL_ACCESS_TOKEN", "test-token")
    os.environ.setdefault("CLOUDTAIL_PROJECT_ID", "test-project")
    os.environ.setdefault("CLOUDTAIL_VERBOSE", "true")


@pytest.fixture
def capture_console():
    """A plain-text rich console writing to an in-memory buffer."""
    return Console(
        file=io.StringIO(), width=400, color_system=None, force_terminal=False
    )


@pytest.fixture
def console_lines(capture_console) -> Callable[[], List[str]]:
    """Return the lines printed to ``capture_console`` so far, right-stripped."""
    return lambda: [
        line.rstrip() for line in capture_console.file.getvalue().splitlines()
    ]


@pytest.fixture
def raw_entry() -> Callable[..., Dict[str, Any]]:
    """Factory for raw API log entries with a text payload by default."""

    def _make(
        insert_id: Optional[str] = "id-1",
        timestamp: str = "2024-05-01T12:00:00.000Z",
        severity: str = "INFO",
        function_name: Optional[str] = "myFunction",
        **payload: Any,
    ) -> Dict[str, Any]:
        entry: Dict[str, Any] = {
            "severity": severity,
            "timestamp": timestamp,
            "resource": {
                "type": "cloud_function",
                "labels": {"function_name": function_name} if function_name else {},
            },
        }
        if insert_id is not None:
            entry["insertId"] = insert_id
        if not payload:
            payload = {"textPayload": f"message {insert_id}"}
        entry.update(payload)
        return entry

    return _make


@pytest.fixture
def make_entry(raw_entry):
    """Factory for parsed ``LogEntry`` models."""
    from cloudtail.logging_api.models import LogEntry

    def _make(*args: Any, **kwargs: Any) -> LogEntry:
        return LogEntry.parse_lenient(raw_entry(*args, **kwargs))

    return _make
