"""Log tailing: render, deduplicate and poll Cloud Logging entries."""

from .cache import DedupCache
from .poller import LogPoller, PollState, build_filter
from .processor import process_batch
from .render import render_entry
from .severity import format_severity

__all__ = [
    "DedupCache",
    "LogPoller",
    "PollState",
    "build_filter",
    "format_severity",
    "process_batch",
    "render_entry",
]
