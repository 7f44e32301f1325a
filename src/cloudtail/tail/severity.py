"""Severity labels for terminal output."""

from rich.markup import escape

from cloudtail.cli.core.constants import SEVERITY_WIDTH

SEVERITY_STYLES = {
    "ERROR": "red",
    "INFO": "cyan",
    "DEBUG": "green",
    "NOTICE": "magenta",
    "WARNING": "yellow",
}


def format_severity(severity: str) -> str:
    """Return ``severity`` as rich markup, padded to ``SEVERITY_WIDTH`` visible columns.

    Known severities are colored; anything else is shown as-is.
    """
    severity = str(severity)
    padding = " " * max(SEVERITY_WIDTH - len(severity), 0)
    style = SEVERITY_STYLES.get(severity)
    if style is None:
        return escape(severity) + padding
    return f"[{style}]{severity}[/{style}]{padding}"
