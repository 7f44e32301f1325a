"""Cloud Logging API client and models.

This package provides the client used to list log entries from Cloud Logging.
"""

from .client import LoggingAPIClient
from .models import LogEntry, LogListResult, Payload, PayloadKind

__all__ = ["LoggingAPIClient", "LogEntry", "LogListResult", "Payload", "PayloadKind"]
