"""Core constants for cloudtail.

This module contains constants that are used throughout the cloudtail codebase.
Centralizing these constants helps prevent circular imports and provides a single
source of truth for values that are referenced by multiple modules.
"""

# Environment variable names
ENV_API_BASE_URL = "CLOUDTAIL_API_BASE_URL"
ENV_ACCESS_TOKEN = "CLOUDTAIL_ACCESS_TOKEN"
ENV_LOCAL_CREDS = "CLOUDTAIL_LOCAL_CREDS"
ENV_PROJECT_ID = "CLOUDTAIL_PROJECT_ID"
ENV_POLL_INTERVAL_MS = "CLOUDTAIL_POLL_INTERVAL_MS"
ENV_VERBOSE = "CLOUDTAIL_VERBOSE"

# API defaults
DEFAULT_API_BASE_URL = "https://logging.googleapis.com/v2"
ENTRIES_LIST_PATH = "/entries:list"
LOGS_CONSOLE_URL = "https://console.cloud.google.com/logs/viewer?project={project_id}"

# Polling
DEFAULT_POLL_INTERVAL_MS = 6000
# Watch-mode lower bound reaches back this many poll intervals
POLL_OVERLAP_INTERVALS = 10
ORDER_BY_NEWEST = "timestamp desc"

# Rendering
MAX_ENTRIES_PER_BATCH = 50
SEVERITY_WIDTH = 20
FUNCTION_NAME_WIDTH = 15
PAYLOAD_WIDTH = 20
JSON_PAYLOAD_MAX_CHARS = 255
AUDIT_LOG_TYPE = "type.googleapis.com/google.cloud.audit.AuditLog"

# User-facing messages
NO_FUNCTION_NAME = "N/A"
PAYLOAD_UNKNOWN = "Unknown log payload."
AUDIT_LOG_SETUP = "Setting up Cloud Logging."
GRAB_LOGS = "Grabbing logs..."
LOCAL_CREDS = "Using local credentials: "

UNAUTHENTICATED = "Unauthenticated request: please log in again."
UNAUTHENTICATED_LOCAL = (
    "Local client credentials are unauthenticated. "
    "Check the scopes and authorization of your local credentials."
)
PERMISSION_DENIED = (
    "Permission denied. Make sure the Cloud Logging API is enabled for this project."
)
PERMISSION_DENIED_LOCAL = (
    "Permission denied. Be sure that you have:\n"
    "- Added the necessary scopes needed for the API.\n"
    "- Enabled the Cloud Logging API for the project.\n"
    "- Granted the local credentials read access to the project's logs."
)
