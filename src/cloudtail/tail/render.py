"""Render log entries as single terminal lines."""

import json
from typing import Optional, Tuple

from rich.markup import escape

from cloudtail.cli.core.constants import (
    AUDIT_LOG_SETUP,
    FUNCTION_NAME_WIDTH,
    NO_FUNCTION_NAME,
    PAYLOAD_UNKNOWN,
    PAYLOAD_WIDTH,
)
from cloudtail.logging_api.models import LogEntry, PayloadKind
from cloudtail.tail.severity import format_severity


def _pad(value: str, width: int) -> str:
    return value.ljust(width)


def _payload_text(entry: LogEntry) -> Tuple[str, Optional[str]]:
    """Return the displayed payload and, for audit records, the method name."""
    payload = entry.select_payload()
    if payload.is_audit_log:
        method_name = payload.value.get("methodName") or NO_FUNCTION_NAME
        return _pad(AUDIT_LOG_SETUP, PAYLOAD_WIDTH), _pad(str(method_name), FUNCTION_NAME_WIDTH)
    if payload.kind is PayloadKind.PROTO:
        serialized = json.dumps(
            payload.value, separators=(",", ":"), ensure_ascii=False, default=str
        )
        return serialized, None
    if payload.kind is PayloadKind.UNKNOWN:
        return _pad(PAYLOAD_UNKNOWN, PAYLOAD_WIDTH), None
    return _pad(str(payload.value), PAYLOAD_WIDTH), None


def render_entry(entry: LogEntry, json_mode: bool = False) -> str:
    """Render ``entry`` as ``"<severity> <timestamp> <function name> <payload>"``.

    The result is rich markup: only the severity carries style, every other field
    is escaped. In ``json_mode`` the payload column is the whole entry as indented
    JSON.
    """
    function_name = _pad(str(entry.function_name or NO_FUNCTION_NAME), FUNCTION_NAME_WIDTH)
    if json_mode:
        payload = json.dumps(
            entry.to_api_dict(), indent=2, ensure_ascii=False, default=str
        )
    else:
        payload, method_name = _payload_text(entry)
        if method_name is not None:
            function_name = method_name
    return " ".join(
        [
            format_severity(entry.severity),
            escape(entry.timestamp),
            escape(function_name),
            escape(payload),
        ]
    )
