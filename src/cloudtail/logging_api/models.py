"""Models for Cloud Logging API responses."""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cloudtail.cli.core.constants import AUDIT_LOG_TYPE, JSON_PAYLOAD_MAX_CHARS

logger = logging.getLogger(__name__)


class PayloadKind(str, Enum):
    """Which payload field of an entry carries its data."""

    TEXT = "text"
    JSON = "json"
    PROTO = "proto"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Payload:
    """The payload selected for display, tagged with where it came from."""

    kind: PayloadKind
    value: Any = None

    @property
    def type_url(self) -> Optional[str]:
        """The ``@type`` tag of a structured payload, if any."""
        if isinstance(self.value, dict):
            return self.value.get("@type")
        return None

    @property
    def is_audit_log(self) -> bool:
        return self.kind is PayloadKind.PROTO and self.type_url == AUDIT_LOG_TYPE


class MonitoredResource(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: Optional[str] = None
    labels: Dict[str, Any] = Field(default_factory=dict)


class LogEntry(BaseModel):
    """A single Cloud Logging entry.

    Unknown fields are kept so the entry can be dumped back in full.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    insert_id: Optional[str] = Field(default=None, alias="insertId")
    severity: str = "DEFAULT"
    timestamp: str = ""
    resource: Optional[MonitoredResource] = None
    text_payload: Optional[str] = Field(default=None, alias="textPayload")
    json_payload: Optional[Dict[str, Any]] = Field(default=None, alias="jsonPayload")
    proto_payload: Optional[Dict[str, Any]] = Field(default=None, alias="protoPayload")

    @property
    def function_name(self) -> Optional[str]:
        if self.resource is None:
            return None
        return self.resource.labels.get("function_name") or None

    def select_payload(self) -> Payload:
        """Pick the payload shown in human-readable output.

        Text wins over JSON, JSON over proto. JSON payloads are serialized and
        truncated to ``JSON_PAYLOAD_MAX_CHARS``.
        """
        if self.text_payload:
            return Payload(PayloadKind.TEXT, self.text_payload)
        if self.json_payload is not None:
            serialized = json.dumps(
                self.json_payload, separators=(",", ":"), ensure_ascii=False
            )
            return Payload(PayloadKind.JSON, serialized[:JSON_PAYLOAD_MAX_CHARS])
        if self.proto_payload is not None:
            return Payload(PayloadKind.PROTO, self.proto_payload)
        return Payload(PayloadKind.UNKNOWN)

    def to_api_dict(self) -> Dict[str, Any]:
        """The entry as the API returned it."""
        return self.model_dump(by_alias=True, exclude_unset=True)

    @classmethod
    def parse_lenient(cls, raw: Any) -> "LogEntry":
        """Validate ``raw``, dropping top-level fields that fail validation.

        Malformed entries are still displayed with placeholders rather than
        failing the whole batch. An entry that is not a mapping at all becomes
        an empty entry.
        """
        if not isinstance(raw, dict):
            logger.warning("Malformed log entry of type %s", type(raw).__name__)
            return cls()
        try:
            return cls.model_validate(raw)
        except ValidationError as exc:
            invalid = {str(error["loc"][0]) for error in exc.errors() if error["loc"]}
            logger.warning(
                "Malformed log entry %s; ignoring fields %s",
                raw.get("insertId"),
                sorted(invalid),
            )
            return cls.model_validate(
                {key: value for key, value in raw.items() if key not in invalid}
            )


@dataclass
class LogListResult:
    """Outcome of one ``entries:list`` call."""

    status: int
    status_text: str = ""
    entries: List[LogEntry] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == 200
