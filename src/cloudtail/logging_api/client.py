"""Cloud Logging API client implementation."""

import logging
from typing import List, Optional

from cloudtail.cli.core.api_client import APIClient, error_message
from cloudtail.cli.core.constants import ENTRIES_LIST_PATH, ORDER_BY_NEWEST
from cloudtail.logging_api.models import LogEntry, LogListResult

logger = logging.getLogger(__name__)


class LoggingAPIClient(APIClient):
    """Client for the Cloud Logging ``entries`` API."""

    async def list_entries(
        self,
        resource_names: List[str],
        filter: str = "",
        order_by: str = ORDER_BY_NEWEST,
        page_size: Optional[int] = None,
    ) -> LogListResult:
        """List log entries for the given resources.

        Args:
            resource_names: Parent resources, e.g. ``["projects/my-project"]``
            filter: Cloud Logging filter expression; empty for no filter
            order_by: Sort order of the returned entries
            page_size: Optional maximum number of entries to return

        Returns:
            LogListResult: The response status and, on success, the parsed entries.
            Non-200 responses are returned with no entries rather than raised.

        Raises:
            httpx.RequestError: If the request could not be sent
        """
        payload = {
            "resourceNames": resource_names,
            "filter": filter,
            "orderBy": order_by,
        }
        if page_size:
            payload["pageSize"] = page_size

        response = await self.post(ENTRIES_LIST_PATH, payload)

        if response.status_code != 200:
            logger.debug(
                "entries:list returned %s for %s", response.status_code, resource_names
            )
            return LogListResult(
                status=response.status_code, status_text=error_message(response)
            )

        data = response.json() or {}
        entries = [LogEntry.parse_lenient(raw) for raw in data.get("entries") or []]
        return LogListResult(status=response.status_code, entries=entries)
