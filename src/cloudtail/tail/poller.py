"""Fetch log entries once or keep polling for new ones."""

import asyncio
import logging
from contextlib import nullcontext
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, List, Optional

import httpx
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn

from cloudtail.cli.core.constants import (
    DEFAULT_POLL_INTERVAL_MS,
    GRAB_LOGS,
    LOCAL_CREDS,
    ORDER_BY_NEWEST,
    POLL_OVERLAP_INTERVALS,
)
from cloudtail.cli.exceptions import FetchError, TransportError, fetch_error_for_status
from cloudtail.cli.utils.ux import console as default_console
from cloudtail.cli.utils.ux import print_error
from cloudtail.logging_api.client import LoggingAPIClient
from cloudtail.tail.cache import DedupCache
from cloudtail.tail.processor import process_batch

logger = logging.getLogger(__name__)


class PollState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    PRINTED = "printed"
    FAILED = "failed"
    TERMINATED = "terminated"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """RFC 3339 UTC timestamp with millisecond precision, e.g. ``2016-11-29T23:00:00.000Z``."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    utc = value.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_filter(start: Optional[datetime] = None) -> str:
    """Build a Cloud Logging filter for entries at or after ``start``.

    See https://cloud.google.com/logging/docs/view/advanced-filters#search-by-time
    """
    if start is None:
        return ""
    return f'timestamp >= "{format_timestamp(start)}"'


def _report_fetch_error(error: FetchError) -> None:
    print_error(escape(str(error)))


class LogPoller:
    """One log-tailing session for a project.

    The poller owns the session's ``DedupCache``: every batch it fetches, whether
    once or on each watch tick, is printed through the same cache so overlapping
    fetches never print an entry twice.
    """

    def __init__(
        self,
        client: LoggingAPIClient,
        project_id: str,
        *,
        json_mode: bool = False,
        local_creds: bool = False,
        cache: Optional[DedupCache] = None,
        console: Optional[Console] = None,
        on_error: Callable[[FetchError], None] = _report_fetch_error,
        clock: Callable[[], datetime] = _utcnow,
        show_progress: bool = False,
    ):
        self.client = client
        self.project_id = project_id
        self.json_mode = json_mode
        self.local_creds = local_creds
        self.cache = cache if cache is not None else DedupCache()
        self.console = console or default_console
        self.on_error = on_error
        self.clock = clock
        self.show_progress = show_progress
        self.state = PollState.IDLE

    @property
    def resource_names(self) -> List[str]:
        return [f"projects/{self.project_id}"]

    def _progress(self):
        if not self.show_progress:
            return nullcontext()
        progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=self.console,
            transient=True,
        )
        progress.add_task(
            f"{LOCAL_CREDS if self.local_creds else ''}{GRAB_LOGS}", total=None
        )
        return progress

    async def fetch_and_print(self, start: Optional[datetime] = None) -> List[str]:
        """Fetch one batch of entries newer than ``start`` and print the new ones.

        Returns:
            The lines printed for this batch.

        Raises:
            FetchError: If the API could not be reached or returned a non-200 status
        """
        log_filter = build_filter(start)
        logger.debug("Fetching logs for %s with filter %r", self.project_id, log_filter)
        self.state = PollState.FETCHING
        try:
            with self._progress():
                result = await self.client.list_entries(
                    resource_names=self.resource_names,
                    filter=log_filter,
                    order_by=ORDER_BY_NEWEST,
                )
        except (httpx.HTTPError, ValueError) as e:
            self.state = PollState.FAILED
            raise TransportError(f"Failed to fetch logs: {e}", 0) from e

        if not result.ok:
            self.state = PollState.FAILED
            raise fetch_error_for_status(
                result.status, result.status_text, self.local_creds
            )

        lines = process_batch(result.entries, self.json_mode, self.cache, self.console)
        self.state = PollState.PRINTED
        logger.debug(
            "Printed %d of %d entries (%d seen this session)",
            len(lines),
            len(result.entries),
            len(self.cache),
        )
        return lines

    async def run_once(self) -> List[str]:
        """Fetch the most recent entries once, with no lower time bound.

        Raises:
            FetchError: If the fetch failed; it is not retried
        """
        try:
            return await self.fetch_and_print()
        finally:
            self.state = PollState.TERMINATED

    async def run_watch(
        self,
        interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        stop_event: Optional[asyncio.Event] = None,
    ) -> None:
        """Poll every ``interval_ms`` until ``stop_event`` is set.

        Each tick asks for entries from the last ``POLL_OVERLAP_INTERVALS``
        intervals and relies on the cache to drop the overlap. Ticks never
        overlap: the next one starts once the current fetch has finished and
        the rest of the interval has passed. A failed tick is reported through
        ``on_error`` and polling continues. Setting ``stop_event`` cancels the
        wait and any fetch in flight.
        """
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        stop_event = stop_event or asyncio.Event()
        loop = asyncio.get_running_loop()
        interval = interval_ms / 1000
        overlap = timedelta(milliseconds=POLL_OVERLAP_INTERVALS * interval_ms)

        try:
            while not stop_event.is_set():
                tick_started = loop.time()
                await self._watch_tick(self.clock() - overlap, stop_event)
                if stop_event.is_set():
                    break
                self.state = PollState.IDLE
                remaining = interval - (loop.time() - tick_started)
                if remaining > 0:
                    await self._wait_for_stop(stop_event, remaining)
        finally:
            self.state = PollState.TERMINATED

    async def _watch_tick(self, start: datetime, stop_event: asyncio.Event) -> None:
        fetch = asyncio.ensure_future(self.fetch_and_print(start))
        stopped = asyncio.ensure_future(stop_event.wait())
        try:
            await asyncio.wait({fetch, stopped}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (fetch, stopped):
                if not task.done():
                    task.cancel()
            await asyncio.gather(fetch, stopped, return_exceptions=True)

        if fetch.cancelled():
            logger.debug("Fetch cancelled by stop request")
            return
        error = fetch.exception()
        if isinstance(error, FetchError):
            logger.debug("Tick failed with status %s", error.status)
            self.on_error(error)
        elif error is not None:
            raise error

    @staticmethod
    async def _wait_for_stop(stop_event: asyncio.Event, timeout: float) -> None:
        stopped = asyncio.ensure_future(stop_event.wait())
        try:
            await asyncio.wait({stopped}, timeout=timeout)
        finally:
            if not stopped.done():
                stopped.cancel()
            await asyncio.gather(stopped, return_exceptions=True)
