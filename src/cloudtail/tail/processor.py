"""Print a fetched batch of log entries, oldest first, without repeats."""

from typing import Iterable, List, Optional

from rich.console import Console

from cloudtail.cli.core.constants import MAX_ENTRIES_PER_BATCH
from cloudtail.cli.utils.ux import console as default_console
from cloudtail.logging_api.models import LogEntry
from cloudtail.tail.cache import DedupCache
from cloudtail.tail.render import render_entry


def process_batch(
    entries: Optional[Iterable[LogEntry]],
    json_mode: bool,
    cache: DedupCache,
    console: Optional[Console] = None,
    max_entries: int = MAX_ENTRIES_PER_BATCH,
) -> List[str]:
    """Print the entries of one batch and return the printed lines.

    The API returns entries newest first, so the batch is reversed before printing.
    Only the first ``max_entries`` entries after reversal are considered. Entries
    whose insert id is already in ``cache`` are skipped; printed ones are marked.
    Each line is printed as soon as it is rendered.
    """
    console = console or default_console
    printed: List[str] = []
    if not entries:
        return printed

    for entry in list(reversed(list(entries)))[:max_entries]:
        insert_id = entry.insert_id
        if insert_id is not None and cache.seen(insert_id):
            continue
        line = render_entry(entry, json_mode)
        console.print(line, highlight=False, emoji=False, soft_wrap=True)
        printed.append(line)
        # Entries without an insert id cannot be recognised again.
        if insert_id is not None:
            cache.mark(insert_id)
    return printed
