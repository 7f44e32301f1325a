"""Session-scoped record of log entries already printed."""

from typing import Dict


class DedupCache:
    """Insert ids printed during one session.

    Grows for the life of the session and is never evicted; overlapping polls
    return the same entries again and this is what keeps them off the screen.
    """

    def __init__(self) -> None:
        self._seen: Dict[str, bool] = {}

    def seen(self, insert_id: str) -> bool:
        return self._seen.get(insert_id, False)

    def mark(self, insert_id: str) -> None:
        self._seen[insert_id] = True

    def __len__(self) -> int:
        return len(self._seen)

    def __contains__(self, insert_id: object) -> bool:
        return insert_id in self._seen
