"""Breadth-first frontier over wiki page identifiers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from .types import PageIdentifier


class EnqueueStatus(str, Enum):
    """Result status for frontier enqueue attempts."""

    ENQUEUED = "enqueued"
    SKIPPED_VISITED = "skipped_visited"
    SKIPPED_PENDING = "skipped_pending"


@dataclass(frozen=True, slots=True)
class EnqueueResult:
    """Outcome of one enqueue attempt."""

    status: EnqueueStatus
    identifier: PageIdentifier

    @property
    def accepted(self) -> bool:
        return self.status == EnqueueStatus.ENQUEUED


class Frontier:
    """Visited set plus an append-only pending sequence.

    - `next_pending` returns the first pending identifier that is not visited.
    - Entries are never removed; marking them visited makes them inert.
    - Identifiers already visited or already pending are not appended again.
    """

    def __init__(self) -> None:
        self._pending: list[PageIdentifier] = []
        self._pending_set: set[PageIdentifier] = set()
        self._visited: set[PageIdentifier] = set()

        # Every entry before the cursor is visited, so scanning can resume here.
        self._cursor = 0

        self._enqueued_count = 0
        self._skipped_visited_count = 0
        self._skipped_pending_count = 0

    def seed(self, identifier: PageIdentifier) -> EnqueueResult:
        """Add the crawl entry point."""

        return self.push(identifier)

    def push(self, identifier: PageIdentifier) -> EnqueueResult:
        """Append one identifier unless it is visited or already pending."""

        if identifier in self._visited:
            self._skipped_visited_count += 1
            return EnqueueResult(EnqueueStatus.SKIPPED_VISITED, identifier)

        if identifier in self._pending_set:
            self._skipped_pending_count += 1
            return EnqueueResult(EnqueueStatus.SKIPPED_PENDING, identifier)

        self._pending.append(identifier)
        self._pending_set.add(identifier)
        self._enqueued_count += 1
        return EnqueueResult(EnqueueStatus.ENQUEUED, identifier)

    def push_many(self, identifiers: Iterable[PageIdentifier]) -> list[EnqueueResult]:
        """Append multiple identifiers, preserving input order."""

        return [self.push(identifier) for identifier in identifiers]

    def next_pending(self) -> PageIdentifier | None:
        """Return the first pending identifier not yet visited, or None when exhausted."""

        while self._cursor < len(self._pending):
            identifier = self._pending[self._cursor]
            if identifier not in self._visited:
                return identifier
            self._cursor += 1
        return None

    def mark_visited(self, identifier: PageIdentifier) -> bool:
        """Mark identifier as processed. Returns False if it already was."""

        if identifier in self._visited:
            return False
        self._visited.add(identifier)
        return True

    def is_visited(self, identifier: PageIdentifier) -> bool:
        return identifier in self._visited

    @property
    def exhausted(self) -> bool:
        return self.next_pending() is None

    def visited(self) -> set[PageIdentifier]:
        """Return snapshot of visited identifiers."""

        return set(self._visited)

    def pending(self) -> list[PageIdentifier]:
        """Return snapshot of the pending sequence, visited entries included."""

        return list(self._pending)

    def snapshot(self) -> dict[str, int]:
        """Return frontier counters for logs/stats reporting."""

        return {
            "pending": len(self._pending),
            "visited": len(self._visited),
            "enqueued": self._enqueued_count,
            "skipped_visited": self._skipped_visited_count,
            "skipped_pending": self._skipped_pending_count,
        }


__all__ = [
    "EnqueueResult",
    "EnqueueStatus",
    "Frontier",
]
