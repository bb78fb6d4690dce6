"""Core type definitions for the wiki crawler.

This module is intentionally dependency-light so other crawler modules can import
shared records without introducing cycles.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


PageIdentifier = str

JSONPrimitive = str | int | float | bool | None
JSONValue = JSONPrimitive | list["JSONValue"] | dict[str, "JSONValue"]
JSONDict = dict[str, JSONValue]


def utc_now_iso() -> str:
    """Return an RFC3339-like UTC timestamp string for stats output."""

    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def category_for(identifier: PageIdentifier) -> str:
    """Return the namespace prefix of an identifier.

    Identifiers without a namespace separator form their own category.
    """

    return identifier.split(":", maxsplit=1)[0]


def title_from_content(content: str) -> str:
    """Derive a document title from the first line of converted content."""

    first_line = content.split("\n", maxsplit=1)[0]
    return first_line.lstrip().lstrip("#").strip()


@dataclass(frozen=True, slots=True)
class RawPage:
    """Successful export of one wiki page."""

    identifier: PageIdentifier
    html: str
    elapsed_ms: int = 0


@dataclass(frozen=True, slots=True)
class Document:
    """One converted page: markdown content plus the pages it links to."""

    title: str
    content: str
    links: tuple[PageIdentifier, ...] = ()

    @classmethod
    def from_content(
        cls,
        content: str,
        links: list[PageIdentifier] | tuple[PageIdentifier, ...] = (),
    ) -> "Document":
        # dict.fromkeys keeps first-seen order while dropping repeats.
        return cls(
            title=title_from_content(content),
            content=content,
            links=tuple(dict.fromkeys(links)),
        )


@dataclass(slots=True)
class CrawlStats:
    """Simple mutable counters used for crawl summary reporting."""

    frontier_enqueued: int = 0
    frontier_skipped_visited: int = 0
    frontier_skipped_pending: int = 0

    fetched_ok: int = 0
    fetched_not_found: int = 0
    fetch_elapsed_ms_total: int = 0
    converted_ok: int = 0
    converted_error: int = 0
    stored_docs: int = 0
    stored_summaries: int = 0

    failed_ids: list[str] = field(default_factory=list)

    started_at: str = field(default_factory=utc_now_iso)
    finished_at: str | None = None

    def finish(self) -> None:
        self.finished_at = utc_now_iso()

    def to_json(self) -> JSONDict:
        return {
            "frontier_enqueued": self.frontier_enqueued,
            "frontier_skipped_visited": self.frontier_skipped_visited,
            "frontier_skipped_pending": self.frontier_skipped_pending,
            "fetched_ok": self.fetched_ok,
            "fetched_not_found": self.fetched_not_found,
            "fetch_elapsed_ms_total": self.fetch_elapsed_ms_total,
            "converted_ok": self.converted_ok,
            "converted_error": self.converted_error,
            "stored_docs": self.stored_docs,
            "stored_summaries": self.stored_summaries,
            "failed_ids": list(self.failed_ids),
            "started_at": self.started_at,
            "finished_at": self.finished_at,
        }


__all__ = [
    "CrawlStats",
    "Document",
    "JSONDict",
    "JSONPrimitive",
    "JSONValue",
    "PageIdentifier",
    "RawPage",
    "category_for",
    "title_from_content",
    "utc_now_iso",
]
