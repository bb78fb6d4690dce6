"""End-to-end crawl pipeline orchestration."""

from __future__ import annotations

import logging
from typing import Any

from .config import CrawlConfig
from .frontier import EnqueueResult, EnqueueStatus, Frontier
from .parsers import MarkdownConverter
from .session import WikiSession
from .storage import CorpusWriter
from .types import CrawlStats, Document, PageIdentifier, RawPage


LOGGER = logging.getLogger(__name__)


class Pipeline:
    """Orchestrates session, frontier, converter, and corpus writer.

    The crawl is strictly sequential: one fetch at a time, pages processed in
    discovery order until the frontier is exhausted.
    """

    def __init__(
        self,
        config: CrawlConfig,
        *,
        session: WikiSession | None = None,
        converter: MarkdownConverter | None = None,
        writer: CorpusWriter | None = None,
        stats: CrawlStats | None = None,
    ) -> None:
        self.config = config

        self.session = session or WikiSession(config)
        self.converter = converter or MarkdownConverter(
            link_prefix=config.link_prefix,
            toc_id=config.toc_id,
        )
        self.writer = writer or CorpusWriter(
            config.output_dir,
            excluded_categories=config.excluded_categories,
            file_extension=config.file_extension,
            summary_prefix=config.summary_prefix,
        )
        self.stats = stats or CrawlStats()

        self._owns_session = session is None

    def run(self, secret: str | None = None) -> dict[str, Any]:
        """Log in (when a secret is given), crawl to exhaustion, write summaries.

        `SessionError`s propagate; files already written stay on disk.
        """

        try:
            if secret is not None:
                self.session.login(secret)
            frontier = self.crawl()
        finally:
            if self._owns_session:
                self.session.close()

        summaries = self.writer.write_summaries()
        self.stats.stored_summaries = len(summaries)
        self.stats.finish()

        return {
            "paths": self.writer.paths,
            "summaries": [str(path) for path in summaries],
            "frontier": frontier.snapshot(),
            "stats": self.stats.to_json(),
        }

    def crawl(self, frontier: Frontier | None = None) -> Frontier:
        """Process pending identifiers until none is left unvisited."""

        frontier = frontier or Frontier()
        self._record_enqueue_many([frontier.seed(self.config.entry_id)])

        identifier = frontier.next_pending()
        while identifier is not None:
            frontier.mark_visited(identifier)
            document = self.process(identifier)

            if document is not None and document.links:
                self._record_enqueue_many(frontier.push_many(document.links))

            identifier = frontier.next_pending()

        snapshot = frontier.snapshot()
        LOGGER.info(
            "Frontier exhausted: visited=%d, pending=%d",
            snapshot["visited"],
            snapshot["pending"],
        )
        return frontier

    def process(self, identifier: PageIdentifier) -> Document | None:
        """Fetch, convert, and persist one page.

        Returns None for missing pages and for pages that fail to convert; both
        contribute no file and no links.
        """

        raw_page = self.session.fetch(identifier)
        if raw_page is None:
            self.stats.fetched_not_found += 1
            return None
        self.stats.fetched_ok += 1
        self.stats.fetch_elapsed_ms_total += raw_page.elapsed_ms

        document = self._convert(raw_page)
        if document is None:
            return None

        if identifier == self.config.entry_id:
            LOGGER.debug("Entry page %s yields %d links", identifier, len(document.links))
            return document

        self.writer.save_document(identifier, document)
        self.stats.stored_docs += 1
        return document

    def _convert(self, raw_page: RawPage) -> Document | None:
        try:
            document = self.converter.build_document(raw_page.html)
        except Exception:
            LOGGER.warning("Error while processing %s", raw_page.identifier, exc_info=True)
            self.stats.converted_error += 1
            self.stats.failed_ids.append(raw_page.identifier)
            return None

        self.stats.converted_ok += 1
        return document

    def _record_enqueue_many(self, results: list[EnqueueResult]) -> None:
        for result in results:
            if result.status == EnqueueStatus.ENQUEUED:
                self.stats.frontier_enqueued += 1
            elif result.status == EnqueueStatus.SKIPPED_VISITED:
                self.stats.frontier_skipped_visited += 1
            else:
                self.stats.frontier_skipped_pending += 1


__all__ = ["Pipeline"]
