"""Crawler package: config, shared types, and pipeline components."""

from .config import CrawlConfig, load_config, save_config
from .corpus import CorpusEntry, iter_corpus_entries, load_corpus_entries
from .errors import AuthenticationError, SessionError, UnexpectedStatusError
from .frontier import EnqueueResult, EnqueueStatus, Frontier
from .parsers import (
    MarkdownConverter,
    MarkdownConverterConfig,
    SanitizeResult,
    html_to_markdown,
    identifier_from_href,
    sanitize_html,
)
from .pipeline import Pipeline
from .session import WikiSession
from .storage import CorpusWriter
from .types import (
    CrawlStats,
    Document,
    PageIdentifier,
    RawPage,
    category_for,
    title_from_content,
    utc_now_iso,
)

__all__ = [
    "AuthenticationError",
    "CorpusEntry",
    "CorpusWriter",
    "CrawlConfig",
    "CrawlStats",
    "Document",
    "EnqueueResult",
    "EnqueueStatus",
    "Frontier",
    "MarkdownConverter",
    "MarkdownConverterConfig",
    "PageIdentifier",
    "Pipeline",
    "RawPage",
    "SanitizeResult",
    "SessionError",
    "UnexpectedStatusError",
    "WikiSession",
    "category_for",
    "html_to_markdown",
    "identifier_from_href",
    "iter_corpus_entries",
    "load_config",
    "load_corpus_entries",
    "sanitize_html",
    "save_config",
    "title_from_content",
    "utc_now_iso",
]
