"""Default values shared by config, session client, parsers, and storage."""

from __future__ import annotations


DEFAULT_BASE_URL = "https://leowiki.htl-leonding.ac.at/"
DEFAULT_USERNAME = "r.stropek"
DEFAULT_ENTRY_ID = "start"
DEFAULT_OUTPUT_DIR = "data"
DEFAULT_SECRET_ENV = "WIKI_SECRET"

# DokuWiki routes everything through one script.
WIKI_SCRIPT = "doku.php"
DEFAULT_EXPORT_FORMAT = "export_xhtml"
DEFAULT_LINK_PREFIX = "/doku.php?id="
DEFAULT_TOC_ID = "dw__toc"

# The wiki answers 200 for missing pages and renders one of these placeholders.
DEFAULT_NOT_FOUND_MARKERS = (
    "Dieses Thema existiert noch nicht",
    "Diese Seite existiert nicht mehr",
)

DEFAULT_EXCLUDED_CATEGORIES = ("archive", "werkstaette", "tutorial")
DEFAULT_FILE_EXTENSION = ".md"
DEFAULT_SUMMARY_PREFIX = "summary_"

# Files the downstream indexer never reads.
SKIPPED_CORPUS_PREFIXES = ("summary", "archive")

DEFAULT_TIMEOUT_SECONDS: float | None = None
DEFAULT_USER_AGENT = "wikirag-crawler/0.1"

SUPPORTED_CONFIG_SUFFIXES = (".yaml", ".yml", ".json")
JSON_INDENT = 2


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_ENTRY_ID",
    "DEFAULT_EXCLUDED_CATEGORIES",
    "DEFAULT_EXPORT_FORMAT",
    "DEFAULT_FILE_EXTENSION",
    "DEFAULT_LINK_PREFIX",
    "DEFAULT_NOT_FOUND_MARKERS",
    "DEFAULT_OUTPUT_DIR",
    "DEFAULT_SECRET_ENV",
    "DEFAULT_SUMMARY_PREFIX",
    "DEFAULT_TIMEOUT_SECONDS",
    "DEFAULT_TOC_ID",
    "DEFAULT_USERNAME",
    "DEFAULT_USER_AGENT",
    "JSON_INDENT",
    "SKIPPED_CORPUS_PREFIXES",
    "SUPPORTED_CONFIG_SUFFIXES",
    "WIKI_SCRIPT",
]
