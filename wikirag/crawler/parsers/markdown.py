"""HTML to markdown conversion for sanitized wiki pages."""

from __future__ import annotations

from dataclasses import dataclass

import html2text

from ..constants import DEFAULT_LINK_PREFIX, DEFAULT_TOC_ID
from ..types import Document
from .sanitizer import sanitize_html


@dataclass(slots=True)
class MarkdownConverterConfig:
    """Config for html2text conversion."""

    ignore_links: bool = False
    ignore_images: bool = False
    ignore_emphasis: bool = False
    ignore_tables: bool = False
    body_width: int = 0
    unicode_snob: bool = True
    mark_code: bool = False


class MarkdownConverter:
    """Convert cleaned HTML into markdown and build `Document`s from raw exports."""

    def __init__(
        self,
        config: MarkdownConverterConfig | None = None,
        *,
        link_prefix: str = DEFAULT_LINK_PREFIX,
        toc_id: str = DEFAULT_TOC_ID,
    ) -> None:
        self.config = config or MarkdownConverterConfig()
        self.link_prefix = link_prefix
        self.toc_id = toc_id

    def _make_handler(self) -> html2text.HTML2Text:
        # HTML2Text keeps parser state, so every page gets a fresh handler.
        handler = html2text.HTML2Text()
        handler.ignore_links = self.config.ignore_links
        handler.ignore_images = self.config.ignore_images
        handler.ignore_emphasis = self.config.ignore_emphasis
        handler.ignore_tables = self.config.ignore_tables
        handler.body_width = self.config.body_width
        handler.unicode_snob = self.config.unicode_snob
        handler.mark_code = self.config.mark_code
        return handler

    def convert(self, html: str) -> str:
        """Return markdown for cleaned HTML without surrounding blank lines."""

        return self._make_handler().handle(html).strip()

    def build_document(self, raw_html: str) -> Document:
        """Sanitize a raw page export and convert it into a document.

        Errors from parsing or conversion propagate to the caller.
        """

        sanitized = sanitize_html(raw_html, link_prefix=self.link_prefix, toc_id=self.toc_id)
        content = self.convert(sanitized.html)
        return Document.from_content(content, sanitized.links)


def html_to_markdown(html: str) -> str:
    """Convert cleaned HTML with the default converter settings."""

    return MarkdownConverter().convert(html)


__all__ = [
    "MarkdownConverter",
    "MarkdownConverterConfig",
    "html_to_markdown",
]
