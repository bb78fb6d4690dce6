"""Parser package exports."""

from .markdown import MarkdownConverter, MarkdownConverterConfig, html_to_markdown
from .sanitizer import SanitizeResult, identifier_from_href, sanitize_html

__all__ = [
    "MarkdownConverter",
    "MarkdownConverterConfig",
    "SanitizeResult",
    "html_to_markdown",
    "identifier_from_href",
    "sanitize_html",
]
