"""Structural cleanup of exported wiki XHTML plus internal link discovery."""

from __future__ import annotations

from dataclasses import dataclass, field

from bs4 import BeautifulSoup, Comment

from ..constants import DEFAULT_LINK_PREFIX, DEFAULT_TOC_ID
from ..types import PageIdentifier


STRIPPED_ATTRIBUTES = ("class", "id")


@dataclass(slots=True)
class SanitizeResult:
    """Cleaned HTML and the internal links found in it, in document order."""

    html: str
    links: list[PageIdentifier] = field(default_factory=list)


def identifier_from_href(href: str, *, link_prefix: str = DEFAULT_LINK_PREFIX) -> PageIdentifier | None:
    """Turn an internal wiki href into a page identifier.

    `/doku.php?id=foo:bar&do=x#frag` becomes `foo:bar`. Hrefs that do not start
    with `link_prefix`, or that name no page, return None.
    """

    if not href.startswith(link_prefix):
        return None

    # Fragment first, then any further query parameters.
    href = href.split("#", maxsplit=1)[0]
    href = href.split("&", maxsplit=1)[0]
    identifier = href[len(link_prefix):]
    return identifier or None


def sanitize_html(
    html: str,
    *,
    link_prefix: str = DEFAULT_LINK_PREFIX,
    toc_id: str = DEFAULT_TOC_ID,
) -> SanitizeResult:
    """Strip non-content nodes, drop class/id attributes, extract links, unwrap divs.

    The steps run in a fixed order since later ones rely on earlier cleanup.
    Links are not deduplicated here.
    """

    soup = BeautifulSoup(html, "lxml")

    head = soup.find("head")
    if head is not None:
        head.decompose()

    toc = soup.find("div", id=toc_id)
    if toc is not None:
        toc.decompose()

    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()

    for tag in soup.find_all(True):
        for attribute in STRIPPED_ATTRIBUTES:
            tag.attrs.pop(attribute, None)

    links: list[PageIdentifier] = []
    for anchor in soup.find_all("a", href=True):
        identifier = identifier_from_href(anchor["href"], link_prefix=link_prefix)
        if identifier is not None:
            links.append(identifier)

    div = soup.find("div")
    while div is not None:
        div.unwrap()
        div = soup.find("div")

    return SanitizeResult(html=str(soup), links=links)


__all__ = [
    "SanitizeResult",
    "identifier_from_href",
    "sanitize_html",
]
