"""HTML parsing into a navigable document tree.

Everything downstream works on BeautifulSoup trees built with the lxml
builder, which applies the same kind of error recovery browsers do: unclosed
tags, stray end tags and missing ``<html>``/``<body>`` wrappers all produce a
usable tree instead of an exception.
"""

from __future__ import annotations

import copy
import logging

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)


class SourceDocument:
    """A parsed page plus the URL it was fetched from.

    Built once per extraction call and thrown away afterwards.  Strategies
    that mutate the tree must work on :meth:`clone` so that later strategies
    still see the page as it was parsed.
    """

    def __init__(self, soup: BeautifulSoup, base_url: str = "") -> None:
        self.soup = soup
        self.base_url = base_url

    @property
    def title(self) -> str:
        """Text of the first ``<title>`` element, whitespace-collapsed."""
        tag = self.soup.find("title")
        if not isinstance(tag, Tag):
            return ""
        return " ".join(tag.get_text().split())

    @property
    def is_empty(self) -> bool:
        return self.soup.find(True) is None

    def clone(self) -> SourceDocument:
        """Return an independent deep copy of this document."""
        return SourceDocument(copy.copy(self.soup), self.base_url)

    def html(self) -> str:
        return str(self.soup)


def parse(html: str | bytes, base_url: str = "") -> SourceDocument:
    """Parse *html* into a :class:`SourceDocument`.

    Never raises for malformed markup.  Empty input yields a document with no
    elements, which every extraction strategy reports as "no candidate".
    """
    if not html:
        return SourceDocument(BeautifulSoup("", "lxml"), base_url)
    try:
        soup = BeautifulSoup(html, "lxml")
    except Exception as exc:
        # lxml gives up on a handful of pathological inputs (e.g. stray NUL
        # runs); an empty tree keeps the pipeline total.
        logger.warning("HTML parse failed for %s: %s", base_url or "<no url>", exc)
        soup = BeautifulSoup("", "lxml")
    return SourceDocument(soup, base_url)


# Marks the element parse_fragment wraps around its input
_FRAGMENT_ROOT = "data-readview-fragment"


def parse_fragment(html: str) -> BeautifulSoup:
    """Parse an HTML fragment (not a full document) for in-place rewriting.

    The input is parsed inside a marker ``<div>``: lxml wraps text that opens
    a document in ``<p>``, but leaves text inside an open element alone.
    """
    return BeautifulSoup(f'<div {_FRAGMENT_ROOT}="">{html or ""}</div>', "lxml")


def fragment_html(soup: BeautifulSoup) -> str:
    """Serialise a tree built by :func:`parse_fragment` back to a fragment.

    The marker ``<div>`` is unwrapped in place.  lxml also wraps fragments in
    ``<html><body>`` and hoists leading metadata elements into ``<head>``;
    both wrappers are dropped here while their children are kept in document
    order.
    """
    wrapper = soup.find(attrs={_FRAGMENT_ROOT: True})
    if isinstance(wrapper, Tag):
        wrapper.unwrap()
    root = soup.find("html")
    if not isinstance(root, Tag):
        return "".join(str(node) for node in soup.contents).strip()
    parts: list[str] = []
    for section in root.children:
        if isinstance(section, Tag) and section.name in ("head", "body"):
            parts.extend(str(node) for node in section.contents)
        else:
            parts.append(str(section))
    return "".join(parts).strip()
