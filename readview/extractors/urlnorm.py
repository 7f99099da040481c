"""Relative-URL rewriting and small URL helpers."""

from __future__ import annotations

import logging
from urllib.parse import urljoin, urlparse

from bs4 import Tag

from readview.dom import fragment_html, parse_fragment

logger = logging.getLogger(__name__)

URL_ATTRIBUTES: tuple[str, ...] = ("href", "src")

# Values starting with these (case-insensitive) are left alone
_ABSOLUTE_PREFIXES: tuple[str, ...] = ("http", "#", "mailto")


def is_relative(value: str) -> bool:
    return not value.lower().startswith(_ABSOLUTE_PREFIXES)


def resolve_url(value: str, base_url: str) -> str:
    """Resolve *value* against *base_url*, returning *value* unchanged on failure."""
    if not base_url or not is_relative(value):
        return value
    try:
        return urljoin(base_url, value)
    except ValueError as exc:
        logger.debug("Could not resolve %r against %s: %s", value, base_url, exc)
        return value


def absolutize(body_html: str, base_url: str) -> str:
    """Rewrite relative ``href``/``src`` values in *body_html* to absolute URLs.

    Values already starting with ``http``, ``#`` or ``mailto`` are kept as
    they are, and so is any value that cannot be resolved.
    """
    if not body_html or not body_html.strip():
        return ""

    soup = parse_fragment(body_html)
    for el in soup.find_all(True):
        if not isinstance(el, Tag):
            continue
        for attr in URL_ATTRIBUTES:
            value = el.get(attr)
            if not isinstance(value, str) or not value:
                continue
            resolved = resolve_url(value, base_url)
            if resolved != value:
                el[attr] = resolved
    return fragment_html(soup)


def extract_domain(url: str) -> str:
    """Return the netloc (host) component of a URL, lowercased."""
    try:
        return urlparse(url).netloc.lower()
    except Exception:
        return ""
