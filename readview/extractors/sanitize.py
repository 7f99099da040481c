"""Strip active and styling content from an extracted fragment.

This is a declutter pass for the reader view, not an XSS boundary: it only
removes the elements and attributes listed below.
"""

from __future__ import annotations

from bs4 import Tag

from readview.dom import fragment_html, parse_fragment

# Removed together with everything inside them
STRIPPED_TAGS: tuple[str, ...] = ("script", "iframe", "style")

# Removed from whichever element carries them
STRIPPED_ATTRIBUTES: frozenset[str] = frozenset({"style", "onclick", "onload", "onerror"})


def sanitize(body_html: str) -> str:
    """Return *body_html* without scripts, iframes, styles and inline handlers.

    Deterministic and idempotent: ``sanitize(sanitize(x)) == sanitize(x)``.
    """
    if not body_html or not body_html.strip():
        return ""

    soup = parse_fragment(body_html)
    for el in soup.find_all(STRIPPED_TAGS):
        # an iframe may already have taken a nested match down with it
        if not el.decomposed:
            el.decompose()

    for el in soup.find_all(True):
        if not isinstance(el, Tag) or not el.attrs:
            continue
        for name in [attr for attr in el.attrs if attr.lower() in STRIPPED_ATTRIBUTES]:
            del el[name]

    return fragment_html(soup)
