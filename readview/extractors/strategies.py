"""Main content extraction with a four-strategy cascade.

Strategy 1: readability-lxml   (Mozilla Readability algorithm)
Strategy 2: known selectors    (common article containers)
Strategy 3: largest block      (paragraph count, then text length)
Strategy 4: paragraph sweep    (every substantial <p>, concatenated)

Strategies run in that order and the first one whose output clears its own
threshold wins; later strategies are never consulted once one succeeds.
"""

from __future__ import annotations

import functools
import logging
import re
from collections.abc import Callable

from bs4 import BeautifulSoup, Tag

from readview.dom import SourceDocument
from readview.items import UNTITLED, CandidateFragment, ElementMetrics

logger = logging.getLogger(__name__)

# Minimum characters of HTML readability must return
_READABILITY_MIN_HTML = 100
# Shortest paragraph text readability will score
_READABILITY_CHAR_THRESHOLD = 20
# readability-lxml marks the <body> it returns when no candidate scored
_READABILITY_BODY_FALLBACK = re.compile(r'<body\b[^>]*\bid="readabilityBody"', re.IGNORECASE)
# Minimum trimmed text characters for a selector match
_SELECTOR_MIN_TEXT = 200
# Minimum (untrimmed) text characters for a largest-block candidate
_BLOCK_MIN_TEXT = 200
# Heuristic: a block needs this many times the other's paragraphs to win on
# paragraph count alone
_PARAGRAPH_RATIO = 1.5
_PARAGRAPH_MIN_CHARS = 50
_PARAGRAPH_MIN_WORDS = 10

# Content-container selectors (tried in order)
CONTENT_SELECTORS: tuple[str, ...] = (
    "article",
    "main",
    '[role="main"]',
    ".article",
    ".post",
    ".entry-content",
    ".content",
    "#content",
    ".article__body",
    ".post-content",
)

_BLOCK_TAGS: tuple[str, ...] = ("div", "section", "article")

# Tag/class/id substrings that mark page chrome rather than content
BOILERPLATE_MARKERS: tuple[str, ...] = (
    "nav",
    "header",
    "footer",
    "sidebar",
    "menu",
    "comment",
)


def _text_length(tag: Tag) -> int:
    return len(tag.get_text())


def _count_words(text: str) -> int:
    return len(text.split())


def _candidate(doc: SourceDocument, body_html: str, method: str, text: str) -> CandidateFragment:
    return CandidateFragment(
        title_text=doc.title,
        body_html=body_html,
        method=method,
        text_length=len(text.strip()),
        word_count=_count_words(text),
    )


# ---------------------------------------------------------------------------
# Strategy 1: readability-lxml
# ---------------------------------------------------------------------------

def try_readability(doc: SourceDocument) -> CandidateFragment | None:
    # Readability prunes the tree it scores; give it a private copy.  No url is
    # passed so that link rewriting stays with absolutize().
    isolated = doc.clone()
    if isolated.is_empty:
        return None
    try:
        from readability import Document  # type: ignore[import-untyped]

        reader = Document(
            isolated.html(),
            min_text_length=_READABILITY_CHAR_THRESHOLD,
        )
        content = reader.summary(html_partial=True)
    except Exception as exc:
        logger.debug("readability failed: %s", exc)
        return None

    if not content or len(content) <= _READABILITY_MIN_HTML:
        logger.debug("readability output too short (%d chars)", len(content or ""))
        return None

    if _READABILITY_BODY_FALLBACK.search(content):
        # whole page, chrome included; not an article
        logger.debug("readability found no candidate, returned raw body")
        return None

    text = BeautifulSoup(content, "lxml").get_text(separator=" ")
    return _candidate(doc, content, "readability", text)


# ---------------------------------------------------------------------------
# Strategy 2: known content selectors
# ---------------------------------------------------------------------------

def try_selectors(doc: SourceDocument) -> CandidateFragment | None:
    for selector in CONTENT_SELECTORS:
        try:
            element = doc.soup.select_one(selector)
        except Exception as exc:
            logger.debug("CSS selector %r failed: %s", selector, exc)
            continue
        if not isinstance(element, Tag):
            continue
        text = element.get_text()
        if len(text.strip()) > _SELECTOR_MIN_TEXT:
            logger.debug("selector %r matched (%d chars)", selector, len(text.strip()))
            return _candidate(doc, element.decode_contents(), "selector", text)
    return None


# ---------------------------------------------------------------------------
# Strategy 3: largest text block
# ---------------------------------------------------------------------------

def is_boilerplate(tag: Tag) -> bool:
    """Return True if *tag*'s name, classes or id contain a boilerplate marker."""
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = [classes]
    fields = (
        tag.name.lower(),
        " ".join(classes).lower(),
        str(tag.get("id") or "").lower(),
    )
    return any(marker in field for marker in BOILERPLATE_MARKERS for field in fields)


def compare_blocks(a: ElementMetrics, b: ElementMetrics) -> int:
    """Sort comparator: negative when *a* should rank before *b*."""
    if a.paragraph_count > b.paragraph_count * _PARAGRAPH_RATIO:
        return -1
    if b.paragraph_count > a.paragraph_count * _PARAGRAPH_RATIO:
        return 1
    return b.text_length - a.text_length


def rank_blocks(blocks: list[ElementMetrics]) -> list[ElementMetrics]:
    return sorted(blocks, key=functools.cmp_to_key(compare_blocks))


def measure_blocks(doc: SourceDocument) -> list[ElementMetrics]:
    metrics: list[ElementMetrics] = []
    for el in doc.soup.find_all(_BLOCK_TAGS):
        if not isinstance(el, Tag) or is_boilerplate(el):
            continue
        text_length = _text_length(el)
        if text_length <= _BLOCK_MIN_TEXT:
            continue
        metrics.append(
            ElementMetrics(
                element=el,
                text_length=text_length,
                paragraph_count=len(el.find_all("p")),
            ),
        )
    return metrics


def try_largest_block(doc: SourceDocument) -> CandidateFragment | None:
    ranked = rank_blocks(measure_blocks(doc))
    if not ranked:
        return None
    best = ranked[0]
    logger.debug(
        "largest block <%s> paragraphs=%d text=%d (of %d candidates)",
        best.element.name, best.paragraph_count, best.text_length, len(ranked),
    )
    return _candidate(doc, best.element.decode_contents(), "largest_block", best.element.get_text())


# ---------------------------------------------------------------------------
# Strategy 4: paragraph concatenation
# ---------------------------------------------------------------------------

def _is_substantial_paragraph(p: Tag) -> bool:
    text = p.get_text().strip()
    return len(text) > _PARAGRAPH_MIN_CHARS and _count_words(text) > _PARAGRAPH_MIN_WORDS


def try_paragraphs(doc: SourceDocument) -> CandidateFragment | None:
    paragraphs = [
        p for p in doc.soup.find_all("p")
        if isinstance(p, Tag) and _is_substantial_paragraph(p)
    ]
    if not paragraphs:
        return None
    body = "<div>" + "".join(str(p) for p in paragraphs) + "</div>"
    text = " ".join(p.get_text() for p in paragraphs)
    return _candidate(doc, body, "paragraphs", text)


# ---------------------------------------------------------------------------
# Chain
# ---------------------------------------------------------------------------

Strategy = Callable[[SourceDocument], CandidateFragment | None]

STRATEGIES: tuple[Strategy, ...] = (
    try_readability,
    try_selectors,
    try_largest_block,
    try_paragraphs,
)


def extract_best(doc: SourceDocument) -> CandidateFragment | None:
    """Run the strategies in order and return the first acceptable candidate.

    Returns ``None`` when no strategy finds readable content.
    """
    for strategy in STRATEGIES:
        candidate = strategy(doc)
        if candidate is not None:
            logger.debug(
                "%s accepted: %d words, %d chars of html",
                candidate.method, candidate.word_count, len(candidate.body_html),
            )
            return candidate
    logger.debug("no strategy produced content for %s", doc.base_url or "<no url>")
    return None


def document_title(doc: SourceDocument) -> str:
    return doc.title or UNTITLED
