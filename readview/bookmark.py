"""Bookmark save flow: fetch once, extract, and always end with renderable content.

Storage is the caller's business; :func:`prepare_bookmark` only produces the
record to store.  Whatever happens on the network or in extraction, the user's
title, category, tags and colour survive and ``content`` holds either the
article or a placeholder linking to the original page.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from readview.extractors.formatter import format_error_fragment, format_no_content_fragment
from readview.items import BookmarkContent, BookmarkDraft
from readview.query import ExtractionError, FetchError, FetchResult, extract, fetch_html
from readview.settings import ReaderSettings

logger = logging.getLogger(__name__)

Fetcher = Callable[..., FetchResult]


def _reason(exc: BaseException) -> str:
    if isinstance(exc, FetchError):
        return exc.reason
    return str(exc) or exc.__class__.__name__


def prepare_bookmark(
    draft: BookmarkDraft | dict[str, Any],
    *,
    fetcher: Fetcher | None = None,
    settings: ReaderSettings | None = None,
) -> BookmarkContent:
    """Fetch *draft.url* and return the bookmark with its reader-view content.

    Args:
        draft:    Validated draft, or a mapping validated here (raises
                  ``pydantic.ValidationError`` for missing url/title/category).
        fetcher:  Callable with the signature of
                  :func:`~readview.query.fetch_html`; defaults to it.
        settings: Timeout and identity configuration.

    Returns:
        :class:`~readview.items.BookmarkContent`.  ``extraction_method`` is
        ``None`` when a placeholder was stored instead of an article.
    """
    if not isinstance(draft, BookmarkDraft):
        draft = BookmarkDraft.model_validate(draft)
    settings = settings or ReaderSettings()
    fetcher = fetcher or fetch_html

    method: str | None = None
    try:
        page = fetcher(
            draft.url,
            timeout=settings.timeout,
            identity=settings.identity_pool(),
            accept_language=settings.accept_language,
        )
        article = extract(page.html, draft.url)
        content = article.body_html
        method = article.method
    except FetchError as exc:
        logger.warning("Error fetching content for %s: %s", draft.url, exc.reason)
        content = format_error_fragment(draft.title, draft.url, exc.reason)
    except ExtractionError as exc:
        logger.warning("No readable content for %s: %s", draft.url, exc)
        content = format_no_content_fragment(draft.title, draft.url)
    except Exception as exc:
        # Parser or library faults must not lose the user's submission.
        logger.exception("Unexpected failure extracting %s", draft.url)
        content = format_error_fragment(draft.title, draft.url, _reason(exc))

    return BookmarkContent(
        **draft.model_dump(),
        content=content,
        extraction_method=method,
    )
