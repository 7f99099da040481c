"""readview - turn any web page into a clean reader-view fragment.

Quick usage::

    from readview import extract, fetch_html

    page = fetch_html("https://example.com/blog/some-post")
    article = extract(page.html, "https://example.com/blog/some-post")
    print(article.title)
    print(article.body_html)

Bookmark save flow (never raises for network or extraction failures)::

    from readview import prepare_bookmark

    bookmark = prepare_bookmark({
        "url": "https://example.com/blog/some-post",
        "title": "Some post",
        "category": "reading",
    })
    store(bookmark.model_dump())
"""

from readview.bookmark import prepare_bookmark
from readview.items import ArticleFragment, BookmarkContent, BookmarkDraft, CandidateFragment
from readview.parser import ArticleReader
from readview.query import (
    ExtractionError,
    FetchError,
    FetchResult,
    ReadviewError,
    extract,
    fetch_html,
)
from readview.settings import ReaderSettings, load_settings

__version__ = "0.1.0"
__all__ = [
    "ArticleFragment",
    "ArticleReader",
    "BookmarkContent",
    "BookmarkDraft",
    "CandidateFragment",
    "ExtractionError",
    "FetchError",
    "FetchResult",
    "ReaderSettings",
    "ReadviewError",
    "extract",
    "fetch_html",
    "load_settings",
    "prepare_bookmark",
]
