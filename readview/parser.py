"""readview.parser — High-level ArticleReader class.

Bundles settings and a User-Agent pool into one reusable object.

Usage::

    from readview import ArticleReader

    reader = ArticleReader(timeout=20, seed=7)

    # Fetch and extract
    article = reader.fetch("https://example.com/blog/post")

    # Pre-fetched HTML (no network)
    article = reader.parse("<html>...</html>", url="https://example.com/post")

    # Full save flow, never raises for network or extraction failures
    bookmark = reader.prepare({
        "url": "https://example.com/blog/post",
        "title": "Read later",
        "category": "articles",
        "tags": "python, scraping",
    })
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from readview.bookmark import prepare_bookmark
from readview.query import extract as _extract
from readview.query import fetch_html as _fetch_html
from readview.settings import ReaderSettings

if TYPE_CHECKING:
    from readview.items import ArticleFragment, BookmarkContent, BookmarkDraft


class ArticleReader:
    """Reader-view extractor with its own fetch configuration.

    Args:
        settings: Full settings object.  When given, *timeout* and *seed* are
                  ignored.
        timeout:  Per-request network timeout in seconds.
        seed:     Seed for the User-Agent pool; ``None`` picks at random.
    """

    def __init__(
        self,
        settings: ReaderSettings | None = None,
        *,
        timeout: float | None = None,
        seed: int | None = None,
    ) -> None:
        if settings is None:
            overrides: dict[str, Any] = {"seed": seed}
            if timeout is not None:
                overrides["timeout"] = timeout
            settings = ReaderSettings(**overrides)
        self._settings = settings
        self._identity = settings.identity_pool()

    @property
    def settings(self) -> ReaderSettings:
        return self._settings

    def fetch(self, url: str) -> ArticleFragment:
        """Fetch *url* and extract its article.

        Raises:
            :class:`~readview.query.FetchError`: if the page cannot be fetched.
            :class:`~readview.query.ExtractionError`: if nothing readable was found.
        """
        page = _fetch_html(
            url,
            timeout=self._settings.timeout,
            identity=self._identity,
            accept_language=self._settings.accept_language,
        )
        return _extract(page.html, url)

    def parse(self, html: str, url: str = "") -> ArticleFragment:
        """Extract from pre-fetched HTML — no network calls."""
        return _extract(html, url)

    def prepare(self, draft: BookmarkDraft | dict[str, Any]) -> BookmarkContent:
        """Run the bookmark save flow with this reader's settings."""
        return prepare_bookmark(draft, settings=self._settings)
