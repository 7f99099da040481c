"""Tests for the bookmark save flow."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pydantic
import pytest

from readview.bookmark import prepare_bookmark
from readview.items import BookmarkContent, BookmarkDraft
from readview.query import FetchError, FetchResult
from readview.settings import ReaderSettings

URL = "https://example.com/blog/2024/static-sites"


def _draft(**kwargs) -> dict:
    data = {"url": URL, "title": "Saved for later", "category": "reading"}
    data.update(kwargs)
    return data


def _fetcher(html: str) -> MagicMock:
    return MagicMock(return_value=FetchResult(html=html, final_url=URL))


# ---------------------------------------------------------------------------
# Draft validation
# ---------------------------------------------------------------------------

class TestBookmarkDraft:
    def test_tags_from_comma_string(self):
        draft = BookmarkDraft(**_draft(tags=" python, ,web scraping ,"))
        assert draft.tags == ["python", "web scraping"]

    def test_tags_from_list(self):
        draft = BookmarkDraft(**_draft(tags=[" a ", "", 3]))
        assert draft.tags == ["a", "3"]

    def test_tags_default_empty(self):
        assert BookmarkDraft(**_draft()).tags == []

    @pytest.mark.parametrize("field", ["url", "title", "category"])
    def test_required_fields(self, field):
        with pytest.raises(pydantic.ValidationError):
            BookmarkDraft(**_draft(**{field: "  "}))

    def test_blank_color_is_none(self):
        assert BookmarkDraft(**_draft(color="")).color is None


# ---------------------------------------------------------------------------
# prepare_bookmark()
# ---------------------------------------------------------------------------

class TestPrepareBookmark:
    def test_success(self, article_html):
        fetcher = _fetcher(article_html)
        result = prepare_bookmark(_draft(tags="web,perf", color="#ff0"), fetcher=fetcher)
        assert isinstance(result, BookmarkContent)
        assert result.title == "Saved for later"
        assert result.tags == ["web", "perf"]
        assert result.color == "#ff0"
        assert result.extraction_method in ("readability", "selector")
        assert '<div class="article-content">' in result.content
        assert "Median time to first byte" in result.content
        assert result.progress == 0
        assert result.is_favorite is False

    def test_fetcher_receives_settings(self, article_html):
        fetcher = _fetcher(article_html)
        settings = ReaderSettings(timeout=3, user_agents=["UA/1"], seed=1)
        prepare_bookmark(_draft(), fetcher=fetcher, settings=settings)
        fetcher.assert_called_once()
        kwargs = fetcher.call_args.kwargs
        assert fetcher.call_args.args[0] == URL
        assert kwargs["timeout"] == 3
        assert kwargs["identity"].choose() == "UA/1"

    def test_timeout_substitutes_error_fragment(self):
        fetcher = MagicMock(
            side_effect=FetchError("timed out after 15s", code=FetchError.TIMEOUT, url=URL),
        )
        with patch("readview.bookmark.extract") as mock_extract:
            result = prepare_bookmark(_draft(tags="keep,me"), fetcher=fetcher)
        mock_extract.assert_not_called()
        assert "Error Fetching Content" in result.content
        assert "TIMEOUT: timed out after 15s" in result.content
        assert f'<a href="{URL}"' in result.content
        assert result.title == "Saved for later"
        assert result.category == "reading"
        assert result.tags == ["keep", "me"]
        assert result.extraction_method is None

    def test_no_content_substitutes_placeholder(self, empty_shell_html):
        result = prepare_bookmark(_draft(), fetcher=_fetcher(empty_shell_html))
        assert "No Readable Content" in result.content
        assert f'<a href="{URL}"' in result.content
        assert result.extraction_method is None

    def test_unexpected_failure_still_returns_content(self, article_html):
        with patch("readview.bookmark.extract", side_effect=RecursionError("too deep")):
            result = prepare_bookmark(_draft(), fetcher=_fetcher(article_html))
        assert "Error Fetching Content" in result.content
        assert "too deep" in result.content

    def test_invalid_draft_raises_before_fetch(self):
        fetcher = MagicMock()
        with pytest.raises(pydantic.ValidationError):
            prepare_bookmark({"url": URL, "title": "x"}, fetcher=fetcher)
        fetcher.assert_not_called()

    def test_default_fetcher_is_fetch_html(self, article_html):
        with patch(
            "readview.bookmark.fetch_html",
            return_value=FetchResult(html=article_html, final_url=URL),
        ) as mock_fetch:
            result = prepare_bookmark(BookmarkDraft(**_draft()))
        mock_fetch.assert_called_once()
        assert result.extraction_method is not None

    def test_model_dump_serialisable(self, article_html):
        result = prepare_bookmark(_draft(), fetcher=_fetcher(article_html))
        data = result.model_dump(mode="json")
        assert data["url"] == URL
        assert isinstance(data["created_at"], str)
