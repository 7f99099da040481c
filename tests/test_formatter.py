"""Unit tests for reader-view shells."""

from __future__ import annotations

from readview.extractors.formatter import (
    format_error_fragment,
    format_fragment,
    format_no_content_fragment,
)

URL = "https://x.com/a"


class TestFormatFragment:
    def test_shell_structure(self):
        out = format_fragment("T", "<p>body</p>", URL)
        assert out.startswith('<div class="article-content">')
        assert '<div class="article-header">' in out
        assert '<h1 class="article-title">T</h1>' in out
        assert f'<a href="{URL}"' in out
        assert "View original article" in out
        assert '<div class="article-body">\n<p>body</p>' in out

    def test_missing_title_placeholder(self):
        assert '<h1 class="article-title">Untitled Article</h1>' in format_fragment(None, "", URL)
        assert '<h1 class="article-title">Untitled Article</h1>' in format_fragment("  ", "", URL)

    def test_title_escaped(self):
        out = format_fragment("<b>Tom & Jerry</b>", "", URL)
        assert "&lt;b&gt;Tom &amp; Jerry&lt;/b&gt;" in out

    def test_url_escaped(self):
        out = format_fragment("T", "", 'https://x.com/?a=1&b="2"')
        assert 'href="https://x.com/?a=1&amp;b=&quot;2&quot;"' in out


class TestErrorFragments:
    def test_error_fragment(self):
        out = format_error_fragment("My title", URL, "TIMEOUT: timed out after 15s")
        assert "Error Fetching Content" in out
        assert "Reason: TIMEOUT: timed out after 15s" in out
        assert f'<a href="{URL}"' in out
        assert '<h1 class="article-title">My title</h1>' in out

    def test_error_fragment_unknown_reason(self):
        assert "Reason: Unknown error" in format_error_fragment("T", URL, "")

    def test_no_content_fragment(self):
        out = format_no_content_fragment("T", URL)
        assert "No Readable Content" in out
        assert "View original page" in out
        assert '<div class="article-content">' in out
