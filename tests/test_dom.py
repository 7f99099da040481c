"""Unit tests for HTML parsing helpers."""

from __future__ import annotations

from readview.dom import SourceDocument, fragment_html, parse, parse_fragment


class TestParse:
    def test_returns_source_document(self, article_html):
        doc = parse(article_html, "https://example.com/post")
        assert isinstance(doc, SourceDocument)
        assert doc.base_url == "https://example.com/post"

    def test_title_whitespace_collapsed(self, article_html):
        doc = parse(article_html)
        assert doc.title == "How Static Sites Got Fast Again"

    def test_missing_title_is_empty(self):
        doc = parse("<html><body><p>hi</p></body></html>")
        assert doc.title == ""

    def test_empty_input(self):
        doc = parse("")
        assert doc.is_empty
        assert doc.title == ""

    def test_malformed_markup_recovers(self):
        doc = parse("<div><p>unclosed <b>bold <i>both</div></span><p>second")
        assert not doc.is_empty
        assert len(doc.soup.find_all("p")) == 2

    def test_bytes_input(self):
        doc = parse(b"<html><head><title>Bytes</title></head><body></body></html>")
        assert doc.title == "Bytes"


class TestClone:
    def test_clone_is_independent(self, article_html):
        doc = parse(article_html, "https://example.com/post")
        clone = doc.clone()
        for el in clone.soup.find_all("article"):
            el.decompose()
        assert clone.soup.find("article") is None
        assert doc.soup.find("article") is not None

    def test_clone_keeps_base_url(self):
        doc = parse("<p>x</p>", "https://example.com/a")
        assert doc.clone().base_url == "https://example.com/a"


class TestFragmentRoundTrip:
    def test_drops_html_body_wrappers(self):
        html = fragment_html(parse_fragment('<div class="a"><p>one</p></div><p>two</p>'))
        assert html == '<div class="a"><p>one</p></div><p>two</p>'

    def test_empty(self):
        assert fragment_html(parse_fragment("")) == ""

    def test_leading_text_not_wrapped(self):
        html = fragment_html(parse_fragment("loose text with <b>bold</b>"))
        assert html == "loose text with <b>bold</b>"

    def test_stray_end_tag_keeps_order(self):
        html = fragment_html(parse_fragment("a</div><p>b</p>"))
        assert html == "a<p>b</p>"
