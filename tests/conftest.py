"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"

ARTICLE_URL = "https://example.com/blog/2024/static-sites"


def read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def article_html() -> str:
    return read_fixture("article.html")


@pytest.fixture
def blocks_html() -> str:
    return read_fixture("blocks.html")


@pytest.fixture
def paragraphs_html() -> str:
    return read_fixture("paragraphs.html")


@pytest.fixture
def empty_shell_html() -> str:
    return read_fixture("empty_shell.html")


@pytest.fixture
def nav_article_html() -> str:
    return (
        "<html><head><title>T</title></head><body><nav>Skip</nav><article><p>"
        + "word " * 20
        + "</p></article></body></html>"
    )
