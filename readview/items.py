"""Pydantic schemas for extraction results and bookmark content."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, NamedTuple

from bs4 import Tag
from pydantic import BaseModel, ConfigDict, Field, field_validator

UNTITLED = "Untitled Article"


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

class ElementMetrics(NamedTuple):
    """Per-element measurements used by the largest-block strategy."""

    element: Tag
    text_length: int
    paragraph_count: int


class CandidateFragment(BaseModel):
    """Body HTML proposed by one extraction strategy."""

    model_config = ConfigDict(frozen=True)

    title_text: str = ""
    body_html: str
    method: str  # readability|selector|largest_block|paragraphs
    text_length: int = 0
    word_count: int = 0


class ArticleFragment(BaseModel):
    """Final reader-view fragment handed back to the caller."""

    title: str = UNTITLED
    body_html: str
    source_url: str
    method: str = ""

    @field_validator("title", mode="before")
    @classmethod
    def default_title(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
        return v or UNTITLED

    @field_validator("source_url", mode="before")
    @classmethod
    def strip_url(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v


# ---------------------------------------------------------------------------
# Bookmark save flow
# ---------------------------------------------------------------------------

def _utcnow() -> datetime:
    return datetime.now(UTC)


class BookmarkDraft(BaseModel):
    """User-submitted bookmark fields, validated before any network access."""

    url: str
    title: str
    category: str
    tags: list[str] = Field(default_factory=list)
    color: str | None = None

    @field_validator("url", "title", "category", mode="before")
    @classmethod
    def require_text(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v: Any) -> list[str]:
        if v is None:
            return []
        if isinstance(v, str):
            raw = v.split(",")
        elif isinstance(v, (list, tuple, set)):
            raw = [str(tag) for tag in v]
        else:
            return []
        return [tag.strip() for tag in raw if tag.strip()]

    @field_validator("color", mode="before")
    @classmethod
    def blank_color(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class BookmarkContent(BookmarkDraft):
    """A bookmark ready to be stored: the draft plus renderable content."""

    content: str
    extraction_method: str | None = None  # None when a placeholder was used
    progress: int = 0
    is_favorite: bool = False
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
