"""Reader-view HTML shells.

Every fragment the package produces (extracted article, fetch failure, empty
page) shares one wrapper so the reading view can style them uniformly.
"""

from __future__ import annotations

from html import escape

from readview.items import UNTITLED

_SHELL = """<div class="article-content">
  <div class="article-header">
    <h1 class="article-title">{title}</h1>
    <div class="article-source">
      <a href="{url}" target="_blank" rel="noopener noreferrer" class="article-source-link">View original article →</a>
    </div>
  </div>
  <div class="article-body">
{body}
  </div>
</div>"""

_ERROR_BLOCK = """<div class="article-error">
  <h2>Error Fetching Content</h2>
  <p>Could not retrieve or parse the content from the URL.</p>
  <p>Reason: {reason}</p>
  <p><a href="{url}" target="_blank" rel="noopener noreferrer">View original page →</a></p>
</div>"""

_NO_CONTENT_BLOCK = """<div class="article-error">
  <h2>No Readable Content</h2>
  <p>No readable content was found on this page.</p>
  <p><a href="{url}" target="_blank" rel="noopener noreferrer">View original page →</a></p>
</div>"""


def format_fragment(title: str | None, body_html: str, source_url: str) -> str:
    """Wrap *body_html* in the article shell with a title and source link."""
    return _SHELL.format(
        title=escape((title or "").strip() or UNTITLED),
        url=escape(source_url, quote=True),
        body=body_html,
    )


def format_error_fragment(title: str | None, source_url: str, reason: str) -> str:
    """Shell for a page that could not be fetched."""
    url = escape(source_url, quote=True)
    block = _ERROR_BLOCK.format(reason=escape(reason or "Unknown error"), url=url)
    return format_fragment(title, block, source_url)


def format_no_content_fragment(title: str | None, source_url: str) -> str:
    """Shell for a page that was fetched but had nothing readable on it."""
    block = _NO_CONTENT_BLOCK.format(url=escape(source_url, quote=True))
    return format_fragment(title, block, source_url)
