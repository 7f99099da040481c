"""readview.query - single-URL fetch and reader-view extraction API.

Basic usage::

    from readview.query import extract, fetch_html

    page = fetch_html("https://example.com/blog/some-post")
    article = extract(page.html, page.final_url)
    print(article.title)
    print(article.body_html)

``extract`` performs no I/O.  ``fetch_html`` makes exactly one request,
bounded by *timeout*, and never retries.
"""

from __future__ import annotations

import gzip
import http.client
import logging
import socket
import urllib.error
import urllib.request
import zlib
from typing import NamedTuple
from urllib.parse import urlparse

from readview.dom import parse
from readview.extractors.formatter import format_fragment
from readview.extractors.sanitize import sanitize
from readview.extractors.strategies import document_title, extract_best
from readview.extractors.urlnorm import absolutize
from readview.identity import UserAgentPool
from readview.items import ArticleFragment
from readview.settings import DEFAULT_ACCEPT, DEFAULT_ACCEPT_LANGUAGE, DOWNLOAD_TIMEOUT

logger = logging.getLogger(__name__)

NO_READABLE_CONTENT = "no_readable_content"


# ---------------------------------------------------------------------------
# Public exceptions
# ---------------------------------------------------------------------------

class ReadviewError(Exception):
    """Base class for errors raised by readview."""


class ExtractionError(ReadviewError):
    """Raised when a page parsed but no strategy found readable content.

    Attributes:
        kind -- machine-readable cause (``"no_readable_content"``)
        url  -- the source URL of the page
    """

    def __init__(self, message: str, kind: str = NO_READABLE_CONTENT, url: str = "") -> None:
        super().__init__(message)
        self.kind = kind
        self.url = url


class FetchError(ReadviewError):
    """Raised when a URL cannot be fetched.

    Attributes:
        code   -- short failure class (``TIMEOUT``, ``DNS_FAILURE``, ``HTTP_ERROR``, ...)
        url    -- the URL that failed
        status -- HTTP status code (0 if no response was received)
    """

    INVALID_URL = "INVALID_URL"
    TIMEOUT = "TIMEOUT"
    DNS_FAILURE = "DNS_FAILURE"
    HTTP_ERROR = "HTTP_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    DECODE_ERROR = "DECODE_ERROR"

    def __init__(self, message: str, code: str = "", url: str = "", status: int = 0) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.url = url
        self.status = status

    @property
    def reason(self) -> str:
        """Human-readable reason shown in error fragments."""
        if self.code:
            return f"{self.code}: {self.message}"
        return self.message


class FetchResult(NamedTuple):
    html: str
    final_url: str
    status: int = 200


# ---------------------------------------------------------------------------
# Low-level HTTP fetch
# ---------------------------------------------------------------------------

def _decode_response_body(raw: bytes, headers: object | None, url: str) -> str:
    encoding = ""
    if headers is not None:
        try:
            encoding = str(headers.get("Content-Encoding", "")).lower().strip()
        except Exception:
            encoding = ""

    try:
        if encoding == "gzip":
            raw = gzip.decompress(raw)
        elif encoding in ("deflate", "zlib"):
            raw = zlib.decompress(raw)
    except (OSError, zlib.error) as exc:
        raise FetchError(
            f"{encoding} decompression failed: {exc}", code=FetchError.DECODE_ERROR, url=url,
        ) from exc

    charset = "utf-8"
    if headers is not None:
        try:
            charset = headers.get_content_charset("utf-8") or "utf-8"
        except Exception:
            charset = "utf-8"
    try:
        return raw.decode(charset, errors="replace")
    except (LookupError, ValueError):
        return raw.decode("utf-8", errors="replace")


def _is_timeout(reason: object) -> bool:
    return isinstance(reason, TimeoutError) or "timed out" in str(reason).lower()


def fetch_html(
    url: str,
    *,
    timeout: float = DOWNLOAD_TIMEOUT,
    identity: UserAgentPool | None = None,
    user_agent: str | None = None,
    accept_language: str = DEFAULT_ACCEPT_LANGUAGE,
) -> FetchResult:
    """Fetch *url* once and return the decoded body with the final URL.

    Args:
        url:             Fully-qualified HTTP/HTTPS URL.
        timeout:         Request timeout in seconds (default 15).
        identity:        Pool to draw the User-Agent from.  A fresh unseeded
                         pool is used when omitted.
        user_agent:      Explicit User-Agent; takes precedence over *identity*.
        accept_language: ``Accept-Language`` header value.

    Returns:
        :class:`FetchResult` with the body, the URL after redirects and the
        HTTP status.

    Raises:
        FetchError: On invalid URLs, timeouts, DNS failures, non-2xx
            responses and other network errors.  There are no retries.
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise FetchError(
            f"Unsupported URL {url!r}", code=FetchError.INVALID_URL, url=url,
        )

    ua = user_agent or (identity or UserAgentPool()).choose()
    req = urllib.request.Request(
        url,
        headers={
            "User-Agent": ua,
            "Accept": DEFAULT_ACCEPT,
            "Accept-Language": accept_language,
            "Accept-Encoding": "gzip, deflate",
        },
    )

    logger.info("fetch: %s (timeout=%ss)", url, timeout)
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            raw: bytes = resp.read()
            final_url = resp.geturl() or url
            status = getattr(resp, "status", 200) or 200
            html = _decode_response_body(raw, resp.headers, url)
    except urllib.error.HTTPError as exc:
        raise FetchError(
            f"HTTP {exc.code} {exc.reason}",
            code=FetchError.HTTP_ERROR,
            url=url,
            status=exc.code,
        ) from exc
    except urllib.error.URLError as exc:
        if _is_timeout(exc.reason):
            raise FetchError(
                f"timed out after {timeout}s", code=FetchError.TIMEOUT, url=url,
            ) from exc
        if isinstance(exc.reason, socket.gaierror):
            raise FetchError(
                f"could not resolve host {parsed.hostname}",
                code=FetchError.DNS_FAILURE,
                url=url,
            ) from exc
        raise FetchError(
            f"{exc.reason}", code=FetchError.NETWORK_ERROR, url=url,
        ) from exc
    except TimeoutError as exc:
        raise FetchError(
            f"timed out after {timeout}s", code=FetchError.TIMEOUT, url=url,
        ) from exc
    except OSError as exc:
        raise FetchError(f"{exc}", code=FetchError.NETWORK_ERROR, url=url) from exc
    except (http.client.InvalidURL, ValueError) as exc:
        raise FetchError(f"{exc}", code=FetchError.INVALID_URL, url=url) from exc
    except http.client.HTTPException as exc:
        # IncompleteRead, BadStatusLine and friends are not OSErrors
        raise FetchError(
            f"{type(exc).__name__}: {exc}", code=FetchError.NETWORK_ERROR, url=url,
        ) from exc

    logger.debug("fetched %d chars from %s (final url %s)", len(html), url, final_url)
    return FetchResult(html=html, final_url=final_url, status=status)


# ---------------------------------------------------------------------------
# Extraction (pure HTML -> ArticleFragment, no network)
# ---------------------------------------------------------------------------

def extract(html: str | bytes, source_url: str = "") -> ArticleFragment:
    """Extract the readable article from *html* and wrap it for the reader view.

    Runs the strategy cascade, then sanitises the winning body, rewrites its
    relative links against *source_url* and wraps it in the article shell.

    Args:
        html:       Raw HTML of the page, possibly malformed.
        source_url: URL the page was fetched from; base for relative links.

    Returns:
        :class:`~readview.items.ArticleFragment`.

    Raises:
        ExtractionError: If no strategy found readable content.
    """
    doc = parse(html, source_url)
    candidate = extract_best(doc)
    if candidate is None:
        raise ExtractionError(
            "No readable content found on this page", url=source_url,
        )

    title = document_title(doc)
    body = absolutize(sanitize(candidate.body_html), source_url)
    logger.info(
        "extract: %s via %s (%d words)", source_url or "<no url>", candidate.method, candidate.word_count,
    )
    return ArticleFragment(
        title=title,
        body_html=format_fragment(title, body, source_url),
        source_url=source_url,
        method=candidate.method,
    )
