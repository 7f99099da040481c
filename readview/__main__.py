"""CLI entry point: python -m readview --url URL [options]"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="readview",
        description=(
            "Extract the readable article from a web page and print it as a\n"
            "reader-view HTML fragment."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--url", metavar="URL",
                        help="Fetch this page and extract it")
    source.add_argument("--file", metavar="PATH",
                        help="Extract from a saved HTML file instead of fetching")
    parser.add_argument("--source-url", default="", metavar="URL",
                        help="Page URL for --file (base for relative links)")
    parser.add_argument("--title", default=None, metavar="TEXT",
                        help="Bookmark title; with --url, runs the bookmark save flow")
    parser.add_argument("--category", default="uncategorized", metavar="NAME",
                        help="Bookmark category (default: uncategorized)")
    parser.add_argument("--tags", default="", metavar="TAGS",
                        help="Comma-separated bookmark tags")
    parser.add_argument("--config", default=None, metavar="PATH",
                        help="YAML settings file")
    parser.add_argument("--timeout", type=float, default=None, metavar="SECONDS",
                        help="Fetch timeout in seconds (default: 15)")
    parser.add_argument("--out", default=None, metavar="FILE",
                        help="Write output here instead of stdout")
    parser.add_argument("--json", action="store_true", default=False,
                        help="Print the full result as JSON")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help="Logging level (default: WARNING)")
    return parser


def _print_summary(title: str, url: str, method: str | None, length: int) -> None:
    try:
        from rich.console import Console
        from rich.panel import Panel

        console = Console(stderr=True)
        console.print(
            Panel.fit(
                f"[bold cyan]readview[/bold cyan]\n"
                f"Title:   [green]{title}[/green]\n"
                f"Source:  [yellow]{url or '—'}[/yellow]\n"
                f"Method:  {method or 'placeholder'}\n"
                f"Length:  {length:,} chars",
                border_style="cyan",
                title="[bold]Extraction[/bold]",
            ),
        )
    except ImportError:
        print(f"readview | {title} | {method or 'placeholder'} | {length} chars", file=sys.stderr)


def _write(text: str, out: str | None) -> None:
    if out:
        Path(out).write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text + "\n")


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from pydantic import ValidationError

    from readview.bookmark import prepare_bookmark
    from readview.query import ExtractionError, FetchError, extract, fetch_html
    from readview.settings import load_settings

    source_url = args.url or args.source_url
    try:
        settings = load_settings(args.config, url=source_url)
        if args.timeout is not None:
            settings = settings.model_copy(update={"timeout": args.timeout})
    except (OSError, ValidationError) as exc:
        print(f"ERROR: could not load settings: {exc}", file=sys.stderr)
        return 2

    if args.url and args.title:
        try:
            bookmark = prepare_bookmark(
                {
                    "url": args.url,
                    "title": args.title,
                    "category": args.category,
                    "tags": args.tags,
                },
                settings=settings,
            )
        except ValidationError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return 2
        _print_summary(bookmark.title, bookmark.url, bookmark.extraction_method, len(bookmark.content))
        _write(bookmark.model_dump_json(indent=2) if args.json else bookmark.content, args.out)
        return 0

    try:
        if args.file:
            html = Path(args.file).read_text(encoding="utf-8", errors="replace")
        else:
            page = fetch_html(
                args.url,
                timeout=settings.timeout,
                identity=settings.identity_pool(),
                accept_language=settings.accept_language,
            )
            html = page.html
        article = extract(html, source_url)
    except OSError as exc:
        print(f"ERROR: could not read {args.file}: {exc}", file=sys.stderr)
        return 1
    except FetchError as exc:
        print(f"ERROR: {exc.reason}", file=sys.stderr)
        return 1
    except ExtractionError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    _print_summary(article.title, article.source_url, article.method, len(article.body_html))
    _write(json.dumps(article.model_dump(), indent=2) if args.json else article.body_html, args.out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
