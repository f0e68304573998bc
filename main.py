"""CLI entry point for the page-to-Markdown extractor."""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional

from markdown_mcp.extract import html_to_markdown
from markdown_mcp.extract.options import ExtractOptions
from markdown_mcp.pipeline import ExtractionError, get_page_markdown, set_renderer, shutdown_renderer
from markdown_mcp.utils.config import settings
from markdown_mcp.utils.logger import get_logger
from markdown_mcp.web import create_renderer

log = get_logger(__name__)


def write_output(markdown: str, output: Optional[str]) -> None:
    """Print *markdown* or write it to *output*."""
    if output:
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(markdown + "\n", encoding="utf-8")
        print(f"Wrote {len(markdown)} chars to {path}", file=sys.stderr)
    else:
        print(markdown)


async def run_url(url: str, options: ExtractOptions, output: Optional[str] = None) -> bool:
    """Extract a single URL and emit the result.  Returns False on failure."""
    try:
        markdown = await get_page_markdown(url, options)
    except ExtractionError as exc:
        print(f"\nError: {exc}\n", file=sys.stderr)
        return False
    write_output(markdown, output)
    return True


async def interactive_mode(options: ExtractOptions) -> None:
    """REPL loop: one URL per line."""
    print("Markdown extractor  (type 'quit' or 'exit' to stop)\n")
    while True:
        try:
            url = input("URL: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye.")
            break
        if url.lower() in ("quit", "exit", "q"):
            print("Goodbye.")
            break
        if not url:
            continue
        await run_url(url, options)


async def run(args: argparse.Namespace, options: ExtractOptions) -> bool:
    set_renderer(create_renderer(args.renderer))
    try:
        if args.interactive:
            await interactive_mode(options)
            return True
        return await run_url(args.url, options, args.output)
    finally:
        await shutdown_renderer()


def main() -> None:
    parser = argparse.ArgumentParser(description="Extract the main content of a web page as Markdown")
    parser.add_argument("url", nargs="?", help="Page URL to extract")
    parser.add_argument("--file", "-f", help="Convert a local HTML file instead of a URL")
    parser.add_argument("--output", "-o", help="Write Markdown to this path instead of stdout")
    parser.add_argument("--no-images", action="store_true", help="Leave image references out")
    parser.add_argument("--no-links", action="store_true", help="Render link text without targets")
    parser.add_argument("--wait-for", metavar="SELECTOR",
                        help="CSS selector to wait for before extracting")
    parser.add_argument("--timeout", type=int, default=settings.navigation_timeout_ms,
                        help="Navigation timeout in milliseconds")
    parser.add_argument("--renderer", choices=["playwright", "http"], default=settings.renderer,
                        help="How pages are loaded")
    parser.add_argument("--interactive", "-i", action="store_true",
                        help="Start interactive REPL mode")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable DEBUG logging")
    args = parser.parse_args()

    if args.verbose:
        import logging
        for name in list(logging.root.manager.loggerDict):
            if name.startswith("markdown_mcp"):
                logging.getLogger(name).setLevel(logging.DEBUG)

    options = ExtractOptions(
        include_images=not args.no_images,
        include_links=not args.no_links,
        wait_for_selector=args.wait_for,
        timeout=args.timeout,
    )

    if args.file:
        html = Path(args.file).read_text(encoding="utf-8", errors="ignore")
        write_output(html_to_markdown(html, options), args.output)
        return

    if not args.url and not args.interactive:
        parser.print_help()
        sys.exit(1)

    if not asyncio.run(run(args, options)):
        sys.exit(1)


if __name__ == "__main__":
    main()
