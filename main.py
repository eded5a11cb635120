"""Chord Finder - guitar chord search and extraction

Simple CLI for searching chord sheets, extracting a page, or serving the API.
"""

import argparse
import asyncio
import sys

from chordfinder.config import Settings
from chordfinder.scrapers.models import is_sentinel
from chordfinder.services.discovery import ChordDiscovery
from chordfinder.services.logger import setup_logging


async def run_search(discovery: ChordDiscovery, query: str) -> int:
    """Print search results for the given query."""
    print(f"Chord search: {query}")
    print("-" * 50)

    results = await discovery.search(query)
    for i, result in enumerate(results, 1):
        print(f"{i:2}. {result.artist} - {result.title} [{result.type}, {result.source}]")
        print(f"    {result.url}")
    return 0


async def run_extract(discovery: ChordDiscovery, url: str) -> int:
    """Print the chord content extracted from a source page."""
    content = await discovery.resolve_extraction(url)
    if is_sentinel(content):
        print(f"[!] {content}", file=sys.stderr)
        return 1
    print(content)
    return 0


def serve(settings: Settings, host: str, port: int) -> int:
    import uvicorn

    from chordfinder.main import create_app

    uvicorn.run(create_app(settings), host=host, port=port)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Chord Finder")
    subparsers = parser.add_subparsers(dest="command", required=True)

    search_parser = subparsers.add_parser("search", help="Search chord sheets for a song")
    search_parser.add_argument("query", help="Song query, e.g. 'wonderwall'")

    extract_parser = subparsers.add_parser("extract", help="Extract chord text from a page URL")
    extract_parser.add_argument("url", help="Ultimate Guitar or AMDM.ru page URL")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", "-p", type=int, default=3000)

    args = parser.parse_args(argv)
    if args.command == "search" and not args.query:
        parser.error("query must not be empty")
    if args.command == "extract" and not args.url:
        parser.error("url must not be empty")

    settings = Settings()

    if args.command == "serve":
        return serve(settings, args.host, args.port)

    setup_logging(settings.model_copy(update={"log_to_file": False}))
    discovery = ChordDiscovery.from_settings(settings)

    if args.command == "search":
        return asyncio.run(run_search(discovery, args.query))

    return asyncio.run(run_extract(discovery, args.url))


if __name__ == "__main__":
    sys.exit(main())
