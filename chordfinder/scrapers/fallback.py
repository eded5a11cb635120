from __future__ import annotations

from chordfinder.scrapers import ultimate_guitar
from chordfinder.scrapers.base import encode_query
from chordfinder.scrapers.models import SearchResult

CHORDIFY_LABEL = "Chordify"
CHORDIFY_SEARCH_URL = "https://chordify.net/search/{query}"
EXTERNAL_ARTIST = "External Link"
SEARCH_TYPE = "Search"


def compose_fallback(query: str) -> list[SearchResult]:
    """Deep links to external searches, used when no source parsed anything."""
    return [
        SearchResult(
            title=f'Search "{query}" on {ultimate_guitar.LABEL}',
            artist=EXTERNAL_ARTIST,
            url=ultimate_guitar.search_url(query),
            type=SEARCH_TYPE,
            source=ultimate_guitar.LABEL,
        ),
        SearchResult(
            title=f'Search "{query}" on {CHORDIFY_LABEL}',
            artist=EXTERNAL_ARTIST,
            url=CHORDIFY_SEARCH_URL.format(query=encode_query(query)),
            type=SEARCH_TYPE,
            source=CHORDIFY_LABEL,
        ),
    ]
