"""AMDM.ru: the localized (Cyrillic) chord source."""

from __future__ import annotations

from bs4 import BeautifulSoup

from chordfinder.scrapers.base import (
    MAX_RESULTS,
    MIN_CONTENT_CHARS,
    PRE_STRATEGY,
    ChordSource,
    ContentExtractor,
    ExtractStrategy,
    absolutize,
    encode_query,
    iter_blocks,
    select_text,
    text_of,
)
from chordfinder.scrapers.models import SearchResult, SourceId

LABEL = "AMDM.ru"
DOMAIN = "amdm.ru"
ORIGIN = "https://amdm.ru"
SEARCH_URL = ORIGIN + "/search/?q={query}"

BLOCK_SELECTOR = ".search_result"
SONG_TEXT_SELECTOR = ".song_text, .chord_text, .song-text"
SEPARATOR = " - "
UNKNOWN_ARTIST = "Unknown"


def search_url(query: str) -> str:
    return SEARCH_URL.format(query=encode_query(query))


def split_artist_title(text: str) -> tuple[str, str]:
    """Split "Artist - Title" on the first separator only.

    Further separators stay in the title; text without one is all title.
    """
    artist, sep, title = text.partition(SEPARATOR)
    if not sep:
        return UNKNOWN_ARTIST, text
    return artist, title


def parse_results(html: str, *, limit: int = MAX_RESULTS) -> list[SearchResult]:
    soup = BeautifulSoup(html, "html.parser")
    results: list[SearchResult] = []

    for block in iter_blocks(soup, BLOCK_SELECTOR, min(limit, MAX_RESULTS)):
        link = block.find("a")
        text = text_of(link)
        href = str(link.get("href") or "").strip() if link is not None else ""
        url = absolutize(ORIGIN, href) if href else ""
        if not (text and url):
            continue

        artist, title = split_artist_title(text)
        artist, title = artist.strip(), title.strip()
        if not (artist and title):
            continue

        results.append(
            SearchResult(
                title=title,
                artist=artist,
                url=url,
                type="Chords",
                source=LABEL,
            )
        )

    return results


def song_text(soup: BeautifulSoup) -> str:
    return select_text(soup, SONG_TEXT_SELECTOR)


SONG_TEXT_STRATEGY = ExtractStrategy("song_text", song_text)


def build_extractor(*, min_chars: int = MIN_CONTENT_CHARS) -> ContentExtractor:
    return ContentExtractor([PRE_STRATEGY, SONG_TEXT_STRATEGY], min_chars=min_chars)


class AmdmSource(ChordSource):
    source_id = SourceId.AMDM
    name = LABEL

    def search_url(self, query: str) -> str:
        return search_url(query)

    def parse_results(self, html: str) -> list[SearchResult]:
        return parse_results(html, limit=self.max_results)

    def default_extractor(self) -> ContentExtractor:
        return build_extractor()
