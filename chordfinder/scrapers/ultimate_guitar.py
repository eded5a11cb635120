"""Ultimate Guitar: the default (Latin-script) chord source."""

from __future__ import annotations

import re

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

LABEL = "Ultimate Guitar"
DOMAIN = "ultimate-guitar.com"
ORIGIN = "https://www.ultimate-guitar.com"
SEARCH_URL = ORIGIN + "/search.php?search_type=title&value={query}"

# Search page markup (hashed class names from the site's build).
CARD_SELECTOR = "article.dNNhl"
TITLE_SELECTOR = "a.fZjdD"
ARTIST_SELECTOR = "a.c5K8n"
TYPE_SELECTOR = ".tdi3Y"
DEFAULT_TYPE = "Chords"

TAB_CONTAINER_SELECTOR = '.js-tab-content pre, .js-tab-content code, [data-name="tab-content"] pre'
SCRIPT_MARKER = "tab_view_type"
SCRIPT_CONTENT_PATTERN = re.compile(r'"content":"([^"]+)"')


def search_url(query: str) -> str:
    return SEARCH_URL.format(query=encode_query(query))


def parse_results(html: str, *, limit: int = MAX_RESULTS) -> list[SearchResult]:
    soup = BeautifulSoup(html, "html.parser")
    results: list[SearchResult] = []

    for card in iter_blocks(soup, CARD_SELECTOR, min(limit, MAX_RESULTS)):
        link = card.select_one(TITLE_SELECTOR)
        title = text_of(link)
        href = str(link.get("href") or "").strip() if link is not None else ""
        artist = text_of(card.select_one(ARTIST_SELECTOR))
        url = absolutize(ORIGIN, href) if href else ""
        if not (title and artist and url):
            continue

        results.append(
            SearchResult(
                title=title,
                artist=artist,
                url=url,
                type=text_of(card.select_one(TYPE_SELECTOR)) or DEFAULT_TYPE,
                source=LABEL,
            )
        )

    return results


def unescape_embedded(raw: str) -> str:
    return raw.replace("\\n", "\n").replace("\\t", "\t").replace("\\", "")


def tab_container_text(soup: BeautifulSoup) -> str:
    return select_text(soup, TAB_CONTAINER_SELECTOR)


def embedded_script_text(soup: BeautifulSoup) -> str:
    """Chord text from the page's inline JSON store, first matching script wins."""
    for script in soup.find_all("script"):
        body = script.string or ""
        if SCRIPT_MARKER not in body or "content" not in body:
            continue
        match = SCRIPT_CONTENT_PATTERN.search(body)
        if match:
            return unescape_embedded(match.group(1))
    return ""


TAB_CONTAINER_STRATEGY = ExtractStrategy("tab_container", tab_container_text)
EMBEDDED_SCRIPT_STRATEGY = ExtractStrategy("embedded_script", embedded_script_text)


def build_extractor(*, min_chars: int = MIN_CONTENT_CHARS) -> ContentExtractor:
    return ContentExtractor(
        [PRE_STRATEGY, TAB_CONTAINER_STRATEGY, EMBEDDED_SCRIPT_STRATEGY],
        min_chars=min_chars,
    )


class UltimateGuitarSource(ChordSource):
    source_id = SourceId.ULTIMATE_GUITAR
    name = LABEL

    def search_url(self, query: str) -> str:
        return search_url(query)

    def parse_results(self, html: str) -> list[SearchResult]:
        return parse_results(html, limit=self.max_results)

    def default_extractor(self) -> ContentExtractor:
        return build_extractor()
