from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Iterator, Sequence
from urllib.parse import quote, urljoin, urlparse

from bs4 import BeautifulSoup, Tag
from loguru import logger

from chordfinder.scrapers.fetch import TRANSPORT_ERRORS, Fetcher, fetch_with_deadline
from chordfinder.scrapers.models import LOAD_ERROR, NOT_EXTRACTED, SearchResult, SourceId
from chordfinder.services.logger import log_scrape

MAX_RESULTS = 10
MIN_CONTENT_CHARS = 50
WEB_SCHEMES = ("http", "https")


def encode_query(query: str) -> str:
    # Same reserved set as JavaScript's encodeURIComponent.
    return quote(query, safe="!~*'()")


def absolutize(origin: str, href: str) -> str:
    """Resolve `href` against `origin`; "" unless the result is http(s)."""
    url = href if href.startswith("http") else urljoin(origin, href)
    return url if urlparse(url).scheme in WEB_SCHEMES else ""


def text_of(tag: Tag | None) -> str:
    return tag.get_text().strip() if tag is not None else ""


def select_text(soup: BeautifulSoup, selector: str) -> str:
    """Concatenated text of every element matching `selector`."""
    return "".join(el.get_text() for el in soup.select(selector))


def iter_blocks(soup: BeautifulSoup, selector: str, limit: int) -> Iterator[Tag]:
    """Lazily yield at most `limit` matches; later blocks are never visited."""
    if limit <= 0:
        return iter(())
    return soup.css.iselect(selector, limit=limit)


@dataclass(frozen=True, slots=True)
class ExtractStrategy:
    name: str
    run: Callable[[BeautifulSoup], str]


def pre_text(soup: BeautifulSoup) -> str:
    return select_text(soup, "pre")


PRE_STRATEGY = ExtractStrategy("pre", pre_text)


class ContentExtractor:
    """Ordered structural heuristics; the first one yielding enough text wins."""

    def __init__(self, strategies: Sequence[ExtractStrategy], *, min_chars: int = MIN_CONTENT_CHARS):
        self.strategies = tuple(strategies)
        self.min_chars = min_chars

    @property
    def strategy_names(self) -> list[str]:
        return [s.name for s in self.strategies]

    def without(self, *names: str) -> ContentExtractor:
        kept = [s for s in self.strategies if s.name not in names]
        return ContentExtractor(kept, min_chars=self.min_chars)

    def extract(self, soup: BeautifulSoup) -> tuple[str, str] | None:
        """Return (strategy name, text) or None when no heuristic matched."""
        for strategy in self.strategies:
            try:
                text = strategy.run(soup).strip()
            except Exception as e:
                logger.warning(f"Extraction strategy '{strategy.name}' raised: {e}")
                continue
            if len(text) > self.min_chars:
                return strategy.name, text
        return None


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


class ChordSource:
    """One chords website: search-page parsing plus page extraction."""

    source_id: SourceId
    name: str

    def __init__(
        self,
        *,
        fetcher: Fetcher,
        search_timeout_s: float = 10.0,
        extract_timeout_s: float = 15.0,
        max_results: int = MAX_RESULTS,
        extractor: ContentExtractor | None = None,
    ):
        self._fetcher = fetcher
        self.search_timeout_s = search_timeout_s
        self.extract_timeout_s = extract_timeout_s
        self.max_results = min(max(int(max_results), 0), MAX_RESULTS)
        self.extractor = extractor or self.default_extractor()

    def search_url(self, query: str) -> str:
        raise NotImplementedError

    def parse_results(self, html: str) -> list[SearchResult]:
        raise NotImplementedError

    def default_extractor(self) -> ContentExtractor:
        raise NotImplementedError

    async def search(self, query: str) -> list[SearchResult]:
        """Fetch and parse the search page; any failure yields an empty list."""
        url = self.search_url(query)
        started = time.monotonic()
        try:
            html = await fetch_with_deadline(self._fetcher, url, self.search_timeout_s)
        except TRANSPORT_ERRORS as e:
            log_scrape(self.name, "search", url, "fetch_error", _elapsed_ms(started), error=_describe(e))
            return []

        try:
            results = self.parse_results(html)
        except Exception as e:
            log_scrape(self.name, "search", url, "parse_error", _elapsed_ms(started), error=_describe(e))
            return []

        log_scrape(self.name, "search", url, f"{len(results)} results", _elapsed_ms(started))
        return results

    async def extract(self, url: str) -> str:
        """Fetch a song page and recover its chord text, or a sentinel."""
        started = time.monotonic()
        try:
            html = await fetch_with_deadline(self._fetcher, url, self.extract_timeout_s)
        except TRANSPORT_ERRORS as e:
            log_scrape(self.name, "extract", url, "fetch_error", _elapsed_ms(started), error=_describe(e))
            return LOAD_ERROR

        soup = BeautifulSoup(html, "html.parser")
        found = self.extractor.extract(soup)
        if found is None:
            log_scrape(self.name, "extract", url, "no_match", _elapsed_ms(started))
            return NOT_EXTRACTED

        method, text = found
        log_scrape(self.name, "extract", url, f"ok via {method}", _elapsed_ms(started))
        return text
