from __future__ import annotations

from typing import Mapping

from loguru import logger

from chordfinder.config import Settings
from chordfinder.scrapers import amdm, ultimate_guitar
from chordfinder.scrapers.amdm import AmdmSource
from chordfinder.scrapers.base import ChordSource
from chordfinder.scrapers.classifier import classify
from chordfinder.scrapers.fallback import compose_fallback
from chordfinder.scrapers.fetch import Fetcher, make_httpx_fetcher
from chordfinder.scrapers.models import UNSUPPORTED, SearchResult, SourceId
from chordfinder.scrapers.registry import detect_source
from chordfinder.scrapers.ultimate_guitar import EMBEDDED_SCRIPT_STRATEGY, UltimateGuitarSource
from chordfinder.services.logger import log_event


class ChordDiscovery:
    """Search and extraction entry points over the configured chord sources.

    Holds no per-request state: every call classifies, fetches and parses
    afresh, so one instance is shared across concurrent requests.
    """

    def __init__(self, sources: Mapping[SourceId, ChordSource]):
        self.sources = dict(sources)

    @classmethod
    def from_settings(cls, settings: Settings, *, fetcher: Fetcher | None = None) -> ChordDiscovery:
        fetcher = fetcher or make_httpx_fetcher(settings.user_agent)
        common = {
            "fetcher": fetcher,
            "search_timeout_s": settings.search_timeout_s,
            "extract_timeout_s": settings.extract_timeout_s,
            "max_results": settings.max_results,
        }

        ug_extractor = ultimate_guitar.build_extractor(min_chars=settings.min_content_chars)
        if not settings.enable_script_extraction:
            ug_extractor = ug_extractor.without(EMBEDDED_SCRIPT_STRATEGY.name)

        sources: list[ChordSource] = [
            UltimateGuitarSource(extractor=ug_extractor, **common),
            AmdmSource(extractor=amdm.build_extractor(min_chars=settings.min_content_chars), **common),
        ]
        return cls({source.source_id: source for source in sources})

    async def search(self, query: str) -> list[SearchResult]:
        """Classify, search the chosen source, and fall back to external links.

        Callers reject empty queries before getting here.
        """
        source_id = classify(query)
        source = self.sources[source_id]
        results = await source.search(query)
        if results:
            return results

        log_event("search_fallback", f"No results from {source.name}", query=query)
        return compose_fallback(query)

    async def resolve_extraction(self, url: str) -> str:
        source_id = detect_source(url)
        source = self.sources.get(source_id) if source_id is not None else None
        if source is None:
            logger.info(f"Extraction not supported for {url}")
            return UNSUPPORTED
        return await source.extract(url)
