from __future__ import annotations

from typing import Callable
from urllib.parse import urlparse

from chordfinder.scrapers import amdm, ultimate_guitar
from chordfinder.scrapers.base import MAX_RESULTS
from chordfinder.scrapers.models import SearchResult, SourceId

PARSERS: dict[SourceId, Callable[..., list[SearchResult]]] = {
    SourceId.ULTIMATE_GUITAR: ultimate_guitar.parse_results,
    SourceId.AMDM: amdm.parse_results,
}

SOURCE_DOMAINS: dict[SourceId, str] = {
    SourceId.ULTIMATE_GUITAR: ultimate_guitar.DOMAIN,
    SourceId.AMDM: amdm.DOMAIN,
}


def parse_results(html: str, source_id: SourceId, *, limit: int = MAX_RESULTS) -> list[SearchResult]:
    return PARSERS[source_id](html, limit=limit)


def detect_source(url: str) -> SourceId | None:
    """Match the URL host against known source domains; None when unknown."""
    try:
        host = (urlparse(url).hostname or "").lower()
    except ValueError:
        return None
    for source_id, domain in SOURCE_DOMAINS.items():
        if domain in host:
            return source_id
    return None
