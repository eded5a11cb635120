from __future__ import annotations

import re

from chordfinder.scrapers.models import SourceId

CYRILLIC_PATTERN = re.compile(r"[\u0400-\u04FF]")


def has_cyrillic(text: str) -> bool:
    return CYRILLIC_PATTERN.search(text) is not None


def classify(query: str) -> SourceId:
    """Route a query to the source whose catalogue matches its script."""
    if has_cyrillic(query):
        return SourceId.AMDM
    return SourceId.ULTIMATE_GUITAR
