from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum

NOT_EXTRACTED = "Could not extract chord content from this page."
LOAD_ERROR = "Error loading chord content."
UNSUPPORTED = "Chord extraction not supported for this site."

SENTINELS = frozenset({NOT_EXTRACTED, LOAD_ERROR, UNSUPPORTED})


class SourceId(str, Enum):
    ULTIMATE_GUITAR = "ultimate_guitar"
    AMDM = "amdm"


@dataclass(frozen=True, slots=True)
class SearchResult:
    title: str
    artist: str
    url: str
    type: str
    source: str


def is_sentinel(content: str) -> bool:
    return content in SENTINELS


def results_to_dicts(results: list[SearchResult]) -> list[dict]:
    return [asdict(r) for r in results]
