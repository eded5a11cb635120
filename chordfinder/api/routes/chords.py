from __future__ import annotations

from fastapi import APIRouter, Body, Depends, HTTPException

from chordfinder.api.deps import get_discovery
from chordfinder.models.schemas import ChordSearchResponse, ExtractRequest, ExtractResponse
from chordfinder.scrapers.models import results_to_dicts
from chordfinder.services.discovery import ChordDiscovery

router = APIRouter(prefix="/api", tags=["chords"])


@router.get("/chords", response_model=ChordSearchResponse)
async def search_chords(q: str | None = None, discovery: ChordDiscovery = Depends(get_discovery)):
    """Find chord sheets for a song query on the matching source."""
    if not q:
        raise HTTPException(status_code=400, detail="Query parameter is required")

    results = await discovery.search(q)
    return {"results": results_to_dicts(results)}


@router.post("/extract-chords", response_model=ExtractResponse)
async def extract_chords(
    request: ExtractRequest | None = Body(default=None),
    discovery: ChordDiscovery = Depends(get_discovery),
):
    """Pull the chord/lyric text out of a source page."""
    if request is None or not request.url:
        raise HTTPException(status_code=400, detail="URL is required")

    chord_content = await discovery.resolve_extraction(request.url)
    return ExtractResponse(chord_content=chord_content)
