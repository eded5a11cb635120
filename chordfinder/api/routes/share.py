from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from chordfinder.api.deps import get_store
from chordfinder.services.share_page import render_not_found_page, render_share_page
from chordfinder.services.song_store import SongStore

router = APIRouter(tags=["share"])


@router.get("/share/{share_token}", response_class=HTMLResponse)
async def share_song(share_token: str, store: SongStore = Depends(get_store)):
    """Public read-only page for a saved song."""
    song = await store.get_by_share_token(share_token)
    if not song:
        return HTMLResponse(render_not_found_page(), status_code=404)
    return HTMLResponse(render_share_page(song))
