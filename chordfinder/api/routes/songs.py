from __future__ import annotations

from fastapi import APIRouter, Body, Depends, HTTPException

from chordfinder.api.deps import get_store
from chordfinder.models.schemas import (
    MessageResponse,
    SongCreatedResponse,
    SongDetailResponse,
    SongListResponse,
    SongPayload,
)
from chordfinder.services.song_store import SongStore

router = APIRouter(prefix="/api", tags=["songs"])

REQUIRED_FIELDS_DETAIL = "Title, artist, and chord content are required"


def _require_song_fields(payload: SongPayload | None) -> SongPayload:
    if payload is None or not payload.has_required_fields():
        raise HTTPException(status_code=400, detail=REQUIRED_FIELDS_DETAIL)
    return payload


@router.get("/songs", response_model=SongListResponse)
async def list_songs(store: SongStore = Depends(get_store)):
    """List saved songs, most recently updated first."""
    return {"songs": await store.list_all()}


@router.get("/songs/{song_id}", response_model=SongDetailResponse)
async def get_song(song_id: int, store: SongStore = Depends(get_store)):
    song = await store.get(song_id)
    if not song:
        raise HTTPException(status_code=404, detail="Song not found")
    return {"song": song}


@router.post("/songs", response_model=SongCreatedResponse)
async def create_song(
    payload: SongPayload | None = Body(default=None),
    store: SongStore = Depends(get_store),
):
    """Save an extraction as a song; the response carries its share token."""
    payload = _require_song_fields(payload)
    song = await store.create(
        title=payload.title,
        artist=payload.artist,
        chord_content=payload.chord_content,
        source_url=payload.source_url,
        personal_notes=payload.personal_notes,
    )
    return SongCreatedResponse(
        message="Song saved successfully",
        id=song["id"],
        share_token=song["share_token"],
    )


@router.put("/songs/{song_id}", response_model=MessageResponse)
async def update_song(
    song_id: int,
    payload: SongPayload | None = Body(default=None),
    store: SongStore = Depends(get_store),
):
    payload = _require_song_fields(payload)
    updated = await store.update(
        song_id,
        title=payload.title,
        artist=payload.artist,
        chord_content=payload.chord_content,
        source_url=payload.source_url,
        personal_notes=payload.personal_notes,
    )
    if not updated:
        raise HTTPException(status_code=404, detail="Song not found")
    return MessageResponse(message="Song updated successfully")


@router.delete("/songs/{song_id}", response_model=MessageResponse)
async def delete_song(song_id: int, store: SongStore = Depends(get_store)):
    if not await store.delete(song_id):
        raise HTTPException(status_code=404, detail="Song not found")
    return MessageResponse(message="Song deleted successfully")


@router.get("/search", response_model=SongListResponse)
async def search_songs(q: str | None = None, store: SongStore = Depends(get_store)):
    """Search saved songs by title, artist or chord text."""
    if not q:
        raise HTTPException(status_code=400, detail="Query parameter is required")
    return {"songs": await store.search(q)}
