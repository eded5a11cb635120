from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


# --- Requests ---


class ExtractRequest(BaseModel):
    url: str | None = None


class SongPayload(BaseModel):
    title: str | None = None
    artist: str | None = None
    chord_content: str | None = None
    source_url: str | None = None
    personal_notes: str | None = None

    def has_required_fields(self) -> bool:
        return bool(self.title and self.artist and self.chord_content)


# --- Responses ---


class SearchResultResponse(BaseModel):
    title: str
    artist: str
    url: str
    type: str
    source: str


class ChordSearchResponse(BaseModel):
    results: list[SearchResultResponse]


class ExtractResponse(BaseModel):
    chord_content: str


class SongResponse(BaseModel):
    id: int
    share_token: str
    title: str
    artist: str
    chord_content: str
    source_url: str | None
    personal_notes: str
    created_at: datetime
    updated_at: datetime


class SongListResponse(BaseModel):
    songs: list[SongResponse]


class SongDetailResponse(BaseModel):
    song: SongResponse


class SongCreatedResponse(BaseModel):
    message: str
    id: int
    share_token: str


class MessageResponse(BaseModel):
    message: str
