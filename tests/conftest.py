from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any

import pytest


class FakeFetcher:
    """Async fetcher double that records every call instead of hitting the network."""

    def __init__(
        self,
        pages: dict[str, str] | None = None,
        *,
        error: Exception | None = None,
        delay: float = 0.0,
    ):
        self.pages = pages or {}
        self.error = error
        self.delay = delay
        self.calls: list[tuple[str, float]] = []

    async def __call__(self, url: str, timeout: float) -> str:
        self.calls.append((url, timeout))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        for fragment, html in self.pages.items():
            if fragment in url:
                return html
        return "<html><body></body></html>"


class FakeSongStore:
    """In-memory stand-in for SongStore used by the API tests."""

    def __init__(self):
        self.songs: dict[int, dict[str, Any]] = {}
        self._next_id = 1

    async def create(self, *, title, artist, chord_content, source_url=None, personal_notes=None):
        now = datetime.now(timezone.utc)
        song = {
            "id": self._next_id,
            "share_token": f"tok{self._next_id:05d}",
            "title": title,
            "artist": artist,
            "chord_content": chord_content,
            "source_url": source_url or None,
            "personal_notes": personal_notes or "",
            "created_at": now,
            "updated_at": now,
        }
        self.songs[song["id"]] = song
        self._next_id += 1
        return dict(song)

    async def get(self, song_id):
        song = self.songs.get(song_id)
        return dict(song) if song else None

    async def get_by_share_token(self, share_token):
        for song in self.songs.values():
            if song["share_token"] == share_token:
                return dict(song)
        return None

    async def update(self, song_id, *, title, artist, chord_content, source_url=None, personal_notes=None):
        song = self.songs.get(song_id)
        if song is None:
            return False
        song.update(
            title=title,
            artist=artist,
            chord_content=chord_content,
            source_url=source_url or None,
            personal_notes=personal_notes or "",
            updated_at=datetime.now(timezone.utc),
        )
        return True

    async def delete(self, song_id):
        return self.songs.pop(song_id, None) is not None

    async def list_all(self):
        return sorted(self.songs.values(), key=lambda s: s["updated_at"], reverse=True)

    async def search(self, query):
        needle = query.lower()
        return [
            s
            for s in await self.list_all()
            if needle in s["title"].lower()
            or needle in s["artist"].lower()
            or needle in s["chord_content"].lower()
        ]


def ug_card(title: str, artist: str, href: str, type_label: str = "Chords") -> str:
    return (
        '<article class="dNNhl">'
        f'<a class="fZjdD" href="{href}">{title}</a>'
        f'<a class="c5K8n" href="/artist/{artist}">{artist}</a>'
        f'<div class="tdi3Y">{type_label}</div>'
        "</article>"
    )


def amdm_block(text: str, href: str) -> str:
    return f'<div class="search_result"><a href="{href}">{text}</a></div>'


def html_page(body: str) -> str:
    return f"<html><head><title>t</title></head><body>{body}</body></html>"


@pytest.fixture
def fake_fetcher():
    return FakeFetcher


@pytest.fixture
def fake_store():
    return FakeSongStore()
