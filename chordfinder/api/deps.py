from __future__ import annotations

from fastapi import Depends, Request

from chordfinder.services.context import AppContext
from chordfinder.services.discovery import ChordDiscovery
from chordfinder.services.song_store import SongStore


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_discovery(context: AppContext = Depends(get_context)) -> ChordDiscovery:
    return context.discovery


def get_store(context: AppContext = Depends(get_context)) -> SongStore:
    return context.store
