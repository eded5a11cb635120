from __future__ import annotations

from dataclasses import dataclass

from chordfinder.config import Settings
from chordfinder.services.discovery import ChordDiscovery
from chordfinder.services.logger import log_event
from chordfinder.services.song_store import SongStore


@dataclass
class AppContext:
    """Process-wide services, built at startup and passed explicitly."""

    settings: Settings
    store: SongStore
    discovery: ChordDiscovery

    @classmethod
    def from_settings(cls, settings: Settings) -> AppContext:
        store = SongStore(
            settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            share_token_length=settings.share_token_length,
        )
        return cls(
            settings=settings,
            store=store,
            discovery=ChordDiscovery.from_settings(settings),
        )

    async def start(self) -> None:
        await self.store.connect()
        await self.store.init_schema()
        log_event("startup", "Application context ready")

    async def close(self) -> None:
        await self.store.close()
        log_event("shutdown", "Application context closed")
