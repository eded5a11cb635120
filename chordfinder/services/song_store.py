"""PostgreSQL song store using asyncpg."""

from __future__ import annotations

import uuid
from typing import Any

import asyncpg

from chordfinder.services.logger import log_db_operation

SONG_COLUMNS = (
    "id, share_token, title, artist, chord_content, source_url, "
    "personal_notes, created_at, updated_at"
)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS songs (
    id BIGSERIAL PRIMARY KEY,
    share_token TEXT UNIQUE NOT NULL,
    title TEXT NOT NULL,
    artist TEXT NOT NULL,
    chord_content TEXT NOT NULL,
    source_url TEXT,
    personal_notes TEXT NOT NULL DEFAULT '',
    created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
)
"""

MAX_TOKEN_ATTEMPTS = 3


class SongStoreError(RuntimeError):
    """The store is unusable or could not complete a write."""


def generate_share_token(length: int = 8) -> str:
    return uuid.uuid4().hex[:length]


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SongStore:
    """Saved songs. Share tokens are assigned on create and never rewritten."""

    def __init__(
        self,
        database_url: str = "",
        *,
        min_size: int = 1,
        max_size: int = 10,
        share_token_length: int = 8,
        pool: asyncpg.Pool | None = None,
    ):
        self.database_url = database_url
        self.min_size = min_size
        self.max_size = max_size
        self.share_token_length = share_token_length
        self._pool = pool

    async def connect(self) -> None:
        if self._pool is not None:
            return
        if not self.database_url:
            raise SongStoreError("Database not configured. Set DATABASE_URL in .env")
        self._pool = await asyncpg.create_pool(
            self.database_url,
            min_size=self.min_size,
            max_size=self.max_size,
        )

    async def close(self) -> None:
        if self._pool is not None:
            await self._pool.close()
            self._pool = None

    def _get_pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise SongStoreError("Song store is not connected")
        return self._pool

    async def init_schema(self) -> None:
        pool = self._get_pool()
        async with pool.acquire() as conn:
            await conn.execute(SCHEMA_SQL)
        log_db_operation("create_table", "songs", "success")

    async def create(
        self,
        *,
        title: str,
        artist: str,
        chord_content: str,
        source_url: str | None = None,
        personal_notes: str | None = None,
    ) -> dict[str, Any]:
        """Insert a song under a fresh share token."""
        pool = self._get_pool()
        last_error: asyncpg.UniqueViolationError | None = None

        for _ in range(MAX_TOKEN_ATTEMPTS):
            token = generate_share_token(self.share_token_length)
            try:
                async with pool.acquire() as conn:
                    row = await conn.fetchrow(
                        f"""
                        INSERT INTO songs (share_token, title, artist, chord_content, source_url, personal_notes)
                        VALUES ($1, $2, $3, $4, $5, $6)
                        RETURNING {SONG_COLUMNS}
                        """,
                        token,
                        title,
                        artist,
                        chord_content,
                        source_url or None,
                        personal_notes or "",
                    )
            except asyncpg.UniqueViolationError as e:
                last_error = e
                log_db_operation("insert", "songs", "retry", details=f"share token collision: {token}")
                continue
            song = dict(row)
            log_db_operation("insert", "songs", "success", details=f"id={song['id']}")
            return song

        log_db_operation("insert", "songs", "error", error=str(last_error))
        raise SongStoreError(f"Could not allocate a unique share token: {last_error}")

    async def get(self, song_id: int) -> dict[str, Any] | None:
        pool = self._get_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow(f"SELECT {SONG_COLUMNS} FROM songs WHERE id = $1", song_id)
            return dict(row) if row else None

    async def get_by_share_token(self, share_token: str) -> dict[str, Any] | None:
        pool = self._get_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                f"SELECT {SONG_COLUMNS} FROM songs WHERE share_token = $1",
                share_token,
            )
            return dict(row) if row else None

    async def update(
        self,
        song_id: int,
        *,
        title: str,
        artist: str,
        chord_content: str,
        source_url: str | None = None,
        personal_notes: str | None = None,
    ) -> bool:
        """Rewrite a song's editable fields. False when the id does not exist."""
        pool = self._get_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                """
                UPDATE songs
                SET title = $1, artist = $2, chord_content = $3, source_url = $4,
                    personal_notes = $5, updated_at = now()
                WHERE id = $6
                RETURNING id
                """,
                title,
                artist,
                chord_content,
                source_url or None,
                personal_notes or "",
                song_id,
            )
        log_db_operation("update", "songs", "success" if row else "not_found", details=f"id={song_id}")
        return row is not None

    async def delete(self, song_id: int) -> bool:
        pool = self._get_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow("DELETE FROM songs WHERE id = $1 RETURNING id", song_id)
        log_db_operation("delete", "songs", "success" if row else "not_found", details=f"id={song_id}")
        return row is not None

    async def list_all(self) -> list[dict[str, Any]]:
        pool = self._get_pool()
        async with pool.acquire() as conn:
            rows = await conn.fetch(f"SELECT {SONG_COLUMNS} FROM songs ORDER BY updated_at DESC")
            return [dict(r) for r in rows]

    async def search(self, query: str) -> list[dict[str, Any]]:
        """Case-insensitive substring match on title, artist or chord text."""
        pattern = f"%{_escape_like(query)}%"
        pool = self._get_pool()
        async with pool.acquire() as conn:
            rows = await conn.fetch(
                f"""
                SELECT {SONG_COLUMNS}
                FROM songs
                WHERE title ILIKE $1 ESCAPE '\\'
                   OR artist ILIKE $1 ESCAPE '\\'
                   OR chord_content ILIKE $1 ESCAPE '\\'
                ORDER BY updated_at DESC
                """,
                pattern,
            )
            return [dict(r) for r in rows]
