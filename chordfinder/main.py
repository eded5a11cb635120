from contextlib import asynccontextmanager
from pathlib import Path

import asyncpg
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger

from chordfinder.api.routes import chords, share, songs
from chordfinder.config import Settings
from chordfinder.services.context import AppContext
from chordfinder.services.logger import setup_logging
from chordfinder.services.song_store import SongStoreError


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        context = AppContext.from_settings(settings)
        await context.start()
        app.state.context = context
        yield
        # Shutdown
        await context.close()

    app = FastAPI(
        title="Chord Finder",
        description="Find, extract, save and share guitar chord sheets",
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(asyncpg.PostgresError)
    async def database_error_handler(request: Request, exc: asyncpg.PostgresError):
        logger.exception(f"Database error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"detail": "Database error"})

    @app.exception_handler(SongStoreError)
    async def store_error_handler(request: Request, exc: SongStoreError):
        logger.error(f"Song store error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"detail": "Database error"})

    # Routes
    app.include_router(chords.router)
    app.include_router(songs.router)
    app.include_router(share.router)

    @app.get("/api/health")
    async def health():
        return {"status": "ok", "service": "chordfinder"}

    # Static frontend last so API routes take precedence
    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")

    return app
