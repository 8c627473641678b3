from __future__ import annotations

import logging

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from arcade_sync.api.routes import router
from arcade_sync.config import Settings, settings_from_env
from arcade_sync.snapshot import SnapshotService
from arcade_sync.sync_engine import SyncEngine
from arcade_sync.websocket_hub import ConnectionHub

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, *, engine: SyncEngine | None = None) -> FastAPI:
    """Build the app with its own engine, so every test can get a fresh world."""

    settings = settings or Settings()
    engine = engine or SyncEngine(settings)

    app = FastAPI(title="arcade-sync", version="0.1.0")
    app.state.settings = settings
    app.state.engine = engine
    app.state.hub = ConnectionHub()
    app.state.snapshots = SnapshotService(engine.world)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.include_router(router)
    return app


app = create_app()


def serve() -> None:
    # Local runs may keep their overrides in .env; real env vars win.
    load_dotenv(override=False)
    settings = settings_from_env()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    logger.info("arcade-sync listening on %s:%s", settings.host, settings.port)
    logger.info("health check: http://localhost:%s/health", settings.port)
    logger.info("game state: http://localhost:%s/game-state", settings.port)

    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    serve()
