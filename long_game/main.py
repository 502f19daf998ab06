"""long-game — drug development strategy games over HTTP and WebSocket.

This is the application entry point.  It checks the content tables, builds
the SessionStore, and wires the board, path and session-socket routers.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from long_game.api.board import create_board_router
from long_game.api.path import create_path_router
from long_game.api.ws_session import create_session_ws_router
from long_game.config import Settings, settings
from long_game.content.integrity import validate_content
from long_game.store.session_store import SessionStore

# ── Logging ──────────────────────────────────────────────────────────────────

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

# ── Content ──────────────────────────────────────────────────────────────────

validate_content()


def create_app(config: Settings = settings) -> FastAPI:
    # ── State ────────────────────────────────────────────────────────────
    store = SessionStore(
        max_sessions=config.max_sessions,
        rng_seed=config.rng_seed,
        board_starting_confidence=config.board_starting_confidence,
        path_starting_confidence=config.path_starting_confidence,
        default_burn_rate=config.default_burn_rate,
        funding_runway_quarters=config.funding_runway_quarters,
    )

    # ── App ──────────────────────────────────────────────────────────────
    app = FastAPI(
        title=config.app_name,
        description="Board and path drug development games",
        version="0.1.0",
        debug=config.debug,
    )
    app.state.store = store

    # ── Routes ───────────────────────────────────────────────────────────
    app.include_router(create_board_router(store))
    app.include_router(create_path_router(store))
    app.include_router(create_session_ws_router(store))

    # ── Health ───────────────────────────────────────────────────────────
    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok", **await store.stats()}

    return app


app = create_app()
