"""WebSocket endpoint for streaming actions into one session.

Path: /ws/session/{session_id}

Accepts JSON action payloads for the session's engine, validates each at
the boundary, applies it, and answers with the new state.  Invalid
payloads are answered with a rejection and leave the state unchanged.
"""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from long_game.store.session_store import InvalidActionError, SessionNotFoundError, SessionStore

logger = logging.getLogger(__name__)


def create_session_ws_router(store: SessionStore) -> APIRouter:
    """Factory that wires the session socket to a concrete SessionStore."""

    router = APIRouter()

    @router.websocket("/ws/session/{session_id}")
    async def stream_actions(websocket: WebSocket, session_id: UUID) -> None:
        await websocket.accept()
        try:
            await store.get(session_id)
        except SessionNotFoundError as exc:
            await websocket.send_json({"status": "error", "detail": str(exc)})
            await websocket.close(code=4404)
            return
        logger.info("Client connected to session %s", session_id)

        try:
            while True:
                raw = await websocket.receive_json()

                # ── Validate and apply ───────────────────────────────────
                try:
                    session = await store.dispatch(session_id, raw)
                except InvalidActionError as exc:
                    await websocket.send_json({"status": "rejected", "errors": exc.errors})
                    continue
                except SessionNotFoundError as exc:
                    # Evicted while connected
                    await websocket.send_json({"status": "error", "detail": str(exc)})
                    await websocket.close(code=4404)
                    return

                # ── Acknowledge ──────────────────────────────────────────
                await websocket.send_json({"status": "accepted", **session.to_dict()})

        except WebSocketDisconnect:
            logger.info("Client disconnected from session %s", session_id)

    return router
