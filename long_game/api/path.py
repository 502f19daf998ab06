"""REST endpoints for the path game.

Path prefix: /api/path
"""

from __future__ import annotations

import logging
from typing import Any, Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from long_game.content.paths import FUNDING_ROUND_DEFS, GAME_PATHS
from long_game.core.path_engine import calculate_funding_terms, negotiate_funding_terms
from long_game.store.session_store import (
    FundingNotOfferedError,
    InvalidActionError,
    Session,
    SessionKind,
    SessionNotFoundError,
    SessionStore,
)

logger = logging.getLogger(__name__)


class CreatePathSession(BaseModel):
    path_id: Optional[str] = Field(default=None, description="Path to start on; omit to choose later")


class PathFundingRequest(BaseModel):
    round_id: str
    negotiate: bool = False


async def _or_404(pending) -> Session:
    try:
        return await pending
    except SessionNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


def create_path_router(store: SessionStore) -> APIRouter:
    """Factory that wires the path endpoints to a SessionStore."""

    router = APIRouter(prefix="/api/path", tags=["path"])

    @router.get("/paths")
    async def list_paths() -> dict[str, Any]:
        paths = [
            {"id": p.id, "name": p.name, "subtitle": p.subtitle, "tier": p.tier.value,
             "modality": p.modality.value}
            for p in GAME_PATHS.values()
        ]
        return {"paths": paths, "count": len(paths)}

    # ── Sessions ─────────────────────────────────────────────────────

    @router.post("/sessions", status_code=201)
    async def create_session(body: CreatePathSession) -> dict[str, Any]:
        if body.path_id is not None and body.path_id not in GAME_PATHS:
            raise HTTPException(status_code=404, detail=f"Path {body.path_id} not found")
        session = await store.create_path(body.path_id)
        return session.to_dict()

    @router.get("/sessions/{session_id}")
    async def get_session(session_id: UUID) -> dict[str, Any]:
        session = await _or_404(store.get(session_id, SessionKind.PATH))
        return session.to_dict()

    @router.post("/sessions/{session_id}/actions")
    async def dispatch_action(session_id: UUID, payload: dict[str, Any]) -> Any:
        try:
            session = await _or_404(store.dispatch(session_id, payload, SessionKind.PATH))
        except InvalidActionError as exc:
            return JSONResponse(
                status_code=422,
                content={"status": "rejected", "errors": exc.errors},
            )
        return session.to_dict()

    # ── Turns ────────────────────────────────────────────────────────

    @router.post("/sessions/{session_id}/turn")
    async def advance_turn(session_id: UUID, skip_funding: bool = False) -> dict[str, Any]:
        try:
            session, funding_round = await store.advance_path(session_id, skip_funding)
        except SessionNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return {**session.to_dict(), "funding_round": funding_round}

    @router.post("/sessions/{session_id}/funding")
    async def accept_funding(session_id: UUID, body: PathFundingRequest) -> dict[str, Any]:
        if body.round_id not in FUNDING_ROUND_DEFS:
            raise HTTPException(status_code=404, detail=f"Funding round {body.round_id} not found")
        try:
            session = await _or_404(
                store.accept_path_funding(session_id, body.round_id, body.negotiate),
            )
        except FundingNotOfferedError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return session.to_dict()

    @router.get("/funding-terms/{round_id}")
    async def funding_terms(
        round_id: str,
        confidence: float = Query(80.0, ge=0.0, le=100.0),
    ) -> dict[str, Any]:
        if round_id not in FUNDING_ROUND_DEFS:
            raise HTTPException(status_code=404, detail=f"Funding round {round_id} not found")
        terms = calculate_funding_terms(round_id, confidence)
        return {
            "round": round_id,
            "offered": terms.model_dump(),
            "negotiated": negotiate_funding_terms(terms).model_dump(),
        }

    return router
