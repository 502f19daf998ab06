"""REST endpoints for the board game.

Path prefix: /api/board

Clients may drive a game two ways: post raw reducer actions to
``/actions``, or use the turn endpoints, which compose those actions the
way the board plays (move, roll, triggers, resolutions).
"""

from __future__ import annotations

import logging
from typing import Any, Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from long_game.content.balance import FUNDING_ROUNDS
from long_game.content.policy_scenarios import get_scenario_for_space
from long_game.core.board_engine import calculate_final_score
from long_game.core.financing import board_funding_terms, negotiate_funding_terms
from long_game.domain.enums import Difficulty
from long_game.store.session_store import (
    InvalidActionError,
    Session,
    SessionKind,
    SessionNotFoundError,
    SessionStore,
)

logger = logging.getLogger(__name__)


class CreateBoardSession(BaseModel):
    difficulty: Difficulty = Difficulty.BLOCKBUSTER


class ChoiceRequest(BaseModel):
    index: int = Field(..., ge=0, description="Zero-based option index")


class FundingDecision(BaseModel):
    accept: bool
    negotiate: bool = False


async def _or_404(pending) -> Session:
    try:
        return await pending
    except SessionNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


def create_board_router(store: SessionStore) -> APIRouter:
    """Factory that wires the board endpoints to a SessionStore."""

    router = APIRouter(prefix="/api/board", tags=["board"])

    # ── Sessions ─────────────────────────────────────────────────────

    @router.post("/sessions", status_code=201)
    async def create_session(body: CreateBoardSession) -> dict[str, Any]:
        session = await store.create_board(body.difficulty)
        return session.to_dict()

    @router.get("/sessions/{session_id}")
    async def get_session(session_id: UUID) -> dict[str, Any]:
        session = await _or_404(store.get(session_id, SessionKind.BOARD))
        return session.to_dict()

    @router.post("/sessions/{session_id}/actions")
    async def dispatch_action(session_id: UUID, payload: dict[str, Any]) -> Any:
        try:
            session = await _or_404(store.dispatch(session_id, payload, SessionKind.BOARD))
        except InvalidActionError as exc:
            return JSONResponse(
                status_code=422,
                content={"status": "rejected", "errors": exc.errors},
            )
        return session.to_dict()

    @router.get("/sessions/{session_id}/score")
    async def get_score(session_id: UUID) -> dict[str, Any]:
        session = await _or_404(store.get(session_id, SessionKind.BOARD))
        return calculate_final_score(session.state).model_dump(mode="json")

    # ── Turns ────────────────────────────────────────────────────────

    @router.post("/sessions/{session_id}/turn")
    async def advance_turn(session_id: UUID) -> dict[str, Any]:
        session = await _or_404(store.advance_board(session_id))
        return session.to_dict()

    @router.post("/sessions/{session_id}/decision")
    async def resolve_decision(session_id: UUID, body: ChoiceRequest) -> dict[str, Any]:
        session = await _or_404(store.resolve_decision(session_id, body.index))
        return session.to_dict()

    @router.post("/sessions/{session_id}/policy-scenario")
    async def resolve_policy_scenario(session_id: UUID, body: ChoiceRequest) -> dict[str, Any]:
        session = await _or_404(store.resolve_policy_scenario(session_id, body.index))
        return session.to_dict()

    @router.post("/sessions/{session_id}/shadow-failure/acknowledge")
    async def acknowledge_shadow_failure(session_id: UUID) -> dict[str, Any]:
        session = await _or_404(store.acknowledge_shadow_failure(session_id))
        return session.to_dict()

    @router.post("/sessions/{session_id}/funding")
    async def resolve_funding_round(session_id: UUID, body: FundingDecision) -> dict[str, Any]:
        session = await _or_404(
            store.resolve_funding_round(session_id, body.accept, body.negotiate),
        )
        return session.to_dict()

    # ── Content ──────────────────────────────────────────────────────

    @router.get("/scenarios")
    async def scenario_for_space(
        space_id: int,
        difficulty: Optional[Difficulty] = None,
    ) -> dict[str, Any]:
        scenario = get_scenario_for_space(space_id, difficulty)
        return {"scenario": scenario.model_dump(mode="json") if scenario is not None else None}

    @router.get("/funding-terms/{round_key}")
    async def funding_terms(
        round_key: str,
        confidence: float = Query(100.0, ge=0.0, le=100.0),
    ) -> dict[str, Any]:
        funding_round = FUNDING_ROUNDS.get(round_key)
        if funding_round is None:
            raise HTTPException(status_code=404, detail=f"Funding round {round_key} not found")
        terms = board_funding_terms(funding_round, confidence)
        return {
            "round": round_key,
            "offered": terms.model_dump(),
            "negotiated": negotiate_funding_terms(terms).model_dump(),
        }

    return router
