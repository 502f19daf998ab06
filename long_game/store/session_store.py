"""In-memory game session store with async-safe access.

Design notes:
    - An asyncio.Lock guards every read-modify-write, so two requests for
      the same session are applied one after the other.
    - A session holds exactly one immutable state record.  Dispatching an
      action replaces it with the reducer's result; nothing is mutated in
      place.
    - Raw payloads are validated against the session's action union here,
      at the boundary.  Reducers only ever see well-formed actions.
    - When ``max_sessions`` is reached the least recently updated session
      is evicted.
"""

from __future__ import annotations

import asyncio
import logging
import random
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Optional
from uuid import UUID

from pydantic import ValidationError

from long_game.core import path_turns, turns
from long_game.core.board_engine import create_initial_state, game_reducer
from long_game.core.path_engine import (
    RUNWAY_FUNDING_THRESHOLD,
    create_initial_path_state,
    path_game_reducer,
    should_trigger_funding,
)
from long_game.domain.actions import board_action_adapter
from long_game.domain.enums import Difficulty
from long_game.domain.game_state import GameState
from long_game.domain.path import PathGameState
from long_game.domain.path_actions import SelectPath, path_action_adapter
from long_game.foundation.clock import utc_now
from long_game.foundation.identifiers import new_id

logger = logging.getLogger(__name__)


class SessionKind(str, Enum):
    BOARD = "board"
    PATH = "path"


class SessionNotFoundError(Exception):
    """Raised when no session of the requested kind has the given id."""

    def __init__(self, session_id: UUID, kind: Optional[SessionKind] = None) -> None:
        self.session_id = session_id
        self.kind = kind
        label = f"{kind.value} session" if kind is not None else "Session"
        super().__init__(f"{label} {session_id} not found")


class InvalidActionError(Exception):
    """Raised when a payload is not a valid action for the session's engine."""

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        self.errors = errors
        super().__init__(f"Invalid action payload ({len(errors)} error(s))")

    @classmethod
    def from_validation(cls, exc: ValidationError) -> InvalidActionError:
        return cls(exc.errors(include_url=False, include_context=False, include_input=False))


class FundingNotOfferedError(Exception):
    """Raised when a path round is accepted that is not the one currently due."""

    def __init__(self, round_id: str, due: Optional[str]) -> None:
        self.round_id = round_id
        self.due = due
        super().__init__(f"Funding round {round_id} is not on offer (due: {due or 'none'})")


class Session:
    """One game in progress.  ``state`` is replaced wholesale on every change."""

    __slots__ = (
        "session_id",
        "kind",
        "state",
        "rng",
        "version",
        "created_at",
        "updated_at",
    )

    def __init__(
        self,
        kind: SessionKind,
        state: GameState | PathGameState,
        rng: random.Random,
    ) -> None:
        self.session_id: UUID = new_id()
        self.kind = kind
        self.state = state
        self.rng = rng
        self.version = 0
        self.created_at: datetime = utc_now()
        self.updated_at: datetime = self.created_at

    def replace(self, state: GameState | PathGameState) -> None:
        if state is self.state:
            return
        self.state = state
        self.version += 1
        self.updated_at = utc_now()

    def to_dict(self) -> dict[str, Any]:
        return {
            "session_id": str(self.session_id),
            "kind": self.kind.value,
            "version": self.version,
            "state": self.state.model_dump(mode="json"),
        }


class SessionStore:
    """Async-safe, in-memory store for board and path sessions.

    Args:
        max_sessions: Capacity; the stalest session is evicted beyond it.
        rng_seed: Seeds every session's dice.  None draws from the OS.
        board_starting_confidence: Investor confidence of new board games.
        path_starting_confidence: Investor confidence of new path games.
        default_burn_rate: Quarterly burn of new path games ($M).
        funding_runway_quarters: Runway below which a path round is due.
    """

    def __init__(
        self,
        max_sessions: int = 1000,
        rng_seed: Optional[int] = None,
        board_starting_confidence: float = 100.0,
        path_starting_confidence: float = 80.0,
        default_burn_rate: float = 5.0,
        funding_runway_quarters: float = RUNWAY_FUNDING_THRESHOLD,
    ) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")

        self._max_sessions = max_sessions
        self._seeder = random.Random(rng_seed)
        self._board_confidence = board_starting_confidence
        self._path_confidence = path_starting_confidence
        self._burn_rate = default_burn_rate
        self._runway_quarters = funding_runway_quarters
        self._lock = asyncio.Lock()
        self._sessions: dict[UUID, Session] = {}

    # ── Public API ───────────────────────────────────────────────────────

    async def create_board(self, difficulty: Difficulty) -> Session:
        state = create_initial_state(difficulty, investor_confidence=self._board_confidence)
        async with self._lock:
            session = self._add(SessionKind.BOARD, state)
        logger.info("Created board session %s (%s)", session.session_id, difficulty.value)
        return session

    async def create_path(self, path_id: Optional[str] = None) -> Session:
        """New path game; selects *path_id* immediately when given."""
        state = create_initial_path_state(
            burn_rate=self._burn_rate,
            investor_confidence=self._path_confidence,
        )
        if path_id is not None:
            state = path_game_reducer(state, SelectPath(path_id=path_id))
        async with self._lock:
            session = self._add(SessionKind.PATH, state)
        logger.info("Created path session %s (%s)", session.session_id, path_id or "unselected")
        return session

    async def get(self, session_id: UUID, kind: Optional[SessionKind] = None) -> Session:
        async with self._lock:
            return self._require(session_id, kind)

    async def dispatch(
        self,
        session_id: UUID,
        payload: dict[str, Any],
        kind: Optional[SessionKind] = None,
    ) -> Session:
        """Validate *payload* as an action for the session and apply it.

        Raises:
            SessionNotFoundError: no such session (of *kind*, when given).
            InvalidActionError: the payload is not a valid action; the
                session is left untouched.
        """
        async with self._lock:
            session = self._require(session_id, kind)
            adapter = board_action_adapter if session.kind == SessionKind.BOARD else path_action_adapter
            try:
                action = adapter.validate_python(payload)
            except ValidationError as exc:
                logger.warning("Rejected action for session %s: %d validation error(s)",
                               session_id, exc.error_count())
                raise InvalidActionError.from_validation(exc) from exc

            reducer = game_reducer if session.kind == SessionKind.BOARD else path_game_reducer
            session.replace(reducer(session.state, action))
            logger.debug("Session %s applied %s (v=%d)", session_id, action.type, session.version)
            return session

    async def count(self) -> int:
        async with self._lock:
            return len(self._sessions)

    async def stats(self) -> dict[str, int]:
        async with self._lock:
            board = sum(1 for s in self._sessions.values() if s.kind == SessionKind.BOARD)
            return {
                "total_sessions": len(self._sessions),
                "board_sessions": board,
                "path_sessions": len(self._sessions) - board,
            }

    # ── Board turns ──────────────────────────────────────────────────────

    async def advance_board(self, session_id: UUID) -> Session:
        return await self._apply(
            session_id, SessionKind.BOARD,
            lambda s, rng: turns.advance_turn(s, rng),
        )

    async def resolve_decision(self, session_id: UUID, index: int) -> Session:
        return await self._apply(
            session_id, SessionKind.BOARD,
            lambda s, rng: turns.resolve_decision(s, index),
        )

    async def resolve_policy_scenario(self, session_id: UUID, index: int) -> Session:
        return await self._apply(
            session_id, SessionKind.BOARD,
            lambda s, rng: turns.resolve_policy_scenario(s, index),
        )

    async def acknowledge_shadow_failure(self, session_id: UUID) -> Session:
        return await self._apply(
            session_id, SessionKind.BOARD,
            lambda s, rng: turns.acknowledge_shadow_failure(s),
        )

    async def resolve_funding_round(
        self,
        session_id: UUID,
        accept: bool,
        negotiate: bool = False,
    ) -> Session:
        return await self._apply(
            session_id, SessionKind.BOARD,
            lambda s, rng: turns.resolve_funding_round(s, accept, negotiate),
        )

    # ── Path turns ───────────────────────────────────────────────────────

    async def advance_path(
        self,
        session_id: UUID,
        skip_funding: bool = False,
    ) -> tuple[Session, Optional[str]]:
        """Play one path quarter.  Also returns the round due, if the turn stopped for one."""
        async with self._lock:
            session = self._require(session_id, SessionKind.PATH)
            result = path_turns.advance_path_turn(
                session.state,
                session.rng,
                skip_funding=skip_funding,
                runway_threshold=self._runway_quarters,
            )
            session.replace(result.state)
            return session, result.funding_round

    async def accept_path_funding(
        self,
        session_id: UUID,
        round_id: str,
        negotiate: bool = False,
    ) -> Session:
        """Close the round that is currently due.  Any other round is refused."""
        async with self._lock:
            session = self._require(session_id, SessionKind.PATH)
            due = should_trigger_funding(session.state, self._runway_quarters)
            if round_id != due:
                raise FundingNotOfferedError(round_id, due)
            session.replace(path_turns.accept_funding(
                session.state, round_id, negotiate, runway_threshold=self._runway_quarters,
            ))
            return session

    # ── Internals ────────────────────────────────────────────────────────

    async def _apply(
        self,
        session_id: UUID,
        kind: SessionKind,
        step: Callable[[Any, random.Random], Any],
    ) -> Session:
        async with self._lock:
            session = self._require(session_id, kind)
            session.replace(step(session.state, session.rng))
            return session

    def _add(self, kind: SessionKind, state: GameState | PathGameState) -> Session:
        """Must be called while holding self._lock."""
        if len(self._sessions) >= self._max_sessions:
            self._evict_stalest()
        session = Session(kind, state, random.Random(self._seeder.getrandbits(64)))
        self._sessions[session.session_id] = session
        return session

    def _require(self, session_id: UUID, kind: Optional[SessionKind]) -> Session:
        """Must be called while holding self._lock."""
        session = self._sessions.get(session_id)
        if session is None or (kind is not None and session.kind != kind):
            raise SessionNotFoundError(session_id, kind)
        return session

    def _evict_stalest(self) -> None:
        """Must be called while holding self._lock."""
        stalest = min(self._sessions.values(), key=lambda s: s.updated_at)
        del self._sessions[stalest.session_id]
        logger.info("Evicted session %s (capacity %d reached)", stalest.session_id, self._max_sessions)
