"""Tests for the SessionStore."""

import asyncio
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from long_game.domain.enums import Difficulty, GameStatus, PathStatus
from long_game.store import session_store
from long_game.store.session_store import (
    FundingNotOfferedError,
    InvalidActionError,
    SessionKind,
    SessionNotFoundError,
    SessionStore,
)

OSM = "orphan-small-molecule"


@pytest.fixture
def store() -> SessionStore:
    return SessionStore(rng_seed=7)


@pytest.fixture
def ticking_clock(monkeypatch: pytest.MonkeyPatch):
    """Replace the store's clock with one that advances a second per call."""
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    ticks = iter(range(10_000))
    monkeypatch.setattr(session_store, "utc_now", lambda: start + timedelta(seconds=next(ticks)))


class TestCreateAndGet:
    @pytest.mark.asyncio
    async def test_create_board(self, store: SessionStore) -> None:
        session = await store.create_board(Difficulty.ORPHAN)
        assert session.kind == SessionKind.BOARD
        assert session.state.status == GameStatus.PLAYING
        assert session.state.capital == 80
        assert session.version == 0

    @pytest.mark.asyncio
    async def test_create_path_selects_path(self, store: SessionStore) -> None:
        session = await store.create_path(OSM)
        assert session.state.status == PathStatus.PLAYING
        assert session.state.investor_confidence == 80

    @pytest.mark.asyncio
    async def test_create_path_without_selection(self, store: SessionStore) -> None:
        session = await store.create_path()
        assert session.state.status == PathStatus.PATH_SELECTION

    @pytest.mark.asyncio
    async def test_configured_defaults_apply(self) -> None:
        store = SessionStore(board_starting_confidence=60, default_burn_rate=8)
        board = await store.create_board(Difficulty.BLOCKBUSTER)
        path = await store.create_path(OSM)
        assert board.state.investor_confidence == 60
        assert path.state.burn_rate == 8

    @pytest.mark.asyncio
    async def test_get_unknown_raises(self, store: SessionStore) -> None:
        with pytest.raises(SessionNotFoundError):
            await store.get(uuid4())

    @pytest.mark.asyncio
    async def test_get_wrong_kind_raises(self, store: SessionStore) -> None:
        session = await store.create_board(Difficulty.ORPHAN)
        with pytest.raises(SessionNotFoundError) as exc_info:
            await store.get(session.session_id, SessionKind.PATH)
        assert exc_info.value.kind == SessionKind.PATH

    @pytest.mark.asyncio
    async def test_stats(self, store: SessionStore) -> None:
        await store.create_board(Difficulty.ORPHAN)
        await store.create_path(OSM)
        await store.create_path()
        assert await store.stats() == {"total_sessions": 3, "board_sessions": 1, "path_sessions": 2}

    def test_rejects_zero_capacity(self) -> None:
        with pytest.raises(ValueError):
            SessionStore(max_sessions=0)


class TestDispatch:
    @pytest.mark.asyncio
    async def test_applies_action_and_bumps_version(self, store: SessionStore) -> None:
        session = await store.create_board(Difficulty.BLOCKBUSTER)
        session = await store.dispatch(session.session_id, {"type": "PAY_COST", "amount": 10})
        assert session.state.capital == 140
        assert session.version == 1

    @pytest.mark.asyncio
    async def test_identity_transition_keeps_version(self, store: SessionStore) -> None:
        session = await store.create_board(Difficulty.BLOCKBUSTER)
        session = await store.dispatch(session.session_id, {"type": "SAVE_GAME"})
        assert session.version == 0

    @pytest.mark.asyncio
    async def test_invalid_payload_leaves_state(self, store: SessionStore) -> None:
        session = await store.create_board(Difficulty.BLOCKBUSTER)
        before = session.state
        with pytest.raises(InvalidActionError) as exc_info:
            await store.dispatch(session.session_id, {"type": "PAY_COST", "amount": "lots"})
        assert exc_info.value.errors
        assert session.state is before

    @pytest.mark.asyncio
    async def test_path_session_uses_path_actions(self, store: SessionStore) -> None:
        session = await store.create_path(OSM)
        session = await store.dispatch(session.session_id, {"type": "ADVANCE_TIME", "quarters": 1})
        assert session.state.capital == 75

    @pytest.mark.asyncio
    async def test_concurrent_dispatches_are_serialized(self, store: SessionStore) -> None:
        session = await store.create_board(Difficulty.BLOCKBUSTER)
        await asyncio.gather(*(
            store.dispatch(session.session_id, {"type": "PAY_COST", "amount": 1})
            for _ in range(10)
        ))
        session = await store.get(session.session_id)
        assert session.state.capital == 140
        assert session.version == 10

    @pytest.mark.asyncio
    async def test_to_dict(self, store: SessionStore) -> None:
        session = await store.create_board(Difficulty.ORPHAN)
        data = session.to_dict()
        assert data["kind"] == "board"
        assert data["state"]["difficulty"] == "orphan"


class TestTurns:
    @pytest.mark.asyncio
    async def test_board_turn(self, store: SessionStore) -> None:
        session = await store.create_board(Difficulty.BLOCKBUSTER)
        session = await store.advance_board(session.session_id)
        assert session.state.current_space == 1

    @pytest.mark.asyncio
    async def test_board_turn_rejects_path_session(self, store: SessionStore) -> None:
        session = await store.create_path(OSM)
        with pytest.raises(SessionNotFoundError):
            await store.advance_board(session.session_id)

    @pytest.mark.asyncio
    async def test_path_turn_reports_due_round(self, store: SessionStore) -> None:
        session = await store.create_path(OSM)
        await store.dispatch(session.session_id, {"type": "SPEND_CAPITAL", "amount": 65})
        session, due = await store.advance_path(session.session_id)
        assert due == "seed"
        session = await store.accept_path_funding(session.session_id, due)
        assert session.state.funding_rounds_completed == ["seed"]

    @pytest.mark.asyncio
    async def test_path_funding_refuses_rounds_not_due(self, store: SessionStore) -> None:
        session = await store.create_path(OSM)
        with pytest.raises(FundingNotOfferedError) as exc_info:
            await store.accept_path_funding(session.session_id, "seed")
        assert exc_info.value.due is None

        await store.dispatch(session.session_id, {"type": "SPEND_CAPITAL", "amount": 65})
        with pytest.raises(FundingNotOfferedError) as exc_info:
            await store.accept_path_funding(session.session_id, "ipo")
        assert exc_info.value.due == "seed"
        session = await store.get(session.session_id)
        assert session.state.capital == 15

    @pytest.mark.asyncio
    async def test_same_seed_same_game(self) -> None:
        first, second = SessionStore(rng_seed=11), SessionStore(rng_seed=11)
        a = await first.create_path(OSM)
        b = await second.create_path(OSM)
        a, _ = await first.advance_path(a.session_id)
        b, _ = await second.advance_path(b.session_id)
        assert a.state.pending_event.id == b.state.pending_event.id

        c = await first.create_board(Difficulty.ORPHAN)
        d = await second.create_board(Difficulty.ORPHAN)
        c = await first.advance_board(c.session_id)
        d = await second.advance_board(d.session_id)
        assert c.state == d.state


class TestEviction:
    @pytest.mark.asyncio
    async def test_evicts_least_recently_updated(self, ticking_clock) -> None:
        store = SessionStore(max_sessions=2)
        old = await store.create_board(Difficulty.ORPHAN)
        newer = await store.create_board(Difficulty.ORPHAN)
        await store.dispatch(old.session_id, {"type": "PAY_COST", "amount": 1})
        await store.create_path(OSM)

        assert await store.count() == 2
        await store.get(old.session_id)
        with pytest.raises(SessionNotFoundError):
            await store.get(newer.session_id)
