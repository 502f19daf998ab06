"""Tests for path turn orchestration."""

import random

import pytest

from long_game.core.path_engine import create_initial_path_state, path_game_reducer
from long_game.core.path_turns import accept_funding, advance_path_turn
from long_game.domain import path_actions as pa
from long_game.domain.enums import PathPhase, PathStatus
from long_game.domain.path import PathGameState

OSM = "orphan-small-molecule"


def _playing(**overrides) -> PathGameState:
    state = path_game_reducer(create_initial_path_state(), pa.SelectPath(path_id=OSM))
    return state.model_copy(update=overrides) if overrides else state


class TestAdvancePathTurn:
    def test_quarter_passes_and_event_is_drawn(self) -> None:
        turn = advance_path_turn(_playing(), random.Random(1))
        assert turn.funding_round is None
        assert turn.state.capital == 75
        assert turn.state.pending_event.phase == PathPhase.DISCOVERY

    def test_pending_event_blocks_the_turn(self) -> None:
        state = advance_path_turn(_playing(), random.Random(1)).state
        assert advance_path_turn(state, random.Random(1)).state is state

    def test_short_runway_stops_for_funding(self) -> None:
        state = _playing(capital=15.0)
        turn = advance_path_turn(state, random.Random(1))
        assert turn.funding_round == "seed"
        assert turn.state is state

    def test_skip_funding_plays_anyway(self) -> None:
        turn = advance_path_turn(_playing(capital=15.0), random.Random(1), skip_funding=True)
        assert turn.funding_round is None
        assert turn.state.capital == 10

    def test_finished_phase_advances_and_draws_from_new_phase(self) -> None:
        turn = advance_path_turn(_playing(phase_progress=100.0), random.Random(1))
        assert turn.state.current_phase == PathPhase.PRECLINICAL
        assert turn.state.capital == 80
        assert turn.state.pending_event.phase == PathPhase.PRECLINICAL

    def test_running_dry_draws_no_event(self) -> None:
        turn = advance_path_turn(_playing(capital=4.0), random.Random(1), skip_funding=True)
        assert turn.state.status == PathStatus.DEFEAT
        assert turn.state.pending_event is None

    def test_no_turns_after_victory(self) -> None:
        state = path_game_reducer(_playing(), pa.PathVictory())
        assert advance_path_turn(state).state is state


class TestAcceptFunding:
    def test_accepts_offered_terms(self) -> None:
        state = accept_funding(_playing(capital=15.0), "seed")
        assert state.capital == 27
        assert state.founder_ownership == pytest.approx(0.836)
        assert state.funding_rounds_completed == ["seed"]

    def test_negotiated_terms(self) -> None:
        state = accept_funding(_playing(capital=15.0), "seed", negotiate=True)
        # 12 * 0.7 rounds to 8
        assert state.capital == 23
        assert state.founder_ownership == pytest.approx(1 - 0.164 * 0.85)

    def test_funded_round_is_not_offered_again(self) -> None:
        state = accept_funding(_playing(capital=15.0), "seed")
        state = state.model_copy(update={"capital": 15.0})
        assert advance_path_turn(state, random.Random(1)).funding_round == "seriesA"

    def test_unknown_round_is_ignored(self) -> None:
        state = _playing()
        assert accept_funding(state, "mystery") is state

    def test_round_outside_the_catalog_is_ignored(self) -> None:
        state = _playing(capital=15.0)
        for _ in range(3):
            state = accept_funding(state, "ipo")
        assert state.capital == 15
        assert state.funding_rounds_completed == []

    def test_only_the_earliest_open_round_closes(self) -> None:
        state = _playing(capital=15.0)
        assert accept_funding(state, "seriesA") is state

    def test_round_closes_only_once(self) -> None:
        state = accept_funding(_playing(capital=15.0), "seed")
        state = state.model_copy(update={"capital": 15.0})
        assert accept_funding(state, "seed") is state

    def test_nothing_closes_while_runway_is_long(self) -> None:
        state = _playing()
        assert accept_funding(state, "seed") is state
