"""Tests for the path reducer."""

import pytest

from long_game.content.path_events import get_events_for_phase
from long_game.core.path_engine import (
    BANKRUPT_REASON,
    INSUFFICIENT_CAPITAL_REASON,
    create_initial_path_state,
    path_game_reducer,
)
from long_game.domain import path_actions as pa
from long_game.domain.enums import PathPhase, PathStatus
from long_game.domain.path import PathGameState

OSM = "orphan-small-molecule"


def _playing(**overrides) -> PathGameState:
    state = path_game_reducer(create_initial_path_state(), pa.SelectPath(path_id=OSM))
    return state.model_copy(update=overrides) if overrides else state


def _event(event_id: str):
    for phase in PathPhase:
        for event in get_events_for_phase(OSM, phase):
            if event.id == event_id:
                return event
    raise LookupError(event_id)


def _run(state: PathGameState, *actions) -> PathGameState:
    for action in actions:
        state = path_game_reducer(state, action)
    return state


class TestSelectPath:
    def test_select_path_starts_play(self) -> None:
        state = _playing()
        assert state.status == PathStatus.PLAYING
        assert state.capital == 80
        assert state.market_potential == 2000
        assert state.path_data.id == OSM

    def test_unknown_path_is_ignored(self) -> None:
        state = create_initial_path_state()
        assert path_game_reducer(state, pa.SelectPath(path_id="nope")) is state


class TestAdvanceTime:
    def test_burns_capital_and_advances_progress(self) -> None:
        state = path_game_reducer(_playing(), pa.AdvancePathTime(quarters=1))
        assert state.capital == 75
        assert state.current_quarter == 2
        # discovery lasts 2.5 years: 10 quarters
        assert state.phase_progress == pytest.approx(10.0)

    def test_quarter_rolls_into_next_year(self) -> None:
        state = path_game_reducer(_playing(current_quarter=4), pa.AdvancePathTime(quarters=1))
        assert (state.current_year, state.current_quarter) == (1, 1)

    def test_progress_caps_at_100(self) -> None:
        state = path_game_reducer(_playing(phase_progress=95.0), pa.AdvancePathTime(quarters=2))
        assert state.phase_progress == 100.0

    def test_running_dry_is_defeat(self) -> None:
        state = path_game_reducer(_playing(), pa.AdvancePathTime(quarters=20))
        assert state.status == PathStatus.DEFEAT
        assert state.capital == 0
        assert state.defeat_reason == BANKRUPT_REASON

    def test_exactly_zero_is_defeat(self) -> None:
        state = path_game_reducer(_playing(capital=5.0), pa.AdvancePathTime(quarters=1))
        assert state.status == PathStatus.DEFEAT


class TestCapital:
    def test_spend(self) -> None:
        assert path_game_reducer(_playing(), pa.SpendCapital(amount=30)).capital == 50

    def test_spending_exactly_everything_is_allowed(self) -> None:
        state = path_game_reducer(_playing(), pa.SpendCapital(amount=80))
        assert state.capital == 0
        assert state.status == PathStatus.PLAYING

    def test_overspending_is_defeat(self) -> None:
        state = path_game_reducer(_playing(), pa.SpendCapital(amount=81))
        assert state.status == PathStatus.DEFEAT
        assert state.defeat_reason == INSUFFICIENT_CAPITAL_REASON

    def test_gain(self) -> None:
        assert path_game_reducer(_playing(), pa.GainCapital(amount=20)).capital == 100


class TestEvents:
    def test_resolve_event_applies_choice(self) -> None:
        event = _event("osm-formulation-challenge")
        state = _run(_playing(), pa.SetPendingEvent(event=event),
                     pa.ResolveEvent(choice_id="new-formulation", event=event))
        assert state.capital == 76
        assert state.investor_confidence == 85
        # half a year
        assert state.current_quarter == 3
        assert state.pending_event is None
        assert state.completed_events == ["osm-formulation-challenge"]
        assert state.event_history[0].choice_id == "new-formulation"

    def test_time_saving_choice_moves_calendar_back(self) -> None:
        event = _event("osm-biomarker-success")
        state = path_game_reducer(
            _playing(current_year=2, current_quarter=1),
            pa.ResolveEvent(choice_id="accelerate", event=event),
        )
        assert (state.current_year, state.current_quarter) == (1, 4)

    def test_unknown_choice_is_ignored(self) -> None:
        event = _event("osm-formulation-challenge")
        state = _playing()
        assert path_game_reducer(state, pa.ResolveEvent(choice_id="nope", event=event)) is state

    def test_costly_choice_may_leave_capital_negative(self) -> None:
        event = _event("osm-formulation-challenge")
        state = path_game_reducer(_playing(capital=2.0), pa.ResolveEvent(choice_id="new-formulation", event=event))
        assert state.capital == -2
        assert state.status == PathStatus.PLAYING
        state = path_game_reducer(state, pa.AdvancePathTime(quarters=1))
        assert state.status == PathStatus.DEFEAT


class TestFundingAndPhases:
    def test_funding_round_dilutes_and_adds_capital(self) -> None:
        state = path_game_reducer(
            _playing(), pa.CompletePathFundingRound(round_id="seed", raised=12, dilution=0.164),
        )
        assert state.capital == 92
        assert state.founder_ownership == pytest.approx(0.836)
        assert state.funding_rounds_completed == ["seed"]

    def test_advance_phase_resets_progress(self) -> None:
        state = path_game_reducer(_playing(phase_progress=100.0), pa.AdvancePhase())
        assert state.current_phase == PathPhase.PRECLINICAL
        assert state.phase_progress == 0

    def test_advancing_past_approval_is_victory(self) -> None:
        state = path_game_reducer(_playing(current_phase=PathPhase.APPROVAL), pa.AdvancePhase())
        assert state.status == PathStatus.VICTORY

    def test_confidence_is_clamped(self) -> None:
        state = path_game_reducer(_playing(), pa.UpdateConfidence(delta=50))
        assert state.investor_confidence == 100

    def test_market_potential_multiplier(self) -> None:
        state = path_game_reducer(_playing(), pa.UpdateMarketPotential(multiplier=0.75))
        assert state.market_potential == 1500


class TestTerminalStates:
    @pytest.mark.parametrize(
        "action",
        [pa.AdvancePathTime(quarters=1), pa.GainCapital(amount=10), pa.AdvancePhase(),
         pa.SelectPath(path_id=OSM), pa.UpdateConfidence(delta=5)],
    )
    def test_victory_absorbs_actions(self, action) -> None:
        state = path_game_reducer(_playing(), pa.PathVictory())
        assert path_game_reducer(state, action) is state

    def test_defeat_absorbs_actions(self) -> None:
        state = path_game_reducer(_playing(), pa.PathGameOver(reason="Board pulled the plug"))
        assert state.defeat_reason == "Board pulled the plug"
        assert path_game_reducer(state, pa.GainCapital(amount=500)) is state

    def test_reset_leaves_terminal_state(self) -> None:
        state = path_game_reducer(_playing(burn_rate=7.0), pa.PathGameOver(reason="x"))
        state = path_game_reducer(state, pa.ResetGame())
        assert state.status == PathStatus.PATH_SELECTION
        assert state.selected_path is None
        assert state.burn_rate == 7.0
        assert state.investor_confidence == 80
