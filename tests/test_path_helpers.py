"""Tests for path event draws and funding helpers."""

import random

import pytest

from long_game.core.path_engine import (
    calculate_funding_terms,
    create_initial_path_state,
    get_random_event,
    path_game_reducer,
    should_trigger_funding,
)
from long_game.domain import path_actions as pa
from long_game.domain.enums import PathPhase
from long_game.domain.path import PathGameState

OSM = "orphan-small-molecule"
_DISCOVERY_IDS = {"osm-formulation-challenge", "osm-biomarker-success"}


def _playing(**overrides) -> PathGameState:
    state = path_game_reducer(create_initial_path_state(), pa.SelectPath(path_id=OSM))
    return state.model_copy(update=overrides) if overrides else state


class TestRandomEvent:
    def test_no_path_means_no_event(self) -> None:
        assert get_random_event(create_initial_path_state()) is None

    def test_draws_from_current_phase(self) -> None:
        event = get_random_event(_playing(), random.Random(3))
        assert event.id in _DISCOVERY_IDS
        assert event.phase == PathPhase.DISCOVERY

    def test_unused_events_come_first(self) -> None:
        state = _playing(completed_events=["osm-formulation-challenge"])
        for seed in range(10):
            assert get_random_event(state, random.Random(seed)).id == "osm-biomarker-success"

    def test_exhausted_pool_repeats_with_fresh_id(self) -> None:
        state = _playing(completed_events=sorted(_DISCOVERY_IDS))
        event = get_random_event(state, random.Random(0))
        base, _, stamp = event.id.partition("-repeat-")
        assert base in _DISCOVERY_IDS
        assert stamp.isdigit()
        assert event.id not in state.completed_events
        assert event.choices

    def test_pool_cycles_once_before_repeating(self) -> None:
        state = _playing()
        rng = random.Random(5)
        drawn = []
        for _ in range(len(_DISCOVERY_IDS) + 1):
            event = get_random_event(state, rng)
            drawn.append(event.id)
            state = path_game_reducer(state, pa.SetPendingEvent(event=event))
            state = path_game_reducer(state, pa.ResolveEvent(choice_id=event.choices[0].id, event=event))
        assert set(drawn[:-1]) == _DISCOVERY_IDS
        base, sep, _ = drawn[-1].partition("-repeat-")
        assert sep
        assert base in _DISCOVERY_IDS
        assert state.completed_events == drawn

    def test_seeded_draws_are_reproducible(self) -> None:
        state = _playing()
        first = [get_random_event(state, random.Random(42)).id for _ in range(3)]
        second = [get_random_event(state, random.Random(42)).id for _ in range(3)]
        assert first == second


class TestShouldTriggerFunding:
    def test_no_path_no_round(self) -> None:
        assert should_trigger_funding(create_initial_path_state()) is None

    def test_long_runway_no_round(self) -> None:
        # 80 / 5 = 16 quarters
        assert should_trigger_funding(_playing()) is None

    def test_short_runway_offers_first_open_round(self) -> None:
        assert should_trigger_funding(_playing(capital=15.0)) == "seed"

    def test_skips_completed_rounds_in_path_order(self) -> None:
        state = _playing(capital=15.0, funding_rounds_completed=["seed", "seriesB"])
        assert should_trigger_funding(state) == "seriesA"

    def test_exactly_one_year_is_enough(self) -> None:
        assert should_trigger_funding(_playing(capital=20.0)) is None

    def test_custom_threshold(self) -> None:
        assert should_trigger_funding(_playing(capital=20.0), runway_threshold=6) == "seed"

    def test_all_rounds_done(self) -> None:
        done = ["seed", "seriesA", "seriesB", "seriesC", "crossover"]
        assert should_trigger_funding(_playing(capital=5.0, funding_rounds_completed=done)) is None


class TestCalculateFundingTerms:
    def test_seed_at_starting_confidence(self) -> None:
        terms = calculate_funding_terms("seed", 80)
        # midpoint 10 * 1.18, dilution 0.20 * 0.82
        assert terms.raise_amount == 12
        assert terms.dilution == pytest.approx(0.164)
        assert terms.pre_money_valuation == 61

    def test_low_confidence_costs_more_equity(self) -> None:
        high = calculate_funding_terms("seriesA", 90)
        low = calculate_funding_terms("seriesA", 10)
        assert low.raise_amount < high.raise_amount
        assert low.dilution > high.dilution

    def test_unknown_round_offers_nothing(self) -> None:
        terms = calculate_funding_terms("mystery", 80)
        assert terms.raise_amount == 0
        assert terms.dilution == 0
        assert terms.pre_money_valuation is None
