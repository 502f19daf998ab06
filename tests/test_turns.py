"""Tests for board turn orchestration."""

import pytest

from long_game.core.board_engine import create_initial_state, game_reducer
from long_game.core.turns import (
    acknowledge_shadow_failure,
    advance_turn,
    check_triggers,
    resolve_decision,
    resolve_funding_round,
    resolve_policy_scenario,
)
from long_game.domain import actions as a
from long_game.domain.board import CardChoice, PendingDecision
from long_game.domain.enums import (
    DecisionType,
    Difficulty,
    FinancingType,
    GamePhase,
    GameStatus,
    ShadowStatus,
)
from long_game.domain.game_state import GameState
from long_game.domain.tokens import DataTokens


class _FixedRng:
    """Stands in for random.Random with a fixed roll."""

    def __init__(self, value: float) -> None:
        self.value = value

    def random(self) -> float:
        return self.value


PASS = _FixedRng(0.0)
FAIL = _FixedRng(0.99)


def _state(**overrides) -> GameState:
    state = create_initial_state(Difficulty.BLOCKBUSTER)
    return state.model_copy(update=overrides) if overrides else state


class TestAdvanceTurn:
    def test_first_space_opens_modality_scenario(self) -> None:
        state = advance_turn(_state(), PASS)
        assert state.current_space == 1
        assert state.turn_number == 1
        assert state.capital == 147
        assert state.data_tokens.efficacy == 1
        assert state.pending_policy_scenario.scenario_id == "drug-modality-choice"

    def test_nothing_moves_while_pending(self) -> None:
        state = advance_turn(_state(), PASS)
        assert advance_turn(state, PASS) is state

    def test_finished_game_does_not_move(self) -> None:
        state = _state(status=GameStatus.WON)
        assert advance_turn(state, PASS) is state

    def test_failed_roll_costs_confidence_and_offers_retry(self) -> None:
        state = advance_turn(_state(), FAIL)
        assert state.current_space == 1
        assert state.investor_confidence == 95
        assert state.data_tokens.efficacy == 0
        decision = state.pending_decision
        assert decision.type == DecisionType.SPACE
        assert decision.options[0].cost == 3

    def test_failure_on_return_space_sends_player_back(self) -> None:
        state = advance_turn(_state(current_space=7, phase=GamePhase.PRECLINICAL), FAIL)
        assert state.current_space == 5
        assert len(state.history.failed_programs) == 1
        assert state.pending is None

    def test_crossing_into_new_phase_records_milestone(self) -> None:
        state = advance_turn(_state(current_space=6), PASS)
        assert state.phase == GamePhase.PRECLINICAL
        assert state.current_year == 2.0
        assert state.year_history[-1].event == "Discovery complete"

    def test_successful_upgrade_space_offers_upgrade(self) -> None:
        state = advance_turn(_state(current_space=4), PASS)
        decision = state.pending_decision
        assert decision.title.startswith("Upgrade")
        pkpd = state.data_tokens.pkpd
        state = resolve_decision(state, 0)
        assert state.capital == 150 - 8 - 5
        assert state.data_tokens.pkpd == pkpd + 1


class TestBlockedTurns:
    def test_unmet_gate_offers_extra_studies(self) -> None:
        state = advance_turn(_state(current_space=5, data_tokens=DataTokens(efficacy=1)), PASS)
        assert state.current_space == 5
        decision = state.pending_decision
        assert decision.type == DecisionType.GATE
        # 2 efficacy + 1 pkpd missing
        assert decision.options[0].cost == 15

    def test_extra_studies_close_the_gap(self) -> None:
        state = advance_turn(_state(current_space=5, data_tokens=DataTokens(efficacy=1)), PASS)
        state = resolve_decision(state, 0)
        assert state.capital == 135
        assert state.data_tokens.efficacy == 3
        assert state.data_tokens.pkpd == 1
        state = advance_turn(state, PASS)
        assert state.current_space == 6

    def test_waiting_loses_a_turn(self) -> None:
        state = advance_turn(_state(current_space=5), PASS)
        state = resolve_decision(state, 1)
        assert state.wait_turns == 1
        state = advance_turn(state, PASS)
        assert state.wait_turns == 0
        assert state.current_space == 5

    def test_unaffordable_space_offers_financing(self) -> None:
        state = advance_turn(_state(current_space=13, phase=GamePhase.CLINICAL, capital=10.0), PASS)
        decision = state.pending_decision
        assert decision.type == DecisionType.FINANCING
        assert [o.capital_change for o in decision.options[:2]] == [10, 10]

    def test_equity_raise_dilutes(self) -> None:
        state = advance_turn(_state(current_space=13, phase=GamePhase.CLINICAL, capital=10.0), PASS)
        state = resolve_decision(state, 0)
        assert state.capital == 20
        assert state.score.penalties[-1].category == "Dilution"
        assert state.history.decisions[-1].capital_after == 20

    def test_venture_debt_pays_fees(self) -> None:
        state = advance_turn(_state(current_space=13, phase=GamePhase.CLINICAL, capital=10.0), PASS)
        state = resolve_decision(state, 1)
        assert state.capital == 18
        assert state.score.penalties == []

    def test_explicit_zero_dilution_is_kept(self) -> None:
        decision = PendingDecision(
            type=DecisionType.FINANCING,
            title="Grant",
            context="Non-dilutive money",
            options=[CardChoice(
                label="Take the grant",
                consequence="No equity sold",
                capital_change=10,
                financing=FinancingType.DILUTION,
                dilution_percent=0,
            )],
        )
        state = game_reducer(_state(), a.SetPendingDecision(decision=decision))
        state = resolve_decision(state, 0)
        assert state.capital == 160
        assert state.history.financing_events[-1].dilution_percent == 0
        assert state.score.penalties[-1].description == "Diluted 0% for $10M"

    def test_out_of_range_choice_is_ignored(self) -> None:
        state = advance_turn(_state(current_space=5), PASS)
        assert resolve_decision(state, 7) is state


class TestWaitAndVictory:
    def test_regulatory_review_waits_two_turns(self) -> None:
        state = advance_turn(_state(current_space=19, phase=GamePhase.REGULATORY), PASS)
        assert state.current_space == 20
        assert state.wait_turns == 2
        state = advance_turn(advance_turn(state, PASS), PASS)
        assert (state.current_space, state.wait_turns) == (20, 0)

    def test_approval_wins_the_game(self) -> None:
        tokens = DataTokens(efficacy=8, safety=6, pkpd=4, cmc=4)
        state = _state(current_space=22, phase=GamePhase.REGULATORY, data_tokens=tokens)
        state = advance_turn(state, PASS)
        assert state.status == GameStatus.WON
        assert state.score.total > 0
        assert state.year_history[-1].event == "Regulatory complete"

    def test_rejected_approval_steps_back(self) -> None:
        tokens = DataTokens(efficacy=8, safety=6, pkpd=4, cmc=4)
        state = _state(current_space=22, phase=GamePhase.REGULATORY, data_tokens=tokens)
        state = advance_turn(state, FAIL)
        assert state.status == GameStatus.PLAYING
        assert state.current_space == 22
        assert len(state.history.failed_programs) == 1


class TestTriggers:
    def test_shadow_failure_comes_before_funding(self) -> None:
        state = advance_turn(_state(current_space=6), PASS)
        assert state.pending_shadow_failure.id == "shadow-liver-signal"

    def test_acknowledging_shadow_failure(self) -> None:
        state = advance_turn(_state(current_space=6), PASS)
        state = acknowledge_shadow_failure(state)
        assert state.shadow_state("shadow-liver-signal").status == ShadowStatus.FAILED
        assert state.total_failure_cost == 20
        assert state.investor_confidence == 92
        assert state.pending_funding_round == "seriesA"

    def test_failed_program_is_not_offered_again(self) -> None:
        state = advance_turn(_state(current_space=6), PASS)
        state = resolve_funding_round(acknowledge_shadow_failure(state), accept=False)
        assert state.pending is None
        # a declined round is the only thing left at this space
        assert check_triggers(state).pending_funding_round == "seriesA"

    def test_declined_setback_surfaces_scenario(self) -> None:
        state = advance_turn(_state(), FAIL)
        state = resolve_decision(state, 1)
        assert state.history.decisions[-1].chosen_option == "Move on"
        assert state.pending_policy_scenario.scenario_id == "drug-modality-choice"


class TestResolutions:
    def _at_seed(self) -> GameState:
        state = advance_turn(_state(), PASS)
        return resolve_policy_scenario(state, 0)

    def test_policy_choice_applies_and_completes(self) -> None:
        state = self._at_seed()
        assert state.investor_confidence == 90
        assert state.completed_policy_scenarios == ["drug-modality-choice"]
        assert len(state.unlocked_insights) == 1
        assert state.pending_funding_round == "seed"

    def test_accepting_seed(self) -> None:
        state = resolve_funding_round(self._at_seed(), accept=True)
        # midpoint 6 * 1.24, dilution 0.20 * 0.76
        assert state.capital == 147 + 7
        assert state.founder_ownership == pytest.approx(0.848)
        assert state.funding_rounds_completed == ["seed"]
        assert state.pending is None

    def test_negotiated_seed(self) -> None:
        state = resolve_funding_round(self._at_seed(), accept=True, negotiate=True)
        assert state.capital == 147 + 5
        assert state.founder_ownership == pytest.approx(1 - 0.152 * 0.85)

    def test_declining_seed(self) -> None:
        state = resolve_funding_round(self._at_seed(), accept=False)
        assert state.pending is None
        assert state.funding_rounds_completed == []
        assert state.capital == 147

    def test_nothing_pending_is_identity(self) -> None:
        state = _state()
        assert resolve_funding_round(state, accept=True) is state
        assert resolve_policy_scenario(state, 0) is state
        assert acknowledge_shadow_failure(state) is state
