"""Board engine — the pure reducer over ``GameState``.

Design principles:
    1. ``game_reducer(state, action)`` never mutates *state*; every handler
       returns a new record built with ``model_copy(update=...)``.
    2. Game conditions never raise.  Unknown actions and unknown ids are
       identity transitions; bankruptcy is a state transition.
    3. At most one interaction is pending.  ``SET_PENDING_*`` is ignored
       while another is open; the bankruptcy decision overrides it.
    4. No randomness and no I/O.  Rolls happen in ``long_game.core.turns``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from long_game.content.balance import (
    APPROVAL_MINIMUM,
    BASE_SCORE,
    DIFFICULTY_SETTINGS,
    FUNDING_ROUNDS,
    MENU_CAPITAL,
    MENU_REVENUE_PROJECTION,
)
from long_game.content.policy_scenarios import get_scenario_for_space
from long_game.content.shadow_programs import initial_shadow_states
from long_game.content.spaces import FINAL_SPACE_ID
from long_game.core.financing import apply_financing_event, dilution_penalty, fmt_amount
from long_game.domain import actions as a
from long_game.domain.board import (
    CardChoice,
    Decision,
    FailedProgram,
    FinancingEvent,
    PendingDecision,
    PolicyScenarioRef,
    Score,
    ScoreLine,
)
from long_game.domain.enums import (
    DecisionType,
    Difficulty,
    FinancingType,
    GamePhase,
    GameStatus,
    ShadowStatus,
)
from long_game.domain.game_state import GameState
from long_game.domain.pending import (
    DecisionPending,
    FundingRoundPending,
    PolicyScenarioPending,
    ShadowFailurePending,
)
from long_game.domain.tokens import (
    DataTokens,
    add_tokens,
    excess_over,
    get_token_deficit,
    meets_gate_requirements,
    subtract_tokens,
)
from long_game.foundation.identifiers import new_record_id
from long_game.foundation.rounding import round_half_up

logger = logging.getLogger(__name__)

__all__ = [
    "calculate_final_score",
    "can_afford",
    "create_initial_state",
    "create_menu_state",
    "game_reducer",
    "get_token_deficit",
    "meets_gate_requirements",
    "phase_for_space",
]

EMERGENCY_AMOUNT = 100
EMERGENCY_DILUTION_PERCENT = 50
EMERGENCY_PENALTY = 200
FAILED_PROGRAM_PENALTY = 80
TARGET_TURNS = 50
COST_BENCHMARK = 1000


# ── State construction ───────────────────────────────────────────────────────

def create_menu_state() -> GameState:
    """State shown before a difficulty is chosen."""
    return GameState(
        capital=MENU_CAPITAL,
        status=GameStatus.MENU,
        revenue_projection=MENU_REVENUE_PROJECTION,
        shadow_programs=initial_shadow_states(),
    )


def create_initial_state(
    difficulty: Difficulty,
    investor_confidence: float = 100.0,
) -> GameState:
    settings = DIFFICULTY_SETTINGS[difficulty]
    return GameState(
        capital=settings.starting_capital,
        difficulty=difficulty,
        status=GameStatus.PLAYING,
        revenue_projection=settings.revenue_projection,
        shadow_programs=initial_shadow_states(),
        investor_confidence=investor_confidence,
    )


# ── Derived helpers ──────────────────────────────────────────────────────────

def phase_for_space(space_id: int) -> GamePhase:
    if space_id <= 6:
        return GamePhase.DISCOVERY
    if space_id <= 11:
        return GamePhase.PRECLINICAL
    if space_id <= 18:
        return GamePhase.CLINICAL
    return GamePhase.REGULATORY


def can_afford(state: GameState, cost: float) -> bool:
    return state.capital >= cost


def _bankruptcy_decision(capital: float) -> PendingDecision:
    return PendingDecision(
        type=DecisionType.FINANCING,
        title="BANKRUPTCY",
        context=f"Your capital has fallen to ${fmt_amount(capital)}M. You cannot continue operations.",
        options=[
            CardChoice(
                label="Emergency Financing (massive dilution)",
                consequence="Gain $100M but reduce final score by 50%",
                capital_change=EMERGENCY_AMOUNT,
                financing=FinancingType.EMERGENCY,
            ),
            CardChoice(
                label="Sell program to Big Pharma",
                consequence="Recover $50M, game ends but you see the analysis",
                capital_change=50,
                financing=FinancingType.PARTNERSHIP,
                ends_game=True,
            ),
            CardChoice(
                label="Shut down operations",
                consequence="Game over",
                ends_game=True,
            ),
        ],
        is_forced=True,
        educational_note="This is the reality for ~90% of biotech companies. Running out of "
                         "capital kills more drugs than bad science.",
    )


# ── Scoring ──────────────────────────────────────────────────────────────────

def calculate_final_score(state: GameState) -> Score:
    """Final score: base plus efficiency bonuses, minus penalties, floored at 0.

    Spend is derived from the financing log: starting capital plus every
    series, dilution and emergency raise, minus capital still on hand.
    """
    time_bonus = max(0, (TARGET_TURNS - state.turn_number) * 10)

    raised = sum(
        e.amount for e in state.history.financing_events
        if e.type in (FinancingType.SERIES, FinancingType.DILUTION, FinancingType.EMERGENCY)
    )
    spend = DIFFICULTY_SETTINGS[state.difficulty].starting_capital + raised - state.capital
    cost_bonus = max(0, (COST_BENCHMARK - spend) * 2)

    excess = excess_over(state.data_tokens, APPROVAL_MINIMUM)
    quality_bonus = excess * 5

    recorded = sum(p.value for p in state.score.penalties)
    setbacks = len(state.history.failed_programs)
    failure_penalty = setbacks * FAILED_PROGRAM_PENALTY

    bonuses = [
        ScoreLine(category="Time Efficiency",
                  description=f"Completed in {state.turn_number} turns", value=time_bonus),
        ScoreLine(category="Cost Efficiency",
                  description=f"Total spend: ${fmt_amount(spend)}M", value=cost_bonus),
        ScoreLine(category="Data Quality",
                  description=f"{excess} tokens above minimum", value=quality_bonus),
    ]
    penalties = list(state.score.penalties)
    if failure_penalty > 0:
        penalties.append(ScoreLine(
            category="Failed Programs",
            description=f"{setbacks} program setbacks",
            value=failure_penalty,
        ))

    total = BASE_SCORE + time_bonus + cost_bonus + quality_bonus - recorded - failure_penalty
    return Score(base=BASE_SCORE, bonuses=bonuses, penalties=penalties, total=max(0, total))


# ── Handlers: lifecycle ──────────────────────────────────────────────────────

def _start_game(state: GameState, action: a.StartGame) -> GameState:
    return create_initial_state(action.difficulty)


def _set_status(state: GameState, action: a.SetStatus) -> GameState:
    return state.model_copy(update={"status": action.status})


def _game_over(state: GameState, action: a.GameOver) -> GameState:
    logger.info("Board game over: %s", action.reason)
    return state.model_copy(update={
        "status": GameStatus.LOST,
        "unlocked_insights": [*state.unlocked_insights, f"Game ended: {action.reason}"],
    })


def _victory(state: GameState, action: a.Victory) -> GameState:
    score = calculate_final_score(state)
    logger.info("Board game won on turn %d with score %s", state.turn_number, score.total)
    return state.model_copy(update={"status": GameStatus.WON, "score": score})


def _save_game(state: GameState, action: a.SaveGame) -> GameState:
    return state


def _load_game(state: GameState, action: a.LoadGame) -> GameState:
    return action.state


# ── Handlers: movement ───────────────────────────────────────────────────────

def _advance_space(state: GameState, action: a.AdvanceSpace) -> GameState:
    if state.current_space >= FINAL_SPACE_ID:
        logger.debug("ADVANCE_SPACE ignored: already on the final space")
        return state
    next_space = state.current_space + 1
    return state.model_copy(update={
        "current_space": next_space,
        "phase": phase_for_space(next_space),
        "turn_number": state.turn_number + 1,
        "history": state.history.model_copy(update={
            "space_visits": [*state.history.space_visits, next_space],
        }),
    })


def _return_to_space(state: GameState, action: a.ReturnToSpace) -> GameState:
    setback = FailedProgram(
        turn=state.turn_number,
        phase=state.phase,
        space=state.current_space,
        reason="Returned to earlier phase",
        capital_lost=0,
    )
    return state.model_copy(update={
        "current_space": action.space_id,
        "phase": phase_for_space(action.space_id),
        "history": state.history.model_copy(update={
            "failed_programs": [*state.history.failed_programs, setback],
        }),
    })


def _set_wait_turns(state: GameState, action: a.SetWaitTurns) -> GameState:
    return state.model_copy(update={"wait_turns": action.turns})


def _decrement_wait(state: GameState, action: a.DecrementWait) -> GameState:
    return state.model_copy(update={"wait_turns": max(0, state.wait_turns - 1)})


# ── Handlers: resources ──────────────────────────────────────────────────────

def _pay_cost(state: GameState, action: a.PayCost) -> GameState:
    new_capital = state.capital - action.amount
    if new_capital <= 0:
        logger.info("Bankruptcy on turn %d (capital %.1f)", state.turn_number, new_capital)
        return state.model_copy(update={
            "capital": 0.0,
            "status": GameStatus.LOST,
            "pending": DecisionPending(decision=_bankruptcy_decision(new_capital)),
        })
    return state.model_copy(update={
        "capital": new_capital,
        "total_spent": state.total_spent + action.amount,
    })


def _gain_data(state: GameState, action: a.GainData) -> GameState:
    return state.model_copy(update={"data_tokens": add_tokens(state.data_tokens, action.tokens)})


def _lose_data(state: GameState, action: a.LoseData) -> GameState:
    return state.model_copy(update={"data_tokens": subtract_tokens(state.data_tokens, action.tokens)})


def _apply_revenue_multiplier(state: GameState, action: a.ApplyRevenueMultiplier) -> GameState:
    old = state.revenue_projection
    new = round_half_up(old * action.multiplier)
    reduction = round_half_up((1 - action.multiplier) * 100)
    insight = (
        f"Revenue projection changed from ${fmt_amount(old)}M to ${fmt_amount(new)}M "
        f"({reduction}% reduction)"
    )
    return state.model_copy(update={
        "revenue_projection": new,
        "unlocked_insights": [*state.unlocked_insights, insight],
    })


def _unlock_insight(state: GameState, action: a.UnlockInsight) -> GameState:
    if action.insight in state.unlocked_insights:
        return state
    return state.model_copy(update={"unlocked_insights": [*state.unlocked_insights, action.insight]})


def _update_investor_confidence(state: GameState, action: a.UpdateInvestorConfidence) -> GameState:
    confidence = max(0.0, min(100.0, state.investor_confidence + action.delta))
    return state.model_copy(update={"investor_confidence": confidence})


def _advance_time(state: GameState, action: a.AdvanceTime) -> GameState:
    return state.model_copy(update={"current_year": state.current_year + action.years})


def _add_year_milestone(state: GameState, action: a.AddYearMilestone) -> GameState:
    return state.model_copy(update={"year_history": [*state.year_history, action.milestone]})


# ── Handlers: cards ──────────────────────────────────────────────────────────

def _draw_risk_card(state: GameState, action: a.DrawRiskCard) -> GameState:
    return state.model_copy(update={
        "cards": state.cards.model_copy(update={
            "active_risk_cards": [*state.cards.active_risk_cards, action.card],
        }),
        "history": state.history.model_copy(update={
            "cards_drawn": [*state.history.cards_drawn, action.card.id],
        }),
    })


def _draw_policy_card(state: GameState, action: a.DrawPolicyCard) -> GameState:
    return state.model_copy(update={
        "cards": state.cards.model_copy(update={
            "active_policy_cards": [*state.cards.active_policy_cards, action.card],
        }),
        "history": state.history.model_copy(update={
            "cards_drawn": [*state.history.cards_drawn, action.card.id],
        }),
    })


# ── Handlers: financing ──────────────────────────────────────────────────────

def _with_financing_event(state: GameState, event: FinancingEvent) -> dict[str, Any]:
    return {
        "history": state.history.model_copy(update={
            "financing_events": [*state.history.financing_events, event],
        }),
    }


def _dilute(state: GameState, action: a.Dilute) -> GameState:
    outcome = apply_financing_event(
        state.founder_ownership, state.capital, action.amount, action.dilution_percent / 100,
    )
    event = FinancingEvent(
        turn=state.turn_number,
        type=FinancingType.DILUTION,
        amount=action.amount,
        dilution_percent=action.dilution_percent,
    )
    # Board dilution is scored, not tracked against ownership; zero percent still pays
    penalties = [*state.score.penalties, dilution_penalty(action.amount, action.dilution_percent / 100)]
    return state.model_copy(update={
        "capital": outcome.capital,
        "score": state.score.model_copy(update={"penalties": penalties}),
        **_with_financing_event(state, event),
    })


def _emergency_financing(state: GameState, action: a.EmergencyFinancing) -> GameState:
    event = FinancingEvent(
        turn=state.turn_number,
        type=FinancingType.EMERGENCY,
        amount=EMERGENCY_AMOUNT,
        dilution_percent=EMERGENCY_DILUTION_PERCENT,
    )
    penalty = ScoreLine(
        category="Emergency Financing",
        description="Desperate measures to survive",
        value=EMERGENCY_PENALTY,
    )
    decision = state.pending_decision
    pending = None if decision is not None and decision.is_forced else state.pending
    logger.info("Emergency financing on turn %d", state.turn_number)
    return state.model_copy(update={
        "capital": state.capital + EMERGENCY_AMOUNT,
        "status": GameStatus.PLAYING,
        "pending": pending,
        "score": state.score.model_copy(update={"penalties": [*state.score.penalties, penalty]}),
        **_with_financing_event(state, event),
    })


def _partnership(state: GameState, action: a.Partnership) -> GameState:
    event = FinancingEvent(
        turn=state.turn_number,
        type=FinancingType.PARTNERSHIP,
        amount=action.recovery_amount,
    )
    return state.model_copy(update={
        "capital": state.capital + action.recovery_amount,
        **_with_financing_event(state, event),
    })


def _complete_funding_round(state: GameState, action: a.CompleteFundingRound) -> GameState:
    funding = action.event
    outcome = apply_financing_event(
        state.founder_ownership, state.capital, funding.amount_raised, funding.dilution,
    )
    known = FUNDING_ROUNDS.get(funding.round)
    label = known.name if known is not None else funding.round
    event = FinancingEvent(
        turn=state.turn_number,
        type=FinancingType.SERIES,
        amount=funding.amount_raised,
        note=f"{label} round: ${fmt_amount(funding.amount_raised)}M "
             f"at {funding.dilution * 100:.0f}% dilution",
    )
    pending = None if isinstance(state.pending, FundingRoundPending) else state.pending
    return state.model_copy(update={
        "capital": outcome.capital,
        "founder_ownership": outcome.founder_ownership,
        "funding_rounds_completed": [*state.funding_rounds_completed, funding.round],
        "funding_history": [*state.funding_history, funding],
        "pending": pending,
        **_with_financing_event(state, event),
    })


def _update_founder_ownership(state: GameState, action: a.UpdateFounderOwnership) -> GameState:
    return state.model_copy(update={"founder_ownership": action.ownership})


# ── Handlers: pending interactions ───────────────────────────────────────────

def _blocked(state: GameState, action_type: str) -> bool:
    if state.pending is not None:
        logger.debug("%s ignored: %s already pending", action_type, state.pending.kind)
        return True
    return False


def _set_pending_decision(state: GameState, action: a.SetPendingDecision) -> GameState:
    if _blocked(state, action.type):
        return state
    return state.model_copy(update={"pending": DecisionPending(decision=action.decision)})


def _clear_pending_decision(state: GameState, action: a.ClearPendingDecision) -> GameState:
    if not isinstance(state.pending, DecisionPending):
        return state
    return state.model_copy(update={"pending": None})


def _resolve_decision(state: GameState, action: a.ResolveDecision) -> GameState:
    """Record the chosen option and clear the decision.

    The option's effects are applied by the caller; ``capital_after`` and
    ``tokens_after`` project its direct capital and data changes.
    """
    decision = state.pending_decision
    if decision is None:
        logger.debug("RESOLVE_DECISION ignored: no decision pending")
        return state
    if action.choice_index >= len(decision.options):
        logger.debug("RESOLVE_DECISION ignored: index %d out of range", action.choice_index)
        return state

    choice = decision.options[action.choice_index]
    capital_after = max(0.0, state.capital + (choice.capital_change or 0) - (choice.cost or 0))
    tokens_after: DataTokens = state.data_tokens
    if choice.data_change is not None:
        tokens_after = add_tokens(state.data_tokens, choice.data_change)

    record = Decision(
        id=new_record_id(),
        turn=state.turn_number,
        space=state.current_space,
        type=decision.type,
        chosen_option=choice.label,
        alternatives=[o.label for i, o in enumerate(decision.options) if i != action.choice_index],
        capital_before=state.capital,
        capital_after=capital_after,
        tokens_before=state.data_tokens,
        tokens_after=tokens_after,
        outcome=choice.consequence,
    )
    return state.model_copy(update={
        "pending": None,
        "history": state.history.model_copy(update={
            "decisions": [*state.history.decisions, record],
        }),
    })


def _shadow_program_failed(state: GameState, action: a.ShadowProgramFailed) -> GameState:
    current = state.shadow_state(action.program_id)
    if current is None or current.status == ShadowStatus.FAILED:
        logger.debug("SHADOW_PROGRAM_FAILED ignored for %s", action.program_id)
        return state
    roster = [
        sp.model_copy(update={"status": ShadowStatus.FAILED, "failed_at_turn": state.turn_number})
        if sp.program.id == action.program_id else sp
        for sp in state.shadow_programs
    ]
    return state.model_copy(update={
        "shadow_programs": roster,
        "total_failure_cost": state.total_failure_cost + action.cost,
    })


def _set_pending_shadow_failure(state: GameState, action: a.SetPendingShadowFailure) -> GameState:
    if _blocked(state, action.type):
        return state
    current = state.shadow_state(action.program.id)
    if current is not None and current.status == ShadowStatus.FAILED:
        logger.debug("SET_PENDING_SHADOW_FAILURE ignored: %s already failed", action.program.id)
        return state
    return state.model_copy(update={"pending": ShadowFailurePending(program=action.program)})


def _clear_pending_shadow_failure(state: GameState, action: a.ClearPendingShadowFailure) -> GameState:
    if not isinstance(state.pending, ShadowFailurePending):
        return state
    return state.model_copy(update={"pending": None})


def _set_pending_policy_scenario(state: GameState, action: a.SetPendingPolicyScenario) -> GameState:
    if _blocked(state, action.type):
        return state
    scenario = get_scenario_for_space(state.current_space, state.difficulty)
    if scenario is None or scenario.id != action.scenario_id:
        logger.debug("SET_PENDING_POLICY_SCENARIO ignored: %s not active at space %d",
                     action.scenario_id, state.current_space)
        return state
    if action.scenario_id in state.completed_policy_scenarios:
        return state
    ref = PolicyScenarioRef(scenario_id=action.scenario_id, triggered_at_space=state.current_space)
    return state.model_copy(update={"pending": PolicyScenarioPending(scenario=ref)})


def _clear_pending_policy_scenario(state: GameState, action: a.ClearPendingPolicyScenario) -> GameState:
    if not isinstance(state.pending, PolicyScenarioPending):
        return state
    return state.model_copy(update={"pending": None})


def _complete_policy_scenario(state: GameState, action: a.CompletePolicyScenario) -> GameState:
    completed = state.completed_policy_scenarios
    if action.scenario_id not in completed:
        completed = [*completed, action.scenario_id]
    pending = None if isinstance(state.pending, PolicyScenarioPending) else state.pending
    return state.model_copy(update={"completed_policy_scenarios": completed, "pending": pending})


def _set_pending_funding_round(state: GameState, action: a.SetPendingFundingRound) -> GameState:
    if _blocked(state, action.type):
        return state
    if action.round not in FUNDING_ROUNDS or action.round in state.funding_rounds_completed:
        logger.debug("SET_PENDING_FUNDING_ROUND ignored for %s", action.round)
        return state
    return state.model_copy(update={"pending": FundingRoundPending(round_key=action.round)})


def _clear_pending_funding_round(state: GameState, action: a.ClearPendingFundingRound) -> GameState:
    if not isinstance(state.pending, FundingRoundPending):
        return state
    return state.model_copy(update={"pending": None})


# ── Dispatch ─────────────────────────────────────────────────────────────────

_HANDLERS: dict[type, Callable[[GameState, Any], GameState]] = {
    a.StartGame: _start_game,
    a.AdvanceSpace: _advance_space,
    a.PayCost: _pay_cost,
    a.GainData: _gain_data,
    a.LoseData: _lose_data,
    a.DrawRiskCard: _draw_risk_card,
    a.DrawPolicyCard: _draw_policy_card,
    a.ResolveDecision: _resolve_decision,
    a.Dilute: _dilute,
    a.EmergencyFinancing: _emergency_financing,
    a.Partnership: _partnership,
    a.SetPendingDecision: _set_pending_decision,
    a.ClearPendingDecision: _clear_pending_decision,
    a.ApplyRevenueMultiplier: _apply_revenue_multiplier,
    a.SetWaitTurns: _set_wait_turns,
    a.DecrementWait: _decrement_wait,
    a.SetStatus: _set_status,
    a.UnlockInsight: _unlock_insight,
    a.ReturnToSpace: _return_to_space,
    a.GameOver: _game_over,
    a.Victory: _victory,
    a.SaveGame: _save_game,
    a.LoadGame: _load_game,
    a.ShadowProgramFailed: _shadow_program_failed,
    a.SetPendingShadowFailure: _set_pending_shadow_failure,
    a.ClearPendingShadowFailure: _clear_pending_shadow_failure,
    a.UpdateInvestorConfidence: _update_investor_confidence,
    a.SetPendingPolicyScenario: _set_pending_policy_scenario,
    a.ClearPendingPolicyScenario: _clear_pending_policy_scenario,
    a.CompletePolicyScenario: _complete_policy_scenario,
    a.AdvanceTime: _advance_time,
    a.AddYearMilestone: _add_year_milestone,
    a.SetPendingFundingRound: _set_pending_funding_round,
    a.ClearPendingFundingRound: _clear_pending_funding_round,
    a.CompleteFundingRound: _complete_funding_round,
    a.UpdateFounderOwnership: _update_founder_ownership,
}


def game_reducer(state: GameState, action: Any) -> GameState:
    """Apply one board action and return the next state."""
    handler = _HANDLERS.get(type(action))
    if handler is None:
        logger.debug("Ignoring unknown board action %r", getattr(action, "type", action))
        return state
    return handler(state, action)
