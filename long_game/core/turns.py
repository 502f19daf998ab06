"""Board turn orchestration: composes reducer actions into one player turn.

The reducer applies single transitions; this module decides which ones a
turn consists of.  Every function here is pure: it takes a state (and an
optional ``random.Random`` for rolls) and returns the next state.  Nothing
is dispatched that ``game_reducer`` could not also receive from a client.

Landing on a space checks triggers in a fixed order: a failing shadow
program first, then the space's policy scenario, then its funding round.
Only one of them opens at a time; resolving it re-runs the check so the
next one surfaces.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from long_game.content.balance import BOARD_PHASE_YEARS, FUNDING_ROUNDS, get_round_for_space
from long_game.content.policy_scenarios import get_scenario_by_id, get_scenario_for_space
from long_game.content.shadow_programs import get_programs_failing_at_space
from long_game.content.spaces import get_space_by_id
from long_game.core.board_engine import can_afford, game_reducer, phase_for_space
from long_game.core.financing import board_funding_terms, fmt_amount, negotiate_funding_terms
from long_game.domain import actions as a
from long_game.domain.board import CardChoice, FundingEvent, PendingDecision, Space, YearMilestone
from long_game.domain.enums import (
    DecisionType,
    FinancingType,
    GamePhase,
    GameStatus,
    ShadowStatus,
    SpecialEffectType,
)
from long_game.domain.game_state import GameState
from long_game.domain.tokens import get_token_deficit, meets_gate_requirements
from long_game.foundation.rounding import round_half_up

logger = logging.getLogger(__name__)

SPACE_FAILURE_CONFIDENCE_HIT = -5
SHADOW_FAILURE_CONFIDENCE_HIT = -8
DEFAULT_DILUTION_PERCENT = 20
EQUITY_DILUTION_PERCENT = 25
EXTRA_STUDY_COST_PER_TOKEN = 5
MIN_EMERGENCY_RAISE = 10


def _run(state: GameState, *actions) -> GameState:
    for action in actions:
        state = game_reducer(state, action)
    return state


# ── Decisions offered by a turn ──────────────────────────────────────────────

def _gate_decision(state: GameState, space: Space) -> PendingDecision:
    deficit = get_token_deficit(state.data_tokens, space.gate_requirement)
    missing = deficit.nonzero()
    cost = EXTRA_STUDY_COST_PER_TOKEN * sum(missing.values())
    listing = ", ".join(f"{n} {k}" for k, n in missing.items())
    return PendingDecision(
        type=DecisionType.GATE,
        title=f"Gate: {space.name}",
        context=f"You lack the data to pass this gate. Missing: {listing}.",
        options=[
            CardChoice(
                label="Run additional studies",
                consequence=f"Spend ${fmt_amount(cost)}M to close the data gap",
                cost=cost,
                data_change=deficit,
            ),
            CardChoice(
                label="Wait and regroup",
                consequence="Lose a turn while the team plans the next experiments",
                wait_turns=1,
            ),
        ],
        educational_note="Regulators want every category of evidence. Strength in one "
                         "area never makes up for a gap in another.",
    )


def _financing_decision(state: GameState, space: Space) -> PendingDecision:
    shortfall = space.cost - state.capital
    equity = max(MIN_EMERGENCY_RAISE, round_half_up(shortfall * 2))
    debt = max(MIN_EMERGENCY_RAISE, round_half_up(shortfall * 1.5))
    interest = round_half_up(debt * 0.2)
    return PendingDecision(
        type=DecisionType.FINANCING,
        title="Capital Needed",
        context=f"{space.name} costs ${fmt_amount(space.cost)}M but you hold "
                f"${fmt_amount(state.capital)}M.",
        options=[
            CardChoice(
                label="Raise equity",
                consequence=f"Raise ${equity}M for {EQUITY_DILUTION_PERCENT}% of the company",
                capital_change=equity,
                financing=FinancingType.DILUTION,
                dilution_percent=EQUITY_DILUTION_PERCENT,
            ),
            CardChoice(
                label="Take venture debt",
                consequence=f"Borrow ${debt}M and pay ${interest}M in fees up front",
                capital_change=debt,
                cost=interest,
                financing=FinancingType.PARTNERSHIP,
            ),
            CardChoice(
                label="Hold off",
                consequence="Development pauses until capital is found",
            ),
        ],
        educational_note="Most programs stall between rounds. Every raise trades ownership "
                         "or future cash for time.",
    )


def _upgrade_decision(space: Space) -> PendingDecision:
    effect = space.special_effect
    return PendingDecision(
        type=DecisionType.SPACE,
        title=f"Upgrade: {space.name}",
        context="Extra work now can strengthen the data package.",
        options=[
            CardChoice(
                label="Invest in the upgrade",
                consequence=f"Spend ${fmt_amount(effect.cost or 0)}M for additional data",
                cost=effect.cost,
                data_change=effect.bonus,
            ),
            CardChoice(label="Proceed as planned", consequence="Keep the capital"),
        ],
    )


def _setback_decision(space: Space) -> PendingDecision:
    return PendingDecision(
        type=DecisionType.SPACE,
        title=f"Setback: {space.name}",
        context="The work did not produce usable data.",
        options=[
            CardChoice(
                label="Repeat the work",
                consequence=f"Spend ${fmt_amount(space.cost)}M to try again",
                cost=space.cost,
                data_change=space.data_yield,
            ),
            CardChoice(label="Move on", consequence="Continue without the data"),
        ],
    )


# ── Turn ─────────────────────────────────────────────────────────────────────

def _phase_milestone(state: GameState, completed: GamePhase) -> GameState:
    state = game_reducer(state, a.AdvanceTime(years=BOARD_PHASE_YEARS[completed]))
    milestone = YearMilestone(
        space=state.current_space,
        year=state.current_year,
        event=f"{completed.value.capitalize()} complete",
    )
    return game_reducer(state, a.AddYearMilestone(milestone=milestone))


def _roll_space(state: GameState, space: Space, rng: random.Random) -> GameState:
    effect = space.special_effect
    effect_type = effect.type if effect is not None else None
    succeeded = space.success_rate is None or rng.random() < space.success_rate

    if effect_type == SpecialEffectType.VICTORY_CHECK:
        if succeeded and meets_gate_requirements(state.data_tokens, space.gate_requirement):
            state = _phase_milestone(state, space.phase)
            return game_reducer(state, a.Victory())
        return game_reducer(state, a.ReturnToSpace(space_id=space.id - 1))

    if succeeded:
        if space.data_yield.nonzero():
            state = game_reducer(state, a.GainData(tokens=space.data_yield))
        if effect_type == SpecialEffectType.CAN_UPGRADE:
            state = game_reducer(state, a.SetPendingDecision(decision=_upgrade_decision(space)))
    elif effect_type == SpecialEffectType.RETURN_TO_SPACE:
        state = game_reducer(state, a.ReturnToSpace(space_id=effect.space_id))
    else:
        state = _run(
            state,
            a.UpdateInvestorConfidence(delta=SPACE_FAILURE_CONFIDENCE_HIT),
            a.SetPendingDecision(decision=_setback_decision(space)),
        )

    if effect_type == SpecialEffectType.WAIT_TURNS and effect.turns:
        state = game_reducer(state, a.SetWaitTurns(turns=effect.turns))
    return state


def advance_turn(state: GameState, rng: Optional[random.Random] = None) -> GameState:
    """Play one turn: move to the next space and resolve what happens there.

    Blocked turns return *state* unchanged or open a decision instead of
    moving: a gate the tokens do not meet, or a space the capital cannot
    cover.
    """
    if state.status != GameStatus.PLAYING or state.pending is not None:
        return state
    if state.wait_turns > 0:
        return game_reducer(state, a.DecrementWait())

    space = get_space_by_id(state.current_space + 1)
    if space is None:
        return state
    if space.is_gate and not meets_gate_requirements(state.data_tokens, space.gate_requirement):
        return game_reducer(state, a.SetPendingDecision(decision=_gate_decision(state, space)))
    if not can_afford(state, space.cost):
        return game_reducer(state, a.SetPendingDecision(decision=_financing_decision(state, space)))

    rng = rng or random.Random()
    departed = state.phase

    state = game_reducer(state, a.PayCost(amount=space.cost))
    if state.status != GameStatus.PLAYING:
        return state
    state = game_reducer(state, a.AdvanceSpace())
    if phase_for_space(state.current_space) != departed:
        state = _phase_milestone(state, departed)

    state = _roll_space(state, space, rng)
    return check_triggers(state)


def check_triggers(state: GameState) -> GameState:
    """Open the first interaction the current space has waiting, if any."""
    if state.status != GameStatus.PLAYING or state.pending is not None:
        return state

    for program in get_programs_failing_at_space(state.current_space):
        current = state.shadow_state(program.id)
        if current is not None and current.status == ShadowStatus.ACTIVE:
            return game_reducer(state, a.SetPendingShadowFailure(program=program))

    scenario = get_scenario_for_space(state.current_space, state.difficulty)
    if scenario is not None and scenario.id not in state.completed_policy_scenarios:
        return game_reducer(state, a.SetPendingPolicyScenario(scenario_id=scenario.id))

    funding_round = get_round_for_space(state.current_space)
    if funding_round is not None and funding_round.key not in state.funding_rounds_completed:
        return game_reducer(state, a.SetPendingFundingRound(round=funding_round.key))
    return state


# ── Resolutions ──────────────────────────────────────────────────────────────

def _apply_choice(state: GameState, option: CardChoice) -> GameState:
    if option.capital_change and option.capital_change > 0:
        if option.financing == FinancingType.DILUTION:
            state = game_reducer(state, a.Dilute(
                amount=option.capital_change,
                dilution_percent=(
                    option.dilution_percent if option.dilution_percent is not None
                    else DEFAULT_DILUTION_PERCENT
                ),
            ))
        elif option.financing == FinancingType.EMERGENCY:
            state = game_reducer(state, a.EmergencyFinancing())
        else:
            state = game_reducer(state, a.Partnership(recovery_amount=option.capital_change))

    if option.cost and option.cost > 0:
        state = game_reducer(state, a.PayCost(amount=option.cost))

    if option.data_change is not None:
        gained = option.data_change.positive_part()
        lost = option.data_change.negative_part()
        if gained.nonzero():
            state = game_reducer(state, a.GainData(tokens=gained))
        if lost.nonzero():
            state = game_reducer(state, a.LoseData(tokens=lost))

    if option.wait_turns:
        state = game_reducer(state, a.SetWaitTurns(turns=option.wait_turns))
    if option.ends_game:
        state = game_reducer(state, a.GameOver(reason=option.consequence))
    return state


def resolve_decision(state: GameState, index: int) -> GameState:
    """Pick option *index* of the pending decision and apply its effects."""
    decision = state.pending_decision
    if decision is None or not 0 <= index < len(decision.options):
        logger.debug("resolve_decision ignored: index %d", index)
        return state
    option = decision.options[index]
    # Recorded first so the audit entry captures the pre-choice state
    state = game_reducer(state, a.ResolveDecision(choice_index=index))
    state = _apply_choice(state, option)
    return check_triggers(state)


def resolve_policy_scenario(state: GameState, index: int) -> GameState:
    ref = state.pending_policy_scenario
    if ref is None:
        return state
    scenario = get_scenario_by_id(ref.scenario_id)
    if scenario is None or not 0 <= index < len(scenario.choices):
        logger.debug("resolve_policy_scenario ignored: index %d", index)
        return state

    choice = scenario.choices[index]
    if choice.capital_change:
        if choice.capital_change > 0:
            state = game_reducer(state, a.Partnership(recovery_amount=choice.capital_change))
        else:
            state = game_reducer(state, a.PayCost(amount=abs(choice.capital_change)))
    if choice.investor_confidence_change:
        state = game_reducer(state, a.UpdateInvestorConfidence(delta=choice.investor_confidence_change))
    if choice.revenue_multiplier is not None:
        state = game_reducer(state, a.ApplyRevenueMultiplier(multiplier=choice.revenue_multiplier))
    if choice.lesson_if_chosen:
        state = game_reducer(state, a.UnlockInsight(insight=choice.lesson_if_chosen))

    state = game_reducer(state, a.CompletePolicyScenario(scenario_id=scenario.id))
    return check_triggers(state)


def acknowledge_shadow_failure(state: GameState) -> GameState:
    program = state.pending_shadow_failure
    if program is None:
        return state
    state = _run(
        state,
        a.ShadowProgramFailed(program_id=program.id, cost=program.cost_at_failure),
        a.UpdateInvestorConfidence(delta=SHADOW_FAILURE_CONFIDENCE_HIT),
        a.ClearPendingShadowFailure(),
    )
    return check_triggers(state)


def resolve_funding_round(state: GameState, accept: bool, negotiate: bool = False) -> GameState:
    """Close the pending funding round: take the offer (optionally negotiated) or walk away.

    Declining does not re-check triggers; the round would only be offered again.
    """
    key = state.pending_funding_round
    if key is None:
        return state
    if not accept:
        return game_reducer(state, a.ClearPendingFundingRound())

    funding_round = FUNDING_ROUNDS[key]
    terms = board_funding_terms(funding_round, state.investor_confidence)
    if negotiate:
        terms = negotiate_funding_terms(terms)
    event = FundingEvent(
        round=key,
        year=state.current_year,
        amount_raised=terms.raise_amount,
        dilution=terms.dilution,
        pre_money_valuation=terms.pre_money_valuation or 0,
        investor_expectation=funding_round.investor_expectation,
    )
    logger.info("Board %s closed: $%sM at %.1f%% dilution",
                funding_round.name, fmt_amount(event.amount_raised), event.dilution * 100)
    return game_reducer(state, a.CompleteFundingRound(event=event))
