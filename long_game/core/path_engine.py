"""Path engine — the pure reducer over ``PathGameState`` and its helpers.

Time moves in quarters.  Each quarter burns ``burn_rate`` and advances
phase progress by ``100 / (phase years * 4)``.  Bankruptcy here is
unconditional defeat: unlike the board, no rescue decision is offered.

``victory`` and ``defeat`` are absorbing.  Only ``RESET_GAME`` leaves them.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Callable, Optional

from long_game.content.balance import PHASE_DURATIONS
from long_game.content.path_events import get_events_for_phase
from long_game.content.paths import FUNDING_ROUND_DEFS, get_path
from long_game.core.financing import (
    apply_financing_event,
    negotiate_funding_terms,
    terms_from_ranges,
)
from long_game.domain import path_actions as pa
from long_game.domain.enums import PathPhase, PathStatus
from long_game.domain.funding import FundingTerms
from long_game.domain.path import CompletedEvent, PathEvent, PathGameState, next_phase
from long_game.foundation.clock import epoch_millis
from long_game.foundation.rounding import round_half_up

logger = logging.getLogger(__name__)

__all__ = [
    "calculate_funding_terms",
    "create_initial_path_state",
    "get_random_event",
    "negotiate_funding_terms",
    "path_game_reducer",
    "should_trigger_funding",
]

RUNWAY_FUNDING_THRESHOLD = 4
BANKRUPT_REASON = "Ran out of capital. The program has been terminated."
INSUFFICIENT_CAPITAL_REASON = "Insufficient capital to continue development."


def create_initial_path_state(
    burn_rate: float = 5.0,
    investor_confidence: float = 80.0,
) -> PathGameState:
    return PathGameState(burn_rate=burn_rate, investor_confidence=investor_confidence)


def _roll_calendar(year: int, quarter: int, quarters: int) -> tuple[int, int]:
    """Move (year, quarter) by *quarters*, carrying in both directions."""
    quarter += quarters
    while quarter > 4:
        quarter -= 4
        year += 1
    while quarter < 1:
        quarter += 4
        year -= 1
    return year, quarter


# ── Handlers ─────────────────────────────────────────────────────────────────

def _select_path(state: PathGameState, action: pa.SelectPath) -> PathGameState:
    path = get_path(action.path_id)
    if path is None:
        logger.debug("SELECT_PATH ignored: unknown path %s", action.path_id)
        return state
    return state.model_copy(update={
        "selected_path": action.path_id,
        "path_data": path,
        "capital": path.parameters.starting_capital,
        "market_potential": path.parameters.market_potential,
        "current_year": 0,
        "current_quarter": 1,
        "current_phase": PathPhase.DISCOVERY,
        "phase_progress": 0.0,
        "status": PathStatus.PLAYING,
    })


def _advance_time(state: PathGameState, action: pa.AdvancePathTime) -> PathGameState:
    year, quarter = _roll_calendar(state.current_year, state.current_quarter, action.quarters)
    capital = state.capital - state.burn_rate * action.quarters

    if capital <= 0:
        logger.info("Path defeat: capital exhausted in year %d Q%d", year, quarter)
        return state.model_copy(update={
            "capital": 0.0,
            "current_year": year,
            "current_quarter": quarter,
            "status": PathStatus.DEFEAT,
            "defeat_reason": BANKRUPT_REASON,
        })

    per_quarter = 100 / (PHASE_DURATIONS[state.current_phase] * 4)
    progress = min(100.0, state.phase_progress + per_quarter * action.quarters)
    return state.model_copy(update={
        "capital": capital,
        "current_year": year,
        "current_quarter": quarter,
        "phase_progress": progress,
    })


def _spend_capital(state: PathGameState, action: pa.SpendCapital) -> PathGameState:
    capital = state.capital - action.amount
    if capital < 0:
        logger.info("Path defeat: cannot spend %.1f with %.1f on hand", action.amount, state.capital)
        return state.model_copy(update={
            "capital": 0.0,
            "status": PathStatus.DEFEAT,
            "defeat_reason": INSUFFICIENT_CAPITAL_REASON,
        })
    return state.model_copy(update={"capital": capital})


def _gain_capital(state: PathGameState, action: pa.GainCapital) -> PathGameState:
    return state.model_copy(update={"capital": state.capital + action.amount})


def _set_pending_event(state: PathGameState, action: pa.SetPendingEvent) -> PathGameState:
    return state.model_copy(update={"pending_event": action.event})


def _resolve_event(state: PathGameState, action: pa.ResolveEvent) -> PathGameState:
    choice = action.event.choice(action.choice_id)
    if choice is None:
        logger.debug("RESOLVE_EVENT ignored: %s has no choice %s", action.event.id, action.choice_id)
        return state

    confidence = max(0.0, min(100.0, state.investor_confidence + (choice.confidence or 0)))
    market = state.market_potential * (1 + (choice.market_impact or 0))
    year, quarter = _roll_calendar(
        state.current_year, state.current_quarter, round_half_up(choice.time_impact * 4),
    )
    completed = CompletedEvent(
        event_id=action.event.id,
        choice_id=action.choice_id,
        year=state.current_year,
        outcome=choice.outcome,
    )
    # Capital may go negative here; the next ADVANCE_TIME ends the game
    return state.model_copy(update={
        "capital": state.capital - choice.cost,
        "investor_confidence": confidence,
        "market_potential": market,
        "current_year": max(0, year),
        "current_quarter": quarter,
        "pending_event": None,
        "completed_events": [*state.completed_events, action.event.id],
        "event_history": [*state.event_history, completed],
    })


def _complete_funding_round(state: PathGameState, action: pa.CompletePathFundingRound) -> PathGameState:
    outcome = apply_financing_event(
        state.founder_ownership, state.capital, action.raised, action.dilution,
    )
    return state.model_copy(update={
        "capital": outcome.capital,
        "founder_ownership": outcome.founder_ownership,
        "funding_rounds_completed": [*state.funding_rounds_completed, action.round_id],
    })


def _advance_phase(state: PathGameState, action: pa.AdvancePhase) -> PathGameState:
    upcoming = next_phase(state.current_phase)
    if upcoming is None:
        logger.info("Path victory: %s approved in year %d", state.selected_path, state.current_year)
        return state.model_copy(update={"status": PathStatus.VICTORY})
    return state.model_copy(update={"current_phase": upcoming, "phase_progress": 0.0})


def _update_confidence(state: PathGameState, action: pa.UpdateConfidence) -> PathGameState:
    confidence = max(0.0, min(100.0, state.investor_confidence + action.delta))
    return state.model_copy(update={"investor_confidence": confidence})


def _update_market_potential(state: PathGameState, action: pa.UpdateMarketPotential) -> PathGameState:
    return state.model_copy(update={"market_potential": round_half_up(state.market_potential * action.multiplier)})


def _game_over(state: PathGameState, action: pa.PathGameOver) -> PathGameState:
    logger.info("Path game over: %s", action.reason)
    return state.model_copy(update={"status": PathStatus.DEFEAT, "defeat_reason": action.reason})


def _victory(state: PathGameState, action: pa.PathVictory) -> PathGameState:
    return state.model_copy(update={"status": PathStatus.VICTORY})


def _reset_game(state: PathGameState, action: pa.ResetGame) -> PathGameState:
    return create_initial_path_state(burn_rate=state.burn_rate)


_HANDLERS: dict[type, Callable[[PathGameState, Any], PathGameState]] = {
    pa.SelectPath: _select_path,
    pa.AdvancePathTime: _advance_time,
    pa.SpendCapital: _spend_capital,
    pa.GainCapital: _gain_capital,
    pa.SetPendingEvent: _set_pending_event,
    pa.ResolveEvent: _resolve_event,
    pa.CompletePathFundingRound: _complete_funding_round,
    pa.AdvancePhase: _advance_phase,
    pa.UpdateConfidence: _update_confidence,
    pa.UpdateMarketPotential: _update_market_potential,
    pa.PathGameOver: _game_over,
    pa.PathVictory: _victory,
    pa.ResetGame: _reset_game,
}


def path_game_reducer(state: PathGameState, action: Any) -> PathGameState:
    """Apply one path action and return the next state."""
    if state.is_terminal and not isinstance(action, pa.ResetGame):
        logger.debug("Ignoring %s: path game is over", getattr(action, "type", action))
        return state
    handler = _HANDLERS.get(type(action))
    if handler is None:
        logger.debug("Ignoring unknown path action %r", getattr(action, "type", action))
        return state
    return handler(state, action)


# ── Helpers ──────────────────────────────────────────────────────────────────

def get_random_event(
    state: PathGameState,
    rng: Optional[random.Random] = None,
) -> PathEvent | None:
    """Pick an event for the current phase.

    Unused events are drawn uniformly first.  Once the pool is exhausted,
    any event may repeat as a copy whose id is suffixed so it never
    collides with an id already in ``completed_events``.
    """
    if state.selected_path is None:
        return None
    rng = rng or random.Random()

    pool = get_events_for_phase(state.selected_path, state.current_phase)
    if not pool:
        return None

    unused = [e for e in pool if e.id not in state.completed_events]
    if unused:
        return rng.choice(unused)

    event = rng.choice(pool)
    stamp = epoch_millis()
    repeat_id = f"{event.id}-repeat-{stamp}"
    while repeat_id in state.completed_events:
        stamp += 1
        repeat_id = f"{event.id}-repeat-{stamp}"
    return event.model_copy(update={"id": repeat_id})


def should_trigger_funding(
    state: PathGameState,
    runway_threshold: float = RUNWAY_FUNDING_THRESHOLD,
) -> str | None:
    """Earliest incomplete round of the path when runway is under a year."""
    if state.path_data is None:
        return None
    if state.runway_quarters >= runway_threshold:
        return None
    for round_id in state.path_data.funding_rounds:
        if round_id not in state.funding_rounds_completed:
            return round_id
    return None


def calculate_funding_terms(round_id: str, confidence: float) -> FundingTerms:
    """Terms for a path round; an unknown round offers nothing."""
    round_def = FUNDING_ROUND_DEFS.get(round_id)
    if round_def is None:
        return FundingTerms(raise_amount=0, dilution=0)
    return terms_from_ranges(round_def.typical_raise, round_def.dilution, confidence)
