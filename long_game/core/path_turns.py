"""Path turn orchestration.

A path turn either stops for funding, closes out a finished phase, or burns
one quarter.  The latter two also draw the next event.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from pydantic import BaseModel, Field

from long_game.core.path_engine import (
    RUNWAY_FUNDING_THRESHOLD,
    calculate_funding_terms,
    get_random_event,
    negotiate_funding_terms,
    path_game_reducer,
    should_trigger_funding,
)
from long_game.domain import path_actions as pa
from long_game.domain.enums import PathStatus
from long_game.domain.path import PathGameState

logger = logging.getLogger(__name__)


class PathTurn(BaseModel):
    """Result of one path turn."""

    state: PathGameState
    funding_round: Optional[str] = Field(
        default=None,
        description="Round the player must raise (or skip) before time can move",
    )

    model_config = {"frozen": True}


def _draw_event(state: PathGameState, rng: random.Random) -> PathGameState:
    if state.status != PathStatus.PLAYING or state.pending_event is not None:
        return state
    event = get_random_event(state, rng)
    if event is None:
        return state
    return path_game_reducer(state, pa.SetPendingEvent(event=event))


def advance_path_turn(
    state: PathGameState,
    rng: Optional[random.Random] = None,
    skip_funding: bool = False,
    runway_threshold: float = RUNWAY_FUNDING_THRESHOLD,
) -> PathTurn:
    """Play one quarter.

    Funding comes first: while runway is short and a round is open, the turn
    stops and names the round.  Passing *skip_funding* plays the quarter
    anyway.
    """
    if state.status != PathStatus.PLAYING or state.pending_event is not None:
        return PathTurn(state=state)

    if not skip_funding:
        round_id = should_trigger_funding(state, runway_threshold)
        if round_id is not None:
            return PathTurn(state=state, funding_round=round_id)

    rng = rng or random.Random()
    if state.phase_progress >= 100:
        state = path_game_reducer(state, pa.AdvancePhase())
    else:
        state = path_game_reducer(state, pa.AdvancePathTime(quarters=1))
    # Drawn from the phase the state is in now, after any phase change
    return PathTurn(state=_draw_event(state, rng))


def accept_funding(
    state: PathGameState,
    round_id: str,
    negotiate: bool = False,
    runway_threshold: float = RUNWAY_FUNDING_THRESHOLD,
) -> PathGameState:
    """Close *round_id* at the terms investors offer at current confidence.

    Only the round ``should_trigger_funding`` names right now can close; any
    other round, known or not, is ignored.
    """
    due = should_trigger_funding(state, runway_threshold)
    if round_id != due:
        logger.debug("accept_funding ignored: %s requested, %s due", round_id, due)
        return state
    terms = calculate_funding_terms(round_id, state.investor_confidence)
    if negotiate:
        terms = negotiate_funding_terms(terms)
    logger.info("Path round %s closed: $%sM at %.1f%% dilution",
                round_id, terms.raise_amount, terms.dilution * 100)
    return path_game_reducer(state, pa.CompletePathFundingRound(
        round_id=round_id,
        raised=terms.raise_amount,
        dilution=terms.dilution,
    ))
