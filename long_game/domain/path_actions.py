"""Path engine actions, validated by ``path_action_adapter`` at the boundary."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from long_game.domain.path import PathEvent


class _PathAction(BaseModel):
    model_config = {"frozen": True}


class SelectPath(_PathAction):
    type: Literal["SELECT_PATH"] = "SELECT_PATH"
    path_id: str


class AdvancePathTime(_PathAction):
    type: Literal["ADVANCE_TIME"] = "ADVANCE_TIME"
    quarters: int = Field(..., ge=0)


class SpendCapital(_PathAction):
    type: Literal["SPEND_CAPITAL"] = "SPEND_CAPITAL"
    amount: float = Field(..., ge=0.0)


class GainCapital(_PathAction):
    type: Literal["GAIN_CAPITAL"] = "GAIN_CAPITAL"
    amount: float = Field(..., ge=0.0)


class SetPendingEvent(_PathAction):
    type: Literal["SET_PENDING_EVENT"] = "SET_PENDING_EVENT"
    event: PathEvent


class ResolveEvent(_PathAction):
    type: Literal["RESOLVE_EVENT"] = "RESOLVE_EVENT"
    choice_id: str
    event: PathEvent


class CompletePathFundingRound(_PathAction):
    type: Literal["COMPLETE_FUNDING_ROUND"] = "COMPLETE_FUNDING_ROUND"
    round_id: str
    raised: float = Field(..., ge=0.0)
    dilution: float = Field(..., ge=0.0, le=1.0)


class AdvancePhase(_PathAction):
    type: Literal["ADVANCE_PHASE"] = "ADVANCE_PHASE"


class UpdateConfidence(_PathAction):
    type: Literal["UPDATE_CONFIDENCE"] = "UPDATE_CONFIDENCE"
    delta: float


class UpdateMarketPotential(_PathAction):
    type: Literal["UPDATE_MARKET_POTENTIAL"] = "UPDATE_MARKET_POTENTIAL"
    multiplier: float = Field(..., ge=0.0)


class PathGameOver(_PathAction):
    type: Literal["GAME_OVER"] = "GAME_OVER"
    reason: str


class PathVictory(_PathAction):
    type: Literal["VICTORY"] = "VICTORY"


class ResetGame(_PathAction):
    type: Literal["RESET_GAME"] = "RESET_GAME"


PathAction = Annotated[
    Union[
        SelectPath,
        AdvancePathTime,
        SpendCapital,
        GainCapital,
        SetPendingEvent,
        ResolveEvent,
        CompletePathFundingRound,
        AdvancePhase,
        UpdateConfidence,
        UpdateMarketPotential,
        PathGameOver,
        PathVictory,
        ResetGame,
    ],
    Field(discriminator="type"),
]

path_action_adapter: TypeAdapter[PathAction] = TypeAdapter(PathAction)
