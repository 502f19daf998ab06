"""Board engine actions — the closed set of transitions ``game_reducer`` accepts.

Each action is a frozen record tagged by ``type``.  ``BoardAction`` is the
discriminated union used to validate raw payloads at the API boundary;
``board_action_adapter`` does that validation in one call.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator

from long_game.domain.board import (
    FundingEvent,
    PendingDecision,
    PolicyCard,
    RiskCard,
    ShadowProgram,
    YearMilestone,
)
from long_game.domain.enums import Difficulty, GameStatus
from long_game.domain.game_state import GameState
from long_game.domain.tokens import TokenDelta


class _Action(BaseModel):
    model_config = {"frozen": True}


# ── Lifecycle ────────────────────────────────────────────────────────────────

class StartGame(_Action):
    type: Literal["START_GAME"] = "START_GAME"
    difficulty: Difficulty


class SetStatus(_Action):
    type: Literal["SET_STATUS"] = "SET_STATUS"
    status: GameStatus


class GameOver(_Action):
    type: Literal["GAME_OVER"] = "GAME_OVER"
    reason: str


class Victory(_Action):
    type: Literal["VICTORY"] = "VICTORY"


class SaveGame(_Action):
    type: Literal["SAVE_GAME"] = "SAVE_GAME"


class LoadGame(_Action):
    type: Literal["LOAD_GAME"] = "LOAD_GAME"
    state: GameState


# ── Movement ─────────────────────────────────────────────────────────────────

class AdvanceSpace(_Action):
    type: Literal["ADVANCE_SPACE"] = "ADVANCE_SPACE"


class ReturnToSpace(_Action):
    type: Literal["RETURN_TO_SPACE"] = "RETURN_TO_SPACE"
    space_id: int = Field(..., ge=1, le=24)


class SetWaitTurns(_Action):
    type: Literal["SET_WAIT_TURNS"] = "SET_WAIT_TURNS"
    turns: int = Field(..., ge=0)


class DecrementWait(_Action):
    type: Literal["DECREMENT_WAIT"] = "DECREMENT_WAIT"


# ── Resources ────────────────────────────────────────────────────────────────

class PayCost(_Action):
    type: Literal["PAY_COST"] = "PAY_COST"
    amount: float = Field(..., ge=0.0)


class _TokenAction(_Action):
    """Carries token magnitudes; the action type alone says which way they move."""

    tokens: TokenDelta

    @field_validator("tokens")
    @classmethod
    def tokens_must_be_non_negative(cls, v: TokenDelta) -> TokenDelta:
        negative = {k: n for k, n in v.nonzero().items() if n < 0}
        if negative:
            raise ValueError(f"token amounts must be non-negative, got {negative}")
        return v


class GainData(_TokenAction):
    type: Literal["GAIN_DATA"] = "GAIN_DATA"


class LoseData(_TokenAction):
    type: Literal["LOSE_DATA"] = "LOSE_DATA"


class ApplyRevenueMultiplier(_Action):
    type: Literal["APPLY_REVENUE_MULTIPLIER"] = "APPLY_REVENUE_MULTIPLIER"
    multiplier: float = Field(..., ge=0.0)


class UnlockInsight(_Action):
    type: Literal["UNLOCK_INSIGHT"] = "UNLOCK_INSIGHT"
    insight: str = Field(..., min_length=1)


class UpdateInvestorConfidence(_Action):
    type: Literal["UPDATE_INVESTOR_CONFIDENCE"] = "UPDATE_INVESTOR_CONFIDENCE"
    delta: float


class AdvanceTime(_Action):
    type: Literal["ADVANCE_TIME"] = "ADVANCE_TIME"
    years: float


class AddYearMilestone(_Action):
    type: Literal["ADD_YEAR_MILESTONE"] = "ADD_YEAR_MILESTONE"
    milestone: YearMilestone


# ── Cards ────────────────────────────────────────────────────────────────────

class DrawRiskCard(_Action):
    type: Literal["DRAW_RISK_CARD"] = "DRAW_RISK_CARD"
    card: RiskCard


class DrawPolicyCard(_Action):
    type: Literal["DRAW_POLICY_CARD"] = "DRAW_POLICY_CARD"
    card: PolicyCard


# ── Financing ────────────────────────────────────────────────────────────────

class Dilute(_Action):
    type: Literal["DILUTE"] = "DILUTE"
    amount: float = Field(..., ge=0.0)
    dilution_percent: float = Field(..., ge=0.0, le=100.0)


class EmergencyFinancing(_Action):
    type: Literal["EMERGENCY_FINANCING"] = "EMERGENCY_FINANCING"


class Partnership(_Action):
    type: Literal["PARTNERSHIP"] = "PARTNERSHIP"
    recovery_amount: float = Field(..., ge=0.0)


class CompleteFundingRound(_Action):
    type: Literal["COMPLETE_FUNDING_ROUND"] = "COMPLETE_FUNDING_ROUND"
    event: FundingEvent


class UpdateFounderOwnership(_Action):
    type: Literal["UPDATE_FOUNDER_OWNERSHIP"] = "UPDATE_FOUNDER_OWNERSHIP"
    ownership: float = Field(..., ge=0.0, le=1.0)


# ── Pending interactions ─────────────────────────────────────────────────────

class SetPendingDecision(_Action):
    type: Literal["SET_PENDING_DECISION"] = "SET_PENDING_DECISION"
    decision: PendingDecision


class ClearPendingDecision(_Action):
    type: Literal["CLEAR_PENDING_DECISION"] = "CLEAR_PENDING_DECISION"


class ResolveDecision(_Action):
    type: Literal["RESOLVE_DECISION"] = "RESOLVE_DECISION"
    choice_index: int = Field(..., ge=0)


class ShadowProgramFailed(_Action):
    type: Literal["SHADOW_PROGRAM_FAILED"] = "SHADOW_PROGRAM_FAILED"
    program_id: str
    cost: float = Field(..., ge=0.0)


class SetPendingShadowFailure(_Action):
    type: Literal["SET_PENDING_SHADOW_FAILURE"] = "SET_PENDING_SHADOW_FAILURE"
    program: ShadowProgram


class ClearPendingShadowFailure(_Action):
    type: Literal["CLEAR_PENDING_SHADOW_FAILURE"] = "CLEAR_PENDING_SHADOW_FAILURE"


class SetPendingPolicyScenario(_Action):
    type: Literal["SET_PENDING_POLICY_SCENARIO"] = "SET_PENDING_POLICY_SCENARIO"
    scenario_id: str


class ClearPendingPolicyScenario(_Action):
    type: Literal["CLEAR_PENDING_POLICY_SCENARIO"] = "CLEAR_PENDING_POLICY_SCENARIO"


class CompletePolicyScenario(_Action):
    type: Literal["COMPLETE_POLICY_SCENARIO"] = "COMPLETE_POLICY_SCENARIO"
    scenario_id: str


class SetPendingFundingRound(_Action):
    type: Literal["SET_PENDING_FUNDING_ROUND"] = "SET_PENDING_FUNDING_ROUND"
    round: str = Field(..., min_length=1)


class ClearPendingFundingRound(_Action):
    type: Literal["CLEAR_PENDING_FUNDING_ROUND"] = "CLEAR_PENDING_FUNDING_ROUND"


BoardAction = Annotated[
    Union[
        StartGame,
        AdvanceSpace,
        PayCost,
        GainData,
        LoseData,
        DrawRiskCard,
        DrawPolicyCard,
        ResolveDecision,
        Dilute,
        EmergencyFinancing,
        Partnership,
        SetPendingDecision,
        ClearPendingDecision,
        ApplyRevenueMultiplier,
        SetWaitTurns,
        DecrementWait,
        SetStatus,
        UnlockInsight,
        ReturnToSpace,
        GameOver,
        Victory,
        SaveGame,
        LoadGame,
        ShadowProgramFailed,
        SetPendingShadowFailure,
        ClearPendingShadowFailure,
        UpdateInvestorConfidence,
        SetPendingPolicyScenario,
        ClearPendingPolicyScenario,
        CompletePolicyScenario,
        AdvanceTime,
        AddYearMilestone,
        SetPendingFundingRound,
        ClearPendingFundingRound,
        CompleteFundingRound,
        UpdateFounderOwnership,
    ],
    Field(discriminator="type"),
]

board_action_adapter: TypeAdapter[BoardAction] = TypeAdapter(BoardAction)
