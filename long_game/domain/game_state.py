"""Board game state, one immutable record per session.

Replaced wholesale on every reducer transition.  The ``pending`` field
holds at most one open interaction; the ``pending_*`` properties expose
each kind for callers that only care about one.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from long_game.domain.board import (
    CardState,
    FundingEvent,
    GameHistory,
    PendingDecision,
    PolicyScenarioRef,
    Score,
    ShadowProgram,
    ShadowProgramState,
    YearMilestone,
)
from long_game.domain.enums import Difficulty, GamePhase, GameStatus
from long_game.domain.pending import (
    DecisionPending,
    FundingRoundPending,
    PendingInteraction,
    PolicyScenarioPending,
    ShadowFailurePending,
)
from long_game.domain.tokens import DataTokens


class GameState(BaseModel):
    # Core resources
    capital: float = Field(..., ge=0.0, description="Cash on hand ($M); clamped at 0 on bankruptcy")
    data_tokens: DataTokens = Field(default_factory=DataTokens)

    # Progression
    current_space: int = Field(default=0, ge=0, le=24)
    turn_number: int = Field(default=0, ge=0)
    phase: GamePhase = GamePhase.DISCOVERY

    difficulty: Difficulty = Difficulty.BLOCKBUSTER
    status: GameStatus = GameStatus.MENU

    revenue_projection: float = 0.0
    wait_turns: int = Field(default=0, ge=0)

    cards: CardState = Field(default_factory=CardState)
    history: GameHistory = Field(default_factory=GameHistory)
    score: Score = Field(default_factory=Score)

    pending: Optional[PendingInteraction] = None

    unlocked_insights: list[str] = Field(default_factory=list)

    # Shadow programs
    shadow_programs: list[ShadowProgramState] = Field(default_factory=list)
    total_failure_cost: float = Field(default=0.0, ge=0.0)
    investor_confidence: float = Field(default=100.0, ge=0.0, le=100.0)

    completed_policy_scenarios: list[str] = Field(default_factory=list)
    total_spent: float = Field(default=0.0, ge=0.0)

    # Time
    current_year: float = 0.0
    year_history: list[YearMilestone] = Field(default_factory=list)

    # Funding & ownership
    founder_ownership: float = Field(default=1.0, ge=0.0, le=1.0)
    funding_rounds_completed: list[str] = Field(default_factory=list)
    funding_history: list[FundingEvent] = Field(default_factory=list)

    model_config = {"frozen": True}

    # ── Pending views ────────────────────────────────────────────────────

    @property
    def pending_decision(self) -> PendingDecision | None:
        if isinstance(self.pending, DecisionPending):
            return self.pending.decision
        return None

    @property
    def pending_shadow_failure(self) -> ShadowProgram | None:
        if isinstance(self.pending, ShadowFailurePending):
            return self.pending.program
        return None

    @property
    def pending_policy_scenario(self) -> PolicyScenarioRef | None:
        if isinstance(self.pending, PolicyScenarioPending):
            return self.pending.scenario
        return None

    @property
    def pending_funding_round(self) -> str | None:
        if isinstance(self.pending, FundingRoundPending):
            return self.pending.round_key
        return None

    @property
    def is_terminal(self) -> bool:
        return self.status in (GameStatus.WON, GameStatus.LOST)

    def shadow_state(self, program_id: str) -> ShadowProgramState | None:
        for sp in self.shadow_programs:
            if sp.program.id == program_id:
                return sp
        return None
