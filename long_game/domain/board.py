"""Board engine records: spaces, cards, decisions, history and scoring.

All records are immutable.  The reducer replaces them wholesale via
``model_copy(update=...)``; nothing here is ever mutated in place.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from long_game.domain.enums import (
    DecisionType,
    Difficulty,
    FinancingType,
    GamePhase,
    PolicyCardCategory,
    ShadowStatus,
    SpecialEffectType,
)
from long_game.domain.tokens import DataTokens, TokenDelta


# ── Spaces ───────────────────────────────────────────────────────────────────

class SpaceTooltip(BaseModel):
    quick: str
    detailed: str
    cost_breakdown: Optional[str] = None

    model_config = {"frozen": True}


class SpecialEffect(BaseModel):
    """Side effect attached to a space.

    Only the fields relevant to ``type`` are populated: ``space_id`` for
    RETURN_TO_SPACE, ``turns`` for WAIT_TURNS, ``cost``/``bonus`` for
    CAN_UPGRADE.
    """

    type: SpecialEffectType
    space_id: Optional[int] = None
    turns: Optional[int] = None
    cost: Optional[float] = None
    bonus: Optional[TokenDelta] = None

    model_config = {"frozen": True}


class Space(BaseModel):
    """One of the 24 ordered board spaces."""

    id: int = Field(..., ge=1, le=24)
    name: str
    phase: GamePhase
    cost: float = Field(..., ge=0.0, description="Capital consumed on entry ($M)")
    success_rate: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    data_yield: TokenDelta = Field(default_factory=TokenDelta)
    is_gate: bool = False
    gate_requirement: Optional[DataTokens] = None
    risk_card_chance: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    policy_card_chance: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    special_effect: Optional[SpecialEffect] = None
    tooltip: SpaceTooltip

    model_config = {"frozen": True}


# ── Choices & Decisions ──────────────────────────────────────────────────────

class CardChoice(BaseModel):
    """One selectable option of a pending decision or risk card.

    Effects are explicit fields: resolving a choice never inspects its label.
    """

    label: str
    consequence: str
    cost: Optional[float] = None
    capital_change: Optional[float] = None
    data_change: Optional[TokenDelta] = None
    probability: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    financing: Optional[FinancingType] = Field(
        default=None,
        description="Financing mechanism this choice raises capital through, if any",
    )
    dilution_percent: Optional[float] = Field(default=None, ge=0.0, le=100.0)
    wait_turns: Optional[int] = Field(default=None, ge=0)
    ends_game: bool = False

    model_config = {"frozen": True}


class PendingDecision(BaseModel):
    type: DecisionType
    title: str
    context: str
    options: list[CardChoice] = Field(..., min_length=1)
    educational_note: Optional[str] = None
    is_forced: bool = False

    model_config = {"frozen": True}


# ── Cards ────────────────────────────────────────────────────────────────────

class CardTrigger(BaseModel):
    spaces: Optional[list[int]] = None
    probability: float = Field(..., ge=0.0, le=1.0)
    turn_range: Optional[tuple[int, int]] = None

    model_config = {"frozen": True}


class DataChangeEffect(BaseModel):
    type: Literal["DATA_CHANGE"] = "DATA_CHANGE"
    tokens: TokenDelta

    model_config = {"frozen": True}


class CapitalChangeEffect(BaseModel):
    type: Literal["CAPITAL_CHANGE"] = "CAPITAL_CHANGE"
    amount: float

    model_config = {"frozen": True}


class ChoiceEffect(BaseModel):
    type: Literal["CHOICE"] = "CHOICE"
    options: list[CardChoice]

    model_config = {"frozen": True}


class CompoundEffect(BaseModel):
    type: Literal["COMPOUND"] = "COMPOUND"
    effects: list[RiskCardEffect]

    model_config = {"frozen": True}


RiskCardEffect = Annotated[
    Union[DataChangeEffect, CapitalChangeEffect, ChoiceEffect, CompoundEffect],
    Field(discriminator="type"),
]

CompoundEffect.model_rebuild()


class RiskCard(BaseModel):
    id: str
    name: str
    phase: GamePhase
    description: str
    trigger: CardTrigger
    effect: RiskCardEffect
    educational_note: str

    model_config = {"frozen": True}


class PolicyCardEffect(BaseModel):
    """Policy card effect.  ``type`` selects which optional fields apply."""

    type: Literal[
        "REVENUE_MULTIPLIER",
        "COST_MULTIPLIER",
        "SUCCESS_RATE_BONUS",
        "SKIP_PHASE",
        "CAPITAL_GRANT",
        "EXCLUSIVITY_BONUS",
        "CLINICAL_HOLD",
        "FORCED_CHOICE",
    ]
    value: Optional[float] = None
    phases: list[GamePhase] = Field(default_factory=list)
    phase_to_skip: Optional[str] = None
    amount: Optional[float] = None
    years: Optional[int] = None
    cost_to_resolve: Optional[float] = None
    turns_lost: Optional[int] = None
    options: list[CardChoice] = Field(default_factory=list)

    model_config = {"frozen": True}


class EducationalInsight(BaseModel):
    title: str
    content: str
    reflection_question: Optional[str] = None

    model_config = {"frozen": True}


class PolicyCard(BaseModel):
    id: str
    name: str
    category: PolicyCardCategory
    description: str
    trigger: CardTrigger
    effect: PolicyCardEffect
    educational_insight: EducationalInsight

    model_config = {"frozen": True}


class CardState(BaseModel):
    active_risk_cards: list[RiskCard] = Field(default_factory=list)
    active_policy_cards: list[PolicyCard] = Field(default_factory=list)

    model_config = {"frozen": True}


# ── History ──────────────────────────────────────────────────────────────────

class Decision(BaseModel):
    """Audit record of one resolved decision."""

    id: str
    turn: int
    space: int
    type: DecisionType
    chosen_option: str
    alternatives: list[str] = Field(default_factory=list)
    capital_before: float
    capital_after: float
    tokens_before: DataTokens
    tokens_after: DataTokens
    outcome: str

    model_config = {"frozen": True}


class FinancingEvent(BaseModel):
    turn: int
    type: FinancingType
    amount: float
    dilution_percent: Optional[float] = None
    note: Optional[str] = None

    model_config = {"frozen": True}


class FailedProgram(BaseModel):
    turn: int
    phase: GamePhase
    space: int
    reason: str
    capital_lost: float = 0.0

    model_config = {"frozen": True}


class GameHistory(BaseModel):
    """Append-only logs.  Only scoring reads them back."""

    decisions: list[Decision] = Field(default_factory=list)
    financing_events: list[FinancingEvent] = Field(default_factory=list)
    failed_programs: list[FailedProgram] = Field(default_factory=list)
    space_visits: list[int] = Field(default_factory=list)
    cards_drawn: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}


class YearMilestone(BaseModel):
    space: int
    year: float
    event: str

    model_config = {"frozen": True}


class FundingEvent(BaseModel):
    """A completed board funding round."""

    round: str = Field(..., min_length=1)
    year: float = 0.0
    amount_raised: float = Field(..., ge=0.0)
    dilution: float = Field(..., ge=0.0, le=1.0, description="Fraction of ownership sold")
    pre_money_valuation: float = 0.0
    investor_expectation: str = ""

    model_config = {"frozen": True}


# ── Scoring ──────────────────────────────────────────────────────────────────

class ScoreLine(BaseModel):
    category: str
    description: str
    value: float

    model_config = {"frozen": True}


class Score(BaseModel):
    base: float = 1000.0
    bonuses: list[ScoreLine] = Field(default_factory=list)
    penalties: list[ScoreLine] = Field(default_factory=list)
    total: float = 1000.0

    model_config = {"frozen": True}


# ── Shadow Programs ──────────────────────────────────────────────────────────

class ShadowProgram(BaseModel):
    """A parallel program that fails at a fixed board space."""

    id: str
    name: str
    scientist: str
    scientist_background: str
    target_disease: str
    failure_space: int = Field(..., ge=1, le=24)
    failure_reason: str
    cost_at_failure: float = Field(..., ge=0.0, description="$M spent before failure")
    vignette: str
    phase_failure_rate: Optional[float] = Field(default=None, ge=0.0, le=100.0)

    model_config = {"frozen": True}


class ShadowProgramState(BaseModel):
    program: ShadowProgram
    status: ShadowStatus = ShadowStatus.ACTIVE
    failed_at_turn: Optional[int] = None

    model_config = {"frozen": True}


# ── Policy Scenarios ─────────────────────────────────────────────────────────

class PolicyChoice(BaseModel):
    label: str
    consequence: str
    capital_change: Optional[float] = None
    investor_confidence_change: Optional[float] = None
    revenue_multiplier: Optional[float] = None
    is_optimal_choice: bool = False
    lesson_if_chosen: Optional[str] = None

    model_config = {"frozen": True}


class ScenarioEducation(BaseModel):
    title: str
    insight: str
    kolchinsky_quote: Optional[str] = None

    model_config = {"frozen": True}


class PolicyScenario(BaseModel):
    """A deterministic policy lesson triggered at one board space."""

    id: str
    name: str
    trigger_space: int = Field(..., ge=1, le=24)
    description: str
    choices: list[PolicyChoice] = Field(..., min_length=1)
    educational_content: ScenarioEducation
    applicable_difficulties: Optional[list[Difficulty]] = Field(
        default=None,
        description="Allow-list of modes; None means every difficulty",
    )

    model_config = {"frozen": True}

    def applies_to(self, difficulty: Difficulty) -> bool:
        if self.applicable_difficulties is None:
            return True
        return difficulty in self.applicable_difficulties


class PolicyScenarioRef(BaseModel):
    scenario_id: str
    triggered_at_space: int

    model_config = {"frozen": True}


# ── Balance ──────────────────────────────────────────────────────────────────

class DifficultySettings(BaseModel):
    starting_capital: float
    phase_ii_success_rate: float
    phase_iii_success_rate: float
    phase_iii_cost_multiplier: float
    revenue_projection: float

    model_config = {"frozen": True}


class DifficultyContext(BaseModel):
    """Narrative market context shown alongside policy scenarios."""

    typical_price: str
    patient_population: str
    ira_impact: str
    pbm_pressure: str
    insurance_model: str
    revenue_scale: float

    model_config = {"frozen": True}
