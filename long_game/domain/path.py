"""Records of the path engine: narrative paths, events and the path game state."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from long_game.domain.enums import (
    PathEventType,
    PathModality,
    PathPhase,
    PathStatus,
    PathTier,
)
from long_game.domain.funding import ValueRange

PHASE_ORDER: tuple[PathPhase, ...] = (
    PathPhase.DISCOVERY,
    PathPhase.PRECLINICAL,
    PathPhase.PHASE1,
    PathPhase.PHASE2,
    PathPhase.PHASE3,
    PathPhase.APPROVAL,
)


def next_phase(current: PathPhase) -> PathPhase | None:
    """The phase after *current*, or None when *current* is the last."""
    index = PHASE_ORDER.index(current)
    if index < len(PHASE_ORDER) - 1:
        return PHASE_ORDER[index + 1]
    return None


# ── Paths ────────────────────────────────────────────────────────────────────

class PathParameters(BaseModel):
    starting_capital: float = Field(..., gt=0.0)
    phase_ii_success_rate: float = Field(..., ge=0.0, le=1.0)
    phase_iii_cost_multiplier: float = Field(..., gt=0.0)
    market_potential: float = Field(..., ge=0.0)
    timeline_years: ValueRange
    patient_population: int = Field(..., ge=0)

    model_config = {"frozen": True}


class VictoryMetrics(BaseModel):
    """Historical benchmarks the player is compared against on victory."""

    development_time: float
    total_raised: float
    founder_ownership: float = Field(..., ge=0.0, le=1.0)
    patient_impact: str
    social_contract: str

    model_config = {"frozen": True}


class GamePath(BaseModel):
    """One disease-tier x modality narrative path."""

    id: str = Field(..., min_length=1)
    tier: PathTier
    modality: PathModality
    name: str
    subtitle: str
    icon: str
    story: str
    parameters: PathParameters
    key_points: list[str] = Field(default_factory=list)
    funding_rounds: list[str] = Field(
        ...,
        min_length=1,
        description="Funding round ids in the order they are offered",
    )
    victory_metrics: VictoryMetrics

    model_config = {"frozen": True}


# ── Events ───────────────────────────────────────────────────────────────────

class EventChoice(BaseModel):
    id: str = Field(..., min_length=1)
    text: str
    cost: float = Field(..., description="Capital cost ($M); negative means a gain")
    time_impact: float = Field(..., description="Years added; negative saves time")
    outcome: str
    confidence: Optional[float] = None
    market_impact: Optional[float] = Field(
        default=None,
        description="Fractional change applied to market potential (0.1 = +10%)",
    )
    risk_increase: Optional[float] = None

    model_config = {"frozen": True}


class EventReference(BaseModel):
    source: str
    url: Optional[str] = None
    learn_more: Optional[str] = None

    model_config = {"frozen": True}


class PathEvent(BaseModel):
    id: str = Field(..., min_length=1)
    path_id: str = Field(..., description="Owning path id, or '*' for universal events")
    phase: PathPhase
    type: PathEventType
    title: str
    description: str
    choices: list[EventChoice] = Field(..., min_length=1)
    reference: Optional[EventReference] = None

    model_config = {"frozen": True}

    def choice(self, choice_id: str) -> EventChoice | None:
        for c in self.choices:
            if c.id == choice_id:
                return c
        return None


class CompletedEvent(BaseModel):
    event_id: str
    choice_id: str
    year: int
    outcome: str

    model_config = {"frozen": True}


# ── State ────────────────────────────────────────────────────────────────────

class PathGameState(BaseModel):
    """Path game state.  VICTORY and DEFEAT only exit through a reset."""

    selected_path: Optional[str] = None
    path_data: Optional[GamePath] = None

    capital: float = 0.0
    burn_rate: float = Field(default=5.0, gt=0.0, description="$M consumed per quarter")

    current_year: int = Field(default=0, ge=0)
    current_quarter: int = Field(default=1, ge=1, le=4)

    current_phase: PathPhase = PathPhase.DISCOVERY
    phase_progress: float = Field(default=0.0, ge=0.0, le=100.0)

    founder_ownership: float = Field(default=1.0, ge=0.0, le=1.0)
    funding_rounds_completed: list[str] = Field(default_factory=list)
    investor_confidence: float = Field(default=80.0, ge=0.0, le=100.0)
    market_potential: float = 0.0

    pending_event: Optional[PathEvent] = None
    completed_events: list[str] = Field(default_factory=list)
    event_history: list[CompletedEvent] = Field(default_factory=list)

    status: PathStatus = PathStatus.PATH_SELECTION
    defeat_reason: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def runway_quarters(self) -> float:
        return self.capital / self.burn_rate

    @property
    def is_terminal(self) -> bool:
        return self.status in (PathStatus.VICTORY, PathStatus.DEFEAT)
