"""Balance constants: difficulty modes, gate thresholds, funding rounds, durations.

Difficulty modes mirror real development archetypes:

- **orphan**: small trials, clearer biology, smaller market.
- **blockbuster**: huge Phase III, large market, intense payer pressure.
- **firstInClass**: novel mechanism, higher Phase II attrition, premium pricing.
"""

from __future__ import annotations

from long_game.domain.board import DifficultyContext, DifficultySettings
from long_game.domain.enums import Difficulty, GamePhase, PathPhase
from long_game.domain.funding import BoardFundingRound, ValueRange
from long_game.domain.tokens import DataTokens

BASE_SCORE = 1000

# Menu state defaults, before a difficulty is chosen
MENU_CAPITAL = 100
MENU_REVENUE_PROJECTION = 5000


# ── Difficulty ───────────────────────────────────────────────────────────────

DIFFICULTY_SETTINGS: dict[Difficulty, DifficultySettings] = {
    Difficulty.ORPHAN: DifficultySettings(
        starting_capital=80,
        phase_ii_success_rate=0.40,
        phase_iii_success_rate=0.70,
        phase_iii_cost_multiplier=0.4,
        revenue_projection=2000,
    ),
    Difficulty.BLOCKBUSTER: DifficultySettings(
        starting_capital=150,
        phase_ii_success_rate=0.35,
        phase_iii_success_rate=0.58,
        phase_iii_cost_multiplier=1.5,
        revenue_projection=8000,
    ),
    Difficulty.FIRST_IN_CLASS: DifficultySettings(
        starting_capital=100,
        phase_ii_success_rate=0.25,
        phase_iii_success_rate=0.65,
        phase_iii_cost_multiplier=1.2,
        revenue_projection=6000,
    ),
}

DIFFICULTY_CONTEXT: dict[Difficulty, DifficultyContext] = {
    Difficulty.ORPHAN: DifficultyContext(
        typical_price="$400,000+/year",
        patient_population="< 200,000 patients",
        ira_impact="Lower (smaller Medicare population)",
        pbm_pressure="Lower (specialty pharmacy model)",
        insurance_model="Specialty tier with manufacturer support",
        revenue_scale=2000,
    ),
    Difficulty.BLOCKBUSTER: DifficultyContext(
        typical_price="$75,000-150,000/year",
        patient_population="Millions of patients",
        ira_impact="Maximum (large Medicare exposure)",
        pbm_pressure="Intense (high-volume = more rebate leverage)",
        insurance_model="Formulary battles with PBMs",
        revenue_scale=8000,
    ),
    Difficulty.FIRST_IN_CLASS: DifficultyContext(
        typical_price="$150,000-250,000/year",
        patient_population="Large unmet need population",
        ira_impact="Moderate (premium pricing partially offsets)",
        pbm_pressure="Moderate (no direct competitors initially)",
        insurance_model="Initial exclusivity, then competitive pressure",
        revenue_scale=6000,
    ),
}


def get_difficulty_context(difficulty: Difficulty) -> DifficultyContext:
    return DIFFICULTY_CONTEXT[difficulty]


# ── Gates ────────────────────────────────────────────────────────────────────

GATE_REQUIREMENTS: dict[str, DataTokens] = {
    "ind_filing": DataTokens(efficacy=2, safety=2, pkpd=1, cmc=1),
    "phase_ii": DataTokens(efficacy=3, safety=3, pkpd=2, cmc=2),
    "phase_iii": DataTokens(efficacy=5, safety=4, pkpd=3, cmc=3),
    "nda_approval": DataTokens(efficacy=8, safety=6, pkpd=4, cmc=4),
}

# Tokens above this floor earn the data-quality bonus
APPROVAL_MINIMUM = GATE_REQUIREMENTS["nda_approval"]


# ── Board Funding Rounds ─────────────────────────────────────────────────────

FUNDING_ROUNDS: dict[str, BoardFundingRound] = {
    r.key: r
    for r in (
        BoardFundingRound(
            key="seed",
            name="Seed",
            trigger_space=1,
            typical_raise=ValueRange(min=2, max=10),
            dilution=ValueRange(min=0.15, max=0.25),
            investor_expectation="Strong science, IP protection, experienced team",
            target_multiple="10-100×",
            target_irr="~29%",
        ),
        BoardFundingRound(
            key="seriesA",
            name="Series A",
            trigger_space=7,
            typical_raise=ValueRange(min=20, max=50),
            dilution=ValueRange(min=0.25, max=0.35),
            investor_expectation="Target validation, preclinical data, clear clinical path",
            target_multiple="10-15×",
            target_irr="~25%",
        ),
        BoardFundingRound(
            key="seriesB",
            name="Series B",
            trigger_space=12,
            typical_raise=ValueRange(min=50, max=100),
            dilution=ValueRange(min=0.15, max=0.25),
            investor_expectation="IND accepted, Phase I safety data, early PK",
            target_multiple="3-5×",
            target_irr="~20%",
        ),
        BoardFundingRound(
            key="seriesC",
            name="Series C",
            trigger_space=15,
            typical_raise=ValueRange(min=100, max=200),
            dilution=ValueRange(min=0.10, max=0.20),
            investor_expectation="Phase II PoC data, biomarker strategy, regulatory alignment",
            target_multiple="2-3×",
            target_irr="~11%",
        ),
        BoardFundingRound(
            key="ipoOrCrossover",
            name="IPO/Crossover",
            trigger_space=19,
            typical_raise=ValueRange(min=150, max=300),
            dilution=ValueRange(min=0.10, max=0.15),
            investor_expectation="Phase III data, clear regulatory path to approval",
            target_multiple="1.5-2×",
            target_irr="~8%",
        ),
    )
}

FUNDING_TRIGGER_SPACES: tuple[int, ...] = tuple(r.trigger_space for r in FUNDING_ROUNDS.values())

# Representative dilution per round, for projecting ownership from round keys alone
ROUND_DILUTIONS: dict[str, float] = {
    "seed": 0.20,
    "seriesA": 0.30,
    "seriesB": 0.20,
    "seriesC": 0.15,
    "ipoOrCrossover": 0.12,
}


def get_round_for_space(space_id: int) -> BoardFundingRound | None:
    for r in FUNDING_ROUNDS.values():
        if r.trigger_space == space_id:
            return r
    return None


# ── Path Durations ───────────────────────────────────────────────────────────

# Years each path phase takes at full speed
PHASE_DURATIONS: dict[PathPhase, float] = {
    PathPhase.DISCOVERY: 2.5,
    PathPhase.PRECLINICAL: 2,
    PathPhase.PHASE1: 2,
    PathPhase.PHASE2: 3,
    PathPhase.PHASE3: 3.5,
    PathPhase.APPROVAL: 1,
}

# Years elapsed when a board phase completes.  Pre-Phase I averages 3.0 years
# (split across discovery and preclinical); clinical is Phase I + II + III.
BOARD_PHASE_YEARS: dict[GamePhase, float] = {
    GamePhase.DISCOVERY: 2.0,
    GamePhase.PRECLINICAL: 1.0,
    GamePhase.CLINICAL: 9.2,
    GamePhase.REGULATORY: 1.3,
}
