"""The one place capital is raised against ownership.

Both engines route funding rounds through ``apply_financing_event``.  The
outcome carries both effects of a raise: diluted ownership and a scoring
penalty.  Each engine applies the parts it tracks; the board ``DILUTE``
action records only the penalty and leaves ownership untouched.

Term helpers price a round from its typical ranges and the current investor
confidence: confidence in [0, 100] maps to a multiplier in [0.7, 1.3] that
scales the raise up and the dilution down.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from long_game.content.balance import ROUND_DILUTIONS
from long_game.domain.board import ScoreLine
from long_game.domain.funding import BoardFundingRound, FundingTerms, ValueRange
from long_game.foundation.rounding import round_half_up

logger = logging.getLogger(__name__)

DILUTION_PENALTY = 100
NEGOTIATED_RAISE_FACTOR = 0.7
NEGOTIATED_DILUTION_FACTOR = 0.85


def fmt_amount(value: float) -> str:
    """Render a number without a trailing ``.0`` (25.0 -> '25', 2.5 -> '2.5')."""
    return f"{value:g}"


class FinancingOutcome(BaseModel):
    """Result of one financing event."""

    capital: float
    founder_ownership: float = Field(..., ge=0.0, le=1.0)
    penalty: Optional[ScoreLine] = None

    model_config = {"frozen": True}


def dilution_penalty(raised: float, dilution: float) -> ScoreLine:
    """Score line charged for selling *dilution* of the company for *raised* $M."""
    return ScoreLine(
        category="Dilution",
        description=f"Diluted {fmt_amount(dilution * 100)}% for ${fmt_amount(raised)}M",
        value=DILUTION_PENALTY,
    )


def apply_financing_event(
    ownership: float,
    capital: float,
    raised: float,
    dilution: float,
) -> FinancingOutcome:
    """Raise *raised* $M by selling *dilution* (a fraction) of the company.

    Ownership is multiplied by ``1 - dilution``; a zero-dilution raise
    (grants, partnerships) carries no penalty.
    """
    if not 0.0 <= dilution <= 1.0:
        raise ValueError(f"dilution must be a fraction in [0, 1], got {dilution}")

    penalty = dilution_penalty(raised, dilution) if dilution > 0 else None
    return FinancingOutcome(
        capital=capital + raised,
        founder_ownership=ownership * (1 - dilution),
        penalty=penalty,
    )


# ── Ownership ────────────────────────────────────────────────────────────────

def dilute_ownership(ownership: float, fractions: Iterable[float]) -> float:
    """Apply successive dilutions: ``ownership * Π(1 - d_i)``."""
    result = ownership
    for d in fractions:
        result *= 1 - d
    return result


def calculate_founder_ownership(rounds: Iterable[str]) -> float:
    """Project ownership from completed board round keys alone.

    Uses each round's representative dilution; unknown keys do not dilute.
    """
    return dilute_ownership(1.0, (ROUND_DILUTIONS.get(key, 0.0) for key in rounds))


# ── Terms ────────────────────────────────────────────────────────────────────

def confidence_multiplier(confidence: float) -> float:
    return 0.7 + (confidence / 100) * 0.6


def pre_money_valuation(raise_amount: float, dilution: float) -> float | None:
    """Implied pre-money valuation, or None when nothing is sold."""
    if dilution <= 0:
        return None
    return round_half_up(raise_amount / dilution - raise_amount)


def terms_from_ranges(
    typical_raise: ValueRange,
    dilution: ValueRange,
    confidence: float,
) -> FundingTerms:
    m = confidence_multiplier(confidence)
    raise_amount = round_half_up(typical_raise.midpoint * m)
    adjusted_dilution = dilution.midpoint * (2 - m)
    return FundingTerms(
        raise_amount=raise_amount,
        dilution=adjusted_dilution,
        pre_money_valuation=pre_money_valuation(raise_amount, adjusted_dilution),
    )


def board_funding_terms(funding_round: BoardFundingRound, confidence: float) -> FundingTerms:
    """Terms offered for a board round at the given investor confidence."""
    return terms_from_ranges(funding_round.typical_raise, funding_round.dilution, confidence)


def negotiate_funding_terms(terms: FundingTerms) -> FundingTerms:
    """Push back on the offer: 70% of the raise for 85% of the dilution."""
    raise_amount = round_half_up(terms.raise_amount * NEGOTIATED_RAISE_FACTOR)
    dilution = terms.dilution * NEGOTIATED_DILUTION_FACTOR
    return FundingTerms(
        raise_amount=raise_amount,
        dilution=dilution,
        pre_money_valuation=pre_money_valuation(raise_amount, dilution),
    )
