"""Data tokens: accumulated scientific evidence in four categories.

Gate checks are conjunctive: every category must meet or exceed its
threshold.  There is no partial credit.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from long_game.domain.enums import TokenType

TOKEN_KEYS: tuple[str, ...] = tuple(t.value for t in TokenType)


class DataTokens(BaseModel):
    """Non-negative evidence counters held by the board game state."""

    efficacy: int = Field(default=0, ge=0)
    safety: int = Field(default=0, ge=0)
    pkpd: int = Field(default=0, ge=0)
    cmc: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    @property
    def total(self) -> int:
        return self.efficacy + self.safety + self.pkpd + self.cmc


class TokenDelta(BaseModel):
    """A partial token change.  Omitted categories default to zero.

    Signed: risk-card choices may carry negative entries.
    """

    efficacy: int = 0
    safety: int = 0
    pkpd: int = 0
    cmc: int = 0

    model_config = {"frozen": True}

    def nonzero(self) -> dict[str, int]:
        return {k: getattr(self, k) for k in TOKEN_KEYS if getattr(self, k) != 0}

    def positive_part(self) -> TokenDelta:
        return TokenDelta(**{k: max(0, getattr(self, k)) for k in TOKEN_KEYS})

    def negative_part(self) -> TokenDelta:
        """Magnitudes of the negative entries, as a positive delta."""
        return TokenDelta(**{k: max(0, -getattr(self, k)) for k in TOKEN_KEYS})


# ── Arithmetic ───────────────────────────────────────────────────────────────

def add_tokens(tokens: DataTokens, delta: TokenDelta) -> DataTokens:
    """Per-key addition, floored at zero."""
    return DataTokens(**{
        k: max(0, getattr(tokens, k) + getattr(delta, k)) for k in TOKEN_KEYS
    })


def subtract_tokens(tokens: DataTokens, delta: TokenDelta) -> DataTokens:
    """Per-key subtraction, clamped at zero."""
    return DataTokens(**{
        k: max(0, getattr(tokens, k) - getattr(delta, k)) for k in TOKEN_KEYS
    })


# ── Gate checks ──────────────────────────────────────────────────────────────

def meets_gate_requirements(tokens: DataTokens, requirement: DataTokens) -> bool:
    """True iff every category meets or exceeds the requirement."""
    return all(getattr(tokens, k) >= getattr(requirement, k) for k in TOKEN_KEYS)


def get_token_deficit(tokens: DataTokens, requirement: DataTokens) -> TokenDelta:
    """Tokens still missing per category; met categories report zero."""
    return TokenDelta(**{
        k: max(0, getattr(requirement, k) - getattr(tokens, k)) for k in TOKEN_KEYS
    })


def excess_over(tokens: DataTokens, minimum: DataTokens) -> int:
    """Total tokens held above *minimum*, summed across categories."""
    return sum(max(0, getattr(tokens, k) - getattr(minimum, k)) for k in TOKEN_KEYS)
