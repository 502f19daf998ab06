"""Funding round catalogs and computed terms for both engines."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, model_validator


class ValueRange(BaseModel):
    """Inclusive numeric range.  ``min`` must not exceed ``max``."""

    min: float
    max: float

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _ordered(self) -> ValueRange:
        if self.min > self.max:
            raise ValueError(f"range min {self.min} exceeds max {self.max}")
        return self

    @property
    def midpoint(self) -> float:
        return (self.min + self.max) / 2


class BoardFundingRound(BaseModel):
    """A board funding round, offered when the token lands on ``trigger_space``."""

    key: str = Field(..., min_length=1, description="Stable round key, e.g. 'seriesA'")
    name: str
    trigger_space: int = Field(..., ge=1, le=24)
    typical_raise: ValueRange
    dilution: ValueRange
    investor_expectation: str
    target_multiple: str
    target_irr: str

    model_config = {"frozen": True}


class FundingRoundDef(BaseModel):
    """A path-engine funding round definition."""

    id: str = Field(..., min_length=1)
    name: str
    description: str
    typical_raise: ValueRange
    dilution: ValueRange
    investor_expectation: str
    target_multiple: str

    model_config = {"frozen": True}


class FundingTerms(BaseModel):
    """Raise and dilution offered for a round at a given investor confidence."""

    raise_amount: float = Field(..., ge=0.0, description="Capital raised ($M)")
    dilution: float = Field(..., ge=0.0, le=1.0, description="Fraction of ownership sold")
    pre_money_valuation: Optional[float] = Field(
        default=None,
        description="Implied pre-money valuation ($M); None when dilution is zero",
    )

    model_config = {"frozen": True}
