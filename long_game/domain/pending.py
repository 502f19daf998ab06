"""The single pending interaction a board game may be blocked on.

A board game is blocked on at most one interaction at a time.  Encoding it
as a tagged union over one field makes that structural: there is no state
in which a decision and a policy scenario are both open.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from long_game.domain.board import PendingDecision, PolicyScenarioRef, ShadowProgram


class DecisionPending(BaseModel):
    kind: Literal["decision"] = "decision"
    decision: PendingDecision

    model_config = {"frozen": True}


class ShadowFailurePending(BaseModel):
    kind: Literal["shadow_failure"] = "shadow_failure"
    program: ShadowProgram

    model_config = {"frozen": True}


class PolicyScenarioPending(BaseModel):
    kind: Literal["policy_scenario"] = "policy_scenario"
    scenario: PolicyScenarioRef

    model_config = {"frozen": True}


class FundingRoundPending(BaseModel):
    kind: Literal["funding_round"] = "funding_round"
    round_key: str = Field(..., min_length=1)

    model_config = {"frozen": True}


PendingInteraction = Annotated[
    Union[DecisionPending, ShadowFailurePending, PolicyScenarioPending, FundingRoundPending],
    Field(discriminator="kind"),
]
