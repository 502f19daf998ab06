"""Tests for data token arithmetic and gate checks."""

import pytest

from long_game.domain.tokens import (
    TOKEN_KEYS,
    DataTokens,
    TokenDelta,
    add_tokens,
    excess_over,
    get_token_deficit,
    meets_gate_requirements,
    subtract_tokens,
)


class TestTokenArithmetic:
    def test_add_is_per_key(self) -> None:
        result = add_tokens(DataTokens(efficacy=1, safety=2), TokenDelta(efficacy=2, cmc=1))
        assert result == DataTokens(efficacy=3, safety=2, pkpd=0, cmc=1)

    def test_add_floors_negative_entries_at_zero(self) -> None:
        result = add_tokens(DataTokens(efficacy=1), TokenDelta(efficacy=-4))
        assert result.efficacy == 0

    def test_subtract_clamps_at_zero(self) -> None:
        result = subtract_tokens(DataTokens(safety=1, pkpd=3), TokenDelta(safety=5, pkpd=1))
        assert result.safety == 0
        assert result.pkpd == 2

    def test_total(self) -> None:
        assert DataTokens(efficacy=1, safety=2, pkpd=3, cmc=4).total == 10

    def test_delta_parts_split_signs(self) -> None:
        delta = TokenDelta(efficacy=2, safety=-1)
        assert delta.positive_part() == TokenDelta(efficacy=2)
        assert delta.negative_part() == TokenDelta(safety=1)
        assert delta.nonzero() == {"efficacy": 2, "safety": -1}


class TestGateChecks:
    _REQ = DataTokens(efficacy=2, safety=2, pkpd=1, cmc=1)

    def test_exact_requirement_passes(self) -> None:
        assert meets_gate_requirements(self._REQ, self._REQ)

    @pytest.mark.parametrize("short", TOKEN_KEYS)
    def test_single_short_category_fails(self, short: str) -> None:
        tokens = DataTokens(**{k: 0 if k == short else 9 for k in TOKEN_KEYS})
        assert not meets_gate_requirements(tokens, self._REQ)

    def test_deficit_reports_only_missing(self) -> None:
        deficit = get_token_deficit(DataTokens(efficacy=5, safety=1), self._REQ)
        assert deficit == TokenDelta(efficacy=0, safety=1, pkpd=1, cmc=1)

    def test_deficit_empty_when_met(self) -> None:
        assert get_token_deficit(self._REQ, self._REQ).nonzero() == {}

    def test_excess_ignores_shortfalls(self) -> None:
        tokens = DataTokens(efficacy=10, safety=0, pkpd=4, cmc=5)
        assert excess_over(tokens, DataTokens(efficacy=8, safety=6, pkpd=4, cmc=4)) == 3
