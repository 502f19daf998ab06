"""Tests for the shared financing operation and term pricing."""

import pytest

from long_game.content.balance import FUNDING_ROUNDS
from long_game.core.financing import (
    DILUTION_PENALTY,
    apply_financing_event,
    board_funding_terms,
    calculate_founder_ownership,
    confidence_multiplier,
    dilute_ownership,
    fmt_amount,
    negotiate_funding_terms,
    pre_money_valuation,
)
from long_game.domain.funding import FundingTerms
from long_game.foundation.rounding import round_half_up


class TestApplyFinancingEvent:
    def test_raise_adds_capital_and_dilutes(self) -> None:
        outcome = apply_financing_event(1.0, 10.0, 12.0, 0.25)
        assert outcome.capital == 22.0
        assert outcome.founder_ownership == pytest.approx(0.75)

    def test_penalty_when_equity_is_sold(self) -> None:
        outcome = apply_financing_event(1.0, 0.0, 25.0, 0.2)
        assert outcome.penalty is not None
        assert outcome.penalty.value == DILUTION_PENALTY
        assert outcome.penalty.description == "Diluted 20% for $25M"

    def test_zero_dilution_has_no_penalty(self) -> None:
        outcome = apply_financing_event(0.8, 5.0, 10.0, 0.0)
        assert outcome.penalty is None
        assert outcome.founder_ownership == 0.8

    @pytest.mark.parametrize("dilution", [-0.1, 1.5])
    def test_rejects_dilution_outside_unit_interval(self, dilution: float) -> None:
        with pytest.raises(ValueError):
            apply_financing_event(1.0, 0.0, 10.0, dilution)


class TestOwnership:
    def test_ownership_is_product_of_retained_fractions(self) -> None:
        assert dilute_ownership(1.0, [0.2, 0.3, 0.2]) == pytest.approx(0.8 * 0.7 * 0.8)

    def test_ownership_never_increases(self) -> None:
        ownership = 1.0
        for d in (0.1, 0.0, 0.35, 0.15):
            after = dilute_ownership(ownership, [d])
            assert after <= ownership
            ownership = after

    def test_founder_ownership_from_round_keys(self) -> None:
        assert calculate_founder_ownership(["seed", "seriesA"]) == pytest.approx(0.8 * 0.7)

    def test_unknown_round_keys_do_not_dilute(self) -> None:
        assert calculate_founder_ownership(["mystery"]) == 1.0


class TestTerms:
    def test_confidence_multiplier_bounds(self) -> None:
        assert confidence_multiplier(0) == pytest.approx(0.7)
        assert confidence_multiplier(100) == pytest.approx(1.3)

    def test_pre_money_none_without_dilution(self) -> None:
        assert pre_money_valuation(10, 0) is None

    def test_pre_money_valuation(self) -> None:
        assert pre_money_valuation(12, 0.2) == 48

    def test_board_terms_at_full_confidence(self) -> None:
        terms = board_funding_terms(FUNDING_ROUNDS["seed"], 100)
        # midpoint 6 * 1.3, dilution 0.20 * 0.7
        assert terms.raise_amount == 8
        assert terms.dilution == pytest.approx(0.14)

    def test_negotiation_trades_raise_for_dilution(self) -> None:
        terms = FundingTerms(raise_amount=12, dilution=0.2, pre_money_valuation=48)
        negotiated = negotiate_funding_terms(terms)
        assert negotiated.raise_amount == 8
        assert negotiated.dilution == pytest.approx(0.17)


class TestFormatting:
    def test_round_half_up(self) -> None:
        assert round_half_up(12.5) == 13
        assert round_half_up(-2.5) == -2
        assert round_half_up(-1.32) == -1

    def test_fmt_amount_drops_trailing_zero(self) -> None:
        assert fmt_amount(25.0) == "25"
        assert fmt_amount(2.5) == "2.5"
