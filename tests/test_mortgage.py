"""Tests for loan arithmetic and amortization schedules."""

import logging
import math

import pytest

from mortgage_breakeven.exceptions import DomainError, InvalidInputError
from mortgage_breakeven.finance.mortgage import (
    follow_on_payment,
    generate_schedule,
    monthly_payment,
    remaining_balance,
    schedule_from_terms,
)
from mortgage_breakeven.models import LoanTerms

LOANS = [
    (300_000, 4.0, 360),
    (250_000, 3.8, 240),
    (1_000, 12.0, 7),
    (450_000, 0.0, 300),
    (99_999.99, 1e-6, 121),
    (75_000, 1000.0, 60),
]


class TestMonthlyPayment:
    """Tests for the level payment formula."""

    def test_thirty_year_loan(self) -> None:
        """€300k at 4% over 30 years costs about €1,432.25 a month."""
        assert monthly_payment(300_000, 4.0, 360) == pytest.approx(1432.25, abs=0.01)

    def test_zero_rate_is_linear(self) -> None:
        """An interest-free loan splits the principal evenly."""
        assert monthly_payment(120_000, 0.0, 120) == 1000.0

    def test_near_zero_rate_stays_close_to_linear(self) -> None:
        """A tiny positive rate gives a finite payment just above principal / term."""
        payment = monthly_payment(120_000, 1e-6, 120)
        assert math.isfinite(payment)
        assert payment > 1000.0
        assert payment == pytest.approx(1000.0, rel=1e-6)

    def test_zero_principal(self) -> None:
        """Nothing borrowed means nothing to repay."""
        assert monthly_payment(0, 4.0, 360) == 0.0

    def test_large_rate_is_finite(self) -> None:
        """Extreme but representable rates still give a finite payment."""
        payment = monthly_payment(100_000, 5_000.0, 360)
        assert math.isfinite(payment)
        assert payment == pytest.approx(100_000 * 5_000 / 100 / 12)

    def test_rejects_non_positive_term(self) -> None:
        with pytest.raises(InvalidInputError):
            monthly_payment(100_000, 4.0, 0)

    def test_rejects_negative_principal(self) -> None:
        with pytest.raises(InvalidInputError):
            monthly_payment(-1, 4.0, 360)

    def test_rejects_absurd_negative_rate(self) -> None:
        with pytest.raises(InvalidInputError):
            monthly_payment(100_000, -150.0, 360)

    def test_infinite_rate_is_domain_error(self) -> None:
        with pytest.raises(DomainError):
            monthly_payment(100_000, float("inf"), 360)

    def test_nan_rate_is_domain_error(self) -> None:
        with pytest.raises(DomainError):
            monthly_payment(100_000, float("nan"), 360)

    def test_overflowing_payment_is_domain_error(self) -> None:
        """A rate so large the payment overflows fails instead of returning inf."""
        with pytest.raises(DomainError):
            monthly_payment(300_000, 1e306, 360)

    def test_overflowing_annuity_factor_is_domain_error(self) -> None:
        """A steep negative rate over a very long term overflows the annuity factor."""
        with pytest.raises(DomainError):
            monthly_payment(100_000, -99.0, 100_000)

    def test_domain_error_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="mortgage_breakeven"):
            with pytest.raises(DomainError):
                monthly_payment(100_000, float("inf"), 360)
        assert any("Non-finite" in r.getMessage() for r in caplog.records)


class TestGenerateSchedule:
    """Tests for month-by-month amortization."""

    @pytest.mark.parametrize("principal,rate,term", LOANS)
    def test_balance_closes_at_zero(self, principal: float, rate: float, term: int) -> None:
        schedule = generate_schedule(principal, rate, term)
        assert len(schedule) == term
        assert schedule[-1].month == term
        assert abs(schedule[-1].balance) < 0.01

    @pytest.mark.parametrize("principal,rate,term", LOANS)
    def test_payment_is_interest_plus_principal(
        self, principal: float, rate: float, term: int
    ) -> None:
        for period in generate_schedule(principal, rate, term):
            assert period.interest + period.principal == pytest.approx(period.payment, abs=1e-6)

    @pytest.mark.parametrize("principal,rate,term", LOANS)
    def test_balance_chain(self, principal: float, rate: float, term: int) -> None:
        schedule = generate_schedule(principal, rate, term)
        previous = principal
        for period in schedule:
            assert period.balance == pytest.approx(previous - period.principal, abs=1e-6)
            previous = period.balance

    def test_zero_rate_principal_is_constant(self) -> None:
        schedule = generate_schedule(120_000, 0.0, 120)
        for period in schedule:
            assert period.interest == 0.0
            assert period.principal == pytest.approx(1000.0)

    def test_level_payment_until_final_month(self) -> None:
        schedule = generate_schedule(300_000, 4.0, 360)
        first = schedule[0].payment
        assert all(p.payment == first for p in schedule[:-1])
        assert schedule[-1].payment == pytest.approx(first, abs=0.01)

    def test_first_month_interest(self) -> None:
        schedule = generate_schedule(300_000, 4.0, 360)
        assert schedule[0].interest == pytest.approx(1000.0)

    def test_is_deterministic(self) -> None:
        assert generate_schedule(200_000, 3.1, 240) == generate_schedule(200_000, 3.1, 240)

    def test_from_terms(self) -> None:
        terms = LoanTerms(principal=200_000, annual_rate_percent=3.1, term_months=240)
        assert schedule_from_terms(terms) == generate_schedule(200_000, 3.1, 240)

    def test_rejects_bad_term(self) -> None:
        with pytest.raises(InvalidInputError):
            generate_schedule(100_000, 4.0, -12)


class TestRemainingBalance:
    """Tests for the closed-form balance."""

    def test_matches_schedule(self) -> None:
        schedule = generate_schedule(300_000, 4.0, 360)
        assert remaining_balance(300_000, 4.0, 360, 60) == pytest.approx(
            schedule[59].balance, rel=1e-7
        )

    def test_zero_rate(self) -> None:
        assert remaining_balance(120_000, 0.0, 120, 30) == pytest.approx(90_000)

    def test_after_term_is_zero(self) -> None:
        assert remaining_balance(300_000, 4.0, 360, 360) == 0.0
        assert remaining_balance(300_000, 4.0, 360, 500) == 0.0

    def test_before_any_payment(self) -> None:
        assert remaining_balance(300_000, 4.0, 360, 0) == pytest.approx(300_000)


class TestFollowOnPayment:
    """Tests for payments after a fixed period."""

    def test_reamortises_remaining_balance(self) -> None:
        balance = remaining_balance(300_000, 3.5, 300, 36)
        expected = monthly_payment(balance, 4.2, 264)
        assert follow_on_payment(300_000, 3.5, 4.2, 300, 36) == pytest.approx(expected)

    def test_same_rate_keeps_payment(self) -> None:
        assert follow_on_payment(300_000, 3.5, 3.5, 300, 36) == pytest.approx(
            monthly_payment(300_000, 3.5, 300)
        )

    def test_none_when_fixed_covers_term(self) -> None:
        assert follow_on_payment(300_000, 3.5, 4.2, 60, 60) is None
