import math
from typing import List, Optional

import numpy as np

from mortgage_breakeven.exceptions import DomainError, InvalidInputError
from mortgage_breakeven.logging import get_logger
from mortgage_breakeven.models import AmortizationPeriod, LoanTerms

logger = get_logger(__name__)

# Below this an annual rate is treated as nonsensical rather than negative.
MIN_ANNUAL_RATE_PERCENT = -100.0


def _validate_loan(principal: float, annual_rate_percent: float, term_months: int) -> None:
    if term_months <= 0:
        raise InvalidInputError(f"term_months must be > 0, got {term_months}")
    if principal < 0:
        raise InvalidInputError(f"principal must be >= 0, got {principal}")
    if annual_rate_percent < MIN_ANNUAL_RATE_PERCENT:
        raise InvalidInputError(
            f"annual rate {annual_rate_percent}% is below {MIN_ANNUAL_RATE_PERCENT}%"
        )


def monthly_rate(annual_rate_percent: float) -> float:
    return annual_rate_percent / 100.0 / 12.0


def _ensure_finite(value: float, what: str) -> float:
    if not math.isfinite(value):
        logger.warning("Non-finite %s: %r", what, value)
        raise DomainError(f"{what} is not finite ({value!r})")
    return value


def monthly_payment(principal: float, annual_rate_percent: float, term_months: int) -> float:
    """Level monthly payment that clears ``principal`` over ``term_months``.

    The annuity factor ``1 - (1 + r)^-n`` is evaluated as
    ``-expm1(-n * log1p(r))`` so rates close to zero keep full precision.
    """
    _validate_loan(principal, annual_rate_percent, term_months)
    r = monthly_rate(annual_rate_percent)
    if abs(r) < 1e-12:
        return principal / term_months
    try:
        factor = -math.expm1(-term_months * math.log1p(r))
    except OverflowError as exc:
        logger.warning("Annuity factor overflow at %s%% over %s months", annual_rate_percent, term_months)
        raise DomainError(
            f"rate {annual_rate_percent}% over {term_months} months overflows"
        ) from exc
    if factor == 0:
        return principal / term_months
    return _ensure_finite(principal * r / factor, "monthly payment")


def remaining_balance(
    principal: float, annual_rate_percent: float, term_months: int, months_paid: int
) -> float:
    """Closed-form balance after ``months_paid`` level payments."""
    _validate_loan(principal, annual_rate_percent, term_months)
    m = max(0, min(months_paid, term_months))
    if m == term_months:
        return 0.0
    r = monthly_rate(annual_rate_percent)

    if abs(r) < 1e-12:
        return max(0.0, principal * (1 - m / term_months))

    A = monthly_payment(principal, annual_rate_percent, term_months)
    try:
        pow_m = (1 + r) ** m
    except OverflowError as exc:
        raise DomainError(f"balance at month {m} overflows") from exc
    bal = principal * pow_m - A * ((pow_m - 1) / r)
    return max(0.0, _ensure_finite(bal, "remaining balance"))


def generate_schedule(
    principal: float, annual_rate_percent: float, term_months: int
) -> List[AmortizationPeriod]:
    """Month-by-month amortization of a level-payment loan.

    Each month accrues ``balance * r`` interest and the rest of the payment
    reduces the balance. The final month repays whatever balance is left, so
    the schedule always closes at exactly zero however much rounding drift
    built up over the term.
    """
    payment = monthly_payment(principal, annual_rate_percent, term_months)
    r = monthly_rate(annual_rate_percent)

    schedule: List[AmortizationPeriod] = []
    balance = principal
    for month in range(1, term_months + 1):
        interest = balance * r
        if month == term_months:
            principal_part = balance
            this_payment = interest + principal_part
            balance = 0.0
        else:
            principal_part = payment - interest
            this_payment = payment
            balance = balance - principal_part
        schedule.append(
            AmortizationPeriod(
                month=month,
                payment=this_payment,
                interest=interest,
                principal=principal_part,
                balance=balance,
            )
        )

    values = np.array(
        [(p.payment, p.interest, p.principal, p.balance) for p in schedule],
        dtype=float,
    )
    if not np.isfinite(values).all():
        logger.warning(
            "Schedule for %.2f at %s%% over %s months is not finite",
            principal, annual_rate_percent, term_months,
        )
        raise DomainError(
            f"schedule at {annual_rate_percent}% over {term_months} months is not finite"
        )
    return schedule


def schedule_from_terms(terms: LoanTerms) -> List[AmortizationPeriod]:
    return generate_schedule(terms.principal, terms.annual_rate_percent, terms.term_months)


def follow_on_payment(
    principal: float,
    fixed_rate: float,
    follow_on_rate: float,
    term_months: int,
    fixed_months: int,
) -> Optional[float]:
    """Payment once a fixed period ends and the balance re-amortises at the follow-on rate.

    Returns None when the fixed period covers the whole term.
    """
    months_left = term_months - fixed_months
    if months_left <= 0:
        return None
    balance = remaining_balance(principal, fixed_rate, term_months, fixed_months)
    return monthly_payment(balance, follow_on_rate, months_left)
