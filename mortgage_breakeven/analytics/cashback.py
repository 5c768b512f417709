"""Side-by-side comparison of mortgage offers that trade rate against cashback.

Every option amortises the same mortgage amount over the same term; only the
first ``comparison_period_months`` (the longest fixed period on offer, or the
whole term when every option is variable) count towards ranking and
breakeven detection. Cashback is credited at month 0, so an option's running
cost at month t is its cumulative interest to t less its cashback.
"""

import itertools
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from mortgage_breakeven.config import MAX_CASHBACK_OPTIONS, MIN_CASHBACK_OPTIONS, EngineConfig
from mortgage_breakeven.exceptions import InvalidInputError
from mortgage_breakeven.finance.mortgage import generate_schedule
from mortgage_breakeven.logging import get_logger
from mortgage_breakeven.models import (
    BreakevenCrossing,
    CashbackBreakevenInputs,
    CashbackBreakevenResult,
    CashbackMonthlyComparison,
    CashbackOption,
    CashbackOptionResult,
    CashbackYearlyComparison,
)
from mortgage_breakeven.periods import format_breakeven_period

logger = get_logger(__name__)


def cashback_amount(option: CashbackOption, mortgage_amount: float) -> float:
    if option.cashback_type == "flat":
        amount = option.cashback_value
    elif option.cashback_type == "percentage":
        amount = mortgage_amount * option.cashback_value / 100
    else:
        raise InvalidInputError(
            f"unknown cashback type {option.cashback_type!r} for {option.label!r}"
        )
    if option.cashback_cap is not None:
        amount = min(amount, option.cashback_cap)
    return amount


def comparison_period(options: Sequence[CashbackOption], term_months: int) -> Tuple[int, bool]:
    """Return (comparison months, all variable)."""
    fixed_months = [o.fixed_period_years * 12 for o in options if o.fixed_period_years]
    fixed_months = [m for m in fixed_months if m > 0]
    if not fixed_months:
        return term_months, True
    return min(max(fixed_months), term_months), False


def find_crossing(diff: np.ndarray) -> Optional[int]:
    """Index of the first point where ``diff`` takes the opposite sign to its first non-zero value."""
    signs = np.sign(diff)
    nonzero = np.flatnonzero(signs)
    if nonzero.size == 0:
        return None
    reference = signs[nonzero[0]]
    flipped = np.flatnonzero(signs == -reference)
    return int(flipped[0]) if flipped.size else None


def _describe(cheaper: str, dearer: str, month: int) -> str:
    return f"{cheaper} becomes cheaper than {dearer} after {format_breakeven_period(month)}"


def calculate_cashback_breakeven(
    inputs: CashbackBreakevenInputs,
    include_projection: bool = True,
    config: Optional[EngineConfig] = None,
) -> CashbackBreakevenResult:
    config = config or EngineConfig()
    options = list(inputs.options)
    count = len(options)
    if not MIN_CASHBACK_OPTIONS <= count <= MAX_CASHBACK_OPTIONS:
        raise InvalidInputError(
            f"need {MIN_CASHBACK_OPTIONS}-{MAX_CASHBACK_OPTIONS} options, got {count}"
        )
    term = inputs.mortgage_term_months
    if term <= 0:
        raise InvalidInputError("mortgage_term_months must be > 0")
    if inputs.mortgage_amount < 0:
        raise InvalidInputError("mortgage_amount must be >= 0")

    cashbacks = np.array([cashback_amount(o, inputs.mortgage_amount) for o in options])
    horizon, all_variable = comparison_period(options, term)

    # A DomainError on any option fails the whole batch
    schedules = [generate_schedule(inputs.mortgage_amount, o.rate, term) for o in options]

    payments = np.array([s[0].payment for s in schedules])
    cum_interest = np.cumsum([[p.interest for p in s] for s in schedules], axis=1)
    cum_principal = np.cumsum([[p.principal for p in s] for s in schedules], axis=1)
    balances = np.array([[p.balance for p in s] for s in schedules])

    end = horizon - 1
    interest_paid = cum_interest[:, end]
    net_costs = interest_paid - cashbacks
    adjusted_balances = balances[:, end] - cashbacks

    results = [
        CashbackOptionResult(
            label=o.label,
            rate=o.rate,
            fixed_period_years=o.fixed_period_years or 0,
            cashback_amount=float(cashbacks[i]),
            monthly_payment=float(payments[i]),
            monthly_payment_diff=float(payments[i] - payments.min()),
            interest_paid=float(interest_paid[i]),
            principal_paid=float(cum_principal[i, end]),
            balance_at_end=float(balances[i, end]),
            net_cost=float(net_costs[i]),
            adjusted_balance=float(adjusted_balances[i]),
        )
        for i, o in enumerate(options)
    ]

    # Running cost from month 0 (cashback only) to the end of the comparison period
    running = np.hstack([np.zeros((count, 1)), cum_interest[:, :horizon]]) - cashbacks[:, None]
    breakevens: List[BreakevenCrossing] = []
    for a, b in itertools.combinations(range(count), 2):
        diff = running[a] - running[b]
        month = find_crossing(diff)
        if month is None:
            continue
        label_a, label_b = options[a].label, options[b].label
        if diff[month] < 0:
            description = _describe(label_a, label_b, month)
        else:
            description = _describe(label_b, label_a, month)
        breakevens.append(
            BreakevenCrossing(
                option_a_index=a,
                option_b_index=b,
                option_a_label=label_a,
                option_b_label=label_b,
                breakeven_month=month,
                description=description,
            )
        )

    def snapshot(col: int) -> dict:
        return dict(
            balances=balances[:, col].tolist(),
            net_costs=(cum_interest[:, col] - cashbacks).tolist(),
            adjusted_balances=(balances[:, col] - cashbacks).tolist(),
            interest_paid=cum_interest[:, col].tolist(),
            principal_paid=cum_principal[:, col].tolist(),
        )

    years = math.ceil(horizon / 12)
    yearly = [
        CashbackYearlyComparison(year=y, **snapshot(min(12 * y, horizon) - 1))
        for y in range(1, years + 1)
    ]
    monthly = [
        CashbackMonthlyComparison(month=m, **snapshot(m - 1))
        for m in range(1, min(config.monthly_breakdown_months, horizon) + 1)
    ]
    projection = None
    if include_projection and horizon < term:
        projection = CashbackYearlyComparison(
            year=years + 1, **snapshot(min(12 * (years + 1), term) - 1)
        )

    cheapest = int(np.argmin(net_costs))
    logger.debug(
        "Cashback comparison of %d options over %d months: cheapest %r, %d crossings",
        count, horizon, options[cheapest].label, len(breakevens),
    )

    return CashbackBreakevenResult(
        options=results,
        cheapest_net_cost_index=cheapest,
        cheapest_adjusted_balance_index=int(np.argmin(adjusted_balances)),
        cheapest_monthly_index=int(np.argmin(payments)),
        savings_vs_worst=float(net_costs.max() - net_costs.min()),
        comparison_period_months=horizon,
        comparison_period_years=years,
        all_variable=all_variable,
        breakevens=breakevens,
        yearly_breakdown=yearly,
        monthly_breakdown=monthly,
        projection_year=projection,
    )
