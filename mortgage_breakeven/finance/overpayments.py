from typing import Iterable, List, Optional, Sequence

from mortgage_breakeven.exceptions import InvalidInputError
from mortgage_breakeven.models import OverpaymentPolicy


def get_overpayment_policy(
    policies: Iterable[OverpaymentPolicy], policy_id: str
) -> Optional[OverpaymentPolicy]:
    return next((p for p in policies if p.id == policy_id), None)


def start_of_year_balances(
    mortgage_amount: float, end_of_year_balances: Sequence[float]
) -> List[float]:
    """Shift end-of-year balances so index y holds the balance when year y+1 begins."""
    return [mortgage_amount, *end_of_year_balances[:-1]] if end_of_year_balances else [mortgage_amount]


def _yearly_allowance(
    policy: OverpaymentPolicy,
    mortgage_amount: float,
    monthly_payment: float,
    balance: float,
) -> float:
    if policy.allowance_type == "flat":
        amount = policy.allowance_value
    elif policy.allowance_type == "percentage":
        share = policy.allowance_value / 100
        if policy.allowance_basis == "original-balance":
            amount = mortgage_amount * share
        elif policy.allowance_basis == "balance":
            amount = max(0.0, balance) * share
        elif policy.allowance_basis == "payment":
            amount = monthly_payment * 12 * share
        else:
            raise InvalidInputError(f"unknown allowance basis {policy.allowance_basis!r}")
    else:
        raise InvalidInputError(f"unknown allowance type {policy.allowance_type!r}")

    if policy.min_amount:
        amount = max(amount, policy.min_amount * 12)
    return max(0.0, amount)


def calculate_total_overpayment_allowance(
    policy: Optional[OverpaymentPolicy],
    mortgage_amount: float,
    monthly_payment: float,
    comparison_period_years: int,
    yearly_balances: Sequence[float],
) -> float:
    """Penalty-free overpayment a borrower could have made over the comparison period.

    ``yearly_balances[y]`` is the balance at the start of year y+1. Years past
    the end of the list reuse its last entry; an empty list means the
    original mortgage amount. No policy means a breakage-fee regime, so the
    allowance is 0.
    """
    if policy is None or comparison_period_years <= 0:
        return 0.0

    total = 0.0
    for year in range(comparison_period_years):
        if year < len(yearly_balances):
            balance = yearly_balances[year]
        elif yearly_balances:
            balance = yearly_balances[-1]
        else:
            balance = mortgage_amount
        total += _yearly_allowance(policy, mortgage_amount, monthly_payment, balance)
    return max(0.0, total)
