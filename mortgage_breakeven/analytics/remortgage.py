import math
from typing import List, Optional

from mortgage_breakeven.config import DEFAULT_VALUES, EngineConfig
from mortgage_breakeven.exceptions import InvalidInputError
from mortgage_breakeven.finance.mortgage import generate_schedule
from mortgage_breakeven.logging import get_logger
from mortgage_breakeven.models import (
    InterestSavingsDetails,
    RemortgageBreakevenDetails,
    RemortgageInputs,
    RemortgageMonthlyComparison,
    RemortgageResult,
    RemortgageYearlyComparison,
)

logger = get_logger(__name__)


def breakeven_month(monthly_savings: float, switching_costs: float) -> Optional[int]:
    """Smallest whole month t with ``monthly_savings * t >= switching_costs``.

    0 when switching costs nothing (or pays out), None when the savings never
    recover a positive cost.
    """
    if switching_costs <= 0:
        return 0
    if monthly_savings <= 0:
        return None
    t = math.ceil(switching_costs / monthly_savings)
    # ceil of a float quotient can overshoot by one
    if t > 1 and monthly_savings * (t - 1) >= switching_costs:
        t -= 1
    return t


def _resolve_comparison_period(inputs: RemortgageInputs) -> int:
    if inputs.comparison_period_months is None:
        return inputs.remaining_term_months
    if inputs.comparison_period_months <= 0:
        raise InvalidInputError("comparison_period_months must be > 0")
    return min(inputs.comparison_period_months, inputs.remaining_term_months)


def calculate_remortgage_breakeven(
    inputs: RemortgageInputs, config: Optional[EngineConfig] = None
) -> RemortgageResult:
    """Compare staying on the current rate against switching to a new one.

    Both paths amortise the same outstanding balance over the same remaining
    term. Switching costs are recovered by the difference in monthly
    payments; interest totals and the yearly breakdown cover only the
    comparison period.
    """
    config = config or EngineConfig()
    if inputs.outstanding_balance <= 0:
        raise InvalidInputError("outstanding_balance must be > 0")
    if inputs.remaining_term_months <= 0:
        raise InvalidInputError("remaining_term_months must be > 0")

    defaults = DEFAULT_VALUES["remortgage"]
    legal_fees = defaults["legal_fees"] if inputs.legal_fees is None else inputs.legal_fees
    horizon = _resolve_comparison_period(inputs)

    current = generate_schedule(
        inputs.outstanding_balance, inputs.current_rate, inputs.remaining_term_months
    )
    new = generate_schedule(
        inputs.outstanding_balance, inputs.new_rate, inputs.remaining_term_months
    )

    current_payment = current[0].payment
    new_payment = new[0].payment
    monthly_savings = current_payment - new_payment
    switching_costs = legal_fees + inputs.erc - inputs.cashback

    months_to_breakeven = breakeven_month(monthly_savings, switching_costs)
    if months_to_breakeven is not None and months_to_breakeven > inputs.remaining_term_months:
        months_to_breakeven = None

    breakeven_details = None
    if months_to_breakeven is not None:
        breakeven_details = RemortgageBreakevenDetails(
            monthly_savings=monthly_savings,
            breakeven_months=months_to_breakeven,
            switching_costs=switching_costs,
            cumulative_savings_at_breakeven=monthly_savings * months_to_breakeven,
        )

    interest_current = 0.0
    interest_new = 0.0
    yearly: List[RemortgageYearlyComparison] = []
    monthly: List[RemortgageMonthlyComparison] = []
    for cur, nxt in zip(current[:horizon], new[:horizon]):
        month = cur.month
        interest_current += cur.interest
        interest_new += nxt.interest
        cumulative_savings = monthly_savings * month
        row = dict(
            interest_paid_current=interest_current,
            interest_paid_new=interest_new,
            interest_saved=interest_current - interest_new,
            remaining_balance_current=cur.balance,
            remaining_balance_new=nxt.balance,
            cumulative_savings=cumulative_savings,
            net_savings=cumulative_savings - switching_costs,
            balances=(cur.balance, nxt.balance),
        )
        if month <= config.monthly_breakdown_months:
            monthly.append(RemortgageMonthlyComparison(month=month, **row))
        if month % 12 == 0 or month == horizon:
            yearly.append(RemortgageYearlyComparison(year=math.ceil(month / 12), **row))

    interest_saved = interest_current - interest_new
    details = InterestSavingsDetails(
        total_interest_current=interest_current,
        total_interest_new=interest_new,
        interest_saved=interest_saved,
        switching_costs=switching_costs,
        net_benefit=interest_saved - switching_costs,
    )

    logger.debug(
        "Remortgage %.0f: %s%% -> %s%%, saves %.2f/month, costs %.2f, breakeven %s",
        inputs.outstanding_balance, inputs.current_rate, inputs.new_rate,
        monthly_savings, switching_costs, months_to_breakeven,
    )

    return RemortgageResult(
        breakeven_months=months_to_breakeven,
        breakeven_details=breakeven_details,
        current_monthly_payment=current_payment,
        new_monthly_payment=new_payment,
        monthly_savings=monthly_savings,
        legal_fees=legal_fees,
        cashback=inputs.cashback,
        erc=inputs.erc,
        switching_costs=switching_costs,
        comparison_period_months=horizon,
        year_one_savings=monthly_savings * min(12, horizon) - switching_costs,
        total_savings=monthly_savings * horizon - switching_costs,
        interest_savings_details=details,
        yearly_breakdown=yearly,
        monthly_breakdown=monthly,
    )
