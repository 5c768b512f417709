import math
from dataclasses import replace
from typing import List, Optional

import numpy as np

from mortgage_breakeven.config import DEFAULT_VALUES, EngineConfig
from mortgage_breakeven.exceptions import DomainError, InvalidInputError
from mortgage_breakeven.finance.mortgage import MIN_ANNUAL_RATE_PERCENT, generate_schedule
from mortgage_breakeven.finance.taxes import stamp_duty
from mortgage_breakeven.logging import get_logger
from mortgage_breakeven.models import (
    EquityBreakevenDetails,
    MonthlyComparison,
    NetPositionBreakevenDetails,
    RentVsBuyInputs,
    RentVsBuyResult,
    SaleBreakevenDetails,
    YearlyComparison,
)

logger = get_logger(__name__)

_RATE_FIELDS = (
    "mortgage_rate",
    "rent_inflation_rate",
    "home_appreciation_rate",
    "maintenance_rate",
    "opportunity_cost_rate",
    "sale_cost_rate",
    "service_charge_increase",
)


def _with_defaults(inputs: RentVsBuyInputs) -> RentVsBuyInputs:
    """Fill every optional input left as None from DEFAULT_VALUES."""
    defaults = DEFAULT_VALUES["rent_vs_buy"]
    missing = {
        name: value
        for name, value in defaults.items()
        if getattr(inputs, name) is None
    }
    return replace(inputs, **missing) if missing else inputs


def _validate(inputs: RentVsBuyInputs) -> None:
    if inputs.mortgage_term_months <= 0:
        raise InvalidInputError("mortgage_term_months must be > 0")
    if inputs.property_value < 0 or inputs.deposit < 0:
        raise InvalidInputError("property value and deposit must be >= 0")
    if inputs.deposit > inputs.property_value:
        raise InvalidInputError("deposit cannot exceed the property value")
    if inputs.current_monthly_rent < 0:
        raise InvalidInputError("current_monthly_rent must be >= 0")
    for name in _RATE_FIELDS:
        if getattr(inputs, name) < MIN_ANNUAL_RATE_PERCENT:
            raise InvalidInputError(f"{name} is below {MIN_ANNUAL_RATE_PERCENT}%")


def _check_finite(rows: List[YearlyComparison]) -> None:
    values = np.array(
        [
            (
                r.home_value,
                r.mortgage_balance,
                r.equity,
                r.sale_costs,
                r.cumulative_rent_cost,
                r.cumulative_buying_cost,
                r.invested_savings_value,
            )
            for r in rows
        ],
        dtype=float,
    )
    if values.size and not np.isfinite(values).all():
        logger.warning("Rent vs buy projection produced non-finite values")
        raise DomainError("rent vs buy projection is not finite for these rates")


def calculate_rent_vs_buy_breakeven(
    inputs: RentVsBuyInputs, config: Optional[EngineConfig] = None
) -> RentVsBuyResult:
    """Simulate owning against renting-and-investing over the mortgage term.

    Owner's position at month t: equity less the cost of selling at t.
    Renter's position: upfront costs plus ``invested_savings_value`` less rent
    paid so far. The renter invests the upfront costs and, each month, the
    ownership outlay minus rent, compounding at the opportunity cost rate;
    ``invested_savings_value`` is that pot less the upfront costs plus the
    rent paid, so rent never earns a return. Breakeven is the first month
    the owner's position is ahead.

    When the breakeven is reported at a year-end, ``breakeven_details``
    describes that year-end.

    Monthly precision is reported while the breakeven falls before
    ``config.monthly_precision_months``; later breakevens are reported at the
    first year-end snapshot where owning is ahead.
    """
    config = config or EngineConfig()
    inputs = _with_defaults(inputs)
    _validate(inputs)

    term = inputs.mortgage_term_months
    mortgage_amount = inputs.property_value - inputs.deposit
    schedule = generate_schedule(mortgage_amount, inputs.mortgage_rate, term)
    payment = schedule[0].payment

    duty = stamp_duty(inputs.property_value) if inputs.stamp_duty is None else inputs.stamp_duty
    purchase_costs = duty + inputs.legal_fees
    upfront_costs = inputs.deposit + purchase_costs

    growth = 1 + inputs.home_appreciation_rate / 100
    opp_m = (1 + inputs.opportunity_cost_rate / 100) ** (1 / 12) - 1

    rent = inputs.current_monthly_rent
    service_charge = inputs.service_charge
    cumulative_rent = 0.0
    cumulative_outflow = upfront_costs
    invested_pot = upfront_costs  # upfront costs, then each month's outlay less rent

    breakeven_exact: Optional[int] = None
    breakeven_details: Optional[NetPositionBreakevenDetails] = None
    breakeven_year_end: Optional[int] = None
    year_end_details: Optional[NetPositionBreakevenDetails] = None
    sale_month: Optional[int] = None
    sale_details: Optional[SaleBreakevenDetails] = None
    equity_month: Optional[int] = None
    equity_details: Optional[EquityBreakevenDetails] = None
    yearly: List[YearlyComparison] = []
    monthly: List[MonthlyComparison] = []

    for period in schedule:
        month = period.month
        # Rent and service charge step up at the start of each new year
        if month > 1 and (month - 1) % 12 == 0:
            rent *= 1 + inputs.rent_inflation_rate / 100
            service_charge *= 1 + inputs.service_charge_increase / 100
        cumulative_rent += rent

        try:
            home_value = inputs.property_value * growth ** (month / 12)
        except OverflowError as exc:
            raise DomainError("home value overflows for this appreciation rate") from exc
        maintenance = home_value * (inputs.maintenance_rate / 100) / 12
        outlay = period.payment + maintenance + service_charge
        cumulative_outflow += outlay
        # Only what is left after rent gets invested
        invested_pot = invested_pot * (1 + opp_m) + (outlay - rent)
        invested_savings = invested_pot - upfront_costs + cumulative_rent

        balance = max(0.0, period.balance)
        equity = max(0.0, home_value - balance)
        sale_costs = home_value * (inputs.sale_cost_rate / 100)

        owner_position = equity - sale_costs
        renter_position = upfront_costs + invested_savings - cumulative_rent
        owner_ahead = owner_position > renter_position

        position = NetPositionBreakevenDetails(
            owner_position=owner_position,
            renter_position=renter_position,
            equity=equity,
            invested_savings_value=invested_savings,
            cumulative_rent_cost=cumulative_rent,
        )
        if breakeven_exact is None and owner_ahead:
            breakeven_exact = month
            breakeven_details = position

        sale_proceeds = home_value - sale_costs - balance
        if sale_month is None and sale_proceeds > upfront_costs:
            sale_month = month
            sale_details = SaleBreakevenDetails(
                home_value=home_value,
                sale_costs=sale_costs,
                mortgage_balance=balance,
                sale_proceeds=sale_proceeds,
                upfront_costs=upfront_costs,
            )

        if equity_month is None and equity > upfront_costs:
            equity_month = month
            equity_details = EquityBreakevenDetails(
                home_value=home_value,
                mortgage_balance=balance,
                equity=equity,
                upfront_costs=upfront_costs,
            )

        snapshot = dict(
            home_value=home_value,
            mortgage_balance=balance,
            equity=equity,
            sale_costs=sale_costs,
            cumulative_rent_cost=cumulative_rent,
            cumulative_buying_cost=cumulative_outflow + sale_costs,
            invested_savings_value=invested_savings,
        )
        if month <= config.monthly_breakdown_months:
            monthly.append(MonthlyComparison(month=month, **snapshot))
        if month % 12 == 0 or month == term:
            yearly.append(YearlyComparison(year=math.ceil(month / 12), **snapshot))
            if breakeven_year_end is None and owner_ahead:
                breakeven_year_end = month
                year_end_details = position

    _check_finite(yearly)

    breakeven_month = breakeven_exact
    if (
        breakeven_exact is not None
        and breakeven_exact >= config.monthly_precision_months
        and breakeven_year_end is not None
    ):
        breakeven_month = breakeven_year_end
        breakeven_details = year_end_details
    breakeven_year = math.ceil(breakeven_month / 12) if breakeven_month is not None else None

    logger.debug(
        "Rent vs buy: property %.0f, deposit %.0f, %d months at %s%% -> breakeven %s",
        inputs.property_value, inputs.deposit, term, inputs.mortgage_rate, breakeven_month,
    )

    return RentVsBuyResult(
        breakeven_month=breakeven_month,
        breakeven_year=breakeven_year,
        breakeven_details=breakeven_details,
        sale_breakeven_month=sale_month,
        sale_breakeven_details=sale_details,
        equity_recovery_month=equity_month,
        equity_recovery_details=equity_details,
        monthly_mortgage_payment=payment,
        mortgage_amount=mortgage_amount,
        deposit=inputs.deposit,
        stamp_duty=duty,
        legal_fees=inputs.legal_fees,
        purchase_costs=purchase_costs,
        upfront_costs=upfront_costs,
        yearly_breakdown=yearly,
        monthly_breakdown=monthly,
    )
