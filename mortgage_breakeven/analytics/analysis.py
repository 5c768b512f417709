from dataclasses import replace
from typing import Iterable, Optional

import pandas as pd

from mortgage_breakeven.config import EngineConfig
from mortgage_breakeven.models import RentVsBuyInputs, RentVsBuyResult

# Import simulation function for breakeven calculations
from mortgage_breakeven.analytics.simulation import calculate_rent_vs_buy_breakeven


def _exact(inputs: RentVsBuyInputs, config: Optional[EngineConfig]) -> RentVsBuyResult:
    """Run the simulation with month precision across the whole term."""
    config = config or EngineConfig()
    exact_config = replace(config, monthly_precision_months=inputs.mortgage_term_months + 1)
    return calculate_rent_vs_buy_breakeven(inputs, exact_config)


def required_appreciation_rate(
    inputs: RentVsBuyInputs,
    within_months: Optional[int] = None,
    lo: float = -10.0,
    hi: float = 20.0,
    tol: float = 1e-4,
    iters: int = 60,
    config: Optional[EngineConfig] = None,
) -> Optional[float]:
    """Lowest annual home appreciation (%) at which owning breaks even within ``within_months``.

    Bisection on [lo, hi]; returns None if even ``hi`` never breaks even in
    time, and ``lo`` if breakeven is already reached at the bottom of the
    bracket.
    """
    horizon = within_months or inputs.mortgage_term_months

    def reaches(rate: float) -> bool:
        res = _exact(replace(inputs, home_appreciation_rate=rate), config)
        return res.breakeven_month is not None and res.breakeven_month <= horizon

    if not reaches(hi):
        return None
    if reaches(lo):
        return lo

    a, b = lo, hi
    for _ in range(iters):
        if b - a < tol:
            break
        m = 0.5 * (a + b)
        if reaches(m):
            b = m
        else:
            a = m
    return b


def appreciation_sensitivity(
    inputs: RentVsBuyInputs,
    rates: Iterable[float],
    config: Optional[EngineConfig] = None,
) -> pd.DataFrame:
    """
    Build a DataFrame showing how the three breakeven months move as the
    annual home appreciation rate varies, using the current inputs for
    everything else. Missing breakevens are <NA>.
    """
    rate_vals = []
    net_vals = []
    sale_vals = []
    equity_vals = []

    for rate in rates:
        res = _exact(replace(inputs, home_appreciation_rate=rate), config)
        rate_vals.append(rate)
        net_vals.append(res.breakeven_month)
        sale_vals.append(res.sale_breakeven_month)
        equity_vals.append(res.equity_recovery_month)

    return pd.DataFrame(
        {
            "Appreciation (%)": rate_vals,
            "Breakeven Month": pd.array(net_vals, dtype="Int64"),
            "Sale Breakeven Month": pd.array(sale_vals, dtype="Int64"),
            "Equity Recovery Month": pd.array(equity_vals, dtype="Int64"),
        }
    )
