"""Tabular views of engine results for charting callers.

Each function reads an immutable result object and returns a fresh
DataFrame; nothing here feeds back into the calculations.
"""

from typing import Sequence

import pandas as pd

from mortgage_breakeven.models import (
    AmortizationPeriod,
    CashbackBreakevenResult,
    RemortgageResult,
    RentVsBuyResult,
)


def schedule_dataframe(schedule: Sequence[AmortizationPeriod]) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "Month": [p.month for p in schedule],
            "Payment": [p.payment for p in schedule],
            "Interest": [p.interest for p in schedule],
            "Principal": [p.principal for p in schedule],
            "Balance": [p.balance for p in schedule],
        }
    )


def rent_vs_buy_dataframe(result: RentVsBuyResult, monthly: bool = False) -> pd.DataFrame:
    """Owner vs renter trajectory, one row per year (or per month for the early breakdown).

    Owner_Position is equity net of sale costs; Renter_Position is upfront
    costs plus invested savings less rent paid, the same quantities the
    breakeven search compares.
    """
    rows = result.monthly_breakdown if monthly else result.yearly_breakdown
    index_name = "Month" if monthly else "Year"
    upfront = result.upfront_costs
    return pd.DataFrame(
        {
            index_name: [r.month if monthly else r.year for r in rows],
            "Home_Value": [r.home_value for r in rows],
            "Mortgage_Balance": [r.mortgage_balance for r in rows],
            "Equity": [r.equity for r in rows],
            "Cumulative_Rent": [r.cumulative_rent_cost for r in rows],
            "Cumulative_Buying_Cost": [r.cumulative_buying_cost for r in rows],
            "Invested_Savings": [r.invested_savings_value for r in rows],
            "Owner_Position": [r.owner_position for r in rows],
            "Renter_Position": [
                upfront + r.invested_savings_value - r.cumulative_rent_cost for r in rows
            ],
        }
    )


def remortgage_dataframe(result: RemortgageResult) -> pd.DataFrame:
    rows = result.yearly_breakdown
    return pd.DataFrame(
        {
            "Year": [r.year for r in rows],
            "Interest_Current": [r.interest_paid_current for r in rows],
            "Interest_New": [r.interest_paid_new for r in rows],
            "Interest_Saved": [r.interest_saved for r in rows],
            "Balance_Current": [r.remaining_balance_current for r in rows],
            "Balance_New": [r.remaining_balance_new for r in rows],
            "Cumulative_Savings": [r.cumulative_savings for r in rows],
            "Net_Savings": [r.net_savings for r in rows],
        }
    )


def cashback_dataframe(result: CashbackBreakevenResult, include_projection: bool = False) -> pd.DataFrame:
    """Long-format yearly breakdown: one row per (year, option).

    The projection year, when asked for, is flagged so charts can draw it
    differently from the comparison period.
    """
    rows = list(result.yearly_breakdown)
    projected = set()
    if include_projection and result.projection_year is not None:
        rows.append(result.projection_year)
        projected.add(result.projection_year.year)

    records = []
    for row in rows:
        for i, option in enumerate(result.options):
            records.append(
                {
                    "Year": row.year,
                    "Option": option.label,
                    "Balance": row.balances[i],
                    "Net_Cost": row.net_costs[i],
                    "Adjusted_Balance": row.adjusted_balances[i],
                    "Interest_Paid": row.interest_paid[i],
                    "Principal_Paid": row.principal_paid[i],
                    "Projection": row.year in projected,
                }
            )
    return pd.DataFrame.from_records(
        records,
        columns=[
            "Year",
            "Option",
            "Balance",
            "Net_Cost",
            "Adjusted_Balance",
            "Interest_Paid",
            "Principal_Paid",
            "Projection",
        ],
    )
