"""Tests for appreciation sensitivity and tabular views."""

from dataclasses import replace

import pandas as pd
import pytest

from mortgage_breakeven.analytics.analysis import (
    appreciation_sensitivity,
    required_appreciation_rate,
)
from mortgage_breakeven.analytics.cashback import calculate_cashback_breakeven
from mortgage_breakeven.analytics.remortgage import calculate_remortgage_breakeven
from mortgage_breakeven.analytics.simulation import calculate_rent_vs_buy_breakeven
from mortgage_breakeven.analytics.trajectories import (
    cashback_dataframe,
    remortgage_dataframe,
    rent_vs_buy_dataframe,
    schedule_dataframe,
)
from mortgage_breakeven.config import EngineConfig
from mortgage_breakeven.finance.mortgage import generate_schedule
from mortgage_breakeven.models import (
    CashbackBreakevenInputs,
    CashbackOption,
    RemortgageInputs,
    RentVsBuyInputs,
)


def _exact_breakeven(inputs: RentVsBuyInputs, rate: float):
    config = EngineConfig(monthly_precision_months=inputs.mortgage_term_months + 1)
    return calculate_rent_vs_buy_breakeven(
        replace(inputs, home_appreciation_rate=rate), config
    ).breakeven_month


class TestRequiredAppreciationRate:
    """Tests for the appreciation bisection."""

    def test_finds_threshold(self, zero_rate_purchase: RentVsBuyInputs) -> None:
        rate = required_appreciation_rate(zero_rate_purchase, within_months=24)
        assert rate is not None
        assert 0 < rate < 20
        assert _exact_breakeven(zero_rate_purchase, rate) <= 24
        below = _exact_breakeven(zero_rate_purchase, rate - 0.01)
        assert below is None or below > 24

    def test_lower_bound_already_enough(self, zero_rate_purchase: RentVsBuyInputs) -> None:
        assert required_appreciation_rate(zero_rate_purchase, lo=0.0) == 0.0

    def test_unreachable(self, zero_rate_purchase: RentVsBuyInputs) -> None:
        no_rent = replace(zero_rate_purchase, current_monthly_rent=0)
        assert required_appreciation_rate(no_rent, lo=-5.0, hi=0.0) is None


class TestAppreciationSensitivity:
    """Tests for the sensitivity table."""

    def test_columns_and_values(self, zero_rate_purchase: RentVsBuyInputs) -> None:
        df = appreciation_sensitivity(zero_rate_purchase, [0.0, 5.0])
        assert list(df.columns) == [
            "Appreciation (%)",
            "Breakeven Month",
            "Sale Breakeven Month",
            "Equity Recovery Month",
        ]
        assert df["Breakeven Month"].dtype == "Int64"
        assert df.loc[0, "Breakeven Month"] == 32
        assert df.loc[0, "Sale Breakeven Month"] == 26
        assert df.loc[0, "Equity Recovery Month"] == 26
        assert df.loc[1, "Breakeven Month"] < 32

    def test_missing_breakeven_is_na(self, zero_rate_purchase: RentVsBuyInputs) -> None:
        no_rent = replace(zero_rate_purchase, current_monthly_rent=0)
        df = appreciation_sensitivity(no_rent, [0.0])
        assert pd.isna(df.loc[0, "Breakeven Month"])


class TestTrajectories:
    """Tests for DataFrame views of results."""

    def test_schedule_dataframe(self) -> None:
        df = schedule_dataframe(generate_schedule(120_000, 0.0, 120))
        assert list(df.columns) == ["Month", "Payment", "Interest", "Principal", "Balance"]
        assert len(df) == 120
        assert df["Balance"].iloc[-1] == 0.0

    def test_rent_vs_buy_yearly(self, zero_rate_purchase: RentVsBuyInputs) -> None:
        df = rent_vs_buy_dataframe(calculate_rent_vs_buy_breakeven(zero_rate_purchase))
        assert df["Year"].tolist() == list(range(1, 10))
        assert df.loc[0, "Owner_Position"] == pytest.approx(32_000)
        assert df.loc[0, "Renter_Position"] == pytest.approx(47_400)

    def test_rent_vs_buy_monthly(self, zero_rate_purchase: RentVsBuyInputs) -> None:
        df = rent_vs_buy_dataframe(
            calculate_rent_vs_buy_breakeven(zero_rate_purchase), monthly=True
        )
        assert "Month" in df.columns
        assert len(df) == 48
        # Owner first pulls ahead in month 32
        ahead = df[df["Owner_Position"] > df["Renter_Position"]]
        assert ahead["Month"].iloc[0] == 32

    def test_remortgage(self, remortgage_inputs: RemortgageInputs) -> None:
        df = remortgage_dataframe(calculate_remortgage_breakeven(remortgage_inputs))
        assert len(df) == 20
        assert (df["Interest_Saved"] > 0).all()

    def test_cashback_with_projection(self) -> None:
        inputs = CashbackBreakevenInputs(
            mortgage_amount=300_000,
            mortgage_term_months=300,
            options=[
                CashbackOption("A", 3.5, "percentage", 2, fixed_period_years=3),
                CashbackOption("B", 3.25, "percentage", 0, fixed_period_years=3),
            ],
        )
        result = calculate_cashback_breakeven(inputs)
        df = cashback_dataframe(result, include_projection=True)
        assert len(df) == 8
        assert df["Projection"].sum() == 2
        assert set(df["Option"]) == {"A", "B"}
        assert len(cashback_dataframe(result)) == 6
