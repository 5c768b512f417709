"""Pytest configuration and fixtures."""

import pytest

from mortgage_breakeven.models import (
    CashbackBreakevenInputs,
    CashbackOption,
    RemortgageInputs,
    RentVsBuyInputs,
)


@pytest.fixture
def zero_rate_purchase() -> RentVsBuyInputs:
    """Hand-checkable purchase: interest-free loan, no growth, no running costs.

    Owner position is 20,000 + 1,000t and the renter position 45,000 + 200t,
    so owning first pulls ahead in month 32.
    """
    return RentVsBuyInputs(
        property_value=120_000,
        deposit=20_000,
        mortgage_term_months=100,
        mortgage_rate=0.0,
        current_monthly_rent=800,
        legal_fees=25_000,
        rent_inflation_rate=0.0,
        home_appreciation_rate=0.0,
        maintenance_rate=0.0,
        opportunity_cost_rate=0.0,
        sale_cost_rate=0.0,
        service_charge=0.0,
        service_charge_increase=0.0,
        stamp_duty=0.0,
    )


@pytest.fixture
def dublin_purchase() -> RentVsBuyInputs:
    """Typical Dublin apartment purchase with market defaults for the rest."""
    return RentVsBuyInputs(
        property_value=400_000,
        deposit=40_000,
        mortgage_term_months=360,
        mortgage_rate=4.0,
        current_monthly_rent=2_200,
    )


@pytest.fixture
def remortgage_inputs() -> RemortgageInputs:
    return RemortgageInputs(
        outstanding_balance=250_000,
        current_rate=4.5,
        new_rate=3.8,
        remaining_term_months=240,
        legal_fees=1_350,
        cashback=0,
        erc=0,
    )


@pytest.fixture
def cashback_inputs() -> CashbackBreakevenInputs:
    return CashbackBreakevenInputs(
        mortgage_amount=300_000,
        mortgage_term_months=300,
        options=[
            CashbackOption(
                label="Option 1",
                rate=3.5,
                cashback_type="percentage",
                cashback_value=2,
            ),
            CashbackOption(
                label="Option 2",
                rate=3.3,
                cashback_type="flat",
                cashback_value=3_000,
            ),
        ],
    )
