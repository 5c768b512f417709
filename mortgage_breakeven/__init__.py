"""Amortization and breakeven engines for home-loan decisions."""

from mortgage_breakeven.analytics.cashback import calculate_cashback_breakeven
from mortgage_breakeven.analytics.remortgage import calculate_remortgage_breakeven
from mortgage_breakeven.analytics.simulation import calculate_rent_vs_buy_breakeven
from mortgage_breakeven.exceptions import BreakevenError, DomainError, InvalidInputError
from mortgage_breakeven.finance.mortgage import generate_schedule, monthly_payment
from mortgage_breakeven.finance.overpayments import calculate_total_overpayment_allowance
from mortgage_breakeven.logging import configure_logging, setup_logging

__version__ = "0.1.0"

__all__ = [
    "BreakevenError",
    "DomainError",
    "InvalidInputError",
    "calculate_cashback_breakeven",
    "calculate_remortgage_breakeven",
    "calculate_rent_vs_buy_breakeven",
    "calculate_total_overpayment_allowance",
    "configure_logging",
    "generate_schedule",
    "monthly_payment",
    "setup_logging",
]
