import os
from dataclasses import dataclass

DEFAULT_VALUES = {
    "rent_vs_buy": {
        "legal_fees": 4000.0,
        "rent_inflation_rate": 2.0,  # percentage
        "home_appreciation_rate": 4.0,  # percentage
        "maintenance_rate": 1.0,  # percentage of home value per year
        "opportunity_cost_rate": 6.0,  # percentage
        "sale_cost_rate": 3.0,  # percentage of sale price
        "service_charge": 0.0,  # monthly
        "service_charge_increase": 0.0,  # percentage
    },
    "remortgage": {
        "legal_fees": 1350.0,
        "cashback": 0.0,
        "erc": 0.0,
    },
}

# Cashback comparisons accept between two and five options.
MIN_CASHBACK_OPTIONS = 2
MAX_CASHBACK_OPTIONS = 5


@dataclass
class EngineConfig:
    """Tunables shared by the breakeven engines."""

    monthly_breakdown_months: int = 48
    monthly_precision_months: int = 24
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Create config from environment variables."""
        return cls(
            monthly_breakdown_months=int(
                os.getenv("BREAKEVEN_MONTHLY_BREAKDOWN_MONTHS", "48")
            ),
            monthly_precision_months=int(
                os.getenv("BREAKEVEN_MONTHLY_PRECISION_MONTHS", "24")
            ),
            log_level=os.getenv("BREAKEVEN_LOG_LEVEL", "INFO"),
            log_format=os.getenv("BREAKEVEN_LOG_FORMAT", "standard"),
        )
