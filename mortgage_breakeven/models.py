from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class LoanTerms:
    principal: float
    annual_rate_percent: float  # percentage, e.g. 3.5
    term_months: int


@dataclass(frozen=True)
class AmortizationPeriod:
    month: int
    payment: float
    interest: float
    principal: float
    balance: float


# ------------------------- Rent vs buy -------------------------

@dataclass(frozen=True)
class RentVsBuyInputs:
    property_value: float
    deposit: float
    mortgage_term_months: int
    mortgage_rate: float  # percentage
    current_monthly_rent: float
    legal_fees: Optional[float] = None
    rent_inflation_rate: Optional[float] = None  # percentage
    home_appreciation_rate: Optional[float] = None  # percentage
    maintenance_rate: Optional[float] = None  # percentage of home value per year
    opportunity_cost_rate: Optional[float] = None  # percentage
    sale_cost_rate: Optional[float] = None  # percentage of sale price
    service_charge: Optional[float] = None  # monthly
    service_charge_increase: Optional[float] = None  # percentage
    stamp_duty: Optional[float] = None  # override; None = banded calculation


@dataclass(frozen=True)
class YearlyComparison:
    year: int
    home_value: float
    mortgage_balance: float
    equity: float
    sale_costs: float
    cumulative_rent_cost: float
    cumulative_buying_cost: float
    invested_savings_value: float

    @property
    def owner_position(self) -> float:
        """What the owner walks away with if they sold at this point."""
        return self.equity - self.sale_costs


@dataclass(frozen=True)
class MonthlyComparison:
    month: int
    home_value: float
    mortgage_balance: float
    equity: float
    sale_costs: float
    cumulative_rent_cost: float
    cumulative_buying_cost: float
    invested_savings_value: float

    @property
    def owner_position(self) -> float:
        return self.equity - self.sale_costs


@dataclass(frozen=True)
class NetPositionBreakevenDetails:
    owner_position: float  # equity - sale costs
    renter_position: float  # upfront costs + invested savings - rent paid
    equity: float
    invested_savings_value: float
    cumulative_rent_cost: float


@dataclass(frozen=True)
class SaleBreakevenDetails:
    home_value: float
    sale_costs: float
    mortgage_balance: float
    sale_proceeds: float
    upfront_costs: float


@dataclass(frozen=True)
class EquityBreakevenDetails:
    home_value: float
    mortgage_balance: float
    equity: float
    upfront_costs: float


@dataclass(frozen=True)
class RentVsBuyResult:
    breakeven_month: Optional[int]
    breakeven_year: Optional[int]
    breakeven_details: Optional[NetPositionBreakevenDetails]
    sale_breakeven_month: Optional[int]
    sale_breakeven_details: Optional[SaleBreakevenDetails]
    equity_recovery_month: Optional[int]
    equity_recovery_details: Optional[EquityBreakevenDetails]
    monthly_mortgage_payment: float
    mortgage_amount: float
    deposit: float
    stamp_duty: float
    legal_fees: float
    purchase_costs: float  # stamp duty + legal fees
    upfront_costs: float  # deposit + purchase costs
    yearly_breakdown: List[YearlyComparison] = field(default_factory=list)
    monthly_breakdown: List[MonthlyComparison] = field(default_factory=list)

    @property
    def breaks_even(self) -> bool:
        return self.breakeven_month is not None


# ------------------------- Remortgage -------------------------

@dataclass(frozen=True)
class RemortgageInputs:
    outstanding_balance: float
    current_rate: float  # percentage
    new_rate: float  # percentage
    remaining_term_months: int
    legal_fees: Optional[float] = None
    cashback: float = 0.0
    erc: float = 0.0  # early repayment charge
    comparison_period_months: Optional[int] = None


@dataclass(frozen=True)
class RemortgageYearlyComparison:
    year: int
    interest_paid_current: float
    interest_paid_new: float
    interest_saved: float
    remaining_balance_current: float
    remaining_balance_new: float
    cumulative_savings: float
    net_savings: float
    balances: Tuple[float, float]  # (current, new)


@dataclass(frozen=True)
class RemortgageMonthlyComparison:
    month: int
    interest_paid_current: float
    interest_paid_new: float
    interest_saved: float
    remaining_balance_current: float
    remaining_balance_new: float
    cumulative_savings: float
    net_savings: float
    balances: Tuple[float, float]


@dataclass(frozen=True)
class RemortgageBreakevenDetails:
    monthly_savings: float
    breakeven_months: int
    switching_costs: float
    cumulative_savings_at_breakeven: float


@dataclass(frozen=True)
class InterestSavingsDetails:
    total_interest_current: float
    total_interest_new: float
    interest_saved: float
    switching_costs: float
    net_benefit: float  # interest saved - switching costs


@dataclass(frozen=True)
class RemortgageResult:
    breakeven_months: Optional[int]  # None = never recovers switching costs
    breakeven_details: Optional[RemortgageBreakevenDetails]
    current_monthly_payment: float
    new_monthly_payment: float
    monthly_savings: float
    legal_fees: float
    cashback: float
    erc: float
    switching_costs: float  # legal fees + erc - cashback
    comparison_period_months: int
    year_one_savings: float
    total_savings: float
    interest_savings_details: InterestSavingsDetails
    yearly_breakdown: List[RemortgageYearlyComparison] = field(default_factory=list)
    monthly_breakdown: List[RemortgageMonthlyComparison] = field(default_factory=list)

    @property
    def is_worthwhile(self) -> bool:
        return self.breakeven_months is not None


# ------------------------- Cashback comparison -------------------------

@dataclass(frozen=True)
class CashbackOption:
    label: str
    rate: float  # percentage
    cashback_type: str  # 'percentage' or 'flat'
    cashback_value: float
    cashback_cap: Optional[float] = None
    fixed_period_years: Optional[int] = None  # None or 0 = variable


@dataclass(frozen=True)
class CashbackBreakevenInputs:
    mortgage_amount: float
    mortgage_term_months: int
    options: Sequence[CashbackOption]


@dataclass(frozen=True)
class CashbackOptionResult:
    label: str
    rate: float
    fixed_period_years: int
    cashback_amount: float
    monthly_payment: float
    monthly_payment_diff: float  # vs the cheapest monthly payment
    interest_paid: float
    principal_paid: float
    balance_at_end: float
    net_cost: float  # interest paid - cashback
    adjusted_balance: float  # balance at end - cashback


@dataclass(frozen=True)
class BreakevenCrossing:
    option_a_index: int
    option_b_index: int
    option_a_label: str
    option_b_label: str
    breakeven_month: int
    description: str


@dataclass(frozen=True)
class CashbackYearlyComparison:
    year: int
    balances: List[float]
    net_costs: List[float]
    adjusted_balances: List[float]
    interest_paid: List[float]
    principal_paid: List[float]


@dataclass(frozen=True)
class CashbackMonthlyComparison:
    month: int
    balances: List[float]
    net_costs: List[float]
    adjusted_balances: List[float]
    interest_paid: List[float]
    principal_paid: List[float]


@dataclass(frozen=True)
class CashbackBreakevenResult:
    options: List[CashbackOptionResult]
    cheapest_net_cost_index: int
    cheapest_adjusted_balance_index: int
    cheapest_monthly_index: int
    savings_vs_worst: float
    comparison_period_months: int
    comparison_period_years: int
    all_variable: bool
    breakevens: List[BreakevenCrossing] = field(default_factory=list)
    yearly_breakdown: List[CashbackYearlyComparison] = field(default_factory=list)
    monthly_breakdown: List[CashbackMonthlyComparison] = field(default_factory=list)
    projection_year: Optional[CashbackYearlyComparison] = None

    @property
    def best_option(self) -> CashbackOptionResult:
        """Option with the lowest net cost over the comparison period."""
        return self.options[self.cheapest_net_cost_index]


# ------------------------- Overpayments -------------------------

@dataclass(frozen=True)
class OverpaymentPolicy:
    id: str
    label: str
    allowance_type: str  # 'percentage' or 'flat'
    allowance_value: float
    allowance_basis: str  # 'balance', 'original-balance' or 'payment'
    min_amount: Optional[float] = None  # monthly floor
