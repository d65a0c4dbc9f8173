from dataclasses import dataclass, field, fields, asdict
from datetime import date
from typing import Optional

from .errors import MetricStatus


@dataclass(frozen=True)
class LoanTerms:
    enabled: bool = False
    principal: float = 0.0
    tenure_years: int = 5
    annual_rate: float = 12.0      # % per year


@dataclass(frozen=True)
class Assumptions:
    # Growth
    monthly_target: int = 80            # target sales (new joiners) per month
    max_capacity: int = 1000
    retention_rate: float = 40.0        # % of a cohort renewing after 12 months
    target_overrides: tuple = ()        # per-month targets from month 1; later months use monthly_target

    # Pricing (INR)
    subscription_price: float = 30000.0
    annual_price_increase: float = 10.0  # %/yr, step per year
    pt_penetration: float = 7.0          # % of members buying personal training
    pt_price: float = 25000.0
    pt_share: float = 60.0               # % of PT revenue kept by the gym

    # Costs and tax
    annual_expense_increase: float = 10.0
    tax_rate: float = 30.0

    # Appraisal
    project_life: int = 7               # years
    discount_rate: float = 12.0
    reinvestment_rate: float = 8.0
    financing_rate: float = 12.0
    salvage_rate: float = 10.0          # % of total investment cost

    loan: LoanTerms = field(default_factory=LoanTerms)

    # Run options
    start_date: date = date(2025, 4, 1)  # first operating month
    month_zero_record: bool = True
    clamp_new_members: bool = True
    include_salvage: bool = False

    @property
    def months(self) -> int:
        return self.project_life * 12

    def target_for_month(self, month: int) -> int:
        """Target sales for 1-based operating ``month``"""
        if 0 < month <= len(self.target_overrides):
            return int(self.target_overrides[month - 1])
        return self.monthly_target

    @classmethod
    def from_dict(cls, values: dict) -> "Assumptions":
        """Build from a flat mapping; ``loan_*`` keys populate the loan terms."""
        names = {f.name for f in fields(cls)} - {"loan"}
        kwargs = {k: v for k, v in values.items() if k in names}
        loan_kwargs = {
            k[len("loan_"):]: v for k, v in values.items()
            if k.startswith("loan_") and k[len("loan_"):] in {f.name for f in fields(LoanTerms)}
        }
        if isinstance(values.get("loan"), LoanTerms):
            loan = values["loan"]
        else:
            loan = LoanTerms(**loan_kwargs)
        return cls(loan=loan, **kwargs)


@dataclass(frozen=True)
class ExpenseItem:
    id: str
    name: str
    monthly_amount: float


@dataclass(frozen=True)
class InvestmentItem:
    id: str
    name: str
    cost: float
    rate: float          # annual reducing-balance depreciation, %


def default_expenses() -> list[ExpenseItem]:
    """Monthly operating expense lines of the reference gym."""
    return [
        ExpenseItem("rent", "Rent", 720_000.0),
        ExpenseItem("salaries", "Staff salaries", 324_000.0),
        ExpenseItem("utilities", "Utilities & maintenance", 351_600.0),
        ExpenseItem("marketing", "Marketing", 177_600.0),
        ExpenseItem("misc", "Miscellaneous", 71_996.4),
    ]


def default_investments() -> list[InvestmentItem]:
    """Capital assets acquired at time zero."""
    return [
        InvestmentItem("building", "Building (Interiors)", 10_000_000.0, 5.0),
        InvestmentItem("machinery", "Machinery/Equipment", 20_000_000.0, 15.0),
        InvestmentItem("franchise", "Franchise", 3_000_000.0, 25.0),
        InvestmentItem("furniture", "Furniture & fixtures", 5_000_000.0, 10.0),
        InvestmentItem("computers", "Computers/Electronics", 1_500_000.0, 15.0),
        InvestmentItem("software", "Software", 500_000.0, 25.0),
    ]


@dataclass
class MonthlyRecord:
    month_index: int      # 0 = capital outlay, 1.. = operating months
    period: int           # position in the cash-flow series, used for discounting
    month: str            # YYYY-MM
    year: int             # elapsed year, 0-indexed

    # Membership
    target_sales: int = 0
    new_members: int = 0
    repeat_members: int = 0
    expired_members: int = 0
    total_members: int = 0
    start_members: int = 0
    pt_members: int = 0

    # P&L
    subscription_revenue: float = 0.0
    pt_revenue: float = 0.0
    total_revenue: float = 0.0
    expenses: float = 0.0
    gross_margin: float = 0.0
    gross_margin_pct: Optional[float] = None
    pt_sales_pct: Optional[float] = None
    depreciation: float = 0.0
    interest: float = 0.0
    ebitda: float = 0.0
    ebitda_pct: Optional[float] = None
    pbt: float = 0.0
    tax: float = 0.0
    pat: float = 0.0

    # Loan
    loan_emi: float = 0.0
    loan_interest: float = 0.0
    loan_principal: float = 0.0
    loan_balance: float = 0.0
    dscr: Optional[float] = None

    # Cash flow
    capital_outlay: float = 0.0
    salvage_inflow: float = 0.0
    fcf: float = 0.0
    fcf_pct: Optional[float] = None
    dcf: float = 0.0
    cumulative_fcf: float = 0.0
    cumulative_dcf: float = 0.0
    cumulative_npv: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class MetricResult:
    value: Optional[float]
    status: MetricStatus = MetricStatus.OK

    @property
    def ok(self) -> bool:
        return self.status is MetricStatus.OK

    @classmethod
    def undefined(cls, status: MetricStatus) -> "MetricResult":
        return cls(value=None, status=status)


@dataclass(frozen=True)
class ValuationMetrics:
    npv: float
    irr: MetricResult            # annual, %
    mirr: MetricResult           # annual, %
    payback_period: MetricResult             # years
    discounted_payback_period: MetricResult  # years
    basis: str = "monthly"
