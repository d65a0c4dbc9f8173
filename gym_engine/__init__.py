"""Monthly simulation and valuation engine for a single-location gym."""
from .models import (
    Assumptions, LoanTerms, ExpenseItem, InvestmentItem, MonthlyRecord,
    MetricResult, ValuationMetrics, default_expenses, default_investments,
)
from .errors import (
    MetricStatus, GymModelError, DegenerateInputError, NonConvergenceError,
    AssumptionsError,
)
from .depreciation import depreciation_for_year, depreciation_schedule
from .finance import monthly_payment, amortization_schedule, compute_loan
from .projections import simulate, yearly_summary, break_even_month
from .metrics import valuation_metrics, irr, mirr, npv
from .validation import validate_inputs

__all__ = [
    "Assumptions", "LoanTerms", "ExpenseItem", "InvestmentItem", "MonthlyRecord",
    "MetricResult", "ValuationMetrics", "default_expenses", "default_investments",
    "MetricStatus", "GymModelError", "DegenerateInputError", "NonConvergenceError",
    "AssumptionsError",
    "depreciation_for_year", "depreciation_schedule",
    "monthly_payment", "amortization_schedule", "compute_loan",
    "simulate", "yearly_summary", "break_even_month",
    "valuation_metrics", "irr", "mirr", "npv",
    "validate_inputs",
]
