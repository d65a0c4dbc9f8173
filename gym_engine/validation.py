"""
Input checks for assumption sets, expense lines and investments.

The simulation itself trusts its inputs; the presentation layer calls
``validate_inputs`` before running it so bad form values surface as a list
of readable problems instead of odd numbers.
"""
import math
from typing import Sequence

from .errors import AssumptionsError
from .models import Assumptions, ExpenseItem, InvestmentItem

PERCENT_FIELDS = (
    "retention_rate", "annual_price_increase", "pt_penetration", "pt_share",
    "annual_expense_increase", "tax_rate", "discount_rate", "reinvestment_rate",
    "financing_rate", "salvage_rate",
)
MONEY_FIELDS = ("subscription_price", "pt_price")


def _finite(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _check_unique(items, label: str, errs: list[str]):
    seen = set()
    for item in items:
        if item.id in seen:
            errs.append(f"duplicate {label} id '{item.id}'")
        seen.add(item.id)


def assumption_problems(a: Assumptions) -> list[str]:
    errs = []

    for name in PERCENT_FIELDS + MONEY_FIELDS:
        value = getattr(a, name)
        if not _finite(value):
            errs.append(f"{name} must be a finite number, got {value!r}")
        elif name in PERCENT_FIELDS and not 0 <= value <= 100:
            errs.append(f"{name} must be between 0 and 100, got {value}")
        elif value < 0:
            errs.append(f"{name} must be non-negative, got {value}")

    if not _finite(a.monthly_target) or a.monthly_target < 0:
        errs.append(f"monthly_target must be a non-negative number, got {a.monthly_target!r}")
    for i, target in enumerate(a.target_overrides, start=1):
        if not _finite(target) or target < 0:
            errs.append(f"target for month {i} must be a non-negative number, got {target!r}")
    if not _finite(a.max_capacity) or a.max_capacity <= 0:
        errs.append(f"max_capacity must be positive, got {a.max_capacity!r}")
    if not isinstance(a.project_life, int) or a.project_life < 1:
        errs.append(f"project_life must be a whole number of years >= 1, got {a.project_life!r}")

    loan = a.loan
    if loan.enabled:
        if not _finite(loan.principal) or loan.principal <= 0:
            errs.append(f"loan principal must be positive, got {loan.principal!r}")
        if not isinstance(loan.tenure_years, int) or loan.tenure_years < 1:
            errs.append(f"loan tenure must be a whole number of years >= 1, got {loan.tenure_years!r}")
        if not _finite(loan.annual_rate) or not 0 <= loan.annual_rate <= 100:
            errs.append(f"loan annual_rate must be between 0 and 100, got {loan.annual_rate!r}")

    return errs


def validate_inputs(assumptions: Assumptions,
                    expenses: Sequence[ExpenseItem],
                    investments: Sequence[InvestmentItem]) -> None:
    """Raise AssumptionsError listing every problem found"""
    errs = assumption_problems(assumptions)

    for e in expenses:
        if not _finite(e.monthly_amount) or e.monthly_amount < 0:
            errs.append(f"expense '{e.name}' must have a non-negative amount, got {e.monthly_amount!r}")
    _check_unique(expenses, "expense", errs)

    for inv in investments:
        if not _finite(inv.cost) or inv.cost < 0:
            errs.append(f"investment '{inv.name}' must have a non-negative cost, got {inv.cost!r}")
        if not _finite(inv.rate) or not 0 <= inv.rate <= 100:
            errs.append(f"investment '{inv.name}' rate must be between 0 and 100, got {inv.rate!r}")
    _check_unique(investments, "investment", errs)

    if errs:
        raise AssumptionsError(errs)
