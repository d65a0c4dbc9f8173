"""Financial calculations for loan amortization and DSCR"""
from dataclasses import dataclass
from typing import Optional

from .models import LoanTerms


@dataclass
class LoanPeriod:
    payment: float
    interest: float
    principal: float
    balance: float


@dataclass
class LoanSchedule:
    emi: float
    periods: list[LoanPeriod]

    def period(self, month: int) -> LoanPeriod:
        """Loan activity for 1-based operating ``month``"""
        return self.periods[month - 1]


def monthly_payment(principal: float, annual_rate: float, tenure_years: int) -> float:
    """Calculate the equated monthly installment for an amortizing loan"""
    r = annual_rate / 12.0 / 100.0
    n = tenure_years * 12
    if n <= 0:
        return 0.0
    if r == 0:
        return principal / n
    return principal * (r * (1 + r)**n) / ((1 + r)**n - 1)


def amortization_schedule(principal: float, annual_rate: float, tenure_years: int, months: int) -> list[LoanPeriod]:
    """Generate the amortization schedule for the first ``months`` months"""
    pmt = monthly_payment(principal, annual_rate, tenure_years)
    n = tenure_years * 12
    r = annual_rate / 12.0 / 100.0
    schedule = []
    bal = principal

    for t in range(1, months + 1):
        if t > n or bal <= 0:
            schedule.append(LoanPeriod(0.0, 0.0, 0.0, 0.0))
            bal = 0.0
            continue
        interest = bal * r
        principal_pay = min(max(0.0, pmt - interest), bal)
        if t == n:
            # final installment settles any floating-point residue
            principal_pay = bal
        bal = max(0.0, bal - principal_pay)
        schedule.append(LoanPeriod(
            payment=interest + principal_pay,
            interest=interest,
            principal=principal_pay,
            balance=bal,
        ))

    return schedule


def compute_loan(terms: LoanTerms, months: int) -> LoanSchedule:
    """EMI and schedule for the loan terms; a disabled loan is all zeros"""
    if not terms.enabled or terms.principal <= 0:
        return LoanSchedule(emi=0.0, periods=[LoanPeriod(0.0, 0.0, 0.0, 0.0) for _ in range(months)])
    emi = monthly_payment(terms.principal, terms.annual_rate, terms.tenure_years)
    periods = amortization_schedule(terms.principal, terms.annual_rate, terms.tenure_years, months)
    return LoanSchedule(emi=emi, periods=periods)


def dscr(ebitda: float, debt_service: float) -> Optional[float]:
    """Calculate Debt Service Coverage Ratio; None when nothing is due"""
    return (ebitda / debt_service) if debt_service > 1e-9 else None
