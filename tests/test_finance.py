"""Test EMI, amortization schedule and DSCR"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from gym_engine.models import LoanTerms
from gym_engine.finance import monthly_payment, amortization_schedule, compute_loan, dscr

PRINCIPAL = 20_000_000.0


def test_emi_formula():
    """12% p.a. over 5 years: r = 1%/month, n = 60"""
    emi = monthly_payment(PRINCIPAL, 12.0, 5)
    r = 0.01
    expected = PRINCIPAL * r * (1 + r)**60 / ((1 + r)**60 - 1)
    assert abs(emi - expected) < 1e-6
    assert 444_000 < emi < 446_000, f"EMI {emi:,.2f} outside expected range"


def test_zero_rate_emi():
    assert monthly_payment(120_000.0, 0.0, 1) == 10_000.0
    sched = amortization_schedule(120_000.0, 0.0, 1, 12)
    assert all(abs(p.principal - 10_000.0) < 1e-9 for p in sched)
    assert all(p.interest == 0.0 for p in sched)
    assert sched[-1].balance == 0.0


def test_balance_hits_zero_at_tenure():
    sched = amortization_schedule(PRINCIPAL, 12.0, 5, 84)
    assert sched[59].balance == 0.0, f"Balance at month 60 should be 0, got {sched[59].balance}"

    # non-increasing and never negative
    prev = PRINCIPAL
    for i, p in enumerate(sched):
        assert p.balance >= 0.0
        assert p.balance <= prev + 1e-9, f"Balance rose in month {i + 1}"
        prev = p.balance

    # nothing due after tenure
    for p in sched[60:]:
        assert p.payment == 0.0 and p.interest == 0.0 and p.principal == 0.0 and p.balance == 0.0


def test_principal_sums_to_loan():
    sched = amortization_schedule(PRINCIPAL, 12.0, 5, 60)
    total_principal = sum(p.principal for p in sched)
    assert abs(total_principal - PRINCIPAL) < 1e-4


def test_emi_covers_principal_plus_interest():
    """EMI * n equals principal plus total interest paid"""
    loan = compute_loan(LoanTerms(enabled=True, principal=PRINCIPAL, tenure_years=5, annual_rate=12.0), 60)
    total_interest = sum(p.interest for p in loan.periods)
    assert abs(loan.emi * 60 - (PRINCIPAL + total_interest)) / PRINCIPAL < 1e-6


def test_first_period_split():
    sched = amortization_schedule(PRINCIPAL, 12.0, 5, 1)
    first = sched[0]
    assert abs(first.interest - 200_000.0) < 1e-6
    assert abs(first.principal - (monthly_payment(PRINCIPAL, 12.0, 5) - 200_000.0)) < 1e-6


def test_disabled_loan_is_all_zero():
    loan = compute_loan(LoanTerms(enabled=False, principal=PRINCIPAL), 24)
    assert loan.emi == 0.0
    assert len(loan.periods) == 24
    assert all(p.payment == p.interest == p.principal == p.balance == 0.0 for p in loan.periods)


def test_loan_shorter_than_horizon_pads_with_zeros():
    loan = compute_loan(LoanTerms(enabled=True, principal=1_000_000.0, tenure_years=1, annual_rate=9.0), 36)
    assert len(loan.periods) == 36
    assert loan.period(12).balance == 0.0
    assert loan.period(13).payment == 0.0


def test_dscr():
    assert dscr(150.0, 100.0) == 1.5
    assert dscr(-50.0, 100.0) == -0.5
    assert dscr(100.0, 0.0) is None
