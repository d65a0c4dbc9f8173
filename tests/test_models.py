"""Test assumption defaults and construction from UI values"""
import dataclasses
import pytest
from datetime import date

from gym_engine.models import Assumptions, LoanTerms, MonthlyRecord, default_expenses, default_investments


def test_defaults_match_reference_gym():
    a = Assumptions()
    assert a.monthly_target == 80
    assert a.subscription_price == 30000.0
    assert a.retention_rate == 40.0
    assert a.max_capacity == 1000
    assert a.project_life == 7
    assert a.months == 84
    assert a.start_date == date(2025, 4, 1)
    assert not a.loan.enabled
    assert a.month_zero_record and a.clamp_new_members and not a.include_salvage


def test_default_lists():
    assert abs(sum(e.monthly_amount for e in default_expenses()) - 1_645_196.4) < 1e-6
    assert sum(i.cost for i in default_investments()) == 40_000_000.0
    # factories return fresh lists
    assert default_expenses() is not default_expenses()


def test_assumptions_are_immutable():
    a = Assumptions()
    with pytest.raises(dataclasses.FrozenInstanceError):
        a.monthly_target = 10


def test_from_dict_with_loan_fields():
    a = Assumptions.from_dict({
        "monthly_target": 50,
        "discount_rate": 9.0,
        "loan_enabled": True,
        "loan_principal": 1_000_000.0,
        "loan_tenure_years": 3,
        "loan_annual_rate": 11.0,
        "unrelated": "ignored",
    })
    assert a.monthly_target == 50
    assert a.discount_rate == 9.0
    assert a.loan == LoanTerms(enabled=True, principal=1_000_000.0, tenure_years=3, annual_rate=11.0)
    assert a.subscription_price == Assumptions().subscription_price


def test_from_dict_accepts_loan_object():
    loan = LoanTerms(enabled=True, principal=5.0)
    assert Assumptions.from_dict({"loan": loan}).loan is loan


def test_target_for_month():
    a = Assumptions(monthly_target=20, target_overrides=(5, 6))
    assert a.target_for_month(1) == 5
    assert a.target_for_month(2) == 6
    assert a.target_for_month(3) == 20


def test_record_to_dict():
    r = MonthlyRecord(month_index=1, period=1, month="2025-04", year=0, total_members=80)
    d = r.to_dict()
    assert d["total_members"] == 80
    assert d["gross_margin_pct"] is None
