"""Monthly projections: membership cohorts, P&L and cash flow over the project life"""
import logging
import math
from datetime import date
from typing import Optional, Sequence

from .models import Assumptions, ExpenseItem, InvestmentItem, MonthlyRecord
from .depreciation import monthly_depreciation
from .finance import compute_loan, dscr

logger = logging.getLogger(__name__)


def month_label(start_date: date, idx: int) -> str:
    """Generate YYYY-MM label for month ``idx`` months after ``start_date``"""
    y = start_date.year + (start_date.month - 1 + idx) // 12
    m = (start_date.month - 1 + idx) % 12 + 1
    return f"{y:04d}-{m:02d}"


def escalation_factor(annual_rate: float, year: int) -> float:
    """Step escalation: constant within a year, compounding year on year"""
    return (1.0 + annual_rate / 100.0) ** year


def pct_of(value: float, base: float) -> Optional[float]:
    """value as a percentage of base; None when base is zero"""
    if base == 0:
        return None
    return value / base * 100.0


def simulate(assumptions: Assumptions,
             expenses: Sequence[ExpenseItem],
             investments: Sequence[InvestmentItem]) -> list[MonthlyRecord]:
    """
    Run the monthly simulation for the full project life.

    Args:
        assumptions: Validated assumption set
        expenses: Monthly operating expense lines (before escalation)
        investments: Capital assets acquired at time zero

    Returns:
        Chronological monthly records; month 0 carries only the capital
        outlay when ``assumptions.month_zero_record`` is set
    """
    a = assumptions
    months = a.months
    base_expenses = sum(e.monthly_amount for e in expenses)
    total_investment = sum(i.cost for i in investments)
    loan = compute_loan(a.loan, months)
    discount = 1.0 + a.discount_rate / 100.0

    logger.debug(
        "simulate: %d months, target=%d, capacity=%d, expenses=%.2f/mo, capex=%.2f, loan=%s",
        months, a.monthly_target, a.max_capacity, base_expenses, total_investment, a.loan.enabled,
    )

    rows: list[MonthlyRecord] = []
    new_by_month: dict[int, int] = {}
    total_members = 0
    cum_fcf = 0.0
    cum_dcf = 0.0
    capacity_logged = False

    if a.month_zero_record:
        fcf0 = -total_investment
        cum_fcf += fcf0
        cum_dcf += fcf0
        rows.append(MonthlyRecord(
            month_index=0,
            period=0,
            month=month_label(a.start_date, -1),
            year=0,
            loan_balance=a.loan.principal if a.loan.enabled else 0.0,
            capital_outlay=total_investment,
            fcf=fcf0,
            dcf=fcf0,
            cumulative_fcf=cum_fcf,
            cumulative_dcf=cum_dcf,
            cumulative_npv=cum_dcf,
        ))

    for t in range(1, months + 1):
        year = (t - 1) // 12
        period = t if a.month_zero_record else t - 1
        target = a.target_for_month(t)

        # cohort aging: the cohort that joined 12 months ago renews or lapses
        prior = new_by_month.get(t - 12, 0)
        repeat = math.floor(prior * a.retention_rate / 100.0)
        expired = prior - repeat

        # acquisition, throttled by renewals and last month's free capacity
        room_left = a.max_capacity - total_members
        new = min(target - repeat, room_left)
        if a.clamp_new_members:
            new = max(0, new)
        if room_left <= 0 and not capacity_logged:
            logger.debug("capacity of %d reached in month %d", a.max_capacity, t)
            capacity_logged = True

        total = total_members - expired + repeat + new
        if total > a.max_capacity:
            # retention above 50% can overshoot; the excess renewals lapse
            overflow = min(repeat, total - a.max_capacity)
            repeat -= overflow
            expired += overflow
            total -= overflow
        total_members = max(0, total)
        new_by_month[t] = new

        # revenue
        price_factor = escalation_factor(a.annual_price_increase, year)
        start_members = target
        subscription_rev = start_members * a.subscription_price * price_factor
        pt_members = math.floor(total_members * a.pt_penetration / 100.0)
        pt_rev = pt_members * a.pt_price * (a.pt_share / 100.0) * price_factor
        total_rev = subscription_rev + pt_rev

        expenses_m = base_expenses * escalation_factor(a.annual_expense_increase, year)
        gross_margin = total_rev - expenses_m

        depreciation = monthly_depreciation(investments, year)
        lp = loan.period(t)

        ebitda = gross_margin
        pbt = ebitda - depreciation - lp.interest
        tax = pbt * (a.tax_rate / 100.0)
        pat = pbt - tax

        outlay = 0.0 if a.month_zero_record or t > 1 else total_investment
        salvage = total_investment * a.salvage_rate / 100.0 if a.include_salvage and t == months else 0.0
        fcf = pat + depreciation + salvage - outlay
        dcf = fcf / discount ** (period / 12.0)
        cum_fcf += fcf
        cum_dcf += dcf

        rows.append(MonthlyRecord(
            month_index=t,
            period=period,
            month=month_label(a.start_date, t - 1),
            year=year,
            target_sales=target,
            new_members=new,
            repeat_members=repeat,
            expired_members=expired,
            total_members=total_members,
            start_members=start_members,
            pt_members=pt_members,
            subscription_revenue=subscription_rev,
            pt_revenue=pt_rev,
            total_revenue=total_rev,
            expenses=expenses_m,
            gross_margin=gross_margin,
            gross_margin_pct=pct_of(gross_margin, total_rev),
            pt_sales_pct=pct_of(pt_rev, total_rev),
            depreciation=depreciation,
            interest=lp.interest,
            ebitda=ebitda,
            ebitda_pct=pct_of(ebitda, total_rev),
            pbt=pbt,
            tax=tax,
            pat=pat,
            loan_emi=lp.payment,
            loan_interest=lp.interest,
            loan_principal=lp.principal,
            loan_balance=lp.balance,
            dscr=dscr(ebitda, lp.payment),
            capital_outlay=outlay,
            salvage_inflow=salvage,
            fcf=fcf,
            fcf_pct=pct_of(fcf, total_rev),
            dcf=dcf,
            cumulative_fcf=cum_fcf,
            cumulative_dcf=cum_dcf,
            cumulative_npv=cum_dcf,
        ))

    return rows


def operating_records(records: Sequence[MonthlyRecord]) -> list[MonthlyRecord]:
    return [r for r in records if r.month_index > 0]


def break_even_month(records: Sequence[MonthlyRecord]) -> Optional[str]:
    """Label of the first operating month with non-negative EBITDA"""
    return next((r.month for r in operating_records(records) if r.ebitda >= 0), None)


def yearly_summary(records: Sequence[MonthlyRecord]) -> list[dict]:
    """Roll operating months up into one row per project year"""
    by_year: dict[int, list[MonthlyRecord]] = {}
    for r in operating_records(records):
        by_year.setdefault(r.year, []).append(r)

    def roll(xs, key):
        return sum(getattr(r, key) for r in xs)

    summary = []
    for year, xs in sorted(by_year.items()):
        covered = [r.dscr for r in xs if r.dscr is not None]
        summary.append({
            "year": year + 1,
            "revenue": roll(xs, "total_revenue"),
            "subscription_revenue": roll(xs, "subscription_revenue"),
            "pt_revenue": roll(xs, "pt_revenue"),
            "expenses": roll(xs, "expenses"),
            "ebitda": roll(xs, "ebitda"),
            "depreciation": roll(xs, "depreciation"),
            "interest": roll(xs, "interest"),
            "tax": roll(xs, "tax"),
            "pat": roll(xs, "pat"),
            "fcf": roll(xs, "fcf"),
            "dcf": roll(xs, "dcf"),
            "end_members": xs[-1].total_members,
            "end_loan_balance": xs[-1].loan_balance,
            "min_dscr": min(covered) if covered else None,
        })
    return summary
