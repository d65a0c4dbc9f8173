"""Valuation metrics: NPV, IRR, MIRR and payback periods"""
import logging
import math
from typing import Sequence

import numpy as np
from scipy import optimize

from .errors import DegenerateInputError, MetricStatus, NonConvergenceError
from .models import Assumptions, MetricResult, MonthlyRecord, ValuationMetrics

logger = logging.getLogger(__name__)

IRR_BRACKET = (-0.99, 0.99)
IRR_XTOL = 1e-12
IRR_MAX_ITERATIONS = 1000

# bracket scan points, highest first; the ends are IRR_BRACKET
SCAN_RATES = (0.99, 0.5, 0.25, 0.1, 0.05, 0.0, -0.05, -0.1, -0.25, -0.5, -0.75, -0.9, -0.95, -0.99)


def net_present_value(cash_flows: Sequence[float], rate: float) -> float:
    """Present value of ``cash_flows`` at per-period ``rate``; flow i is discounted i periods"""
    cf = np.asarray(cash_flows, dtype=float)
    t = np.arange(len(cf))
    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        return float(np.sum(cf / (1.0 + rate) ** t))


def annualize(periodic_rate: float, periods_per_year: int) -> float:
    return (1.0 + periodic_rate) ** periods_per_year - 1.0


def periodic_rate(annual_pct: float, periods_per_year: int) -> float:
    """Per-period equivalent of an annual percentage rate"""
    return (1.0 + annual_pct / 100.0) ** (1.0 / periods_per_year) - 1.0


def find_irr_bracket(cash_flows: Sequence[float]):
    """
    Scan SCAN_RATES from the top for the first sign change of NPV.

    Rates where NPV is not finite are skipped, so long monthly series whose
    discount factors overflow near -99% still get a usable bracket.
    Returns ``(lo, hi)`` or a single rate when NPV is exactly zero there.
    """
    prev_rate, prev_value = None, None
    for rate in SCAN_RATES:
        value = net_present_value(cash_flows, rate)
        if not math.isfinite(value):
            continue
        if value == 0:
            return rate
        if prev_value is not None and (value > 0) != (prev_value > 0):
            return rate, prev_rate
        prev_rate, prev_value = rate, value
    return None


def solve_periodic_irr(cash_flows: Sequence[float],
                       max_iterations: int = IRR_MAX_ITERATIONS) -> float:
    """
    Per-period rate where NPV is zero, by scipy bisection inside a scanned bracket.

    Raises:
        DegenerateInputError: series lacks a negative or a positive flow
        NonConvergenceError: no sign change on IRR_BRACKET or the
            iteration cap is reached
    """
    cf = np.asarray(cash_flows, dtype=float)
    if not (np.any(cf < 0) and np.any(cf > 0)):
        raise DegenerateInputError("IRR needs both a negative and a positive cash flow")

    bracket = find_irr_bracket(cf)
    if bracket is None:
        lo, hi = IRR_BRACKET
        raise NonConvergenceError(f"NPV does not change sign on ({lo}, {hi})", iterations=0)
    if not isinstance(bracket, tuple):
        return bracket

    lo, hi = bracket
    try:
        return optimize.bisect(lambda r: net_present_value(cf, r), lo, hi,
                               xtol=IRR_XTOL, maxiter=max_iterations)
    except (RuntimeError, ValueError) as e:
        raise NonConvergenceError(f"bisection failed: {e}", iterations=max_iterations) from e


def irr(cash_flows: Sequence[float], periods_per_year: int = 12,
        max_iterations: int = IRR_MAX_ITERATIONS) -> MetricResult:
    """Annualized IRR in percent, or an undefined result with its status"""
    try:
        r = solve_periodic_irr(cash_flows, max_iterations=max_iterations)
    except DegenerateInputError as e:
        logger.warning("IRR undefined: %s", e.message)
        return MetricResult.undefined(MetricStatus.DEGENERATE_INPUT)
    except NonConvergenceError as e:
        logger.warning("IRR not found: %s", e.message)
        return MetricResult.undefined(MetricStatus.NON_CONVERGENCE)
    return MetricResult(annualize(r, periods_per_year) * 100.0)


def mirr(cash_flows: Sequence[float], reinvestment_rate: float, financing_rate: float,
         periods_per_year: int = 12) -> MetricResult:
    """
    Modified IRR in percent.

    Outflows are discounted to period 0 at the financing rate and inflows
    compounded to the last period at the reinvestment rate. Both rates are
    annual percentages.
    """
    cf = np.asarray(cash_flows, dtype=float)
    n = len(cf) - 1
    if n < 1:
        logger.warning("MIRR undefined: fewer than 2 cash flows")
        return MetricResult.undefined(MetricStatus.DEGENERATE_INPUT)

    fin = periodic_rate(financing_rate, periods_per_year)
    reinv = periodic_rate(reinvestment_rate, periods_per_year)
    t = np.arange(len(cf))

    pv = abs(float(np.sum(np.where(cf < 0, cf, 0.0) / (1.0 + fin) ** t)))
    fv = float(np.sum(np.where(cf > 0, cf, 0.0) * (1.0 + reinv) ** (n - t)))
    if pv == 0 or fv == 0:
        logger.warning("MIRR undefined: pv=%s fv=%s", pv, fv)
        return MetricResult.undefined(MetricStatus.DEGENERATE_INPUT)

    m = (fv / pv) ** (1.0 / n) - 1.0
    return MetricResult(annualize(m, periods_per_year) * 100.0)


def npv(records: Sequence[MonthlyRecord]) -> float:
    return records[-1].cumulative_npv if records else 0.0


def _first_positive(records: Sequence[MonthlyRecord], key: str) -> MetricResult:
    for r in records:
        if getattr(r, key) > 0:
            return MetricResult(r.period / 12.0)
    return MetricResult.undefined(MetricStatus.NOT_REACHED)


def payback_period(records: Sequence[MonthlyRecord]) -> MetricResult:
    """Years until cumulative FCF first turns positive"""
    return _first_positive(records, "cumulative_fcf")


def discounted_payback_period(records: Sequence[MonthlyRecord]) -> MetricResult:
    """Years until cumulative DCF first turns positive"""
    return _first_positive(records, "cumulative_dcf")


def yearly_cash_flows(records: Sequence[MonthlyRecord]) -> list[float]:
    """FCF per project year; a month-zero outlay stays its own leading flow"""
    flows: dict[int, float] = {}
    lead = []
    for r in records:
        if r.month_index == 0:
            lead.append(r.fcf)
        else:
            flows[r.year] = flows.get(r.year, 0.0) + r.fcf
    return lead + [flows[y] for y in sorted(flows)]


def valuation_metrics(records: Sequence[MonthlyRecord], assumptions: Assumptions,
                      basis: str = "monthly") -> ValuationMetrics:
    """
    Compute NPV, IRR, MIRR and payback periods for a simulated series.

    ``basis="monthly"`` solves on the monthly FCF series and annualizes;
    ``basis="annual"`` first sums FCF per project year.
    """
    if basis == "monthly":
        flows = [r.fcf for r in records]
        ppy = 12
    elif basis == "annual":
        flows = yearly_cash_flows(records)
        ppy = 1
    else:
        raise ValueError(f"unknown basis: {basis!r}")

    return ValuationMetrics(
        npv=npv(records),
        irr=irr(flows, periods_per_year=ppy),
        mirr=mirr(flows, assumptions.reinvestment_rate, assumptions.financing_rate, periods_per_year=ppy),
        payback_period=payback_period(records),
        discounted_payback_period=discounted_payback_period(records),
        basis=basis,
    )
