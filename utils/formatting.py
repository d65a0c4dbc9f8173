"""Display formatting for currency, percentages and metric results."""

import math

from gym_engine.errors import MetricStatus

UNDEFINED = "—"

STATUS_LABELS = {
    MetricStatus.DEGENERATE_INPUT: "Undefined",
    MetricStatus.NON_CONVERGENCE: "No IRR found",
    MetricStatus.NOT_REACHED: "Not reached",
}


def format_currency(value):
    """Format rupees using Crore (1e7) and Lakh (1e5) units."""
    if value is None or (isinstance(value, float) and not math.isfinite(value)):
        return UNDEFINED
    abs_value = abs(value)
    if abs_value >= 10_000_000:
        return f"₹{value / 10_000_000:.2f} Cr"
    if abs_value >= 100_000:
        return f"₹{value / 100_000:.2f} L"
    return f"₹{value:.2f}"


def format_percent(value, decimals=0):
    """Percentage with a dash when the ratio is undefined."""
    if value is None or (isinstance(value, float) and not math.isfinite(value)):
        return UNDEFINED
    return f"{value:.{decimals}f}%"


def format_metric(result, unit="%"):
    """Render a MetricResult; undefined results never show as zero."""
    if not result.ok:
        return STATUS_LABELS.get(result.status, UNDEFINED)
    if unit == "%":
        return f"{result.value:.2f}%"
    return f"{result.value:.2f} {unit}"
