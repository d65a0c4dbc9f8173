"""DataFrame builders for the monthly records, yearly rollups and depreciation."""

import pandas as pd

from utils.formatting import format_currency, format_percent

# (label, record field, kind) in display order; kind is count, money or pct
METRIC_ROWS = [
    ("Target Sales", "target_sales", "count"),
    ("New Members", "new_members", "count"),
    ("Repeat Members", "repeat_members", "count"),
    ("Expired Members", "expired_members", "count"),
    ("Total Members", "total_members", "count"),
    ("PT Members", "pt_members", "count"),
    ("Subscription Revenue", "subscription_revenue", "money"),
    ("PT Revenue", "pt_revenue", "money"),
    ("Total Revenue", "total_revenue", "money"),
    ("Monthly Expenses", "expenses", "money"),
    ("Gross Margin", "gross_margin", "money"),
    ("Gross Margin %", "gross_margin_pct", "pct"),
    ("PT Sales %", "pt_sales_pct", "pct"),
    ("Depreciation", "depreciation", "money"),
    ("Interest", "interest", "money"),
    ("EBITDA", "ebitda", "money"),
    ("EBITDA %", "ebitda_pct", "pct"),
    ("PBT", "pbt", "money"),
    ("Tax", "tax", "money"),
    ("PAT", "pat", "money"),
    ("Loan EMI", "loan_emi", "money"),
    ("Loan Principal", "loan_principal", "money"),
    ("Loan Balance", "loan_balance", "money"),
    ("FCF", "fcf", "money"),
    ("FCF %", "fcf_pct", "pct"),
    ("Cumulative FCF", "cumulative_fcf", "money"),
    ("DCF", "dcf", "money"),
    ("Cumulative DCF", "cumulative_dcf", "money"),
]


def records_to_dataframe(records):
    """One row per month, one column per record field."""
    return pd.DataFrame([r.to_dict() for r in records])


def metrics_table(records, formatted=True):
    """Metric-by-month table: metrics as rows, month labels as columns."""
    data = {}
    for r in records:
        column = []
        for _, key, kind in METRIC_ROWS:
            value = getattr(r, key)
            if not formatted:
                column.append(value)
            elif kind == "money":
                column.append(format_currency(value))
            elif kind == "pct":
                column.append(format_percent(value))
            else:
                column.append(f"{value:,.0f}")
        data[r.month] = column
    return pd.DataFrame(data, index=[label for label, _, _ in METRIC_ROWS])


def yearly_summary_frame(summary):
    df = pd.DataFrame(summary)
    if df.empty:
        return df
    return df.set_index("year")


def depreciation_frame(schedule):
    """Per-asset depreciation by year, plus a total row."""
    rows = []
    for asset in schedule:
        row = {"Asset": asset.name, "Cost": asset.cost, "Rate %": asset.rate}
        for y, charge in enumerate(asset.yearly_depreciation, start=1):
            row[f"Year {y}"] = charge
        rows.append(row)
    df = pd.DataFrame(rows)
    if df.empty:
        return df
    totals = df.drop(columns=["Asset", "Rate %"]).sum()
    totals["Asset"] = "Total"
    return pd.concat([df, totals.to_frame().T], ignore_index=True)
