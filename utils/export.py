"""Excel export of a simulation run."""

from io import BytesIO

import pandas as pd

from utils.tables import records_to_dataframe, metrics_table, yearly_summary_frame, depreciation_frame


def valuation_rows(metrics):
    rows = [("NPV", metrics.npv, "ok")]
    for label, result in (("IRR %", metrics.irr), ("MIRR %", metrics.mirr),
                          ("Payback (years)", metrics.payback_period),
                          ("Discounted Payback (years)", metrics.discounted_payback_period)):
        rows.append((label, result.value, result.status.value))
    return pd.DataFrame(rows, columns=["Metric", "Value", "Status"])


def build_workbook(records, metrics, summary, schedule) -> bytes:
    """Write valuation, monthly, yearly and depreciation sheets to an xlsx blob."""
    bio = BytesIO()
    with pd.ExcelWriter(bio, engine="xlsxwriter") as xw:
        valuation_rows(metrics).to_excel(xw, sheet_name="Valuation", index=False)
        metrics_table(records, formatted=False).to_excel(xw, sheet_name="Monthly")
        records_to_dataframe(records).to_excel(xw, sheet_name="Records", index=False)
        yearly_summary_frame(summary).to_excel(xw, sheet_name="Yearly")
        depreciation_frame(schedule).to_excel(xw, sheet_name="Depreciation", index=False)
    return bio.getvalue()
