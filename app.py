"""
Gym Financial Model - Engine UI
A minimal Streamlit interface that uses the engine as the single source of truth
"""

import logging

import pandas as pd
import streamlit as st

from config.default_params import (
    GROWTH_FIELDS, PRICING_FIELDS, COST_FIELDS, APPRAISAL_FIELDS,
    LOAN_FIELDS, LOAN_DEFAULTS, SCENARIO_PRESETS,
)
from gym_engine.errors import AssumptionsError
from gym_engine.models import (
    Assumptions, ExpenseItem, InvestmentItem, default_expenses, default_investments,
)
from gym_engine.depreciation import depreciation_schedule
from gym_engine.projections import simulate, yearly_summary, break_even_month
from gym_engine.metrics import valuation_metrics
from gym_engine.validation import validate_inputs
from utils.export import build_workbook
from utils.formatting import format_currency, format_metric
from utils.tables import (
    records_to_dataframe, metrics_table, yearly_summary_frame, depreciation_frame,
)
from utils.visualizations import (
    create_profitability_chart, create_membership_chart, create_cumulative_cash_chart,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("gym_app")

st.set_page_config(
    page_title="Gym Financial Model",
    page_icon="🏋️",
    layout="wide"
)


def _number_input(key, field_range, default):
    label, lo, hi, step = field_range
    if isinstance(step, int):
        return st.sidebar.number_input(label, int(lo), int(hi), int(default), int(step), key=key)
    return st.sidebar.number_input(label, float(lo), float(hi), float(default), float(step), key=key)


def get_assumptions_from_ui():
    """Build Assumptions from sidebar widgets"""
    st.sidebar.header("⚙️ Assumptions")

    preset = st.sidebar.selectbox("Scenario", list(SCENARIO_PRESETS), index=0)
    base = Assumptions()
    defaults = {name: getattr(base, name) for group in (
        GROWTH_FIELDS, PRICING_FIELDS, COST_FIELDS, APPRAISAL_FIELDS) for name in group}
    defaults.update(SCENARIO_PRESETS[preset])

    values = {}
    for title, group in (("👥 Growth", GROWTH_FIELDS), ("💰 Pricing", PRICING_FIELDS),
                         ("🧾 Costs & Tax", COST_FIELDS), ("📈 Appraisal", APPRAISAL_FIELDS)):
        st.sidebar.subheader(title)
        for name, field_range in group.items():
            values[name] = _number_input(f"{preset}_{name}", field_range, defaults[name])

    st.sidebar.subheader("🏦 Financing")
    values["loan_enabled"] = st.sidebar.checkbox("Use a loan", value=False)
    if values["loan_enabled"]:
        for name, field_range in LOAN_FIELDS.items():
            values[name] = _number_input(name, field_range, LOAN_DEFAULTS[name])

    with st.sidebar.expander("Model options", expanded=False):
        values["month_zero_record"] = st.checkbox(
            "Separate month-zero capex record", value=True,
            help="Off: the capital outlay is deducted from the first operating month")
        values["clamp_new_members"] = st.checkbox(
            "Never let new members go negative", value=True)
        values["include_salvage"] = st.checkbox(
            "Add salvage value in the final month", value=False)

    return Assumptions.from_dict(values)


def edit_expenses():
    df = pd.DataFrame([{"id": e.id, "name": e.name, "monthly_amount": e.monthly_amount}
                       for e in default_expenses()])
    edited = st.data_editor(df, num_rows="dynamic", use_container_width=True, key="expenses")
    return [ExpenseItem(str(r["id"]), str(r["name"]), float(r["monthly_amount"] or 0))
            for _, r in edited.dropna(subset=["id"]).iterrows()]


def edit_investments():
    df = pd.DataFrame([{"id": i.id, "name": i.name, "cost": i.cost, "rate": i.rate}
                       for i in default_investments()])
    edited = st.data_editor(df, num_rows="dynamic", use_container_width=True, key="investments")
    return [InvestmentItem(str(r["id"]), str(r["name"]), float(r["cost"] or 0), float(r["rate"] or 0))
            for _, r in edited.dropna(subset=["id"]).iterrows()]


def render_metrics(metrics, records):
    cols = st.columns(5)
    with cols[0]:
        st.metric("NPV", format_currency(metrics.npv))
    with cols[1]:
        st.metric("IRR", format_metric(metrics.irr))
    with cols[2]:
        st.metric("MIRR", format_metric(metrics.mirr))
    with cols[3]:
        st.metric("Payback", format_metric(metrics.payback_period, unit="years"))
    with cols[4]:
        st.metric("Discounted Payback", format_metric(metrics.discounted_payback_period, unit="years"))
    st.caption(f"EBITDA break-even: {break_even_month(records) or 'not within project life'}")


def main():
    st.title("🏋️ Gym Financial Model")

    assumptions = get_assumptions_from_ui()

    with st.expander("Monthly expenses", expanded=False):
        expenses = edit_expenses()
    with st.expander("Capital investments", expanded=False):
        investments = edit_investments()

    try:
        validate_inputs(assumptions, expenses, investments)
    except AssumptionsError as e:
        st.error("Invalid inputs:\n- " + "\n- ".join(e.problems))
        return

    records = simulate(assumptions, expenses, investments)
    basis = st.radio("IRR/MIRR basis", ["monthly", "annual"], horizontal=True)
    metrics = valuation_metrics(records, assumptions, basis=basis)
    logger.info("simulated %d records, NPV=%.2f", len(records), metrics.npv)

    render_metrics(metrics, records)

    df = records_to_dataframe(records)
    tab1, tab2, tab3, tab4 = st.tabs([
        "📈 Financial Metrics", "📊 Charts", "📅 Yearly Summary", "🏗️ Depreciation Schedule"])

    with tab1:
        st.dataframe(metrics_table(records), use_container_width=True)

    with tab2:
        st.plotly_chart(create_profitability_chart(df), use_container_width=True)
        st.plotly_chart(create_membership_chart(df, assumptions.max_capacity), use_container_width=True)
        st.plotly_chart(create_cumulative_cash_chart(df), use_container_width=True)

    summary = yearly_summary(records)
    schedule = depreciation_schedule(investments, assumptions.project_life)

    with tab3:
        st.dataframe(yearly_summary_frame(summary), use_container_width=True)

    with tab4:
        st.dataframe(depreciation_frame(schedule), use_container_width=True)

    st.download_button(
        "📥 Download Excel",
        data=build_workbook(records, metrics, summary, schedule),
        file_name="gym_financial_model.xlsx",
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )


if __name__ == "__main__":
    main()
