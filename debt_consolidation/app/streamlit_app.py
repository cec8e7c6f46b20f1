from __future__ import annotations

import io
import logging
import os
import sys
from dataclasses import asdict
from typing import Dict, List

import numpy as np
import pandas as pd
import streamlit as st
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer

# Ensure package import works on Streamlit Cloud when CWD != repo root
_THIS_DIR = os.path.dirname(__file__)
_REPO_ROOT = os.path.abspath(os.path.join(_THIS_DIR, "..", ".."))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

from debt_consolidation.core.model import ProjectionInputs, Projection, ConsolidationModel
from debt_consolidation.core.amortization import aggregate_yearly
from debt_consolidation.core.comparison import compounding_message
from debt_consolidation.core.horizons import horizon_label
from debt_consolidation.core import plots
from debt_consolidation.core.utils import usd, years_label
from config import (
    TOTAL_DEBT,
    CURRENT_APR,
    CURRENT_PAYMENT,
    ADDITIONAL_CASH_FLOW,
    ADDITIONAL_CASH_FLOW_PCT,
    NEW_APR,
    NEW_TERM_YEARS,
    REFI_COSTS,
    EXTRA_PRINCIPAL_PCT,
    INVESTING_PCT,
    EMERGENCY_PCT,
    SAVINGS_PCT,
    INVESTMENT_RETURN,
    SAVINGS_RETURN,
    HORIZON_MONTHS,
    CHART_MONTHS,
    PAYDOWN_CHART_YEARS,
    LOG_LEVEL,
)


logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

st.set_page_config(page_title="Debt consolidation calculator", layout="wide")


def sidebar_inputs() -> ProjectionInputs:
    st.sidebar.header("Current debt")
    total_debt = st.sidebar.number_input("Total debt ($)", min_value=0.0, value=float(TOTAL_DEBT), step=500.0)
    current_apr = st.sidebar.number_input("Current APR (%)", min_value=0.0, max_value=100.0, value=CURRENT_APR, step=0.1, format="%0.2f")
    current_payment = st.sidebar.number_input("Current monthly payment ($)", min_value=0.0, value=float(CURRENT_PAYMENT), step=25.0)

    st.sidebar.subheader("Additional cash flow")
    additional_cash_flow = st.sidebar.number_input("Additional cash flow ($/month)", min_value=0.0, value=float(ADDITIONAL_CASH_FLOW), step=25.0)
    additional_cash_flow_pct = st.sidebar.number_input("Additional cash flow (%)", min_value=0.0, max_value=100.0, value=ADDITIONAL_CASH_FLOW_PCT, step=1.0, format="%0.1f")

    st.sidebar.subheader("Consolidation loan")
    new_apr = st.sidebar.number_input("New APR (%)", min_value=0.0, max_value=100.0, value=NEW_APR, step=0.1, format="%0.2f")
    new_term_years = st.sidebar.number_input("Term (years)", min_value=0.0, value=float(NEW_TERM_YEARS), step=1.0, format="%0.1f")
    refi_costs = st.sidebar.number_input("Refinance costs ($)", min_value=0.0, value=float(REFI_COSTS), step=100.0)

    st.sidebar.subheader("Allocation of freed cash flow")
    extra_principal_pct = st.sidebar.number_input("Extra principal (%)", min_value=0.0, max_value=100.0, value=EXTRA_PRINCIPAL_PCT, step=5.0, format="%0.0f")
    investing_pct = st.sidebar.number_input("Investing (%)", min_value=0.0, max_value=100.0, value=INVESTING_PCT, step=5.0, format="%0.0f")
    emergency_pct = st.sidebar.number_input("Emergency fund (%)", min_value=0.0, max_value=100.0, value=EMERGENCY_PCT, step=5.0, format="%0.0f")
    savings_pct = st.sidebar.number_input("Savings (%)", min_value=0.0, max_value=100.0, value=SAVINGS_PCT, step=5.0, format="%0.0f")
    total_pct = extra_principal_pct + investing_pct + emergency_pct + savings_pct
    if total_pct and abs(total_pct - 100.0) > 1e-9:
        st.sidebar.caption(f"Weights sum to {total_pct:.0f}%, they are scaled to 100%.")

    st.sidebar.subheader("Returns")
    investment_return = st.sidebar.number_input("Investment return (% annual)", min_value=0.0, max_value=100.0, value=INVESTMENT_RETURN, step=0.1, format="%0.1f")
    savings_return = st.sidebar.number_input("Savings return (% annual)", min_value=0.0, max_value=100.0, value=SAVINGS_RETURN, step=0.1, format="%0.1f")

    return ProjectionInputs(
        total_debt=total_debt,
        current_apr=current_apr,
        current_payment=current_payment,
        additional_cash_flow=additional_cash_flow,
        additional_cash_flow_pct=additional_cash_flow_pct,
        new_apr=new_apr,
        new_term_years=new_term_years,
        refi_costs=refi_costs,
        extra_principal_pct=extra_principal_pct,
        investing_pct=investing_pct,
        emergency_pct=emergency_pct,
        savings_pct=savings_pct,
        investment_return=investment_return,
        savings_return=savings_return,
        horizons=HORIZON_MONTHS,
    )


def kpi_card(label: str, value: str, help_text: str | None = None):
    st.metric(label, value, help=help_text)


def style_with_commas(df: pd.DataFrame):
    num_cols = df.select_dtypes(include=["number"]).columns
    if len(num_cols) == 0:
        return df
    return df.style.format({col: "{:,.0f}" for col in num_cols})


def render_summary(projection: Projection, model: ConsolidationModel):
    st.subheader("Summary")
    c1, c2, c3, c4 = st.columns(4)
    with c1:
        kpi_card("Freed cash flow", usd(projection.freed_cash_flow), "Per month, after the new loan payment")
        kpi_card("New scheduled payment", usd(projection.scheduled_payment))
    with c2:
        kpi_card("Debt-free date", projection.payoff_date().strftime("%b %Y"))
        kpi_card("Time to payoff", years_label(projection.payoff_month))
    with c3:
        kpi_card("Interest saved", usd(projection.interest_saved_total), "Minimum-payment interest minus consolidation interest")
        kpi_card("Time saved", years_label(projection.time_saved_months))
    with c4:
        b = projection.buckets_at_payoff
        kpi_card("Account growth", usd(projection.account_growth))
        st.caption(f"Investing: {usd(b.invest)} • Savings: {usd(b.savings)}")
        kpi_card("Total impact", usd(projection.total_impact))

    if not projection.refi.amortizes:
        st.warning("The consolidation payment never covers the interest: the loan would not be paid off.")
    if not projection.baseline.amortizes:
        st.info("At minimum payments the current debt is never paid off.")

    st.markdown("**Monthly allocation**")
    c = projection.contributions
    a1, a2, a3, a4 = st.columns(4)
    a1.metric("Extra principal", usd(c.extra_principal))
    a2.metric("Investing", usd(c.investing))
    a3.metric("Emergency fund", usd(c.emergency))
    a4.metric("Savings", usd(c.savings))

    st.markdown("**Impact by horizon**")
    cols = st.columns(max(1, len(projection.snapshots)))
    for col, snap in zip(cols, projection.snapshots):
        col.metric(horizon_label(snap.months), usd(snap.total_impact))


def render_where_money_goes(projection: Projection, model: ConsolidationModel):
    st.subheader("Where the money goes")
    table = model.horizon_table(projection)
    st.dataframe(style_with_commas(table), use_container_width=True)
    st.download_button(
        "Export CSV (horizons)",
        data=table.to_csv(index=False).encode("utf-8"),
        file_name="horizons.csv",
        mime="text/csv",
    )
    st.plotly_chart(plots.impact_by_horizon(projection.snapshots), use_container_width=True)


def render_graphs(projection: Projection, model: ConsolidationModel):
    st.subheader("Charts")
    c1, c2 = st.columns(2)
    with c1:
        growth = model.bucket_growth(max(CHART_MONTHS) if CHART_MONTHS else 0, projection.payoff_month)
        st.plotly_chart(plots.cash_growth_bars(growth, CHART_MONTHS), use_container_width=True)
    with c2:
        paydown = model.paydown_by_year(PAYDOWN_CHART_YEARS)
        st.plotly_chart(plots.debt_paydown_bars(paydown), use_container_width=True)


def render_tables(projection: Projection, model: ConsolidationModel):
    st.subheader("Tables")
    view_monthly = st.toggle("Monthly view", value=False)

    schedules = {
        "Consolidation loan": (model.refinance_schedule(), "consolidation"),
        "Credit card (minimum payments)": (model.baseline_schedule(), "credit_card"),
    }
    for title, (monthly, slug) in schedules.items():
        df = monthly if view_monthly else aggregate_yearly(monthly)
        suffix = "monthly" if view_monthly else "yearly"
        st.markdown(f"{title} ({suffix})")
        st.dataframe(style_with_commas(df), use_container_width=True)
        st.download_button(
            f"Export CSV {title}",
            data=df.to_csv(index=False).encode("utf-8"),
            file_name=f"{slug}_{suffix}.csv",
            mime="text/csv",
        )


def render_comparison(projection: Projection, model: ConsolidationModel):
    st.subheader("Same payment, lower rate")
    cmp = projection.comparison
    c1, c2, c3 = st.columns(3)
    for col, title, s in (
        (c1, "Traditional", cmp.traditional),
        (c2, "Consolidation", cmp.consolidation),
    ):
        with col:
            st.markdown(f"**{title}**")
            st.write(f"Balance: {usd(s.balance)}")
            st.write(f"APR: {s.apr:.2f}%")
            st.write(f"Monthly payment: {usd(s.payment)}")
            st.write(f"Total interest: {usd(s.total_interest) if s.amortizes else 'Never'}")
            st.write(f"Total paid: {usd(s.total_paid) if s.amortizes else 'Never'}")
            st.write(f"Time to payoff: {years_label(s.months_to_payoff)}")
    with c3:
        kpi_card("Interest saved", usd(cmp.interest_saved))
        kpi_card("Time saved", years_label(cmp.months_saved))
    st.caption(compounding_message(model.inputs.current_apr, model.inputs.new_apr))


def render_sensitivity(model: ConsolidationModel):
    st.subheader("Sensitivity")

    def metrics_for(temp_inputs: ProjectionInputs) -> Dict[str, float]:
        p = ConsolidationModel(temp_inputs).run()
        return {
            "Total impact": p.total_impact,
            "Interest saved": p.interest_saved_total,
            "Account growth": p.account_growth,
        }

    def sweep(field: str, values: List[float]) -> Dict[str, List[float]]:
        series: Dict[str, List[float]] = {"Total impact": [], "Interest saved": [], "Account growth": []}
        for v in values:
            data = asdict(model.inputs)
            data[field] = float(v)
            vals = metrics_for(ProjectionInputs(**data))
            for k in series:
                series[k].append(vals[k])
        return series

    apr_min = max(0.0, model.inputs.new_apr - 4.0)
    new_aprs = np.linspace(apr_min, model.inputs.new_apr + 4.0, 9).tolist()
    term_base = max(1.0, model.inputs.new_term_years)
    terms = np.linspace(max(1.0, term_base - 2.0), term_base + 2.0, 5).tolist()
    ep_weights = np.linspace(0.0, 100.0, 11).tolist()

    c1, c2, c3 = st.columns(3)
    with c1:
        fig = plots.sensitivity_curve(new_aprs, sweep("new_apr", new_aprs), "New APR", title="vs new APR", percent_x=True)
        st.plotly_chart(fig, use_container_width=True)
    with c2:
        fig = plots.sensitivity_curve(terms, sweep("new_term_years", terms), "Term (years)", title="vs loan term")
        st.plotly_chart(fig, use_container_width=True)
    with c3:
        fig = plots.sensitivity_curve(ep_weights, sweep("extra_principal_pct", ep_weights), "Extra principal weight", title="vs extra principal weight", percent_x=True)
        st.plotly_chart(fig, use_container_width=True)


def render_report(projection: Projection, model: ConsolidationModel):
    st.subheader("Report")
    if st.button("Generate PDF"):
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(buffer, pagesize=A4)
        styles = getSampleStyleSheet()
        story = []
        story.append(Paragraph("Debt consolidation projection", styles["Title"]))
        story.append(Spacer(1, 12))
        story.append(Paragraph(f"Loan amount: {usd(projection.loan_amount)} over {projection.term_months} months", styles["Normal"]))
        story.append(Paragraph(f"Scheduled payment: {usd(projection.scheduled_payment)}", styles["Normal"]))
        story.append(Paragraph(f"Freed cash flow: {usd(projection.freed_cash_flow)} per month", styles["Normal"]))
        story.append(Paragraph(f"Debt-free: {projection.payoff_date().strftime('%b %Y')} ({years_label(projection.payoff_month)})", styles["Normal"]))
        story.append(Paragraph(f"Interest saved: {usd(projection.interest_saved_total)}", styles["Normal"]))
        story.append(Paragraph(f"Account growth: {usd(projection.account_growth)}", styles["Normal"]))
        story.append(Paragraph(f"Total impact: {usd(projection.total_impact)}", styles["Normal"]))
        story.append(Spacer(1, 12))
        for snap in projection.snapshots:
            story.append(Paragraph(f"{horizon_label(snap.months)}: {usd(snap.total_impact)}", styles["Normal"]))
        doc.build(story)
        buffer.seek(0)
        st.download_button("Download PDF", data=buffer, file_name="projection.pdf", mime="application/pdf")


def main():
    st.title("Debt consolidation calculator")
    inputs = sidebar_inputs()
    model = ConsolidationModel(inputs)
    projection = model.run()
    logger.debug("projection %s", projection.to_dict())

    tabs = st.tabs(["Summary", "Where the money goes", "Charts", "Tables", "Comparison", "Sensitivity"])
    with tabs[0]:
        render_summary(projection, model)
    with tabs[1]:
        render_where_money_goes(projection, model)
    with tabs[2]:
        render_graphs(projection, model)
    with tabs[3]:
        render_tables(projection, model)
    with tabs[4]:
        render_comparison(projection, model)
    with tabs[5]:
        render_sensitivity(model)

    st.divider()
    render_report(projection, model)


if __name__ == "__main__":
    main()
