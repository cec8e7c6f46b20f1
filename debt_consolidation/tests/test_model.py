import math
from datetime import date

import pytest

import config
from debt_consolidation.core.comparison import ComparisonResult
from debt_consolidation.core.conditions import is_finite
from debt_consolidation.core.horizons import DEFAULT_HORIZONS
from debt_consolidation.core.model import ConsolidationModel, Projection, ProjectionInputs
from debt_consolidation.core.payment import payment
from debt_consolidation.core.utils import add_months


def test_default_projection():
    model = ConsolidationModel(ProjectionInputs())
    p = model.run()
    assert p.loan_amount == 25_500
    assert p.term_months == 60
    assert math.isclose(p.scheduled_payment, payment(0.09 / 12, 60, 25_500))
    assert math.isclose(p.freed_cash_flow, 750 - p.scheduled_payment)
    assert math.isclose(p.contributions.total, p.freed_cash_flow)
    assert p.refi.amortizes
    assert 0 < p.payoff_month < 60
    assert [s.months for s in p.snapshots] == list(DEFAULT_HORIZONS)


def test_totals_are_consistent():
    p = ConsolidationModel(ProjectionInputs()).run()
    assert math.isclose(p.interest_saved_total, p.baseline.total_interest - p.refi.total_interest)
    assert math.isclose(p.account_growth, p.buckets_at_payoff.invest + p.buckets_at_payoff.savings)
    assert math.isclose(p.total_impact, p.interest_saved_total + p.account_growth)
    assert p.time_saved_months == p.baseline.months_to_payoff - p.payoff_month


def test_run_is_deterministic():
    model = ConsolidationModel(ProjectionInputs())
    assert model.run().to_dict() == model.run().to_dict()
    assert model.run().snapshots == ConsolidationModel(ProjectionInputs()).run().snapshots


def test_payoff_date():
    p = ConsolidationModel(ProjectionInputs()).run()
    assert p.payoff_date(date(2026, 10, 17)) == add_months(date(2026, 10, 1), p.payoff_month)


def test_negative_inputs_are_clamped():
    model = ConsolidationModel(ProjectionInputs(total_debt=-5_000, refi_costs=-10, investing_pct=-25))
    assert model.inputs.total_debt == 0.0
    assert model.inputs.refi_costs == 0.0
    assert model.inputs.investing_pct == 0.0
    p = model.run()
    assert p.loan_amount == 0.0
    assert p.payoff_month == 0
    assert p.contributions.investing == 0.0


def test_zero_term_treats_payment_as_zero():
    model = ConsolidationModel(ProjectionInputs(new_term_years=0))
    assert model.scheduled_payment == 0.0
    p = model.run()
    assert p.term_months == 0
    assert math.isclose(p.freed_cash_flow, 750)


def test_never_amortizing_consolidation():
    p = ConsolidationModel(ProjectionInputs(current_payment=0, new_term_years=0)).run()
    assert not p.refi.amortizes
    assert p.payoff_month == 0
    assert math.isclose(p.interest_saved_total, p.baseline.total_interest)


def test_custom_horizons():
    p = ConsolidationModel(ProjectionInputs(horizons=(24, 6, 6))).run()
    assert [s.months for s in p.snapshots] == [6, 24]


def test_display_tables():
    model = ConsolidationModel(ProjectionInputs())
    paydown = model.paydown_by_year(5)
    assert list(paydown.columns) == ["year", "credit_card", "consolidation"]
    assert len(paydown) == 6
    assert paydown["consolidation"].iloc[-1] <= 0.01
    assert paydown["credit_card"].iloc[-1] > 0

    p = model.run()
    assert len(model.refinance_schedule()) == p.payoff_month
    assert is_finite(p.baseline.months_to_payoff)
    assert len(model.baseline_schedule()) == p.baseline.months_to_payoff
    assert len(model.bucket_growth(60)) == 61
    assert len(model.horizon_table(p)) == len(p.snapshots)


def test_extreme_rate_and_term():
    p = ConsolidationModel(ProjectionInputs(new_apr=100.0, new_term_years=1000)).run()
    assert p.term_months == 12_000
    assert math.isclose(p.scheduled_payment, 25_500 * (100 / 100 / 12))
    assert p.freed_cash_flow < 0
    assert not p.refi.amortizes
    assert p.payoff_month == 0


def test_comparison_is_part_of_projection():
    model = ConsolidationModel(ProjectionInputs())
    p = model.run()
    assert isinstance(p.comparison, ComparisonResult)
    assert p.comparison == model.comparison()
    with pytest.raises(TypeError):
        Projection(**{k: v for k, v in vars(p).items() if k != "comparison"})


def test_paydown_chart_covers_configured_years():
    paydown = ConsolidationModel(ProjectionInputs()).paydown_by_year(config.PAYDOWN_CHART_YEARS)
    assert len(paydown) == config.PAYDOWN_CHART_YEARS + 1
    assert paydown["year"].iloc[-1] == config.PAYDOWN_CHART_YEARS
