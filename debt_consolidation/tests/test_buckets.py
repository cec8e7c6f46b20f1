import math

from debt_consolidation.core.allocation import MonthlyContributions
from debt_consolidation.core.buckets import BucketState, bucket_series, simulate_buckets


CONTRIB = MonthlyContributions(extra_principal=200, investing=100, emergency=50, savings=25)


def test_zero_months_is_empty():
    assert simulate_buckets(0, 12, CONTRIB, 7.0, 4.0) == BucketState()


def test_redirection_after_payoff_without_growth():
    state = simulate_buckets(24, 12, CONTRIB, 0.0, 0.0)
    assert state.invest == 2_400
    assert state.emergency == 1_200
    # months 13..24 each receive the redirected 200
    assert state.savings == 25 * 24 + 200 * 12


def test_redirection_compounds_at_savings_rate():
    sm = 6.0 / 100 / 12
    redirected = simulate_buckets(24, 12, CONTRIB, 0.0, 6.0)
    still_paying = simulate_buckets(24, 24, CONTRIB, 0.0, 6.0)
    expected = 200 * ((1 + sm) ** 12 - 1) / sm
    assert math.isclose(redirected.savings - still_paying.savings, expected, rel_tol=1e-9)
    assert redirected.invest == still_paying.invest
    assert redirected.emergency == still_paying.emergency


def test_invest_compounding():
    im = 12.0 / 100 / 12
    c = MonthlyContributions(investing=100)
    assert simulate_buckets(1, 0, c, 12.0, 0.0).invest == 100
    assert math.isclose(simulate_buckets(2, 0, c, 12.0, 0.0).invest, 100 * (1 + im) + 100)


def test_bucket_series_matches_simulation():
    df = bucket_series(36, 12, CONTRIB, 7.0, 4.0)
    assert len(df) == 37
    assert df.iloc[0]["total"] == 0.0
    final = simulate_buckets(36, 12, CONTRIB, 7.0, 4.0)
    assert math.isclose(df.iloc[-1]["savings"], final.savings)
    assert math.isclose(df.iloc[-1]["total"], final.total)
