import math

import pytest

from debt_consolidation.core.allocation import MonthlyContributions
from debt_consolidation.core.amortization import (
    AmortizationResult,
    amortize_fixed_payment,
    amortize_minimum_payment,
)
from debt_consolidation.core.errors import ConfigError
from debt_consolidation.core.horizons import (
    horizon_label,
    horizon_table,
    normalize_horizons,
    snapshot,
    snapshots,
)
from debt_consolidation.core.payment import payment


BASE = AmortizationResult(4, 40.0, (10.0, 10.0, 10.0, 10.0))
REFI = AmortizationResult(2, 8.0, (4.0, 4.0))
CONTRIB = MonthlyContributions(extra_principal=200, investing=100, emergency=50, savings=25)


def test_interest_saved_is_a_prefix_sum():
    assert snapshot(3, REFI, BASE, CONTRIB, 2, 0.0, 0.0).interest_saved == 30 - 8
    assert snapshot(1, REFI, BASE, CONTRIB, 2, 0.0, 0.0).interest_saved == 10 - 4
    # no extrapolation past either series
    assert snapshot(10, REFI, BASE, CONTRIB, 2, 0.0, 0.0).interest_saved == 40 - 8


def test_principal_paid_stops_at_payoff():
    assert snapshot(1, REFI, BASE, CONTRIB, 2, 0.0, 0.0).principal_paid == 200
    assert snapshot(24, REFI, BASE, CONTRIB, 2, 0.0, 0.0).principal_paid == 400


def test_total_impact_adds_every_component():
    s = snapshot(24, REFI, BASE, CONTRIB, 12, 7.0, 4.0)
    expected = (
        s.principal_paid + s.buckets.invest + s.buckets.emergency + s.buckets.savings + s.interest_saved
    )
    assert math.isclose(s.total_impact, expected)


def test_snapshot_is_deterministic():
    a = snapshot(36, REFI, BASE, CONTRIB, 12, 7.0, 4.0)
    snapshot(6, REFI, BASE, CONTRIB, 12, 7.0, 4.0)
    b = snapshot(36, REFI, BASE, CONTRIB, 12, 7.0, 4.0)
    assert a == b


def test_interest_saved_non_decreasing():
    base = amortize_minimum_payment(10_000, 0.02)
    refi = amortize_fixed_payment(10_000, 0.0075, payment(0.0075, 60, 10_000))
    saved = [snapshot(m, refi, base, CONTRIB, 60, 0.0, 0.0).interest_saved for m in range(0, 121)]
    assert all(b >= a for a, b in zip(saved, saved[1:]))


def test_snapshots_follow_horizon_list():
    snaps = snapshots((3, 6, 12), REFI, BASE, CONTRIB, 2, 7.0, 4.0)
    assert [s.months for s in snaps] == [3, 6, 12]
    table = horizon_table(snaps)
    assert list(table["horizon"]) == ["3 mo", "6 mo", "1 yr"]
    assert math.isclose(table["total_impact"].iloc[-1], snaps[-1].total_impact)


def test_horizon_label():
    assert horizon_label(3) == "3 mo"
    assert horizon_label(12) == "1 yr"
    assert horizon_label(120) == "10 yrs"


def test_normalize_horizons():
    assert normalize_horizons([12, 3, 3, "6", 24.0]) == (3, 6, 12, 24)
    assert normalize_horizons([]) == ()


@pytest.mark.parametrize("bad", [[0], [-3], ["soon"], [1.5], [True], [None]])
def test_normalize_horizons_rejects_bad_entries(bad):
    with pytest.raises(ConfigError):
        normalize_horizons(bad)
