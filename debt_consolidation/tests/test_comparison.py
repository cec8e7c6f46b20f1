import math

from debt_consolidation.core.conditions import NEVER, is_finite
from debt_consolidation.core.comparison import compare, compounding_message


def test_lower_rate_same_payment_saves_interest_and_time():
    res = compare(total_debt=10_000, current_apr=24.0, current_payment=400, loan_amount=10_000, new_apr=12.0)
    trad, cons = res.traditional, res.consolidation
    assert trad.amortizes and cons.amortizes
    assert cons.months_to_payoff < trad.months_to_payoff
    assert res.interest_saved > 0
    assert math.isclose(res.interest_saved, trad.total_interest - cons.total_interest)
    assert res.months_saved == trad.months_to_payoff - cons.months_to_payoff
    assert math.isclose(trad.total_paid, 10_000 + trad.total_interest)


def test_traditional_never_amortizes():
    # 150 <= 2% of 10000
    res = compare(10_000, 24.0, 150, 10_500, 9.0)
    assert res.traditional.months_to_payoff is NEVER
    assert res.traditional.total_paid is NEVER
    assert res.consolidation.amortizes
    assert res.interest_saved == 0.0
    assert res.months_saved == 0


def test_consolidation_never_counts_as_zero_interest():
    res = compare(10_000, 2.0, 30, 10_000, 6.0)
    assert res.traditional.amortizes
    assert not res.consolidation.amortizes
    assert math.isclose(res.interest_saved, res.traditional.total_interest)


def test_no_payment_and_no_balance():
    res = compare(10_000, 0.0, 0.0, 10_000, 0.0)
    assert res.traditional.months_to_payoff is NEVER
    empty = compare(0.0, 24.0, 0.0, 0.0, 9.0)
    assert empty.traditional.months_to_payoff == 0
    assert empty.traditional.total_interest == 0.0
    assert empty.traditional.total_paid == 0.0
    assert is_finite(empty.consolidation.months_to_payoff)


def test_compounding_message():
    assert "9% vs 24%" in compounding_message(24.0, 9.0)
    assert compounding_message(9.0, 9.0).startswith("Lower interest rate")
