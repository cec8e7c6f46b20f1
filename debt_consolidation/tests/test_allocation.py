import math

from debt_consolidation.core.allocation import AllocationWeights, allocate, freed_cash_flow


def test_allocation_scenario():
    c = allocate(1_000, AllocationWeights(extra_principal=50, investing=25, emergency=15, savings=10))
    assert c.extra_principal == 500
    assert c.investing == 250
    assert c.emergency == 150
    assert c.savings == 100


def test_weights_are_auto_scaled():
    c = allocate(400, AllocationWeights(1, 1, 1, 1))
    assert c.as_dict() == {"extra_principal": 100, "investing": 100, "emergency": 100, "savings": 100}


def test_outputs_sum_to_freed_cash_flow():
    for freed in (0.0, 1.0, 333.33, 12_345.67, -50.0):
        for weights in (AllocationWeights(3, 7, 0, 1), AllocationWeights(0.5, 0.2, 0.2, 0.1)):
            c = allocate(freed, weights)
            assert math.isclose(c.total, max(0.0, freed), abs_tol=1e-9)


def test_negative_freed_cash_flow_clamps_to_zero():
    c = allocate(-250, AllocationWeights(50, 25, 15, 10))
    assert c.total == 0.0
    assert min(c.as_dict().values()) >= 0.0


def test_zero_weights_give_zero_contributions():
    c = allocate(1_000, AllocationWeights())
    assert c.total == 0.0


def test_freed_cash_flow():
    # 250 freed + 100 extra, boosted by 10% of 350
    assert math.isclose(freed_cash_flow(750, 500, 100, 10), 385.0)
    assert freed_cash_flow(750, 500) == 250


def test_freed_cash_flow_percentage_needs_positive_base():
    assert freed_cash_flow(300, 500, 100, 50) == -100
