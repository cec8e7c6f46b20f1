from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class AllocationWeights:
    # Relative weights; they need not sum to 100.
    extra_principal: float = 0.0
    investing: float = 0.0
    emergency: float = 0.0
    savings: float = 0.0

    @property
    def total(self) -> float:
        return self.extra_principal + self.investing + self.emergency + self.savings


@dataclass(frozen=True)
class MonthlyContributions:
    extra_principal: float = 0.0
    investing: float = 0.0
    emergency: float = 0.0
    savings: float = 0.0

    @property
    def total(self) -> float:
        return self.extra_principal + self.investing + self.emergency + self.savings

    def as_dict(self) -> Dict[str, float]:
        return {
            "extra_principal": self.extra_principal,
            "investing": self.investing,
            "emergency": self.emergency,
            "savings": self.savings,
        }


def freed_cash_flow(
    current_payment: float,
    scheduled_payment: float,
    additional_dollars: float = 0.0,
    additional_pct: float = 0.0,
) -> float:
    """Monthly cash released by swapping the current payment for the new one.

    The percentage boost applies to the freed amount plus the extra dollars,
    floored at zero, and is added on top of both.
    """
    base = current_payment - scheduled_payment
    base_for_pct = max(base + additional_dollars, 0.0)
    return base + additional_dollars + base_for_pct * (additional_pct / 100.0)


def allocate(freed: float, weights: AllocationWeights) -> MonthlyContributions:
    """Split ``freed`` across the four destinations pro rata to ``weights``.

    A zero weight sum is treated as 1 and a negative ``freed`` yields zero
    contributions everywhere.
    """
    total = weights.total
    if total == 0:
        total = 1.0

    def share(weight: float) -> float:
        return max(0.0, freed * weight / total)

    return MonthlyContributions(
        extra_principal=share(weights.extra_principal),
        investing=share(weights.investing),
        emergency=share(weights.emergency),
        savings=share(weights.savings),
    )
