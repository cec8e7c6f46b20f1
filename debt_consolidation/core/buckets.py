from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

import pandas as pd

from .allocation import MonthlyContributions
from .payment import monthly_rate


@dataclass(frozen=True)
class BucketState:
    invest: float = 0.0
    emergency: float = 0.0
    savings: float = 0.0

    @property
    def total(self) -> float:
        return self.invest + self.emergency + self.savings


def _step(
    state: BucketState,
    month: int,
    payoff_month: int,
    contributions: MonthlyContributions,
    invest_monthly: float,
    savings_monthly: float,
) -> BucketState:
    # After payoff the extra-principal amount has nowhere to go but savings.
    redirected = contributions.extra_principal if month > payoff_month else 0.0
    return BucketState(
        invest=state.invest * (1 + invest_monthly) + contributions.investing,
        emergency=state.emergency * (1 + savings_monthly) + contributions.emergency,
        savings=state.savings * (1 + savings_monthly) + contributions.savings + redirected,
    )


def simulate_buckets(
    months: int,
    payoff_month: int,
    contributions: MonthlyContributions,
    invest_rate: float,
    savings_rate: float,
) -> BucketState:
    """Compound the three buckets over ``months`` monthly contributions.

    ``invest_rate`` and ``savings_rate`` are annual returns in percent; the
    emergency fund earns the savings rate.
    """
    im = monthly_rate(invest_rate)
    sm = monthly_rate(savings_rate)
    state = BucketState()
    for m in range(1, int(months) + 1):
        state = _step(state, m, payoff_month, contributions, im, sm)
    return state


def bucket_series(
    months: int,
    payoff_month: int,
    contributions: MonthlyContributions,
    invest_rate: float,
    savings_rate: float,
) -> pd.DataFrame:
    """Month-by-month bucket balances, month 0 included.

    Columns: month, invest, emergency, savings, total
    """
    im = monthly_rate(invest_rate)
    sm = monthly_rate(savings_rate)
    state = BucketState()
    rows: List[Dict[str, float]] = [
        {"month": 0, "invest": 0.0, "emergency": 0.0, "savings": 0.0, "total": 0.0}
    ]
    for m in range(1, int(months) + 1):
        state = _step(state, m, payoff_month, contributions, im, sm)
        rows.append(
            {
                "month": m,
                "invest": state.invest,
                "emergency": state.emergency,
                "savings": state.savings,
                "total": state.total,
            }
        )
    return pd.DataFrame(rows)
