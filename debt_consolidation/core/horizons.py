from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

import pandas as pd

from .allocation import MonthlyContributions
from .amortization import AmortizationResult
from .buckets import BucketState, simulate_buckets
from .errors import ConfigError


DEFAULT_HORIZONS: Tuple[int, ...] = (3, 6, 12, 36, 60, 120)


@dataclass(frozen=True)
class HorizonSnapshot:
    months: int
    principal_paid: float
    buckets: BucketState
    interest_saved: float

    @property
    def total_impact(self) -> float:
        return (
            self.principal_paid
            + self.buckets.invest
            + self.buckets.emergency
            + self.buckets.savings
            + self.interest_saved
        )


def normalize_horizons(values: Iterable[object]) -> Tuple[int, ...]:
    """Validate a list of reporting horizons (in months).

    Entries must be positive whole numbers; duplicates are dropped and the
    result is sorted.
    """
    out = set()
    for v in values:
        if isinstance(v, bool):
            raise ConfigError(f"Invalid horizon: {v!r}")
        if isinstance(v, float) and not v.is_integer():
            raise ConfigError(f"Horizon must be a whole number of months: {v!r}")
        try:
            months = int(v)  # type: ignore[arg-type]
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid horizon: {v!r}") from exc
        if months <= 0:
            raise ConfigError(f"Horizon must be positive: {v!r}")
        out.add(months)
    return tuple(sorted(out))


def snapshot(
    elapsed_months: int,
    refi: AmortizationResult,
    base: AmortizationResult,
    contributions: MonthlyContributions,
    payoff_month: int,
    invest_rate: float,
    savings_rate: float,
) -> HorizonSnapshot:
    """Read out the cumulative effect of the plan after ``elapsed_months``.

    Interest saved compares the baseline and refinance interest over the same
    prefix of months; each series contributes at most its own length.
    """
    buckets = simulate_buckets(elapsed_months, payoff_month, contributions, invest_rate, savings_rate)
    principal_paid = contributions.extra_principal * min(elapsed_months, payoff_month)
    interest_saved = base.interest_through(elapsed_months) - refi.interest_through(elapsed_months)
    return HorizonSnapshot(
        months=int(elapsed_months),
        principal_paid=principal_paid,
        buckets=buckets,
        interest_saved=interest_saved,
    )


def snapshots(
    horizons: Sequence[int],
    refi: AmortizationResult,
    base: AmortizationResult,
    contributions: MonthlyContributions,
    payoff_month: int,
    invest_rate: float,
    savings_rate: float,
) -> List[HorizonSnapshot]:
    return [
        snapshot(h, refi, base, contributions, payoff_month, invest_rate, savings_rate)
        for h in horizons
    ]


def horizon_label(months: int) -> str:
    if months % 12 == 0:
        years = months // 12
        return f"{years} yr" if years == 1 else f"{years} yrs"
    return f"{months} mo"


def horizon_table(snaps: Sequence[HorizonSnapshot]) -> pd.DataFrame:
    """One row per horizon with every snapshot component."""
    rows = [
        {
            "horizon": horizon_label(s.months),
            "months": s.months,
            "principal_paid": s.principal_paid,
            "investing": s.buckets.invest,
            "emergency": s.buckets.emergency,
            "savings": s.buckets.savings,
            "interest_saved": s.interest_saved,
            "total_impact": s.total_impact,
        }
        for s in snaps
    ]
    columns = [
        "horizon",
        "months",
        "principal_paid",
        "investing",
        "emergency",
        "savings",
        "interest_saved",
        "total_impact",
    ]
    return pd.DataFrame(rows, columns=columns)
