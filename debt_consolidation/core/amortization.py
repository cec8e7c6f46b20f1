from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Final, List, Tuple

import pandas as pd

from .conditions import NEVER, Amount, Months
from .payment import MONTHS_IN_YEAR


logger = logging.getLogger(__name__)

MAX_PERIODS: Final[int] = 2000
PAYOFF_EPSILON: Final[float] = 0.01

MINIMUM_PAYMENT_RATE: Final[float] = 0.025
MINIMUM_PAYMENT_FLOOR: Final[float] = 25.0

PAID_OFF: Final[str] = "paid_off"
NEVER_AMORTIZES: Final[str] = "never_amortizes"
MAX_PERIODS_REACHED: Final[str] = "max_periods"

SCHEDULE_COLUMNS: Final[List[str]] = ["month", "payment", "interest", "principal", "balance"]

PaymentRule = Callable[[float], float]


@dataclass(frozen=True)
class FixedPayment:
    """Constant payment every period (annuity-style loan)."""

    amount: float

    def __call__(self, balance: float) -> float:
        return self.amount


@dataclass(frozen=True)
class MinimumPayment:
    """Revolving-credit minimum: a share of the balance with a floor."""

    rate: float = MINIMUM_PAYMENT_RATE
    floor: float = MINIMUM_PAYMENT_FLOOR

    def __call__(self, balance: float) -> float:
        return max(balance * self.rate, self.floor)


@dataclass(frozen=True)
class AmortizationResult:
    months_to_payoff: Months
    total_interest: Amount
    interest_by_month: Tuple[float, ...] = field(default_factory=tuple)
    status: str = PAID_OFF

    @property
    def amortizes(self) -> bool:
        return self.status != NEVER_AMORTIZES

    @property
    def simulated_months(self) -> int:
        return len(self.interest_by_month)

    def interest_through(self, months: int) -> float:
        """Interest accrued over the first ``months`` simulated months.

        Stops at the end of the series; nothing is extrapolated.
        """
        if months <= 0:
            return 0.0
        return float(sum(self.interest_by_month[:months]))


def _never(interest_by_month: List[float]) -> AmortizationResult:
    return AmortizationResult(
        months_to_payoff=NEVER,
        total_interest=NEVER,
        interest_by_month=tuple(interest_by_month),
        status=NEVER_AMORTIZES,
    )


def _simulate(
    balance: float,
    period_rate: float,
    rule: PaymentRule,
    max_periods: int,
) -> Tuple[AmortizationResult, List[Dict[str, float]]]:
    """Shared month-by-month core.

    Returns the result together with the per-month rows, so the schedule
    table and the summary never drift apart.
    """
    rows: List[Dict[str, float]] = []
    interest_by_month: List[float] = []
    if balance <= 0:
        return AmortizationResult(0, 0.0), rows

    bal = float(balance)
    total_interest = 0.0
    months = 0
    while bal > PAYOFF_EPSILON and months < max_periods:
        due = rule(bal)
        interest = bal * period_rate
        total_interest += interest
        interest_by_month.append(interest)

        principal = min(due - interest, bal)
        if principal <= 0 and period_rate > 0:
            logger.debug("balance %.2f stopped shrinking at month %d", bal, months + 1)
            return _never(interest_by_month), rows

        bal = max(0.0, bal - max(0.0, principal))
        months += 1
        rows.append(
            {
                "month": months,
                "payment": float(interest + max(0.0, principal)),
                "interest": float(interest),
                "principal": float(max(0.0, principal)),
                "balance": float(bal),
            }
        )

    status = PAID_OFF
    if bal > PAYOFF_EPSILON:
        # Hit the safety cap: report what accumulated so far.
        logger.debug("no payoff within %d periods, balance %.2f left", max_periods, bal)
        status = MAX_PERIODS_REACHED

    result = AmortizationResult(
        months_to_payoff=months,
        total_interest=total_interest,
        interest_by_month=tuple(interest_by_month),
        status=status,
    )
    return result, rows


def amortize_fixed_payment(
    balance: float,
    period_rate: float,
    payment: float,
    max_periods: int = MAX_PERIODS,
) -> AmortizationResult:
    """Pay ``balance`` down with a constant ``payment`` each period.

    When ``payment`` cannot even cover the first period's interest the
    schedule is reported as never amortizing without iterating.
    """
    if balance > 0 and period_rate > 0 and payment <= period_rate * balance:
        logger.debug("payment %.2f never covers interest on %.2f", payment, balance)
        return _never([])
    result, _ = _simulate(balance, period_rate, FixedPayment(payment), max_periods)
    return result


def amortize_minimum_payment(
    balance: float,
    period_rate: float,
    max_periods: int = MAX_PERIODS,
) -> AmortizationResult:
    """Pay ``balance`` down with the credit-card minimum recomputed monthly."""
    result, _ = _simulate(balance, period_rate, MinimumPayment(), max_periods)
    return result


def amortization_schedule(
    balance: float,
    period_rate: float,
    rule: PaymentRule,
    max_periods: int = MAX_PERIODS,
) -> pd.DataFrame:
    """Generate the monthly schedule produced by the simulation core.

    Columns: month (1..N), payment, interest, principal, balance

    Notes
    -----
    - Stops early when the balance stops shrinking; the rows up to that
      point are kept.
    """
    _, rows = _simulate(balance, period_rate, rule, max_periods)
    if not rows:
        return pd.DataFrame(columns=SCHEDULE_COLUMNS, data=[])
    return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)


def aggregate_yearly(schedule: pd.DataFrame) -> pd.DataFrame:
    """Aggregate a monthly amortization schedule by year.

    Returns a DataFrame with columns: year, payment, interest, principal, end_balance
    """
    if schedule.empty:
        return pd.DataFrame(
            columns=["year", "payment", "interest", "principal", "end_balance"],
            data=[],
        )

    schedule = schedule.copy()
    schedule["year"] = (schedule["month"] - 1) // MONTHS_IN_YEAR + 1
    agg = (
        schedule.groupby("year", as_index=False)[["payment", "interest", "principal"]]
        .sum()
        .sort_values("year")
    )
    end_balances = (
        schedule.groupby("year", as_index=False)["balance"].last().rename(columns={"balance": "end_balance"})
    )
    return agg.merge(end_balances, on="year", how="left")


def yearly_balances(
    balance: float,
    period_rate: float,
    rule: PaymentRule,
    years: int,
) -> List[float]:
    """Outstanding balance at year 0..years.

    Once the schedule stops (paid off or no longer shrinking) the last
    balance is carried forward.
    """
    schedule = amortization_schedule(balance, period_rate, rule, max_periods=years * MONTHS_IN_YEAR)
    out = [max(0.0, float(balance))]
    last = out[0]
    for year in range(1, years + 1):
        month = year * MONTHS_IN_YEAR
        upto = schedule[schedule["month"] <= month] if not schedule.empty else schedule
        if not upto.empty:
            last = float(upto["balance"].iloc[-1])
        out.append(max(0.0, last))
    return out
