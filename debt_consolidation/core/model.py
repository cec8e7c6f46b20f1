from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Dict, List, Optional, Tuple

import pandas as pd

from .allocation import AllocationWeights, MonthlyContributions, allocate, freed_cash_flow
from .amortization import (
    AmortizationResult,
    FixedPayment,
    MinimumPayment,
    amortization_schedule,
    amortize_fixed_payment,
    amortize_minimum_payment,
    yearly_balances,
)
from .buckets import BucketState, bucket_series, simulate_buckets
from .comparison import ComparisonResult, compare
from .conditions import is_finite, value_or
from .horizons import DEFAULT_HORIZONS, HorizonSnapshot, horizon_table, normalize_horizons, snapshots
from .payment import MONTHS_IN_YEAR, LoanTerms, monthly_rate
from .utils import add_months, non_negative, round_half_up


logger = logging.getLogger(__name__)

'''
All rates are annual percentages (24 means 24%), all amounts are monthly
dollars unless named otherwise.
'''

@dataclass
class ProjectionInputs:
    # Current revolving debt
    total_debt: float = 25_000.0
    current_apr: float = 24.0
    current_payment: float = 750.0

    # Extra cash flow on top of what the new loan frees up
    additional_cash_flow: float = 0.0
    additional_cash_flow_pct: float = 0.0

    # Consolidation loan
    new_apr: float = 9.0
    new_term_years: float = 5.0
    refi_costs: float = 500.0

    # Allocation of the freed cash flow (relative weights, usually percents)
    extra_principal_pct: float = 50.0
    investing_pct: float = 25.0
    emergency_pct: float = 15.0
    savings_pct: float = 10.0

    # Returns
    investment_return: float = 7.0
    savings_return: float = 4.0

    # Reporting horizons in months
    horizons: Tuple[int, ...] = DEFAULT_HORIZONS

    def sanitized(self) -> "ProjectionInputs":
        """Copy with every amount and rate clamped to zero or above."""
        return replace(
            self,
            total_debt=non_negative(self.total_debt),
            current_apr=non_negative(self.current_apr),
            current_payment=non_negative(self.current_payment),
            additional_cash_flow=non_negative(self.additional_cash_flow),
            additional_cash_flow_pct=non_negative(self.additional_cash_flow_pct),
            new_apr=non_negative(self.new_apr),
            new_term_years=non_negative(self.new_term_years),
            refi_costs=non_negative(self.refi_costs),
            extra_principal_pct=non_negative(self.extra_principal_pct),
            investing_pct=non_negative(self.investing_pct),
            emergency_pct=non_negative(self.emergency_pct),
            savings_pct=non_negative(self.savings_pct),
            investment_return=non_negative(self.investment_return),
            savings_return=non_negative(self.savings_return),
            horizons=normalize_horizons(self.horizons),
        )

    @property
    def weights(self) -> AllocationWeights:
        return AllocationWeights(
            extra_principal=self.extra_principal_pct,
            investing=self.investing_pct,
            emergency=self.emergency_pct,
            savings=self.savings_pct,
        )


@dataclass(frozen=True)
class Projection:
    freed_cash_flow: float
    contributions: MonthlyContributions
    loan_amount: float
    term_months: int
    scheduled_payment: float
    baseline: AmortizationResult
    refi: AmortizationResult
    payoff_month: int
    interest_saved_total: float
    buckets_at_payoff: BucketState
    comparison: ComparisonResult
    snapshots: List[HorizonSnapshot] = field(default_factory=list)

    @property
    def account_growth(self) -> float:
        # Emergency money is a reserve, not growth.
        return self.buckets_at_payoff.invest + self.buckets_at_payoff.savings

    @property
    def total_impact(self) -> float:
        return self.interest_saved_total + self.account_growth

    @property
    def time_saved_months(self) -> int:
        if not is_finite(self.baseline.months_to_payoff):
            return 0
        return max(0, int(self.baseline.months_to_payoff) - self.payoff_month)  # type: ignore[arg-type]

    def payoff_date(self, start: Optional[date] = None) -> date:
        start = start or date.today()
        return add_months(date(start.year, start.month, 1), self.payoff_month)

    def to_dict(self) -> Dict[str, object]:
        return {
            "freed_cash_flow": self.freed_cash_flow,
            **{f"monthly_{k}": v for k, v in self.contributions.as_dict().items()},
            "loan_amount": self.loan_amount,
            "term_months": self.term_months,
            "scheduled_payment": self.scheduled_payment,
            "payoff_month": self.payoff_month,
            "interest_saved_total": self.interest_saved_total,
            "account_growth": self.account_growth,
            "total_impact": self.total_impact,
            "time_saved_months": self.time_saved_months,
        }


class ConsolidationModel:
    def __init__(self, inputs: ProjectionInputs):
        self.inputs = inputs.sanitized()

        self.loan = LoanTerms(
            principal=self.inputs.total_debt + self.inputs.refi_costs,
            apr=self.inputs.new_apr,
            term_months=max(0, round_half_up(self.inputs.new_term_years * MONTHS_IN_YEAR)),
        )
        # A zero-term loan has no schedule; treat its payment as zero.
        self.scheduled_payment = value_or(self.loan.scheduled_payment())

        self.current_rate = monthly_rate(self.inputs.current_apr)
        self.freed = freed_cash_flow(
            self.inputs.current_payment,
            self.scheduled_payment,
            self.inputs.additional_cash_flow,
            self.inputs.additional_cash_flow_pct,
        )
        self.contributions = allocate(self.freed, self.inputs.weights)
        self.actual_payment = max(0.0, self.scheduled_payment + self.contributions.extra_principal)

    # ------------------------- Schedules ------------------------- #
    def baseline(self) -> AmortizationResult:
        return amortize_minimum_payment(self.inputs.total_debt, self.current_rate)

    def refinance(self) -> AmortizationResult:
        return amortize_fixed_payment(self.loan.principal, self.loan.monthly_rate, self.actual_payment)

    @staticmethod
    def payoff_month_of(refi: AmortizationResult) -> int:
        return int(value_or(refi.months_to_payoff, 0))

    # ------------------------- Projection ------------------------- #
    def run(self) -> Projection:
        base = self.baseline()
        refi = self.refinance()
        payoff = self.payoff_month_of(refi)
        if not refi.amortizes:
            logger.info("consolidation payment %.2f never retires %.2f", self.actual_payment, self.loan.principal)

        interest_saved = value_or(base.total_interest) - value_or(refi.total_interest)
        c = self.contributions
        at_payoff = simulate_buckets(
            payoff, payoff, c, self.inputs.investment_return, self.inputs.savings_return
        )
        snaps = snapshots(
            self.inputs.horizons,
            refi,
            base,
            c,
            payoff,
            self.inputs.investment_return,
            self.inputs.savings_return,
        )
        return Projection(
            freed_cash_flow=self.freed,
            contributions=c,
            loan_amount=self.loan.principal,
            term_months=self.loan.term_months,
            scheduled_payment=self.scheduled_payment,
            baseline=base,
            refi=refi,
            payoff_month=payoff,
            interest_saved_total=interest_saved,
            buckets_at_payoff=at_payoff,
            snapshots=snaps,
            comparison=self.comparison(),
        )

    def comparison(self) -> ComparisonResult:
        return compare(
            total_debt=self.inputs.total_debt,
            current_apr=self.inputs.current_apr,
            current_payment=self.inputs.current_payment,
            loan_amount=self.loan.principal,
            new_apr=self.inputs.new_apr,
        )

    # ------------------------- Tables for display ------------------------- #
    def horizon_table(self, projection: Optional[Projection] = None) -> pd.DataFrame:
        projection = projection or self.run()
        return horizon_table(projection.snapshots)

    def refinance_schedule(self) -> pd.DataFrame:
        return amortization_schedule(
            self.loan.principal, self.loan.monthly_rate, FixedPayment(self.actual_payment)
        )

    def baseline_schedule(self) -> pd.DataFrame:
        return amortization_schedule(self.inputs.total_debt, self.current_rate, MinimumPayment())

    def paydown_by_year(self, years: int) -> pd.DataFrame:
        """Remaining balance of both debts at each year end, year 0 included."""
        cc = yearly_balances(self.inputs.total_debt, self.current_rate, MinimumPayment(), years)
        loan = yearly_balances(
            self.loan.principal, self.loan.monthly_rate, FixedPayment(self.actual_payment), years
        )
        return pd.DataFrame(
            {"year": list(range(0, years + 1)), "credit_card": cc, "consolidation": loan}
        )

    def bucket_growth(self, months: int, payoff_month: Optional[int] = None) -> pd.DataFrame:
        payoff = self.payoff_month_of(self.refinance()) if payoff_month is None else payoff_month
        return bucket_series(
            months,
            payoff,
            self.contributions,
            self.inputs.investment_return,
            self.inputs.savings_return,
        )
