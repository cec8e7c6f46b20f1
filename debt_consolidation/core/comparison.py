from __future__ import annotations

from dataclasses import dataclass

from .amortization import amortize_fixed_payment
from .conditions import NEVER, Amount, Months, is_finite, value_or
from .payment import monthly_rate


@dataclass(frozen=True)
class ScheduleSummary:
    balance: float
    apr: float
    payment: float
    months_to_payoff: Months
    total_interest: Amount

    @property
    def total_paid(self) -> Amount:
        if not is_finite(self.total_interest):
            return NEVER
        return self.balance + float(self.total_interest)  # type: ignore[arg-type]

    @property
    def amortizes(self) -> bool:
        return is_finite(self.months_to_payoff)


@dataclass(frozen=True)
class ComparisonResult:
    traditional: ScheduleSummary
    consolidation: ScheduleSummary

    @property
    def interest_saved(self) -> float:
        if not self.traditional.amortizes:
            return 0.0
        return max(
            0.0,
            value_or(self.traditional.total_interest) - value_or(self.consolidation.total_interest),
        )

    @property
    def months_saved(self) -> int:
        if not self.traditional.amortizes:
            return 0
        return max(
            0,
            int(value_or(self.traditional.months_to_payoff))
            - int(value_or(self.consolidation.months_to_payoff)),
        )


def _same_payment_schedule(balance: float, apr: float, payment: float) -> ScheduleSummary:
    if balance <= 0:
        return ScheduleSummary(balance, apr, payment, 0, 0.0)
    if payment <= 0:
        # Nothing is ever paid toward a positive balance.
        return ScheduleSummary(balance, apr, payment, NEVER, NEVER)
    result = amortize_fixed_payment(balance, monthly_rate(apr), payment)
    return ScheduleSummary(balance, apr, payment, result.months_to_payoff, result.total_interest)


def compare(
    total_debt: float,
    current_apr: float,
    current_payment: float,
    loan_amount: float,
    new_apr: float,
) -> ComparisonResult:
    """Keep today's payment and only swap the rate.

    The consolidation schedule pays ``current_payment`` against
    ``loan_amount`` at ``new_apr``, isolating the effect of the lower rate
    from any cash-flow reallocation.
    """
    return ComparisonResult(
        traditional=_same_payment_schedule(total_debt, current_apr, current_payment),
        consolidation=_same_payment_schedule(loan_amount, new_apr, current_payment),
    )


def compounding_message(current_apr: float, new_apr: float) -> str:
    if current_apr > new_apr:
        return (
            f"Lower APR ({new_apr:g}% vs {current_apr:g}%) means less interest "
            "compounds monthly, saving you money."
        )
    return "Lower interest rate reduces compound interest accumulation over time."
