from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final

from .conditions import UNDEFINED_SCHEDULE, Amount


logger = logging.getLogger(__name__)

MONTHS_IN_YEAR: Final[int] = 12


def monthly_rate(apr_pct: float) -> float:
    """Convert an APR in percent (e.g. 24 for 24%) to a monthly decimal rate."""
    return apr_pct / 100.0 / MONTHS_IN_YEAR


def payment(rate: float, periods: int, present_value: float) -> Amount:
    """Compute the fixed periodic payment for a fully amortizing loan.

    Parameters
    ----------
    rate : float
        Interest rate per period as a decimal (already divided to the period,
        e.g. 0.24 / 12 for a monthly schedule at 24% APR).
    periods : int
        Number of payments.
    present_value : float
        Amount borrowed.

    Returns
    -------
    float or Condition
        The constant payment per period, or ``UNDEFINED_SCHEDULE`` when
        ``periods`` is zero and no amortization is possible.
    """
    if periods <= 0:
        logger.debug("payment undefined for %s periods", periods)
        return UNDEFINED_SCHEDULE
    if rate == 0:
        return present_value / periods
    try:
        factor = (1 + rate) ** periods
    except OverflowError:
        # Very long terms: the payment tends to the interest on the principal.
        logger.debug("annuity factor overflows for %s periods at %s", periods, rate)
        return present_value * rate
    return present_value * (rate * factor) / (factor - 1)


@dataclass(frozen=True)
class LoanTerms:
    principal: float
    apr: float  # percent
    term_months: int

    @property
    def monthly_rate(self) -> float:
        return monthly_rate(self.apr)

    def scheduled_payment(self) -> Amount:
        return payment(self.monthly_rate, self.term_months, self.principal)
