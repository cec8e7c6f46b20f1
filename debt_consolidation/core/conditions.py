from __future__ import annotations

from enum import Enum
from typing import Union


class Condition(Enum):
    """Non-numeric outcomes of a schedule computation.

    These are returned in place of a number, never raised. Arithmetic on a
    ``Condition`` fails loudly, so callers must go through ``value_or``.
    """

    UNDEFINED_SCHEDULE = "undefined_schedule"  # zero-period loan term
    NEVER_AMORTIZES = "never_amortizes"  # payment never covers interest

    def __repr__(self) -> str:
        return f"<{self.name}>"


UNDEFINED_SCHEDULE = Condition.UNDEFINED_SCHEDULE
NEVER = Condition.NEVER_AMORTIZES

Amount = Union[float, Condition]
Months = Union[int, Condition]


def is_finite(value: object) -> bool:
    return not isinstance(value, Condition)


def value_or(value: object, default: float = 0.0) -> float:
    """Return ``value`` as a float, or ``default`` when it is a condition."""
    if isinstance(value, Condition):
        return default
    return float(value)  # type: ignore[arg-type]
