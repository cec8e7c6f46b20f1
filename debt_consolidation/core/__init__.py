from .payment import LoanTerms, monthly_rate, payment
from .conditions import NEVER, UNDEFINED_SCHEDULE, Condition, is_finite, value_or
from .amortization import (
	AmortizationResult,
	FixedPayment,
	MinimumPayment,
	amortize_fixed_payment,
	amortize_minimum_payment,
	amortization_schedule,
	aggregate_yearly,
)
from .allocation import AllocationWeights, MonthlyContributions, allocate, freed_cash_flow
from .buckets import BucketState, simulate_buckets, bucket_series
from .horizons import HorizonSnapshot, snapshot, snapshots, normalize_horizons
from .comparison import ComparisonResult, compare
from .errors import ConfigError
from .model import ProjectionInputs, Projection, ConsolidationModel

__all__ = [
	"LoanTerms",
	"monthly_rate",
	"payment",
	"NEVER",
	"UNDEFINED_SCHEDULE",
	"Condition",
	"is_finite",
	"value_or",
	"AmortizationResult",
	"FixedPayment",
	"MinimumPayment",
	"amortize_fixed_payment",
	"amortize_minimum_payment",
	"amortization_schedule",
	"aggregate_yearly",
	"AllocationWeights",
	"MonthlyContributions",
	"allocate",
	"freed_cash_flow",
	"BucketState",
	"simulate_buckets",
	"bucket_series",
	"HorizonSnapshot",
	"snapshot",
	"snapshots",
	"normalize_horizons",
	"ComparisonResult",
	"compare",
	"ConfigError",
	"ProjectionInputs",
	"Projection",
	"ConsolidationModel",
]
