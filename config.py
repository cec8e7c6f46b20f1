from __future__ import annotations

import yaml
from pathlib import Path
from typing import Any, Dict, Tuple

from debt_consolidation.core.errors import ConfigError
from debt_consolidation.core.horizons import DEFAULT_HORIZONS, normalize_horizons

# Project root (parent of this file)
BASE_DIR = Path(__file__).resolve().parent
CONFIG_PATH = BASE_DIR / "config.yaml"


def load_config(path: Path = CONFIG_PATH) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ConfigError(f"{path.name} must contain a mapping, got {type(data).__name__}")
        return data


def _months(cfg: Dict[str, Any], key: str, default: Tuple[int, ...]) -> Tuple[int, ...]:
    values = cfg.get(key, default)
    if not isinstance(values, (list, tuple)):
        raise ConfigError(f"{key} must be a list of months")
    return normalize_horizons(values)


CFG = load_config()

# Current revolving debt
TOTAL_DEBT: float = float(CFG.get("total_debt", 25_000))
CURRENT_APR: float = float(CFG.get("current_apr", 24.0))
CURRENT_PAYMENT: float = float(CFG.get("current_payment", 750))

# Extra cash flow
ADDITIONAL_CASH_FLOW: float = float(CFG.get("additional_cash_flow", 0))
ADDITIONAL_CASH_FLOW_PCT: float = float(CFG.get("additional_cash_flow_pct", 0))

# Consolidation loan
NEW_APR: float = float(CFG.get("new_apr", 9.0))
NEW_TERM_YEARS: float = float(CFG.get("new_term_years", 5))
REFI_COSTS: float = float(CFG.get("refi_costs", 500))

# Allocation (%)
EXTRA_PRINCIPAL_PCT: float = float(CFG.get("extra_principal_pct", 50))
INVESTING_PCT: float = float(CFG.get("investing_pct", 25))
EMERGENCY_PCT: float = float(CFG.get("emergency_pct", 15))
SAVINGS_PCT: float = float(CFG.get("savings_pct", 10))

# Returns
INVESTMENT_RETURN: float = float(CFG.get("investment_return", 7.0))
SAVINGS_RETURN: float = float(CFG.get("savings_return", 4.0))

# Reporting
HORIZON_MONTHS: Tuple[int, ...] = _months(CFG, "horizon_months", DEFAULT_HORIZONS)
CHART_MONTHS: Tuple[int, ...] = _months(CFG, "chart_months", (3, 6, 12, 24, 36, 48, 60))
PAYDOWN_CHART_YEARS: int = int(CFG.get("paydown_chart_years", 40))

LOG_LEVEL: str = str(CFG.get("log_level", "INFO")).upper()
