"""
System configuration for the hybrid storage simulation.

Locality and time-resolution constants live at module level; a run is
parameterised by a SystemConfig, which can also be loaded from YAML.
"""

import logging
import os
from dataclasses import dataclass, fields
from numbers import Real
from typing import Any, Dict, Tuple

import yaml

logger = logging.getLogger(__name__)


# ============================================================================
# CONSTANTS - depend on the locality and resolution of the dataset
# ============================================================================

SUMMER_MONTHS: Tuple[int, ...] = tuple(range(3, 11))  # months prioritising PtG
SAMPLES_PER_HOUR = 4          # time samples per hour (15 min resolution)
DYNAMIC_RANGE = 0.4           # lower bound of PtG dynamic range
MIN_BATTERY_RESERVE = 0.1     # battery fraction required to start PtG
FORECAST_DAYS = 3             # look-ahead window of the net energy forecast


# ============================================================================
# SYSTEM CONFIGURATION
# ============================================================================

@dataclass(frozen=True)
class SystemConfig:
    """
    Parameters for a hybrid battery / power-to-gas system.

    All energies are kWh per time step except p2g_capacity, which is the
    nominal hourly conversion capacity and is normalised to a per-step rate.
    Values are checked for type only: out-of-range values are accepted.
    """
    battery_capacity: float = 0.0       # kWh - short-term storage size
    p2g_capacity: float = 0.0           # e-kWh per hour - PtG size
    p2g_efficiency: float = 1.0         # kWh gas per e-kWh, one way
    g2p_efficiency: float = 1.0         # e-kWh per kWh gas, one way
    summer_months: Tuple[int, ...] = SUMMER_MONTHS
    samples_per_hour: int = SAMPLES_PER_HOUR
    dynamic_range: float = DYNAMIC_RANGE
    min_battery_reserve: float = MIN_BATTERY_RESERVE
    forecast_days: int = FORECAST_DAYS

    def __post_init__(self):
        for name in ('battery_capacity', 'p2g_capacity', 'p2g_efficiency',
                     'g2p_efficiency', 'samples_per_hour', 'dynamic_range',
                     'min_battery_reserve', 'forecast_days'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Real):
                raise TypeError(f"{name} must be a number, got {type(value).__name__}")
        if not self.summer_months:
            raise TypeError("summer_months must be a non-empty sequence of month numbers")
        # YAML gives lists; keep the frozen instance hashable
        try:
            months = tuple(int(m) for m in self.summer_months)
        except (TypeError, ValueError) as e:
            raise TypeError(f"summer_months must contain month numbers: {e}") from e
        object.__setattr__(self, 'summer_months', months)

    @property
    def p2g_rate(self) -> float:
        """PtG throughput per time step."""
        return self.p2g_capacity / self.samples_per_hour

    @property
    def last_summer_month(self) -> int:
        return self.summer_months[-1]

    @property
    def horizon_steps(self) -> int:
        """Number of steps covered by one forecast row."""
        return int(self.samples_per_hour * 24 * self.forecast_days)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def load_config(path: str) -> SystemConfig:
    """
    Read a SystemConfig from a YAML mapping.

    Keys must match SystemConfig field names; missing keys take defaults.

    Raises:
        FileNotFoundError: if path does not exist
        ValueError: if the document is not a mapping or has unknown keys
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, 'r') as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    known = {f.name for f in fields(SystemConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"Unknown config keys in {path}: {unknown}")

    config = SystemConfig(**raw)
    logger.info(f"Loaded config from {path}: {config.to_dict()}")
    return config
