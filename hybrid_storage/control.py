"""
Control strategy for seasonal storage.
Decides each step how hard power-to-gas may run.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any

import numpy as np

from .config import SystemConfig


class Controller(ABC):
    """Interface for storage dispatch signals consumed by HybridEnergySystem"""

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def compute_control(self, system_state: Dict[str, Any]) -> Dict[str, Any]:
        """
        Derive this step's dispatch signal from storage levels and the outlook.

        Args:
            system_state: Battery level, calendar month and the net energy
                forecast row for the current step

        Returns:
            Dictionary holding at least 'p2g_ctrl', the power-to-gas signal
            in [0, 1]
        """
        pass


class SeasonalController(Controller):
    """
    Forecast-driven power-to-gas controller with two activation tiers.

    Outside the summer window the signal is always 0. Inside it, PtG may run
    at full rate if the battery plus the forecast surplus stays ahead of
    full-rate consumption for the whole horizon, or at the reduced
    dynamic-range rate if it stays ahead of reduced-rate consumption.
    Full-rate runs are not started in the final summer month.
    """

    def __init__(self, config: SystemConfig, name: str = "SeasonalController"):
        super().__init__(name)
        self.summer_months = config.summer_months
        self.last_summer_month = config.last_summer_month
        self.p2g_rate = config.p2g_rate
        self.dynamic_range = config.dynamic_range

    def compute_control(self, system_state: Dict[str, Any]) -> Dict[str, Any]:
        """
        System state expected:
            - forecast: Forecast row for this step (kWh, cumulative)
            - short_level: Current battery charge (kWh)
            - month: Calendar month (1-12)
        """
        month = system_state.get('month')
        short_level = system_state.get('short_level', 0.0)

        if month not in self.summer_months:
            return {
                'p2g_ctrl': 0.0,
                'full_rate_feasible': False,
                'throttled_feasible': False,
            }

        forecast = np.asarray(system_state['forecast'], dtype=float)
        # Cumulative load of PtG running at full rate from this step on
        full_p2g = np.arange(1, forecast.size + 1) * self.p2g_rate
        net_bt = forecast + short_level

        full_rate = bool(np.all((net_bt - full_p2g) > 0)) and month != self.last_summer_month
        throttled = bool(np.all((net_bt - full_p2g * self.dynamic_range) > 0))

        ctrl = max(float(full_rate), float(throttled) * self.dynamic_range)

        return {
            'p2g_ctrl': ctrl,
            'full_rate_feasible': full_rate,
            'throttled_feasible': throttled,
        }
