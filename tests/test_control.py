"""
Unit tests for the seasonal power-to-gas controller.
Validates month gating and the full-rate / dynamic-range tiers.
"""

import pytest
import numpy as np

from hybrid_storage.config import SystemConfig
from hybrid_storage.control import SeasonalController


def _controller(**overrides):
    """Controller for PtG at 1 kWh per step."""
    defaults = dict(battery_capacity=10.0, p2g_capacity=4.0)
    defaults.update(overrides)
    return SeasonalController(SystemConfig(**defaults))


def _ctrl(controller, forecast, short_level=0.0, month=6):
    return controller.compute_control({
        'forecast': np.asarray(forecast, dtype=float),
        'short_level': short_level,
        'month': month,
    })


class TestMonthGating:

    @pytest.mark.parametrize("month", [1, 2, 11, 12])
    def test_no_signal_outside_summer(self, month):
        """Huge surplus outside March-October still gives no signal"""
        controller = _controller()
        result = _ctrl(controller, np.arange(1, 6) * 1000.0, short_level=10.0, month=month)

        assert result['p2g_ctrl'] == 0.0

    @pytest.mark.parametrize("month", [3, 6, 9])
    def test_full_signal_inside_summer(self, month):
        controller = _controller()
        result = _ctrl(controller, [10.0, 20.0, 30.0, 40.0, 50.0], month=month)

        assert result['p2g_ctrl'] == 1.0


class TestActivationTiers:

    def test_full_rate_when_surplus_covers_horizon(self):
        controller = _controller()
        result = _ctrl(controller, [10.0, 20.0, 30.0, 40.0, 50.0])

        assert result['full_rate_feasible']
        assert result['p2g_ctrl'] == 1.0

    def test_dynamic_range_when_only_reduced_rate_fits(self):
        """Flat 3 kWh surplus supports 0.4 kWh/step for 5 steps but not 1 kWh/step"""
        controller = _controller()
        result = _ctrl(controller, [3.0] * 5)

        assert not result['full_rate_feasible']
        assert result['throttled_feasible']
        assert result['p2g_ctrl'] == pytest.approx(0.4)

    def test_no_signal_on_forecast_deficit(self):
        controller = _controller()
        result = _ctrl(controller, [-1.0, -2.0, -3.0, -4.0, -5.0], short_level=2.0)

        assert result['p2g_ctrl'] == 0.0

    def test_battery_level_counts_toward_surplus(self):
        controller = _controller()

        assert _ctrl(controller, [0.0] * 5, short_level=0.0)['p2g_ctrl'] == 0.0
        assert _ctrl(controller, [0.0] * 5, short_level=10.0)['p2g_ctrl'] == 1.0

    def test_margin_must_be_strictly_positive(self):
        """Equality with full-rate consumption is not enough"""
        controller = _controller()
        result = _ctrl(controller, [1.0, 2.0, 3.0])

        assert not result['full_rate_feasible']
        assert result['p2g_ctrl'] == pytest.approx(0.4)


class TestLastSummerMonth:

    def test_no_full_rate_in_october(self):
        """Full-rate starts are blocked in the final summer month"""
        controller = _controller()
        result = _ctrl(controller, [10.0, 20.0, 30.0, 40.0, 50.0], month=10)

        assert not result['full_rate_feasible']
        assert result['p2g_ctrl'] == pytest.approx(0.4)

    def test_custom_summer_window(self):
        controller = _controller(summer_months=(5, 6, 7))

        assert _ctrl(controller, [10.0, 20.0], month=4)['p2g_ctrl'] == 0.0
        assert _ctrl(controller, [10.0, 20.0], month=6)['p2g_ctrl'] == 1.0
        assert _ctrl(controller, [10.0, 20.0], month=7)['p2g_ctrl'] == pytest.approx(0.4)
