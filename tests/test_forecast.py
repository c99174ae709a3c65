"""
Unit tests for the net energy forecast.
Validates window sums, zero padding at the series end and the no-PtG case.
"""

import numpy as np

from hybrid_storage.config import SystemConfig
from hybrid_storage.forecast import NetEnergyForecast


def _inputs(gen, load):
    n = len(gen)
    return np.column_stack([gen, load, np.zeros(n), np.full(n, 6)])


class TestForecastShape:

    def test_default_horizon_is_three_days(self):
        forecast = NetEnergyForecast(SystemConfig(p2g_capacity=4.0))
        fcast = forecast.compute(_inputs(np.ones(10), np.zeros(10)))

        assert forecast.steps_ahead == 4 * 24 * 3
        assert fcast.shape == (10, 288)

    def test_one_day_horizon(self):
        forecast = NetEnergyForecast(SystemConfig(p2g_capacity=4.0, forecast_days=1))
        fcast = forecast.compute(_inputs(np.ones(5), np.zeros(5)))

        assert fcast.shape == (5, 96)


class TestForecastValues:

    def test_cumulative_sum_with_zero_padding(self):
        """Rows accumulate generation - load and stop changing past the series end"""
        config = SystemConfig(p2g_capacity=4.0, samples_per_hour=1, forecast_days=1)
        fcast = NetEnergyForecast(config).compute(
            _inputs([5.0, 1.0, 2.0], [2.0, 3.0, 0.0]))

        assert fcast.shape == (3, 24)
        np.testing.assert_array_equal(fcast[0, :4], [3.0, 1.0, 3.0, 3.0])
        np.testing.assert_array_equal(fcast[1, :3], [-2.0, 0.0, 0.0])
        assert np.all(fcast[0, 2:] == 3.0)
        assert np.all(fcast[2, :] == 2.0)

    def test_matches_row_by_row_window(self):
        """Vectorised forecast equals an explicit per-row cumulative sum"""
        config = SystemConfig(p2g_capacity=2.0, samples_per_hour=1, forecast_days=1)
        rng = np.random.default_rng(7)
        gen = rng.random(60) * 5
        load = rng.random(60) * 4
        fcast = NetEnergyForecast(config).compute(_inputs(gen, load))

        horizon = 24
        gen_pad = np.concatenate([gen, np.zeros(horizon)])
        load_pad = np.concatenate([load, np.zeros(horizon)])
        for t in range(60):
            expected = np.cumsum(gen_pad[t:t + horizon] - load_pad[t:t + horizon])
            np.testing.assert_array_equal(fcast[t], expected)


class TestNoSeasonalStorage:
    """Forecasting is skipped without PtG capacity"""

    def test_zero_capacity_gives_zeros_shaped_like_inputs(self):
        inputs = _inputs(np.full(8, 5.0), np.ones(8))
        fcast = NetEnergyForecast(SystemConfig(p2g_capacity=0.0)).compute(inputs)

        assert fcast.shape == inputs.shape
        assert np.all(fcast == 0.0)

    def test_negative_capacity_treated_as_none(self):
        inputs = _inputs(np.full(4, 5.0), np.ones(4))
        fcast = NetEnergyForecast(SystemConfig(p2g_capacity=-1.0)).compute(inputs)

        assert np.all(fcast == 0.0)
