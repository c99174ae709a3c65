"""
Net energy forecast used to gate power-to-gas.

The whole-series forecast is not known in practice but is precomputed to
simplify the simulation. Noise or bias can be added to the input columns to
emulate meteorological uncertainty.
"""

import logging

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from .config import SystemConfig

logger = logging.getLogger(__name__)


class NetEnergyForecast:
    """Cumulative net energy flow over a fixed look-ahead window"""

    def __init__(self, config: SystemConfig):
        self.config = config
        self.steps_ahead = config.horizon_steps

    def compute(self, inputs: np.ndarray) -> np.ndarray:
        """
        Forecast for every row of the input table.

        Args:
            inputs: (N, >=2) array, generation in column 0, load in column 1

        Returns:
            (N, steps_ahead) array; row t is the running sum of
            generation - load over steps t .. t+steps_ahead-1, with steps past
            the end of the series counted as zero. Without PtG capacity the
            forecast is unused and an all-zero array shaped like inputs is
            returned.
        """
        inputs = np.asarray(inputs, dtype=float)

        if self.config.p2g_rate <= 0:
            logger.debug("No seasonal storage configured, skipping forecast")
            return np.zeros_like(inputs)

        n_rows = inputs.shape[0]
        pad = np.zeros(self.steps_ahead)
        gen = np.concatenate([inputs[:, 0], pad])
        load = np.concatenate([inputs[:, 1], pad])
        net = gen - load

        windows = sliding_window_view(net, self.steps_ahead)[:n_rows]
        return np.cumsum(windows, axis=1)
