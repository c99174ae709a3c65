"""
Hybrid storage system simulation.

Ties the forecast, controller and storage components into a per-step
transition and runs it over a whole input table.
"""

import logging
from dataclasses import dataclass, replace
from typing import Dict, Any, Optional

import numpy as np

from .components import Battery, PowerToGas, StorageState
from .config import SystemConfig
from .control import SeasonalController
from .forecast import NetEnergyForecast
from .validation import validate_inputs

logger = logging.getLogger(__name__)

SUM_COLUMNS = ('short_level', 'long_level', 'waste_total')
DELTA_COLUMNS = ('delta_short', 'delta_long', 'delta_waste', 'delta_conversion')


@dataclass
class SimulationResult:
    """
    Output tables of a run, one row per input row.

    sums:   [battery, seasonal storage, cumulative curtailment]
    deltas: [battery change, seasonal change, curtailment, gas production]
    """
    sums: np.ndarray
    deltas: np.ndarray
    final_state: StorageState

    def __len__(self) -> int:
        return self.sums.shape[0]

    def column(self, name: str) -> np.ndarray:
        """Return one output column by name."""
        if name in SUM_COLUMNS:
            return self.sums[:, SUM_COLUMNS.index(name)]
        if name in DELTA_COLUMNS:
            return self.deltas[:, DELTA_COLUMNS.index(name)]
        raise KeyError(f"Unknown output column: {name}")

    def summary(self) -> Dict[str, Any]:
        """Headline figures for a run"""
        conversion = self.column('delta_conversion')
        long_level = self.column('long_level')
        delta_long = self.column('delta_long')

        # delta_long holds PtG input on conversion steps, so only count
        # negative entries as withdrawals
        withdrawn = -delta_long[delta_long < 0].sum()

        return {
            'steps': len(self),
            'final_short_level': float(self.final_state.short_level),
            'final_long_level': float(self.final_state.long_level),
            'total_curtailment': float(self.final_state.waste_total),
            'total_converted': float(conversion.sum()),
            'conversion_steps': int(np.count_nonzero(conversion > 0)),
            'min_long_level': float(long_level.min()),
            'total_withdrawn': float(withdrawn),
        }


class HybridEnergySystem:
    """
    Battery plus power-to-gas seasonal storage serving electrical and heat
    loads.

    Per step:
      1. The controller sets the PtG signal from the forecast, battery level
         and month
      2. PtG either adds load or passes the mismatch through
      3. The battery absorbs surplus or covers deficit
      4. Remaining surplus is curtailed; remaining deficit is withdrawn from
         gas at the gas-to-power efficiency
      5. Heat load is always drawn from gas storage
    """

    def __init__(self, config: SystemConfig, controller: Optional[SeasonalController] = None):
        self.config = config
        self.battery = Battery("Battery", config)
        self.p2g = PowerToGas("PowerToGas", config)
        self.controller = controller or SeasonalController(config)
        self.forecaster = NetEnergyForecast(config)

    def step(self, state: StorageState, inputs, forecast_row) -> StorageState:
        """
        Advance the storage state by one time step.

        Args:
            state: Storage state at the end of the previous step
            inputs: [generation, electrical load, heat load, month]
            forecast_row: Forecast row for this step

        Returns:
            Storage state at the end of this step
        """
        gen, eload, heat_load, month = inputs[0], inputs[1], inputs[2], inputs[3]

        mismatch = gen - eload

        control = self.controller.compute_control({
            'forecast': forecast_row,
            'short_level': state.short_level,
            'month': int(month),
        })

        p2g_out = self.p2g.update(state, {'power_input': mismatch,
                                          'ctrl': control['p2g_ctrl']})
        battery_out = self.battery.update(p2g_out['state'],
                                          {'net_energy': p2g_out['remainder']})
        state = battery_out['state']
        remainder = battery_out['remainder']

        if remainder < 0:
            # Slow gas-to-power startup is neglected; battery and forecast
            # are expected to give enough notice in practice
            state = self.p2g.withdraw(state, remainder)
        else:
            state = replace(state,
                            waste_total=state.waste_total + remainder,
                            delta_waste=remainder)

        # Heat taken entirely from gas storage
        return replace(state, long_level=state.long_level - heat_load)

    def run(self, input_data, initial_state: Optional[StorageState] = None) -> SimulationResult:
        """
        Simulate the whole input table.

        Args:
            input_data: (N, 4) table of [generation, electrical load,
                heat load, month] in kWh per time step
            initial_state: Starting storage state, empty storage by default

        Returns:
            SimulationResult with (N, 3) sums and (N, 4) deltas
        """
        table = validate_inputs(input_data)
        n_rows = table.shape[0]

        logger.info(f"Running {n_rows} steps: {self.battery.name}={self.battery.get_params()}, "
                    f"{self.p2g.name}={self.p2g.get_params()}, "
                    f"horizon={self.forecaster.steps_ahead} steps")

        sums = np.zeros((n_rows, len(SUM_COLUMNS)))
        deltas = np.zeros((n_rows, len(DELTA_COLUMNS)))
        forecast = self.forecaster.compute(table)

        state = initial_state or StorageState()
        for x in range(n_rows):
            state = self.step(state, table[x, :], forecast[x, :])
            sums[x, :] = state.sums()
            deltas[x, :] = state.deltas()

        result = SimulationResult(sums=sums, deltas=deltas, final_state=state)
        logger.info(f"Run complete: {result.summary()}")
        return result


def simulate(input_data, battery_capacity: float, p2g_capacity: float,
             p2g_efficiency: float, g2p_efficiency: float) -> SimulationResult:
    """Convenience wrapper: build a system from the four sizing parameters and run it."""
    config = SystemConfig(
        battery_capacity=battery_capacity,
        p2g_capacity=p2g_capacity,
        p2g_efficiency=p2g_efficiency,
        g2p_efficiency=g2p_efficiency,
    )
    return HybridEnergySystem(config).run(input_data)
