"""
Storage components for the hybrid battery / power-to-gas system.
Each component applies one allocation stage to the storage state.

Allocation chain per time step:
  [mismatch] → [PowerToGas] → [Battery] → curtailment or gas withdrawal
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Dict, Any

import numpy as np

from .config import SystemConfig

logger = logging.getLogger(__name__)


# ============================================================================
# STORAGE STATE
# ============================================================================

@dataclass(frozen=True)
class StorageState:
    """
    Storage levels and last-step changes, in kWh.

    A new state is produced by every allocation stage; nothing mutates a
    state in place.
    """
    short_level: float = 0.0        # battery charge
    long_level: float = 0.0         # seasonal (gas) storage, unbounded
    waste_total: float = 0.0        # cumulative curtailment

    delta_short: float = 0.0        # battery charge (+) / discharge (-)
    delta_long: float = 0.0         # PtG input, or withdrawn deficit (-)
    delta_waste: float = 0.0        # curtailment on last surplus step
    delta_conversion: float = 0.0   # gas production input

    def sums(self) -> np.ndarray:
        return np.array([self.short_level, self.long_level, self.waste_total])

    def deltas(self) -> np.ndarray:
        return np.array([self.delta_short, self.delta_long,
                         self.delta_waste, self.delta_conversion])


# ============================================================================
# BASE CLASS
# ============================================================================

class Component(ABC):
    """Base class for all storage components"""

    def __init__(self, name: str, config: SystemConfig):
        self.name = name
        self.config = config

    @abstractmethod
    def update(self, state: StorageState, inputs: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply this component to one time step.

        Args:
            state: Storage state entering this stage
            inputs: Dictionary of input values from the previous stage

        Returns:
            Dictionary with at least 'state' (the new StorageState) and
            'remainder' (energy still unallocated after this stage)
        """
        pass

    @abstractmethod
    def get_params(self) -> Dict[str, Any]:
        """Return component parameters for monitoring/logging"""
        pass


# ============================================================================
# BATTERY (SHORT-TERM STORAGE)
# ============================================================================

class Battery(Component):
    """
    Short-term storage with ideal (lossless) efficiency.
    Charges on positive input up to capacity, discharges on negative input
    down to empty. Whatever it cannot take or give is passed on.
    """

    def __init__(self, name: str, config: SystemConfig):
        super().__init__(name, config)
        self.capacity = config.battery_capacity

    def update(self, state: StorageState, inputs: Dict[str, Any]) -> Dict[str, Any]:
        """
        Charge or discharge the battery.

        Inputs expected:
            - net_energy: Energy left after PtG allocation (kWh, signed)
        """
        net_energy = inputs.get('net_energy', 0.0)

        if net_energy > 0:
            delta_charge = min(net_energy, self.capacity - state.short_level)
        else:
            delta_charge = max(-1 * state.short_level, net_energy)

        new_state = replace(
            state,
            short_level=state.short_level + delta_charge,
            delta_short=delta_charge,
        )
        return {
            'state': new_state,
            'remainder': net_energy - delta_charge,
            'delta_charge': delta_charge,
        }

    def get_params(self) -> Dict[str, Any]:
        return {'capacity': self.capacity}


# ============================================================================
# POWER-TO-GAS / GAS-TO-POWER (SEASONAL STORAGE)
# ============================================================================

class PowerToGas(Component):
    """
    Seasonal storage fed by power-to-gas and drawn down by gas-to-power.

    Conversion runs at a fixed throughput set by the control signal. It
    never draws from the battery itself: the remainder it hands on is
    covered (or absorbed) by the battery stage. Start-up and shut-down
    dynamics are neglected.
    """

    def __init__(self, name: str, config: SystemConfig):
        super().__init__(name, config)
        self.rate = config.p2g_rate
        self.p2g_efficiency = config.p2g_efficiency
        self.g2p_efficiency = config.g2p_efficiency
        self.battery_capacity = config.battery_capacity
        self.min_reserve = config.min_battery_reserve

    def should_run(self, state: StorageState, ctrl: float) -> bool:
        """
        Two separate conditions to run:
          - continue if already running and the signal has not dropped to 0
          - start only on a full-power signal with enough battery reserve
        Without conversion capacity (rate <= 0) it never runs.
        """
        if self.rate <= 0:
            return False
        reserve = self.battery_capacity * self.min_reserve
        continuing = ctrl > 0 and state.delta_conversion > 0
        starting = (ctrl == 1 and state.delta_conversion == 0
                    and state.short_level > reserve)
        return continuing or starting

    def update(self, state: StorageState, inputs: Dict[str, Any]) -> Dict[str, Any]:
        """
        Divert energy into gas storage.

        Inputs expected:
            - power_input: Net generation minus electrical load (kWh, signed)
            - ctrl: Control signal from the seasonal controller (0-1)
        """
        power_input = inputs.get('power_input', 0.0)
        ctrl = inputs.get('ctrl', 0.0)

        min_throughput = self.rate * ctrl  # dynamic range dictated by ctrl

        if self.should_run(state, ctrl):
            headroom = state.short_level - self.battery_capacity * self.min_reserve
            p2g = float(np.clip(headroom, min_throughput, min_throughput))
        else:
            p2g = 0.0

        running = max(p2g, 0.0)
        if (running > 0) != (state.delta_conversion > 0):
            logger.debug(f"{self.name}: conversion {'started' if running > 0 else 'stopped'} "
                         f"(ctrl={ctrl}, battery={state.short_level:.3f})")

        new_state = replace(
            state,
            delta_conversion=running,
            delta_long=p2g,
            long_level=state.long_level + p2g * self.p2g_efficiency,
        )
        return {
            'state': new_state,
            'remainder': power_input - p2g,
            'p2g': p2g,
        }

    def withdraw(self, state: StorageState, deficit: float) -> StorageState:
        """
        Cover an electrical deficit (negative kWh) from gas storage.

        The level is not floored; a long-running deficit drives it negative.
        """
        return replace(
            state,
            delta_long=deficit,
            long_level=state.long_level + deficit * self.g2p_efficiency,
        )

    def get_params(self) -> Dict[str, Any]:
        return {
            'rate_per_step': self.rate,
            'p2g_efficiency': self.p2g_efficiency,
            'g2p_efficiency': self.g2p_efficiency,
            'min_reserve': self.min_reserve,
        }
