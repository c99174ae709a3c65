"""
Hybrid battery / power-to-gas storage simulation.

A short-term battery and a seasonal gas store are dispatched step by step
against generation, electrical load and heat load, with a forecast-driven
seasonal controller deciding when power-to-gas runs.

Example
-------
>>> from hybrid_storage import HybridEnergySystem, SystemConfig
>>> system = HybridEnergySystem(SystemConfig(battery_capacity=10.0))
>>> result = system.run([[5.0, 2.0, 0.0, 1]])
>>> result.sums[0]
array([3., 0., 0.])
"""

from .config import SystemConfig, load_config
from .components import StorageState, Battery, PowerToGas
from .control import SeasonalController
from .forecast import NetEnergyForecast
from .simulation import HybridEnergySystem, SimulationResult, simulate
from .validation import InputValidationError, validate_inputs, read_input_table

__all__ = [
    'SystemConfig',
    'load_config',
    'StorageState',
    'Battery',
    'PowerToGas',
    'SeasonalController',
    'NetEnergyForecast',
    'HybridEnergySystem',
    'SimulationResult',
    'simulate',
    'InputValidationError',
    'validate_inputs',
    'read_input_table',
]

__version__ = '0.1.0'
