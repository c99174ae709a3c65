"""
Annual scenario for a solar-powered building with battery and power-to-gas.

- Synthetic PV generation with seasonal and diurnal shape
- Electrical base load with evening peak
- Heat load that is high in winter and drawn from gas storage
- Plots storage levels and curtailment over the year

Run from project root:
    python examples/annual_scenario.py [config.yaml]
"""

import logging
import os
import sys

import numpy as np
import matplotlib.pyplot as plt

from hybrid_storage import HybridEnergySystem, SystemConfig, load_config

RESULTS_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'results')

DAYS_PER_MONTH = [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]


# ============================================================================
# SYNTHETIC INPUT DATA
# ============================================================================

def synthetic_year(samples_per_hour: int = 4, pv_peak: float = 12.0,
                   base_load: float = 0.8, heat_peak: float = 1.5,
                   seed: int = 0) -> np.ndarray:
    """
    Build an (N, 4) table of [generation, electrical load, heat load, month]
    in kWh per step for one non-leap year.
    """
    rng = np.random.default_rng(seed)
    steps_per_day = 24 * samples_per_hour
    dt_hours = 1.0 / samples_per_hour

    rows = []
    day_of_year = 0
    for month, n_days in enumerate(DAYS_PER_MONTH, start=1):
        for _ in range(n_days):
            season = 0.5 - 0.5 * np.cos(2 * np.pi * (day_of_year - 10) / 365)
            # 70% chance of a mostly clear day
            clearness = 0.8 + 0.2 * rng.random() if rng.random() < 0.7 else 0.2 + 0.4 * rng.random()

            hours = np.arange(steps_per_day) * dt_hours
            daylight = 8 + 8 * season
            sunrise = 12 - daylight / 2
            solar = np.clip(np.sin(np.pi * (hours - sunrise) / daylight), 0, None)
            solar[(hours < sunrise) | (hours > sunrise + daylight)] = 0.0
            gen = pv_peak * (0.4 + 0.6 * season) * clearness * solar * dt_hours

            evening = ((hours >= 17) & (hours <= 22)).astype(float)
            eload = (base_load + 1.2 * evening) * dt_hours

            heat = np.full(steps_per_day, heat_peak * (1 - season) * dt_hours)

            rows.append(np.column_stack([gen, eload, heat, np.full(steps_per_day, month)]))
            day_of_year += 1

    return np.vstack(rows)


# ============================================================================
# PLOTTING
# ============================================================================

def plot_results(result, samples_per_hour: int, path: str):
    days = np.arange(len(result)) / (24 * samples_per_hour)

    fig, axes = plt.subplots(3, 1, figsize=(11, 9), sharex=True)

    axes[0].plot(days, result.column('short_level'), color='#2980b9', linewidth=0.6)
    axes[0].set_ylabel('Battery (kWh)')
    axes[0].set_title('Short-term storage')

    axes[1].plot(days, result.column('long_level'), color='#e67e22')
    axes[1].axhline(0.0, color='#2c3e50', linewidth=0.8, linestyle='--')
    axes[1].set_ylabel('Gas store (kWh)')
    axes[1].set_title('Seasonal storage')

    axes[2].plot(days, result.column('waste_total'), color='#c0392b', label='Curtailment')
    axes[2].plot(days, np.cumsum(result.column('delta_conversion')), color='#27ae60',
                 label='PtG input')
    axes[2].set_ylabel('Cumulative (kWh)')
    axes[2].set_xlabel('Day of year')
    axes[2].legend(loc='upper left')

    for ax in axes:
        ax.grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)


def main():
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(name)s %(levelname)s %(message)s')

    if len(sys.argv) > 1:
        config = load_config(sys.argv[1])
    else:
        config = SystemConfig(
            battery_capacity=20.0,
            p2g_capacity=3.0,
            p2g_efficiency=0.6,
            g2p_efficiency=0.5,
        )

    inputs = synthetic_year(samples_per_hour=config.samples_per_hour)
    system = HybridEnergySystem(config)
    result = system.run(inputs)

    print("\nAnnual summary")
    print("-" * 40)
    for key, value in result.summary().items():
        print(f"  {key:<20s} {value:>14.2f}" if isinstance(value, float)
              else f"  {key:<20s} {value:>14d}")

    os.makedirs(RESULTS_DIR, exist_ok=True)
    path = os.path.join(RESULTS_DIR, 'annual_storage.png')
    plot_results(result, config.samples_per_hour, path)
    print(f"\nSaved plot to {path}")


if __name__ == '__main__':
    main()
