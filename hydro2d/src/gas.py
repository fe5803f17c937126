"""
Equation of state for a calorically perfect gas.
"""

from dataclasses import dataclass

import numpy as np

from .eos import EquationOfState, Tracers, check_density, check_energy


@dataclass
class IdealGas(EquationOfState):
    """
    Calorically perfect gas.

        p = (gamma - 1) * d * e
        c = sqrt(gamma * p / d)

    Entropy is represented by the adiabat constant s = p / d**gamma.
    """
    gamma: float = 5.0 / 3.0    # Ratio of specific heats

    def pressure_from_density_energy(self, d: float, e: float,
                                     tracers: Tracers = None) -> float:
        check_density(d)
        return (self.gamma - 1) * d * e

    def energy_from_density_pressure(self, d: float, p: float,
                                     tracers: Tracers = None) -> float:
        check_density(d)
        e = p / ((self.gamma - 1) * d)
        check_energy(e)
        return e

    def sound_speed_from_density_energy_pressure(self, d: float, e: float, p: float,
                                                 tracers: Tracers = None) -> float:
        check_density(d)
        return float(np.sqrt(self.gamma * p / d))

    def entropy_from_density_pressure(self, d: float, p: float,
                                      tracers: Tracers = None) -> float:
        check_density(d)
        return p / d**self.gamma

    def pressure_from_entropy_density(self, s: float, d: float,
                                      tracers: Tracers = None) -> float:
        check_density(d)
        return s * d**self.gamma
