"""
Equation of state interface.

Every conversion optionally takes the tracer mass fractions of the cell,
keyed by tracer name. Closures that do not depend on composition ignore it.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional

from .exceptions import InvalidStateError

Tracers = Optional[Dict[str, float]]


def check_density(d: float):
    """Raise InvalidStateError unless d > 0."""
    if not d > 0:
        raise InvalidStateError(f"Density must be positive, got {d}")


def check_energy(e: float):
    """Raise InvalidStateError unless e > 0."""
    if not e > 0:
        raise InvalidStateError(f"Specific internal energy must be positive, got {e}")


class EquationOfState(ABC):
    """Abstract base class for thermodynamic closures."""

    @abstractmethod
    def pressure_from_density_energy(self, d: float, e: float,
                                     tracers: Tracers = None) -> float:
        """
        Compute pressure.

        Args:
            d: Density
            e: Specific internal energy
            tracers: Tracer mass fractions (optional)

        Returns:
            Pressure
        """
        pass

    @abstractmethod
    def energy_from_density_pressure(self, d: float, p: float,
                                     tracers: Tracers = None) -> float:
        """
        Compute specific internal energy.

        Args:
            d: Density
            p: Pressure
            tracers: Tracer mass fractions (optional)

        Returns:
            Specific internal energy
        """
        pass

    @abstractmethod
    def sound_speed_from_density_energy_pressure(self, d: float, e: float, p: float,
                                                 tracers: Tracers = None) -> float:
        """
        Compute the adiabatic sound speed from a consistent (d, e, p) triple.

        Args:
            d: Density
            e: Specific internal energy
            p: Pressure
            tracers: Tracer mass fractions (optional)

        Returns:
            Sound speed
        """
        pass

    @abstractmethod
    def entropy_from_density_pressure(self, d: float, p: float,
                                      tracers: Tracers = None) -> float:
        """Compute entropy from density and pressure."""
        pass

    @abstractmethod
    def pressure_from_entropy_density(self, s: float, d: float,
                                      tracers: Tracers = None) -> float:
        """Compute pressure from entropy and density."""
        pass

    def sound_speed_from_density_energy(self, d: float, e: float,
                                        tracers: Tracers = None) -> float:
        """Sound speed from density and specific internal energy."""
        p = self.pressure_from_density_energy(d, e, tracers)
        return self.sound_speed_from_density_energy_pressure(d, e, p, tracers)

    def sound_speed_from_density_pressure(self, d: float, p: float,
                                          tracers: Tracers = None) -> float:
        """Sound speed from density and pressure."""
        e = self.energy_from_density_pressure(d, p, tracers)
        return self.sound_speed_from_density_energy_pressure(d, e, p, tracers)
