"""
Cell, primitive and flux representations.

    ComputationalCell - stored cell state (density, pressure, velocity,
                        tracer mass fractions, sticker flags)
    Primitive         - cell state completed by the EOS with specific
                        internal energy and sound speed
    Conserved         - flux of mass, momentum and total energy
    Extensive         - Conserved plus tracer mass fluxes

Velocities and momenta are 2-vectors (numpy arrays of shape (2,)).
"""

import numpy as np
from dataclasses import dataclass, field, replace
from typing import Dict

from .eos import EquationOfState, check_density, check_energy


@dataclass
class ComputationalCell:
    """Cell state as stored by the solver."""
    density: float
    pressure: float
    velocity: np.ndarray
    tracers: Dict[str, float] = field(default_factory=dict)     # Mass fractions
    stickers: Dict[str, bool] = field(default_factory=dict)     # Boundary tags

    def __post_init__(self):
        self.velocity = np.asarray(self.velocity, dtype=float)


@dataclass
class Primitive:
    """Primitive state at a point; derived on demand, never stored."""
    density: float
    pressure: float
    velocity: np.ndarray
    energy: float           # Specific internal energy
    sound_speed: float

    def __post_init__(self):
        self.velocity = np.asarray(self.velocity, dtype=float)

    @property
    def total_energy(self) -> float:
        """Total energy per volume."""
        return self.density * (self.energy + 0.5 * np.dot(self.velocity, self.velocity))


@dataclass
class Conserved:
    """Flux of the conserved quantities through a face."""
    mass: float
    momentum: np.ndarray
    energy: float

    def __post_init__(self):
        self.momentum = np.asarray(self.momentum, dtype=float)


@dataclass
class Extensive:
    """Conserved flux through an edge, including tracer mass fluxes."""
    mass: float
    momentum: np.ndarray
    energy: float
    tracers: Dict[str, float] = field(default_factory=dict)

    def __post_init__(self):
        self.momentum = np.asarray(self.momentum, dtype=float)

    @classmethod
    def from_conserved(cls, c: Conserved, donor: ComputationalCell) -> 'Extensive':
        """Attach the donor cell's composition to a solved flux."""
        tracers = {name: fraction * c.mass for name, fraction in donor.tracers.items()}
        return cls(mass=c.mass, momentum=c.momentum.copy(), energy=c.energy, tracers=tracers)


def convert_to_primitive(cell: ComputationalCell, eos: EquationOfState) -> Primitive:
    """
    Complete a cell state with energy and sound speed from the EOS.

    Raises:
        InvalidStateError: If density or the resulting energy is not positive
    """
    check_density(cell.density)
    energy = eos.energy_from_density_pressure(cell.density, cell.pressure, cell.tracers)
    check_energy(energy)
    sound_speed = eos.sound_speed_from_density_energy_pressure(
        cell.density, energy, cell.pressure, cell.tracers)
    return Primitive(density=cell.density, pressure=cell.pressure,
                     velocity=cell.velocity.copy(), energy=energy,
                     sound_speed=sound_speed)


def reflect(state: Primitive, axis: np.ndarray) -> Primitive:
    """
    Mirror a state's velocity about a line.

    The component along ``axis`` (a unit vector) is kept, the perpendicular
    component changes sign.
    """
    v = state.velocity
    return replace(state, velocity=2 * np.dot(v, axis) * axis - v)
