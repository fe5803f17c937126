"""
Riemann solvers for the face-normal flux.

Solvers work in a rotated frame: velocity[0] is the component along the face
normal, velocity[1] the component along the face tangent. The face moves
along the normal with speed ``velocity``; the returned flux is measured in
the lab frame.
"""

import numpy as np
from abc import ABC, abstractmethod
from dataclasses import replace

from .state import Conserved, Primitive


def physical_flux(state: Primitive) -> Conserved:
    """Exact flux of a single state through a stationary face."""
    u = state.velocity[0]
    mass = state.density * u
    return Conserved(mass=mass,
                     momentum=np.array([mass * u + state.pressure, mass * state.velocity[1]]),
                     energy=(state.total_energy + state.pressure) * u)


def _shift(state: Primitive, velocity: float) -> Primitive:
    return replace(state, velocity=state.velocity - np.array([velocity, 0.0]))


def _to_lab_frame(f: Conserved, velocity: float) -> Conserved:
    energy = f.energy + f.momentum[0] * velocity + 0.5 * f.mass * velocity**2
    momentum = f.momentum + np.array([velocity * f.mass, 0.0])
    return Conserved(mass=f.mass, momentum=momentum, energy=energy)


class RiemannSolver(ABC):
    """Abstract base class for approximate Riemann solvers."""

    def __call__(self, left: Primitive, right: Primitive, velocity: float) -> Conserved:
        """
        Flux through a face moving with normal speed ``velocity``.

        Args:
            left: State on the side the normal points away from
            right: State on the side the normal points into
            velocity: Normal speed of the face

        Returns:
            Flux of mass, momentum (rotated frame) and energy
        """
        f = self.solve(_shift(left, velocity), _shift(right, velocity))
        return _to_lab_frame(f, velocity)

    @abstractmethod
    def solve(self, left: Primitive, right: Primitive) -> Conserved:
        """Flux through a stationary face (rotated frame)."""
        pass


class HLLCFlux(RiemannSolver):
    """
    HLLC approximate Riemann solver.

    Uses Davis wave-speed estimates, so only the density, pressure, velocity,
    specific energy and sound speed of each state are needed and any equation
    of state can supply them.
    """

    def solve(self, left: Primitive, right: Primitive) -> Conserved:
        dl, pl, ul, cl = left.density, left.pressure, left.velocity[0], left.sound_speed
        dr, pr, ur, cr = right.density, right.pressure, right.velocity[0], right.sound_speed

        # Wave speed estimates
        sl = min(ul - cl, ur - cr)
        sr = max(ul + cl, ur + cr)

        # Contact wave speed
        ss = (pr - pl + dl * ul * (sl - ul) - dr * ur * (sr - ur)) / \
             (dl * (sl - ul) - dr * (sr - ur))

        if sl >= 0:
            return physical_flux(left)
        if sr <= 0:
            return physical_flux(right)
        if ss >= 0:
            return self._star_flux(left, sl, ss)
        return self._star_flux(right, sr, ss)

    @staticmethod
    def _star_flux(state: Primitive, s: float, ss: float) -> Conserved:
        """F* = F + S * (U* - U) on one side of the contact."""
        d, p = state.density, state.pressure
        u, v = state.velocity
        e_total = state.total_energy
        coeff = d * (s - u) / (s - ss)

        f = physical_flux(state)
        d_mass = coeff - d
        d_momentum = np.array([coeff * ss - d * u, coeff * v - d * v])
        d_energy = coeff * (e_total / d + (ss - u) * (ss + p / (d * (s - u)))) - e_total
        return Conserved(mass=f.mass + s * d_mass,
                         momentum=f.momentum + s * d_momentum,
                         energy=f.energy + s * d_energy)


class RusanovFlux(RiemannSolver):
    """
    Rusanov (Local Lax-Friedrichs) flux.

    Less accurate for contact discontinuities than HLLC but very robust.
    """

    def solve(self, left: Primitive, right: Primitive) -> Conserved:
        # Maximum wave speed
        smax = max(abs(left.velocity[0]) + left.sound_speed,
                   abs(right.velocity[0]) + right.sound_speed)

        fl = physical_flux(left)
        fr = physical_flux(right)
        ml = left.density * left.velocity
        mr = right.density * right.velocity

        # F = 0.5 * (FL + FR) - 0.5 * smax * (UR - UL)
        return Conserved(
            mass=0.5 * (fl.mass + fr.mass) - 0.5 * smax * (right.density - left.density),
            momentum=0.5 * (fl.momentum + fr.momentum) - 0.5 * smax * (mr - ml),
            energy=0.5 * (fl.energy + fr.energy) -
                   0.5 * smax * (right.total_energy - left.total_energy))


def rotate(state: Primitive, normal: np.ndarray, tangent: np.ndarray) -> Primitive:
    """Express a state's velocity in the (normal, tangent) frame."""
    v = state.velocity
    return replace(state, velocity=np.array([np.dot(v, normal), np.dot(v, tangent)]))


def rotate_back(c: Conserved, normal: np.ndarray, tangent: np.ndarray) -> Conserved:
    """Express a rotated-frame flux's momentum in lab coordinates."""
    return Conserved(mass=c.mass,
                     momentum=c.momentum[0] * normal + c.momentum[1] * tangent,
                     energy=c.energy)


def rotate_solve_rotate_back(rs: RiemannSolver, left: Primitive, right: Primitive,
                             velocity: float, normal: np.ndarray,
                             tangent: np.ndarray) -> Conserved:
    """Solve the Riemann problem across a face with the given orientation."""
    return rotate_back(rs(rotate(left, normal, tangent), rotate(right, normal, tangent),
                          velocity),
                       normal, tangent)
