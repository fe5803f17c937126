"""
Tillotson equation of state for solids and liquids under shock loading.

The (density, specific energy) plane is split into three regions:

    COMPRESSED (I)   d >= rho0, or e <= EIV
    EXPANDED   (IV)  d < rho0 and e >= ECV
    BLENDED    (II)  d < rho0 and EIV < e < ECV

Region I and IV pressures are closed-form and invert as quadratics in e.
Region II interpolates linearly in e between the two, so its inverse has no
closed form and is found by bisection on [EIV, ECV].

Notation:
    eta = d / rho0
    mu  = eta - 1
    z   = rho0 / d - 1
    w0  = e / (E0 * eta**2) + 1
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import Tuple

import numpy as np
from scipy.optimize import root_scalar

from .eos import EquationOfState, Tracers, check_density, check_energy
from .exceptions import (
    EOSConvergenceError, NumericalError, UnsupportedOperationError,
)

logger = logging.getLogger(__name__)


class TillotsonRegion(enum.Enum):
    """Phase region of a Tillotson state."""
    COMPRESSED = 'I'
    BLENDED = 'II'
    EXPANDED = 'IV'


@dataclass
class TillotsonConfig:
    """Bisection and consistency-check settings for the blended region."""
    maxiter_near_reference: int = 50
    maxiter_expanded: int = 100
    rtol_near_reference: float = 2.0**-29   # 30 bits
    rtol_expanded: float = 2.0**-39         # 40 bits
    expanded_density_ratio: float = 1000.0  # rho0 / d at which the expanded settings apply
    gate_rtol: float = 1e-3
    gate_pressure_multiple: float = 2.0
    sound_speed_floor: float = 1e-10        # Floor on c^2, in units of E0


@dataclass
class Tillotson(EquationOfState):
    """
    Tillotson equation of state.

    Args:
        a, b: Dimensionless Tillotson coefficients
        A, B: Bulk modulus coefficients (pressure units)
        rho0: Reference density
        E0: Reference specific energy
        EIV: Specific energy of incipient vaporization
        ECV: Specific energy of complete vaporization
        alpha, beta: Expanded-state decay exponents
        config: Blended-region solver settings
    """
    a: float
    b: float
    A: float
    B: float
    rho0: float
    E0: float
    EIV: float
    ECV: float
    alpha: float
    beta: float
    config: TillotsonConfig = field(default_factory=TillotsonConfig)

    def __post_init__(self):
        if self.rho0 <= 0 or self.E0 <= 0:
            raise ValueError("rho0 and E0 must be positive")
        if not 0 < self.EIV < self.ECV:
            raise ValueError(f"Require 0 < EIV < ECV, got EIV={self.EIV}, ECV={self.ECV}")

    # --- Region classification ---

    def region(self, d: float, e: float) -> TillotsonRegion:
        """Region of the state (d, e)."""
        if d >= self.rho0 or e <= self.EIV:
            return TillotsonRegion.COMPRESSED
        if e >= self.ECV:
            return TillotsonRegion.EXPANDED
        return TillotsonRegion.BLENDED

    def region_thresholds(self, d: float) -> Tuple[float, float]:
        """
        Pressures bounding the blended region at density d.

        Returns:
            (PIV, PCV): region I pressure at EIV and region IV pressure at ECV
        """
        return (self._pressure_compressed(d, self.EIV),
                self._pressure_expanded(d, self.ECV))

    def _blend_weight(self, e):
        return (e - self.EIV) / (self.ECV - self.EIV)

    # --- Closed-form branches ---

    def _pressure_compressed(self, d, e):
        eta = d / self.rho0
        mu = eta - 1
        c = self.E0 * eta**2
        return (self.a + self.b / (e / c + 1)) * d * e + self.A * mu + self.B * mu**2

    def _pressure_expanded(self, d, e):
        eta = d / self.rho0
        mu = eta - 1
        c = self.E0 * eta**2
        z = self.rho0 / d - 1
        exp_alpha = np.exp(-self.alpha * z**2)
        exp_beta = np.exp(-self.beta * z)
        return self.a * d * e + exp_alpha * (self.b * d * e / (e / c + 1) +
                                             self.A * mu * exp_beta)

    def _pressure_blended(self, d, e):
        w = self._blend_weight(e)
        return (1 - w) * self._pressure_compressed(d, e) + w * self._pressure_expanded(d, e)

    def _invert(self, d, q, b, c):
        """
        Positive root of p = a*d*e + b*d*e*c/(e + c) + (p - q) for e.

        Multiplying through by (e + c) gives
            a*d*e**2 + ((a + b)*d*c - q)*e - q*c = 0
        """
        x = q - (self.a + b) * d * c
        disc = x**2 + 4 * self.a * d * c * q
        if disc < 0:
            raise NumericalError(
                f"Negative discriminant inverting Tillotson pressure: d={d}, q={q}, disc={disc}")
        root = np.sqrt(disc)
        if x < 0:
            e = 2 * c * q / (root - x)
        else:
            e = (x + root) / (2 * self.a * d)
        check_energy(e)
        return float(e)

    def _energy_compressed(self, d, p):
        eta = d / self.rho0
        mu = eta - 1
        c = self.E0 * eta**2
        return self._invert(d, p - self.A * mu - self.B * mu**2, self.b, c)

    def _energy_expanded(self, d, p):
        eta = d / self.rho0
        mu = eta - 1
        c = self.E0 * eta**2
        z = self.rho0 / d - 1
        exp_alpha = np.exp(-self.alpha * z**2)
        cold = exp_alpha * self.A * mu * np.exp(-self.beta * z)
        return self._invert(d, p - cold, self.b * exp_alpha, c)

    def _sound_speed_squared_compressed(self, d, e, p):
        eta = d / self.rho0
        mu = eta - 1
        w0 = e / (self.E0 * eta**2) + 1
        dp_dd = ((self.A + 2 * self.B * mu) / self.rho0 +
                 e * (self.a + self.b / w0) +
                 2 * self.b * e**2 / (self.E0 * eta**2 * w0**2))
        dp_de = d * (self.a + self.b / w0**2)
        return dp_dd + p * dp_de / d**2

    def _sound_speed_squared_expanded(self, d, e, p):
        eta = d / self.rho0
        mu = eta - 1
        w0 = e / (self.E0 * eta**2) + 1
        z = 1 / eta - 1
        exp_alpha = np.exp(-self.alpha * z**2)
        exp_beta = np.exp(-self.beta * z)
        thermal = (self.b * e / w0 * (1 + 2 * self.alpha * z / eta) +
                   2 * self.b * e**2 / (self.E0 * eta**2 * w0**2))
        cold = self.A * exp_beta / self.rho0 * (1 + mu * (self.beta + 2 * self.alpha * z) / eta**2)
        dp_dd = self.a * e + exp_alpha * (thermal + cold)
        dp_de = d * (self.a + self.b * exp_alpha / w0**2)
        return dp_dd + p * dp_de / d**2

    # --- Blended region inversion ---

    def _solve_blended(self, d, p, piv, pcv):
        cfg = self.config
        if d * cfg.expanded_density_ratio > self.rho0:
            maxiter, rtol = cfg.maxiter_near_reference, cfg.rtol_near_reference
        else:
            maxiter, rtol = cfg.maxiter_expanded, cfg.rtol_expanded

        def residual(e):
            return self._pressure_blended(d, e) - p

        sol = root_scalar(residual, bracket=[self.EIV, self.ECV], method='bisect',
                          xtol=rtol * self.EIV, rtol=rtol, maxiter=maxiter)
        energy = float(sol.root)
        if sol.converged:
            logger.debug("Blended-region solve: d=%g p=%g e=%g after %d iterations",
                         d, p, energy, sol.iterations)
        else:
            logger.warning("Blended-region solve reached %d iterations without converging "
                           "(d=%g, p=%g); using e=%g", maxiter, d, p, energy)

        new_p = self.pressure_from_density_energy(d, energy)
        if new_p > cfg.gate_pressure_multiple * piv and abs(p - new_p) > cfg.gate_rtol * abs(p):
            error = EOSConvergenceError("No convergence of energy from density and pressure")
            error.add_entry("density", d)
            error.add_entry("pressure", p)
            error.add_entry("new pressure", new_p)
            error.add_entry("EIV", self.EIV)
            error.add_entry("ECV", self.ECV)
            error.add_entry("first energy", self.EIV)
            error.add_entry("second energy", self.ECV)
            error.add_entry("first pressure", piv)
            error.add_entry("second pressure", pcv)
            raise error
        check_energy(energy)
        return energy

    # --- EquationOfState interface ---

    def pressure_from_density_energy(self, d: float, e: float,
                                     tracers: Tracers = None) -> float:
        check_density(d)
        check_energy(e)
        region = self.region(d, e)
        if region is TillotsonRegion.COMPRESSED:
            return float(self._pressure_compressed(d, e))
        if region is TillotsonRegion.EXPANDED:
            return float(self._pressure_expanded(d, e))
        return float(self._pressure_blended(d, e))

    def energy_from_density_pressure(self, d: float, p: float,
                                     tracers: Tracers = None) -> float:
        check_density(d)
        if d >= self.rho0:
            return self._energy_compressed(d, p)
        piv, pcv = self.region_thresholds(d)
        if p <= piv:
            return self._energy_compressed(d, p)
        if p >= pcv:
            return self._energy_expanded(d, p)
        return self._solve_blended(d, p, piv, pcv)

    def sound_speed_from_density_energy_pressure(self, d: float, e: float, p: float,
                                                 tracers: Tracers = None) -> float:
        check_density(d)
        check_energy(e)
        region = self.region(d, e)
        if region is TillotsonRegion.COMPRESSED:
            c2 = self._sound_speed_squared_compressed(d, e, p)
        elif region is TillotsonRegion.EXPANDED:
            c2 = self._sound_speed_squared_expanded(d, e, p)
        else:
            w = self._blend_weight(e)
            c2 = ((1 - w) * self._sound_speed_squared_compressed(d, e, p) +
                  w * self._sound_speed_squared_expanded(d, e, p))
        # Roundoff can push c^2 slightly negative in tension
        c2 = max(c2, self.config.sound_speed_floor * self.E0)
        return float(np.sqrt(c2))

    def entropy_from_density_pressure(self, d: float, p: float,
                                      tracers: Tracers = None) -> float:
        raise UnsupportedOperationError("Tillotson EOS does not define entropy")

    def pressure_from_entropy_density(self, s: float, d: float,
                                      tracers: Tracers = None) -> float:
        raise UnsupportedOperationError("Tillotson EOS does not define entropy")
