"""
Moving-Mesh Hydrodynamics Flux Core
===================================

Per-edge conserved fluxes for a finite-volume solver on a deforming 2D
unstructured mesh.

Features:
- Tillotson multi-phase equation of state (compressed, blended and
  expanded regions) and a perfect-gas closure
- HLLC and Rusanov Riemann solvers with moving faces
- Ordered condition/action dispatch over mesh edges (bulk, boundary and
  sticker-tagged edges)
- Rigid wall, free flow and regular two-sided flux rules

Flux representation (per edge, extensive):
    mass      - mass flux
    momentum  - momentum flux, 2-vector
    energy    - total energy flux
    tracers   - tracer mass flux per tracer name

Example:
    eos = Tillotson(a=0.5, b=1.5, A=2.67e11, B=2.67e11, rho0=2.7, E0=4.87e12,
                    EIV=4.72e10, ECV=1.82e11, alpha=5, beta=5)
    rs = HLLCFlux()
    fluxes = FluxDispatch([
        (IsBoundaryEdge(), RigidWallFlux(rs)),
        (IsBulkEdge(), RegularFlux(rs)),
    ])
    extensives = fluxes(mesh, point_velocities, cells, None, None, eos, t, dt)
"""

from .exceptions import (
    InvalidStateError, NumericalError, EOSConvergenceError, InvalidTopologyError,
    UnmatchedEdgeError, UnsupportedOperationError,
)
from .eos import EquationOfState
from .gas import IdealGas
from .tillotson import Tillotson, TillotsonConfig, TillotsonRegion
from .state import (
    ComputationalCell, Primitive, Conserved, Extensive, convert_to_primitive, reflect,
)
from .mesh import Edge, Tessellation, Mesh2D
from .flux import RiemannSolver, HLLCFlux, RusanovFlux, rotate_solve_rotate_back
from .conditions import Condition, IsBoundaryEdge, IsBulkEdge, RegularSpecialEdge
from .actions import Action, RegularFlux, RigidWallFlux, FreeFlowFlux
from .dispatch import FluxDispatch, DispatchConfig

__all__ = [
    # Errors
    'InvalidStateError',
    'NumericalError',
    'EOSConvergenceError',
    'InvalidTopologyError',
    'UnmatchedEdgeError',
    'UnsupportedOperationError',

    # Equations of state
    'EquationOfState',
    'IdealGas',
    'Tillotson',
    'TillotsonConfig',
    'TillotsonRegion',

    # States and fluxes
    'ComputationalCell',
    'Primitive',
    'Conserved',
    'Extensive',
    'convert_to_primitive',
    'reflect',

    # Mesh
    'Edge',
    'Tessellation',
    'Mesh2D',

    # Riemann solvers
    'RiemannSolver',
    'HLLCFlux',
    'RusanovFlux',
    'rotate_solve_rotate_back',

    # Conditions
    'Condition',
    'IsBoundaryEdge',
    'IsBulkEdge',
    'RegularSpecialEdge',

    # Actions
    'Action',
    'RegularFlux',
    'RigidWallFlux',
    'FreeFlowFlux',

    # Dispatch
    'FluxDispatch',
    'DispatchConfig',
]

__version__ = '1.0.0'
