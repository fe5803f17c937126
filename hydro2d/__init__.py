"""
hydro2d - Moving-Mesh Hydrodynamics Flux Core
=============================================

Re-exports all public components from hydro2d.src
"""

from hydro2d.src import (
    InvalidStateError,
    NumericalError,
    EOSConvergenceError,
    InvalidTopologyError,
    UnmatchedEdgeError,
    UnsupportedOperationError,
    EquationOfState,
    IdealGas,
    Tillotson,
    TillotsonConfig,
    TillotsonRegion,
    ComputationalCell,
    Primitive,
    Conserved,
    Extensive,
    convert_to_primitive,
    reflect,
    Edge,
    Tessellation,
    Mesh2D,
    RiemannSolver,
    HLLCFlux,
    RusanovFlux,
    rotate_solve_rotate_back,
    Condition,
    IsBoundaryEdge,
    IsBulkEdge,
    RegularSpecialEdge,
    Action,
    RegularFlux,
    RigidWallFlux,
    FreeFlowFlux,
    FluxDispatch,
    DispatchConfig,
)

__all__ = [
    'InvalidStateError',
    'NumericalError',
    'EOSConvergenceError',
    'InvalidTopologyError',
    'UnmatchedEdgeError',
    'UnsupportedOperationError',
    'EquationOfState',
    'IdealGas',
    'Tillotson',
    'TillotsonConfig',
    'TillotsonRegion',
    'ComputationalCell',
    'Primitive',
    'Conserved',
    'Extensive',
    'convert_to_primitive',
    'reflect',
    'Edge',
    'Tessellation',
    'Mesh2D',
    'RiemannSolver',
    'HLLCFlux',
    'RusanovFlux',
    'rotate_solve_rotate_back',
    'Condition',
    'IsBoundaryEdge',
    'IsBulkEdge',
    'RegularSpecialEdge',
    'Action',
    'RegularFlux',
    'RigidWallFlux',
    'FreeFlowFlux',
    'FluxDispatch',
    'DispatchConfig',
]
