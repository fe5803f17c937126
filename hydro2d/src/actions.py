"""
Per-edge flux rules for the condition/action flux dispatch.

Every rule builds the edge frame (unit tangent along the edge, unit normal
pointing from the first neighbor side to the second), converts the cell
states to primitives with the EOS, solves the Riemann problem in the rotated
frame and tags the flux with the donor cell's tracers.
"""

import numpy as np
from abc import ABC, abstractmethod
from typing import Sequence, Tuple

from .eos import EquationOfState
from .exceptions import InvalidTopologyError
from .flux import RiemannSolver, rotate_solve_rotate_back
from .mesh import Edge, Tessellation, normalize, remove_parallel_component
from .state import ComputationalCell, Extensive, Primitive, convert_to_primitive, reflect


def _check_interior(tess: Tessellation, edge: Edge, index: int):
    if not tess.is_interior(index):
        raise InvalidTopologyError(
            f"Edge with neighbors {edge.neighbors} references cell {index}, "
            f"outside 0..{tess.n_points - 1}")


def one_sided_frame(edge: Edge, tess: Tessellation, aux: bool) -> Tuple[np.ndarray, np.ndarray]:
    """
    Normal and tangent of an edge with a single interior neighbor.

    The normal is the part of the cell-to-edge offset perpendicular to the
    edge, oriented from the first neighbor side to the second.

    Returns:
        (normal, tangent)
    """
    tangent = edge.tangent
    if aux:
        offset = edge.vertices[0] - tess.mesh_point(edge.neighbors[0])
    else:
        offset = tess.mesh_point(edge.neighbors[1]) - edge.vertices[0]
    return normalize(remove_parallel_component(offset, tangent)), tangent


class Action(ABC):
    """Abstract base class for per-edge flux rules."""

    def __init__(self, riemann_solver: RiemannSolver):
        """
        Args:
            riemann_solver: Solver used for the face-normal flux
        """
        self.riemann_solver = riemann_solver

    @abstractmethod
    def __call__(self, edge: Edge, tess: Tessellation, point_velocities: Sequence[np.ndarray],
                 cells: Sequence[ComputationalCell], eos: EquationOfState,
                 aux: bool) -> Extensive:
        """
        Compute the flux through an edge.

        Args:
            edge: Edge to evaluate
            tess: Tessellation owning the edge
            point_velocities: Mesh point velocities (n_points,)
            cells: Cell states (n_points,)
            eos: Equation of state
            aux: Donor selector from the matching condition

        Returns:
            Extensive flux from the first neighbor side to the second
        """
        pass


class RegularFlux(Action):
    """Two-sided flux between interior cells; the upwind cell donates tracers."""

    def __call__(self, edge: Edge, tess: Tessellation, point_velocities: Sequence[np.ndarray],
                 cells: Sequence[ComputationalCell], eos: EquationOfState,
                 aux: bool) -> Extensive:
        first, second = edge.neighbors
        _check_interior(tess, edge, first)
        _check_interior(tess, edge, second)

        tangent = edge.tangent
        normal = normalize(tess.mesh_point(second) - tess.mesh_point(first))
        face_velocity = tess.face_velocity(np.asarray(point_velocities[first]),
                                           np.asarray(point_velocities[second]),
                                           tess.cell_centroid(first),
                                           tess.cell_centroid(second),
                                           edge.centroid)
        v = float(np.dot(normal, face_velocity))

        c = rotate_solve_rotate_back(self.riemann_solver,
                                     convert_to_primitive(cells[first], eos),
                                     convert_to_primitive(cells[second], eos),
                                     v, normal, tangent)
        donor = cells[first] if c.mass > 0 else cells[second]
        return Extensive.from_conserved(c, donor)


def rigid_wall_states(state: Primitive, tangent: np.ndarray,
                      aux: bool) -> Tuple[Primitive, Primitive]:
    """
    Left and right states across a wall.

    The ghost state mirrors the interior one about the wall line and sits on
    the side without an interior cell.
    """
    ghost = reflect(state, tangent)
    if aux:
        return state, ghost
    return ghost, state


class RigidWallFlux(Action):
    """Flux through a stationary reflecting wall."""

    def __call__(self, edge: Edge, tess: Tessellation, point_velocities: Sequence[np.ndarray],
                 cells: Sequence[ComputationalCell], eos: EquationOfState,
                 aux: bool) -> Extensive:
        index = edge.neighbors[0] if aux else edge.neighbors[1]
        _check_interior(tess, edge, index)

        normal, tangent = one_sided_frame(edge, tess, aux)
        left, right = rigid_wall_states(convert_to_primitive(cells[index], eos), tangent, aux)
        c = rotate_solve_rotate_back(self.riemann_solver, left, right, 0.0, normal, tangent)
        return Extensive.from_conserved(c, cells[index])


class FreeFlowFlux(Action):
    """Zero-gradient outflow: the ghost state copies the interior one."""

    def __call__(self, edge: Edge, tess: Tessellation, point_velocities: Sequence[np.ndarray],
                 cells: Sequence[ComputationalCell], eos: EquationOfState,
                 aux: bool) -> Extensive:
        index = edge.neighbors[0] if aux else edge.neighbors[1]
        _check_interior(tess, edge, index)

        normal, tangent = one_sided_frame(edge, tess, aux)
        state = convert_to_primitive(cells[index], eos)
        c = rotate_solve_rotate_back(self.riemann_solver, state, state, 0.0, normal, tangent)
        return Extensive.from_conserved(c, cells[index])
