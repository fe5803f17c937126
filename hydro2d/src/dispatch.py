"""
Condition/action flux dispatch.

An ordered sequence of (condition, action) pairs, fixed at construction.
Each edge is evaluated by the action of the first condition that matches
it; the result list is aligned with the tessellation's edge order.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple

import numpy as np

from .actions import Action
from .conditions import Condition
from .eos import EquationOfState
from .exceptions import UnmatchedEdgeError
from .mesh import Tessellation
from .state import ComputationalCell, Extensive

logger = logging.getLogger(__name__)


@dataclass
class DispatchConfig:
    """Configuration for the flux dispatch."""
    max_workers: int = 1    # 1 evaluates edges in order on the calling thread


class FluxDispatch:
    """
    Flux calculator driven by an ordered condition/action sequence.

    The sequence must cover every edge of the mesh; an edge that matches no
    condition raises UnmatchedEdgeError.
    """

    def __init__(self, sequence: Sequence[Tuple[Condition, Action]],
                 config: DispatchConfig = None):
        """
        Args:
            sequence: (condition, action) pairs in precedence order
            config: Dispatch configuration
        """
        self.sequence = tuple((condition, action) for condition, action in sequence)
        self.config = config if config is not None else DispatchConfig()
        if self.config.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.config.max_workers}")

    def choose_action(self, index: int, tess: Tessellation,
                      point_velocities: Sequence[np.ndarray],
                      cells: Sequence[ComputationalCell],
                      eos: EquationOfState) -> Extensive:
        """Flux through a single edge."""
        edge = tess.edges[index]
        for condition, action in self.sequence:
            matches, aux = condition(edge, tess, cells)
            if matches:
                return action(edge, tess, point_velocities, cells, eos, aux)
        raise UnmatchedEdgeError(index)

    def __call__(self, tess: Tessellation, point_velocities: Sequence[np.ndarray],
                 cells: Sequence[ComputationalCell], extensives: Any, cache: Any,
                 eos: EquationOfState, time: float, dt: float) -> List[Extensive]:
        """
        Compute the flux through every edge.

        Args:
            tess: Tessellation
            point_velocities: Mesh point velocities (n_points,)
            cells: Cell states (n_points,)
            extensives: Extensive cell quantities (unused)
            cache: Cached geometry (unused)
            eos: Equation of state
            time: Simulation time
            dt: Time step

        Returns:
            One Extensive per edge, in edge order
        """
        n_edges = len(tess.edges)
        logger.debug("Computing fluxes for %d edges at t=%g (dt=%g)", n_edges, time, dt)

        def evaluate(index):
            return self.choose_action(index, tess, point_velocities, cells, eos)

        if self.config.max_workers == 1:
            return [evaluate(i) for i in range(n_edges)]
        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            return list(executor.map(evaluate, range(n_edges)))
