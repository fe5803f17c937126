"""
Edge classifiers for the condition/action flux dispatch.

A condition maps (edge, tessellation, cells) to (matches, aux). For
one-sided rules aux selects the interior donor: True means the first
neighbor is the interior cell, False the second.
"""

from abc import ABC, abstractmethod
from typing import Sequence, Tuple

from .exceptions import InvalidTopologyError
from .mesh import Edge, Tessellation
from .state import ComputationalCell


class Condition(ABC):
    """Abstract base class for edge classifiers."""

    @abstractmethod
    def __call__(self, edge: Edge, tess: Tessellation,
                 cells: Sequence[ComputationalCell]) -> Tuple[bool, bool]:
        """
        Classify an edge.

        Returns:
            (matches, aux)
        """
        pass


class IsBoundaryEdge(Condition):
    """Matches edges with exactly one interior neighbor."""

    def __call__(self, edge: Edge, tess: Tessellation,
                 cells: Sequence[ComputationalCell]) -> Tuple[bool, bool]:
        first, second = edge.neighbors
        if not tess.is_interior(first):
            if not tess.is_interior(second):
                raise InvalidTopologyError(
                    f"Edge with neighbors {edge.neighbors} has no interior cell")
            return True, False
        if not tess.is_interior(second):
            return True, True
        return False, False


class IsBulkEdge(Condition):
    """Matches edges between two interior cells."""

    def __call__(self, edge: Edge, tess: Tessellation,
                 cells: Sequence[ComputationalCell]) -> Tuple[bool, bool]:
        first, second = edge.neighbors
        return tess.is_interior(first) and tess.is_interior(second), False


class RegularSpecialEdge(Condition):
    """
    Matches interior edges where exactly one neighbor carries a sticker.

    The tagged cell is treated as the outside; aux points at the untagged
    cell. Edges between two tagged (or two untagged) cells do not match.
    """

    def __init__(self, sticker_name: str):
        self.sticker_name = sticker_name

    def __call__(self, edge: Edge, tess: Tessellation,
                 cells: Sequence[ComputationalCell]) -> Tuple[bool, bool]:
        first, second = edge.neighbors
        if not (tess.is_interior(first) and tess.is_interior(second)):
            return False, False
        first_tagged = cells[first].stickers.get(self.sticker_name, False)
        second_tagged = cells[second].stickers.get(self.sticker_name, False)
        if first_tagged == second_tagged:
            return False, False
        return True, second_tagged
