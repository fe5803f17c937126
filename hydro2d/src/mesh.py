"""
2D tessellation interface and a static mesh container.

Cells are indexed 0 .. n_points - 1. An edge neighbor index outside that
range means there is no interior cell on that side.
"""

import numpy as np
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple


def normalize(v: np.ndarray) -> np.ndarray:
    """Unit vector along v."""
    return v / np.linalg.norm(v)


def remove_parallel_component(v: np.ndarray, axis: np.ndarray) -> np.ndarray:
    """Part of v perpendicular to axis."""
    return v - axis * np.dot(v, axis) / np.dot(axis, axis)


@dataclass
class Edge:
    """
    Mesh edge.

    - vertices: End points (2 arrays of shape (2,))
    - neighbors: Indices of the cells on either side
    """
    vertices: Tuple[np.ndarray, np.ndarray]
    neighbors: Tuple[int, int]

    def __post_init__(self):
        self.vertices = (np.asarray(self.vertices[0], dtype=float),
                         np.asarray(self.vertices[1], dtype=float))
        self.neighbors = (int(self.neighbors[0]), int(self.neighbors[1]))

    @property
    def length(self) -> float:
        return float(np.linalg.norm(self.vertices[1] - self.vertices[0]))

    @property
    def centroid(self) -> np.ndarray:
        return 0.5 * (self.vertices[0] + self.vertices[1])

    @property
    def tangent(self) -> np.ndarray:
        """Unit vector from the first vertex to the second."""
        return normalize(self.vertices[1] - self.vertices[0])


class Tessellation(ABC):
    """Abstract base class for the mesh consumed by the flux calculation."""

    @property
    @abstractmethod
    def n_points(self) -> int:
        """Number of interior cells."""
        pass

    @property
    @abstractmethod
    def edges(self) -> Sequence[Edge]:
        """All edges, in a stable order."""
        pass

    @abstractmethod
    def mesh_point(self, index: int) -> np.ndarray:
        """Generating point of a cell."""
        pass

    @abstractmethod
    def cell_centroid(self, index: int) -> np.ndarray:
        """Center of mass of a cell."""
        pass

    @abstractmethod
    def face_velocity(self, wl: np.ndarray, wr: np.ndarray, rl: np.ndarray,
                      rr: np.ndarray, f: np.ndarray) -> np.ndarray:
        """
        Velocity of a face moving with its two mesh points.

        Args:
            wl, wr: Velocities of the left and right mesh points
            rl, rr: Centroids of the left and right cells
            f: Point on the face (its centroid)
        """
        pass

    def is_interior(self, index: int) -> bool:
        """Whether a neighbor index refers to a real cell."""
        return 0 <= index < self.n_points


class Mesh2D(Tessellation):
    """
    Static tessellation built from precomputed geometry.

    Face velocities use the Voronoi interpolation
        w = (wl + wr)/2 + ((wl - wr).(f - (rl + rr)/2)) (rr - rl) / |rr - rl|^2
    """

    def __init__(self, points: np.ndarray, edges: List[Edge],
                 centroids: Optional[np.ndarray] = None):
        """
        Args:
            points: Mesh generating points (n_points, 2)
            edges: Edge list
            centroids: Cell centers of mass (n_points, 2); defaults to points
        """
        self.points = np.asarray(points, dtype=float)
        self._edges = list(edges)
        self.centroids = self.points if centroids is None else np.asarray(centroids, dtype=float)
        if self.centroids.shape != self.points.shape:
            raise ValueError(f"Centroid array shape {self.centroids.shape} does not match "
                             f"points shape {self.points.shape}")

    @property
    def n_points(self) -> int:
        return len(self.points)

    @property
    def edges(self) -> List[Edge]:
        return self._edges

    def mesh_point(self, index: int) -> np.ndarray:
        return self.points[index]

    def cell_centroid(self, index: int) -> np.ndarray:
        return self.centroids[index]

    def face_velocity(self, wl: np.ndarray, wr: np.ndarray, rl: np.ndarray,
                      rr: np.ndarray, f: np.ndarray) -> np.ndarray:
        dr = rr - rl
        correction = np.dot(wl - wr, f - 0.5 * (rl + rr)) * dr / np.dot(dr, dr)
        return 0.5 * (wl + wr) + correction
