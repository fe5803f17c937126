"""
Pytest tests for the edge classifiers.
"""

import numpy as np
import pytest

from hydro2d import (
    ComputationalCell, Edge, InvalidTopologyError, IsBoundaryEdge, IsBulkEdge,
    Mesh2D, RegularSpecialEdge,
)


@pytest.fixture
def mesh():
    """Two cells side by side with one shared edge."""
    points = np.array([[0.5, 0.5], [1.5, 0.5]])
    edges = [Edge(vertices=((1.0, 0.0), (1.0, 1.0)), neighbors=(0, 1))]
    return Mesh2D(points, edges)


def cells_with_stickers(first, second):
    return [ComputationalCell(density=1.0, pressure=1.0, velocity=(0.0, 0.0),
                              stickers={'wall': first}),
            ComputationalCell(density=1.0, pressure=1.0, velocity=(0.0, 0.0),
                              stickers={'wall': second})]


def edge(first, second):
    return Edge(vertices=((1.0, 0.0), (1.0, 1.0)), neighbors=(first, second))


class TestIsBoundaryEdge:

    def test_bulk_edge_does_not_match(self, mesh):
        assert IsBoundaryEdge()(edge(0, 1), mesh, []) == (False, False)

    @pytest.mark.parametrize("outside", [-1, 2, 100])
    def test_missing_second_neighbor(self, mesh, outside):
        """aux is True when the first neighbor is the interior cell."""
        assert IsBoundaryEdge()(edge(0, outside), mesh, []) == (True, True)

    @pytest.mark.parametrize("outside", [-1, 2])
    def test_missing_first_neighbor(self, mesh, outside):
        assert IsBoundaryEdge()(edge(outside, 1), mesh, []) == (True, False)

    def test_no_interior_neighbor(self, mesh):
        with pytest.raises(InvalidTopologyError):
            IsBoundaryEdge()(edge(-1, 2), mesh, [])


class TestIsBulkEdge:

    def test_interior_edge(self, mesh):
        assert IsBulkEdge()(edge(0, 1), mesh, []) == (True, False)

    @pytest.mark.parametrize("neighbors", [(-1, 1), (0, 2), (-1, -1)])
    def test_boundary_edges(self, mesh, neighbors):
        assert IsBulkEdge()(edge(*neighbors), mesh, []) == (False, False)


class TestRegularSpecialEdge:

    def test_first_tagged(self, mesh):
        """The untagged second cell is the interior donor."""
        cells = cells_with_stickers(True, False)
        assert RegularSpecialEdge('wall')(edge(0, 1), mesh, cells) == (True, False)

    def test_second_tagged(self, mesh):
        cells = cells_with_stickers(False, True)
        assert RegularSpecialEdge('wall')(edge(0, 1), mesh, cells) == (True, True)

    @pytest.mark.parametrize("tags", [(True, True), (False, False)])
    def test_both_or_neither_tagged(self, mesh, tags):
        cells = cells_with_stickers(*tags)
        assert RegularSpecialEdge('wall')(edge(0, 1), mesh, cells) == (False, False)

    def test_boundary_edge_never_matches(self, mesh):
        cells = cells_with_stickers(True, False)
        assert RegularSpecialEdge('wall')(edge(0, -1), mesh, cells) == (False, False)

    def test_missing_sticker_counts_as_untagged(self, mesh):
        cells = [ComputationalCell(density=1.0, pressure=1.0, velocity=(0.0, 0.0)),
                 ComputationalCell(density=1.0, pressure=1.0, velocity=(0.0, 0.0),
                                   stickers={'wall': True})]
        assert RegularSpecialEdge('wall')(edge(0, 1), mesh, cells) == (True, True)
        assert RegularSpecialEdge('other')(edge(0, 1), mesh, cells) == (False, False)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
