"""
Pytest tests for the condition/action flux dispatch.

Tests verify:
1. One flux per edge, aligned with the edge order
2. First-match precedence of the rule sequence
3. Unmatched edges are reported with their index
4. Threaded evaluation matches sequential evaluation
"""

import logging

import numpy as np
import pytest

from hydro2d import (
    Action, DispatchConfig, Extensive, FluxDispatch, HLLCFlux, IdealGas,
    IsBoundaryEdge, IsBulkEdge, RegularFlux, RegularSpecialEdge, RigidWallFlux,
    UnmatchedEdgeError,
)
from hydro2d.tests.meshes import aluminium_tillotson, cartesian_mesh, uniform_cells


class MarkerAction(Action):
    """Returns a flux whose mass identifies the rule and whose energy records aux."""

    def __init__(self, marker):
        super().__init__(riemann_solver=None)
        self.marker = marker

    def __call__(self, edge, tess, point_velocities, cells, eos, aux):
        return Extensive(mass=self.marker, momentum=np.zeros(2), energy=float(aux))


@pytest.fixture
def mesh():
    """3 x 2 grid: 8 vertical and 9 horizontal edges."""
    return cartesian_mesh(3, 2)


@pytest.fixture
def cells(mesh):
    """Ideal gas cells with a shear flow and a density gradient."""
    result = []
    for k, (x, y) in enumerate(mesh.points):
        result.extend(uniform_cells(1, density=1.0 + x, pressure=1.0 + 0.5 * y,
                                    velocity=(0.2 * y, -0.1 * x),
                                    tracers={'dye': k / 6.0}))
    return result


@pytest.fixture
def point_velocities(mesh):
    return [np.array([0.05, 0.0]) for _ in range(mesh.n_points)]


def wall_rules(rs=None):
    rs = rs or HLLCFlux()
    return [(IsBoundaryEdge(), RigidWallFlux(rs)), (IsBulkEdge(), RegularFlux(rs))]


class TestFluxDispatch:

    def test_one_flux_per_edge(self, mesh, cells, point_velocities):
        fluxes = FluxDispatch(wall_rules())
        result = fluxes(mesh, point_velocities, cells, None, None, IdealGas(), 0.0, 0.01)

        assert len(mesh.edges) == 17
        assert len(result) == len(mesh.edges)
        assert all(isinstance(f, Extensive) for f in result)

    def test_aligned_with_edge_order(self, mesh, cells, point_velocities):
        """Each result equals the matching action applied to that edge directly."""
        rs = HLLCFlux()
        eos = IdealGas()
        result = FluxDispatch(wall_rules(rs))(mesh, point_velocities, cells, None, None,
                                              eos, 0.0, 0.01)

        for edge, f in zip(mesh.edges, result):
            matches, aux = IsBoundaryEdge()(edge, mesh, cells)
            action = RigidWallFlux(rs) if matches else RegularFlux(rs)
            expected = action(edge, mesh, point_velocities, cells, eos, aux)
            assert f.mass == pytest.approx(expected.mass)
            np.testing.assert_allclose(f.momentum, expected.momentum)
            assert f.energy == pytest.approx(expected.energy)
            assert f.tracers['dye'] == pytest.approx(expected.tracers['dye'])

    def test_walls_carry_no_mass(self, mesh, cells, point_velocities):
        result = FluxDispatch(wall_rules())(mesh, point_velocities, cells, None, None,
                                            IdealGas(), 0.0, 0.01)
        for edge, f in zip(mesh.edges, result):
            if IsBoundaryEdge()(edge, mesh, cells)[0]:
                assert f.mass == pytest.approx(0.0, abs=1e-12)

    def test_tillotson_cells(self, mesh, point_velocities):
        cells = uniform_cells(mesh.n_points, density=2.7, pressure=1e10,
                              velocity=(1e3, 0.0), tracers={'dye': 1.0})
        result = FluxDispatch(wall_rules())(mesh, point_velocities, cells, None, None,
                                            aluminium_tillotson(), 0.0, 1e-6)
        for f in result:
            assert f.tracers['dye'] == pytest.approx(f.mass)

    def test_unmatched_edge_reports_index(self, mesh, cells, point_velocities):
        fluxes = FluxDispatch([(IsBulkEdge(), RegularFlux(HLLCFlux()))])
        with pytest.raises(UnmatchedEdgeError) as excinfo:
            fluxes(mesh, point_velocities, cells, None, None, IdealGas(), 0.0, 0.01)
        assert excinfo.value.edge_index == 0
        assert "edge 0" in str(excinfo.value)

    def test_first_match_wins(self, mesh, cells, point_velocities):
        fluxes = FluxDispatch([(IsBoundaryEdge(), MarkerAction(1.0)),
                               (IsBulkEdge(), MarkerAction(2.0)),
                               (IsBoundaryEdge(), MarkerAction(3.0))])
        result = fluxes(mesh, point_velocities, cells, None, None, IdealGas(), 0.0, 0.01)

        for edge, f in zip(mesh.edges, result):
            boundary = not (mesh.is_interior(edge.neighbors[0]) and
                            mesh.is_interior(edge.neighbors[1]))
            assert f.mass == (1.0 if boundary else 2.0)

    def test_sticker_rule_takes_precedence(self, mesh, cells, point_velocities):
        """Edges around a tagged cell use the special rule placed first."""
        cells[0].stickers['obstacle'] = True
        fluxes = FluxDispatch([(RegularSpecialEdge('obstacle'), MarkerAction(4.0)),
                               (IsBoundaryEdge(), MarkerAction(1.0)),
                               (IsBulkEdge(), MarkerAction(2.0))])
        result = fluxes(mesh, point_velocities, cells, None, None, IdealGas(), 0.0, 0.01)

        # Cell 0 borders cell 1 through edge 1 and cell 3 through edge 11
        special = [i for i, f in enumerate(result) if f.mass == 4.0]
        assert special == [1, 11]
        # The untagged cell is second on both edges
        assert result[1].energy == 0.0
        assert result[11].energy == 0.0

    def test_boundary_aux_passed_to_action(self, mesh, cells, point_velocities):
        fluxes = FluxDispatch([(IsBoundaryEdge(), MarkerAction(1.0)),
                               (IsBulkEdge(), MarkerAction(2.0))])
        result = fluxes(mesh, point_velocities, cells, None, None, IdealGas(), 0.0, 0.01)
        assert result[0].energy == 0.0      # Left boundary: interior cell second
        assert result[3].energy == 1.0      # Right boundary: interior cell first

    def test_sequence_fixed_at_construction(self):
        rules = wall_rules()
        fluxes = FluxDispatch(rules)
        rules.append((IsBulkEdge(), MarkerAction(5.0)))
        assert isinstance(fluxes.sequence, tuple)
        assert len(fluxes.sequence) == 2

    def test_logs_edge_count(self, mesh, cells, point_velocities, caplog):
        with caplog.at_level(logging.DEBUG, logger="hydro2d.src.dispatch"):
            FluxDispatch(wall_rules())(mesh, point_velocities, cells, None, None,
                                       IdealGas(), 0.5, 0.01)
        assert "17 edges" in caplog.text


class TestThreadedDispatch:

    def test_matches_sequential(self, mesh, cells, point_velocities):
        eos = IdealGas()
        sequential = FluxDispatch(wall_rules())(mesh, point_velocities, cells, None, None,
                                                eos, 0.0, 0.01)
        threaded = FluxDispatch(wall_rules(), DispatchConfig(max_workers=4))(
            mesh, point_velocities, cells, None, None, eos, 0.0, 0.01)

        assert len(threaded) == len(sequential)
        for a, b in zip(sequential, threaded):
            assert a.mass == b.mass
            np.testing.assert_array_equal(a.momentum, b.momentum)
            assert a.energy == b.energy
            assert a.tracers == b.tracers

    def test_unmatched_edge_raised_from_worker(self, mesh, cells, point_velocities):
        fluxes = FluxDispatch([(IsBoundaryEdge(), MarkerAction(1.0))],
                              DispatchConfig(max_workers=3))
        with pytest.raises(UnmatchedEdgeError):
            fluxes(mesh, point_velocities, cells, None, None, IdealGas(), 0.0, 0.01)

    @pytest.mark.parametrize("workers", [0, -2])
    def test_invalid_worker_count(self, workers):
        with pytest.raises(ValueError):
            FluxDispatch(wall_rules(), DispatchConfig(max_workers=workers))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
