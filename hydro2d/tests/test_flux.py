"""
Pytest tests for the Riemann solvers.

Tests verify:
1. Consistency: equal states give the exact physical flux
2. Upwinding for supersonic flow
3. Moving faces (Galilean invariance)
4. Rotation into and out of the face frame
"""

import numpy as np
import pytest

from hydro2d import HLLCFlux, IdealGas, Primitive, RusanovFlux, rotate_solve_rotate_back
from hydro2d.src.flux import physical_flux


@pytest.fixture
def gas():
    return IdealGas(gamma=1.4)


def make_state(gas, density, pressure, velocity):
    e = gas.energy_from_density_pressure(density, pressure)
    c = gas.sound_speed_from_density_energy_pressure(density, e, pressure)
    return Primitive(density=density, pressure=pressure, velocity=velocity,
                     energy=e, sound_speed=c)


@pytest.fixture(params=[HLLCFlux, RusanovFlux], ids=['hllc', 'rusanov'])
def solver(request):
    return request.param()


class TestConsistency:
    """Equal left and right states."""

    def test_state_at_rest(self, gas, solver):
        state = make_state(gas, 1.0, 1.0, (0.0, 0.0))
        f = solver(state, state, 0.0)

        assert f.mass == pytest.approx(0.0, abs=1e-14)
        np.testing.assert_allclose(f.momentum, [1.0, 0.0], atol=1e-14)
        assert f.energy == pytest.approx(0.0, abs=1e-14)

    def test_moving_state(self, gas, solver):
        state = make_state(gas, 1.2, 0.8, (0.3, -0.2))
        f = solver(state, state, 0.0)
        exact = physical_flux(state)

        assert f.mass == pytest.approx(exact.mass)
        np.testing.assert_allclose(f.momentum, exact.momentum)
        assert f.energy == pytest.approx(exact.energy)


class TestUpwinding:

    def test_supersonic_left_to_right(self, gas):
        left = make_state(gas, 1.0, 1.0, (5.0, 0.0))
        right = make_state(gas, 0.1, 0.1, (5.0, 0.0))
        f = HLLCFlux()(left, right, 0.0)
        exact = physical_flux(left)

        assert f.mass == pytest.approx(exact.mass)
        np.testing.assert_allclose(f.momentum, exact.momentum)
        assert f.energy == pytest.approx(exact.energy)

    def test_contact_carries_tangential_velocity(self, gas):
        """Across a stationary contact only the upwind tangential velocity is advected."""
        left = make_state(gas, 1.0, 1.0, (0.5, 1.0))
        right = make_state(gas, 1.0, 1.0, (0.5, -1.0))
        f = HLLCFlux()(left, right, 0.0)

        assert f.momentum[1] == pytest.approx(f.mass * 1.0)


class TestMovingFace:

    def test_face_moving_with_flow(self, gas, solver):
        """A face moving with the fluid has no mass flux, only pressure work."""
        state = make_state(gas, 1.0, 2.0, (0.7, 0.0))
        f = solver(state, state, 0.7)

        assert f.mass == pytest.approx(0.0, abs=1e-14)
        assert f.momentum[0] == pytest.approx(2.0)
        assert f.energy == pytest.approx(2.0 * 0.7)


class TestRotation:

    def test_rotated_normal(self, gas):
        state = make_state(gas, 1.0, 1.0, (0.0, 0.0))
        normal = np.array([0.0, 1.0])
        tangent = np.array([-1.0, 0.0])
        c = rotate_solve_rotate_back(HLLCFlux(), state, state, 0.0, normal, tangent)

        np.testing.assert_allclose(c.momentum, [0.0, 1.0], atol=1e-14)

    def test_oblique_flow(self, gas):
        """Uniform flow gives the same flux whatever the frame orientation."""
        state = make_state(gas, 1.0, 1.0, (0.3, 0.4))
        normal = np.array([0.6, 0.8])
        tangent = np.array([-0.8, 0.6])
        c = rotate_solve_rotate_back(HLLCFlux(), state, state, 0.0, normal, tangent)

        un = 0.5
        assert c.mass == pytest.approx(un)
        np.testing.assert_allclose(c.momentum, un * state.velocity + 1.0 * normal)
        assert c.energy == pytest.approx((state.total_energy + 1.0) * un)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
