"""
Performance benchmark for the flux dispatch.

Times one flux evaluation over a Cartesian mesh with a rigid-wall box, for
both equations of state and several worker counts.

Run from the repository root:
    python hydro2d/scripts/benchmark_dispatch.py
"""

import sys
from pathlib import Path

# Add repository root to path
project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import logging
import time
import numpy as np
from hydro2d import (
    DispatchConfig, FluxDispatch, HLLCFlux, IdealGas, IsBoundaryEdge, IsBulkEdge,
    RegularFlux, RegularSpecialEdge, RigidWallFlux,
)
from hydro2d.tests.meshes import aluminium_tillotson, cartesian_mesh, uniform_cells


def run_benchmark(eos, density, pressure, n=40, max_workers=1, repeats=3):
    """Best wall time of a full flux evaluation."""
    mesh = cartesian_mesh(n, n)
    cells = uniform_cells(mesh.n_points, density=density, pressure=pressure,
                          tracers={'dye': 1.0})

    # Perturb the state so the Riemann problems are not trivial
    rng = np.random.default_rng(0)
    for cell in cells:
        cell.density *= 1.0 + 0.05 * rng.random()
        cell.pressure *= 1.0 + 0.05 * rng.random()
    cells[0].stickers['obstacle'] = True

    rs = HLLCFlux()
    fluxes = FluxDispatch([
        (RegularSpecialEdge('obstacle'), RigidWallFlux(rs)),
        (IsBoundaryEdge(), RigidWallFlux(rs)),
        (IsBulkEdge(), RegularFlux(rs)),
    ], DispatchConfig(max_workers=max_workers))
    point_velocities = [np.zeros(2) for _ in range(mesh.n_points)]

    best = np.inf
    for _ in range(repeats):
        start_time = time.time()
        fluxes(mesh, point_velocities, cells, None, None, eos, 0.0, 1e-3)
        best = min(best, time.time() - start_time)
    return best, len(mesh.edges)


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)

    print("=" * 70)
    print("FLUX DISPATCH BENCHMARK")
    print("=" * 70)

    cases = [
        ("Ideal gas", IdealGas(gamma=1.4), 1.0, 1.0),
        ("Tillotson, compressed", aluminium_tillotson(), 2.8, 1e10),
        ("Tillotson, blended", aluminium_tillotson(), 2.6, 4e11),
    ]

    print(f"\n{'EOS':<25} {'Workers':<10} {'Time (s)':<12} {'µs / edge':<12}")
    print("-" * 70)
    for name, eos, density, pressure in cases:
        for workers in (1, 2, 4):
            elapsed, n_edges = run_benchmark(eos, density, pressure, max_workers=workers)
            print(f"{name:<25} {workers:<10} {elapsed:<12.3f} "
                  f"{elapsed / n_edges * 1e6:<12.1f}")

    print("=" * 70)
