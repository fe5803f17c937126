"""
Plot the Tillotson pressure and sound speed across its three regions.

Shows p(e) and c(e) along several isochores, with the region boundaries
EIV and ECV marked, and checks the energy inversion against the forward
pressure along each curve.

Run from the repository root:
    python hydro2d/scripts/plot_tillotson.py
"""

import sys
from pathlib import Path

# Add repository root to path
project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import logging
import numpy as np
import matplotlib.pyplot as plt
from hydro2d import EOSConvergenceError, NumericalError, TillotsonRegion
from hydro2d.tests.meshes import aluminium_tillotson

REGION_COLORS = {
    TillotsonRegion.COMPRESSED: 'tab:blue',
    TillotsonRegion.BLENDED: 'tab:orange',
    TillotsonRegion.EXPANDED: 'tab:green',
}


def sample_isochore(eos, density, energies):
    """Pressure, sound speed and region along one isochore."""
    p = np.array([eos.pressure_from_density_energy(density, e) for e in energies])
    c = np.array([eos.sound_speed_from_density_energy_pressure(density, e, pi)
                  for e, pi in zip(energies, p)])
    regions = [eos.region(density, e) for e in energies]
    return p, c, regions


def inversion_error(eos, density, energies, pressures):
    """Largest relative energy error of the inversion along an isochore."""
    worst = 0.0
    for e, p in zip(energies, pressures):
        try:
            e_back = eos.energy_from_density_pressure(density, p)
        except (EOSConvergenceError, NumericalError) as exc:
            print(f"  inversion rejected at e = {e:.3e}:\n{exc}")
            continue
        worst = max(worst, abs(e_back - e) / e)
    return worst


def plot_tillotson(eos, ratios=(0.5, 0.95, 1.2)):
    """Create p(e) and c(e) plots for densities ratio * rho0."""
    energies = np.linspace(0.05 * eos.EIV, 2.0 * eos.ECV, 400)

    fig, axes = plt.subplots(1, 2, figsize=(14, 5))
    fig.suptitle('Tillotson EOS (aluminium)', fontsize=14, fontweight='bold')

    for ratio in ratios:
        d = ratio * eos.rho0
        p, c, regions = sample_isochore(eos, d, energies)
        colors = [REGION_COLORS[r] for r in regions]

        axes[0].plot(energies, p, 'k-', linewidth=0.8, alpha=0.5)
        axes[0].scatter(energies, p, c=colors, s=4)
        axes[0].annotate(f'ρ/ρ0 = {ratio}', (energies[-1], p[-1]), fontsize=9)

        axes[1].plot(energies, c, 'k-', linewidth=0.8, alpha=0.5)
        axes[1].scatter(energies, c, c=colors, s=4)

        piv, pcv = eos.region_thresholds(d)
        print(f"ρ/ρ0 = {ratio:<5} PIV = {piv:.4e}  PCV = {pcv:.4e}  "
              f"max inversion error = {inversion_error(eos, d, energies, p):.2e}")

    for ax in axes:
        ax.axvline(eos.EIV, color='gray', linestyle=':', alpha=0.7)
        ax.axvline(eos.ECV, color='gray', linestyle=':', alpha=0.7)
        ax.set_xlabel('Specific internal energy [erg/g]')
        ax.grid(True, alpha=0.3)
    axes[0].set_ylabel('Pressure [dyn/cm²]')
    axes[0].set_title('Pressure')
    axes[1].set_ylabel('Sound speed [cm/s]')
    axes[1].set_title('Sound speed')

    handles = [plt.Line2D([], [], marker='o', linestyle='', color=color, label=region.name)
               for region, color in REGION_COLORS.items()]
    axes[0].legend(handles=handles)

    plt.tight_layout()
    plt.savefig('tillotson_regions.png', dpi=150, bbox_inches='tight')
    print("Saved: tillotson_regions.png")
    return fig


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING, format='%(levelname)s %(name)s: %(message)s')

    print("=" * 70)
    print("TILLOTSON EQUATION OF STATE")
    print("=" * 70)

    eos = aluminium_tillotson()
    plot_tillotson(eos)
    plt.show()
