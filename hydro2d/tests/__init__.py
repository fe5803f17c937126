"""
Test cases for the hydro2d flux core.

Run tests with pytest:
    pytest hydro2d/tests/ -v

Or run individual test files:
    pytest hydro2d/tests/test_tillotson.py -v
    pytest hydro2d/tests/test_dispatch.py -v
"""

from .meshes import cartesian_mesh, uniform_cells, aluminium_tillotson

__all__ = [
    'cartesian_mesh',
    'uniform_cells',
    'aluminium_tillotson',
]
