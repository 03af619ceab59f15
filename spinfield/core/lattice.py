"""
Spin lattice helpers.

A spin lattice is a float array of shape (3, nx, ny): component first, then
site. Unit norm is expected but not enforced here.
"""

import numpy as np
from typing import Optional, Sequence

from .errors import InvalidLatticeShape, SiteOutOfBounds
from .parameters import MaterialParams
from ..utils.random import generate_random_unit_vectors


def validate_spins(spins: np.ndarray, material: MaterialParams) -> np.ndarray:
    """Raise InvalidLatticeShape unless ``spins`` is a (3, nx, ny) array."""
    expected = (3, material.nx, material.ny)
    if not isinstance(spins, np.ndarray) or spins.shape != expected:
        got = getattr(spins, "shape", type(spins).__name__)
        raise InvalidLatticeShape(f"Spin lattice must have shape {expected}, got {got}")
    return spins


def validate_site(x: int, y: int, material: MaterialParams):
    """Raise SiteOutOfBounds unless (x, y) lies on the lattice."""
    if not (0 <= x < material.nx and 0 <= y < material.ny):
        raise SiteOutOfBounds(
            f"Site ({x}, {y}) outside lattice of shape {material.shape}"
        )


def uniform_spin_lattice(
    nx: int,
    ny: int,
    direction: Sequence[float] = (0.0, 0.0, 1.0)
) -> np.ndarray:
    """
    Lattice with every spin along ``direction`` (normalized).

    Args:
        nx, ny: Lattice shape
        direction: Spin direction

    Returns:
        (3, nx, ny) spin array
    """
    direction = np.asarray(direction, dtype=np.float64)
    norm = np.linalg.norm(direction)
    if norm == 0:
        raise ValueError("Spin direction must be non-zero")
    spins = np.empty((3, nx, ny))
    spins[:] = (direction / norm)[:, np.newaxis, np.newaxis]
    return spins


def random_spin_lattice(nx: int, ny: int, seed: Optional[int] = None) -> np.ndarray:
    """Lattice of random unit spins, uniform on the sphere."""
    return generate_random_unit_vectors(nx * ny, seed=seed).reshape(3, nx, ny)
