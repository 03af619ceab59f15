"""Random number utilities."""

import numpy as np
from typing import Optional


def generate_random_unit_vectors(n: int, seed: Optional[int] = None) -> np.ndarray:
    """
    Generate random unit vectors uniformly distributed on sphere.

    Draws from a private generator, so the global ``np.random`` state is
    left untouched.

    Args:
        n: Number of vectors to generate
        seed: Optional random seed

    Returns:
        Array of shape (3, n) with unit vectors as columns
    """
    rng = np.random.default_rng(seed)

    # Archimedes: uniform cos(theta) and phi give a uniform sphere
    phi = rng.uniform(0, 2*np.pi, n)
    cos_theta = rng.uniform(-1, 1, n)
    sin_theta = np.sqrt(1 - cos_theta**2)

    return np.stack((sin_theta * np.cos(phi), sin_theta * np.sin(phi), cos_theta))
