"""
Performance testing and benchmarking utilities.
"""

import time
import numpy as np
from typing import Dict, List, Any

from ..core.effective_field import effective_field, effective_field_at
from ..core.fast_ops import check_numba_availability
from ..core.lattice import random_spin_lattice
from ..core.parameters import build_params


def benchmark_effective_field(
    system_sizes: List[int] = [16, 32, 64],
    n_iterations: int = 20,
    defect: bool = False,
    verbose: bool = True
) -> Dict[str, Any]:
    """
    Time the whole-lattice assembler against a per-site loop.

    Args:
        system_sizes: Linear lattice sizes to test
        n_iterations: Repetitions per timing
        defect: Include a Gaussian defect at the lattice centre
        verbose: Print results while running

    Returns:
        Dictionary with timings per size and the largest deviation between
        the two paths
    """
    numba_available, message = check_numba_availability()

    results = {
        'numba_available': numba_available,
        'numba_message': message,
        'system_sizes': system_sizes,
        'benchmarks': {}
    }

    if verbose:
        print("Benchmarking effective field...")
        print("=" * 50)

    for size in system_sizes:
        params = build_params(
            j=1.0, h=0.1, a=0.3, dz=0.05, nx=size, ny=size, pbc=True,
            defect_type=2 if defect else 0,
            defect_strength=-0.5, defect_width=2.0,
            defect_center=(size / 2, size / 2)
        )
        spins = random_spin_lattice(size, size, seed=42)

        # Compile Numba kernels outside the timed region
        buffer = np.zeros(3)
        effective_field_at(buffer, spins, (0, 0), params)

        start_time = time.time()
        for _ in range(n_iterations):
            lattice_field = effective_field(spins, params)
        time_lattice = (time.time() - start_time) / n_iterations

        site_field = np.empty_like(lattice_field)
        start_time = time.time()
        for _ in range(n_iterations):
            for x in range(size):
                for y in range(size):
                    site_field[:, x, y] = effective_field_at(buffer, spins, (x, y), params)
        time_sites = (time.time() - start_time) / n_iterations

        results['benchmarks'][size] = {
            'time_lattice': time_lattice,
            'time_sites': time_sites,
            'speedup': time_sites / time_lattice if time_lattice > 0 else float('inf'),
            'max_deviation': float(np.max(np.abs(lattice_field - site_field)))
        }

        if verbose:
            bench = results['benchmarks'][size]
            print(f"  {size}x{size}: lattice {time_lattice*1000:.3f} ms, "
                  f"per-site {time_sites*1000:.3f} ms "
                  f"({bench['speedup']:.1f}x), max deviation {bench['max_deviation']:.2e}")

    return results
