#!/usr/bin/env python3
"""
Benchmark spinfield effective-field evaluation on square lattices.
"""

import time
import numpy as np
from spinfield import build_params, effective_field, random_spin_lattice
from spinfield.core.fast_ops import check_numba_availability
from spinfield.utils.performance import benchmark_effective_field


def benchmark_defect_setup(size=64, n_calls=200):
    """Show that building bond weights once beats recomputing them per call."""
    print(f"\n🧱 Defect bond weights on a {size}x{size} lattice")
    print("=" * 60)

    start_time = time.time()
    params = build_params(
        j=1.0, nx=size, ny=size, pbc=True,
        defect_type=2, defect_strength=-0.5, defect_width=3.0,
        defect_center=(size / 2, size / 2)
    )
    setup_time = time.time() - start_time

    spins = random_spin_lattice(size, size, seed=1)
    effective_field(spins, params)

    start_time = time.time()
    for _ in range(n_calls):
        effective_field(spins, params)
    call_time = (time.time() - start_time) / n_calls

    print(f"Setup (weights + compile): {setup_time*1000:.2f} ms")
    print(f"Field per call:            {call_time*1000:.3f} ms")


def benchmark_dipolar(sizes=(32, 64, 128), n_calls=20):
    """Time the full field with the FFT dipolar term switched on."""
    print(f"\n🧲 Dipolar field scaling")
    print("=" * 60)
    print(f"{'Size':<10} {'Time/call (ms)':<15}")
    print("-" * 30)

    for size in sizes:
        params = build_params(j=1.0, a=0.1, ed=0.05, nx=size, ny=size, pbc=False)
        spins = random_spin_lattice(size, size, seed=2)
        effective_field(spins, params)

        start_time = time.time()
        for _ in range(n_calls):
            effective_field(spins, params)
        call_time = (time.time() - start_time) / n_calls

        print(f"{f'{size}x{size}':<10} {call_time*1000:<15.3f}")


def main():
    """Run effective-field benchmarks."""
    print("🧪 spinfield Performance Benchmark")
    print("=" * 60)

    numba_available, message = check_numba_availability()
    print(f"Numba status: {message}")

    results = benchmark_effective_field([16, 32, 64], n_iterations=10)
    worst = max(b['max_deviation'] for b in results['benchmarks'].values())
    print(f"\nLargest per-site vs lattice deviation: {worst:.2e}")

    benchmark_effective_field([32, 64], n_iterations=10, defect=True)
    benchmark_defect_setup()
    benchmark_dipolar()

    print(f"\n💡 Tips for maximum performance:")
    print("- Build the parameter bundle once per run; it caches defect weights and demag kernels")
    print("- Use effective_field for full sweeps, effective_field_at only for local updates")


if __name__ == "__main__":
    main()
