"""
Dipole-dipole field of the spin lattice.

``ddi_field`` is the adapter used by the field assembler: it calls a
convolution provider and scales the result by the dipolar constant. The
default provider, ``fft_dipolar_field``, convolves the spins with the
point-dipole tensor using FFTs; its kernels are built once per run by
``demag_kernels``.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Tuple

import numpy as np
from scipy import fft

from .errors import InvalidLatticeShape, InvalidParameter

logger = logging.getLogger("spinfield")

DipolarProvider = Callable[[np.ndarray, "DemagKernels", bool], np.ndarray]


@dataclass(frozen=True, eq=False)
class DemagKernels:
    """Fourier transforms of the dipolar interaction tensor components."""

    shape: Tuple[int, int]      # lattice shape (nx, ny)
    grid: Tuple[int, int]       # FFT grid, padded for open boundaries
    pbc: bool
    xx: np.ndarray
    xy: np.ndarray
    yy: np.ndarray
    zz: np.ndarray


def _offsets(n: int, size: int) -> np.ndarray:
    # Signed separations 0, 1, ..., -1 in FFT order
    d = np.fft.fftfreq(size, 1.0 / size)
    d[np.abs(d) >= n] = 0.0
    return d


def demag_kernels(nx: int, ny: int, pbc: bool) -> DemagKernels:
    """
    Precompute the dipolar kernels for an (nx, ny) lattice of unit moments.

    For open boundaries the tensor is laid out on a (2nx, 2ny) grid so the
    circular FFT convolution equals the linear one. With periodic boundaries
    it lives on the lattice grid itself, using the nearest periodic image;
    where two images are equally near, the tensor is their average, which
    keeps K(d) = K(-d) and the interaction reciprocal.

    Args:
        nx, ny: Lattice shape
        pbc: Periodic boundary conditions

    Returns:
        DemagKernels holding the transformed tensor components
    """
    grid = (nx, ny) if pbc else (2 * nx, 2 * ny)

    dx = _offsets(nx, grid[0])[:, np.newaxis]
    dy = _offsets(ny, grid[1])[np.newaxis, :]
    r2 = dx ** 2 + dy ** 2

    with np.errstate(divide="ignore", invalid="ignore"):
        inv_r3 = np.where(r2 > 0, r2 ** -1.5, 0.0)
        inv_r5 = np.where(r2 > 0, r2 ** -2.5, 0.0)

    kxx = (3 * dx ** 2 - r2) * inv_r5
    kyy = (3 * dy ** 2 - r2) * inv_r5
    kxy = 3 * dx * dy * inv_r5
    kzz = -inv_r3

    if pbc:
        # Half-lattice separations on even axes have two nearest images,
        # +n/2 and -n/2; their xy couplings cancel
        if nx % 2 == 0:
            kxy[np.abs(dx[:, 0]) == nx / 2, :] = 0.0
        if ny % 2 == 0:
            kxy[:, np.abs(dy[0, :]) == ny / 2] = 0.0

    logger.debug("Built demag kernels for lattice (%d, %d), pbc=%s", nx, ny, pbc)
    return DemagKernels(
        shape=(nx, ny),
        grid=grid,
        pbc=bool(pbc),
        xx=fft.rfft2(kxx),
        xy=fft.rfft2(kxy),
        yy=fft.rfft2(kyy),
        zz=fft.rfft2(kzz),
    )


def fft_dipolar_field(spins: np.ndarray, kernels: DemagKernels, pbc: bool) -> np.ndarray:
    """
    Dipolar field of unit point dipoles, H_i = sum_j (3 (s_j.r) r - r^2 s_j) / r^5.

    Args:
        spins: (3, nx, ny) spin lattice
        kernels: Kernels from ``demag_kernels`` for the same lattice
        pbc: Periodic boundary conditions

    Returns:
        (3, nx, ny) dipolar field, without the dipolar constant
    """
    nx, ny = spins.shape[1:]
    if kernels.shape != (nx, ny):
        raise InvalidLatticeShape(
            f"Demag kernels built for {kernels.shape}, lattice is {(nx, ny)}"
        )
    if kernels.pbc != bool(pbc):
        raise InvalidParameter("Demag kernels built for different boundary conditions")

    m = fft.rfft2(spins, s=kernels.grid, axes=(1, 2))

    h = np.empty_like(m)
    h[0] = kernels.xx * m[0] + kernels.xy * m[1]
    h[1] = kernels.xy * m[0] + kernels.yy * m[1]
    h[2] = kernels.zz * m[2]

    return fft.irfft2(h, s=kernels.grid, axes=(1, 2))[:, :nx, :ny]


def ddi_field(
    spins: np.ndarray,
    ed: float,
    pbc: bool,
    kernels: DemagKernels,
    provider: DipolarProvider = fft_dipolar_field
) -> np.ndarray:
    """
    Dipolar contribution to the effective field.

    Args:
        spins: (3, nx, ny) spin lattice
        ed: Dipolar constant
        pbc: Periodic boundary conditions
        kernels: Precomputed kernels passed through to the provider
        provider: Convolution routine ``provider(spins, kernels, pbc)``

    Returns:
        (3, nx, ny) array ``ed * provider(spins, kernels, pbc)``
    """
    field = np.asarray(provider(spins, kernels, pbc))
    if field.shape != spins.shape:
        raise InvalidLatticeShape(
            f"Dipolar provider returned shape {field.shape}, expected {spins.shape}"
        )
    return ed * field
