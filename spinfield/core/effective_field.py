"""
Effective field of a 2D spin lattice.

The effective field at site i is

    (H_eff)_i = -dE/ds_i

where E collects exchange, Zeeman, Bloch-type Dzyaloshinskii-Moriya,
perpendicular anisotropy (along z) and dipole-dipole interactions, plus a
pinning field at one site.

Two entry points:
    effective_field_at  field at one site, written into a caller buffer
    effective_field     field of the whole lattice

Both walk the same four nearest-neighbour bonds (``BONDS``) and take
boundary neighbours from ``neighbor_index``. The single-site path runs the
Numba kernels in ``fast_ops``; the lattice path sweeps numpy slices, four
interior passes followed by the wrap-around passes that exist only under
periodic boundaries.

``effective_field_at`` does not include the dipolar field: it needs a
convolution over the whole lattice and cannot be evaluated per site at a
useful cost. Nor does it include pinning.
"""

from functools import lru_cache
from typing import NamedTuple, Optional, Tuple

import numpy as np

from .defects import GaussianDefect
from .dipolar import DipolarProvider, ddi_field, fft_dipolar_field
from .errors import InvalidLatticeShape
from .fast_ops import (
    dmi_field_site, exchange_field_site, gaussian_exchange_field_site, neighbor_index
)
from .lattice import validate_site, validate_spins
from .parameters import SimulationParams


class Bond(NamedTuple):
    """Nearest-neighbour bond: the neighbour sits at ``step`` along ``axis``."""

    name: str
    axis: int
    step: int

    @property
    def vector(self) -> Tuple[int, int]:
        return (self.step, 0) if self.axis == 0 else (0, self.step)


BONDS = (
    Bond("right", 0, 1),
    Bond("left", 0, -1),
    Bond("bottom", 1, 1),
    Bond("top", 1, -1),
)


def _along(axis: int, index: slice) -> tuple:
    if axis == 0:
        return (slice(None), index, slice(None))
    return (slice(None), slice(None), index)


@lru_cache(maxsize=None)
def bond_passes(nx: int, ny: int, pbc: bool) -> tuple:
    """
    Slice passes covering every bond of an (nx, ny) lattice.

    Returns:
        Tuple of (bond, target, source) where ``target`` and ``source`` index
        a (3, nx, ny) array. Interior passes come first, one per bond, then
        the wrap-around passes along the boundary rows and columns.
    """
    shape = (nx, ny)
    interior, wrapped = [], []

    for bond in BONDS:
        n = shape[bond.axis]
        if bond.step > 0:
            target, source, edge = slice(0, n - 1), slice(1, n), n - 1
        else:
            target, source, edge = slice(1, n), slice(0, n - 1), 0
        interior.append((bond, _along(bond.axis, target), _along(bond.axis, source)))

        neighbour = neighbor_index(edge, n, bond.step, pbc)
        if neighbour >= 0:
            wrapped.append((
                bond,
                _along(bond.axis, slice(edge, edge + 1)),
                _along(bond.axis, slice(neighbour, neighbour + 1)),
            ))

    return tuple(interior + wrapped)


# -----------------------------------------------------------------------------
# Single site
# -----------------------------------------------------------------------------

def effective_field_at(
    out: np.ndarray,
    spins: np.ndarray,
    site: Tuple[int, int],
    params: SimulationParams
) -> np.ndarray:
    """
    Effective field at one site, excluding dipolar and pinning terms.

    Args:
        out: (3,) float buffer that receives the field
        spins: (3, nx, ny) spin lattice
        site: Site indices (x, y)
        params: Parameter bundle

    Returns:
        ``out``
    """
    material = params.material
    validate_spins(spins, material)
    if out.shape != (3,):
        raise InvalidLatticeShape(f"Field buffer must have shape (3,), got {out.shape}")
    x, y = int(site[0]), int(site[1])
    validate_site(x, y, material)

    # Zeeman
    out[0] = 0.0
    out[1] = 0.0
    out[2] = material.h

    defect = params.defect
    if isinstance(defect, GaussianDefect):
        cx, cy = defect.center
        gaussian_exchange_field_site(
            out, spins, x, y, material.j, defect.strength, defect.width,
            cx, cy, material.pbc
        )
    else:
        exchange_field_site(out, spins, x, y, material.j, material.pbc)

    if material.a != 0.0:
        dmi_field_site(out, spins, x, y, material.a, material.pbc)
    if material.dz != 0.0:
        out[2] += material.dz * spins[2, x, y]

    return out


# -----------------------------------------------------------------------------
# Whole lattice
# -----------------------------------------------------------------------------

def exchange_field(field: np.ndarray, spins: np.ndarray, params: SimulationParams):
    """Add the nearest-neighbour exchange field of the lattice to ``field``."""
    material = params.material
    J = material.j
    weights = None
    if isinstance(params.defect, GaussianDefect):
        weights = params.defect.bond_weights

    for bond, target, source in bond_passes(material.nx, material.ny, material.pbc):
        if weights is None:
            field[target] += J * spins[source]
        else:
            coupling = J * getattr(weights, bond.name)[target[1:]]
            field[target] += coupling * spins[source]


def zeeman_field(field: np.ndarray, spins: np.ndarray, params: SimulationParams):
    """Add the uniform external field along z."""
    field[2] += params.material.h


def dmi_field(field: np.ndarray, spins: np.ndarray, params: SimulationParams):
    """Add the Bloch DMI field, A * (e x s_neighbour) summed over bonds."""
    material = params.material
    A = material.a

    for bond, target, source in bond_passes(material.nx, material.ny, material.pbc):
        ex, ey = bond.vector
        h = field[target]
        s = spins[source]
        if ey:
            h[0] += A * ey * s[2]
            h[2] -= A * ey * s[0]
        else:
            h[1] -= A * ex * s[2]
            h[2] += A * ex * s[1]


def pma_field(field: np.ndarray, spins: np.ndarray, params: SimulationParams):
    """Add the perpendicular anisotropy field Dz * s_z."""
    field[2] += params.material.dz * spins[2]


def pinning_field(field: np.ndarray, spins: np.ndarray, params: SimulationParams):
    """Add the pinning field at the pinned site."""
    pinning = params.pinning
    if pinning.strength != 0.0:
        px, py = pinning.site
        field[2, px, py] += pinning.strength


def effective_field(
    spins: np.ndarray,
    params: SimulationParams,
    out: Optional[np.ndarray] = None,
    dipolar_field: DipolarProvider = fft_dipolar_field
) -> np.ndarray:
    """
    Effective field at every site of the lattice.

    Args:
        spins: (3, nx, ny) spin lattice
        params: Parameter bundle
        out: Optional (3, nx, ny) buffer, overwritten
        dipolar_field: Convolution provider used when Ed != 0

    Returns:
        (3, nx, ny) effective field
    """
    material = params.material
    validate_spins(spins, material)

    if out is None:
        field = np.zeros(spins.shape)
    else:
        if out.shape != spins.shape:
            raise InvalidLatticeShape(
                f"Field buffer must have shape {spins.shape}, got {out.shape}"
            )
        field = out
        field.fill(0.0)

    exchange_field(field, spins, params)
    zeeman_field(field, spins, params)

    if material.a != 0.0:
        dmi_field(field, spins, params)
    if material.dz != 0.0:
        pma_field(field, spins, params)
    if material.ed != 0.0:
        field += ddi_field(
            spins, material.ed, material.pbc, material.kernels, provider=dipolar_field
        )

    # Pinning goes last, at the site where the skyrmion was created
    pinning_field(field, spins, params)

    return field
