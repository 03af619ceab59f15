"""
Energy decomposition of a spin configuration.

Each energy follows from its effective-field term. Bilinear terms (exchange,
DMI, PMA, DDI) count every pair twice in the field, so they carry a factor
1/2:

    E_term = -1/2 sum_i s_i . H_term,i        (bilinear)
    E_term = -sum_i s_i . H_term,i            (Zeeman, pinning)
"""

import numpy as np
from typing import Dict

from ..core.dipolar import DipolarProvider, ddi_field, fft_dipolar_field
from ..core.effective_field import (
    dmi_field, exchange_field, pinning_field, pma_field, zeeman_field
)
from ..core.lattice import validate_spins
from ..core.parameters import SimulationParams

_BILINEAR = ("exchange", "dmi", "pma", "ddi")


def _term_field(term, spins, params):
    field = np.zeros(spins.shape)
    term(field, spins, params)
    return field


def energy_terms(
    spins: np.ndarray,
    params: SimulationParams,
    dipolar_field: DipolarProvider = fft_dipolar_field
) -> Dict[str, float]:
    """
    Energy of each interaction and the total.

    Args:
        spins: (3, nx, ny) spin lattice
        params: Parameter bundle
        dipolar_field: Convolution provider used when Ed != 0

    Returns:
        Dictionary with keys exchange, zeeman, dmi, pma, ddi, pinning, total
    """
    material = params.material
    validate_spins(spins, material)

    fields = {
        "exchange": _term_field(exchange_field, spins, params),
        "zeeman": _term_field(zeeman_field, spins, params),
        "dmi": _term_field(dmi_field, spins, params),
        "pma": _term_field(pma_field, spins, params),
        "pinning": _term_field(pinning_field, spins, params),
    }
    if material.ed != 0.0:
        fields["ddi"] = ddi_field(
            spins, material.ed, material.pbc, material.kernels, provider=dipolar_field
        )
    else:
        fields["ddi"] = np.zeros(spins.shape)

    energies = {}
    for name, field in fields.items():
        energy = -float(np.sum(spins * field))
        if name in _BILINEAR:
            energy *= 0.5
        energies[name] = energy

    energies["total"] = sum(energies.values())
    return energies


def total_energy(
    spins: np.ndarray,
    params: SimulationParams,
    dipolar_field: DipolarProvider = fft_dipolar_field
) -> float:
    """Total energy of the configuration."""
    return energy_terms(spins, params, dipolar_field)["total"]
