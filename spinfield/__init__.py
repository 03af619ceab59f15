"""
spinfield: effective-field engine for 2D micromagnetic spin lattices.

Computes the exchange, Zeeman, Dzyaloshinskii-Moriya, anisotropy, dipolar
and pinning fields acting on every spin, for use by LLG or field-alignment
integrators.
"""

__version__ = "0.1.0"

from . import core
from . import analysis
from . import utils

from .core import (
    MaterialParams, Pinning, SimulationParams, build_params,
    NoDefect, PointDefect, GaussianDefect, defect_bond_weights,
    effective_field, effective_field_at, ddi_field, demag_kernels,
    uniform_spin_lattice, random_spin_lattice,
    FieldError, InvalidLatticeShape, SiteOutOfBounds,
    DefectGeometryUnsupported, InvalidParameter
)
from .analysis import energy_terms, total_energy
from .core.fast_ops import check_numba_availability

__all__ = [
    "MaterialParams",
    "Pinning",
    "SimulationParams",
    "build_params",
    "NoDefect",
    "PointDefect",
    "GaussianDefect",
    "defect_bond_weights",
    "effective_field",
    "effective_field_at",
    "ddi_field",
    "demag_kernels",
    "uniform_spin_lattice",
    "random_spin_lattice",
    "FieldError",
    "InvalidLatticeShape",
    "SiteOutOfBounds",
    "DefectGeometryUnsupported",
    "InvalidParameter",
    "energy_terms",
    "total_energy",
    "check_numba_availability",
    "core",
    "analysis",
    "utils"
]
