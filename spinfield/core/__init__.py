"""Core effective-field engine."""

from .errors import (
    FieldError, InvalidLatticeShape, SiteOutOfBounds,
    DefectGeometryUnsupported, InvalidParameter
)
from .defects import (
    BondWeights, NoDefect, PointDefect, GaussianDefect, defect_bond_weights, make_defect
)
from .dipolar import DemagKernels, demag_kernels, fft_dipolar_field, ddi_field
from .parameters import (
    MaterialParams, Pinning, SimulationParams, build_params,
    params_to_dict, params_from_dict
)
from .lattice import uniform_spin_lattice, random_spin_lattice, validate_spins
from .effective_field import (
    effective_field, effective_field_at, exchange_field, zeeman_field,
    dmi_field, pma_field, pinning_field
)

__all__ = [
    "FieldError", "InvalidLatticeShape", "SiteOutOfBounds",
    "DefectGeometryUnsupported", "InvalidParameter",
    "BondWeights", "NoDefect", "PointDefect", "GaussianDefect",
    "defect_bond_weights", "make_defect",
    "DemagKernels", "demag_kernels", "fft_dipolar_field", "ddi_field",
    "MaterialParams", "Pinning", "SimulationParams", "build_params",
    "params_to_dict", "params_from_dict",
    "uniform_spin_lattice", "random_spin_lattice", "validate_spins",
    "effective_field", "effective_field_at", "exchange_field", "zeeman_field",
    "dmi_field", "pma_field", "pinning_field",
]
