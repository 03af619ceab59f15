"""
Parameter bundle consumed by the field engine.

The bundle is immutable and fully populated: material constants, lattice
shape, boundary flag, defect, and pinning. Expensive derived data (demag
kernels, defect bond weights) is computed once when the bundle is built.
"""

import inspect
import math
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from .defects import GaussianDefect, NoDefect, PointDefect, make_defect
from .dipolar import DemagKernels, demag_kernels
from .errors import (
    DefectGeometryUnsupported, InvalidLatticeShape, InvalidParameter, SiteOutOfBounds
)

Defect = Union[NoDefect, PointDefect, GaussianDefect]


@dataclass(frozen=True)
class MaterialParams:
    """Material constants and lattice geometry."""

    j: float = 0.0      # Exchange interaction
    h: float = 0.0      # Zeeman field
    a: float = 0.0      # Dzyaloshinskii-Moriya interaction (Bloch)
    dz: float = 0.0     # Perpendicular magnetic anisotropy
    ed: float = 0.0     # Dipole-dipole constant
    nx: int = 2         # Lattice size in x
    ny: int = 2         # Lattice size in y
    nz: int = 1         # Lattice size in z (unused by the 2D stencil)
    pbc: bool = False   # Periodic boundary conditions
    kernels: Optional[DemagKernels] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        if self.nx < 2 or self.ny < 2:
            raise InvalidLatticeShape(
                f"Lattice must be at least 2x2, got {self.nx}x{self.ny}"
            )
        for name in ("j", "h", "a", "dz", "ed"):
            if not math.isfinite(getattr(self, name)):
                raise InvalidParameter(f"Material parameter {name} must be finite")

        # Dipolar kernels are slow to build, so compute them once here
        if self.ed != 0.0 and self.kernels is None:
            object.__setattr__(self, "kernels", demag_kernels(self.nx, self.ny, self.pbc))

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.nx, self.ny)


@dataclass(frozen=True)
class Pinning:
    """Local field fixing a skyrmion at the site where it was created."""

    strength: float = 0.0
    site: Tuple[int, int] = (0, 0)


@dataclass(frozen=True)
class SimulationParams:
    """Everything the field engine needs for one run."""

    material: MaterialParams
    defect: Defect = field(default_factory=NoDefect)
    pinning: Pinning = field(default_factory=Pinning)

    def __post_init__(self):
        material = self.material

        if isinstance(self.defect, GaussianDefect):
            if self.defect.bond_weights.shape != material.shape:
                raise DefectGeometryUnsupported(
                    f"Defect bond weights have shape {self.defect.bond_weights.shape}, "
                    f"lattice is {material.shape}"
                )

        if self.pinning.strength != 0.0:
            px, py = self.pinning.site
            if not (0 <= px < material.nx and 0 <= py < material.ny):
                raise SiteOutOfBounds(
                    f"Pinning site {self.pinning.site} outside lattice {material.shape}"
                )


def build_params(
    j: float = 0.0,
    h: float = 0.0,
    a: float = 0.0,
    dz: float = 0.0,
    ed: float = 0.0,
    nx: int = 2,
    ny: int = 2,
    nz: int = 1,
    pbc: bool = False,
    defect_type: int = 0,
    defect_strength: float = 0.0,
    defect_width: float = 0.0,
    defect_center: Tuple[float, float] = (0.0, 0.0),
    h_pin: float = 0.0,
    pin_site: Tuple[int, int] = (0, 0)
) -> SimulationParams:
    """
    Build a parameter bundle from flat values.

    Args:
        j, h, a, dz, ed: Material constants
        nx, ny, nz: Lattice shape
        pbc: Periodic boundary conditions
        defect_type: 0 = none, 1 = point, 2 = Gaussian
        defect_strength: Relative exchange modification at the defect centre
        defect_width: Gaussian decay length
        defect_center: Defect centre (cx, cy)
        h_pin: Pinning field strength
        pin_site: Pinned site (px, py)

    Returns:
        SimulationParams with derived arrays precomputed
    """
    material = MaterialParams(
        j=float(j), h=float(h), a=float(a), dz=float(dz), ed=float(ed),
        nx=int(nx), ny=int(ny), nz=int(nz), pbc=bool(pbc)
    )
    defect = make_defect(
        defect_type, defect_strength, defect_width, defect_center, material.shape
    )
    pinning = Pinning(float(h_pin), (int(pin_site[0]), int(pin_site[1])))
    return SimulationParams(material, defect, pinning)


def params_to_dict(params: SimulationParams) -> dict:
    """Flat dictionary of a bundle, without derived arrays."""
    m = params.material
    d = params.defect
    return {
        "j": m.j, "h": m.h, "a": m.a, "dz": m.dz, "ed": m.ed,
        "nx": m.nx, "ny": m.ny, "nz": m.nz, "pbc": m.pbc,
        "defect_type": d.kind,
        "defect_strength": getattr(d, "strength", 0.0),
        "defect_width": getattr(d, "width", 0.0),
        "defect_center": list(getattr(d, "center", (0.0, 0.0))),
        "h_pin": params.pinning.strength,
        "pin_site": list(params.pinning.site),
    }


def params_from_dict(values: dict) -> SimulationParams:
    """Inverse of ``params_to_dict``; missing keys take ``build_params`` defaults."""
    unknown = set(values) - set(inspect.signature(build_params).parameters)
    if unknown:
        raise InvalidParameter(f"Unknown parameters: {', '.join(sorted(unknown))}")

    values = dict(values)
    for key in ("defect_center", "pin_site"):
        if key in values:
            values[key] = tuple(values[key])
    return build_params(**values)
