"""
Exchange-modifying lattice defects.

A Gaussian defect scales the exchange constant on every bond by
``1 + strength * exp(-r^2 / width^2)``, where ``r`` is the distance from the
defect centre to the bond midpoint. Exchange lives on bonds, so each site
needs four weights, one per bond (left, right, top, bottom). These are
precomputed once per run by ``defect_bond_weights``; re-deriving them every
integration step would dominate the cost of the field assembly.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import ClassVar, NamedTuple, Tuple

import numpy as np

from .errors import DefectGeometryUnsupported, InvalidParameter
from .fast_ops import bond_coupling, fill_bond_weights

logger = logging.getLogger("spinfield")


class BondWeights(NamedTuple):
    """Per-site relative couplings of the four nearest-neighbour bonds."""

    left: np.ndarray    # bond to (x - 1, y)
    right: np.ndarray   # bond to (x + 1, y)
    top: np.ndarray     # bond to (x, y - 1)
    bottom: np.ndarray  # bond to (x, y + 1)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.left.shape


# Offset of each bond midpoint from its site, in bond order
_BOND_OFFSETS = {
    "left": (-0.5, 0.0),
    "right": (0.5, 0.0),
    "top": (0.0, -0.5),
    "bottom": (0.0, 0.5),
}


def _check_defect_values(strength: float, width: float):
    if not math.isfinite(strength):
        raise InvalidParameter(f"Defect strength must be finite, got {strength}")
    if not math.isfinite(width) or width <= 0.0:
        raise InvalidParameter(f"Defect width must be finite and positive, got {width}")


def defect_bond_weights(
    strength: float,
    width: float,
    center: Tuple[float, float],
    shape: Tuple[int, int]
) -> BondWeights:
    """
    Build the bond-weight arrays of a Gaussian exchange defect.

    The arrays always take the lattice shape, so the defect centre may sit
    anywhere inside the lattice, not only at its middle.

    Args:
        strength: Relative modification at the centre (may be negative)
        width: Gaussian decay length, in lattice spacings
        center: Defect position (cx, cy) in site coordinates
        shape: Lattice shape (nx, ny)

    Returns:
        Read-only BondWeights, index-aligned with the spin lattice
    """
    _check_defect_values(strength, width)

    nx, ny = int(shape[0]), int(shape[1])
    if nx < 2 or ny < 2:
        raise DefectGeometryUnsupported(f"Lattice {shape} too small for a defect")

    cx, cy = float(center[0]), float(center[1])
    if not (0.0 <= cx <= nx - 1 and 0.0 <= cy <= ny - 1):
        raise DefectGeometryUnsupported(
            f"Defect centre ({cx}, {cy}) outside lattice of shape {(nx, ny)}"
        )

    arrays = {}
    for name, (dx, dy) in _BOND_OFFSETS.items():
        weights = np.empty((nx, ny))
        fill_bond_weights(weights, float(strength), float(width), cx, cy, dx, dy)
        weights.flags.writeable = False
        arrays[name] = weights

    logger.debug(
        "Built Gaussian defect bond weights: strength=%g, width=%g, centre=(%g, %g), shape=%s",
        strength, width, cx, cy, (nx, ny)
    )
    return BondWeights(**arrays)


@dataclass(frozen=True)
class NoDefect:
    """Uniform exchange everywhere."""

    kind: ClassVar[int] = 0


@dataclass(frozen=True)
class PointDefect:
    """
    Point defect. Accepted for configuration compatibility; it leaves the
    exchange coupling unchanged.
    """

    strength: float
    width: float
    center: Tuple[float, float]

    kind: ClassVar[int] = 1

    def __post_init__(self):
        logger.warning(
            "Point defects do not modify exchange; using uniform coupling"
        )


@dataclass(frozen=True)
class GaussianDefect:
    """Gaussian exchange defect owning its precomputed bond weights."""

    strength: float
    width: float
    center: Tuple[float, float]
    bond_weights: BondWeights = field(compare=False, repr=False)

    kind: ClassVar[int] = 2

    def __post_init__(self):
        # Per-site evaluation recomputes the Gaussian; the cached weights
        # must describe the same defect. Check the bonds nearest the centre.
        weights = self.bond_weights
        nx, ny = weights.shape
        if any(array.shape != (nx, ny) for array in weights):
            raise DefectGeometryUnsupported("Defect bond-weight arrays differ in shape")

        x = min(max(int(round(self.center[0])), 0), nx - 1)
        y = min(max(int(round(self.center[1])), 0), ny - 1)
        for name, (dx, dy) in _BOND_OFFSETS.items():
            expected = bond_coupling(
                x + dx, y + dy, self.strength, self.width, self.center[0], self.center[1]
            )
            if not math.isclose(getattr(weights, name)[x, y], expected, rel_tol=1e-9):
                raise InvalidParameter(
                    f"Defect bond weights do not match strength={self.strength}, "
                    f"width={self.width}, centre={self.center}"
                )

    @classmethod
    def build(
        cls,
        strength: float,
        width: float,
        center: Tuple[float, float],
        shape: Tuple[int, int]
    ) -> "GaussianDefect":
        """Create the defect and precompute its bond weights for ``shape``."""
        weights = defect_bond_weights(strength, width, center, shape)
        return cls(float(strength), float(width), (float(center[0]), float(center[1])), weights)


def make_defect(
    kind: int,
    strength: float = 0.0,
    width: float = 0.0,
    center: Tuple[float, float] = (0.0, 0.0),
    shape: Tuple[int, int] = (0, 0)
):
    """
    Create a defect from its integer tag (0 = none, 1 = point, 2 = Gaussian).

    Args:
        kind: Defect tag
        strength: Relative coupling modification
        width: Gaussian width
        center: Defect centre (cx, cy)
        shape: Lattice shape, needed for Gaussian bond weights

    Returns:
        NoDefect, PointDefect or GaussianDefect
    """
    kind = int(kind)
    if kind == NoDefect.kind:
        return NoDefect()
    if kind == PointDefect.kind:
        return PointDefect(float(strength), float(width), (float(center[0]), float(center[1])))
    if kind == GaussianDefect.kind:
        return GaussianDefect.build(strength, width, center, shape)
    raise InvalidParameter(f"Unknown defect type: {kind}")
