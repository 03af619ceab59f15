"""
Tests for the Gaussian defect bond-weight builder and defect variants.
"""

import numpy as np
import pytest

from spinfield import (
    DefectGeometryUnsupported, InvalidParameter, NoDefect, PointDefect, GaussianDefect,
    defect_bond_weights
)
from spinfield.core import make_defect


class TestBondWeights:
    """Shape, values and bond-midpoint offsets."""

    def setup_method(self):
        self.strength = -0.5
        self.width = 2.0
        self.weights = defect_bond_weights(self.strength, self.width, (4.0, 4.0), (8, 8))

    def coupling(self, p, q):
        return 1 + self.strength * np.exp(-((p - 4.0)**2 + (q - 4.0)**2) / self.width**2)

    def test_arrays_match_lattice_shape(self):
        assert self.weights.shape == (8, 8)
        for array in self.weights:
            assert array.shape == (8, 8)

    def test_arrays_are_read_only(self):
        with pytest.raises(ValueError):
            self.weights.left[0, 0] = 1.0

    def test_midpoint_values(self):
        assert self.weights.left[4, 4] == pytest.approx(self.coupling(3.5, 4.0))
        assert self.weights.right[4, 4] == pytest.approx(self.coupling(4.5, 4.0))
        assert self.weights.top[4, 4] == pytest.approx(self.coupling(4.0, 3.5))
        assert self.weights.bottom[4, 4] == pytest.approx(self.coupling(4.0, 4.5))
        assert self.weights.right[0, 7] == pytest.approx(self.coupling(0.5, 7.0))

    def test_shared_bonds_have_equal_weight(self):
        # The bond right of (i, j) is the bond left of (i + 1, j)
        assert np.allclose(self.weights.right[:-1, :], self.weights.left[1:, :])
        assert np.allclose(self.weights.bottom[:, :-1], self.weights.top[:, 1:])

    def test_weights_approach_one_far_from_centre(self):
        weights = defect_bond_weights(-0.9, 0.5, (1.0, 1.0), (20, 20))

        assert np.allclose(weights.left[15:, 15:], 1.0)
        assert weights.left[1, 1] < 1.0

    def test_off_centre_defect(self):
        weights = defect_bond_weights(0.4, 1.0, (1.0, 6.0), (10, 8))

        assert weights.shape == (10, 8)
        peak = np.unravel_index(np.argmax(weights.top), weights.top.shape)
        assert peak[0] == 1


class TestDefectValidation:
    """Setup-time rejection of bad defects."""

    @pytest.mark.parametrize("width", [0.0, -1.0, float("nan"), float("inf")])
    def test_bad_width(self, width):
        with pytest.raises(InvalidParameter):
            defect_bond_weights(-0.5, width, (2.0, 2.0), (4, 4))

    def test_non_finite_strength(self):
        with pytest.raises(InvalidParameter):
            defect_bond_weights(float("nan"), 1.0, (2.0, 2.0), (4, 4))

    @pytest.mark.parametrize("center", [(-0.5, 2.0), (2.0, 4.0), (10.0, 10.0)])
    def test_centre_outside_lattice(self, center):
        with pytest.raises(DefectGeometryUnsupported):
            defect_bond_weights(-0.5, 1.0, center, (4, 4))


class TestDefectVariants:
    """Dispatch from the integer defect tag."""

    def test_tags(self):
        assert NoDefect.kind == 0
        assert PointDefect.kind == 1
        assert GaussianDefect.kind == 2

    def test_make_defect(self):
        assert isinstance(make_defect(0), NoDefect)
        assert isinstance(make_defect(1, -0.5, 1.0, (1.0, 1.0)), PointDefect)

        gaussian = make_defect(2, -0.5, 1.0, (2.0, 3.0), (6, 6))
        assert isinstance(gaussian, GaussianDefect)
        assert gaussian.bond_weights.shape == (6, 6)
        assert gaussian.center == (2.0, 3.0)

    def test_unknown_tag(self):
        with pytest.raises(InvalidParameter):
            make_defect(3)

    def test_weights_must_match_defect(self):
        weights = defect_bond_weights(-0.5, 1.0, (2.0, 2.0), (6, 6))

        assert GaussianDefect(-0.5, 1.0, (2.0, 2.0), weights).bond_weights is weights
        with pytest.raises(InvalidParameter):
            GaussianDefect(0.5, 1.0, (2.0, 2.0), weights)
        with pytest.raises(InvalidParameter):
            GaussianDefect(-0.5, 2.0, (2.0, 2.0), weights)
        with pytest.raises(InvalidParameter):
            GaussianDefect(-0.5, 1.0, (3.0, 2.0), weights)

    def test_weight_arrays_must_share_shape(self):
        weights = defect_bond_weights(-0.5, 1.0, (2.0, 2.0), (6, 6))
        other = defect_bond_weights(-0.5, 1.0, (2.0, 2.0), (6, 5))

        with pytest.raises(DefectGeometryUnsupported):
            GaussianDefect(-0.5, 1.0, (2.0, 2.0), weights._replace(bottom=other.bottom))
