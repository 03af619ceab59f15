"""
Tests for the default FFT dipolar provider against a direct sum.
"""

import itertools

import numpy as np
import pytest

from spinfield import InvalidLatticeShape, InvalidParameter, demag_kernels, ddi_field
from spinfield import random_spin_lattice, uniform_spin_lattice
from spinfield.core import fft_dipolar_field


def nearest_images(d, n):
    """Signed separations of the nearest periodic images of ``d``."""
    candidates = np.array([d - n, d, d + n])
    distance = np.abs(candidates)
    return candidates[distance == distance.min()]


def direct_dipolar_field(spins, pbc):
    """Brute-force point-dipole sum; equally near periodic images are averaged."""
    _, nx, ny = spins.shape
    field = np.zeros(spins.shape)

    for xi in range(nx):
        for yi in range(ny):
            for xj in range(nx):
                for yj in range(ny):
                    if (xi, yi) == (xj, yj):
                        continue
                    if pbc:
                        images = list(itertools.product(
                            nearest_images(xi - xj, nx), nearest_images(yi - yj, ny)
                        ))
                    else:
                        images = [(xi - xj, yi - yj)]
                    s = spins[:, xj, yj]
                    for dx, dy in images:
                        r = np.array([dx, dy, 0.0])
                        r2 = r @ r
                        field[:, xi, yi] += (3 * (s @ r) * r - r2 * s) / r2**2.5 / len(images)
    return field


class TestFFTDipolarField:
    """Convolution provider."""

    @pytest.mark.parametrize("shape", [(5, 4), (4, 4), (5, 5), (2, 3)])
    @pytest.mark.parametrize("pbc", [False, True])
    def test_matches_direct_sum(self, shape, pbc):
        spins = random_spin_lattice(*shape, seed=12)
        kernels = demag_kernels(*shape, pbc)

        field = fft_dipolar_field(spins, kernels, pbc)

        assert field.shape == spins.shape
        assert np.allclose(field, direct_dipolar_field(spins, pbc), atol=1e-10)

    @pytest.mark.parametrize("shape", [(4, 4), (6, 4), (5, 5), (2, 2)])
    @pytest.mark.parametrize("pbc", [False, True])
    def test_interaction_is_reciprocal(self, shape, pbc):
        # sum t.H[s] == sum s.H[t], so the field derives from an energy
        s = random_spin_lattice(*shape, seed=3)
        t = random_spin_lattice(*shape, seed=4)
        kernels = demag_kernels(*shape, pbc)

        assert np.sum(t * fft_dipolar_field(s, kernels, pbc)) == pytest.approx(
            np.sum(s * fft_dipolar_field(t, kernels, pbc)), abs=1e-12
        )

    def test_out_of_plane_state_is_demagnetizing(self):
        spins = uniform_spin_lattice(8, 8)
        field = fft_dipolar_field(spins, demag_kernels(8, 8, False), False)

        assert np.all(field[2] < 0)
        assert np.allclose(field[:2], 0.0, atol=1e-12)
        # Interior spins have more neighbours than corners
        assert field[2, 4, 4] < field[2, 0, 0]

    def test_kernels_for_wrong_lattice(self):
        kernels = demag_kernels(4, 4, False)

        with pytest.raises(InvalidLatticeShape):
            fft_dipolar_field(np.zeros((3, 5, 4)), kernels, False)
        with pytest.raises(InvalidParameter):
            fft_dipolar_field(np.zeros((3, 4, 4)), kernels, True)


class TestDDIAdapter:
    """Scaling by the dipolar constant."""

    def test_scaled_by_ed(self):
        spins = random_spin_lattice(4, 4, seed=0)
        kernels = demag_kernels(4, 4, True)

        assert np.allclose(ddi_field(spins, 0.3, True, kernels),
                           0.3 * fft_dipolar_field(spins, kernels, True))

    def test_bad_provider_shape(self):
        spins = random_spin_lattice(4, 4, seed=0)

        with pytest.raises(InvalidLatticeShape):
            ddi_field(spins, 1.0, True, None, provider=lambda s, k, p: np.zeros(3))
