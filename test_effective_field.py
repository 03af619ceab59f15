"""
Tests for the field assembler: Zeeman, pinning, dipolar adapter and errors.
"""

import numpy as np
import pytest

from spinfield import (
    DefectGeometryUnsupported, InvalidLatticeShape, InvalidParameter, SiteOutOfBounds,
    build_params, effective_field, effective_field_at, random_spin_lattice,
    uniform_spin_lattice
)
from spinfield.core import DemagKernels, MaterialParams, SimulationParams, zeeman_field
from spinfield.core.defects import GaussianDefect


class TestZeeman:
    """External field along z."""

    def test_zeeman_only_contribution(self):
        params = build_params(j=1.0, h=0.5, nx=4, ny=4, pbc=True)
        spins = uniform_spin_lattice(4, 4)
        field = np.zeros(spins.shape)

        zeeman_field(field, spins, params)

        assert np.allclose(field[:2], 0.0)
        assert np.allclose(field[2], 0.5)

    def test_total_field_with_exchange(self):
        params = build_params(j=1.0, h=0.5, nx=4, ny=4, pbc=True)
        spins = uniform_spin_lattice(4, 4)

        field = effective_field(spins, params)

        assert np.allclose(field[2], 4.5)
        assert np.allclose(effective_field_at(np.zeros(3), spins, (1, 2), params), [0, 0, 4.5])


class TestPinning:
    """Pinning adds hPin at one site only."""

    def test_pinning_is_local(self):
        base = build_params(j=1.0, a=0.3, nx=5, ny=6, pbc=True)
        pinned = build_params(j=1.0, a=0.3, nx=5, ny=6, pbc=True, h_pin=0.25, pin_site=(3, 1))
        spins = random_spin_lattice(5, 6, seed=8)

        difference = effective_field(spins, pinned) - effective_field(spins, base)

        assert difference[2, 3, 1] == pytest.approx(0.25)
        mask = np.ones(difference.shape, dtype=bool)
        mask[2, 3, 1] = False
        assert np.all(difference[mask] == 0.0)

    def test_single_site_path_ignores_pinning(self):
        pinned = build_params(j=1.0, nx=4, ny=4, h_pin=0.25, pin_site=(1, 1))
        spins = uniform_spin_lattice(4, 4)

        assert np.allclose(effective_field_at(np.zeros(3), spins, (1, 1), pinned), [0, 0, 4])

    def test_pin_site_outside_lattice(self):
        with pytest.raises(SiteOutOfBounds):
            build_params(nx=4, ny=4, h_pin=0.1, pin_site=(4, 0))


class TestDipolarAdapter:
    """Dipolar term through an injected provider."""

    def test_provider_scaled_by_ed(self):
        params = build_params(j=1.0, ed=0.2, nx=4, ny=4, pbc=True)
        spins = uniform_spin_lattice(4, 4)
        calls = []

        def provider(s, kernels, pbc):
            calls.append((kernels, pbc))
            return np.ones(s.shape)

        field = effective_field(spins, params, dipolar_field=provider)

        assert len(calls) == 1
        assert calls[0][0] is params.material.kernels
        assert calls[0][1] is True
        assert np.allclose(field[:2], 0.2)
        assert np.allclose(field[2], 4.2)

    def test_no_dipolar_call_when_ed_is_zero(self):
        params = build_params(j=1.0, nx=4, ny=4)

        def provider(s, kernels, pbc):
            raise AssertionError("dipolar provider should not run")

        effective_field(uniform_spin_lattice(4, 4), params, dipolar_field=provider)
        assert params.material.kernels is None

    def test_kernels_built_when_ed_nonzero(self):
        params = build_params(ed=1.0, nx=4, ny=6, pbc=False)

        assert isinstance(params.material.kernels, DemagKernels)
        assert params.material.kernels.shape == (4, 6)
        assert params.material.kernels.grid == (8, 12)

    def test_provider_shape_mismatch(self):
        params = build_params(ed=1.0, nx=4, ny=4)

        with pytest.raises(InvalidLatticeShape):
            effective_field(uniform_spin_lattice(4, 4), params,
                            dipolar_field=lambda s, k, p: np.zeros((3, 2, 2)))


class TestOutputBuffers:
    """Caller-supplied buffers."""

    def test_single_site_writes_into_buffer(self):
        params = build_params(j=1.0, h=0.1, nx=4, ny=4)
        spins = random_spin_lattice(4, 4, seed=1)
        buffer = np.full(3, 99.0)

        result = effective_field_at(buffer, spins, (2, 2), params)

        assert result is buffer
        assert not np.any(buffer == 99.0)

    def test_lattice_buffer_is_overwritten(self):
        params = build_params(j=1.0, nx=4, ny=4, pbc=True)
        spins = uniform_spin_lattice(4, 4)
        out = np.full(spins.shape, 7.0)

        result = effective_field(spins, params, out=out)

        assert result is out
        assert np.allclose(out[2], 4.0)
        assert np.allclose(out[:2], 0.0)

    def test_inputs_not_modified(self):
        params = build_params(j=1.0, a=0.4, dz=0.1, nx=5, ny=5, pbc=True)
        spins = random_spin_lattice(5, 5, seed=6)
        before = spins.copy()

        effective_field(spins, params)
        effective_field_at(np.zeros(3), spins, (0, 4), params)

        assert np.array_equal(spins, before)


class TestErrors:
    """Error taxonomy."""

    def test_wrong_spin_shape(self):
        params = build_params(j=1.0, nx=4, ny=4)

        with pytest.raises(InvalidLatticeShape):
            effective_field(np.zeros((3, 4, 5)), params)
        with pytest.raises(InvalidLatticeShape):
            effective_field_at(np.zeros(3), np.zeros((4, 4)), (0, 0), params)

    def test_wrong_buffer_shape(self):
        params = build_params(j=1.0, nx=4, ny=4)
        spins = uniform_spin_lattice(4, 4)

        with pytest.raises(InvalidLatticeShape):
            effective_field_at(np.zeros(4), spins, (0, 0), params)
        with pytest.raises(InvalidLatticeShape):
            effective_field(spins, params, out=np.zeros((3, 4, 3)))

    @pytest.mark.parametrize("site", [(-1, 0), (4, 0), (0, 4), (2, -3)])
    def test_site_out_of_bounds(self, site):
        params = build_params(j=1.0, nx=4, ny=4)

        with pytest.raises(SiteOutOfBounds):
            effective_field_at(np.zeros(3), uniform_spin_lattice(4, 4), site, params)

    def test_site_out_of_bounds_is_index_error(self):
        assert issubclass(SiteOutOfBounds, IndexError)

    def test_lattice_too_small(self):
        with pytest.raises(InvalidLatticeShape):
            MaterialParams(j=1.0, nx=1, ny=4)

    def test_non_finite_material_constant(self):
        with pytest.raises(InvalidParameter):
            build_params(j=float("nan"), nx=4, ny=4)
        with pytest.raises(InvalidParameter):
            build_params(h=float("inf"), nx=4, ny=4)

    def test_defect_weights_for_other_lattice(self):
        material = MaterialParams(j=1.0, nx=6, ny=6)
        defect = GaussianDefect.build(-0.5, 1.0, (2.0, 2.0), (4, 4))

        with pytest.raises(DefectGeometryUnsupported):
            SimulationParams(material, defect)
