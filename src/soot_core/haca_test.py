"""Tests for the HACA surface-site machinery."""

import jax
import jax.numpy as jnp
import pytest

from soot_core import constants, haca, species_utils
from soot_core.species_types import make_gas_state

jax.config.update("jax_enable_x64", True)

SPECIES_NAMES = ["C2H2", "O2", "H", "H2", "OH", "H2O", "CO", "N2"]
MOLAR_MASSES = [26.038, 31.998, 1.008, 2.016, 17.007, 18.015, 28.010, 28.014]


@pytest.fixture
def species():
    return species_utils.build_species_index_table(SPECIES_NAMES, MOLAR_MASSES)


@pytest.fixture
def gas():
    T = 1800.0
    P = 101325.0
    MW = 28.0
    y = jnp.array([0.05, 0.01, 1e-4, 0.01, 1e-3, 0.05, 0.05, 0.0])
    y = y.at[-1].set(1.0 - jnp.sum(y))
    return make_gas_state(
        T=T, P=P, rho=P * MW / (constants.R_universal * T), MW=MW, mu=6.0e-5, y=y
    )


class TestSiteFraction:
    @pytest.mark.parametrize("T", [1200.0, 1500.0, 1800.0, 2100.0])
    @pytest.mark.parametrize("mean_mass", [1e-24, 1e-22, 1e-20, 1e-18])
    def test_bounded(self, T, mean_mass):
        """Site fraction stays in (0, 1] across flame conditions."""
        M0 = jnp.asarray(1e16)
        alpha = haca.compute_site_fraction(jnp.asarray(T), M0, M0 * mean_mass)
        assert 0.0 < alpha <= 1.0

    def test_no_particles_falls_back_to_one(self):
        """An empty population uses alpha = 1."""
        alpha = haca.compute_site_fraction(
            jnp.asarray(1800.0), jnp.asarray(0.0), jnp.asarray(0.0)
        )
        assert alpha == 1.0

    def test_sub_atomic_mean_mass_falls_back_to_one(self):
        """Fewer than one carbon atom per particle is outside the fit."""
        alpha = haca.compute_site_fraction(
            jnp.asarray(1800.0), jnp.asarray(1e16), jnp.asarray(1e16 * 1e-27)
        )
        assert alpha == 1.0

    def test_negative_fit_falls_back_to_one(self):
        """At high temperature and large particles the fit turns negative."""
        T = jnp.asarray(2500.0)
        M0 = jnp.asarray(1e14)
        M1 = M0 * 1e-15
        a = 33.167 - 0.0154 * 2500.0
        b = -2.5786 + 0.00112 * 2500.0
        n_C = 1e-15 / (constants.MW_C / constants.N_A)
        assert jnp.tanh(a / jnp.log10(n_C) + b) < 0.0

        assert haca.compute_site_fraction(T, M0, M1) == 1.0

    def test_uses_carbon_atoms_per_particle(self):
        """Mean mass 1e-21 kg is about 5e4 carbon atoms, well inside the fit."""
        T = 1800.0
        M0 = jnp.asarray(1e17)
        M1 = jnp.asarray(1e-4)
        n_C = 1e-21 / (constants.MW_C / constants.N_A)
        a = 33.167 - 0.0154 * T
        b = -2.5786 + 0.00112 * T

        alpha = haca.compute_site_fraction(jnp.asarray(T), M0, M1)

        assert jnp.isclose(alpha, jnp.tanh(a / jnp.log10(n_C) + b), rtol=1e-10)
        assert 0.5 < alpha < 0.6


class TestHacaRates:
    def test_rates_non_negative(self, gas, species):
        """All HACA per-site rates are non-negative."""
        rates = haca.compute_haca_rates(gas, species)
        for value in jax.tree_util.tree_leaves(rates):
            assert jnp.isfinite(value)
            assert value >= 0.0

    def test_radical_sites_bounded(self, gas, species):
        """Radical sites never exceed twice the C-H site density."""
        rates = haca.compute_haca_rates(gas, species)
        chi_rad = haca.compute_radical_site_density(rates)
        assert 0.0 < chi_rad < 2.0 * haca.CHI_SOOT

    def test_radical_sites_zero_denominator(self):
        """Vanishing consumption rates give zero radical sites."""
        zero = jnp.asarray(0.0)
        rates = haca.HacaRates(
            fR1=jnp.asarray(1.0),
            rR1=zero,
            fR2=zero,
            rR2=zero,
            fR3=zero,
            fR4=zero,
            fR5=zero,
            fR6=zero,
        )
        assert haca.compute_radical_site_density(rates) == 0.0

    def test_site_densities_scale_with_alpha(self, gas, species):
        """Effective site densities carry the alpha factor."""
        M0 = jnp.asarray(1e16)
        M1 = jnp.asarray(1e-5)
        _rates, alpha, c_soot_H, _c_soot_rad = haca.compute_surface_site_densities(
            gas, species, M0, M1
        )
        assert jnp.isclose(c_soot_H, alpha * haca.CHI_SOOT * 1e4)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
