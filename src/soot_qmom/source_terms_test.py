"""Tests for the soot moment and gas-species source terms."""

import jax
import jax.numpy as jnp
import pytest

from soot_core import constants
from soot_core.rate_laws_types import RateLawsConfig
from soot_core.species_types import make_gas_state
from soot_qmom import diagnose, quadrature, source_terms
from soot_qmom.quadrature_types import QuadratureNodes
from soot_qmom.soot_model_utils import build_soot_model
from soot_qmom.source_terms_types import SootModelConfig

jax.config.update("jax_enable_x64", True)

SPECIES_NAMES = ["C2H2", "O2", "H", "H2", "OH", "H2O", "CO", "N2", "C10H8"]
MOLAR_MASSES = [26.038, 31.998, 1.008, 2.016, 17.007, 18.015, 28.010, 28.014, 128.17]
RHO_SOOT = 1850.0

NONE = dict(nucleation="none", growth="none", oxidation="none", coagulation="none")


def make_model(n_moments=4, **mechanisms):
    rate_laws = RateLawsConfig(**{**NONE, **mechanisms})
    pah = ("C10H8",) if rate_laws.nucleation == "pah" else ()
    config = SootModelConfig(
        n_moments=n_moments,
        pah_species_names=pah,
        pah_carbon_atoms=(10,) * len(pah),
        rate_laws=rate_laws,
    )
    return build_soot_model(config, species_names=SPECIES_NAMES, molar_masses=MOLAR_MASSES)


@pytest.fixture
def gas():
    T = 1800.0
    P = 101325.0
    MW = 28.0
    y = jnp.array([0.05, 0.01, 1e-4, 0.01, 1e-3, 0.05, 0.05, 0.0, 1e-4])
    y = y.at[7].set(1.0 - jnp.sum(y))
    return make_gas_state(
        T=T, P=P, rho=P * MW / (constants.R_universal * T), MW=MW, mu=6.0e-5, y=y
    )


def moments_of(weights, abscissas, n_moments):
    weights = jnp.asarray(weights)
    abscissas = jnp.asarray(abscissas)
    return jnp.array([jnp.sum(weights * abscissas**k) for k in range(n_moments)])


TWO_POINT_MOMENTS = moments_of([3e16, 7e16], [1e-21, 3e-21], 4)
THREE_POINT_MOMENTS = moments_of([2e16, 5e16, 3e16], [1e-21, 3e-21, 8e-21], 6)


class TestNucleationOnly:
    def test_end_to_end(self, gas):
        """Nucleation alone gives S_0 = J and S_k = m_nuc^k J."""
        model = make_model(nucleation="ll")
        result = source_terms.compute_source_terms(jnp.zeros(4), gas, model)

        J = result.nucleation_rate.rate
        m_nuc = 100.0 * constants.MW_C / constants.N_A
        assert jnp.isfinite(J)
        assert J > 0.0
        assert jnp.isclose(result.moment_sources[0], J, rtol=1e-12, atol=0.0)
        assert jnp.isclose(result.moment_sources[1], m_nuc * J, rtol=1e-12, atol=0.0)
        assert jnp.isclose(result.moment_sources[3], m_nuc**3 * J, rtol=1e-12, atol=0.0)
        assert result.nodes.order == 0

    def test_gas_sources(self, gas):
        """Nucleation consumes C2H2 and releases H2."""
        model = make_model(nucleation="ll")
        result = source_terms.compute_source_terms(jnp.zeros(4), gas, model)

        S1 = result.moment_sources[1]
        assert jnp.isclose(
            result.gas_sources[0], -S1 * 26.038 / (2.0 * constants.MW_C) / gas.rho
        )
        assert jnp.isclose(
            result.gas_sources[3], S1 * 2.016 / (2.0 * constants.MW_C) / gas.rho
        )
        assert result.gas_sources[1] == 0.0


class TestGrowthOnly:
    @pytest.mark.parametrize("mechanism", ["lin", "ll", "haca"])
    def test_mass_goes_to_first_moment(self, gas, mechanism):
        """Growth adds mass without changing the particle count."""
        model = make_model(n_moments=2, growth=mechanism)
        moments = jnp.array([1e16, 1e-5])
        result = source_terms.compute_source_terms(moments, gas, model)

        K_grw = result.growth_rate.rate
        A_coef = jnp.pi * (6.0 / (jnp.pi * RHO_SOOT)) ** (2.0 / 3.0)
        M_2_3 = moments[0] * (moments[1] / moments[0]) ** (2.0 / 3.0)

        assert result.moment_sources[0] == 0.0
        assert jnp.isclose(result.moment_sources[1], K_grw * A_coef * M_2_3, atol=0.0)
        assert jnp.array_equal(result.moment_sources, result.growth)

    def test_acetylene_consumption(self, gas):
        """Acetylene consumed matches the soot mass grown."""
        model = make_model(n_moments=2, growth="ll")
        result = source_terms.compute_source_terms(jnp.array([1e16, 1e-5]), gas, model)

        S1 = result.moment_sources[1]
        assert S1 > 0.0
        assert jnp.isclose(
            result.gas_sources[0] * gas.rho * 2.0 * constants.MW_C / 26.038, -S1
        )

    def test_higher_moments(self, gas):
        """S_2 = 2 K A M_(5/3)."""
        model = make_model(growth="lin")
        result = source_terms.compute_source_terms(TWO_POINT_MOMENTS, gas, model)

        K_grw = result.growth_rate.rate
        A_coef = jnp.pi * (6.0 / (jnp.pi * RHO_SOOT)) ** (2.0 / 3.0)
        M_5_3 = quadrature.fractional_moment(result.nodes, 5.0 / 3.0)
        assert jnp.isclose(result.moment_sources[2], 2.0 * K_grw * A_coef * M_5_3, atol=0.0)


class TestOxidationOnly:
    def test_removes_mass(self, gas):
        """Oxidation burns soot into CO, consuming O2 and OH."""
        model = make_model(n_moments=2, oxidation="lee_neoh")
        result = source_terms.compute_source_terms(jnp.array([1e16, 1e-5]), gas, model)

        assert result.moment_sources[0] == 0.0
        assert result.moment_sources[1] < 0.0
        # O2 and OH consumed, CO produced
        assert result.gas_sources[1] < 0.0
        assert result.gas_sources[4] < 0.0
        assert result.gas_sources[6] > 0.0


class TestCoagulationOnly:
    @pytest.mark.parametrize("kernel", ["ll", "fuchs", "frenklach"])
    def test_conserves_mass(self, gas, kernel):
        """Coagulation lowers the count, keeps the mass, widens the distribution."""
        model = make_model(n_moments=6, coagulation=kernel)
        result = source_terms.compute_source_terms(THREE_POINT_MOMENTS, gas, model)

        assert result.moment_sources[1] == 0.0
        assert result.moment_sources[0] < 0.0
        assert result.moment_sources[2] > 0.0
        assert jnp.all(result.gas_sources == 0.0)

    def test_monodisperse(self, gas):
        """A single node loses particles at beta w^2 / 2 and gains M2 at beta w^2 x^2."""
        model = make_model(n_moments=4, coagulation="fuchs")
        w = 1e16
        x = 2e-21
        nodes = QuadratureNodes(
            weights=jnp.array([w, 0.0]),
            abscissas=jnp.array([x, 0.0]),
            order=jnp.asarray(1),
        )
        coagulation = source_terms.compute_coagulation_source(
            gas, nodes, model.rate_laws.coagulation, 4
        )

        beta = model.rate_laws.coagulation(gas, x, x)
        assert jnp.isclose(coagulation[0], -0.5 * beta * w**2, atol=0.0)
        assert coagulation[1] == 0.0
        assert jnp.isclose(coagulation[2], beta * w**2 * x**2, atol=0.0)
        assert jnp.isclose(coagulation[3], 3.0 * beta * w**2 * x**3, atol=0.0)

    def test_no_particles(self, gas):
        """No particles, nothing to coagulate."""
        model = make_model(n_moments=4, coagulation="fuchs")
        result = source_terms.compute_source_terms(jnp.zeros(4), gas, model)
        assert jnp.all(result.moment_sources == 0.0)


class TestMassBalance:
    @pytest.mark.parametrize(
        "mechanisms",
        [
            dict(nucleation="ll", growth="ll", oxidation="ll", coagulation="fuchs"),
            dict(nucleation="lin", growth="lin", oxidation="lee_neoh", coagulation="ll"),
            dict(nucleation="pah", growth="haca", oxidation="nsc_neoh", coagulation="frenklach"),
            dict(nucleation="ll", growth="haca", oxidation="haca", coagulation="fuchs"),
        ],
    )
    def test_gas_and_soot_mass_balance(self, gas, mechanisms):
        """Gas mass lost equals soot mass gained for every channel."""
        model = make_model(**mechanisms)
        result = source_terms.compute_source_terms(TWO_POINT_MOMENTS, gas, model)

        gas_mass = jnp.sum(gas.rho * result.gas_sources)
        scale = (
            jnp.abs(result.nucleation[1])
            + jnp.abs(result.condensation[1])
            + jnp.abs(result.growth[1])
            + jnp.abs(result.oxidation[1])
        )
        assert scale > 0.0
        assert jnp.abs(gas_mass + result.moment_sources[1]) <= 1e-10 * scale

    def test_pah_condensation_active(self, gas):
        """Dimers condense onto particles through the configured collision kernel."""
        model = make_model(nucleation="pah", coagulation="frenklach")
        result = source_terms.compute_source_terms(TWO_POINT_MOMENTS, gas, model)

        assert result.condensation[0] == 0.0
        assert result.condensation[1] > 0.0
        assert result.condensation[2] > 0.0
        # PAH consumed by both nucleation and condensation
        assert result.gas_sources[8] < 0.0

    def test_pah_condensation_without_kernel(self, gas):
        """With coagulation off the dimer-particle collision rate is zero."""
        model = make_model(nucleation="pah", coagulation="none")
        result = source_terms.compute_source_terms(TWO_POINT_MOMENTS, gas, model)

        assert model.rate_laws.condensation
        assert jnp.all(result.condensation == 0.0)
        assert result.nucleation[0] > 0.0

    def test_condensation_inactive_without_pah(self, gas):
        """Acetylene nucleation has no condensation channel."""
        model = make_model(nucleation="ll")
        result = source_terms.compute_source_terms(TWO_POINT_MOMENTS, gas, model)
        assert jnp.all(result.condensation == 0.0)


class TestComputeSourceTerms:
    def test_channels_sum(self, gas):
        """The total source is the sum of the five channels."""
        model = make_model(nucleation="ll", growth="ll", oxidation="ll", coagulation="fuchs")
        result = source_terms.compute_source_terms(TWO_POINT_MOMENTS, gas, model)

        total = (
            result.nucleation
            + result.condensation
            + result.growth
            + result.oxidation
            + result.coagulation
        )
        assert jnp.allclose(result.moment_sources, total)
        diagnose.check_source_terms(result)

    def test_wrong_moment_count_raises(self, gas):
        """A moment vector of the wrong length is rejected."""
        model = make_model()
        with pytest.raises(ValueError, match="Expected 4 moments"):
            source_terms.compute_source_terms(jnp.ones(6), gas, model)

    def test_jit(self, gas):
        """Jitted and eager evaluation agree."""
        model = make_model(nucleation="ll", growth="haca", oxidation="haca", coagulation="fuchs")
        eager = source_terms.compute_source_terms(TWO_POINT_MOMENTS, gas, model)
        jitted = jax.jit(
            lambda moments, gas: source_terms.compute_source_terms(moments, gas, model)
        )(TWO_POINT_MOMENTS, gas)

        assert jnp.allclose(jitted.moment_sources, eager.moment_sources)
        assert jnp.allclose(jitted.gas_sources, eager.gas_sources)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
