"""Moment and gas-species source terms of the soot population balance.

The moment source of order k is the sum of five channels:
    nucleation     N_k = m_nuc^k J
    condensation   C_k = D m_dimer k sum_i beta(m_dimer, x_i) x_i^(k-1) w_i
    growth         G_k = K_grw A k M_(k-1/3)
    oxidation      X_k = -K_oxi A k M_(k-1/3)
    coagulation    Q_k, pairwise over the quadrature nodes
with A = pi (6 / (pi rho_soot))^(2/3) relating particle mass to surface area.
Gas-species sources follow from the mass channels (k = 1) and the
stoichiometric ratios of the rate laws.
"""

import jax.numpy as jnp
from jaxtyping import Array, Float

from soot_core import constants
from soot_core.rate_laws_types import NucleationRate, StoichiometricRatios
from soot_core.species_types import GAS_SPECIES, MISSING, GasState, SpeciesIndexTable
from soot_qmom import quadrature
from soot_qmom.diagnose import runtime_check_array_sizes
from soot_qmom.quadrature_types import QuadratureNodes
from soot_qmom.source_terms_types import SootModel, SootSourceTerms


def compute_nucleus_mass(c_min: Float[Array, ""]) -> Float[Array, ""]:
    """Mass of a freshly nucleated particle, m_nuc = c_min MW_C / N_A [kg]."""
    return c_min * constants.MW_C / constants.N_A


def compute_surface_area_coefficient(rho_soot: float) -> float:
    """A = pi (6 / (pi rho_soot))^(2/3), particle surface area per m^(2/3) [m^2/kg^(2/3)]."""
    return jnp.pi * (6.0 / (jnp.pi * rho_soot)) ** (2.0 / 3.0)


def compute_nucleation_source(
    nucleation_rate: NucleationRate, n_moments: int
) -> Float[Array, " n_moments"]:
    m_nuc = compute_nucleus_mass(nucleation_rate.c_min)
    orders = jnp.arange(n_moments)
    return m_nuc**orders * nucleation_rate.rate


def compute_condensation_source(
    gas: GasState,
    nodes: QuadratureNodes,
    nucleation_rate: NucleationRate,
    coagulation_fn,
    n_moments: int,
) -> Float[Array, " n_moments"]:
    """PAH dimers colliding with existing particles.

    First-order expansion of the mass gained by a particle of mass x_i on
    absorbing one dimer. Condensation does not change the particle count.
    """
    m_dimer = nucleation_rate.dimer_mass
    beta = coagulation_fn(gas, m_dimer, nodes.abscissas)

    terms = [jnp.asarray(0.0)]
    for k in range(1, n_moments):
        terms.append(
            k * jnp.sum(beta * nodes.abscissas ** (k - 1) * nodes.weights)
        )
    return nucleation_rate.dimer_number_density * m_dimer * jnp.stack(terms)


def compute_surface_source(
    rate: Float[Array, ""],
    nodes: QuadratureNodes,
    rho_soot: float,
    n_moments: int,
) -> Float[Array, " n_moments"]:
    """Surface reaction source K A k M_(k-1/3); zero for k = 0."""
    A_coef = compute_surface_area_coefficient(rho_soot)
    terms = [jnp.asarray(0.0)]
    for k in range(1, n_moments):
        terms.append(k * quadrature.fractional_moment(nodes, k - 1.0 / 3.0))
    return rate * A_coef * jnp.stack(terms)


def compute_coagulation_source(
    gas: GasState,
    nodes: QuadratureNodes,
    coagulation_fn,
    n_moments: int,
) -> Float[Array, " n_moments"]:
    """Coagulation source over node pairs; zero for k = 1 (mass conserved).

    Off-diagonal pairs i > j are counted once:
        beta_ij w_i w_j ((x_i + x_j)^k - x_i^k - x_j^k), or -1 for k = 0
    and self collisions:
        beta_ii w_i^2 x_i^k (2^(k-1) - 1), or -1/2 for k = 0.
    """
    w = nodes.weights
    x = nodes.abscissas
    n_nodes = w.shape[0]

    beta = coagulation_fn(gas, x[:, None], x[None, :])
    ww = beta * w[:, None] * w[None, :]
    lower = jnp.tril(jnp.ones((n_nodes, n_nodes)), k=-1)
    diagonal = jnp.diag(ww)

    x_i = x[:, None]
    x_j = x[None, :]

    terms = [-jnp.sum(lower * ww) - 0.5 * jnp.sum(diagonal)]
    for k in range(1, n_moments):
        if k == 1:
            terms.append(jnp.asarray(0.0))
            continue
        pair = (x_i + x_j) ** k - x_i**k - x_j**k
        self_term = x**k * (2.0 ** (k - 1) - 1.0)
        terms.append(jnp.sum(lower * ww * pair) + jnp.sum(diagonal * self_term))
    return jnp.stack(terms)


def _add_channel(
    gas_sources: Float[Array, " n_species"],
    species: SpeciesIndexTable,
    mass_rate: Float[Array, ""],
    ratios: StoichiometricRatios,
) -> Float[Array, " n_species"]:
    for name in GAS_SPECIES:
        index = species.index_of(name)
        if index == MISSING:
            continue
        gas_sources = gas_sources.at[index].add(
            mass_rate * getattr(ratios, name.lower())
        )

    if ratios.pah.shape[0] == species.n_pah:
        for i, index in enumerate(species.pah):
            gas_sources = gas_sources.at[index].add(mass_rate * ratios.pah[i])
    return gas_sources


def compute_gas_source_terms(
    gas: GasState,
    species: SpeciesIndexTable,
    nucleation_rate: NucleationRate,
    growth_rate,
    oxidation_rate,
    nucleation_M1: Float[Array, ""],
    condensation_M1: Float[Array, ""],
    growth_M1: Float[Array, ""],
    oxidation_M1: Float[Array, ""],
) -> Float[Array, " n_species"]:
    """Gas-species mass-fraction rates [1/s] from the soot mass channels.

    Oxidation ratios are per kg of soot removed, so they are scaled by the
    magnitude of the (negative) oxidation mass rate. Coagulation exchanges no
    mass with the gas.
    """
    gas_sources = jnp.zeros(species.n_species)
    gas_sources = _add_channel(
        gas_sources, species, nucleation_M1, nucleation_rate.ratios
    )
    gas_sources = _add_channel(
        gas_sources, species, condensation_M1, nucleation_rate.ratios
    )
    gas_sources = _add_channel(gas_sources, species, growth_M1, growth_rate.ratios)
    gas_sources = _add_channel(
        gas_sources, species, -oxidation_M1, oxidation_rate.ratios
    )
    return gas_sources / gas.rho


@runtime_check_array_sizes
def compute_source_terms(
    moments: Float[Array, " n_moments"],
    gas: GasState,
    model: SootModel,
) -> SootSourceTerms:
    """Soot moment and gas-species source terms for one gas state.

    Args:
        moments: Soot moments M_0 ... M_(n_moments-1) [kg^k/m^3].
        gas: Local gas state.
        model: Built soot model.

    Returns:
        Source terms, per-channel contributions, nodes and rate-law results.
    """
    n_moments = model.n_moments
    if moments.shape != (n_moments,):
        raise ValueError(
            f"Expected {n_moments} moments, got array of shape {moments.shape}."
        )

    nodes = quadrature.compute_quadrature_nodes(
        moments, inversion_fn=model.inversion_fn, max_abscissa=model.max_abscissa
    )

    rate_laws = model.rate_laws
    nucleation_rate = rate_laws.nucleation(gas, nodes.weights, nodes.abscissas)
    growth_rate = rate_laws.growth(gas, moments[0], moments[1])
    oxidation_rate = rate_laws.oxidation(gas, moments[0], moments[1])

    nucleation = compute_nucleation_source(nucleation_rate, n_moments)
    if rate_laws.condensation:
        condensation = compute_condensation_source(
            gas, nodes, nucleation_rate, rate_laws.coagulation, n_moments
        )
    else:
        condensation = jnp.zeros(n_moments)
    growth = compute_surface_source(
        growth_rate.rate, nodes, model.rho_soot, n_moments
    )
    oxidation = -compute_surface_source(
        oxidation_rate.rate, nodes, model.rho_soot, n_moments
    )
    coagulation = compute_coagulation_source(
        gas, nodes, rate_laws.coagulation, n_moments
    )

    gas_sources = compute_gas_source_terms(
        gas,
        model.species,
        nucleation_rate,
        growth_rate,
        oxidation_rate,
        nucleation_M1=nucleation[1],
        condensation_M1=condensation[1],
        growth_M1=growth[1],
        oxidation_M1=oxidation[1],
    )

    return SootSourceTerms(
        moment_sources=nucleation + condensation + growth + oxidation + coagulation,
        gas_sources=gas_sources,
        nucleation=nucleation,
        condensation=condensation,
        growth=growth,
        oxidation=oxidation,
        coagulation=coagulation,
        nodes=nodes,
        nucleation_rate=nucleation_rate,
        growth_rate=growth_rate,
        oxidation_rate=oxidation_rate,
    )
