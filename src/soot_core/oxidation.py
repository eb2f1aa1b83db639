"""Soot oxidation rates [kg/m^2/s].

Rates are positive magnitudes of soot mass removed. Ratios are kg of gas
species per kg of soot oxidized:
    C + 0.5 O2 -> CO
    C + OH     -> CO + H
"""

import jax.numpy as jnp
from jaxtyping import Array, Float

from soot_core import constants
from soot_core.gas_properties import (
    compute_concentration,
    compute_partial_pressure_atm,
)
from soot_core.haca import compute_surface_site_densities
from soot_core.rate_laws_types import StoichiometricRatios, SurfaceRate
from soot_core.species_types import GasState, SpeciesIndexTable


def compute_two_pathway_ratios(
    species: SpeciesIndexTable,
    rate_O2: Float[Array, ""],
    rate_OH: Float[Array, ""],
) -> StoichiometricRatios:
    """Split consumption between the O2 and OH pathways by their rate fraction.

    Both fractions are zero when the total rate is zero.
    """
    total = rate_O2 + rate_OH
    safe_total = jnp.where(total != 0.0, total, 1.0)
    f_O2 = jnp.where(total != 0.0, rate_O2 / safe_total, 0.0)
    f_OH = jnp.where(total != 0.0, rate_OH / safe_total, 0.0)

    MW_C = constants.MW_C
    return StoichiometricRatios(
        o2=-0.5 * species.molar_mass("O2") / MW_C * f_O2,
        oh=-species.molar_mass("OH") / MW_C * f_OH,
        h=species.molar_mass("H") / MW_C * f_OH,
        co=jnp.asarray(species.molar_mass("CO") / MW_C),
    )


def compute_oh_oxidation_rate(
    gas: GasState, species: SpeciesIndexTable
) -> Float[Array, ""]:
    """OH oxidation of Neoh et al. (1981), collision efficiency 0.13."""
    p_OH = compute_partial_pressure_atm(gas, species, "OH")
    return 1290.0 * 0.13 * p_OH / jnp.sqrt(gas.T)


def compute_oxidation_rate_none(
    gas: GasState, M0: Float[Array, ""], M1: Float[Array, ""]
) -> SurfaceRate:
    del gas, M0, M1
    return SurfaceRate(rate=jnp.asarray(0.0), ratios=StoichiometricRatios())


def compute_oxidation_rate_leung_lindstedt(
    gas: GasState,
    M0: Float[Array, ""],
    M1: Float[Array, ""],
    *,
    species: SpeciesIndexTable,
) -> SurfaceRate:
    """O2 oxidation of Leung & Lindstedt (1991): 1e4 sqrt(T) exp(-19680/T) [O2] MW_C."""
    del M0, M1
    c_O2 = compute_concentration(gas, species, "O2")
    rate = 1.0e4 * jnp.sqrt(gas.T) * jnp.exp(-19680.0 / gas.T) * c_O2 * constants.MW_C
    ratios = StoichiometricRatios(
        o2=-0.5 * species.molar_mass("O2") / constants.MW_C,
        co=species.molar_mass("CO") / constants.MW_C,
    )
    return SurfaceRate(rate=rate, ratios=ratios)


def compute_oxidation_rate_lee_neoh(
    gas: GasState,
    M0: Float[Array, ""],
    M1: Float[Array, ""],
    *,
    species: SpeciesIndexTable,
) -> SurfaceRate:
    """O2 rate of Lee et al. (1962), Comb. & Flame 6:137-145, plus Neoh OH."""
    del M0, M1
    p_O2 = compute_partial_pressure_atm(gas, species, "O2")
    rate_O2 = 1.085e4 * p_O2 / jnp.sqrt(gas.T) * jnp.exp(-1.977824e4 / gas.T) / 1000.0
    rate_OH = compute_oh_oxidation_rate(gas, species)
    return SurfaceRate(
        rate=rate_O2 + rate_OH,
        ratios=compute_two_pathway_ratios(species, rate_O2, rate_OH),
    )


def compute_oxidation_rate_nsc_neoh(
    gas: GasState,
    M0: Float[Array, ""],
    M1: Float[Array, ""],
    *,
    species: SpeciesIndexTable,
    rho_soot: float,
) -> SurfaceRate:
    """Nagle & Strickland-Constable (1962) O2 rate plus Neoh OH.

    Two-site model with the fraction x of reactive A sites:
        x = 1 / (1 + k_T / (k_B p_O2))
        r = k_A p_O2 x / (1 + k_z p_O2) + k_B p_O2 (1 - x)   [kmol/m^2/s]
    """
    del M0, M1
    T = gas.T
    p_O2 = compute_partial_pressure_atm(gas, species, "O2")

    k_A = 20.0 * jnp.exp(-15098.0 / T)
    k_B = 4.46e-3 * jnp.exp(-7650.0 / T)
    k_T = 1.51e5 * jnp.exp(-48817.0 / T)
    k_z = 21.3 * jnp.exp(2063.0 / T)

    has_O2 = p_O2 > 0.0
    x = jnp.where(
        has_O2, 1.0 / (1.0 + k_T / (k_B * jnp.where(has_O2, p_O2, 1.0))), 0.0
    )
    nsc_rate = k_A * p_O2 * x / (1.0 + k_z * p_O2) + k_B * p_O2 * (1.0 - x)

    rate_O2 = nsc_rate * rho_soot
    rate_OH = compute_oh_oxidation_rate(gas, species)
    return SurfaceRate(
        rate=rate_O2 + rate_OH,
        ratios=compute_two_pathway_ratios(species, rate_O2, rate_OH),
    )


def compute_oxidation_rate_haca(
    gas: GasState,
    M0: Float[Array, ""],
    M1: Float[Array, ""],
    *,
    species: SpeciesIndexTable,
) -> SurfaceRate:
    """HACA oxidation: R5 on radical sites plus OH attack on available sites."""
    rates, alpha, _c_soot_H, c_soot_rad = compute_surface_site_densities(
        gas, species, M0, M1
    )
    rate_O2 = rates.fR5 * c_soot_rad * 2.0 * constants.MW_C / constants.N_A
    rate_OH = alpha * compute_oh_oxidation_rate(gas, species)
    return SurfaceRate(
        rate=rate_O2 + rate_OH,
        ratios=compute_two_pathway_ratios(species, rate_O2, rate_OH),
    )
