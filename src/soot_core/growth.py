"""Soot surface growth rates [kg/m^2/s].

All growth mechanisms add carbon from acetylene, C2H2 -> 2 C(s) + H2.
"""

import jax.numpy as jnp
from jaxtyping import Array, Float

from soot_core import constants
from soot_core.gas_properties import compute_concentration
from soot_core.haca import compute_surface_site_densities
from soot_core.rate_laws_types import StoichiometricRatios, SurfaceRate
from soot_core.species_types import GasState, SpeciesIndexTable


def compute_acetylene_growth_ratios(species: SpeciesIndexTable) -> StoichiometricRatios:
    """kg C2H2 consumed and kg H2 released per kg soot formed."""
    return StoichiometricRatios(
        c2h2=-species.molar_mass("C2H2") / (2.0 * constants.MW_C),
        h2=species.molar_mass("H2") / (2.0 * constants.MW_C),
    )


def compute_growth_rate_none(
    gas: GasState, M0: Float[Array, ""], M1: Float[Array, ""]
) -> SurfaceRate:
    del gas, M0, M1
    return SurfaceRate(rate=jnp.asarray(0.0), ratios=StoichiometricRatios())


def compute_growth_rate_lindstedt(
    gas: GasState,
    M0: Float[Array, ""],
    M1: Float[Array, ""],
    *,
    species: SpeciesIndexTable,
) -> SurfaceRate:
    """Size-independent growth of Lindstedt (1994).

    Bockhorn (1994) p. 417, eq. 27.35: r = 750 exp(-12100/T) [C2H2] * 2 MW_C.
    """
    del M0, M1
    c_C2H2 = compute_concentration(gas, species, "C2H2")
    rate = 750.0 * jnp.exp(-12100.0 / gas.T) * c_C2H2 * 2.0 * constants.MW_C
    return SurfaceRate(rate=rate, ratios=compute_acetylene_growth_ratios(species))


def compute_growth_rate_leung_lindstedt(
    gas: GasState,
    M0: Float[Array, ""],
    M1: Float[Array, ""],
    *,
    species: SpeciesIndexTable,
    rho_soot: float,
) -> SurfaceRate:
    """Size-dependent growth of Leung & Lindstedt (1991), Comb. & Flame 87:289-305.

    r = 0.6e4 exp(-12100/T) [C2H2] / sqrt(A_s) * 2 MW_C, where
    A_s = pi d^2 M0 [m^2/m^3] is the soot surface area of spherical particles
    of mean mass M1/M0. Zero when there is no soot surface.
    """
    safe_M0 = jnp.where(M0 > 0.0, M0, 1.0)
    A_s = jnp.where(
        M0 > 0.0,
        jnp.pi
        * jnp.power(jnp.abs(6.0 / (jnp.pi * rho_soot) * M1 / safe_M0), 2.0 / 3.0)
        * jnp.abs(M0),
        0.0,
    )

    c_C2H2 = compute_concentration(gas, species, "C2H2")
    safe_A_s = jnp.where(A_s > 0.0, A_s, 1.0)
    rate = jnp.where(
        A_s > 0.0,
        0.6e4
        * jnp.exp(-12100.0 / gas.T)
        * c_C2H2
        / jnp.sqrt(safe_A_s)
        * 2.0
        * constants.MW_C,
        0.0,
    )
    return SurfaceRate(rate=rate, ratios=compute_acetylene_growth_ratios(species))


def compute_growth_rate_haca(
    gas: GasState,
    M0: Float[Array, ""],
    M1: Float[Array, ""],
    *,
    species: SpeciesIndexTable,
) -> SurfaceRate:
    """HACA carbon addition: R4 on available radical sites adds two carbons."""
    rates, _alpha, _c_soot_H, c_soot_rad = compute_surface_site_densities(
        gas, species, M0, M1
    )
    # R4 alone; R5 (O2) and R6 (OH) remove carbon and are counted as oxidation,
    # not folded into the growth rate.
    rate = rates.fR4 * c_soot_rad / constants.N_A * 2.0 * constants.MW_C
    return SurfaceRate(rate=rate, ratios=compute_acetylene_growth_ratios(species))
