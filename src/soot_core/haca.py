"""Hydrogen-abstraction carbon-addition (HACA) surface chemistry.

See Appel, Bockhorn & Frenklach (2000), Comb. & Flame 121:122-136 and
Frenklach & Wang (1990), 23rd Symposium, pp. 1559-1566. Parameters of the
steric factor alpha follow Balthasar & Frenklach (2005), Comb. & Flame
140:130-145.

Surface reactions, per site:
    R1  C_s-H + H     <-> C_s* + H2
    R2  C_s-H + OH    <-> C_s* + H2O
    R3  C_s*  + H      -> C_s-H
    R4  C_s*  + C2H2   -> C_s-H + H   (carbon addition)
    R5  C_s*  + O2     -> products     (oxidation)
    R6  C_s-H + OH     -> products     (oxidation, gamma = 0.13, Neoh)
"""

from __future__ import annotations

from dataclasses import dataclass

import jax
import jax.numpy as jnp
from jaxtyping import Array, Float

from soot_core import constants
from soot_core.gas_properties import compute_concentration
from soot_core.species_types import GasState, SpeciesIndexTable

CHI_SOOT = 2.3e15  # [sites/cm^2] C-H sites on the soot surface


@jax.tree_util.register_dataclass
@dataclass(frozen=True)
class HacaRates:
    """Pseudo-first-order HACA rates [1/s] (rate constant times concentration)."""

    fR1: Float[Array, ""]
    rR1: Float[Array, ""]
    fR2: Float[Array, ""]
    rR2: Float[Array, ""]
    fR3: Float[Array, ""]
    fR4: Float[Array, ""]
    fR5: Float[Array, ""]
    fR6: Float[Array, ""]


def compute_haca_rates(gas: GasState, species: SpeciesIndexTable) -> HacaRates:
    """Compute the HACA rates from the local gas composition.

    Rate constants are in cm^3/mol/s; concentrations in kmol/m^3 are brought to
    mol/cm^3 by the factor 1/1000.
    """
    T = gas.T
    RT = constants.R_kcal * T  # [kcal/mol]

    c_C2H2 = compute_concentration(gas, species, "C2H2")
    c_O2 = compute_concentration(gas, species, "O2")
    c_H = compute_concentration(gas, species, "H")
    c_H2 = compute_concentration(gas, species, "H2")
    c_OH = compute_concentration(gas, species, "OH")
    c_H2O = compute_concentration(gas, species, "H2O")

    return HacaRates(
        fR1=4.2e13 * jnp.exp(-13.0 / RT) * c_H / 1000.0,
        rR1=3.9e12 * jnp.exp(-11.0 / RT) * c_H2 / 1000.0,
        fR2=1.0e10 * T**0.734 * jnp.exp(-1.43 / RT) * c_OH / 1000.0,
        rR2=3.68e8 * T**1.139 * jnp.exp(-17.1 / RT) * c_H2O / 1000.0,
        fR3=2.0e13 * c_H / 1000.0,
        fR4=8.0e7 * T**1.56 * jnp.exp(-3.8 / RT) * c_C2H2 / 1000.0,
        fR5=2.2e12 * jnp.exp(-7.5 / RT) * c_O2 / 1000.0,
        # gamma = 0.13 from Neoh et al.
        fR6=1290.0
        * 0.13
        * gas.P
        * (c_OH / gas.rho * species.molar_mass("OH"))
        / jnp.sqrt(T),
    )


def compute_radical_site_density(rates: HacaRates) -> Float[Array, ""]:
    """Steady-state radical site density chi_rad [sites/cm^2].

    Frenklach & Wang (1990) p. 1561. Zero when no radical-consuming reaction
    is active.
    """
    denominator = rates.rR1 + rates.rR2 + rates.fR3 + rates.fR4 + rates.fR5
    safe_denominator = jnp.where(denominator != 0.0, denominator, 1.0)
    chi_rad = 2.0 * CHI_SOOT * (rates.fR1 + rates.fR2 + rates.fR6) / safe_denominator
    return jnp.where(denominator != 0.0, chi_rad, 0.0)


def compute_site_fraction(
    T: Float[Array, ""], M0: Float[Array, ""], M1: Float[Array, ""]
) -> Float[Array, ""]:
    """Fraction alpha of surface sites available for reaction.

    alpha = tanh(a / log10(n_C) + b), with n_C the mean number of carbon atoms
    per particle. Falls back to 1 for an empty or sub-atomic population and
    wherever the fit turns negative.
    """
    a = 33.167 - 0.0154 * T
    b = -2.5786 + 0.00112 * T

    # Fit argument is carbon atoms per particle. A mean mass in kg gives
    # log10 < 0 and pins alpha to 1 for every realistic particle.
    carbon_mass = constants.MW_C / constants.N_A
    n_C = jnp.where(M0 > 0.0, M1 / jnp.where(M0 > 0.0, M0, 1.0), 0.0) / carbon_mass
    defined = n_C > 1.0
    log_n_C = jnp.log10(jnp.where(defined, n_C, 10.0))

    alpha = jnp.tanh(a / log_n_C + b)
    return jnp.where(defined & (alpha >= 0.0), alpha, 1.0)


def compute_surface_site_densities(
    gas: GasState,
    species: SpeciesIndexTable,
    M0: Float[Array, ""],
    M1: Float[Array, ""],
) -> tuple[HacaRates, Float[Array, ""], Float[Array, ""], Float[Array, ""]]:
    """Shared HACA machinery for growth and oxidation.

    Returns:
        rates: HACA pseudo-first-order rates [1/s].
        alpha: Available site fraction [-].
        c_soot_H: Available C-H sites [sites/m^2].
        c_soot_rad: Available radical sites [sites/m^2].
    """
    rates = compute_haca_rates(gas, species)
    chi_rad = compute_radical_site_density(rates)
    alpha = compute_site_fraction(gas.T, M0, M1)

    c_soot_H = alpha * CHI_SOOT * 1e4
    c_soot_rad = alpha * chi_rad * 1e4
    return rates, alpha, c_soot_H, c_soot_rad
