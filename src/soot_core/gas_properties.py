"""Gas-phase quantities derived from a GasState snapshot."""

import jax.numpy as jnp
from jaxtyping import Array, Float

from soot_core import constants
from soot_core.species_types import GasState, SpeciesIndexTable


def compute_concentration(
    gas: GasState, species: SpeciesIndexTable, name: str
) -> Float[Array, ""]:
    """Molar concentration c = rho * Y / MW [kmol/m^3] of a canonical species."""
    index = species.index_of(name)
    return gas.rho * gas.y[index] / species.molar_masses[index]


def compute_partial_pressure_atm(
    gas: GasState, species: SpeciesIndexTable, name: str
) -> Float[Array, ""]:
    """Partial pressure [atm] from mole fraction X = Y * MW_mix / MW."""
    index = species.index_of(name)
    X = gas.y[index] * gas.MW / species.molar_masses[index]
    return X * gas.P / constants.atm


def compute_mean_free_path(gas: GasState) -> Float[Array, ""]:
    """Gas mean free path [m].

    lambda = mu / rho * sqrt(pi * MW / (2 R T))
    """
    return gas.mu / gas.rho * jnp.sqrt(
        jnp.pi * gas.MW / (2.0 * constants.R_universal * gas.T)
    )
