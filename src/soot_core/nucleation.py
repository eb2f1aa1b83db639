"""Soot nucleation rates [#/m^3/s].

The acetylene mechanisms form nuclei of a fixed carbon-atom count c_min,
C2H2 -> 2 C(s) + H2. The PAH mechanism forms nuclei from colliding PAH dimers
(Blanquart & Pitsch 2009) and sets c_min from the local PAH composition on
every call.
"""

import jax.numpy as jnp
from jaxtyping import Array, Float

from soot_core import constants
from soot_core.coagulation import compute_coagulation_rate_frenklach
from soot_core.gas_properties import compute_concentration
from soot_core.rate_laws_types import NucleationRate, StoichiometricRatios
from soot_core.species_types import GasState, SpeciesIndexTable


def compute_nucleation_rate_none(
    gas: GasState,
    weights: Float[Array, " n_nodes"],
    abscissas: Float[Array, " n_nodes"],
    *,
    c_min: float,
) -> NucleationRate:
    del gas, weights, abscissas
    zero = jnp.asarray(0.0)
    return NucleationRate(
        rate=zero,
        c_min=jnp.asarray(float(c_min)),
        dimer_mass=zero,
        dimer_number_density=zero,
        ratios=StoichiometricRatios(),
    )


def _compute_acetylene_nucleation(
    gas: GasState, species: SpeciesIndexTable, c_min: float, prefactor: float
) -> NucleationRate:
    c_C2H2 = compute_concentration(gas, species, "C2H2")
    R_nuc = prefactor * jnp.exp(-21100.0 / gas.T) * c_C2H2  # [kmol/m^3/s]
    zero = jnp.asarray(0.0)
    return NucleationRate(
        rate=R_nuc * 2.0 * constants.N_A / c_min,
        c_min=jnp.asarray(float(c_min)),
        dimer_mass=zero,
        dimer_number_density=zero,
        ratios=StoichiometricRatios(
            c2h2=-species.molar_mass("C2H2") / (2.0 * constants.MW_C),
            h2=species.molar_mass("H2") / (2.0 * constants.MW_C),
        ),
    )


def compute_nucleation_rate_leung_lindstedt(
    gas: GasState,
    weights: Float[Array, " n_nodes"],
    abscissas: Float[Array, " n_nodes"],
    *,
    species: SpeciesIndexTable,
    c_min: float,
) -> NucleationRate:
    """Leung & Lindstedt (1991), Comb. & Flame 87:289-305.

    R = 1e4 exp(-21100/T) [C2H2] [kmol/m^3/s], J = 2 R N_A / c_min.
    """
    del weights, abscissas
    return _compute_acetylene_nucleation(gas, species, c_min, 1.0e4)


def compute_nucleation_rate_lindstedt(
    gas: GasState,
    weights: Float[Array, " n_nodes"],
    abscissas: Float[Array, " n_nodes"],
    *,
    species: SpeciesIndexTable,
    c_min: float,
) -> NucleationRate:
    """Lindstedt (2005), Proc. Comb. Inst. 30:775-783. Prefactor 0.63e4."""
    del weights, abscissas
    return _compute_acetylene_nucleation(gas, species, c_min, 0.63e4)


def compute_dimer_formation(
    gas: GasState, species: SpeciesIndexTable, rho_soot: float
) -> tuple[Float[Array, " n_pah"], Float[Array, " n_pah"]]:
    """PAH self-collision rates forming dimers.

    Args:
        gas: Local gas state.
        species: Index table with the configured PAH species.
        rho_soot: Soot density [kg/m^3].

    Returns:
        omega: Dimer formation rate per PAH species [#/m^3/s].
        m_pah: PAH molecule mass [kg].
    """
    pah_indices = jnp.asarray(species.pah, dtype=int)
    MW_pah = species.molar_masses[pah_indices]  # [kg/kmol] = [amu]
    m_pah = MW_pah / constants.N_A  # [kg]

    # Sticking coefficient of Blanquart & Pitsch (2009), eq. 2
    gamma = 1.501e-11 * MW_pah**4
    gamma = jnp.where(MW_pah > 153.0, gamma, gamma / 3.0)

    N_pah = gas.rho * gas.y[pah_indices] / MW_pah * constants.N_A  # [#/m^3]

    prefactor = jnp.sqrt(4.0 * jnp.pi * constants.k * gas.T) * jnp.power(
        6.0 / (jnp.pi * rho_soot), 2.0 / 3.0
    )
    omega = jnp.abs(gamma * prefactor * jnp.power(m_pah, 1.0 / 6.0) * N_pah**2)
    return omega, m_pah


def compute_dimer_number_density(
    gas: GasState,
    omega_D: Float[Array, ""],
    m_dimer: Float[Array, ""],
    weights: Float[Array, " n_nodes"],
    abscissas: Float[Array, " n_nodes"],
    *,
    rho_soot: float,
) -> tuple[Float[Array, ""], Float[Array, ""]]:
    """Steady-state dimer number density.

    Dimers form at omega_D and are consumed by self collision (nucleation) and
    by collision with soot (condensation):
        beta_DD D^2 + I D - omega_D = 0,  I = sum_j |w_j| beta(m_dimer, x_j)
    The positive root is evaluated in the cancellation-free form.

    Returns:
        D: Dimer number density [#/m^3].
        beta_DD: Dimer self-collision rate [m^3/#/s].
    """
    beta_DD = compute_coagulation_rate_frenklach(
        gas, m_dimer, m_dimer, rho_soot=rho_soot
    )
    I_beta_DS = jnp.sum(
        jnp.abs(weights)
        * compute_coagulation_rate_frenklach(gas, m_dimer, abscissas, rho_soot=rho_soot)
    )

    denominator = I_beta_DS + jnp.sqrt(I_beta_DS**2 + 4.0 * beta_DD * omega_D)
    safe_denominator = jnp.where(denominator > 0.0, denominator, 1.0)
    D = jnp.where(denominator > 0.0, 2.0 * omega_D / safe_denominator, 0.0)
    return D, beta_DD


def compute_nucleation_rate_pah(
    gas: GasState,
    weights: Float[Array, " n_nodes"],
    abscissas: Float[Array, " n_nodes"],
    *,
    species: SpeciesIndexTable,
    c_min: float,
    rho_soot: float,
) -> NucleationRate:
    """PAH dimerization nucleation, J = 1/2 beta_DD D^2.

    Dimer mass and nucleus size are recomputed from the current PAH
    composition:
        m_dimer = 2 sum(omega_i m_i) / omega_D
        c_min   = 4 sum(omega_i nC_i) / omega_D
    With no PAH present the rate is zero and the configured c_min is returned.
    """
    omega, m_pah = compute_dimer_formation(gas, species, rho_soot)
    nC_pah = jnp.asarray(species.pah_carbon_atoms, dtype=float)

    omega_D = jnp.sum(omega)
    has_pah = omega_D > 0.0
    safe_omega_D = jnp.where(has_pah, omega_D, 1.0)

    omega_m = jnp.sum(omega * m_pah)
    m_dimer = jnp.where(has_pah, 2.0 * omega_m / safe_omega_D, 0.0)
    c_min_local = jnp.where(
        has_pah, 4.0 * jnp.sum(omega * nC_pah) / safe_omega_D, float(c_min)
    )

    D, beta_DD = compute_dimer_number_density(
        gas, omega_D, m_dimer, weights, abscissas, rho_soot=rho_soot
    )
    J = jnp.where(has_pah, 0.5 * beta_DD * D * D, 0.0)

    # Ratios per kg of nucleated soot
    m_nuc = c_min_local * constants.MW_C / constants.N_A
    valid = has_pah & (m_nuc > 0.0) & (omega_m > 0.0)
    dimer_to_nucleus = jnp.where(
        valid, 2.0 * m_dimer / jnp.where(valid, m_nuc, 1.0), 0.0
    )
    pah_fraction = jnp.where(valid, omega * m_pah / jnp.where(valid, omega_m, 1.0), 0.0)

    ratios = StoichiometricRatios(
        h2=jnp.where(valid, dimer_to_nucleus - 1.0, 0.0),
        pah=-pah_fraction * dimer_to_nucleus,
    )
    return NucleationRate(
        rate=J,
        c_min=c_min_local,
        dimer_mass=m_dimer,
        dimer_number_density=jnp.where(has_pah, D, 0.0),
        ratios=ratios,
    )
