"""Soot particle collision kernels.

All kernels return the collision rate function beta(m1, m2) [m^3/#/s] for two
particles of mass m1 and m2 [kg]. They are elementwise in the masses and
broadcast like jnp operations, so a full node-pair matrix is obtained with
m1[:, None], m2[None, :]. Pairs with a non-positive mass have beta = 0.
"""

import jax.numpy as jnp
from jaxtyping import Array, Float

from soot_core import constants
from soot_core.gas_properties import compute_mean_free_path
from soot_core.species_types import GasState


def compute_particle_diameter(
    m: Float[Array, "..."], rho_soot: float
) -> Float[Array, "..."]:
    """Equivalent spherical diameter d = (6 m / (pi rho_soot))^(1/3) [m]."""
    return jnp.power(6.0 * jnp.abs(m) / (jnp.pi * rho_soot), 1.0 / 3.0)


def compute_slip_correction(Kn: Float[Array, "..."]) -> Float[Array, "..."]:
    """Cunningham slip correction, Seinfeld & Pandis eq. 9.34."""
    return 1.0 + Kn * (1.257 + 0.4 * jnp.exp(-1.1 / Kn))


def _mask_masses(m1, m2):
    """Return a validity mask and masses safe to evaluate kernels with."""
    m1, m2 = jnp.broadcast_arrays(jnp.asarray(m1, dtype=float), jnp.asarray(m2, dtype=float))
    valid = (m1 > 0.0) & (m2 > 0.0)
    return valid, jnp.where(valid, m1, 1.0), jnp.where(valid, m2, 1.0)


def compute_coagulation_rate_none(
    gas: GasState, m1: Float[Array, "..."], m2: Float[Array, "..."]
) -> Float[Array, "..."]:
    del gas
    return jnp.zeros(jnp.broadcast_shapes(jnp.shape(m1), jnp.shape(m2)))


def compute_coagulation_rate_leung_lindstedt(
    gas: GasState,
    m1: Float[Array, "..."],
    m2: Float[Array, "..."],
    *,
    rho_soot: float,
) -> Float[Array, "..."]:
    """Free-molecular kernel of Leung & Lindstedt (1991) for equal-size particles.

    beta = 2 C_a sqrt(d * 6 k T / rho_soot), C_a = 9. The published form is
    for a monodisperse population; here d is the geometric mean diameter of
    the pair so that beta(m1, m2) = beta(m2, m1).
    """
    C_a = 9.0
    valid, m1, m2 = _mask_masses(m1, m2)
    d = jnp.sqrt(
        compute_particle_diameter(m1, rho_soot) * compute_particle_diameter(m2, rho_soot)
    )
    beta = 2.0 * C_a * jnp.sqrt(d * 6.0 * constants.k * gas.T / rho_soot)
    return jnp.where(valid, beta, 0.0)


def compute_coagulation_rate_fuchs(
    gas: GasState,
    m1: Float[Array, "..."],
    m2: Float[Array, "..."],
    *,
    rho_soot: float,
) -> Float[Array, "..."]:
    """Fuchs interpolation between free-molecular and continuum coagulation.

    Seinfeld & Pandis (2016) ch. 13, with the sqrt(2) factors in g from Fuchs,
    Mechanics of Aerosols (1964).
    """
    valid, m1, m2 = _mask_masses(m1, m2)
    kT = constants.k * gas.T

    d1 = compute_particle_diameter(m1, rho_soot)
    d2 = compute_particle_diameter(m2, rho_soot)

    # Mean thermal speeds
    c1 = jnp.sqrt(8.0 * kT / (jnp.pi * m1))
    c2 = jnp.sqrt(8.0 * kT / (jnp.pi * m2))

    mfp = compute_mean_free_path(gas)
    Cc1 = compute_slip_correction(2.0 * mfp / d1)
    Cc2 = compute_slip_correction(2.0 * mfp / d2)

    # Particle diffusivities and mean free paths
    D1 = kT * Cc1 / (3.0 * jnp.pi * gas.mu * d1)
    D2 = kT * Cc2 / (3.0 * jnp.pi * gas.mu * d2)
    l1 = 8.0 * D1 / (jnp.pi * c1)
    l2 = 8.0 * D2 / (jnp.pi * c2)

    g1 = jnp.sqrt(2.0) / (3.0 * d1 * l1) * (
        (d1 + l1) ** 3 - (d1 * d1 + l1 * l1) ** 1.5
    ) - jnp.sqrt(2.0) * d1
    g2 = jnp.sqrt(2.0) / (3.0 * d2 * l2) * (
        (d2 + l2) ** 3 - (d2 * d2 + l2 * l2) ** 1.5
    ) - jnp.sqrt(2.0) * d2

    d12 = d1 + d2
    D12 = D1 + D2
    denominator = d12 / (d12 + 2.0 * jnp.sqrt(g1 * g1 + g2 * g2)) + (
        8.0 / constants.eps_c * D12 / (jnp.sqrt(c1 * c1 + c2 * c2) * d12)
    )
    safe_denominator = jnp.where(denominator > 0.0, denominator, 1.0)
    beta = 2.0 * jnp.pi * D12 * d12 / safe_denominator
    return jnp.where(valid & (denominator > 0.0), beta, 0.0)


def compute_coagulation_rate_frenklach(
    gas: GasState,
    m1: Float[Array, "..."],
    m2: Float[Array, "..."],
    *,
    rho_soot: float,
) -> Float[Array, "..."]:
    """Harmonic mean of the free-molecular and continuum collision rates."""
    valid, m1, m2 = _mask_masses(m1, m2)
    kT = constants.k * gas.T

    d1 = compute_particle_diameter(m1, rho_soot)
    d2 = compute_particle_diameter(m2, rho_soot)

    # Free molecular, with reduced mass m12
    m12 = m1 * m2 / (m1 + m2)
    beta_fm = constants.eps_c * jnp.sqrt(jnp.pi * kT * 0.5 / m12) * (d1 + d2) ** 2

    # Continuum, Brownian with slip correction
    mfp = compute_mean_free_path(gas)
    Cc1 = compute_slip_correction(2.0 * mfp / d1)
    Cc2 = compute_slip_correction(2.0 * mfp / d2)
    beta_c = 2.0 * kT / (3.0 * gas.mu) * (Cc1 / d1 + Cc2 / d2) * (d1 + d2)

    beta_sum = beta_fm + beta_c
    safe_sum = jnp.where(beta_sum > 0.0, beta_sum, 1.0)
    return jnp.where(valid & (beta_sum > 0.0), beta_fm * beta_c / safe_sum, 0.0)


def compute_continuum_coagulation_coefficient(gas: GasState) -> Float[Array, ""]:
    """Continuum coagulation coefficient K_c = 2 k T / (3 mu)."""
    return 2.0 * constants.k * gas.T / (3.0 * gas.mu)


def compute_continuum_slip_coefficient(
    gas: GasState, rho_soot: float
) -> Float[Array, ""]:
    """Slip coefficient K_c' = 2 * 1.657 * lambda * (pi rho_soot / 6)^(1/3)."""
    return (
        2.0
        * 1.657
        * compute_mean_free_path(gas)
        * jnp.power(jnp.pi / 6.0 * rho_soot, 1.0 / 3.0)
    )


def compute_free_molecular_coagulation_coefficient(
    gas: GasState, rho_soot: float
) -> Float[Array, ""]:
    """Free-molecular coefficient K_f = eps_c sqrt(pi k T / 2) (6 / (pi rho_soot))^(2/3)."""
    return (
        constants.eps_c
        * jnp.sqrt(jnp.pi * constants.k * gas.T / 2.0)
        * jnp.power(6.0 / (jnp.pi * rho_soot), 2.0 / 3.0)
    )
