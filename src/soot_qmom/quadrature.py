"""Realizable quadrature of the soot particle-mass distribution.

The full-order inversion of n_moments moments is tried first; if it yields a
negative, non-finite or oversized node, the two highest moments are dropped
and the inversion retried. One node (the monodisperse solution) is always
admissible. Every candidate order is evaluated and the largest admissible one
selected with jnp.where, so the reduction is traceable by jax.jit.
"""

from __future__ import annotations

import jax.numpy as jnp
from jaxtyping import Array, Float

from soot_core.species_types import SootConfigurationError
from soot_qmom import moment_inversion
from soot_qmom.diagnose import runtime_check_array_sizes
from soot_qmom.quadrature_types import InversionFn, QuadratureConfig, QuadratureNodes


def build_inversion_fn_from_config(config: QuadratureConfig | None) -> InversionFn:
    """Select the moment inversion algorithm."""
    if config is None:
        config = QuadratureConfig()

    model = config.inversion.lower()
    if model == "wheeler":
        return moment_inversion.invert_moments_wheeler
    if model == "product_difference":
        return moment_inversion.invert_moments_product_difference

    raise SootConfigurationError(f"Unknown moment inversion '{config.inversion}'.")


def _pad(values: Float[Array, " n"], n_nodes: int) -> Float[Array, " n_nodes"]:
    return jnp.concatenate([values, jnp.zeros(n_nodes - values.shape[0])])


@runtime_check_array_sizes
def compute_quadrature_nodes(
    moments: Float[Array, " n_moments"],
    *,
    inversion_fn: InversionFn,
    max_abscissa: float,
) -> QuadratureNodes:
    """Invert moments to non-negative quadrature nodes.

    Args:
        moments: Raw moments M_0 ... M_{n_moments-1}, n_moments even.
        inversion_fn: Moment inversion algorithm, 2n moments to n nodes.
        max_abscissa: Largest admissible node mass [kg].

    Returns:
        Quadrature nodes with n_moments / 2 slots. All zero, order 0, if any
        moment is not positive.
    """
    n_nodes = moments.shape[0] // 2

    has_particles = jnp.all(moments > 0.0)
    M0 = jnp.where(has_particles, moments[0], 1.0)
    M1 = jnp.where(has_particles, moments[1], 1.0)

    # One node: exact monodisperse solution
    weights = _pad(jnp.atleast_1d(M0), n_nodes)
    abscissas = _pad(jnp.atleast_1d(M1 / M0), n_nodes)
    order = jnp.asarray(1)

    safe_moments = jnp.where(has_particles, moments, 1.0)
    for n in range(2, n_nodes + 1):
        w_n, x_n = inversion_fn(safe_moments[: 2 * n])
        admissible = (
            jnp.all(jnp.isfinite(w_n))
            & jnp.all(jnp.isfinite(x_n))
            & jnp.all(w_n >= 0.0)
            & jnp.all(x_n >= 0.0)
            & jnp.all(x_n <= max_abscissa)
        )
        weights = jnp.where(admissible, _pad(w_n, n_nodes), weights)
        abscissas = jnp.where(admissible, _pad(x_n, n_nodes), abscissas)
        order = jnp.where(admissible, n, order)

    return QuadratureNodes(
        weights=jnp.where(has_particles, jnp.maximum(weights, 0.0), 0.0),
        abscissas=jnp.where(has_particles, jnp.maximum(abscissas, 0.0), 0.0),
        order=jnp.where(has_particles, order, 0),
    )


def fractional_moment(nodes: QuadratureNodes, exponent: float) -> Float[Array, ""]:
    """Non-integer moment M_p = sum_i w_i x_i^p of the node set.

    Exactly zero if any weight or abscissa among the node slots is zero.
    """
    weights = nodes.weights
    abscissas = nodes.abscissas
    all_nonzero = jnp.all(weights != 0.0) & jnp.all(abscissas != 0.0)
    safe_abscissas = jnp.where(abscissas != 0.0, abscissas, 1.0)
    M_p = jnp.sum(weights * jnp.power(safe_abscissas, exponent))
    return jnp.where(all_nonzero, M_p, 0.0)


def reconstruct_moments(
    nodes: QuadratureNodes, n_moments: int
) -> Float[Array, " n_moments"]:
    """Integer moments M_k = sum_i w_i x_i^k, k = 0 ... n_moments-1."""
    orders = jnp.arange(n_moments)
    return jnp.sum(
        nodes.weights[None, :] * nodes.abscissas[None, :] ** orders[:, None], axis=1
    )
