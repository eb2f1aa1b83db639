"""Moment inversion: 2n raw moments to an n-node Gauss quadrature.

Both algorithms build the symmetric tridiagonal Jacobi matrix of the
orthogonal polynomials of the measure and diagonalize it (Golub & Welsch
1969). Moments are scaled by M0 and by the mean mass M1/M0 first, so the
recurrences run on O(1) numbers regardless of the kg scale of the soot
moments.

Neither algorithm checks realizability. A non-realizable moment set gives
negative or non-finite weights and abscissas; rejecting those is left to the
caller.
"""

import jax.numpy as jnp
from jaxtyping import Array, Float

from soot_qmom.diagnose import runtime_check_array_sizes


def normalize_moments(
    moments: Float[Array, " n_moments"],
) -> tuple[Float[Array, " n_moments"], Float[Array, ""], Float[Array, ""]]:
    """Scale moments to M0 = 1 and unit mean mass.

    Returns:
        scaled: M_k / (M0 s^k).
        M0: Number density [#/m^3].
        s: Mean particle mass M1/M0 [kg].
    """
    M0 = moments[0]
    s = moments[1] / M0
    orders = jnp.arange(moments.shape[0])
    return moments / (M0 * s**orders), M0, s


def _solve_jacobi_matrix(
    a: Float[Array, " n_nodes"], b: Float[Array, " n_nodes-1"], m0: Float[Array, ""]
) -> tuple[Float[Array, " n_nodes"], Float[Array, " n_nodes"]]:
    """Eigen-decomposition of the Jacobi matrix with diagonal a, off-diagonal b."""
    jacobi = jnp.diag(a) + jnp.diag(b, k=1) + jnp.diag(b, k=-1)
    eigenvalues, eigenvectors = jnp.linalg.eigh(jacobi)
    weights = m0 * eigenvectors[0, :] ** 2
    return weights, eigenvalues


def compute_wheeler_coefficients(
    moments: Float[Array, " n_moments"],
) -> tuple[Float[Array, " n_nodes"], Float[Array, " n_nodes"]]:
    """Recurrence coefficients a_k, b_k by Wheeler's algorithm.

    Wheeler (1974), Rocky Mt. J. Math. 4:287-296; see also Marchisio & Fox,
    Computational Models for Polydisperse Particulate and Multiphase Systems
    (2013), sec. 3.2.1. b[0] is unused and zero.
    """
    n = moments.shape[0] // 2
    n_moments = 2 * n

    # sigma[k][l], with row 0 = sigma_{-1} = 0 and row 1 = sigma_0 = moments
    sigma = [[0.0] * n_moments, [moments[l] for l in range(n_moments)]]
    a = [moments[1] / moments[0]]
    b = [jnp.asarray(0.0)]

    for k in range(1, n):
        row = [0.0] * n_moments
        for l in range(k, n_moments - k):
            row[l] = (
                sigma[k][l + 1] - a[k - 1] * sigma[k][l] - b[k - 1] * sigma[k - 1][l]
            )
        sigma.append(row)
        a.append(sigma[k + 1][k + 1] / sigma[k + 1][k] - sigma[k][k] / sigma[k][k - 1])
        b.append(sigma[k + 1][k] / sigma[k][k - 1])

    return jnp.stack(a), jnp.stack(b)


@runtime_check_array_sizes
def invert_moments_wheeler(
    moments: Float[Array, " n_moments"],
) -> tuple[Float[Array, " n_nodes"], Float[Array, " n_nodes"]]:
    """Gauss quadrature from 2n moments by Wheeler's algorithm.

    Args:
        moments: Raw moments M_0 ... M_{2n-1}.

    Returns:
        weights: Node weights [#/m^3].
        abscissas: Node masses [kg], ascending.
    """
    scaled, M0, s = normalize_moments(moments)
    a, b = compute_wheeler_coefficients(scaled)

    realizable = jnp.all(b[1:] >= 0.0)
    weights, abscissas = _solve_jacobi_matrix(a, -jnp.sqrt(jnp.abs(b[1:])), scaled[0])
    weights = jnp.where(realizable, weights, jnp.nan)
    return weights * M0, abscissas * s


def compute_product_difference_coefficients(
    moments: Float[Array, " n_moments"],
) -> Float[Array, " n_moments"]:
    """Continued-fraction coefficients alpha_i of Gordon's product-difference table.

    Gordon (1968), J. Math. Phys. 9:655-663; McGraw (1997), Aerosol Sci.
    Technol. 27:255-265.
    """
    n_moments = moments.shape[0]
    size = n_moments + 1

    # P[i][j]: first column is the unit vector, second the alternating moments
    P = [[0.0] * size for _ in range(size)]
    P[0][0] = 1.0
    for i in range(n_moments):
        P[i][1] = (-1.0) ** i * moments[i]

    for j in range(2, size):
        for i in range(size - j):
            P[i][j] = P[0][j - 1] * P[i + 1][j - 2] - P[0][j - 2] * P[i + 1][j - 1]

    alpha = [jnp.asarray(0.0)]
    for i in range(1, n_moments):
        alpha.append(P[0][i + 1] / (P[0][i] * P[0][i - 1]))
    return jnp.stack(alpha)


@runtime_check_array_sizes
def invert_moments_product_difference(
    moments: Float[Array, " n_moments"],
) -> tuple[Float[Array, " n_nodes"], Float[Array, " n_nodes"]]:
    """Gauss quadrature from 2n moments by the product-difference algorithm."""
    n = moments.shape[0] // 2
    scaled, M0, s = normalize_moments(moments)
    alpha = compute_product_difference_coefficients(scaled)

    a = jnp.stack([alpha[2 * i + 1] + alpha[2 * i] for i in range(n)])
    if n > 1:
        b_squared = jnp.stack([alpha[2 * i + 2] * alpha[2 * i + 1] for i in range(n - 1)])
    else:
        b_squared = jnp.zeros(0)

    realizable = jnp.all(b_squared >= 0.0)
    weights, abscissas = _solve_jacobi_matrix(
        a, -jnp.sqrt(jnp.abs(b_squared)), scaled[0]
    )
    weights = jnp.where(realizable, weights, jnp.nan)
    return weights * M0, abscissas * s
