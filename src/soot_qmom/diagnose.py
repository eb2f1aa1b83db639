import logging

import jax.numpy as jnp
import jaxtyping as jt
from beartype import beartype

logger = logging.getLogger(__name__)


def runtime_check_array_sizes(f):
    """Decorator to enforce jaxtyping shape annotations at runtime."""
    return jt.jaxtyped(typechecker=beartype)(f)


def check_nan_inf(S) -> None:
    if jnp.any(jnp.isnan(S)):
        raise ValueError("NaN values present in soot source terms.")

    if jnp.any(jnp.isinf(S)):
        raise ValueError("Inf values present in soot source terms.")


def check_source_terms(source_terms) -> None:
    """Host-side check of both source vectors of a SootSourceTerms."""
    check_nan_inf(source_terms.moment_sources)
    check_nan_inf(source_terms.gas_sources)


def log_quadrature(nodes) -> None:
    """Log a quadrature node set; warn if the inversion had to reduce its order."""
    order = int(nodes.order)
    logger.debug(
        "Quadrature order %d/%d: weights=%s, abscissas=%s",
        order,
        nodes.n_nodes,
        nodes.weights,
        nodes.abscissas,
    )
    if 0 < order < nodes.n_nodes:
        logger.warning(
            "Moment inversion reduced from %d to %d nodes.", nodes.n_nodes, order
        )
