from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal

import jax
from jaxtyping import Array, Float, Int

InversionModel = Literal["wheeler", "product_difference"]

InversionFn = Callable[
    [Float[Array, " n_moments"]],
    tuple[Float[Array, " n_nodes"], Float[Array, " n_nodes"]],
]


@jax.tree_util.register_dataclass
@dataclass(frozen=True)
class QuadratureNodes:
    """Quadrature approximation of the soot particle-mass distribution.

    Slots at index >= order are zero. order is 0 when there are no particles.
    """

    weights: Float[Array, " n_nodes"]  # [#/m^3]
    abscissas: Float[Array, " n_nodes"]  # [kg]
    order: Int[Array, ""]

    @property
    def n_nodes(self) -> int:
        """Number of node slots, n_moments / 2."""
        return self.weights.shape[0]


@dataclass(frozen=True)
class QuadratureConfig:
    """Configuration for the moment inversion.

    Attributes:
        inversion: "wheeler" or "product_difference".
        max_abscissa: Largest admissible node mass [kg].
    """

    inversion: InversionModel = "wheeler"
    max_abscissa: float = 1.0
