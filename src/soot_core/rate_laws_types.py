from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Literal

import jax
import jax.numpy as jnp
from jaxtyping import Array, Float

from soot_core.species_types import GasState


@jax.tree_util.register_dataclass
@dataclass(frozen=True)
class StoichiometricRatios:
    """Gas species mass change per unit soot mass change of one channel.

    Units are kg-species / kg-soot. Signs are embedded: consumed species are
    negative, produced species positive.
    """

    c2h2: Float[Array, ""] = 0.0
    o2: Float[Array, ""] = 0.0
    h: Float[Array, ""] = 0.0
    h2: Float[Array, ""] = 0.0
    oh: Float[Array, ""] = 0.0
    h2o: Float[Array, ""] = 0.0
    co: Float[Array, ""] = 0.0
    pah: Float[Array, " n_pah"] = field(default_factory=lambda: jnp.zeros(0))


@jax.tree_util.register_dataclass
@dataclass(frozen=True)
class NucleationRate:
    """Result of a nucleation rate evaluation.

    c_min, dimer_mass and dimer_number_density belong to this evaluation only.
    For the PAH mechanism they are recomputed from the gas state on every call.
    """

    rate: Float[Array, ""]  # [#/m^3/s]
    c_min: Float[Array, ""]  # [-] carbon atoms per nucleus
    dimer_mass: Float[Array, ""]  # [kg]
    dimer_number_density: Float[Array, ""]  # [#/m^3]
    ratios: StoichiometricRatios


@jax.tree_util.register_dataclass
@dataclass(frozen=True)
class SurfaceRate:
    """Result of a surface growth or oxidation rate evaluation."""

    rate: Float[Array, ""]  # [kg/m^2/s]
    ratios: StoichiometricRatios


NucleationFn = Callable[
    [GasState, Float[Array, " n_nodes"], Float[Array, " n_nodes"]],
    NucleationRate,
]
SurfaceRateFn = Callable[[GasState, Float[Array, ""], Float[Array, ""]], SurfaceRate]
CoagulationFn = Callable[[GasState, Float[Array, "..."], Float[Array, "..."]], Float[Array, "..."]]


@jax.tree_util.register_dataclass
@dataclass(frozen=True, eq=False)
class RateLaws:
    """Container for the selected soot rate-law callables."""

    nucleation: NucleationFn = field(metadata=dict(static=True))
    growth: SurfaceRateFn = field(metadata=dict(static=True))
    oxidation: SurfaceRateFn = field(metadata=dict(static=True))
    coagulation: CoagulationFn = field(metadata=dict(static=True))
    # PAH condensation onto existing particles accompanies PAH nucleation.
    condensation: bool = field(default=False, metadata=dict(static=True))


NucleationModel = Literal["none", "ll", "lin", "pah"]
GrowthModel = Literal["none", "lin", "ll", "haca"]
OxidationModel = Literal["none", "ll", "lee_neoh", "nsc_neoh", "haca"]
CoagulationModel = Literal["none", "ll", "fuchs", "frenklach"]


@dataclass(frozen=True)
class RateLawsConfig:
    """Configuration for selecting the soot rate laws.

    Attributes:
        nucleation: "none", "ll" (Leung & Lindstedt 1991), "lin"
            (Lindstedt 2005) or "pah" (Blanquart & Pitsch 2009 dimers).
        growth: "none", "lin" (Lindstedt 1994), "ll" (Leung & Lindstedt 1991)
            or "haca" (Appel, Bockhorn & Frenklach 2000).
        oxidation: "none", "ll", "lee_neoh", "nsc_neoh" or "haca".
        coagulation: "none", "ll", "fuchs" or "frenklach".
        c_min: Carbon atoms per nucleus for the acetylene mechanisms.
        rho_soot: Soot density [kg/m^3].
    """

    nucleation: NucleationModel = "ll"
    growth: GrowthModel = "ll"
    oxidation: OxidationModel = "ll"
    coagulation: CoagulationModel = "fuchs"
    c_min: float = 100.0
    rho_soot: float = 1850.0
