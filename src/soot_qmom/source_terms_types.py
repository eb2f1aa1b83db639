from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field

import jax
from jaxtyping import Array, Float

from soot_core.rate_laws_types import (
    NucleationRate,
    RateLaws,
    RateLawsConfig,
    SurfaceRate,
)
from soot_core.species_types import SpeciesIndexTable
from soot_qmom.quadrature_types import InversionFn, QuadratureConfig, QuadratureNodes


@dataclasses.dataclass(frozen=True, slots=True)
class SootModelConfig:
    """Construction-time configuration of the soot moment model.

    Attributes:
        n_moments: Number of transported moments, even and >= 2.
        pah_species_names: Host species names of the PAHs forming dimers.
        pah_carbon_atoms: Carbon atoms per molecule of each PAH.
        rate_laws: Mechanism selection and soot properties.
        quadrature: Moment inversion settings.
    """

    n_moments: int = 4
    pah_species_names: tuple[str, ...] = ()
    pah_carbon_atoms: tuple[int, ...] = ()
    rate_laws: RateLawsConfig = dataclasses.field(default_factory=RateLawsConfig)
    quadrature: QuadratureConfig = dataclasses.field(default_factory=QuadratureConfig)


@jax.tree_util.register_dataclass
@dataclass(frozen=True, eq=False)
class SootModel:
    """Built soot moment model; fixed for the lifetime of a simulation."""

    species: SpeciesIndexTable
    rate_laws: RateLaws
    n_moments: int = field(metadata=dict(static=True))
    inversion_fn: InversionFn = field(metadata=dict(static=True))
    max_abscissa: float = field(metadata=dict(static=True))
    rho_soot: float = field(metadata=dict(static=True))
    c_min: float = field(metadata=dict(static=True))


@jax.tree_util.register_dataclass
@dataclass(frozen=True)
class SootSourceTerms:
    """Result of one source-term evaluation.

    Attributes:
        moment_sources: dM_k/dt [kg^k/m^3/s], sum of the five channels.
        gas_sources: Mass-fraction rates [1/s] in host species order.
        nucleation, condensation, growth, oxidation, coagulation: Per-channel
            moment contributions [kg^k/m^3/s].
        nodes: Quadrature the sources were integrated with.
        nucleation_rate, growth_rate, oxidation_rate: Rate-law results.
    """

    moment_sources: Float[Array, " n_moments"]
    gas_sources: Float[Array, " n_species"]
    nucleation: Float[Array, " n_moments"]
    condensation: Float[Array, " n_moments"]
    growth: Float[Array, " n_moments"]
    oxidation: Float[Array, " n_moments"]
    coagulation: Float[Array, " n_moments"]
    nodes: QuadratureNodes
    nucleation_rate: NucleationRate
    growth_rate: SurfaceRate
    oxidation_rate: SurfaceRate
