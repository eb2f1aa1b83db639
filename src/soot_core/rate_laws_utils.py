from __future__ import annotations

import functools
import logging

from soot_core import coagulation, growth, nucleation, oxidation
from soot_core.rate_laws_types import RateLaws, RateLawsConfig
from soot_core.species_types import SootConfigurationError, SpeciesIndexTable
from soot_core.species_utils import require_species

logger = logging.getLogger(__name__)

# Legacy spellings accepted for mechanism names.
_ALIASES = {"frenk": "frenklach"}

_HACA_SPECIES = ("C2H2", "O2", "H", "H2", "OH", "H2O")


def _normalize(name: str) -> str:
    key = name.strip().lower()
    return _ALIASES.get(key, key)


def build_nucleation_fn(config: RateLawsConfig, species: SpeciesIndexTable):
    model = _normalize(config.nucleation)
    if model == "none":
        return functools.partial(
            nucleation.compute_nucleation_rate_none, c_min=config.c_min
        )

    if model in ("ll", "lin"):
        require_species(species, ("C2H2", "H2"), f"nucleation model '{model}'")
        compute_fn = (
            nucleation.compute_nucleation_rate_leung_lindstedt
            if model == "ll"
            else nucleation.compute_nucleation_rate_lindstedt
        )
        return functools.partial(compute_fn, species=species, c_min=config.c_min)

    if model == "pah":
        require_species(species, ("H2",), "nucleation model 'pah'")
        if species.n_pah == 0:
            raise SootConfigurationError(
                "PAH nucleation selected but no PAH species configured."
            )
        return functools.partial(
            nucleation.compute_nucleation_rate_pah,
            species=species,
            c_min=config.c_min,
            rho_soot=config.rho_soot,
        )

    raise SootConfigurationError(f"Unknown nucleation model '{config.nucleation}'.")


def build_growth_fn(config: RateLawsConfig, species: SpeciesIndexTable):
    model = _normalize(config.growth)
    if model == "none":
        return growth.compute_growth_rate_none

    if model == "lin":
        require_species(species, ("C2H2", "H2"), "growth model 'lin'")
        return functools.partial(growth.compute_growth_rate_lindstedt, species=species)

    if model == "ll":
        require_species(species, ("C2H2", "H2"), "growth model 'll'")
        return functools.partial(
            growth.compute_growth_rate_leung_lindstedt,
            species=species,
            rho_soot=config.rho_soot,
        )

    if model == "haca":
        require_species(species, _HACA_SPECIES, "growth model 'haca'")
        return functools.partial(growth.compute_growth_rate_haca, species=species)

    raise SootConfigurationError(f"Unknown growth model '{config.growth}'.")


def build_oxidation_fn(config: RateLawsConfig, species: SpeciesIndexTable):
    model = _normalize(config.oxidation)
    if model == "none":
        return oxidation.compute_oxidation_rate_none

    if model == "ll":
        require_species(species, ("O2", "CO"), "oxidation model 'll'")
        return functools.partial(
            oxidation.compute_oxidation_rate_leung_lindstedt, species=species
        )

    if model == "lee_neoh":
        require_species(species, ("O2", "OH", "H", "CO"), "oxidation model 'lee_neoh'")
        return functools.partial(oxidation.compute_oxidation_rate_lee_neoh, species=species)

    if model == "nsc_neoh":
        require_species(species, ("O2", "OH", "H", "CO"), "oxidation model 'nsc_neoh'")
        return functools.partial(
            oxidation.compute_oxidation_rate_nsc_neoh,
            species=species,
            rho_soot=config.rho_soot,
        )

    if model == "haca":
        require_species(species, _HACA_SPECIES + ("CO",), "oxidation model 'haca'")
        return functools.partial(oxidation.compute_oxidation_rate_haca, species=species)

    raise SootConfigurationError(f"Unknown oxidation model '{config.oxidation}'.")


def build_coagulation_fn(config: RateLawsConfig):
    model = _normalize(config.coagulation)
    if model == "none":
        return coagulation.compute_coagulation_rate_none

    kernels = {
        "ll": coagulation.compute_coagulation_rate_leung_lindstedt,
        "fuchs": coagulation.compute_coagulation_rate_fuchs,
        "frenklach": coagulation.compute_coagulation_rate_frenklach,
    }
    if model in kernels:
        return functools.partial(kernels[model], rho_soot=config.rho_soot)

    raise SootConfigurationError(f"Unknown coagulation model '{config.coagulation}'.")


def build_rate_laws_from_config(
    config: RateLawsConfig | None, *, species: SpeciesIndexTable
) -> RateLaws:
    """Build the soot rate laws from a configuration object.

    Every mechanism name is checked here, together with the gas species it
    needs, so a bad configuration fails before the first rate evaluation.

    Raises:
        SootConfigurationError: Unknown mechanism name or missing species.
    """
    if config is None:
        config = RateLawsConfig()

    rate_laws = RateLaws(
        nucleation=build_nucleation_fn(config, species),
        growth=build_growth_fn(config, species),
        oxidation=build_oxidation_fn(config, species),
        coagulation=build_coagulation_fn(config),
        condensation=_normalize(config.nucleation) == "pah",
    )
    logger.info(
        "Soot rate laws: nucleation=%s, growth=%s, oxidation=%s, coagulation=%s",
        _normalize(config.nucleation),
        _normalize(config.growth),
        _normalize(config.oxidation),
        _normalize(config.coagulation),
    )
    return rate_laws
