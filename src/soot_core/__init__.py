"""Soot rate laws: nucleation, surface growth, oxidation and coagulation.

Moments of order two and higher are of order 1e-40 kg^2/m^3 and below, so
64-bit floats are enabled on import.
"""

import jax

jax.config.update("jax_enable_x64", True)

from soot_core.rate_laws_types import (  # noqa: E402
    NucleationRate,
    RateLaws,
    RateLawsConfig,
    StoichiometricRatios,
    SurfaceRate,
)
from soot_core.rate_laws_utils import build_rate_laws_from_config  # noqa: E402
from soot_core.species_types import (  # noqa: E402
    MISSING,
    GasState,
    SootConfigurationError,
    SpeciesIndexTable,
    make_gas_state,
)
from soot_core.species_utils import (  # noqa: E402
    build_species_index_table,
    load_carbon_atoms_from_json,
    load_gas_species_from_json,
)

__all__ = [
    "MISSING",
    "GasState",
    "NucleationRate",
    "RateLaws",
    "RateLawsConfig",
    "SootConfigurationError",
    "SpeciesIndexTable",
    "StoichiometricRatios",
    "SurfaceRate",
    "build_rate_laws_from_config",
    "build_species_index_table",
    "load_carbon_atoms_from_json",
    "load_gas_species_from_json",
    "make_gas_state",
]
