from __future__ import annotations

import logging
from typing import Annotated, Sequence

import pydantic
from jaxtyping import Array, Float

from soot_core.rate_laws_utils import build_rate_laws_from_config
from soot_core.species_types import SootConfigurationError
from soot_core.species_utils import build_species_index_table
from soot_qmom.quadrature import build_inversion_fn_from_config
from soot_qmom.source_terms_types import SootModel, SootModelConfig

logger = logging.getLogger(__name__)

EvenMomentCount = Annotated[int, pydantic.Field(ge=2, multiple_of=2)]


def _validate(annotation, value, name: str):
    """Validate a scalar setting against a pydantic-constrained type."""
    try:
        return pydantic.TypeAdapter(annotation).validate_python(value)
    except pydantic.ValidationError as error:
        raise SootConfigurationError(
            f"Invalid {name} {value!r}: {error.errors()[0]['msg']}"
        ) from error


def build_soot_model(
    config: SootModelConfig | None,
    *,
    species_names: Sequence[str],
    molar_masses: Sequence[float] | Float[Array, " n_species"],
) -> SootModel:
    """Build a soot moment model for a host gas mechanism.

    Args:
        config: Soot model configuration; defaults if None.
        species_names: Host species names, in host order.
        molar_masses: Host species molar masses [kg/kmol].

    Returns:
        SootModel ready for compute_source_terms.

    Raises:
        SootConfigurationError: Invalid setting, unknown mechanism or
            inversion, unresolvable PAH species, or missing required species.
    """
    if config is None:
        config = SootModelConfig()

    n_moments = _validate(EvenMomentCount, config.n_moments, "n_moments")
    rho_soot = _validate(pydantic.PositiveFloat, config.rate_laws.rho_soot, "rho_soot")
    c_min = _validate(pydantic.PositiveFloat, config.rate_laws.c_min, "c_min")
    max_abscissa = _validate(
        pydantic.PositiveFloat, config.quadrature.max_abscissa, "max_abscissa"
    )
    pah_carbon_atoms = _validate(
        tuple[pydantic.PositiveInt, ...], config.pah_carbon_atoms, "pah_carbon_atoms"
    )

    species = build_species_index_table(
        species_names,
        molar_masses,
        pah_species_names=config.pah_species_names,
        pah_carbon_atoms=pah_carbon_atoms,
    )
    rate_laws = build_rate_laws_from_config(config.rate_laws, species=species)
    inversion_fn = build_inversion_fn_from_config(config.quadrature)

    logger.info(
        "Soot model: %d moments, %s inversion, %d PAH species",
        n_moments,
        config.quadrature.inversion,
        species.n_pah,
    )
    return SootModel(
        species=species,
        rate_laws=rate_laws,
        n_moments=n_moments,
        inversion_fn=inversion_fn,
        max_abscissa=max_abscissa,
        rho_soot=rho_soot,
        c_min=c_min,
    )
