from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Sequence

import jax.numpy as jnp
from jaxtyping import Array, Float

from soot_core.species_types import (
    GAS_SPECIES,
    MISSING,
    SootConfigurationError,
    SpeciesIndexTable,
)

logger = logging.getLogger(__name__)


def resolve_species_index(species_names: Sequence[str], name: str) -> int:
    """Find a species in the host list, exact match first, then ignoring case.

    Returns:
        Host index of the species, or MISSING if it is not present.
    """
    names = list(species_names)
    if name in names:
        return names.index(name)

    lowered = [entry.lower() for entry in names]
    if name.lower() in lowered:
        index = lowered.index(name.lower())
        logger.debug(
            "Resolved species '%s' to host species '%s' ignoring case.",
            name,
            names[index],
        )
        return index

    return MISSING


def build_species_index_table(
    species_names: Sequence[str],
    molar_masses: Sequence[float] | Float[Array, " n_species"],
    pah_species_names: Sequence[str] = (),
    pah_carbon_atoms: Sequence[int] = (),
) -> SpeciesIndexTable:
    """Resolve the soot-relevant species against the host species list.

    Canonical gas species that are absent map to MISSING. PAH species are
    always required: every configured PAH name must resolve.
    """
    names = tuple(species_names)
    molar_masses = jnp.asarray(molar_masses, dtype=float)
    if molar_masses.shape != (len(names),):
        raise SootConfigurationError(
            f"Got {molar_masses.shape[0]} molar masses for {len(names)} species."
        )
    if len(pah_species_names) != len(pah_carbon_atoms):
        raise SootConfigurationError(
            f"Got {len(pah_carbon_atoms)} PAH carbon counts for "
            f"{len(pah_species_names)} PAH species."
        )

    indices = {
        name.lower(): resolve_species_index(names, name) for name in GAS_SPECIES
    }

    pah_indices = []
    for pah_name in pah_species_names:
        # PAH names are taken verbatim from the configuration.
        if pah_name not in names:
            raise SootConfigurationError(
                f"Invalid PAH species '{pah_name}': not found in the gas mechanism. "
                f"Available species: {names}"
            )
        pah_indices.append(names.index(pah_name))

    missing = [name for name in GAS_SPECIES if indices[name.lower()] == MISSING]
    if missing:
        logger.debug("Soot species not present in gas mechanism: %s", missing)

    return SpeciesIndexTable(
        names=names,
        molar_masses=molar_masses,
        pah=tuple(pah_indices),
        pah_carbon_atoms=tuple(int(n_c) for n_c in pah_carbon_atoms),
        **indices,
    )


def require_species(
    species: SpeciesIndexTable, required: Sequence[str], context: str
) -> None:
    """Raise if any canonical species needed by a mechanism is unresolved."""
    missing = [name for name in required if not species.has(name)]
    if missing:
        raise SootConfigurationError(
            f"{context} requires species {missing}, which are not in the gas "
            f"mechanism {species.names}."
        )


def _load_species_entries(
    json_path: str | Path, species_names: Sequence[str]
) -> list[dict]:
    raw_data = json.loads(Path(json_path).read_text(encoding="utf-8"))
    entries = {entry["name"]: entry for entry in raw_data}

    missing = [name for name in species_names if name not in entries]
    if missing:
        raise SootConfigurationError(f"Species not found in data: {missing}")

    return [entries[name] for name in species_names]


def load_gas_species_from_json(
    json_path: str | Path, species_names: Sequence[str]
) -> Float[Array, " n_species"]:
    """Load molar masses [kg/kmol] for the given species from a JSON list.

    Each entry holds at least "name" and "molar_mass" (kg/kmol).
    """
    entries = _load_species_entries(json_path, species_names)
    return jnp.array([float(entry["molar_mass"]) for entry in entries])


def load_carbon_atoms_from_json(
    json_path: str | Path, species_names: Sequence[str]
) -> tuple[int, ...]:
    """Carbon atoms per molecule, e.g. for the PAH species of a soot model."""
    entries = _load_species_entries(json_path, species_names)
    return tuple(int(entry["carbon_atoms"]) for entry in entries)
