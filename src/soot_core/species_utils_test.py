"""Tests for species index resolution and molar mass loading."""

from pathlib import Path

import jax
import jax.numpy as jnp
import pytest

from soot_core import species_utils
from soot_core.species_types import MISSING, SootConfigurationError

jax.config.update("jax_enable_x64", True)

data_dir = Path(__file__).parent.parent.parent / "data"
gas_species_data = data_dir / "gas_species.json"

SPECIES_NAMES = ["N2", "C2H2", "O2", "H", "H2", "OH", "H2O", "CO", "C10H8"]


@pytest.fixture
def molar_masses():
    return species_utils.load_gas_species_from_json(gas_species_data, SPECIES_NAMES)


class TestResolveSpeciesIndex:
    def test_exact_match(self):
        """Exact names resolve to their host index."""
        assert species_utils.resolve_species_index(["N2", "C2H2"], "C2H2") == 1

    def test_case_insensitive_fallback(self):
        """Lower-case names fall back to a case-insensitive match."""
        assert species_utils.resolve_species_index(["n2", "c2h2"], "C2H2") == 1

    def test_exact_match_wins_over_case_insensitive(self):
        """An exact match is preferred even if a differently-cased name comes first."""
        assert species_utils.resolve_species_index(["oh", "OH"], "OH") == 1

    def test_missing_species(self):
        """Unknown names resolve to the sentinel."""
        assert species_utils.resolve_species_index(["N2"], "C2H2") == MISSING


class TestLoadGasSpecies:
    def test_molar_masses(self, molar_masses):
        """Molar masses are returned in the requested order."""
        assert molar_masses.shape == (len(SPECIES_NAMES),)
        assert jnp.isclose(molar_masses[1], 26.038)
        assert jnp.isclose(molar_masses[-1], 128.17)

    def test_missing_species_raises(self):
        """A species absent from the data file is an error."""
        with pytest.raises(SootConfigurationError, match="XYZ"):
            species_utils.load_gas_species_from_json(gas_species_data, ["N2", "XYZ"])

    def test_carbon_atoms(self):
        """PAH carbon counts come from the same data file as the molar masses."""
        carbon_atoms = species_utils.load_carbon_atoms_from_json(
            gas_species_data, ["C10H8", "C16H10", "C2H2", "O2"]
        )
        assert carbon_atoms == (10, 16, 2, 0)

    def test_carbon_atoms_missing_species_raises(self):
        """A PAH absent from the data file is an error."""
        with pytest.raises(SootConfigurationError, match="C24H12"):
            species_utils.load_carbon_atoms_from_json(gas_species_data, ["C24H12"])


class TestBuildSpeciesIndexTable:
    def test_indices(self, molar_masses):
        """Canonical species map to their host indices."""
        table = species_utils.build_species_index_table(SPECIES_NAMES, molar_masses)

        assert table.c2h2 == 1
        assert table.co == 7
        assert table.pah == ()
        assert table.n_species == len(SPECIES_NAMES)

    def test_optional_species_missing(self):
        """Optional species absent from the host get the sentinel."""
        table = species_utils.build_species_index_table(["N2", "C2H2"], [28.014, 26.038])

        assert table.o2 == MISSING
        assert not table.has("O2")
        assert table.has("C2H2")
        with pytest.raises(SootConfigurationError, match="O2"):
            table.molar_mass("O2")

    def test_pah_species(self, molar_masses):
        """PAH indices and carbon counts are stored in order."""
        table = species_utils.build_species_index_table(
            SPECIES_NAMES, molar_masses, ["C10H8"], [10]
        )

        assert table.pah == (8,)
        assert table.pah_carbon_atoms == (10,)
        assert table.n_pah == 1

    def test_invalid_pah_species_raises(self, molar_masses):
        """An unresolvable PAH name is an error."""
        with pytest.raises(SootConfigurationError, match="Invalid PAH species 'C12H8'"):
            species_utils.build_species_index_table(
                SPECIES_NAMES, molar_masses, ["C12H8"], [12]
            )

    def test_pah_count_mismatch_raises(self, molar_masses):
        """Each PAH needs a carbon count."""
        with pytest.raises(SootConfigurationError, match="PAH carbon counts"):
            species_utils.build_species_index_table(
                SPECIES_NAMES, molar_masses, ["C10H8"], [10, 12]
            )

    def test_molar_mass_count_mismatch_raises(self):
        """Each species needs a molar mass."""
        with pytest.raises(SootConfigurationError, match="molar masses"):
            species_utils.build_species_index_table(["N2", "C2H2"], [28.014])


class TestRequireSpecies:
    def test_present(self, molar_masses):
        """Present species pass the check."""
        table = species_utils.build_species_index_table(SPECIES_NAMES, molar_masses)
        species_utils.require_species(table, ("C2H2", "H2"), "test")

    def test_missing_raises(self):
        """Missing species are named in the error."""
        table = species_utils.build_species_index_table(["N2", "C2H2"], [28.014, 26.038])
        with pytest.raises(SootConfigurationError, match="H2"):
            species_utils.require_species(table, ("C2H2", "H2"), "growth model 'll'")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
