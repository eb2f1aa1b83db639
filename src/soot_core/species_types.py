from __future__ import annotations

from dataclasses import dataclass, field

import jax
import jax.numpy as jnp
import jaxtyping as jt
from jaxtyping import Array, Float

# Sentinel index for optional species that are not part of the host mechanism.
MISSING = -1

# Canonical gas species used by the soot rate laws, in lookup order.
GAS_SPECIES = ("C2H2", "O2", "H", "H2", "OH", "H2O", "CO")


class SootConfigurationError(ValueError):
    """Raised when a soot model cannot be built from the given configuration."""


@jax.tree_util.register_dataclass
@dataclass(frozen=True)
class GasState:
    """Local gas state seen by the soot rate laws.

    The soot model never owns gas properties; the host evaluates them and
    passes a fresh GasState with every call.
    """

    T: Float[jt.Array, ""]  # [K]
    P: Float[jt.Array, ""]  # [Pa]
    rho: Float[jt.Array, ""]  # [kg/m^3]
    MW: Float[jt.Array, ""]  # [kg/kmol] mean molecular weight
    mu: Float[jt.Array, ""]  # [Pa s] dynamic viscosity
    y: Float[jt.Array, " n_species"]  # [-] mass fractions, host ordering


def make_gas_state(T, P, rho, MW, mu, y) -> GasState:
    """Build a GasState from python or array scalars."""
    return GasState(
        T=jnp.asarray(T, dtype=float),
        P=jnp.asarray(P, dtype=float),
        rho=jnp.asarray(rho, dtype=float),
        MW=jnp.asarray(MW, dtype=float),
        mu=jnp.asarray(mu, dtype=float),
        y=jnp.asarray(y, dtype=float),
    )


@jax.tree_util.register_dataclass
@dataclass(frozen=True)
class SpeciesIndexTable:
    """Resolved positions of the soot-relevant species in the host species array.

    Attributes:
        names: Host species names, in host order.
        molar_masses: Host species molar masses [kg/kmol].
        c2h2, o2, h, h2, oh, h2o, co: Host indices, MISSING if not present.
        pah: Host indices of the configured PAH species.
        pah_carbon_atoms: Number of carbon atoms per PAH molecule.
    """

    names: tuple[str, ...] = field(metadata=dict(static=True))
    molar_masses: Float[Array, " n_species"]  # [kg/kmol]
    c2h2: int = field(default=MISSING, metadata=dict(static=True))
    o2: int = field(default=MISSING, metadata=dict(static=True))
    h: int = field(default=MISSING, metadata=dict(static=True))
    h2: int = field(default=MISSING, metadata=dict(static=True))
    oh: int = field(default=MISSING, metadata=dict(static=True))
    h2o: int = field(default=MISSING, metadata=dict(static=True))
    co: int = field(default=MISSING, metadata=dict(static=True))
    pah: tuple[int, ...] = field(default=(), metadata=dict(static=True))
    pah_carbon_atoms: tuple[int, ...] = field(default=(), metadata=dict(static=True))

    def __post_init__(self):
        n_sp = len(self.names)
        assert self.molar_masses.shape == (
            n_sp,
        ), f"molar_masses shape {self.molar_masses.shape} != ({n_sp},)"
        assert len(self.pah) == len(
            self.pah_carbon_atoms
        ), f"{len(self.pah)} PAH indices but {len(self.pah_carbon_atoms)} carbon counts"

    @property
    def n_species(self) -> int:
        """Number of host species."""
        return len(self.names)

    @property
    def n_pah(self) -> int:
        """Number of configured PAH species."""
        return len(self.pah)

    def index_of(self, canonical_name: str) -> int:
        """Resolved host index of a canonical species, e.g. "C2H2"."""
        return getattr(self, canonical_name.lower())

    def has(self, canonical_name: str) -> bool:
        return self.index_of(canonical_name) != MISSING

    def molar_mass(self, canonical_name: str) -> Float[Array, ""]:
        """Molar mass [kg/kmol] of a resolved canonical species."""
        index = self.index_of(canonical_name)
        if index == MISSING:
            raise SootConfigurationError(
                f"Species '{canonical_name}' is not present in the gas mechanism."
            )
        return self.molar_masses[index]
