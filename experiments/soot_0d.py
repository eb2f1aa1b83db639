"""Zero-dimensional soot formation at a fixed gas temperature and pressure.

Starting from a particle-free acetylene/naphthalene mixture, soot nucleates
from PAH dimers, takes up PAH by condensation, grows by HACA, oxidizes and
coagulates. Moments and gas mass fractions are advanced with forward Euler.
The number density should rise and then fall as coagulation takes over, while
the mean particle mass increases monotonically.
"""

from pathlib import Path

import jax
import jax.numpy as jnp
import matplotlib.pyplot as plt
import numpy as np

from soot_core import (
    RateLawsConfig,
    constants,
    load_carbon_atoms_from_json,
    load_gas_species_from_json,
    make_gas_state,
)
from soot_qmom import SootModelConfig, build_soot_model, compute_source_terms
from soot_qmom.diagnose import check_source_terms, log_quadrature
from soot_qmom.quadrature_types import QuadratureConfig

jax.config.update("jax_enable_x64", True)

print("=" * 80)
print("0D Soot Formation: QMOM with 6 moments")
print("=" * 80)

data_path = Path(__file__).parent.parent / "data" / "gas_species.json"
species_names = ["C2H2", "O2", "H", "H2", "OH", "H2O", "CO", "N2", "C10H8"]
molar_masses = load_gas_species_from_json(data_path, species_names)
pah_species_names = ("C10H8",)
pah_carbon_atoms = load_carbon_atoms_from_json(data_path, pah_species_names)

config = SootModelConfig(
    n_moments=6,
    pah_species_names=pah_species_names,
    pah_carbon_atoms=pah_carbon_atoms,
    rate_laws=RateLawsConfig(
        nucleation="pah",
        growth="haca",
        oxidation="nsc_neoh",
        coagulation="fuchs",
    ),
    quadrature=QuadratureConfig(inversion="wheeler"),
)
model = build_soot_model(config, species_names=species_names, molar_masses=molar_masses)

# Gas state (fixed T, P, rho; composition evolves)
T = 1800.0
P = 101325.0
MW = 28.0
rho = P * MW / (constants.R_universal * T)
y = jnp.array([0.05, 0.005, 1e-4, 0.01, 1e-3, 0.05, 0.05, 0.0, 1e-3])
y = y.at[7].set(1.0 - jnp.sum(y))

print("\nGas state:")
print(f"  T = {T:.1f} K, P = {P:.0f} Pa, ρ = {rho:.4f} kg/m³")
print(f"  Y_C2H2 = {y[0]:.3f}, Y_O2 = {y[1]:.3f}, Y_C10H8 = {y[8]:.1e}")

end_time = 10e-3
dt = 2e-6
n_steps = int(end_time / dt)

print("\nTime integration:")
print(f"  End time: {end_time:.2e} s")
print(f"  Time step: {dt:.2e} s")
print(f"  Number of steps: {n_steps}")


@jax.jit
def step(moments, y):
    gas = make_gas_state(T=T, P=P, rho=rho, MW=MW, mu=6.0e-5, y=y)
    source_terms = compute_source_terms(moments, gas, model)
    moments = jnp.maximum(moments + dt * source_terms.moment_sources, 0.0)
    y = jnp.clip(y + dt * source_terms.gas_sources, 0.0, 1.0)
    return moments, y, source_terms


moments = jnp.zeros(config.n_moments)
time_history = [0.0]
M0_history = [0.0]
M1_history = [0.0]
y_C2H2_history = [float(y[0])]
y_C10H8_history = [float(y[8])]

print("\nIntegrating...")
for i in range(n_steps):
    moments, y, source_terms = step(moments, y)

    if i % (n_steps // 10) == 0:
        check_source_terms(source_terms)
        log_quadrature(source_terms.nodes)
        print(
            f"  Step {i}/{n_steps}: M0 = {moments[0]:.3e} #/m³, "
            f"M1 = {moments[1]:.3e} kg/m³, order = {int(source_terms.nodes.order)}"
        )

    time_history.append((i + 1) * dt)
    M0_history.append(float(moments[0]))
    M1_history.append(float(moments[1]))
    y_C2H2_history.append(float(y[0]))
    y_C10H8_history.append(float(y[8]))

print("\nIntegration complete!")

time_history = np.asarray(time_history)
M0_history = np.asarray(M0_history)
M1_history = np.asarray(M1_history)
mean_mass = np.where(M0_history > 0.0, M1_history / np.maximum(M0_history, 1.0), 0.0)
fv = M1_history / model.rho_soot

print("\nFinal state:")
print(f"  M0 = {M0_history[-1]:.3e} #/m³")
print(f"  fv = {fv[-1]:.3e} (soot volume fraction)")
print(f"  mean particle mass = {mean_mass[-1]:.3e} kg")
print(f"  Y_C2H2 = {y_C2H2_history[-1]:.5f}, Y_C10H8 = {y_C10H8_history[-1]:.3e}")

fig, (ax1, ax2, ax3) = plt.subplots(3, 1, figsize=(10, 10))

ax1.plot(time_history * 1e3, M0_history, linewidth=2)
ax1.set_xlabel("Time [ms]")
ax1.set_ylabel("M0 [#/m³]")
ax1.set_title("Soot Number Density")
ax1.grid(True, alpha=0.3)

ax2.plot(time_history * 1e3, fv, linewidth=2)
ax2.set_xlabel("Time [ms]")
ax2.set_ylabel("fv [-]")
ax2.set_title("Soot Volume Fraction")
ax2.grid(True, alpha=0.3)

ax3.semilogy(time_history * 1e3, y_C2H2_history, label="Y_C2H2", linewidth=2)
ax3.semilogy(time_history * 1e3, y_C10H8_history, label="Y_C10H8", linewidth=2)
ax3.set_xlabel("Time [ms]")
ax3.set_ylabel("Mass Fraction")
ax3.set_title("Acetylene and PAH Consumption")
ax3.legend()
ax3.grid(True, alpha=0.3)

plt.tight_layout()
output_path = Path(__file__).parent / "soot_0d_results.png"
plt.savefig(output_path, dpi=150)
print(f"\nPlot saved to: {output_path}")

plt.show()

print("\n" + "=" * 80)
print("0D Soot Formation Complete!")
print("=" * 80)
