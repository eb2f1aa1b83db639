from scipy import constants

N_A = constants.Avogadro * 1000.0  # [1/kmol]

k = constants.Boltzmann  # [J/K]

R_universal = constants.R * 1000.0  # [J/(kmol K)] universal gas constant

atm = constants.atm  # [Pa]

MW_C = 12.011  # [kg/kmol] carbon

eps_c = 2.2  # [-] van der Waals collision enhancement factor

R_kcal = 1.9872036e-3  # [kcal/(mol K)] gas constant for HACA activation energies
