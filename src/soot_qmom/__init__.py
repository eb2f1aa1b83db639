"""Quadrature method of moments (QMOM) closure for soot.

Key components:
- moment_inversion: Wheeler and product-difference moment inversion
- quadrature: Realizable quadrature with order reduction, fractional moments
- source_terms: Moment and gas-species source terms
- soot_model_utils: Model construction from configuration
"""

from soot_qmom.quadrature import compute_quadrature_nodes, fractional_moment
from soot_qmom.quadrature_types import QuadratureConfig, QuadratureNodes
from soot_qmom.soot_model_utils import build_soot_model
from soot_qmom.source_terms import compute_source_terms
from soot_qmom.source_terms_types import SootModel, SootModelConfig, SootSourceTerms

__all__ = [
    "QuadratureConfig",
    "QuadratureNodes",
    "SootModel",
    "SootModelConfig",
    "SootSourceTerms",
    "build_soot_model",
    "compute_quadrature_nodes",
    "compute_source_terms",
    "fractional_moment",
]
