"""
Shared compute infrastructure for PyPolyFit.

Timing, tolerance tiers, buffer allocation and the linear algebra kernels
used by the polynomial backends. Domain backends live in
polynomial/backends/, not here.

Submodules:
    timing: Execution timing utilities
    tolerances: Tolerance tiers for numerical comparison
    precision: Buffer allocation, condition numbers
    linalg: LinearAlgebra kernels (LAPACK, reference, torch)
"""

from pypolyfit.core.compute.timing import Timer

__all__ = [
    "Timer",
]
