"""
Tolerance tiers for numerical comparison.

The normal equations square the condition number of the design matrix,
so results are compared against tiers rather than exact values:

- CPU FP64: LAPACK and the reference kernel agree to near machine precision
- GPU FP64: same as CPU
- GPU FP32: relaxed for single-precision arithmetic

Used by the test suite and by the condition-number warning in the backends.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-10,
    name='cpu_fp64',
    description='CPU double precision',
)

GPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-10,
    name='gpu_fp64',
    description='GPU double precision, matches CPU reference',
)

GPU_FP32 = ToleranceTier(
    rtol=1e-3,
    atol=1e-4,
    name='gpu_fp32',
    description='GPU single precision',
)

# cond(A) = cond(X)^2. Past 1e12 a double-precision Cholesky solve keeps
# only a handful of correct digits.
CONDITION_WARNING_THRESHOLD = 1e12


def select_tolerance(backend_name: str) -> ToleranceTier:
    """Select the tolerance tier for a given backend name."""
    if 'gpu' in backend_name:
        if 'fp64' in backend_name:
            return GPU_FP64
        return GPU_FP32
    return CPU_FP64
