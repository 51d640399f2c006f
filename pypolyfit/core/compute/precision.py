"""
Buffer allocation and conditioning diagnostics.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Any, Literal

from pypolyfit.core.exceptions import AllocationError


def allocate(
    shape: tuple[int, ...],
    name: str,
    order: Literal['C', 'F'] = 'F',
) -> NDArray[np.floating[Any]]:
    """
    Allocate an uninitialized float64 buffer.

    Args:
        shape: Array shape
        name: Buffer name for error messages
        order: Memory layout; matrices default to column-major

    Raises:
        AllocationError: If the buffer cannot be allocated, either because
            memory runs out or because the shape exceeds what numpy can index
    """
    try:
        return np.empty(shape, dtype=np.float64, order=order)
    except (MemoryError, ValueError, OverflowError) as e:
        raise AllocationError(
            f"cannot allocate {name} with shape {shape}", shape=tuple(shape)
        ) from e


def condition_number(A: NDArray[np.floating[Any]]) -> float:
    """
    Condition number of a matrix from its singular values.

    Returns inf if the matrix is singular.
    """
    s = np.linalg.svd(A, compute_uv=False)
    if s[-1] == 0:
        return float('inf')
    return float(s[0] / s[-1])
