"""
Generic result container for PyPolyFit computations.

Every backend returns a Result wrapping its own parameter payload. The
envelope carries the shared pieces (timing, backend identity, non-fatal
warnings) so the solution wrapper and the CLI can treat all backends alike.

Design decisions:
    - Generic over parameter payload P
    - info dict for flexible metadata (method, degree, condition number)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True)
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope.

    Attributes:
        params: Backend-specific payload (coefficients, factors, predictions)
        info: Structured metadata
        timing: Per-stage timing in seconds, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Example:
        >>> Result(
        ...     params=PolynomialParams(...),
        ...     info={'method': 'cholesky', 'degree': 2},
        ...     timing={'total_seconds': 0.001},
        ...     backend_name='cpu_cholesky'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
