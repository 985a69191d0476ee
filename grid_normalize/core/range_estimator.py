"""Robust range estimation by trimmed order statistics.

The lower and upper bounds are found by two independent partial
selections (``numpy.partition``) over the pooled samples rather than a
full sort, so estimation stays linear in the number of samples. Each
selection reorders the buffer it is given.
"""

from dataclasses import dataclass
import math
from typing import Optional
import numpy as np

from grid_normalize.core.errors import EmptyPoolError


@dataclass
class RangeEstimate:
    """Bounds chosen for normalization plus the untrimmed extrema."""
    min: float
    max: float
    real_min: float
    real_max: float
    trim_count: int
    valid_count: int

    @property
    def delta(self) -> float:
        """Width of the normalization range (negative when inverted)."""
        return float(np.float32(self.max) - np.float32(self.min))

    @property
    def inverted(self) -> bool:
        """True when the lower bound lies above the upper bound."""
        return self.min > self.max

    @property
    def degenerate(self) -> bool:
        """True when the range has zero width."""
        return self.min == self.max


def trim_count(valid_count: int, epsilon: float) -> int:
    """Number of samples discarded from each tail: floor(N * epsilon / 2)."""
    return int(math.floor(valid_count * epsilon / 2))


def select_smallest(values: np.ndarray, rank: int) -> float:
    """
    Return the value at ascending sorted position ``rank`` (0-indexed).

    Uses an in-place partial selection; ``values`` is reordered so that only
    the selected element is guaranteed to be in its sorted position.
    """
    values.partition(rank)
    return float(values[rank])


def select_largest(values: np.ndarray, rank: int) -> float:
    """Return the value at descending sorted position ``rank`` (0-indexed).

    Reorders ``values`` in place like :func:`select_smallest`.
    """
    kth = values.size - 1 - rank
    values.partition(kth)
    return float(values[kth])


def estimate_range(values: np.ndarray,
                   epsilon: float = 0.0,
                   min_override: Optional[float] = None,
                   max_override: Optional[float] = None) -> RangeEstimate:
    """
    Estimate the [min, max] range of pooled samples.

    Bounds given as overrides are used verbatim. A derived lower bound is the
    (c+1)-th smallest sample and a derived upper bound the (c+1)-th largest,
    with c = floor(N * epsilon / 2). With c = 0 the derived bounds equal the
    true extrema.

    The derived bounds are not forced into order: a large epsilon can give
    ``min > max``. Callers check ``RangeEstimate.inverted``.

    Args:
        values: Pooled valid samples (float32, reordered in place)
        epsilon: Fraction of samples to trim, split over both tails
        min_override: Explicit lower bound (optional)
        max_override: Explicit upper bound (optional)

    Returns:
        RangeEstimate with chosen bounds and true extrema

    Raises:
        EmptyPoolError: If a bound must be derived from an empty pool
    """
    count = int(values.size)
    c = trim_count(count, epsilon)

    if count == 0:
        if min_override is None or max_override is None:
            raise EmptyPoolError("No valid values to estimate the range from")
        real_min = real_max = float('nan')
    else:
        real_min = float(values.min())
        real_max = float(values.max())

    if min_override is not None:
        lower = float(np.float32(min_override))
    else:
        lower = select_smallest(values, c)

    if max_override is not None:
        upper = float(np.float32(max_override))
    else:
        upper = select_largest(values, c)

    return RangeEstimate(
        min=lower,
        max=upper,
        real_min=real_min,
        real_max=real_max,
        trim_count=c,
        valid_count=count,
    )
