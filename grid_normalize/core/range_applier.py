"""Linear mapping of a grid onto [0, 1] with outlier handling."""

from dataclasses import dataclass
import numpy as np

from grid_normalize.core.sample_grid import SampleGrid
from grid_normalize.core.sample_pool import sentinel_mask


@dataclass
class ApplyResult:
    """Per-class sample counts from one pass over the target grid."""
    above_count: int
    below_count: int
    degenerate_count: int
    clamped: bool

    @property
    def outlier_count(self) -> int:
        """Non-sentinel samples that fell outside [min, max]."""
        return self.above_count + self.below_count

    @property
    def disposition(self) -> str:
        """How outliers were resolved: "clamped" or "removed"."""
        return "clamped" if self.clamped else "removed"


def apply_range(grid: SampleGrid,
                lower: float,
                upper: float,
                sentinel: float = -1.0,
                clamp: bool = False) -> ApplyResult:
    """
    Rewrite a grid in place, mapping [lower, upper] linearly onto [0, 1].

    Sentinel samples are left untouched. Samples above ``upper`` become 1.0
    (clamp) or the sentinel; every other sample outside the range, NaN
    included, becomes 0.0 (clamp) or the sentinel.

    A zero-width range has no defined scale: the samples equal to both
    bounds are set to the sentinel and reported in ``degenerate_count``.
    An inverted range (``lower > upper``) contains no samples, so every
    non-sentinel sample is an outlier.

    Args:
        grid: Target grid, modified in place
        lower: Value mapped to 0.0
        upper: Value mapped to 1.0
        sentinel: The "no data" value
        clamp: Saturate outliers instead of replacing them with the sentinel

    Returns:
        ApplyResult with outlier and degenerate counts
    """
    lo = np.float32(lower)
    hi = np.float32(upper)
    delta = hi - lo
    fill = np.float32(sentinel)

    values = grid.values
    candidates = ~sentinel_mask(values, sentinel)

    # Classify against the original values before anything is written
    in_range = candidates & (values >= lo) & (values <= hi)
    above = candidates & ~in_range & (values > hi)
    below = candidates & ~in_range & ~above

    degenerate_count = 0
    if delta > 0:
        values[in_range] = (values[in_range] - lo) / delta
    else:
        degenerate_count = int(np.count_nonzero(in_range))
        values[in_range] = fill

    values[above] = np.float32(1.0) if clamp else fill
    values[below] = np.float32(0.0) if clamp else fill

    return ApplyResult(
        above_count=int(np.count_nonzero(above)),
        below_count=int(np.count_nonzero(below)),
        degenerate_count=degenerate_count,
        clamped=clamp,
    )
