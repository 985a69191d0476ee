"""Pooling of valid samples across reference grids."""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Tuple
import numpy as np

from grid_normalize.core.errors import LoadError
from grid_normalize.core.sample_grid import SampleGrid


@dataclass
class SamplePool:
    """Combined buffer of valid samples from every distinct source.

    ``values`` is owned by the pool and may be reordered by whoever
    consumes it; its order carries no meaning.
    """
    values: np.ndarray
    total_count: int
    valid_count: int
    source_names: Tuple[str, ...]


def sentinel_mask(values: np.ndarray, sentinel: float) -> np.ndarray:
    """
    Boolean mask of samples equal to the sentinel.

    Equality is exact and evaluated in single precision. A NaN sentinel
    matches NaN samples, since NaN never compares equal to itself.

    Args:
        values: Float32 samples
        sentinel: The "no data" value

    Returns:
        Boolean array, True where the sample is the sentinel
    """
    sentinel = np.float32(sentinel)
    if np.isnan(sentinel):
        return np.isnan(values)
    return values == sentinel


def resolve_sources(target_name: str,
                    source_names: Optional[Iterable[str]] = None) -> Tuple[str, ...]:
    """
    Build the source set for a target grid.

    Duplicate names collapse to one entry (first occurrence order is kept)
    and the target is always a member. With no names given, the target
    alone supplies the statistics.

    Args:
        target_name: Name of the grid being normalized
        source_names: Reference grid names (may contain duplicates)

    Returns:
        Tuple of distinct source names
    """
    names = list(source_names or [])
    names.append(target_name)
    return tuple(dict.fromkeys(names))


def collect_samples(source_names: Iterable[str],
                    load: Callable[[str], SampleGrid],
                    sentinel: float = -1.0) -> SamplePool:
    """
    Pool all finite, non-sentinel samples from the given sources.

    Every distinct source is loaded before any sample is copied, so a
    failing source aborts without producing a partial pool. The buffer is
    allocated once from the summed element counts.

    Args:
        source_names: Names of the grids supplying statistics
        load: Callable returning the SampleGrid for a name
        sentinel: The "no data" value to skip

    Returns:
        SamplePool with the combined buffer and counts

    Raises:
        LoadError: If any source cannot be loaded
    """
    names = tuple(dict.fromkeys(source_names))

    grids = []
    for name in names:
        try:
            grids.append(load(name))
        except LoadError:
            raise
        except Exception as e:
            raise LoadError(f"Could not load image {name}: {e}") from e

    total_count = sum(grid.element_count() for grid in grids)
    buffer = np.empty(total_count, dtype=np.float32)

    filled = 0
    for grid in grids:
        values = grid.values
        # NaN and inf carry no range information
        valid = values[~sentinel_mask(values, sentinel) & np.isfinite(values)]
        buffer[filled:filled + valid.size] = valid
        filled += valid.size

    return SamplePool(
        values=buffer[:filled],
        total_count=total_count,
        valid_count=filled,
        source_names=names,
    )
