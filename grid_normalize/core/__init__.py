"""Core range estimation and normalization."""

from grid_normalize.core.errors import (
    NormalizeError,
    ConfigError,
    LoadError,
    SaveError,
    EmptyPoolError,
)
from grid_normalize.core.sample_grid import SampleGrid
from grid_normalize.core.sample_pool import SamplePool, collect_samples, resolve_sources
from grid_normalize.core.range_estimator import RangeEstimate, estimate_range
from grid_normalize.core.range_applier import ApplyResult, apply_range

__all__ = [
    "NormalizeError",
    "ConfigError",
    "LoadError",
    "SaveError",
    "EmptyPoolError",
    "SampleGrid",
    "SamplePool",
    "collect_samples",
    "resolve_sources",
    "RangeEstimate",
    "estimate_range",
    "ApplyResult",
    "apply_range",
]
