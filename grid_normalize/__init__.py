"""
Grid Normalize

Robust rescaling of single-channel float images to [0, 1], using trimmed
minimum/maximum estimates pooled from one or more reference images.
"""

__version__ = "0.1.0"
__author__ = "Grid Normalize Contributors"

__all__ = [
    "normalize_file",
    "normalize_array",
    "NormalizeOptions",
    "estimate_range",
    "apply_range",
]


def __getattr__(name):
    """Lazy import so the CLI starts without loading OpenCV or mrcfile."""
    if name == "normalize_file":
        from grid_normalize.core.pipeline import normalize_file
        return normalize_file
    elif name == "normalize_array":
        from grid_normalize.core.pipeline import normalize_array
        return normalize_array
    elif name == "NormalizeOptions":
        from grid_normalize.config import NormalizeOptions
        return NormalizeOptions
    elif name == "estimate_range":
        from grid_normalize.core.range_estimator import estimate_range
        return estimate_range
    elif name == "apply_range":
        from grid_normalize.core.range_applier import apply_range
        return apply_range
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
