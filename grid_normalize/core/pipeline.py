"""Normalization pipeline: pool sources, estimate the range, rewrite the target."""

from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Optional, Sequence, Tuple
import numpy as np

from grid_normalize.config import NormalizeOptions
from grid_normalize.core.logging_utils import StatusLogger, get_logger
from grid_normalize.core.range_applier import ApplyResult, apply_range
from grid_normalize.core.range_estimator import RangeEstimate, estimate_range
from grid_normalize.core.sample_grid import SampleGrid
from grid_normalize.core.sample_pool import collect_samples, resolve_sources


@dataclass
class NormalizationResult:
    """Everything one normalization run computed."""
    target_name: str
    output_name: Optional[str]
    source_names: Tuple[str, ...]
    total_count: int
    estimate: RangeEstimate
    applied: ApplyResult

    @property
    def valid_count(self) -> int:
        return self.estimate.valid_count

    @property
    def outlier_count(self) -> int:
        return self.applied.outlier_count

    def as_dict(self) -> Dict[str, Any]:
        """Flatten the result for the JSON report."""
        return {
            'input': self.target_name,
            'output': self.output_name,
            'sources': list(self.source_names),
            'total_values': self.total_count,
            'valid_values': self.estimate.valid_count,
            'trim_count': self.estimate.trim_count,
            'real_min': self.estimate.real_min,
            'real_max': self.estimate.real_max,
            'min': self.estimate.min,
            'max': self.estimate.max,
            'outliers': self.applied.outlier_count,
            'outliers_above': self.applied.above_count,
            'outliers_below': self.applied.below_count,
            'disposition': self.applied.disposition,
            'degenerate': self.applied.degenerate_count,
        }


def _memoized(load: Callable[[str], SampleGrid]) -> Callable[[str], SampleGrid]:
    """Wrap a loader so each name is loaded at most once per run."""
    loaded: Dict[str, SampleGrid] = {}

    def load_once(name: str) -> SampleGrid:
        if name not in loaded:
            loaded[name] = load(name)
        return loaded[name]

    return load_once


def run_pipeline(target_name: str,
                 load: Callable[[str], SampleGrid],
                 options: NormalizeOptions,
                 logger: Optional[StatusLogger] = None,
                 output_name: Optional[str] = None) -> Tuple[SampleGrid, NormalizationResult]:
    """
    Normalize the grid ``target_name`` in place.

    Args:
        target_name: Name of the grid to normalize
        load: Callable returning the SampleGrid for a name
        options: Validated normalization options
        logger: Status logger for diagnostics
        output_name: Recorded in the result; nothing is saved here

    Returns:
        Tuple of (rewritten target grid, NormalizationResult)
    """
    logger = logger or get_logger()
    load = _memoized(load)
    source_names = resolve_sources(target_name, options.source_names)

    pool = collect_samples(source_names, load, sentinel=options.ignore_value)
    logger.info(f"{pool.valid_count} valid values")

    estimate = estimate_range(
        pool.values,
        epsilon=options.epsilon,
        min_override=options.min_override,
        max_override=options.max_override,
    )
    logger.stat("Minimal value", estimate.real_min)
    logger.stat("Maximal value", estimate.real_max)
    logger.info(f"Normalizing range {estimate.min:g} - {estimate.max:g}")

    if estimate.inverted:
        logger.warning(
            f"Range is inverted ({estimate.min:g} > {estimate.max:g}); "
            "every valid value is an outlier"
        )

    target = load(target_name)
    applied = apply_range(
        target,
        estimate.min,
        estimate.max,
        sentinel=options.ignore_value,
        clamp=options.clamp,
    )

    if applied.degenerate_count:
        logger.warning(
            f"Range has zero width; {applied.degenerate_count} values "
            f"set to ignore value {options.ignore_value:g}"
        )
    logger.info(f"{applied.disposition.capitalize()} {applied.outlier_count} outliers")

    result = NormalizationResult(
        target_name=target_name,
        output_name=output_name,
        source_names=source_names,
        total_count=pool.total_count,
        estimate=estimate,
        applied=applied,
    )
    return target, result


def normalize_file(input_name: str,
                   output_name: str,
                   options: Optional[NormalizeOptions] = None,
                   store=None,
                   logger: Optional[StatusLogger] = None) -> NormalizationResult:
    """
    Normalize a stored grid and write the result.

    Options are validated before anything is loaded. The target is always
    part of the source set, and each distinct source is loaded once.

    Args:
        input_name: Name of the grid to normalize
        output_name: Name to save the normalized grid under
        options: Normalization options (defaults if None)
        store: Object with ``load(name)`` and ``save(name, grid)``
            (a file-backed GridStore if None)
        logger: Status logger for diagnostics

    Returns:
        NormalizationResult

    Raises:
        ConfigError: If the options are invalid
        LoadError: If any source cannot be loaded
        EmptyPoolError: If no valid values are available
        SaveError: If the output cannot be written
    """
    options = (options or NormalizeOptions()).validate()
    logger = logger or get_logger()

    if store is None:
        from grid_normalize.io.grid_store import GridStore
        store = GridStore()

    target, result = run_pipeline(
        input_name, store.load, options, logger=logger, output_name=output_name
    )

    store.save(output_name, target)
    logger.success(f"Saved normalized image: {output_name}")
    return result


def normalize_array(data: np.ndarray,
                    options: Optional[NormalizeOptions] = None,
                    references: Sequence[np.ndarray] = (),
                    logger: Optional[StatusLogger] = None) -> Tuple[np.ndarray, NormalizationResult]:
    """
    Normalize an in-memory array.

    The input is copied to float32; ``references`` join ``data`` in the
    sample pool. ``options.source_names`` is ignored here.

    Args:
        data: Single-channel samples of any shape
        options: Normalization options (defaults if None)
        references: Additional arrays supplying statistics
        logger: Status logger for diagnostics

    Returns:
        Tuple of (normalized float32 array, NormalizationResult)
    """
    options = (options or NormalizeOptions()).validate()

    grids = {'<input>': SampleGrid('<input>', np.array(data, dtype=np.float32))}
    for i, ref in enumerate(references):
        name = f'<reference {i}>'
        grids[name] = SampleGrid(name, ref)

    array_options = replace(options, source_names=tuple(grids))
    target, result = run_pipeline(
        '<input>', grids.__getitem__, array_options,
        logger=logger or StatusLogger(verbose=False),
    )
    return target.data, result
