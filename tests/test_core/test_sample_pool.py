"""Tests for sample grid and sample pool modules."""

import pytest
import numpy as np

from grid_normalize.core.errors import LoadError
from grid_normalize.core.sample_grid import SampleGrid
from grid_normalize.core.sample_pool import (
    collect_samples,
    resolve_sources,
    sentinel_mask,
)


class TestSampleGrid:
    """Tests for SampleGrid container."""

    def test_converts_to_float32(self):
        """Test that integer input is stored as float32."""
        grid = SampleGrid("g", np.arange(6, dtype=np.uint16).reshape(2, 3))
        assert grid.data.dtype == np.float32
        assert grid.shape == (2, 3)

    def test_element_access(self):
        """Test positional get/set in flat index order."""
        grid = SampleGrid("g", np.array([[1.0, 2.0], [3.0, 4.0]]))
        assert grid.element_count() == 4
        assert grid.get(2) == 3.0
        grid.set(3, 9.5)
        assert grid.data[1, 1] == 9.5

    def test_values_is_writable_view(self):
        """Test that writes through values reach the 2D data."""
        grid = SampleGrid("g", np.zeros((3, 3)))
        grid.values[4] = 1.0
        assert grid.data[1, 1] == 1.0

    def test_read_only_input_is_copied(self):
        """Test that a read-only array becomes writable."""
        data = np.ones(4, dtype=np.float32)
        data.flags.writeable = False
        grid = SampleGrid("g", data)
        grid.set(0, 2.0)
        assert data[0] == 1.0


class TestSentinelMask:
    """Tests for sentinel_mask function."""

    def test_exact_equality(self):
        """Test that only exact matches are flagged."""
        values = np.array([-1.0, -1.0000001, -0.9999999, 0.0], dtype=np.float32)
        mask = sentinel_mask(values, -1.0)
        assert mask.tolist() == [True, False, False, False]

    def test_nan_sentinel(self):
        """Test that a NaN sentinel matches NaN samples."""
        values = np.array([np.nan, 1.0, np.nan], dtype=np.float32)
        assert sentinel_mask(values, float('nan')).tolist() == [True, False, True]


class TestResolveSources:
    """Tests for resolve_sources function."""

    def test_default_is_target_only(self):
        """Test that no names means the target alone."""
        assert resolve_sources("in.pfm") == ("in.pfm",)

    def test_target_always_included(self):
        """Test that the target joins an explicit list."""
        assert resolve_sources("in.pfm", ["a.pfm", "b.pfm"]) == ("a.pfm", "b.pfm", "in.pfm")

    def test_duplicates_collapse(self):
        """Test that repeated names appear once, in first-seen order."""
        names = resolve_sources("in.pfm", ["b.pfm", "in.pfm", "b.pfm", "a.pfm"])
        assert names == ("b.pfm", "in.pfm", "a.pfm")


class TestCollectSamples:
    """Tests for collect_samples function."""

    def test_skips_sentinel(self, sentinel_grid):
        """Test that ignore values are left out of the pool."""
        pool = collect_samples(["s"], lambda name: sentinel_grid, sentinel=-1.0)
        assert pool.total_count == 12
        assert pool.valid_count == 9
        assert sorted(pool.values.tolist()) == [2, 4, 6, 8, 10, 12, 14, 16, 18]

    def test_pools_all_sources(self, store_factory):
        """Test that values from every source end up in one buffer."""
        store = store_factory({
            "a": [1.0, 2.0, -1.0],
            "b": [3.0, -1.0],
        })
        pool = collect_samples(["a", "b"], store.load)
        assert pool.total_count == 5
        assert pool.valid_count == 3
        assert sorted(pool.values.tolist()) == [1.0, 2.0, 3.0]
        assert pool.source_names == ("a", "b")

    def test_duplicate_names_counted_once(self, store_factory):
        """Test that a source listed twice contributes its values once."""
        store = store_factory({"a": [1.0, 2.0], "b": [5.0]})
        once = collect_samples(["a", "b"], store.load)
        twice = collect_samples(["a", "b", "a"], store.load)
        assert twice.valid_count == once.valid_count
        assert sorted(twice.values.tolist()) == sorted(once.values.tolist())

    def test_custom_sentinel(self):
        """Test that a non-default ignore value is honored."""
        grid = SampleGrid("g", np.array([0.0, 5.0, 0.0, 7.0]))
        pool = collect_samples(["g"], lambda name: grid, sentinel=0.0)
        assert sorted(pool.values.tolist()) == [5.0, 7.0]

    def test_sources_are_not_modified(self, sentinel_grid):
        """Test that pooling leaves the source grids unchanged."""
        before = sentinel_grid.data.copy()
        pool = collect_samples(["s"], lambda name: sentinel_grid)
        pool.values.sort()
        np.testing.assert_array_equal(sentinel_grid.data, before)

    def test_all_sentinel_gives_empty_pool(self):
        """Test pooling a grid holding only ignore values."""
        grid = SampleGrid("g", np.full(4, -1.0))
        pool = collect_samples(["g"], lambda name: grid)
        assert pool.valid_count == 0
        assert pool.values.size == 0
        assert pool.total_count == 4

    def test_load_error_propagates(self, store_factory):
        """Test that a missing source aborts pooling."""
        store = store_factory({"a": [1.0]})
        with pytest.raises(LoadError):
            collect_samples(["a", "missing"], store.load)

    def test_loader_exception_wrapped(self):
        """Test that arbitrary loader failures become LoadError."""
        def broken(name):
            raise RuntimeError("disk on fire")

        with pytest.raises(LoadError, match="disk on fire"):
            collect_samples(["a"], broken)

    def test_non_finite_values_skipped(self):
        """Test that NaN and inf samples stay out of the pool."""
        grid = SampleGrid("g", np.array([1.0, np.nan, 2.0, np.inf, -np.inf, -1.0]))
        pool = collect_samples(["g"], lambda name: grid)
        assert pool.total_count == 6
        assert pool.valid_count == 2
        assert sorted(pool.values.tolist()) == [1.0, 2.0]
