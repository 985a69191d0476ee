"""Shared pytest fixtures for Grid Normalize tests."""

import pytest
import numpy as np
from pathlib import Path
import tempfile

from grid_normalize.core.sample_grid import SampleGrid


# =============================================================================
# Grid Fixtures
# =============================================================================

@pytest.fixture
def ramp_values():
    """The values 1..100 as float32, in shuffled order."""
    rng = np.random.default_rng(7)
    values = np.arange(1, 101, dtype=np.float32)
    rng.shuffle(values)
    return values


@pytest.fixture
def ramp_grid(ramp_values):
    """10x10 grid holding 1..100 with no sentinel."""
    return SampleGrid("ramp", ramp_values.reshape(10, 10))


@pytest.fixture
def sentinel_grid():
    """Grid with ignore values (-1.0) scattered among valid samples."""
    data = np.array([
        [-1.0, 2.0, 4.0, 6.0],
        [8.0, -1.0, 10.0, 12.0],
        [14.0, 16.0, 18.0, -1.0],
    ], dtype=np.float32)
    return SampleGrid("with_sentinel", data)


@pytest.fixture
def noisy_image():
    """512x512 float image with a few extreme hot and cold pixels."""
    rng = np.random.default_rng(42)
    image = rng.normal(100.0, 10.0, (512, 512)).astype(np.float32)
    image[0, :20] = 1e6
    image[1, :20] = -1e6
    image[5, 5] = -1.0
    return image


class DictStore:
    """In-memory grid store that records every load and save."""

    def __init__(self, arrays):
        self.arrays = {name: np.asarray(a, dtype=np.float32) for name, a in arrays.items()}
        self.loads = []
        self.saved = {}

    def load(self, name):
        from grid_normalize.core.errors import LoadError
        self.loads.append(name)
        if name not in self.arrays:
            raise LoadError(f"File not found: {name}")
        return SampleGrid(name, self.arrays[name].copy())

    def save(self, name, grid):
        self.saved[name] = grid.data.copy()


@pytest.fixture
def store_factory():
    """Factory building an in-memory store from a name -> array mapping."""
    return DictStore


@pytest.fixture
def dict_store(ramp_values):
    """In-memory store holding a ramp target and two reference grids."""
    return DictStore({
        "target": ramp_values,
        "wide": np.array([-50.0, 0.0, 500.0, -1.0], dtype=np.float32),
        "narrow": np.array([40.0, 60.0], dtype=np.float32),
    })


# =============================================================================
# File System Fixtures
# =============================================================================

@pytest.fixture
def temp_output_dir():
    """Create temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def ramp_npy(temp_output_dir, ramp_values):
    """Ramp grid saved as a NumPy file."""
    path = temp_output_dir / "ramp.npy"
    np.save(path, ramp_values.reshape(10, 10))
    return path


@pytest.fixture
def temp_config_file(temp_output_dir):
    """Create a temporary config YAML file."""
    import yaml
    config_path = temp_output_dir / "config.yaml"
    with open(config_path, 'w') as f:
        yaml.dump({
            'normalization': {
                'epsilon': 0.1,
                'clamp': True,
            },
        }, f)
    return config_path


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Keep GRIDNORM_* variables from the environment out of the tests."""
    for var in ("GRIDNORM_EPSILON", "GRIDNORM_IGNORE_VALUE", "GRIDNORM_CLAMP",
                "GRIDNORM_MINIMUM", "GRIDNORM_MAXIMUM", "GRIDNORM_REPORT"):
        monkeypatch.delenv(var, raising=False)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow (deselect with '-m \"not slow\"')"
    )
