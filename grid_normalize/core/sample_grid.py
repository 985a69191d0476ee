"""Single-channel float grid container."""

from typing import Tuple
import numpy as np


class SampleGrid:
    """A named, fixed-size grid of float32 samples.

    The grid keeps its original shape for saving, while the normalization
    code works on the flat ``values`` view. Writes through ``values`` or
    ``set`` modify the underlying array in place.
    """

    def __init__(self, name: str, data: np.ndarray):
        """
        Initialize a grid.

        Args:
            name: Name or path the grid is known by in its store
            data: Sample array of any shape (converted to contiguous float32)
        """
        self.name = name
        self.data = np.ascontiguousarray(data, dtype=np.float32)
        if not self.data.flags.writeable:
            self.data = self.data.copy()

    @property
    def shape(self) -> Tuple[int, ...]:
        """Original array shape."""
        return self.data.shape

    @property
    def values(self) -> np.ndarray:
        """Flat, writable view of all samples in index order."""
        return self.data.reshape(-1)

    def element_count(self) -> int:
        """Total number of samples, sentinels included."""
        return int(self.data.size)

    def get(self, index: int) -> float:
        """Return the sample at flat position ``index``."""
        return float(self.values[index])

    def set(self, index: int, value: float) -> None:
        """Overwrite the sample at flat position ``index``."""
        self.values[index] = value

    def __len__(self) -> int:
        return self.element_count()

    def __repr__(self) -> str:
        return f"SampleGrid(name={self.name!r}, shape={self.shape})"
