"""Loading and saving of sample grids."""

from pathlib import Path
from typing import Optional, Union
import numpy as np
import cv2
import mrcfile

from grid_normalize.core.errors import LoadError, SaveError
from grid_normalize.core.sample_grid import SampleGrid

# Extensions handled by mrcfile; anything not listed here except .npy goes to OpenCV
MRC_EXTENSIONS = {'.mrc', '.map', '.rec', '.st'}
NUMPY_EXTENSIONS = {'.npy'}


def load_grid(file_path: Union[str, Path]) -> SampleGrid:
    """
    Load a single-channel grid from MRC, NumPy or any OpenCV-readable file.

    Args:
        file_path: Path to the grid file (PFM, TIFF, EXR, MRC, NPY, ...)

    Returns:
        SampleGrid named after ``file_path`` as given

    Raises:
        LoadError: If the file is missing, unreadable or multi-channel
    """
    name = str(file_path)
    path = Path(file_path)
    if not path.exists():
        raise LoadError(f"File not found: {path}")

    suffix = path.suffix.lower()
    try:
        if suffix in MRC_EXTENSIONS:
            with mrcfile.open(path, mode='r', permissive=True) as mrc:
                if mrc.data is None:
                    raise LoadError(f"MRC file has no data: {path}")
                data = np.array(mrc.data, dtype=np.float32)
        elif suffix in NUMPY_EXTENSIONS:
            data = np.load(path, allow_pickle=False)
        else:
            data = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
            if data is None:
                raise LoadError(f"Could not decode image: {path}")
    except LoadError:
        raise
    except (OSError, ValueError, cv2.error) as e:
        raise LoadError(f"Could not load image {path}: {e}") from e

    # 3D MRC data is a volume; elsewhere the last axis holds channels
    if suffix not in MRC_EXTENSIONS and data.ndim == 3 and data.shape[2] > 1:
        raise LoadError(
            f"Multi-channel images are not supported: {path} "
            f"has {data.shape[2]} channels"
        )

    if not np.issubdtype(data.dtype, np.number):
        raise LoadError(f"Grid {path} does not hold numeric samples ({data.dtype})")

    return SampleGrid(name, data)


def save_grid(grid: SampleGrid, output_path: Union[str, Path]) -> None:
    """
    Save a grid as float32, choosing the writer from the file extension.

    Args:
        grid: Grid to save
        output_path: Destination path

    Raises:
        SaveError: If the file cannot be written
    """
    path = Path(output_path)
    suffix = path.suffix.lower()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if suffix in MRC_EXTENSIONS:
            with mrcfile.new(path, overwrite=True) as mrc:
                mrc.set_data(grid.data)
        elif suffix in NUMPY_EXTENSIONS:
            np.save(path, grid.data)
        elif not cv2.imwrite(str(path), grid.data):
            raise SaveError(f"Could not write image: {path}")
    except SaveError:
        raise
    except (OSError, ValueError, cv2.error) as e:
        raise SaveError(f"Could not save image {path}: {e}") from e


class GridStore:
    """File-backed grid store, optionally rooted in a directory.

    Relative names are resolved against ``root``; absolute names are used
    as given. Grids keep the name they were requested under.
    """

    def __init__(self, root: Optional[Path] = None):
        self.root = Path(root) if root else None

    def resolve(self, name: str) -> Path:
        """Return the file path for a grid name."""
        path = Path(name)
        if self.root is not None and not path.is_absolute():
            path = self.root / path
        return path

    def load(self, name: str) -> SampleGrid:
        """Load the grid stored under ``name``."""
        grid = load_grid(self.resolve(name))
        grid.name = name
        return grid

    def save(self, name: str, grid: SampleGrid) -> None:
        """Write ``grid`` under ``name``."""
        save_grid(grid, self.resolve(name))
