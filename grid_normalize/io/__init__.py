"""I/O utilities for grids and reports."""

from grid_normalize.io.grid_store import (
    load_grid,
    save_grid,
    GridStore,
)
from grid_normalize.io.report import (
    save_report,
    load_report,
)

__all__ = [
    "load_grid",
    "save_grid",
    "GridStore",
    "save_report",
    "load_report",
]
