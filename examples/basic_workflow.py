#!/usr/bin/env python3
"""
Example workflow: estimate a robust range from a stack of frames and
normalize every frame with it.

This script demonstrates how to use the grid-normalize package
programmatically instead of through the ``grid-normalize`` command.
"""

from pathlib import Path

from grid_normalize.config import NormalizeOptions
from grid_normalize.core.pipeline import normalize_file


def main():
    """Normalize all frames against a shared range."""

    # Configuration
    frame_folder = Path("data/frames")
    output_folder = Path("results/normalized")
    frames = sorted(str(p) for p in frame_folder.glob("*.pfm"))

    print("=" * 60)
    print("Grid Normalize Workflow")
    print("=" * 60)

    # Every frame contributes to the statistics, so all outputs share one scale
    options = NormalizeOptions(
        epsilon=0.01,
        ignore_value=-1.0,
        clamp=True,
        source_names=tuple(frames),
    )

    for frame in frames:
        print(f"\nNormalizing {frame}...")
        print("-" * 60)
        normalize_file(frame, str(output_folder / Path(frame).name), options)

    print("\n" + "=" * 60)
    print("Workflow complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
