"""Setup script for grid-normalize package."""

from setuptools import setup, find_packages

setup(
    name="grid-normalize",
    version="0.1.0",
    description="Robust [0, 1] normalization of single-channel float images",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.21.0",
        "opencv-python>=4.5.0",
        "mrcfile>=1.4.0",
        "pyyaml>=6.0",
        "click>=8.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "grid-normalize=grid_normalize.cli.normalize:main",
        ],
    },
)
