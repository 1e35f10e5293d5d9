#!/usr/bin/env python3
"""Setup script for cabal package.
"""

from setuptools import find_packages, setup

setup(
    name="cabal",
    version="0.3.0",
    description="Similarity clique evolution for pairwise similarity reports",
    author="Cabal Team",
    packages=find_packages(include=["cabal*"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.24.0",
        "pandas>=1.5.0",
        "networkx>=3.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "parquet": [
            "pyarrow>=12.0.0",
        ],
        "test": [
            "pytest>=7.0.0",
            "hypothesis>=6.0.0",
            "pyarrow>=12.0.0",
        ],
        "dev": [
            "pytest>=7.0.0",
            "hypothesis>=6.0.0",
            "pyarrow>=12.0.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
            "mypy>=1.5.0",
            "pandas-stubs>=2.0.0",
            "types-PyYAML>=6.0.0",
            "types-networkx>=3.0",
        ],
    },
)
