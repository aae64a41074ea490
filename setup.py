#!/usr/bin/env python3
"""
Setup script for the UPD7759 ADPCM Encoder

This setup script allows the package to be installed in development mode,
which fixes import issues and makes the code easily accessible.

Usage:
    pip install -e .
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the contents of README file
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text()

setup(
    name="upd7759-encoder",
    version="1.0.0",
    author="UPD7759 Encoder Team",
    description="Encoder for the NEC UPD7759 speech synthesis chip ADPCM bitstream",
    long_description=long_description,
    long_description_content_type="text/markdown",

    # Package configuration
    packages=find_packages(where="src"),
    package_dir={"": "src"},

    # Dependencies
    install_requires=[
        "numpy>=1.20.0",
    ],

    # Optional dependencies for development
    extras_require={
        "dev": [
            "pytest>=6.0.0",
            "pytest-cov>=2.0.0",
            "black>=21.0.0",
            "flake8>=3.8.0",
            "mypy>=0.812",
        ],
    },

    # Python version requirement
    python_requires=">=3.8",

    # Classification
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: Public Domain",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Multimedia :: Sound/Audio :: Conversion",
    ],

    # Entry points for command-line tools
    entry_points={
        "console_scripts": [
            "upd7759-encode=upd7759.cli:encode_cli",
            "upd7759-inspect=upd7759.cli:inspect_cli",
        ],
    },

    # Include additional files
    include_package_data=True,

    # Test suite
    test_suite="tests",
)
