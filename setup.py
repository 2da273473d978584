#!/usr/bin/env python3
"""Setup script for OMF Dumper."""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README
readme_path = Path(__file__).parent / "README.md"
long_description = readme_path.read_text(encoding="utf-8") if readme_path.exists() else ""

setup(
    name="omf-dumper",
    version="0.1.0",
    author="OMF Dumper contributors",
    description="Decode and print the records of relocatable OMF object files",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "omf_dumper_py": ["config.json"],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Disassemblers",
    ],
    python_requires=">=3.8",
    install_requires=[
        # No external dependencies for core functionality
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
            "mypy>=1.0",
            "flask>=2.0",
        ],
        "server": [
            "flask>=2.0",  # For the HTTP dump service
        ],
    },
    entry_points={
        "console_scripts": [
            "omf-dumper=omf_dumper_py.cli:main",
            "omf-dumper-server=omf_dumper_py.server:main",
        ],
    },
)
