#!/usr/bin/env python3
"""
Setup script for the ddfloat library

This script builds the pure Python package for double-double extended
precision arithmetic.
"""

from pathlib import Path

from setuptools import setup, find_packages

# Package metadata
PACKAGE_NAME = "ddfloat"
VERSION = "1.0.0"
DESCRIPTION = "Double-double extended precision arithmetic with IEEE-754 special values"
AUTHOR = "ddfloat Contributors"
AUTHOR_EMAIL = "contributors@ddfloat.org"
URL = "https://github.com/your-username/ddfloat"
LICENSE = "MIT"

# Read long description from README
def read_readme():
    readme_path = Path(__file__).parent / "README.md"
    if readme_path.exists():
        with open(readme_path, "r", encoding="utf-8") as f:
            return f.read()
    return DESCRIPTION

# Package requirements
def get_requirements():
    """Get package requirements."""
    base_requirements = [
        "numpy>=1.19.0",
        "torch>=1.9.0",
    ]

    test_requirements = [
        "pytest>=6.0",
        "pytest-cov>=2.0",
        "mpmath>=1.2",
    ]

    dev_requirements = [
        "black>=21.0",
        "flake8>=3.8",
        "mypy>=0.900",
        "pandas>=1.3",
        "matplotlib>=3.3",
    ]

    return {
        "base": base_requirements,
        "test": test_requirements,
        "dev": test_requirements + dev_requirements,
    }

# Setup configuration
def main():
    """Main setup function."""
    requirements = get_requirements()

    # Extras require for optional dependencies
    extras_require = {
        "test": requirements["test"],
        "dev": requirements["dev"],
        "all": requirements["dev"],
    }

    setup(
        name=PACKAGE_NAME,
        version=VERSION,
        description=DESCRIPTION,
        long_description=read_readme(),
        long_description_content_type="text/markdown",
        author=AUTHOR,
        author_email=AUTHOR_EMAIL,
        url=URL,
        license=LICENSE,

        # Package configuration
        packages=find_packages(include=["ddfloat", "ddfloat.*"]),

        # Dependencies
        install_requires=requirements["base"],
        extras_require=extras_require,
        python_requires=">=3.8",

        # Metadata for PyPI
        classifiers=[
            "Development Status :: 4 - Beta",
            "Intended Audience :: Science/Research",
            "Intended Audience :: Developers",
            "License :: OSI Approved :: MIT License",
            "Programming Language :: Python :: 3",
            "Programming Language :: Python :: 3.8",
            "Programming Language :: Python :: 3.9",
            "Programming Language :: Python :: 3.10",
            "Programming Language :: Python :: 3.11",
            "Programming Language :: Python :: 3.12",
            "Programming Language :: Python :: 3.13",
            "Topic :: Scientific/Engineering :: Mathematics",
            "Topic :: Software Development :: Libraries :: Python Modules",
            "Operating System :: OS Independent",
        ],
        keywords=[
            "numerical", "double-double", "extended-precision", "floating-point",
            "precision", "error-free-transformation", "scientific-computing"
        ],

        # Project URLs
        project_urls={
            "Source": URL,
            "Tracker": f"{URL}/issues",
        },
    )

if __name__ == "__main__":
    main()
