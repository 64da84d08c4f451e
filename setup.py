"""
setup.py for dircompile

Runtime Requirements:
- A C compiler and a C++ compiler on PATH (gcc/g++ by default)
- Override with the --cc / --cxx options or dircompile.yaml

Usage:
- pip install -e .[dev]
- dircompile            # compile ./* into ./build
- python -m dircompile info
"""

from pathlib import Path
from setuptools import setup, find_packages

# Read README for long description
readme_path = Path("README.md")
long_description = ""
if readme_path.exists():
    with open(readme_path, "r", encoding="utf-8") as f:
        long_description = f.read()

setup(
    name="dircompile",
    version="1.0.0",
    description="Compile every file in a directory with gcc/g++ into a fresh build directory",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["dircompile", "dircompile.*"]),
    entry_points={
        "console_scripts": [
            "dircompile=dircompile.main:main",
        ],
    },
    zip_safe=False,
    python_requires=">=3.10",
    install_requires=[
        "pyyaml>=6.0",
        "pydantic>=2.0",
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-cov",
            "black",
            "flake8",
            "mypy",
        ]
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Build Tools",
    ],
)
