"""
Setup script for pysatl-numeric.
"""

from setuptools import find_packages, setup

setup(
    name="pysatl-numeric",
    version="0.1.0",
    description=(
        "Constrained numeric parameters with change notification and "
        "discretization of continuous distributions"
    ),
    author="Leonid Elkin, Mikhail Mikhailov",
    license="MIT",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.12",
    install_requires=[
        "numpy>=2.0",
        "scipy>=1.13",
        "mypy-extensions>=1.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
        ],
    },
)
