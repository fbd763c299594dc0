"""
Distributions subpackage

Discretization of continuous distributions:

- computation primitives (:mod:`.computation`);
- numerical fallbacks for missing characteristics (:mod:`.fitters`);
- discretized distributions and the discretization engine (:mod:`.discrete`);
- the exponential example (:mod:`.exponential`);
- the registry of named distributions (:mod:`.registry`, :mod:`.configuration`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .computation import (
    AnalyticalComputation,
    Computation,
    FittedComputationMethod,
)
from .configuration import configure_distributions_register, reset_distributions_register
from .discrete import ContinuousDiscreteDistribution, DiscreteDistribution, Discretization
from .exponential import ExponentialDiscreteDistribution
from .registry import DiscreteDistributionRegister

__all__ = [
    # computation primitives
    "Computation",
    "AnalyticalComputation",
    "FittedComputationMethod",
    # discretization
    "Discretization",
    "DiscreteDistribution",
    "ContinuousDiscreteDistribution",
    "ExponentialDiscreteDistribution",
    # registry
    "DiscreteDistributionRegister",
    "configure_distributions_register",
    "reset_distributions_register",
]
