"""
Distributions Configuration
===========================

Registers the built-in discretized distributions:

- ``"Exponential"``: :class:`ExponentialDiscreteDistribution`.

Notes
-----
- Configuration is lazy and happens once; call
  :func:`configure_distributions_register` before creating distributions by
  name.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import lru_cache

from pysatl_numeric.distributions.exponential import ExponentialDiscreteDistribution
from pysatl_numeric.distributions.registry import DiscreteDistributionRegister
from pysatl_numeric.types import FamilyName


@lru_cache(maxsize=1)
def configure_distributions_register() -> DiscreteDistributionRegister:
    """
    Register all built-in distributions in the global registry.

    Returns
    -------
    DiscreteDistributionRegister
        The global registry.
    """
    if not DiscreteDistributionRegister.contains(FamilyName.EXPONENTIAL):
        DiscreteDistributionRegister.register(
            FamilyName.EXPONENTIAL, ExponentialDiscreteDistribution
        )
    return DiscreteDistributionRegister()


def reset_distributions_register() -> None:
    """
    Reset the cached distributions registry.
    """
    configure_distributions_register.cache_clear()
    DiscreteDistributionRegister._reset()
