"""
Global registry for discretized distributions using singleton pattern.

This module implements a centralized registry mapping distribution names to
factories, so that distributions can be created by name across the
application.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any, ClassVar

    from pysatl_numeric.distributions.discrete import DiscreteDistribution

    type DistributionFactory = Callable[..., DiscreteDistribution]


class DiscreteDistributionRegister:
    """
    Singleton registry of discretized distribution factories.
    """

    _instance: ClassVar[DiscreteDistributionRegister | None] = None
    _registered: dict[str, DistributionFactory]

    def __new__(cls) -> DiscreteDistributionRegister:
        """Create or return the singleton instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._registered = {}
        return cls._instance

    @classmethod
    def contains(cls, name: str) -> bool:
        return name in cls()._registered

    @classmethod
    def get(cls, name: str) -> DistributionFactory:
        """
        Retrieve a factory by name.

        Raises
        ------
        ValueError
            If no distribution with the given name exists.
        """
        self = cls()
        if name not in self._registered:
            raise ValueError(f"No distribution {name} found in register")
        return self._registered[name]

    @classmethod
    def register(cls, name: str, factory: DistributionFactory) -> None:
        """
        Register a new distribution factory.

        Raises
        ------
        ValueError
            If a distribution with the same name is already registered.
        """
        self = cls()
        if name in self._registered:
            raise ValueError(f"Distribution {name} already found in register")
        self._registered[name] = factory

    @classmethod
    def create(cls, name: str, *args: Any, **kwargs: Any) -> DiscreteDistribution:
        """Build a distribution with the factory registered under ``name``."""
        return cls.get(name)(*args, **kwargs)

    @classmethod
    def names(cls) -> list[str]:
        return sorted(cls()._registered)

    @classmethod
    def _reset(cls) -> None:
        cls._instance = None


__all__ = [
    "DiscreteDistributionRegister",
]
