"""
Discretized exponential distribution.

The exponential distribution describes the time between events in a Poisson
process. It has a single parameter, the rate λ > 0:

    f(x) = λ * exp(-λ * x) for x ≥ 0
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import partial
from typing import TYPE_CHECKING

import numpy as np

from pysatl_numeric.distributions.discrete import ContinuousDiscreteDistribution
from pysatl_numeric.parameters.constraints import R_PLUS, R_PLUS_STAR
from pysatl_numeric.parameters.parameter import Parameter
from pysatl_numeric.types import CharacteristicName, FamilyName

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pysatl_numeric.parameters.parameter_list import ParameterList
    from pysatl_numeric.types import GenericCharacteristicName, NumericArray, ScalarFunc


def pdf(lambda_: float, x: NumericArray) -> NumericArray:
    """
    Probability density function for exponential distribution.

    Parameters
    ----------
    lambda_ : float
        Rate parameter.
    x : NumericArray
        Points at which to evaluate the probability density function

    Returns
    -------
    NumericArray
        Probability density values at points x
    """
    return np.where(x >= 0, lambda_ * np.exp(-lambda_ * np.maximum(x, 0)), 0.0)


def cdf(lambda_: float, x: NumericArray) -> NumericArray:
    """
    Cumulative distribution function for exponential distribution.

    Returns
    -------
    NumericArray
        Probabilities P(X ≤ x) for each point x
    """
    return np.where(x >= 0, -np.expm1(-lambda_ * np.maximum(x, 0)), 0.0)


def ppf(lambda_: float, p: NumericArray) -> NumericArray:
    """
    Percent point function (inverse CDF) for exponential distribution.

    Returns
    -------
    NumericArray
        Quantiles corresponding to probabilities p:
        - For p = 0: returns 0.0
        - For p = 1: returns np.inf
        - For p in (0, 1): returns -ln(1-p)/λ

    Raises
    ------
    ValueError
        If probability is outside [0, 1]
    """
    if np.any((p < 0) | (p > 1)):
        raise ValueError("Probability must be in [0, 1]")

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        return np.where(p < 1.0, -np.log1p(-p) / lambda_, np.inf)


def partial_expectation(lambda_: float, x: NumericArray) -> NumericArray:
    """
    Partial expectation ``∫_0^x t f(t) dt`` of exponential distribution.

    Equals ``1/λ - exp(-λx) (x + 1/λ)`` for x ≥ 0, tends to the mean ``1/λ``
    as x grows and is 0 for x < 0.
    """
    scale = 1.0 / lambda_
    with np.errstate(invalid="ignore", over="ignore"):
        finite = scale - np.exp(-lambda_ * np.maximum(x, 0)) * (np.maximum(x, 0) + scale)
    return np.where(x < 0, 0.0, np.where(np.isposinf(x), scale, finite))


class ExponentialDiscreteDistribution(ContinuousDiscreteDistribution):
    """
    Exponential distribution discretized into ``n`` equiprobable categories.

    Parameters
    ----------
    n : int
        Number of categories.
    lambda_ : float, default=1.0
        Rate of the distribution, registered as parameter
        ``Exponential.lambda`` constrained to ``(0, inf)``.
    median : bool, default=False
        Represent categories by bin medians instead of conditional means.

    Raises
    ------
    ConstraintError
        If ``lambda_`` is not strictly positive.
    """

    family_name = FamilyName.EXPONENTIAL

    def __init__(self, n: int, lambda_: float = 1.0, median: bool = False) -> None:
        super().__init__(n, namespace="Exponential.", support=R_PLUS, median=median)
        self.add_parameter_(Parameter("Exponential.lambda", lambda_, R_PLUS_STAR, True))
        self._lambda = float(lambda_)
        self.discretize()

    @property
    def lambda_(self) -> float:
        """Rate used by the current discretization."""
        return self._lambda

    def _analytical_characteristics(self) -> Mapping[GenericCharacteristicName, ScalarFunc]:
        return {
            CharacteristicName.PDF: partial(pdf, self._lambda),
            CharacteristicName.CDF: partial(cdf, self._lambda),
            CharacteristicName.PPF: partial(ppf, self._lambda),
            CharacteristicName.PARTIAL_EXPECTATION: partial(partial_expectation, self._lambda),
        }

    def fire_parameter_changed(self, parameters: ParameterList) -> None:
        super().fire_parameter_changed(parameters)
        self._lambda = self.get_parameter_value("lambda")
        self.discretize()

    def __repr__(self) -> str:
        return f"ExponentialDiscreteDistribution(n={self._n}, lambda_={self._lambda!r})"


__all__ = [
    "ExponentialDiscreteDistribution",
]
