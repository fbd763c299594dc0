"""
Discretized Distributions
=========================

This module defines distributions over a finite set of categories and the
engine approximating a continuous distribution by such a set:

- :class:`Discretization` – immutable snapshot of categories, probabilities
  and bin bounds.
- :class:`DiscreteDistribution` – queries over the current discretization
  (category lookup, cumulative probabilities, sampling) and its configuration
  (category count, restriction interval, median mode).
- :class:`ContinuousDiscreteDistribution` – equal-probability discretization of
  a continuous distribution described by its characteristics (``cdf``,
  ``ppf``, ``partial_expectation``), recomputed when a governing parameter
  changes.

Notes
-----
- The discretization is deterministic: identical parameter values and
  configuration always give identical categories.
- Exactly ``n`` categories are produced; coinciding values are kept as
  separate categories.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import warnings
from abc import ABC, abstractmethod
from dataclasses import dataclass
from math import isnan
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Self, cast

import numpy as np

from pysatl_numeric.distributions.computation import AnalyticalComputation
from pysatl_numeric.distributions.fitters import FITTERS
from pysatl_numeric.parameters.constraints import REAL_LINE, IntervalConstraint
from pysatl_numeric.parameters.parametrizable import AbstractParametrizable
from pysatl_numeric.types import CharacteristicName

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from pysatl_numeric.distributions.computation import FittedComputationMethod, Method
    from pysatl_numeric.parameters.parameter_list import ParameterList
    from pysatl_numeric.types import GenericCharacteristicName, NumericArray, ScalarFunc

logger = logging.getLogger(__name__)


def _frozen_array(data: Any) -> NumericArray:
    arr = np.array(data, dtype=np.float64)
    arr.setflags(write=False)
    return cast("NumericArray", arr)


@dataclass(frozen=True, slots=True, eq=False)
class Discretization:
    """
    Immutable result of a discretization pass.

    Parameters
    ----------
    values : NumericArray
        Representative value of each category, non-decreasing.
    probabilities : NumericArray
        Probability mass of each category; sums to 1.
    bounds : NumericArray
        The ``n + 1`` bin edges, from the lower to the upper end of the
        discretized interval.
    """

    values: NumericArray
    probabilities: NumericArray
    bounds: NumericArray

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", _frozen_array(self.values))
        object.__setattr__(self, "probabilities", _frozen_array(self.probabilities))
        object.__setattr__(self, "bounds", _frozen_array(self.bounds))
        n = self.values.size
        if self.probabilities.size != n or self.bounds.size != n + 1:
            raise ValueError(
                f"Inconsistent discretization: {n} values, {self.probabilities.size} "
                f"probabilities, {self.bounds.size} bounds."
            )

    def __len__(self) -> int:
        return int(self.values.size)

    def __iter__(self) -> Iterator[tuple[float, float]]:
        """Iterate over ``(value, probability)`` pairs."""
        for value, probability in zip(self.values, self.probabilities, strict=True):
            yield float(value), float(probability)


class DiscreteDistribution(AbstractParametrizable, ABC):
    """
    Distribution over a finite number of categories.

    Parameters
    ----------
    n : int
        Number of categories.
    namespace : str, default=""
        Parameter namespace (e.g. ``"Exponential."``).
    support : IntervalConstraint, default=REAL_LINE
        Declared support of the underlying distribution. The discretized
        interval starts as the whole support.
    median : bool, default=False
        Represent each category by its median rather than its mean.

    Raises
    ------
    ValueError
        If ``n`` is not a positive integer.

    Notes
    -----
    Subclasses compute the categories in :meth:`_compute_discretization` and
    must call :meth:`discretize` once their state is initialized.
    """

    def __init__(
        self,
        n: int,
        namespace: str = "",
        support: IntervalConstraint = REAL_LINE,
        median: bool = False,
    ) -> None:
        super().__init__(namespace)
        self._n = self._check_number_of_categories(n)
        self._support = support
        self._interval = support
        self._median = median
        self._discretization: Discretization | None = None

    @staticmethod
    def _check_number_of_categories(n: int) -> int:
        if isinstance(n, bool) or not isinstance(n, int | np.integer) or n < 1:
            raise ValueError(f"Number of categories must be a positive integer, got {n!r}")
        return int(n)

    # ------------------------------------------------------------------ #
    # Configuration
    # ------------------------------------------------------------------ #

    @property
    def number_of_categories(self) -> int:
        return self._n

    def set_number_of_categories(self, n: int) -> None:
        """Change the category count and discretize again."""
        self._n = self._check_number_of_categories(n)
        self.discretize()

    @property
    def median(self) -> bool:
        """Whether categories are represented by bin medians."""
        return self._median

    def set_median(self, median: bool) -> None:
        if median != self._median:
            self._median = median
            self.discretize()

    @property
    def support(self) -> IntervalConstraint:
        """Declared support of the distribution."""
        return self._support

    @property
    def interval(self) -> IntervalConstraint:
        """Interval the discretization is restricted to."""
        return self._interval

    def restrict_to_interval(
        self,
        lower: float,
        upper: float,
        lower_closed: bool = True,
        upper_closed: bool = True,
    ) -> None:
        """
        Restrict the discretization to a sub-interval of the support.

        Raises
        ------
        ValueError
            If the interval is empty or reaches outside the support.
        """
        if lower >= upper:
            raise ValueError(f"Empty interval: lower bound {lower} >= upper bound {upper}")
        if lower < self._support.left or upper > self._support.right:
            raise ValueError(
                f"Interval [{lower}, {upper}] is not included in the support "
                f"{self._support.description}"
            )
        requested = IntervalConstraint(
            left=lower,
            right=upper,
            left_closed=lower_closed,
            right_closed=upper_closed,
            precision=self._support.precision,
        )
        self._interval = cast(IntervalConstraint, self._support.intersect_with(requested))
        self.discretize()

    # ------------------------------------------------------------------ #
    # Discretization
    # ------------------------------------------------------------------ #

    def discretize(self) -> None:
        """Recompute the categories from the current state."""
        self._discretization = self._compute_discretization()
        logger.debug(
            "%s discretized into %d categories: %s",
            type(self).__name__,
            self._n,
            self._discretization.values,
        )

    @abstractmethod
    def _compute_discretization(self) -> Discretization: ...

    @property
    def discretization(self) -> Discretization:
        if self._discretization is None:
            raise RuntimeError(f"{type(self).__name__} has not been discretized yet.")
        return self._discretization

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def categories(self) -> NumericArray:
        """Representative values, in increasing order."""
        return self.discretization.values.copy()

    def probabilities(self) -> NumericArray:
        return self.discretization.probabilities.copy()

    def get_bounds(self) -> NumericArray:
        """The ``n + 1`` bin edges."""
        return self.discretization.bounds.copy()

    def get_bound(self, i: int) -> float:
        return float(self.discretization.bounds[self._check_index(i, self._n + 1)])

    def get_lower_bound(self) -> float:
        return self._interval.left

    def get_upper_bound(self) -> float:
        return self._interval.right

    def _check_index(self, i: int, size: int) -> int:
        if not 0 <= i < size:
            raise IndexError(f"Index {i} out of range [0, {size})")
        return i

    def get_category(self, i: int) -> float:
        return float(self.discretization.values[self._check_index(i, self._n)])

    def get_probability(self, i: int) -> float:
        return float(self.discretization.probabilities[self._check_index(i, self._n)])

    def get_category_index(self, value: float) -> int:
        """
        Index of the first category equal to ``value``.

        Raises
        ------
        ValueError
            If no category matches within the interval precision.
        """
        tolerance = self._interval.precision
        matches = np.flatnonzero(np.abs(self.discretization.values - value) <= tolerance)
        if matches.size == 0:
            raise ValueError(f"{value} is not a category of {type(self).__name__}")
        return int(matches[0])

    def get_value_category(self, x: float) -> float:
        """
        Category representing the bin that contains ``x``.

        Raises
        ------
        ValueError
            If ``x`` lies outside the discretized interval.
        """
        if not self._interval.is_correct(x):
            raise ValueError(f"{x} is outside the interval {self._interval.description}")
        inner = self.discretization.bounds[1:-1]
        index = int(np.searchsorted(inner, x, side="left"))
        return float(self.discretization.values[index])

    def cumulative_probability(self, x: float) -> float:
        """Probability that a category value is lower than or equal to ``x``."""
        d = self.discretization
        return float(np.sum(d.probabilities[d.values <= x]))

    def survival_probability(self, x: float) -> float:
        """Probability that a category value is strictly greater than ``x``."""
        d = self.discretization
        return float(np.sum(d.probabilities[d.values > x]))

    def expectation(self) -> float:
        """Mean of the discrete distribution."""
        d = self.discretization
        return float(np.dot(d.values, d.probabilities))

    def variance(self) -> float:
        d = self.discretization
        mean = float(np.dot(d.values, d.probabilities))
        return float(np.dot((d.values - mean) ** 2, d.probabilities))

    def rand(
        self, size: int | None = None, rng: np.random.Generator | None = None
    ) -> float | NumericArray:
        """
        Draw category values.

        Parameters
        ----------
        size : int, optional
            Number of draws. A single float is returned when omitted.
        rng : numpy.random.Generator, optional
            Random generator; a fresh default generator is used otherwise.
        """
        if rng is None:
            rng = np.random.default_rng()
        d = self.discretization
        draws = rng.choice(d.values, size=size, p=d.probabilities)
        if size is None:
            return float(draws)
        return cast("NumericArray", draws)

    def __len__(self) -> int:
        return self._n


class ContinuousDiscreteDistribution(DiscreteDistribution):
    """
    Equal-probability discretization of a continuous distribution.

    Subclasses describe the distribution through :meth:`_analytical_characteristics`,
    a mapping from :class:`CharacteristicName` to scalar callables bound to the
    current parameter values. ``cdf`` is mandatory; ``ppf`` and
    ``partial_expectation`` are derived numerically when missing.

    Discretization pass
    -------------------
    1. ``p_lo = cdf(lower)`` and ``p_hi = cdf(upper)`` over :attr:`interval`.
    2. Inner bin edges are the quantiles ``ppf(p_lo + i * (p_hi - p_lo) / n)``.
    3. Each category is the conditional mean of its bin (from the partial
       expectation) or, in median mode, the bin median rescaled so that the
       categories average to the mean over the interval.
    4. Values are moved into the interval (an open bound is stepped over by
       the interval precision) and made non-decreasing.
    5. Each category has probability ``1 / n``.
    """

    def __init__(
        self,
        n: int,
        namespace: str = "",
        support: IntervalConstraint = REAL_LINE,
        median: bool = False,
    ) -> None:
        super().__init__(n, namespace, support, median)
        self._analytical: (
            Mapping[GenericCharacteristicName, AnalyticalComputation[float, float]] | None
        ) = None
        self._fitted: dict[GenericCharacteristicName, FittedComputationMethod[float, float]] = {}

    @abstractmethod
    def _analytical_characteristics(self) -> Mapping[GenericCharacteristicName, ScalarFunc]:
        """Closed-form characteristics bound to the current parameter values."""

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[float, float]]:
        """
        Analytical computations for the current parameter values.

        Lazily built and cached until a parameter changes.
        """
        if self._analytical is None:
            self._analytical = MappingProxyType(
                {
                    name: AnalyticalComputation(target=name, func=func)
                    for name, func in self._analytical_characteristics().items()
                }
            )
        return self._analytical

    def query_method(
        self, characteristic_name: GenericCharacteristicName, **options: Any
    ) -> Method[float, float]:
        """
        Resolve an analytical or fitted method for a characteristic.

        Raises
        ------
        RuntimeError
            If the characteristic is neither analytical nor derivable.
        """
        analytical = self.analytical_computations
        if characteristic_name in analytical:
            return analytical[characteristic_name]

        cached = self._fitted.get(characteristic_name)
        if cached is not None:
            return cached

        if CharacteristicName.CDF not in analytical:
            raise RuntimeError(
                f"{type(self).__name__} provides no analytical cdf to derive "
                f"'{characteristic_name}' from."
            )
        fitter = FITTERS.get(characteristic_name)
        if fitter is None:
            raise RuntimeError(f"No conversion path to '{characteristic_name}'.")

        fitted = fitter(self, **options)
        self._fitted[characteristic_name] = fitted
        return fitted

    def cdf(self, x: float) -> float:
        return float(self.query_method(CharacteristicName.CDF)(x))

    def ppf(self, p: float) -> float:
        return float(self.query_method(CharacteristicName.PPF)(p))

    def partial_expectation(self, x: float) -> float:
        return float(self.query_method(CharacteristicName.PARTIAL_EXPECTATION)(x))

    def _reset_computations(self) -> None:
        self._analytical = None
        self._fitted = {}

    def fire_parameter_changed(self, parameters: ParameterList) -> None:
        """Drop computations bound to the former parameter values."""
        super().fire_parameter_changed(parameters)
        self._reset_computations()

    def clone(self) -> Self:
        new = super().clone()
        new._reset_computations()
        return new

    def _compute_discretization(self) -> Discretization:
        n = self._n
        interval = self._interval
        lower, upper = interval.left, interval.right

        p_lo = self.cdf(lower)
        p_hi = self.cdf(upper)
        mass = p_hi - p_lo
        if isnan(mass):
            raise ValueError(
                f"{type(self).__name__} has an undefined cdf over {interval.description} "
                "for the current parameter values."
            )

        if not mass > 0.0:
            warnings.warn(
                f"Interval {interval.description} carries no probability mass; "
                "all categories collapse onto a single point.",
                UserWarning,
                stacklevel=3,
            )
            values = self._accepted_values(np.full(n, self.ppf(p_lo)))
            edges = np.concatenate(([lower], np.full(n - 1, values[0]), [upper]))
        else:
            step = mass / n
            inner = [self.ppf(p_lo + i * step) for i in range(1, n)]
            edges = np.array([lower, *inner, upper], dtype=np.float64)

            if self._median:
                values = np.array([self.ppf(p_lo + (i + 0.5) * step) for i in range(n)])
                mean = (self.partial_expectation(upper) - self.partial_expectation(lower)) / mass
                total = float(np.mean(values))
                if total != 0.0:
                    values *= mean / total
            else:
                expectations = np.array([self.partial_expectation(e) for e in edges])
                values = np.diff(expectations) / step

            values = self._accepted_values(values)

        probabilities = np.full(n, 1.0 / n)
        probabilities[-1] = 1.0 - probabilities[:-1].sum()

        return Discretization(values=values, probabilities=probabilities, bounds=edges)

    def _accepted_values(self, values: NumericArray) -> NumericArray:
        """
        Move raw category values into the interval and make them non-decreasing.

        Raises
        ------
        ValueError
            If a value is NaN or cannot be represented by a finite number
            inside the interval (e.g. after a floating point overflow).
        """
        interval = self._interval
        raw = np.asarray(values, dtype=np.float64)
        if np.isnan(raw).any():
            raise ValueError(
                f"{type(self).__name__} produced undefined category values {raw} "
                "for the current parameter values."
            )
        accepted = np.array([interval.get_accepted_limit(float(v)) for v in raw])
        if not np.isfinite(accepted).all():
            raise ValueError(
                f"{type(self).__name__} produced category values {raw} that are not "
                f"finite within {interval.description}."
            )
        return cast("NumericArray", np.maximum.accumulate(accepted))


__all__ = [
    "Discretization",
    "DiscreteDistribution",
    "ContinuousDiscreteDistribution",
]
