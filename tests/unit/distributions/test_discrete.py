"""
Tests for the generic discretization engine

Uses a uniform distribution described by its cdf alone, so that ppf and the
partial expectation are derived numerically.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import numpy as np
import pytest

from pysatl_numeric.distributions import (
    AnalyticalComputation,
    Discretization,
    FittedComputationMethod,
)
from pysatl_numeric.parameters import IntervalConstraint
from pysatl_numeric.types import CharacteristicName
from tests.utils.mocks import PdfOnlyDistribution, UniformCdfOnlyDistribution

from .base import BaseDistributionTest


class TestDiscretization:
    def test_arrays_are_read_only(self) -> None:
        d = Discretization(values=[1.0, 2.0], probabilities=[0.5, 0.5], bounds=[0.0, 1.5, 3.0])

        with pytest.raises(ValueError):
            d.values[0] = 5.0
        assert len(d) == 2
        assert list(d) == [(1.0, 0.5), (2.0, 0.5)]

    def test_inconsistent_sizes(self) -> None:
        with pytest.raises(ValueError, match="Inconsistent"):
            Discretization(values=[1.0], probabilities=[0.5, 0.5], bounds=[0.0, 1.0])


class TestFittedCharacteristics(BaseDistributionTest):
    """Numerical ppf and partial expectation derived from a cdf."""

    def setup_method(self) -> None:
        self.distribution = UniformCdfOnlyDistribution(4)

    def test_query_method_kinds(self) -> None:
        cdf = self.distribution.query_method(CharacteristicName.CDF)
        ppf = self.distribution.query_method(CharacteristicName.PPF)

        assert isinstance(cdf, AnalyticalComputation)
        assert isinstance(ppf, FittedComputationMethod)
        assert ppf.sources == [CharacteristicName.CDF]
        assert self.distribution.query_method(CharacteristicName.PPF) is ppf

    def test_fitted_ppf(self) -> None:
        for q in (0.1, 0.25, 0.5, 0.9):
            assert self.distribution.ppf(q) == pytest.approx(q, abs=1e-9)
        assert self.distribution.ppf(0.0) == -np.inf
        assert self.distribution.ppf(1.0) == np.inf

    def test_fitted_partial_expectation(self) -> None:
        assert self.distribution.partial_expectation(0.5) == pytest.approx(0.125, abs=1e-8)
        assert self.distribution.partial_expectation(-1.0) == 0.0

    def test_unknown_characteristic(self) -> None:
        with pytest.raises(RuntimeError, match="No conversion path"):
            self.distribution.query_method("kurtosis")

    def test_missing_cdf(self) -> None:
        distribution = PdfOnlyDistribution(3)
        with pytest.raises(RuntimeError, match="cdf"):
            distribution.query_method(CharacteristicName.PPF)
        with pytest.raises(RuntimeError):
            distribution.discretize()


class TestDiscreteDistribution(BaseDistributionTest):
    """Queries over a discretized uniform distribution on [0, 1]."""

    def setup_method(self) -> None:
        self.distribution = UniformCdfOnlyDistribution(4)

    def test_mean_mode_categories(self) -> None:
        self.assert_valid_discretization(self.distribution)
        self.assert_arrays_almost_equal(
            self.distribution.categories(), np.array([0.125, 0.375, 0.625, 0.875]), 1e-7
        )
        self.assert_arrays_almost_equal(
            self.distribution.get_bounds(), np.array([0.0, 0.25, 0.5, 0.75, 1.0]), 1e-9
        )

    def test_median_mode_categories(self) -> None:
        distribution = UniformCdfOnlyDistribution(4, median=True)
        self.assert_valid_discretization(distribution)
        self.assert_arrays_almost_equal(
            distribution.categories(), np.array([0.125, 0.375, 0.625, 0.875]), 1e-7
        )

    def test_single_category(self) -> None:
        distribution = UniformCdfOnlyDistribution(1, width=2.0)
        assert distribution.categories() == pytest.approx([1.0], abs=1e-7)
        assert distribution.probabilities().tolist() == [1.0]

    @pytest.mark.parametrize("n", [0, -3, 2.5, True])
    def test_invalid_number_of_categories(self, n: object) -> None:
        with pytest.raises(ValueError, match="positive integer"):
            UniformCdfOnlyDistribution(n)  # type: ignore[arg-type]

    def test_set_number_of_categories(self) -> None:
        self.distribution.set_number_of_categories(2)
        assert len(self.distribution) == 2
        self.assert_arrays_almost_equal(
            self.distribution.categories(), np.array([0.25, 0.75]), 1e-7
        )
        with pytest.raises(ValueError):
            self.distribution.set_number_of_categories(0)
        assert len(self.distribution) == 2

    def test_set_median_toggles_mode(self) -> None:
        self.distribution.set_median(True)
        assert self.distribution.median
        self.assert_valid_discretization(self.distribution)

    def test_indexed_accessors(self) -> None:
        assert self.distribution.get_category(0) == pytest.approx(0.125, abs=1e-7)
        assert self.distribution.get_probability(3) == pytest.approx(0.25)
        assert self.distribution.get_bound(4) == 1.0
        assert self.distribution.get_lower_bound() == 0.0
        assert self.distribution.get_upper_bound() == 1.0

        with pytest.raises(IndexError):
            self.distribution.get_category(4)
        with pytest.raises(IndexError):
            self.distribution.get_probability(-1)
        with pytest.raises(IndexError):
            self.distribution.get_bound(5)

    def test_get_value_category(self) -> None:
        assert self.distribution.get_value_category(0.1) == pytest.approx(0.125, abs=1e-7)
        assert self.distribution.get_value_category(0.0) == pytest.approx(0.125, abs=1e-7)
        assert self.distribution.get_value_category(0.6) == pytest.approx(0.625, abs=1e-7)
        assert self.distribution.get_value_category(1.0) == pytest.approx(0.875, abs=1e-7)

        with pytest.raises(ValueError, match="outside"):
            self.distribution.get_value_category(1.5)

    def test_get_category_index(self) -> None:
        value = self.distribution.get_category(2)
        assert self.distribution.get_category_index(value) == 2
        with pytest.raises(ValueError, match="not a category"):
            self.distribution.get_category_index(0.5)

    def test_cumulative_and_survival(self) -> None:
        assert self.distribution.cumulative_probability(0.5) == pytest.approx(0.5)
        assert self.distribution.survival_probability(0.5) == pytest.approx(0.5)
        assert self.distribution.cumulative_probability(-1.0) == 0.0
        assert self.distribution.cumulative_probability(2.0) == pytest.approx(1.0)

    def test_moments(self) -> None:
        assert self.distribution.expectation() == pytest.approx(0.5, abs=1e-7)
        expected_variance = np.var([0.125, 0.375, 0.625, 0.875])
        assert self.distribution.variance() == pytest.approx(expected_variance, abs=1e-7)

    def test_rand(self) -> None:
        rng = np.random.default_rng(42)
        draws = self.distribution.rand(1000, rng=rng)

        assert draws.shape == (1000,)
        assert set(np.unique(draws)).issubset(set(self.distribution.categories()))
        assert isinstance(self.distribution.rand(rng=rng), float)

    def test_rand_is_reproducible(self) -> None:
        first = self.distribution.rand(20, rng=np.random.default_rng(7))
        second = self.distribution.rand(20, rng=np.random.default_rng(7))
        np.testing.assert_array_equal(first, second)

    def test_restrict_to_interval(self) -> None:
        self.distribution.restrict_to_interval(0.5, 1.0)

        assert self.distribution.interval == IntervalConstraint(left=0.5, right=1.0)
        self.assert_valid_discretization(self.distribution)
        self.assert_arrays_almost_equal(
            self.distribution.categories(), np.array([0.5625, 0.6875, 0.8125, 0.9375]), 1e-7
        )

    def test_restrict_to_invalid_interval(self) -> None:
        with pytest.raises(ValueError, match="Empty"):
            self.distribution.restrict_to_interval(0.8, 0.2)
        with pytest.raises(ValueError, match="support"):
            self.distribution.restrict_to_interval(-1.0, 0.5)
        assert self.distribution.interval == self.distribution.support
