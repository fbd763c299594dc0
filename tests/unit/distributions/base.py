"""
Common utilities for discretized distribution tests.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import math
from typing import Any

import numpy as np


class BaseDistributionTest:
    """Base class for all discretized distributions' tests"""

    # Precision for floating point comparisons
    CALCULATION_PRECISION = 1e-10

    @staticmethod
    def assert_arrays_almost_equal(
        actual: np.ndarray[Any, Any], expected: np.ndarray[Any, Any], precision: float | None = None
    ) -> None:
        """Helper method to assert arrays are almost equal."""
        if precision is None:
            precision = BaseDistributionTest.CALCULATION_PRECISION

        np.testing.assert_array_almost_equal(actual, expected, decimal=int(-math.log10(precision)))

    @staticmethod
    def assert_valid_discretization(distribution: Any) -> None:
        """Check the invariants every discretization satisfies."""
        values = distribution.categories()
        probabilities = distribution.probabilities()

        assert values.size == distribution.number_of_categories
        assert probabilities.size == distribution.number_of_categories
        assert abs(probabilities.sum() - 1.0) < 1e-9
        assert np.all(probabilities >= 0.0)
        assert np.all(np.diff(values) >= 0.0)
        assert all(distribution.interval.is_correct(float(v)) for v in values)
