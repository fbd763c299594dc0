"""
Parameter constraints.

This module defines the capability every parameter constraint provides, the
interval constraint shipped with the library, the error raised when a value is
rejected, and the process-wide constant constraints (positive reals,
probabilities, ...).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass, replace
from math import inf, isnan
from typing import TYPE_CHECKING, Protocol, Self, runtime_checkable

from pysatl_numeric.types import Interval1D

if TYPE_CHECKING:
    from typing import Any


@runtime_checkable
class Constraint(Protocol):
    """Protocol for value-level constraints on parameters."""

    @property
    def description(self) -> str:
        """Human-readable description of the admissible domain."""
        ...

    def is_correct(self, value: float) -> bool:
        """Check if the constraint accepts ``value``."""
        ...

    def clone(self) -> Self:
        """Return an independent copy with identical behaviour."""
        ...


class ConstraintError(ValueError):
    """
    Raised when a parameter value is rejected by its constraint.

    Parameters
    ----------
    constraint : Constraint
        The rejecting constraint.
    value : float
        The rejected value.
    parameter_name : str, optional
        Name of the parameter the value was meant for.
    """

    def __init__(self, constraint: Constraint, value: float, parameter_name: str = "") -> None:
        self.constraint = constraint
        self.value = value
        self.parameter_name = parameter_name
        target = parameter_name or "value"
        super().__init__(
            f'Constraint "{constraint.description}" does not hold for {target} = {value!r}'
        )


@dataclass(frozen=True, slots=True)
class IntervalConstraint(Interval1D):
    """
    Constraint restricting values to an interval of the real line.

    Parameters
    ----------
    left : float, default=-inf
        Lower bound.
    right : float, default=inf
        Upper bound.
    left_closed : bool, default=True
        Whether the lower bound itself is admissible.
    right_closed : bool, default=True
        Whether the upper bound itself is admissible.
    precision : float, default=0.0
        Distance used to step inside an open bound when reporting the nearest
        admissible value.

    Notes
    -----
    Instances are immutable: the admissible domain is fixed at construction,
    which makes them safe to share between any number of parameters.
    """

    precision: float = 0.0

    @classmethod
    def half_line(cls, bound: float, positive: bool = True, closed: bool = True) -> Self:
        """
        Build a half-line constraint.

        Parameters
        ----------
        bound : float
            The finite endpoint.
        positive : bool, default=True
            ``True`` for ``[bound, inf)``, ``False`` for ``(-inf, bound]``.
        closed : bool, default=True
            Whether ``bound`` itself is admissible.
        """
        if positive:
            return cls(left=bound, left_closed=closed)
        return cls(right=bound, right_closed=closed)

    @property
    def description(self) -> str:
        """Interval notation of the admissible domain, e.g. ``]0, inf[``."""
        left = "[" if self.left_closed else "]"
        right = "]" if self.right_closed else "["
        return f"{left}{self.left:g}, {self.right:g}{right}"

    def is_correct(self, value: float) -> bool:
        if isnan(value):
            return False
        return bool(self.contains(value))

    @staticmethod
    def _check_not_nan(value: float) -> None:
        if isnan(value):
            raise ValueError("NaN has no nearest admissible value")

    def includes(self, lower: float, upper: float) -> bool:
        """Check if every value of the closed range ``[lower, upper]`` is admissible."""
        return lower <= upper and self.is_correct(lower) and self.is_correct(upper)

    def get_limit(self, value: float) -> float:
        """
        Return the bound closest to an out-of-domain ``value``.

        Values already inside the domain are returned unchanged.

        Raises
        ------
        ValueError
            If ``value`` is NaN.
        """
        self._check_not_nan(value)
        if self.is_correct(value):
            return value
        if value <= self.left:
            return self.left
        return self.right

    def get_accepted_limit(self, value: float) -> float:
        """
        Return the admissible value closest to ``value``.

        Differs from :meth:`get_limit` on open bounds, which are moved inside the
        domain by ``precision``.

        Raises
        ------
        ValueError
            If ``value`` is NaN.
        """
        self._check_not_nan(value)
        if self.is_correct(value):
            return value
        if value <= self.left:
            return self.left if self.left_closed else self.left + self.precision
        return self.right if self.right_closed else self.right - self.precision

    def intersect_with(self, other: Any) -> IntervalConstraint | None:
        """
        Intersect two interval constraints.

        Returns
        -------
        IntervalConstraint or None
            The intersection, or ``None`` if ``other`` is not an interval
            constraint.
        """
        if not isinstance(other, IntervalConstraint):
            return None

        if self.left > other.left:
            left, left_closed = self.left, self.left_closed
        elif self.left < other.left:
            left, left_closed = other.left, other.left_closed
        else:
            left, left_closed = self.left, self.left_closed and other.left_closed

        if self.right < other.right:
            right, right_closed = self.right, self.right_closed
        elif self.right > other.right:
            right, right_closed = other.right, other.right_closed
        else:
            right, right_closed = self.right, self.right_closed and other.right_closed

        return IntervalConstraint(
            left=left,
            right=right,
            left_closed=left_closed,
            right_closed=right_closed,
            precision=max(self.precision, other.precision),
        )

    def clone(self) -> IntervalConstraint:
        return replace(self)

    def __str__(self) -> str:
        return self.description


R_PLUS = IntervalConstraint(left=0.0, left_closed=True)
"""Non-negative reals ``[0, inf)``."""

R_PLUS_STAR = IntervalConstraint(left=0.0, left_closed=False)
"""Strictly positive reals ``(0, inf)``."""

R_MINUS = IntervalConstraint(right=0.0, right_closed=True)
"""Non-positive reals ``(-inf, 0]``."""

R_MINUS_STAR = IntervalConstraint(right=0.0, right_closed=False)
"""Strictly negative reals ``(-inf, 0)``."""

PROP_CONSTRAINT_IN = IntervalConstraint(left=0.0, right=1.0)
"""Proportions including the boundaries ``[0, 1]``."""

PROP_CONSTRAINT_EX = IntervalConstraint(left=0.0, right=1.0, left_closed=False, right_closed=False)
"""Proportions excluding the boundaries ``(0, 1)``."""

REAL_LINE = IntervalConstraint(left=-inf, right=inf)
"""Every finite real number."""


__all__ = [
    "Constraint",
    "ConstraintError",
    "IntervalConstraint",
    "R_PLUS",
    "R_PLUS_STAR",
    "R_MINUS",
    "R_MINUS_STAR",
    "PROP_CONSTRAINT_IN",
    "PROP_CONSTRAINT_EX",
    "REAL_LINE",
]
