from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Mapping
from typing import Any

import numpy as np

from pysatl_numeric.distributions import ContinuousDiscreteDistribution
from pysatl_numeric.parameters import (
    AbstractParametrizable,
    IntervalConstraint,
    Parameter,
    ParameterEvent,
    ParameterList,
)
from pysatl_numeric.types import CharacteristicName, GenericCharacteristicName, ScalarFunc


class RecordingListener:
    """Listener appending ``(id, kind, observed)`` tuples to a (possibly shared) log."""

    def __init__(self, listener_id: str, log: list[tuple[str, str, Any]] | None = None) -> None:
        self._id = listener_id
        self.log: list[tuple[str, str, Any]] = [] if log is None else log

    @property
    def id(self) -> str:
        return self._id

    def parameter_name_changed(self, event: ParameterEvent) -> None:
        self.log.append((self._id, "name", event.parameter.name))

    def parameter_value_changed(self, event: ParameterEvent) -> None:
        self.log.append((self._id, "value", event.parameter.value))

    def clone(self) -> RecordingListener:
        return RecordingListener(self._id, list(self.log))


class FailingListener(RecordingListener):
    def parameter_value_changed(self, event: ParameterEvent) -> None:
        raise RuntimeError("listener failure")


class MutableLowerBoundConstraint:
    """Constraint ``x > lower`` whose bound can be changed after construction."""

    def __init__(self, lower: float) -> None:
        self.lower = lower

    @property
    def description(self) -> str:
        return f"x > {self.lower}"

    def is_correct(self, value: float) -> bool:
        return value > self.lower

    def clone(self) -> MutableLowerBoundConstraint:
        return MutableLowerBoundConstraint(self.lower)


class NotClonable:
    """Object without a ``clone`` capability."""

    id = "not-clonable"


class RecordingParametrizable(AbstractParametrizable):
    """Parametrizable with parameters ``Test.a`` (positive) and ``Test.b`` (free)."""

    def __init__(self) -> None:
        super().__init__("Test.")
        positive = IntervalConstraint(left=0.0, left_closed=False)
        self.add_parameter_(Parameter("Test.a", 1.0, positive))
        self.add_parameter_(Parameter("Test.b", 0.0))
        self.fired: list[list[str]] = []

    def fire_parameter_changed(self, parameters: ParameterList) -> None:
        self.fired.append(parameters.parameter_names)


class UniformCdfOnlyDistribution(ContinuousDiscreteDistribution):
    """
    Uniform distribution on ``[0, width]`` that only provides a ``cdf``.

    ``ppf`` and ``partial_expectation`` have to be derived numerically.
    """

    def __init__(self, n: int, width: float = 1.0, median: bool = False) -> None:
        super().__init__(
            n,
            namespace="Uniform.",
            support=IntervalConstraint(left=0.0, right=width),
            median=median,
        )
        self._width = width
        self.discretize()

    def _analytical_characteristics(self) -> Mapping[GenericCharacteristicName, ScalarFunc]:
        width = self._width

        def cdf(x: float) -> float:
            return float(np.clip(x / width, 0.0, 1.0))

        return {CharacteristicName.CDF: cdf}


class PdfOnlyDistribution(ContinuousDiscreteDistribution):
    """Distribution lacking a ``cdf``; cannot be discretized."""

    def _analytical_characteristics(self) -> Mapping[GenericCharacteristicName, ScalarFunc]:
        return {CharacteristicName.PDF: lambda x: 1.0}
