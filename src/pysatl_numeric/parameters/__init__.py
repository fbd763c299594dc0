"""
Parameters subpackage

Named numeric parameters and the machinery around them:

- constraints on parameter values (:mod:`.constraints`);
- change events and listeners (:mod:`.events`);
- the parameter itself (:mod:`.parameter`);
- ordered parameter collections (:mod:`.parameter_list`);
- objects governed by a namespaced parameter set (:mod:`.parametrizable`).
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .constraints import (
    PROP_CONSTRAINT_EX,
    PROP_CONSTRAINT_IN,
    R_MINUS,
    R_MINUS_STAR,
    R_PLUS,
    R_PLUS_STAR,
    REAL_LINE,
    Constraint,
    ConstraintError,
    IntervalConstraint,
)
from .events import CallbackListener, ParameterEvent, ParameterListener
from .parameter import Parameter
from .parameter_list import ParameterList
from .parametrizable import AbstractParametrizable

__all__ = [
    # constraints
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
    # events
    "ParameterEvent",
    "ParameterListener",
    "CallbackListener",
    # parameters
    "Parameter",
    "ParameterList",
    "AbstractParametrizable",
]
