"""
PySATL Numeric
==============

Numeric parameters with constraints, ownership-aware copying and change
notification, and the discretization of continuous distributions driven by
those parameters.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from importlib.metadata import version

from .distributions import *
from .distributions import __all__ as _distr_all
from .ownership import *
from .ownership import __all__ as _ownership_all
from .parameters import *
from .parameters import __all__ as _parameters_all
from .types import *
from .types import __all__ as _types_all

__version__ = version("pysatl-numeric")
__all__ = [
    "__version__",
    *_distr_all,
    *_ownership_all,
    *_parameters_all,
    *_types_all,
]

del _distr_all
del _ownership_all
del _parameters_all
del _types_all
