"""
Ordered, name-unique collections of parameters.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from pysatl_numeric.parameters.parameter import Parameter
    from pysatl_numeric.types import ParameterName


class ParameterList:
    """
    Ordered collection of parameters with unique names.

    Parameters
    ----------
    parameters : Iterable[Parameter], optional
        Initial parameters. Each is cloned on insertion.

    Notes
    -----
    :meth:`add_parameter` stores a clone, so the list never aliases the
    caller's object. :meth:`share_parameter` stores the given instance as is,
    which lets several lists observe the same parameter.

    Lookups use the *current* name of each stored parameter, so renaming a
    parameter through :attr:`Parameter.name` is reflected immediately.
    """

    __slots__ = ("_parameters",)

    def __init__(self, parameters: Iterable[Parameter] = ()) -> None:
        self._parameters: list[Parameter] = []
        self.add_parameters(parameters)

    def _find(self, name: object) -> Parameter | None:
        for parameter in self._parameters:
            if parameter.name == name:
                return parameter
        return None

    def _check_new_name(self, name: ParameterName) -> None:
        if self._find(name) is not None:
            raise ValueError(f"Parameter '{name}' is already in the list.")

    def add_parameter(self, parameter: Parameter) -> Parameter:
        """
        Insert a clone of ``parameter``.

        Returns
        -------
        Parameter
            The stored clone.

        Raises
        ------
        ValueError
            If a parameter with the same name is already in the list.
        """
        self._check_new_name(parameter.name)
        stored = parameter.clone()
        self._parameters.append(stored)
        return stored

    def share_parameter(self, parameter: Parameter) -> Parameter:
        """Insert ``parameter`` itself, without copying it."""
        self._check_new_name(parameter.name)
        self._parameters.append(parameter)
        return parameter

    def add_parameters(self, parameters: Iterable[Parameter]) -> None:
        for parameter in parameters:
            self.add_parameter(parameter)

    def get_parameter(self, name: ParameterName) -> Parameter:
        """
        Fetch a parameter by name.

        Raises
        ------
        KeyError
            If no parameter has that name.
        """
        parameter = self._find(name)
        if parameter is None:
            raise KeyError(f"Parameter '{name}' not found.")
        return parameter

    def has_parameter(self, name: ParameterName) -> bool:
        return self._find(name) is not None

    def holds(self, parameter: Parameter) -> bool:
        """Check whether this very instance is stored in the list."""
        return any(stored is parameter for stored in self._parameters)

    def get_parameter_value(self, name: ParameterName) -> float:
        return self.get_parameter(name).value

    def set_parameter_value(self, name: ParameterName, value: float) -> None:
        self.get_parameter(name).value = value

    def delete_parameter(self, name: ParameterName) -> Parameter:
        """Remove a parameter from the list and return it."""
        parameter = self.get_parameter(name)
        self._parameters = [p for p in self._parameters if p is not parameter]
        return parameter

    @property
    def parameter_names(self) -> list[ParameterName]:
        return [p.name for p in self._parameters]

    def sub_list(self, names: Iterable[ParameterName]) -> ParameterList:
        """Return a list of clones of the named parameters, in the given order."""
        return ParameterList(self.get_parameter(name) for name in names)

    def get_common_parameters_with(self, other: ParameterList) -> ParameterList:
        """Return clones of the parameters whose names also appear in ``other``."""
        return ParameterList(p for p in self if p.name in other)

    def match_parameters_values(self, other: ParameterList) -> ParameterList:
        """
        Copy values from same-named parameters of ``other``.

        Returns
        -------
        ParameterList
            Clones of the parameters whose value actually changed.

        Raises
        ------
        ConstraintError
            If a value is rejected. Values matched before the failing one are
            kept.
        """
        changed = ParameterList()
        for source in other:
            target = self._find(source.name)
            if target is None:
                continue
            before = target.value
            target.value = source.value
            if target.value != before:
                changed.add_parameter(target)
        return changed

    def clone(self) -> ParameterList:
        return ParameterList(self)

    def __len__(self) -> int:
        return len(self._parameters)

    def __iter__(self) -> Iterator[Parameter]:
        return iter(list(self._parameters))

    def __contains__(self, name: object) -> bool:
        return self._find(name) is not None

    def __repr__(self) -> str:
        items = ", ".join(f"{p.name}={p.value!r}" for p in self)
        return f"ParameterList({items})"


__all__ = [
    "ParameterList",
]
