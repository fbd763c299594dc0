"""
Objects governed by a namespaced set of parameters.

:class:`AbstractParametrizable` owns a :class:`ParameterList` and listens to
every parameter in it. Whatever route a value change takes (a direct
assignment on a parameter, :meth:`set_parameter_value`, a batch update), the
owner is told through a single hook, :meth:`fire_parameter_changed`, which
receives the parameters that changed.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import copy
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Self

from pysatl_numeric.parameters.parameter_list import ParameterList

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from pysatl_numeric.parameters.events import ParameterEvent
    from pysatl_numeric.parameters.parameter import Parameter
    from pysatl_numeric.types import ParameterName

logger = logging.getLogger(__name__)


class _ChangeForwarder:
    """Shared listener relaying value changes to the owning parametrizable."""

    __slots__ = ("_owner",)

    def __init__(self, owner: AbstractParametrizable) -> None:
        self._owner = owner

    @property
    def id(self) -> str:
        return self._owner.listener_id

    def parameter_name_changed(self, event: ParameterEvent) -> None:
        pass

    def parameter_value_changed(self, event: ParameterEvent) -> None:
        self._owner._parameter_value_changed(event.parameter)

    def clone(self) -> _ChangeForwarder:
        return _ChangeForwarder(self._owner)


class AbstractParametrizable:
    """
    Base class for objects depending on a set of parameters.

    Parameters
    ----------
    namespace : str, default=""
        Prefix of every parameter name (e.g. ``"Exponential."``). Lookups accept
        both the full and the short name.

    Notes
    -----
    Subclasses register their parameters with :meth:`add_parameter_` and react
    to changes by overriding :meth:`fire_parameter_changed`.
    """

    def __init__(self, namespace: str = "") -> None:
        self._namespace = namespace
        self._parameters = ParameterList()
        self._forwarder = _ChangeForwarder(self)
        self._pending: dict[ParameterName, Parameter] | None = None

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def listener_id(self) -> str:
        """Id of the listener this object attaches to each of its parameters."""
        return f"{self._namespace}parametrizable"

    @property
    def parameters(self) -> ParameterList:
        """The live list of parameters (full names)."""
        return self._parameters

    def add_parameter_(self, parameter: Parameter) -> Parameter:
        """
        Register a parameter.

        A clone of ``parameter`` is stored and returned; changes to the stored
        parameter are reported to :meth:`fire_parameter_changed`.
        """
        stored = self._parameters.add_parameter(parameter)
        stored.add_parameter_listener(self._forwarder, attach=False)
        return stored

    def resolve_name(self, name: ParameterName) -> ParameterName:
        """
        Return the full name of a parameter given its full or short name.

        Raises
        ------
        KeyError
            If no parameter matches.
        """
        if name in self._parameters:
            return name
        full_name = self._namespace + name
        if full_name in self._parameters:
            return full_name
        raise KeyError(f"Parameter '{name}' not found in namespace '{self._namespace}'.")

    def get_parameter_name_without_namespace(self, name: ParameterName) -> ParameterName:
        if self._namespace and name.startswith(self._namespace):
            return name[len(self._namespace) :]
        return name

    def get_parameter(self, name: ParameterName) -> Parameter:
        return self._parameters.get_parameter(self.resolve_name(name))

    def has_parameter(self, name: ParameterName) -> bool:
        try:
            self.resolve_name(name)
        except KeyError:
            return False
        return True

    def get_parameter_value(self, name: ParameterName) -> float:
        return self.get_parameter(name).value

    def set_parameter_value(self, name: ParameterName, value: float) -> None:
        """
        Set one parameter value.

        Raises
        ------
        KeyError
            If the parameter is unknown.
        ConstraintError
            If the value is rejected; nothing is changed then.
        """
        self.get_parameter(name).value = value

    def set_parameters_values(self, parameters: Iterable[Parameter]) -> None:
        """
        Copy values of all ``parameters`` into this object's parameters.

        Every name must be known. :meth:`fire_parameter_changed` is called once
        with the parameters that actually changed.
        """
        parameters = list(parameters)
        targets = [self.get_parameter(p.name) for p in parameters]
        with self._batch_changes():
            for target, source in zip(targets, parameters, strict=True):
                target.value = source.value

    def match_parameters_values(self, parameters: Iterable[Parameter]) -> bool:
        """
        Copy values of the ``parameters`` this object knows, ignore the others.

        Returns
        -------
        bool
            ``True`` if at least one value changed.
        """
        with self._batch_changes() as changed:
            for source in parameters:
                if self.has_parameter(source.name):
                    self.get_parameter(source.name).value = source.value
        return bool(changed)

    def fire_parameter_changed(self, parameters: ParameterList) -> None:
        """
        React to changed parameters. Does nothing by default.

        Parameters
        ----------
        parameters : ParameterList
            The parameters whose value changed, already committed.
        """

    @contextmanager
    def _batch_changes(self) -> Iterator[dict[ParameterName, Parameter]]:
        if self._pending is not None:
            yield self._pending
            return
        self._pending = {}
        try:
            yield self._pending
        finally:
            pending, self._pending = self._pending, None
            if pending:
                self._fire(pending.values())

    def _parameter_value_changed(self, parameter: Parameter) -> None:
        # copies handed out by the list keep the shared forwarder
        if not self._parameters.holds(parameter):
            return
        if self._pending is not None:
            self._pending[parameter.name] = parameter
        else:
            self._fire((parameter,))

    def _fire(self, parameters: Iterable[Parameter]) -> None:
        changed = ParameterList()
        for parameter in parameters:
            changed.share_parameter(parameter)
        logger.debug("%s: parameters changed %s", type(self).__name__, changed.parameter_names)
        self.fire_parameter_changed(changed)

    def clone(self) -> Self:
        """
        Copy this object with independent parameters.

        The copied parameters stop reporting to this object and report to the
        copy instead.
        """
        new = copy.copy(self)
        new._parameters = ParameterList()
        new._forwarder = _ChangeForwarder(new)
        new._pending = None
        for parameter in self._parameters:
            stored = new._parameters.add_parameter(parameter)
            stored.remove_parameter_listener(self.listener_id)
            stored.add_parameter_listener(new._forwarder, attach=False)
        return new


__all__ = [
    "AbstractParametrizable",
]
