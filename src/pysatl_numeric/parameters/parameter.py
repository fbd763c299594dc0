"""
Named numeric parameters with constraints and change notification.

A :class:`Parameter` holds a value guarded by an optional constraint and an
ordered list of listeners notified synchronously after every committed change.
Both the constraint and each listener are held in an ownership slot
(:mod:`pysatl_numeric.ownership`), so copying a parameter deep-clones what it
owns and keeps referencing what it shares.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

from pysatl_numeric.ownership import copy_slot, make_slot
from pysatl_numeric.parameters.constraints import ConstraintError
from pysatl_numeric.parameters.events import ParameterEvent, ParameterListener

if TYPE_CHECKING:
    from pysatl_numeric.ownership import Slot
    from pysatl_numeric.parameters.constraints import Constraint


class Parameter:
    """
    A named real value with an optional constraint and listeners.

    Parameters
    ----------
    name : str, default=""
        Parameter name.
    value : float, default=0.0
        Initial value.
    constraint : Constraint, optional
        Constraint the value must satisfy at all times.
    attach_constraint : bool, default=True
        If ``True`` the parameter owns a clone of ``constraint`` (cloned again
        whenever the parameter is copied), otherwise ``constraint`` itself is
        shared.
    precision : float, default=0.0
        Value changes of at most ``precision / 2`` are ignored.

    Raises
    ------
    ConstraintError
        If ``value`` does not satisfy ``constraint``.
    """

    __slots__ = ("_name", "_value", "_precision", "_constraint", "_listeners")

    def __init__(
        self,
        name: str = "",
        value: float = 0.0,
        constraint: Constraint | None = None,
        attach_constraint: bool = True,
        precision: float = 0.0,
    ) -> None:
        self._name = name
        self._precision = float(precision)
        self._listeners: list[Slot[ParameterListener]] = []
        self._constraint: Slot[Constraint] | None = None
        if constraint is not None:
            if not constraint.is_correct(value):
                raise ConstraintError(constraint, value, name)
            self._constraint = make_slot(constraint, attach_constraint).copy()
        self._value = float(value)

    @property
    def name(self) -> str:
        """Parameter name."""
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self._name = name
        event = ParameterEvent(self)
        for listener in self.listeners:
            listener.parameter_name_changed(event)

    @property
    def value(self) -> float:
        """Current value. Assignment validates, commits, then notifies."""
        return self._value

    @value.setter
    def value(self, value: float) -> None:
        if abs(value - self._value) <= self._precision / 2:
            return
        constraint = self.constraint
        if constraint is not None and not constraint.is_correct(value):
            raise ConstraintError(constraint, value, self._name)
        self._value = float(value)
        event = ParameterEvent(self)
        for listener in self.listeners:
            listener.parameter_value_changed(event)

    @property
    def precision(self) -> float:
        """Tolerance below which value changes are ignored."""
        return self._precision

    @precision.setter
    def precision(self, precision: float) -> None:
        self._precision = float(precision)

    # ------------------------------------------------------------------ #
    # Constraint
    # ------------------------------------------------------------------ #

    @property
    def constraint(self) -> Constraint | None:
        """The attached constraint, if any."""
        return None if self._constraint is None else self._constraint.obj

    def has_constraint(self) -> bool:
        return self._constraint is not None

    def owns_constraint(self) -> bool:
        """Check whether the constraint is owned (rather than shared)."""
        return self._constraint is not None and self._constraint.owned

    def remove_constraint(self) -> Constraint | None:
        """
        Detach the constraint and hand it to the caller.

        Returns
        -------
        Constraint or None
            The former constraint. If it was owned, ownership moves to the
            caller; a shared constraint is simply no longer referenced.
        """
        slot, self._constraint = self._constraint, None
        return None if slot is None else slot.release()

    def set_constraint(self, constraint: Constraint | None, attach: bool = False) -> None:
        """
        Replace the constraint.

        Parameters
        ----------
        constraint : Constraint or None
            New constraint; ``None`` removes the current one.
        attach : bool, default=False
            ``True`` to take ownership of ``constraint`` itself (the caller
            hands it over), ``False`` to share it.

        Raises
        ------
        ConstraintError
            If the current value violates ``constraint``. The previous
            constraint is kept in that case.
        """
        if constraint is None:
            self._constraint = None
            return
        if not constraint.is_correct(self._value):
            raise ConstraintError(constraint, self._value, self._name)
        self._constraint = make_slot(constraint, attach)

    # ------------------------------------------------------------------ #
    # Listeners
    # ------------------------------------------------------------------ #

    @property
    def listeners(self) -> tuple[ParameterListener, ...]:
        """Attached listeners in notification order."""
        return tuple(slot.obj for slot in self._listeners)

    def add_parameter_listener(self, listener: ParameterListener, attach: bool = True) -> None:
        """
        Append a listener.

        Parameters
        ----------
        listener : ParameterListener
            Listener to notify after every change.
        attach : bool, default=True
            ``True`` to own the listener (cloned along with the parameter),
            ``False`` to share it.

        Raises
        ------
        TypeError
            If ``listener`` does not implement :class:`ParameterListener`.
        """
        if not isinstance(listener, ParameterListener):
            raise TypeError(f"{type(listener).__name__} is not a ParameterListener")
        self._listeners.append(make_slot(listener, attach))

    def remove_parameter_listener(self, listener_id: str) -> None:
        """Remove every listener whose id equals ``listener_id``."""
        self._listeners = [slot for slot in self._listeners if slot.obj.id != listener_id]

    def has_parameter_listener(self, listener_id: str) -> bool:
        return any(slot.obj.id == listener_id for slot in self._listeners)

    # ------------------------------------------------------------------ #
    # Copy
    # ------------------------------------------------------------------ #

    def clone(self) -> Parameter:
        """
        Copy the parameter.

        Name, value and precision are copied verbatim; owned constraint and
        listeners are cloned, shared ones are referenced by the copy as well.
        """
        new = Parameter.__new__(Parameter)
        new._name = self._name
        new._value = self._value
        new._precision = self._precision
        new._constraint = copy_slot(self._constraint)
        new._listeners = [slot.copy() for slot in self._listeners]
        return new

    __copy__ = clone

    def __repr__(self) -> str:
        return f"Parameter(name={self._name!r}, value={self._value!r})"


__all__ = [
    "Parameter",
]
