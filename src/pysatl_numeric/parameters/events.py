"""
Parameter change events and the listener capability.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, Self, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable

    from pysatl_numeric.parameters.parameter import Parameter

    type EventHandler = Callable[[ParameterEvent], None]


@dataclass(frozen=True, slots=True)
class ParameterEvent:
    """
    Notification envelope delivered synchronously to listeners.

    Parameters
    ----------
    parameter : Parameter
        The parameter whose name or value has just changed. Listeners observe
        the already committed state.
    """

    parameter: Parameter


@runtime_checkable
class ParameterListener(Protocol):
    """
    Protocol for objects reacting to parameter modifications.

    Listeners are identified by ``id``; the identifier need not be unique, and
    listeners sharing an id are removed together.
    """

    @property
    def id(self) -> str: ...

    def parameter_name_changed(self, event: ParameterEvent) -> None: ...

    def parameter_value_changed(self, event: ParameterEvent) -> None: ...

    def clone(self) -> Self: ...


class CallbackListener:
    """
    Listener dispatching events to plain callables.

    Parameters
    ----------
    listener_id : str
        Identifier used for bulk removal.
    on_value_changed : Callable[[ParameterEvent], None], optional
        Called after every committed value change.
    on_name_changed : Callable[[ParameterEvent], None], optional
        Called after every rename.

    Notes
    -----
    :meth:`clone` copies the listener but not the callables: both copies call
    the same handlers.
    """

    __slots__ = ("_id", "_on_name_changed", "_on_value_changed")

    def __init__(
        self,
        listener_id: str,
        on_value_changed: EventHandler | None = None,
        on_name_changed: EventHandler | None = None,
    ) -> None:
        self._id = listener_id
        self._on_value_changed = on_value_changed
        self._on_name_changed = on_name_changed

    @property
    def id(self) -> str:
        return self._id

    def parameter_name_changed(self, event: ParameterEvent) -> None:
        if self._on_name_changed is not None:
            self._on_name_changed(event)

    def parameter_value_changed(self, event: ParameterEvent) -> None:
        if self._on_value_changed is not None:
            self._on_value_changed(event)

    def clone(self) -> CallbackListener:
        return CallbackListener(self._id, self._on_value_changed, self._on_name_changed)

    def __repr__(self) -> str:
        return f"CallbackListener(id={self._id!r})"


__all__ = [
    "ParameterEvent",
    "ParameterListener",
    "CallbackListener",
]
