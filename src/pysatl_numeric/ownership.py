"""
Ownership Slots
===============

Per-reference ownership of polymorphic collaborators (constraints, listeners):

- :class:`Owned`: the holder exclusively owns the object; copying the holder
  deep-clones it through :meth:`Clonable.clone`.
- :class:`Shared`: the holder keeps a non-owning reference; copying the holder
  yields another reference to the *same* object.

Notes
-----
- The mode is chosen per slot at construction time and never changes
  afterwards (slots are frozen).
- Lifetime follows reachability: an owned object is referenced only through its
  slot and goes away with its holder, a shared object lives as long as any of
  its other referents.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import Protocol, Self, runtime_checkable


@runtime_checkable
class Clonable(Protocol):
    """Protocol for objects able to produce an independent deep copy of themselves."""

    def clone(self) -> Self: ...


@dataclass(frozen=True, slots=True)
class Owned[T]:
    """
    Exclusively owned object.

    Parameters
    ----------
    obj : T
        The owned object. Must implement :class:`Clonable`.

    Raises
    ------
    TypeError
        If ``obj`` has no ``clone`` capability.
    """

    obj: T

    def __post_init__(self) -> None:
        if not isinstance(self.obj, Clonable):
            raise TypeError(
                f"{type(self.obj).__name__} must implement clone() to be held in an owned slot"
            )

    @property
    def owned(self) -> bool:
        return True

    def copy(self) -> Owned[T]:
        """Return a slot holding a deep clone of the object."""
        return Owned(self.obj.clone())  # type: ignore[attr-defined]

    def release(self) -> T:
        """Hand the object over to the caller, who becomes its sole owner."""
        return self.obj


@dataclass(frozen=True, slots=True)
class Shared[T]:
    """
    Non-owning reference to an object whose lifetime is managed elsewhere.

    Parameters
    ----------
    obj : T
        The referenced object.
    """

    obj: T

    @property
    def owned(self) -> bool:
        return False

    def copy(self) -> Shared[T]:
        """Return the slot itself: shared references are copied by identity."""
        return self

    def release(self) -> T:
        return self.obj


type Slot[T] = Owned[T] | Shared[T]


def make_slot[T](obj: T, owned: bool) -> Slot[T]:
    """
    Wrap ``obj`` into an owned or a shared slot.

    Parameters
    ----------
    obj : T
        Object to hold.
    owned : bool
        ``True`` for exclusive ownership (deep copy on copy), ``False`` for a
        shared reference.

    Returns
    -------
    Owned[T] or Shared[T]
    """
    return Owned(obj) if owned else Shared(obj)


def copy_slot[T](slot: Slot[T] | None) -> Slot[T] | None:
    """
    Copy a slot according to its ownership mode.

    Owned slots are deep-cloned, shared slots keep referencing the same object
    and an absent slot stays absent.
    """
    if slot is None:
        return None
    return slot.copy()


__all__ = [
    "Clonable",
    "Owned",
    "Shared",
    "Slot",
    "make_slot",
    "copy_slot",
]
