"""
Runtime values of derived structures.

Objects are right-nested pairs of fields ending in the empty tuple:

    (Field("label", "root"), (Field("children", []), ()))

Tags, recursion wrappers and the two arms of an either are small frozen
dataclasses. They are generic so that generated type aliases can be
checked statically, e.g. Field[Literal["label"], str].
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

K = TypeVar("K", bound=str)
T = TypeVar("T")


@dataclass(frozen=True)
class Field(Generic[K, T]):
    """An object property: its name and its value."""

    key: K
    value: T


@dataclass(frozen=True)
class Tag(Generic[K]):
    """A constant string value. Carries nothing but its literal."""

    literal: K


@dataclass(frozen=True)
class Rec(Generic[T]):
    """Explicit indirection at each level of a recursive structure."""

    value: T

    @property
    def un_rec(self) -> T:
        return self.value


@dataclass(frozen=True)
class Left(Generic[T]):
    """The first alternative of an either."""

    value: T


@dataclass(frozen=True)
class Right(Generic[T]):
    """The second alternative of an either."""

    value: T
