"""
Structure descriptors.

A structure descriptor is the representation derived from a
specification. It describes the Python values that are shaped correctly
for that specification and can check a value against itself.
"""

from __future__ import annotations

import datetime
import decimal
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from ..errors import SpecificationError, StructureError
from ..specification.nodes import Specification
from .values import Field, Left, Rec, Right, Tag

# (id, id) pairs of wrappers whose payloads are being compared
_ASSUMED_EQUAL: set[tuple[int, int]] = set()


class StructureType(ABC):
    """Abstract base class for structure descriptors."""

    @abstractmethod
    def check(self, value: Any, path: str = "$") -> None:
        """
        Check that a value is an instance of this structure.

        Args:
            value: The value to check
            path: Location of the value (for error messages)

        Raises:
            StructureError: If the value is not shaped correctly
        """

    @abstractmethod
    def describe(self) -> str:
        """Return a compact, finite, human-readable rendering."""

    def conforms(self, value: Any) -> bool:
        try:
            self.check(value)
        except StructureError:
            return False
        return True


def _type_name(value: Any) -> str:
    return type(value).__name__


@dataclass(frozen=True)
class UnitType(StructureType):
    """The empty object, represented by ()."""

    def check(self, value: Any, path: str = "$") -> None:
        if not (isinstance(value, tuple) and len(value) == 0):
            raise StructureError(f"expected end of object (), got {value!r}", path)

    def describe(self) -> str:
        return "{}"


@dataclass(frozen=True)
class FieldsType(StructureType):
    """A field followed by the remaining fields of an object.

    Values are pairs: (Field(key, value), rest).
    """

    key: str
    value_type: StructureType
    rest: StructureType

    def fields(self) -> list[tuple[str, StructureType]]:
        """Return (key, type) for this field and every following one, in order."""
        result = []
        current: StructureType = self
        while isinstance(current, FieldsType):
            result.append((current.key, current.value_type))
            current = current.rest
        return result

    def keys(self) -> list[str]:
        return [key for key, _ in self.fields()]

    def check(self, value: Any, path: str = "$") -> None:
        if not (isinstance(value, tuple) and len(value) == 2):
            raise StructureError(f"expected a (Field, rest) pair for '{self.key}', got {value!r}", path)
        head, rest = value
        if not isinstance(head, Field):
            raise StructureError(f"expected Field '{self.key}', got {_type_name(head)}", path)
        if head.key != self.key:
            raise StructureError(f"expected Field '{self.key}', got Field '{head.key}'", path)
        self.value_type.check(head.value, f"{path}.{self.key}")
        self.rest.check(rest, path)

    def describe(self) -> str:
        members = ", ".join(f"{key}: {value_type.describe()}" for key, value_type in self.fields())
        return "{" + members + "}"


@dataclass(frozen=True)
class TextType(StructureType):
    """A JSON string, represented by str."""

    def check(self, value: Any, path: str = "$") -> None:
        if not isinstance(value, str):
            raise StructureError(f"expected str, got {_type_name(value)}", path)

    def describe(self) -> str:
        return "Text"


@dataclass(frozen=True)
class DecimalType(StructureType):
    """A JSON number, represented by decimal.Decimal."""

    def check(self, value: Any, path: str = "$") -> None:
        if not isinstance(value, decimal.Decimal):
            raise StructureError(f"expected Decimal, got {_type_name(value)}", path)
        if not value.is_finite():
            raise StructureError(f"expected a finite Decimal, got {value}", path)

    def describe(self) -> str:
        return "Decimal"


@dataclass(frozen=True)
class IntType(StructureType):
    """A JSON integer, represented by int."""

    def check(self, value: Any, path: str = "$") -> None:
        # bool is a subclass of int
        if not isinstance(value, int) or isinstance(value, bool):
            raise StructureError(f"expected int, got {_type_name(value)}", path)

    def describe(self) -> str:
        return "Int"


@dataclass(frozen=True)
class BoolType(StructureType):
    """A JSON boolean, represented by bool."""

    def check(self, value: Any, path: str = "$") -> None:
        if not isinstance(value, bool):
            raise StructureError(f"expected bool, got {_type_name(value)}", path)

    def describe(self) -> str:
        return "Bool"


@dataclass(frozen=True)
class TimestampType(StructureType):
    """An ISO-8601 timestamp, represented by datetime.datetime."""

    def check(self, value: Any, path: str = "$") -> None:
        if not isinstance(value, datetime.datetime):
            raise StructureError(f"expected datetime, got {_type_name(value)}", path)

    def describe(self) -> str:
        return "Timestamp"


@dataclass(frozen=True)
class ListType(StructureType):
    """A JSON array, represented by a list of elements."""

    element: StructureType

    def check(self, value: Any, path: str = "$") -> None:
        if not isinstance(value, list):
            raise StructureError(f"expected list, got {_type_name(value)}", path)
        for index, item in enumerate(value):
            self.element.check(item, f"{path}[{index}]")

    def describe(self) -> str:
        return f"[{self.element.describe()}]"


@dataclass(frozen=True)
class MaybeType(StructureType):
    """A nullable value; None stands for JSON null."""

    inner: StructureType

    def check(self, value: Any, path: str = "$") -> None:
        if value is not None:
            self.inner.check(value, path)

    def describe(self) -> str:
        return f"Maybe {self.inner.describe()}"


@dataclass(frozen=True)
class EitherType(StructureType):
    """Exactly one of two alternatives, represented by Left or Right."""

    left: StructureType
    right: StructureType

    def check(self, value: Any, path: str = "$") -> None:
        if isinstance(value, Left):
            self.left.check(value.value, path)
        elif isinstance(value, Right):
            self.right.check(value.value, path)
        else:
            raise StructureError(f"expected Left or Right, got {_type_name(value)}", path)

    def describe(self) -> str:
        return f"Either({self.left.describe()}, {self.right.describe()})"


@dataclass(frozen=True)
class TagType(StructureType):
    """A constant string, represented by Tag(literal)."""

    literal: str

    def check(self, value: Any, path: str = "$") -> None:
        if not isinstance(value, Tag):
            raise StructureError(f"expected Tag {self.literal!r}, got {_type_name(value)}", path)
        if value.literal != self.literal:
            raise StructureError(f"expected Tag {self.literal!r}, got Tag {value.literal!r}", path)

    def describe(self) -> str:
        return f"Tag {self.literal!r}"


class RecursionWrapper(StructureType):
    """Stands in for the structure of a let binder.

    Derivation puts a wrapper in the environment in place of a binder whose
    structure is still being derived, so recursive specifications produce
    finite structures. The wrapper is resolved once the binder is derived;
    its payload is the binder's structure with the wrapper itself in scope.

    Values are Rec(payload_value); wrapping is explicit at every level.
    """

    def __init__(self, name: str, spec: Specification):
        self.name = name
        self.spec = spec
        self._scope = None
        self._payload: StructureType | None = None

    def resolve(self, scope, payload: StructureType) -> None:
        """Tie the knot: record the scope the binder was derived in and its structure."""
        if self._payload is not None:
            raise SpecificationError(f"Recursive binder '{self.name}' is already resolved")
        self._scope = scope
        self._payload = payload

    @property
    def resolved(self) -> bool:
        return self._payload is not None

    @property
    def scope(self):
        return self._scope

    @property
    def payload(self) -> StructureType:
        if self._payload is None:
            raise SpecificationError(f"Recursive binder '{self.name}' is not derived yet")
        return self._payload

    def check(self, value: Any, path: str = "$") -> None:
        if not isinstance(value, Rec):
            raise StructureError(f"expected Rec for '{self.name}', got {_type_name(value)}", path)
        self.payload.check(value.un_rec, path)

    def describe(self) -> str:
        return f"Rec<{self.name}>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecursionWrapper):
            return NotImplemented
        if self is other:
            return True
        if self.name != other.name or self.spec != other.spec:
            return False
        if self._payload is None or other._payload is None:
            return self._payload is None and other._payload is None
        # Pairs already under comparison are assumed equal, so cycles terminate
        key = (id(self), id(other))
        if key in _ASSUMED_EQUAL:
            return True
        _ASSUMED_EQUAL.add(key)
        try:
            return self._payload == other._payload
        finally:
            _ASSUMED_EQUAL.discard(key)

    def __hash__(self) -> int:
        return hash((RecursionWrapper, self.name, self.spec))

    def __repr__(self) -> str:
        return f"RecursionWrapper(name={self.name!r})"
