"""
Specification node definitions.

A specification is pure data describing the shape of a JSON value. Nodes
are immutable and hashable; well-formedness is only checked when a
structure is derived from them.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from ..errors import SpecificationError


def _freeze_pairs(pairs: Iterable[tuple[str, Specification]]) -> tuple[tuple[str, Specification], ...]:
    """Normalize a sequence of (name, spec) pairs to a tuple of tuples."""
    return tuple((name, spec) for name, spec in pairs)


@dataclass(frozen=True)
class Specification:
    """Base class for all specification nodes."""


@dataclass(frozen=True)
class JsonObject(Specification):
    """An object with the given properties, in declaration order.

    Every property is required. A property that may be null is declared
    with JsonNullable.
    """

    properties: tuple[tuple[str, Specification], ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "properties", _freeze_pairs(self.properties))

    def keys(self) -> list[str]:
        return [name for name, _ in self.properties]


@dataclass(frozen=True)
class JsonString(Specification):
    """An arbitrary JSON string."""


@dataclass(frozen=True)
class JsonNum(Specification):
    """An arbitrary JSON number (arbitrary precision decimal)."""


@dataclass(frozen=True)
class JsonInt(Specification):
    """A JSON integer."""


@dataclass(frozen=True)
class JsonBool(Specification):
    """A JSON boolean."""


@dataclass(frozen=True)
class JsonDateTime(Specification):
    """A JSON string holding an ISO-8601 timestamp."""


@dataclass(frozen=True)
class JsonArray(Specification):
    """A JSON array whose elements all conform to `element`."""

    element: Specification


@dataclass(frozen=True)
class JsonNullable(Specification):
    """Either `null` or a value conforming to `inner`."""

    inner: Specification


@dataclass(frozen=True)
class JsonEither(Specification):
    """Exactly one of two alternatives (json-schema "oneOf" of two)."""

    left: Specification
    right: Specification


@dataclass(frozen=True)
class JsonTag(Specification):
    """A constant string value."""

    literal: str


@dataclass(frozen=True)
class JsonLet(Specification):
    """Named sub-specifications visible to themselves, each other and the body.

    Used to share repeated definitions and to write recursive ones:

        JsonLet(
            [("Tree", JsonObject([("label", JsonString()), ("children", JsonArray(JsonRef("Tree")))]))],
            JsonRef("Tree"),
        )
    """

    bindings: tuple[tuple[str, Specification], ...]
    body: Specification

    def __post_init__(self):
        object.__setattr__(self, "bindings", _freeze_pairs(self.bindings))

    def names(self) -> list[str]:
        return [name for name, _ in self.bindings]


@dataclass(frozen=True)
class JsonRef(Specification):
    """A reference to a binder of the nearest enclosing JsonLet."""

    name: str


def one_of(*alternatives: Specification) -> Specification:
    """Build a right-nested JsonEither chain from two or more alternatives.

    one_of(a, b, c) == JsonEither(a, JsonEither(b, c))
    """
    if len(alternatives) < 2:
        raise SpecificationError(f"one_of needs at least two alternatives, got {len(alternatives)}")
    result = alternatives[-1]
    for alternative in reversed(alternatives[:-1]):
        result = JsonEither(alternative, result)
    return result


def tagged(tag: str, content: Specification) -> JsonObject:
    """Build the {"tag": ..., "content": ...} arm of a discriminated union."""
    return JsonObject([("tag", JsonTag(tag)), ("content", content)])
